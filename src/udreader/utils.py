import regex as re



# Constants for the column indices
COLCOUNT=10
ID,FORM,LEMMA,UPOS,XPOS,FEATS,HEAD,DEPREL,DEPS,MISC=range(COLCOUNT)

# The value of a column that is not applicable or not available.
PLACEHOLDER = '_'
# Replacement for FORM and LEMMA values that could not be repaired.
ERROR_MARKER = '<ERROR>'



class CompiledRegexes:
    """
    The CompiledRegexes class holds various regular expressions needed to
    recognize individual elements of the CoNLL-U format, precompiled to speed
    up parsing. Individual expressions are typically not enclosed in ^...$
    because one can use re.fullmatch() if it is desired that the whole string
    matches the expression.

    Unlike the full UD validator, the reader accepts leading zeros and zero
    indices at the shape level ("0", "01-2", "1.0") so that the element can
    be classified first and rejected with a precise message afterwards.
    """
    def __init__(self):
        # Whitespace.
        self.ws = re.compile(r"\s+")
        # Any single whitespace character.
        self.space = re.compile(r"\s")
        # Regular word/node id: integer number.
        self.wordid = re.compile(r"[0-9]+")
        # Multiword token id: range of integers.
        # The two parts are bracketed so they can be captured and processed separately.
        self.mwtid = re.compile(r"([0-9]+)-([0-9]+)")
        # Empty node id: "decimal" number (but 1.10 != 1.1).
        # The two parts are bracketed so they can be captured and processed separately.
        self.enodeid = re.compile(r"([0-9]+)\.([0-9]+)")
        # Comment line (the first non-whitespace character is #).
        self.comment = re.compile(r"\s*#.*", re.DOTALL)
        # Feature=value pair.
        # Feature name and feature value are bracketed so that each can be captured separately in the match.
        self.featval = re.compile(r"([A-Z][A-Za-z0-9]*(?:\[[a-z0-9]+\])?)=([A-Z0-9][A-Za-z0-9]*(?:,[A-Z0-9][A-Za-z0-9]*)*)")
        self.val = re.compile(r"[A-Z0-9][A-Za-z0-9]*")
        # Basic parent reference (HEAD).
        self.head = re.compile(r"[0-9]+")
        # One head:deprel pair in DEPS, as checked by validation.
        self.deps_pair = re.compile(r"([0-9]+(?:\.[0-9]+)?):(\S+)")
        # One head:deprel pair in DEPS, as read when extracting dependencies.
        self.dependency = re.compile(r"([0-9]+(?:\.[0-9]+)?):(.*)", re.DOTALL)
        # Visual style comment (an extension used by the brat export).
        # The style specification is bracketed.
        self.visual_style = re.compile(r"#\s*visual-style\s+(.*)", re.DOTALL)
        # Reference and style within the visual style specification.
        self.style_spec = re.compile(r"([^\t]+)\s+(\S+)\s*")
        # Style given as key:value.
        self.style_keyval = re.compile(r"(\S+):(\S+)")
        # Sentence label comment (an extension used by the brat export).
        self.sentence_label = re.compile(r"#\s*sentence-label\b(.*)", re.DOTALL)
        # Strings consisting only of characters from right-to-left Unicode blocks.
        # Range from http://stackoverflow.com/a/14824756
        self.rtl = re.compile("[\u0591-\u07FF\uFB1D-\uFDFD\uFE70-\uFEFC]+")



# Global variables:
crex = CompiledRegexes()



# Support functions.

def is_comment(line):
    return crex.comment.fullmatch(line) is not None

def has_space(s):
    return crex.space.search(s) is not None

def is_rtl(s):
    return crex.rtl.fullmatch(s) is not None

def nodeid2tuple(nodeid: str):
    """
    Node ID can look like a decimal number, but 1.1 != 1.10. To be able to
    sort node IDs, we need to be able to convert them to a pair of integers
    (major and minor). For IDs of regular nodes, the ID will be converted to
    int (major) and the minor will be set to zero.
    """
    parts = [int(x) for x in nodeid.split('.', maxsplit=1)]
    if len(parts) == 1:
        parts.append(0)
    return tuple(parts)

def null_logger(message):
    return None
