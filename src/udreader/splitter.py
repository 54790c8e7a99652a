"""
Dividing input lines into fields (columns). CoNLL-U proper separates the
columns by TAB characters only; hand-edited files often use spaces instead.
The reader therefore has two splitting disciplines and picks one per document.
"""
from enum import Enum

import udreader.utils as utils



class ParsingMode(Enum):
    STRICT = 'strict' # only TAB separates fields
    LOOSE = 'loose'   # any whitespace run separates fields, lines are trimmed

    def __str__(self):
        return self.value



def strict_field_splitter(line):
    # strict CoNLL format parsing: only split on TAB, no extra space.
    line = line.rstrip('\n')
    if len(line) == 0:
        return []
    return line.split('\t')


def loose_field_splitter(line):
    # loose CoNLL format parsing: split on any space sequence, trim
    # surrounding space.
    line = line.strip()
    if len(line) == 0:
        return []
    return utils.crex.ws.split(line)


def select_mode(text, log=None):
    """
    Decides heuristically whether the input should be parsed in strict mode.
    Any TAB in the input triggers strict parsing, loose only if none present.

    Parameters
    ----------
    text : str
        The whole input.
    log : callable, optional
        Logger sink; receives a note about the decision.

    Returns
    -------
    strict : bool
    """
    log = log if log is not None else utils.null_logger
    if '\t' in text:
        log('note: TAB found, parsing CoNLL-U in strict mode.')
        return True
    log('note: no TAB found, parsing CoNLL-U in loose mode.')
    return False


def resolve_mode(text, strict=None, log=None):
    """
    Resolves the parsing mode for one document. An explicit strict flag
    (True or False) wins; if it is None, the mode is chosen by select_mode().

    Returns
    -------
    mode : ParsingMode
    """
    if strict is None:
        strict = select_mode(text, log)
    elif not isinstance(strict, bool):
        raise ValueError(f'strict must be True, False or None, not {strict!r}')
    return ParsingMode.STRICT if strict else ParsingMode.LOOSE


def select_field_splitter(mode):
    # return function to use for dividing lines into fields.
    if mode == ParsingMode.STRICT:
        return strict_field_splitter
    return loose_field_splitter


def repair_fields(fields, log=None):
    """
    Returns a copy of the list of fields with exactly COLCOUNT items: extra
    fields are dropped from the right, missing fields are filled in with the
    placeholder.
    """
    log = log if log is not None else utils.null_logger
    if len(fields) > utils.COLCOUNT:
        log(f'repair: discarding fields > {utils.COLCOUNT}')
        return fields[:utils.COLCOUNT]
    log('repair: filling in empty ("_") for missing fields')
    return fields + [utils.PLACEHOLDER] * (utils.COLCOUNT - len(fields))
