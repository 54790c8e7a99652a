import udreader.utils as utils
from udreader.utils import PLACEHOLDER
from udreader.nodeid import Word, MultiwordRange, EmptyNode



def unique_key(element):
    # '1' and '01' are the same ID; unparsable IDs are compared as strings
    return element.nodeid if element.nodeid is not None else element.id



class Sentence:
    """
    An ordered group of elements delimited by an empty line, together with
    the comment lines that preceded it.
    """
    def __init__(self, sentence_id, elements, comments=None):
        """
        Parameters
        ----------
        sentence_id : str
            Identifier generated from the position in the document ('S1',
            'S2', ...).
        elements : list(udreader.element.Element)
            The word, multiword token and empty node lines.
        comments : list(str), optional
            The raw comment lines, in the order of the input.
        """
        self.id = sentence_id
        self.elements = elements
        self.comments = comments if comments is not None else []
        # Offset of the first character of the sentence text in the text of
        # the whole document. Only used by the export (standoff annotation).
        self.base_offset = 0

    def __repr__(self):
        return f'Sentence({self.id!r}, {len(self.elements)} elements)'

    def set_base_offset(self, base_offset):
        self.base_offset = base_offset

    def to_conllu(self):
        """
        Returns the sentence in CoNLL-U, comments first, terminated by an
        empty line.
        """
        lines = list(self.comments)
        lines.extend(e.to_conllu() for e in self.elements)
        return '\n'.join(lines) + '\n\n'



#------------------------------------------------------------------------------
# Derived views.
#------------------------------------------------------------------------------



    def dependencies(self):
        dependencies = []
        for element in self.elements:
            dependencies.extend(element.dependencies())
        return dependencies

    def words(self, include_empty=False):
        return [e for e in self.elements
                if e.is_word() or (include_empty and e.is_empty_node())]

    def multiwords(self):
        return [e for e in self.elements if e.is_multiword()]

    def tokens(self):
        # extract token sequence by omitting word IDs that are
        # included in a multiword token range.
        ranges = [mw.nodeid for mw in self.multiwords()]
        return [e for e in self.elements if e.is_token(ranges)]

    def element_by_id(self):
        """
        Returns a dict from ID strings to elements. If an ID occurs more than
        once, the last element with that ID wins.
        """
        return {e.id: e for e in self.elements}



#------------------------------------------------------------------------------
# Validation. Each check appends issues to the list it receives and returns
# True iff it did not find any problem.
#------------------------------------------------------------------------------



    def add_error(self, issue, element, issues):
        issues.append(f'line {element.lineidx + 1}: {issue} ("{element.line}")')

    def validate(self):
        """
        Checks the validity of the sentence.

        Returns
        -------
        issues : list(str)
            Problems found (empty list if none), each with the line number
            and the text of the line where it occurred.
        """
        issues = []
        self.validate_unique_ids(issues)
        self.validate_word_sequence(issues)
        self.validate_multiword_sequence(issues)
        self.validate_empty_node_sequence(issues)
        self.validate_references(issues)
        return issues

    def validate_unique_ids(self, issues=None):
        # Check for presence of ID duplicates
        issues = issues if issues is not None else []
        initial_issue_count = len(issues)
        seen = set()
        for element in self.elements:
            key = unique_key(element)
            if key in seen:
                self.add_error(f'non-unique ID "{element.id}"', element, issues)
            seen.add(key)
        return len(issues) == initial_issue_count

    def validate_word_sequence(self, issues=None):
        # Check validity of word ID sequence (should be 1,2,3,...)
        issues = issues if issues is not None else []
        initial_issue_count = len(issues)
        expected_id = 1
        for element in self.elements:
            if not element.is_word():
                continue # only check simple word sequence here
            if element.nodeid.index != expected_id:
                self.add_error(f'word IDs should be 1,2,3,..., expected {expected_id}, got {element.id}', element, issues)
            expected_id = element.nodeid.index + 1
        return len(issues) == initial_issue_count

    def validate_multiword_sequence(self, issues=None):
        """
        Checks that every multiword token comes right before the first word
        of its range, i.e., that its range starts at the next expected word
        ID.
        """
        issues = issues if issues is not None else []
        initial_issue_count = len(issues)
        expected_id = 1
        for element in self.elements:
            nodeid = element.nodeid
            if isinstance(nodeid, MultiwordRange):
                if nodeid.start != expected_id:
                    self.add_error('multiword tokens must appear before first word in their range', element, issues)
                else:
                    expected_id = nodeid.start + 1
            elif isinstance(nodeid, Word):
                expected_id = nodeid.index + 1
            elif isinstance(nodeid, EmptyNode):
                expected_id = nodeid.word + 1
        return len(issues) == initial_issue_count

    def validate_empty_node_sequence(self, issues=None):
        """
        Checks that empty nodes following word N are numbered N.1, N.2, ...
        Empty nodes before the first word are numbered 0.1, 0.2, ...
        """
        issues = issues if issues is not None else []
        initial_issue_count = len(issues)
        previous_word_id = 0
        next_empty_node_id = 1
        for element in self.elements:
            if element.is_word():
                previous_word_id = element.nodeid.index
                next_empty_node_id = 1
            elif element.is_empty_node():
                expected = EmptyNode(previous_word_id, next_empty_node_id)
                if element.nodeid != expected:
                    self.add_error(f'empty node IDs should be *.1, *.2, ... expected {expected}, got {element.id}', element, issues)
                next_empty_node_id += 1
        return len(issues) == initial_issue_count

    def validate_references(self, issues=None):
        # Check validity of ID references in HEAD and DEPS.
        issues = issues if issues is not None else []
        initial_issue_count = len(issues)
        element_by_id = self.element_by_id()
        for element in self.elements:
            if not element.valid_head_reference(element_by_id):
                self.add_error(f'HEAD is not valid ID: "{element.head}"', element, issues)
            for dependent, head, deprel in element.dependencies(skip_primary=True):
                if head != '0' and head not in element_by_id:
                    self.add_error(f'invalid ID "{head}" in DEPS', element, issues)
        return len(issues) == initial_issue_count



#------------------------------------------------------------------------------
# Repair.
#------------------------------------------------------------------------------



    def repair(self, log=None):
        """
        Attempts to repair a non-valid sentence. Only the checks that fail
        are followed by their repair, in a fixed order.

        Parameters
        ----------
        log : callable, optional
            Receives a message for every change made.

        Returns
        -------
        ok : bool
            True iff the sentence is valid following repair.
        """
        log = log if log is not None else utils.null_logger
        if not self.validate_unique_ids():
            self.repair_unique_ids(log)
        if not self.validate_word_sequence():
            self.repair_word_sequence(log)
        if not self.validate_multiword_sequence():
            self.repair_multiword_sequence(log)
        if not self.validate_empty_node_sequence():
            self.repair_empty_node_sequence(log)
        if not self.validate_references():
            self.repair_references(log)
        return len(self.validate()) == 0

    def repair_unique_ids(self, log=None):
        log = log if log is not None else utils.null_logger
        seen = set()
        filtered = []
        for element in self.elements:
            key = unique_key(element)
            if key in seen:
                log(f'repair: remove element with duplicate ID "{element.id}"')
                continue
            seen.add(key)
            filtered.append(element)
        self.elements = filtered
        return True

    # The three sequence repairs below leave the IDs (and the HEAD and DEPS
    # references to them) unchanged and report failure; the sentence stays
    # invalid.

    def repair_word_sequence(self, log=None):
        log = log if log is not None else utils.null_logger
        log('repair: cannot repair word ID sequence, leaving IDs unchanged')
        return False

    def repair_multiword_sequence(self, log=None):
        log = log if log is not None else utils.null_logger
        log('repair: cannot repair multiword token sequence, leaving IDs unchanged')
        return False

    def repair_empty_node_sequence(self, log=None):
        log = log if log is not None else utils.null_logger
        log('repair: cannot repair empty node sequence, leaving IDs unchanged')
        return False

    def repair_references(self, log=None):
        """
        Removes references to IDs that do not exist in the sentence: an
        invalid HEAD becomes None, invalid DEPS pairs are dropped (and DEPS
        becomes the placeholder if no pair remains).
        """
        log = log if log is not None else utils.null_logger
        element_by_id = self.element_by_id()
        for element in self.elements:
            # repair HEAD if not valid
            if not element.valid_head_reference(element_by_id):
                log('repair: blanking invalid HEAD')
                element.head = None
            # repair DEPS if not valid
            if element.deps == PLACEHOLDER:
                continue
            filtered = []
            for dep in element.deps.split('|'):
                match = utils.crex.dependency.fullmatch(dep)
                if match and (match.group(1) == '0' or match.group(1) in element_by_id):
                    filtered.append(dep)
                else:
                    log('repair: removing invalid ID from DEPS')
            element.deps = '|'.join(filtered) if filtered else PLACEHOLDER
        return True
