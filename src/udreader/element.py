import logging

import udreader.utils as utils
from udreader.utils import PLACEHOLDER, ERROR_MARKER
from udreader.nodeid import Word, MultiwordRange, EmptyNode, parse_nodeid

logger = logging.getLogger(__name__)



class Element:
    """
    One line of a CoNLL-U sentence: a word, a multiword token (range ID) or an
    empty node (decimal ID). The ten columns are kept as raw strings, with one
    exception: after a failed repair of HEAD, the head is None ("no head
    asserted"), which is different from the placeholder '_'.
    """
    def __init__(self, fields, lineidx=None, line=None):
        """
        Parameters
        ----------
        fields : list(str)
            The ten column values, in the CoNLL-U order.
        lineidx : int, optional
            The 0-based index of the input line the element was read from.
        line : str, optional
            The raw input line, for error messages.
        """
        if len(fields) != utils.COLCOUNT:
            raise ValueError(f'expected {utils.COLCOUNT} fields, got {len(fields)}')
        (self.id, self.form, self.lemma, self.upostag, self.xpostag,
         self.feats, self.head, self.deprel, self.deps, self.misc) = fields
        self.lineidx = lineidx
        self.line = line
        # The ID is never changed by repair.
        self.nodeid = parse_nodeid(self.id)

    def __repr__(self):
        return f'Element({self.fields()!r})'

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        return self.fields() == other.fields()

    def fields(self):
        return [self.id, self.form, self.lemma, self.upostag, self.xpostag,
                self.feats, self.head, self.deprel, self.deps, self.misc]

    def to_conllu(self):
        """
        Returns the element as one CoNLL-U line (without the newline). A head
        that is not asserted is written as the placeholder.
        """
        fields = self.fields()
        if fields[utils.HEAD] is None:
            fields[utils.HEAD] = PLACEHOLDER
        return '\t'.join(fields)



#------------------------------------------------------------------------------
# Element kinds.
#------------------------------------------------------------------------------



    def is_word(self):
        return isinstance(self.nodeid, Word)

    def is_multiword(self):
        return isinstance(self.nodeid, MultiwordRange)

    def is_empty_node(self):
        return isinstance(self.nodeid, EmptyNode)

    def range_from(self):
        return self.nodeid.start

    def range_to(self):
        return self.nodeid.end

    def is_token(self, ranges):
        """
        Token iff multiword or not a word included in a multiword range.

        Parameters
        ----------
        ranges : list(udreader.nodeid.MultiwordRange)
            The ranges of the multiword tokens of the sentence.
        """
        if self.is_multiword():
            return True
        if self.is_word():
            return not any(self.nodeid.index in r for r in ranges)
        return True



#------------------------------------------------------------------------------
# Field validation. Each method appends human-readable issues to the list it
# receives and returns True iff the value is valid.
#------------------------------------------------------------------------------



    def validate_field(self, field, name='field', issues=None, allow_space=False):
        # constraints that hold for all fields
        issues = issues if issues is not None else []
        if field is None:
            issues.append(f'invalid {name}')
            return False
        elif len(field) == 0:
            issues.append(f'{name} must not be empty: "{field}"')
            return False
        elif utils.has_space(field) and not allow_space:
            issues.append(f'{name} must not contain space: "{field}"')
            return False
        return True

    def validate_id(self, id, issues=None):
        issues = issues if issues is not None else []
        if not self.validate_field(id, 'ID', issues):
            return False
        nodeid = parse_nodeid(id)
        if isinstance(nodeid, Word):
            if nodeid.index == 0:
                issues.append(f'ID indices must start from 1: "{id}"')
                return False
            return True
        elif isinstance(nodeid, MultiwordRange):
            if nodeid.end < nodeid.start:
                issues.append(f'ID ranges must have start <= end: "{id}"')
                return False
            return True
        elif isinstance(nodeid, EmptyNode):
            if nodeid.word == 0 or nodeid.sub == 0:
                issues.append(f'ID indices must start from 1: "{id}"')
                return False
            return True
        issues.append(f'ID must be integer, range, or decimal: "{id}"')
        return False

    def validate_form(self, form, issues=None):
        return self.validate_field(form, 'FORM', issues, allow_space=True)

    def validate_lemma(self, lemma, issues=None):
        return self.validate_field(lemma, 'LEMMA', issues, allow_space=True)

    def validate_upostag(self, upostag, issues=None):
        return self.validate_field(upostag, 'UPOSTAG', issues)

    def validate_xpostag(self, xpostag, issues=None):
        return self.validate_field(xpostag, 'XPOSTAG', issues)

    def validate_feats(self, feats, issues=None):
        """
        Checks the FEATS column: Name=Value[,Value...] entries separated by
        vertical bars, sorted by name (case-insensitive), without duplicate
        names or duplicate values of one name. All problems are reported,
        not just the first one.
        """
        issues = issues if issues is not None else []
        if not self.validate_field(feats, 'FEATS', issues):
            return False
        if feats == PLACEHOLDER:
            return True
        initial_issue_count = len(issues)
        seen_names = set()
        prev_name = None
        for feat in feats.split('|'):
            match = utils.crex.featval.fullmatch(feat)
            if not match:
                issues.append(f'invalid FEATS entry: "{feat}"')
                continue
            name, valuestr = match.group(1), match.group(2)
            if prev_name is not None and name.lower() < prev_name.lower():
                issues.append(f'features must be ordered alphabetically (case-insensitive): "{name}" < "{prev_name}"')
            prev_name = name
            seen_values = set()
            for value in valuestr.split(','):
                if not utils.crex.val.fullmatch(value):
                    issues.append(f'invalid FEATS value: "{value}"')
                    continue
                if value in seen_values:
                    issues.append(f'duplicate feature value: "{value}"')
                    continue
                seen_values.add(value)
            if name in seen_names:
                issues.append(f'duplicate feature name: "{name}"')
                continue
            seen_names.add(name)
        return len(issues) == initial_issue_count

    def validate_head(self, head, issues=None):
        issues = issues if issues is not None else []
        if head is None:
            return True # no head asserted (result of repair)
        elif not self.validate_field(head, 'HEAD', issues):
            return False
        elif self.is_empty_node() and head == PLACEHOLDER:
            return True # underscore permitted for empty nodes.
        elif not utils.crex.head.fullmatch(head):
            issues.append(f'HEAD must be an ID or zero: "{head}"')
            return False
        return True

    def validate_deprel(self, deprel, issues=None):
        return self.validate_field(deprel, 'DEPREL', issues)

    def validate_deps(self, deps, issues=None):
        """
        Checks the DEPS column: head:deprel pairs separated by vertical bars,
        ordered by the head (1.2 sorts after 1 and before 1.10). Equal heads
        may follow each other in any order.
        """
        issues = issues if issues is not None else []
        if not self.validate_field(deps, 'DEPS', issues):
            return False
        if deps == PLACEHOLDER:
            return True
        prev_head = None
        for dep in deps.split('|'):
            match = utils.crex.deps_pair.fullmatch(dep)
            if not match:
                issues.append(f'invalid DEPS: "{deps}"')
                return False
            head = utils.nodeid2tuple(match.group(1))
            if prev_head is not None and head < prev_head:
                issues.append('DEPS must be ordered by head index')
                return False
            prev_head = head
        return True

    def validate_misc(self, misc, issues=None):
        return self.validate_field(misc, 'MISC', issues)

    def has_only_placeholders(self):
        # all fields from LEMMA to MISC
        return all(value == PLACEHOLDER for value in self.fields()[utils.LEMMA:])

    def validate(self):
        """
        Checks the validity of the element.

        Returns
        -------
        issues : list(str)
            Problems found (empty list if none). The messages do not include
            the line number; the caller adds it.
        """
        issues = []
        self.validate_id(self.id, issues)
        self.validate_form(self.form, issues)
        # multiword tokens (elements with range IDs) are (locally) valid
        # iff all remaining fields (3-10) contain just an underscore.
        if self.is_multiword():
            if not self.has_only_placeholders():
                issues.append('non-underscore field for multiword token')
            return issues
        # if we're here, not a multiword token.
        self.validate_lemma(self.lemma, issues)
        self.validate_upostag(self.upostag, issues)
        self.validate_xpostag(self.xpostag, issues)
        self.validate_feats(self.feats, issues)
        self.validate_head(self.head, issues)
        self.validate_deprel(self.deprel, issues)
        self.validate_deps(self.deps, issues)
        self.validate_misc(self.misc, issues)
        return issues

    def valid_head_reference(self, element_by_id):
        return (self.head in (PLACEHOLDER, None, '0') or
                self.head in element_by_id)



#------------------------------------------------------------------------------
# Repair.
#------------------------------------------------------------------------------



    def repair(self, log=None):
        """
        Attempts to repair a non-valid element by replacing each invalid value
        with the placeholder (FORM and LEMMA with an error marker, HEAD with
        None). An invalid ID cannot be repaired.

        Parameters
        ----------
        log : callable, optional
            Receives a message for every change made.

        Returns
        -------
        ok : bool
            True iff the element is valid following repair.
        """
        log = log if log is not None else utils.null_logger
        if not self.validate_id(self.id):
            return False # can't be helped
        if not self.validate_form(self.form):
            log('repair: blanking invalid FORM')
            self.form = ERROR_MARKER
        if self.is_multiword():
            # valid as long as everything is blank
            if not self.has_only_placeholders():
                log('repair: blanking non-underscore fields of multiword token')
            (self.lemma, self.upostag, self.xpostag, self.feats, self.head,
             self.deprel, self.deps, self.misc) = [PLACEHOLDER] * 8
            return len(self.validate()) == 0
        # if we're here, not a multiword token.
        if not self.validate_lemma(self.lemma):
            log('repair: blanking invalid LEMMA')
            self.lemma = ERROR_MARKER
        if not self.validate_upostag(self.upostag):
            log('repair: blanking invalid UPOSTAG')
            self.upostag = PLACEHOLDER
        if not self.validate_xpostag(self.xpostag):
            log('repair: blanking invalid XPOSTAG')
            self.xpostag = PLACEHOLDER
        if not self.validate_feats(self.feats):
            log('repair: blanking invalid FEATS')
            self.feats = PLACEHOLDER
        if not self.validate_head(self.head):
            log('repair: blanking invalid HEAD')
            self.head = None
        if not self.validate_deprel(self.deprel):
            log('repair: blanking invalid DEPREL')
            self.deprel = PLACEHOLDER
        if not self.validate_deps(self.deps):
            log('repair: blanking invalid DEPS')
            self.deps = PLACEHOLDER
        if not self.validate_misc(self.misc):
            log('repair: blanking invalid MISC')
            self.misc = PLACEHOLDER
        return len(self.validate()) == 0



#------------------------------------------------------------------------------
# Derived views.
#------------------------------------------------------------------------------



    def dependencies(self, skip_primary=False):
        """
        Returns the list of (dependent, head, deprel) triples of the element:
        the basic one from HEAD and DEPREL (unless skip_primary is set or no
        head is given), followed by the enhanced ones from DEPS.
        """
        deps = []
        if not skip_primary and self.head not in (PLACEHOLDER, None):
            deps.append((self.id, self.head, self.deprel))
        if self.deps != PLACEHOLDER:
            for dep in self.deps.split('|'):
                match = utils.crex.dependency.fullmatch(dep)
                if match:
                    deps.append((self.id, match.group(1), match.group(2)))
                else:
                    logger.debug('dependencies(): invalid DEPS %r', self.deps)
        return deps

    def features(self):
        # return list of (name, value) pairs
        if self.feats == PLACEHOLDER:
            return []
        name_vals = []
        for feat in self.feats.split('|'):
            match = utils.crex.featval.fullmatch(feat)
            if not match:
                continue
            name, valuestr = match.group(1), match.group(2)
            for value in valuestr.split(','):
                if utils.crex.val.fullmatch(value):
                    name_vals.append((name, value))
        return name_vals
