import udreader.utils as utils
from udreader.config import DEFAULTS
from udreader.element import Element
from udreader.incident import Error, TestClass
from udreader.sentence import Sentence
from udreader.splitter import ParsingMode, resolve_mode, select_field_splitter, repair_fields
from udreader.state import State



class Document:
    """
    The result of reading a CoNLL-U input: the list of sentences and the
    record of all problems found (and fixed) while reading it.
    """
    def __init__(self, config=None):
        """
        Parameters
        ----------
        config : dict, optional
            Reader options (see udreader.config.DEFAULTS). Missing options
            take their default values.
        """
        self.config = dict(DEFAULTS)
        if config:
            self.config.update(config)
        self.reset()


    def reset(self, logger=None):
        self.sentences = []
        self.state = State(logger)
        # True/False for strict/loose parsing; None = pick heuristically.
        self.strict = self.config['strict']
        self.mode = None


    @property
    def error(self):
        """
        True iff any error has been found since the last reset.
        """
        return not self.state.passed()


    @property
    def incidents(self):
        return self.state.error_tracker


    def log(self, message):
        self.state.log(message)


    def log_error(self, message, testid, testclass=TestClass.FORMAT, lineno=None, line=None):
        Error(
            state=self.state, config=self.config,
            testclass=testclass, testid=testid,
            message=message, lineno=lineno, line=line
        ).confirm()



#==============================================================================
# Reading.
#==============================================================================


    def parse(self, text, logger=None, strict=None):
        """
        Parses CoNLL-U text (see https://universaldependencies.org/format.html).
        Any previous content of the document is discarded.

        CoNLL-U text contains three types of lines:
        1.  Word lines (ten fields: ID, FORM, LEMMA, UPOSTAG, XPOSTAG, FEATS,
            HEAD, DEPREL, DEPS, MISC)
        2.  Blank lines marking sentence boundaries
        3.  Comment lines starting with a hash ("#")

        Invalid lines are repaired if possible, otherwise they are dropped.
        Each sentence is then checked as a whole (see repair_sentences()).
        No error stops the reading; check the error attribute to see whether
        the input was clean.

        Parameters
        ----------
        text : str
            The input. Lines are separated by '\\n'.
        logger : callable, optional
            Receives one diagnostic string per call. By default the
            diagnostics are discarded (they are still available as
            incidents).
        strict : bool, optional
            True to split fields on TAB only, False to split on any
            whitespace. If not given, the configured value is used; if that
            is None too, strict mode is chosen iff the text contains a TAB.

        Returns
        -------
        document : Document
            self
        """
        # discard previous state, if any
        self.reset(logger)
        if strict is not None:
            self.strict = strict
        self.mode = resolve_mode(text, self.strict, self.log)
        self.strict = self.mode == ParsingMode.STRICT
        # select splitter to use for dividing the lines into fields.
        splitter = select_field_splitter(self.mode)
        state = self.state
        lines = text.split('\n')
        # The newline at the end of the last line does not start a new line.
        if lines and lines[-1] == '':
            lines.pop()
        for idx, line in enumerate(lines):
            if utils.is_comment(line):
                if state.before_sentence:
                    state.pending_comments.append(line)
                else:
                    self.log_error('comments must precede sentence, ignoring', 'misplaced-comment',
                                   TestClass.METADATA, idx + 1, line)
                continue
            # non-comment, assume inside sentence until terminated by
            # blank line
            state.before_sentence = False
            fields = splitter(line)
            if len(fields) == 0:
                # empty line, terminates sentence
                if state.pending_elements:
                    self.add_sentence(state.pending_elements, state.pending_comments)
                else:
                    self.log_error('empty sentence, ignoring', 'empty-sentence', lineno=idx + 1, line=line)
                state.reset_sentence()
                continue
            self.read_element(fields, idx, line)
        # If elements are pending, last sentence ended without its
        # expected terminating empty line. Process, but complain if strict.
        if state.pending_elements:
            if self.strict:
                self.log_error('missing blank line after last sentence', 'missing-empty-line')
            self.add_sentence(state.pending_elements, state.pending_comments)
            state.reset_sentence()
        # If comments are pending, there were comments after the
        # terminating empty line.
        if state.pending_comments:
            self.log_error('comments may not occur after last sentence, ignoring', 'orphan-comments',
                           TestClass.METADATA)
            state.reset_sentence()
        # sentence-level checks; sentences that cannot be repaired are dropped
        self.repair_sentences()
        return self


    def read_element(self, fields, idx, line):
        """
        Builds an element from one non-empty, non-comment line, validates it
        and, if needed, repairs it. Elements that cannot be repaired are
        dropped.

        Parameters
        ----------
        fields : list(str)
            The line split to fields.
        idx : int
            The 0-based index of the line in the input.
        line : str
            The raw line.

        Returns
        -------
        element : udreader.element.Element or None
            The element appended to the pending sentence, or None if dropped.
        """
        if len(fields) != utils.COLCOUNT:
            self.log_error(f'expected {utils.COLCOUNT} fields, got {len(fields)}', 'number-of-columns',
                           lineno=idx + 1, line=line)
            fields = repair_fields(fields, self.log)
        element = Element(fields, idx, line)
        issues = element.validate()
        for issue in issues:
            self.log_error(issue, 'invalid-element', lineno=idx + 1, line=line)
        if issues and not element.repair(self.log):
            self.log_error('repair failed, discarding line', 'element-repair-failed', lineno=idx + 1, line=line)
            return None # failed, ignore line
        self.state.pending_elements.append(element)
        return element


    def add_sentence(self, elements, comments):
        sentence = Sentence(f'S{len(self.sentences) + 1}', elements, comments)
        self.sentences.append(sentence)
        return sentence



#==============================================================================
# Sentence-level checks and output.
#==============================================================================


    def repair_sentences(self):
        """
        Validates every sentence, logs the problems found and repairs the
        sentences that are not valid. Sentences that cannot be repaired are
        removed from the document. The remaining sentences keep their ids.
        parse() calls this at the end; call it again after changing the
        sentences.

        Returns
        -------
        ok : bool
            True iff all sentences were valid before this call.
        """
        ok = True
        kept = []
        for sentence in self.sentences:
            issues = sentence.validate()
            for issue in issues:
                self.log_error(issue, 'invalid-sentence', TestClass.SYNTAX)
            if issues:
                ok = False
                if not sentence.repair(self.log):
                    self.log_error(f'{sentence.id}: repair failed, discarding sentence', 'sentence-repair-failed',
                                   TestClass.SYNTAX)
                    continue
            kept.append(sentence)
        self.sentences = kept
        return ok


    def to_conllu(self):
        """
        Returns the document in CoNLL-U. Whitespace of the input is not
        preserved: fields are always separated by TAB.
        """
        return ''.join(s.to_conllu() for s in self.sentences)



def parse(text, logger=None, strict=None, config=None):
    """
    Parses CoNLL-U text into a new Document. See Document.parse().
    """
    return Document(config=config).parse(text, logger=logger, strict=strict)
