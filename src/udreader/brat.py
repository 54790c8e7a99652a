"""
Conversion of sentences to the brat embedded data format
(http://brat.nlplab.org/embed.html), used to visualize the trees. The
sentence functions only read the sentences. document_to_brat() first checks
and repairs the sentences of the document (dropping those that cannot be
repaired) and sets Sentence.base_offset.

Note: "styles" and "sentlabels" are extensions of both the CoNLL-U comment
format and the basic brat data format.
"""
import copy
import logging

import udreader.utils as utils
from udreader.utils import PLACEHOLDER

logger = logging.getLogger(__name__)

CATEGORIES = ['entities', 'attributes', 'relations', 'comments', 'styles', 'sentlabels']
# Text used instead of an empty document, which brat cannot display.
EMPTY_TEXT = '<EMPTY>'
# Wrapped around right-to-left forms.
RTL_MARK = '\u02D1'



def rtl_fix(s):
    """
    Returns the given form with possible modifications to accommodate issues
    in brat rendering of right-to-left text
    (https://github.com/UniversalDependencies/docs/issues/52).
    """
    if utils.is_rtl(s):
        s = RTL_MARK + s + RTL_MARK
    return s


def _with_rtl_fix(elements):
    fixed = []
    for element in elements:
        if utils.is_rtl(element.form):
            element = copy.copy(element)
            element.form = rtl_fix(element.form)
        fixed.append(element)
    return fixed


def _tid(sentence, element_id):
    return f'{sentence.id}-T{element_id}'


def brat_text(sentence, include_empty=False):
    # the word forms, followed by the token forms if they differ
    word_text = ' '.join(w.form for w in _with_rtl_fix(sentence.words(include_empty)))
    token_text = ' '.join(t.form for t in _with_rtl_fix(sentence.tokens()))
    if word_text != token_text:
        return word_text + '\n' + token_text
    return word_text


def brat_spans(sentence, include_empty=False):
    # create an annotation for each word
    spans = []
    offset = sentence.base_offset
    for word in _with_rtl_fix(sentence.words(include_empty)):
        length = len(word.form)
        spans.append([_tid(sentence, word.id), word.upostag, [[offset, offset + length]]])
        offset += length + 1
    return spans


def brat_attributes(sentence, include_empty=False):
    # create attributes for word features
    attributes = []
    aidseq = 1
    for word in sentence.words(include_empty):
        for name, value in word.features():
            attributes.append([f'{sentence.id}-A{aidseq}', name, _tid(sentence, word.id), value])
            aidseq += 1
    return attributes


def brat_relations(sentence):
    relations = []
    for i, (dependent, head, deprel) in enumerate(sentence.dependencies()):
        relations.append([f'{sentence.id}-R{i}', deprel,
                          [['arg1', _tid(sentence, head)],
                           ['arg2', _tid(sentence, dependent)]]])
    return relations


def brat_comments(sentence, include_empty=False):
    comments = []
    label = 'AnnotatorNotes'
    for word in sentence.words(include_empty):
        tid = _tid(sentence, word.id)
        comments.append([tid, label, 'Lemma: ' + word.lemma])
        if word.xpostag != PLACEHOLDER:
            comments.append([tid, label, 'Xpostag: ' + word.xpostag])
        if word.misc != PLACEHOLDER:
            comments.append([tid, label, 'Misc: ' + word.misc])
    return comments


def _parse_style_comment(comment):
    """
    Parses a "# visual-style REF STYLE" comment, where REF is either a single
    ID (for a span), a space-separated "ID1 ID2 TYPE" triple (for a relation),
    or one of the wildcards "nodes" and "arcs", and STYLE is either a
    colon-separated key:value pair or a color.

    Returns
    -------
    style : tuple(str, str, str) or None
        (reference, key, value); None if the comment is not a style comment
        or cannot be parsed.
    """
    match = utils.crex.visual_style.fullmatch(comment)
    if not match:
        return None
    match = utils.crex.style_spec.fullmatch(match.group(1))
    if not match:
        logger.warning('failed to parse: "%s"', comment)
        return None
    reference, style = match.group(1), match.group(2)
    # split style into key and value, adding a key to color-only styles as
    # needed for the reference type.
    match = utils.crex.style_keyval.fullmatch(style)
    if match:
        return reference, match.group(1), match.group(2)
    if reference == 'arcs' or ' ' in reference:
        return reference, 'color', style
    return reference, 'bgColor', style


def brat_styles(sentence, include_empty=False):
    styles = []
    wildcards = []
    for comment in sentence.comments:
        parsed = _parse_style_comment(comment)
        if parsed is None:
            continue
        reference, key, value = parsed
        # store wildcards for separate later processing
        if reference in ('nodes', 'arcs'):
            wildcards.append(parsed)
            continue
        # adjust every ID in reference for brat
        if ' ' not in reference:
            reference = _tid(sentence, reference)
        else:
            parts = reference.split(' ')
            reference = [_tid(sentence, parts[0]), _tid(sentence, parts[1])] + parts[2:]
        styles.append([reference, key, value])
    # for expanding wildcards, first determine which words / arcs styles have
    # already been set, and then add the style to everything that hasn't.
    def style_key(reference, key):
        if isinstance(reference, list):
            return (tuple(reference), key)
        return (reference, key)
    set_style = {style_key(r, k) for r, k, v in styles}
    for reference, key, value in wildcards:
        if reference == 'nodes':
            targets = [_tid(sentence, w.id) for w in sentence.words(include_empty)]
        else:
            targets = [[_tid(sentence, head), _tid(sentence, dependent), deprel]
                       for dependent, head, deprel in sentence.dependencies()]
        for target in targets:
            if style_key(target, key) not in set_style:
                styles.append([target, key, value])
                set_style.add(style_key(target, key))
    return styles


def brat_label(sentence):
    # the last "# sentence-label" comment wins; None if there is none
    label = None
    for comment in sentence.comments:
        match = utils.crex.sentence_label.fullmatch(comment)
        if match:
            label = match.group(1).strip()
    return label


def sentence_to_brat(sentence, include_empty=False):
    """
    Returns the representation of the sentence in brat embedded format.

    Parameters
    ----------
    sentence : udreader.sentence.Sentence
    include_empty : bool
        Include empty nodes as spans.

    Returns
    -------
    data : dict
        With keys 'text', 'entities', 'attributes', 'relations', 'comments',
        'styles' and 'sentlabels'. Character offsets start at the base
        offset of the sentence.
    """
    return {
        'text': brat_text(sentence, include_empty),
        'entities': brat_spans(sentence, include_empty),
        'attributes': brat_attributes(sentence, include_empty),
        'relations': brat_relations(sentence),
        'comments': brat_comments(sentence, include_empty),
        'styles': brat_styles(sentence, include_empty),
        'sentlabels': [brat_label(sentence)],
    }


def document_to_brat(document, include_empty=False):
    """
    Merges the brat data of all sentences of the document. Sentences are
    placed on separate lines of the text; the base offset of every sentence
    is set accordingly. Sentences that are not valid are repaired first,
    or left out if they cannot be repaired (see Document.repair_sentences()).

    Returns
    -------
    data : dict
        As returned by sentence_to_brat(), plus 'error', the error flag of
        the document.
    """
    # relations must not point to missing spans
    document.repair_sentences()
    merged = {c: [] for c in CATEGORIES}
    merged['text'] = ''
    text_offset = 0
    for sentence in document.sentences:
        sentence.set_base_offset(text_offset + 1 if text_offset != 0 else 0)
        data = sentence_to_brat(sentence, include_empty)
        if merged['text']:
            merged['text'] += '\n'
            text_offset += 1
        merged['text'] += data['text']
        text_offset += len(data['text'])
        for c in CATEGORIES:
            merged[c].extend(data[c])
    # to avoid brat breakage on error, don't send empty text
    if not merged['text']:
        merged['text'] = EMPTY_TEXT
    merged['error'] = document.error
    return merged
