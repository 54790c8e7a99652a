import udapi.block.read.conllu

from udreader.utils import PLACEHOLDER



# One reader is enough; it keeps no state between sentences.
conllu_reader = udapi.block.read.conllu.Conllu()



def build_tree_udapi(sentence):
    """
    Calls Udapi to build its data structures from a sentence read (and
    possibly repaired) by udreader.

    Parameters
    ----------
    sentence : udreader.sentence.Sentence
        The sentence should have passed Sentence.validate() (or have been
        repaired); Udapi is much less forgiving than the reader.

    Raises
    ------
    ValueError
        If a word does not assert a head, which Udapi cannot represent.

    Returns
    -------
    root : udapi.core.node.Node object
        The artificial root node (all other nodes and all tree attributes
        can be accessed from it).
    """
    for word in sentence.words():
        if word.head in (None, PLACEHOLDER):
            raise ValueError(f'{sentence.id}: word {word.id} has no HEAD, cannot build tree')
    # Udapi recognizes comments only if '#' is the first character.
    lines = [c.lstrip() for c in sentence.comments]
    lines.extend(e.to_conllu() for e in sentence.elements)
    root = conllu_reader.read_tree_from_lines(lines)
    # We should not return an empty tree (root should not be None).
    assert(root)
    return root
