"""
Parsed forms of the ID column. The ID is parsed once when an element is
created; the rest of the package dispatches on the type of the parsed value
instead of matching the raw string again.
"""
from dataclasses import dataclass

import udreader.utils as utils



@dataclass(frozen=True, order=True)
class Word:
    """ Regular word, e.g. '3'. """
    index: int

    def __str__(self):
        return str(self.index)



@dataclass(frozen=True, order=True)
class MultiwordRange:
    """ Multiword token spanning words start..end, e.g. '4-5'. """
    start: int
    end: int

    def __str__(self):
        return f'{self.start}-{self.end}'

    def __contains__(self, index):
        return self.start <= index <= self.end



@dataclass(frozen=True, order=True)
class EmptyNode:
    """ Empty node inserted after word `word`, e.g. '2.1'. """
    word: int
    sub: int

    def __str__(self):
        return f'{self.word}.{self.sub}'



def parse_nodeid(value):
    """
    Classifies the raw value of the ID column.

    Parameters
    ----------
    value : str
        The ID as it appears in the input line.

    Returns
    -------
    nodeid : Word, MultiwordRange, EmptyNode or None
        None if the value has none of the three shapes. Zero indices and
        reversed ranges are still classified; rejecting them is the job of
        Element.validate_id().
    """
    if utils.crex.wordid.fullmatch(value):
        return Word(int(value))
    match = utils.crex.mwtid.fullmatch(value)
    if match:
        return MultiwordRange(int(match.group(1)), int(match.group(2)))
    match = utils.crex.enodeid.fullmatch(value)
    if match:
        return EmptyNode(int(match.group(1)), int(match.group(2)))
    return None
