import pytest

from udreader.element import Element
from udreader.nodeid import Word, MultiwordRange, EmptyNode
from futils import make_element, row, collect

def word(feats='_', head='0', deps='_', misc='_'):
    return Element(['1', 'dogs', 'dog', 'NOUN', 'NNS', feats, head, 'root', deps, misc])

def test_needs_ten_fields():
    with pytest.raises(ValueError):
        Element(['1', 'Dog'])

def test_kinds():
    assert make_element(row('1', 'a', '_', '_', '_', '_', '0', '_', '_', '_')).nodeid == Word(1)
    mwt = make_element(row('4-5', 'a', '_', '_', '_', '_', '_', '_', '_', '_'))
    assert mwt.is_multiword()
    assert not mwt.is_word()
    assert mwt.nodeid == MultiwordRange(4, 5)
    assert (mwt.range_from(), mwt.range_to()) == (4, 5)
    enode = make_element(row('2.1', 'a', '_', '_', '_', '_', '_', '_', '_', '_'))
    assert enode.is_empty_node()
    assert enode.nodeid == EmptyNode(2, 1)

def test_is_token():
    assert word().is_token([])
    assert word().is_token([MultiwordRange(2, 3)])
    assert not word().is_token([MultiwordRange(1, 2)])
    mwt = make_element(row('1-2', 'a', '_', '_', '_', '_', '_', '_', '_', '_'))
    assert mwt.is_token([mwt.nodeid])
    enode = make_element(row('1.1', 'e', 'e', 'X', '_', '_', '_', '_', '_', '_'))
    assert enode.is_token([MultiwordRange(1, 2)])

def test_valid_word():
    element = make_element(row('1', 'The', 'the', 'DET', 'DT', 'Definite=Def|PronType=Art', '2', 'det', '_', '_'))
    assert element.validate() == []

def test_form_and_lemma_may_contain_space():
    element = make_element(row('1', 'New York', 'New York', 'PROPN', '_', '_', '0', 'root', '_', '_'))
    assert element.validate() == []

def test_field_constraints():
    element = make_element(row('1', 'a', 'a', 'PRO PN', '_', '_', '0', 'root', '_', ''))
    assert element.validate() == ['UPOSTAG must not contain space: "PRO PN"',
                                  'MISC must not be empty: ""']

def test_id():
    issues = []
    element = word()
    assert element.validate_id('1', issues)
    assert element.validate_id('1-2', issues)
    assert element.validate_id('1.1', issues)
    assert issues == []
    assert not element.validate_id('0', issues)
    assert not element.validate_id('3-2', issues)
    assert not element.validate_id('1.0', issues)
    assert not element.validate_id('a', issues)
    assert issues == ['ID indices must start from 1: "0"',
                      'ID ranges must have start <= end: "3-2"',
                      'ID indices must start from 1: "1.0"',
                      'ID must be integer, range, or decimal: "a"']

def test_feats():
    assert len(word('_').validate()) == 0
    assert len(word('A=1|B=2').validate()) == 0
    assert len(word('A=No,Yes|B=2').validate()) == 0
    assert len(word('Number[psor]=Sing').validate()) == 0
    assert len(word('B=1|A=2').validate()) == 1
    assert len(word('A=1|B=2|B=2').validate()) == 1
    assert len(word('A=1|B=2|B=3').validate()) == 1
    assert len(word('A=Yes,Yes').validate()) == 1
    # all problems are reported
    assert len(word('A=1|B=2|B=3,3').validate()) == 2
    assert word('a=1').validate() == ['invalid FEATS entry: "a=1"']

def test_feats_order_is_case_insensitive():
    assert word('abbr=Yes|Case=Nom').validate() == ['invalid FEATS entry: "abbr=Yes"']
    assert word('Abbr=Yes|Case=Nom').validate() == []
    assert word('Case=Nom|Abbr=Yes').validate() == [
        'features must be ordered alphabetically (case-insensitive): "Abbr" < "Case"']

def test_head():
    assert word(head='0').validate() == []
    assert word(head='_').validate() == ['HEAD must be an ID or zero: "_"']
    assert word(head='-1').validate() == ['HEAD must be an ID or zero: "-1"']
    element = word()
    element.head = None
    assert element.validate() == []
    # placeholder is fine for empty nodes
    enode = make_element(row('1.1', 'a', 'a', 'X', '_', '_', '_', '_', '_', '_'))
    assert enode.validate() == []

def test_deps():
    assert word(deps='0:root').validate() == []
    assert word(deps='1:obj|1.1:x|1.10:y|2:z').validate() == []
    # equal heads may come in any order
    assert word(deps='1:obj|1:nsubj').validate() == []
    assert word(deps='2:nsubj|1:obj').validate() == ['DEPS must be ordered by head index']
    assert word(deps='1.10:x|1.2:y').validate() == ['DEPS must be ordered by head index']
    assert word(deps='x').validate() == ['invalid DEPS: "x"']
    assert word(deps='1:obj|x').validate() == ['invalid DEPS: "1:obj|x"']

def test_multiword_token():
    element = make_element(row('4-5', "don't", 'do', '_', '_', '_', '_', '_', '_', '_'))
    assert element.validate() == ['non-underscore field for multiword token']
    messages, log = collect()
    assert element.repair(log)
    assert element.validate() == []
    assert element.form == "don't"
    assert element.fields()[2:] == ['_'] * 8
    assert messages == ['repair: blanking non-underscore fields of multiword token']

def test_repair_blanks_invalid_fields():
    element = make_element(row('1', '', 'a b', 'X Y', '_', 'b=1', 'x', 'nsubj', '2:a|1:b', '_'))
    messages, log = collect()
    assert element.repair(log)
    assert element.fields() == ['1', '<ERROR>', 'a b', '_', '_', '_', None, 'nsubj', '_', '_']
    assert messages == ['repair: blanking invalid FORM',
                        'repair: blanking invalid UPOSTAG',
                        'repair: blanking invalid FEATS',
                        'repair: blanking invalid HEAD',
                        'repair: blanking invalid DEPS']
    assert element.to_conllu() == '1\t<ERROR>\ta b\t_\t_\t_\t_\tnsubj\t_\t_'

def test_repair_fails_on_invalid_id():
    element = make_element(row('x', 'a', 'a', 'X', '_', '_', '0', 'root', '_', '_'))
    assert not element.repair()
    assert element.form == 'a'

def test_repair_of_valid_element_changes_nothing():
    element = word('Number=Plur', deps='0:root')
    before = element.fields()
    messages, log = collect()
    assert element.repair(log)
    assert element.fields() == before
    assert messages == []

def test_dependencies():
    element = make_element(row('3', 'it', 'it', 'PRON', '_', '_', '2', 'nsubj', '2:nsubj|4:nsubj:xsubj', '_'))
    assert element.dependencies() == [('3', '2', 'nsubj'), ('3', '2', 'nsubj'), ('3', '4', 'nsubj:xsubj')]
    assert element.dependencies(skip_primary=True) == [('3', '2', 'nsubj'), ('3', '4', 'nsubj:xsubj')]
    element.head = None
    assert element.dependencies() == [('3', '2', 'nsubj'), ('3', '4', 'nsubj:xsubj')]
    assert word(head='_').dependencies() == []

def test_features():
    assert word().features() == []
    assert word('Case=Nom|Number=Plur,Sing').features() == [('Case', 'Nom'), ('Number', 'Plur'), ('Number', 'Sing')]
    assert word('Case=Nom|bad').features() == [('Case', 'Nom')]

def test_equality():
    assert word() == word()
    assert word() != word('Case=Nom')
