from udreader.utils import crex

def test_ws():
	spaces = [" ",
			"  ",
			"\n",
			"	"]

	for space in spaces:
		match = crex.ws.fullmatch(space)
		if match:
			assert True
		else:
			assert False

def test_wordid():
	assert crex.wordid.fullmatch('10')
	# zero and leading zeros have the right shape, validation rejects them later
	assert crex.wordid.fullmatch('0')
	assert not crex.wordid.fullmatch('1.1')
	assert not crex.wordid.fullmatch('x')

def test_mwtid():
	match = crex.mwtid.fullmatch('4-5')
	assert match
	assert match.group(1) == '4'
	assert match.group(2) == '5'
	assert not crex.mwtid.fullmatch('4-')
	assert not crex.mwtid.fullmatch('4.5')

def test_enodeid():
	match = crex.enodeid.fullmatch('2.10')
	assert match
	assert match.group(2) == '10'
	assert not crex.enodeid.fullmatch('2.')

def test_comment():
	assert crex.comment.fullmatch('# sent_id = 1')
	assert crex.comment.fullmatch('   # indented')
	assert crex.comment.fullmatch('#')
	assert not crex.comment.fullmatch('1\t#\t#\tPUNCT\t_\t_\t0\troot\t_\t_')

def test_featval():
	match = crex.featval.fullmatch('Number=Plur,Sing')
	assert match
	assert match.group(1) == 'Number'
	assert match.group(2) == 'Plur,Sing'
	assert crex.featval.fullmatch('Number[psor]=Sing')
	assert not crex.featval.fullmatch('number=Sing')
	assert not crex.featval.fullmatch('Number=')
	assert not crex.featval.fullmatch('Number=sing')

def test_head():
	assert crex.head.fullmatch('0')
	assert crex.head.fullmatch('12')
	assert not crex.head.fullmatch('_')
	assert not crex.head.fullmatch('-1')

def test_deps_pair():
	match = crex.deps_pair.fullmatch('1.1:nsubj:pass')
	assert match
	assert match.group(1) == '1.1'
	assert match.group(2) == 'nsubj:pass'
	assert not crex.deps_pair.fullmatch('nsubj')
	assert not crex.deps_pair.fullmatch('1:')

def test_visual_style():
	match = crex.visual_style.fullmatch('# visual-style 2 bgColor:red')
	assert match
	assert match.group(1) == '2 bgColor:red'
	match = crex.style_spec.fullmatch('2 1 det color:blue')
	assert match.group(1) == '2 1 det'
	assert match.group(2) == 'color:blue'

def test_sentence_label():
	match = crex.sentence_label.fullmatch('# sentence-label Example 1')
	assert match.group(1).strip() == 'Example 1'
	assert not crex.sentence_label.fullmatch('# sentence-labels x')

def test_rtl():
	assert crex.rtl.fullmatch('שלום')
	assert crex.rtl.fullmatch('مرحبا')
	assert not crex.rtl.fullmatch('hello')
	assert not crex.rtl.fullmatch('שלום!')
