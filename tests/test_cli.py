import json
import logging

import pytest

from udreader import cli
from udreader.argparser import parse_args
from futils import row

DOG = row('1', 'Dog', 'dog', 'NOUN', '_', '_', '0', 'root', '_', '_')

@pytest.fixture(autouse=True)
def no_log_files(monkeypatch, tmp_path):
    monkeypatch.setenv('LOG_FILE', '')
    monkeypatch.setenv('ERROR_FILE', '')
    monkeypatch.chdir(tmp_path)
    yield
    logger = logging.getLogger('udreader')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)

def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text, encoding='utf-8')
    return str(path)

def test_parse_args():
    args = parse_args([])
    assert args.input == ['-']
    assert args.strict is None
    assert args.quiet is None
    assert parse_args(['--strict', 'a']).strict is True
    assert parse_args(['--loose', 'a']).strict is False
    with pytest.raises(SystemExit):
        parse_args(['--strict', '--loose'])
    with pytest.raises(SystemExit):
        parse_args(['--max-err', '-1'])

def test_valid_file(tmp_path, capsys):
    path = write(tmp_path, 'ok.conllu', '# sent_id = 1\n' + DOG + '\n\n')
    assert cli.main([path]) == 0
    captured = capsys.readouterr()
    assert captured.out == '# sent_id = 1\n' + DOG + '\n\n'
    assert f'{path}: *** PASSED ***' in captured.err

def test_repaired_output(tmp_path, capsys):
    text = DOG + '\n' + row('2', 'barks', 'bark', 'VERB', '_', '_', '5', 'dep', '_', '_') + '\n\n'
    path = write(tmp_path, 'bad.conllu', text)
    assert cli.main(['--quiet', path]) == 1
    captured = capsys.readouterr()
    assert captured.out == DOG + '\n' + row('2', 'barks', 'bark', 'VERB', '_', '_', '_', 'dep', '_', '_') + '\n\n'
    assert captured.err == ''

def test_json_format(tmp_path, capsys):
    path = write(tmp_path, 'bad.conllu', DOG + '\n# late\n\n')
    assert cli.main(['--quiet', '--format', 'json', path]) == 1
    result = json.loads(capsys.readouterr().out)
    assert result['filename'] == path
    assert result['error'] is True
    assert [i['testid'] for i in result['incidents']] == ['misplaced-comment']
    assert result['incidents'][0]['lineno'] == 2

def test_brat_format(tmp_path, capsys):
    path = write(tmp_path, 'ok.conllu', DOG + '\n\n')
    assert cli.main(['--format', 'brat', path]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data['text'] == 'Dog'
    assert data['entities'] == [['S1-T1', 'NOUN', [[0, 3]]]]

def test_config_file(tmp_path, capsys):
    path = write(tmp_path, 'ok.conllu', DOG.replace('\t', ' '))
    config = write(tmp_path, 'udreader.yaml', 'strict: true\nquiet: true\n')
    # strict mode from the file: no TAB means one field per line
    assert cli.main(['--config-file', config, path]) == 1
    assert cli.main(['--config-file', config, '--loose', path]) == 0

def test_bad_config_file(tmp_path):
    config = write(tmp_path, 'udreader.yaml', 'colour: red\n')
    assert cli.main(['--config-file', config]) == 2

def test_config_file_bad_value(tmp_path):
    path = write(tmp_path, 'ok.conllu', DOG + '\n\n')
    config = write(tmp_path, 'udreader.yaml', 'strict: 1\n')
    assert cli.main(['--config-file', config, path]) == 2

def test_missing_file(tmp_path):
    assert cli.main(['--quiet', str(tmp_path / 'nothing.conllu')]) == 1
