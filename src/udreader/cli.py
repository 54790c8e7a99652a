#! /usr/bin/env python3
import io
import json
import logging
import sys

from udreader.argparser import parse_args
from udreader.brat import document_to_brat
from udreader.config import build_config
from udreader.document import Document
from udreader.logging_utils import setup_logging, logger_sink, pprint

logger = logging.getLogger('udreader')



#==============================================================================
# Reading the input files.
#==============================================================================



def read_file(filename):
    """
    Returns the content of a file, '-' meaning STDIN.
    """
    if filename == '-':
        # Set PYTHONIOENCODING=utf-8 before starting Python.
        # Otherwise locale-dependent encoding will be used.
        return sys.stdin.read()
    with io.open(filename, 'r', encoding='utf-8') as inp:
        return inp.read()


def process_file(filename, config):
    """
    Reads, checks and repairs one file.

    Returns
    -------
    document : udreader.document.Document
    """
    text = read_file(filename)
    document = Document(config=config)
    sink = logger_sink(logging.getLogger(f'udreader.{filename}'))
    document.parse(text, logger=sink)
    return document


def write_output(filename, document, config, out):
    if config['format'] == 'conllu':
        out.write(document.to_conllu())
    elif config['format'] == 'brat':
        data = document_to_brat(document, include_empty=config['include_empty'])
        out.write(json.dumps(data, ensure_ascii=False) + '\n')
    else:
        incidents = '[' + ', '.join(i.json() for i in sorted(document.incidents)) + ']'
        out.write(f'{{"filename": {json.dumps(filename)}, "error": {json.dumps(document.error)}, "incidents": {incidents}}}\n')



#==============================================================================
# The main function.
#==============================================================================



def main(argv=None):
    args = parse_args(argv)
    setup_logging(logger)
    try:
        config = build_config(args, args.config_file)
    except (OSError, ValueError) as e:
        logger.error(str(e))
        return 2
    logger.debug('Configuration:\n%s', pprint(config))
    if config['quiet']:
        # incidents are not logged at all then, only notes and repairs remain
        logger.setLevel(logging.ERROR)
    passed = True
    for filename in args.input:
        try:
            document = process_file(filename, config)
        except OSError as e:
            logger.error(f'{filename}: {e}')
            passed = False
            continue
        write_output(filename, document, config, sys.stdout)
        if not config['quiet']:
            print(f'{filename}: {document.state}', file=sys.stderr)
        if document.error:
            passed = False
    if passed:
        return 0
    else:
        return 1



if __name__=="__main__":
    errcode = main()
    sys.exit(errcode)
