import argparse

from udreader.config import FORMATS



#==============================================================================
# Argument processing for the udreader command.
#==============================================================================


def build_argparse():
    # Options that can also come from the configuration file default to None,
    # so that we can tell whether they were given on the command line.
    opt_parser = argparse.ArgumentParser(description="Reads CoNLL-U files, reports and repairs the problems found and writes the result to the standard output.")

    io_group = opt_parser.add_argument_group("Input / output options")
    io_group.add_argument('--quiet',
                          dest="quiet", action="store_true", default=None,
                          help="""Do not print anything to stderr (incidents, summary).
                          Exit with 0 on pass, non-zero on fail.""")
    io_group.add_argument('--max-err',
                          action="store", type=int, default=None,
                          help="""How many incidents to output per test class? 0 for all.""")
    io_group.add_argument('--max-store',
                          action="store", type=int, default=None,
                          help="""How many incidents to save per file? 0 for all.
                          Saved incidents are only written with --format json.""")
    io_group.add_argument('--format',
                          action="store", choices=FORMATS, default=None,
                          help="""What to write to the standard output: the repaired CoNLL-U (default),
                          brat embedded data for visualization, or the list of incidents in JSON.""")
    io_group.add_argument('--include-empty',
                          dest='include_empty', action='store_true', default=None,
                          help="""Show empty nodes in the brat output.""")
    io_group.add_argument('--config-file',
                          action="store", default=None,
                          help="""YAML file with default values of the options above.""")
    io_group.add_argument('input',
                          nargs='*',
                          help="""Input file name(s), or "-" or nothing for standard input.""")

    mode_group = opt_parser.add_argument_group("Parsing mode", "By default, strict mode is used iff the input contains a TAB.")
    mode_exclusive = mode_group.add_mutually_exclusive_group()
    mode_exclusive.add_argument('--strict',
                                dest='strict', action='store_const', const=True, default=None,
                                help="""Fields are separated by TAB only.""")
    mode_exclusive.add_argument('--loose',
                                dest='strict', action='store_const', const=False,
                                help="""Fields are separated by any sequence of whitespace.""")
    return opt_parser



def parse_args(args=None):
    """
    Creates an instance of the ArgumentParser and parses the command line
    arguments.

    Parameters
    ----------
    args : list of strings, optional
        If not supplied, the argument parser will read sys.args instead.
        Otherwise the caller can supply list such as ['--loose', 'in.conllu'].

    Returns
    -------
    args : argparse.Namespace
        Values of individual arguments can be accessed as object properties
        (using the dot notation). It is possible to convert it to a dict by
        calling vars(args).
    """
    opt_parser = build_argparse()
    args = opt_parser.parse_args(args=args)
    if args.max_err is not None and args.max_err < 0:
        opt_parser.error('--max-err must not be negative')
    if args.max_store is not None and args.max_store < 0:
        opt_parser.error('--max-store must not be negative')
    if args.input == []:
        args.input.append('-')
    return args
