import yaml



# Options understood by the reader and the command line tool. The values are
# the defaults.
DEFAULTS = {
    # True = only TAB separates fields, False = any whitespace, None = decide
    # by looking at the input.
    'strict': None,
    # Do not send incidents to the logger (they are still counted and stored).
    'quiet': False,
    # How many incidents of one test class to report? 0 for all.
    'max_err': 0,
    # How many incidents to keep in the parse state? 0 for all.
    'max_store': 0,
    # Show empty nodes in the brat export.
    'include_empty': False,
    # Output format of the command line tool: conllu, brat or json.
    'format': 'conllu',
}

FORMATS = ('conllu', 'brat', 'json')



def load_config(path):
    """
    Reads reader options from a YAML file.

    Parameters
    ----------
    path : str
        Path to a YAML file with a mapping of option names to values.

    Raises
    ------
    ValueError
        If the file does not contain a mapping, or contains unknown options.

    Returns
    -------
    cfg : dict
    """
    with open(path, encoding='utf-8') as cfg_f:
        cfg = yaml.safe_load(cfg_f)
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ValueError(f'{path}: expected a mapping of options')
    unknown = sorted(set(cfg) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"{path}: unknown options: {', '.join(unknown)}")
    return cfg


def build_config(args=None, config_file=None):
    """
    Merges the defaults, the options from a YAML file and the options from
    the command line (in this order of increasing priority). Command line
    options that were not given (None) do not override anything.

    Parameters
    ----------
    args : argparse.Namespace or dict, optional
    config_file : str, optional

    Raises
    ------
    ValueError
        If an option has a value of the wrong type or out of range.

    Returns
    -------
    cfg : dict
    """
    cfg = dict(DEFAULTS)
    if config_file:
        cfg.update(load_config(config_file))
    if args is not None:
        # Since we allow args that were not created by our ArgumentParser,
        # we must be prepared that some attributes do not exist.
        args_dict = args if isinstance(args, dict) else vars(args)
        for key in DEFAULTS:
            if key in args_dict and args_dict[key] is not None:
                cfg[key] = args_dict[key]
    if cfg['format'] not in FORMATS:
        raise ValueError(f"unknown format {cfg['format']!r}, expected one of {', '.join(FORMATS)}")
    if cfg['strict'] is not None and not isinstance(cfg['strict'], bool):
        raise ValueError(f"strict must be true, false or null, got {cfg['strict']!r}")
    for key in ('max_err', 'max_store'):
        if isinstance(cfg[key], bool) or not isinstance(cfg[key], int) or cfg[key] < 0:
            raise ValueError(f'{key} must be a non-negative integer, got {cfg[key]!r}')
    return cfg
