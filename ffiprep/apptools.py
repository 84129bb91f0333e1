import configargparse

from ffiprep.version import __version__
import ffiprep.configutils
import ffiprep.compilers
import ffiprep.discovery
import ffiprep.utils


def create_parser(description, user_config_dir=None, system_config_dir=None):
    """ Create the configargparse singleton that all the ffiprep tools share.
        The ffiprep.conf files become the default config files.
    """
    return configargparse.getArgumentParser(
        description=description,
        formatter_class=configargparse.ArgumentDefaultsHelpFormatter,
        default_config_files=ffiprep.configutils.defaultconfigs(
            user_config_dir=user_config_dir,
            system_config_dir=system_config_dir,
        ),
        args_for_setting_config_path=["-c", "--config"],
        ignore_unknown_config_file_keys=True,
    )


def add_base_arguments(cap):
    cap.add(
        "-v",
        "--verbose",
        help="Output verbosity. Add more v's to make it more verbose",
        action="count",
        default=0)
    cap.add(
        "-q",
        "--quiet",
        help="Decrement verbosity. Useful in apps where the default verbosity > 0.",
        action="count",
        default=0)
    cap.add(
        "--version",
        action="version",
        version=__version__)
    cap.add(
        "-?",
        action='help',
        help='Help')


def add_common_arguments(cap):
    """ Insert common arguments into the configargparse object """
    add_base_arguments(cap)
    cap.add(
        "--CC",
        env_var=ffiprep.discovery.ENVIRONMENT_VARIABLE,
        help="C compiler to try before any other. "
             "The CC environment variable beats a config file value but not the command line.",
        default=None)
    cap.add(
        "--include",
        help="Extra path(s) to add to the list of include paths",
        nargs='*',
        default=[])
    cap.add(
        "--define",
        help="Extra macro(s) to define, written NAME, NAME=VALUE or NAME(ARGS)=VALUE",
        nargs='*',
        default=[])
    cap.add(
        "--undefine",
        help="Macro(s) to undefine",
        nargs='*',
        default=[])
    cap.add(
        "--attempts",
        help="How many times to run the preprocessor before giving up on getting output",
        type=int,
        default=ffiprep.compilers.DEFAULT_ATTEMPTS)
    ffiprep.utils.add_boolean_argument(
        parser=cap,
        name="check-exit-status",
        dest="check_exit_status",
        default=True,
        help="Only accept a compiler if its version query exits successfully. "
             "Otherwise any compiler that can be started is accepted.")


def _unquote(value):
    """ Remove quotes that wrap the whole of value """
    while len(value) >= 2 and value[0] in "\"'" and value[-1] in "\"'":
        value = value[1:-1]
    return value


def _strip_quotes(args):
    """ Config files and shells leave quotes around some values.
        Remove them from the string values of args.
    """
    for name, value in vars(args).items():
        if isinstance(value, str):
            setattr(args, name, _unquote(value))
        elif isinstance(value, list):
            setattr(args, name, [_unquote(vv) if isinstance(vv, str) else vv for vv in value])


def _commonsubstitutions(args):
    """ Tidy the raw arguments """
    args.verbose -= args.quiet
    _strip_quotes(args)
    if hasattr(args, "include"):
        args.include = ffiprep.utils.ordered_unique(args.include)


# List to store the callback functions for parse args
_substitutioncallbacks = [_commonsubstitutions]


def resetcallbacks():
    """ Useful in tests to clear out the substitution callbacks """
    global _substitutioncallbacks
    _substitutioncallbacks = [_commonsubstitutions]


def registercallback(callback):
    """ Use this to register a function to be called back during the
        substitutions call (usually during parseargs).
        The callback function will later be given "args" as its argument.
    """
    _substitutioncallbacks.append(callback)


def substitutions(args, verbose=None):
    for func in _substitutioncallbacks:
        func(args)

    if verbose is None:
        verbose = args.verbose
    if verbose >= 2:
        verbose_print_args(args)


def parseargs(cap, argv=None, verbose=None):
    args = cap.parse_args(args=argv)
    substitutions(args, verbose)
    return args


def verbose_print_args(args):
    """ Print every setting once config files, environment and command line are merged """
    print("Settings:")
    width = max((len(attr) for attr in vars(args)), default=0)
    for attr, value in sorted(vars(args).items()):
        if value is None:
            value = ""
        elif isinstance(value, list):
            value = ffiprep.utils.command_line(value)
        print("  {0:{1}} = {2}".format(attr, width, value))
