import re

# Complement of the characters that never need quoting
_needs_quoting = re.compile(r"[^\w.+\-@/]", re.ASCII)

_macro_pat = re.compile(r"^([^=(]+)(?:\(([^)]*)\))?(?:=(.*))?$", re.DOTALL)


def shell_quote(text):
    """ Return text in a form that a POSIX shell reads back as one token """
    if text == "" or _needs_quoting.search(text):
        return "'" + text.replace("'", "'\"'\"'") + "'"
    return text


def command_line(cmd):
    """ Render an argument list as a single shell command line """
    return " ".join(shell_quote(arg) for arg in cmd)


def parse_macro(text):
    """ Split a command line macro such as NAME, NAME=VALUE or NAME(A,B)=VALUE
        into the (name, args, value) triple that the compilers define() takes.
        args and value are None when absent.
    """
    match = _macro_pat.match(text)
    if not match:
        raise ValueError("Don't know how to interpret " + text + " as a macro.")
    name, args, value = match.groups()
    if args is not None:
        args = [arg.strip() for arg in args.split(",")] if args.strip() else []
    return name.strip(), args, value


def tobool(value):
    """
    Tries to convert a wide variety of values to a boolean
    Raises an exception for unrecognised values
    """
    if str(value).lower() in ("yes", "y", "true", "t", "1", "on"):
        return True
    if str(value).lower() in ("no", "n", "false", "f", "0", "off"):
        return False

    raise ValueError("Don't know how to convert " + str(value) + " to boolean.")


def add_boolean_argument(parser, name, dest=None, default=False, help=None):
    """Add a boolean argument to an ArgumentParser instance."""
    if not dest:
        dest = name
    group = parser.add_mutually_exclusive_group()
    bool_help = help + " Use --no-" + name + " to turn the feature off."
    group.add_argument(
        "--" + name,
        metavar="",
        nargs="?",
        dest=dest,
        default=default,
        const=True,
        type=tobool,
        help=bool_help,
    )
    group.add_argument("--no-" + name, dest=dest, action="store_false")


def ordered_unique(iterable):
    """Return unique items from iterable preserving insertion order."""
    return list(dict.fromkeys(iterable))
