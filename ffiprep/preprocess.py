import sys
from io import open

import ffiprep.apptools
import ffiprep.ffiheaders
from ffiprep.errors import FfiPrepError


def add_arguments(cap):
    ffiprep.ffiheaders.add_arguments(cap)
    cap.add(
        "--previous-defines",
        dest="previous_defines",
        help="File whose text is placed in front of the #include lines",
        default=None)
    cap.add(
        "--declarations-out",
        dest="declarations_out",
        help="Write the declaration dump to this file rather than stdout",
        default=None)
    cap.add(
        "--defines-out",
        dest="defines_out",
        help="Write the macro dump to this file rather than stdout",
        default=None)


def _write(text, filename):
    if filename is None:
        sys.stdout.write(text)
    else:
        with open(filename, "w", encoding="utf-8") as ff:
            ff.write(text)


def main(argv=None):
    cap = ffiprep.apptools.create_parser(
        "Preprocess headers into a declaration dump and a macro dump")
    cap.add("filename", help="Header(s) to preprocess together", nargs="+")
    add_arguments(cap)
    args = ffiprep.apptools.parseargs(cap, argv)

    previous_defines = ""
    if args.previous_defines:
        with open(args.previous_defines, encoding="utf-8") as ff:
            previous_defines = ff.read()

    try:
        hh = ffiprep.ffiheaders.FfiHeaders.from_args(args)
        declarations, defines = hh.preprocess(previous_defines, *args.filename)
    except FfiPrepError as err:
        sys.stderr.write(str(err) + "\n")
        for cmd in getattr(err, "commands", []):
            sys.stderr.write("\t" + cmd + "\n")
        return 1

    _write(declarations, args.declarations_out)
    _write(defines, args.defines_out)
    return 0
