import sys
import ffiprep.apptools
import ffiprep.ffiheaders
import ffiprep.utils
from ffiprep.errors import FfiPrepError


def main(argv=None):
    cap = ffiprep.apptools.create_parser(
        "List the header files that the given headers depend upon")
    cap.add("filename", help='Header to use in "$CC -M filename"', nargs="+")

    # This will add the common arguments as a side effect
    ffiprep.ffiheaders.add_arguments(cap)
    args = ffiprep.apptools.parseargs(cap, argv)

    try:
        hh = ffiprep.ffiheaders.FfiHeaders.from_args(args)
        results = []
        for fname in args.filename:
            deps = hh.includes(fname)
            if deps is None:
                sys.stderr.write("No dependency output for {0}\n".format(fname))
                return 1
            results.extend(deps)
    except FfiPrepError as err:
        sys.stderr.write(str(err) + "\n")
        return 1

    for dep in ffiprep.utils.ordered_unique(results):
        print(dep)

    return 0
