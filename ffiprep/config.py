import ffiprep.apptools
import ffiprep.ffiheaders


def main(argv=None):
    cap = ffiprep.apptools.create_parser(
        "Helper tool for examining how config files, command line "
        "arguments and environment variables are combined")
    ffiprep.ffiheaders.add_arguments(cap)
    args = ffiprep.apptools.parseargs(cap, argv, verbose=0)
    ffiprep.apptools.verbose_print_args(args)

    hh = ffiprep.ffiheaders.FfiHeaders.from_args(args)
    if hh.compiler is None:
        print("\nNo C compiler found")
        return 1

    print("\nCompiler: " + repr(hh.compiler))
    print("Preprocessor flags:")
    for flag in hh.compiler.preprocessor_extra_flags:
        print("\t" + flag)
    return 0
