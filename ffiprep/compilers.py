import subprocess
import sys

import ffiprep.utils
import ffiprep.makedeps
import ffiprep.pseudoheader
from ffiprep.errors import PreprocessError

DEFAULT_ATTEMPTS = 10


def compiler_class(kind):
    """ Return the class that implements the given kind of compiler """
    try:
        return globals()[kind.title() + "Compiler"]
    except KeyError:
        raise ValueError(
            "Unknown compiler kind: " + str(kind) + ". Choose from " + ", ".join(kinds()))


def kinds():
    return [st[:-8].lower() for st in dict(globals()) if st.endswith("Compiler")]


def create(candidate, verbose=0, attempts=DEFAULT_ATTEMPTS):
    """ Compiler Factory """
    cls = compiler_class(candidate.kind)
    if verbose >= 4:
        print("Creating " + cls.__name__ + " for " + ffiprep.utils.command_line(candidate.path))
    return cls(candidate.path, verbose=verbose, attempts=attempts)


class CompilerBase(object):
    """ Drive a C compiler so that it emits what a binding generator needs.
        The class attributes are the flag conventions of a kind of compiler.
        Derived classes override them rather than the methods.
    """

    kind = None
    dependency_flags = ("-M",)
    defines_extra_flags = ("-std=c99", "-dM", "-E")
    declarations_extra_flags = ("-std=c99", "-P", "-E")
    version_flags = ("-v",)

    def __init__(self, path, verbose=0, attempts=DEFAULT_ATTEMPTS):
        self.path = tuple(path)
        self.verbose = verbose
        self.attempts = attempts
        self.preprocessor_extra_flags = []
        self.init_defines()

    def __repr__(self):
        return "{0}({1!r})".format(self.__class__.__name__, self.path)

    def define(self, name, args=None, value=None):
        define = "-D" + name
        if args is not None:
            define += "(" + ",".join(args) + ")"
        if value is not None:
            define += "=" + value
        self.preprocessor_extra_flags.append(define)

    def undefine(self, name):
        self.preprocessor_extra_flags.append("-U" + name)

    def init_defines(self):
        # Erase the parts of C that a binding generator cannot represent
        self.define("aligned", ["ARGS"], "")
        self.define("__attribute__", ["ARGS"], "")
        self.define("__asm", ["ARGS"], "")
        self.define("__asm__", ["ARGS"], "")
        self.define("__inline__", None, "")
        self.define("EXTERN", None, "extern")
        self.define("INIT", ["..."], "")
        self.define("_GNU_SOURCE")
        self.define("INCLUDE_GENERATED_DECLARATIONS")
        # Needed for FreeBSD
        self.define("_Thread_local", None, "")
        # Needed for macOS
        self.define("_Nullable", None, "")
        self.define("_Nonnull", None, "")
        self.undefine("__BLOCKS__")

    def add_to_include_path(self, *paths):
        for path in paths:
            self.preprocessor_extra_flags.append("-I" + path)

    def _run(self, cmd):
        """ Run cmd once and return its combined stdout and stderr.
            Return None if it could not be run or said nothing.
        """
        if self.verbose >= 3:
            print(ffiprep.utils.command_line(cmd))

        try:
            result = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as err:
            if self.verbose >= 1:
                print(
                    "Failed to execute {0}. Error={1}".format(cmd[0], err),
                    file=sys.stderr,
                )
            return None

        if self.verbose >= 5:
            print(result.stdout)
        return result.stdout or None

    def dependencies(self, hdr):
        """ Return the list of header files upon which hdr relies """
        deps = self._run(list(self.path) + list(self.dependency_flags) + [hdr])
        if deps is None:
            return None
        return ffiprep.makedeps.parse_make_deps(deps)

    def repeated_call(self, *argss):
        """ Join the argument lists into one command and run it until it
            produces some output, at most self.attempts times.
        """
        cmd = [arg for args in argss for arg in args]
        for _ in range(self.attempts):
            output = self._run(cmd)
            if output is not None:
                return output

        sys.stderr.write(
            "ERROR: ffiprep: Failed to execute {0}: no output after {1} attempts\n".format(
                ffiprep.utils.command_line(cmd), self.attempts
            )
        )
        return None

    def preprocess(self, previous_defines, *headers):
        """ Returns the (declarations, defines) that the compiler produces for
            a translation unit holding previous_defines then the given headers.
        """
        pseudoheader = ffiprep.pseudoheader.PseudoHeader(
            previous_defines, headers, verbose=self.verbose
        )
        with pseudoheader as fname:
            defines = self.repeated_call(
                self.path,
                self.preprocessor_extra_flags,
                self.defines_extra_flags,
                [fname],
            )
            declarations = self.repeated_call(
                self.path,
                self.preprocessor_extra_flags,
                self.declarations_extra_flags,
                [fname],
            )

        failed = []
        if defines is None:
            failed.append(self._command(self.defines_extra_flags, pseudoheader.filename))
        if declarations is None:
            failed.append(self._command(self.declarations_extra_flags, pseudoheader.filename))
        if failed:
            raise PreprocessError(
                "No output from the preprocessor for " + " ".join(headers),
                commands=failed,
            )

        return declarations, defines

    def _command(self, flags, fname):
        return ffiprep.utils.command_line(
            list(self.path) + self.preprocessor_extra_flags + list(flags) + [fname]
        )


class GccCompiler(CompilerBase):
    kind = "gcc"


class ClangCompiler(CompilerBase):
    kind = "clang"


class MsvcCompiler(CompilerBase):
    kind = "msvc"
    # cl rejects -v but prints its banner and exits cleanly with no arguments
    version_flags = ()
