import ffiprep.apptools
import ffiprep.compilers
import ffiprep.discovery
import ffiprep.utils
from ffiprep.errors import NoCompilerError


def add_arguments(cap):
    """ Add the command line arguments that FfiHeaders.from_args requires """
    ffiprep.apptools.add_common_arguments(cap)


class FfiHeaders(object):

    """ The handle that binding generators use to load C headers.
        One compiler is chosen when the handle is made and every call
        goes to it.  If no compiler was found then every call raises
        NoCompilerError.
    """

    def __init__(self, compiler):
        self.compiler = compiler

    @classmethod
    def discover(cls, override=None, check_exit_status=True, verbose=0, attempts=ffiprep.compilers.DEFAULT_ATTEMPTS):
        compiler = ffiprep.discovery.find_best_cc(
            ffiprep.discovery.candidates(override=override),
            check_exit_status=check_exit_status,
            verbose=verbose,
            attempts=attempts,
        )
        return cls(compiler)

    @classmethod
    def from_args(cls, args):
        """ Discover the compiler then apply the --include, --define and
            --undefine arguments to it
        """
        hh = cls.discover(
            override=args.CC,
            check_exit_status=args.check_exit_status,
            verbose=args.verbose,
            attempts=args.attempts,
        )
        if hh.compiler is None:
            return hh

        for macro in args.define:
            name, macroargs, value = ffiprep.utils.parse_macro(macro)
            hh.compiler.define(name, macroargs, value)
        for name in args.undefine:
            hh.compiler.undefine(name)
        hh.compiler.add_to_include_path(*args.include)
        return hh

    def _active(self):
        if self.compiler is None:
            raise NoCompilerError()
        return self.compiler

    def includes(self, hdr):
        return self._active().dependencies(hdr)

    def preprocess(self, previous_defines, *headers):
        return self._active().preprocess(previous_defines, *headers)

    def add_to_include_path(self, *paths):
        return self._active().add_to_include_path(*paths)

    def define(self, name, args=None, value=None):
        return self._active().define(name, args, value)

    def undefine(self, name):
        return self._active().undefine(name)
