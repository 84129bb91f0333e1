""" Find the best C compiler available on this machine """
import collections
import os
import subprocess
import sys

import ffiprep.utils
import ffiprep.compilers

CompilerCandidate = collections.namedtuple("CompilerCandidate", ["path", "kind"])

ENVIRONMENT_VARIABLE = "CC"

# In priority order.  icc understands the gcc flags.
FALLBACK_COMPILERS = (
    ("cc", "gcc"),
    ("gcc", "gcc"),
    ("gcc-4.9", "gcc"),
    ("gcc-4.8", "gcc"),
    ("gcc-4.7", "gcc"),
    ("clang", "clang"),
    ("icc", "gcc"),
)


def _is_windows(platform):
    return platform.startswith("win")


def launcher(platform=None):
    """ The generic launcher that looks the compiler up on the PATH """
    if platform is None:
        platform = sys.platform
    if _is_windows(platform):
        return ()
    return ("/usr/bin/env",)


def candidates(override=None, environ=None, platform=None):
    """ The compilers to try, most preferred first.
        An explicit override beats the CC environment variable.  The tools pass
        --CC, which configargparse has already merged with CC and config files.
    """
    if environ is None:
        environ = os.environ
    if platform is None:
        platform = sys.platform
    prefix = launcher(platform)

    results = []
    if not override:
        override = environ.get(ENVIRONMENT_VARIABLE)
    if override:
        results.append(CompilerCandidate(prefix + tuple(override.split()), "gcc"))

    if _is_windows(platform):
        results.append(CompilerCandidate(("cl",), "msvc"))

    for name, kind in FALLBACK_COMPILERS:
        results.append(CompilerCandidate(prefix + (name,), kind))
    return results


def probe(candidate, check_exit_status=True, verbose=0):
    """ Ask the candidate for its version.
        If check_exit_status is False then any compiler that can be started
        is accepted, even one that fails on the version query.
    """
    flags = ffiprep.compilers.compiler_class(candidate.kind).version_flags
    cmd = list(candidate.path) + list(flags)
    if verbose >= 4:
        print("Probing " + ffiprep.utils.command_line(cmd))
    try:
        result = subprocess.run(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as err:
        if verbose >= 4:
            print("Could not start {0}. Error={1}".format(cmd[0], err))
        return False

    if check_exit_status and result.returncode != 0:
        if verbose >= 4:
            print("{0} exited with status {1}".format(cmd[0], result.returncode))
        return False
    return True


def find_best_cc(compilers, check_exit_status=True, verbose=0, attempts=ffiprep.compilers.DEFAULT_ATTEMPTS):
    """ Return a compiler object for the first candidate that answers the
        version probe.  Return None if nothing answers.
    """
    for candidate in compilers:
        if probe(candidate, check_exit_status=check_exit_status, verbose=verbose):
            return ffiprep.compilers.create(candidate, verbose=verbose, attempts=attempts)

    if verbose >= 1:
        sys.stderr.write("No C compiler found. Tried:\n")
        for candidate in compilers:
            sys.stderr.write("\t" + ffiprep.utils.command_line(candidate.path) + "\n")
    return None
