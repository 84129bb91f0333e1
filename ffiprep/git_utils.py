import os
import subprocess
import functools


def find_git_root(directory=None):
    """ Return the top level directory of the git repository that holds
        the given directory (default: the current working directory).
        Outside of a repository the directory itself is returned.
    """
    # Note: You can't functools.lru_cache(maxsize=None) the None parameter
    # since it would give different results as the cwd changes
    if directory is None:
        directory = os.getcwd()
    return _find_git_root(os.path.realpath(directory))


@functools.lru_cache(maxsize=None)
def _find_git_root(directory):
    """ Internal function to find the git root but cache it against the given directory """
    gitroot = directory
    try:
        # Redirect stderr to stdout (which is captured) rather than
        # have it spew over the console
        gitroot = subprocess.check_output(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=directory,
            stderr=subprocess.STDOUT,
            universal_newlines=True,
        ).strip("\n")
    except (subprocess.CalledProcessError, OSError):
        # A CalledProcessError exception means we aren't in a real git repository.
        # An OSError probably means git isn't installed on this machine.
        # But are we in a fake git repository? (i.e., there exists a dummy .git
        # file)
        trialgitroot = directory
        while trialgitroot != os.path.dirname(trialgitroot):
            if os.path.exists(os.path.join(trialgitroot, ".git")):
                gitroot = trialgitroot
                break
            trialgitroot = os.path.dirname(trialgitroot)
    return gitroot


def clear_cache():
    _find_git_root.cache_clear()
