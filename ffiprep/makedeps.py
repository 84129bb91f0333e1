""" Parse the Makefile style dependency lists that "cc -M" writes """
import re

_target_pat = re.compile(r".+:")
_spaces_pat = re.compile(r"  +")
# A path component other than ".." followed by "/.."
_dotdot_pat = re.compile(r"(?<![^/])(?!\.\.(?:/|$))[^/\s]+/\.\.(?:/|$)")
# A "./" component
_dot_pat = re.compile(r"(?<![^/])\./")


def parse_make_deps(deps):
    """ Turn the output of "cc -M header.h" into a list of header paths.

        The output will be something like
            header.o: header.h /usr/include/stdio.h \\
              /usr/include/features.h ../include/../include/local.h
        Line continuations are joined, the "target:" element is thrown away
        and the remaining paths are split apart and normalised.
        The order of first appearance is kept.  Duplicates are not removed.
    """
    # remove line breaks and line concatenators
    deps = deps.replace("\n", "").replace("\\", "")
    # remove the Makefile "target:" element
    deps = _target_pat.sub("", deps)
    # remove redundant spaces
    deps = _spaces_pat.sub(" ", deps)

    return [_normalise(token) for token in deps.split()]


def _normalise(path):
    """ Resolve "dir/.." and "./" redirections in a dependency path """
    # "a/b/../../c.h" needs one pass per level
    collapsed = _dotdot_pat.sub("", path)
    while collapsed != path:
        path = collapsed
        collapsed = _dotdot_pat.sub("", path)
    return _dot_pat.sub("", path)
