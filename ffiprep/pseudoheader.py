import os
from io import open

PSEUDOHEADER_FILENAME = "tmp_pseudoheader.h"


def headerize(headers, global_includes):
    """ Produce the text of a C header that includes all the given headers.

        headerize(["stdio.h", "math.h"], True) produces
            #include <stdio.h>
            #include <math.h>

        headerize(["vim.h", "memory.h"], False) produces
            #include "vim.h"
            #include "memory.h"
    """
    if global_includes:
        pre, post = "<", ">"
    else:
        pre, post = '"', '"'

    return "\n".join("".join(["#include ", pre, str(hdr), post]) for hdr in headers)


class PseudoHeader:
    """ Write a pseudo-header into the current working directory for the
        lifetime of a with block.  The file is removed on leaving the block,
        even when the block raised.  The name is fixed so two of these must
        not be alive in the same directory at once.
    """

    def __init__(self, previous_defines, headers, filename=PSEUDOHEADER_FILENAME, verbose=0):
        self.previous_defines = previous_defines
        self.headers = list(headers)
        self.filename = filename
        self.verbose = verbose

    def text(self):
        return "".join([self.previous_defines, "\n", headerize(self.headers, False)])

    def __enter__(self):
        try:
            with open(self.filename, "w", encoding="utf-8") as ff:
                ff.write(self.text())
                ff.flush()
        except BaseException:
            self._remove()
            raise
        if self.verbose >= 6:
            print("PseudoHeader wrote " + self.filename + ":")
            print(self.text())
        return self.filename

    def __exit__(self, exc_type, exc_value, traceback):
        self._remove()
        return False

    def _remove(self):
        try:
            os.remove(self.filename)
        except FileNotFoundError:
            pass
