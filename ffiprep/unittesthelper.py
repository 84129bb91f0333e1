import configargparse
import os
import shutil
import subprocess
import tempfile
from io import open
import ffiprep.apptools
import ffiprep.git_utils
# The abbreviation "uth" is often used for this "unittesthelper"


def reset():
    delete_existing_parsers()
    ffiprep.apptools.resetcallbacks()
    ffiprep.git_utils.clear_cache()


def delete_existing_parsers():
    """ The singleton parsers supplied by configargparse
        don't play well with the unittest framework.
        This function will delete them so you are
        starting with a clean slate
    """
    configargparse._parsers = {}


def create_temp_config(tempdir=None, filename=None, extralines=None):
    """ User is responsible for removing the config file when
        they are finished
    """
    if not filename:
        tf_handle, filename = tempfile.mkstemp(suffix=".conf", text=True, dir=tempdir)
        os.close(tf_handle)
    elif tempdir:
        filename = os.path.join(tempdir, filename)

    with open(filename, "w") as ff:
        ff.write("attempts = 3\n")
        for line in extralines or []:
            ff.write(line + "\n")

    return filename


def write_file(filename, text):
    with open(filename, "w", encoding="utf-8") as ff:
        ff.write(text)


def which_cc():
    """ The C compiler that the integration tests may use, or None """
    for name in (os.environ.get("CC"), "cc", "gcc", "clang"):
        if not name:
            continue
        path = shutil.which(name.split()[0])
        if path is None:
            continue
        try:
            subprocess.run([path, "-v"], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL, check=True)
        except (subprocess.CalledProcessError, OSError):
            continue
        return path
    return None


class TempDirContext:
    def __enter__(self):
        self._origdir = os.getcwd()  # Save the current directory
        self._tmpdir = tempfile.mkdtemp()
        os.chdir(self._tmpdir)
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        os.chdir(self._origdir)  # Return to the original directory
        shutil.rmtree(self._tmpdir, ignore_errors=True)  # Cleanup the temporary directory


class EnvironmentContext:
    """ Set (or with a value of None, remove) environment variables
        for the lifetime of the with block
    """

    def __init__(self, flagsdict):
        self._flagsdict = flagsdict
        self._orig = {}

    def __enter__(self):
        for key, value in self._flagsdict.items():
            self._orig[key] = os.environ.get(key)
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        for key, value in self._orig.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
