class FfiPrepError(Exception):
    """ Base class of the errors raised by ffiprep """


class NoCompilerError(FfiPrepError):
    """ None of the candidate compilers answered the version probe """

    def __init__(self, message="No usable C compiler was found"):
        FfiPrepError.__init__(self, message)


class PreprocessError(FfiPrepError):
    """ The compiler produced no macro dump or no declaration dump """

    def __init__(self, message, commands=None):
        FfiPrepError.__init__(self, message)
        if commands is None:
            commands = []
        self.commands = commands
