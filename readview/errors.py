""" readview errors """


class ReadViewError(Exception):
    """ Base class for readview failures. """


class RecordFormatError(ReadViewError, ValueError):
    """ Unsupported record format, or a format that lacks what the output needs. """


class RecordPipelineError(ReadViewError):
    """ Loading or saving alignment records failed. """

    def __init__(self, path, reason):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
