# -*- coding: utf-8 -*-

from enum import Enum


class ErrorKind(Enum):
    INVALID_PATH = "invalid path error"
    READ = "read error"
    WRITE = "write error"


class UFOFormatError(Exception):
    """
    The failure of a single formatting job.

    The constructor arguments are kept as the exception args
    so that the error survives a round trip through pickle
    when it is sent back from a worker process.
    """

    def __init__(self, kind, path, message):
        super().__init__(kind, path, message)
        self.kind = kind
        self.path = path
        self.message = message

    def __str__(self):
        return f"{self.kind.value}: {self.path}: {self.message}"

    @classmethod
    def fromException(cls, kind, path, exc):
        return cls(kind, path, describeException(exc))


class FontCodecError(Exception):
    pass


class DecodeError(FontCodecError):
    pass


class EncodeError(FontCodecError):
    pass


def describeException(exc):
    """
    Render an exception and everything that caused it
    as a single line of text.
    """
    parts = [str(exc) or type(exc).__name__]
    seen = {id(exc)}
    cause = exc.__cause__ or exc.__context__
    while cause is not None and id(cause) not in seen:
        seen.add(id(cause))
        parts.append("caused by: " + (str(cause) or type(cause).__name__))
        cause = cause.__cause__ or cause.__context__
    return "; ".join(parts)
