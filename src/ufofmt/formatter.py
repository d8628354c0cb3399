# -*- coding: utf-8 -*-

import os
import logging
from collections import namedtuple

from .codec import UFOCodec, WriteOptions
from .errors import DecodeError, EncodeError, ErrorKind, UFOFormatError
from .paths import resolveOutputPath
from .quotes import rewriteTreeQuoteChar
from .xmlwriter import DEFAULT_FLOAT_PRECISION


log = logging.getLogger(__name__)

defaultCodec = UFOCodec()


_FormatOptions = namedtuple(
    "FormatOptions",
    ["uniqueFileName", "uniqueExtension", "singleQuotes", "indentWithSpace",
     "indentNumber", "floatPrecision", "quotePostPass"],
    defaults=[None, None, False, False, 2, DEFAULT_FLOAT_PRECISION, False])


class FormatOptions(_FormatOptions):

    """
    The formatting settings shared by every job in a batch.

    - indentNumber must be between 1 and 4.
    - floatPrecision is a number of decimals, None disables rounding.
    - quotePostPass writes double quotes and patches the XML
      declarations of the written files afterwards.
    """

    __slots__ = ()

    def __new__(cls, *args, **kwargs):
        self = super().__new__(cls, *args, **kwargs)
        if not 1 <= self.indentNumber <= 4:
            raise ValueError("indentation char number must have a value between 1 - 4")
        if self.floatPrecision is not None and self.floatPrecision < 0:
            raise ValueError("float precision must be >= 0 or None (no round)")
        return self

    @property
    def whitespace(self):
        return (" " if self.indentWithSpace else "\t") * self.indentNumber

    @property
    def quoteChar(self):
        return "'" if self.singleQuotes else '"'


class JobOutcome(namedtuple("JobOutcome", ["ufoPath", "outputPath", "error"])):

    """
    The result of formatting one UFO: the output path
    on success or a UFOFormatError on failure.
    """

    __slots__ = ()

    @classmethod
    def success(cls, ufoPath, outputPath):
        return cls(ufoPath, outputPath, None)

    @classmethod
    def failure(cls, ufoPath, error):
        return cls(ufoPath, None, error)

    @property
    def ok(self):
        return self.error is None


def formatUFO(ufoPath, options=None, codec=None):
    """
    Format a single UFO and report how it went.

    Errors never escape: every failure is returned
    as the outcome of the job.
    """
    ufoPath = os.fspath(ufoPath)
    try:
        outputPath = normalizeUFO(ufoPath, options, codec)
    except UFOFormatError as e:
        log.debug("Formatting %s failed: %s", ufoPath, e)
        return JobOutcome.failure(ufoPath, e)
    return JobOutcome.success(ufoPath, outputPath)


def normalizeUFO(ufoPath, options=None, codec=None):
    """
    Read the UFO at ufoPath, write it back in normalized
    form and return the path it was written to.
    Raises UFOFormatError.
    """
    if options is None:
        options = FormatOptions()
    if codec is None:
        codec = defaultCodec
    # validate
    if not os.path.isdir(ufoPath):
        raise UFOFormatError(ErrorKind.INVALID_PATH, ufoPath,
                             "not a valid UFO directory path")
    try:
        outputPath = resolveOutputPath(
            ufoPath, options.uniqueFileName, options.uniqueExtension)
    except ValueError as e:
        raise UFOFormatError.fromException(ErrorKind.INVALID_PATH, ufoPath, e) from e
    postPass = options.singleQuotes and (
        options.quotePostPass or not codec.supportsQuoteChar)
    writeOptions = WriteOptions(
        whitespace=options.whitespace,
        quoteChar='"' if postPass else options.quoteChar,
        floatPrecision=options.floatPrecision)
    # decode
    log.debug('Formatting "%s".', ufoPath)
    try:
        font = codec.load(ufoPath)
    except DecodeError as e:
        raise UFOFormatError.fromException(ErrorKind.READ, ufoPath, e) from e
    # encode
    try:
        codec.save(font, outputPath, writeOptions)
    except EncodeError as e:
        raise UFOFormatError.fromException(ErrorKind.WRITE, outputPath, e) from e
    # post process
    if postPass:
        count = rewriteTreeQuoteChar(outputPath)
        log.debug('Patched declaration quotes in %d files in "%s".', count, outputPath)
    return outputPath
