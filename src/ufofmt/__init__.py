#! /usr/bin/env python3
# -*- coding: utf-8 -*-

try:
    from ._version import __version__
except ImportError:
    try:
        from setuptools_scm import get_version
        __version__ = get_version()
    except (ImportError, LookupError):
        __version__ = 'unknown'

from .errors import (  # noqa: E402
    ErrorKind, UFOFormatError, FontCodecError, DecodeError, EncodeError)
from .paths import resolveOutputPath, walkFormattableFiles  # noqa: E402
from .quotes import rewriteQuoteChar  # noqa: E402
from .codec import Font, UFOCodec, WriteOptions, load, save  # noqa: E402
from .formatter import FormatOptions, JobOutcome, formatUFO  # noqa: E402
from .dispatch import Reporter, batchSucceeded, formatUFOs  # noqa: E402
from .cli import main  # noqa: E402

__all__ = [
    "ErrorKind", "UFOFormatError", "FontCodecError", "DecodeError",
    "EncodeError", "resolveOutputPath", "walkFormattableFiles",
    "rewriteQuoteChar", "Font", "UFOCodec", "WriteOptions", "load", "save",
    "FormatOptions", "JobOutcome", "formatUFO", "Reporter", "batchSucceeded",
    "formatUFOs", "main",
]
