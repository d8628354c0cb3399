# -*- coding: utf-8 -*-

import os
import plistlib
import posixpath
import logging
from collections import OrderedDict, namedtuple
from xml.parsers.expat import ExpatError

from .errors import DecodeError, EncodeError
from .glif import readGlif, writeGlif
from .paths import (
    clearDirectory, samePath, subpathJoin, subpathReadBytes, subpathRemoveFile,
    subpathWriteBytes, subpathWriteText)
from .plists import renderPropertyList, shouldWritePlist
from .xmlwriter import DEFAULT_FLOAT_PRECISION, DEFAULT_INDENT


log = logging.getLogger(__name__)

# directories whose content is copied without being parsed
opaqueDirectories = frozenset(["data", "images"])

supportedFormatVersions = (1, 2, 3)

# malformed values that reach the readers and writers
encodingErrors = (TypeError, ValueError, AttributeError, RecursionError)


WriteOptions = namedtuple(
    "WriteOptions", ["whitespace", "quoteChar", "floatPrecision"],
    defaults=[DEFAULT_INDENT, '"', DEFAULT_FLOAT_PRECISION])


class Font(object):

    """
    The files of a UFO, decoded.

    All keys are paths relative to the UFO, using "/"
    as the separator.
    """

    def __init__(self, path, formatVersion):
        self.path = path
        self.formatVersion = formatVersion
        self.plists = OrderedDict()
        self.glyphs = OrderedDict()
        self.resources = OrderedDict()
        self.directories = []

    def __repr__(self):
        return f"<Font {self.path!r} UFO {self.formatVersion}>"


class UFOCodec(object):

    """
    Reads a UFO into a Font and writes a Font to
    normalized files.
    """

    supportsQuoteChar = True

    def load(self, ufoPath):
        return load(ufoPath)

    def save(self, font, path, options=None):
        return save(font, path, options)


# -------
# Reading
# -------

def load(ufoPath):
    """
    Read and decode every file in a UFO.
    """
    formatVersion = readFormatVersion(ufoPath)
    font = Font(ufoPath, formatVersion)
    for relativePath, isDirectory in _listTree(ufoPath):
        if isDirectory:
            font.directories.append(relativePath)
            continue
        data = _readFile(ufoPath, relativePath)
        kind = fileKind(relativePath)
        try:
            if kind == "plist":
                font.plists[relativePath] = decodePlist(data, relativePath)
            elif kind == "glif":
                font.glyphs[relativePath] = readGlif(data, relativePath)
            else:
                font.resources[relativePath] = data
        except encodingErrors as e:
            raise DecodeError(f"Could not decode {relativePath}") from e
    log.debug('Loaded "%s": %d property lists, %d glyphs, %d other files.',
              ufoPath, len(font.plists), len(font.glyphs), len(font.resources))
    return font


def readFormatVersion(ufoPath):
    if not os.path.isfile(subpathJoin(ufoPath, "metainfo.plist")):
        raise DecodeError(f"Required metainfo.plist file not in {ufoPath}")
    metaInfo = decodePlist(_readFile(ufoPath, "metainfo.plist"), "metainfo.plist")
    formatVersion = metaInfo.get("formatVersion") if isinstance(metaInfo, dict) else None
    if formatVersion is None:
        raise DecodeError(f"Required formatVersion value not defined "
                          f"in metainfo.plist in {ufoPath}")
    try:
        formatVersion = int(formatVersion)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Required formatVersion value not properly "
                          f"formatted in metainfo.plist in {ufoPath}") from e
    if formatVersion not in supportedFormatVersions:
        raise DecodeError(f"Unsupported UFO format "
                          f"({formatVersion}) in {ufoPath}")
    return formatVersion


def fileKind(relativePath):
    """
    Classify a file as "plist", "glif" or "resource".
    """
    topLevel = relativePath.split("/", 1)[0]
    if "/" in relativePath and topLevel in opaqueDirectories:
        return "resource"
    extension = posixpath.splitext(relativePath)[1]
    if extension == ".plist":
        return "plist"
    elif extension == ".glif":
        return "glif"
    return "resource"


def decodePlist(data, relativePath):
    try:
        return plistlib.loads(data)
    except (plistlib.InvalidFileException, ExpatError, TypeError, ValueError) as e:
        raise DecodeError(f"Invalid property list: {relativePath}") from e


def _listTree(ufoPath):
    def onError(error):
        raise DecodeError(f"Could not list {error.filename}") from error

    for directory, subdirectories, fileNames in os.walk(ufoPath, onerror=onError):
        subdirectories.sort()
        relativeDirectory = os.path.relpath(directory, ufoPath)
        parts = [] if relativeDirectory == os.curdir else relativeDirectory.split(os.sep)
        for subdirectory in subdirectories:
            yield "/".join(parts + [subdirectory]), True
        for fileName in sorted(fileNames):
            yield "/".join(parts + [fileName]), False


def _readFile(ufoPath, relativePath):
    try:
        return subpathReadBytes(ufoPath, *relativePath.split("/"))
    except OSError as e:
        raise DecodeError(f"Could not read {relativePath}") from e


# -------
# Writing
# -------

def save(font, path, options=None):
    """
    Write a Font to path.

    Writing to a path other than the one the font was loaded
    from replaces whatever is at that path with a complete copy.
    """
    if options is None:
        options = WriteOptions()
    writerOptions = dict(
        indent=options.whitespace,
        quoteChar=options.quoteChar,
        floatPrecision=options.floatPrecision)
    try:
        if not samePath(font.path, path):
            clearDirectory(path)
        os.makedirs(path, exist_ok=True)
        for relativePath in font.directories:
            os.makedirs(subpathJoin(path, *relativePath.split("/")), exist_ok=True)
        for relativePath, data in font.plists.items():
            subpath = relativePath.split("/")
            if not shouldWritePlist(data, relativePath):
                subpathRemoveFile(path, *subpath)
                continue
            try:
                text = renderPropertyList(data, relativePath, **writerOptions)
            except encodingErrors as e:
                raise EncodeError(f"Could not encode {relativePath}") from e
            _writeText(text, path, subpath)
        for relativePath, glyph in font.glyphs.items():
            try:
                text = writeGlif(glyph, **writerOptions)
            except encodingErrors as e:
                raise EncodeError(f"Could not encode {relativePath}") from e
            _writeText(text, path, relativePath.split("/"))
        for relativePath, data in font.resources.items():
            subpathWriteBytes(data, path, *relativePath.split("/"))
    except (OSError, UnicodeError) as e:
        raise EncodeError(f"Could not write {path}") from e


def _writeText(text, path, subpath):
    if subpathWriteText(text, path, *subpath):
        log.debug('Writing "%s".', "/".join(subpath))
