# -*- coding: utf-8 -*-

import logging

from .errors import ErrorKind, UFOFormatError
from .paths import walkFormattableFiles


log = logging.getLogger(__name__)

xmlDeclarationStart = b"<?xml"


def rewriteQuoteChar(data, quoteChar=b"'"):
    """
    Swap the quotes around the version and encoding
    values of the XML declaration on the first line.

    The declaration is not parsed again. The first four
    double quotes in the first line are replaced and every
    other byte is left as it is. Data that doesn't start
    with a declaration holding two quoted values is
    returned unchanged.
    """
    if not data.startswith(xmlDeclarationStart):
        return data
    lineEnd = data.find(b"\n")
    if lineEnd == -1:
        lineEnd = len(data)
    positions = []
    index = data.find(b'"', 0, lineEnd)
    while index != -1 and len(positions) < 4:
        positions.append(index)
        index = data.find(b'"', index + 1, lineEnd)
    if len(positions) < 4:
        return data
    patched = bytearray(data)
    for index in positions:
        patched[index:index + 1] = quoteChar
    return bytes(patched)


def rewriteFileQuoteChar(path):
    """
    Patch the declaration quotes of a single file in place.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise UFOFormatError.fromException(ErrorKind.READ, path, e) from e
    patched = rewriteQuoteChar(data)
    if patched == data:
        return False
    try:
        with open(path, "wb") as f:
            f.write(patched)
    except OSError as e:
        raise UFOFormatError.fromException(ErrorKind.WRITE, path, e) from e
    return True


def rewriteTreeQuoteChar(rootPath):
    """
    Patch every .glif and .plist file under rootPath.
    The first failing file stops the pass.
    """
    count = 0
    for path in walkFormattableFiles(rootPath):
        log.debug('Patching declaration quotes in "%s".', path)
        if rewriteFileQuoteChar(path):
            count += 1
    return count
