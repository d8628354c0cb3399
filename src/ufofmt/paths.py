# -*- coding: utf-8 -*-

import os
import shutil
import logging


log = logging.getLogger(__name__)

postProcessExtensions = frozenset([".glif", ".plist"])


# ------------------
# Output Path Policy
# ------------------

def resolveOutputPath(ufoPath, uniqueFileName=None, uniqueExtension=None):
    """
    Get the directory a UFO will be written to.

    - Return the input path when neither override is given.
    - Append uniqueFileName directly after the file stem.
    - Replace the extension with uniqueExtension, with or
      without a leading period. An empty string removes
      the extension.
    - Keep the original extension otherwise.

    >>> resolveOutputPath("one/two/three.ufo", "-new", "fmt")
    'one/two/three-new.fmt'
    """
    ufoPath = os.fspath(ufoPath)
    if uniqueFileName is None and uniqueExtension is None:
        return ufoPath
    # drops trailing separators and "." components
    parent, name = os.path.split(os.path.normpath(ufoPath))
    if name in ("", ".", ".."):
        raise ValueError(f"{ufoPath!r} has no file name to derive an output path from")
    stem, extension = os.path.splitext(name)
    if uniqueFileName is not None:
        stem += uniqueFileName
    if uniqueExtension is not None:
        if uniqueExtension.startswith("."):
            uniqueExtension = uniqueExtension[1:]
        extension = "." + uniqueExtension if uniqueExtension else ""
    return os.path.join(parent, stem + extension)


# ------------
# Tree Walking
# ------------

def walkFormattableFiles(rootPath):
    """
    Yield the paths of all .glif and .plist files under rootPath.

    Only the final extension is compared and the comparison
    is case sensitive. Directories that can't be listed are
    skipped.
    """
    for directory, _subdirectories, fileNames in os.walk(rootPath):
        for fileName in fileNames:
            if os.path.splitext(fileName)[1] in postProcessExtensions:
                yield os.path.join(directory, fileName)


# ---------------
# Path Operations
# ---------------

def subpathJoin(ufoPath, *subpath):
    """
    Join path parts.
    """
    return os.path.join(ufoPath, *subpath)


def subpathReadBytes(ufoPath, *subpath):
    """
    Read the contents of a file.
    """
    with open(subpathJoin(ufoPath, *subpath), "rb") as f:
        return f.read()


def subpathWriteBytes(data, ufoPath, *subpath):
    """
    Write data to a file, creating missing directories.

    This will only modify the file if the
    file contains data that is different
    from the new data. Returns True when the
    file was written.
    """
    path = subpathJoin(ufoPath, *subpath)
    if os.path.isfile(path):
        with open(path, "rb") as f:
            if f.read() == data:
                return False
    else:
        os.makedirs(os.path.dirname(path) or os.curdir, exist_ok=True)
    with open(path, "wb") as f:
        f.write(data)
    return True


def subpathWriteText(text, ufoPath, *subpath):
    """
    Write text as UTF-8 with Unix LF line endings.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return subpathWriteBytes(text.encode("utf-8"), ufoPath, *subpath)


def subpathRemoveFile(ufoPath, *subpath):
    """
    Remove a file if it exists.
    """
    path = subpathJoin(ufoPath, *subpath)
    if os.path.isfile(path):
        log.debug('Removing empty "%s".', path)
        os.remove(path)


def samePath(path1, path2):
    return os.path.normcase(os.path.abspath(path1)) == \
        os.path.normcase(os.path.abspath(path2))


def clearDirectory(path):
    """
    Remove an existing output directory before a UFO is copied to it.
    """
    if os.path.lexists(path):
        log.debug('Removing existing "%s".', path)
        shutil.rmtree(path)
