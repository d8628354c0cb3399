# -*- coding: utf-8 -*-

import binascii
import datetime
import posixpath
import re

from .xmlwriter import XMLWriter, xmlConvertFloat, DEFAULT_FLOAT_PRECISION


# files that are written even when they hold no data
keepEmptyPlists = frozenset([
    "metainfo.plist",
    "layercontents.plist",
    "contents.plist",
])


def renderPropertyList(data, fileName=None, **writerOptions):
    """
    Get the normalized text for a property list object.

    fileName selects the file specific normalization. The
    data is not modified.
    """
    preprocessor = plistPreprocessor(fileName)
    if preprocessor is not None and isinstance(data, dict):
        data = preprocessor(
            dict(data),
            writerOptions.get("floatPrecision", DEFAULT_FLOAT_PRECISION))
    writer = XMLWriter(isPropertyList=True, **writerOptions)
    writer.beginElement("plist", attrs=dict(version="1.0"))
    writer.propertyListObject(data)
    writer.endElement("plist")
    writer.raw("")
    return writer.getText()


def plistPreprocessor(fileName):
    if fileName is None:
        return None
    baseName = posixpath.basename(fileName)
    if fileName == "fontinfo.plist":
        return normalizeFontInfoGuidelines
    elif baseName == "layerinfo.plist":
        return normalizeLayerInfoColor
    return None


def shouldWritePlist(data, fileName):
    return bool(data) or posixpath.basename(fileName) in keepEmptyPlists


# -------------------
# File Specific Rules
# -------------------

def normalizeFontInfoGuidelines(obj, floatPrecision=DEFAULT_FLOAT_PRECISION):
    """
    - Follow general guideline normalization rules.
    - Leave a guidelines value that isn't a list as it is.
    """
    guidelines = obj.get("guidelines")
    if not guidelines or not isinstance(guidelines, list):
        return obj
    normalized = []
    for guideline in guidelines:
        if not isinstance(guideline, dict):
            continue
        guideline = normalizeDictGuideline(guideline)
        if guideline is None:
            continue
        if "color" in guideline:
            color = normalizeColorString(guideline.pop("color"), floatPrecision)
            if color is not None:
                guideline["color"] = color
        normalized.append(guideline)
    obj["guidelines"] = normalized
    return obj


def normalizeLayerInfoColor(obj, floatPrecision=DEFAULT_FLOAT_PRECISION):
    """
    - Normalize the color if specified.
    """
    if "color" in obj:
        color = normalizeColorString(obj.pop("color"), floatPrecision)
        if color is not None:
            obj["color"] = color
    return obj


def normalizeDictGuideline(guideline):
    """
    - Don't write if angle is defined but either x or y are not defined.
    - Don't write if both x and y are defined but angle is not defined.
      However <x=300 y=0> or <x=0 y=300> are allowed, and the 0 becomes None.
    - Keep the color as it is. It is normalized when written.
    """
    numbers = {}
    for attr in ("x", "y", "angle"):
        value = guideline.get(attr)
        if value is not None:
            try:
                value = float(value)
            except (TypeError, ValueError):
                return None
        numbers[attr] = value
    x, y, angle = numbers["x"], numbers["y"], numbers["angle"]
    if angle is None:
        if x == 0 and y is not None:
            x = None
        if y == 0 and x is not None:
            y = None
    if x is None and y is None:
        return None
    if (x is None or y is None) and angle is not None:
        return None
    if (x is not None and y is not None) and angle is None:
        return None
    normalized = {}
    for attr, value in (("x", x), ("y", y), ("angle", angle)):
        if value is not None:
            normalized[attr] = value
    for attr in ("name", "color", "identifier"):
        value = guideline.get(attr)
        if value is not None:
            normalized[attr] = value
    return normalized


def normalizeColorString(value, floatPrecision=DEFAULT_FLOAT_PRECISION):
    """
    - Write the string as comma separated numbers, following the
      number normalization rules.
    - Return None for anything that isn't four numbers between 0 and 1.
    """
    if not isinstance(value, str) or value.count(",") != 3:
        return None
    try:
        channels = [float(i) for i in value.split(",")]
    except ValueError:
        return None
    if any(c < 0 or c > 1 for c in channels):
        return None
    return ",".join(xmlConvertFloat(c, floatPrecision) for c in channels)


# -----------------------
# Property List Elements
# -----------------------

_dateParser = re.compile(r"(?P<year>\d\d\d\d)(?:-(?P<month>\d\d)"
                         r"(?:-(?P<day>\d\d)(?:T(?P<hour>\d\d)"
                         r"(?::(?P<minute>\d\d)"
                         r"(?::(?P<second>\d\d))?)?)?)?)?Z")


def dateFromString(text):
    match = _dateParser.match(text or "")
    if match is None:
        raise ValueError(f"Invalid date: {text!r}")
    gd = match.groupdict()
    values = []
    for key in ("year", "month", "day", "hour", "minute", "second"):
        value = gd[key]
        if value is None:
            break
        values.append(int(value))
    # datetime needs at least a month and a day
    while len(values) < 3:
        values.append(1)
    return datetime.datetime(*values)


def convertPlistElementToObject(element):
    """
    Convert a property list element, as found
    inside a GLIF lib, to a Python object.
    """
    tag = element.tag
    if tag == "array":
        return [convertPlistElementToObject(subElement) for subElement in element]
    elif tag == "dict":
        obj = {}
        key = None
        for subElement in element:
            if subElement.tag == "key":
                key = subElement.text or ""
            elif key is not None:
                obj[key] = convertPlistElementToObject(subElement)
                key = None
        return obj
    elif tag == "string":
        return element.text or ""
    elif tag == "data":
        if not element.text:
            return b""
        return binascii.a2b_base64(element.text.encode("ascii"))
    elif tag == "date":
        return dateFromString(element.text)
    elif tag == "true":
        return True
    elif tag == "false":
        return False
    elif tag == "real":
        return float(element.text)
    elif tag == "integer":
        return int(element.text)
    return None
