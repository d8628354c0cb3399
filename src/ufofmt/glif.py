# -*- coding: utf-8 -*-

from xml.etree import ElementTree as ET

from .errors import DecodeError
from .plists import (
    convertPlistElementToObject, normalizeColorString, normalizeDictGuideline)
from .xmlwriter import XMLWriter, xmlEscapeText, DEFAULT_FLOAT_PRECISION


pointTypes = ("move", "line", "curve", "qcurve", "offcurve")

_glifDefaultTransformation = dict(
    xScale=1,
    xyScale=0,
    yxScale=0,
    yScale=1,
    xOffset=0,
    yOffset=0
)


class Glyph(object):

    """
    The decoded content of a GLIF file.

    Invalid data is dropped while decoding. Colors are
    kept as they were found and normalized when written
    because their formatting depends on the float precision.
    """

    def __init__(self, name, formatVersion, formatMinor=0):
        self.name = name
        self.formatVersion = formatVersion
        self.formatMinor = formatMinor
        self.unicodes = []
        self.advance = {}
        self.image = None
        self.outline = []
        self.anchors = []
        self.guidelines = []
        self.lib = None
        self.note = None

    def __eq__(self, other):
        if not isinstance(other, Glyph):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return f"<Glyph {self.name!r} format {self.formatVersion}>"


# -------
# Reading
# -------

def readGlif(data, glifPath=None):
    """
    Decode GLIF data (bytes or text) into a Glyph.
    """
    try:
        tree = ET.fromstring(data)
    except ET.ParseError as e:
        raise DecodeError(_message("Invalid GLIF XML", glifPath)) from e
    formatVersion = tree.attrib.get("format")
    if formatVersion is None:
        raise DecodeError(_message("Undefined GLIF format", glifPath))
    try:
        formatVersion = int(formatVersion)
        formatMinor = int(tree.attrib.get("formatMinor", 0))
    except ValueError as e:
        raise DecodeError(_message("Invalid GLIF format", glifPath)) from e
    glyph = Glyph(tree.attrib.get("name"), formatVersion, formatMinor)
    try:
        for element in tree:
            _readTopLevelElement(glyph, element)
    except (TypeError, ValueError) as e:
        raise DecodeError(_message("Invalid GLIF data", glifPath)) from e
    return glyph


def _message(text, glifPath):
    if glifPath is not None:
        text += ": %s" % glifPath
    return text


def _readTopLevelElement(glyph, element):
    tag = element.tag
    if tag == "unicode":
        value = readUnicode(element)
        if value is not None:
            glyph.unicodes.append(value)
    elif tag == "advance":
        glyph.advance = readAdvance(element)
    elif tag == "image":
        if glyph.formatVersion >= 2:
            glyph.image = readImage(element)
    elif tag == "outline":
        glyph.outline = readOutline(element, glyph.formatVersion)
    elif tag == "anchor":
        if glyph.formatVersion >= 2:
            anchor = readAnchor(element)
            if anchor is not None:
                glyph.anchors.append(anchor)
    elif tag == "guideline":
        if glyph.formatVersion >= 2:
            guideline = normalizeDictGuideline(element.attrib)
            if guideline is not None:
                glyph.guidelines.append(guideline)
    elif tag == "lib":
        glyph.lib = readLib(element)
    elif tag == "note":
        glyph.note = readNote(element)


def readUnicode(element):
    """
    - Ignore the element if the hex attribute is missing or invalid.
    - Use an all uppercase, zero padded string.
    """
    value = element.attrib.get("hex")
    if not value:
        return None
    try:
        return f"{int(value, 16):04X}"
    except ValueError:
        return None


def readAdvance(element):
    """
    - Drop default values (width=0, height=0).
    - Ignore values that can't be converted to a number.
    """
    try:
        width = float(element.attrib.get("width", "0"))
        height = float(element.attrib.get("height", "0"))
    except ValueError:
        return {}
    attrs = {}
    if width:
        attrs["width"] = width
    if height:
        attrs["height"] = height
    return attrs


def readImage(element):
    """
    - Ignore the element if fileName is not defined.
    - Drop default transformation values.
    """
    fileName = element.attrib.get("fileName")
    if not fileName:
        return None
    attrs = dict(fileName=fileName)
    attrs.update(readTransformation(element))
    color = element.attrib.get("color")
    if color is not None:
        attrs["color"] = color
    return attrs


def readAnchor(element):
    """
    - Ignore the element if x or y are missing or not numbers.
    """
    x = element.attrib.get("x")
    y = element.attrib.get("y")
    if not x or not y:
        return None
    try:
        attrs = dict(x=float(x), y=float(y))
    except ValueError:
        return None
    for attr in ("name", "color", "identifier"):
        value = element.attrib.get(attr)
        if value is not None:
            attrs[attr] = value
    return attrs


def readLib(element):
    """
    - Ignore an empty element.
    """
    if not len(element):
        return None
    obj = convertPlistElementToObject(element[0])
    return obj or None


def readNote(element):
    """
    - Ignore a blank note.
    """
    value = element.text
    if not value or not value.strip():
        return None
    return value


def readTransformation(element):
    """
    - Drop default and non numeric values.
    """
    attrs = {}
    for attr, default in _glifDefaultTransformation.items():
        value = element.attrib.get(attr, default)
        try:
            value = float(value)
        except ValueError:
            continue
        if value != default:
            attrs[attr] = value
    return attrs


def readOutline(element, formatVersion):
    """
    - Drop empty contours and components.
    - Keep contour and component order.
    - In format 1, move implied anchors to the end.
    - Ignore unknown subelements.
    """
    outline = []
    anchors = []
    for subElement in element:
        if subElement.tag == "contour":
            contour = readContour(subElement, formatVersion)
            if contour is None:
                continue
            if formatVersion == 1 and _isImpliedAnchor(contour):
                anchors.append(contour)
            else:
                outline.append(contour)
        elif subElement.tag == "component":
            component = readComponent(subElement, formatVersion)
            if component is not None:
                outline.append(component)
    return outline + anchors


def _isImpliedAnchor(contour):
    points = contour["points"]
    return len(points) == 1 and points[0].get("type") == "move"


def readContour(element, formatVersion):
    """
    - Drop the contour if any point is invalid.
    - Ignore unknown subelements.
    """
    points = []
    for subElement in element:
        if subElement.tag != "point":
            continue
        attrs = readPoint(subElement, formatVersion)
        if not attrs:
            return None
        points.append(attrs)
    if not points:
        return None
    contour = dict(type="contour", points=points)
    identifier = element.attrib.get("identifier")
    if formatVersion >= 2 and identifier is not None:
        contour["identifier"] = identifier
    return contour


def readPoint(element, formatVersion):
    """
    - Invalid if x or y is undefined or not a number.
    - Invalid for unknown point types.
    - Drop the default point type (offcurve).
    - Only keep smooth="yes", and never for offcurves.
    """
    x = element.attrib.get("x")
    y = element.attrib.get("y")
    if not x or not y:
        return None
    try:
        attrs = dict(x=float(x), y=float(y))
    except ValueError:
        return None
    pointType = element.attrib.get("type", "offcurve")
    if pointType not in pointTypes:
        return None
    if pointType != "offcurve":
        attrs["type"] = pointType
        if element.attrib.get("smooth") == "yes":
            attrs["smooth"] = "yes"
    name = element.attrib.get("name")
    if name is not None:
        attrs["name"] = name
    identifier = element.attrib.get("identifier")
    if formatVersion >= 2 and identifier is not None:
        attrs["identifier"] = identifier
    return attrs


def readComponent(element, formatVersion):
    """
    - Drop the component if base is not defined.
    - Drop default transformation values.
    """
    base = element.attrib.get("base")
    if not base:
        return None
    component = dict(type="component", base=base)
    component.update(readTransformation(element))
    identifier = element.attrib.get("identifier")
    if formatVersion >= 2 and identifier is not None:
        component["identifier"] = identifier
    return component


# -------
# Writing
# -------

def writeGlif(glyph, floatPrecision=DEFAULT_FLOAT_PRECISION, **writerOptions):
    """
    Get the normalized text for a Glyph.
    """
    writer = XMLWriter(floatPrecision=floatPrecision, **writerOptions)
    attrs = dict(name=glyph.name, format=glyph.formatVersion)
    if glyph.formatMinor:
        attrs["formatMinor"] = glyph.formatMinor
    writer.beginElement("glyph", attrs=attrs)
    for value in glyph.unicodes:
        writer.simpleElement("unicode", attrs=dict(hex=value))
    if glyph.advance:
        writer.simpleElement("advance", attrs=glyph.advance)
    if glyph.image is not None:
        writer.simpleElement(
            "image", attrs=_withColor(glyph.image, floatPrecision))
    _writeOutline(glyph.outline, writer)
    for anchor in glyph.anchors:
        writer.simpleElement("anchor", attrs=_withColor(anchor, floatPrecision))
    for guideline in glyph.guidelines:
        writer.simpleElement(
            "guideline", attrs=_withColor(guideline, floatPrecision))
    _writeLib(glyph.lib, writer, floatPrecision)
    if glyph.note is not None:
        writer.simpleElement("note", value=xmlEscapeText(glyph.note))
    writer.endElement("glyph")
    writer.raw("")
    return writer.getText()


def _withColor(attrs, floatPrecision):
    if "color" not in attrs:
        return attrs
    attrs = dict(attrs)
    attrs["color"] = normalizeColorString(attrs["color"], floatPrecision)
    return attrs


def _writeOutline(outline, writer):
    if not outline:
        return
    writer.beginElement("outline")
    for obj in outline:
        attrs = {k: v for k, v in obj.items() if k not in ("type", "points")}
        if obj["type"] == "contour":
            writer.beginElement("contour", attrs=attrs)
            for point in obj["points"]:
                writer.simpleElement("point", attrs=point)
            writer.endElement("contour")
        else:
            writer.simpleElement("component", attrs=attrs)
    writer.endElement("outline")


def _writeLib(lib, writer, floatPrecision):
    if not lib:
        return
    if isinstance(lib, dict) and "public.markColor" in lib:
        lib = dict(lib)
        color = normalizeColorString(lib.pop("public.markColor"), floatPrecision)
        if color is not None:
            lib["public.markColor"] = color
        if not lib:
            return
    writer.beginElement("lib")
    writer.propertyListObject(lib)
    writer.endElement("lib")
