# -*- coding: utf-8 -*-

import binascii
import datetime

from .errors import EncodeError


DEFAULT_FLOAT_PRECISION = 10
DEFAULT_INDENT = "\t"

plistDocType = ("<!DOCTYPE plist PUBLIC \"-//Apple//DTD PLIST 1.0//EN\" "
                "\"http://www.apple.com/DTDs/PropertyList-1.0.dtd\">")
xmlTextMaxLineLength = 70
xmlLineBreak = "\n"
xmlAttributeOrder = {
    attr: index for index, attr in enumerate("""
name
base
format
fileName
x
y
angle
xScale
xyScale
yxScale
yScale
xOffset
yOffset
type
smooth
color
identifier
""".split())
}


def xmlDeclaration(quoteChar='"'):
    q = quoteChar
    return f"<?xml version={q}1.0{q} encoding={q}UTF-8{q}?>"


class XMLWriter(object):

    """
    Line based XML writer.

    indent is the whitespace written once per nesting level,
    quoteChar the character around the declaration values and
    floatPrecision the number of decimals floats are rounded
    to (None writes repr()).
    """

    def __init__(self, isPropertyList=False, declaration=True,
                 indent=DEFAULT_INDENT, quoteChar='"',
                 floatPrecision=DEFAULT_FLOAT_PRECISION):
        self._lines = []
        if declaration:
            self._lines.append(xmlDeclaration(quoteChar))
        if isPropertyList:
            self._lines.append(plistDocType)
        self.indent = indent
        self.floatPrecision = floatPrecision
        self._indentLevel = 0
        self._stack = []

    # text retrieval

    def getText(self):
        assert not self._stack
        return xmlLineBreak.join(self._lines)

    # writing

    def raw(self, line):
        if self._indentLevel:
            line = self.indent * self._indentLevel + line
        self._lines.append(line)

    def simpleElement(self, tag, attrs=None, value=None):
        attrs = self.attributesToString(attrs) if attrs else ""
        if attrs:
            line = "<%s %s" % (tag, attrs)
        else:
            line = "<%s" % tag
        if value is not None:
            line = "%s>%s</%s>" % (line, value, tag)
        else:
            line = "%s/>" % line
        self.raw(line)

    def beginElement(self, tag, attrs=None):
        attrs = self.attributesToString(attrs) if attrs else ""
        if attrs:
            line = "<%s %s>" % (tag, attrs)
        else:
            line = "<%s>" % tag
        self.raw(line)
        self._stack.append(tag)
        self._indentLevel += 1

    def endElement(self, tag):
        assert self._stack and self._stack[-1] == tag
        del self._stack[-1]
        self._indentLevel -= 1
        self.raw("</%s>" % tag)

    # property list

    def propertyListObject(self, data):
        if data is None:
            return
        if isinstance(data, (list, tuple)):
            self._plistArray(data)
        elif isinstance(data, dict):
            self._plistDict(data)
        elif isinstance(data, str):
            self.simpleElement("string", value=xmlEscapeText(data))
        elif isinstance(data, bool):
            self.simpleElement("true" if data else "false")
        elif isinstance(data, int):
            self.simpleElement("integer", value=xmlConvertInt(data))
        elif isinstance(data, float):
            text = self.convertFloat(data)
            try:
                self.simpleElement("integer", value=xmlConvertInt(int(text)))
            except ValueError:
                self.simpleElement("real", value=text)
        elif isinstance(data, bytes):
            self._plistData(data)
        elif isinstance(data, datetime.datetime):
            self.simpleElement("date", value=dateToString(data))
        else:
            raise EncodeError(f"Unknown data type in property list: "
                              f"{repr(type(data))}")

    def _plistArray(self, data):
        self.beginElement("array")
        for value in data:
            self.propertyListObject(value)
        self.endElement("array")

    def _plistDict(self, data):
        self.beginElement("dict")
        for key, value in sorted(data.items()):
            self.simpleElement("key", value=xmlEscapeText(key))
            self.propertyListObject(value)
        self.endElement("dict")

    def _plistData(self, data):
        data = encodeBase64(data, maxlinelength=xmlTextMaxLineLength)
        if not data:
            self.simpleElement("data", value="")
        else:
            self.beginElement("data")
            for line in data.decode("ascii").splitlines():
                self.raw(line)
            self.endElement("data")

    # support

    def convertFloat(self, value):
        return xmlConvertFloat(value, self.floatPrecision)

    def convertValue(self, value):
        if isinstance(value, float):
            return self.convertFloat(value)
        elif isinstance(value, int):
            return xmlConvertInt(value)
        return xmlEscapeAttribute(value)

    def attributesToString(self, attrs):
        """
        - Sort the known attributes in the preferred order.
        - Sort unknown attributes in alphabetical order and
          place them after the known attributes.
        - Format as space separated name="value".
        - Skip attributes without a value.
        """
        sorter = sorted(
            (xmlAttributeOrder.get(attr, 100), attr, value)
            for (attr, value) in attrs.items() if value is not None
        )
        return " ".join(
            "%s=\"%s\"" % (xmlEscapeAttribute(attr), self.convertValue(value))
            for _index, attr, value in sorter
        )


def xmlEscapeText(text):
    if text:
        text = text.replace("&", "&amp;")
        text = text.replace("<", "&lt;")
        text = text.replace(">", "&gt;")
    return text


def xmlEscapeAttribute(text):
    text = xmlEscapeText(text)
    return text.replace("\"", "&quot;")


def xmlConvertFloat(value, precision=DEFAULT_FLOAT_PRECISION):
    if precision is None:
        string = repr(value)
        if "e" in string:
            string = "%.16f" % value
    else:
        string = "%.*f" % (precision, value)
    if "." in string:
        string = string.rstrip("0")
        if string[-1] == ".":
            string = xmlConvertInt(int(string[:-1]))
    return string


def xmlConvertInt(value):
    return str(value)


def encodeBase64(s, maxlinelength=76):
    # base64.encodebytes() with a configurable line length
    maxbinsize = (maxlinelength // 4) * 3
    pieces = []
    for i in range(0, len(s), maxbinsize):
        pieces.append(binascii.b2a_base64(s[i: i + maxbinsize]))
    return b"".join(pieces)


def dateToString(data):
    return (f'{data.year:04d}-{data.month:02d}-'
            f'{data.day:02d}T{data.hour:02d}:'
            f'{data.minute:02d}:{data.second:02d}Z')
