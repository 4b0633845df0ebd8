"""
XML parsing into ElementTree elements.

Expat runs in non-namespace mode so prefixed tag names ("a:item") and
xmlns declarations come through as ordinary names and attributes instead
of being rewritten into "{uri}local" form.
"""

import xml.etree.ElementTree as ET
from xml.parsers import expat

from .errors import ParseError


def parse_xml(text: str) -> ET.Element:
    """Parse XML text and return the root element.

    Raises ParseError carrying expat's diagnostic when the document is
    not well-formed.
    """
    builder = ET.TreeBuilder()
    parser = expat.ParserCreate()
    parser.buffer_text = True
    parser.StartElementHandler = builder.start
    parser.EndElementHandler = builder.end
    parser.CharacterDataHandler = builder.data

    try:
        parser.Parse(text, True)
    except expat.ExpatError as e:
        raise ParseError(str(e), line=e.lineno, column=e.offset) from e

    return builder.close()
