"""
Exceptions raised by the conversion façade.
"""

from typing import Optional


class ConversionError(Exception):
    """Base class for all conversion failures."""


class EmptyInputError(ConversionError):
    """Input is empty or whitespace only."""

    def __init__(self, message: str = "XML content is empty"):
        super().__init__(message)


class MalformedInputError(ConversionError):
    """Input does not begin with a tag."""

    def __init__(self, message: str = "Invalid XML: Content must start with a tag"):
        super().__init__(message)


class ParseError(ConversionError):
    """The XML parser rejected the document as not well-formed."""

    def __init__(self, diagnostic: str, line: Optional[int] = None,
                 column: Optional[int] = None):
        self.diagnostic = diagnostic
        self.line = line
        self.column = column
        super().__init__(f"Invalid XML: {diagnostic}")


class DocumentTooDeepError(ConversionError):
    """Element nesting exceeds what the converter can walk."""

    def __init__(self, message: str = "Invalid XML: Document is nested too deeply to convert"):
        super().__init__(message)
