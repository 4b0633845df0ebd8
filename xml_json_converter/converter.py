"""
Conversion Façade
=================
Validates XML input, detects its type, dispatches to the Alteryx workflow
parser or the generic mapper, and formats the result as JSON text.
Formatted results are cached per (input, options) until they expire.
"""

import json
import logging
import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union
from xml.sax.saxutils import escape

from .cache import ConversionCache
from .config import ConverterConfig, to_bool
from .detector import ALTERYX_WORKFLOW, detect_file_type
from .errors import (
    ConversionError,
    DocumentTooDeepError,
    EmptyInputError,
    MalformedInputError,
    ParseError,
)
from .mapper import xml_to_json
from .models import ConversionResult
from .parser import AlteryxWorkflowParser
from .xmltree import parse_xml

logger = logging.getLogger(__name__)

CDATA_PATTERN = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)


class OutputFormat(Enum):
    PRETTY = "pretty"      # 2-space indent
    COMPACT = "compact"    # 1-space indent
    MINIFIED = "minified"  # no whitespace


@dataclass
class ConversionOptions:
    """Per-call conversion options."""
    preserve_attributes: bool = True  # generic mapper only
    output_format: OutputFormat = OutputFormat.PRETTY
    use_cache: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "ConversionOptions":
        """Build options from snake_case or camelCase keys."""
        def pick(snake, camel, default):
            if snake in data:
                return data[snake]
            return data.get(camel, default)

        return cls(
            preserve_attributes=to_bool(pick("preserve_attributes", "preserveAttributes", True)),
            output_format=OutputFormat(pick("output_format", "outputFormat", "pretty")),
            use_cache=to_bool(pick("use_cache", "useCache", True)),
        )

    def cache_key(self) -> str:
        return json.dumps({
            "preserveAttributes": self.preserve_attributes,
            "outputFormat": self.output_format.value,
            "useCache": self.use_cache,
        }, sort_keys=True)


@dataclass
class SyntaxIssue:
    """A single well-formedness problem."""
    line: int
    message: str


def normalize_xml(xml_text: str) -> str:
    """Resolve CDATA sections to escaped text.

    Namespace declarations are left untouched; prefixed names are kept
    as-is by the parser.
    """
    return CDATA_PATTERN.sub(lambda m: escape(m.group(1)), xml_text)


def format_json(data, output_format: OutputFormat = OutputFormat.PRETTY) -> str:
    if output_format == OutputFormat.MINIFIED:
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
    if output_format == OutputFormat.COMPACT:
        return json.dumps(data, ensure_ascii=False, indent=1)
    return json.dumps(data, ensure_ascii=False, indent=2)


def _check_input(xml_text: str) -> str:
    trimmed = (xml_text or "").lstrip("\ufeff").strip()
    if not trimmed:
        raise EmptyInputError()
    if not trimmed.startswith("<"):
        raise MalformedInputError()
    return trimmed


class XmlJsonConverter:
    """Converts XML text to JSON text.

    Args:
        cache: Cache to read from and store into. A new private cache is
            created when omitted.
        parser: Callable turning XML text into a root Element, raising
            ParseError on malformed input.
        config: Defaults for options and cache TTL.
    """

    def __init__(
        self,
        cache: Optional[ConversionCache] = None,
        parser: Callable = parse_xml,
        config: Optional[ConverterConfig] = None,
    ):
        self.config = config or ConverterConfig()
        if cache is None:
            cache = ConversionCache(ttl_seconds=self.config.cache.ttl_seconds)
        self.cache = cache
        self._parse = parser

    def default_options(self) -> ConversionOptions:
        return ConversionOptions(
            preserve_attributes=self.config.output.preserve_attributes,
            output_format=OutputFormat(self.config.output.format),
            use_cache=self.config.cache.enabled,
        )

    def _resolve_options(self, options) -> ConversionOptions:
        if options is None:
            return self.default_options()
        if isinstance(options, dict):
            return ConversionOptions.from_dict(options)
        return options

    def convert(self, xml_text: str,
                options: Union[ConversionOptions, dict, None] = None) -> str:
        """Convert XML text to formatted JSON text.

        Raises:
            EmptyInputError: input is blank.
            MalformedInputError: input does not start with a tag.
            ParseError: input is not well-formed XML.
            DocumentTooDeepError: nesting is too deep to map.
        """
        output, _, _ = self._convert(xml_text, self._resolve_options(options))
        return output

    def _convert(self, xml_text: str, options: ConversionOptions):
        trimmed = _check_input(xml_text)

        cache_key = None
        if options.use_cache:
            cache_key = ConversionCache.make_key(trimmed, options.cache_key())
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug("Conversion cache hit")
                return cached, detect_file_type(normalize_xml(trimmed)), True

        processed = normalize_xml(trimmed)
        root = self._parse(processed)

        file_type = detect_file_type(processed)
        logger.debug(f"Detected file type: {file_type}")

        # Mapping and serialization recurse once per nesting level
        try:
            if file_type == ALTERYX_WORKFLOW:
                data = AlteryxWorkflowParser(root).parse().to_dict()
            else:
                data = xml_to_json(root, options.preserve_attributes)
            result = format_json(data, options.output_format)
        except RecursionError as e:
            raise DocumentTooDeepError() from e

        if cache_key is not None:
            self.cache.set(cache_key, result)
            self.cache.purge_expired()

        return result, file_type, False

    def convert_with_result(self, xml_text: str,
                            options: Union[ConversionOptions, dict, None] = None
                            ) -> ConversionResult:
        """Convert and report outcome metadata instead of raising."""
        input_size = len(xml_text or "")
        try:
            resolved = self._resolve_options(options)
        except ValueError as e:
            logger.warning(f"Invalid conversion options: {e}")
            return ConversionResult(
                input_size=input_size,
                status="error",
                error=f"Invalid options: {e}",
            )

        t0 = time.perf_counter()
        try:
            output, file_type, cached = self._convert(xml_text, resolved)
        except ConversionError as e:
            logger.warning(f"Conversion failed: {e}")
            return ConversionResult(
                input_size=input_size,
                status="error",
                error=str(e),
            )

        return ConversionResult(
            output=output,
            file_type=file_type,
            duration_ms=(time.perf_counter() - t0) * 1000,
            input_size=input_size,
            output_size=len(output),
            cached=cached,
        )

    def validate_xml_syntax(self, xml_text: str) -> list:
        """Return well-formedness problems as SyntaxIssue items; empty when valid."""
        try:
            trimmed = _check_input(xml_text)
            self._parse(normalize_xml(trimmed))
        except ParseError as e:
            return [SyntaxIssue(line=e.line or 1, message=e.diagnostic)]
        except ConversionError as e:
            return [SyntaxIssue(line=1, message=str(e))]
        return []


def convert_xml_to_json(xml_text: str,
                        options: Union[ConversionOptions, dict, None] = None,
                        cache: Optional[ConversionCache] = None) -> str:
    """One-shot conversion; pass a cache to reuse results across calls."""
    return XmlJsonConverter(cache=cache).convert(xml_text, options)
