"""Converter configuration loaded from YAML."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .cache import DEFAULT_TTL_SECONDS

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("pretty", "compact", "minified")

_TRUE_STRINGS = ("true", "yes", "on", "1")
_FALSE_STRINGS = ("false", "no", "off", "0", "")


def to_bool(value) -> bool:
    """Interpret a boolean option that may arrive as a string."""
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ValueError(f"Cannot interpret '{value}' as a boolean")
    return bool(value)


@dataclass
class CacheConfig:
    """Conversion cache settings.

    Attributes:
        enabled: Default for the per-call use_cache option.
        ttl_seconds: How long a cached result stays valid.
    """

    enabled: bool = True
    ttl_seconds: float = DEFAULT_TTL_SECONDS


@dataclass
class OutputConfig:
    """Default conversion options.

    Attributes:
        format: One of "pretty", "compact", "minified".
        preserve_attributes: Keep element attributes under "@attributes".
    """

    format: str = "pretty"
    preserve_attributes: bool = True


@dataclass
class ConverterConfig:
    """Root converter configuration."""

    cache: CacheConfig = field(default_factory=CacheConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "ConverterConfig":
        cache_data = data.get("cache") or {}
        output_data = data.get("output") or {}

        output_format = output_data.get("format", "pretty")
        if output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format '{output_format}', "
                f"expected one of {', '.join(OUTPUT_FORMATS)}"
            )

        return cls(
            cache=CacheConfig(
                enabled=to_bool(cache_data.get("enabled", True)),
                ttl_seconds=float(cache_data.get("ttl_seconds", DEFAULT_TTL_SECONDS)),
            ),
            output=OutputConfig(
                format=output_format,
                preserve_attributes=to_bool(output_data.get("preserve_attributes", True)),
            ),
        )


def load_config(path: Optional[str] = None) -> ConverterConfig:
    """Load configuration from a YAML file, or defaults if there is none."""
    if path is None:
        return ConverterConfig()

    config_path = Path(path)
    if not config_path.exists():
        logger.info(f"Config file {config_path} not found, using defaults")
        return ConverterConfig()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    logger.debug(f"Loaded config from {config_path}")
    return ConverterConfig.from_dict(data)
