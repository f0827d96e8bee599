"""
tlvkit - Decoder Configuration
==============================

Settings that control how strictly TLV streams are decoded.
Configuration can come from:
- Default values (defined here)
- Explicit CodecConfig instances passed to read functions
- Environment variables (CodecConfig.from_env)

Encoding is not configurable: the wire format is fixed.
"""

from dataclasses import dataclass
from typing import Optional
import logging
import os

from tlvkit.records import MAX_LENGTH

logger = logging.getLogger(__name__)


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class CodecConfig:
    """
    Configuration for TLV decoding.

    Attributes:
        max_value_length: Largest value length the decoder accepts
            (default: 2**31 - 1, the largest length the format can express).
            Records declaring more are rejected before allocation.
        strict_eof: Only accept end of stream where a new record would
            start (default: False). By default a stream that stops
            cleanly after a tag, or after a header with no value bytes,
            also ends the list.
    """

    max_value_length: int = MAX_LENGTH
    strict_eof: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.max_value_length <= MAX_LENGTH:
            raise ValueError(
                f"max_value_length must be 0-{MAX_LENGTH}, got {self.max_value_length}"
            )

    @classmethod
    def from_env(cls) -> "CodecConfig":
        """
        Create CodecConfig from environment variables.

        Environment variables (all optional):
            TLVKIT_MAX_VALUE_LENGTH: Maximum value length (integer)
            TLVKIT_STRICT_EOF: Strict end of stream (1/0, true/false, yes/no, on/off)

        Returns:
            CodecConfig with values from environment variables
        """
        config = cls()

        if limit := os.environ.get("TLVKIT_MAX_VALUE_LENGTH"):
            try:
                value = int(limit, 0)
            except ValueError:
                logger.warning("Ignoring invalid TLVKIT_MAX_VALUE_LENGTH: %r", limit)
            else:
                if 0 <= value <= MAX_LENGTH:
                    config.max_value_length = value
                else:
                    logger.warning("TLVKIT_MAX_VALUE_LENGTH out of range: %d", value)

        if strict := os.environ.get("TLVKIT_STRICT_EOF"):
            flag = strict.strip().lower()
            if flag in _TRUE_VALUES:
                config.strict_eof = True
            elif flag in _FALSE_VALUES:
                config.strict_eof = False
            else:
                logger.warning("Ignoring invalid TLVKIT_STRICT_EOF: %r", strict)

        return config


# Global default configuration
_default_config: Optional[CodecConfig] = None


def get_default_config() -> CodecConfig:
    """Get the default configuration, creating it from the environment if needed."""
    global _default_config
    if _default_config is None:
        _default_config = CodecConfig.from_env()
    return _default_config


def set_default_config(config: Optional[CodecConfig]) -> None:
    """Replace the default configuration. Passing None re-reads the environment on next use."""
    global _default_config
    _default_config = config
