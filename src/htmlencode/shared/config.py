"""Configuration for htmlencode transcoding.

This module provides the immutable configuration object that controls the
encoder and decoder, together with option resolution and JSON defaults files.
"""

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Union

DEFAULT_SPECIAL_CHARS = b"<>&\"'"
DEFAULT_BUFFER_SIZE = 8192

SpecialCharsInput = Union[str, bytes, bytearray, Iterable[int]]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


def coerce_special_chars(value: SpecialCharsInput) -> FrozenSet[int]:
    """Turn a user supplied character set into a set of byte values.

    Text is taken as UTF-8 so a multi-byte character marks each of its bytes
    as special, the same as the raw bytes of a command-line argument would.

    Raises:
        ConfigValidationError: If the value is not text, bytes or an iterable,
            or one of its items is not a byte in 0..255
    """
    if isinstance(value, str):
        return frozenset(value.encode("utf-8", "surrogateescape"))
    if isinstance(value, (bytes, bytearray)):
        return frozenset(value)

    try:
        items = iter(value)
    except TypeError:
        raise ConfigValidationError(
            f"special_chars must be a string or a list of byte values, got {value!r}",
            field_name="special_chars",
        ) from None

    result = set()
    for item in items:
        if isinstance(item, bool) or not isinstance(item, int) or not 0 <= item <= 0xFF:
            raise ConfigValidationError(
                f"special_chars must contain byte values 0..255, got {item!r}",
                field_name="special_chars",
            )
        result.add(item)
    return frozenset(result)


@dataclass(frozen=True)
class TranscodeConfig:
    """Immutable settings for one encode or decode pass.

    Created once before processing starts and handed explicitly to the
    encoder, the decoder and the stream driver. Thread-safe due to frozen
    dataclass implementation.

    Attributes:
        encode_all: Encode every byte as a numeric reference
        encode_binary: Encode non-printable bytes
        decode: Decode entity references instead of encoding
        line_mode: Pass line feeds through literally while encoding
        suppress_newline: Do not append the trailing line feed when encoding
        use_hex: Emit ``&#xHH;`` instead of ``&#NNN;``
        special_chars: Byte values that are always encoded
        buffer_size: Number of bytes read from the input per chunk
    """

    encode_all: bool = False
    encode_binary: bool = True
    decode: bool = False
    line_mode: bool = False
    suppress_newline: bool = False
    use_hex: bool = False
    special_chars: FrozenSet[int] = field(
        default_factory=lambda: frozenset(DEFAULT_SPECIAL_CHARS)
    )
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self) -> None:
        """Normalize and validate the configuration."""
        if not isinstance(self.special_chars, frozenset):
            object.__setattr__(
                self, "special_chars", coerce_special_chars(self.special_chars)
            )
        elif any(not 0 <= c <= 0xFF for c in self.special_chars):
            raise ConfigValidationError(
                "special_chars must contain byte values 0..255",
                field_name="special_chars",
            )

        if not isinstance(self.buffer_size, int) or self.buffer_size <= 0:
            raise ConfigValidationError(
                "buffer_size must be > 0",
                field_name="buffer_size",
                suggestions=[f"Use the default of {DEFAULT_BUFFER_SIZE}"],
            )

    @property
    def mode(self) -> str:
        """Name of the operation this configuration selects."""
        return "decode" if self.decode else "encode"

    @classmethod
    def encoding(cls) -> "TranscodeConfig":
        """Create the default encoding configuration."""
        return cls()

    @classmethod
    def decoding(cls) -> "TranscodeConfig":
        """Create a configuration that decodes entity references."""
        return cls(decode=True)

    @classmethod
    def field_names(cls) -> List[str]:
        """Names of all configurable fields."""
        return [f.name for f in fields(cls)]

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, Any],
        base: Optional["TranscodeConfig"] = None
    ) -> "TranscodeConfig":
        """Resolve parsed option values into a configuration.

        Options whose value is None are treated as not given, and keys that
        are not configuration fields are ignored, so an argparse namespace can
        be passed through ``vars()`` directly.

        Args:
            options: Parsed option values keyed by field name
            base: Configuration to layer the options on (defaults if None)

        Returns:
            New TranscodeConfig instance
        """
        known = set(cls.field_names())
        overrides = {
            key: value for key, value in options.items()
            if key in known and value is not None
        }
        return (base or cls()).override(**overrides)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TranscodeConfig":
        """Create configuration from a dictionary such as a parsed JSON file.

        Raises:
            ConfigValidationError: If the dictionary has unknown keys or bad values
        """
        unknown = sorted(set(data) - set(cls.field_names()))
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                suggestions=[f"Valid keys: {', '.join(cls.field_names())}"],
            )
        for name in ("encode_all", "encode_binary", "decode", "line_mode",
                     "suppress_newline", "use_hex"):
            if name in data and not isinstance(data[name], bool):
                raise ConfigValidationError(
                    f"{name} must be true or false", field_name=name
                )
        return cls(**data)

    @classmethod
    def from_file(cls, config_path: Path) -> "TranscodeConfig":
        """Load configuration defaults from a JSON file.

        Raises:
            ConfigError: If the file cannot be read or is not a JSON object
            ConfigValidationError: If the JSON object is not a valid configuration
        """
        try:
            with Path(config_path).open(encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a JSON object")
        return cls.from_dict(data)

    def override(self, **kwargs: Any) -> "TranscodeConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = TranscodeConfig()
            >>> config.override(use_hex=True).use_hex
            True
        """
        try:
            return replace(self, **kwargs)
        except TypeError as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-safe dictionary."""
        return {
            "encode_all": self.encode_all,
            "encode_binary": self.encode_binary,
            "decode": self.decode,
            "line_mode": self.line_mode,
            "suppress_newline": self.suppress_newline,
            "use_hex": self.use_hex,
            "special_chars": sorted(self.special_chars),
            "buffer_size": self.buffer_size,
        }
