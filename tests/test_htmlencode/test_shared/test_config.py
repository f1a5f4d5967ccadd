"""Tests for the transcoding configuration."""

import dataclasses
import json

import pytest

from htmlencode.shared.config import (
    DEFAULT_SPECIAL_CHARS,
    ConfigError,
    ConfigValidationError,
    TranscodeConfig,
    coerce_special_chars,
)


class TestTranscodeConfigDefaults:
    """Test default configuration values."""

    def test_default_configuration(self):
        """Test default flag values."""
        config = TranscodeConfig()

        assert config.encode_all is False
        assert config.encode_binary is True
        assert config.decode is False
        assert config.line_mode is False
        assert config.suppress_newline is False
        assert config.use_hex is False
        assert config.special_chars == frozenset(b"<>&\"'")
        assert config.buffer_size == 8192
        assert config.mode == "encode"

    def test_presets(self):
        """Test encoding and decoding presets."""
        assert TranscodeConfig.encoding() == TranscodeConfig()
        decoding = TranscodeConfig.decoding()
        assert decoding.decode is True
        assert decoding.mode == "decode"

    def test_config_is_immutable(self):
        """Test that configuration fields cannot be reassigned."""
        config = TranscodeConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.use_hex = True


class TestSpecialChars:
    """Test special character set handling."""

    def test_coerce_text(self):
        """Text is taken as its UTF-8 bytes."""
        assert coerce_special_chars("<>") == frozenset(b"<>")
        assert coerce_special_chars("é") == frozenset(b"\xc3\xa9")

    def test_coerce_bytes_and_ints(self):
        """Bytes and integer iterables are accepted."""
        assert coerce_special_chars(b"ab") == frozenset({0x61, 0x62})
        assert coerce_special_chars([0, 255]) == frozenset({0, 255})

    def test_coerce_rejects_out_of_range(self):
        """Values outside 0..255 are rejected."""
        with pytest.raises(ConfigValidationError, match="byte values"):
            coerce_special_chars([256])
        with pytest.raises(ConfigValidationError):
            coerce_special_chars([-1])

    @pytest.mark.parametrize("value", [5, None, 1.5])
    def test_coerce_rejects_non_iterable(self, value):
        """Values that are not text, bytes or iterables are rejected."""
        with pytest.raises(ConfigValidationError) as exc:
            coerce_special_chars(value)
        assert exc.value.field_name == "special_chars"

    def test_from_dict_rejects_scalar_set(self):
        """A scalar special_chars value in a config dict is a validation error."""
        with pytest.raises(ConfigValidationError):
            TranscodeConfig.from_dict({"special_chars": None})

    def test_constructor_coerces(self):
        """Non-frozenset values passed to the constructor are normalized."""
        config = TranscodeConfig(special_chars="abc")
        assert config.special_chars == frozenset(b"abc")

    def test_empty_set_allowed(self):
        """An explicitly empty set is kept empty."""
        config = TranscodeConfig(special_chars=b"")
        assert config.special_chars == frozenset()

    def test_default_set_constant(self):
        """The default set is the five reserved characters."""
        assert DEFAULT_SPECIAL_CHARS == b"<>&\"'"


class TestValidation:
    """Test configuration validation."""

    def test_invalid_buffer_size(self):
        """Test invalid buffer sizes."""
        with pytest.raises(ConfigValidationError, match="buffer_size must be > 0") as exc:
            TranscodeConfig(buffer_size=0)
        assert exc.value.field_name == "buffer_size"
        assert exc.value.suggestions

    def test_validation_error_is_config_error(self):
        """Validation errors belong to the configuration error family."""
        assert issubclass(ConfigValidationError, ConfigError)


class TestOptionResolution:
    """Test resolving parsed option values."""

    def test_from_options_ignores_none_and_unknown(self):
        """None values and unknown keys leave defaults in place."""
        config = TranscodeConfig.from_options({
            "encode_all": None,
            "use_hex": True,
            "verbose": True,
        })
        assert config.encode_all is False
        assert config.use_hex is True

    def test_from_options_layers_on_base(self):
        """Options override a base configuration."""
        base = TranscodeConfig(line_mode=True, use_hex=True)
        config = TranscodeConfig.from_options({"use_hex": None, "decode": True}, base)
        assert config.line_mode is True
        assert config.use_hex is True
        assert config.decode is True

    def test_from_options_false_overrides(self):
        """An explicit False overrides the base value."""
        config = TranscodeConfig.from_options({"encode_binary": False})
        assert config.encode_binary is False

    def test_override(self):
        """Test override returns a new configuration."""
        config = TranscodeConfig()
        new_config = config.override(use_hex=True, special_chars="<")
        assert new_config.use_hex is True
        assert new_config.special_chars == frozenset(b"<")
        assert config.use_hex is False

    def test_override_unknown_field(self):
        """Unknown fields raise a validation error."""
        with pytest.raises(ConfigValidationError):
            TranscodeConfig().override(colour=True)


class TestConfigFiles:
    """Test loading defaults from JSON."""

    def test_from_dict(self):
        """Test creating configuration from a dictionary."""
        config = TranscodeConfig.from_dict({
            "use_hex": True,
            "special_chars": "<>",
            "buffer_size": 16,
        })
        assert config.use_hex is True
        assert config.special_chars == frozenset(b"<>")
        assert config.buffer_size == 16

    def test_from_dict_unknown_key(self):
        """Unknown keys are reported."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration keys: bogus"):
            TranscodeConfig.from_dict({"bogus": 1})

    def test_from_dict_non_bool_flag(self):
        """Flags must be JSON booleans."""
        with pytest.raises(ConfigValidationError, match="use_hex must be true or false"):
            TranscodeConfig.from_dict({"use_hex": "yes"})

    def test_to_dict_round_trip(self):
        """to_dict output is JSON-safe and loads back to an equal config."""
        config = TranscodeConfig(encode_all=True, special_chars=b"\x00\xff<")
        data = json.loads(json.dumps(config.to_dict()))
        assert data["special_chars"] == [0, 60, 255]
        assert TranscodeConfig.from_dict(data) == config

    def test_from_file(self, tmp_path):
        """Test loading configuration from a file."""
        config_path = tmp_path / "htmlencode.json"
        config_path.write_text(json.dumps({"line_mode": True, "use_hex": True}))

        config = TranscodeConfig.from_file(config_path)
        assert config.line_mode is True
        assert config.use_hex is True
        assert config.encode_binary is True

    def test_from_missing_file(self, tmp_path):
        """A missing file is a configuration error."""
        with pytest.raises(ConfigError, match="Could not read config file"):
            TranscodeConfig.from_file(tmp_path / "missing.json")

    def test_from_invalid_json(self, tmp_path):
        """Invalid JSON is a configuration error."""
        config_path = tmp_path / "bad.json"
        config_path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            TranscodeConfig.from_file(config_path)

    def test_from_non_object_json(self, tmp_path):
        """The top-level JSON value must be an object."""
        config_path = tmp_path / "list.json"
        config_path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="must contain a JSON object"):
            TranscodeConfig.from_file(config_path)
