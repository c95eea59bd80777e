"""Configuration loading and parser options."""

from __future__ import annotations

import codecs
import os
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from iniload.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "ParserOptions", "DEFAULT_MAX_NAME_LENGTH"]

DEFAULT_MAX_NAME_LENGTH = 128

_SYNTAX_CHARS = '[]=;#" \t\r\nab09'


class Config:
    """Configuration accessor with dot-path key support."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def load(cls, yaml_path: str) -> Config:
        """Load configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            A new Config wrapping the file's top-level mapping.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the YAML is invalid or is not a mapping.
        """
        if not os.path.isfile(yaml_path):
            raise ConfigNotFoundError(config_path=yaml_path)

        with open(yaml_path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {yaml_path}: {e}", cause=e) from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")
        return cls(data)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current


class ParserOptions(BaseModel):
    """Tuning knobs for the INI parser.

    Attributes:
        max_name_length: Longest allowed section or key name, in bytes.
        strict_section_trailer: Reject spaces/tabs between ']' and the end of line.
        encoding: Codec used to turn name and string value bytes into ``str``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_name_length: int = Field(default=DEFAULT_MAX_NAME_LENGTH, ge=1)
    strict_section_trailer: bool = False
    encoding: str = "utf-8"

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding '{v}'") from e
        # The scanner matches single ASCII bytes and treats NUL as end of input.
        try:
            compatible = _SYNTAX_CHARS.encode(v) == _SYNTAX_CHARS.encode("ascii")
            compatible = compatible and b"\x00" not in "é".encode(v, "ignore")
        except (LookupError, UnicodeError):
            compatible = False
        if not compatible:
            raise ValueError(f"Encoding '{v}' is not ASCII-compatible")
        return v

    @classmethod
    def from_config(cls, config: Config) -> ParserOptions:
        """Build options from the ``parser.*`` keys of a Config.

        Raises:
            ConfigError: If a configured value is invalid.
        """
        values: dict[str, Any] = {}
        for field_name in cls.model_fields:
            value = config.get(f"parser.{field_name}")
            if value is not None:
                values[field_name] = value
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigError(f"Invalid parser configuration: {e}", cause=e) from e
