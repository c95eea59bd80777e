"""iniload - single-pass INI parser with a typed, read-only query store."""

from __future__ import annotations

# Parsing
from iniload.parser import IniParser, ParserState, load, loads

# Store
from iniload.store import IniFile, Key, Section

# Values
from iniload.types import IniValue, ValueType
from iniload.inference import infer_value

# Config
from iniload.config import Config, ParserOptions

# Errors
from iniload.errors import (
    AllocationError,
    ConfigError,
    ConfigNotFoundError,
    ErrorCodes,
    IniError,
    IniIOError,
    IniSyntaxError,
    NameTooLongError,
    StoreReleasedError,
)

__version__ = "0.1.0"

__all__ = [
    # Parsing
    "load",
    "loads",
    "IniParser",
    "ParserState",
    # Store
    "IniFile",
    "Section",
    "Key",
    # Values
    "IniValue",
    "ValueType",
    "infer_value",
    # Config
    "Config",
    "ParserOptions",
    # Errors
    "ErrorCodes",
    "IniError",
    "IniIOError",
    "IniSyntaxError",
    "NameTooLongError",
    "AllocationError",
    "StoreReleasedError",
    "ConfigError",
    "ConfigNotFoundError",
]
