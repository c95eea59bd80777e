"""Error hierarchy for the iniload package."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "IniError",
    "IniIOError",
    "IniSyntaxError",
    "NameTooLongError",
    "AllocationError",
    "StoreReleasedError",
    "ConfigNotFoundError",
    "ConfigError",
    "ErrorCodes",
]


class IniError(Exception):
    """Base error for all iniload errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class IniIOError(IniError):
    """Raised when an INI file cannot be opened or fully read."""

    def __init__(self, path: str, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="IO_ERROR",
            message=f"Cannot read INI file '{path}': {reason}",
            details={"path": path, "reason": reason},
            **kwargs,
        )

    @property
    def path(self) -> str:
        """The path that could not be read."""
        return self.details["path"]


class IniSyntaxError(IniError):
    """Raised when the input violates the INI grammar at a specific byte."""

    def __init__(
        self,
        reason: str,
        *,
        offset: int,
        line: int,
        column: int,
        char: str,
        state: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="SYNTAX_ERROR",
            message=f"{reason} at line {line}, column {column} (got {char})",
            details={
                "reason": reason,
                "offset": offset,
                "line": line,
                "column": column,
                "char": char,
                "state": state,
            },
            **kwargs,
        )

    @property
    def offset(self) -> int:
        """Zero-based byte offset of the offending character."""
        return self.details["offset"]

    @property
    def line(self) -> int:
        """1-based line number of the offending character."""
        return self.details["line"]

    @property
    def column(self) -> int:
        """1-based column (in bytes) of the offending character."""
        return self.details["column"]


class NameTooLongError(IniError):
    """Raised when a section or key name exceeds the configured maximum length."""

    def __init__(
        self,
        kind: str,
        name: str,
        length: int,
        max_length: int,
        *,
        offset: int,
        line: int,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            code="NAME_TOO_LONG",
            message=f"{kind.capitalize()} name on line {line} is {length} bytes long, max is {max_length}",
            details={
                "kind": kind,
                "name": name,
                "length": length,
                "max_length": max_length,
                "offset": offset,
                "line": line,
            },
            **kwargs,
        )

    @property
    def kind(self) -> str:
        """Either 'section' or 'key'."""
        return self.details["kind"]

    @property
    def max_length(self) -> int:
        """The configured maximum name length."""
        return self.details["max_length"]


class AllocationError(IniError):
    """Raised when memory for the parsed structure could not be obtained."""

    def __init__(self, message: str = "Out of memory while building the INI store", **kwargs: Any) -> None:
        super().__init__(code="ALLOCATION_ERROR", message=message, **kwargs)


class StoreReleasedError(IniError):
    """Raised when an accessor is used on a store after release()."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(
            code="STORE_RELEASED",
            message="INI store has been released and can no longer be queried",
            **kwargs,
        )


class ConfigNotFoundError(IniError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(IniError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class ErrorCodes:
    """All iniload error codes as constants.

    Use these instead of hardcoding error code strings.

    Example:
        if error.code == ErrorCodes.SYNTAX_ERROR:
            report(error.details["line"])
    """

    IO_ERROR = "IO_ERROR"
    SYNTAX_ERROR = "SYNTAX_ERROR"
    NAME_TOO_LONG = "NAME_TOO_LONG"
    ALLOCATION_ERROR = "ALLOCATION_ERROR"
    STORE_RELEASED = "STORE_RELEASED"
    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
