"""Single-pass INI parser built on a byte-driven state machine."""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Union

from iniload.config import ParserOptions
from iniload.errors import AllocationError, IniIOError, IniSyntaxError, NameTooLongError
from iniload.inference import decode_bytes, infer_value
from iniload.store import IniFile, Key, Section
from iniload.types import IniValue

__all__ = ["ParserState", "IniParser", "load", "loads"]

logger = logging.getLogger(__name__)

PathType = Union[str, os.PathLike]

# NUL doubles as the end-of-input sentinel appended after the last byte.
_EOF = 0x00
_END = frozenset(b"\n\r\x00")
_BLANK = frozenset(b" \t")
_COMMENT = frozenset(b";#")

_LBRACKET = ord("[")
_RBRACKET = ord("]")
_EQUALS = ord("=")
_QUOTE = ord('"')

_SECTION_NAME_INVALID = frozenset(b"[=;#")
_KEY_NAME_INVALID = frozenset(b"[]")
_VALUE_INVALID = frozenset(b"[]=")


class ParserState(str, Enum):
    """States of the INI scanner."""

    NONE = "none"
    COMMENT = "comment"
    SECTION_NAME = "section_name"
    AFTER_SECTION_NAME = "after_section_name"
    KEY_NAME = "key_name"
    AFTER_KEY_NAME = "after_key_name"
    BEFORE_KEY_VALUE = "before_key_value"
    QUOTED_VALUE = "quoted_value"
    UNQUOTED_VALUE = "unquoted_value"
    AFTER_KEY_VALUE = "after_key_value"


def _describe_char(data: bytes, pos: int) -> str:
    if pos >= len(data):
        return "<EOF>"
    return repr(data[pos : pos + 1])[1:]


class IniParser:
    """Parses INI text into an IniFile.

    Parsing is all-or-nothing: the first syntax error or over-long name
    aborts the scan and nothing built so far is returned.

    A statement may not start with "=" or "]": either is a syntax error, never
    the first byte of a key name.
    """

    def __init__(self, options: ParserOptions | None = None) -> None:
        self._options = options or ParserOptions()

    @property
    def options(self) -> ParserOptions:
        return self._options

    def load(self, path: PathType) -> IniFile:
        """Read a whole file and parse it.

        Raises:
            IniIOError: If the file cannot be opened or read.
            IniSyntaxError: If the contents violate the grammar.
            NameTooLongError: If a section or key name is too long.
            AllocationError: If memory runs out reading the file or building the store.
        """
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            raise IniIOError(path=str(path), reason=e.strerror or str(e), cause=e) from e
        except MemoryError as e:
            raise AllocationError(cause=e) from e
        logger.debug("Read %d bytes from %s", len(data), path)
        return self.parse(data)

    def parse(self, data: bytes | str) -> IniFile:
        """Parse an in-memory document. ``str`` input is encoded with the configured encoding."""
        if isinstance(data, str):
            data = data.encode(self._options.encoding, "surrogateescape")
        try:
            ini = self._scan(data)
        except MemoryError as e:
            raise AllocationError(cause=e) from e
        logger.debug(
            "Parsed %d sections, %d keys",
            ini.num_sections(),
            sum(len(section) for section in ini.sections),
        )
        return ini

    def _syntax_error(self, data: bytes, pos: int, state: ParserState, reason: str) -> IniSyntaxError:
        line_start = data.rfind(b"\n", 0, pos) + 1
        return IniSyntaxError(
            reason,
            offset=pos,
            line=data.count(b"\n", 0, pos) + 1,
            column=pos - line_start + 1,
            char=_describe_char(data, pos),
            state=state.value,
        )

    def _name_too_long(self, data: bytes, kind: str, start: int, end: int) -> NameTooLongError:
        return NameTooLongError(
            kind,
            decode_bytes(data[start:end], self._options.encoding),
            end - start,
            self._options.max_name_length,
            offset=start,
            line=data.count(b"\n", 0, start) + 1,
        )

    def _scan(self, data: bytes) -> IniFile:
        max_len = self._options.max_name_length
        strict_trailer = self._options.strict_section_trailer
        encoding = self._options.encoding

        ini = IniFile()
        section: Section | None = None
        section_names: set[str] = set()
        key_names: set[str] = set()

        state = ParserState.NONE
        name_start = name_end = value_start = 0
        size = len(data)

        for pos in range(size + 1):
            c = data[pos] if pos < size else _EOF

            if state is ParserState.NONE:
                if c in _BLANK or c in _END:
                    pass
                elif c in _COMMENT:
                    state = ParserState.COMMENT
                elif c == _LBRACKET:
                    name_start = pos + 1
                    state = ParserState.SECTION_NAME
                elif c == _EQUALS or c == _RBRACKET:
                    raise self._syntax_error(data, pos, state, "Expected a key name or section header")
                else:
                    name_start = pos
                    state = ParserState.KEY_NAME

            elif state is ParserState.COMMENT:
                if c in _END:
                    state = ParserState.NONE

            elif state is ParserState.SECTION_NAME:
                if c == _RBRACKET:
                    if pos - name_start > max_len:
                        raise self._name_too_long(data, "section", name_start, pos)
                    name = decode_bytes(data[name_start:pos], encoding)
                    if name in section_names:
                        logger.warning("Duplicate section [%s]; lookups only see the first one", name)
                    section_names.add(name)
                    section = ini._add_section(name)
                    key_names = set()
                    state = ParserState.AFTER_SECTION_NAME
                elif c in _SECTION_NAME_INVALID or c in _END:
                    raise self._syntax_error(data, pos, state, "Invalid character in section name")

            elif state is ParserState.AFTER_SECTION_NAME:
                if c in _END:
                    state = ParserState.NONE
                elif c in _BLANK and not strict_trailer:
                    pass
                else:
                    raise self._syntax_error(data, pos, state, "Unexpected content after section header")

            elif state is ParserState.KEY_NAME:
                if c in _BLANK:
                    name_end = pos
                    state = ParserState.AFTER_KEY_NAME
                elif c == _EQUALS:
                    name_end = pos
                    state = ParserState.BEFORE_KEY_VALUE
                elif c in _KEY_NAME_INVALID or c in _END:
                    raise self._syntax_error(data, pos, state, "Invalid character in key name")
                elif pos + 1 - name_start > max_len:
                    raise self._name_too_long(data, "key", name_start, pos + 1)

            elif state is ParserState.AFTER_KEY_NAME:
                if c in _BLANK:
                    pass
                elif c == _EQUALS:
                    state = ParserState.BEFORE_KEY_VALUE
                else:
                    raise self._syntax_error(data, pos, state, "Expected '=' after key name")

            elif state is ParserState.BEFORE_KEY_VALUE:
                if c in _BLANK:
                    pass
                elif c in _END or c in _VALUE_INVALID:
                    raise self._syntax_error(data, pos, state, "Expected a value after '='")
                elif c == _QUOTE:
                    value_start = pos + 1
                    state = ParserState.QUOTED_VALUE
                else:
                    value_start = pos
                    state = ParserState.UNQUOTED_VALUE

            elif state is ParserState.QUOTED_VALUE:
                if c == _QUOTE:
                    value = IniValue.of_string(decode_bytes(data[value_start:pos], encoding))
                    section = self._commit(ini, section, data[name_start:name_end], value, key_names, section_names)
                    state = ParserState.AFTER_KEY_VALUE
                elif c in _END:
                    raise self._syntax_error(data, pos, state, "Unterminated quoted value")

            elif state is ParserState.UNQUOTED_VALUE:
                if c in _END:
                    value = infer_value(data[value_start:pos], encoding)
                    section = self._commit(ini, section, data[name_start:name_end], value, key_names, section_names)
                    state = ParserState.NONE
                elif c in _VALUE_INVALID:
                    raise self._syntax_error(data, pos, state, "'[', ']' and '=' are only allowed in quoted values")

            elif state is ParserState.AFTER_KEY_VALUE:
                if c in _END:
                    state = ParserState.NONE
                else:
                    raise self._syntax_error(data, pos, state, "Unexpected content after quoted value")

        return ini

    def _commit(
        self,
        ini: IniFile,
        section: Section | None,
        raw_name: bytes,
        value: IniValue,
        key_names: set[str],
        section_names: set[str],
    ) -> Section:
        if section is None:
            section = ini._add_section("")
            section_names.add("")
        name = decode_bytes(raw_name, self._options.encoding)
        if name in key_names:
            logger.debug("Duplicate key '%s' in section [%s]; lookups only see the first one", name, section.name)
        key_names.add(name)
        section._append(Key(name, value))
        return section


def load(path: PathType, options: ParserOptions | None = None) -> IniFile:
    """Parse the INI file at ``path``. See IniParser.load."""
    return IniParser(options).load(path)


def loads(data: bytes | str, options: ParserOptions | None = None) -> IniFile:
    """Parse an INI document held in memory. See IniParser.parse."""
    return IniParser(options).parse(data)
