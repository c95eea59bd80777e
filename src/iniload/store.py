"""The parsed INI store: sections holding typed keys.

The store is built once by the parser and is read-only afterwards. Lookups
are linear scans in file order, so when a section or key name occurs more
than once the first occurrence wins.

Thread safety:
    Nothing mutates a store after parsing, so concurrent readers need no
    locking. ``release()`` must not race with readers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from iniload.errors import StoreReleasedError
from iniload.types import IniValue, ValueType

__all__ = ["Key", "Section", "IniFile"]


@dataclass(frozen=True)
class Key:
    """A key name bound to one typed value."""

    name: str
    value: IniValue


@dataclass(frozen=True)
class Section:
    """A named group of keys. The empty name holds keys that precede any header."""

    name: str
    _keys: list[Key] = field(default_factory=list, repr=False)

    @property
    def keys(self) -> tuple[Key, ...]:
        """Keys in file order, duplicates included."""
        return tuple(self._keys)

    def find(self, key_name: str) -> Key | None:
        """Return the first key named ``key_name``, or None."""
        for key in self._keys:
            if key.name == key_name:
                return key
        return None

    def _append(self, key: Key) -> None:
        self._keys.append(key)

    def __len__(self) -> int:
        return len(self._keys)


class IniFile:
    """Queryable result of parsing one INI document.

    Typed getters never raise on a missing section, missing key or type
    mismatch; they return the caller's default instead. No value is ever
    coerced between Integer, Float and String.

    Usage::

        with iniload.load("app.ini") as ini:
            port = ini.get_int("server", "port", 8080)
    """

    def __init__(self) -> None:
        self._sections: list[Section] = []
        self._released = False

    # ----- Construction (parser only) -----

    def _add_section(self, name: str) -> Section:
        section = Section(name)
        self._sections.append(section)
        return section

    # ----- Lookup helpers -----

    def _check_live(self) -> None:
        if self._released:
            raise StoreReleasedError()

    def _find_section(self, section_name: str) -> Section | None:
        self._check_live()
        for section in self._sections:
            if section.name == section_name:
                return section
        return None

    def _find_value(self, section_name: str, key_name: str) -> IniValue | None:
        section = self._find_section(section_name)
        if section is None:
            return None
        key = section.find(key_name)
        return key.value if key is not None else None

    # ----- Accessors -----

    @property
    def sections(self) -> tuple[Section, ...]:
        """All sections in file order, duplicates included."""
        self._check_live()
        return tuple(self._sections)

    @property
    def released(self) -> bool:
        return self._released

    def num_sections(self) -> int:
        """Total number of sections, counting the nameless one if present."""
        self._check_live()
        return len(self._sections)

    def has_section(self, section_name: str) -> bool:
        return self._find_section(section_name) is not None

    def num_keys(self, section_name: str) -> int:
        """Number of keys in the first section with this name; 0 if it does not exist."""
        section = self._find_section(section_name)
        return len(section) if section is not None else 0

    def has_key(self, section_name: str, key_name: str) -> bool:
        section = self._find_section(section_name)
        return section is not None and section.find(key_name) is not None

    def get(self, section_name: str, key_name: str) -> IniValue | None:
        """Return the raw typed value, or None if the section or key is absent."""
        return self._find_value(section_name, key_name)

    def get_int(self, section_name: str, key_name: str, default: int = 0) -> int:
        """Return an Integer value, or ``default`` if absent or not an Integer."""
        value = self._find_value(section_name, key_name)
        if value is None or value.type is not ValueType.INT:
            return default
        return value.value  # type: ignore[return-value]

    def get_float(self, section_name: str, key_name: str, default: float = 0.0) -> float:
        """Return a Float value, or ``default`` if absent or not a Float."""
        value = self._find_value(section_name, key_name)
        if value is None or value.type is not ValueType.FLOAT:
            return default
        return value.value  # type: ignore[return-value]

    def get_string(self, section_name: str, key_name: str, default: str = "") -> str:
        """Return a String value, or ``default`` if absent or not a String."""
        value = self._find_value(section_name, key_name)
        if value is None or value.type is not ValueType.STRING:
            return default
        return value.value  # type: ignore[return-value]

    def section_names(self) -> tuple[str, ...]:
        """Section names in file order, duplicates included."""
        self._check_live()
        return tuple(section.name for section in self._sections)

    def key_names(self, section_name: str) -> tuple[str, ...]:
        """Key names of the first section with this name; empty if it does not exist."""
        section = self._find_section(section_name)
        if section is None:
            return ()
        return tuple(key.name for key in section.keys)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Snapshot as nested plain dicts, keeping the first occurrence of each name."""
        self._check_live()
        result: dict[str, dict[str, Any]] = {}
        seen: set[str] = set()
        for section in self._sections:
            if section.name in seen:
                continue
            seen.add(section.name)
            pairs: dict[str, Any] = {}
            for key in section.keys:
                pairs.setdefault(key.name, key.value.value)
            result[section.name] = pairs
        return result

    # ----- Lifecycle -----

    def release(self) -> None:
        """Drop every section and key. Accessors raise StoreReleasedError afterwards.

        Calling release() more than once is harmless.
        """
        if self._released:
            return
        for section in self._sections:
            section._keys.clear()
        self._sections.clear()
        self._released = True

    def __enter__(self) -> IniFile:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    # ----- Container protocol -----

    def __len__(self) -> int:
        return self.num_sections()

    def __contains__(self, section_name: object) -> bool:
        return isinstance(section_name, str) and self.has_section(section_name)

    def __iter__(self) -> Iterator[str]:
        return iter(self.section_names())

    def __repr__(self) -> str:
        if self._released:
            return "<IniFile released>"
        return f"<IniFile sections={len(self._sections)}>"
