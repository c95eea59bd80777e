"""Typed INI values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

__all__ = ["ValueType", "IniValue"]


class ValueType(str, Enum):
    """The variant held by an IniValue."""

    INT = "int"
    FLOAT = "float"
    STRING = "string"


_PY_TYPES: dict[ValueType, type] = {
    ValueType.INT: int,
    ValueType.FLOAT: float,
    ValueType.STRING: str,
}


@dataclass(frozen=True)
class IniValue:
    """A tagged union over Integer, Float and String.

    The tag is fixed at construction and must agree with the Python type of
    ``value``; ``bool`` is rejected for INT since it is not an INI type.
    """

    type: ValueType
    value: Union[int, float, str]

    def __post_init__(self) -> None:
        expected = _PY_TYPES[self.type]
        if type(self.value) is not expected:
            raise TypeError(f"{self.type.value} value must be {expected.__name__}, got {type(self.value).__name__}")

    @classmethod
    def of_int(cls, value: int) -> IniValue:
        return cls(ValueType.INT, value)

    @classmethod
    def of_float(cls, value: float) -> IniValue:
        return cls(ValueType.FLOAT, value)

    @classmethod
    def of_string(cls, value: str) -> IniValue:
        return cls(ValueType.STRING, value)
