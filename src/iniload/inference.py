"""Type inference for unquoted INI values.

An unquoted token becomes an Integer if the whole token is a C-style integer
literal (sign, then hex ``0x..``, octal ``0..`` or decimal) that fits a 32-bit
``int``. Failing that it becomes a Float if the whole token is a C-style
floating-point literal, narrowed to single precision. Anything else is kept
verbatim as a String.
"""

from __future__ import annotations

import math
import re
import struct

from iniload.types import IniValue

__all__ = [
    "INT_MIN",
    "INT_MAX",
    "infer_value",
    "parse_int_literal",
    "parse_float_literal",
    "narrow_to_float32",
    "decode_bytes",
]

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_INT_RE = re.compile(rb"[+-]?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_DEC_FLOAT_RE = re.compile(rb"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_HEX_FLOAT_RE = re.compile(rb"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?")
_SPECIAL_FLOAT_RE = re.compile(rb"[+-]?(?:inf(?:inity)?|nan)", re.IGNORECASE)


def decode_bytes(raw: bytes, encoding: str = "utf-8") -> str:
    """Decode name or value bytes, keeping undecodable bytes as surrogates."""
    return raw.decode(encoding, "surrogateescape")


def parse_int_literal(token: bytes) -> int | None:
    """Parse a whole token as a signed integer literal with base auto-detection.

    Returns None if the token is not entirely an integer literal or does not
    fit the signed 32-bit range.
    """
    if not _INT_RE.fullmatch(token):
        return None

    negative = token[:1] == b"-"
    body = token.lstrip(b"+-")
    if body[:2] in (b"0x", b"0X"):
        result = int(body[2:], 16)
    elif len(body) > 1 and body[:1] == b"0":
        result = int(body, 8)
    else:
        result = int(body, 10)
    if negative:
        result = -result

    if result < INT_MIN or result > INT_MAX:
        return None
    return result


def parse_float_literal(token: bytes) -> float | None:
    """Parse a whole token as a double-precision floating-point literal.

    Accepts decimal (``1.5``, ``.5``, ``1e3``), hexadecimal (``0x1.8p3``)
    and the special spellings ``inf``, ``infinity`` and ``nan``.
    """
    if _DEC_FLOAT_RE.fullmatch(token) or _SPECIAL_FLOAT_RE.fullmatch(token):
        return float(token.decode("ascii"))
    if _HEX_FLOAT_RE.fullmatch(token):
        return float.fromhex(token.decode("ascii"))
    return None


def narrow_to_float32(value: float) -> float:
    """Round a double to the nearest single-precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def infer_value(token: bytes, encoding: str = "utf-8") -> IniValue:
    """Classify an unquoted value token as Integer, Float or String.

    Trailing spaces and tabs are not part of the token.
    """
    token = token.rstrip(b" \t")

    as_int = parse_int_literal(token)
    if as_int is not None:
        return IniValue.of_int(as_int)

    as_float = parse_float_literal(token)
    if as_float is not None:
        return IniValue.of_float(narrow_to_float32(as_float))

    return IniValue.of_string(decode_bytes(token, encoding))
