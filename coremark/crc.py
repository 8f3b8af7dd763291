"""16-bit CRC helpers and seed parsing used to fingerprint benchmark results."""

from __future__ import annotations

from itertools import takewhile
from typing import Sequence

_HEX_DIGITS = "0123456789abcdef"
_DEC_DIGITS = "0123456789"


def crcu8(data: int, crc: int) -> int:
    """Feed one byte into the running 16-bit CRC."""
    data &= 0xFF
    crc &= 0xFFFF
    for _ in range(8):
        carry = (data ^ crc) & 1
        data >>= 1
        if carry:
            crc ^= 0x4002
        crc >>= 1
        if carry:
            crc |= 0x8000
    return crc


def crcu16(newval: int, crc: int) -> int:
    """Feed a 16-bit value into the CRC, low byte first."""
    newval &= 0xFFFF
    crc = crcu8(newval & 0xFF, crc)
    return crcu8(newval >> 8, crc)


def crc16(newval: int, crc: int) -> int:
    """Feed a signed 16-bit value into the CRC."""
    return crcu16(newval & 0xFFFF, crc)


def crcu32(newval: int, crc: int) -> int:
    """Feed a 32-bit value into the CRC, low half first."""
    newval &= 0xFFFFFFFF
    crc = crc16(newval & 0xFFFF, crc)
    return crc16(newval >> 16, crc)


def _to_s32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def parseval(valstring: str) -> int:
    """Parse a decimal or ``0x`` hex number with optional ``K``/``M`` suffix.

    Parsing stops at the first character that is not a digit; an empty
    number counts as zero.
    """
    text = valstring
    negative = text.startswith("-")
    if negative:
        text = text[1:]
    if text.startswith("0x"):
        base, allowed = 16, _HEX_DIGITS
        text = text[2:]
    else:
        base, allowed = 10, _DEC_DIGITS

    digits = "".join(takewhile(lambda ch: ch in allowed, text))
    value = 0
    for ch in digits:
        value = value * base + allowed.index(ch)

    suffix = text[len(digits):len(digits) + 1]
    if suffix == "K":
        value *= 1024
    elif suffix == "M":
        value *= 1024 * 1024

    if negative:
        value = -value
    return _to_s32(value)


def get_seed_args(i: int, argv: Sequence[str]) -> int:
    """Return the ``i``-th command line argument parsed as a seed, or 0."""
    if len(argv) > i:
        return parseval(argv[i])
    return 0