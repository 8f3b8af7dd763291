"""Decimal digit conversion of floating point numbers (ecvt/fcvt style)."""

from __future__ import annotations

import math
from typing import List, NamedTuple

CVTBUFSIZE = 80


class Conversion(NamedTuple):
    """Digits of a converted number, the decimal point position and its sign."""

    digits: str
    decpt: int
    negative: bool


def _text(values: List[int]) -> str:
    return "".join(str(value) for value in values)


def _integer_digits(whole: float) -> List[int]:
    """Digits of the integral part, most significant first."""
    digits: List[int] = []
    while whole != 0:
        fraction, whole = math.modf(whole / 10)
        digits.append(int((fraction + 0.03) * 10))
    digits.reverse()
    return digits


def _cvt(arg: float, ndigits: int, exponent_form: bool) -> Conversion:
    arg = float(arg)
    if not math.isfinite(arg):
        raise ValueError(f"cannot convert non-finite value {arg!r}")
    ndigits = min(max(ndigits, 0), CVTBUFSIZE - 2)

    negative = arg < 0
    if negative:
        arg = -arg
    arg, whole = math.modf(arg)

    buf = [0] * CVTBUFSIZE
    p = 0
    r2 = 0
    if whole != 0:
        int_digits = _integer_digits(whole)
        r2 = len(int_digits)
        kept = int_digits[:CVTBUFSIZE]
        buf[: len(kept)] = kept
        p = len(kept)
    elif arg > 0:
        while arg * 10 < 1:
            arg *= 10
            r2 -= 1

    p1 = ndigits if exponent_form else ndigits + r2
    decpt = r2
    if p1 < 0:
        return Conversion("", decpt, negative)

    while p <= p1 and p < CVTBUFSIZE:
        arg, digit = math.modf(arg * 10)
        buf[p] = int(digit)
        p += 1

    if p1 >= CVTBUFSIZE:
        return Conversion(_text(buf[: CVTBUFSIZE - 1]), decpt, negative)

    p = p1
    buf[p1] += 5
    while buf[p1] > 9:
        buf[p1] = 0
        if p1 > 0:
            p1 -= 1
            buf[p1] += 1
        else:
            buf[p1] = 1
            decpt += 1
            if not exponent_form:
                if p > 0:
                    buf[p] = 0
                p += 1
    return Conversion(_text(buf[:p]), decpt, negative)


def ecvt(arg: float, ndigits: int) -> Conversion:
    """Convert ``arg`` to ``ndigits`` significant digits, rounded half up."""
    return _cvt(arg, ndigits, exponent_form=True)


def fcvt(arg: float, ndigits: int) -> Conversion:
    """Convert ``arg`` to digits with ``ndigits`` digits after the decimal point."""
    return _cvt(arg, ndigits, exponent_form=False)