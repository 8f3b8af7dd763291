"""A small printf implementation with 32-bit integer semantics."""

from __future__ import annotations

import sys
from typing import Any, Callable, Iterator

from coremark.cvt import fcvt

ZEROPAD = 1 << 0
SIGN = 1 << 1
PLUS = 1 << 2
SPACE = 1 << 3
LEFT = 1 << 4
HEX_PREP = 1 << 5
UPPERCASE = 1 << 6

_FLAG_CHARS = {"-": LEFT, "+": PLUS, " ": SPACE, "#": HEX_PREP, "0": ZEROPAD}
_DECIMAL = "0123456789"
_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
_UPPER_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_BASES = {"o": 8, "x": 16, "X": 16, "d": 10, "i": 10, "u": 10}


def _to_s32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _justify(prefix: str, body: str, width: int, flags: int) -> str:
    """Place ``width`` padding characters around ``prefix`` and ``body``."""
    pad = max(width, 0)
    if flags & LEFT:
        return prefix + body + " " * pad
    if flags & ZEROPAD:
        return prefix + "0" * pad + body
    return " " * pad + prefix + body


def _in_base(value: int, base: int, alphabet: str) -> str:
    if value == 0:
        return "0"
    out = []
    while value:
        value, digit = divmod(value, base)
        out.append(alphabet[digit])
    return "".join(reversed(out))


def _number(value: int, base: int, size: int, precision: int, flags: int) -> str:
    alphabet = _UPPER_DIGITS if flags & UPPERCASE else _DIGITS
    sign = ""
    if flags & SIGN:
        if value < 0:
            sign = "-"
            value = -value
        elif flags & PLUS:
            sign = "+"
        elif flags & SPACE:
            sign = " "
    prep = ""
    if flags & HEX_PREP:
        if base == 16:
            prep = "0x"
        elif base == 8:
            prep = "0"
    text = _in_base(value, base, alphabet)
    precision = max(precision, len(text))
    body = "0" * (precision - len(text)) + text
    return _justify(sign + prep, body, size - len(sign) - len(prep) - precision, flags)


def _format_fixed(value: float, precision: int) -> str:
    conv = fcvt(value, precision)
    prefix = "-" if conv.negative else ""
    digits, decpt = conv.digits, conv.decpt
    if digits:
        if decpt <= 0:
            return prefix + "0." + "0" * -decpt + digits
        if decpt < len(digits):
            return prefix + digits[:decpt] + "." + digits[decpt:]
        return prefix + digits
    return prefix + "0" + ("." + "0" * precision if precision > 0 else "")


def _float(num: float, size: int, precision: int, flags: int) -> str:
    sign = ""
    if num < 0.0:
        sign = "-"
        num = -num
    elif flags & PLUS:
        sign = "+"
    elif flags & SPACE:
        sign = " "
    if precision < 0:
        precision = 6
    text = _format_fixed(num, precision)
    if flags & HEX_PREP and precision == 0 and "." not in text:
        text += "."
    return _justify(sign, text, size - len(sign) - len(text), flags)


def _ethernet_address(addr: bytes, flags: int) -> str:
    if len(addr) < 6:
        raise ValueError("an ethernet address needs 6 bytes")
    alphabet = _UPPER_DIGITS if flags & UPPERCASE else _DIGITS
    return ":".join(alphabet[b >> 4] + alphabet[b & 0x0F] for b in addr[:6])


def _ip_address(addr: bytes) -> str:
    if len(addr) < 4:
        raise ValueError("an IP address needs 4 bytes")
    return ".".join(str(b) for b in addr[:4])


def _arg_source(args: tuple) -> Callable[[], Any]:
    iterator: Iterator[Any] = iter(args)

    def next_arg() -> Any:
        try:
            return next(iterator)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    return next_arg


def _read_decimal(fmt: str, pos: int) -> tuple[int, int]:
    start = pos
    while pos < len(fmt) and fmt[pos] in _DECIMAL:
        pos += 1
    return int(fmt[start:pos]), pos


def ee_sprintf(fmt: str, *args: Any) -> str:
    """Format ``args`` according to ``fmt`` and return the text.

    Supports the flags ``-+ #0``, width and precision (also as ``*``), the
    ``l``/``L`` qualifier and the conversions ``c s p a A o x X d i u f``.
    Integers are handled as 32-bit values. Unknown conversions are copied
    through without consuming an argument.
    """
    next_arg = _arg_source(args)
    out = []
    pos, end = 0, len(fmt)
    while pos < end:
        if fmt[pos] != "%":
            out.append(fmt[pos])
            pos += 1
            continue
        pos += 1

        flags = 0
        while pos < end and fmt[pos] in _FLAG_CHARS:
            flags |= _FLAG_CHARS[fmt[pos]]
            pos += 1

        field_width = -1
        if pos < end and fmt[pos] in _DECIMAL:
            field_width, pos = _read_decimal(fmt, pos)
        elif pos < end and fmt[pos] == "*":
            pos += 1
            field_width = int(next_arg())
            if field_width < 0:
                field_width = -field_width
                flags |= LEFT

        precision = -1
        if pos < end and fmt[pos] == ".":
            pos += 1
            if pos < end and fmt[pos] in _DECIMAL:
                precision, pos = _read_decimal(fmt, pos)
            elif pos < end and fmt[pos] == "*":
                pos += 1
                precision = int(next_arg())
            precision = max(precision, 0)

        qualifier = ""
        if pos < end and fmt[pos] in "lL":
            qualifier = fmt[pos]
            pos += 1

        conv = fmt[pos] if pos < end else ""
        pos += 1

        if conv == "c":
            value = next_arg()
            char = value if isinstance(value, str) else chr(int(value) & 0xFF)
            out.append(_justify("", char, field_width - 1, flags & LEFT))
        elif conv == "s":
            value = next_arg()
            text = "<NULL>" if value is None else str(value)
            text = text.split("\0", 1)[0]
            if precision >= 0:
                text = text[:precision]
            out.append(_justify("", text, field_width - len(text), flags & LEFT))
        elif conv == "p":
            if field_width == -1:
                field_width = 8
                flags |= ZEROPAD
            value = int(next_arg()) & 0xFFFFFFFF
            out.append(_number(value, 16, field_width, precision, flags))
        elif conv in ("a", "A"):
            if conv == "A":
                flags |= UPPERCASE
            addr = bytes(next_arg())
            text = _ethernet_address(addr, flags) if qualifier == "l" else _ip_address(addr)
            out.append(_justify("", text, field_width - len(text), flags & LEFT))
        elif conv in _BASES:
            if conv == "X":
                flags |= UPPERCASE
            if conv in "di":
                flags |= SIGN
            raw = int(next_arg())
            value = _to_s32(raw) if flags & SIGN else raw & 0xFFFFFFFF
            out.append(_number(value, _BASES[conv], field_width, precision, flags))
        elif conv == "f":
            out.append(_float(float(next_arg()), field_width, precision, flags | SIGN))
        else:
            if conv != "%":
                out.append("%")
            out.append(conv)
    return "".join(out)


def ee_printf(fmt: str, *args: Any) -> int:
    """Format and write to standard output; return the number of characters sent.

    Output stops at the first NUL character, as on the serial console.
    """
    text = ee_sprintf(fmt, *args).split("\0", 1)[0]
    sys.stdout.write(text)
    return len(text)