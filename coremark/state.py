"""State machine kernel: classify comma separated numeric tokens."""

from __future__ import annotations

from enum import IntEnum
from typing import List, MutableSequence, Tuple

from coremark.crc import crcu32


class CoreState(IntEnum):
    """States of the token recognising machine."""

    START = 0
    INVALID = 1
    S1 = 2
    S2 = 3
    INT = 4
    FLOAT = 5
    EXPONENT = 6
    SCIENTIFIC = 7


NUM_CORE_STATES = len(CoreState)

_COMMA = ord(",")
_PLUS = ord("+")
_MINUS = ord("-")
_DOT = ord(".")
_EXP = (ord("E"), ord("e"))

_INT_PATTERNS = (b"5012", b"1234", b"-874", b"+122")
_FLOAT_PATTERNS = (b"35.54400", b".1234500", b"-110.700", b"+0.64400")
_SCI_PATTERNS = (b"5.500e+3", b"-.123e-2", b"-87e+832", b"+0.6e-12")
_ERR_PATTERNS = (b"T0.3e-1F", b"-T.T++Tq", b"1T3.4e4z", b"34.0e-T^")


def _to_s16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _isdigit(symbol: int) -> bool:
    return 0x30 <= symbol <= 0x39


def _pick_pattern(seed: int) -> bytes:
    kind = seed & 0x7
    which = (seed >> 3) & 0x3
    if kind <= 2:
        return _INT_PATTERNS[which]
    if kind <= 4:
        return _FLOAT_PATTERNS[which]
    if kind <= 6:
        return _SCI_PATTERNS[which]
    return _ERR_PATTERNS[which]


def core_init_state(size: int, seed: int) -> bytearray:
    """Build a zero padded block of ``size`` bytes filled with seeded tokens."""
    if size < 1:
        raise ValueError("state block size must be at least 1")
    limit = size - 1
    block = bytearray(size)
    total = 0
    pending = b""
    seed = _to_s16(seed)
    while total + len(pending) + 1 < limit:
        if pending:
            block[total:total + len(pending)] = pending
            block[total + len(pending)] = _COMMA
            total += len(pending) + 1
        seed = _to_s16(seed + 1)
        pending = _pick_pattern(seed)
    return block


def core_state_transition(
    data: bytes | bytearray,
    pos: int,
    transition_count: MutableSequence[int],
) -> Tuple[CoreState, int]:
    """Scan one token starting at ``pos``.

    Returns the final state and the position where scanning stopped;
    ``transition_count`` is updated in place.
    """
    state = CoreState.START
    end = len(data)
    while pos < end and data[pos] and state is not CoreState.INVALID:
        symbol = data[pos]
        pos += 1
        if symbol == _COMMA:
            break
        if state is CoreState.START:
            if _isdigit(symbol):
                state = CoreState.INT
            elif symbol in (_PLUS, _MINUS):
                state = CoreState.S1
            elif symbol == _DOT:
                state = CoreState.FLOAT
            else:
                state = CoreState.INVALID
                transition_count[CoreState.INVALID] += 1
            transition_count[CoreState.START] += 1
        elif state is CoreState.S1:
            if _isdigit(symbol):
                state = CoreState.INT
            elif symbol == _DOT:
                state = CoreState.FLOAT
            else:
                state = CoreState.INVALID
            transition_count[CoreState.S1] += 1
        elif state is CoreState.INT:
            if symbol == _DOT:
                state = CoreState.FLOAT
                transition_count[CoreState.INT] += 1
            elif not _isdigit(symbol):
                state = CoreState.INVALID
                transition_count[CoreState.INT] += 1
        elif state is CoreState.FLOAT:
            if symbol in _EXP:
                state = CoreState.S2
                transition_count[CoreState.FLOAT] += 1
            elif not _isdigit(symbol):
                state = CoreState.INVALID
                transition_count[CoreState.FLOAT] += 1
        elif state is CoreState.S2:
            state = CoreState.EXPONENT if symbol in (_PLUS, _MINUS) else CoreState.INVALID
            transition_count[CoreState.S2] += 1
        elif state is CoreState.EXPONENT:
            state = CoreState.SCIENTIFIC if _isdigit(symbol) else CoreState.INVALID
            transition_count[CoreState.EXPONENT] += 1
        elif state is CoreState.SCIENTIFIC:
            if not _isdigit(symbol):
                state = CoreState.INVALID
                transition_count[CoreState.INVALID] += 1
    return state, pos


def _scan(block: bytearray, final_counts: List[int], track_counts: List[int]) -> None:
    pos = 0
    end = len(block)
    while pos < end and block[pos]:
        state, pos = core_state_transition(block, pos, track_counts)
        final_counts[state] += 1


def _corrupt(block: bytearray, blksize: int, step: int, seed: int) -> None:
    mask = seed & 0xFF
    for pos in range(0, min(blksize, len(block)), step):
        if block[pos] != _COMMA:
            block[pos] ^= mask


def core_bench_state(
    blksize: int,
    memblock: bytearray,
    seed1: int,
    seed2: int,
    step: int,
    crc: int,
) -> int:
    """Run the state machine over ``memblock`` twice, with corruption between.

    The corruption is undone when ``seed1 == seed2``. Returns the updated CRC.
    """
    if step <= 0:
        raise ValueError("corruption step must be positive")
    final_counts = [0] * NUM_CORE_STATES
    track_counts = [0] * NUM_CORE_STATES

    _scan(memblock, final_counts, track_counts)
    _corrupt(memblock, blksize, step, seed1)
    _scan(memblock, final_counts, track_counts)
    _corrupt(memblock, blksize, step, seed2)

    for final, track in zip(final_counts, track_counts):
        crc = crcu32(final, crc)
        crc = crcu32(track, crc)
    return crc