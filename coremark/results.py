"""Shared data structures for the benchmark kernels."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, List, Optional

TOTAL_DATA_SIZE = 2 * 1000
NUM_ALGORITHMS = 3


def _to_s16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


class Algorithm(IntFlag):
    """Bitmask selecting which benchmark kernels run."""

    LIST = 1 << 0
    MATRIX = 1 << 1
    STATE = 1 << 2
    ALL = LIST | MATRIX | STATE

    def count(self) -> int:
        """Number of kernels selected by this mask."""
        return bin(int(self)).count("1")


@dataclass
class ListData:
    """Payload of a list cell: packed data word and ordering index (signed 16-bit)."""

    data16: int = 0
    idx: int = 0

    def __post_init__(self) -> None:
        self.data16 = _to_s16(self.data16)
        self.idx = _to_s16(self.idx)


@dataclass
class MatrixParams:
    """Matrices used by the matrix kernel, stored row-major."""

    n: int = 0
    a: List[int] = field(default_factory=list)
    b: List[int] = field(default_factory=list)
    c: List[int] = field(default_factory=list)


@dataclass
class CoreResults:
    """Inputs and outputs of one benchmark context."""

    seed1: int = 0
    seed2: int = 0
    seed3: int = 0
    size: int = 0
    iterations: int = 0
    execs: Algorithm = Algorithm.ALL
    list_head: Optional[Any] = None
    mat: Optional[MatrixParams] = None
    state_block: bytearray = field(default_factory=bytearray)
    crc: int = 0
    crclist: int = 0
    crcmatrix: int = 0
    crcstate: int = 0
    err: int = 0