"""Matrix kernel: small integer matrix arithmetic folded into a CRC."""

from __future__ import annotations

from typing import List, MutableSequence, Sequence

from coremark.crc import crc16
from coremark.results import MatrixParams


def _to_s16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _to_s32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _c_mod(value: int, modulus: int) -> int:
    """Remainder with the sign of the dividend, as in C."""
    rem = abs(value) % modulus
    return -rem if value < 0 else rem


def _big(val: int) -> int:
    return _to_s16(0xF000 | val)


def _bit_extract(value: int, start: int, width: int) -> int:
    return (value >> start) & ((1 << width) - 1)


def core_init_matrix(blksize: int, seed: int) -> MatrixParams:
    """Build the A and B matrices that fit in ``blksize`` bytes.

    The dimension N is the largest one for which two 16-bit and one 32-bit
    N x N matrices fit; values depend on ``seed`` (0 is treated as 1).
    """
    seed = _to_s32(seed)
    if seed == 0:
        seed = 1
    i = 0
    used = 0
    while used < blksize:
        i += 1
        used = i * i * 2 * 4
    n = max(i - 1, 0)

    a: List[int] = []
    b: List[int] = []
    order = 1
    for _ in range(n * n):
        seed = _c_mod(_to_s32(order * seed), 65536)
        val = _to_s16(seed + order)
        b.append(val)
        val = _to_s16(val + order) & 0xFF
        a.append(val)
        order += 1

    return MatrixParams(n=n, a=a, b=b, c=[0] * (n * n))


def matrix_sum(n: int, c: Sequence[int], clipval: int) -> int:
    """Score the result matrix: +1 for each rising element, +10 on each clip."""
    tmp = prev = 0
    ret = 0
    for cur in c[: n * n]:
        tmp = _to_s32(tmp + cur)
        if tmp > clipval:
            ret = _to_s16(ret + 10)
            tmp = 0
        elif cur > prev:
            ret = _to_s16(ret + 1)
        prev = cur
    return ret


def matrix_mul_const(n: int, a: Sequence[int], val: int) -> List[int]:
    """Return ``a`` multiplied element-wise by ``val``."""
    return [_to_s32(x * val) for x in a[: n * n]]


def matrix_add_const(n: int, a: MutableSequence[int], val: int) -> None:
    """Add ``val`` to every element of ``a`` in place, with 16-bit wrap."""
    for k in range(n * n):
        a[k] = _to_s16(a[k] + val)


def matrix_mul_vect(n: int, a: Sequence[int], b: Sequence[int]) -> List[int]:
    """Multiply matrix ``a`` by the vector formed by the first N entries of ``b``."""
    vector = b[:n]
    return [
        _to_s32(sum(x * y for x, y in zip(a[row * n:(row + 1) * n], vector)))
        for row in range(n)
    ]


def matrix_mul_matrix(n: int, a: Sequence[int], b: Sequence[int]) -> List[int]:
    """Return the matrix product ``a @ b``."""
    columns = [b[col::n][:n] for col in range(n)]
    return [
        _to_s32(sum(x * y for x, y in zip(a[row * n:(row + 1) * n], column)))
        for row in range(n)
        for column in columns
    ]


def matrix_mul_matrix_bitextract(n: int, a: Sequence[int], b: Sequence[int]) -> List[int]:
    """Matrix product where each partial product is reduced to two bit fields."""
    columns = [b[col::n][:n] for col in range(n)]
    result: List[int] = []
    for row in range(n):
        a_row = a[row * n:(row + 1) * n]
        for column in columns:
            acc = 0
            for x, y in zip(a_row, column):
                tmp = _to_s32(x * y)
                acc = _to_s32(acc + _bit_extract(tmp, 2, 4) * _bit_extract(tmp, 5, 7))
            result.append(acc)
    return result


def matrix_test(params: MatrixParams, val: int) -> int:
    """Run the full sequence of matrix operations and return their CRC.

    Matrix A is back to its original contents afterwards. The CRC is
    returned as a signed 16-bit value.
    """
    n = params.n
    a = params.a
    b = params.b
    val = _to_s16(val)
    clipval = _big(val)
    crc = 0

    matrix_add_const(n, a, val)
    c = matrix_mul_const(n, a, val)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    c[:n] = matrix_mul_vect(n, a, b)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    c = matrix_mul_matrix(n, a, b)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    c = matrix_mul_matrix_bitextract(n, a, b)
    crc = crc16(matrix_sum(n, c, clipval), crc)
    matrix_add_const(n, a, _to_s16(-val))

    params.c = c
    return _to_s16(crc)


def core_bench_matrix(params: MatrixParams, seed: int, crc: int) -> int:
    """Run :func:`matrix_test` with ``seed`` and fold its result into ``crc``."""
    return crc16(matrix_test(params, _to_s16(seed)), crc)