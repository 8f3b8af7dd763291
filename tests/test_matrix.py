import pytest

from coremark.matrix import (
    core_bench_matrix,
    core_init_matrix,
    matrix_add_const,
    matrix_mul_const,
    matrix_mul_matrix,
    matrix_mul_matrix_bitextract,
    matrix_mul_vect,
    matrix_sum,
    matrix_test,
)


def _identity(n):
    return [1 if row == col else 0 for row in range(n) for col in range(n)]


@pytest.mark.parametrize("blksize", [400, 666, 2000])
def test_init_dimension_fits_block(blksize):
    params = core_init_matrix(blksize, 0x3415)
    n = params.n
    assert 8 * n * n < blksize <= 8 * (n + 1) * (n + 1)
    assert len(params.a) == n * n
    assert len(params.b) == n * n
    assert len(params.c) == n * n


def test_init_zero_seed_same_as_one():
    assert core_init_matrix(666, 0) == core_init_matrix(666, 1)


def test_init_value_ranges():
    params = core_init_matrix(2000, 0x34153415)
    assert all(0 <= x <= 255 for x in params.a)
    assert all(-32768 <= x <= 32767 for x in params.b)


def test_init_depends_on_seed():
    assert core_init_matrix(666, 1).b != core_init_matrix(666, 2).b


def test_add_const_round_trip():
    a = [1, -5, 32767, -32768]
    original = list(a)
    matrix_add_const(2, a, 100)
    assert a[2] == 32767 + 100 - 65536
    matrix_add_const(2, a, -100)
    assert a == original


def test_mul_const_small():
    assert matrix_mul_const(2, [1, 2, 3, 4], 3) == [3, 6, 9, 12]


def test_mul_matrix_identity_left():
    b = [5, -7, 11, 13, 2, -3, 8, 9, 4]
    assert matrix_mul_matrix(3, _identity(3), b) == b


def test_mul_matrix_identity_right():
    a = [5, -7, 11, 13, 2, -3, 8, 9, 4]
    assert matrix_mul_matrix(3, a, _identity(3)) == a


def test_mul_vect_identity_returns_first_row_of_b():
    b = [5, -7, 11, 13, 2, -3, 8, 9, 4]
    assert matrix_mul_vect(3, _identity(3), b) == b[:3]


def test_mul_vect_wraps_to_32_bits():
    a = [32767] * 9
    b = [32767] * 9
    result = matrix_mul_vect(3, a, b)
    assert all(-(2**31) <= x < 2**31 for x in result)
    assert len(result) == 3


def test_bitextract_zero_matrix():
    assert matrix_mul_matrix_bitextract(2, [0] * 4, [7] * 4) == [0] * 4


def test_bitextract_results_are_nonnegative():
    params = core_init_matrix(666, 42)
    result = matrix_mul_matrix_bitextract(params.n, params.a, params.b)
    assert all(x >= 0 for x in result)


def test_sum_all_zero():
    assert matrix_sum(2, [0, 0, 0, 0], 100) == 0


def test_sum_rising_element():
    assert matrix_sum(1, [5], 100) == 1


def test_sum_clip_adds_ten():
    assert matrix_sum(1, [500], 100) == 10


def test_matrix_test_restores_a():
    params = core_init_matrix(666, 7)
    original = list(params.a)
    matrix_test(params, 0x22)
    assert params.a == original


def test_matrix_test_is_deterministic():
    first = core_init_matrix(666, 7)
    second = core_init_matrix(666, 7)
    assert matrix_test(first, 0x55) == matrix_test(second, 0x55)
    assert -32768 <= matrix_test(first, 0x55) <= 32767


def test_bench_matrix_keeps_a_and_is_repeatable():
    params = core_init_matrix(2000, 0)
    original = list(params.a)
    crc1 = core_bench_matrix(params, 0x33, 0)
    crc2 = core_bench_matrix(params, 0x33, 0)
    assert crc1 == crc2
    assert 0 <= crc1 <= 0xFFFF
    assert params.a == original