import pytest

from coremark.crc import crcu16
from coremark.listbench import (
    ListNode,
    calc_func,
    cmp_complex,
    cmp_idx,
    core_bench_list,
    core_list_find,
    core_list_init,
    core_list_insert_new,
    core_list_mergesort,
    core_list_remove,
    core_list_reverse,
    core_list_undo_remove,
)
from coremark.matrix import core_init_matrix
from coremark.results import Algorithm, CoreResults, ListData
from coremark.state import core_init_state


def _make_results(seed1, seed2, seed3, size):
    res = CoreResults(seed1=seed1, seed2=seed2, seed3=seed3, size=size, execs=Algorithm.ALL)
    res.list_head = core_list_init(size, seed1)
    res.mat = core_init_matrix(size, seed1 | (seed2 << 16))
    res.state_block = core_init_state(size, seed1)
    return res


def _first_iteration(res):
    crc = core_bench_list(res, 1)
    res.crc = crcu16(crc, res.crc)
    crc = core_bench_list(res, -1)
    res.crc = crcu16(crc, res.crc)
    return res.crc


def _snapshot(head):
    return [(node.info.idx, node.info.data16) for node in head]


def _chain(*idxs):
    head = None
    for idx in reversed(idxs):
        head = ListNode(ListData(data16=idx, idx=idx), head)
    return head


@pytest.mark.parametrize(
    "seeds, size, crclist, crcmatrix, crcstate",
    [
        ((0, 0, 0x66), 666, 0xE714, 0x1FD7, 0x8E3A),
        ((0x3415, 0x3415, 0x66), 666, 0xE3C1, 0x0747, 0x8D84),
        ((0, 0, 0x66), 2000, 0xD4B0, 0xBE52, 0x5E47),
    ],
)
def test_known_crcs(seeds, size, crclist, crcmatrix, crcstate):
    res = _make_results(*seeds, size)
    assert _first_iteration(res) == crclist
    assert res.crcmatrix == crcmatrix
    assert res.crcstate == crcstate


def test_list_init_too_small():
    with pytest.raises(ValueError):
        core_list_init(40, 0)


def test_bench_list_restores_list():
    res = _make_results(0, 0, 0x66, 666)
    before = _snapshot(res.list_head)
    core_bench_list(res, 1)
    core_bench_list(res, -1)
    assert _snapshot(res.list_head) == before


def test_bench_list_is_deterministic():
    a = _make_results(0x3415, 0x3415, 0x66, 666)
    b = _make_results(0x3415, 0x3415, 0x66, 666)
    assert core_bench_list(a, -1) == core_bench_list(b, -1)
    assert 0 <= core_bench_list(a, -1) <= 0xFFFF


def test_bench_list_without_list():
    with pytest.raises(ValueError):
        core_bench_list(CoreResults(seed3=1), 1)


def test_reverse_round_trip():
    head = _chain(1, 2, 3, 4)
    rev = core_list_reverse(head)
    assert [n.info.idx for n in rev] == [4, 3, 2, 1]
    back = core_list_reverse(rev)
    assert [n.info.idx for n in back] == [1, 2, 3, 4]
    assert core_list_reverse(None) is None


def test_remove_and_undo():
    head = _chain(1, 2, 3)
    removed = core_list_remove(head)
    assert [n.info.idx for n in head] == [2, 3]
    assert removed.next is None
    assert removed.info.idx == 1
    core_list_undo_remove(removed, head)
    assert [n.info.idx for n in head] == [1, 2, 3]


def test_remove_at_end_raises():
    with pytest.raises(ValueError):
        core_list_remove(_chain(1))


def test_find_by_idx_and_data():
    head = _chain(5, 7, 9)
    assert core_list_find(head, ListData(idx=7)).info.idx == 7
    assert core_list_find(head, ListData(idx=8)) is None
    assert core_list_find(head, ListData(data16=9, idx=-1)).info.idx == 9
    assert core_list_find(head, ListData(data16=6, idx=-1)) is None


def test_insert_new_copies_info():
    head = _chain(1, 2)
    info = ListData(data16=3, idx=3)
    node = core_list_insert_new(head, info)
    info.idx = 99
    assert [n.info.idx for n in head] == [1, 3, 2]
    assert node.info.idx == 3


def test_mergesort_by_idx():
    head = _chain(5, 3, 9, 1, 7, 2)
    result = core_list_mergesort(head, cmp_idx, None)
    assert [n.info.idx for n in result] == [1, 2, 3, 5, 7, 9]
    assert core_list_mergesort(None, cmp_idx, None) is None


def test_mergesort_is_stable():
    nodes = [ListNode(ListData(data16=k, idx=i)) for k, i in enumerate([2, 1, 2, 1])]
    for a, b in zip(nodes, nodes[1:]):
        a.next = b
    result = core_list_mergesort(nodes[0], cmp_idx, CoreResults())
    assert [n.info.data16 for n in result] == [1, 3, 0, 2]


def test_cmp_idx_restores_data():
    a = ListData(data16=0x1234, idx=4)
    b = ListData(data16=0x0101, idx=1)
    assert cmp_idx(a, b, None) == 3
    assert a.data16 == 0x1212
    assert b.data16 == 0x0101


def test_cmp_idx_with_results_leaves_data():
    a = ListData(data16=0x1234, idx=1)
    b = ListData(data16=0x0000, idx=4)
    assert cmp_idx(a, b, CoreResults()) == -3
    assert a.data16 == 0x1234


def test_calc_func_cached_value():
    res = CoreResults()
    info = ListData(data16=0x00C5, idx=0)
    assert calc_func(info, res) == 0x45
    assert res.crc == 0
    assert info.data16 == 0x00C5


def test_calc_func_default_operation_caches():
    res = CoreResults()
    info = ListData(data16=0x1A1A, idx=0)
    value = calc_func(info, res)
    assert value == 0x1A1A & 0x7F
    assert res.crc == crcu16(0x1A1A, 0)
    assert info.data16 == (0x1A1A & 0xFF00) | 0x80 | value
    assert calc_func(info, res) == value


def test_cmp_complex_uses_cached_values():
    res = CoreResults()
    a = ListData(data16=0x0085, idx=0)
    b = ListData(data16=0x0082, idx=0)
    assert cmp_complex(a, b, res) == 3
    assert cmp_complex(b, a, res) == -3