"""Linked list kernel: find, reverse, sort and CRC a seeded singly linked list."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from coremark.crc import crc16, crcu16
from coremark.matrix import core_bench_matrix
from coremark.results import CoreResults, ListData, MatrixParams
from coremark.state import core_bench_state

# Bytes reserved per list cell: room for two pointers plus the payload.
_BYTES_PER_ITEM = 16 + 4

ListCmp = Callable[[ListData, ListData, Optional[CoreResults]], int]


def _to_s16(value: int) -> int:
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


@dataclass(eq=False)
class ListNode:
    """A cell of the singly linked list."""

    info: ListData
    next: Optional["ListNode"] = None

    def __iter__(self) -> Iterator["ListNode"]:
        node: Optional[ListNode] = self
        while node is not None:
            yield node
            node = node.next


def calc_func(info: ListData, res: CoreResults) -> int:
    """Compute (or fetch the cached) 7-bit value for a list cell.

    Bit 7 of ``data16`` marks a cached result. Otherwise bits 0-2 select the
    operation (state or matrix kernel) and bits 3-6 its parameter; the result
    is folded into ``res.crc`` and cached in the cell.
    """
    data = info.data16
    if (data >> 7) & 1:
        return data & 0x007F

    flag = data & 0x7
    dtype = (data >> 3) & 0xF
    dtype |= dtype << 4
    if flag == 0:
        dtype = max(dtype, 0x22)
        retval = _to_s16(
            core_bench_state(res.size, res.state_block, res.seed1, res.seed2, dtype, res.crc)
        )
        if res.crcstate == 0:
            res.crcstate = retval & 0xFFFF
    elif flag == 1:
        mat = res.mat if res.mat is not None else MatrixParams()
        retval = _to_s16(core_bench_matrix(mat, dtype, res.crc))
        if res.crcmatrix == 0:
            res.crcmatrix = retval & 0xFFFF
    else:
        retval = data

    res.crc = crcu16(retval, res.crc)
    retval &= 0x007F
    info.data16 = _to_s16((data & 0xFF00) | 0x0080 | retval)
    return retval


def cmp_complex(a: ListData, b: ListData, res: CoreResults) -> int:
    """Order cells by their computed data value."""
    val1 = calc_func(a, res)
    val2 = calc_func(b, res)
    return val1 - val2


def cmp_idx(a: ListData, b: ListData, res: Optional[CoreResults]) -> int:
    """Order cells by index; without ``res`` also restore the data from its backup byte."""
    if res is None:
        a.data16 = _to_s16((a.data16 & 0xFF00) | (0x00FF & (a.data16 >> 8)))
        b.data16 = _to_s16((b.data16 & 0xFF00) | (0x00FF & (b.data16 >> 8)))
    return a.idx - b.idx


def core_list_insert_new(insert_point: ListNode, info: ListData) -> ListNode:
    """Insert a cell holding a copy of ``info`` right after ``insert_point``."""
    newitem = ListNode(ListData(data16=info.data16, idx=info.idx), insert_point.next)
    insert_point.next = newitem
    return newitem


def core_list_init(blksize: int, seed: int) -> ListNode:
    """Build the seeded list that fits in ``blksize`` bytes and return its head.

    The list starts with a fake head cell and ends with a fake tail cell and
    is sorted by index.
    """
    size = blksize // _BYTES_PER_ITEM - 2
    if size < 3:
        raise ValueError(f"block of {blksize} bytes is too small for a list")
    seed = _to_s16(seed)

    head = ListNode(ListData(data16=0x8080, idx=0x0000))
    core_list_insert_new(head, ListData(data16=0xFFFF, idx=0x7FFF))

    # The head and tail take two of the ``size`` cells; one more stays unused.
    for i in range(size - 3):
        datpat = (seed ^ i) & 0xF
        dat = (datpat << 3) | (i & 0x7)
        core_list_insert_new(head, ListData(data16=(dat << 8) | dat, idx=0))

    i = 1
    finder = head.next
    while finder is not None and finder.next is not None:
        if i < size // 5:
            finder.info.idx = _to_s16(i)
            i += 1
        else:
            pat = (i ^ seed) & 0xFFFF
            i += 1
            finder.info.idx = _to_s16(0x3FFF & (((i & 0x07) << 8) | pat))
        finder = finder.next

    return core_list_mergesort(head, cmp_idx, None)


def core_list_remove(item: ListNode) -> ListNode:
    """Unlink the cell after ``item``, swapping payloads so ``item`` keeps the next one's."""
    ret = item.next
    if ret is None:
        raise ValueError("no cell after the given item to remove")
    item.info, ret.info = ret.info, item.info
    item.next = ret.next
    ret.next = None
    return ret


def core_list_undo_remove(item_removed: ListNode, item_modified: ListNode) -> ListNode:
    """Reverse :func:`core_list_remove`, relinking ``item_removed`` after ``item_modified``."""
    item_removed.info, item_modified.info = item_modified.info, item_removed.info
    item_removed.next = item_modified.next
    item_modified.next = item_removed
    return item_removed


def core_list_find(lst: Optional[ListNode], info: ListData) -> Optional[ListNode]:
    """Find a cell by index (when ``info.idx >= 0``) or by low data byte."""
    node = lst
    if info.idx >= 0:
        while node is not None and node.info.idx != info.idx:
            node = node.next
    else:
        while node is not None and (node.info.data16 & 0xFF) != info.data16:
            node = node.next
    return node


def core_list_reverse(lst: Optional[ListNode]) -> Optional[ListNode]:
    """Reverse the list in place and return the new head."""
    reversed_head: Optional[ListNode] = None
    node = lst
    while node is not None:
        following = node.next
        node.next = reversed_head
        reversed_head = node
        node = following
    return reversed_head


def core_list_mergesort(
    lst: Optional[ListNode], cmp: ListCmp, res: Optional[CoreResults]
) -> Optional[ListNode]:
    """Stable bottom-up merge sort of the list; returns the new head."""
    if lst is None:
        return None
    insize = 1
    while True:
        p: Optional[ListNode] = lst
        lst = None
        tail: Optional[ListNode] = None
        nmerges = 0

        while p is not None:
            nmerges += 1
            q: Optional[ListNode] = p
            psize = 0
            for _ in range(insize):
                psize += 1
                q = q.next
                if q is None:
                    break
            qsize = insize

            while psize > 0 or (qsize > 0 and q is not None):
                if psize == 0:
                    e, q = q, q.next
                    qsize -= 1
                elif qsize == 0 or q is None:
                    e, p = p, p.next
                    psize -= 1
                elif cmp(p.info, q.info, res) <= 0:
                    e, p = p, p.next
                    psize -= 1
                else:
                    e, q = q, q.next
                    qsize -= 1

                if tail is not None:
                    tail.next = e
                else:
                    lst = e
                tail = e
            p = q

        tail.next = None
        if nmerges <= 1:
            return lst
        insize *= 2


def core_bench_list(res: CoreResults, finder_idx: int) -> int:
    """Run the list benchmark once and return its 16-bit CRC.

    The list is searched, reversed, sorted by data, CRCed, and finally sorted
    back by index so that it ends in its original state.
    """
    retval = 0
    found = 0
    missed = 0
    lst = res.list_head
    if lst is None:
        raise ValueError("results hold no list to benchmark")
    find_num = _to_s16(res.seed3)
    info = ListData(idx=finder_idx)

    for i in range(find_num):
        info.data16 = i & 0xFF
        this_find = core_list_find(lst, info)
        lst = core_list_reverse(lst)
        if this_find is None:
            missed += 1
            retval = (retval + ((lst.next.info.data16 >> 8) & 1)) & 0xFFFF
        else:
            found += 1
            if this_find.info.data16 & 0x1:
                retval = (retval + ((this_find.info.data16 >> 9) & 1)) & 0xFFFF
            if this_find.next is not None:
                finder = this_find.next
                this_find.next = finder.next
                finder.next = lst.next
                lst.next = finder
        if info.idx >= 0:
            info.idx = _to_s16(info.idx + 1)

    retval = (retval + found * 4 - missed) & 0xFFFF

    if finder_idx > 0:
        lst = core_list_mergesort(lst, cmp_complex, res)
    remover = core_list_remove(lst.next)

    finder = core_list_find(lst, info) or lst.next
    while finder is not None:
        retval = crc16(lst.info.data16, retval)
        finder = finder.next

    core_list_undo_remove(remover, lst.next)
    lst = core_list_mergesort(lst, cmp_idx, None)

    finder = lst.next
    while finder is not None:
        retval = crc16(lst.info.data16, retval)
        finder = finder.next
    return retval