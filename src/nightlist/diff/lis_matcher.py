"""Longest increasing subsequence over old positions.

The reconciler lists the old position of every common item in new order.
Items whose old positions form the longest strictly increasing run of
that sequence are already in the right relative order and can stay where
they are; every other common item needs exactly one move.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence


def longest_increasing_subsequence(seq: Sequence[int]) -> list[int]:
    """Return the indices of one longest strictly increasing subsequence.

    Uses patience sorting with binary search, ``O(n log n)``.  When several
    subsequences share the maximal length the result is deterministic: at
    every length the candidate with the smallest tail value wins, and ties
    go to the earliest index.

    Parameters
    ----------
    seq:
        Integers to scan.  The reconciler always passes distinct values.

    Returns
    -------
    list[int]
        Ascending indices into *seq* whose values are strictly increasing.
        Empty when *seq* is empty.

    Examples
    --------
    >>> longest_increasing_subsequence([1, 2, 0])
    [0, 1]
    >>> longest_increasing_subsequence([3, 0, 1, 2])
    [1, 2, 3]
    """
    if not seq:
        return []

    # tails[k] is the smallest tail value of any increasing run of length
    # k + 1 seen so far; tail_idx[k] is the index holding that value.
    tails: list[int] = []
    tail_idx: list[int] = []
    predecessor: list[int] = [-1] * len(seq)

    for i, value in enumerate(seq):
        k = bisect_left(tails, value)
        if k == len(tails):
            tails.append(value)
            tail_idx.append(i)
        else:
            tails[k] = value
            tail_idx[k] = i
        predecessor[i] = tail_idx[k - 1] if k > 0 else -1

    # Walk the predecessor chain back from the longest run.
    result: list[int] = []
    i = tail_idx[-1]
    while i != -1:
        result.append(i)
        i = predecessor[i]

    result.reverse()
    return result
