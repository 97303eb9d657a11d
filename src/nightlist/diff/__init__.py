"""List reconciliation engine.

Exports
-------
ListReconciler
    Computes the edit script between two list snapshots.
compute_edits
    Module-level shortcut for :meth:`ListReconciler.compute_edits`.
apply_edits
    Replays an edit script against a list with bounds checking.
longest_increasing_subsequence
    Indices of one longest strictly increasing run of a sequence.
"""

from .apply import apply_edits, apply_op
from .lis_matcher import longest_increasing_subsequence
from .reconciler import ListReconciler, compute_edits

__all__ = [
    "ListReconciler",
    "apply_edits",
    "apply_op",
    "compute_edits",
    "longest_increasing_subsequence",
]
