"""nightlist — list reconciliation for a sleep-tracking screen.

Public re-exports
-----------------

* **Reconciler:** :class:`ListReconciler`, :func:`compute_edits`,
  :func:`apply_edits`
* **Configuration:** :class:`NightlistConfig`
* **Errors:** Every :class:`NightlistError` subclass and :class:`ErrorCode`
* **Models:** Edit-script types and :class:`SleepNight`
* **Presentation:** :class:`ListAdapter`, :class:`ItemCallback`,
  :class:`Observable`, :class:`EventSource`

Usage::

    from nightlist import compute_edits

    script = compute_edits(old, new, identity=lambda n: n.night_id)
    for op in script:
        print(op.op_type, op.position)
"""

from __future__ import annotations

# ── Configuration ───────────────────────────────────────────────────────
from nightlist.config import NightlistConfig

# ── Reconciler ──────────────────────────────────────────────────────────
from nightlist.diff import (
    ListReconciler,
    apply_edits,
    compute_edits,
    longest_increasing_subsequence,
)

# ── Errors ──────────────────────────────────────────────────────────────
from nightlist.errors import (
    DuplicateIdentityError,
    ErrorCode,
    InvalidQualityError,
    InvalidRangeError,
    NightlistError,
    NightNotFoundError,
)

# ── Models ──────────────────────────────────────────────────────────────
from nightlist.models import EditOp, EditOpType, EditScript, SleepNight

# ── Presentation ────────────────────────────────────────────────────────
from nightlist.presentation import (
    EventSource,
    ItemCallback,
    ListAdapter,
    ListTarget,
    Observable,
    Subscription,
)

# ── Public surface ──────────────────────────────────────────────────────

__all__ = [
    # Reconciler
    "ListReconciler",
    "compute_edits",
    "apply_edits",
    "longest_increasing_subsequence",
    # Configuration
    "NightlistConfig",
    # Errors
    "NightlistError",
    "ErrorCode",
    "DuplicateIdentityError",
    "InvalidRangeError",
    "InvalidQualityError",
    "NightNotFoundError",
    # Models
    "EditOp",
    "EditOpType",
    "EditScript",
    "SleepNight",
    # Presentation
    "ItemCallback",
    "ListAdapter",
    "ListTarget",
    "Observable",
    "EventSource",
    "Subscription",
]
