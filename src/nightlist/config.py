"""Configuration for nightlist.

:class:`NightlistConfig` is a plain dataclass that captures every tuneable
knob of the reconciler and the list adapter.  Instances are passed to
:class:`~nightlist.diff.ListReconciler` and
:class:`~nightlist.presentation.ListAdapter`; both fall back to a default
instance when none is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class NightlistConfig:
    """Complete configuration for the reconciler and adapter.

    Every parameter has a sensible default.

    Parameters
    ----------
    detect_moves:
        Emit ``MOVE`` operations for items whose relative order changed.

        * ``True`` — keep the longest increasing run of old positions in
          place and move everything else (fewest moves).
        * ``False`` — never move; out-of-order items are removed and
          re-inserted, so scripts contain only insert/remove/update.
    verify_edits:
        Replay every produced script against the old snapshot and raise
        :class:`InvalidRangeError` if it does not reproduce the new one.
    max_items:
        Upper bound on snapshot length.  ``None`` disables the check.
    metrics:
        A :class:`~nightlist.observability.MetricsHook` implementation.
        ``None`` uses the no-op hook.
    debug_dump_edits:
        Write every computed edit script to *stderr* as JSON.
    """

    # ── Reconciler ──────────────────────────────────────────────────────
    detect_moves: bool = True

    verify_edits: bool = False

    max_items: int | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_edits: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.max_items is not None and self.max_items < 0:
            raise ValueError(f"max_items must be >= 0, got {self.max_items}")
