"""List reconciler: compute the edit script between two list snapshots.

Given the list currently on screen and the new authoritative list, the
reconciler produces a :class:`EditScript` that transforms the former into
the latter with as few moves as possible.  Items are matched across
snapshots by a caller-supplied identity function; matched items whose
content differs are refreshed with an ``UPDATE``.
"""

from __future__ import annotations

import json
import operator
import sys
import time
from collections import Counter
from collections.abc import Callable, Hashable, Sequence
from typing import Any

from nightlist.config import NightlistConfig
from nightlist.errors import DuplicateIdentityError, InvalidRangeError
from nightlist.models import EditOp, EditScript
from nightlist.observability import get_logger, resolve_metrics

from .apply import apply_op
from .lis_matcher import longest_increasing_subsequence
from .occupancy import OccupancyIndex

log = get_logger("nightlist.diff")

IdentityFn = Callable[[Any], Hashable]
ContentEqualsFn = Callable[[Any, Any], bool]


def _index_by_identity(
    items: Sequence[Any], identity: IdentityFn, side: str,
) -> tuple[list[Hashable], dict[Hashable, int]]:
    """Return the keys of *items* in order and a key→position map."""
    keys: list[Hashable] = []
    positions: dict[Hashable, int] = {}
    for pos, item in enumerate(items):
        key = identity(item)
        if key in positions:
            raise DuplicateIdentityError(
                f"Duplicate identity {key!r} in {side} snapshot "
                f"at positions {positions[key]} and {pos}",
                context={
                    "snapshot": side,
                    "key": key,
                    "positions": [positions[key], pos],
                },
            )
        positions[key] = pos
        keys.append(key)
    return keys, positions


class ListReconciler:
    """Plans edit scripts between list snapshots.

    The reconciler is stateless between calls: each call takes two
    snapshots and returns one script, retaining neither.  A single instance
    may be shared across threads.

    Parameters
    ----------
    config:
        Library configuration (move detection, verification, metrics and
        debug flags).  Defaults to :class:`NightlistConfig()`.
    """

    def __init__(self, config: NightlistConfig | None = None) -> None:
        self._config = config if config is not None else NightlistConfig()
        self._metrics = resolve_metrics(self._config.metrics)

    def compute_edits(
        self,
        old: Sequence[Any],
        new: Sequence[Any],
        identity: IdentityFn,
        content_equals: ContentEqualsFn = operator.eq,
    ) -> EditScript:
        """Compute the edit script that turns *old* into *new*.

        Operations are emitted in this order:

        - **REMOVE** for items only in *old*, highest position first.
        - **MOVE** for common items outside the longest increasing run of
          old positions, in new order; each lands right after its new-order
          predecessor.
        - **INSERT** for items only in *new*, lowest position first.
        - **UPDATE** for common items whose content differs, anchored at
          the new position.

        With ``detect_moves=False`` out-of-order common items are removed
        and re-inserted instead of moved.

        Parameters
        ----------
        old:
            The snapshot currently displayed.
        new:
            The snapshot to display next.
        identity:
            Pure function returning a hashable key, unique per snapshot.
        content_equals:
            Pure equality predicate, called as ``content_equals(old_item,
            new_item)``.  Defaults to ``==``.

        Returns
        -------
        EditScript
            Empty when the snapshots agree by identity and content.

        Raises
        ------
        DuplicateIdentityError
            If *identity* repeats a key within either snapshot.
        InvalidRangeError
            If ``verify_edits`` is on and the script fails to replay.
        ValueError
            If a snapshot exceeds ``max_items``.
        """
        old_items = tuple(old)
        new_items = tuple(new)
        self._check_size(old_items, "old")
        self._check_size(new_items, "new")

        t0 = time.monotonic()

        old_keys, old_pos = _index_by_identity(old_items, identity, "old")
        new_keys, new_pos = _index_by_identity(new_items, identity, "new")

        if self._config.detect_moves:
            ops = self._plan_with_moves(
                old_keys, new_keys, old_pos, new_pos, old_items, new_items, content_equals,
            )
        else:
            ops = self._plan_without_moves(
                old_keys, new_keys, old_pos, new_pos, old_items, new_items, content_equals,
            )
        script = EditScript(tuple(ops))

        if self._config.verify_edits:
            _verify(
                old_items, new_items, old_keys, new_keys, script, identity, content_equals,
            )

        elapsed_ms = (time.monotonic() - t0) * 1000
        self._emit_metrics(script, len(old_items), len(new_items), elapsed_ms)
        log.debug(
            "reconcile complete",
            extra={
                "extra_fields": {
                    "op": "compute_edits",
                    "old_size": len(old_items),
                    "new_size": len(new_items),
                    "inserts": script.inserts,
                    "removes": script.removes,
                    "moves": script.moves,
                    "updates": script.updates,
                    "duration_ms": round(elapsed_ms, 3),
                }
            },
        )

        if self._config.debug_dump_edits:
            print(
                "[nightlist] Edit script:",
                json.dumps([op.to_dict() for op in script], indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        return script

    def _check_size(self, items: tuple[Any, ...], side: str) -> None:
        limit = self._config.max_items
        if limit is not None and len(items) > limit:
            raise ValueError(
                f"{side} snapshot has {len(items)} items, max_items is {limit}"
            )

    def _plan_with_moves(
        self,
        old_keys: list[Hashable],
        new_keys: list[Hashable],
        old_pos: dict[Hashable, int],
        new_pos: dict[Hashable, int],
        old_items: tuple[Any, ...],
        new_items: tuple[Any, ...],
        content_equals: ContentEqualsFn,
    ) -> list[EditOp]:
        """Build removes, minimal moves, inserts and updates."""
        ops: list[EditOp] = []

        # Removals, back to front so earlier positions stay valid.
        for pos in range(len(old_keys) - 1, -1, -1):
            if old_keys[pos] not in new_pos:
                ops.append(EditOp.remove(pos))

        # After the removals the list holds the common items in old order.
        working = [key for key in old_keys if key in new_pos]
        common_new = [key for key in new_keys if key in old_pos]
        kept = _kept_in_place(working, common_new)

        # Each moved key lands right after its new-order predecessor.
        source_slot, target_slot, occupied = _slot_layout(working, common_new, kept)
        slots = OccupancyIndex(occupied)
        for key in common_new:
            if key in kept:
                continue
            src = slots.rank(source_slot[key])
            slots.vacate(source_slot[key])
            dst = slots.rank(target_slot[key])
            slots.occupy(target_slot[key])
            ops.append(EditOp.move(src, dst))

        # Common items now sit in new order; new-only items slot in by
        # ascending position.
        for pos, key in enumerate(new_keys):
            if key not in old_pos:
                ops.append(EditOp.insert(pos, new_items[pos]))

        ops.extend(
            _updates(new_keys, old_pos, old_items, new_items, content_equals, only=None)
        )
        return ops

    def _plan_without_moves(
        self,
        old_keys: list[Hashable],
        new_keys: list[Hashable],
        old_pos: dict[Hashable, int],
        new_pos: dict[Hashable, int],
        old_items: tuple[Any, ...],
        new_items: tuple[Any, ...],
        content_equals: ContentEqualsFn,
    ) -> list[EditOp]:
        """Build removes, inserts and updates only.

        Common items outside the kept run are removed and re-inserted with
        their new content.
        """
        working = [key for key in old_keys if key in new_pos]
        common_new = [key for key in new_keys if key in old_pos]
        kept = _kept_in_place(working, common_new)

        ops: list[EditOp] = []
        for pos in range(len(old_keys) - 1, -1, -1):
            if old_keys[pos] not in kept:
                ops.append(EditOp.remove(pos))

        for pos, key in enumerate(new_keys):
            if key not in kept:
                ops.append(EditOp.insert(pos, new_items[pos]))

        ops.extend(
            _updates(new_keys, old_pos, old_items, new_items, content_equals, only=kept)
        )
        return ops

    def _emit_metrics(
        self, script: EditScript, old_size: int, new_size: int, elapsed_ms: float,
    ) -> None:
        self._metrics.timing("nightlist.reconcile_duration_ms", elapsed_ms)
        self._metrics.gauge("nightlist.list_size", old_size, tags={"side": "old"})
        self._metrics.gauge("nightlist.list_size", new_size, tags={"side": "new"})

        op_counts: Counter[str] = Counter(op.op_type.value for op in script)
        for op_type_val, count in op_counts.items():
            self._metrics.increment(
                "nightlist.edit_ops_total", count, tags={"op_type": op_type_val},
            )


def _kept_in_place(
    working: list[Hashable], common_new: list[Hashable],
) -> set[Hashable]:
    """Return the common keys that need no move.

    *working* holds the common keys in old order, *common_new* the same
    keys in new order.
    """
    rank = {key: i for i, key in enumerate(working)}
    ranks_in_new_order = [rank[key] for key in common_new]
    return {
        common_new[i] for i in longest_increasing_subsequence(ranks_in_new_order)
    }


def _slot_layout(
    working: list[Hashable], common_new: list[Hashable], kept: set[Hashable],
) -> tuple[dict[Hashable, int], dict[Hashable, int], list[bool]]:
    """Lay out the slots the common keys occupy while moves are replayed.

    Kept keys get one slot each and split the row into gaps.  A moved key
    gets a source slot in the gap it leaves (old order) and a target slot
    in the gap it joins (new order).  Inside a gap all target slots come
    before all source slots: a moved key always lands right after a kept
    key or after the key moved just before it, ahead of anything still
    waiting to move.

    Returns the source slots, the target slots and the initial occupancy
    (kept and source slots occupied).
    """
    gap_count = len(kept) + 1
    sources: list[list[Hashable]] = [[] for _ in range(gap_count)]
    targets: list[list[Hashable]] = [[] for _ in range(gap_count)]
    for order, buckets in ((working, sources), (common_new, targets)):
        gap = 0
        for key in order:
            if key in kept:
                gap += 1
            else:
                buckets[gap].append(key)

    source_slot: dict[Hashable, int] = {}
    target_slot: dict[Hashable, int] = {}
    occupied: list[bool] = []
    for gap in range(gap_count):
        for key in targets[gap]:
            target_slot[key] = len(occupied)
            occupied.append(False)
        for key in sources[gap]:
            source_slot[key] = len(occupied)
            occupied.append(True)
        if gap < len(kept):
            occupied.append(True)
    return source_slot, target_slot, occupied


def _updates(
    new_keys: list[Hashable],
    old_pos: dict[Hashable, int],
    old_items: tuple[Any, ...],
    new_items: tuple[Any, ...],
    content_equals: ContentEqualsFn,
    only: set[Hashable] | None,
) -> list[EditOp]:
    """UPDATE ops for common keys whose content changed, by new position."""
    ops: list[EditOp] = []
    for pos, key in enumerate(new_keys):
        if key not in old_pos or (only is not None and key not in only):
            continue
        if not content_equals(old_items[old_pos[key]], new_items[pos]):
            ops.append(EditOp.update(pos, new_items[pos]))
    return ops


def _verify(
    old_items: tuple[Any, ...],
    new_items: tuple[Any, ...],
    old_keys: list[Hashable],
    new_keys: list[Hashable],
    script: EditScript,
    identity: IdentityFn,
    content_equals: ContentEqualsFn,
) -> None:
    """Replay *script* on *old_items* and check it reproduces *new_items*.

    An out-of-range op is re-raised with the key it addressed and both key
    lists added to the context.
    """
    result = list(old_items)
    for index, op in enumerate(script):
        try:
            apply_op(result, op, index)
        except InvalidRangeError as exc:
            raise InvalidRangeError(
                f"Edit script failed to replay: {exc.message}",
                context={
                    **exc.context,
                    "key": _addressed_key(op, result, identity),
                    "old_keys": old_keys,
                    "new_keys": new_keys,
                },
                cause=exc,
            ) from exc

    actual_keys = [identity(item) for item in result]
    if actual_keys != new_keys or not all(
        content_equals(a, b) for a, b in zip(result, new_items)
    ):
        raise InvalidRangeError(
            "Edit script does not reproduce the new snapshot",
            context={
                "op": "verify",
                "expected_keys": new_keys,
                "actual_keys": actual_keys,
                "length": len(result),
            },
        )


def _addressed_key(op: EditOp, items: list[Any], identity: IdentityFn) -> Hashable | None:
    """Key of the item *op* inserts or writes, else of the item at its position."""
    if op.item is not None:
        return identity(op.item)
    if 0 <= op.position < len(items):
        return identity(items[op.position])
    return None


def compute_edits(
    old: Sequence[Any],
    new: Sequence[Any],
    identity: IdentityFn,
    content_equals: ContentEqualsFn = operator.eq,
    *,
    config: NightlistConfig | None = None,
) -> EditScript:
    """Module-level shortcut for :meth:`ListReconciler.compute_edits`."""
    return ListReconciler(config).compute_edits(old, new, identity, content_equals)
