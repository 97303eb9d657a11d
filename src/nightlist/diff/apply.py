"""Sequential application of edit scripts.

:func:`apply_edits` replays an :class:`EditScript` against a plain list,
checking every position against the bounds of the list as it stands at
that step.  The reconciler replays op by op with :func:`apply_op` to
verify its own output; tests and tooling use :func:`apply_edits` to check
what a script produces.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from nightlist.errors import InvalidRangeError
from nightlist.models import EditOp, EditOpType


def _check_bounds(
    op: EditOp, index: int, position: int, upper: int, length: int,
) -> None:
    """Raise :class:`InvalidRangeError` unless ``0 <= position < upper``."""
    if not 0 <= position < upper:
        raise InvalidRangeError(
            f"{op.op_type.value} position {position} out of range for "
            f"list of length {length} at op #{index}",
            context={
                "op": op.op_type.value,
                "index": index,
                "position": position,
                "length": length,
            },
        )


def apply_op(items: list[Any], op: EditOp, index: int = 0) -> None:
    """Apply a single *op* to *items* in place.

    *index* is the op's position within its script; it only appears in the
    diagnostic context of a raised :class:`InvalidRangeError`.
    """
    length = len(items)

    if op.op_type == EditOpType.INSERT:
        _check_bounds(op, index, op.position, length + 1, length)
        items.insert(op.position, op.item)

    elif op.op_type == EditOpType.REMOVE:
        _check_bounds(op, index, op.position, length, length)
        del items[op.position]

    elif op.op_type == EditOpType.MOVE:
        _check_bounds(op, index, op.position, length, length)
        if op.to_position is None:
            raise InvalidRangeError(
                f"move at op #{index} has no target position",
                context={"op": op.op_type.value, "index": index, "position": None, "length": length},
            )
        _check_bounds(op, index, op.to_position, length, length)
        items.insert(op.to_position, items.pop(op.position))

    elif op.op_type == EditOpType.UPDATE:
        _check_bounds(op, index, op.position, length, length)
        items[op.position] = op.item


def apply_edits(items: Sequence[Any], script: Iterable[EditOp]) -> list[Any]:
    """Return a new list produced by applying *script* to *items* in order.

    *items* itself is never modified.

    Parameters
    ----------
    items:
        The old snapshot.
    script:
        An :class:`EditScript` or any iterable of :class:`EditOp`.

    Returns
    -------
    list
        The resulting list.

    Raises
    ------
    InvalidRangeError
        If any operation addresses a position outside the list as it
        stands at that step.
    """
    result = list(items)
    for index, op in enumerate(script):
        apply_op(result, op, index)
    return result
