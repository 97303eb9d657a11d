"""Public data models for nightlist.

This module contains the edit-script types produced by the reconciler and
the :class:`SleepNight` record shown in the tracker list.  All types are
plain dataclasses with no behaviour beyond what is needed for structural
equality, hashing (where frozen), and a few convenience constructors.
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


def current_time_millis() -> int:
    """Return the wall-clock time in whole milliseconds since the epoch."""
    return int(time.time() * 1000)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class EditOpType(str, Enum):
    """Operation types emitted by the list reconciler."""

    INSERT = "insert"
    """A new item is inserted before ``position``."""

    REMOVE = "remove"
    """The item at ``position`` is removed."""

    MOVE = "move"
    """The item at ``position`` is popped and re-inserted at ``to_position``."""

    UPDATE = "update"
    """The item at ``position`` keeps its place but its content changed."""


# ---------------------------------------------------------------------------
# Edit script types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EditOp:
    """A single operation in an edit script.

    Positions always refer to the list as it stands *after* every earlier
    operation in the same script has been applied.

    Attributes
    ----------
    op_type:
        The kind of operation (insert, remove, move, update).
    position:
        Insert/remove/update index, or the source index of a move.
    to_position:
        Target index of a move, measured after the item has been popped.
        ``None`` for every other operation.
    item:
        The item payload for ``INSERT`` and ``UPDATE``.
    """

    op_type: EditOpType
    position: int
    to_position: int | None = None
    item: Any = None

    @classmethod
    def insert(cls, position: int, item: Any) -> EditOp:
        return cls(op_type=EditOpType.INSERT, position=position, item=item)

    @classmethod
    def remove(cls, position: int) -> EditOp:
        return cls(op_type=EditOpType.REMOVE, position=position)

    @classmethod
    def move(cls, from_position: int, to_position: int) -> EditOp:
        return cls(
            op_type=EditOpType.MOVE,
            position=from_position,
            to_position=to_position,
        )

    @classmethod
    def update(cls, position: int, item: Any) -> EditOp:
        return cls(op_type=EditOpType.UPDATE, position=position, item=item)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly summary (the item is rendered with ``repr``)."""
        data: dict[str, Any] = {"op": self.op_type.value, "position": self.position}
        if self.to_position is not None:
            data["to_position"] = self.to_position
        if self.op_type in (EditOpType.INSERT, EditOpType.UPDATE):
            data["item"] = repr(self.item)
        return data


@dataclass(frozen=True)
class EditScript:
    """Ordered operations that turn one list snapshot into another.

    Behaves like a read-only sequence of :class:`EditOp`.  An empty script
    is falsy, which makes ``if script:`` the natural "anything changed?"
    test.
    """

    ops: tuple[EditOp, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[EditOp]:
        return iter(self.ops)

    def __len__(self) -> int:
        return len(self.ops)

    def __getitem__(self, index: int) -> EditOp:
        return self.ops[index]

    def count(self, op_type: EditOpType) -> int:
        return sum(1 for op in self.ops if op.op_type == op_type)

    @property
    def inserts(self) -> int:
        return self.count(EditOpType.INSERT)

    @property
    def removes(self) -> int:
        return self.count(EditOpType.REMOVE)

    @property
    def moves(self) -> int:
        return self.count(EditOpType.MOVE)

    @property
    def updates(self) -> int:
        return self.count(EditOpType.UPDATE)


# ---------------------------------------------------------------------------
# Sleep tracker records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SleepNight:
    """One recorded night of sleep.

    Attributes
    ----------
    night_id:
        Store-assigned identifier.  ``0`` until the night has been inserted.
    start_time_milli:
        Epoch milliseconds when tracking started.  Defaults to now.
    end_time_milli:
        Epoch milliseconds when tracking stopped.  Equal to the start time
        while the night is still being tracked.
    sleep_quality:
        Subjective rating on a 0-5 scale, ``-1`` when not yet rated.
    """

    night_id: int = 0
    start_time_milli: int = field(default_factory=current_time_millis)
    end_time_milli: int = -1
    sleep_quality: int = -1

    def __post_init__(self) -> None:
        if self.end_time_milli == -1:
            object.__setattr__(self, "end_time_milli", self.start_time_milli)

    @property
    def is_finished(self) -> bool:
        return self.end_time_milli != self.start_time_milli
