"""List adapter: keep a display surface in sync with submitted lists.

The adapter owns the snapshot currently shown on a :class:`ListTarget`.
Every :meth:`ListAdapter.submit_list` call reconciles that snapshot with
the new list and forwards each edit to the target as a fine-grained
notification, so the surface never needs a full redraw.
"""

from __future__ import annotations

import operator
import threading
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from nightlist.config import NightlistConfig
from nightlist.diff import ListReconciler
from nightlist.models import EditOpType, EditScript
from nightlist.observability import get_logger, resolve_metrics

log = get_logger("nightlist.adapter")

T = TypeVar("T")


@dataclass(frozen=True)
class ItemCallback(Generic[T]):
    """The two comparison functions the reconciler needs.

    Attributes
    ----------
    identity:
        Returns the stable key of an item ("is this the same entity?").
    content_equals:
        Compares an old and a new item with the same key ("did what is
        displayed change?").  Defaults to ``==``.
    """

    identity: Callable[[T], Hashable]
    content_equals: Callable[[T, T], bool] = field(default=operator.eq)


@runtime_checkable
class ListTarget(Protocol):
    """A display surface driven by the adapter.

    Positions follow the same convention as the edit script: each
    notification refers to the list as it stands after all earlier ones.
    """

    def notify_item_inserted(self, position: int) -> None: ...

    def notify_item_removed(self, position: int) -> None: ...

    def notify_item_moved(self, from_position: int, to_position: int) -> None: ...

    def notify_item_changed(self, position: int) -> None: ...


def dispatch_edits(script: EditScript, target: Any) -> None:
    """Translate every op of *script* into a *target* notification, in order."""
    for op in script:
        if op.op_type == EditOpType.INSERT:
            target.notify_item_inserted(op.position)
        elif op.op_type == EditOpType.REMOVE:
            target.notify_item_removed(op.position)
        elif op.op_type == EditOpType.MOVE:
            target.notify_item_moved(op.position, op.to_position)
        elif op.op_type == EditOpType.UPDATE:
            target.notify_item_changed(op.position)


class ListAdapter(Generic[T]):
    """Holds the displayed list and pushes minimal updates to a target.

    Submissions are serialised with a lock: two threads submitting at once
    are reconciled one after the other, each against the list left by the
    previous one.

    Parameters
    ----------
    callback:
        Identity and content comparison for the item type.
    target:
        Display surface to notify.  ``None`` keeps the adapter headless
        (useful for tests and background prefetch).
    config:
        Library configuration shared with the reconciler.
    binder:
        ``binder(view, item)`` called by :meth:`bind`.
    """

    def __init__(
        self,
        callback: ItemCallback[T],
        target: Any | None = None,
        config: NightlistConfig | None = None,
        binder: Callable[[Any, T], None] | None = None,
    ) -> None:
        self._callback = callback
        self._target = target
        self._config = config if config is not None else NightlistConfig()
        self._reconciler = ListReconciler(self._config)
        self._metrics = resolve_metrics(self._config.metrics)
        self._binder = binder
        self._items: tuple[T, ...] = ()
        self._lock = threading.Lock()

    @property
    def current_list(self) -> tuple[T, ...]:
        return self._items

    @property
    def item_count(self) -> int:
        return len(self._items)

    def get_item(self, position: int) -> T:
        return self._items[position]

    def attach(self, target: Any | None) -> None:
        """Swap the display surface; ``None`` detaches it."""
        with self._lock:
            self._target = target

    def submit_list(self, items: Iterable[T] | None) -> EditScript:
        """Display *items*, notifying the target of each change.

        ``None`` is treated as an empty list.

        Returns
        -------
        EditScript
            The edits forwarded to the target.
        """
        new_items: tuple[T, ...] = tuple(items) if items is not None else ()

        with self._lock:
            script = self._reconciler.compute_edits(
                self._items,
                new_items,
                self._callback.identity,
                self._callback.content_equals,
            )
            self._items = new_items
            if self._target is not None:
                dispatch_edits(script, self._target)

        self._metrics.increment("nightlist.submissions_total")
        log.debug(
            "list submitted",
            extra={
                "extra_fields": {
                    "op": "submit_list",
                    "size": len(new_items),
                    "edits": len(script),
                }
            },
        )
        return script

    def bind(self, view: Any, position: int) -> None:
        """Bind the item at *position* into *view* using the binder."""
        if self._binder is None:
            raise RuntimeError("ListAdapter has no binder configured")
        self._binder(view, self._items[position])

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, position: int) -> T:
        return self._items[position]
