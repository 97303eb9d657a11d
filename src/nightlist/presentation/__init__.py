"""Presentation collaborators: list adapter, observables and one-shot events."""

from __future__ import annotations

from .adapter import ItemCallback, ListAdapter, ListTarget, dispatch_edits
from .observable import EventSource, Observable, Subscription

__all__ = [
    "EventSource",
    "ItemCallback",
    "ListAdapter",
    "ListTarget",
    "Observable",
    "Subscription",
    "dispatch_edits",
]
