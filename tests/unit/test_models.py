"""Tests for edit-script model helpers."""

from __future__ import annotations

import pytest

from nightlist.models import EditOp, EditOpType, EditScript


class TestEditOp:
    def test_constructors(self):
        assert EditOp.insert(1, "x") == EditOp(EditOpType.INSERT, 1, None, "x")
        assert EditOp.remove(2) == EditOp(EditOpType.REMOVE, 2)
        assert EditOp.move(3, 0) == EditOp(EditOpType.MOVE, 3, 0)
        assert EditOp.update(4, "y") == EditOp(EditOpType.UPDATE, 4, None, "y")

    def test_frozen(self):
        op = EditOp.remove(0)
        with pytest.raises(AttributeError):
            op.position = 1

    def test_to_dict(self):
        assert EditOp.move(2, 0).to_dict() == {"op": "move", "position": 2, "to_position": 0}
        assert EditOp.remove(1).to_dict() == {"op": "remove", "position": 1}
        assert EditOp.insert(0, "a").to_dict() == {"op": "insert", "position": 0, "item": "'a'"}


class TestEditScript:
    def test_sequence_behaviour(self):
        script = EditScript((EditOp.remove(1), EditOp.insert(0, "a")))
        assert len(script) == 2
        assert script[0] == EditOp.remove(1)
        assert list(script) == list(script.ops)
        assert script

    def test_counters(self):
        script = EditScript((
            EditOp.remove(1),
            EditOp.remove(0),
            EditOp.move(0, 1),
            EditOp.insert(0, "a"),
            EditOp.update(0, "b"),
        ))
        assert (script.removes, script.moves, script.inserts, script.updates) == (2, 1, 1, 1)

    def test_empty_is_falsy(self):
        assert not EditScript()
