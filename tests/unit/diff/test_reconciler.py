"""Tests for the list reconciler.

Covers the worked examples (update, pure insertion, pure removal,
reorder, duplicate identity), emission order, move minimality, the
no-move mode, verification and the size guard.
"""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from nightlist.config import NightlistConfig
from nightlist.diff.apply import apply_edits
from nightlist.diff.reconciler import ListReconciler, compute_edits
from nightlist.errors import DuplicateIdentityError, ErrorCode, InvalidRangeError
from nightlist.models import EditOp, EditOpType, EditScript


@dataclass(frozen=True)
class Row:
    id: int
    content: str = ""


def _ident(row: Row) -> int:
    return row.id


def _rows(*ids: int, content: str = "") -> list[Row]:
    return [Row(i, content) for i in ids]


def _reconcile(old, new, **config_kwargs) -> EditScript:
    config = NightlistConfig(verify_edits=True, **config_kwargs)
    return ListReconciler(config).compute_edits(old, new, _ident)


# =========================================================================
# Worked examples
# =========================================================================


class TestIdenticalSnapshots:
    def test_same_list_gives_empty_script(self):
        rows = _rows(1, 2, 3)
        script = _reconcile(rows, list(rows))
        assert script == EditScript()
        assert len(script) == 0
        assert not script

    def test_equal_but_distinct_objects(self):
        script = _reconcile(_rows(1, 2, content="x"), _rows(1, 2, content="x"))
        assert len(script) == 0

    def test_both_empty(self):
        assert len(_reconcile([], [])) == 0


class TestUpdateDetection:
    def test_single_update(self):
        script = _reconcile([Row(1, "A")], [Row(1, "B")])
        assert list(script) == [EditOp.update(0, Row(1, "B"))]

    def test_update_anchored_at_new_position(self):
        old = [Row(1, "a"), Row(2, "b")]
        new = [Row(0, "z"), Row(1, "a"), Row(2, "B")]
        script = _reconcile(old, new)
        assert list(script) == [
            EditOp.insert(0, Row(0, "z")),
            EditOp.update(2, Row(2, "B")),
        ]

    def test_custom_content_equals_suppresses_update(self):
        script = ListReconciler().compute_edits(
            [Row(1, "A")], [Row(1, "a")], _ident,
            lambda a, b: a.content.lower() == b.content.lower(),
        )
        assert len(script) == 0

    def test_content_equals_receives_old_then_new(self):
        calls = []

        def eq(a, b):
            calls.append((a, b))
            return True

        ListReconciler().compute_edits([Row(1, "old")], [Row(1, "new")], _ident, eq)
        assert calls == [(Row(1, "old"), Row(1, "new"))]


class TestPureInsertion:
    def test_append(self):
        script = _reconcile(_rows(1), _rows(1, 2))
        assert list(script) == [EditOp.insert(1, Row(2))]

    def test_into_empty(self):
        script = _reconcile([], _rows(1, 2, 3))
        assert list(script) == [
            EditOp.insert(0, Row(1)),
            EditOp.insert(1, Row(2)),
            EditOp.insert(2, Row(3)),
        ]

    def test_insert_middle(self):
        script = _reconcile(_rows(1, 3), _rows(1, 2, 3))
        assert list(script) == [EditOp.insert(1, Row(2))]


class TestPureRemoval:
    def test_remove_last(self):
        script = _reconcile(_rows(1, 2), _rows(1))
        assert list(script) == [EditOp.remove(1)]

    def test_remove_all_descending(self):
        script = _reconcile(_rows(1, 2, 3), [])
        assert list(script) == [EditOp.remove(2), EditOp.remove(1), EditOp.remove(0)]

    def test_remove_scattered(self):
        script = _reconcile(_rows(1, 2, 3, 4, 5), _rows(2, 4))
        assert [op.position for op in script] == [4, 2, 0]
        assert all(op.op_type == EditOpType.REMOVE for op in script)


class TestReorder:
    def test_rotate_left_is_one_move(self):
        script = _reconcile(_rows(1, 2, 3), _rows(2, 3, 1))
        assert list(script) == [EditOp.move(0, 2)]

    def test_rotate_right_is_one_move(self):
        script = _reconcile(_rows(1, 2, 3), _rows(3, 1, 2))
        assert list(script) == [EditOp.move(2, 0)]

    def test_swap_is_one_move(self):
        script = _reconcile(_rows(1, 2), _rows(2, 1))
        assert script.moves == 1
        assert len(script) == 1

    def test_reverse_moves_all_but_one(self):
        script = _reconcile(_rows(1, 2, 3, 4, 5), _rows(5, 4, 3, 2, 1))
        assert script.moves == 4
        assert apply_edits(_rows(1, 2, 3, 4, 5), script) == _rows(5, 4, 3, 2, 1)

    def test_move_with_update(self):
        old = [Row(1, "a"), Row(2, "b"), Row(3, "c")]
        new = [Row(2, "b"), Row(3, "c"), Row(1, "A")]
        script = _reconcile(old, new)
        assert list(script) == [EditOp.move(0, 2), EditOp.update(2, Row(1, "A"))]


class TestMixedEdits:
    def test_emission_order(self):
        old = [Row(1, "a"), Row(2, "b"), Row(3, "c"), Row(4, "d")]
        new = [Row(3, "c"), Row(5, "e"), Row(1, "a"), Row(2, "B")]
        script = _reconcile(old, new)
        kinds = [op.op_type for op in script]
        # remove(4) -> moves -> insert(5) -> update(2)
        first = {k: kinds.index(k) for k in set(kinds)}
        assert first[EditOpType.REMOVE] < first[EditOpType.MOVE]
        assert first[EditOpType.MOVE] < first[EditOpType.INSERT]
        assert first[EditOpType.INSERT] < first[EditOpType.UPDATE]
        assert apply_edits(old, script) == new

    def test_disjoint_snapshots(self):
        script = _reconcile(_rows(1, 2), _rows(3, 4))
        assert list(script) == [
            EditOp.remove(1),
            EditOp.remove(0),
            EditOp.insert(0, Row(3)),
            EditOp.insert(1, Row(4)),
        ]

    def test_string_keys(self):
        old = ["apple", "banana", "cherry"]
        new = ["cherry", "apple", "date"]
        script = ListReconciler().compute_edits(old, new, lambda s: s)
        assert apply_edits(old, script) == new


# =========================================================================
# Errors
# =========================================================================


class TestDuplicateIdentity:
    def test_duplicate_in_old(self):
        with pytest.raises(DuplicateIdentityError) as exc_info:
            _reconcile(_rows(1, 1), _rows(1))
        err = exc_info.value
        assert err.code == ErrorCode.DUPLICATE_IDENTITY
        assert err.context["snapshot"] == "old"
        assert err.context["key"] == 1
        assert err.context["positions"] == [0, 1]

    def test_duplicate_in_new(self):
        with pytest.raises(DuplicateIdentityError) as exc_info:
            _reconcile(_rows(1), _rows(2, 3, 2))
        assert exc_info.value.context["snapshot"] == "new"
        assert exc_info.value.context["positions"] == [0, 2]

    def test_duplicate_with_empty_other_side(self):
        with pytest.raises(DuplicateIdentityError):
            _reconcile([], _rows(7, 7))


class TestVerification:
    def test_broken_identity_is_caught_by_replay(self):
        # An identity function that is not pure breaks the replay check.
        counter = iter(range(1000))

        def unstable(row):
            return (row.id, next(counter)) if row.id == 99 else row.id

        reconciler = ListReconciler(NightlistConfig(verify_edits=True))
        with pytest.raises(InvalidRangeError) as exc_info:
            reconciler.compute_edits([Row(99)], [Row(99)], unstable)
        assert exc_info.value.context["op"] == "verify"
        assert isinstance(exc_info.value, AssertionError)

    def test_out_of_range_replay_reports_keys(self, monkeypatch):
        bad_ops = [EditOp.update(5, Row(2, "x"))]
        monkeypatch.setattr(
            ListReconciler, "_plan_with_moves", lambda self, *args: list(bad_ops),
        )
        with pytest.raises(InvalidRangeError) as exc_info:
            _reconcile([Row(1)], [Row(2, "x")])
        err = exc_info.value
        assert err.context["op"] == "update"
        assert err.context["position"] == 5
        assert err.context["key"] == 2
        assert err.context["old_keys"] == [1]
        assert err.context["new_keys"] == [2]
        assert isinstance(err.cause, InvalidRangeError)
        assert err.__cause__ is err.cause

    def test_out_of_range_remove_reports_key_at_position(self, monkeypatch):
        bad_ops = [EditOp.remove(0), EditOp.move(0, 1)]
        monkeypatch.setattr(
            ListReconciler, "_plan_with_moves", lambda self, *args: list(bad_ops),
        )
        with pytest.raises(InvalidRangeError) as exc_info:
            _reconcile(_rows(1, 2), _rows(2, 1))
        err = exc_info.value
        assert err.context["index"] == 1
        assert err.context["key"] == 2
        assert err.context["old_keys"] == [1, 2]
        assert err.context["new_keys"] == [2, 1]


class TestSizeGuard:
    def test_max_items_exceeded(self):
        reconciler = ListReconciler(NightlistConfig(max_items=2))
        with pytest.raises(ValueError, match="max_items"):
            reconciler.compute_edits(_rows(1, 2, 3), [], _ident)

    def test_max_items_at_limit(self):
        reconciler = ListReconciler(NightlistConfig(max_items=3))
        script = reconciler.compute_edits(_rows(1, 2, 3), _rows(1, 2, 3), _ident)
        assert len(script) == 0


# =========================================================================
# No-move mode
# =========================================================================


class TestWithoutMoveDetection:
    def test_reorder_becomes_remove_insert(self):
        old = _rows(1, 2, 3)
        new = _rows(2, 3, 1)
        script = _reconcile(old, new, detect_moves=False)
        assert script.moves == 0
        assert list(script) == [EditOp.remove(0), EditOp.insert(2, Row(1))]
        assert apply_edits(old, script) == new

    def test_moved_item_carries_new_content(self):
        old = [Row(1, "a"), Row(2, "b"), Row(3, "c")]
        new = [Row(2, "b"), Row(3, "c"), Row(1, "A")]
        script = _reconcile(old, new, detect_moves=False)
        assert list(script) == [EditOp.remove(0), EditOp.insert(2, Row(1, "A"))]
        assert script.updates == 0
        assert apply_edits(old, script) == new

    def test_updates_in_place(self):
        script = _reconcile([Row(1, "A")], [Row(1, "B")], detect_moves=False)
        assert list(script) == [EditOp.update(0, Row(1, "B"))]


# =========================================================================
# Purity
# =========================================================================


class TestPurity:
    def test_inputs_not_mutated(self):
        old = _rows(1, 2, 3)
        new = _rows(3, 4, 1)
        old_copy, new_copy = list(old), list(new)
        _reconcile(old, new)
        assert old == old_copy
        assert new == new_copy

    def test_deterministic(self):
        old = _rows(5, 1, 4, 2, 3)
        new = _rows(1, 2, 3, 4, 5, 6)
        assert _reconcile(old, new) == _reconcile(old, new)

    def test_accepts_generators(self):
        script = compute_edits((r for r in _rows(1)), (r for r in _rows(1, 2)), _ident)
        assert list(script) == [EditOp.insert(1, Row(2))]

    def test_module_shortcut_honours_config(self):
        script = compute_edits(
            _rows(1, 2), _rows(2, 1), _ident, config=NightlistConfig(detect_moves=False),
        )
        assert script.moves == 0


class TestDebugDump:
    def test_dump_to_stderr(self, capsys):
        reconciler = ListReconciler(NightlistConfig(debug_dump_edits=True))
        reconciler.compute_edits(_rows(1), _rows(1, 2), _ident)
        err = capsys.readouterr().err
        assert "[nightlist] Edit script:" in err
        assert '"op": "insert"' in err
