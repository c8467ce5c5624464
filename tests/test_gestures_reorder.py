"""
Tests classifieur d'origine de geste + ReorderEngine.
"""
import pytest

from block_composer.engine import (
    BlockStore, Control, DragState, GestureOrigin, ReorderEngine, Verdict, classify, handle_origin,
)

HANDLE_A = Control(tag="button", role="handle", handle_for="a")


# ── classify ────────────────────────────────────────────────────────────────

class TestClassify:
    def test_handle_of_same_block(self):
        assert classify(handle_origin("a"), "a") is Verdict.ACCEPTED

    def test_icon_inside_handle(self):
        origin = GestureOrigin.of(Control(tag="svg"), HANDLE_A, Control(tag="div"))
        assert classify(origin, "a") is Verdict.ACCEPTED

    @pytest.mark.parametrize("origin,verdict", [
        (None, Verdict.NOT_HANDLE),
        (GestureOrigin(), Verdict.NOT_HANDLE),
        (GestureOrigin.of(Control(role="internal"), HANDLE_A), Verdict.INTERNAL_CONTROL),
        (GestureOrigin.of(Control(tag="button", role="delete")), Verdict.DELETE_CONTROL),
        (GestureOrigin.of(Control(tag="svg"), Control(tag="button", role="duplicate")), Verdict.DUPLICATE_CONTROL),
        (GestureOrigin.of(Control(tag="input")), Verdict.EDITABLE),
        (GestureOrigin.of(Control(tag="TEXTAREA")), Verdict.EDITABLE),
        (GestureOrigin.of(Control(tag="p", editable=True), Control(tag="div")), Verdict.EDITABLE),
        (GestureOrigin.of(Control(tag="button")), Verdict.BUTTON_NOT_HANDLE),
        (GestureOrigin.of(Control(tag="div")), Verdict.NOT_HANDLE),
        (GestureOrigin.of(Control(tag="button", role="handle", handle_for="b")), Verdict.FOREIGN_HANDLE),
    ])
    def test_rejections(self, origin, verdict):
        assert classify(origin, "a") is verdict

    def test_internal_wins_over_handle(self):
        origin = GestureOrigin.of(Control(tag="button", role="internal"), HANDLE_A)
        assert classify(origin, "a") is Verdict.INTERNAL_CONTROL


# ── ReorderEngine ───────────────────────────────────────────────────────────

@pytest.fixture
def engine(abc):
    store = BlockStore(abc)
    eng = ReorderEngine(store)
    eng.events = []
    eng.on_drag_state_change(eng.events.append)
    return eng


class TestReorderEngine:
    def test_drag_last_block_to_top(self, engine):
        assert engine.drag_start("c", handle_origin("c"))
        assert engine.state is DragState.DRAGGING
        engine.drop("a")
        assert engine.store.ids() == ["c", "a", "b"]
        assert [b.order for b in engine.store] == [0, 1, 2]
        assert engine.events == [True, False]
        assert engine.state is DragState.IDLE

    def test_drag_down(self, engine):
        engine.drag_start("a", handle_origin("a"))
        engine.drop("c")
        assert engine.store.ids() == ["b", "c", "a"]

    def test_rejected_origin_never_notifies(self, engine):
        origin = GestureOrigin.of(Control(tag="textarea"), HANDLE_A)
        assert engine.drag_start("a", origin) is False
        assert engine.state is DragState.IDLE
        assert engine.events == []

    def test_foreign_handle_rejected(self, engine):
        assert engine.drag_start("a", handle_origin("b")) is False
        assert engine.events == []

    def test_drop_on_invalid_target(self, engine):
        before = engine.store.blocks
        engine.drag_start("a", handle_origin("a"))
        assert engine.drop("disparu") is before
        assert engine.drop(None) is before
        assert engine.events == [True, False]

    def test_drop_on_itself(self, engine):
        before = engine.store.blocks
        engine.drag_start("b", handle_origin("b"))
        assert engine.drop("b") is before
        assert engine.events == [True, False]

    def test_cancel(self, engine):
        engine.drag_start("b", handle_origin("b"))
        engine.cancel()
        assert engine.store.ids() == ["a", "b", "c"]
        assert engine.events == [True, False]

    def test_single_active_drag(self, engine):
        engine.drag_start("a", handle_origin("a"))
        assert engine.drag_start("b", handle_origin("b")) is False
        assert engine.active_id == "a"

    def test_unknown_block(self, engine):
        assert engine.drag_start("zzz", handle_origin("zzz")) is False

    def test_drop_without_drag(self, engine):
        before = engine.store.blocks
        assert engine.drop("a") is before
        assert engine.events == []

    def test_nudge(self, engine):
        engine.nudge("a", 1)
        assert engine.store.ids() == ["b", "a", "c"]
        engine.nudge("a", -5)
        assert engine.store.ids() == ["a", "b", "c"]
