"""Unit tests for the drag/resize interaction engine."""

import pytest

from widgetdesk.core.canvas import (
    InputSurface,
    InteractionEngine,
    InteractionKind,
    Point,
    PointerCapture,
    PointerTarget,
    Position,
    Size,
    Widget,
    WidgetType,
)
from widgetdesk.core.canvas.interaction import drag_position, resize_size


class FakeCanvas:
    """Minimal lookup/apply pair standing in for the layout container."""

    def __init__(self, *widgets):
        self.widgets = {widget.id: widget for widget in widgets}
        self.applied = []

    def lookup(self, widget_id):
        return self.widgets[widget_id]

    def apply(self, widget_id, fields):
        self.applied.append((widget_id, fields))
        self.widgets[widget_id] = self.widgets[widget_id].model_copy(update=fields)
        return self.widgets[widget_id]


def make_widget(widget_id="w", **overrides):
    values = {
        "id": widget_id,
        "type": WidgetType.TODO,
        "title": "Tasks",
        "position": Position(x=0, y=0),
        "size": Size(width=400, height=300),
    }
    values.update(overrides)
    return Widget(**values)


@pytest.fixture
def surface():
    return InputSurface()


@pytest.fixture
def canvas():
    return FakeCanvas(make_widget("a"), make_widget("b", position=Position(x=500, y=0)))


@pytest.fixture
def engine(surface, canvas):
    return InteractionEngine(surface, canvas.lookup, canvas.apply)


@pytest.mark.unit
class TestGeometry:
    """Test the pure drag and resize computations."""

    def test_drag_subtracts_anchor(self):
        assert drag_position(Point(60, 70), Point(10, 10)) == Position(x=50, y=60)

    def test_drag_clamps_at_zero(self):
        assert drag_position(Point(5, -40), Point(10, 10)) == Position(x=0, y=0)

    def test_drag_has_no_upper_bound(self):
        assert drag_position(Point(10_000, 8_000), Point(0, 0)) == Position(
            x=10_000, y=8_000
        )

    def test_corner_resize_changes_both_axes(self):
        size = resize_size(
            Point(350, 250), Point(410, 310), Size(width=400, height=300), PointerTarget.CORNER
        )
        assert size == Size(width=340, height=240)

    def test_resize_floors_at_minimum(self):
        size = resize_size(
            Point(100, 100), Point(410, 310), Size(width=400, height=300), PointerTarget.CORNER
        )
        assert size == Size(width=200, height=200)

    def test_right_edge_changes_width_only(self):
        size = resize_size(
            Point(500, 900), Point(400, 150), Size(width=400, height=300), PointerTarget.RIGHT
        )
        assert size == Size(width=500, height=300)

    def test_bottom_edge_changes_height_only(self):
        size = resize_size(
            Point(900, 350), Point(200, 300), Size(width=400, height=300), PointerTarget.BOTTOM
        )
        assert size == Size(width=400, height=350)


@pytest.mark.unit
class TestPointerCapture:
    """Test scoped listener acquisition."""

    def test_acquire_and_release(self, surface):
        capture = PointerCapture(surface, lambda p: None, lambda p: None)

        capture.acquire()
        assert capture.held
        assert surface.listener_count(InputSurface.MOVE) == 1
        assert surface.listener_count(InputSurface.UP) == 1

        capture.release()
        assert not capture.held
        assert surface.listener_count() == 0

    def test_acquire_and_release_are_idempotent(self, surface):
        capture = PointerCapture(surface, lambda p: None, lambda p: None)

        capture.acquire()
        capture.acquire()
        assert surface.listener_count() == 2

        capture.release()
        capture.release()
        assert surface.listener_count() == 0

    def test_context_manager_releases_on_error(self, surface):
        with pytest.raises(RuntimeError):
            with PointerCapture(surface, lambda p: None, lambda p: None):
                assert surface.listener_count() == 2
                raise RuntimeError("boom")

        assert surface.listener_count() == 0

    def test_dispatch_tolerates_self_removal(self, surface):
        calls = []

        def listener(point):
            calls.append(point)
            surface.remove_listener(InputSurface.UP, listener)

        surface.add_listener(InputSurface.UP, listener)

        assert surface.dispatch(InputSurface.UP, Point(1, 1)) == 1
        assert surface.dispatch(InputSurface.UP, Point(2, 2)) == 0
        assert calls == [Point(1, 1)]


@pytest.mark.unit
class TestInteractionEngine:
    """Test the drag/resize state machine."""

    def test_idle_without_listeners(self, engine, surface):
        assert engine.is_idle
        assert engine.active is None
        assert surface.listener_count() == 0

    def test_header_drag_moves_widget(self, engine, surface, canvas):
        assert engine.pointer_down("a", PointerTarget.HEADER, Point(10, 10))
        assert engine.is_dragging("a")
        assert surface.listener_count() == 2

        surface.dispatch(InputSurface.MOVE, Point(60, 70))
        assert canvas.widgets["a"].position == Position(x=50, y=60)

        surface.dispatch(InputSurface.UP, Point(60, 70))
        assert engine.is_idle
        assert surface.listener_count() == 0

        surface.dispatch(InputSurface.MOVE, Point(300, 300))
        assert canvas.widgets["a"].position == Position(x=50, y=60)

    def test_moves_apply_in_order(self, engine, surface, canvas):
        engine.pointer_down("a", PointerTarget.HEADER, Point(0, 0))
        for x in (10, 30, 20):
            surface.dispatch(InputSurface.MOVE, Point(x, x))

        assert [fields["position"].x for _, fields in canvas.applied] == [10, 30, 20]
        assert canvas.widgets["a"].position == Position(x=20, y=20)

    def test_corner_resize_scenario(self, engine, surface, canvas):
        assert engine.pointer_down("a", PointerTarget.CORNER, Point(410, 310))
        assert engine.active.kind == InteractionKind.RESIZING

        surface.dispatch(InputSurface.MOVE, Point(350, 250))
        assert canvas.widgets["a"].size == Size(width=340, height=240)

        surface.dispatch(InputSurface.MOVE, Point(100, 100))
        assert canvas.widgets["a"].size == Size(width=200, height=200)

        surface.dispatch(InputSurface.UP, Point(100, 100))
        assert engine.is_idle

    @pytest.mark.parametrize("target", [PointerTarget.CONTROL, PointerTarget.BODY])
    def test_non_drag_targets_ignored(self, engine, surface, target):
        assert not engine.pointer_down("a", target, Point(10, 10))
        assert engine.is_idle
        assert surface.listener_count() == 0

    def test_second_pointer_down_ignored_while_busy(self, engine, surface):
        engine.pointer_down("a", PointerTarget.HEADER, Point(0, 0))

        assert not engine.pointer_down("b", PointerTarget.CORNER, Point(900, 300))
        assert engine.active.widget_id == "a"
        assert surface.listener_count() == 2

    def test_full_screen_widget_cannot_be_dragged_or_resized(self, surface):
        canvas = FakeCanvas(make_widget("a", isFullScreen=True))
        engine = InteractionEngine(surface, canvas.lookup, canvas.apply)

        assert not engine.pointer_down("a", PointerTarget.HEADER, Point(0, 0))
        assert not engine.pointer_down("a", PointerTarget.CORNER, Point(0, 0))
        assert engine.is_idle

    def test_minimized_widget_drags_but_does_not_resize(self, surface):
        canvas = FakeCanvas(make_widget("a", isMinimized=True))
        engine = InteractionEngine(surface, canvas.lookup, canvas.apply)

        assert not engine.pointer_down("a", PointerTarget.RIGHT, Point(400, 10))
        assert engine.pointer_down("a", PointerTarget.HEADER, Point(5, 5))

    def test_cancel_releases_listeners(self, engine, surface):
        engine.pointer_down("a", PointerTarget.HEADER, Point(0, 0))

        assert not engine.cancel("b")
        assert engine.cancel("a")
        assert engine.is_idle
        assert surface.listener_count() == 0
        assert not engine.cancel()
