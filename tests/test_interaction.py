from __future__ import annotations

import unittest

from polyview.config import ViewerConfig
from polyview.geometry import Point, ScreenRect
from polyview.interaction import InteractionController, PointerEvent, hit_test
from polyview.state import IDLE, Dragging, ViewState
from polyview.viewport import ViewportModel, compute_initial_bounds


TRIANGLE = [Point(0.0, 0.0), Point(1.0, 1.0), Point(2.0, 0.0)]


def _controller(points=TRIANGLE, size=(800, 600)) -> tuple[ViewportModel, InteractionController]:
    model = ViewportModel(ViewState(), ViewerConfig(), canvas_size_provider=lambda: size)
    model.load(points)
    return model, InteractionController(model)


class ScreenRectTests(unittest.TestCase):
    def test_from_corners_is_symmetric_in_drag_direction(self) -> None:
        expected = ScreenRect(100, 50, 200, 150)
        for a, b in (
            ((100, 50), (300, 200)),
            ((300, 200), (100, 50)),
            ((300, 50), (100, 200)),
            ((100, 200), (300, 50)),
        ):
            self.assertEqual(ScreenRect.from_corners(a, b), expected)

    def test_degenerate_rect_has_no_area(self) -> None:
        self.assertFalse(ScreenRect.from_corners((10, 10), (10, 40)).has_area)
        self.assertFalse(ScreenRect.from_corners((10, 10), (40, 10)).has_area)


class HitTestTests(unittest.TestCase):
    def test_exact_projection_hits_point(self) -> None:
        model, _ = _controller()
        screen = model.forward_transform(Point(1.0, 1.0))
        assert screen is not None
        self.assertEqual(hit_test(screen.as_tuple(), model), Point(1.0, 1.0))

    def test_tolerance_is_per_axis_and_strict(self) -> None:
        model, _ = _controller()
        # (1, 1) projects to (416, 171.43).
        self.assertEqual(hit_test((420, 175), model), Point(1.0, 1.0))
        self.assertIsNone(hit_test((421, 171), model))
        self.assertIsNone(hit_test((416, 177), model))

    def test_box_tolerance_not_euclidean(self) -> None:
        model, _ = _controller()
        # Corner of the box: Euclidean distance ~5.7 px still hits.
        self.assertEqual(hit_test((420, 167.5), model), Point(1.0, 1.0))

    def test_first_match_in_dataset_order_wins(self) -> None:
        points = [Point(1.001, 1.0), Point(1.0, 1.0), Point(2.0, 0.0), Point(0.0, 0.0)]
        model, _ = _controller(points)
        screen = model.forward_transform(Point(1.0, 1.0))
        assert screen is not None
        self.assertEqual(hit_test(screen.as_tuple(), model), Point(1.001, 1.0))

    def test_empty_dataset_and_zero_canvas_miss(self) -> None:
        model, _ = _controller([])
        self.assertIsNone(hit_test((0, 0), model))
        model, _ = _controller(size=(0, 0))
        self.assertIsNone(hit_test((416, 171), model))


class InteractionControllerTests(unittest.TestCase):
    def test_drag_down_right_zooms_on_release(self) -> None:
        model, ctl = _controller()
        self.assertFalse(ctl.handle_event(PointerEvent.press(100, 50)))
        self.assertTrue(ctl.is_dragging)
        self.assertIsNone(ctl.current_drag_rect())
        self.assertTrue(ctl.handle_event(PointerEvent.move(300, 200)))
        self.assertEqual(ctl.current_drag_rect(), ScreenRect(100, 50, 200, 150))
        self.assertTrue(ctl.handle_event(PointerEvent.release(300, 200)))
        self.assertFalse(ctl.is_dragging)
        self.assertIsNone(ctl.current_drag_rect())
        window = model.current_window()
        assert window is not None
        self.assertAlmostEqual(window.min_x, -0.625 + 100 / 256.0)
        self.assertAlmostEqual(window.max_x, -0.625 + 300 / 256.0)

    def test_drag_up_left_gives_same_window(self) -> None:
        model_a, ctl_a = _controller()
        for event in (PointerEvent.press(100, 50), PointerEvent.move(300, 200), PointerEvent.release(300, 200)):
            ctl_a.handle_event(event)
        model_b, ctl_b = _controller()
        for event in (PointerEvent.press(300, 200), PointerEvent.move(100, 50), PointerEvent.release(100, 50)):
            ctl_b.handle_event(event)
        self.assertEqual(model_a.current_window(), model_b.current_window())

    def test_release_without_area_keeps_window(self) -> None:
        model, ctl = _controller()
        before = model.current_window()
        ctl.handle_event(PointerEvent.press(100, 50))
        self.assertTrue(ctl.handle_event(PointerEvent.release(100, 50)))
        self.assertEqual(model.current_window(), before)
        ctl.handle_event(PointerEvent.press(100, 50))
        ctl.handle_event(PointerEvent.move(100, 250))
        ctl.handle_event(PointerEvent.release(100, 250))
        self.assertEqual(model.current_window(), before)
        self.assertEqual(model.state.drag, IDLE)

    def test_secondary_press_resets_and_keeps_drag(self) -> None:
        model, ctl = _controller()
        model.zoom_to_screen_rect(ScreenRect(100, 50, 200, 150))
        ctl.handle_event(PointerEvent.press(10, 10))
        ctl.handle_event(PointerEvent.move(40, 40))
        self.assertTrue(ctl.handle_event(PointerEvent.press(500, 500, button="secondary")))
        self.assertEqual(model.current_window(), compute_initial_bounds(TRIANGLE))
        self.assertEqual(model.state.drag, Dragging(start=(10, 10), rect=ScreenRect(10, 10, 30, 30)))

    def test_secondary_press_does_not_start_drag(self) -> None:
        _, ctl = _controller()
        ctl.handle_event(PointerEvent.press(10, 10, button="secondary"))
        self.assertFalse(ctl.is_dragging)

    def test_hover_requests_redraw_only_on_change(self) -> None:
        _, ctl = _controller()
        self.assertTrue(ctl.handle_event(PointerEvent.move(416, 171)))
        self.assertEqual(ctl.current_highlight(), Point(1.0, 1.0))
        self.assertFalse(ctl.handle_event(PointerEvent.move(417, 172)))
        self.assertTrue(ctl.handle_event(PointerEvent.move(600, 20)))
        self.assertIsNone(ctl.current_highlight())
        self.assertFalse(ctl.handle_event(PointerEvent.move(610, 20)))

    def test_hover_is_ignored_while_dragging(self) -> None:
        _, ctl = _controller()
        ctl.handle_event(PointerEvent.press(400, 160))
        ctl.handle_event(PointerEvent.move(416, 171))
        self.assertIsNone(ctl.current_highlight())

    def test_release_clears_highlight(self) -> None:
        _, ctl = _controller()
        ctl.handle_event(PointerEvent.move(416, 171))
        self.assertTrue(ctl.handle_event(PointerEvent.release(416, 171)))
        self.assertIsNone(ctl.current_highlight())
        self.assertFalse(ctl.handle_event(PointerEvent.release(416, 171)))

    def test_events_on_empty_dataset_are_harmless(self) -> None:
        model, ctl = _controller([])
        self.assertFalse(ctl.handle_event(PointerEvent.move(10, 10)))
        self.assertFalse(ctl.handle_event(PointerEvent.press(10, 10, button="secondary")))
        ctl.handle_event(PointerEvent.press(10, 10))
        ctl.handle_event(PointerEvent.move(50, 50))
        self.assertTrue(ctl.handle_event(PointerEvent.release(50, 50)))
        self.assertIsNone(model.current_window())

    def test_reset_returns_to_idle(self) -> None:
        _, ctl = _controller()
        ctl.handle_event(PointerEvent.move(416, 171))
        ctl.handle_event(PointerEvent.press(1, 1))
        ctl.reset()
        self.assertFalse(ctl.is_dragging)
        self.assertIsNone(ctl.current_highlight())

    def test_rejects_non_positive_tolerance(self) -> None:
        model, _ = _controller()
        with self.assertRaises(ValueError):
            InteractionController(model, tolerance_px=0.0)
        with self.assertRaises(ValueError):
            InteractionController(model, tolerance_px=float("nan"))

    def test_repeated_corner_drags_never_collapse_window(self) -> None:
        model, ctl = _controller([Point(1000.0, 0.0), Point(1001.0, 1.0), Point(1002.0, 0.0)])
        for _ in range(10):
            ctl.handle_event(PointerEvent.press(0, 0))
            ctl.handle_event(PointerEvent.move(1, 1))
            ctl.handle_event(PointerEvent.release(1, 1))
            ctl.handle_event(PointerEvent.move(10, 10))
            window = model.current_window()
            assert window is not None
            self.assertGreater(window.width, 0.0)
            self.assertGreater(window.height, 0.0)
        self.assertIsNotNone(model.forward_transform(Point(1001.0, 1.0)))
        self.assertIsNone(hit_test((10, 10), model))
        self.assertIsNone(ctl.current_highlight())


class PointerEventFromHDITests(unittest.TestCase):
    def test_click_phases_and_buttons(self) -> None:
        self.assertEqual(
            PointerEvent.from_hdi("click", {"x": 10.4, "y": 20.6, "button": 0, "phase": "down"}),
            PointerEvent(kind="press", position=(10, 21), button="primary"),
        )
        self.assertEqual(
            PointerEvent.from_hdi("click", {"x": 1, "y": 2, "button": 1, "phase": "up"}),
            PointerEvent(kind="release", position=(1, 2), button="secondary"),
        )

    def test_pointer_move(self) -> None:
        self.assertEqual(PointerEvent.from_hdi("pointer_move", {"x": 5, "y": 6}), PointerEvent.move(5, 6))

    def test_unsupported_events_map_to_none(self) -> None:
        self.assertIsNone(PointerEvent.from_hdi("scroll", {"x": 1, "y": 1}))
        self.assertIsNone(PointerEvent.from_hdi("click", {"x": 1, "y": 1, "button": 2, "phase": "down"}))
        self.assertIsNone(PointerEvent.from_hdi("click", {"x": 1, "y": 1, "button": 0, "phase": "hold"}))
        self.assertIsNone(PointerEvent.from_hdi("pointer_move", {"x": 1}))
        self.assertIsNone(PointerEvent.from_hdi("pointer_move", None))


if __name__ == "__main__":
    unittest.main()
