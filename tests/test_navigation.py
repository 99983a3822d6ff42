import unittest

from seatmap.cells import LayoutCell, Seat
from seatmap.geometry import GridGeometry, PlacedCell, Rect, StaticGeometry
from seatmap.navigation import Direction, compute_next_focus, direction_for_key, focus_next
from seatmap.notation import parse_layers


def at(x, y, size=32):
    return Rect(top=y, left=x, width=size, height=size)


SQUARE = [at(0, 0), at(40, 0), at(0, 40), at(40, 40)]


class TestComputeNextFocus(unittest.TestCase):
    def test_down_prefers_aligned_cell(self):
        self.assertEqual(compute_next_focus(SQUARE, 0, "down"), 2)
        self.assertEqual(compute_next_focus(SQUARE, 1, Direction.down), 3)

    def test_up(self):
        self.assertEqual(compute_next_focus(SQUARE, 3, "up"), 1)

    def test_left_right_follow_reading_order(self):
        self.assertEqual(compute_next_focus(SQUARE, 0, "right"), 1)
        self.assertEqual(compute_next_focus(SQUARE, 1, "right"), 2)
        self.assertEqual(compute_next_focus(SQUARE, 2, "left"), 1)

    def test_boundaries(self):
        self.assertIsNone(compute_next_focus(SQUARE, 0, "left"))
        self.assertIsNone(compute_next_focus(SQUARE, 3, "right"))
        self.assertIsNone(compute_next_focus(SQUARE, 2, "down"))
        self.assertIsNone(compute_next_focus(SQUARE, 0, "up"))

    def test_same_row_is_never_a_vertical_target(self):
        self.assertIsNone(compute_next_focus([at(0, 0), at(40, 0)], 0, "down"))

    def test_ties_go_to_first_cell(self):
        cells = [at(40, 0), at(0, 40), at(80, 40)]
        self.assertEqual(compute_next_focus(cells, 0, "down"), 1)

    def test_nearer_row_beats_aligned_far_row(self):
        cells = [at(0, 0), at(40, 40), at(0, 200)]
        self.assertEqual(compute_next_focus(cells, 0, "down"), 1)

    def test_tall_berth_neighbours(self):
        # A berth spanning two rows next to two stacked seats.
        berth = Rect(top=0, left=0, width=32, height=72)
        cells = [berth, at(40, 0), at(40, 40), at(0, 80)]
        self.assertEqual(compute_next_focus(cells, 1, "down"), 2)
        self.assertEqual(compute_next_focus(cells, 0, "down"), 2)
        self.assertEqual(compute_next_focus(cells, 3, "up"), 0)

    def test_accepts_objects_with_rect(self):
        cells = [PlacedCell(0, r, 0, LayoutCell(), at(0, r * 40)) for r in range(3)]
        self.assertEqual(compute_next_focus(cells, 0, "down"), 1)

    def test_accepts_mappings_with_rect(self):
        cells = [{"rect": at(0, r * 40)} for r in range(3)]
        self.assertEqual(compute_next_focus(cells, 2, "up"), 1)
        self.assertEqual(compute_next_focus(cells, 0, "right"), 1)

    def test_invalid_requests_do_not_raise(self):
        self.assertIsNone(compute_next_focus([], 0, "down"))
        self.assertIsNone(compute_next_focus(SQUARE, 9, "down"))
        self.assertIsNone(compute_next_focus(SQUARE, -1, "right"))
        self.assertIsNone(compute_next_focus(SQUARE, 0, "sideways"))

    def test_input_not_mutated(self):
        cells = list(SQUARE)
        compute_next_focus(cells, 0, "down")
        self.assertEqual(cells, SQUARE)

    def test_focus_next_uses_provider(self):
        self.assertEqual(focus_next(StaticGeometry(SQUARE), 0, "down"), 2)


class TestDirectionForKey(unittest.TestCase):
    def test_keys(self):
        self.assertEqual(direction_for_key("ArrowDown"), Direction.down)
        self.assertEqual(direction_for_key("left"), Direction.left)
        self.assertIsNone(direction_for_key("Enter"))


class TestRect(unittest.TestCase):
    def test_center_and_contains(self):
        r = Rect(top=10, left=20, width=32, height=72)
        self.assertEqual(r.center, (36, 46))
        self.assertTrue(r.contains(20, 10))
        self.assertTrue(r.contains(40, 50))
        self.assertFalse(r.contains(60, 50))


TYPES = {"a": {"kind": "seat"}, "b": {"kind": "berth"}, "_": {"kind": "space"}}


class TestGridGeometry(unittest.TestCase):
    def test_flex_rows_are_centered(self):
        layers, _ = parse_layers(["aaa", "a"], TYPES)
        rects = GridGeometry(layers).interactive_rects()
        self.assertEqual(rects[0], Rect(top=0, left=0, width=32, height=32))
        self.assertEqual(rects[2], Rect(top=0, left=80, width=32, height=32))
        # Single seat centered under the middle one.
        self.assertEqual(rects[3], Rect(top=40, left=40, width=32, height=32))

    def test_empty_flex_row_collapses(self):
        layers, _ = parse_layers(["a", "", "a"], TYPES)
        rects = GridGeometry(layers).interactive_rects()
        self.assertEqual(rects[1].top, 48)

    def test_berth_grid_spans_two_rows(self):
        layers, _ = parse_layers(["ba", "_a"], TYPES)
        placed = GridGeometry(layers).placed_cells()
        berth = placed[0]
        self.assertEqual(berth.rect, Rect(top=0, left=0, width=32, height=72))
        self.assertEqual(placed[3].rect, Rect(top=40, left=40, width=32, height=32))

    def test_layers_side_by_side(self):
        layers, _ = parse_layers({"Lower": ["aa"], "Upper": ["a"]}, TYPES)
        rects = GridGeometry(layers).interactive_rects()
        self.assertEqual(rects[2].left, 72 + 16)

    def test_only_available_seats_are_interactive(self):
        layers, _ = parse_layers(["aaa"], TYPES, booked_seats=["2"])
        cells = GridGeometry(layers).interactive_cells()
        self.assertEqual([p.cell.label for p in cells], ["1", "3"])

    def test_custom_predicate(self):
        layers, _ = parse_layers(["aa"], TYPES)
        geo = GridGeometry(layers, is_interactive=lambda cell: False)
        self.assertEqual(geo.interactive_rects(), [])

    def test_hit_test_and_bounds(self):
        layers, _ = parse_layers(["aa"], TYPES)
        geo = GridGeometry(layers)
        self.assertEqual(geo.hit_test(50, 10).cell, Seat(kind="seat", label="2"))
        self.assertIsNone(geo.hit_test(36, 10))
        self.assertEqual(geo.bounds(), Rect(top=0, left=0, width=72, height=32))

    def test_empty_layout(self):
        geo = GridGeometry([])
        self.assertEqual(geo.interactive_rects(), [])
        self.assertIsNone(geo.bounds())


if __name__ == "__main__":
    unittest.main()
