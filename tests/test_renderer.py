import pytest

from sandpendulum.config import BACKGROUND_RGB, INK_RGB, PAPER_RGB, PRINT_MARGIN
from sandpendulum.model.errors import IndexOutOfRange
from sandpendulum.model.trajectory import Point, TrajectoryStore
from sandpendulum.model.viewport import ViewportMapping
from sandpendulum.view.renderer import InkMode, paint_full_history, paint_segment


class RecordingSurface:
    def __init__(self, size=(200, 200)):
        self.ops = []
        self.size = size

    def select_pen(self, color, width):
        self.ops.append(("pen", tuple(color), width))

    def move_to(self, x, y):
        self.ops.append(("move", x, y))

    def line_to(self, x, y):
        self.ops.append(("line", x, y))

    def device_size(self):
        return self.size


MAPPING = ViewportMapping(100, 100, 100)


def trajectory(*points, capacity=100) -> TrajectoryStore:
    store = TrajectoryStore(capacity)
    store.reset(Point(*points[0]))
    for p in points[1:]:
        store.append(Point(*p))
    return store


def shadow_and_ink(surface):
    """Split the six recorded operations of one segment."""
    assert len(surface.ops) == 6
    return surface.ops[:3], surface.ops[3:]


def test_horizontal_segment_below_axis_offsets_up():
    surface = RecordingSurface()
    paint_segment(surface, MAPPING, trajectory((0.0, 0.5), (0.5, 0.5)), 1)

    shadow, ink = shadow_and_ink(surface)
    assert shadow == [("pen", BACKGROUND_RGB, 1), ("move", 100, 149), ("line", 150, 149)]
    assert ink == [("pen", INK_RGB, 1), ("move", 100, 150), ("line", 150, 150)]


def test_horizontal_segment_above_axis_offsets_down():
    surface = RecordingSurface()
    paint_segment(surface, MAPPING, trajectory((0.0, -0.5), (0.5, -0.5)), 1)

    shadow, ink = shadow_and_ink(surface)
    assert shadow[1:] == [("move", 100, 51), ("line", 150, 51)]
    assert ink[1:] == [("move", 100, 50), ("line", 150, 50)]


def test_vertical_segment_right_of_axis_offsets_left():
    surface = RecordingSurface()
    paint_segment(surface, MAPPING, trajectory((0.5, 0.0), (0.5, 0.5)), 1)

    shadow, ink = shadow_and_ink(surface)
    assert shadow[1:] == [("move", 149, 100), ("line", 149, 150)]
    assert ink[1:] == [("move", 150, 100), ("line", 150, 150)]


def test_vertical_segment_left_of_axis_offsets_right():
    surface = RecordingSurface()
    paint_segment(surface, MAPPING, trajectory((-0.5, 0.0), (-0.5, 0.5)), 1)

    shadow, _ = shadow_and_ink(surface)
    assert shadow[1:] == [("move", 51, 100), ("line", 51, 150)]


def test_diagonal_segment_counts_as_vertical():
    surface = RecordingSurface()
    paint_segment(surface, MAPPING, trajectory((0.0, 0.0), (0.2, 0.2)), 1)

    shadow, _ = shadow_and_ink(surface)
    assert shadow[1:] == [("move", 99, 100), ("line", 119, 120)]


def test_offset_side_follows_end_point():
    # starts below the axis, ends above: the end point decides
    surface = RecordingSurface()
    paint_segment(surface, MAPPING, trajectory((0.0, 0.01), (0.5, -0.01)), 1)

    shadow, _ = shadow_and_ink(surface)
    assert shadow[1:] == [("move", 100, 102), ("line", 150, 100)]


def test_paper_ink_uses_white_shadow():
    surface = RecordingSurface()
    paint_segment(surface, MAPPING, trajectory((0.0, 0.5), (0.5, 0.5)), 1, InkMode.PAPER)

    shadow, ink = shadow_and_ink(surface)
    assert shadow[0] == ("pen", PAPER_RGB, 1)
    assert ink[0] == ("pen", INK_RGB, 1)


@pytest.mark.parametrize("index", [0, 2, -1])
def test_segment_index_out_of_range(index):
    with pytest.raises(IndexOutOfRange):
        paint_segment(RecordingSurface(), MAPPING, trajectory((0.0, 0.0), (0.1, 0.0)), index)


def test_full_history_paints_every_segment_in_order():
    store = trajectory(*[(i / 10, 0.0) for i in range(6)])
    surface = RecordingSurface()

    assert paint_full_history(surface, MAPPING, store) == 5
    ink_lines = [op for op in surface.ops[5::6]]
    assert ink_lines == [("line", 100 + 10 * i, 100) for i in range(1, 6)]


def test_full_history_of_single_point_paints_nothing():
    surface = RecordingSurface()
    assert paint_full_history(surface, MAPPING, trajectory((0.3, 0.3))) == 0
    assert surface.ops == []


def test_full_history_abort():
    store = trajectory(*[(i / 100, 0.0) for i in range(50)])
    calls = []

    def should_abort():
        calls.append(True)
        return True

    painted = paint_full_history(RecordingSurface(), MAPPING, store, should_abort=should_abort, check_every=10)
    assert painted == 10
    assert len(calls) == 1


def test_full_history_paints_points_added_meanwhile():
    store = trajectory(*[(i / 100, 0.0) for i in range(21)])

    def should_abort():
        if len(store) < 25:
            store.append(Point(len(store) / 100, 0.0))
        return False

    painted = paint_full_history(RecordingSurface(), MAPPING, store, should_abort=should_abort, check_every=10)
    assert painted == len(store) - 1


def test_mapping_from_size():
    assert ViewportMapping.from_size(800, 600) == ViewportMapping(400, 300, 300)
    assert ViewportMapping.from_size(600, 600, margin=PRINT_MARGIN) == ViewportMapping(300, 300, 250)


def test_mapping_rounds_to_nearest_pixel():
    assert MAPPING.to_pixel(0.004, -0.006) == (100, 99)
    assert MAPPING.to_pixel(0.5, -0.5) == (150, 50)


def test_mapping_rounds_half_pixels_up():
    # each coordinate lands exactly on a half pixel
    assert MAPPING.to_pixel(0.125, 0.375) == (113, 138)
    assert MAPPING.to_pixel(-0.125, -0.375) == (88, 63)


def test_mapping_inverse():
    mapping = ViewportMapping.from_size(400, 300)
    assert mapping.to_normalized(275, 150) == Point(0.5, 0.0)
    assert mapping.to_normalized(200, 0) == Point(0.0, -1.0)


def test_degenerate_mapping_rejects_clicks():
    mapping = ViewportMapping.from_size(1, 0)
    assert mapping.is_degenerate
    with pytest.raises(ValueError):
        mapping.to_normalized(0, 0)
