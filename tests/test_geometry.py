import pytest

from turtlepen import Drawing, Segment, Turtle
from turtlepen.shapes import circle, square


def _square_drawing(size=10.0):
    t = Turtle()
    square(t, size)
    return t.drawing


def test_connected_segments_chain_into_one_polyline():
    polys = _square_drawing().polylines()
    assert len(polys) == 1
    assert len(polys[0].pts) == 5


def test_pen_lift_starts_new_polyline():
    t = Turtle()
    t.fd(10)
    t.pu()
    t.fd(10)
    t.pd()
    t.fd(10)
    assert [len(p.pts) for p in t.drawing.polylines()] == [2, 2]


def test_color_change_starts_new_polyline():
    t = Turtle()
    t.fd(10)
    t.set_color("red")
    t.fd(10)
    polys = t.drawing.polylines()
    assert [p.color for p in polys] == ["#111111", "red"]


def test_bounding_box_and_length():
    d = _square_drawing(10.0)
    (x0, y0), (x1, y1) = d.bounding_box()
    assert (x0, y0, x1, y1) == pytest.approx((0.0, 0.0, 10.0, 10.0), abs=1e-9)
    assert d.total_length() == pytest.approx(40.0)


def test_empty_drawing_has_no_bounding_box():
    assert Drawing().bounding_box() is None
    assert Drawing().total_length() == 0.0
    assert Drawing().strokes() == []


def test_dict_round_trip_preserves_segments():
    t = Turtle()
    t.set_color("#e41a1c")
    circle(t, 5)
    data = t.drawing.to_dict()
    assert Drawing.from_dict(data).segments == t.drawing.segments


def test_strokes_use_polylines():
    strokes = _square_drawing().strokes()
    assert len(strokes) == 1
    assert strokes[0]["color"] == "#111111"
    assert strokes[0]["points"][0] == [0.0, 0.0]


def test_add_rejects_other_objects():
    with pytest.raises(TypeError):
        Drawing().add(((0, 0), (1, 1)))


def test_clone_is_independent():
    d = Drawing().add(Segment((0.0, 0.0), (1.0, 0.0)))
    c = d.clone()
    c.add(Segment((1.0, 0.0), (2.0, 0.0)))
    assert len(d) == 1
    assert len(c) == 2
