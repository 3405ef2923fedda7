"""
MBR — primitivas geométricas
- intersects / contains / expand / enlargement / area
- EMPTY como elemento neutro
- to_mbr: punto, rectángulo y errores
"""
from math import inf

from test_utils import ok, print_section
from geoindex.rtree.mbr import (
    MBR, EMPTY, area, center, contains, enlargement, expand, from_point, intersects,
    is_empty, rect_from_point_radius, to_mbr,
)

def test_intersects_touching_edges():
    a = MBR(0, 1, 0, 1)
    assert intersects(a, MBR(1, 2, 0, 1))        # borde compartido cuenta
    assert intersects(a, MBR(0.5, 0.6, 0.5, 0.6))
    assert not intersects(a, MBR(1.01, 2, 0, 1))
    assert not intersects(a, MBR(0, 1, 2, 3))
    ok("intersects")

def test_contains():
    big = MBR(0, 10, 0, 10)
    assert contains(big, MBR(1, 2, 1, 2))
    assert contains(big, big)
    assert not contains(big, MBR(5, 11, 1, 2))
    assert not contains(MBR(1, 2, 1, 2), big)
    ok("contains")

def test_empty_sentinel():
    r = MBR(1, 3, 2, 5)
    assert is_empty(EMPTY)
    assert expand(EMPTY, r) == r
    assert expand(r, EMPTY) == r
    assert area(EMPTY) == 0.0
    assert not intersects(EMPTY, r) and not intersects(r, EMPTY)
    assert not contains(EMPTY, r)
    assert contains(r, EMPTY)
    ok("EMPTY")

def test_area_and_enlargement():
    a = MBR(0, 2, 0, 2)
    assert area(a) == 4.0
    assert enlargement(a, MBR(1, 2, 1, 2)) == 0.0
    assert enlargement(a, MBR(0, 4, 0, 2)) == 4.0
    assert enlargement(EMPTY, a) == 4.0
    assert expand(a, MBR(-1, 0, 3, 4)) == MBR(-1, 2, 0, 4)
    ok("area / enlargement")

def test_point_helpers():
    assert from_point(3, 4) == MBR(3, 3, 4, 4)
    assert rect_from_point_radius(0, 0, 2) == MBR(-2, 2, -2, 2)
    assert center(MBR(0, 2, 4, 8)) == (1.0, 6.0)
    ok("from_point / rect_from_point_radius / center")

def test_to_mbr():
    assert to_mbr([1, 2]) == MBR(1.0, 1.0, 2.0, 2.0)
    assert to_mbr((0, 1, 2, 3)) == MBR(0.0, 1.0, 2.0, 3.0)
    assert to_mbr(EMPTY, allow_empty=True) == EMPTY
    assert to_mbr(MBR(inf, -inf, inf, -inf), allow_empty=True) == EMPTY
    # un dato nunca puede ser EMPTY
    for bad_val in ([1, 2, 3], "0,0", None, (5, 1, 0, 1), MBR(0, 1, 3, 2), EMPTY, (inf, -inf, inf, -inf)):
        try:
            to_mbr(bad_val)
        except ValueError:
            continue
        raise AssertionError(f"to_mbr aceptó {bad_val!r}")
    ok("to_mbr")

if __name__ == "__main__":
    print_section("MBR")
    test_intersects_touching_edges()
    test_contains()
    test_empty_sentinel()
    test_area_and_enlargement()
    test_point_helpers()
    test_to_mbr()
