# geoindex/rtree/mbr.py
from math import inf
from typing import NamedTuple, Sequence, Union


class MBR(NamedTuple):
    xmin: float
    xmax: float
    ymin: float
    ymax: float


# Rectángulo "sin bordes": neutro para expand(), no intersecta nada.
EMPTY = MBR(inf, -inf, inf, -inf)

RectLike = Union[MBR, Sequence[float]]


def is_empty(m: MBR) -> bool:
    return m.xmin > m.xmax or m.ymin > m.ymax

def from_point(x: float, y: float) -> MBR:
    return MBR(x, x, y, y)

def rect_from_point_radius(x: float, y: float, r: float) -> MBR:
    return MBR(x - r, x + r, y - r, y + r)

def to_mbr(val: RectLike, allow_empty: bool = False) -> MBR:
    """Normaliza la entrada espacial: [x,y] (punto) o [xmin,xmax,ymin,ymax].

    EMPTY solo se acepta con `allow_empty` (consultas); un dato nunca puede ser EMPTY.
    """
    if isinstance(val, MBR):
        m = val
    elif isinstance(val, (list, tuple)) and len(val) == 2:
        m = from_point(float(val[0]), float(val[1]))
    elif isinstance(val, (list, tuple)) and len(val) == 4:
        m = MBR(float(val[0]), float(val[1]), float(val[2]), float(val[3]))
    else:
        raise ValueError("Valor espacial inválido; esperado [x,y] o [xmin,xmax,ymin,ymax].")
    if m == EMPTY:
        if allow_empty:
            return EMPTY
        raise ValueError("Rectángulo vacío (EMPTY) no permitido para un dato.")
    if is_empty(m):
        raise ValueError(f"Rectángulo mal formado (min > max): {tuple(m)}")
    return MBR(*(float(c) for c in m))

def intersects(a: MBR, b: MBR) -> bool:
    ax1, ax2, ay1, ay2 = a
    bx1, bx2, by1, by2 = b
    return not (ax2 < bx1 or bx2 < ax1 or ay2 < by1 or by2 < ay1)

def contains(a: MBR, b: MBR) -> bool:
    """True si `a` cubre completamente a `b`."""
    if is_empty(a):
        return False
    ax1, ax2, ay1, ay2 = a
    bx1, bx2, by1, by2 = b
    return ax1 <= bx1 and bx2 <= ax2 and ay1 <= by1 and by2 <= ay2

def area(m: MBR) -> float:
    x1, x2, y1, y2 = m
    return max(0.0, x2 - x1) * max(0.0, y2 - y1)

def expand(a: MBR, b: MBR) -> MBR:
    ax1, ax2, ay1, ay2 = a
    bx1, bx2, by1, by2 = b
    return MBR(min(ax1, bx1), max(ax2, bx2), min(ay1, by1), max(ay2, by2))

def enlargement(a: MBR, b: MBR) -> float:
    return area(expand(a, b)) - area(a)

def center(m: MBR):
    return (m.xmin + m.xmax) / 2.0, (m.ymin + m.ymax) / 2.0
