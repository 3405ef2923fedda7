# geoindex/rtree/RTree.py
from math import ceil, sqrt
from typing import Any, Iterable, List, Optional

from .mbr import MBR, RectLike, center, is_empty, rect_from_point_radius, to_mbr
from .metrics import avg_fill, basic_stats
from .node import Datum, LeafNode, Node, NonLeafNode, Predicate
from .settings import IndexSettings, load_settings


class RTree:
    """R-Tree en memoria.

    Guarda pares (rect, value) y responde consultas de solapamiento por rectángulo.
    `M` es el branch factor (máximo de entradas por nodo); si no se pasa se toma de
    la configuración (RTREE_BRANCH_FACTOR, por defecto 16).
    """
    def __init__(self, M: Optional[int] = None, *, settings: Optional[IndexSettings] = None):
        settings = settings or load_settings()
        if M is not None:
            settings = settings.with_branch_factor(M)
        self.settings = settings
        self.M = settings.branch_factor
        self.debug = settings.debug
        self.root: Node = self._new_leaf()

    # ---------- helpers ----------
    def _new_leaf(self, items: Iterable[Datum] = ()) -> LeafNode:
        return LeafNode(self.M, initial_items=items, m=self.settings.min_fill, debug=self.debug)

    def _grow_root(self, sibling: Node):
        old = self.root
        self.root = NonLeafNode(self.M, initial_children=[old, sibling], m=self.settings.min_fill,
                                debug=self.debug)
        if self.debug:
            print(f"[RTREE grow] new root height={self.root.height} size={self.root.size}")

    # ---------- propiedades ----------
    @property
    def size(self) -> int:
        return self.root.size

    def __len__(self) -> int:
        return self.size

    @property
    def height(self) -> int:
        return self.root.height

    @property
    def rect(self) -> MBR:
        return self.root.rect

    # ---------- escritura ----------
    def _normalize(self, item) -> Datum:
        # cada Datum pasa por to_mbr: nada de EMPTY ni min > max en el árbol
        if isinstance(item, Datum):
            return Datum(to_mbr(item.rect), item.value)
        return Datum(to_mbr(item[0]), item[1])

    def add(self, item: Datum):
        item = self._normalize(item)
        split_node = self.root.insert(item)
        if split_node is not None:
            self._grow_root(split_node)

    def insert(self, rect: RectLike, value: Any):
        """Inserta `value` con su rectángulo ([x,y] o [xmin,xmax,ymin,ymax])."""
        m = to_mbr(rect)
        if self.debug: print(f"[RTREE insert] rect={tuple(m)} value={value!r}")
        self.add(Datum(m, value))

    def discard(self, item: Datum) -> int:
        item = self._normalize(item)
        if not self.root.remove(item):
            return 0
        # árbol vacío: la raíz vuelve a ser una hoja
        if self.root.size == 0:
            self.root = self._new_leaf()
        return 1

    def remove(self, rect: RectLike, value: Any) -> int:
        """
        Borra la entrada (rect, value). La igualdad es sobre el par completo.
        Devuelve 1 si borró, 0 si no encontró (no es error).
        """
        m = to_mbr(rect)
        res = self.discard(Datum(m, value))
        if self.debug: print(f"[RTREE remove] rect={tuple(m)} value={value!r} removed={res}")
        return res

    def clear(self):
        self.root = self._new_leaf()

    def load(self, items: Iterable[Datum]):
        """Carga masiva.

        Con el árbol vacío se construye de arriba hacia abajo (OMT: cortes por x y luego
        por y); si ya tiene datos, se inserta uno a uno.
        """
        items = [self._normalize(d) for d in items]
        if not items:
            return
        if self.root.size > 0:
            for d in items:
                self.add(d)
            return

        n, height = len(items), 0
        while self.M ** (height + 1) < n:
            height += 1
        self.root = self._build(items, height)
        if self.debug: print(f"[RTREE load] n={n} height={self.root.height}")

    def _build(self, items: List[Datum], height: int) -> Node:
        if height == 0:
            return self._new_leaf(items)

        n = len(items)
        cap = self.M ** height          # lo que entra en un hijo
        s = ceil(n / cap)               # hijos de este nodo (<= M)
        n2 = ceil(n / s)                # ítems por hijo
        n1 = n2 * ceil(s / ceil(sqrt(s)))  # ítems por franja vertical

        node = NonLeafNode(self.M, m=self.settings.min_fill, debug=self.debug)
        items = sorted(items, key=lambda d: center(d.rect)[0])
        for i in range(0, n, n1):
            slab = sorted(items[i:i + n1], key=lambda d: center(d.rect)[1])
            for j in range(0, len(slab), n2):
                node.add_child(self._build(slab[j:j + n2], height - 1))
        return node

    # ---------- lecturas ----------
    def search(self, rect: RectLike, should_include: Predicate = None) -> List[Datum]:
        """Datum cuyo rect intersecta `rect` (y que pasan `should_include(value)` si se da)."""
        m = to_mbr(rect, allow_empty=True)
        if is_empty(m) or self.root.size == 0:
            return []
        return self.root.search(m, should_include)

    def range(self, x: float, y: float, r: float, should_include: Predicate = None) -> List[Datum]:
        """point + radio: intersecta con rect circunscrito y filtra por distancia al centro."""
        if r < 0:
            raise ValueError(f"radio negativo: {r}")
        r2 = r * r
        out = []
        for d in self.search(rect_from_point_radius(float(x), float(y), float(r)), should_include):
            cx, cy = center(d.rect)
            if (cx - x)**2 + (cy - y)**2 <= r2:
                out.append(d)
        return out

    def all_items(self) -> List[Datum]:
        return self.root.get_all_items()

    def stats(self) -> dict:
        nodes = entries = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            nodes += 1
            entries += len(node.children)
            if not node.is_leaf:
                stack.extend(node.children)
        return basic_stats(self.height, nodes, self.size, avg_fill(nodes, entries, self.M))
