# geoindex/rtree/node.py
import weakref
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional

from .mbr import MBR, EMPTY, area, contains, enlargement, expand, intersects
from .settings import DEBUG_IDX, min_fill
from .split import quadratic_split

Predicate = Optional[Callable[[Any], bool]]


@dataclass(frozen=True)
class Datum:
    rect: MBR
    value: Any


class Node:
    """Nodo base del R-Tree. Las variantes son LeafNode y NonLeafNode."""
    is_leaf = False

    def __init__(self, M: int, m: Optional[int] = None, debug: bool = DEBUG_IDX):
        if M < 2:
            raise ValueError(f"branch factor inválido: {M} (mínimo 2)")
        self.M = M
        self.m = m if m is not None else min_fill(M)
        self.rect: MBR = EMPTY
        self.height = 0
        self._parent = None
        self.debug = debug

    # referencia débil al padre
    @property
    def parent(self) -> Optional["Node"]:
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node: Optional["Node"]):
        self._parent = weakref.ref(node) if node is not None else None

    @property
    def children(self) -> list:
        raise NotImplementedError

    @property
    def size(self) -> int:
        raise NotImplementedError

    def create_new_node(self) -> "Node":
        raise NotImplementedError

    def insert(self, item: Datum) -> Optional["Node"]:
        raise NotImplementedError

    def remove(self, item: Datum) -> bool:
        raise NotImplementedError

    def search(self, rect: MBR, should_include: Predicate = None) -> List[Datum]:
        raise NotImplementedError

    def get_all_items(self) -> List[Datum]:
        raise NotImplementedError

    # ---------- bounds ----------
    def include(self, rect: MBR):
        self.rect = expand(self.rect, rect)

    def update_bounding_rect(self):
        m = EMPTY
        for c in self.children:
            m = expand(m, c.rect)
        self.rect = m

    def expansion_cost(self, item: Datum) -> float:
        return enlargement(self.rect, item.rect)

    def area(self) -> float:
        return area(self.rect)

    # ---------- children ----------
    def add_child(self, child):
        self.children.append(child)
        self.include(child.rect)

    def remove_child(self, child) -> bool:
        for i, c in enumerate(self.children):
            if c is child:
                del self.children[i]
                self.update_bounding_rect()
                return True
        return False

    def clear_children(self):
        self.rect = EMPTY

    # ---------- split ----------
    def split_if_necessary(self) -> Optional["Node"]:
        if len(self.children) > self.M:
            return self._split()
        return None

    def _split(self) -> "Node":
        sibling = self.create_new_node()
        g1, g2 = quadratic_split(list(self.children), self.m)

        self.clear_children()
        for e in g1:
            self.add_child(e)
        for e in g2:
            sibling.add_child(e)

        if self.debug:
            kind = "leaf" if self.is_leaf else "inner"
            print(f"[RTREE split] {kind} {len(g1)}/{len(g2)} rects={tuple(self.rect)} | {tuple(sibling.rect)}")
        return sibling


class LeafNode(Node):
    """Hoja: guarda los Datum directamente. height = 0."""
    is_leaf = True

    def __init__(self, M: int, initial_items: Iterable[Datum] = (), m: Optional[int] = None,
                 debug: bool = DEBUG_IDX):
        super().__init__(M, m, debug)
        self._items: List[Datum] = []
        initial_items = list(initial_items)
        if len(initial_items) > M:
            raise ValueError("too many items")
        for item in initial_items:
            self.add_child(item)

    @property
    def children(self) -> List[Datum]:
        return self._items

    @property
    def size(self) -> int:
        return len(self._items)

    def create_new_node(self) -> "LeafNode":
        return LeafNode(self.M, m=self.m, debug=self.debug)

    def insert(self, item: Datum) -> Optional[Node]:
        self.add_child(item)
        return self.split_if_necessary()

    def remove(self, item: Datum) -> bool:
        for i, d in enumerate(self._items):
            if d == item:
                del self._items[i]
                self.update_bounding_rect()
                return True
        return False

    def search(self, rect: MBR, should_include: Predicate = None) -> List[Datum]:
        return [d for d in self._items
                if intersects(d.rect, rect) and (should_include is None or should_include(d.value))]

    def get_all_items(self) -> List[Datum]:
        return list(self._items)

    def clear_children(self):
        super().clear_children()
        self._items.clear()


class NonLeafNode(Node):
    """Nodo interno: guarda nodos hijos. Se crean solos al insertar/borrar."""

    def __init__(self, M: int, initial_children: Iterable[Node] = (), m: Optional[int] = None,
                 debug: bool = DEBUG_IDX):
        super().__init__(M, m, debug)
        self._child_nodes: List[Node] = []
        initial_children = list(initial_children)
        if len(initial_children) > M:
            raise ValueError("too many items")
        for child in initial_children:
            self.add_child(child)

    @property
    def children(self) -> List[Node]:
        return self._child_nodes

    @property
    def size(self) -> int:
        return sum(c.size for c in self._child_nodes)

    def create_new_node(self) -> "NonLeafNode":
        return NonLeafNode(self.M, m=self.m, debug=self.debug)

    def get_all_items(self) -> List[Datum]:
        out: List[Datum] = []
        for c in self._child_nodes:
            out.extend(c.get_all_items())
        return out

    def search(self, rect: MBR, should_include: Predicate = None) -> List[Datum]:
        # la consulta cubre todo el nodo: no hace falta probar cada hijo
        if contains(rect, self.rect):
            items = self.get_all_items()
            if should_include is None:
                return items
            return [d for d in items if should_include(d.value)]

        out: List[Datum] = []
        for c in self._child_nodes:
            if intersects(c.rect, rect):
                out.extend(c.search(rect, should_include))
        return out

    def insert(self, item: Datum) -> Optional[Node]:
        self.include(item.rect)

        best = self._get_best_node_for_insert(item)
        split_node = best.insert(item)
        if split_node is not None:
            self.add_child(split_node)

        return self.split_if_necessary()

    def remove(self, item: Datum) -> bool:
        to_remove: List[Node] = []
        removed = False

        # se borra un solo Datum por llamada
        for c in self._child_nodes:
            if intersects(c.rect, item.rect) and c.remove(item):
                removed = True
                if c.size == 0:
                    to_remove.append(c)
                break

        if removed:
            for c in to_remove:
                self.remove_child(c)
            self._update_height_and_bounds()
        return removed

    def add_child(self, child: Node):
        super().add_child(child)
        child.parent = self
        self.height = max(self.height, child.height + 1)

    def remove_child(self, child: Node) -> bool:
        if super().remove_child(child):
            child.parent = None
            self._update_height_and_bounds()
            return True
        return False

    def clear_children(self):
        super().clear_children()
        for c in self._child_nodes:
            c.parent = None
        self._child_nodes.clear()
        self.height = 0

    def _get_best_node_for_insert(self, item: Datum) -> Node:
        best = self._child_nodes[0]
        best_cost = best.expansion_cost(item)
        for c in self._child_nodes[1:]:
            cost = c.expansion_cost(item)
            if cost < best_cost:
                best, best_cost = c, cost
        return best

    def _update_height_and_bounds(self):
        max_child_height = 0
        for c in self._child_nodes:
            max_child_height = max(max_child_height, c.height)
        self.height = 1 + max_child_height
        self.update_bounding_rect()
