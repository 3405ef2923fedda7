# geoindex/rtree/split.py
from math import inf
from typing import List, Sequence, Tuple

from .mbr import area, expand, enlargement


def pick_seeds(entries: Sequence) -> Tuple[int, int]:
    # semillas: el par que más área desperdicia juntos
    worst, si, sj = -inf, 0, 1
    n = len(entries)
    for i in range(n):
        ri = entries[i].rect
        for j in range(i + 1, n):
            rj = entries[j].rect
            w = area(expand(ri, rj)) - area(ri) - area(rj)
            if w > worst:
                worst, si, sj = w, i, j
    return si, sj


def quadratic_split(entries: Sequence, m: int) -> Tuple[List, List]:
    """Split cuadrático (Guttman).

    `entries` son objetos con atributo `.rect` (Datum o Node). Devuelve dos grupos,
    cada uno con al menos `m` entradas.
    """
    if len(entries) < 2:
        raise ValueError("Se necesitan al menos 2 entradas para partir un nodo.")
    s0, s1 = pick_seeds(entries)
    g0, g1 = [entries[s0]], [entries[s1]]
    cov0, cov1 = entries[s0].rect, entries[s1].rect
    remaining = [e for i, e in enumerate(entries) if i not in (s0, s1)]

    while remaining:
        # si un grupo necesita todo lo que queda para llegar al mínimo, se lo lleva
        if len(g0) + len(remaining) <= m:
            g0.extend(remaining)
            break
        if len(g1) + len(remaining) <= m:
            g1.extend(remaining)
            break

        best_idx = 0; best_diff = -1.0; best_group = 0
        for i, e in enumerate(remaining):
            d0 = enlargement(cov0, e.rect)
            d1 = enlargement(cov1, e.rect)
            if d0 < d1: group = 0
            elif d1 < d0: group = 1
            else: group = 0 if len(g0) <= len(g1) else 1
            diff = abs(d0 - d1)
            if diff > best_diff:
                best_diff = diff; best_idx = i; best_group = group

        e = remaining.pop(best_idx)
        if best_group == 0:
            g0.append(e); cov0 = expand(cov0, e.rect)
        else:
            g1.append(e); cov1 = expand(cov1, e.rect)

    return g0, g1
