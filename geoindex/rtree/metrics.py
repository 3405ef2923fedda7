# geoindex/rtree/metrics.py
def avg_fill(nodes_count: int, total_entries: int, M: int) -> float:
    if nodes_count == 0: return 0.0
    return total_entries / (nodes_count * M)

def basic_stats(height: int, nodes: int, size: int, fill: float) -> dict:
    return {
        "height": height,
        "nodes": nodes,
        "size": size,
        "avg_fill": round(fill, 3)
    }
