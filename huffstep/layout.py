"""
Posiciones (x, y) de los nodos para dibujar el árbol.

Subdivisión horizontal recursiva: cada hijo ocupa la mitad del ancho del padre
y baja un nivel. Solo lee el árbol; no forma parte del motor.
"""
from typing import Dict, List, Optional, Tuple

from .huffman import HuffNode, tree_depth


def layout_tree(root: HuffNode, x: float = 0.5, y: float = 0.0, width: float = 1.0,
                level_height: Optional[float] = None) -> Dict[int, Tuple[float, float]]:
    """Devuelve {node_id: (x, y)}; x es el centro del nodo, y crece hacia abajo."""
    if level_height is None:
        level_height = 1.0 / max(tree_depth(root), 1)

    pos = {}
    stack = [(root, x, y, width)]
    while stack:
        n, nx, ny, w = stack.pop()
        pos[n.node_id] = (nx, ny)
        if n.is_leaf:
            continue
        child_w = w / 2
        stack.append((n.left, nx - child_w / 2, ny + level_height, child_w))
        stack.append((n.right, nx + child_w / 2, ny + level_height, child_w))
    return pos


def layout_forest(nodes: List[HuffNode], width: float = 1.0) -> Dict[int, Tuple[float, float]]:
    """Coloca varios subárboles en franjas iguales (construcción en curso)."""
    if not nodes:
        return {}
    slot = width / len(nodes)
    depth = max(tree_depth(n) for n in nodes)
    pos = {}
    for i, n in enumerate(nodes):
        pos.update(layout_tree(n, x=slot * (i + 0.5), width=slot, level_height=1.0 / max(depth, 1)))
    return pos
