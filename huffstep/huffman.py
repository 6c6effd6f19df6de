"""
Árbol de Huffman: construcción voraz completa o paso a paso, y tabla de códigos.

Regla de selección (común a ambos caminos): se eligen los dos nodos de menor
peso; los empates se resuelven por node_id creciente. El primero elegido va a
la izquierda (bit '0') y el segundo a la derecha (bit '1').
Las hojas reciben ids 0..n-1 en el orden de las frecuencias y cada fusión
recibe el siguiente id libre.
"""
from dataclasses import dataclass, replace
from heapq import heapify, heappop, heappush
from typing import Dict, Hashable, Iterator, List, Optional, Tuple

from .errors import InvalidInputError
from .frequency import FrequencyEntry, validate_entries


class HuffNode:
    __slots__ = ("weight", "node_id", "symbol", "left", "right")

    def __init__(self, weight, node_id, symbol=None, left=None, right=None):
        self.weight = weight
        self.node_id = node_id
        self.symbol = symbol
        self.left = left
        self.right = right

    @property
    def is_leaf(self) -> bool:
        return self.left is None

    def sort_key(self) -> Tuple[int, int]:
        return (self.weight, self.node_id)

    def __lt__(self, other):
        # Necesario para que heapq compare nodos de forma determinista
        return self.sort_key() < other.sort_key()

    def __repr__(self):
        if self.is_leaf:
            return f"HuffNode(#{self.node_id} {self.symbol!r}:{self.weight})"
        return f"HuffNode(#{self.node_id} :{self.weight} [{self.left.node_id}, {self.right.node_id}])"


def make_leaves(entries: List[FrequencyEntry]) -> List[HuffNode]:
    validate_entries(entries)
    return [HuffNode(e.count, i, symbol=e.symbol) for i, e in enumerate(entries)]


def merge(first: HuffNode, second: HuffNode, node_id: int) -> HuffNode:
    """Nuevo padre con first a la izquierda y second a la derecha. No modifica los operandos."""
    return HuffNode(first.weight + second.weight, node_id, left=first, right=second)


def build_tree(entries: List[FrequencyEntry]) -> HuffNode:
    """
    Construcción completa con heap, O(n log n).
    Con una sola entrada devuelve directamente la hoja (no hay nada que fusionar).
    """
    if not entries:
        raise InvalidInputError("No hay símbolos: el árbol necesita al menos una frecuencia")
    heap = make_leaves(entries)
    if len(heap) == 1:
        return heap[0]

    next_id = len(heap)
    heapify(heap)
    while len(heap) > 1:
        a = heappop(heap)
        b = heappop(heap)
        heappush(heap, merge(a, b, next_id))
        next_id += 1
    return heappop(heap)


# ---------------------------------------------------------------------------
# Construcción incremental
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MergeStep:
    left: HuffNode
    right: HuffNode
    parent: HuffNode


@dataclass(frozen=True)
class BuildSession:
    candidates: Tuple[HuffNode, ...]
    finished: Optional[HuffNode] = None
    next_id: int = 0
    steps: int = 0
    history: Tuple[MergeStep, ...] = ()

    @property
    def last_step(self) -> Optional[MergeStep]:
        return self.history[-1] if self.history else None


def _settle(session: BuildSession) -> BuildSession:
    # Con un único candidato el árbol está terminado
    if session.finished is None and len(session.candidates) == 1:
        return replace(session, candidates=(), finished=session.candidates[0])
    return session


def start_session(entries: List[FrequencyEntry]) -> BuildSession:
    if not entries:
        raise InvalidInputError("No hay símbolos: no se puede iniciar la construcción")
    leaves = make_leaves(entries)
    return _settle(BuildSession(candidates=tuple(leaves), next_id=len(leaves)))


def _two_smallest(nodes) -> Tuple[int, int]:
    """Índices de los dos candidatos de menor (peso, id), por barrido lineal."""
    i1 = min(range(len(nodes)), key=lambda i: nodes[i].sort_key())
    i2 = min((i for i in range(len(nodes)) if i != i1), key=lambda i: nodes[i].sort_key())
    return i1, i2


def advance_step(session: BuildSession) -> BuildSession:
    """
    Realiza exactamente una fusión y devuelve una sesión nueva.
    La sesión recibida no se modifica; si ya está terminada solo se asienta (un único candidato pasa a finished).
    """
    if is_finished(session):
        return _settle(session)

    nodes = session.candidates
    i1, i2 = _two_smallest(nodes)
    parent = merge(nodes[i1], nodes[i2], session.next_id)
    rest = tuple(n for i, n in enumerate(nodes) if i not in (i1, i2))

    nxt = BuildSession(
        candidates=rest + (parent,),
        next_id=session.next_id + 1,
        steps=session.steps + 1,
        history=session.history + (MergeStep(nodes[i1], nodes[i2], parent),),
    )
    return _settle(nxt)


def is_finished(session: BuildSession) -> bool:
    return len(session.candidates) <= 1


def remaining_steps(session: BuildSession) -> int:
    return max(len(session.candidates) - 1, 0)


def run_to_completion(session: BuildSession) -> HuffNode:
    while not is_finished(session):
        session = advance_step(session)
    return session.finished


def current_forest(session: BuildSession) -> List[HuffNode]:
    """Árboles a dibujar ahora: los candidatos durante la construcción, o la raíz al final."""
    if session.finished is not None:
        return [session.finished]
    return sorted(session.candidates, key=HuffNode.sort_key)


# ---------------------------------------------------------------------------
# Recorridos
# ---------------------------------------------------------------------------

def iter_nodes(root: HuffNode) -> Iterator[HuffNode]:
    """Preorden (nodo, izquierda, derecha)."""
    stack = [root]
    while stack:
        n = stack.pop()
        yield n
        if not n.is_leaf:
            stack.append(n.right)
            stack.append(n.left)


def leaves(root: HuffNode) -> List[HuffNode]:
    return [n for n in iter_nodes(root) if n.is_leaf]


def tree_depth(root: Optional[HuffNode]) -> int:
    """Número de niveles (una hoja sola tiene profundidad 1)."""
    if root is None:
        return 0
    if root.is_leaf:
        return 1
    return 1 + max(tree_depth(root.left), tree_depth(root.right))


def weighted_path_length(root: HuffNode) -> int:
    """Suma de peso * profundidad sobre las hojas."""
    total = 0
    stack = [(root, 0)]
    while stack:
        n, d = stack.pop()
        if n.is_leaf:
            total += n.weight * d
        else:
            stack.append((n.left, d + 1))
            stack.append((n.right, d + 1))
    return total


def same_shape(a: Optional[HuffNode], b: Optional[HuffNode]) -> bool:
    """Igualdad estructural: forma, orden izquierda/derecha, pesos y símbolos."""
    if a is None or b is None:
        return a is b
    if a.weight != b.weight or a.is_leaf != b.is_leaf:
        return False
    if a.is_leaf:
        return a.symbol == b.symbol
    return same_shape(a.left, b.left) and same_shape(a.right, b.right)


# ---------------------------------------------------------------------------
# Tabla de códigos
# ---------------------------------------------------------------------------

def generate_codes(root: HuffNode) -> Dict[Hashable, str]:
    """
    Asigna a cada hoja el camino desde la raíz: '0' a la izquierda, '1' a la derecha.
    Caso degenerado: si la raíz es hoja (un solo símbolo) su código es '0'.
    """
    if root.is_leaf:
        return {root.symbol: '0'}

    code = {}
    stack = [(root, '')]
    while stack:
        n, prefix = stack.pop()
        if n.is_leaf:
            code[n.symbol] = prefix
            continue
        stack.append((n.right, prefix + '1'))
        stack.append((n.left, prefix + '0'))
    return code


def is_prefix_free(codes: Dict[Hashable, str]) -> bool:
    # Tras ordenar, si un código es prefijo de otro queda justo antes de alguno que lo extiende
    ordered = sorted(codes.values())
    return all(not b.startswith(a) for a, b in zip(ordered, ordered[1:]))
