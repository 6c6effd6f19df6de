import numpy as np
import math
from typing import Iterable, List, Tuple

from .errors import InvalidInputError

def parse_bits(bits) -> List[int]:
    """Acepta una cadena '0101' o un iterable de 0/1 (int o str) y devuelve lista de int."""
    out = []
    for b in bits:
        if b in (0, 1, '0', '1') and not isinstance(b, bool):
            out.append(int(b))
        else:
            raise InvalidInputError(f"Bit inválido: {b!r} (solo 0 o 1)")
    return out

def bits_entropy_stats(bits: List[int]) -> Tuple[float, float, float, float]:
    """
    Calcula métricas del flujo de bits:
    - p0: probabilidad de 0
    - p1: probabilidad de 1
    - H: entropía (bits/bit)
    - var: varianza sobre {0,1}
    """
    arr = np.array(bits, dtype=np.uint8)
    if arr.size == 0:
        return 0.0, 0.0, 0.0, 0.0
    p1 = float(arr.mean())
    p0 = 1 - p1

    def hb(p):
        if p <= 0 or p >= 1:
            return 0.0
        return -p * math.log2(p) - (1 - p) * math.log2(1 - p)

    H = hb(p1)
    var = float(arr.var())
    return p0, p1, H, var

def symbol_entropy(counts: Iterable[int]) -> float:
    """Entropía de Shannon de la distribución de símbolos [bits/símbolo]."""
    c = np.asarray(list(counts), dtype=np.float64)
    total = c.sum()
    if total <= 0:
        return 0.0
    p = c[c > 0] / total
    return float(-(p * np.log2(p)).sum())
