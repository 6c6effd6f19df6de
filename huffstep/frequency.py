from collections import Counter
from dataclasses import dataclass
from typing import Hashable, Iterable, List

import pandas as pd

from .errors import InvalidInputError


@dataclass(frozen=True)
class FrequencyEntry:
    symbol: Hashable
    count: int

    def __post_init__(self):
        if self.count <= 0:
            raise InvalidInputError(f"El conteo de {self.symbol!r} debe ser > 0 (es {self.count})")


def count_frequencies(symbols: Iterable[Hashable]) -> List[FrequencyEntry]:
    """
    Cuenta las apariciones de cada símbolo.
    Devuelve la lista ordenada de menor a mayor conteo; los empates
    conservan el orden de primera aparición (sort estable sobre Counter).
    """
    counts = Counter(symbols)
    entries = [FrequencyEntry(s, c) for s, c in counts.items()]
    entries.sort(key=lambda e: e.count)
    return entries


def validate_entries(entries: List[FrequencyEntry]) -> None:
    seen = set()
    for e in entries:
        if e.count <= 0:
            raise InvalidInputError(f"El conteo de {e.symbol!r} debe ser > 0 (es {e.count})")
        if e.symbol in seen:
            raise InvalidInputError(f"Símbolo duplicado en las frecuencias: {e.symbol!r}")
        seen.add(e.symbol)


def total_count(entries: List[FrequencyEntry]) -> int:
    return sum(e.count for e in entries)


def frequency_table(entries: List[FrequencyEntry]) -> pd.DataFrame:
    """Tabla (symbol, count, probability) para la vista de frecuencias."""
    total = total_count(entries)
    df = pd.DataFrame(
        [(e.symbol, e.count) for e in entries],
        columns=["symbol", "count"],
    )
    df["probability"] = df["count"] / total if total else 0.0
    return df
