"""
Codificación / decodificación con una tabla de Huffman y estadísticas de compresión.

El tamaño "original" se informa con una base fija de ASCII_BITS bits por
símbolo (ASCII). Es solo una convención de reporte: no interviene en la
codificación.
"""
from dataclasses import dataclass
from typing import Dict, Hashable, List, Sequence, Tuple

import pandas as pd

from .bits_utils import parse_bits, symbol_entropy
from .errors import DecodeDesyncError, LookupFailureError
from .frequency import FrequencyEntry
from .huffman import HuffNode

ASCII_BITS = 8


@dataclass
class EncodedResult:
    bits: List[int]
    original_bit_length: int
    encoded_bit_length: int

    @property
    def bitstring(self) -> str:
        return ''.join(str(b) for b in self.bits)

    def preview(self, limit: int = 64) -> str:
        """Cadena de bits truncada para mostrar (termina en '…' si se recortó)."""
        s = self.bitstring
        if limit is None or len(s) <= limit:
            return s
        return s[:max(limit, 0)] + '…'


def encode(symbols: Sequence[Hashable], code: Dict[Hashable, str]) -> EncodedResult:
    """
    Concatena el código de cada símbolo en el orden de entrada.
    Un símbolo ausente de la tabla es un error (tabla de otra entrada).
    """
    out_bits = []
    n = 0
    for s in symbols:
        try:
            c = code[s]
        except KeyError:
            raise LookupFailureError(s) from None
        out_bits.extend(int(ch) for ch in c)
        n += 1
    return EncodedResult(
        bits=out_bits,
        original_bit_length=n * ASCII_BITS,
        encoded_bit_length=len(out_bits),
    )


def decode(bits, root: HuffNode) -> List[Hashable]:
    """
    Recorre el árbol desde la raíz: 0 -> izquierda, 1 -> derecha; al llegar a
    una hoja emite su símbolo y vuelve a la raíz.
    Con un árbol de una sola hoja cada bit '0' emite el símbolo.
    """
    bits = parse_bits(bits)
    out = []

    if root.is_leaf:
        for pos, b in enumerate(bits):
            if b != 0:
                raise DecodeDesyncError("Bit '1' con un árbol de un solo símbolo", pos)
            out.append(root.symbol)
        return out

    node = root
    for b in bits:
        node = node.right if b else node.left
        if node.is_leaf:
            out.append(node.symbol)
            node = root
    if node is not root:
        raise DecodeDesyncError("El flujo de bits terminó a mitad de un código", len(bits))
    return out


def decode_text(bits, root: HuffNode) -> str:
    return ''.join(decode(bits, root))


@dataclass
class CompressionStats:
    input_length: int
    unique_symbols: int
    original_bits: int
    encoded_bits: int
    saved_bits: int
    ratio: float
    reduction_percent: float
    avg_code_length: float
    entropy: float
    efficiency: float

    def as_row(self, case: str) -> Tuple:
        return (
            case,
            self.input_length,
            self.unique_symbols,
            self.original_bits,
            self.encoded_bits,
            self.reduction_percent,
            self.avg_code_length,
            self.entropy,
            self.efficiency,
        )


def compression_stats(symbols: Sequence[Hashable], entries: List[FrequencyEntry],
                      result: EncodedResult) -> CompressionStats:
    """
    - reduction_percent = 100 * (1 - codificado / original)
    - avg_code_length = bits codificados / longitud de la entrada
    - entropy: entropía de Shannon de las frecuencias (cota inferior de avg_code_length)
    Entrada vacía: todo en cero y ratio 1.0.
    """
    n = len(symbols)
    orig = result.original_bit_length
    enc = result.encoded_bit_length
    ratio = enc / orig if orig > 0 else 1.0
    Lavg = enc / n if n > 0 else 0.0
    H = symbol_entropy(e.count for e in entries)
    return CompressionStats(
        input_length=n,
        unique_symbols=len(entries),
        original_bits=orig,
        encoded_bits=enc,
        saved_bits=orig - enc,
        ratio=ratio,
        reduction_percent=100.0 * (1.0 - ratio) if orig > 0 else 0.0,
        avg_code_length=Lavg,
        entropy=H,
        efficiency=H / Lavg if Lavg > 0 else 0.0,
    )


def symbol_costs(entries: List[FrequencyEntry], code: Dict[Hashable, str]) -> pd.DataFrame:
    """Tabla símbolo / frecuencia / código / bits aportados (frecuencia * longitud)."""
    rows = []
    for e in entries:
        if e.symbol not in code:
            raise LookupFailureError(e.symbol)
        c = code[e.symbol]
        rows.append((e.symbol, e.count, c, len(c), e.count * len(c)))
    return pd.DataFrame(rows, columns=["symbol", "count", "code", "code_length", "bits"])


def encoding_example(symbols: Sequence[Hashable], code: Dict[Hashable, str],
                     limit: int = 8) -> List[Tuple[Hashable, str]]:
    """Primeros `limit` símbolos junto a su código."""
    out = []
    for s in list(symbols)[:limit]:
        if s not in code:
            raise LookupFailureError(s)
        out.append((s, code[s]))
    return out


def describe(text: str, stats: CompressionStats) -> str:
    s = (
        f'Huffman coding of "{text}": {stats.input_length} characters, '
        f'{stats.unique_symbols} unique symbols. '
        f'Original: {stats.original_bits} bits ({ASCII_BITS} bits/char), '
        f'Compressed: {stats.encoded_bits} bits (avg {stats.avg_code_length:.2f} bits/char). '
        f'Compression ratio: {stats.ratio * 100:.1f}%. '
    )
    if stats.saved_bits > 0:
        s += f'Space saved: {stats.saved_bits} bits ({stats.reduction_percent:.1f}%).'
    else:
        s += 'No compression achieved.'
    return s
