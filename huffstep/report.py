import os
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from .codec import ASCII_BITS, CompressionStats

METRIC_COLUMNS = [
    "Caso",
    "Longitud",
    "Símbolos distintos",
    "Bits originales",
    "Bits Huffman",
    "Reducción [%]",
    "Longitud media [bits/símbolo]",
    "Entropía [bits/símbolo]",
    "Eficiencia",
]

# Caracteres que rompen una fila de tabla markdown
_MD_ESCAPES = {
    ' ': '·',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '|': '\\|',
    '`': '\\`',
    '*': '\\*',
    '_': '\\_',
}


def md_escape(text) -> str:
    return ''.join(_MD_ESCAPES.get(ch, ch) for ch in str(text))


def write_markdown(out_dir: str, text: str, stats: CompressionStats, code_table: pd.DataFrame,
                   encoded_preview: str = ""):
    rows = "\n".join(
        f"| {md_escape(r.symbol)} | {r.count} | {r.code} | {r.bits} |"
        for r in code_table.itertuples(index=False)
    )
    md = f"""# Codificación de Huffman

Texto: {md_escape(text[:80])}{'…' if len(text) > 80 else ''} ({stats.input_length} símbolos, {stats.unique_symbols} distintos)

## 1) Tabla de códigos
| Símbolo | Frecuencia | Código | Bits |
|---|---|---|---|
{rows}

## 2) Salida codificada
`{encoded_preview}`

## 3) Métricas
- Original: {stats.original_bits} bits ({ASCII_BITS} bits/símbolo)
- Huffman: {stats.encoded_bits} bits
- Reducción: {stats.reduction_percent:.2f} %
- Longitud media: {stats.avg_code_length:.3f} bits/símbolo (entropía {stats.entropy:.3f})

Frecuencias por símbolo: ver **frecuencias.csv**.

Histograma de bits: ![bits_huffman](figures/bits_hist_huffman.png)

**Notas**
- La base de {ASCII_BITS} bits/símbolo es solo una convención de reporte.
"""
    path = os.path.join(out_dir, "informe_huffman.md")
    with open(path, "w", encoding="utf-8") as f:
        f.write(md)
    return path


def save_code_table_csv(out_dir: str, code_table: pd.DataFrame) -> str:
    path = os.path.join(out_dir, "tabla_codigos.csv")
    code_table.to_csv(path, index=False)
    return path


def save_frequency_csv(out_dir: str, freq_table: pd.DataFrame) -> str:
    path = os.path.join(out_dir, "frecuencias.csv")
    freq_table.to_csv(path, index=False)
    return path


def save_metrics_csv(out_dir: str, rows):
    df = pd.DataFrame(rows, columns=METRIC_COLUMNS)
    df.to_csv(os.path.join(out_dir, "resumen_metricas.csv"), index=False)
    return df


def plot_encoded_bits(bits, fname, title="Flujo codificado (Huffman)"):
    """Conteo de 0/1 del flujo codificado, con el porcentaje de cada bit sobre la barra."""
    bits = np.asarray(bits, dtype=np.uint8)
    counts = np.bincount(bits, minlength=2)[:2]
    total = max(int(counts.sum()), 1)
    plt.figure()
    plt.bar([0, 1], counts)
    for b, c in enumerate(counts):
        plt.text(b, c, f"{100.0 * c / total:.1f} %", ha='center', va='bottom')
    plt.xticks([0, 1], ['0', '1'])
    plt.xlabel('Bit codificado')
    plt.ylabel('Apariciones')
    plt.title(f"{title}: {int(counts.sum())} bits")
    plt.tight_layout()
    plt.savefig(fname, dpi=140)
    plt.close()
    return counts
