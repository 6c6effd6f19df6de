import argparse
import os
import sys
from pathlib import Path

from .bits_utils import bits_entropy_stats
from .codec import describe, symbol_costs
from .engine import MODES, PRESET_TEXTS, HuffmanParams, HuffmanRun, run
from .errors import HuffmanError
from .huffman import is_prefix_free


def prepare_out_dir(out_dir: str) -> Path:
    """Crea <out_dir>/figures y devuelve esa carpeta."""
    figdir = Path(out_dir) / "figures"
    figdir.mkdir(parents=True, exist_ok=True)
    return figdir


def _show(sym) -> str:
    # El espacio se muestra como '·' y los caracteres de control escapados
    if sym == ' ':
        return '·'
    s = str(sym)
    return s if s.isprintable() else s.encode("unicode_escape").decode("ascii")


def print_step(r: HuffmanRun):
    def label(n):
        return f"{_show(n.symbol)}:{n.weight}" if n.is_leaf else f"#{n.node_id}:{n.weight}"

    st = r.session.last_step
    a, b, p = st.left, st.right, st.parent
    print(f"Paso {r.session.steps}: {label(a)} + {label(b)} -> #{p.node_id}:{p.weight}")


def print_summary(r: HuffmanRun):
    snap = r.snapshot()
    print("Frecuencias:")
    for row in snap["frequencies"].itertuples(index=False):
        print(f"  {_show(row.symbol)}  {row.count}  ({row.probability:.3f})")
    if not r.codes:
        print("Entrada vacía: no hay árbol ni códigos.")
        return
    table = symbol_costs(r.entries, r.codes)
    print("Códigos:")
    for row in table.itertuples(index=False):
        print(f"  {_show(row.symbol)}  {row.code:<12} {row.bits} bits")
    print(f"Prefijo libre: {'sí' if is_prefix_free(r.codes) else 'no'}")
    print("Ejemplo: " + " ".join(f"{_show(s)}={c}" for s, c in snap["example"]))
    print(f"Bits: {snap['encoded_preview']}")
    print(describe(r.text, r.stats))


def write_outputs(r: HuffmanRun, out_dir: str, params: HuffmanParams):
    os.environ.setdefault("MPLBACKEND", "Agg")
    from .report import (
        plot_encoded_bits,
        save_code_table_csv,
        save_frequency_csv,
        save_metrics_csv,
        write_markdown,
    )

    figdir = prepare_out_dir(out_dir)
    table = symbol_costs(r.entries, r.codes)
    save_code_table_csv(out_dir, table)
    save_frequency_csv(out_dir, r.snapshot()["frequencies"])
    save_metrics_csv(out_dir, [r.stats.as_row(r.text[:40])])
    write_markdown(out_dir, r.text, r.stats, table, r.encoded.preview(params.preview_bits))
    plot_encoded_bits(r.encoded.bits, str(figdir / "bits_hist_huffman.png"))
    p0, p1, H, _ = bits_entropy_stats(r.encoded.bits)
    print(f"P(0)={p0:.3f} P(1)={p1:.3f} H={H:.3f} bits/bit")


def main(argv=None):
    ap = argparse.ArgumentParser(description="Codificación de Huffman paso a paso")
    src = ap.add_mutually_exclusive_group()
    src.add_argument("--text", help="Texto a codificar")
    src.add_argument("--preset", type=int, choices=range(len(PRESET_TEXTS)),
                     help="Texto de ejemplo: " + ", ".join(f"{i}={t!r}" for i, t in enumerate(PRESET_TEXTS)))
    src.add_argument("--file", help="Ruta a archivo de texto (UTF-8)")
    ap.add_argument("--mode", choices=MODES, default="eager", help="Construcción completa o una fusión por paso")
    ap.add_argument("--out", default=None, help="Directorio de salida (CSV, informe y figura)")
    ap.add_argument("--preview-bits", type=int, default=64, help="Bits codificados a mostrar")
    args = ap.parse_args(argv)

    try:
        if args.file:
            with open(args.file, "r", encoding="utf-8") as f:
                text = f.read()
        elif args.text is not None:
            text = args.text
        else:
            text = PRESET_TEXTS[args.preset or 0]

        params = HuffmanParams(text=text, mode=args.mode, preview_bits=args.preview_bits)
        r = run(params)
        if params.mode == "step":
            while r.step():
                print_step(r)
        print_summary(r)
        if args.out and r.codes:
            write_outputs(r, args.out, params)
            print(f"Listo. Salidas en: {args.out}")
        elif args.out:
            print(f"Entrada vacía: no se escribieron salidas en {args.out}")
    except (HuffmanError, OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
