import re

from huffstep.codec import compression_stats, encode, symbol_costs
from huffstep.frequency import count_frequencies
from huffstep.huffman import build_tree, generate_codes
from huffstep.report import md_escape, plot_encoded_bits, write_markdown

UNESCAPED_PIPE = re.compile(r"(?<!\\)\|")


def test_md_escape():
    assert md_escape("a|b") == "a\\|b"
    assert md_escape("`") == "\\`"
    assert md_escape("\n") == "\\n"
    assert md_escape(" ") == "·"


def test_markdown_table_survives_special_symbols(tmp_path):
    text = "a|b`c\nd||"
    entries = count_frequencies(text)
    codes = generate_codes(build_tree(entries))
    res = encode(text, codes)
    table = symbol_costs(entries, codes)
    path = write_markdown(str(tmp_path), text, compression_stats(text, entries, res), table, res.preview())

    lines = open(path, encoding="utf-8").read().splitlines()
    start = lines.index("|---|---|---|---|") + 1
    rows = []
    for line in lines[start:]:
        if not line.startswith("|"):
            break
        rows.append(line)
    assert len(rows) == len(entries)
    for row in rows:
        assert len(UNESCAPED_PIPE.findall(row)) == 5


def test_plot_encoded_bits(tmp_path):
    fname = tmp_path / "bits.png"
    counts = plot_encoded_bits([0, 0, 1, 0], str(fname))
    assert list(counts) == [3, 1]
    assert fname.is_file()
