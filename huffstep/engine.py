from dataclasses import dataclass
from typing import Dict, List, Optional

from .codec import (
    CompressionStats,
    EncodedResult,
    compression_stats,
    encode,
    encoding_example,
)
from .frequency import FrequencyEntry, count_frequencies, frequency_table
from .huffman import (
    BuildSession,
    HuffNode,
    advance_step,
    build_tree,
    current_forest,
    generate_codes,
    is_finished,
    start_session,
)
from .layout import layout_forest

PRESET_TEXTS = [
    "HELLO WORLD",
    "ABRACADABRA",
    "COMPRESSION",
    "AAAAABBBBCCCD",
    "THE QUICK BROWN FOX",
]

MODES = ("eager", "step")


@dataclass
class HuffmanParams:
    text: str = PRESET_TEXTS[0]
    mode: str = "eager"
    preview_bits: int = 64
    example_len: int = 8


class HuffmanRun:
    """
    Mantiene el texto actual, su árbol y (en modo 'step') la sesión de construcción.
    Cambiar el texto descarta la sesión: un árbol parcial nunca se reutiliza
    con otra entrada.
    """

    def __init__(self, text: str = "", mode: str = "eager", preview_bits: int = 64, example_len: int = 8):
        if mode not in MODES:
            raise ValueError(f"Modo no soportado: {mode} (use 'eager' o 'step')")
        self.mode = mode
        self.preview_bits = preview_bits
        self.example_len = example_len
        self.set_text(text)

    def set_text(self, text: str):
        self.text = text
        self.entries: List[FrequencyEntry] = count_frequencies(text)
        self.session: Optional[BuildSession] = None
        self.root: Optional[HuffNode] = None
        self.codes: Dict = {}
        self.encoded: Optional[EncodedResult] = None
        self.stats: Optional[CompressionStats] = None

        if not self.entries:
            # Sin símbolos no hay árbol ni códigos
            self.encoded = encode(text, {})
            self.stats = compression_stats(text, self.entries, self.encoded)
        elif self.mode == "eager":
            self._complete(build_tree(self.entries))
        else:
            self.session = start_session(self.entries)
            if self.session.finished is not None:
                self._complete(self.session.finished)

    @property
    def finished(self) -> bool:
        return self.session is None or is_finished(self.session)

    def step(self) -> bool:
        """Una fusión. Devuelve False si no quedaba nada por hacer."""
        if self.finished:
            return False
        self.session = advance_step(self.session)
        if self.session.finished is not None:
            self._complete(self.session.finished)
        return True

    def finish(self) -> Optional[HuffNode]:
        while self.step():
            pass
        return self.root

    def _complete(self, root: HuffNode):
        self.root = root
        self.codes = generate_codes(root)
        self.encoded = encode(self.text, self.codes)
        self.stats = compression_stats(self.text, self.entries, self.encoded)

    def forest(self) -> List[HuffNode]:
        if self.root is not None:
            return [self.root]
        if self.session is not None:
            return current_forest(self.session)
        return []

    def snapshot(self, preview_bits: Optional[int] = None, example_len: Optional[int] = None) -> dict:
        """Todo lo que necesita una vista: frecuencias, árbol(es), códigos, bits y estadísticas.
        Las posiciones (x, y) de los nodos van por node_id en "positions".
        """
        if preview_bits is None:
            preview_bits = self.preview_bits
        if example_len is None:
            example_len = self.example_len
        forest = self.forest()
        return {
            "text": self.text,
            "frequencies": frequency_table(self.entries),
            "forest": forest,
            "positions": layout_forest(forest),
            "steps": self.session.steps if self.session is not None else 0,
            "finished": self.finished,
            "last_step": self.session.last_step if self.session is not None else None,
            "codes": dict(self.codes),
            "encoded_preview": self.encoded.preview(preview_bits) if self.encoded else "",
            "example": encoding_example(self.text, self.codes, example_len) if self.codes else [],
            "stats": self.stats,
        }


def run(params: HuffmanParams) -> HuffmanRun:
    """Modo 'eager' construye el árbol completo; 'step' deja la sesión en el paso 0."""
    return HuffmanRun(params.text, mode=params.mode,
                      preview_bits=params.preview_bits, example_len=params.example_len)
