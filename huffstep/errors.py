"""Errores del motor de Huffman.

Todos heredan de ValueError: se lanzan en la llamada que recibe el dato
inválido y el llamador puede recuperarse corrigiendo la entrada.
"""


class HuffmanError(ValueError):
    pass


class InvalidInputError(HuffmanError):
    """Entradas vacías, conteos <= 0, símbolos duplicados o bits distintos de 0/1."""


class LookupFailureError(HuffmanError):
    """El símbolo a codificar no está en la tabla de códigos."""

    def __init__(self, symbol):
        super().__init__(f"Símbolo sin código en la tabla: {symbol!r}")
        self.symbol = symbol


class DecodeDesyncError(HuffmanError):
    """El flujo de bits terminó (o se desvió) a mitad de un recorrido."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (bit {position})")
        self.position = position
