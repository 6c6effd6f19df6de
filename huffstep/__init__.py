"""Codificación de Huffman paso a paso: frecuencias, árbol, códigos y estadísticas."""
