# src/sheetmap/core/options/columns.py
"""Conversão entre referências de coluna em letras e números 1-based."""

from __future__ import annotations

import re

from ..config.errors import InvalidColumnLetterError


_LETTERS = re.compile(r"^[A-Za-z]+$")


def column_letter_to_number(column_letter: str) -> int:
    """
    Converte uma referência de coluna em letras para número 1-based.

    Exemplos: "A" → 1, "Z" → 26, "AA" → 27, "b" → 2.

    Raises:
        InvalidColumnLetterError: se a referência não for composta apenas
            por letras ASCII.
    """
    if not isinstance(column_letter, str) or not _LETTERS.match(column_letter.strip()):
        raise InvalidColumnLetterError(
            f"Invalid column letter {column_letter!r}: expected letters only, e.g. 'A' or 'AB'"
        )

    number = 0
    for char in column_letter.strip().upper():
        number = number * 26 + (ord(char) - ord("A") + 1)
    return number


def column_number_to_letter(column_number: int) -> str:
    """Inverso de `column_letter_to_number` (1 → "A", 27 → "AA")."""
    if column_number < 1:
        raise ValueError(f"column_number must be >= 1, got {column_number}")

    letters = []
    n = column_number
    while n > 0:
        n, remainder = divmod(n - 1, 26)
        letters.append(chr(ord("A") + remainder))
    return "".join(reversed(letters))
