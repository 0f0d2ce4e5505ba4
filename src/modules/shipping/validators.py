"""CEP (Brazilian postal code) validation."""

from __future__ import annotations

from typing import Optional

CEP_LENGTH = 8


def is_valid_cep(cep: Optional[str]) -> bool:
    """Return ``True`` only for a string of exactly 8 ASCII digits.

    ``None``, blank strings, wrong lengths, separators (``"01310-10"``),
    signs and whitespace are all rejected.
    """
    if cep is None or not cep.strip() or len(cep) != CEP_LENGTH:
        return False
    return cep.isascii() and cep.isdigit()
