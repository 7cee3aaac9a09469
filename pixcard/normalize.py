"""Text folding for merchant name and city fields."""
from __future__ import annotations

import re
import string
import unicodedata
from typing import Protocol

DEFAULT_PUNCTUATION = ".,-/&'():"

_WHITESPACE = re.compile(r"\s+")


class TextNormalizer(Protocol):
    def __call__(self, text: str) -> str:  # pragma: no cover - interface
        ...


class AsciiFoldingNormalizer:
    """Fold text to uppercase ASCII letters, digits, spaces and a small punctuation set.

    Accents are removed through NFKD decomposition; any other character that
    does not survive the fold is dropped. Output is stable under reapplication.
    """

    def __init__(self, punctuation: str = DEFAULT_PUNCTUATION):
        self.allowed = frozenset(string.ascii_uppercase + string.digits + " " + punctuation)

    def __call__(self, text: str) -> str:
        decomposed = unicodedata.normalize("NFKD", text or "")
        stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
        upper = _WHITESPACE.sub(" ", stripped.upper())
        kept = "".join(ch for ch in upper if ch in self.allowed)
        return _WHITESPACE.sub(" ", kept).strip()


DEFAULT_NORMALIZER: TextNormalizer = AsciiFoldingNormalizer()
