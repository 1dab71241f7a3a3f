"""Symbol extractors used by the module scanner."""

from __future__ import annotations

from typing import List

from .base import Extractor
from .conventions import ConventionClassifier
from .symbols import SymbolExtractor, extract_symbols


def default_extractors() -> List[Extractor]:
    """Return the built-in extractors in the order their output is merged."""
    return [SymbolExtractor(), ConventionClassifier()]


__all__ = [
    "ConventionClassifier",
    "Extractor",
    "SymbolExtractor",
    "default_extractors",
    "extract_symbols",
]
