"""Regex-based discovery of function and class declarations."""

from __future__ import annotations

import re
from typing import Dict, List, Tuple

from .base import Extractor
from ..models import SymbolRef

FUNCTION = "function"
CLASS = "class"

FUNCTION_PATTERN = re.compile(r"function\s+(\w+)\s*\(", re.ASCII)
CLASS_PATTERN = re.compile(r"class\s+(\w+)", re.ASCII)

_PATTERNS: Tuple[Tuple[str, re.Pattern[str]], ...] = (
    (FUNCTION, FUNCTION_PATTERN),
    (CLASS, CLASS_PATTERN),
)


def extract_symbols(text: str) -> List[Tuple[str, str]]:
    """Return ``(kind, identifier)`` pairs in the order they appear in ``text``.

    This is a textual scan, not a parse: declarations inside comments or
    strings are reported too, and broken code is scanned like any other.
    """
    found: List[Tuple[int, str, str]] = []
    for kind, pattern in _PATTERNS:
        for match in pattern.finditer(text):
            found.append((match.start(), kind, match.group(1)))
    found.sort(key=lambda item: item[0])
    return [(kind, identifier) for _, kind, identifier in found]


class SymbolExtractor(Extractor):
    """Lists every declared function and class in a file."""

    fields = ("functions", "classes")

    def extract(self, rel_path: str, text: str) -> Dict[str, List[SymbolRef]]:
        functions: List[SymbolRef] = []
        classes: List[SymbolRef] = []
        for kind, identifier in extract_symbols(text):
            ref = SymbolRef(path=rel_path, identifier=identifier)
            if kind == FUNCTION:
                functions.append(ref)
            else:
                classes.append(ref)
        return {"functions": functions, "classes": classes}


__all__ = [
    "CLASS",
    "CLASS_PATTERN",
    "FUNCTION",
    "FUNCTION_PATTERN",
    "SymbolExtractor",
    "extract_symbols",
]
