"""Classification of declarations by Drupal naming and directory conventions."""

from __future__ import annotations

import re
from typing import Dict, List, Optional

from .base import Extractor
from .symbols import CLASS_PATTERN
from ..models import SymbolRef

HOOK_PATTERN = re.compile(r"function\s+(hook_[a-zA-Z_]+)\s*\(", re.ASCII)

CONTROLLER_SEGMENT = "src/Controller/"
FORM_SEGMENT = "src/Form/"


def first_class(text: str) -> Optional[str]:
    match = CLASS_PATTERN.search(text)
    return match.group(1) if match else None


class ConventionClassifier(Extractor):
    """Tags hooks by name and controller/form classes by the directory they live in.

    Only the first class of a controller or form file is reported. A path that
    carries both segments contributes to both lists.
    """

    fields = ("hooks", "controllers", "forms")

    def extract(self, rel_path: str, text: str) -> Dict[str, List[SymbolRef]]:
        hooks = [
            SymbolRef(path=rel_path, identifier=match.group(1))
            for match in HOOK_PATTERN.finditer(text)
        ]
        controllers: List[SymbolRef] = []
        forms: List[SymbolRef] = []

        if CONTROLLER_SEGMENT in rel_path or FORM_SEGMENT in rel_path:
            name = first_class(text)
            if name is not None:
                ref = SymbolRef(path=rel_path, identifier=name)
                if CONTROLLER_SEGMENT in rel_path:
                    controllers.append(ref)
                if FORM_SEGMENT in rel_path:
                    forms.append(ref)

        return {"hooks": hooks, "controllers": controllers, "forms": forms}


__all__ = [
    "CONTROLLER_SEGMENT",
    "ConventionClassifier",
    "FORM_SEGMENT",
    "HOOK_PATTERN",
    "first_class",
]
