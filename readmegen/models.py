"""Data models produced by the module scanner."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List

NO_DESCRIPTION = "No description available."

_SEPARATOR = "::"


@dataclass(frozen=True)
class SymbolRef:
    """A declared identifier qualified by its file path relative to the module root."""

    path: str
    identifier: str

    def __str__(self) -> str:
        return f"{self.path}{_SEPARATOR}{self.identifier}"

    @classmethod
    def parse(cls, value: str) -> "SymbolRef":
        path, sep, identifier = value.rpartition(_SEPARATOR)
        if not sep or not path or not identifier:
            raise ValueError(f"Not a symbol reference: {value!r}")
        return cls(path=path, identifier=identifier)


@dataclass
class ManifestRecord:
    """Name, description and dependencies declared by a module's .info.yml."""

    name: str
    description: str = NO_DESCRIPTION
    dependencies: List[str] = field(default_factory=list)


@dataclass
class SubmoduleRecord:
    """A nested module found under ``modules/<name>/``."""

    name: str
    description: str = NO_DESCRIPTION

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "description": self.description}


@dataclass
class ScanReport:
    """Structured metadata for one module, handed to the summarization step."""

    name: str
    description: str
    dependencies: List[str] = field(default_factory=list)
    classes: List[SymbolRef] = field(default_factory=list)
    functions: List[SymbolRef] = field(default_factory=list)
    hooks: List[SymbolRef] = field(default_factory=list)
    controllers: List[SymbolRef] = field(default_factory=list)
    forms: List[SymbolRef] = field(default_factory=list)
    submodules: List[SubmoduleRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire shape with symbols rendered as ``path::identifier``."""
        return {
            "name": self.name,
            "description": self.description,
            "dependencies": list(self.dependencies),
            "classes": [str(ref) for ref in self.classes],
            "functions": [str(ref) for ref in self.functions],
            "hooks": [str(ref) for ref in self.hooks],
            "controllers": [str(ref) for ref in self.controllers],
            "forms": [str(ref) for ref in self.forms],
            "submodules": [sub.to_dict() for sub in self.submodules],
        }

    def to_json(self, *, indent: int = 4) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


__all__ = [
    "NO_DESCRIPTION",
    "ManifestRecord",
    "ScanReport",
    "SubmoduleRecord",
    "SymbolRef",
]
