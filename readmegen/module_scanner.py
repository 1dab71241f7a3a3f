"""Module scanning: file selection, symbol extraction and report assembly."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from .extractors import Extractor, default_extractors
from .logging import get_logger
from .manifest import MANIFEST_PATTERN, glob_visible, list_submodules, read_manifest
from .models import ScanReport, SymbolRef

# Matched directly inside the module root.
TOP_LEVEL_PATTERNS: tuple[str, ...] = (
    MANIFEST_PATTERN,
    "*.module",
    "*.install",
    "*.routing.yml",
    "*.permissions.yml",
    "*.links.menu.yml",
    "*.links.task.yml",
    "*.schema.yml",
)

# Matched exactly one level inside the named directories.
NESTED_PATTERNS: tuple[str, ...] = (
    "src/Controller/*.php",
    "src/Form/*.php",
    "src/Plugin/*.php",
    "src/Entity/*.php",
    "src/Utility/*.php",
    "config/install/*.yml",
)

_SYMBOL_FIELDS: tuple[str, ...] = ("classes", "functions", "hooks", "controllers", "forms")

logger = get_logger("scanner")


def select_files(root: Path) -> List[str]:
    """Return candidate files relative to ``root`` in pattern order.

    Each pattern's matches are name-sorted and dotfiles are skipped; a file
    matched by several patterns is listed once, at its first position.
    """
    selected: List[str] = []
    seen: set[str] = set()
    for pattern in TOP_LEVEL_PATTERNS + NESTED_PATTERNS:
        for path in glob_visible(root, pattern):
            if not path.is_file():
                continue
            rel_path = path.relative_to(root).as_posix()
            if rel_path in seen:
                continue
            seen.add(rel_path)
            selected.append(rel_path)
    return selected


def _read_text(path: Path) -> str:
    return path.read_bytes().decode("utf-8", errors="replace")


class ModuleScanner:
    """Extracts structural metadata from a Drupal module directory.

    A scan only reads from disk and keeps no state between calls.
    """

    def __init__(self, extractors: Iterable[Extractor] | None = None) -> None:
        self.extractors: Sequence[Extractor] = (
            list(extractors) if extractors is not None else default_extractors()
        )
        for extractor in self.extractors:
            unknown = set(extractor.fields) - set(_SYMBOL_FIELDS)
            if unknown:
                raise ValueError(
                    f"{type(extractor).__name__} declares unknown report fields: "
                    f"{', '.join(sorted(unknown))}"
                )

    def scan(self, path: str | Path) -> ScanReport:
        """Return a report describing the module at ``path``."""
        root = Path(path).expanduser()
        if not root.exists():
            raise FileNotFoundError(f"Module path not found: {path}")
        if not root.is_dir():
            raise NotADirectoryError(f"Module path is not a directory: {path}")
        root = root.resolve()

        info = read_manifest(root)
        files = select_files(root)
        logger.debug("Selected %d candidate files in %s", len(files), root)

        symbols: Dict[str, List[SymbolRef]] = {name: [] for name in _SYMBOL_FIELDS}
        for rel_path in files:
            for field_name, refs in self._scan_file(root, rel_path).items():
                symbols[field_name].extend(refs)

        submodules = list_submodules(root)

        return ScanReport(
            name=info.name,
            description=info.description,
            dependencies=info.dependencies,
            classes=symbols["classes"],
            functions=symbols["functions"],
            hooks=symbols["hooks"],
            controllers=symbols["controllers"],
            forms=symbols["forms"],
            submodules=submodules,
        )

    def _scan_file(self, root: Path, rel_path: str) -> Dict[str, List[SymbolRef]]:
        try:
            text = _read_text(root / rel_path)
        except OSError as exc:
            logger.warning("Skipping unreadable file %s: %s", rel_path, exc)
            return {}

        contribution: Dict[str, List[SymbolRef]] = {}
        for extractor in self.extractors:
            for field_name, refs in extractor.extract(rel_path, text).items():
                if field_name not in extractor.fields:
                    raise ValueError(
                        f"{type(extractor).__name__} returned undeclared field '{field_name}'"
                    )
                contribution.setdefault(field_name, []).extend(refs)
        return contribution


def scan(path: str | Path) -> ScanReport:
    """Scan ``path`` with the default extractors."""
    return ModuleScanner().scan(path)


__all__ = ["ModuleScanner", "NESTED_PATTERNS", "TOP_LEVEL_PATTERNS", "scan", "select_files"]
