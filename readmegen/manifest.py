"""Readers for Drupal ``.info.yml`` manifests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Sequence

import yaml

from .logging import get_logger
from .models import NO_DESCRIPTION, ManifestRecord, SubmoduleRecord

INFO_SUFFIX = ".info.yml"
MANIFEST_PATTERN = f"*{INFO_SUFFIX}"
SUBMODULE_PATTERN = f"modules/*/*{INFO_SUFFIX}"

logger = get_logger("manifest")


class ManifestError(RuntimeError):
    """Raised when a module manifest cannot be parsed."""


def load_info_file(path: Path) -> Dict[str, Any]:
    """Parse an info file into a mapping. An empty document yields ``{}``."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Unable to read {path}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ManifestError(f"Failed to parse {path.name}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ManifestError(f"{path.name} must contain a mapping at the root")
    return data


def glob_visible(root: Path, pattern: str) -> List[Path]:
    """Return name-sorted matches of ``pattern`` under ``root``, skipping dotfiles.

    Any path segment starting with ``.`` excludes the match.
    """
    return sorted(
        path
        for path in root.glob(pattern)
        if not any(part.startswith(".") for part in path.relative_to(root).parts)
    )


def find_manifest(root: Path) -> Path | None:
    """Return the first top-level manifest in name order, if any."""
    candidates = [path for path in glob_visible(root, MANIFEST_PATTERN) if path.is_file()]
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.debug(
            "Multiple manifests in %s; using %s",
            root,
            candidates[0].name,
        )
    return candidates[0]


def read_manifest(root: Path) -> ManifestRecord:
    """Read name, description and dependencies, applying defaults for anything missing."""
    record = ManifestRecord(name=root.name)
    manifest_path = find_manifest(root)
    if manifest_path is None:
        logger.debug("No manifest found in %s; using defaults", root)
        return record

    data = load_info_file(manifest_path)
    record.name = _with_default(data.get("name"), root.name)
    record.description = _with_default(data.get("description"), NO_DESCRIPTION)
    record.dependencies = _as_str_list(data.get("dependencies"))
    return record


def list_submodules(root: Path) -> List[SubmoduleRecord]:
    """Describe each manifest found exactly one level below ``modules/``."""
    submodules: List[SubmoduleRecord] = []
    for info_path in glob_visible(root, SUBMODULE_PATTERN):
        if not info_path.is_file():
            continue
        machine_name = info_path.name[: -len(INFO_SUFFIX)]
        data = load_info_file(info_path)
        submodules.append(
            SubmoduleRecord(
                name=machine_name,
                description=_with_default(data.get("description"), NO_DESCRIPTION),
            )
        )
    return submodules


def _with_default(value: Any, default: str) -> str:
    text = _as_str(value)
    return default if text is None else text


def _as_str(value: Any) -> str | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "INFO_SUFFIX",
    "ManifestError",
    "find_manifest",
    "glob_visible",
    "list_submodules",
    "load_info_file",
    "read_manifest",
]
