"""Finding modules inside a Drupal installation."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Sequence

from .config import DEFAULT_MODULE_DIRS
from .logging import get_logger
from .manifest import INFO_SUFFIX, ManifestError, glob_visible, load_info_file

logger = get_logger("discovery")


def locate_module(
    drupal_root: Path,
    machine_name: str,
    module_dirs: Sequence[str] = DEFAULT_MODULE_DIRS,
) -> Path:
    """Return the first ``<module_dir>/<machine_name>`` directory that exists."""
    for module_dir in module_dirs:
        candidate = drupal_root / module_dir / machine_name
        if candidate.is_dir():
            return candidate
    searched = ", ".join(module_dirs)
    raise FileNotFoundError(f"Module '{machine_name}' not found in {searched}")


def list_modules(
    drupal_root: Path,
    module_dirs: Sequence[str] = DEFAULT_MODULE_DIRS,
) -> Dict[str, str]:
    """Map machine names to display names for top-level custom and contrib modules.

    Modules nested inside another module are not listed. Unparseable
    manifests are skipped with a warning.
    """
    modules: Dict[str, str] = {}
    for module_dir in module_dirs:
        base = drupal_root / module_dir
        if not base.is_dir():
            continue
        for info_path in glob_visible(base, f"*/*{INFO_SUFFIX}"):
            machine_name = info_path.name[: -len(INFO_SUFFIX)]
            if machine_name in modules:
                continue
            try:
                info = load_info_file(info_path)
            except ManifestError as exc:
                logger.warning("Skipping %s: %s", info_path, exc)
                continue
            if info.get("type", "module") != "module":
                continue
            name = info.get("name")
            modules[machine_name] = name if isinstance(name, str) and name else machine_name

    return dict(sorted(modules.items(), key=lambda item: (item[1].lower(), item[0])))


__all__ = ["list_modules", "locate_module"]
