"""Drupal module scanning and AI-assisted README generation."""

from .models import ManifestRecord, ScanReport, SubmoduleRecord, SymbolRef
from .module_scanner import ModuleScanner, scan

__all__ = [
    "ManifestRecord",
    "ModuleScanner",
    "ScanReport",
    "SubmoduleRecord",
    "SymbolRef",
    "scan",
]
