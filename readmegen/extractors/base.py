"""Base class for per-file symbol extractors."""

from abc import ABC, abstractmethod
from typing import Dict, List, Tuple

from ..models import SymbolRef


class Extractor(ABC):
    """Contract for extractors that turn one file's text into report entries.

    ``fields`` names the report lists an extractor contributes to; ``extract``
    returns one list per field, in declaration order within the file. The
    scanner rejects fields outside the report and keys missing from ``fields``.
    """

    fields: Tuple[str, ...] = ()

    @abstractmethod
    def extract(self, rel_path: str, text: str) -> Dict[str, List[SymbolRef]]:
        """Return symbol references found in ``text`` keyed by report field."""
