"""README generation pipeline: scan, prompt, complete, write."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import ConfigError, ReadmeGenConfig
from .llm.client import ChatClient
from .logging import get_logger
from .manifest import INFO_SUFFIX, find_manifest
from .module_scanner import ModuleScanner
from .prompting.builder import PromptBuilder

README_FILENAME = "README.md"


@dataclass
class GenerationResult:
    """Outcome of a README generation run."""

    path: Path
    content: str
    written: bool


class ReadmeGenerator:
    """Coordinates the scanner, the prompt builder and the chat client."""

    def __init__(
        self,
        config: ReadmeGenConfig,
        *,
        scanner: ModuleScanner | None = None,
        prompt_builder: PromptBuilder | None = None,
        client: ChatClient | None = None,
    ) -> None:
        self.config = config
        self.scanner = scanner or ModuleScanner()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self._client = client
        self.logger = get_logger("generator")

    def generate(self, module_path: str | Path, *, dry_run: bool = False) -> GenerationResult:
        """Generate README.md for the module at ``module_path``.

        Scanning completes before any request is sent to the provider.
        """
        module_root = Path(module_path).expanduser().resolve()
        self.logger.info("Generating README for %s", module_root)
        report = self.scanner.scan(module_root)
        self.logger.debug(
            "Scan found %d functions, %d classes, %d submodules",
            len(report.functions),
            len(report.classes),
            len(report.submodules),
        )

        client = self._resolve_client()
        prompt = self.prompt_builder.build(report, machine_name=_machine_name(module_root))
        body = client.complete(prompt)
        content = self.prompt_builder.finalize(body)

        readme_path = module_root / README_FILENAME
        if dry_run:
            self.logger.info("Dry run; README not written")
            return GenerationResult(path=readme_path, content=content, written=False)

        readme_path.write_text(content, encoding="utf-8")
        self.logger.info("README written to %s", readme_path)
        return GenerationResult(path=readme_path, content=content, written=True)

    def _resolve_client(self) -> ChatClient:
        if self._client is not None:
            return self._client
        if not self.config.ai.is_complete():
            raise ConfigError(
                "AI configuration is incomplete: set an API key, model and provider "
                "with `readmegen configure` first."
            )
        self._client = ChatClient(self.config.ai)
        return self._client


def _machine_name(module_root: Path) -> str:
    manifest = find_manifest(module_root)
    if manifest is None:
        return module_root.name
    return manifest.name[: -len(INFO_SUFFIX)]


__all__ = ["GenerationResult", "README_FILENAME", "ReadmeGenerator"]
