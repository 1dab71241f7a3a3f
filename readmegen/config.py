"""Configuration loading for readmegen (.readmegen.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".readmegen.yml"

DEFAULT_MODULE_DIRS: tuple[str, ...] = ("modules/custom", "modules/contrib")
DEFAULT_MAX_TOKENS = 1000


@dataclass(frozen=True)
class ProviderPreset:
    """Connection details for a known chat-completion provider."""

    label: str
    base_uri: str
    chat_endpoint: str
    models: Dict[str, str]


PROVIDERS: Dict[str, ProviderPreset] = {
    "openai": ProviderPreset(
        label="OpenAI",
        base_uri="https://api.openai.com/v1/",
        chat_endpoint="chat/completions",
        models={"gpt-3.5-turbo": "GPT-3.5 Turbo", "gpt-4": "GPT-4"},
    ),
    "groq": ProviderPreset(
        label="Groq",
        base_uri="https://api.groq.com/",
        chat_endpoint="openai/v1/chat/completions",
        models={"llama3-8b-8192": "llama3-8b-8192"},
    ),
}

ENV_API_KEY_KEYS = ("READMEGEN_API_KEY",)
ENV_MODEL_KEYS = ("READMEGEN_MODEL",)
ENV_PROVIDER_KEYS = ("READMEGEN_PROVIDER",)


class ConfigError(RuntimeError):
    """Raised when the configuration file is unreadable or incomplete."""


@dataclass
class AIConfig:
    """Chat-completion settings used by the summarization step."""

    provider: Optional[str] = None
    api_key: Optional[str] = None
    model: Optional[str] = None
    base_uri: Optional[str] = None
    chat_endpoint: Optional[str] = None
    max_tokens: int = DEFAULT_MAX_TOKENS
    request_timeout: Optional[float] = 60.0

    def is_complete(self) -> bool:
        return bool(self.api_key and self.chat_endpoint and self.model)

    def apply_provider(self, provider: str) -> None:
        """Switch to ``provider`` and take its base URI and endpoint.

        Unknown providers clear both, leaving the config incomplete.
        """
        preset = PROVIDERS.get(provider)
        self.provider = provider
        self.base_uri = preset.base_uri if preset else ""
        self.chat_endpoint = preset.chat_endpoint if preset else ""
        if preset and self.model not in preset.models:
            self.model = next(iter(preset.models))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "provider": self.provider,
            "api_key": self.api_key,
            "model": self.model,
            "base_uri": self.base_uri,
            "chat_endpoint": self.chat_endpoint,
            "max_tokens": self.max_tokens,
            "request_timeout": self.request_timeout,
        }


@dataclass
class ReadmeGenConfig:
    """Represents the settings defined in .readmegen.yml."""

    root: Path
    ai: AIConfig = field(default_factory=AIConfig)
    module_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_MODULE_DIRS))


def load_config(config_path: Path, *, use_env: bool = True) -> ReadmeGenConfig:
    """Load configuration from disk, then apply environment overrides."""
    config_file = resolve_config_path(config_path)
    root = config_file.parent.resolve()
    data = _read_config(config_file) if config_file.exists() else {}

    ai_data = _as_dict(data.get("ai"))
    ai = AIConfig(
        provider=_as_str(ai_data.get("provider")),
        api_key=_as_str(ai_data.get("api_key")),
        model=_as_str(ai_data.get("model")),
        base_uri=_as_str(ai_data.get("base_uri")),
        chat_endpoint=_as_str(ai_data.get("chat_endpoint")),
        max_tokens=_as_int(ai_data.get("max_tokens")) or DEFAULT_MAX_TOKENS,
        request_timeout=_as_float(ai_data.get("request_timeout")) or 60.0,
    )
    if ai.provider and not (ai.base_uri or ai.chat_endpoint):
        preset = PROVIDERS.get(ai.provider)
        if preset is not None:
            ai.base_uri = preset.base_uri
            ai.chat_endpoint = preset.chat_endpoint

    if use_env:
        _apply_env(ai)

    module_dirs = _as_str_list(data.get("module_dirs")) or list(DEFAULT_MODULE_DIRS)
    return ReadmeGenConfig(root=root, ai=ai, module_dirs=module_dirs)


def save_config(config_path: Path, ai: AIConfig) -> Path:
    """Persist ``ai`` under the ``ai`` key, keeping any other keys in the file."""
    config_file = resolve_config_path(config_path)
    data = _read_config(config_file) if config_file.exists() else {}
    data["ai"] = {key: value for key, value in ai.to_dict().items() if value is not None}
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return config_file


def resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _apply_env(ai: AIConfig) -> None:
    provider = _first_env_value(ENV_PROVIDER_KEYS)
    if provider:
        ai.apply_provider(provider)
    api_key = _first_env_value(ENV_API_KEY_KEYS)
    if api_key:
        ai.api_key = api_key
    model = _first_env_value(ENV_MODEL_KEYS)
    if model:
        ai.model = model


def _first_env_value(keys: Sequence[str]) -> str | None:
    for key in keys:
        value = os.getenv(key)
        if value:
            return value
    return None


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "AIConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "PROVIDERS",
    "ProviderPreset",
    "ReadmeGenConfig",
    "load_config",
    "save_config",
]
