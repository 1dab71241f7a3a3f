"""Tests for readmegen.config."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from readmegen.config import (
    AIConfig,
    ConfigError,
    DEFAULT_MODULE_DIRS,
    ReadmeGenConfig,
    load_config,
    save_config,
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch) -> None:
    for key in ("READMEGEN_API_KEY", "READMEGEN_MODEL", "READMEGEN_PROVIDER"):
        monkeypatch.delenv(key, raising=False)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ReadmeGenConfig)
    assert config.root == tmp_path.resolve()
    assert config.ai == AIConfig()
    assert config.ai.is_complete() is False
    assert config.module_dirs == list(DEFAULT_MODULE_DIRS)


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".readmegen.yml").write_text(
        """
ai:
  provider: groq
  api_key: "secret"
  model: llama3-8b-8192
  max_tokens: 512
  request_timeout: 15
module_dirs:
  - web/modules/custom
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path / ".readmegen.yml")

    assert config.ai.provider == "groq"
    assert config.ai.api_key == "secret"
    assert config.ai.model == "llama3-8b-8192"
    assert config.ai.base_uri == "https://api.groq.com/"
    assert config.ai.chat_endpoint == "openai/v1/chat/completions"
    assert config.ai.max_tokens == 512
    assert config.ai.request_timeout == pytest.approx(15.0)
    assert config.ai.is_complete() is True
    assert config.module_dirs == ["web/modules/custom"]


def test_environment_overrides_file(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / ".readmegen.yml").write_text("ai:\n  provider: openai\n  api_key: file-key\n", encoding="utf-8")
    monkeypatch.setenv("READMEGEN_API_KEY", "env-key")
    monkeypatch.setenv("READMEGEN_MODEL", "gpt-4")

    config = load_config(tmp_path)

    assert config.ai.api_key == "env-key"
    assert config.ai.model == "gpt-4"
    assert config.ai.chat_endpoint == "chat/completions"

    assert load_config(tmp_path, use_env=False).ai.api_key == "file-key"


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".readmegen.yml").write_text("ai: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_apply_provider_sets_endpoint_and_default_model() -> None:
    ai = AIConfig(model="gpt-4")

    ai.apply_provider("groq")
    assert ai.base_uri == "https://api.groq.com/"
    assert ai.model == "llama3-8b-8192"

    ai.apply_provider("unknown")
    assert ai.chat_endpoint == ""
    assert ai.is_complete() is False


def test_save_config_round_trips_and_keeps_other_keys(tmp_path: Path) -> None:
    config_file = tmp_path / ".readmegen.yml"
    config_file.write_text("module_dirs: [modules/custom]\n", encoding="utf-8")
    ai = AIConfig(api_key="k")
    ai.apply_provider("openai")

    save_config(tmp_path, ai)

    stored = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    assert stored["module_dirs"] == ["modules/custom"]
    assert stored["ai"]["chat_endpoint"] == "chat/completions"

    reloaded = load_config(tmp_path, use_env=False)
    assert reloaded.ai == ai


def test_load_config_rejects_boolean_api_key(tmp_path: Path) -> None:
    (tmp_path / ".readmegen.yml").write_text(
        "ai:\n  provider: openai\n  api_key: true\n  model: gpt-4\n", encoding="utf-8"
    )

    config = load_config(tmp_path)

    assert config.ai.api_key is None
    assert config.ai.is_complete() is False
