"""Tests for search configuration resolution."""

from __future__ import annotations

import pytest

from doc_manager.config import SearchConfig, normalize_provider

_ENV_VARS = (
    "DOCS_EMBEDDING_PROVIDER",
    "DOCS_EMBEDDING_MODEL",
    "DOCS_EMBEDDING_DIM",
    "DOCS_EMBEDDING_BATCH_SIZE",
    "DOCS_SEARCH_SKIP_UNREADABLE",
    "GOOGLE_API_KEY",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_are_disabled() -> None:
    config = SearchConfig.from_env()

    assert config == SearchConfig()
    assert config.enabled is False
    assert config.skip_unreadable is True


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("local", "local"),
        (" LOCAL ", "local"),
        ("gemini", "gemini"),
        ("", "disabled"),
        (None, "disabled"),
        ("openai", "disabled"),
    ],
)
def test_normalize_provider(raw, expected) -> None:
    assert normalize_provider(raw) == expected


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DOCS_EMBEDDING_PROVIDER", "gemini")
    monkeypatch.setenv("DOCS_EMBEDDING_MODEL", "custom-model-001")
    monkeypatch.setenv("DOCS_EMBEDDING_DIM", "256")
    monkeypatch.setenv("DOCS_EMBEDDING_BATCH_SIZE", "10")
    monkeypatch.setenv("DOCS_SEARCH_SKIP_UNREADABLE", "false")
    monkeypatch.setenv("GOOGLE_API_KEY", "key")

    config = SearchConfig.from_env()

    assert config.provider == "gemini"
    assert config.model == "custom-model-001"
    assert config.dim == 256
    assert config.batch_size == 10
    assert config.skip_unreadable is False
    assert config.api_key == "key"
    assert config.enabled is True


def test_explicit_arguments_take_precedence(monkeypatch) -> None:
    monkeypatch.setenv("DOCS_EMBEDDING_PROVIDER", "gemini")
    monkeypatch.setenv("DOCS_EMBEDDING_MODEL", "env-model")

    config = SearchConfig.from_env(
        provider="local", model="arg-model", skip_unreadable=False
    )

    assert config.provider == "local"
    assert config.model == "arg-model"
    assert config.skip_unreadable is False


@pytest.mark.parametrize("name", ["DOCS_EMBEDDING_DIM", "DOCS_EMBEDDING_BATCH_SIZE"])
def test_non_integer_env_value_names_the_variable(monkeypatch, name) -> None:
    monkeypatch.setenv(name, "large")

    with pytest.raises(ValueError, match=name):
        SearchConfig.from_env()


def test_gemini_without_api_key_is_disabled(monkeypatch) -> None:
    monkeypatch.setenv("DOCS_EMBEDDING_PROVIDER", "gemini")

    config = SearchConfig.from_env()

    assert config.provider == "gemini"
    assert config.enabled is False
    assert SearchConfig(provider="local").enabled is True
