"""
Configuration for the semantic search subsystem.

Values come from explicit arguments first, then environment variables, then
defaults. The environment is read only by ``SearchConfig.from_env``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, TypeAlias

ProviderName: TypeAlias = Literal["disabled", "local", "gemini"]

ENV_PROVIDER = "DOCS_EMBEDDING_PROVIDER"
ENV_MODEL = "DOCS_EMBEDDING_MODEL"
ENV_DIM = "DOCS_EMBEDDING_DIM"
ENV_BATCH_SIZE = "DOCS_EMBEDDING_BATCH_SIZE"
ENV_SKIP_UNREADABLE = "DOCS_SEARCH_SKIP_UNREADABLE"

_PROVIDERS: tuple[ProviderName, ...] = ("disabled", "local", "gemini")


def normalize_provider(raw: str | None) -> ProviderName:
    """Map a raw provider setting to a known provider name.

    Unset, empty, or unrecognised values disable semantic search.
    """
    value = (raw or "").strip().lower()
    for name in _PROVIDERS:
        if value == name:
            return name
    return "disabled"


def _parse_bool(raw: str | None, default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _parse_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class SearchConfig:
    """Settings consumed by the embedding provider and the search engine."""

    provider: ProviderName = "disabled"
    model: str | None = None
    dim: int | None = None
    batch_size: int | None = None
    api_key: str | None = None
    skip_unreadable: bool = True

    @property
    def enabled(self) -> bool:
        """True when a provider is selected and has what it needs to run."""
        if self.provider == "gemini":
            return self.api_key is not None
        return self.provider != "disabled"

    @classmethod
    def from_env(
        cls,
        *,
        provider: str | None = None,
        model: str | None = None,
        dim: int | None = None,
        batch_size: int | None = None,
        api_key: str | None = None,
        skip_unreadable: bool | None = None,
    ) -> "SearchConfig":
        """
        Build a config from explicit overrides and environment variables.

        Precedence:
        1) explicit keyword arguments
        2) DOCS_* environment variables (GOOGLE_API_KEY for the API key)
        3) defaults
        """
        return cls(
            provider=normalize_provider(provider or os.getenv(ENV_PROVIDER)),
            model=model or os.getenv(ENV_MODEL) or None,
            dim=dim or _parse_int(ENV_DIM),
            batch_size=batch_size or _parse_int(ENV_BATCH_SIZE),
            api_key=api_key or os.getenv("GOOGLE_API_KEY") or None,
            skip_unreadable=(
                skip_unreadable
                if skip_unreadable is not None
                else _parse_bool(os.getenv(ENV_SKIP_UNREADABLE), True)
            ),
        )
