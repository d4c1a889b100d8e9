"""Provider factory and registry for hot-swappable summarization backends."""

from __future__ import annotations

from ...config import ProviderConfig, SummaryConfig, get_api_key
from ...core.errors import ConfigError
from .base import SummaryProvider
from .gemini import GeminiProvider
from .openai_compatible import OpenAICompatibleProvider


ProviderBuilder = type[SummaryProvider]

_PROVIDER_REGISTRY: dict[str, ProviderBuilder] = {
    "gemini": GeminiProvider,
    "openai": OpenAICompatibleProvider,
    "openai_compatible": OpenAICompatibleProvider,
    "openai-compatible": OpenAICompatibleProvider,
}


def available_providers() -> list[str]:
    """Return the set of registered provider names."""
    return sorted(_PROVIDER_REGISTRY.keys())


def provider_label(provider_cfg: ProviderConfig) -> str:
    """Return the display label of the configured provider, or the raw name."""
    builder = _PROVIDER_REGISTRY.get(provider_cfg.name.lower().strip())
    return builder.label if builder is not None else provider_cfg.name


def create_provider(provider_cfg: ProviderConfig, summary_cfg: SummaryConfig) -> SummaryProvider:
    """Build a provider instance from runtime config.

    Raises:
        ValueError: If the provider name is not registered
        ConfigError: If no API key is configured
    """
    name = provider_cfg.name.lower().strip()
    builder = _PROVIDER_REGISTRY.get(name)
    if builder is None:
        supported = ", ".join(available_providers())
        raise ValueError(f"Unsupported provider: {provider_cfg.name}. Supported: {supported}")
    api_key = get_api_key(provider_cfg)
    if not api_key:
        raise ConfigError(f"{provider_cfg.api_key_env} environment variable not set")
    return builder(provider_cfg, summary_cfg, api_key)
