"""Summarization service adapters."""

from .providers.base import SummaryProvider
from .providers.factory import available_providers, create_provider, provider_label
from .providers.gemini import GeminiProvider
from .providers.openai_compatible import OpenAICompatibleProvider

__all__ = [
    "SummaryProvider",
    "GeminiProvider",
    "OpenAICompatibleProvider",
    "create_provider",
    "available_providers",
    "provider_label",
]
