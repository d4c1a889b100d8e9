from .base import SummaryProvider
from .factory import available_providers, create_provider, provider_label
from .gemini import GeminiProvider
from .openai_compatible import OpenAICompatibleProvider

__all__ = [
    "SummaryProvider",
    "GeminiProvider",
    "OpenAICompatibleProvider",
    "create_provider",
    "available_providers",
    "provider_label",
]
