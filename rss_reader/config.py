"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- StoreConfig: Location of the JSON state file
- FetchConfig: HTTP fetching settings
- ExtractConfig: Content extraction settings
- ProviderConfig: Summarization provider settings
- SummaryConfig: Summarization prompt settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from typing import Any

import yaml


@dataclass
class StoreConfig:
    """Configuration for the persistent store.

    Attributes:
        path: Path of the JSON state file, relative to the working directory
    """

    path: str = "feeds.json"


@dataclass
class FetchConfig:
    """Configuration for HTTP fetching of feeds and pages.

    Attributes:
        timeout_seconds: HTTP request timeout
        retries: Number of retry attempts for failed requests
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    timeout_seconds: float = 20.0
    retries: int = 0
    trust_env: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )


@dataclass
class ExtractConfig:
    """Configuration for HTML content extraction.

    Attributes:
        selectors: CSS selectors tried in order; the first non-empty match wins
        fallback: Extractors tried after every selector failed ("trafilatura", "readability")
    """

    selectors: list[str] = field(
        default_factory=lambda: ["article", "main", "div.content", "div.post", "p"]
    )
    fallback: list[str] = field(default_factory=list)


@dataclass
class ProviderConfig:
    """Configuration for the summarization provider.

    Attributes:
        name: Provider name ("openai", "openai_compatible", or "gemini")
        model: Model identifier (e.g., "gpt-4o-mini")
        api_key_env: Environment variable name containing the API key
        base_url: Base URL for the provider API, or None for the provider's own default
        api_key: Optional inline API key (overrides env var)
        trust_env: Whether to respect system proxy settings for API requests
        timeout_seconds: Request timeout for the provider API
    """

    name: str = "openai"
    model: str = "gpt-4o-mini"
    api_key_env: str = "OPENAI_API_KEY"
    base_url: str | None = None
    api_key: str | None = None
    trust_env: bool = True
    timeout_seconds: float = 30.0


@dataclass
class SummaryConfig:
    """Configuration for summarization prompts.

    Attributes:
        system_prompt: Fixed instruction sent as the system message
        user_prompt: Template for the user message; ``{text}`` is replaced by the input
        temperature: Sampling temperature
        max_chars: Maximum characters of input text to send, or None for no limit
    """

    system_prompt: str = "You are a helpful assistant that summarizes text."
    user_prompt: str = "Summarize the following article:\n\n{text}"
    temperature: float = 0.7
    max_chars: int | None = None


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "rss_reader.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    store: StoreConfig = field(default_factory=StoreConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    extract: ExtractConfig = field(default_factory=ExtractConfig)
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    summary: SummaryConfig = field(default_factory=SummaryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "store": {
            "path": cfg.store.path,
        },
        "fetch": {
            "timeout_seconds": cfg.fetch.timeout_seconds,
            "retries": cfg.fetch.retries,
            "trust_env": cfg.fetch.trust_env,
            "user_agent": cfg.fetch.user_agent,
        },
        "extract": {
            "selectors": list(cfg.extract.selectors),
            "fallback": list(cfg.extract.fallback),
        },
        "provider": {
            "name": cfg.provider.name,
            "model": cfg.provider.model,
            "api_key_env": cfg.provider.api_key_env,
            "base_url": cfg.provider.base_url,
            "api_key": cfg.provider.api_key,
            "trust_env": cfg.provider.trust_env,
            "timeout_seconds": cfg.provider.timeout_seconds,
        },
        "summary": {
            "system_prompt": cfg.summary.system_prompt,
            "user_prompt": cfg.summary.user_prompt,
            "temperature": cfg.summary.temperature,
            "max_chars": cfg.summary.max_chars,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        store=StoreConfig(**data["store"]),
        fetch=FetchConfig(**data["fetch"]),
        extract=ExtractConfig(**data["extract"]),
        provider=ProviderConfig(**data["provider"]),
        summary=SummaryConfig(**data["summary"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_api_key(cfg: ProviderConfig) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    return os.getenv(cfg.api_key_env)
