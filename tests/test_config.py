"""Tests for YAML configuration loading."""

from __future__ import annotations

from rss_reader.config import AppConfig, ProviderConfig, get_api_key, load_config


def test_load_config_without_path_returns_defaults():
    cfg = load_config(None)

    assert cfg == AppConfig()
    assert cfg.store.path == "feeds.json"
    assert cfg.fetch.retries == 0
    assert cfg.extract.selectors == ["article", "main", "div.content", "div.post", "p"]
    assert cfg.extract.fallback == []
    assert cfg.provider.model == "gpt-4o-mini"
    assert cfg.provider.base_url is None


def test_load_config_merges_sections(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(
            [
                "store:",
                "  path: data/state.json",
                "extract:",
                "  fallback: [trafilatura]",
                "provider:",
                "  name: gemini",
                "  model: gemini-3-flash-preview",
                "unknown_section:",
                "  ignored: true",
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.store.path == "data/state.json"
    assert cfg.extract.fallback == ["trafilatura"]
    assert cfg.extract.selectors == AppConfig().extract.selectors
    assert cfg.provider.name == "gemini"
    assert cfg.provider.api_key_env == "OPENAI_API_KEY"
    assert cfg.fetch == AppConfig().fetch


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(str(path)) == AppConfig()


def test_load_config_does_not_leak_between_calls(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("store:\n  path: other.json\n", encoding="utf-8")

    load_config(str(path)).extract.selectors.append("section")

    assert load_config(None).extract.selectors[-1] == "p"


def test_get_api_key_prefers_inline_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "from-env")

    assert get_api_key(ProviderConfig(api_key="inline")) == "inline"
    assert get_api_key(ProviderConfig()) == "from-env"


def test_get_api_key_missing(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    assert get_api_key(ProviderConfig()) is None
