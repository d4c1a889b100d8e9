"""Google Gemini provider for text summarization."""

from __future__ import annotations

from typing import Any

import httpx

from .base import SummaryProvider


class GeminiProvider(SummaryProvider):
    """Summarizes through the Gemini ``generateContent`` endpoint."""

    label = "Gemini"
    default_base_url = "https://generativelanguage.googleapis.com"

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": self.summary_cfg.system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {"temperature": self.summary_cfg.temperature},
        }

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/v1beta/models/{self.cfg.model}:generateContent"
        params = {"key": self.api_key}
        with httpx.Client(timeout=self.cfg.timeout_seconds, trust_env=self.cfg.trust_env) as client:
            resp = client.post(url, params=params, json=payload)
            resp.raise_for_status()
            return resp.json()

    def _extract_text(self, data: dict[str, Any]) -> str:
        return _extract_text(data)


def _extract_text(data: dict[str, Any]) -> str:
    """Join the text parts of the first candidate, skipping thought parts.

    Falls back to every text part when the model only returned thoughts.
    """
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    if not isinstance(parts, list):
        return ""

    texts = [p.get("text", "") for p in parts if isinstance(p, dict) and not p.get("thought")]
    if not any(texts):
        texts = [p.get("text", "") for p in parts if isinstance(p, dict)]
    return "".join(t for t in texts if isinstance(t, str))
