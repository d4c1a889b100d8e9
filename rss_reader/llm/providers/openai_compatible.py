"""OpenAI-compatible chat completions provider."""

from __future__ import annotations

from typing import Any

import httpx

from .base import SummaryProvider


class OpenAICompatibleProvider(SummaryProvider):
    """Summarizes through ``POST {base_url}/chat/completions``."""

    label = "OpenAI"
    default_base_url = "https://api.openai.com/v1"

    def _build_payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.cfg.model,
            "messages": [
                {"role": "system", "content": self.summary_cfg.system_prompt},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.summary_cfg.temperature,
        }

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/chat/completions"
        headers = {"Authorization": f"Bearer {self.api_key}"}
        with httpx.Client(timeout=self.cfg.timeout_seconds, trust_env=self.cfg.trust_env) as client:
            resp = client.post(url, headers=headers, json=payload)
            resp.raise_for_status()
            return resp.json()

    def _extract_text(self, data: dict[str, Any]) -> str:
        return _extract_text(data)


def _extract_text(data: dict[str, Any]) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return ""
    return content if isinstance(content, str) else ""
