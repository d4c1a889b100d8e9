"""Abstract interface for text summarization services."""

from __future__ import annotations

from abc import ABC, abstractmethod
import json
import logging
from typing import Any

import httpx

from ...config import ProviderConfig, SummaryConfig
from ...core.errors import (
    EmptySummaryError,
    SummaryResponseError,
    SummaryTransportError,
)
from ...logging_utils import log_event


logger = logging.getLogger(__name__)


class SummaryProvider(ABC):
    """Provider interface for one-shot text summarization.

    Subclasses describe the wire format of one API: how the request body is
    built, where it is posted, and where the generated text lives in the
    response. ``summarize`` maps failures onto the SummaryError hierarchy.
    """

    #: Human readable service name used in user-facing error messages
    label: str = "LLM"
    #: API root used when the config leaves ``base_url`` unset
    default_base_url: str = ""

    def __init__(self, cfg: ProviderConfig, summary_cfg: SummaryConfig, api_key: str):
        self.cfg = cfg
        self.summary_cfg = summary_cfg
        self.api_key = api_key

    def summarize(self, text: str) -> str:
        """Summarize ``text`` with the configured model.

        Raises:
            SummaryTransportError: If the request could not be completed
            SummaryResponseError: If the response body is not JSON
            EmptySummaryError: If the response carries no generated text
        """
        prompt = self.build_prompt(text)
        payload = self._build_payload(prompt)
        try:
            data = self._post(payload)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Failed to send request to %s API: %s", self.label, exc)
            raise SummaryTransportError(str(exc)) from exc
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse %s API response: %s", self.label, exc)
            raise SummaryResponseError(str(exc)) from exc

        content = self._extract_text(data).strip()
        if not content:
            logger.error("%s API returned an empty summary", self.label)
            raise EmptySummaryError(f"{self.label} API returned no summary text")

        log_event(
            logger,
            "Generated summary",
            provider=self.label,
            model=self.cfg.model,
            input_chars=len(text),
            output_chars=len(content),
        )
        return content

    def build_prompt(self, text: str) -> str:
        limit = self.summary_cfg.max_chars
        if limit is not None:
            text = text[:limit]
        return self.summary_cfg.user_prompt.replace("{text}", text)

    @abstractmethod
    def _build_payload(self, prompt: str) -> dict[str, Any]:
        """Return the JSON request body for ``prompt``."""
        raise NotImplementedError

    @property
    def base_url(self) -> str:
        return (self.cfg.base_url or self.default_base_url).rstrip("/")

    @abstractmethod
    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send the request and return the decoded JSON body."""
        raise NotImplementedError

    @abstractmethod
    def _extract_text(self, data: dict[str, Any]) -> str:
        """Return the generated text from a response body, or an empty string."""
        raise NotImplementedError
