"""Completion client for Ollama HTTP transport.

One blocking POST per call, no retry. Transport and body problems come back
as a failed CompletionResult instead of an exception, so callers handle every
"no completion" case the same way.
"""

from __future__ import annotations

import enum
import json
import logging
import os
import tempfile
import time
from dataclasses import dataclass

import httpx

from fim_complete.llm.fim import CompletionRequest

logger = logging.getLogger(__name__)


class FailureKind(enum.Enum):
    TRANSPORT_FAILURE = "transport_failure"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_COMPLETION = "empty_completion"


@dataclass(frozen=True)
class CompletionResult:
    text: str | None = None
    failure: FailureKind | None = None
    detail: str = ""
    prompt_tokens: int | None = None
    completion_tokens: int | None = None
    latency_ms: int | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, text: str, **kwargs) -> CompletionResult:
        return cls(text=text, **kwargs)

    @classmethod
    def error(cls, failure: FailureKind, detail: str = "", **kwargs) -> CompletionResult:
        return cls(failure=failure, detail=detail, **kwargs)


class CompletionClient:
    """Thin transport layer for Ollama's /api/generate endpoint."""

    def __init__(self, endpoint_url: str, timeout: float | None = None):
        self.endpoint_url = endpoint_url
        self.timeout = timeout
        self._http = httpx.Client(timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    def submit(self, request: CompletionRequest) -> CompletionResult:
        """Send one completion request and extract the `response` text."""
        start = time.monotonic()
        try:
            response = self._post_payload(request.to_payload())
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            logger.warning("Completion request to %s failed: %s", self.endpoint_url, e)
            return CompletionResult.error(FailureKind.TRANSPORT_FAILURE, str(e))
        elapsed_ms = int((time.monotonic() - start) * 1000)

        try:
            data = response.json()
        except ValueError as e:
            logger.warning("Completion response is not JSON: %s", e)
            return CompletionResult.error(
                FailureKind.MALFORMED_RESPONSE, f"invalid JSON: {e}", latency_ms=elapsed_ms,
            )
        if not isinstance(data, dict) or not isinstance(data.get("response"), str):
            keys = list(data.keys()) if isinstance(data, dict) else type(data).__name__
            logger.warning("Completion response missing 'response' field. Keys: %s", keys)
            return CompletionResult.error(
                FailureKind.MALFORMED_RESPONSE,
                f"missing 'response' field (keys: {keys})",
                latency_ms=elapsed_ms,
            )

        logger.debug("Completion received in %dms (%d chars)", elapsed_ms, len(data["response"]))
        return CompletionResult.success(
            data["response"],
            prompt_tokens=data.get("prompt_eval_count"),
            completion_tokens=data.get("eval_count"),
            latency_ms=elapsed_ms,
        )

    def _post_payload(self, payload: dict) -> httpx.Response:
        """POST the payload through a scratch file that is always removed."""
        scratch = tempfile.NamedTemporaryFile(
            mode="w", suffix=".json", prefix="fim_request_", encoding="utf-8", delete=False,
        )
        try:
            with scratch:
                json.dump(payload, scratch)
            with open(scratch.name, "rb") as f:
                body = f.read()
            logger.debug("Posting %d byte payload to %s", len(body), self.endpoint_url)
            return self._http.post(
                self.endpoint_url,
                content=body,
                headers={"Content-Type": "application/json"},
            )
        finally:
            os.unlink(scratch.name)
