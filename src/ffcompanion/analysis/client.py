"""Client for an OpenAI-compatible chat completion endpoint."""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Type

import httpx

from ffcompanion.config import DEFAULT_OPENAI_BASE_URL, Settings
from ffcompanion.errors import (
    AnalysisServiceBadRequest,
    AnalysisServiceEmptyResponse,
    AnalysisServiceMissingCredentials,
    AnalysisServiceRateLimited,
    AnalysisServiceUnauthorized,
    CompanionError,
    TransportError,
)


logger = logging.getLogger(__name__)

# Upstream statuses with a dedicated error kind; anything else non-2xx is a TransportError.
STATUS_ERRORS: Mapping[int, Type[CompanionError]] = {
    400: AnalysisServiceBadRequest,
    401: AnalysisServiceUnauthorized,
    429: AnalysisServiceRateLimited,
}


def _upstream_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:500] or resp.reason_phrase
    if isinstance(body, Mapping):
        error = body.get("error")
        if isinstance(error, Mapping) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str):
            return error
    return resp.reason_phrase


def error_for_response(resp: httpx.Response) -> CompanionError:
    error_cls = STATUS_ERRORS.get(resp.status_code, TransportError)
    return error_cls(f"Analysis service returned {resp.status_code}: {_upstream_message(resp)}")


class AnalysisClient:
    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str = DEFAULT_OPENAI_BASE_URL,
        model_standard: str = "gpt-3.5-turbo",
        model_advanced: str = "gpt-4",
        max_output_tokens: int = 500,
        temperature: float = 0.7,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model_standard = model_standard
        self.model_advanced = model_advanced
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> "AnalysisClient":
        return cls(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
            model_standard=settings.model_standard,
            model_advanced=settings.model_advanced,
            max_output_tokens=settings.max_output_tokens,
            temperature=settings.temperature,
            timeout=settings.request_timeout,
            transport=transport,
        )

    def model_for(self, advanced: bool) -> str:
        return self.model_advanced if advanced else self.model_standard

    async def complete(self, messages: List[Dict[str, str]], *, advanced: bool = False) -> str:
        """Return the text of the first candidate for ``messages``."""

        if not self.api_key:
            raise AnalysisServiceMissingCredentials("OPENAI_API_KEY is not configured")

        payload = {
            "model": self.model_for(advanced),
            "messages": messages,
            "max_tokens": self.max_output_tokens,
            "temperature": self.temperature,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                resp = await client.post("/chat/completions", json=payload, headers=headers)
        except httpx.TimeoutException as exc:
            raise TransportError(f"Analysis service timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Analysis service unreachable: {exc}") from exc

        if not resp.is_success:
            error = error_for_response(resp)
            logger.warning("Analysis request failed (%s): %s", error.kind, error.message)
            raise error

        try:
            body = resp.json()
        except ValueError as exc:
            raise TransportError("Analysis service returned a non-JSON body") from exc

        choices = body.get("choices") if isinstance(body, Mapping) else None
        if not choices:
            raise AnalysisServiceEmptyResponse("Analysis service returned no candidates")
        content = (choices[0].get("message") or {}).get("content")
        if content is None:
            raise AnalysisServiceEmptyResponse("Analysis service returned an empty candidate")
        usage = body.get("usage") or {}
        logger.info(
            "Analysis completed with %s (prompt_tokens=%s completion_tokens=%s)",
            payload["model"],
            usage.get("prompt_tokens"),
            usage.get("completion_tokens"),
        )
        return content
