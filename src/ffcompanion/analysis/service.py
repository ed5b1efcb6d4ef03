"""End-to-end analysis pipeline: validate, prune, resolve, prompt, complete."""

from __future__ import annotations

import logging
from typing import Any

import anyio
import anyio.to_thread

from ffcompanion.errors import TransportError

from .client import AnalysisClient
from .prompt import build_messages
from .pruning import prune_request
from .resolver import PlayerResolver
from .validation import AnalysisPayload, validate_request


logger = logging.getLogger(__name__)


class AnalysisService:
    """Runs one analysis request sequentially under an overall timeout.

    Validation happens before any network call. The directory lookup runs in a
    worker thread and the model call on the event loop; both count against
    ``timeout``, which surfaces as ``TransportError``. Nothing is retried here.
    """

    def __init__(
        self,
        resolver: PlayerResolver,
        client: AnalysisClient,
        *,
        timeout: float = 60.0,
        max_prompt_chars: int | None = None,
    ):
        self.resolver = resolver
        self.client = client
        self.timeout = timeout
        self.max_prompt_chars = max_prompt_chars

    async def analyze(self, payload: Any) -> str:
        validated = validate_request(payload)
        try:
            with anyio.fail_after(self.timeout):
                return await self._run(validated)
        except TimeoutError as exc:
            raise TransportError(f"Analysis timed out after {self.timeout:g}s") from exc

    async def _run(self, validated: AnalysisPayload) -> str:
        pruned = prune_request(validated.to_request())
        resolution = await anyio.to_thread.run_sync(
            self.resolver.resolve,
            pruned,
            abandon_on_cancel=True,
        )
        messages = build_messages(resolution.request, max_prompt_chars=self.max_prompt_chars)
        logger.info(
            "Submitting analysis for %s rosters (%s players, %s unresolved, prompt %s chars)",
            len(pruned["allRosters"]),
            len(resolution.names) + len(resolution.unresolved),
            len(resolution.unresolved),
            len(messages[1]["content"]),
        )
        return await self.client.complete(messages, advanced=validated.useGPT4)
