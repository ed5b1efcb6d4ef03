"""REST API for the fantasy football companion."""

from __future__ import annotations

import json
import logging
import traceback
from contextlib import asynccontextmanager
from typing import AsyncIterator

import anyio.to_thread
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ffcompanion.analysis import AnalysisClient, AnalysisService, PlayerResolver
from ffcompanion.api.schemas import (
    AnalysisFailureResponse,
    AnalysisResponse,
    ErrorResponse,
    LeagueAnalysisRequest,
)
from ffcompanion.cache import TTLCache
from ffcompanion.config import Settings
from ffcompanion.errors import CompanionError, ValidationError
from ffcompanion.persistence import PlayerStore, open_store
from ffcompanion.sleeper import SleeperClient


logger = logging.getLogger("uvicorn.error")

CONTENT_TYPE_ERROR = "Content-Type must be application/json"
INVALID_JSON_ERROR = "Request body must be valid JSON"
MISSING_DATA_ERROR = "Missing required data for AI analysis"
ANALYSIS_FAILED_ERROR = "AI analysis failed"


def _error(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status_code)


def _failure_response(exc: Exception, settings: Settings) -> JSONResponse:
    kind = exc.kind if isinstance(exc, CompanionError) else "internal_error"
    body = AnalysisFailureResponse(
        error=ANALYSIS_FAILED_ERROR,
        details=str(exc),
        kind=kind,
        stack="".join(traceback.format_exception(exc)) if settings.is_development else None,
    )
    return JSONResponse(body.model_dump(exclude_none=True), status_code=500)


def create_app(
    settings: Settings | None = None,
    *,
    store: PlayerStore | None = None,
    analysis_client: AnalysisClient | None = None,
    sleeper: SleeperClient | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    owned: list[PlayerStore | SleeperClient] = []
    if store is None:
        store = open_store(settings)
        owned.append(store)
    if sleeper is None:
        sleeper = SleeperClient(
            base_url=settings.sleeper_base_url,
            token=settings.sleeper_token,
            cache=TTLCache(settings.cache_ttl),
        )
        owned.append(sleeper)
    analysis_client = analysis_client or AnalysisClient.from_settings(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        for resource in owned:
            resource.close()

    app = FastAPI(title="ffcompanion", lifespan=lifespan)
    service = AnalysisService(
        PlayerResolver(store),
        analysis_client,
        timeout=settings.request_timeout,
        max_prompt_chars=settings.max_prompt_chars,
    )
    app.state.settings = settings
    app.state.player_store = store
    app.state.analysis_service = service
    app.state.sleeper = sleeper

    async def run_analysis(payload: object) -> JSONResponse:
        try:
            result = await service.analyze(payload)
        except ValidationError as exc:
            logger.info("Rejected analysis request: %s", exc.message)
            return _error(MISSING_DATA_ERROR)
        except CompanionError as exc:
            logger.error("Analysis failed (%s): %s", exc.kind, exc.message)
            return _failure_response(exc, settings)
        except Exception as exc:
            logger.exception("Unexpected analysis failure")
            return _failure_response(exc, settings)
        return JSONResponse(AnalysisResponse(result=result).model_dump())

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = [".".join(str(part) for part in err["loc"] if part != "body") for err in exc.errors()]
        logger.info("Rejected request body for %s: %s", request.url.path, fields)
        return _error(MISSING_DATA_ERROR)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/ai", response_model=AnalysisResponse)
    async def ai_analysis(request: Request) -> JSONResponse:
        content_type = request.headers.get("content-type", "")
        if "application/json" not in content_type.lower():
            return _error(CONTENT_TYPE_ERROR)
        try:
            payload = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _error(INVALID_JSON_ERROR)
        return await run_analysis(payload)

    @app.post("/api/leagues/{league_id}/analysis", response_model=AnalysisResponse)
    async def league_analysis(league_id: str, body: LeagueAnalysisRequest) -> JSONResponse:
        try:
            snapshot = await anyio.to_thread.run_sync(sleeper.fetch_snapshot, league_id, body.owner_id)
        except ValidationError as exc:
            return _error(exc.message, status_code=404)
        except CompanionError as exc:
            logger.error("League fetch failed (%s): %s", exc.kind, exc.message)
            return _failure_response(exc, settings)
        snapshot["question"] = body.question
        snapshot["useGPT4"] = body.useGPT4
        return await run_analysis(snapshot)

    return app


__all__ = [
    "ANALYSIS_FAILED_ERROR",
    "CONTENT_TYPE_ERROR",
    "INVALID_JSON_ERROR",
    "MISSING_DATA_ERROR",
    "create_app",
]
