from __future__ import annotations

from pydantic import BaseModel, Field


class AnalysisResponse(BaseModel):
    result: str


class ErrorResponse(BaseModel):
    error: str


class AnalysisFailureResponse(BaseModel):
    error: str
    details: str
    kind: str | None = None
    stack: str | None = None


class LeagueAnalysisRequest(BaseModel):
    question: str = Field(..., min_length=1)
    owner_id: str = Field(..., min_length=1)
    useGPT4: bool = False
