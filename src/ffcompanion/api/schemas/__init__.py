"""Pydantic models for API I/O."""

from .analysis import AnalysisFailureResponse, AnalysisResponse, ErrorResponse, LeagueAnalysisRequest

__all__ = [
    "AnalysisFailureResponse",
    "AnalysisResponse",
    "ErrorResponse",
    "LeagueAnalysisRequest",
]
