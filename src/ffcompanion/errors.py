"""Error taxonomy shared by the analysis pipeline, the directory and the API."""

from __future__ import annotations

from typing import Sequence


class CompanionError(Exception):
    """Base class for failures the HTTP layer knows how to report."""

    kind = "companion_error"
    status_code = 500
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CompanionError):
    """Inbound request is malformed or incomplete."""

    kind = "validation_error"
    status_code = 400

    def __init__(self, fields: Sequence[str], message: str | None = None):
        self.fields = list(fields)
        super().__init__(message or f"Missing or invalid fields: {', '.join(self.fields)}")


class DirectoryLookupFailed(CompanionError):
    kind = "directory_lookup_failed"


class DirectoryWriteFailed(CompanionError):
    kind = "directory_write_failed"


class AnalysisServiceUnauthorized(CompanionError):
    kind = "analysis_unauthorized"


class AnalysisServiceMissingCredentials(AnalysisServiceUnauthorized):
    kind = "analysis_missing_credentials"


class AnalysisServiceRateLimited(CompanionError):
    kind = "analysis_rate_limited"
    retryable = True


class AnalysisServiceBadRequest(CompanionError):
    kind = "analysis_bad_request"


class AnalysisServiceEmptyResponse(CompanionError):
    kind = "analysis_empty_response"
    retryable = True


class TransportError(CompanionError):
    kind = "transport_error"
    retryable = True


__all__ = [
    "CompanionError",
    "ValidationError",
    "DirectoryLookupFailed",
    "DirectoryWriteFailed",
    "AnalysisServiceUnauthorized",
    "AnalysisServiceMissingCredentials",
    "AnalysisServiceRateLimited",
    "AnalysisServiceBadRequest",
    "AnalysisServiceEmptyResponse",
    "TransportError",
]
