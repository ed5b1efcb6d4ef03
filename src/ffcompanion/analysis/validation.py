"""Schema validation for inbound analysis requests."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.config import ConfigDict

from ffcompanion.errors import ValidationError


REQUEST_FIELDS = ("question", "myRoster", "allRosters", "league", "users")


class RosterSnapshot(BaseModel):
    """The roster fields the pipeline reads; anything else Sleeper sends is dropped."""

    roster_id: Any = None
    owner_id: Any = None
    players: Optional[List[str]] = None
    starters: Optional[List[str]] = None
    settings: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(extra="ignore")


class AnalysisPayload(BaseModel):
    question: str = Field(..., min_length=1)
    myRoster: RosterSnapshot
    allRosters: List[RosterSnapshot]
    league: Dict[str, Any]
    users: Dict[str, Dict[str, Any]]
    useGPT4: bool = False

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    def to_request(self) -> dict[str, Any]:
        return self.model_dump(include=set(REQUEST_FIELDS))


def _error_field(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "body"


def validate_request(payload: Any) -> AnalysisPayload:
    """Check every required field at once, raising ``ValidationError`` listing all problems."""

    if not isinstance(payload, Mapping):
        raise ValidationError(["body"], "Request body must be a JSON object")
    try:
        return AnalysisPayload.model_validate(dict(payload))
    except PydanticValidationError as exc:
        fields = list(dict.fromkeys(_error_field(err["loc"]) for err in exc.errors()))
        raise ValidationError(fields) from exc
