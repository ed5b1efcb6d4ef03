"""Canonical player model shared by the directory, the sync job and the resolver."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


FREE_AGENT = "Free Agent"


class PlayerRecord(BaseModel):
    """One row of the player directory."""

    player_id: str = Field(..., min_length=1)
    full_name: str = Field(..., min_length=1)
    position: str
    team: str = FREE_AGENT

    model_config = ConfigDict(frozen=True)

    @property
    def display_name(self) -> str:
        return f"{self.full_name} ({self.position}, {self.team})"
