"""Domain models."""

from .player import FREE_AGENT, PlayerRecord

__all__ = ["FREE_AGENT", "PlayerRecord"]
