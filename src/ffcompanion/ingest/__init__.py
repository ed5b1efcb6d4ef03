"""Input adapters that normalize upstream player data."""

from .players import SKILL_POSITIONS, SyncReport, catalog_to_records, sync_players

__all__ = [
    "SKILL_POSITIONS",
    "SyncReport",
    "catalog_to_records",
    "sync_players",
]
