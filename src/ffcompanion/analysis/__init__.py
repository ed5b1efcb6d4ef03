"""Pruning, player resolution and prompt assembly for AI league analysis."""

from .client import STATUS_ERRORS, AnalysisClient
from .prompt import SYSTEM_PROMPT, build_messages, build_user_message
from .pruning import prune_league, prune_request, prune_roster, prune_users
from .resolver import PlayerResolver, Resolution, collect_player_ids
from .service import AnalysisService
from .validation import AnalysisPayload, RosterSnapshot, validate_request

__all__ = [
    "AnalysisClient",
    "AnalysisPayload",
    "AnalysisService",
    "PlayerResolver",
    "Resolution",
    "RosterSnapshot",
    "STATUS_ERRORS",
    "SYSTEM_PROMPT",
    "build_messages",
    "build_user_message",
    "collect_player_ids",
    "prune_league",
    "prune_request",
    "prune_roster",
    "prune_users",
    "validate_request",
]
