"""Replace player ids in pruned rosters with readable names from the directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping

from ffcompanion.errors import DirectoryLookupFailed
from ffcompanion.persistence import PlayerStore


logger = logging.getLogger(__name__)


@dataclass
class Resolution:
    request: dict[str, Any]
    names: Dict[str, str]
    unresolved: List[str] = field(default_factory=list)


def collect_player_ids(request: Mapping[str, Any]) -> List[str]:
    """Distinct ids across ``myRoster`` and ``allRosters`` in first-seen order."""

    rosters: Iterable[Mapping[str, Any]] = [request["myRoster"], *request["allRosters"]]
    seen: dict[str, None] = {}
    for roster in rosters:
        for player_id in roster.get("players") or []:
            seen.setdefault(str(player_id), None)
        for player_id in roster.get("starters") or []:
            seen.setdefault(str(player_id), None)
    return list(seen)


def resolve_roster(roster: Mapping[str, Any], names: Mapping[str, str]) -> dict[str, Any]:
    resolved = dict(roster)
    resolved["players"] = [names.get(str(pid), str(pid)) for pid in roster.get("players") or []]
    resolved["starters"] = [names.get(str(pid), str(pid)) for pid in roster.get("starters") or []]
    return resolved


class PlayerResolver:
    def __init__(self, store: PlayerStore):
        self.store = store

    def lookup(self, player_ids: List[str]) -> Dict[str, str]:
        if not player_ids:
            return {}
        try:
            records = self.store.fetch_players(player_ids)
        except DirectoryLookupFailed:
            raise
        except Exception as exc:
            raise DirectoryLookupFailed(f"Player lookup failed: {exc}") from exc
        return {player_id: record.display_name for player_id, record in records.items()}

    def resolve(self, request: Mapping[str, Any]) -> Resolution:
        """Resolve every roster in ``request`` with a single directory query.

        Ids missing from the directory are kept as-is and reported in
        ``Resolution.unresolved``; a failing lookup raises
        ``DirectoryLookupFailed``.
        """

        player_ids = collect_player_ids(request)
        names = self.lookup(player_ids)
        unresolved = sorted(pid for pid in player_ids if pid not in names)
        if unresolved:
            logger.info(
                "Resolved %s/%s players; %s unknown to the directory",
                len(player_ids) - len(unresolved),
                len(player_ids),
                len(unresolved),
            )

        resolved = dict(request)
        resolved["myRoster"] = resolve_roster(request["myRoster"], names)
        resolved["allRosters"] = [resolve_roster(roster, names) for roster in request["allRosters"]]
        return Resolution(request=resolved, names=names, unresolved=unresolved)
