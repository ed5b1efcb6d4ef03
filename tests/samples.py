"""Sleeper-shaped sample payloads shared by the tests."""

from __future__ import annotations

import copy
from typing import Any, Dict, Sequence

from ffcompanion.models import PlayerRecord


def raw_roster(roster_id: int, owner_id: str | None, players: Sequence[str], starters: Sequence[str]) -> Dict[str, Any]:
    return {
        "roster_id": roster_id,
        "owner_id": owner_id,
        "league_id": "L1",
        "co_owners": None,
        "starters": list(starters),
        "players": list(players),
        "reserve": [],
        "taxi": None,
        "metadata": {"streak": "2W", "record": "WWLW"},
        "settings": {
            "wins": 3,
            "losses": 1,
            "ties": 0,
            "fpts": 480,
            "fpts_decimal": 25,
            "fpts_against": 401,
            "fpts_against_decimal": 10,
            "waiver_position": 4,
            "waiver_budget_used": 12,
            "total_moves": 6,
        },
    }


def raw_league() -> Dict[str, Any]:
    return {
        "league_id": "L1",
        "name": "Sunday Funday",
        "season": "2024",
        "status": "in_season",
        "sport": "nfl",
        "total_rosters": 2,
        "draft_id": "abc",
        "avatar": "f00",
        "previous_league_id": "L0",
        "scoring_settings": {"rec": 1.0, "pass_td": 4.0, "rush_td": 6.0},
        "roster_positions": ["QB", "RB", "RB", "WR", "WR", "TE", "FLEX", "BN", "BN"],
        "settings": {
            "playoff_teams": 6,
            "type": 2,
            "waiver_type": 2,
            "trade_deadline": 11,
            "playoff_week_start": 15,
            "max_keepers": 1,
            "num_teams": 2,
            "reserve_slots": 2,
            "daily_waivers_hour": 0,
        },
    }


def raw_users() -> Dict[str, Dict[str, Any]]:
    return {
        "u1": {
            "user_id": "u1",
            "username": "patfan",
            "display_name": "Pat Fan",
            "avatar": "abc123",
            "is_owner": True,
            "metadata": {"team_name": "Arrowheads"},
        },
        "u2": {
            "user_id": "u2",
            "username": "rival",
            "display_name": "The Rival",
            "avatar": None,
            "metadata": {},
        },
    }


def raw_request(question: str = "Should I trade my RB depth for a WR1?") -> Dict[str, Any]:
    mine = raw_roster(1, "u1", ["100", "200", "300"], ["100", "300"])
    theirs = raw_roster(2, "u2", ["400", "500"], ["400"])
    return {
        "question": question,
        "myRoster": copy.deepcopy(mine),
        "allRosters": [mine, theirs],
        "league": raw_league(),
        "users": raw_users(),
    }


def directory_records() -> list[PlayerRecord]:
    return [
        PlayerRecord(player_id="100", full_name="Pat Mahomes", position="QB", team="KC"),
        PlayerRecord(player_id="300", full_name="Travis Kelce", position="TE", team="KC"),
        PlayerRecord(player_id="400", full_name="Josh Allen", position="QB", team="BUF"),
    ]


class FakeStore:
    """In-memory player store that counts lookups."""

    def __init__(self, records: Sequence[PlayerRecord] = (), *, fail_with: Exception | None = None):
        self.records = {record.player_id: record for record in records}
        self.fail_with = fail_with
        self.lookups: list[list[str]] = []
        self.upserts: list[list[PlayerRecord]] = []
        self.closed = False

    def fetch_players(self, player_ids):
        self.lookups.append(list(player_ids))
        if self.fail_with is not None:
            raise self.fail_with
        return {pid: self.records[pid] for pid in player_ids if pid in self.records}

    def upsert_players(self, records):
        if self.fail_with is not None:
            raise self.fail_with
        self.upserts.append(list(records))
        for record in records:
            self.records[record.player_id] = record
        return len(records)

    def close(self):
        self.closed = True
