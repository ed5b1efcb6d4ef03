"""Reduce raw league snapshots to the fields the analysis prompt needs.

Every pruned entity always carries its full whitelist of keys; values missing
upstream become ``None``. That makes pruning a fixed point, and keeps fields
such as draft ids, avatars or co-owner lists from ever reaching the model.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

ROSTER_FIELDS = ("roster_id", "owner_id", "starters", "players", "settings")
ROSTER_SETTINGS_FIELDS = ("wins", "losses", "ties", "fpts", "fpts_against")
LEAGUE_FIELDS = ("league_id", "name", "season", "scoring_settings", "roster_positions", "settings")
LEAGUE_SETTINGS_FIELDS = (
    "playoff_teams",
    "type",
    "waiver_type",
    "trade_deadline",
    "playoff_week_start",
    "max_keepers",
)
USER_FIELDS = ("user_id", "display_name", "username")


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _pick(source: Any, fields: Iterable[str], what: str) -> dict[str, Any]:
    if source is None:
        source = {}
    source = _require_mapping(source, what)
    return {field: source.get(field) for field in fields}


def _points(settings: Mapping[str, Any], key: str) -> Any:
    # Sleeper splits points into an integer part and a ``*_decimal`` hundredths part.
    whole = settings.get(key)
    decimal = settings.get(f"{key}_decimal")
    if whole is None or decimal is None:
        return whole
    return round(whole + decimal / 100, 2)


def _id_list(value: Any) -> list[str]:
    if isinstance(value, (str, bytes)):
        raise TypeError(f"expected a list of player ids, got {type(value).__name__}")
    return [str(item) for item in value or []]


def prune_roster(roster: Any) -> dict[str, Any]:
    roster = _require_mapping(roster, "roster")
    settings = _require_mapping(roster.get("settings") or {}, "roster settings")
    pruned_settings = {field: settings.get(field) for field in ROSTER_SETTINGS_FIELDS}
    pruned_settings["fpts"] = _points(settings, "fpts")
    pruned_settings["fpts_against"] = _points(settings, "fpts_against")
    return {
        "roster_id": roster.get("roster_id"),
        "owner_id": roster.get("owner_id"),
        "starters": _id_list(roster.get("starters")),
        "players": _id_list(roster.get("players")),
        "settings": pruned_settings,
    }


def prune_league(league: Any) -> dict[str, Any]:
    league = _require_mapping(league, "league")
    scoring = league.get("scoring_settings")
    positions = league.get("roster_positions")
    return {
        "league_id": league.get("league_id"),
        "name": league.get("name"),
        "season": league.get("season"),
        "scoring_settings": dict(_require_mapping(scoring, "scoring_settings")) if scoring is not None else None,
        "roster_positions": list(positions) if positions is not None else None,
        "settings": _pick(league.get("settings"), LEAGUE_SETTINGS_FIELDS, "league settings"),
    }


def prune_users(users: Any) -> dict[str, dict[str, Any]]:
    users = _require_mapping(users, "users")
    return {str(member_id): _pick(user, USER_FIELDS, "user") for member_id, user in users.items()}


def prune_request(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a pruned copy of an analysis request; the input is left untouched."""

    return {
        "question": payload["question"],
        "myRoster": prune_roster(payload["myRoster"]),
        "allRosters": [prune_roster(roster) for roster in payload["allRosters"]],
        "league": prune_league(payload["league"]),
        "users": prune_users(payload["users"]),
    }
