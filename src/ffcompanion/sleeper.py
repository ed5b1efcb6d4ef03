"""Read-only client for the Sleeper fantasy platform REST API."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from ffcompanion.cache import TTLCache
from ffcompanion.config import DEFAULT_SLEEPER_BASE_URL
from ffcompanion.errors import TransportError, ValidationError


logger = logging.getLogger(__name__)


def users_by_id(users: List[Mapping[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """Index the league member list by ``user_id``."""

    return {str(user["user_id"]): dict(user) for user in users if user.get("user_id")}


class SleeperClient:
    """Thin wrapper over the public Sleeper endpoints.

    Responses are memoised in ``cache`` when one is supplied. A bearer token is
    only needed for user-scoped calls such as ``get_user()`` without an id.
    """

    def __init__(
        self,
        *,
        base_url: str = DEFAULT_SLEEPER_BASE_URL,
        token: str | None = None,
        cache: TTLCache | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self.cache = cache
        self._client = httpx.Client(base_url=base_url, headers=headers, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SleeperClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get(self, path: str) -> Any:
        if self.cache is not None:
            cached = self.cache.get(path)
            if cached is not None:
                return cached
        try:
            resp = self._client.get(path)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as exc:
            raise TransportError(f"Sleeper returned {exc.response.status_code} for {path}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise TransportError(f"Sleeper request for {path} failed: {exc}") from exc
        if self.cache is not None and data is not None:
            self.cache.put(path, data)
        return data

    def get_user(self, user: Optional[str] = None) -> Dict[str, Any]:
        """Look up a user by username or id; without one, the token's user."""

        return self._get(f"/user/{user}" if user else "/user")

    def get_user_leagues(self, user_id: str, season: str | int) -> List[Dict[str, Any]]:
        return self._get(f"/user/{user_id}/leagues/nfl/{season}") or []

    def get_league(self, league_id: str) -> Dict[str, Any]:
        return self._get(f"/league/{league_id}")

    def get_league_rosters(self, league_id: str) -> List[Dict[str, Any]]:
        return self._get(f"/league/{league_id}/rosters") or []

    def get_league_users(self, league_id: str) -> List[Dict[str, Any]]:
        return self._get(f"/league/{league_id}/users") or []

    def get_players(self) -> Dict[str, Dict[str, Any]]:
        return self._get("/players/nfl") or {}

    def get_transactions(self, league_id: str, week: int) -> List[Dict[str, Any]]:
        return self._get(f"/league/{league_id}/transactions/{week}") or []

    def fetch_snapshot(self, league_id: str, owner_id: str) -> Dict[str, Any]:
        """Collect the raw league bundle for ``owner_id``'s roster."""

        league = self.get_league(league_id)
        if not league:
            raise ValidationError(["league"], f"League {league_id} not found")
        rosters = self.get_league_rosters(league_id)
        users = users_by_id(self.get_league_users(league_id))
        my_roster = next((r for r in rosters if str(r.get("owner_id")) == str(owner_id)), None)
        if my_roster is None:
            raise ValidationError(["myRoster"], f"User {owner_id} has no roster in league {league_id}")
        logger.info("Fetched league %s with %s rosters and %s users", league_id, len(rosters), len(users))
        return {
            "myRoster": my_roster,
            "allRosters": rosters,
            "league": league,
            "users": users,
        }
