"""Player directory backed by a Supabase ``players`` table via its REST interface."""

from __future__ import annotations

import logging
from typing import Dict, Sequence

import httpx

from ffcompanion.errors import DirectoryLookupFailed, DirectoryWriteFailed
from ffcompanion.models import PlayerRecord

from . import check_batch_size


logger = logging.getLogger(__name__)

_SELECT_COLUMNS = "player_id,full_name,position,team"


class SupabasePlayerStore:
    def __init__(
        self,
        url: str,
        key: str,
        *,
        table: str = "players",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.table = table
        self._client = httpx.Client(
            base_url=f"{url.rstrip('/')}/rest/v1",
            headers={"apikey": key, "Authorization": f"Bearer {key}"},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def fetch_players(self, player_ids: Sequence[str]) -> Dict[str, PlayerRecord]:
        ids = list(dict.fromkeys(player_ids))
        if not ids:
            return {}
        in_list = ",".join(f'"{player_id}"' for player_id in ids)
        try:
            resp = self._client.get(
                f"/{self.table}",
                params={"select": _SELECT_COLUMNS, "player_id": f"in.({in_list})"},
            )
            resp.raise_for_status()
            rows = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise DirectoryLookupFailed(f"Player lookup failed: {exc}") from exc
        return {str(row["player_id"]): PlayerRecord.model_validate(row) for row in rows}

    def upsert_players(self, records: Sequence[PlayerRecord]) -> int:
        check_batch_size(len(records))
        if not records:
            return 0
        try:
            resp = self._client.post(
                f"/{self.table}",
                params={"on_conflict": "player_id"},
                headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
                json=[record.model_dump() for record in records],
            )
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise DirectoryWriteFailed(f"Player upsert failed: {exc}") from exc
        logger.debug("Upserted %s players into %s", len(records), self.table)
        return len(records)
