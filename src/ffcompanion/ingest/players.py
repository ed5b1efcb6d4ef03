"""Refresh the player directory from the upstream player catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Mapping

from ffcompanion.models import FREE_AGENT, PlayerRecord
from ffcompanion.persistence import MAX_UPSERT_ROWS, PlayerStore, iter_batches


logger = logging.getLogger(__name__)

SKILL_POSITIONS = frozenset({"QB", "RB", "WR", "TE"})


@dataclass
class SyncReport:
    catalog_size: int
    upserted: int
    batches: int
    skipped: int


def catalog_to_records(catalog: Mapping[str, Mapping[str, Any]]) -> List[PlayerRecord]:
    """Keep named skill-position players, sorted by ``player_id``."""

    records: dict[str, PlayerRecord] = {}
    for key, raw in catalog.items():
        if not isinstance(raw, Mapping):
            continue
        position = raw.get("position")
        full_name = (raw.get("full_name") or "").strip()
        if position not in SKILL_POSITIONS or not full_name:
            continue
        player_id = str(raw.get("player_id") or key)
        records[player_id] = PlayerRecord(
            player_id=player_id,
            full_name=full_name,
            position=position,
            team=raw.get("team") or FREE_AGENT,
        )
    return [records[player_id] for player_id in sorted(records)]


def sync_players(
    catalog: Mapping[str, Mapping[str, Any]],
    store: PlayerStore,
    *,
    batch_size: int = MAX_UPSERT_ROWS,
) -> SyncReport:
    """Upsert the filtered catalog in bounded batches.

    The first failing batch raises and aborts the run; earlier batches stay
    committed. Re-running with the same catalog rewrites identical rows.
    """

    if batch_size < 1 or batch_size > MAX_UPSERT_ROWS:
        raise ValueError(f"batch_size must be between 1 and {MAX_UPSERT_ROWS}, got {batch_size}")

    records = catalog_to_records(catalog)
    upserted = 0
    batches = 0
    for batch in iter_batches(records, batch_size):
        upserted += store.upsert_players(batch)
        batches += 1
        logger.info("Upserted batch %s (%s/%s players)", batches, upserted, len(records))

    return SyncReport(
        catalog_size=len(catalog),
        upserted=upserted,
        batches=batches,
        skipped=len(catalog) - len(records),
    )
