import pytest

from ffcompanion.analysis import PlayerResolver, collect_player_ids, prune_request
from ffcompanion.errors import DirectoryLookupFailed
from ffcompanion.models import PlayerRecord
from ffcompanion.persistence import SQLitePlayerStore
from tests.samples import FakeStore, directory_records, raw_request


def _request(players, starters=()):
    roster = {"roster_id": 1, "owner_id": "u1", "players": list(players), "starters": list(starters)}
    return {
        "question": "?",
        "myRoster": roster,
        "allRosters": [dict(roster)],
        "league": {},
        "users": {},
    }


def test_resolves_known_ids_and_keeps_unknown_ids():
    store = FakeStore(
        [PlayerRecord(player_id="100", full_name="Pat Mahomes", position="QB", team="KC")]
    )
    resolution = PlayerResolver(store).resolve(_request(["100", "200"]))

    assert resolution.request["myRoster"]["players"] == ["Pat Mahomes (QB, KC)", "200"]
    assert resolution.request["allRosters"][0]["players"] == ["Pat Mahomes (QB, KC)", "200"]
    assert resolution.unresolved == ["200"]
    assert resolution.names == {"100": "Pat Mahomes (QB, KC)"}


def test_resolution_preserves_length_and_order():
    store = FakeStore(directory_records())
    request = prune_request(raw_request())
    resolution = PlayerResolver(store).resolve(request)

    for before, after in zip(request["allRosters"], resolution.request["allRosters"]):
        assert len(after["players"]) == len(before["players"])
        assert len(after["starters"]) == len(before["starters"])
    assert resolution.request["myRoster"]["players"] == [
        "Pat Mahomes (QB, KC)",
        "200",
        "Travis Kelce (TE, KC)",
    ]
    assert resolution.request["myRoster"]["starters"] == ["Pat Mahomes (QB, KC)", "Travis Kelce (TE, KC)"]


def test_directory_is_queried_once_per_request():
    store = FakeStore(directory_records())
    request = prune_request(raw_request())
    PlayerResolver(store).resolve(request)

    assert len(store.lookups) == 1
    assert sorted(store.lookups[0]) == ["100", "200", "300", "400", "500"]


def test_no_lookup_when_rosters_are_empty():
    store = FakeStore()
    resolution = PlayerResolver(store).resolve(_request([]))
    assert store.lookups == []
    assert resolution.request["myRoster"]["players"] == []


def test_resolved_starters_remain_subset_of_players():
    store = FakeStore(directory_records())
    resolution = PlayerResolver(store).resolve(prune_request(raw_request()))
    for roster in [resolution.request["myRoster"], *resolution.request["allRosters"]]:
        assert set(roster["starters"]) <= set(roster["players"])


def test_resolver_does_not_mutate_request():
    store = FakeStore(directory_records())
    request = prune_request(raw_request())
    PlayerResolver(store).resolve(request)
    assert request["myRoster"]["players"] == ["100", "200", "300"]


def test_lookup_failure_fails_fast():
    store = FakeStore(fail_with=DirectoryLookupFailed("database is locked"))
    with pytest.raises(DirectoryLookupFailed, match="database is locked"):
        PlayerResolver(store).resolve(_request(["100"]))


def test_unexpected_store_errors_become_lookup_failures():
    store = FakeStore(fail_with=ConnectionError("connection refused"))
    with pytest.raises(DirectoryLookupFailed, match="connection refused"):
        PlayerResolver(store).resolve(_request(["100"]))


def test_collect_player_ids_is_distinct_and_ordered():
    request = prune_request(raw_request())
    assert collect_player_ids(request) == ["100", "200", "300", "400", "500"]


def test_unopenable_directory_fails_resolution(tmp_path):
    db = tmp_path / "players.sqlite"
    store = SQLitePlayerStore(db)
    store.upsert_players(directory_records())
    db.unlink()
    db.mkdir()

    with pytest.raises(DirectoryLookupFailed):
        PlayerResolver(store).resolve(_request(["100"]))
