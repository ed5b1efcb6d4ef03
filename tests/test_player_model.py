import pytest
from pydantic import ValidationError

from ffcompanion.models import PlayerRecord


def test_player_record_is_frozen():
    record = PlayerRecord(player_id="4046", full_name="Patrick Mahomes", position="QB", team="KC")

    assert record.display_name == "Patrick Mahomes (QB, KC)"

    with pytest.raises((TypeError, ValidationError)):
        record.player_id = "4047"  # type: ignore[misc]


def test_player_record_defaults_to_free_agent():
    record = PlayerRecord(player_id="1", full_name="Unsigned Guy", position="WR")
    assert record.team == "Free Agent"


def test_player_record_requires_id_and_name():
    with pytest.raises(ValidationError):
        PlayerRecord(player_id="", full_name="Nobody", position="RB")
    with pytest.raises(ValidationError):
        PlayerRecord(player_id="2", full_name="", position="RB")
