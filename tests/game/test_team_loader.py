"""
Unit tests for team file loading.
"""

import pytest

from orbcrunch.core.events.events import (
    CrunchingToggled,
    DefenseChanged,
    HpChanged,
    OrbMultiplierChanged,
    UnitLevelChanged,
    UnitPicked,
)
from orbcrunch.game.team_loader import TeamLoader


class TestTeamLoader:
    """Test conversion of team files into input events."""

    def test_events_are_wrapped_in_suspend_resume(self):
        events = TeamLoader.events_from_dict({"team": [{"slot": 0, "unit": 1}]})

        assert events[0] == CrunchingToggled(enabled=False)
        assert events[-1] == CrunchingToggled(enabled=True)
        assert events[1] == UnitPicked(slot=0, unit_id=1)

    def test_level_orb_and_settings(self):
        events = TeamLoader.events_from_dict({
            "team": [{"slot": 2, "unit": 3, "level": 7, "orb": 2}],
            "settings": {"defense": 80, "hp": [10, 100, 10]},
        })

        assert UnitLevelChanged(slot=2, level=7) in events
        assert OrbMultiplierChanged(slot=2, multiplier=2.0) in events
        assert DefenseChanged(value=80) in events
        assert HpChanged(current=10.0, maximum=100.0, percent=10.0) in events

    def test_missing_unit_field(self):
        with pytest.raises(ValueError, match="Invalid team entry"):
            TeamLoader.events_from_dict({"team": [{"slot": 0}]})

    def test_bad_hp_setting(self):
        with pytest.raises(ValueError, match="settings.hp"):
            TeamLoader.events_from_dict({"settings": {"hp": 5}})

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            TeamLoader.events_from_dict(["slot"])  # type: ignore[arg-type]

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "team.yaml"
        path.write_text("team:\n  - {slot: 1, unit: 2}\n", encoding="utf-8")

        events = TeamLoader.load_from_file(str(path))

        assert UnitPicked(slot=1, unit_id=2) in events

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            TeamLoader.load_from_file(str(tmp_path / "missing.yaml"))
