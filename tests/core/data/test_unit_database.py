"""
Unit tests for the YAML-backed unit and captain tables.
"""

import pytest

from orbcrunch.core.data.game_enums import UnitType
from orbcrunch.core.data.unit_database import UnitDatabase
from orbcrunch.core.errors import UnknownUnitError


class TestUnitDatabase:
    """Test lookups on the in-memory database."""

    def test_get_unit(self, database):
        unit = database.get_unit(3)

        assert unit.name == "Guard"
        assert unit.type == UnitType.DEX

    def test_unknown_unit(self, database):
        with pytest.raises(UnknownUnitError, match="Unknown unit"):
            database.get_unit(404)

    def test_captain_record_is_keyed_by_id_plus_one(self, database):
        """Test the captain record of unit N is stored under N + 1."""
        record = database.get_captain_record(database.get_unit(1))

        assert record == {"atk": "2 if unit.type == 'STR' else 1", "hp": 1.5}

    def test_unit_without_captain_record(self, database):
        assert database.get_captain_record(database.get_unit(3)) is None

    def test_contains_and_len(self, database):
        assert 1 in database
        assert 99 not in database
        assert len(database) == 7

    def test_malformed_captain_record(self):
        with pytest.raises(ValueError):
            UnitDatabase.from_dicts({}, {2: ["atk"]})


class TestUnitDatabaseLoading:
    """Test loading tables from YAML files."""

    def test_load_from_files(self, tmp_path):
        units = tmp_path / "units.yaml"
        units.write_text(
            "units:\n"
            "  1: {name: A, type: STR, minATK: 1, maxATK: 2, minHP: 3, maxHP: 4}\n",
            encoding="utf-8",
        )
        captains = tmp_path / "captains.yaml"
        captains.write_text("captains:\n  2: {atk: 2}\n", encoding="utf-8")

        database = UnitDatabase.load(units, captains)

        assert len(database) == 1
        assert database.get_captain_record(database.get_unit(1)) == {"atk": 2}

    def test_load_without_captains(self, tmp_path):
        units = tmp_path / "units.yaml"
        units.write_text("units: {}\n", encoding="utf-8")

        database = UnitDatabase.load(units)

        assert len(database) == 0
        assert database.captains == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            UnitDatabase.load(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        units = tmp_path / "units.yaml"
        units.write_text("units: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError):
            UnitDatabase.load(units)

    def test_shipped_reference_tables(self):
        """Test the bundled tables load and link captains to units."""
        database = UnitDatabase.load("assets/data/units.yaml", "assets/data/captains.yaml")

        assert len(database) == 10
        assert "atk" in database.get_captain_record(database.get_unit(1))
