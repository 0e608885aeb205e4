"""Team file loading.

A team file describes a roster and the global settings to estimate it with::

    team:
      - {slot: 0, unit: 2, level: 50, orb: 2.0}
      - {slot: 2, unit: 7}
    settings:
      defense: 120
      attack_bonus: 1.5
      hp: [3200, 4000, 80.0]

Loading turns the file into the input events the crunch manager consumes,
wrapped in a suspend/resume pair so the whole team costs a single recompute.
"""

from pathlib import Path
from typing import Any

import yaml

from ..core.data.unit_database import resolve_data_path
from ..core.events.events import (
    AttackBonusChanged,
    CrunchEvent,
    CrunchingToggled,
    DefenseChanged,
    HpChanged,
    OrbMultiplierChanged,
    UnitLevelChanged,
    UnitPicked,
)


class TeamLoader:
    """Handles loading team files into input events."""

    @staticmethod
    def load_from_file(file_path: str) -> list[CrunchEvent]:
        """Load a team YAML file and convert it to input events.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file cannot be parsed or has an invalid structure
        """
        path = resolve_data_path(file_path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Team file not found: {file_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML team file {Path(file_path).name}: {e}")

        return TeamLoader.events_from_dict(data or {})

    @staticmethod
    def events_from_dict(data: dict[str, Any]) -> list[CrunchEvent]:
        """Convert a parsed team mapping into input events."""
        if not isinstance(data, dict):
            raise ValueError("Team file must contain a mapping")

        events: list[CrunchEvent] = [CrunchingToggled(enabled=False)]

        for entry in data.get("team") or []:
            try:
                slot = int(entry["slot"])
                unit_id = int(entry["unit"])
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid team entry {entry!r}: {e}")
            events.append(UnitPicked(slot=slot, unit_id=unit_id))
            if "level" in entry:
                events.append(UnitLevelChanged(slot=slot, level=int(entry["level"])))
            if "orb" in entry:
                events.append(OrbMultiplierChanged(slot=slot, multiplier=float(entry["orb"])))

        settings = data.get("settings") or {}
        if "attack_bonus" in settings:
            events.append(AttackBonusChanged(value=float(settings["attack_bonus"])))
        if "defense" in settings:
            events.append(DefenseChanged(value=int(settings["defense"])))
        if "hp" in settings:
            hp = settings["hp"]
            if not isinstance(hp, (list, tuple)) or len(hp) != 3:
                raise ValueError("settings.hp must be [current, max, percent]")
            events.append(HpChanged(current=float(hp[0]), maximum=float(hp[1]), percent=float(hp[2])))

        events.append(CrunchingToggled(enabled=True))
        return events
