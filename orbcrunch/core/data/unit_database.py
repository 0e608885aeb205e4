"""Read-only reference tables for units and captain abilities.

Unit templates and raw captain ability records are loaded from YAML files.
Captain records are keyed by ``unit_id + 1``, the convention used by the
published ability tables, so lookups go through :meth:`UnitDatabase.get_captain_record`
rather than indexing the table directly.
"""

import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..errors import UnknownUnitError
from .data_structures import UnitTemplate

PathLike = Union[str, "os.PathLike[str]"]


def _project_root() -> Path:
    # orbcrunch/core/data -> project root
    return Path(__file__).resolve().parent.parent.parent.parent


def resolve_data_path(path: PathLike) -> Path:
    """Resolve ``path`` relative to the project root unless it is absolute."""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return _project_root() / candidate


def _read_yaml(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Reference data file not found: {path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML reference data {path}: {e}")


class UnitDatabase:
    """Unit-template table plus the raw captain ability table."""

    def __init__(
        self,
        units: Optional[dict[int, UnitTemplate]] = None,
        captains: Optional[dict[int, dict[str, Any]]] = None,
    ):
        self.units: dict[int, UnitTemplate] = dict(units or {})
        self.captains: dict[int, dict[str, Any]] = dict(captains or {})

    @classmethod
    def from_dicts(
        cls,
        units: dict[Any, dict[str, Any]],
        captains: Optional[dict[Any, dict[str, Any]]] = None,
    ) -> "UnitDatabase":
        """Build a database from plain mappings (as read from YAML).

        Args:
            units: Mapping of unit identifier to template fields
            captains: Mapping of ``unit identifier + 1`` to raw capability formulas

        Raises:
            ValueError: If a unit entry or captain record is malformed
        """
        templates = {
            int(unit_id): UnitTemplate.from_dict(int(unit_id), data)
            for unit_id, data in (units or {}).items()
        }
        records: dict[int, dict[str, Any]] = {}
        for key, record in (captains or {}).items():
            if not isinstance(record, dict):
                raise ValueError(f"Captain record {key} must be a mapping, got {type(record).__name__}")
            records[int(key)] = dict(record)
        return cls(templates, records)

    @classmethod
    def load(cls, units_path: PathLike, captains_path: Optional[PathLike] = None) -> "UnitDatabase":
        """Load the reference tables from YAML files.

        Both files hold a single top-level mapping (``units:`` and ``captains:``
        respectively). Relative paths are resolved from the project root.
        """
        units_data = _read_yaml(resolve_data_path(units_path)) or {}
        if not isinstance(units_data, dict) or not isinstance(units_data.get("units", {}), dict):
            raise ValueError(f"Invalid unit table structure in {units_path}")

        captains_data: Any = {}
        if captains_path is not None:
            captains_data = _read_yaml(resolve_data_path(captains_path)) or {}
            if not isinstance(captains_data, dict) or not isinstance(captains_data.get("captains", {}), dict):
                raise ValueError(f"Invalid captain table structure in {captains_path}")

        return cls.from_dicts(units_data.get("units") or {}, captains_data.get("captains") or {})

    def get_unit(self, unit_id: int) -> UnitTemplate:
        """Look up a unit template.

        Raises:
            UnknownUnitError: If the identifier is not in the table
        """
        try:
            return self.units[unit_id]
        except KeyError:
            raise UnknownUnitError(unit_id) from None

    def get_captain_record(self, unit: UnitTemplate) -> Optional[dict[str, Any]]:
        """Raw captain ability record for ``unit``, or None when it has none."""
        return self.captains.get(unit.unit_id + 1)

    def __contains__(self, unit_id: object) -> bool:
        return unit_id in self.units

    def __len__(self) -> int:
        return len(self.units)
