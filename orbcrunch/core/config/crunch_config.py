"""
Configuration loader for crunching defaults.

This module handles loading and parsing of the YAML configuration file
that seeds the session's global scalars and reference data locations.
"""
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml


@dataclass
class CrunchConfig:
    """Defaults applied to a fresh crunching session."""
    global_attack_bonus: float = 1.0
    defense_threshold: int = 0
    current_hp: int = 1
    max_hp: int = 1
    perc_hp: float = 100.0
    default_orb: float = 1.0
    orb_choices: tuple[float, ...] = (0.5, 1.0, 2.0)
    units_path: str = "assets/data/units.yaml"
    captains_path: str = "assets/data/captains.yaml"
    max_log_messages: int = 1000
    debug_logging: bool = False


class ConfigLoader:
    """Loads the crunching configuration from a YAML file."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "assets/config/crunch.yaml"
        self.warnings: list[str] = []
        self._config: dict[str, Any] = {}

    def _resolve_path(self) -> Path:
        # Handle both absolute and relative paths
        if not os.path.isabs(self.config_path):
            # Assume relative to project root
            project_root = Path(__file__).parent.parent.parent.parent
            return project_root / self.config_path
        return Path(self.config_path)

    def load_config(self) -> CrunchConfig:
        """
        Load configuration from the YAML file.

        Missing or unreadable files fall back to the defaults; the reason is
        recorded in ``warnings``.

        Returns:
            CrunchConfig: The loaded (or default) configuration
        """
        self.warnings.clear()
        config_file = self._resolve_path()

        if not config_file.exists():
            self.warnings.append(f"Config file not found: {config_file}, using defaults")
            return CrunchConfig()

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self.warnings.append(f"Error loading config {config_file}: {e}")
            return CrunchConfig()

        return self._parse_config(self._config.get('crunch', self._config))

    def _parse_config(self, section: Any) -> CrunchConfig:
        """Parse the ``crunch`` section into a CrunchConfig."""
        if not isinstance(section, dict):
            self.warnings.append("Config section 'crunch' must be a mapping, using defaults")
            return CrunchConfig()

        known = {f.name: f for f in fields(CrunchConfig)}
        values: dict[str, Any] = {}
        for key, value in section.items():
            if key not in known:
                self.warnings.append(f"Unknown config key '{key}' ignored")
                continue
            try:
                values[key] = self._coerce(key, value)
            except (TypeError, ValueError) as e:
                self.warnings.append(f"Invalid value for '{key}': {e}")

        return CrunchConfig(**values)

    @staticmethod
    def _coerce(key: str, value: Any) -> Any:
        defaults = CrunchConfig()
        default = getattr(defaults, key)
        if isinstance(default, bool):
            return bool(value)
        if isinstance(default, tuple):
            return tuple(float(v) for v in value)
        return type(default)(value)


def load_config(config_path: Optional[str] = None) -> tuple[CrunchConfig, list[str]]:
    """Convenience wrapper returning the configuration and any load warnings."""
    loader = ConfigLoader(config_path)
    config = loader.load_config()
    return config, list(loader.warnings)
