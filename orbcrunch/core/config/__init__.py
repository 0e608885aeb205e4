"""Configuration for crunching sessions."""

from .crunch_config import ConfigLoader, CrunchConfig, load_config

__all__ = [
    "ConfigLoader",
    "CrunchConfig",
    "load_config",
]
