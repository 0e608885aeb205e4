"""Captain ability system.

This package turns raw captain ability records into typed, callable effects:
- formulas.py: Sandboxed parsing and evaluation of ability formulas
- effects.py: Effect variants, the capability registry and CaptainAbility
- ability_compiler.py: Record compilation with non-fatal warnings
"""

from .ability_compiler import compile_captain_ability, derive_captain_ability, parse_hit_sequence
from .effects import (
    EFFECT_REGISTRY,
    AttackMultiplier,
    CaptainAbility,
    CaptainEffect,
    ChainModifier,
    ConditionalAttackMultiplier,
    HpMultiplier,
    OrbOverride,
    create_effect,
)
from .formulas import Formula, compile_formula

__all__ = [
    "compile_captain_ability",
    "derive_captain_ability",
    "parse_hit_sequence",
    "EFFECT_REGISTRY",
    "AttackMultiplier",
    "CaptainAbility",
    "CaptainEffect",
    "ChainModifier",
    "ConditionalAttackMultiplier",
    "HpMultiplier",
    "OrbOverride",
    "create_effect",
    "Formula",
    "compile_formula",
]
