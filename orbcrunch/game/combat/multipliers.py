"""
Static multipliers used by the damage engine.

Terminology:
- Type multiplier:  Elemental effectiveness of an attacking unit against the
                    enemy type. STR, QCK and DEX form a triangle; INT and PSY
                    are strong against each other.
- Chain multiplier: Running multiplier applied to every unit in the chain.
                    Grows by 0.3 on Perfect hits and 0.1 on Great hits (scaled
                    by the captains' chain modifiers), stays put on Good hits
                    and resets to 1.0 on a Miss.
- Hit bonus ratio:  Share of a unit's per-hit attack added as the accuracy
                    bonus of its final hit.
"""

from typing import Optional

from ...core.data.game_enums import HitKind, UnitType
from ...core.errors import InvalidHitKindError

INITIAL_CHAIN_MULTIPLIER = 1.0

# (attacker, enemy) -> multiplier; every other pair is neutral
TYPE_MULTIPLIERS: dict[tuple[UnitType, UnitType], float] = {
    (UnitType.STR, UnitType.DEX): 2.0,
    (UnitType.STR, UnitType.QCK): 0.5,
    (UnitType.QCK, UnitType.STR): 2.0,
    (UnitType.QCK, UnitType.DEX): 0.5,
    (UnitType.DEX, UnitType.QCK): 2.0,
    (UnitType.DEX, UnitType.STR): 0.5,
    (UnitType.INT, UnitType.PSY): 2.0,
    (UnitType.PSY, UnitType.INT): 2.0,
}

CHAIN_INCREMENTS: dict[HitKind, float] = {
    HitKind.PERFECT: 0.3,
    HitKind.GREAT: 0.1,
    HitKind.GOOD: 0.0,
}

HIT_BONUS_RATIOS: dict[HitKind, float] = {
    HitKind.GOOD: 0.3,
    HitKind.GREAT: 0.6,
    HitKind.PERFECT: 1.35,
}

# Flat per-accuracy bonus estimates kept for reference only; the engine
# derives the bonus from HIT_BONUS_RATIOS instead.
LEGACY_BONUS_MULTIPLIERS: dict[HitKind, float] = {
    HitKind.PERFECT: 1.9,
    HitKind.GREAT: 1.4,
    HitKind.GOOD: 0.9,
    HitKind.MISS: 1.0,
}


def _require_hit_kind(hit: object) -> HitKind:
    if not isinstance(hit, HitKind):
        raise InvalidHitKindError(hit)
    return hit


def type_multiplier(unit_type: UnitType, enemy_type: UnitType) -> float:
    """Elemental effectiveness of ``unit_type`` against ``enemy_type``."""
    return TYPE_MULTIPLIERS.get((unit_type, enemy_type), 1.0)


def chain_increment(hit: HitKind, modifier: float = 1.0) -> Optional[float]:
    """Amount a hit adds to the chain multiplier, or None when it resets the chain."""
    hit = _require_hit_kind(hit)
    if hit == HitKind.MISS:
        return None
    return CHAIN_INCREMENTS[hit] * modifier


def next_chain_multiplier(current: float, hit: HitKind, modifier: float = 1.0) -> float:
    """Chain multiplier after ``hit``.

    Raises:
        InvalidHitKindError: If ``hit`` is not a HitKind
    """
    hit = _require_hit_kind(hit)
    if hit == HitKind.MISS:
        return INITIAL_CHAIN_MULTIPLIER
    if hit == HitKind.GOOD:
        return current
    return current + CHAIN_INCREMENTS[hit] * modifier


def hit_bonus_ratio(hit: HitKind) -> float:
    """Share of the per-hit attack granted as accuracy bonus (0 for a Miss)."""
    hit = _require_hit_kind(hit)
    return HIT_BONUS_RATIOS.get(hit, 0.0)


def legacy_bonus_multiplier(hit: HitKind) -> float:
    """Flat bonus estimate for an accuracy kind (not used by the engine)."""
    return LEGACY_BONUS_MULTIPLIERS[_require_hit_kind(hit)]
