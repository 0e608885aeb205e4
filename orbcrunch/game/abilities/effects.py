"""Captain effect variants.

Each capability a captain can have is represented by its own effect class,
following the same strategy/factory layout as the AI behaviours: a small
abstract base, one concrete class per variant and a factory that maps a
capability key to the class that implements it.
"""

from abc import ABC
from dataclasses import dataclass, field
from typing import Optional

from ...core.data.data_structures import UnitTemplate
from ...core.data.game_enums import Capability, HitKind
from ...core.errors import FormulaError
from .formulas import (
    ATTACK_VARIABLES,
    CHAIN_VARIABLES,
    HP_VARIABLES,
    ORB_VARIABLES,
    Formula,
    compile_formula,
)


@dataclass(frozen=True)
class CaptainEffect(ABC):
    """Base class for a compiled captain capability.

    A formula that fails while being evaluated (a division by zero at some HP
    value, a string where a number was expected) does not abort the crunch:
    the effect answers with the neutral ``fallback`` for that call and keeps
    the failure message until it is drained.
    """
    formula: Formula
    capability: Capability = field(init=False)
    _failures: list[str] = field(default_factory=list, init=False, repr=False, compare=False)

    @property
    def source(self) -> str:
        return self.formula.source

    def _evaluate(self, fallback: float, **bindings: object) -> float:
        try:
            return self.formula.evaluate(**bindings)
        except FormulaError as e:
            message = str(e)
            if message not in self._failures:
                self._failures.append(message)
            return fallback

    def drain_failures(self) -> list[str]:
        """Return and forget the runtime failures seen since the last drain."""
        failures = list(self._failures)
        self._failures.clear()
        return failures


@dataclass(frozen=True)
class AttackMultiplier(CaptainEffect):
    """Unconditional attack multiplier (``atk``)."""

    def __post_init__(self):
        object.__setattr__(self, 'capability', Capability.ATK)

    def __call__(self, unit: UnitTemplate, position: int,
                 current_hp: float, max_hp: float, perc_hp: float) -> float:
        return self._evaluate(
            1.0, unit=unit, position=position,
            current_hp=current_hp, max_hp=max_hp, perc_hp=perc_hp,
        )


@dataclass(frozen=True)
class ConditionalAttackMultiplier(AttackMultiplier):
    """Attack multiplier applied only when the captain's hit pattern is scored (``hitAtk``)."""

    def __post_init__(self):
        object.__setattr__(self, 'capability', Capability.HIT_ATK)


@dataclass(frozen=True)
class ChainModifier(CaptainEffect):
    """Factor scaling the chain multiplier increment (``chainModifier``)."""

    def __post_init__(self):
        object.__setattr__(self, 'capability', Capability.CHAIN_MODIFIER)

    def __call__(self, unit: UnitTemplate, position: int,
                 current_hp: float, max_hp: float, perc_hp: float,
                 hit: HitKind) -> float:
        return self._evaluate(
            1.0, unit=unit, position=position,
            current_hp=current_hp, max_hp=max_hp, perc_hp=perc_hp,
            hit=hit.display_name,
        )


@dataclass(frozen=True)
class HpMultiplier(CaptainEffect):
    """Multiplier on a unit's HP contribution (``hp``)."""

    def __post_init__(self):
        object.__setattr__(self, 'capability', Capability.HP)

    def __call__(self, unit: UnitTemplate) -> float:
        return self._evaluate(1.0, unit=unit)


@dataclass(frozen=True)
class OrbOverride(CaptainEffect):
    """Replacement for every unit's orb multiplier (``orb``)."""

    def __post_init__(self):
        object.__setattr__(self, 'capability', Capability.ORB)

    def __call__(self, unit: UnitTemplate, orb: float) -> float:
        # On failure the slot keeps its own orb
        return self._evaluate(orb, unit=unit, orb=orb)


# Capability key -> (effect class, variables its formula may reference)
EFFECT_REGISTRY: dict[Capability, tuple[type[CaptainEffect], tuple[str, ...]]] = {
    Capability.ATK: (AttackMultiplier, ATTACK_VARIABLES),
    Capability.HIT_ATK: (ConditionalAttackMultiplier, ATTACK_VARIABLES),
    Capability.CHAIN_MODIFIER: (ChainModifier, CHAIN_VARIABLES),
    Capability.HP: (HpMultiplier, HP_VARIABLES),
    Capability.ORB: (OrbOverride, ORB_VARIABLES),
}


def create_effect(capability: Capability, raw_formula: object) -> CaptainEffect:
    """Factory function to create a captain effect from a raw formula.

    Args:
        capability: Which capability the formula implements
        raw_formula: Number or expression string from the captain table

    Returns:
        CaptainEffect instance of the registered variant

    Raises:
        ValueError: If the capability has no effect variant (``hitModifiers``)
        FormulaError: If the formula cannot be compiled
    """
    if capability not in EFFECT_REGISTRY:
        raise ValueError(f"Unsupported capability: {capability}")
    effect_class, variables = EFFECT_REGISTRY[capability]
    return effect_class(compile_formula(raw_formula, variables))


@dataclass(frozen=True)
class CaptainAbility:
    """Compiled captain ability of the unit in a captain slot.

    Every capability is optional; a missing one means the captain simply does
    not have that effect.
    """
    unit_id: Optional[int] = None
    atk: Optional[AttackMultiplier] = None
    hit_atk: Optional[ConditionalAttackMultiplier] = None
    hit_modifiers: Optional[tuple[HitKind, ...]] = None
    chain_modifier: Optional[ChainModifier] = None
    hp: Optional[HpMultiplier] = None
    orb: Optional[OrbOverride] = None
    warnings: tuple[str, ...] = ()

    @property
    def has_hit_modifiers(self) -> bool:
        return self.hit_modifiers is not None

    def capabilities(self) -> set[Capability]:
        """Capabilities this captain actually defines."""
        present = set()
        for capability, value in (
            (Capability.ATK, self.atk),
            (Capability.HIT_ATK, self.hit_atk),
            (Capability.HIT_MODIFIERS, self.hit_modifiers),
            (Capability.CHAIN_MODIFIER, self.chain_modifier),
            (Capability.HP, self.hp),
            (Capability.ORB, self.orb),
        ):
            if value is not None:
                present.add(capability)
        return present

    def is_empty(self) -> bool:
        return not self.capabilities()

    def drain_failures(self) -> list[str]:
        """Collect the runtime formula failures of every effect, one message each."""
        label = f"Captain {self.unit_id}" if self.unit_id is not None else "Captain"
        messages = []
        for effect in (self.atk, self.hit_atk, self.chain_modifier, self.hp, self.orb):
            if effect is None:
                continue
            for failure in effect.drain_failures():
                messages.append(
                    f"{label}: capability '{effect.capability.value}' failed at runtime "
                    f"({failure}); treated as absent"
                )
        return messages
