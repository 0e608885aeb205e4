"""Compilation of raw captain ability records.

A raw record maps capability keys (``atk``, ``hitAtk``, ``hitModifiers``,
``chainModifier``, ``hp``, ``orb``) to formulas. Compilation never fails:
a formula that is missing or cannot be parsed is left out of the resulting
:class:`CaptainAbility` and described in its ``warnings`` so the ability
table maintainer can fix it.
"""

from typing import TYPE_CHECKING, Any, Optional

from ...core.data.game_enums import HIT_SEQUENCE_LENGTH, Capability, HitKind
from ...core.errors import FormulaError, InvalidHitKindError
from .effects import CaptainAbility, create_effect

if TYPE_CHECKING:
    from ...core.data.data_structures import RosterSlot
    from ...core.data.unit_database import UnitDatabase

# CaptainAbility field holding each capability
_FIELD_NAMES = {
    Capability.ATK: "atk",
    Capability.HIT_ATK: "hit_atk",
    Capability.HIT_MODIFIERS: "hit_modifiers",
    Capability.CHAIN_MODIFIER: "chain_modifier",
    Capability.HP: "hp",
    Capability.ORB: "orb",
}


def parse_hit_sequence(raw: Any) -> tuple[HitKind, ...]:
    """Parse a ``hitModifiers`` list into exactly six hit kinds.

    Raises:
        InvalidHitKindError: If an entry is not a known accuracy name
        ValueError: If the value is not a list of six entries
    """
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"hitModifiers must be a list, got {type(raw).__name__}")
    if len(raw) != HIT_SEQUENCE_LENGTH:
        raise ValueError(f"hitModifiers must have {HIT_SEQUENCE_LENGTH} entries, got {len(raw)}")
    return tuple(HitKind.from_name(entry) for entry in raw)


def compile_captain_ability(record: Optional[dict[str, Any]],
                            unit_id: Optional[int] = None) -> Optional[CaptainAbility]:
    """Compile a raw captain record into a CaptainAbility.

    Args:
        record: Raw capability formulas, or None when the unit has no entry
        unit_id: Identifier of the captain, used in warning messages

    Returns:
        The compiled ability, or None when there is no record
    """
    if record is None:
        return None

    label = f"Captain {unit_id}" if unit_id is not None else "Captain"
    values: dict[str, Any] = {}
    warnings: list[str] = []

    for key, raw in record.items():
        try:
            capability = Capability(key)
        except ValueError:
            warnings.append(f"{label}: unknown capability '{key}' ignored")
            continue

        if raw is None:
            warnings.append(f"{label}: capability '{key}' has no formula and was skipped")
            continue

        if capability == Capability.HIT_MODIFIERS:
            try:
                values[_FIELD_NAMES[capability]] = parse_hit_sequence(raw)
            except (InvalidHitKindError, ValueError) as e:
                warnings.append(f"{label}: hitModifiers skipped ({e})")
            continue

        try:
            values[_FIELD_NAMES[capability]] = create_effect(capability, raw)
        except FormulaError as e:
            warnings.append(f"{label}: capability '{key}' skipped ({e})")

    if Capability.HIT_ATK.value in record and "hit_modifiers" not in values and "hit_atk" in values:
        warnings.append(f"{label}: hitAtk has no valid hitModifiers and will never apply")

    return CaptainAbility(unit_id=unit_id, warnings=tuple(warnings), **values)


def derive_captain_ability(database: "UnitDatabase",
                           slot: Optional["RosterSlot"]) -> Optional[CaptainAbility]:
    """Captain ability for the occupant of a captain slot.

    Returns None for a vacant slot or a unit without a captain record.
    """
    if slot is None:
        return None
    record = database.get_captain_record(slot.unit)
    return compile_captain_ability(record, unit_id=slot.unit.unit_id)
