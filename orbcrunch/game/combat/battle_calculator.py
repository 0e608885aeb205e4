"""
Battle calculation system for damage estimation.

This module combines the damage accumulator, the scenario search and the HP
aggregator into the consolidated estimate shown to the player, plus the
per-type breakdown behind it. Calculations are read-only: they never mutate
the team or the global state.
"""
from typing import TYPE_CHECKING

from ...core.data.data_structures import CrunchResult, DetailsResult, ScenarioResult
from ...core.data.game_enums import ELEMENTAL_TYPES, UnitType
from .damage_accumulator import accumulate
from .hp_aggregator import total_hp
from .scenario_search import search

if TYPE_CHECKING:
    from ...core.engine.session import CrunchSession, GlobalState, TeamState


class BattleCalculator:
    """Calculates best-case damage estimates for a roster."""

    @staticmethod
    def best_scenario(team: "TeamState", state: "GlobalState", target: UnitType) -> ScenarioResult:
        """
        Winning scenario for one elemental type.

        Args:
            team: Roster and captain abilities
            state: Global scalars
            target: Elemental type of the hypothetical enemy

        Returns:
            ScenarioResult of the best-scoring accuracy sequence
        """
        captains = team.captains()
        entries = accumulate(team, state, target, captains)
        return search(entries, captains, state)

    @staticmethod
    def crunch_for_type(team: "TeamState", state: "GlobalState", target: UnitType) -> int:
        """Best-case damage against one elemental type."""
        return BattleCalculator.best_scenario(team, state, target).total

    @staticmethod
    def crunch(team: "TeamState", state: "GlobalState") -> CrunchResult:
        """
        Calculate the consolidated estimate for every elemental type.

        Returns:
            CrunchResult with one damage figure per type and the roster HP
        """
        damage = {
            unit_type: BattleCalculator.crunch_for_type(team, state, unit_type)
            for unit_type in ELEMENTAL_TYPES
        }
        return CrunchResult(damage=damage, hp=total_hp(team))

    @staticmethod
    def details(team: "TeamState", state: "GlobalState", target: "UnitType | str") -> DetailsResult:
        """Breakdown of the winning scenario for ``target`` (type names are case-insensitive)."""
        scenario = BattleCalculator.best_scenario(team, state, UnitType.from_name(target))
        return DetailsResult.from_scenario(scenario)

    @staticmethod
    def crunch_session(session: "CrunchSession") -> CrunchResult:
        return BattleCalculator.crunch(session.team, session.state)
