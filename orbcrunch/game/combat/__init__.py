"""Damage crunching components.

This package contains the core damage logic with clear separation of concerns:
- multipliers.py: Type effectiveness, chain increments and hit bonus ratios
- damage_accumulator.py: Per-unit contributions for one elemental type
- chain_engine.py: Per-hit damage along one accuracy sequence
- scenario_search.py: Candidate sequences and best-scenario selection
- hp_aggregator.py: Roster HP with captain multipliers
- battle_calculator.py: Consolidated estimate and details breakdown
"""

from .battle_calculator import BattleCalculator
from .chain_engine import compute_hit_damage, run_chain
from .damage_accumulator import accumulate
from .hp_aggregator import total_hp
from .multipliers import chain_increment, next_chain_multiplier, type_multiplier
from .scenario_search import candidate_sequences, search

__all__ = [
    "BattleCalculator",
    "compute_hit_damage",
    "run_chain",
    "accumulate",
    "total_hp",
    "chain_increment",
    "next_chain_multiplier",
    "type_multiplier",
    "candidate_sequences",
    "search",
]
