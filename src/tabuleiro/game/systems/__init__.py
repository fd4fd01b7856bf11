"""Rules systems: tables, modifiers, pools and dice."""

from .dice import DicePoolResult, RandomSource, RollRecord, RollSink, resolve_pool
from .history import RollHistory
from .modifiers import SituationalFlags, aggregate_dice, aggregate_numeric
from .pools import (
    DicePoolSpec,
    build_casting_pool,
    build_character_skill_pool,
    build_craft_pool,
    build_luck_pool,
    build_skill_pool,
)
from .proficiency import DieSize, craft_multiplier_for, die_size_for, luck_data_for
from .signature import signature_bonus

__all__ = [
    "DicePoolResult",
    "RandomSource",
    "RollRecord",
    "RollSink",
    "resolve_pool",
    "RollHistory",
    "SituationalFlags",
    "aggregate_dice",
    "aggregate_numeric",
    "DicePoolSpec",
    "build_casting_pool",
    "build_character_skill_pool",
    "build_craft_pool",
    "build_luck_pool",
    "build_skill_pool",
    "DieSize",
    "craft_multiplier_for",
    "die_size_for",
    "luck_data_for",
    "signature_bonus",
]
