"""Tabuleiro do Caos rules engine."""

from tabuleiro.game.rules import RuleRevision, RulesInputError
from tabuleiro.game.systems import (
    DicePoolResult,
    DicePoolSpec,
    build_casting_pool,
    build_craft_pool,
    build_luck_pool,
    build_skill_pool,
    resolve_pool,
)
from tabuleiro.game.systems.magic import (
    channel_mana,
    power_per_round,
    spell_circle_cost,
    spell_learning_chance,
)

__version__ = "0.2.0"

__all__ = [
    "RuleRevision",
    "RulesInputError",
    "DicePoolResult",
    "DicePoolSpec",
    "build_casting_pool",
    "build_craft_pool",
    "build_luck_pool",
    "build_skill_pool",
    "resolve_pool",
    "channel_mana",
    "power_per_round",
    "spell_circle_cost",
    "spell_learning_chance",
]
