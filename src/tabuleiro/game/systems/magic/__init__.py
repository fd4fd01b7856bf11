"""Magic systems for Tabuleiro: spell economy and spell learning."""

from .economy import (
    CastBlockReason,
    CastCheck,
    CastOutcome,
    apply_channel_mana,
    can_cast,
    cast_spell,
    channel_mana,
    max_spell_points,
    power_per_round,
    spell_attack_bonus,
    spell_circle_cost,
    spell_difficulty,
    spell_pp_cost,
)
from .learning import (
    character_learning_chance,
    learning_skill_modifier,
    spell_learning_chance,
)

__all__ = [
    "CastBlockReason",
    "CastCheck",
    "CastOutcome",
    "apply_channel_mana",
    "can_cast",
    "cast_spell",
    "channel_mana",
    "max_spell_points",
    "power_per_round",
    "spell_attack_bonus",
    "spell_circle_cost",
    "spell_difficulty",
    "spell_pp_cost",
    "character_learning_chance",
    "learning_skill_modifier",
    "spell_learning_chance",
]
