"""Proficiency, craft and luck lookup tables.

Pure table lookups shared by every pool builder:
- proficiency rank -> die size (current revision)
- proficiency rank -> multiplier (legacy revision)
- craft level -> multiplier
- luck level -> dice, die size and flat bonus
"""

from dataclasses import dataclass
from enum import IntEnum

from tabuleiro.game.character.skills import ProficiencyLevel
from tabuleiro.game.rules import RulesInputError


class DieSize(IntEnum):
    """Face count of the dice in a pool."""

    D6 = 6
    D8 = 8
    D10 = 10
    D12 = 12
    D20 = 20  # legacy revision only

    @property
    def label(self) -> str:
        """Dice notation suffix, e.g. 'd10'."""
        return f"d{self.value}"

    def __str__(self) -> str:
        return self.label


# ============================================================================
# Tables
# ============================================================================

PROFICIENCY_DIE_SIZES = {
    ProficiencyLevel.LEIGO: DieSize.D6,
    ProficiencyLevel.ADEPTO: DieSize.D8,
    ProficiencyLevel.VERSADO: DieSize.D10,
    ProficiencyLevel.MESTRE: DieSize.D12,
}

PROFICIENCY_MULTIPLIERS = {
    ProficiencyLevel.LEIGO: 0,
    ProficiencyLevel.ADEPTO: 1,
    ProficiencyLevel.VERSADO: 2,
    ProficiencyLevel.MESTRE: 3,
}

CRAFT_MULTIPLIERS = {
    0: 0,
    1: 1,
    2: 1,
    3: 2,
    4: 2,
    5: 3,
}

# level: (dice, die size, flat bonus)
LUCK_TABLE = {
    0: (1, DieSize.D6, 0),
    1: (2, DieSize.D6, 0),
    2: (2, DieSize.D8, 2),
    3: (3, DieSize.D8, 3),
    4: (3, DieSize.D10, 6),
    5: (4, DieSize.D10, 8),
    6: (4, DieSize.D12, 12),
    7: (5, DieSize.D12, 15),
}

LUCK_TABLE_MAX_LEVEL = max(LUCK_TABLE)


@dataclass(frozen=True)
class LuckData:
    """Base luck roll for a luck level."""

    dice: int
    die_size: DieSize
    bonus: int


# ============================================================================
# Lookups
# ============================================================================


def die_size_for(proficiency_level: ProficiencyLevel | str) -> DieSize:
    """
    Get the die size rolled at a proficiency rank.

    Args:
        proficiency_level: Skill proficiency rank

    Returns:
        d6 (leigo), d8 (adepto), d10 (versado) or d12 (mestre)

    Raises:
        RulesInputError: If the rank is not one of the four ranks
    """
    try:
        return PROFICIENCY_DIE_SIZES[ProficiencyLevel(proficiency_level)]
    except ValueError:
        raise RulesInputError(f"Unknown proficiency level: {proficiency_level!r}") from None


def proficiency_multiplier(proficiency_level: ProficiencyLevel | str) -> int:
    """
    Get the legacy flat multiplier for a proficiency rank.

    Examples:
        >>> proficiency_multiplier(ProficiencyLevel.VERSADO)
        2
    """
    try:
        return PROFICIENCY_MULTIPLIERS[ProficiencyLevel(proficiency_level)]
    except ValueError:
        raise RulesInputError(f"Unknown proficiency level: {proficiency_level!r}") from None


def craft_multiplier_for(level: int) -> int:
    """
    Get the multiplier for a craft level.

    Levels 1-2 give x1, 3-4 give x2 and 5 gives x3.

    Raises:
        RulesInputError: If the level is outside 0-5
    """
    if level not in CRAFT_MULTIPLIERS:
        raise RulesInputError(f"Craft level must be 0-5, got {level}")
    return CRAFT_MULTIPLIERS[level]


def craft_legacy_modifier(attribute_value: int, level: int, numeric_modifier: int = 0) -> int:
    """
    Calculate the legacy flat craft modifier.

    Formula: attribute x craft multiplier + numeric modifier

    Examples:
        >>> craft_legacy_modifier(3, 3)
        6
        >>> craft_legacy_modifier(4, 3, 2)
        10
    """
    return attribute_value * craft_multiplier_for(level) + numeric_modifier


def luck_data_for(level: int) -> LuckData:
    """
    Get the base luck roll for a luck level.

    Levels 0-7 come from the luck table. Above 7 the roll grows linearly:
    one die per level, a flat bonus of three per level, and the die size of
    the table's top entry.

    Raises:
        RulesInputError: If the level is negative
    """
    if level < 0:
        raise RulesInputError(f"Luck level cannot be negative, got {level}")

    if level in LUCK_TABLE:
        dice, die_size, bonus = LUCK_TABLE[level]
        return LuckData(dice=dice, die_size=die_size, bonus=bonus)

    top_die = LUCK_TABLE[LUCK_TABLE_MAX_LEVEL][1]
    return LuckData(dice=level, die_size=top_die, bonus=level * 3)
