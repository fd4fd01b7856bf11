"""Signature skill bonus.

A character designates one signature skill. In the current revision it gains
bonus dice from character level; the legacy revision gave a flat bonus.
"""

import math

SIGNATURE_MAX_BONUS_DICE = 3
SIGNATURE_LEVELS_PER_DIE = 5

# Legacy combat skills earned their flat bonus at a third of the rate
LEGACY_COMBAT_SIGNATURE_DIVISOR = 3


def signature_bonus(character_level: int) -> int:
    """
    Calculate signature bonus dice for a character level.

    Formula: min(3, ceil(level / 5)), never negative

    Examples:
        >>> signature_bonus(0)
        0
        >>> signature_bonus(6)
        2
        >>> signature_bonus(30)
        3
    """
    if character_level <= 0:
        return 0
    return min(SIGNATURE_MAX_BONUS_DICE, math.ceil(character_level / SIGNATURE_LEVELS_PER_DIE))


def legacy_signature_bonus(character_level: int, is_combat: bool) -> int:
    """Flat legacy bonus: the level, or a third of it for combat skills."""
    if character_level <= 0:
        return 0
    if is_combat:
        return character_level // LEGACY_COMBAT_SIGNATURE_DIVISOR
    return character_level
