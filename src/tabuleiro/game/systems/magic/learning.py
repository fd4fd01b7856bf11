"""Spell learning chance.

A character learns a spell with a percentage chance built from Mente, the
casting skill, the spell's circle and free-form modifiers. The result is
always between 1% and 99%.
"""

import structlog

from tabuleiro.game.character.attributes import AttributeName, Attributes
from tabuleiro.game.character.sheet import Character
from tabuleiro.game.character.skills import LEARN_SPELL_USE, Skill, SkillName
from tabuleiro.game.rules import RulesInputError
from tabuleiro.game.systems.pools import resolve_skill_modifier

logger = structlog.get_logger(__name__)

# Circle 1 gives +0 instead of +30 for a character's first spell
SPELL_LEARNING_CIRCLE_MODIFIER = {
    1: 30,
    2: 10,
    3: 0,
    4: -10,
    5: -20,
    6: -30,
    7: -50,
    8: -70,
}

SPELL_LEARNING_MIN_CHANCE = 1
SPELL_LEARNING_MAX_CHANCE = 99

LEARNING_ATTRIBUTE_MULTIPLIER = 5


def spell_learning_chance(
    mental: int,
    skill_modifier: int,
    circle: int,
    is_first_spell: bool = False,
    known_spells_modifier: int = 0,
    matrix_modifier: int = 0,
    other_modifiers: int = 0,
) -> int:
    """
    Calculate the chance of learning a spell.

    Formula: Mente x 5 + skill modifier + circle modifier + known spells
    modifier + matrix modifier + other modifiers, clamped to 1-99.

    Args:
        mental: Mente value
        skill_modifier: Casting skill modifier
        circle: Spell circle (1-8)
        is_first_spell: Whether this is the character's first spell
        known_spells_modifier: Modifier from spells already known
        matrix_modifier: Modifier from matrix mastery
        other_modifiers: Anything else

    Returns:
        Learning chance in percent, 1-99

    Raises:
        RulesInputError: If the circle is outside 1-8

    Examples:
        >>> spell_learning_chance(3, 1, 1)
        46
        >>> spell_learning_chance(2, 4, 1, is_first_spell=True)
        14
    """
    if circle not in SPELL_LEARNING_CIRCLE_MODIFIER:
        raise RulesInputError(f"Spell circle must be 1-8, got {circle}")

    circle_modifier = SPELL_LEARNING_CIRCLE_MODIFIER[circle]
    if circle == 1 and is_first_spell:
        circle_modifier = 0

    total = (
        mental * LEARNING_ATTRIBUTE_MULTIPLIER
        + skill_modifier
        + circle_modifier
        + known_spells_modifier
        + matrix_modifier
        + other_modifiers
    )

    return max(SPELL_LEARNING_MIN_CHANCE, min(SPELL_LEARNING_MAX_CHANCE, total))


def learning_skill_modifier(skill: Skill, attributes: Attributes, character_level: int) -> int:
    """
    Resolve the skill modifier used for learning.

    Uses the skill's "Aprender Feitiço" use when present. The resulting dice
    total is taken as a flat percentage modifier.
    """
    return resolve_skill_modifier(skill, attributes, character_level, LEARN_SPELL_USE)


def character_learning_chance(
    character: Character,
    skill_name: SkillName | str,
    circle: int,
    matrix_modifier: int = 0,
    other_modifiers: int = 0,
) -> int:
    """
    Calculate a character's chance of learning a spell with a casting skill.

    The first-spell exception applies while the character knows no spells.
    """
    skill = character.get_skill(skill_name)
    state = character.spellcasting
    is_first_spell = not state.known_spells

    chance = spell_learning_chance(
        mental=character.attributes.value_of(AttributeName.MENTE),
        skill_modifier=learning_skill_modifier(skill, character.attributes, character.level),
        circle=circle,
        is_first_spell=is_first_spell,
        known_spells_modifier=state.known_spells_modifier,
        matrix_modifier=matrix_modifier,
        other_modifiers=other_modifiers,
    )

    logger.debug(
        "learning_chance_calculated",
        character=character.name,
        skill=skill.name.value,
        circle=circle,
        first_spell=is_first_spell,
        chance=chance,
    )
    return chance
