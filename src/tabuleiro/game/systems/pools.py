"""Dice pool construction.

Every test in the game (standard skills, crafts, luck and spellcasting)
turns into a `DicePoolSpec`. The builders share one edge policy per rule
revision:

CURRENT revision
    A raw total of zero or less becomes a penalty roll of exactly two dice,
    keeping the lower. Otherwise at most MAX_POOL_DICE dice are rolled, while
    the formula still shows the uncapped count.

LEGACY revision
    Attribute d20s keep the highest, plus a flat modifier. An attribute of 0
    rolls 2d20 keeping the lowest; a count below one rolls `2 - count` d20
    keeping the lowest, and those take-lowest pools are never capped.
"""

from collections.abc import Mapping
from dataclasses import dataclass

import structlog

from tabuleiro.game.character.attributes import Attributes
from tabuleiro.game.character.sheet import Character, Craft, LuckLevel, SpellcastingAbility
from tabuleiro.game.character.skills import (
    CAST_SPELL_USE,
    CRAFT_SKILL,
    LUCK_SKILL,
    Skill,
    SkillName,
)
from tabuleiro.game.rules import DEFAULT_RULE_REVISION, RuleRevision, RulesInputError
from tabuleiro.game.systems.modifiers import (
    LEGACY_OVERLOAD_PENALTY,
    SituationalFlags,
    aggregate_dice,
    aggregate_numeric,
    condition_dice_penalties,
    situational_dice_penalties,
)
from tabuleiro.game.systems.proficiency import (
    DieSize,
    craft_legacy_modifier,
    die_size_for,
    luck_data_for,
    proficiency_multiplier,
)
from tabuleiro.game.systems.signature import legacy_signature_bonus, signature_bonus

logger = structlog.get_logger(__name__)

# Dice physically rolled at most; larger pools still show their full count
MAX_POOL_DICE = 8

# Penalty rolls always use two dice, keeping the lower
PENALTY_ROLL_DICE = 2

PENALTY_MARKER = "(menor)"


@dataclass(frozen=True)
class DicePoolSpec:
    """
    Description of a pool ready to be rolled.

    Attributes:
        dice_count: Dice actually rolled (always >= 1)
        die_size: Face count of every die in the pool
        is_penalty_roll: Keep only the lower result
        formula_text: Human-readable formula, e.g. "3d10" or "2d10 (menor)"
        raw_dice_count: Computed total before the edge policy
        flat_modifier: Flat bonus added to the kept die (legacy revision)
        revision: Rule revision that produced the pool
    """

    dice_count: int
    die_size: DieSize
    is_penalty_roll: bool
    formula_text: str
    raw_dice_count: int
    flat_modifier: int = 0
    revision: RuleRevision = DEFAULT_RULE_REVISION


# ============================================================================
# Edge policies
# ============================================================================


def _current_pool(raw: int, die_size: DieSize) -> DicePoolSpec:
    if raw <= 0:
        return DicePoolSpec(
            dice_count=PENALTY_ROLL_DICE,
            die_size=die_size,
            is_penalty_roll=True,
            formula_text=f"{PENALTY_ROLL_DICE}{die_size.label} {PENALTY_MARKER}",
            raw_dice_count=raw,
            revision=RuleRevision.CURRENT,
        )

    return DicePoolSpec(
        dice_count=min(raw, MAX_POOL_DICE),
        die_size=die_size,
        is_penalty_roll=False,
        formula_text=f"{raw}{die_size.label}",
        raw_dice_count=raw,
        revision=RuleRevision.CURRENT,
    )


def _legacy_pool(base_dice: int, dice_modifier: int, flat_modifier: int) -> DicePoolSpec:
    take_lowest = False
    if base_dice == 0:
        base_dice = PENALTY_ROLL_DICE
        take_lowest = True

    raw = base_dice + dice_modifier
    count = raw
    if count < 1:
        count = PENALTY_ROLL_DICE - count
        take_lowest = True

    formula = f"{count}{DieSize.D20.label}"
    if take_lowest:
        formula += f" {PENALTY_MARKER}"
    if flat_modifier:
        formula += f"{flat_modifier:+d}"

    return DicePoolSpec(
        dice_count=count if take_lowest else min(count, MAX_POOL_DICE),
        die_size=DieSize.D20,
        is_penalty_roll=take_lowest,
        formula_text=formula,
        raw_dice_count=raw,
        flat_modifier=flat_modifier,
        revision=RuleRevision.LEGACY,
    )


def _log_pool(kind: str, name: str, spec: DicePoolSpec) -> DicePoolSpec:
    logger.debug(
        "pool_built",
        kind=kind,
        name=name,
        formula=spec.formula_text,
        dice_count=spec.dice_count,
        raw_dice_count=spec.raw_dice_count,
        penalty=spec.is_penalty_roll,
        revision=spec.revision.value,
    )
    return spec


# ============================================================================
# Builders
# ============================================================================


def build_skill_pool(
    skill: Skill,
    attributes: Attributes,
    character_level: int,
    flags: SituationalFlags | None = None,
    revision: RuleRevision = DEFAULT_RULE_REVISION,
) -> DicePoolSpec:
    """
    Build the pool for a standard skill test.

    Current revision: attribute + dice modifiers + situational deltas +
    signature dice, of the die size for the skill's rank.

    Legacy revision: attribute + dice modifiers d20, keep highest, plus
    attribute x proficiency multiplier + legacy signature + numeric
    modifiers (and the overload penalty).

    Args:
        skill: Skill record
        attributes: Character attributes
        character_level: Character level (drives the signature bonus)
        flags: Situational context, defaults to no penalties
        revision: Rule revision

    Returns:
        DicePoolSpec for the test

    Examples:
        >>> skill = Skill(name="acrobacia", key_attribute="agilidade", proficiency_level="versado")
        >>> build_skill_pool(skill, Attributes.uniform(2), 1).formula_text
        '2d10'
    """
    flags = flags or SituationalFlags()
    attribute_value = attributes.value_of(skill.key_attribute)
    extras = situational_dice_penalties(
        skill.name, skill.key_attribute, skill.proficiency_level, flags, revision
    )
    dice_modifier = aggregate_dice(skill.modifiers, extras)

    if revision is RuleRevision.LEGACY:
        flat = attribute_value * proficiency_multiplier(skill.proficiency_level)
        flat += aggregate_numeric(skill.modifiers)
        if skill.is_signature:
            flat += legacy_signature_bonus(character_level, skill.metadata.is_combat)
        if flags.is_overloaded and skill.metadata.has_load_penalty:
            flat += LEGACY_OVERLOAD_PENALTY
        spec = _legacy_pool(attribute_value, dice_modifier, flat)
    else:
        raw = attribute_value + dice_modifier
        if skill.is_signature:
            raw += signature_bonus(character_level)
        spec = _current_pool(raw, die_size_for(skill.proficiency_level))

    return _log_pool("skill", skill.name.value, spec)


def build_craft_pool(
    craft: Craft,
    skill: Skill,
    attributes: Attributes,
    character_level: int,
    revision: RuleRevision = DEFAULT_RULE_REVISION,
) -> DicePoolSpec:
    """
    Build the pool for a craft test.

    The die size comes from the wrapping craft skill's rank. The craft's own
    level only feeds the legacy flat modifier.
    """
    attribute_value = attributes.value_of(craft.attribute_key)

    if revision is RuleRevision.LEGACY:
        flat = craft_legacy_modifier(attribute_value, craft.level, craft.numeric_modifier)
        if skill.is_signature:
            flat += legacy_signature_bonus(character_level, skill.metadata.is_combat)
        spec = _legacy_pool(1, craft.dice_modifier, flat)
    else:
        raw = attribute_value + craft.dice_modifier
        if skill.is_signature:
            raw += signature_bonus(character_level)
        spec = _current_pool(raw, die_size_for(skill.proficiency_level))

    return _log_pool("craft", craft.name, spec)


def build_luck_pool(
    luck: LuckLevel,
    skill: Skill | None,
    character_level: int,
    revision: RuleRevision = DEFAULT_RULE_REVISION,
) -> DicePoolSpec:
    """Build the pool for a luck test from the luck table."""
    data = luck_data_for(luck.level)
    is_signature = skill is not None and skill.is_signature

    if revision is RuleRevision.LEGACY:
        flat = data.bonus + luck.numeric_modifier
        if is_signature:
            flat += legacy_signature_bonus(character_level, is_combat=False)
        spec = _legacy_pool(data.dice, luck.dice_modifier, flat)
    else:
        raw = data.dice + luck.dice_modifier
        if is_signature:
            raw += signature_bonus(character_level)
        spec = _current_pool(raw, data.die_size)

    return _log_pool("luck", LUCK_SKILL.value, spec)


def resolve_skill_modifier(
    skill: Skill,
    attributes: Attributes,
    character_level: int,
    use_name: str | None = None,
) -> int:
    """
    Resolve a skill's dice total through an optional named custom use.

    When the skill declares a use named `use_name`, that use's attribute,
    dice modifiers and bonus replace the skill's general ones. Otherwise the
    skill's own key attribute and dice modifiers are used. The signature
    bonus applies either way.

    Args:
        skill: Skill record
        attributes: Character attributes
        character_level: Character level
        use_name: Exact name of the custom use to look up

    Returns:
        The skill's dice total
    """
    use = skill.find_use(use_name) if use_name else None

    if use is not None:
        total = attributes.value_of(use.key_attribute)
        total += aggregate_dice(use.modifiers) + use.bonus
    else:
        total = attributes.value_of(skill.key_attribute)
        total += aggregate_dice(skill.modifiers)

    if skill.is_signature:
        total += signature_bonus(character_level)

    return total


def build_casting_pool(
    ability: SpellcastingAbility,
    skills_by_name: Mapping[SkillName, Skill],
    attributes: Attributes,
    character_level: int = 0,
    revision: RuleRevision = DEFAULT_RULE_REVISION,
) -> DicePoolSpec:
    """
    Build the pool for a spellcasting test.

    Pool = attribute(ability.attribute) + casting skill modifier +
    ability.casting_bonus, where the skill modifier resolves through the
    skill's "Conjurar Feitiço" use when it has one.

    Legacy revision: attribute d20 plus the dice modifiers of the use (or the
    skill), keep highest, with a flat attribute x proficiency multiplier +
    numeric modifiers + use bonus + casting bonus + legacy signature bonus.

    Raises:
        RulesInputError: If the ability names a skill the character lacks
    """
    skill = skills_by_name.get(ability.skill)
    if skill is None:
        raise RulesInputError(
            f"Spellcasting ability {ability.id!r} uses missing skill {ability.skill!r}"
        )

    attribute_value = attributes.value_of(ability.attribute)

    if revision is RuleRevision.LEGACY:
        use = skill.find_use(CAST_SPELL_USE)
        modifiers = use.modifiers if use is not None else skill.modifiers
        flat = attribute_value * proficiency_multiplier(skill.proficiency_level)
        flat += aggregate_numeric(modifiers) + ability.casting_bonus
        if use is not None:
            flat += use.bonus
        if skill.is_signature:
            flat += legacy_signature_bonus(character_level, skill.metadata.is_combat)
        spec = _legacy_pool(attribute_value, aggregate_dice(modifiers), flat)
    else:
        skill_modifier = resolve_skill_modifier(
            skill, attributes, character_level, CAST_SPELL_USE
        )
        dice = attribute_value + skill_modifier + ability.casting_bonus
        spec = _current_pool(dice, die_size_for(skill.proficiency_level))

    return _log_pool("casting", ability.id, spec)


# ============================================================================
# Character dispatch
# ============================================================================


def selected_craft(skill: Skill, crafts: list[Craft]) -> Craft | None:
    """Get the craft a craft skill points at, if one is selected."""
    if skill.selected_craft_id is None:
        return None
    for craft in crafts:
        if craft.id == skill.selected_craft_id:
            return craft
    return None


def situational_flags_for(
    character: Character, has_required_instrument: bool = True
) -> SituationalFlags:
    """Build situational flags from a character snapshot."""
    return SituationalFlags(
        is_overloaded=character.is_overloaded,
        equipped_armor_type=character.equipped_armor,
        has_required_instrument=has_required_instrument,
        creature_size=character.size,
        condition_penalties=condition_dice_penalties(character.conditions),
    )


def build_character_skill_pool(
    character: Character,
    skill_name: SkillName | str,
    has_required_instrument: bool = True,
    revision: RuleRevision = DEFAULT_RULE_REVISION,
) -> DicePoolSpec | None:
    """
    Build the pool for any skill of a character.

    Dispatches to the luck, craft or standard builder depending on the
    skill.

    Args:
        character: Character snapshot
        skill_name: Skill to test
        has_required_instrument: Whether the needed tools are at hand
        revision: Rule revision

    Returns:
        DicePoolSpec, or None for a craft skill with no craft selected

    Raises:
        RulesInputError: If the skill is not in the rule book
    """
    skill = character.get_skill(skill_name)
    name = skill.name

    if name is LUCK_SKILL:
        return build_luck_pool(character.luck, skill, character.level, revision)

    if name is CRAFT_SKILL:
        craft = selected_craft(skill, character.crafts)
        if craft is None:
            logger.debug("craft_not_selected", character=character.name)
            return None
        return build_craft_pool(craft, skill, character.attributes, character.level, revision)

    flags = situational_flags_for(character, has_required_instrument)
    return build_skill_pool(skill, character.attributes, character.level, flags, revision)
