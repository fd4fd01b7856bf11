"""Modifier aggregation for dice pools.

Merges every source that shifts a pool into one signed delta:

- explicit skill modifiers (dice modifiers and legacy numeric modifiers)
- situational penalties (overload, armor, missing instrument, missing
  proficiency)
- active-condition dice penalties for the skill's key attribute
- creature-size dice modifiers

Every source contributes at most one signed delta and all deltas are summed,
so the order in which they are applied never matters.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from tabuleiro.game.character.attributes import (
    MENTAL_ATTRIBUTES,
    PHYSICAL_ATTRIBUTES,
    AttributeName,
)
from tabuleiro.game.character.sheet import ActiveCondition, ArmorType, CreatureSize
from tabuleiro.game.character.skills import (
    Modifier,
    ProficiencyLevel,
    SkillName,
    get_skill_metadata,
)
from tabuleiro.game.rules import DEFAULT_RULE_REVISION, RuleRevision

# Situational dice penalties (current revision)
OVERLOAD_DICE_PENALTY = -2
MISSING_INSTRUMENT_DICE_PENALTY = -2
MISSING_PROFICIENCY_DICE_PENALTY = -2

ARMOR_DICE_PENALTIES = {
    ArmorType.LEVE: 0,
    ArmorType.MEDIA: -1,
    ArmorType.PESADA: -2,
}

# Legacy revision: overload is a flat penalty on the total
LEGACY_OVERLOAD_PENALTY = -5

# Map key that applies to every test
ALL_TESTS = "todos"

# Skill dice modifiers by creature size
# acrobacia, atletismo, furtividade, reflexo, tenacidade
_SIZE_ROWS = {
    CreatureSize.MINUSCULO: (2, -2, 2, 2, -2),
    CreatureSize.PEQUENO: (1, -1, 1, 1, -1),
    CreatureSize.MEDIO: (0, 0, 0, 0, 0),
    CreatureSize.GRANDE: (-1, 1, -1, -1, 1),
    CreatureSize.ENORME_1: (-2, 2, -2, -2, 2),
    CreatureSize.ENORME_2: (-2, 2, -2, -2, 2),
    CreatureSize.ENORME_3: (-2, 2, -2, -2, 2),
    CreatureSize.COLOSSAL_1: (-3, 3, -3, -3, 3),
    CreatureSize.COLOSSAL_2: (-3, 3, -3, -3, 3),
    CreatureSize.COLOSSAL_3: (-3, 3, -3, -3, 3),
}

SIZE_AFFECTED_SKILLS = (
    SkillName.ACROBACIA,
    SkillName.ATLETISMO,
    SkillName.FURTIVIDADE,
    SkillName.REFLEXO,
    SkillName.TENACIDADE,
)

SIZE_SKILL_DICE_MODIFIERS = {
    size: dict(zip(SIZE_AFFECTED_SKILLS, row, strict=True)) for size, row in _SIZE_ROWS.items()
}


@dataclass(frozen=True)
class ConditionDicePenalty:
    """Dice penalty a condition imposes while active."""

    targets: tuple[str, ...]
    modifier: int
    scales_with_stacks: bool = False


# Conditions without an entry impose no dice penalty
CONDITION_DICE_PENALTIES = {
    "abalado": ConditionDicePenalty((ALL_TESTS,), -1, scales_with_stacks=True),
    "fraco": ConditionDicePenalty((AttributeName.AGILIDADE, AttributeName.FORCA), -1),
    "exausto": ConditionDicePenalty(
        (AttributeName.AGILIDADE, AttributeName.FORCA), -1, scales_with_stacks=True
    ),
    "esgotado": ConditionDicePenalty((AttributeName.CONSTITUICAO, AttributeName.PRESENCA), -1),
    "perturbado": ConditionDicePenalty(
        (AttributeName.INFLUENCIA, AttributeName.MENTE), -1, scales_with_stacks=True
    ),
    "desequilibrado": ConditionDicePenalty(PHYSICAL_ATTRIBUTES, -1),
    "perplexo": ConditionDicePenalty(MENTAL_ATTRIBUTES, -1),
    "envenenado": ConditionDicePenalty((ALL_TESTS,), -1),
    "doente": ConditionDicePenalty((ALL_TESTS,), -1),
}


@dataclass(frozen=True)
class SituationalFlags:
    """
    Situational context supplied by the caller when building a pool.

    Attributes:
        is_overloaded: Character carries more than its capacity
        equipped_armor_type: Armor worn, if any
        has_required_instrument: Whether the tools a skill needs are at hand
        creature_size: Size category from lineage
        condition_penalties: Dice penalty map from active conditions
    """

    is_overloaded: bool = False
    equipped_armor_type: ArmorType | None = None
    has_required_instrument: bool = True
    creature_size: CreatureSize = CreatureSize.MEDIO
    condition_penalties: Mapping[str, int] = field(default_factory=dict)


def condition_dice_penalties(conditions: Iterable[ActiveCondition]) -> dict[str, int]:
    """
    Fold active conditions into a dice penalty map.

    Args:
        conditions: Conditions currently on the character

    Returns:
        Map of target ('todos' or an attribute name) to summed dice delta

    Examples:
        >>> condition_dice_penalties([ActiveCondition(name="abalado", stacks=3)])
        {'todos': -3}
    """
    penalties: dict[str, int] = {}

    for condition in conditions:
        info = CONDITION_DICE_PENALTIES.get(condition.name)
        if info is None:
            continue

        modifier = info.modifier * condition.stacks if info.scales_with_stacks else info.modifier
        for target in info.targets:
            key = str(target)
            penalties[key] = penalties.get(key, 0) + modifier

    return penalties


def dice_penalty_for_attribute(
    penalties: Mapping[str, int], attribute: AttributeName | str | None
) -> int:
    """Get the total condition penalty for an attribute, 'todos' included."""
    total = penalties.get(ALL_TESTS, 0)
    if attribute is not None:
        total += penalties.get(str(attribute), 0)
    return total


def situational_dice_penalties(
    skill_name: SkillName | str,
    key_attribute: AttributeName | str | None,
    proficiency: ProficiencyLevel | str,
    flags: SituationalFlags,
    revision: RuleRevision = DEFAULT_RULE_REVISION,
) -> dict[str, int]:
    """
    Compute the situational dice deltas for one skill test.

    Only sources that apply produce an entry. Under the legacy revision
    overload is a flat penalty instead, so it never appears here.

    Args:
        skill_name: Skill being tested
        key_attribute: Attribute the test uses
        proficiency: Character's rank in the skill
        flags: Caller-supplied situational context
        revision: Rule revision

    Returns:
        Map of source name to signed dice delta
    """
    meta = get_skill_metadata(skill_name)
    penalties: dict[str, int] = {}

    if meta.has_load_penalty:
        if flags.is_overloaded and revision is RuleRevision.CURRENT:
            penalties["overload"] = OVERLOAD_DICE_PENALTY
        if flags.equipped_armor_type is not None:
            armor = ARMOR_DICE_PENALTIES[flags.equipped_armor_type]
            if armor:
                penalties["armor"] = armor

    if meta.requires_instrument and not flags.has_required_instrument:
        penalties["instrument"] = MISSING_INSTRUMENT_DICE_PENALTY

    if meta.requires_proficiency and ProficiencyLevel(proficiency) is ProficiencyLevel.LEIGO:
        penalties["proficiency"] = MISSING_PROFICIENCY_DICE_PENALTY

    condition = dice_penalty_for_attribute(flags.condition_penalties, key_attribute)
    if condition:
        penalties["condition"] = condition

    size = SIZE_SKILL_DICE_MODIFIERS[flags.creature_size].get(SkillName(skill_name), 0)
    if size:
        penalties["size"] = size

    return penalties


def aggregate_dice(modifiers: Iterable[Modifier], extras: Mapping[str, int] | None = None) -> int:
    """Sum dice modifiers plus situational dice deltas."""
    total = sum(m.value for m in modifiers if m.affects_dice)
    if extras:
        total += sum(extras.values())
    return total


def aggregate_numeric(modifiers: Iterable[Modifier]) -> int:
    """Sum the legacy flat numeric modifiers."""
    return sum(m.value for m in modifiers if not m.affects_dice)
