"""Character records: attributes, skills and the sheet snapshot."""

from .attributes import ATTRIBUTE_NAMES, AttributeName, Attributes
from .loader import SheetLoadError, SheetValidationError, load_character_sheet
from .sheet import (
    ActiveCondition,
    ArmorType,
    Character,
    Craft,
    CreatureSize,
    KnownSpell,
    LuckLevel,
    ResourcePool,
    SpellcastingAbility,
    SpellcastingState,
)
from .skills import (
    CAST_SPELL_USE,
    LEARN_SPELL_USE,
    SKILL_METADATA,
    CustomUse,
    Modifier,
    ModifierKind,
    ProficiencyLevel,
    Skill,
    SkillMetadata,
    SkillName,
    get_skill_metadata,
)

__all__ = [
    "ATTRIBUTE_NAMES",
    "AttributeName",
    "Attributes",
    "SheetLoadError",
    "SheetValidationError",
    "load_character_sheet",
    "ActiveCondition",
    "ArmorType",
    "Character",
    "Craft",
    "CreatureSize",
    "KnownSpell",
    "LuckLevel",
    "ResourcePool",
    "SpellcastingAbility",
    "SpellcastingState",
    "CAST_SPELL_USE",
    "LEARN_SPELL_USE",
    "SKILL_METADATA",
    "CustomUse",
    "Modifier",
    "ModifierKind",
    "ProficiencyLevel",
    "Skill",
    "SkillMetadata",
    "SkillName",
    "get_skill_metadata",
]
