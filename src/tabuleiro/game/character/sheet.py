"""Character sheet records read by the rules engine.

These are the persisted shapes owned by the sheet collaborators. The engine
reads them and never writes them back; every calculation returns new values.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tabuleiro.game.character.attributes import AttributeName, Attributes
from tabuleiro.game.character.skills import Skill, SkillName
from tabuleiro.game.rules import RulesInputError


class ArmorType(StrEnum):
    """Armor categories."""

    LEVE = "leve"  # light
    MEDIA = "media"  # medium
    PESADA = "pesada"  # heavy


class CreatureSize(StrEnum):
    """Creature size categories from lineage."""

    MINUSCULO = "minusculo"
    PEQUENO = "pequeno"
    MEDIO = "medio"
    GRANDE = "grande"
    ENORME_1 = "enorme-1"
    ENORME_2 = "enorme-2"
    ENORME_3 = "enorme-3"
    COLOSSAL_1 = "colossal-1"
    COLOSSAL_2 = "colossal-2"
    COLOSSAL_3 = "colossal-3"


class Craft(BaseModel):
    """
    A user-defined craft (profession-like skill).

    Attributes:
        id: Unique craft identifier
        name: Display name (e.g., "Ferraria")
        level: Craft level 0-5, drives the legacy multiplier
        attribute_key: Attribute the craft is tested with
        dice_modifier: Extra dice (may be negative)
        numeric_modifier: Legacy flat modifier
        description: Optional free text
    """

    id: str
    name: str
    level: int = Field(default=0, ge=0, le=5)
    attribute_key: AttributeName
    dice_modifier: int = 0
    numeric_modifier: int = 0
    description: str | None = None


class LuckLevel(BaseModel):
    """Luck state: a level indexing the luck table plus temporary modifiers."""

    level: int = Field(default=0, ge=0)
    value: int = Field(default=0, description="Luck points available")
    dice_modifier: int = 0
    numeric_modifier: int = 0


class SpellcastingAbility(BaseModel):
    """A declared pairing of a casting skill with an attribute and a dice bonus."""

    id: str
    skill: SkillName
    attribute: AttributeName
    casting_bonus: int = 0


class KnownSpell(BaseModel):
    """A spell the character knows."""

    spell_id: str
    name: str
    circle: int = Field(..., ge=1, le=8)
    matrix: str
    spellcasting_skill: SkillName
    notes: str | None = None
    tags: list[str] = Field(default_factory=list)


class ResourcePool(BaseModel):
    """A current/maximum resource such as power points (PP) or spell points (PF)."""

    model_config = ConfigDict(frozen=True)

    current: int = Field(default=0, ge=0)
    maximum: int = Field(default=0, ge=0)
    temporary: int = Field(default=0, ge=0)

    @property
    def is_exhausted(self) -> bool:
        """Check if nothing is left to spend."""
        return self.current + self.temporary <= 0


class ActiveCondition(BaseModel):
    """A condition currently affecting the character."""

    name: str
    stacks: int = Field(default=1, ge=1)


class SpellcastingState(BaseModel):
    """Spellcasting section of the sheet."""

    is_caster: bool = False
    spell_points: ResourcePool = Field(default_factory=ResourcePool)
    abilities: list[SpellcastingAbility] = Field(default_factory=list)
    known_spells: list[KnownSpell] = Field(default_factory=list)
    max_known_spells: int = 0
    known_spells_modifier: int = 0
    mastered_matrices: list[str] = Field(default_factory=list)
    power_per_round_modifier: int = 0

    def find_ability(self, ability_id: str) -> SpellcastingAbility | None:
        """Find a declared spellcasting ability by id."""
        for ability in self.abilities:
            if ability.id == ability_id:
                return ability
        return None


class Character(BaseModel):
    """
    Snapshot of everything the rules engine reads from a character.

    Missing skills are filled in as untrained rule-book defaults so that any
    skill can be rolled.
    """

    name: str
    level: int = Field(default=1, ge=0)
    attributes: Attributes
    skills: dict[SkillName, Skill] = Field(default_factory=dict)
    crafts: list[Craft] = Field(default_factory=list)
    luck: LuckLevel = Field(default_factory=LuckLevel)
    spellcasting: SpellcastingState = Field(default_factory=SpellcastingState)
    power_points: ResourcePool = Field(default_factory=ResourcePool)
    conditions: list[ActiveCondition] = Field(default_factory=list)
    equipped_armor: ArmorType | None = None
    size: CreatureSize = CreatureSize.MEDIO
    is_overloaded: bool = False

    @model_validator(mode="after")
    def _fill_default_skills(self) -> "Character":
        for skill_name in SkillName:
            if skill_name not in self.skills:
                self.skills[skill_name] = Skill.default(skill_name)
        return self

    def get_skill(self, skill_name: SkillName | str) -> Skill:
        """
        Get a skill record by name.

        Raises:
            RulesInputError: If the skill is not in the rule book
        """
        try:
            key = SkillName(skill_name)
        except ValueError:
            raise RulesInputError(f"Unknown skill: {skill_name!r}") from None
        return self.skills[key]

    def find_craft(self, craft_id: str) -> Craft | None:
        """Find a craft by id."""
        for craft in self.crafts:
            if craft.id == craft_id:
                return craft
        return None
