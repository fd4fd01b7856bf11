"""Skills, proficiency ranks and modifiers for the Tabuleiro rules engine.

Defines the 33 rule-book skills with their static metadata flags, the four
proficiency ranks, and the record shapes a skill carries (modifiers and named
custom uses).
"""

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tabuleiro.game.character.attributes import AttributeName
from tabuleiro.game.rules import RulesInputError


class ProficiencyLevel(StrEnum):
    """Skill proficiency ranks, from untrained to master."""

    LEIGO = "leigo"  # lay
    ADEPTO = "adepto"  # adept
    VERSADO = "versado"  # versed
    MESTRE = "mestre"  # master

    @property
    def rank(self) -> int:
        """Position of this rank in the total ordering (0-3)."""
        return _PROFICIENCY_ORDER.index(self)

    def __lt__(self, other: object) -> bool:
        if isinstance(other, ProficiencyLevel):
            return self.rank < other.rank
        return NotImplemented

    def __le__(self, other: object) -> bool:
        if isinstance(other, ProficiencyLevel):
            return self.rank <= other.rank
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        if isinstance(other, ProficiencyLevel):
            return self.rank > other.rank
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        if isinstance(other, ProficiencyLevel):
            return self.rank >= other.rank
        return NotImplemented


_PROFICIENCY_ORDER = (
    ProficiencyLevel.LEIGO,
    ProficiencyLevel.ADEPTO,
    ProficiencyLevel.VERSADO,
    ProficiencyLevel.MESTRE,
)

PROFICIENCY_LEVELS = list(_PROFICIENCY_ORDER)


class SkillName(StrEnum):
    """Rule-book skills."""

    ACERTO = "acerto"
    ACROBACIA = "acrobacia"
    ADESTRAMENTO = "adestramento"
    ARCANO = "arcano"
    ARTE = "arte"
    ATLETISMO = "atletismo"
    CONDUCAO = "conducao"
    DESTREZA = "destreza"
    DETERMINACAO = "determinacao"
    ENGANACAO = "enganacao"
    ESTRATEGIA = "estrategia"
    FURTIVIDADE = "furtividade"
    HISTORIA = "historia"
    INICIATIVA = "iniciativa"
    INSTRUCAO = "instrucao"
    INTIMIDACAO = "intimidacao"
    INVESTIGACAO = "investigacao"
    LUTA = "luta"
    MEDICINA = "medicina"
    NATUREZA = "natureza"
    OFICIO = "oficio"
    PERCEPCAO = "percepcao"
    PERFORMANCE = "performance"
    PERSPICACIA = "perspicacia"
    PERSUASAO = "persuasao"
    RASTREAMENTO = "rastreamento"
    REFLEXO = "reflexo"
    RELIGIAO = "religiao"
    SOBREVIVENCIA = "sobrevivencia"
    SOCIEDADE = "sociedade"
    SORTE = "sorte"
    TENACIDADE = "tenacidade"
    VIGOR = "vigor"


# Skills whose pool is not attribute-driven
LUCK_SKILL = SkillName.SORTE
CRAFT_SKILL = SkillName.OFICIO

SPELLCASTING_SKILLS = (SkillName.ARCANO, SkillName.NATUREZA, SkillName.RELIGIAO)

# Named custom uses looked up by the spellcasting calculators
CAST_SPELL_USE = "Conjurar Feitiço"
LEARN_SPELL_USE = "Aprender Feitiço"


@dataclass(frozen=True)
class SkillMetadata:
    """Static rule-book flags for one skill."""

    label: str
    key_attribute: AttributeName | None  # None for special skills (luck, craft)
    has_load_penalty: bool
    requires_instrument: bool
    requires_proficiency: bool
    is_combat: bool


_A = AttributeName

# label, key attribute, load penalty, instrument, proficiency, combat
SKILL_METADATA: MappingProxyType[SkillName, SkillMetadata] = MappingProxyType(
    {
        SkillName.ACERTO: SkillMetadata("Acerto", _A.AGILIDADE, False, False, False, True),
        SkillName.ACROBACIA: SkillMetadata("Acrobacia", _A.AGILIDADE, True, False, False, False),
        SkillName.ADESTRAMENTO: SkillMetadata(
            "Adestramento", _A.INFLUENCIA, False, False, True, False
        ),
        SkillName.ARCANO: SkillMetadata("Arcano", _A.MENTE, False, False, True, True),
        SkillName.ARTE: SkillMetadata("Arte", _A.MENTE, False, False, True, False),
        SkillName.ATLETISMO: SkillMetadata("Atletismo", _A.CONSTITUICAO, True, False, False, False),
        SkillName.CONDUCAO: SkillMetadata("Condução", _A.AGILIDADE, True, True, True, False),
        SkillName.DESTREZA: SkillMetadata("Destreza", _A.AGILIDADE, True, True, True, False),
        SkillName.DETERMINACAO: SkillMetadata("Determinação", _A.MENTE, False, False, False, True),
        SkillName.ENGANACAO: SkillMetadata("Enganação", _A.INFLUENCIA, False, True, False, False),
        SkillName.ESTRATEGIA: SkillMetadata("Estratégia", _A.MENTE, False, False, True, False),
        SkillName.FURTIVIDADE: SkillMetadata("Furtividade", _A.AGILIDADE, True, False, False, False),
        SkillName.HISTORIA: SkillMetadata("História", _A.MENTE, False, False, False, False),
        SkillName.INICIATIVA: SkillMetadata("Iniciativa", _A.AGILIDADE, True, False, False, True),
        SkillName.INSTRUCAO: SkillMetadata("Instrução", _A.MENTE, False, False, True, False),
        SkillName.INTIMIDACAO: SkillMetadata(
            "Intimidação", _A.INFLUENCIA, False, False, False, False
        ),
        SkillName.INVESTIGACAO: SkillMetadata("Investigação", _A.MENTE, False, False, False, False),
        SkillName.LUTA: SkillMetadata("Luta", _A.FORCA, False, False, False, True),
        SkillName.MEDICINA: SkillMetadata("Medicina", _A.MENTE, False, True, True, False),
        SkillName.NATUREZA: SkillMetadata("Natureza", _A.PRESENCA, False, False, False, True),
        SkillName.OFICIO: SkillMetadata("Ofício", None, False, True, False, False),
        SkillName.PERCEPCAO: SkillMetadata("Percepção", _A.PRESENCA, False, False, False, False),
        SkillName.PERFORMANCE: SkillMetadata(
            "Performance", _A.INFLUENCIA, True, False, False, False
        ),
        SkillName.PERSPICACIA: SkillMetadata("Perspicácia", _A.PRESENCA, False, False, False, False),
        SkillName.PERSUASAO: SkillMetadata("Persuasão", _A.INFLUENCIA, False, False, False, False),
        SkillName.RASTREAMENTO: SkillMetadata(
            "Rastreamento", _A.PRESENCA, False, False, True, False
        ),
        SkillName.REFLEXO: SkillMetadata("Reflexo", _A.AGILIDADE, True, False, False, True),
        SkillName.RELIGIAO: SkillMetadata("Religião", _A.PRESENCA, False, False, True, True),
        SkillName.SOBREVIVENCIA: SkillMetadata(
            "Sobrevivência", _A.MENTE, False, False, False, False
        ),
        SkillName.SOCIEDADE: SkillMetadata("Sociedade", _A.INFLUENCIA, False, False, False, False),
        SkillName.SORTE: SkillMetadata("Sorte", None, False, False, False, False),
        SkillName.TENACIDADE: SkillMetadata("Tenacidade", _A.FORCA, False, False, False, True),
        SkillName.VIGOR: SkillMetadata("Vigor", _A.CONSTITUICAO, False, False, False, True),
    }
)

COMBAT_SKILLS = [name for name, meta in SKILL_METADATA.items() if meta.is_combat]
SKILLS_WITH_LOAD_PENALTY = [name for name, meta in SKILL_METADATA.items() if meta.has_load_penalty]


def get_skill_metadata(skill_name: SkillName | str) -> SkillMetadata:
    """
    Get the static metadata flags for a skill.

    Args:
        skill_name: Skill identity (enum member or its string value)

    Returns:
        The skill's SkillMetadata

    Raises:
        RulesInputError: If the skill is not in the rule book
    """
    try:
        return SKILL_METADATA[SkillName(skill_name)]
    except ValueError:
        raise RulesInputError(f"Unknown skill: {skill_name!r}") from None


class ModifierKind(StrEnum):
    """Whether a modifier helps or hinders."""

    BONUS = "bonus"
    PENALTY = "penalty"


class Modifier(BaseModel):
    """
    A named bonus or penalty attached to a skill.

    Dice modifiers (`affects_dice=True`) shift the dice count. Numeric
    modifiers are the flat bonus of the legacy revision. A modifier is always
    exactly one of the two.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Where the modifier comes from")
    value: int = Field(..., description="Signed modifier value")
    kind: ModifierKind = Field(..., description="bonus or penalty")
    affects_dice: bool = Field(default=False, description="Shifts dice count instead of total")

    @model_validator(mode="after")
    def _sign_matches_kind(self) -> "Modifier":
        if self.kind is ModifierKind.BONUS and self.value < 0:
            raise ValueError(f"Bonus modifier {self.name!r} has negative value {self.value}")
        if self.kind is ModifierKind.PENALTY and self.value > 0:
            raise ValueError(f"Penalty modifier {self.name!r} has positive value {self.value}")
        return self

    @classmethod
    def dice(cls, name: str, value: int) -> "Modifier":
        """Build a dice modifier, picking the kind from the sign."""
        kind = ModifierKind.PENALTY if value < 0 else ModifierKind.BONUS
        return cls(name=name, value=value, kind=kind, affects_dice=True)

    @classmethod
    def numeric(cls, name: str, value: int) -> "Modifier":
        """Build a flat numeric modifier, picking the kind from the sign."""
        kind = ModifierKind.PENALTY if value < 0 else ModifierKind.BONUS
        return cls(name=name, value=value, kind=kind, affects_dice=False)


class CustomUse(BaseModel):
    """
    A named alternate way of testing a skill.

    When a calculator looks a use up by name and finds it, the use's
    attribute, modifiers and bonus replace the skill's general ones.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Exact use name, e.g. 'Conjurar Feitiço'")
    key_attribute: AttributeName = Field(..., description="Attribute tested by this use")
    modifiers: list[Modifier] = Field(default_factory=list)
    bonus: int = Field(default=0, description="Flat dice bonus of the use")


class Skill(BaseModel):
    """
    A character's skill record.

    Attributes:
        name: Skill identity
        key_attribute: Attribute tested by default (customizable per character)
        proficiency_level: Training rank, drives the die size
        is_signature: Whether this is the character's one signature skill
        modifiers: Dice and numeric modifiers
        selected_craft_id: For the craft skill, which craft is rolled
        custom_uses: Optional named overrides
    """

    name: SkillName
    key_attribute: AttributeName = AttributeName.AGILIDADE
    proficiency_level: ProficiencyLevel = ProficiencyLevel.LEIGO
    is_signature: bool = False
    modifiers: list[Modifier] = Field(default_factory=list)
    selected_craft_id: str | None = None
    custom_uses: list[CustomUse] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _rule_book_key_attribute(cls, data: Any) -> Any:
        """Fill a missing key attribute from the rule book."""
        if not isinstance(data, dict) or data.get("key_attribute") is not None:
            return data
        if "name" not in data:
            return data

        meta = get_skill_metadata(data["name"])
        data = {k: v for k, v in data.items() if k != "key_attribute"}
        # Luck and craft skills have no rule-book attribute
        if meta.key_attribute is not None:
            data["key_attribute"] = meta.key_attribute
        return data

    @property
    def metadata(self) -> SkillMetadata:
        """Static rule-book flags for this skill."""
        return SKILL_METADATA[self.name]

    def find_use(self, use_name: str) -> CustomUse | None:
        """
        Look up a custom use by exact name.

        Args:
            use_name: Name of the use (case and accents must match)

        Returns:
            The CustomUse, or None when the skill has no use by that name
        """
        for use in self.custom_uses:
            if use.name == use_name:
                return use
        return None

    @classmethod
    def default(cls, name: SkillName | str) -> "Skill":
        """Build an untrained skill using the rule-book key attribute."""
        meta = get_skill_metadata(name)
        return cls(name=SkillName(name), key_attribute=meta.key_attribute)
