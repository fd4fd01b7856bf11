"""Character attributes for the Tabuleiro rules engine.

Six attributes, split into corporal and mental groups. Every calculation
reads attribute values through `Attributes.value_of` so that an unknown key
fails immediately instead of silently reading zero.
"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from tabuleiro.game.rules import RulesInputError


class AttributeName(StrEnum):
    """Core character attributes."""

    AGILIDADE = "agilidade"
    CONSTITUICAO = "constituicao"
    FORCA = "forca"
    INFLUENCIA = "influencia"
    MENTE = "mente"
    PRESENCA = "presenca"


# Constant attribute names for easy import
ATTRIBUTE_NAMES = [attr.value for attr in AttributeName]

PHYSICAL_ATTRIBUTES = (AttributeName.AGILIDADE, AttributeName.CONSTITUICAO, AttributeName.FORCA)
MENTAL_ATTRIBUTES = (AttributeName.INFLUENCIA, AttributeName.MENTE, AttributeName.PRESENCA)

ATTRIBUTE_MIN = 0
ATTRIBUTE_MAX_DEFAULT = 5
ATTRIBUTE_DEFAULT = 1


class Attributes(BaseModel):
    """
    The six attribute values of a character.

    Attributes:
        agilidade: Reflexes and motor coordination
        constituicao: Health and physical endurance
        forca: Muscular power
        influencia: Charisma and persuasion
        mente: Intelligence and reasoning
        presenca: Senses, magical capability and mental resilience
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    agilidade: int = Field(..., ge=-5, description="Agility")
    constituicao: int = Field(..., ge=-5, description="Constitution")
    forca: int = Field(..., ge=-5, description="Strength")
    influencia: int = Field(..., ge=-5, description="Influence")
    mente: int = Field(..., ge=-5, description="Mind")
    presenca: int = Field(..., ge=-5, description="Presence")

    def value_of(self, name: AttributeName | str) -> int:
        """
        Get the value of a single attribute.

        Args:
            name: Attribute name (enum member or its string value)

        Returns:
            The attribute value

        Raises:
            RulesInputError: If the name is not one of the six attributes
        """
        try:
            key = AttributeName(name)
        except ValueError:
            raise RulesInputError(f"Unknown attribute: {name!r}") from None
        return getattr(self, key.value)

    def as_dict(self) -> dict[str, int]:
        """Return attribute values keyed by attribute name."""
        return {name: getattr(self, name) for name in ATTRIBUTE_NAMES}

    @classmethod
    def uniform(cls, value: int = ATTRIBUTE_DEFAULT) -> "Attributes":
        """Build an attribute record with every attribute at the same value."""
        return cls(**{name: value for name in ATTRIBUTE_NAMES})
