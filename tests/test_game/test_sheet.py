"""Tests for character sheet records."""

import pytest
from pydantic import ValidationError

from tabuleiro.game.character import (
    Attributes,
    Character,
    Craft,
    KnownSpell,
    ProficiencyLevel,
    SkillName,
)
from tabuleiro.game.character.sheet import ActiveCondition, ResourcePool
from tabuleiro.game.rules import RulesInputError


class TestCharacter:
    """Test the Character snapshot."""

    def test_missing_skills_filled_with_defaults(self):
        """Test that every rule-book skill is available on a new character."""
        character = Character(name="Novo", attributes=Attributes.uniform())

        assert set(character.skills) == set(SkillName)
        assert character.get_skill("luta").proficiency_level is ProficiencyLevel.LEIGO

    def test_declared_skills_kept(self, test_character):
        """Test that declared skills are not replaced by defaults."""
        acrobacia = test_character.get_skill(SkillName.ACROBACIA)
        assert acrobacia.proficiency_level is ProficiencyLevel.VERSADO

    def test_get_unknown_skill(self, test_character):
        """Test that an unknown skill fails fast."""
        with pytest.raises(RulesInputError):
            test_character.get_skill("culinaria")

    def test_find_craft(self, test_character):
        """Test looking up crafts by id."""
        assert test_character.find_craft("ferraria").name == "Ferraria"
        assert test_character.find_craft("alquimia") is None

    def test_find_ability(self, test_character):
        """Test looking up spellcasting abilities by id."""
        assert test_character.spellcasting.find_ability("arcana") is not None
        assert test_character.spellcasting.find_ability("divina") is None


class TestRecordValidation:
    """Test validation of the smaller records."""

    def test_craft_level_range(self):
        """Test that craft levels outside 0-5 are rejected."""
        with pytest.raises(ValidationError):
            Craft(id="x", name="X", level=6, attribute_key="mente")

    def test_spell_circle_range(self):
        """Test that spell circles outside 1-8 are rejected."""
        with pytest.raises(ValidationError):
            KnownSpell(
                spell_id="x", name="X", circle=9, matrix="m", spellcasting_skill="arcano"
            )

    def test_condition_stacks_positive(self):
        """Test that a condition has at least one stack."""
        with pytest.raises(ValidationError):
            ActiveCondition(name="exausto", stacks=0)

    def test_resource_pool_exhausted(self):
        """Test the exhausted check."""
        assert ResourcePool(current=0, maximum=5).is_exhausted
        assert not ResourcePool(current=1, maximum=5).is_exhausted
