"""Tests for spell learning chances."""

import pytest

from tabuleiro.game.character import CustomUse, Modifier, Skill
from tabuleiro.game.rules import RulesInputError
from tabuleiro.game.systems.magic.learning import (
    SPELL_LEARNING_CIRCLE_MODIFIER,
    character_learning_chance,
    learning_skill_modifier,
    spell_learning_chance,
)


class TestSpellLearningChance:
    """Test the learning chance formula."""

    def test_first_circle_not_first_spell(self):
        """Test Mente 3, skill 1, circle 1 for a character with spells."""
        assert spell_learning_chance(3, 1, 1, is_first_spell=False) == 46

    def test_first_spell_exception(self):
        """Test that the first spell gets no first-circle bonus."""
        assert spell_learning_chance(2, 4, 1, is_first_spell=True) == 14

    def test_first_spell_only_affects_first_circle(self):
        """Test that the first-spell flag is ignored above circle 1."""
        assert spell_learning_chance(3, 6, 2, is_first_spell=True) == 31
        assert spell_learning_chance(3, 6, 2, is_first_spell=False) == 31

    def test_circle_table(self):
        """Test the circle modifiers."""
        assert [SPELL_LEARNING_CIRCLE_MODIFIER[c] for c in range(1, 9)] == [
            30,
            10,
            0,
            -10,
            -20,
            -30,
            -50,
            -70,
        ]

    def test_all_modifiers_added(self):
        """Test that known spells, matrix and other modifiers add in."""
        assert spell_learning_chance(2, 0, 3, False, -5, 10, 3) == 18

    def test_clamped_high(self):
        """Test that the chance never exceeds 99."""
        assert spell_learning_chance(10, 40, 1) == 99

    def test_clamped_low(self):
        """Test that the chance never drops below 1."""
        assert spell_learning_chance(0, -10, 8) == 1

    def test_invalid_circle(self):
        """Test that circles outside 1-8 fail fast."""
        with pytest.raises(RulesInputError):
            spell_learning_chance(3, 0, 9)


class TestLearningSkillModifier:
    """Test resolving the learning skill modifier."""

    def test_uses_learn_spell_use(self, attributes):
        """Test that the 'Aprender Feitiço' use is preferred."""
        skill = Skill(
            name="arcano",
            key_attribute="mente",
            modifiers=[Modifier.dice("Foco", 2)],
            custom_uses=[CustomUse(name="Aprender Feitiço", key_attribute="influencia", bonus=3)],
        )

        # influencia 1 + bonus 3; the general +2 is superseded
        assert learning_skill_modifier(skill, attributes, 1) == 4

    def test_falls_back(self, attributes):
        """Test the general modifiers without a learning use."""
        skill = Skill(name="arcano", key_attribute="mente", modifiers=[Modifier.dice("Foco", 2)])

        assert learning_skill_modifier(skill, attributes, 1) == 5


class TestCharacterLearningChance:
    """Test the character convenience wrapper."""

    def test_first_spell(self, test_character):
        """Test a character with no known spells."""
        # mente 3 x 5 + arcano (mente 3) + 0 (first spell)
        assert character_learning_chance(test_character, "arcano", 1) == 18

    def test_with_known_spell(self, test_character, known_spell):
        """Test that a known spell removes the first-spell exception."""
        character = test_character.model_copy(deep=True)
        character.spellcasting.known_spells.append(known_spell)

        assert character_learning_chance(character, "arcano", 1) == 48

    def test_matrix_and_other(self, test_character):
        """Test extra modifiers from the caller."""
        chance = character_learning_chance(
            test_character, "arcano", 2, matrix_modifier=5, other_modifiers=-2
        )
        # 15 + 3 + 10 + 5 - 2
        assert chance == 31
