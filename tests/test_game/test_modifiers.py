"""Tests for modifier aggregation."""

import itertools

from tabuleiro.game.character.sheet import ActiveCondition, ArmorType, CreatureSize
from tabuleiro.game.character.skills import Modifier, ProficiencyLevel
from tabuleiro.game.rules import RuleRevision
from tabuleiro.game.systems.modifiers import (
    SituationalFlags,
    aggregate_dice,
    aggregate_numeric,
    condition_dice_penalties,
    dice_penalty_for_attribute,
    situational_dice_penalties,
)


class TestAggregation:
    """Test summing modifiers."""

    def test_dice_and_numeric_are_separate(self):
        """Test that dice and numeric modifiers never mix."""
        modifiers = [
            Modifier.dice("Bênção", 2),
            Modifier.dice("Ferido", -1),
            Modifier.numeric("Anel", 3),
        ]
        assert aggregate_dice(modifiers) == 1
        assert aggregate_numeric(modifiers) == 3

    def test_extras_added(self):
        """Test that situational deltas are added to dice modifiers."""
        modifiers = [Modifier.dice("Bênção", 1)]
        assert aggregate_dice(modifiers, {"overload": -2, "size": 1}) == 0

    def test_order_independent(self):
        """Test that the order of modifiers never changes the sum."""
        modifiers = [
            Modifier.dice("a", 2),
            Modifier.dice("b", -3),
            Modifier.dice("c", 1),
            Modifier.numeric("d", -2),
        ]
        results = {aggregate_dice(p) for p in itertools.permutations(modifiers)}
        assert results == {0}


class TestConditionPenalties:
    """Test folding conditions into a dice penalty map."""

    def test_no_conditions(self):
        """Test that no conditions give an empty map."""
        assert condition_dice_penalties([]) == {}

    def test_stackable_scales(self):
        """Test that stackable conditions scale with stacks."""
        penalties = condition_dice_penalties([ActiveCondition(name="abalado", stacks=3)])
        assert penalties == {"todos": -3}

    def test_non_stackable_ignores_stacks(self):
        """Test that non-stackable conditions apply once."""
        penalties = condition_dice_penalties([ActiveCondition(name="fraco", stacks=2)])
        assert penalties == {"agilidade": -1, "forca": -1}

    def test_aggregates_conditions(self):
        """Test that several conditions add up per target."""
        penalties = condition_dice_penalties(
            [
                ActiveCondition(name="exausto", stacks=2),
                ActiveCondition(name="fraco"),
                ActiveCondition(name="envenenado"),
            ]
        )
        assert penalties == {"agilidade": -3, "forca": -3, "todos": -1}

    def test_unknown_condition_ignored(self):
        """Test that conditions without a dice penalty are ignored."""
        assert condition_dice_penalties([ActiveCondition(name="amedrontado")]) == {}

    def test_penalty_for_attribute(self):
        """Test that 'todos' applies to every attribute."""
        penalties = {"todos": -1, "agilidade": -2}
        assert dice_penalty_for_attribute(penalties, "agilidade") == -3
        assert dice_penalty_for_attribute(penalties, "mente") == -1
        assert dice_penalty_for_attribute(penalties, None) == -1


class TestSituationalPenalties:
    """Test situational dice deltas."""

    def test_no_flags(self):
        """Test that default flags produce no deltas."""
        flags = SituationalFlags()
        assert situational_dice_penalties("acrobacia", "agilidade", "versado", flags) == {}

    def test_overload_only_on_load_skills(self):
        """Test that overload only hits skills with the load property."""
        flags = SituationalFlags(is_overloaded=True)
        acrobacia = situational_dice_penalties(
            "acrobacia", "agilidade", ProficiencyLevel.VERSADO, flags
        )
        historia = situational_dice_penalties(
            "historia", "mente", ProficiencyLevel.VERSADO, flags
        )

        assert acrobacia == {"overload": -2}
        assert historia == {}

    def test_overload_not_a_dice_penalty_in_legacy(self):
        """Test that legacy overload never appears as a dice delta."""
        flags = SituationalFlags(is_overloaded=True)
        penalties = situational_dice_penalties(
            "acrobacia", "agilidade", ProficiencyLevel.VERSADO, flags, RuleRevision.LEGACY
        )
        assert "overload" not in penalties

    def test_armor(self):
        """Test armor penalties on load skills."""
        medium = SituationalFlags(equipped_armor_type=ArmorType.MEDIA)
        heavy = SituationalFlags(equipped_armor_type=ArmorType.PESADA)
        light = SituationalFlags(equipped_armor_type=ArmorType.LEVE)

        assert situational_dice_penalties("furtividade", "agilidade", "adepto", medium) == {
            "armor": -1
        }
        assert situational_dice_penalties("furtividade", "agilidade", "adepto", heavy) == {
            "armor": -2
        }
        assert situational_dice_penalties("furtividade", "agilidade", "adepto", light) == {}
        assert situational_dice_penalties("luta", "forca", "adepto", heavy) == {}

    def test_missing_instrument(self):
        """Test the missing instrument penalty."""
        flags = SituationalFlags(has_required_instrument=False)
        assert situational_dice_penalties("medicina", "mente", "adepto", flags) == {
            "instrument": -2
        }
        assert situational_dice_penalties("historia", "mente", "adepto", flags) == {}

    def test_missing_proficiency(self):
        """Test the untrained penalty on skills that require training."""
        flags = SituationalFlags()
        assert situational_dice_penalties("arte", "mente", "leigo", flags) == {"proficiency": -2}
        assert situational_dice_penalties("arte", "mente", "adepto", flags) == {}

    def test_condition(self):
        """Test that condition penalties follow the key attribute."""
        flags = SituationalFlags(condition_penalties={"todos": -1, "mente": -1})
        assert situational_dice_penalties("historia", "mente", "adepto", flags) == {
            "condition": -2
        }
        assert situational_dice_penalties("luta", "forca", "adepto", flags) == {"condition": -1}

    def test_size(self):
        """Test creature size modifiers."""
        small = SituationalFlags(creature_size=CreatureSize.PEQUENO)
        huge = SituationalFlags(creature_size=CreatureSize.COLOSSAL_2)

        assert situational_dice_penalties("furtividade", "agilidade", "adepto", small) == {
            "size": 1
        }
        assert situational_dice_penalties("tenacidade", "forca", "adepto", huge) == {"size": 3}
        assert situational_dice_penalties("historia", "mente", "adepto", huge) == {}

    def test_all_sources_combine(self):
        """Test that every applicable source contributes one delta."""
        flags = SituationalFlags(
            is_overloaded=True,
            equipped_armor_type=ArmorType.PESADA,
            has_required_instrument=False,
            creature_size=CreatureSize.GRANDE,
            condition_penalties={"todos": -1},
        )
        penalties = situational_dice_penalties("conducao", "agilidade", "leigo", flags)

        assert penalties == {
            "overload": -2,
            "armor": -2,
            "instrument": -2,
            "proficiency": -2,
            "condition": -1,
        }
