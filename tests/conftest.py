"""Shared fixtures for all tests."""

from pathlib import Path

import pytest
import yaml

from tabuleiro.config import get_settings
from tabuleiro.game.character import (
    Attributes,
    Character,
    Craft,
    CustomUse,
    KnownSpell,
    Modifier,
    ProficiencyLevel,
    Skill,
    SkillName,
    SpellcastingAbility,
    SpellcastingState,
)
from tabuleiro.game.character.sheet import ResourcePool


class ScriptedRandom:
    """Random source that returns a fixed sequence of rolls."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        value = self.values.pop(0)
        assert a <= value <= b, f"scripted roll {value} outside {a}-{b}"
        return value


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; make every test read the environment afresh."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def scripted_random():
    """Factory for scripted random sources."""
    return ScriptedRandom


@pytest.fixture
def attributes():
    """A typical starting attribute spread."""
    return Attributes(
        agilidade=2,
        constituicao=1,
        forca=3,
        influencia=1,
        mente=3,
        presenca=2,
    )


@pytest.fixture
def test_character(attributes):
    """A level 6 arcane caster with a craft and a luck level."""
    return Character(
        name="Lívia",
        level=6,
        attributes=attributes,
        skills={
            SkillName.ACROBACIA: Skill(
                name=SkillName.ACROBACIA,
                key_attribute="agilidade",
                proficiency_level=ProficiencyLevel.VERSADO,
            ),
            SkillName.ARCANO: Skill(
                name=SkillName.ARCANO,
                key_attribute="mente",
                proficiency_level=ProficiencyLevel.ADEPTO,
                custom_uses=[
                    CustomUse(name="Conjurar Feitiço", key_attribute="presenca", bonus=1),
                ],
            ),
            SkillName.OFICIO: Skill(
                name=SkillName.OFICIO,
                key_attribute="agilidade",
                proficiency_level=ProficiencyLevel.ADEPTO,
                selected_craft_id="ferraria",
            ),
            SkillName.SORTE: Skill(name=SkillName.SORTE, is_signature=True),
            SkillName.PERCEPCAO: Skill(
                name=SkillName.PERCEPCAO,
                key_attribute="presenca",
                proficiency_level=ProficiencyLevel.MESTRE,
                modifiers=[Modifier.dice("Olhos de Coruja", 1)],
            ),
        },
        crafts=[
            Craft(id="ferraria", name="Ferraria", level=3, attribute_key="forca"),
        ],
        power_points=ResourcePool(current=8, maximum=10),
        spellcasting=SpellcastingState(
            is_caster=True,
            spell_points=ResourcePool(current=4, maximum=10),
            abilities=[
                SpellcastingAbility(
                    id="arcana", skill="arcano", attribute="presenca", casting_bonus=1
                ),
            ],
        ),
    )


@pytest.fixture
def known_spell():
    """A first-circle spell."""
    return KnownSpell(
        spell_id="luz",
        name="Luz",
        circle=1,
        matrix="evocacao",
        spellcasting_skill="arcano",
    )


@pytest.fixture
def sheet_data():
    """Raw sheet mapping as written in a YAML file."""
    return {
        "character": {
            "name": "Bento",
            "level": 3,
            "attributes": {
                "agilidade": 2,
                "constituicao": 2,
                "forca": 1,
                "influencia": 1,
                "mente": 2,
                "presenca": 3,
            },
            "skills": {
                "acrobacia": {"key_attribute": "agilidade", "proficiency_level": "versado"},
                "religiao": {
                    "key_attribute": "presenca",
                    "proficiency_level": "adepto",
                    "custom_uses": [
                        {"name": "Aprender Feitiço", "key_attribute": "mente", "bonus": 2},
                    ],
                },
            },
            "power_points": {"current": 5, "maximum": 6},
            "spellcasting": {
                "is_caster": True,
                "spell_points": {"current": 2, "maximum": 6},
                "abilities": [
                    {"id": "fe", "skill": "religiao", "attribute": "presenca"},
                ],
            },
        }
    }


@pytest.fixture
def sheet_path(tmp_path, sheet_data) -> Path:
    """A valid sheet written to a temporary YAML file."""
    path = tmp_path / "bento.yaml"
    path.write_text(yaml.safe_dump(sheet_data, allow_unicode=True), encoding="utf-8")
    return path
