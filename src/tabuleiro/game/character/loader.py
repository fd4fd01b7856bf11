"""
Character sheet loader for Tabuleiro.

Handles loading and validating character sheets from YAML files.
"""

from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import ValidationError

from tabuleiro.game.character.sheet import Character

logger = structlog.get_logger(__name__)


class SheetLoadError(Exception):
    """Raised when there's an error loading a character sheet."""

    pass


class SheetValidationError(Exception):
    """Raised when character sheet validation fails."""

    pass


def load_yaml_file(file_path: Path) -> dict[str, Any]:
    """
    Load a YAML file containing one character sheet.

    Args:
        file_path: Path to the YAML file

    Returns:
        The sheet's `character` mapping

    Raises:
        SheetLoadError: If the file cannot be loaded or parsed
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SheetLoadError(f"YAML parsing error in {file_path}: {e}") from e
    except FileNotFoundError:
        raise SheetLoadError(f"File not found: {file_path}") from None
    except OSError as e:
        raise SheetLoadError(f"Error loading {file_path}: {e}") from e

    if not data:
        raise SheetLoadError(f"Empty YAML file: {file_path}")

    if not isinstance(data, dict) or "character" not in data:
        raise SheetLoadError(f"Missing 'character' key in {file_path}")

    sheet = data["character"]
    if not isinstance(sheet, dict):
        raise SheetLoadError(f"'character' must be a mapping in {file_path}")

    return sheet


def _normalize_skills(sheet: dict[str, Any], file_path: Path) -> dict[str, Any]:
    """Let skill entries omit their name when it is already the mapping key."""
    skills = sheet.get("skills")
    if skills is None:
        return sheet

    if not isinstance(skills, dict):
        raise SheetValidationError(f"'skills' must be a mapping in {file_path}")

    normalized = {}
    for key, entry in skills.items():
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise SheetValidationError(f"Skill '{key}' in {file_path} must be a mapping")
        normalized[key] = {"name": key, **entry}

    return {**sheet, "skills": normalized}


def load_character_sheet(file_path: Path | str) -> Character:
    """
    Load a character sheet from a YAML file.

    Args:
        file_path: Path to the sheet file

    Returns:
        Validated Character snapshot

    Raises:
        SheetLoadError: If the file cannot be read or parsed
        SheetValidationError: If the sheet does not describe a valid character
    """
    path = Path(file_path)
    sheet = _normalize_skills(load_yaml_file(path), path)

    try:
        character = Character.model_validate(sheet)
    except ValidationError as e:
        name = sheet.get("name", "unknown")
        raise SheetValidationError(f"Character '{name}' in {path} is invalid: {e}") from e

    logger.info(
        "sheet_loaded",
        path=str(path),
        character=character.name,
        level=character.level,
        crafts=len(character.crafts),
        known_spells=len(character.spellcasting.known_spells),
    )
    return character
