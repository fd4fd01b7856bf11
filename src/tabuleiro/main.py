"""Command-line entry point for the Tabuleiro rules engine."""

import argparse
import logging
import random
import sys
from pathlib import Path

import structlog

from tabuleiro.config import Settings, get_settings
from tabuleiro.game.character import (
    AttributeName,
    Character,
    SheetLoadError,
    SheetValidationError,
    SkillName,
    load_character_sheet,
)
from tabuleiro.game.rules import RuleRevision, RulesInputError
from tabuleiro.game.systems.dice import DicePoolResult, resolve_pool
from tabuleiro.game.systems.history import RollHistory
from tabuleiro.game.systems.magic import (
    can_cast,
    character_learning_chance,
    max_spell_points,
    power_per_round,
)
from tabuleiro.game.systems.magic.economy import SPELL_CIRCLES
from tabuleiro.game.systems.pools import (
    DicePoolSpec,
    build_casting_pool,
    build_character_skill_pool,
)

logger = structlog.get_logger(__name__)

# Attribute that fuels spellcasting resources
ESSENCE_ATTRIBUTE = AttributeName.PRESENCA


def configure_logging(settings: Settings) -> None:
    """Configure structlog level and renderer from settings."""
    level = logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)

    if settings.log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def resolve_sheet_path(sheet: str, settings: Settings) -> Path:
    """Find a sheet by path, falling back to the configured sheets directory."""
    path = Path(sheet)
    if path.exists() or path.is_absolute():
        return path
    return settings.sheets_dir / path


def format_result(spec: DicePoolSpec, result: DicePoolResult) -> str:
    """Render a roll for the terminal."""
    rolls = ", ".join(str(r) for r in result.rolls)
    if spec.revision is RuleRevision.LEGACY:
        return f"Rolls: [{rolls}] kept {result.kept} -> total {result.total}"
    return (
        f"Rolls: [{rolls}] successes {result.successes}, "
        f"cancellations {result.cancellations} -> net {result.net_successes}"
    )


def _roll(spec: DicePoolSpec, args: argparse.Namespace, settings: Settings, label: str) -> None:
    rng = random.Random(args.seed)
    history = RollHistory(settings.roll_history_size)
    resolve_pool(spec, rng, sink=history, context=label)

    for record in history.get_last():
        print(format_result(record.spec, record.result))
        print(f"Logged {record.context} at {record.timestamp:%Y-%m-%d %H:%M:%S} UTC")


def _revision(args: argparse.Namespace, settings: Settings) -> RuleRevision:
    if getattr(args, "legacy", False):
        return RuleRevision.LEGACY
    return settings.default_rule_revision


# ============================================================================
# Commands
# ============================================================================


def cmd_pool(character: Character, args: argparse.Namespace, settings: Settings) -> int:
    """Show (and optionally roll) the pool for a skill."""
    spec = build_character_skill_pool(
        character,
        args.skill,
        has_required_instrument=not args.no_instrument,
        revision=_revision(args, settings),
    )
    if spec is None:
        print(f"{character.name} has no craft selected for {args.skill}", file=sys.stderr)
        return 1

    print(f"{character.name} - {args.skill}: {spec.formula_text}")
    if args.roll:
        _roll(spec, args, settings, args.skill)
    return 0


def cmd_cast(character: Character, args: argparse.Namespace, settings: Settings) -> int:
    """Show (and optionally roll) a spellcasting test."""
    ability = character.spellcasting.find_ability(args.ability_id)
    if ability is None:
        print(
            f"{character.name} has no spellcasting ability {args.ability_id!r}",
            file=sys.stderr,
        )
        return 1

    spec = build_casting_pool(
        ability,
        character.skills,
        character.attributes,
        character.level,
        revision=settings.default_rule_revision,
    )
    print(f"{character.name} - casting ({ability.skill.value}): {spec.formula_text}")
    if args.roll:
        _roll(spec, args, settings, ability.id)
    return 0


def cmd_learn(character: Character, args: argparse.Namespace, settings: Settings) -> int:
    """Show the chance of learning a spell."""
    skill_name = args.skill
    if skill_name is None:
        abilities = character.spellcasting.abilities
        skill_name = abilities[0].skill if abilities else SkillName.ARCANO

    chance = character_learning_chance(
        character,
        skill_name,
        args.circle,
        matrix_modifier=args.matrix_modifier,
        other_modifiers=args.other,
    )
    print(f"{character.name} - learn circle {args.circle} spell ({skill_name}): {chance}%")
    return 0


def cmd_economy(character: Character, args: argparse.Namespace, settings: Settings) -> int:
    """Show the spell point economy."""
    state = character.spellcasting
    pp = character.power_points
    pf = state.spell_points

    per_round = power_per_round(
        character.level,
        character.attributes.value_of(ESSENCE_ATTRIBUTE),
        state.power_per_round_modifier,
    )

    print(f"{character.name} (level {character.level})")
    print(f"PP: {pp.current}/{pp.maximum}  per round: {per_round}")
    if not state.is_caster:
        print("Not a spellcaster")
        return 0

    print(f"PF: {pf.current}/{max_spell_points(pp.maximum)}")
    for circle in SPELL_CIRCLES:
        check = can_cast(circle, pf, pp)
        status = "ok" if check.allowed else check.reason.value
        print(f"  circle {circle}: cost {check.cost} - {status}")
    return 0


COMMANDS = {
    "pool": cmd_pool,
    "cast": cmd_cast,
    "learn": cmd_learn,
    "economy": cmd_economy,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog="tabuleiro", description="Tabuleiro do Caos rules engine")
    subparsers = parser.add_subparsers(dest="command", required=True)

    pool = subparsers.add_parser("pool", help="Show the dice pool for a skill")
    pool.add_argument("sheet", help="Character sheet YAML file")
    pool.add_argument("skill", help="Skill name (e.g. acrobacia, sorte, oficio)")
    pool.add_argument("--roll", action="store_true", help="Roll the pool")
    pool.add_argument("--seed", type=int, default=None, help="Random seed")
    pool.add_argument("--legacy", action="store_true", help="Use the legacy d20 rules")
    pool.add_argument(
        "--no-instrument", action="store_true", help="Required instrument is not at hand"
    )

    cast = subparsers.add_parser("cast", help="Show the casting pool for an ability")
    cast.add_argument("sheet", help="Character sheet YAML file")
    cast.add_argument("ability_id", help="Spellcasting ability id")
    cast.add_argument("--roll", action="store_true", help="Roll the pool")
    cast.add_argument("--seed", type=int, default=None, help="Random seed")

    learn = subparsers.add_parser("learn", help="Show the chance of learning a spell")
    learn.add_argument("sheet", help="Character sheet YAML file")
    learn.add_argument("--circle", type=int, required=True, help="Spell circle (1-8)")
    learn.add_argument("--skill", default=None, help="Casting skill (arcano, natureza, religiao)")
    learn.add_argument("--matrix-modifier", type=int, default=0, help="Matrix mastery modifier")
    learn.add_argument("--other", type=int, default=0, help="Other modifiers")

    economy = subparsers.add_parser("economy", help="Show PP and PF")
    economy.add_argument("sheet", help="Character sheet YAML file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments, defaults to sys.argv

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)

    try:
        character = load_character_sheet(resolve_sheet_path(args.sheet, settings))
        return COMMANDS[args.command](character, args, settings)
    except (SheetLoadError, SheetValidationError, RulesInputError) as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
