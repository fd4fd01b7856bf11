"""Spell point economy for Tabuleiro.

Two pools drive spellcasting:
- Power points (PP): the character's general resource
- Spell points (PF): a caster-only pool capped at the PP maximum

Casting a spell of circle N spends the circle's cost from both pools at once.
Channel mana turns actions into PF without touching PP.
"""

from dataclasses import dataclass
from enum import StrEnum

import structlog

from tabuleiro.game.character.sheet import ResourcePool
from tabuleiro.game.rules import RulesInputError

logger = structlog.get_logger(__name__)

SPELL_CIRCLES = range(1, 9)

# PF cost per spell circle; the same amount leaves the PP pool
SPELL_CIRCLE_PF_COST = {
    1: 0,
    2: 1,
    3: 3,
    4: 5,
    5: 7,
    6: 9,
    7: 12,
    8: 15,
}

# Actions spent channeling mana -> PF generated
CHANNEL_MANA_PF_GENERATION = {
    1: 1,
    2: 2,
    3: 4,
}

SPELL_BASE_DC = 12


class CastBlockReason(StrEnum):
    """Why a cast cannot go through."""

    EXHAUSTED = "exhausted"  # no power points left
    INSUFFICIENT_PF = "insufficient_pf"
    INSUFFICIENT_PP = "insufficient_pp"


@dataclass(frozen=True)
class CastCheck:
    """Result of checking whether a spell can be cast."""

    allowed: bool
    cost: int
    reason: CastBlockReason | None = None


@dataclass(frozen=True)
class CastOutcome:
    """Pools after a cast attempt. Unchanged when the cast was blocked."""

    check: CastCheck
    spell_points: ResourcePool
    power_points: ResourcePool

    @property
    def cast(self) -> bool:
        return self.check.allowed


def power_per_round(level: int, essence: int, modifier_sum: int = 0) -> int:
    """
    Calculate the PP a character may spend per round.

    Formula: level + essence + modifiers

    Examples:
        >>> power_per_round(5, 3, 1)
        9
    """
    return level + essence + modifier_sum


def spell_circle_cost(circle: int) -> int:
    """
    Get the PF cost of casting a spell of a circle.

    Raises:
        RulesInputError: If the circle is outside 1-8
    """
    if circle not in SPELL_CIRCLE_PF_COST:
        raise RulesInputError(f"Spell circle must be 1-8, got {circle}")
    return SPELL_CIRCLE_PF_COST[circle]


def channel_mana(actions: int) -> int:
    """
    Get the PF generated by channeling mana for a number of actions.

    Raises:
        RulesInputError: If actions is not 1, 2 or 3
    """
    if actions not in CHANNEL_MANA_PF_GENERATION:
        raise RulesInputError(f"Channel mana takes 1-3 actions, got {actions}")
    return CHANNEL_MANA_PF_GENERATION[actions]


def apply_channel_mana(spell_points: ResourcePool, actions: int, max_pp: int) -> ResourcePool:
    """
    Add channeled PF to the spell point pool.

    PF never rises above the PP maximum. The PP pool is not involved.

    Args:
        spell_points: Current PF pool
        actions: Actions spent channeling (1-3)
        max_pp: Character's PP maximum

    Returns:
        New PF pool
    """
    generated = channel_mana(actions)
    current = min(max_pp, spell_points.current + generated)
    return spell_points.model_copy(update={"current": max(0, current)})


def can_cast(circle: int, spell_points: ResourcePool, power_points: ResourcePool) -> CastCheck:
    """
    Check whether a spell of a circle can be cast.

    A first-circle spell costs no PF but still needs at least one PP.

    Args:
        circle: Spell circle (1-8)
        spell_points: Current PF pool
        power_points: Current PP pool

    Returns:
        CastCheck with the cost and, when blocked, the reason
    """
    cost = spell_circle_cost(circle)

    if power_points.current <= 0:
        return CastCheck(allowed=False, cost=cost, reason=CastBlockReason.EXHAUSTED)
    if cost > 0 and spell_points.current < cost:
        return CastCheck(allowed=False, cost=cost, reason=CastBlockReason.INSUFFICIENT_PF)
    if cost > 0 and power_points.current < cost:
        return CastCheck(allowed=False, cost=cost, reason=CastBlockReason.INSUFFICIENT_PP)

    return CastCheck(allowed=True, cost=cost)


def cast_spell(circle: int, spell_points: ResourcePool, power_points: ResourcePool) -> CastOutcome:
    """
    Spend the cost of a spell from both pools.

    A blocked cast changes nothing; callers inspect `outcome.check.reason`
    to tell the player why.
    """
    check = can_cast(circle, spell_points, power_points)

    if not check.allowed:
        logger.debug(
            "spell_cast_blocked",
            circle=circle,
            cost=check.cost,
            reason=check.reason.value if check.reason else None,
            pf=spell_points.current,
            pp=power_points.current,
        )
        return CastOutcome(check=check, spell_points=spell_points, power_points=power_points)

    return CastOutcome(
        check=check,
        spell_points=spell_points.model_copy(
            update={"current": max(0, spell_points.current - check.cost)}
        ),
        power_points=power_points.model_copy(
            update={"current": max(0, power_points.current - check.cost)}
        ),
    )


def spell_pp_cost(circle_cost: int, additional_cost: int = 0) -> int:
    """Total PP cost of a spell with extra costs, never negative."""
    return max(0, circle_cost + additional_cost)


def spell_difficulty(essence: int, skill_modifier: int, bonus: int = 0) -> int:
    """
    Calculate the difficulty (ND) to resist a character's spells.

    Formula: 12 + essence + skill modifier + bonus

    Examples:
        >>> spell_difficulty(3, 6)
        21
    """
    return SPELL_BASE_DC + essence + skill_modifier + bonus


def spell_attack_bonus(essence: int, skill_modifier: int, bonus: int = 0) -> int:
    """Spell attack bonus: essence + skill modifier + bonus."""
    return essence + skill_modifier + bonus


def max_spell_points(max_pp: int) -> int:
    """The PF maximum equals the PP maximum."""
    return max(0, max_pp)
