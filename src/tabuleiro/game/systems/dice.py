"""Dice pool resolution.

Rolls a `DicePoolSpec` against a random source.

Current revision: each die showing 6 or more is a success and each 1 is a
cancellation. Net successes never drop below zero. A penalty roll throws two
dice and only the lower one counts.

Legacy revision: the highest d20 is kept (the lowest under a penalty roll)
and the flat modifier is added to it.
"""

import random
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

import structlog

from tabuleiro.game.rules import RuleRevision
from tabuleiro.game.systems.pools import DicePoolSpec

logger = structlog.get_logger(__name__)

SUCCESS_THRESHOLD = 6
CANCELLATION_VALUE = 1


class RandomSource(Protocol):
    """Anything that can roll an integer in an inclusive range."""

    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class DicePoolResult:
    """
    Outcome of rolling a pool.

    Attributes:
        rolls: Every die rolled, in order
        successes: Counted dice at or above the success threshold
        cancellations: Counted dice showing 1
        net_successes: max(0, successes - cancellations)
        kept: Die kept by a legacy d20 roll
        total: Kept die plus flat modifier for a legacy d20 roll
    """

    rolls: tuple[int, ...]
    successes: int = 0
    cancellations: int = 0
    net_successes: int = 0
    kept: int | None = None
    total: int | None = None


@dataclass(frozen=True)
class RollRecord:
    """A resolved pool as stored in a roll history."""

    spec: DicePoolSpec
    result: DicePoolResult
    context: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


class RollSink(Protocol):
    """Receiver of resolved rolls, e.g. a display history."""

    def record(self, roll: RollRecord) -> None: ...


def count_successes(values: list[int]) -> tuple[int, int, int]:
    """
    Classify dice into successes and cancellations.

    Returns:
        Tuple of (successes, cancellations, net successes)
    """
    successes = sum(1 for v in values if v >= SUCCESS_THRESHOLD)
    cancellations = sum(1 for v in values if v == CANCELLATION_VALUE)
    return successes, cancellations, max(0, successes - cancellations)


def resolve_pool(
    spec: DicePoolSpec,
    rng: RandomSource | None = None,
    sink: RollSink | None = None,
    context: str | None = None,
) -> DicePoolResult:
    """
    Roll a dice pool.

    Args:
        spec: Pool to roll
        rng: Random source, defaults to the `random` module
        sink: Optional receiver of the resolved roll
        context: Label stored with the roll (e.g. the skill name)

    Returns:
        DicePoolResult for the roll
    """
    rng = rng or random
    rolls = [rng.randint(1, int(spec.die_size)) for _ in range(spec.dice_count)]

    if spec.revision is RuleRevision.LEGACY:
        kept = min(rolls) if spec.is_penalty_roll else max(rolls)
        result = DicePoolResult(
            rolls=tuple(rolls),
            kept=kept,
            total=kept + spec.flat_modifier,
        )
    else:
        counted = [min(rolls)] if spec.is_penalty_roll else rolls
        successes, cancellations, net = count_successes(counted)
        result = DicePoolResult(
            rolls=tuple(rolls),
            successes=successes,
            cancellations=cancellations,
            net_successes=net,
        )

    logger.debug(
        "pool_resolved",
        formula=spec.formula_text,
        rolls=result.rolls,
        net_successes=result.net_successes,
        total=result.total,
        context=context,
    )

    if sink is not None:
        sink.record(RollRecord(spec=spec, result=result, context=context))

    return result
