"""Rule revisions and shared rule errors.

The game has gone through two rule revisions and both are still played:

- LEGACY: attribute d20s keep the highest, plus a flat modifier of
  attribute x proficiency multiplier.
- CURRENT: attribute dice of a proficiency-sized die, counting successes.

The two are not numerically equivalent, so every builder takes the revision
explicitly and never mixes their formulas.
"""

from enum import StrEnum


class RuleRevision(StrEnum):
    """Rule revision a calculation follows."""

    LEGACY = "legacy"
    CURRENT = "current"


DEFAULT_RULE_REVISION = RuleRevision.CURRENT


class RulesInputError(ValueError):
    """Raised when a calculation receives a value outside its domain.

    These are data-model violations (a circle of 9, a craft level of 6), never
    states a player can reach through normal play.
    """

    pass
