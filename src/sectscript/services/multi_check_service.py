"""Multi-condition checks with priority-ordered jump targets."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from sectscript.domain.defs import CheckCondition, MultiCheckTarget
from sectscript.services.check_service import CheckOutcome, CheckService

logger = logging.getLogger(__name__)

RESULTS_HEADER = "All check results:"


@dataclass(slots=True)
class MultiCheckOutcome:
    """Every condition's outcome plus the target that won, if any."""

    target: str = ""
    matched: MultiCheckTarget | None = None
    results: List[CheckOutcome] = field(default_factory=list)
    description: str = ""

    @property
    def verdicts(self) -> List[bool]:
        return [result.success for result in self.results]


class MultiCheckService:
    """Evaluates all conditions once, then picks the best satisfied target."""

    def __init__(self, check_service: CheckService) -> None:
        self._check_service = check_service

    def resolve(
        self,
        conditions: Sequence[CheckCondition],
        targets: Sequence[MultiCheckTarget],
        *,
        event_id: str = "",
    ) -> MultiCheckOutcome:
        outcome = MultiCheckOutcome()
        blocks = [RESULTS_HEADER, ""]
        for index, condition in enumerate(conditions):
            result = self._check_service.resolve(condition, event_id=event_id)
            outcome.results.append(result)
            blocks.append(f" - Condition {index + 1}:\n{result.description}\n")
        outcome.description = "\n".join(blocks).rstrip("\n")

        winner = select_target(outcome.verdicts, targets)
        if winner is not None:
            outcome.matched = winner
            outcome.target = winner.target
            logger.info("Multi-check matched target '%s' (priority %d) %s", winner.target, winner.priority, winner.description)
        return outcome


def select_target(verdicts: Sequence[bool], targets: Sequence[MultiCheckTarget]) -> MultiCheckTarget | None:
    """Return the highest-priority target whose required conditions all hold.

    Ties keep declaration order; a required index outside ``verdicts`` never
    holds.
    """
    for target in targets:
        invalid = [index for index in target.required_indices if not 0 <= index < len(verdicts)]
        if invalid:
            logger.warning("Multi-check target '%s' requires unknown conditions %s", target.target, invalid)
    for target in sorted(targets, key=lambda entry: entry.priority, reverse=True):
        if all(0 <= index < len(verdicts) and verdicts[index] for index in target.required_indices):
            return target
    return None
