"""Evaluation of single check conditions against campaign state."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sectscript.core.rng import RNG
from sectscript.domain.defs import CheckCondition, CheckKind
from sectscript.domain.dice_models import DiceResult
from sectscript.services.dice_service import DiceService
from sectscript.services.ports import ResourceLedger, RollerSource, TagStore, TechQuery

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckOutcome:
    """Verdict of one condition with the values that produced it."""

    success: bool
    description: str
    value: int
    difficulty: int
    dice_result: DiceResult | None = None


class CheckService:
    """Resolves money, tech, tag and dice conditions.

    Content errors never raise: an unrecognized check kind resolves to a failed
    check and is logged.
    """

    def __init__(
        self,
        resources: ResourceLedger,
        techs: TechQuery,
        tags: TagStore,
        rollers: RollerSource,
        *,
        rng: RNG | None = None,
        dice_service: DiceService | None = None,
    ) -> None:
        self._resources = resources
        self._techs = techs
        self._tags = tags
        self._rollers = rollers
        self._rng = rng or RNG()
        self._dice_service = dice_service or DiceService(rollers)

    def roll_for(self, event_id: str) -> DiceResult:
        """Roll with whatever rollers are assigned to ``event_id``."""
        assignment = self._rollers.get_assigned_rollers(event_id)
        return self._dice_service.roll(assignment, self._rng)

    def resolve(
        self,
        condition: CheckCondition,
        *,
        event_id: str = "",
        dice_result: DiceResult | None = None,
    ) -> CheckOutcome:
        difficulty = condition.effective_difficulty
        kind = condition.kind
        if kind is CheckKind.MONEY:
            value = self._resources.get_money()
            success = value >= difficulty
            detail = f"Requires {difficulty} spirit stones, current stones = {value} {_comparator(success)} {difficulty}"
        elif kind is CheckKind.TECH:
            unlocked = self._techs.is_tech_unlocked(condition.reference_id)
            value = 1 if unlocked else 0
            success = value >= difficulty
            name = self._techs.get_tech_display_name(condition.reference_id)
            detail = f"Tech [{name}] {'unlocked' if success else 'locked'}"
        elif kind is CheckKind.GLOBAL_TAG:
            tag_value = self._tags.get_tag_value(condition.reference_id)
            value = 1 if tag_value else 0
            success = value >= difficulty
            detail = self._tags.get_tag_description(condition.reference_id, tag_value)
        elif kind is CheckKind.DICE_ROLL:
            if dice_result is None:
                dice_result = self.roll_for(event_id)
            value = dice_result.total
            success = value >= difficulty
            rolls = ", ".join(dice_result.trace.splitlines()) or "no dice"
            detail = f"DC = {difficulty}, {rolls} = {value} {_comparator(success)} {difficulty}"
        else:
            logger.error(
                "Invalid check kind '%s' in dialogue event '%s'; the check fails",
                condition.raw_kind,
                event_id,
            )
            return CheckOutcome(
                success=False,
                description=_envelope(False, f"Invalid check kind ({condition.raw_kind}) in event {event_id}"),
                value=0,
                difficulty=difficulty,
            )
        return CheckOutcome(
            success=success,
            description=_envelope(success, detail),
            value=value,
            difficulty=difficulty,
            dice_result=dice_result,
        )


def _comparator(success: bool) -> str:
    return ">=" if success else "<"


def _envelope(success: bool, detail: str) -> str:
    verdict = "Success!" if success else "Failure!"
    return f"[ {verdict} ] ( {detail} )"
