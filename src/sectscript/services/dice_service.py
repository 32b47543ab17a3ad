"""Dice resolution: rolls assigned rollers and applies item and companion modifiers."""
from __future__ import annotations

import logging
from typing import Callable, List, Tuple

from sectscript.core.rng import RNG
from sectscript.domain.dice_models import (
    ELITE_ROLLERS,
    CompanionKind,
    DiceResult,
    DieRoll,
    ItemKind,
    RollerAssignment,
    RollerKind,
    format_scale_face,
)
from sectscript.services.ports import RollerSource

logger = logging.getLogger(__name__)


class DiceService:
    """Pure roll computation over a roller assignment and a random source.

    Dice are rolled ordinary disciples first, then elites in priority order,
    then the die granted by an item. Each die goes through the base roll, the
    item modifiers and finally the companion modifiers; the trace gets one line
    per die in roll order.
    """

    def __init__(self, rollers: RollerSource) -> None:
        self._rollers = rollers

    def plan(self, assignment: RollerAssignment) -> List[RollerKind]:
        """Return the roller kind of every die, in roll order."""
        plan = [RollerKind.ORDINARY] * assignment.count(RollerKind.ORDINARY)
        plan.extend(kind for kind in ELITE_ROLLERS if assignment.count(kind) > 0)
        if assignment.item is ItemKind.PAPER_PUPPET:
            plan.append(RollerKind.PAPER_PUPPET)
        return plan

    def roll(self, assignment: RollerAssignment, rng: RNG) -> DiceResult:
        plan = self.plan(assignment)
        if not plan:
            logger.warning("Dice roll requested without any assigned rollers")
            return DiceResult(total=0, trace="")

        lucky_index = rng.index(len(plan)) if assignment.item is ItemKind.LUCKY_CHARM else None
        dice: List[DieRoll] = []
        lines: List[str] = []
        total = 0
        for position, kind in enumerate(plan):
            die, line = self._roll_die(kind, assignment, rng, lucky=position == lucky_index)
            dice.append(die)
            lines.append(line)
            total += die.post_companion
        logger.debug("Rolled %d dice for a total of %d", len(dice), total)
        return DiceResult(total=total, trace="\n".join(lines), dice=tuple(dice))

    def _roll_die(
        self,
        kind: RollerKind,
        assignment: RollerAssignment,
        rng: RNG,
        *,
        lucky: bool,
    ) -> Tuple[DieRoll, str]:
        raise_floor = assignment.item is ItemKind.IRON_FLOOR
        face_set = tuple(self._rollers.get_face_set(kind))
        draw: Callable[[], int]
        fmt: Callable[[int], str]
        if face_set:
            top = max(face_set)
            shown_faces = len(face_set) - 1
            pool = tuple(value for value in face_set if value != min(face_set)) if raise_floor else face_set
            draw = lambda: rng.choice(pool)
            fmt = format_scale_face
        else:
            top = self._rollers.get_face_count(kind)
            shown_faces = top
            minimum = 2 if raise_floor else 1
            draw = lambda: rng.roll(top, minimum=minimum)
            fmt = str

        raw = draw()
        value = raw
        reroll = None
        line = f"1d{shown_faces} = {fmt(raw)}"
        if assignment.item is ItemKind.TOAD_LEG:
            reroll = draw()
            value = max(raw, reroll)
            line = f"1d{shown_faces} = {fmt(raw)}|{fmt(reroll)} -> {fmt(value)}"
        # The lucky die ends on its top face even when a reroll kept something lower.
        if lucky:
            value = top
            line += f" -> max {fmt(value)}"
        post_item = value

        companion = assignment.companion
        if companion is CompanionKind.MOUSE:
            value += 1
            line += f" +1 mouse = {fmt(value)}"
        if companion is CompanionKind.SHEEP:
            value = top + 1 - value
            line += f" mirrored by sheep = {fmt(value)}"
        if companion is CompanionKind.HEN and value == 1:
            value = 3
            line += f" rescued by hen = {fmt(value)}"

        die = DieRoll(
            kind=kind,
            faces=shown_faces,
            raw=raw,
            post_item=post_item,
            post_companion=value,
            reroll=reroll,
            lucky=lucky,
        )
        return die, line
