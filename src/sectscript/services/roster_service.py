"""Roller assignment, item inventory and die configuration lookups."""
from __future__ import annotations

import logging
from typing import Dict, Sequence, Tuple

from sectscript.data.repositories import RollersRepository
from sectscript.domain.defs import DialogueEvent
from sectscript.domain.dice_models import (
    ELITE_ROLLERS,
    CompanionKind,
    ItemKind,
    RollerAssignment,
    RollerKind,
)
from sectscript.domain.state import GameState
from sectscript.services.errors import AssignmentError

logger = logging.getLogger(__name__)

ORDINARY_MEMBER_PREFIX = "normal_"
DEFAULT_FACE_COUNT = 6


class RosterService:
    """Tracks who rolls for which event this turn and what each die looks like."""

    def __init__(self, rollers_repo: RollersRepository, state: GameState) -> None:
        self._rollers_repo = rollers_repo
        self._state = state

    def get_face_count(self, kind: RollerKind) -> int:
        if not self._rollers_repo.has(kind.value):
            logger.error("No die configured for roller kind '%s', using d%d", kind.value, DEFAULT_FACE_COUNT)
            return DEFAULT_FACE_COUNT
        return self._rollers_repo.get(kind.value).faces

    def get_face_set(self, kind: RollerKind) -> Tuple[int, ...]:
        if not self._rollers_repo.has(kind.value):
            return ()
        return self._rollers_repo.get(kind.value).face_set

    def get_assigned_rollers(self, event_id: str) -> RollerAssignment:
        return self._state.assignments.get(event_id, RollerAssignment())

    def confirm_assignment(
        self,
        event: DialogueEvent,
        member_ids: Sequence[str],
        *,
        companion: CompanionKind | None = None,
        item: ItemKind | None = None,
    ) -> RollerAssignment:
        """Validate and store the team sent to ``event``; consumes the item."""
        if event.dice_limit == 0:
            raise AssignmentError(f"Event '{event.id}' does not accept rollers.")
        if len(member_ids) != event.dice_limit:
            raise AssignmentError(
                f"Event '{event.id}' needs {event.dice_limit} members, got {len(member_ids)}."
            )
        counts: Dict[RollerKind, int] = {}
        for member_id in member_ids:
            kind = self._member_kind(member_id)
            if kind is not RollerKind.ORDINARY and counts.get(kind):
                raise AssignmentError(f"Elite '{member_id}' can only be assigned once.")
            counts[kind] = counts.get(kind, 0) + 1
        if counts.get(RollerKind.ORDINARY, 0) > self._state.disciples:
            raise AssignmentError("Not enough disciples for this assignment.")
        if companion is not None and companion not in self._state.companions:
            raise AssignmentError(f"Companion '{companion.value}' has not joined the sect.")
        if item is not None and not self.consume_item(item.value, 1):
            raise AssignmentError(f"Item '{item.value}' is not available.")

        assignment = RollerAssignment(counts=counts, companion=companion, item=item)
        self._state.assignments[event.id] = assignment
        logger.info("Confirmed %d members for event '%s'", len(member_ids), event.id)
        return assignment

    def clear_assignments(self) -> None:
        self._state.assignments.clear()

    def add_item(self, item_id: str, quantity: int) -> None:
        if quantity < 0:
            logger.error("Cannot add negative quantity of item %s", item_id)
            return
        self._state.items[item_id] = self._state.items.get(item_id, 0) + quantity

    def consume_item(self, item_id: str, quantity: int) -> bool:
        if self.item_quantity(item_id) < quantity:
            logger.error("Not enough of item %s to consume %d", item_id, quantity)
            return False
        self._state.items[item_id] -= quantity
        return True

    def item_quantity(self, item_id: str) -> int:
        return self._state.items.get(item_id, 0)

    def _member_kind(self, member_id: str) -> RollerKind:
        if member_id.startswith(ORDINARY_MEMBER_PREFIX):
            return RollerKind.ORDINARY
        key = member_id.lower()
        for kind in ELITE_ROLLERS:
            if kind.value == key:
                if key not in self._state.elites:
                    raise AssignmentError(f"Elite '{member_id}' has not joined the sect.")
                return kind
        raise AssignmentError(f"Unknown member id '{member_id}'.")
