"""Capability interfaces the dialogue engine consumes from its collaborators."""
from __future__ import annotations

from typing import Protocol, Tuple

from sectscript.domain.defs import DialogueEvent
from sectscript.domain.dice_models import RollerAssignment, RollerKind


class ResourceLedger(Protocol):
    def get_money(self) -> int: ...

    def add_money(self, amount: int) -> None: ...

    def spend_money(self, amount: int) -> bool: ...

    def get_disciples(self) -> int: ...

    def add_disciples(self, amount: int) -> None: ...

    def dismiss_disciples(self, amount: int) -> bool: ...


class TechQuery(Protocol):
    def is_tech_unlocked(self, tech_id: str) -> bool: ...

    def get_tech_display_name(self, tech_id: str) -> str: ...


class TagStore(Protocol):
    def get_tag_value(self, tag_id: str) -> bool: ...

    def tag_exists(self, tag_id: str) -> bool: ...

    def set_tag_value(self, tag_id: str, value: bool) -> None: ...

    def get_tag_description(self, tag_id: str, for_value: bool) -> str: ...


class RollerSource(Protocol):
    def get_face_count(self, kind: RollerKind) -> int: ...

    def get_face_set(self, kind: RollerKind) -> Tuple[int, ...]:
        """Ordered special faces for ``kind``; empty for uniform dice."""
        ...

    def get_assigned_rollers(self, event_id: str) -> RollerAssignment: ...


class EventSource(Protocol):
    def load_event_definition(self, event_id: str) -> DialogueEvent | None: ...
