"""Scripted collaborators for exercising the dialogue engine without JSON data."""
from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from sectscript.core.rng import RNG
from sectscript.domain.defs import DialogueEvent
from sectscript.domain.dice_models import RollerAssignment, RollerKind


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedRNG(RNG):
    """Returns queued values instead of random draws and records every call."""

    def __init__(self, rolls: Iterable[int] = (), indices: Iterable[int] = ()) -> None:
        super().__init__(0)
        self._rolls: List[int] = list(rolls)
        self._indices: List[int] = list(indices)
        self.roll_calls: List[Tuple[int, int]] = []
        self.choice_calls: List[Tuple[int, ...]] = []

    def roll(self, faces: int, *, minimum: int = 1) -> int:
        self.roll_calls.append((faces, minimum))
        value = self._rolls.pop(0)
        assert minimum <= value <= faces, f"scripted roll {value} outside {minimum}..{faces}"
        return value

    def choice(self, seq: Sequence[int]) -> int:
        self.choice_calls.append(tuple(seq))
        value = self._rolls.pop(0)
        assert value in seq, f"scripted face {value} not in {tuple(seq)}"
        return value

    def index(self, count: int) -> int:
        value = self._indices.pop(0)
        assert 0 <= value < count
        return value


class FakeLedger:
    def __init__(self, money: int = 100, disciples: int = 10) -> None:
        self.money = money
        self.disciples = disciples

    def get_money(self) -> int:
        return self.money

    def add_money(self, amount: int) -> None:
        self.money += amount

    def spend_money(self, amount: int) -> bool:
        if amount > self.money:
            return False
        self.money -= amount
        return True

    def get_disciples(self) -> int:
        return self.disciples

    def add_disciples(self, amount: int) -> None:
        self.disciples += amount

    def dismiss_disciples(self, amount: int) -> bool:
        if amount > self.disciples:
            return False
        self.disciples -= amount
        return True


class FakeTechs:
    def __init__(self, unlocked: Iterable[str] = (), names: Dict[str, str] | None = None) -> None:
        self.unlocked = set(unlocked)
        self.names = names or {}

    def is_tech_unlocked(self, tech_id: str) -> bool:
        return tech_id in self.unlocked

    def get_tech_display_name(self, tech_id: str) -> str:
        return self.names.get(tech_id, tech_id)


class FakeTags:
    def __init__(self, values: Dict[str, bool] | None = None) -> None:
        self.values = dict(values or {})

    def get_tag_value(self, tag_id: str) -> bool:
        return self.values.get(tag_id, False)

    def tag_exists(self, tag_id: str) -> bool:
        return tag_id in self.values

    def set_tag_value(self, tag_id: str, value: bool) -> None:
        self.values[tag_id] = value

    def get_tag_description(self, tag_id: str, for_value: bool) -> str:
        return f"{tag_id} is {'set' if for_value else 'unset'}"


class FakeRollers:
    def __init__(
        self,
        faces: Dict[RollerKind, int] | None = None,
        face_sets: Dict[RollerKind, Tuple[int, ...]] | None = None,
        assignments: Dict[str, RollerAssignment] | None = None,
    ) -> None:
        self.faces = faces or {}
        self.face_sets = face_sets or {}
        self.assignments = assignments or {}

    def get_face_count(self, kind: RollerKind) -> int:
        return self.faces.get(kind, 6)

    def get_face_set(self, kind: RollerKind) -> Tuple[int, ...]:
        return self.face_sets.get(kind, ())

    def get_assigned_rollers(self, event_id: str) -> RollerAssignment:
        return self.assignments.get(event_id, RollerAssignment())


class FakeEventSource:
    def __init__(self, events: Iterable[DialogueEvent] = ()) -> None:
        self.events = {event.id: event for event in events}

    def load_event_definition(self, event_id: str) -> DialogueEvent | None:
        return self.events.get(event_id)
