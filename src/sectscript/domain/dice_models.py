"""Dice roller kinds, modifiers and roll results."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple


class RollerKind(Enum):
    """Category of dice contributor, each with its own face-count source."""

    ORDINARY = "ordinary"
    JINGSHI = "jingshi"
    JIANJUN = "jianjun"
    YUEZHENG = "yuezheng"
    PAPER_PUPPET = "paper_puppet"


# Elite personnel roll after ordinary disciples, in this order.
ELITE_ROLLERS: Tuple[RollerKind, ...] = (
    RollerKind.JINGSHI,
    RollerKind.JIANJUN,
    RollerKind.YUEZHENG,
)


class ItemKind(Enum):
    """Consumable items that can be brought along to a dice check."""

    PAPER_PUPPET = "zhi_kui_lei"
    LUCKY_CHARM = "cheng_fu_fu"
    IRON_FLOOR = "dian_fan_tie"
    TOAD_LEG = "yu_chan_tui"


class CompanionKind(Enum):
    """Companion creatures; at most one joins a roll batch."""

    MOUSE = "mouse"
    SHEEP = "sheep"
    HEN = "hen"


SCALE_SYMBOLS: Tuple[str, ...] = ("gong", "shang", "jue", "bianzhi", "zhi", "yu", "biangong")
HIGH_OCTAVE_MARKER = "high-"


def format_scale_face(value: int) -> str:
    """Render a face value on the seven-tone scale, wrapping into higher octaves."""
    if value < 1:
        return str(value)
    octave, position = divmod(value - 1, len(SCALE_SYMBOLS))
    return HIGH_OCTAVE_MARKER * octave + SCALE_SYMBOLS[position]


@dataclass(frozen=True, slots=True)
class RollerAssignment:
    """Rollers, companion and item committed to one dialogue event."""

    counts: Dict[RollerKind, int] = field(default_factory=dict)
    companion: CompanionKind | None = None
    item: ItemKind | None = None

    def count(self, kind: RollerKind) -> int:
        return max(0, self.counts.get(kind, 0))

    @property
    def is_empty(self) -> bool:
        return not any(self.count(kind) for kind in RollerKind) and self.item is not ItemKind.PAPER_PUPPET


@dataclass(frozen=True, slots=True)
class DieRoll:
    """Every intermediate value of one rolled die."""

    kind: RollerKind
    faces: int
    raw: int
    post_item: int
    post_companion: int
    reroll: int | None = None
    lucky: bool = False


@dataclass(frozen=True, slots=True)
class DiceResult:
    """Outcome of one roll batch plus the trace explaining it."""

    total: int
    trace: str
    dice: Tuple[DieRoll, ...] = ()

    @property
    def face_counts(self) -> Tuple[int, ...]:
        return tuple(die.faces for die in self.dice)

    @property
    def raw_rolls(self) -> Tuple[int, ...]:
        return tuple(die.raw for die in self.dice)

    @property
    def post_item_rolls(self) -> Tuple[int, ...]:
        return tuple(die.post_item for die in self.dice)

    @property
    def post_companion_rolls(self) -> Tuple[int, ...]:
        return tuple(die.post_companion for die in self.dice)
