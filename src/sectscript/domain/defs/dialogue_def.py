"""Dialogue script structures used by the runtime."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple

logger = logging.getLogger(__name__)


class SentenceKind(Enum):
    """Dispatch category of a sentence."""

    NARRATION = "narration"
    CHOICE = "choice"
    CHECK = "check"
    MULTI_CHECK = "multicheck"

    @classmethod
    def parse(cls, raw: str) -> "SentenceKind | None":
        """Map a script spelling to a kind, or None when unrecognized."""
        return _SENTENCE_KIND_ALIASES.get(raw.strip().lower())


class CheckKind(Enum):
    """What a check condition compares against."""

    MONEY = "money"
    TECH = "tech"
    GLOBAL_TAG = "globalTag"
    DICE_ROLL = "diceRoll"

    @property
    def is_boolean(self) -> bool:
        return self in (CheckKind.TECH, CheckKind.GLOBAL_TAG)

    @classmethod
    def parse(cls, raw: str) -> "CheckKind | None":
        return _CHECK_KIND_ALIASES.get(raw.strip().lower())


class EffectKind(Enum):
    MONEY = "money"
    DISCIPLE = "disciple"
    GLOBAL_TAG = "globalTag"

    @classmethod
    def parse(cls, raw: str) -> "EffectKind | None":
        return _EFFECT_KIND_ALIASES.get(raw.strip().lower())


class EffectOperation(Enum):
    INCREASE = "+"
    DECREASE = "-"

    @classmethod
    def parse(cls, raw: str) -> "EffectOperation | None":
        return _EFFECT_OPERATION_ALIASES.get(raw.strip().lower())


_SENTENCE_KIND_ALIASES: Dict[str, SentenceKind] = {
    "": SentenceKind.NARRATION,
    "default": SentenceKind.NARRATION,
    "narration": SentenceKind.NARRATION,
    "choice": SentenceKind.CHOICE,
    "check": SentenceKind.CHECK,
    "multicheck": SentenceKind.MULTI_CHECK,
    "multi_check": SentenceKind.MULTI_CHECK,
}

_CHECK_KIND_ALIASES: Dict[str, CheckKind] = {
    "money": CheckKind.MONEY,
    "tech": CheckKind.TECH,
    "globaltag": CheckKind.GLOBAL_TAG,
    "global_tag": CheckKind.GLOBAL_TAG,
    "diceroll": CheckKind.DICE_ROLL,
    "dice_roll": CheckKind.DICE_ROLL,
    "dice": CheckKind.DICE_ROLL,
}

_EFFECT_KIND_ALIASES: Dict[str, EffectKind] = {
    "money": EffectKind.MONEY,
    "disciple": EffectKind.DISCIPLE,
    "disciples": EffectKind.DISCIPLE,
    "globaltag": EffectKind.GLOBAL_TAG,
    "global_tag": EffectKind.GLOBAL_TAG,
}

_EFFECT_OPERATION_ALIASES: Dict[str, EffectOperation] = {
    "+": EffectOperation.INCREASE,
    "increase": EffectOperation.INCREASE,
    "-": EffectOperation.DECREASE,
    "decrease": EffectOperation.DECREASE,
}


@dataclass(frozen=True, slots=True)
class ChoiceOption:
    """Selectable option of a choice sentence."""

    text: str
    target: str = ""


@dataclass(frozen=True, slots=True)
class CheckCondition:
    """Single condition evaluated by a check or multi-check sentence."""

    difficulty_class: int = 0
    kind: CheckKind | None = None
    reference_id: str = ""
    raw_kind: str = ""

    @property
    def effective_difficulty(self) -> int:
        """Difficulty after boolean checks are clamped to 1."""
        if self.kind is not None and self.kind.is_boolean:
            return 1
        return self.difficulty_class


@dataclass(frozen=True, slots=True)
class MultiCheckTarget:
    """Jump rule of a multi-check sentence."""

    priority: int = 0
    required_indices: Tuple[int, ...] = ()
    target: str = ""
    description: str = ""


@dataclass(frozen=True, slots=True)
class EffectDef:
    """Side effect applied after a sentence is dispatched."""

    kind: EffectKind | None
    amount: int = 0
    reference_id: str = ""
    operation: EffectOperation | None = None
    raw_kind: str = ""
    raw_operation: str = ""


@dataclass(frozen=True, slots=True)
class DialogueSentence:
    """One step of a dialogue event; only the fields of ``kind`` are consulted."""

    kind: SentenceKind = SentenceKind.NARRATION
    id: str = ""
    speaker: str = ""
    text: str = ""
    target: str = ""
    question: str = ""
    choices: Tuple[ChoiceOption, ...] = ()
    check: CheckCondition = field(default_factory=CheckCondition)
    success_target: str = ""
    failure_target: str = ""
    show_result: bool = True
    multi_conditions: Tuple[CheckCondition, ...] = ()
    multi_targets: Tuple[MultiCheckTarget, ...] = ()
    effects: Tuple[EffectDef, ...] = ()
    raw_kind: str = ""


@dataclass(frozen=True, slots=True)
class DialogueEvent:
    """Fully parsed dialogue event."""

    id: str
    sentences: Tuple[DialogueSentence, ...] = ()
    title: str = ""
    dice_limit: int = 0

    def label_index(self) -> Dict[str, int]:
        """Map sentence labels to indices; the first occurrence of a label wins."""
        index: Dict[str, int] = {}
        for position, sentence in enumerate(self.sentences):
            if not sentence.id:
                continue
            if sentence.id in index:
                logger.warning("Conflicting sentence id '%s' in event '%s'", sentence.id, self.id)
                continue
            index[sentence.id] = position
        return index
