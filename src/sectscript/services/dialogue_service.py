"""Dialogue playback: the sentence interpreter driven by advance and choice signals."""
from __future__ import annotations

import logging
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Iterator, List, Sequence, Tuple

from sectscript.core.types import TERMINAL_LABEL, PlaybackState
from sectscript.domain.defs import (
    CheckCondition,
    CheckKind,
    ChoiceOption,
    DialogueEvent,
    DialogueSentence,
    EffectDef,
    SentenceKind,
)
from sectscript.domain.dice_models import DiceResult
from sectscript.services.check_service import CheckOutcome, CheckService
from sectscript.services.effect_service import EffectService
from sectscript.services.errors import DialogueInvariantError
from sectscript.services.multi_check_service import MultiCheckService
from sectscript.services.ports import EventSource

logger = logging.getLogger(__name__)

DEFAULT_COOLDOWN_SECONDS = 0.5


@dataclass(frozen=True, slots=True)
class PlaybackEvent:
    """Base class for notifications sent to the presentation layer."""


@dataclass(frozen=True, slots=True)
class TitleShownEvent(PlaybackEvent):
    title: str


@dataclass(frozen=True, slots=True)
class SentenceShownEvent(PlaybackEvent):
    speaker: str
    text: str
    label: str = ""


@dataclass(frozen=True, slots=True)
class ChoiceModeEnteredEvent(PlaybackEvent):
    pass


@dataclass(frozen=True, slots=True)
class ChoicesShownEvent(PlaybackEvent):
    question: str
    options: Tuple[ChoiceOption, ...]


@dataclass(frozen=True, slots=True)
class ChoiceModeExitedEvent(PlaybackEvent):
    index: int
    option: ChoiceOption


@dataclass(frozen=True, slots=True)
class DicePanelShownEvent(PlaybackEvent):
    """Roll outcome shown before the check verdict; ``advance`` continues."""

    dice_result: DiceResult
    difficulty: int


@dataclass(frozen=True, slots=True)
class CheckResolvedEvent(PlaybackEvent):
    description: str
    success: bool


@dataclass(frozen=True, slots=True)
class EffectAppliedEvent(PlaybackEvent):
    effect: EffectDef
    applied: bool


@dataclass(frozen=True, slots=True)
class PlaybackEndedEvent(PlaybackEvent):
    pass


@dataclass(frozen=True, slots=True)
class PendingDiceCheck:
    """Dice rolled for a check whose verdict waits for the continue signal."""

    result: DiceResult
    sentence_index: int
    condition: CheckCondition


Listener = Callable[[PlaybackEvent], None]


class DialogueService:
    """Plays queued dialogue events one sentence at a time.

    Narration waits for ``advance``; choices wait for ``select_choice``; checks
    and multi-checks resolve on the spot and jump. Dice checks are split in two:
    the roll is shown first and the verdict follows the next ``advance``.
    Listeners receive notifications synchronously, in emission order.
    """

    def __init__(
        self,
        event_source: EventSource,
        check_service: CheckService,
        effect_service: EffectService,
        *,
        multi_check_service: MultiCheckService | None = None,
        clock: Callable[[], float] = time.monotonic,
        cooldown_seconds: float = DEFAULT_COOLDOWN_SECONDS,
        terminal_label: str = TERMINAL_LABEL,
    ) -> None:
        self._event_source = event_source
        self._check_service = check_service
        self._effect_service = effect_service
        self._multi_check_service = multi_check_service or MultiCheckService(check_service)
        self._clock = clock
        self._cooldown_seconds = cooldown_seconds
        self._terminal_label = terminal_label

        self._queue: Deque[DialogueEvent] = deque()
        self._event: DialogueEvent | None = None
        self._cursor = 0
        self._labels: Dict[str, int] = {}
        self._playing = False
        self._dispatching = False
        self._drained = False
        self._choice_mode = False
        self._cooldown_until: float | None = None
        self._pending_dice: PendingDiceCheck | None = None
        self._listeners: List[Listener] = []

    # -- observers -------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, notification: PlaybackEvent) -> None:
        for listener in list(self._listeners):
            listener(notification)

    # -- read-only state -------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        if self._dispatching:
            return PlaybackState.PLAYING_EVENT
        if not self._playing:
            return PlaybackState.DRAINED if self._drained else PlaybackState.IDLE
        if self._choice_mode:
            return PlaybackState.AWAITING_CHOICE
        if self._pending_dice is not None:
            return PlaybackState.AWAITING_DICE_CONTINUATION
        if self.is_on_cooldown:
            return PlaybackState.COOLDOWN
        return PlaybackState.AWAITING_ADVANCE

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_in_choice_mode(self) -> bool:
        return self._choice_mode

    @property
    def is_on_cooldown(self) -> bool:
        return self._cooldown_until is not None and self._clock() < self._cooldown_until

    @property
    def current_event(self) -> DialogueEvent | None:
        return self._event

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def pending_dice(self) -> PendingDiceCheck | None:
        return self._pending_dice

    @property
    def queued_event_ids(self) -> List[str]:
        return [event.id for event in self._queue]

    # -- entry points ----------------------------------------------------

    def enqueue_event(self, event_id: str) -> bool:
        """Load ``event_id`` and queue it; an unknown event is logged and skipped."""
        event = self._event_source.load_event_definition(event_id)
        if event is None:
            logger.error("Dialogue event not found: %s", event_id)
            return False
        self.enqueue(event)
        return True

    def enqueue(self, event: DialogueEvent) -> None:
        self._queue.append(event)
        logger.info("Dialogue event queued: %s", event.id)

    def enqueue_many(self, event_ids: Sequence[str]) -> int:
        return sum(1 for event_id in event_ids if self.enqueue_event(event_id))

    def start_playback(self) -> bool:
        if self._playing:
            logger.info("start_playback called but a dialogue is already playing")
            return False
        if not self._queue:
            logger.info("start_playback called but the queue is empty")
            return False
        self._playing = True
        self._drained = False
        self._event = None
        with self._dispatch_scope():
            self._run()
        return True

    def advance(self) -> bool:
        """Move past the current narration or dice panel; ignored while blocked."""
        if self._dispatching:
            logger.debug("advance ignored while a sentence is being dispatched")
            return False
        if not self._playing or self._choice_mode or self.is_on_cooldown:
            return False
        with self._dispatch_scope():
            if self._pending_dice is not None:
                self._continue_dice_check()
            else:
                self._cursor = self.resolve_next(self._current_sentence().target)
            self._run()
        return True

    def select_choice(self, index: int) -> bool:
        if self._dispatching:
            logger.debug("select_choice ignored while a sentence is being dispatched")
            return False
        if not self._choice_mode:
            return False
        sentence = self._current_sentence()
        if not 0 <= index < len(sentence.choices):
            logger.error("Invalid choice index: %d", index)
            return False
        option = sentence.choices[index]
        self._choice_mode = False
        with self._dispatch_scope():
            self._emit(ChoiceModeExitedEvent(index=index, option=option))
            self._cursor = self.resolve_next(option.target)
            self._run()
        return True

    def clear_queue(self) -> None:
        self._queue.clear()
        self._labels.clear()
        self._end_playback()

    def resolve_next(self, target: str) -> int:
        """Return the cursor position a jump to ``target`` lands on.

        The result is always within ``[0, sentence count]``; the sentence count
        itself ends the current event.
        """
        count = len(self._event.sentences) if self._event is not None else 0
        sequential = min(self._cursor + 1, count)
        if not target:
            return sequential
        if target == self._terminal_label:
            return count
        index = self._labels.get(target)
        if index is None or not 0 <= index < count:
            event_id = self._event.id if self._event is not None else ""
            logger.error("Jump target '%s' not found in event '%s', playing the next sentence", target, event_id)
            return sequential
        logger.debug("Jumped to %s (index %d)", target, index)
        return index

    # -- interpreter loop ------------------------------------------------

    @contextmanager
    def _dispatch_scope(self) -> Iterator[None]:
        self._dispatching = True
        try:
            yield
        finally:
            self._dispatching = False

    def _run(self) -> None:
        # sentences played since the last stop for input
        steps = 0
        while self._playing:
            if self._event is None or self._cursor >= len(self._event.sentences):
                self._play_next_event()
                steps = 0
                continue
            if steps > len(self._event.sentences):
                logger.error("Event '%s' keeps jumping without waiting for input, ending it", self._event.id)
                self._cursor = len(self._event.sentences)
                continue
            steps += 1
            if self._dispatch(self._event.sentences[self._cursor]):
                return

    def _play_next_event(self) -> None:
        self._labels.clear()
        if not self._queue:
            self._end_playback()
            return
        event = self._queue.popleft()
        self._event = event
        self._cursor = 0
        logger.info("Playing dialogue event: %s", event.id)
        if event.title:
            self._emit(TitleShownEvent(title=f"=== {event.title} ==="))
        self._labels = event.label_index()

    def _end_playback(self) -> None:
        self._playing = False
        self._choice_mode = False
        self._pending_dice = None
        self._cooldown_until = None
        self._event = None
        self._cursor = 0
        self._labels.clear()
        self._drained = True
        logger.info("All dialogue event playback completed")
        self._emit(PlaybackEndedEvent())

    def _dispatch(self, sentence: DialogueSentence) -> bool:
        """Play one sentence; True when playback now waits for a signal."""
        if sentence.kind is SentenceKind.CHOICE:
            return self._play_choice(sentence)
        if sentence.kind is SentenceKind.CHECK:
            return self._play_check(sentence)
        if sentence.kind is SentenceKind.MULTI_CHECK:
            return self._play_multi_check(sentence)
        self._emit(SentenceShownEvent(speaker=sentence.speaker, text=sentence.text, label=sentence.id))
        self._apply_effects(sentence)
        self._start_cooldown()
        return True

    def _play_choice(self, sentence: DialogueSentence) -> bool:
        if not sentence.choices:
            logger.error("Choice sentence %d of '%s' has no options", self._cursor, self._event_id())
            self._apply_effects(sentence)
            self._cursor = self.resolve_next(sentence.target)
            return False
        self._choice_mode = True
        self._emit(ChoiceModeEnteredEvent())
        self._emit(ChoicesShownEvent(question=sentence.question, options=sentence.choices))
        self._apply_effects(sentence)
        return True

    def _play_check(self, sentence: DialogueSentence) -> bool:
        if sentence.check.kind is CheckKind.DICE_ROLL:
            self._begin_dice_check(sentence)
            return True
        outcome = self._check_service.resolve(sentence.check, event_id=self._event_id())
        self._finish_check(sentence, outcome)
        return False

    def _begin_dice_check(self, sentence: DialogueSentence) -> None:
        if self._pending_dice is not None:
            raise DialogueInvariantError("A dice check is already waiting for its continuation.")
        result = self._check_service.roll_for(self._event_id())
        self._pending_dice = PendingDiceCheck(result=result, sentence_index=self._cursor, condition=sentence.check)
        self._emit(DicePanelShownEvent(dice_result=result, difficulty=sentence.check.effective_difficulty))
        self._start_cooldown()

    def _continue_dice_check(self) -> None:
        pending = self._pending_dice
        assert pending is not None and self._event is not None
        self._pending_dice = None
        sentence = self._event.sentences[pending.sentence_index]
        outcome = self._check_service.resolve(
            pending.condition, event_id=self._event_id(), dice_result=pending.result
        )
        self._finish_check(sentence, outcome)

    def _finish_check(self, sentence: DialogueSentence, outcome: CheckOutcome) -> None:
        if sentence.show_result:
            self._emit(CheckResolvedEvent(description=outcome.description, success=outcome.success))
        self._apply_effects(sentence)
        self._start_cooldown()
        self._cursor = self.resolve_next(sentence.success_target if outcome.success else sentence.failure_target)

    def _play_multi_check(self, sentence: DialogueSentence) -> bool:
        if not sentence.multi_conditions:
            logger.error("Multi-check sentence %d of '%s' has no conditions", self._cursor, self._event_id())
            self._apply_effects(sentence)
            self._cursor = self.resolve_next(sentence.target)
            return False
        outcome = self._multi_check_service.resolve(
            sentence.multi_conditions, sentence.multi_targets, event_id=self._event_id()
        )
        if sentence.show_result:
            self._emit(CheckResolvedEvent(description=outcome.description, success=outcome.matched is not None))
        self._apply_effects(sentence)
        self._start_cooldown()
        self._cursor = self.resolve_next(outcome.target)
        return False

    def _apply_effects(self, sentence: DialogueSentence) -> None:
        for record in self._effect_service.apply(sentence.effects):
            self._emit(EffectAppliedEvent(effect=record.effect, applied=record.applied))

    def _start_cooldown(self) -> None:
        self._cooldown_until = self._clock() + self._cooldown_seconds

    def _current_sentence(self) -> DialogueSentence:
        assert self._event is not None
        return self._event.sentences[self._cursor]

    def _event_id(self) -> str:
        return self._event.id if self._event is not None else ""
