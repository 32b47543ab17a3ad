"""Repository for dialogue event scripts."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from sectscript.data import paths
from sectscript.data.errors import DataError, DataValidationError
from sectscript.data.json_loader import load_json_object
from sectscript.data.repositories.base import RepositoryBase
from sectscript.domain.defs import (
    CheckCondition,
    CheckKind,
    ChoiceOption,
    DialogueEvent,
    DialogueSentence,
    EffectDef,
    EffectKind,
    EffectOperation,
    MultiCheckTarget,
    SentenceKind,
)

logger = logging.getLogger(__name__)


class DialogueRepository(RepositoryBase[DialogueEvent]):
    """Loads one ``<event_id>.json`` file per dialogue event.

    The event id always comes from the file name, never from the file content.
    Parsed events are cached by id.
    """

    def __init__(self, base_path=None) -> None:
        super().__init__("", base_path)
        self._definitions = {}

    def _event_dir(self) -> Path:
        return paths.get_dialogues_path(self._base_path)

    def get(self, def_id: str) -> DialogueEvent:
        """Return the parsed event; raises DataLoadError if its file is missing."""
        assert self._definitions is not None
        cached = self._definitions.get(def_id)
        if cached is not None:
            return cached
        event = self._parse_event(def_id, load_json_object(self._event_dir() / f"{def_id}.json"))
        self._definitions[def_id] = event
        return event

    def has(self, def_id: str) -> bool:
        return (self._event_dir() / f"{def_id}.json").is_file()

    def load_event_definition(self, event_id: str) -> DialogueEvent | None:
        """Return the event, or None after logging when it cannot be loaded."""
        try:
            return self.get(event_id)
        except DataError as exc:
            logger.error("Dialogue event '%s' could not be loaded: %s", event_id, exc)
            return None

    def all_event_ids(self) -> List[str]:
        directory = self._event_dir()
        if not directory.is_dir():
            return []
        return sorted(path.stem for path in directory.glob("*.json"))

    def all(self) -> List[DialogueEvent]:
        return [self.get(event_id) for event_id in self.all_event_ids()]

    def _parse_event(self, event_id: str, raw: dict[str, object]) -> DialogueEvent:
        dice_limit = self._require_int(raw.get("diceLimit", raw.get("dice_limit", 0)), f"event '{event_id}' diceLimit")
        if dice_limit < 0:
            raise DataValidationError(f"event '{event_id}' diceLimit must not be negative.")
        raw_sentences = self._require_list(raw.get("sentences", []), f"event '{event_id}' sentences")
        sentences = tuple(
            self._parse_sentence(entry, f"event '{event_id}' sentences[{index}]")
            for index, entry in enumerate(raw_sentences)
        )
        return DialogueEvent(
            id=event_id,
            title=self._optional_str(raw.get("title"), f"event '{event_id}' title"),
            dice_limit=dice_limit,
            sentences=sentences,
        )

    def _parse_sentence(self, entry: object, context: str) -> DialogueSentence:
        data = self._require_mapping(entry, context)
        raw_type = self._optional_str(data.get("type"), f"{context} type")
        kind = SentenceKind.parse(raw_type)
        if kind is None:
            logger.warning("%s has unknown type '%s', playing it as narration", context, raw_type)
            kind = SentenceKind.NARRATION

        choices = tuple(
            ChoiceOption(
                text=self._optional_str(choice.get("text"), f"{context} choices[{index}] text"),
                target=self._optional_str(choice.get("target"), f"{context} choices[{index}] target"),
            )
            for index, choice in enumerate(
                self._require_mapping(item, f"{context} choices")
                for item in self._require_list(data.get("choices", []), f"{context} choices")
            )
        )
        check = CheckCondition()
        if data.get("checkCondition") is not None:
            check = self._parse_condition(data["checkCondition"], f"{context} checkCondition")
        multi_conditions = tuple(
            self._parse_condition(item, f"{context} multiCheckConditions[{index}]")
            for index, item in enumerate(
                self._require_list(data.get("multiCheckConditions", []), f"{context} multiCheckConditions")
            )
        )
        multi_targets = tuple(
            self._parse_multi_target(item, f"{context} multiCheckTargets[{index}]")
            for index, item in enumerate(
                self._require_list(data.get("multiCheckTargets", []), f"{context} multiCheckTargets")
            )
        )
        effects = tuple(
            self._parse_effect(item, f"{context} effects[{index}]")
            for index, item in enumerate(self._require_list(data.get("effects", []), f"{context} effects"))
        )
        show_result = data.get("showCheckResult", data.get("showResult", True))
        if not isinstance(show_result, bool):
            raise DataValidationError(f"{context} showCheckResult must be a boolean.")

        return DialogueSentence(
            kind=kind,
            id=self._optional_str(data.get("id"), f"{context} id"),
            speaker=self._optional_str(data.get("speaker"), f"{context} speaker"),
            text=self._optional_str(data.get("text"), f"{context} text"),
            target=self._optional_str(data.get("target"), f"{context} target"),
            question=self._optional_str(data.get("question"), f"{context} question"),
            choices=choices,
            check=check,
            success_target=self._optional_str(data.get("successTarget"), f"{context} successTarget"),
            failure_target=self._optional_str(data.get("failureTarget"), f"{context} failureTarget"),
            show_result=show_result,
            multi_conditions=multi_conditions,
            multi_targets=multi_targets,
            effects=effects,
            raw_kind=raw_type,
        )

    def _parse_condition(self, entry: object, context: str) -> CheckCondition:
        data = self._require_mapping(entry, context)
        raw_kind = self._optional_str(data.get("checkWhat", data.get("checkKind")), f"{context} checkWhat")
        return CheckCondition(
            difficulty_class=self._parse_difficulty(data.get("difficultyClass", 0), f"{context} difficultyClass"),
            kind=CheckKind.parse(raw_kind),
            reference_id=self._optional_str(data.get("stringId", data.get("referenceId")), f"{context} stringId"),
            raw_kind=raw_kind,
        )

    def _parse_multi_target(self, entry: object, context: str) -> MultiCheckTarget:
        data = self._require_mapping(entry, context)
        indices = self._require_list(data.get("requiredConditionIndices", []), f"{context} requiredConditionIndices")
        return MultiCheckTarget(
            priority=self._require_int(data.get("priority", 0), f"{context} priority"),
            required_indices=tuple(self._require_int(value, f"{context} requiredConditionIndices") for value in indices),
            target=self._optional_str(data.get("targetID", data.get("target")), f"{context} targetID"),
            description=self._optional_str(data.get("description"), f"{context} description"),
        )

    def _parse_effect(self, entry: object, context: str) -> EffectDef:
        data = self._require_mapping(entry, context)
        raw_kind = self._optional_str(data.get("type", data.get("effectType")), f"{context} type")
        raw_operation = self._optional_str(data.get("operation"), f"{context} operation")
        return EffectDef(
            kind=EffectKind.parse(raw_kind),
            amount=self._require_int(data.get("intValue", data.get("amount", 0)), f"{context} intValue"),
            reference_id=self._optional_str(data.get("stringValue", data.get("referenceId")), f"{context} stringValue"),
            operation=EffectOperation.parse(raw_operation),
            raw_kind=raw_kind,
            raw_operation=raw_operation,
        )

    @staticmethod
    def _parse_difficulty(value: object, context: str) -> int:
        if isinstance(value, bool):
            raise DataValidationError(f"{context} must be an integer.")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError as exc:
                raise DataValidationError(f"{context} must be an integer.") from exc
        raise DataValidationError(f"{context} must be an integer.")
