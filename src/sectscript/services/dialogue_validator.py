"""Static dialogue script validation utilities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from sectscript.core.types import TERMINAL_LABEL
from sectscript.domain.defs import (
    CheckCondition,
    CheckKind,
    DialogueEvent,
    DialogueSentence,
    SentenceKind,
)


Severity = str


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def has_errors(issues: Iterable[Issue]) -> bool:
    return any(issue.severity == "ERROR" for issue in issues)


def validate_dialogue_event(event: DialogueEvent, *, terminal_label: str = TERMINAL_LABEL) -> list[Issue]:
    """Report broken jumps, malformed sentences and unreachable sentences."""
    issues: list[Issue] = []
    labels: dict[str, int] = {}
    for index, sentence in enumerate(event.sentences):
        if not sentence.id:
            continue
        if sentence.id in labels:
            issues.append(
                Issue(
                    severity="WARN",
                    code="DUPLICATE_LABEL",
                    message="Sentence label already used; the first occurrence wins.",
                    context={"event_id": event.id, "label": sentence.id, "index": str(index)},
                )
            )
            continue
        labels[sentence.id] = index

    for index, sentence in enumerate(event.sentences):
        context = {"event_id": event.id, "index": str(index)}
        _validate_sentence(event, sentence, context, issues)
        for field_path, target in _jump_targets(sentence):
            if target and target != terminal_label and target not in labels:
                issues.append(
                    Issue(
                        severity="ERROR",
                        code="MISSING_TARGET",
                        message="Jump target does not match any sentence label.",
                        context={**context, "field_path": field_path, "referenced_id": target},
                    )
                )

    for index in _non_waiting_cycles(event, labels, terminal_label):
        issues.append(
            Issue(
                severity="ERROR",
                code="NON_WAITING_CYCLE",
                message="Sentence can jump back to itself without stopping for input.",
                context={"event_id": event.id, "index": str(index)},
            )
        )

    for index in _unreachable(event, labels, terminal_label):
        issues.append(
            Issue(
                severity="WARN",
                code="UNREACHABLE_SENTENCE",
                message="Sentence can never be played.",
                context={"event_id": event.id, "index": str(index)},
            )
        )
    return issues


def validate_dialogue_events(events: Sequence[DialogueEvent]) -> list[Issue]:
    issues: list[Issue] = []
    for event in events:
        issues.extend(validate_dialogue_event(event))
    return issues


def _validate_sentence(
    event: DialogueEvent,
    sentence: DialogueSentence,
    context: dict[str, str],
    issues: list[Issue],
) -> None:
    if SentenceKind.parse(sentence.raw_kind) is None:
        issues.append(
            Issue(
                severity="WARN",
                code="UNKNOWN_SENTENCE_KIND",
                message="Unknown sentence type; it plays as narration.",
                context={**context, "type": sentence.raw_kind},
            )
        )
    if sentence.kind is SentenceKind.CHOICE and not sentence.choices:
        issues.append(
            Issue(
                severity="ERROR",
                code="EMPTY_CHOICES",
                message="Choice sentence has no options.",
                context=context,
            )
        )
    if sentence.kind is SentenceKind.CHECK:
        _validate_condition(event, sentence.check, {**context, "field_path": "checkCondition"}, issues)
    if sentence.kind is SentenceKind.MULTI_CHECK:
        if not sentence.multi_conditions:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="EMPTY_MULTI_CHECK",
                    message="Multi-check sentence has no conditions.",
                    context=context,
                )
            )
        for position, condition in enumerate(sentence.multi_conditions):
            _validate_condition(
                event, condition, {**context, "field_path": f"multiCheckConditions[{position}]"}, issues
            )
        for position, target in enumerate(sentence.multi_targets):
            for required in target.required_indices:
                if not 0 <= required < len(sentence.multi_conditions):
                    issues.append(
                        Issue(
                            severity="ERROR",
                            code="CONDITION_INDEX_OUT_OF_RANGE",
                            message="Multi-check target requires a condition that does not exist.",
                            context={
                                **context,
                                "field_path": f"multiCheckTargets[{position}].requiredConditionIndices",
                                "value": str(required),
                            },
                        )
                    )
    for position, effect in enumerate(sentence.effects):
        if effect.kind is None or effect.operation is None:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="UNKNOWN_EFFECT",
                    message="Effect type or operation is not recognized.",
                    context={
                        **context,
                        "field_path": f"effects[{position}]",
                        "type": effect.raw_kind,
                        "operation": effect.raw_operation,
                    },
                )
            )


def _validate_condition(
    event: DialogueEvent,
    condition: CheckCondition,
    context: dict[str, str],
    issues: list[Issue],
) -> None:
    if condition.kind is None:
        issues.append(
            Issue(
                severity="ERROR",
                code="UNKNOWN_CHECK_KIND",
                message="Check kind is not recognized; the check always fails.",
                context={**context, "kind": condition.raw_kind},
            )
        )
    elif condition.kind is CheckKind.DICE_ROLL and event.dice_limit == 0:
        issues.append(
            Issue(
                severity="WARN",
                code="DICE_CHECK_WITHOUT_ROLLERS",
                message="Dice check in an event that accepts no rollers.",
                context=context,
            )
        )


def _jump_targets(sentence: DialogueSentence) -> list[tuple[str, str]]:
    if sentence.kind is SentenceKind.CHOICE:
        return [(f"choices[{index}].target", choice.target) for index, choice in enumerate(sentence.choices)]
    if sentence.kind is SentenceKind.CHECK:
        return [("successTarget", sentence.success_target), ("failureTarget", sentence.failure_target)]
    if sentence.kind is SentenceKind.MULTI_CHECK:
        targets = [
            (f"multiCheckTargets[{index}].targetID", target.target)
            for index, target in enumerate(sentence.multi_targets)
        ]
        if not sentence.multi_conditions:
            targets.append(("target", sentence.target))
        return targets
    return [("target", sentence.target)]


def _successors(event: DialogueEvent, index: int, labels: dict[str, int], terminal_label: str) -> list[int]:
    count = len(event.sentences)

    def land(target: str) -> int | None:
        if target == terminal_label:
            return None
        if target in labels:
            return labels[target]
        return index + 1 if index + 1 < count else None

    sentence = event.sentences[index]
    landings = [land(target) for _, target in _jump_targets(sentence)]
    if sentence.kind is SentenceKind.MULTI_CHECK and sentence.multi_conditions:
        # no target satisfied
        landings.append(land(""))
    if sentence.kind is SentenceKind.CHOICE and not sentence.choices:
        landings.append(land(sentence.target))
    return [next_index for next_index in landings if next_index is not None]


def _waits_for_input(sentence: DialogueSentence) -> bool:
    if sentence.kind is SentenceKind.CHOICE:
        return bool(sentence.choices)
    if sentence.kind is SentenceKind.CHECK:
        return sentence.check.kind is CheckKind.DICE_ROLL
    return sentence.kind is not SentenceKind.MULTI_CHECK


def _unreachable(event: DialogueEvent, labels: dict[str, int], terminal_label: str) -> list[int]:
    count = len(event.sentences)
    seen: set[int] = set()
    pending = [0] if count else []
    while pending:
        index = pending.pop()
        if index in seen:
            continue
        seen.add(index)
        pending.extend(_successors(event, index, labels, terminal_label))
    return [index for index in range(count) if index not in seen]


def _non_waiting_cycles(event: DialogueEvent, labels: dict[str, int], terminal_label: str) -> list[int]:
    """Sentences that can reach themselves through sentences that never wait."""
    looping: list[int] = []
    for start, sentence in enumerate(event.sentences):
        if _waits_for_input(sentence):
            continue
        seen: set[int] = set()
        pending = _successors(event, start, labels, terminal_label)
        while pending:
            index = pending.pop()
            if index == start:
                looping.append(start)
                break
            if index in seen or _waits_for_input(event.sentences[index]):
                continue
            seen.add(index)
            pending.extend(_successors(event, index, labels, terminal_label))
    return looping
