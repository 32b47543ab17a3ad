from __future__ import annotations

from pathlib import Path

import pytest

from sectscript.data import paths
from sectscript.data.json_loader import load_json
from sectscript.data.repositories import (
    DialogueRepository,
    GlobalTagsRepository,
    RollersRepository,
    TechRepository,
)
from sectscript.domain.defs import CheckKind, EffectKind
from sectscript.domain.dice_models import RollerKind
from sectscript.services.dialogue_validator import format_issue, validate_dialogue_event


@pytest.fixture(scope="module")
def definitions_dir() -> Path:
    """Return the canonical definitions directory."""
    return paths.get_definitions_path()


@pytest.mark.parametrize("filename", ["tags.json", "techs.json", "rollers.json"])
def test_definition_files_are_valid_json(definitions_dir: Path, filename: str) -> None:
    assert isinstance(load_json(definitions_dir / filename), dict)


def test_every_roller_kind_has_a_die() -> None:
    repo = RollersRepository()

    for kind in RollerKind:
        assert repo.has(kind.value), kind


def test_shipped_dialogues_validate_cleanly() -> None:
    repo = DialogueRepository()
    event_ids = repo.all_event_ids()
    assert event_ids

    problems = [
        format_issue(issue)
        for event in repo.all()
        for issue in validate_dialogue_event(event)
    ]

    assert problems == []


def test_shipped_dialogues_reference_known_definitions() -> None:
    tags = GlobalTagsRepository()
    techs = TechRepository()

    for event in DialogueRepository().all():
        for sentence in event.sentences:
            conditions = [sentence.check, *sentence.multi_conditions]
            for condition in conditions:
                if condition.kind is CheckKind.GLOBAL_TAG:
                    assert tags.has(condition.reference_id), (event.id, condition.reference_id)
                if condition.kind is CheckKind.TECH:
                    assert techs.has(condition.reference_id), (event.id, condition.reference_id)
            for effect in sentence.effects:
                if effect.kind is EffectKind.GLOBAL_TAG:
                    assert tags.has(effect.reference_id), (event.id, effect.reference_id)
