import json
from pathlib import Path

import pytest

from sectscript.data.repositories import RollersRepository
from sectscript.domain.defs import DialogueEvent
from sectscript.domain.dice_models import CompanionKind, ItemKind, RollerKind
from sectscript.domain.state import GameState
from sectscript.services.errors import AssignmentError
from sectscript.services.roster_service import DEFAULT_FACE_COUNT, RosterService


@pytest.fixture()
def rollers_repo(tmp_path: Path) -> RollersRepository:
    (tmp_path / "rollers.json").write_text(
        json.dumps({"ordinary": {"faces": 6}, "jingshi": {"faces": 8}, "yuezheng": {"face_set": [1, 2, 3]}}),
        encoding="utf-8",
    )
    return RollersRepository(base_path=tmp_path)


def _event(limit: int) -> DialogueEvent:
    return DialogueEvent(id="gate", dice_limit=limit)


def test_face_lookups(rollers_repo: RollersRepository) -> None:
    roster = RosterService(rollers_repo, GameState())

    assert roster.get_face_count(RollerKind.JINGSHI) == 8
    assert roster.get_face_count(RollerKind.JIANJUN) == DEFAULT_FACE_COUNT
    assert roster.get_face_set(RollerKind.YUEZHENG) == (1, 2, 3)
    assert roster.get_face_set(RollerKind.ORDINARY) == ()


def test_confirm_assignment_stores_counts(rollers_repo: RollersRepository) -> None:
    state = GameState(disciples=5, elites={"jingshi"}, companions={CompanionKind.HEN})
    roster = RosterService(rollers_repo, state)

    assignment = roster.confirm_assignment(
        _event(3), ["normal_0", "normal_1", "Jingshi"], companion=CompanionKind.HEN
    )

    assert assignment.count(RollerKind.ORDINARY) == 2
    assert assignment.count(RollerKind.JINGSHI) == 1
    assert assignment.companion is CompanionKind.HEN
    assert roster.get_assigned_rollers("gate") == assignment
    assert roster.get_assigned_rollers("elsewhere").is_empty


def test_confirm_assignment_consumes_item(rollers_repo: RollersRepository) -> None:
    state = GameState()
    roster = RosterService(rollers_repo, state)
    roster.add_item(ItemKind.LUCKY_CHARM.value, 1)

    roster.confirm_assignment(_event(1), ["normal_0"], item=ItemKind.LUCKY_CHARM)

    assert roster.item_quantity(ItemKind.LUCKY_CHARM.value) == 0
    with pytest.raises(AssignmentError):
        roster.confirm_assignment(_event(1), ["normal_0"], item=ItemKind.LUCKY_CHARM)


@pytest.mark.parametrize(
    ("limit", "members"),
    [
        (0, []),
        (2, ["normal_0"]),
        (2, ["jingshi", "jingshi"]),
        (1, ["jianjun"]),
        (1, ["stranger"]),
    ],
)
def test_confirm_assignment_rejects_invalid_teams(
    rollers_repo: RollersRepository, limit: int, members: list
) -> None:
    roster = RosterService(rollers_repo, GameState(elites={"jingshi"}))

    with pytest.raises(AssignmentError):
        roster.confirm_assignment(_event(limit), members)


def test_confirm_assignment_needs_enough_disciples(rollers_repo: RollersRepository) -> None:
    roster = RosterService(rollers_repo, GameState(disciples=1))

    with pytest.raises(AssignmentError):
        roster.confirm_assignment(_event(2), ["normal_0", "normal_1"])


def test_confirm_assignment_needs_joined_companion(rollers_repo: RollersRepository) -> None:
    roster = RosterService(rollers_repo, GameState())

    with pytest.raises(AssignmentError):
        roster.confirm_assignment(_event(1), ["normal_0"], companion=CompanionKind.SHEEP)
