import json
from pathlib import Path

import pytest

from sectscript.data.repositories import GlobalTagsRepository, TechRepository
from sectscript.domain.state import GameState
from sectscript.services.resource_service import ResourceService
from sectscript.services.tag_service import MISSING_TAG_DESCRIPTION, TagService
from sectscript.services.tech_service import TechService


@pytest.fixture()
def definitions_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "definitions"
    directory.mkdir()
    (directory / "tags.json").write_text(
        json.dumps(
            {
                "tags": [
                    {"tagID": "gate", "isTrue": False, "descriptionTrue": "Gate up", "descriptionFalse": "Gate down"},
                    {"tagID": "guild", "isTrue": True},
                ]
            }
        ),
        encoding="utf-8",
    )
    (directory / "techs.json").write_text(
        json.dumps(
            {
                "nodes": [
                    {"id": "breathing", "name": "Breathing", "cost": 0},
                    {"id": "talisman", "name": "Talisman Craft", "cost": 80, "prerequisites": ["breathing"]},
                ]
            }
        ),
        encoding="utf-8",
    )
    return directory


def test_tag_service_seeds_initial_values(definitions_dir: Path) -> None:
    state = GameState()
    tags = TagService(GlobalTagsRepository(base_path=definitions_dir), state)

    assert state.tag_values == {"gate": False, "guild": True}
    assert tags.enabled_tag_ids() == ["guild"]


def test_tag_service_toggles_and_describes(definitions_dir: Path) -> None:
    tags = TagService(GlobalTagsRepository(base_path=definitions_dir), GameState())

    tags.enable_tag("gate")
    assert tags.get_tag_value("gate") is True
    tags.toggle_tag("gate")
    assert tags.get_tag_value("gate") is False
    assert tags.get_tag_description("gate", True) == "Gate up"
    assert tags.get_tag_description("gate", False) == "Gate down"


def test_tag_service_unknown_tag(definitions_dir: Path) -> None:
    state = GameState()
    tags = TagService(GlobalTagsRepository(base_path=definitions_dir), state)

    tags.set_tag_value("ghost", True)

    assert tags.tag_exists("ghost") is False
    assert tags.get_tag_value("ghost") is False
    assert tags.get_tag_description("ghost", True) == MISSING_TAG_DESCRIPTION
    assert "ghost" not in state.tag_values


def test_tech_unlock_requires_prerequisites_and_money(definitions_dir: Path) -> None:
    state = GameState(money=100)
    techs = TechService(TechRepository(base_path=definitions_dir), ResourceService(state), state)

    assert techs.can_unlock_tech("talisman") is False
    assert techs.unlock_tech("breathing") is True
    assert techs.unlock_tech("talisman") is True
    assert state.money == 20
    assert techs.is_tech_unlocked("talisman") is True
    assert techs.unlock_tech("talisman") is False


def test_tech_unlock_refused_when_poor(definitions_dir: Path) -> None:
    state = GameState(money=10, unlocked_techs={"breathing"})
    techs = TechService(TechRepository(base_path=definitions_dir), ResourceService(state), state)

    assert techs.unlock_tech("talisman") is False
    assert state.money == 10


def test_tech_display_name_falls_back_to_id(definitions_dir: Path) -> None:
    state = GameState()
    techs = TechService(TechRepository(base_path=definitions_dir), ResourceService(state), state)

    assert techs.get_tech_display_name("talisman") == "Talisman Craft"
    assert techs.get_tech_display_name("unknown") == "unknown"
    assert techs.is_tech_unlocked("unknown") is False
