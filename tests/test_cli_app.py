import json
from pathlib import Path

from sectscript.presentation.cli import app
from sectscript.presentation.cli.app import (
    ConsoleListener,
    assign_default_teams,
    build_runtime,
    run_playback,
    validate_all,
)
from sectscript.presentation.cli.config import default_config
from sectscript.data.repositories import DialogueRepository
from sectscript.domain.dice_models import RollerKind


def _scripted(*answers: str):
    remaining = list(answers)

    def read(prompt: str) -> str:
        return remaining.pop(0)

    return read


def _play(event_id: str, answers, *, money: int = 100):
    runtime = build_runtime(seed=1, money=money, cooldown_seconds=0)
    service = runtime.dialogue_service
    service.subscribe(ConsoleListener())
    assert service.enqueue_event(event_id)
    service.start_playback()
    run_playback(service, read=_scripted(*answers), sleep=lambda seconds: None, cooldown_seconds=0)
    return runtime


def test_merchant_tribute_pays_when_rich(capsys) -> None:
    runtime = _play("merchant_tribute", ["", ""], money=100)

    out = capsys.readouterr().out
    assert "=== The Merchant's Tribute ===" in out
    assert "Merchant: A merchant caravan" in out
    assert "[ Success! ]" in out
    assert "(The dialogue has ended.)" in out
    assert runtime.state.money == 50
    assert runtime.state.tag_values["merchant_guild_friendly"] is True


def test_gate_repairs_choice_menu(capsys) -> None:
    runtime = _play("gate_repairs", ["", "x", "2", ""], money=100)

    out = capsys.readouterr().out
    assert "How should the sect respond?" in out
    assert "Invalid selection. Please enter a number." in out
    assert runtime.state.money == 70
    assert runtime.state.tag_values["mountain_gate_repaired"] is True
    assert not runtime.dialogue_service.is_playing


def test_assign_default_teams_uses_ordinary_disciples() -> None:
    runtime = build_runtime(seed=1, cooldown_seconds=0)

    assign_default_teams(runtime, ["gate_repairs", "merchant_tribute"])

    assert runtime.roster.get_assigned_rollers("gate_repairs").count(RollerKind.ORDINARY) == 3
    assert runtime.roster.get_assigned_rollers("merchant_tribute").is_empty


def test_validate_all_reports_errors(tmp_path: Path, capsys) -> None:
    (tmp_path / "good.json").write_text(json.dumps({"sentences": [{"text": "fine"}]}), encoding="utf-8")
    (tmp_path / "bad.json").write_text(
        json.dumps({"sentences": [{"text": "lost", "target": "nowhere"}]}), encoding="utf-8"
    )
    (tmp_path / "broken.json").write_text("{", encoding="utf-8")

    code = validate_all(DialogueRepository(base_path=tmp_path))

    out = capsys.readouterr().out
    assert code == 1
    assert "[ERROR] MISSING_TARGET" in out
    assert "LOAD_FAILED" in out
    assert "Validated 3 dialogue event(s)." in out


def test_main_validate_shipped_dialogues(monkeypatch, capsys) -> None:
    monkeypatch.setattr(app, "load_config", default_config)

    assert app.main(["--validate"]) == 0
    assert "[ERROR]" not in capsys.readouterr().out


def test_main_lists_events_without_arguments(monkeypatch, capsys) -> None:
    monkeypatch.setattr(app, "load_config", default_config)

    assert app.main([]) == 0
    out = capsys.readouterr().out
    assert "- merchant_tribute" in out
    assert "- beast_tide" in out


def test_main_rejects_unknown_events(monkeypatch, capsys) -> None:
    monkeypatch.setattr(app, "load_config", default_config)

    assert app.main(["no_such_event", "--seed", "3"]) == 1
    assert "No playable dialogue events" in capsys.readouterr().out
