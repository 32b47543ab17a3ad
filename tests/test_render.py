"""Tests for CLI rendering utilities."""
from sectscript.domain.defs import ChoiceOption
from sectscript.domain.dice_models import DiceResult
from sectscript.presentation.cli.render import (
    debug_enabled,
    format_dice_panel,
    format_sentence,
    render_choices,
    wrap_text,
)


def test_debug_enabled_requires_exact_flag(monkeypatch) -> None:
    monkeypatch.delenv("SECTSCRIPT_DEBUG", raising=False)
    assert debug_enabled() is False
    monkeypatch.setenv("SECTSCRIPT_DEBUG", "true")
    assert debug_enabled() is False
    monkeypatch.setenv("SECTSCRIPT_DEBUG", "1")
    assert debug_enabled() is True


def test_wrap_text_keeps_words_whole() -> None:
    text = "The elders gather in the hall while rain hammers the roof tiles of the sect"
    result = wrap_text(text, width=30)

    assert len(result) > 1
    assert all(len(line) <= 30 for line in result)
    assert " ".join(result) == text


def test_format_sentence_prefixes_speaker(monkeypatch) -> None:
    monkeypatch.delenv("SECTSCRIPT_DEBUG", raising=False)

    assert format_sentence("Elder", "Sit down.", "greet") == ["Elder: Sit down."]
    assert format_sentence("", "Rain falls.") == ["Rain falls."]


def test_format_sentence_shows_label_in_debug(monkeypatch) -> None:
    monkeypatch.setenv("SECTSCRIPT_DEBUG", "1")

    assert format_sentence("Elder", "Sit down.", "greet") == ["[greet]", "Elder: Sit down."]


def test_render_choices_numbers_options(monkeypatch, capsys) -> None:
    monkeypatch.delenv("SECTSCRIPT_DEBUG", raising=False)

    render_choices("Which way?", [ChoiceOption("North", "n"), ChoiceOption("South")])

    out = capsys.readouterr().out
    assert "Which way?" in out
    assert "1. North" in out
    assert "2. South" in out
    assert "->" not in out


def test_format_dice_panel_trace_toggle() -> None:
    result = DiceResult(total=9, trace="1d6 = 4\n1d6 = 5")

    assert format_dice_panel(result, 8) == ["Dice roll against DC 8", "  1d6 = 4", "  1d6 = 5", "Total: 9"]
    assert format_dice_panel(result, 8, show_trace=False) == ["Dice roll against DC 8", "Total: 9"]
