"""Shared CLI rendering helpers."""
from __future__ import annotations

import os
import textwrap
from typing import Sequence

from sectscript.domain.defs import ChoiceOption
from sectscript.domain.dice_models import DiceResult

_TEXT_WIDTH = 72


def debug_enabled() -> bool:
    """Return True only when SECTSCRIPT_DEBUG is explicitly set to '1'."""
    return os.getenv("SECTSCRIPT_DEBUG") == "1"


def wrap_text(text: str, width: int = _TEXT_WIDTH) -> list[str]:
    """Wrap each paragraph of ``text`` on word boundaries."""
    if not text:
        return [""]
    lines: list[str] = []
    for paragraph in text.splitlines() or [""]:
        lines.extend(
            textwrap.wrap(paragraph, width=width, break_long_words=False, break_on_hyphens=False) or [""]
        )
    return lines


def render_heading(title: str) -> None:
    print(f"\n{title}")


def format_sentence(speaker: str, text: str, label: str = "") -> list[str]:
    lines = []
    if debug_enabled() and label:
        lines.append(f"[{label}]")
    body = wrap_text(text)
    if speaker:
        body[0] = f"{speaker}: {body[0]}"
    lines.extend(body)
    return lines


def render_sentence(speaker: str, text: str, label: str = "") -> None:
    for line in format_sentence(speaker, text, label):
        print(line)


def render_choices(question: str, options: Sequence[ChoiceOption]) -> None:
    """Display the question and numbered options."""
    if question:
        print(f"\n{question}")
    for idx, option in enumerate(options, start=1):
        suffix = f" -> {option.target or '(next)'}" if debug_enabled() else ""
        print(f"{idx}. {option.text}{suffix}")


def format_dice_panel(result: DiceResult, difficulty: int, *, show_trace: bool = True) -> list[str]:
    lines = [f"Dice roll against DC {difficulty}"]
    if show_trace:
        lines.extend(f"  {line}" for line in result.trace.splitlines())
    lines.append(f"Total: {result.total}")
    return lines


def render_dice_panel(result: DiceResult, difficulty: int, *, show_trace: bool = True) -> None:
    for line in format_dice_panel(result, difficulty, show_trace=show_trace):
        print(line)
