"""Console player for dialogue events."""
from __future__ import annotations

import argparse
import logging
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Sequence

from sectscript.core.rng import RNG
from sectscript.data.errors import DataError
from sectscript.data.repositories import (
    DialogueRepository,
    GlobalTagsRepository,
    RollersRepository,
    TechRepository,
)
from sectscript.domain.state import GameState
from sectscript.presentation.cli.config import load_config
from sectscript.presentation.cli.render import (
    render_choices,
    render_dice_panel,
    render_heading,
    render_sentence,
)
from sectscript.services import (
    AssignmentError,
    CheckResolvedEvent,
    CheckService,
    ChoicesShownEvent,
    DialogueService,
    DicePanelShownEvent,
    EffectAppliedEvent,
    EffectService,
    PlaybackEndedEvent,
    PlaybackEvent,
    ResourceService,
    RosterService,
    SentenceShownEvent,
    TagService,
    TechService,
    TitleShownEvent,
)
from sectscript.services.dialogue_validator import format_issue, has_errors, validate_dialogue_event

logger = logging.getLogger(__name__)

_MAX_RANDOM_SEED = 2**31 - 1


@dataclass(slots=True)
class Runtime:
    """Wired services for one CLI session."""

    state: GameState
    dialogues: DialogueRepository
    roster: RosterService
    dialogue_service: DialogueService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sectscript", description="Play sect dialogue events in the terminal.")
    parser.add_argument("event_ids", nargs="*", help="Dialogue events to queue, in order.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for dice rolls (blank for random).")
    parser.add_argument("--money", type=int, default=None, help="Starting spirit stones.")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...).")
    parser.add_argument("--validate", action="store_true", help="Check every dialogue file and exit.")
    parser.add_argument("--data-dir", type=Path, default=None, help="Alternative data root.")
    return parser


def build_runtime(
    *,
    seed: int,
    money: int | None = None,
    cooldown_seconds: float = 0.5,
    data_dir: Path | None = None,
) -> Runtime:
    """Construct the dialogue engine with the JSON-backed collaborators.

    ``data_dir`` replaces the bundled data root holding ``definitions/`` and
    ``dialogues/``.
    """
    definitions = data_dir / "definitions" if data_dir is not None else None
    state = GameState()
    if money is not None:
        state.money = money
    dialogues = DialogueRepository(base_path=data_dir / "dialogues" if data_dir is not None else None)
    resources = ResourceService(state)
    tags = TagService(GlobalTagsRepository(base_path=definitions), state)
    techs = TechService(TechRepository(base_path=definitions), resources, state)
    roster = RosterService(RollersRepository(base_path=definitions), state)
    check_service = CheckService(resources, techs, tags, roster, rng=RNG(seed))
    dialogue_service = DialogueService(
        dialogues,
        check_service,
        EffectService(resources, tags),
        cooldown_seconds=cooldown_seconds,
    )
    return Runtime(state=state, dialogues=dialogues, roster=roster, dialogue_service=dialogue_service)


class ConsoleListener:
    """Prints playback notifications as they arrive."""

    def __init__(self, *, show_dice_trace: bool = True) -> None:
        self._show_dice_trace = show_dice_trace

    def __call__(self, event: PlaybackEvent) -> None:
        if isinstance(event, TitleShownEvent):
            render_heading(event.title)
        elif isinstance(event, SentenceShownEvent):
            render_sentence(event.speaker, event.text, event.label)
        elif isinstance(event, ChoicesShownEvent):
            render_choices(event.question, event.options)
        elif isinstance(event, DicePanelShownEvent):
            render_dice_panel(event.dice_result, event.difficulty, show_trace=self._show_dice_trace)
        elif isinstance(event, CheckResolvedEvent):
            print(event.description)
        elif isinstance(event, EffectAppliedEvent) and not event.applied:
            print(f"(effect {event.effect.raw_kind} {event.effect.raw_operation}{event.effect.amount} had no effect)")
        elif isinstance(event, PlaybackEndedEvent):
            print("\n(The dialogue has ended.)")


def assign_default_teams(runtime: Runtime, event_ids: Sequence[str]) -> None:
    """Send ordinary disciples to every queued event that takes rollers."""
    for event_id in event_ids:
        event = runtime.dialogues.load_event_definition(event_id)
        if event is None or event.dice_limit == 0:
            continue
        members = [f"normal_{index}" for index in range(event.dice_limit)]
        try:
            runtime.roster.confirm_assignment(event, members)
        except AssignmentError as exc:
            print(f"Could not assign a team to {event_id}: {exc}")


def run_playback(
    service: DialogueService,
    *,
    read: Callable[[str], str] = input,
    sleep: Callable[[float], None] = time.sleep,
    cooldown_seconds: float = 0.5,
) -> None:
    """Drive the service from console input until the queue drains."""
    while service.is_playing:
        if service.is_in_choice_mode:
            raw = read("Select an option: ").strip()
            try:
                index = int(raw) - 1
            except ValueError:
                print("Invalid selection. Please enter a number.")
                continue
            if not service.select_choice(index):
                print("Invalid selection.")
            continue
        read("[Enter] to continue ")
        if not service.advance() and service.is_on_cooldown:
            sleep(cooldown_seconds)
            service.advance()


def validate_all(dialogues: DialogueRepository) -> int:
    """Print issues for every dialogue file; returns the process exit code."""
    failed = False
    event_ids = dialogues.all_event_ids()
    for event_id in event_ids:
        try:
            event = dialogues.get(event_id)
        except DataError as exc:
            print(f"[ERROR] LOAD_FAILED: {exc} (event_id={event_id})")
            failed = True
            continue
        issues = validate_dialogue_event(event)
        for issue in issues:
            print(format_issue(issue))
        failed = failed or has_errors(issues)
    print(f"Validated {len(event_ids)} dialogue event(s).")
    return 1 if failed else 0


def main(argv: List[str] | None = None) -> int:
    """Start the CLI session; returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = load_config()
    seed = args.seed if args.seed is not None else secrets.randbelow(_MAX_RANDOM_SEED)
    logger.debug("Using dice seed %d", seed)
    runtime = build_runtime(
        seed=seed,
        money=args.money,
        cooldown_seconds=config["cooldown_seconds"],
        data_dir=args.data_dir,
    )

    if args.validate:
        return validate_all(runtime.dialogues)

    if not args.event_ids:
        print("Available dialogue events:")
        for event_id in runtime.dialogues.all_event_ids():
            print(f"- {event_id}")
        return 0

    service = runtime.dialogue_service
    service.subscribe(ConsoleListener(show_dice_trace=config["show_dice_trace"]))
    if service.enqueue_many(args.event_ids) == 0:
        print("No playable dialogue events were given.")
        return 1
    assign_default_teams(runtime, service.queued_event_ids)
    print(f"Dice seed: {seed}")
    service.start_playback()
    try:
        run_playback(service, cooldown_seconds=config["cooldown_seconds"])
    except (EOFError, KeyboardInterrupt):
        service.clear_queue()
    state = runtime.state
    print(f"Spirit stones: {state.money}  Disciples: {state.disciples}")
    return 0
