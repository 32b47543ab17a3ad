"""Service layer exports."""

from .errors import AssignmentError, DialogueInvariantError
from .check_service import CheckOutcome, CheckService
from .dice_service import DiceService
from .effect_service import AppliedEffect, EffectService
from .multi_check_service import MultiCheckOutcome, MultiCheckService
from .dialogue_service import (
    CheckResolvedEvent,
    ChoiceModeEnteredEvent,
    ChoiceModeExitedEvent,
    ChoicesShownEvent,
    DialogueService,
    DicePanelShownEvent,
    EffectAppliedEvent,
    PendingDiceCheck,
    PlaybackEndedEvent,
    PlaybackEvent,
    SentenceShownEvent,
    TitleShownEvent,
)
from .resource_service import ResourceService
from .roster_service import RosterService
from .tag_service import TagService
from .tech_service import TechService

__all__ = [
    "AppliedEffect",
    "AssignmentError",
    "CheckOutcome",
    "CheckResolvedEvent",
    "CheckService",
    "ChoiceModeEnteredEvent",
    "ChoiceModeExitedEvent",
    "ChoicesShownEvent",
    "DialogueInvariantError",
    "DialogueService",
    "DicePanelShownEvent",
    "DiceService",
    "EffectAppliedEvent",
    "EffectService",
    "MultiCheckOutcome",
    "MultiCheckService",
    "PendingDiceCheck",
    "PlaybackEndedEvent",
    "PlaybackEvent",
    "ResourceService",
    "RosterService",
    "SentenceShownEvent",
    "TagService",
    "TechService",
    "TitleShownEvent",
]
