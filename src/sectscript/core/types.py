"""Shared constants and playback states for the core and domain layers."""
from enum import Enum

TERMINAL_LABEL = "END"


class PlaybackState(Enum):
    """Observable state of the dialogue sequencer."""

    IDLE = "idle"
    PLAYING_EVENT = "playing_event"
    AWAITING_ADVANCE = "awaiting_advance"
    AWAITING_CHOICE = "awaiting_choice"
    AWAITING_DICE_CONTINUATION = "awaiting_dice_continuation"
    COOLDOWN = "cooldown"
    DRAINED = "drained"


__all__ = ["PlaybackState", "TERMINAL_LABEL"]
