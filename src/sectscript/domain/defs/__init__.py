"""Domain definition exports."""

from .dialogue_def import (
    CheckCondition,
    CheckKind,
    ChoiceOption,
    DialogueEvent,
    DialogueSentence,
    EffectDef,
    EffectKind,
    EffectOperation,
    MultiCheckTarget,
    SentenceKind,
)
from .roller_def import RollerDef
from .tag_def import GlobalTagDef
from .tech_def import TechDef

__all__ = [
    "CheckCondition",
    "CheckKind",
    "ChoiceOption",
    "DialogueEvent",
    "DialogueSentence",
    "EffectDef",
    "EffectKind",
    "EffectOperation",
    "GlobalTagDef",
    "MultiCheckTarget",
    "RollerDef",
    "SentenceKind",
    "TechDef",
]
