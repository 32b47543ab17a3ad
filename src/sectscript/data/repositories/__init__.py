"""Repository exports."""

from .dialogue_repo import DialogueRepository
from .rollers_repo import RollersRepository
from .tags_repo import GlobalTagsRepository
from .techs_repo import TechRepository

__all__ = [
    "DialogueRepository",
    "GlobalTagsRepository",
    "RollersRepository",
    "TechRepository",
]
