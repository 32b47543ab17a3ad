"""Dice roller definitions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class RollerDef:
    """Die configuration of one roller kind.

    ``face_set`` is empty for ordinary dice; when present the die draws from it
    instead of the uniform ``[1, faces]`` range.
    """

    kind_id: str
    faces: int
    face_set: Tuple[int, ...] = ()
