"""Tech tree definition structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class TechDef:
    """Unlockable node of the sect's tech tree."""

    id: str
    name: str
    description: str = ""
    cost: int = 0
    prerequisites: Tuple[str, ...] = ()
