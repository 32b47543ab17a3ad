"""Domain-level state tracking."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Set

from sectscript.domain.dice_models import CompanionKind, RollerAssignment


@dataclass
class GameState:
    """Campaign state the reference collaborators read and write."""

    money: int = 200
    disciples: int = 10
    tag_values: Dict[str, bool] = field(default_factory=dict)
    unlocked_techs: Set[str] = field(default_factory=set)
    items: Dict[str, int] = field(default_factory=dict)
    companions: Set[CompanionKind] = field(default_factory=set)
    elites: Set[str] = field(default_factory=set)
    assignments: Dict[str, RollerAssignment] = field(default_factory=dict)
