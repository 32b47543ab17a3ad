"""Global tag definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GlobalTagDef:
    """Named campaign flag with a description for each of its values."""

    id: str
    initial_value: bool = False
    description_true: str = ""
    description_false: str = ""

    def describe(self, value: bool) -> str:
        return self.description_true if value else self.description_false
