"""Repository for dice roller configuration."""
from __future__ import annotations

from typing import Dict

from sectscript.data.errors import DataValidationError
from sectscript.data.repositories.base import RepositoryBase
from sectscript.domain.defs import RollerDef


class RollersRepository(RepositoryBase[RollerDef]):
    """Loads ``rollers.json``: a face count or an explicit face set per roller kind."""

    def __init__(self, base_path=None) -> None:
        super().__init__("rollers.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, RollerDef]:
        rollers: Dict[str, RollerDef] = {}
        for kind_id, payload in raw.items():
            context = f"roller '{kind_id}'"
            data = self._require_mapping(payload, context)
            if "face_set" in data:
                entries = self._require_list(data["face_set"], f"{context} face_set")
                face_set = tuple(self._require_int(value, f"{context} face_set") for value in entries)
                if len(face_set) < 2 or len(set(face_set)) != len(face_set):
                    raise DataValidationError(f"{context} face_set needs at least two distinct values.")
                rollers[kind_id] = RollerDef(kind_id=kind_id, faces=len(face_set), face_set=face_set)
                continue
            faces = self._require_int(data.get("faces"), f"{context} faces")
            if faces < 2:
                raise DataValidationError(f"{context} faces must be at least 2.")
            rollers[kind_id] = RollerDef(kind_id=kind_id, faces=faces)
        return rollers
