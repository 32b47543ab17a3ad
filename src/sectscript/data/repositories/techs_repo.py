"""Repository for tech tree nodes."""
from __future__ import annotations

import logging
from typing import Dict

from sectscript.data.errors import DataReferenceError
from sectscript.data.repositories.base import RepositoryBase
from sectscript.domain.defs import TechDef

logger = logging.getLogger(__name__)


class TechRepository(RepositoryBase[TechDef]):
    """Loads ``techs.json`` and checks that prerequisites exist."""

    def __init__(self, base_path=None) -> None:
        super().__init__("techs.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, TechDef]:
        entries = self._require_list(raw.get("nodes"), "techs.json nodes")
        techs: Dict[str, TechDef] = {}
        for index, entry in enumerate(entries):
            context = f"nodes[{index}]"
            data = self._require_mapping(entry, context)
            tech_id = self._optional_str(data.get("id"), f"{context} id")
            if not tech_id:
                logger.error("Tech node without id at %s", context)
                continue
            if tech_id in techs:
                logger.warning("Conflicting tech id: %s", tech_id)
                continue
            prerequisites = self._require_list(data.get("prerequisites", []), f"{context} prerequisites")
            techs[tech_id] = TechDef(
                id=tech_id,
                name=self._optional_str(data.get("name"), f"{context} name", default=tech_id),
                description=self._optional_str(data.get("description"), f"{context} description"),
                cost=self._require_int(data.get("cost", 0), f"{context} cost"),
                prerequisites=tuple(
                    self._require_str(item, f"{context} prerequisites") for item in prerequisites
                ),
            )
        for tech in techs.values():
            for prerequisite in tech.prerequisites:
                if prerequisite not in techs:
                    raise DataReferenceError(
                        f"Tech '{tech.id}' requires unknown tech '{prerequisite}'."
                    )
        return techs
