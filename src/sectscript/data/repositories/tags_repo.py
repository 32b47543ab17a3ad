"""Repository for global tag definitions."""
from __future__ import annotations

import logging
from typing import Dict

from sectscript.data.errors import DataValidationError
from sectscript.data.repositories.base import RepositoryBase
from sectscript.domain.defs import GlobalTagDef

logger = logging.getLogger(__name__)


class GlobalTagsRepository(RepositoryBase[GlobalTagDef]):
    """Loads ``tags.json``; a repeated tag id keeps its first definition."""

    def __init__(self, base_path=None) -> None:
        super().__init__("tags.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, GlobalTagDef]:
        entries = self._require_list(raw.get("tags"), "tags.json tags")
        tags: Dict[str, GlobalTagDef] = {}
        for index, entry in enumerate(entries):
            context = f"tags[{index}]"
            data = self._require_mapping(entry, context)
            tag_id = self._optional_str(data.get("tagID", data.get("id")), f"{context} tagID")
            if not tag_id:
                logger.error("Global tag without id at %s", context)
                continue
            if tag_id in tags:
                logger.warning("Conflicting global tag id: %s", tag_id)
                continue
            initial = data.get("isTrue", False)
            if not isinstance(initial, bool):
                raise DataValidationError(f"{context} isTrue must be a boolean.")
            tags[tag_id] = GlobalTagDef(
                id=tag_id,
                initial_value=initial,
                description_true=self._optional_str(data.get("descriptionTrue"), f"{context} descriptionTrue"),
                description_false=self._optional_str(data.get("descriptionFalse"), f"{context} descriptionFalse"),
            )
        return tags
