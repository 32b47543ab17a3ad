"""Global tag board backed by tag definitions and the campaign state."""
from __future__ import annotations

import logging
from typing import List

from sectscript.data.repositories import GlobalTagsRepository
from sectscript.domain.state import GameState

logger = logging.getLogger(__name__)

MISSING_TAG_DESCRIPTION = "Tag does not exist."


class TagService:
    """Reads and toggles tags; unknown tags log and fall back to False."""

    def __init__(self, tags_repo: GlobalTagsRepository, state: GameState) -> None:
        self._tags_repo = tags_repo
        self._state = state
        for tag in tags_repo.all():
            state.tag_values.setdefault(tag.id, tag.initial_value)

    def tag_exists(self, tag_id: str) -> bool:
        return tag_id in self._state.tag_values

    def get_tag_value(self, tag_id: str) -> bool:
        if not self.tag_exists(tag_id):
            logger.error("Tag not found: %s", tag_id)
            return False
        return self._state.tag_values[tag_id]

    def set_tag_value(self, tag_id: str, value: bool) -> None:
        if not self.tag_exists(tag_id):
            logger.error("Tag not found: %s", tag_id)
            return
        self._state.tag_values[tag_id] = value
        logger.debug("Set tag %s to %s", tag_id, value)

    def enable_tag(self, tag_id: str) -> None:
        self.set_tag_value(tag_id, True)

    def disable_tag(self, tag_id: str) -> None:
        self.set_tag_value(tag_id, False)

    def toggle_tag(self, tag_id: str) -> None:
        if not self.tag_exists(tag_id):
            logger.error("Tag not found: %s", tag_id)
            return
        self.set_tag_value(tag_id, not self._state.tag_values[tag_id])

    def get_tag_description(self, tag_id: str, for_value: bool) -> str:
        if not self._tags_repo.has(tag_id):
            logger.error("Tag not found: %s", tag_id)
            return MISSING_TAG_DESCRIPTION
        return self._tags_repo.get(tag_id).describe(for_value)

    def enabled_tag_ids(self) -> List[str]:
        return sorted(tag_id for tag_id, value in self._state.tag_values.items() if value)
