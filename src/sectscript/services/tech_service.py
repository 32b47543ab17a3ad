"""Tech tree queries and unlocking."""
from __future__ import annotations

import logging

from sectscript.data.repositories import TechRepository
from sectscript.domain.state import GameState
from sectscript.services.ports import ResourceLedger

logger = logging.getLogger(__name__)


class TechService:
    def __init__(self, techs_repo: TechRepository, resources: ResourceLedger, state: GameState) -> None:
        self._techs_repo = techs_repo
        self._resources = resources
        self._state = state

    def is_tech_unlocked(self, tech_id: str) -> bool:
        if not self._techs_repo.has(tech_id):
            logger.error("Unknown tech: %s", tech_id)
            return False
        return tech_id in self._state.unlocked_techs

    def get_tech_display_name(self, tech_id: str) -> str:
        if not self._techs_repo.has(tech_id):
            return tech_id
        return self._techs_repo.get(tech_id).name

    def can_unlock_tech(self, tech_id: str) -> bool:
        """True when the tech exists, is locked, has its prerequisites and is affordable."""
        if not self._techs_repo.has(tech_id) or tech_id in self._state.unlocked_techs:
            return False
        tech = self._techs_repo.get(tech_id)
        if any(prerequisite not in self._state.unlocked_techs for prerequisite in tech.prerequisites):
            return False
        return self._resources.get_money() >= tech.cost

    def unlock_tech(self, tech_id: str) -> bool:
        if not self.can_unlock_tech(tech_id):
            return False
        tech = self._techs_repo.get(tech_id)
        if not self._resources.spend_money(tech.cost):
            return False
        self._state.unlocked_techs.add(tech_id)
        logger.info("Unlocked tech %s", tech_id)
        return True
