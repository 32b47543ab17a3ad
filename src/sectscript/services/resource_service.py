"""Money and disciple bookkeeping over the campaign state."""
from __future__ import annotations

import logging

from sectscript.domain.state import GameState

logger = logging.getLogger(__name__)


class ResourceService:
    """Reference ledger: negative amounts are refused, spends never overdraw."""

    def __init__(self, state: GameState) -> None:
        self._state = state

    def get_money(self) -> int:
        return self._state.money

    def add_money(self, amount: int) -> None:
        if amount < 0:
            logger.error("Cannot add negative money amount: %d", amount)
            return
        self._state.money += amount

    def spend_money(self, amount: int) -> bool:
        if amount < 0:
            logger.error("Cannot spend negative money amount: %d", amount)
            return False
        if self._state.money < amount:
            logger.error("Not enough money to spend %d (have %d)", amount, self._state.money)
            return False
        self._state.money -= amount
        return True

    def force_spend_money(self, amount: int) -> None:
        """Spend ``amount`` or everything that is left, whichever is smaller."""
        if amount < 0:
            logger.error("Cannot force spend negative money amount: %d", amount)
            return
        self._state.money = max(0, self._state.money - amount)

    def get_disciples(self) -> int:
        return self._state.disciples

    def add_disciples(self, amount: int) -> None:
        if amount < 0:
            logger.error("Cannot add negative disciple amount: %d", amount)
            return
        self._state.disciples += amount

    def dismiss_disciples(self, amount: int) -> bool:
        if amount < 0:
            logger.error("Cannot dismiss negative disciple amount: %d", amount)
            return False
        if self._state.disciples < amount:
            logger.error("Not enough disciples to dismiss %d (have %d)", amount, self._state.disciples)
            return False
        self._state.disciples -= amount
        return True
