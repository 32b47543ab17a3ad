"""Application of sentence side effects to campaign resources and tags."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from sectscript.domain.defs import EffectDef, EffectKind, EffectOperation
from sectscript.services.ports import ResourceLedger, TagStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AppliedEffect:
    """Record of one effect that changed (or tried to change) state."""

    effect: EffectDef
    applied: bool


class EffectService:
    """Applies effects one by one; a bad effect is logged and skipped."""

    def __init__(self, resources: ResourceLedger, tags: TagStore) -> None:
        self._resources = resources
        self._tags = tags

    def apply(self, effects: Sequence[EffectDef]) -> List[AppliedEffect]:
        applied: List[AppliedEffect] = []
        for effect in effects:
            if effect.kind is EffectKind.MONEY:
                ok = self._apply_resource(effect, self._resources.add_money, self._resources.spend_money, "money")
            elif effect.kind is EffectKind.DISCIPLE:
                ok = self._apply_resource(
                    effect, self._resources.add_disciples, self._resources.dismiss_disciples, "disciple(s)"
                )
            elif effect.kind is EffectKind.GLOBAL_TAG:
                ok = self._apply_tag(effect)
            else:
                logger.error("Unknown effect type: %s", effect.raw_kind)
                continue
            applied.append(AppliedEffect(effect=effect, applied=ok))
        return applied

    def _apply_resource(self, effect: EffectDef, add, spend, noun: str) -> bool:
        if effect.amount < 0:
            logger.error("Effect amount for %s cannot be negative: %d", noun, effect.amount)
            return False
        if effect.operation is EffectOperation.INCREASE:
            add(effect.amount)
            logger.info("Effect: +%d %s", effect.amount, noun)
            return True
        if effect.operation is EffectOperation.DECREASE:
            if not spend(effect.amount):
                logger.error("Effect: could not remove %d %s", effect.amount, noun)
                return False
            logger.info("Effect: -%d %s", effect.amount, noun)
            return True
        logger.error("Invalid operation '%s' for %s effect", effect.raw_operation, effect.raw_kind)
        return False

    def _apply_tag(self, effect: EffectDef) -> bool:
        tag_id = effect.reference_id
        if not self._tags.tag_exists(tag_id):
            logger.error("GlobalTag does not exist, ID: %s", tag_id)
            return False
        if effect.operation is EffectOperation.INCREASE:
            self._tags.set_tag_value(tag_id, True)
        elif effect.operation is EffectOperation.DECREASE:
            self._tags.set_tag_value(tag_id, False)
        else:
            logger.error("Invalid operation '%s' for globalTag effect", effect.raw_operation)
            return False
        logger.info("GlobalTag %s, ID: %s", "enabled" if effect.operation is EffectOperation.INCREASE else "disabled", tag_id)
        return True
