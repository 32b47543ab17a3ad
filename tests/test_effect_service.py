import logging

from sectscript.domain.defs import EffectDef, EffectKind, EffectOperation
from sectscript.services.effect_service import EffectService
from tests.helpers.fakes import FakeLedger, FakeTags

_PLUS = EffectOperation.INCREASE
_MINUS = EffectOperation.DECREASE


def test_money_and_disciple_effects_change_the_ledger() -> None:
    ledger = FakeLedger(money=100, disciples=5)
    service = EffectService(ledger, FakeTags())

    records = service.apply(
        [
            EffectDef(kind=EffectKind.MONEY, amount=30, operation=_PLUS),
            EffectDef(kind=EffectKind.MONEY, amount=50, operation=_MINUS),
            EffectDef(kind=EffectKind.DISCIPLE, amount=2, operation=_MINUS),
        ]
    )

    assert [record.applied for record in records] == [True, True, True]
    assert ledger.money == 80
    assert ledger.disciples == 3


def test_overspend_is_logged_and_leaves_ledger_unchanged(caplog) -> None:
    ledger = FakeLedger(money=10)
    service = EffectService(ledger, FakeTags())

    with caplog.at_level(logging.ERROR):
        records = service.apply([EffectDef(kind=EffectKind.MONEY, amount=50, operation=_MINUS)])

    assert records[0].applied is False
    assert ledger.money == 10
    assert "could not remove 50 money" in caplog.text


def test_tag_effects_set_and_clear_existing_tags() -> None:
    tags = FakeTags({"gate": False, "guild": True})
    service = EffectService(FakeLedger(), tags)

    service.apply(
        [
            EffectDef(kind=EffectKind.GLOBAL_TAG, reference_id="gate", operation=_PLUS),
            EffectDef(kind=EffectKind.GLOBAL_TAG, reference_id="guild", operation=_MINUS),
        ]
    )

    assert tags.values == {"gate": True, "guild": False}


def test_missing_tag_is_not_created(caplog) -> None:
    tags = FakeTags({})
    service = EffectService(FakeLedger(), tags)

    with caplog.at_level(logging.ERROR):
        records = service.apply([EffectDef(kind=EffectKind.GLOBAL_TAG, reference_id="ghost", operation=_PLUS)])

    assert records[0].applied is False
    assert tags.values == {}
    assert "ghost" in caplog.text


def test_unknown_kind_and_operation_are_skipped(caplog) -> None:
    ledger = FakeLedger(money=100)
    service = EffectService(ledger, FakeTags())

    with caplog.at_level(logging.ERROR):
        records = service.apply(
            [
                EffectDef(kind=None, amount=5, operation=_PLUS, raw_kind="karma"),
                EffectDef(kind=EffectKind.MONEY, amount=5, operation=None, raw_kind="money", raw_operation="*"),
                EffectDef(kind=EffectKind.MONEY, amount=5, operation=_PLUS),
            ]
        )

    assert len(records) == 2
    assert records[0].applied is False
    assert records[1].applied is True
    assert ledger.money == 105
    assert "Unknown effect type: karma" in caplog.text
    assert "Invalid operation '*'" in caplog.text


def test_negative_amount_is_rejected_and_reported(caplog) -> None:
    ledger = FakeLedger(money=40, disciples=5)
    service = EffectService(ledger, FakeTags())

    with caplog.at_level(logging.ERROR):
        records = service.apply(
            [
                EffectDef(kind=EffectKind.MONEY, amount=-20, operation=_PLUS),
                EffectDef(kind=EffectKind.DISCIPLE, amount=-1, operation=_MINUS),
            ]
        )

    assert [record.applied for record in records] == [False, False]
    assert ledger.money == 40
    assert ledger.disciples == 5
    assert "cannot be negative: -20" in caplog.text
