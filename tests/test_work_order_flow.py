from datetime import date

import pytest

from core.exceptions import BusinessRuleError, NotFoundError, ValidationError
from core.models import WorkOrderStatus


def _seed_chapter(services):
    fs = services["funding_service"]
    a = fs.create_instrument("C", 1000.0, code="IDV-A")
    b = fs.create_instrument("C", 500.0, code="IDV-B")
    return a, b


def test_create_order_draws_across_linked_instruments(services):
    ws = services["work_order_service"]
    ledger = services["ledger_service"]
    a, b = _seed_chapter(services)

    x = ws.create_order("ORD-X", "Road resurfacing", 1200.0, [a.id, b.id])

    assert x.status == WorkOrderStatus.PLANNING
    assert x.linked_instrument_ids == [a.id, b.id]
    residuals = ledger.get_residuals()
    assert residuals[a.id] == 0.0
    assert residuals[b.id] == 300.0


def test_save_is_refused_while_funding_falls_short(services):
    ws = services["work_order_service"]
    a, b = _seed_chapter(services)
    ws.create_order("ORD-X", "", 1200.0, [a.id, b.id])

    preview = ws.preview_coverage([b.id], 400.0)
    assert preview.uncovered == 100.0

    with pytest.raises(BusinessRuleError) as exc:
        ws.create_order("ORD-Y", "", 400.0, [b.id])
    assert exc.value.code == "FUNDS_INSUFFICIENT"
    assert exc.value.uncovered == 100.0
    assert exc.value.preview.allocations[0].used == 300.0
    assert len(ws.list_orders()) == 1

    y = ws.create_order("ORD-Y", "", 300.0, [b.id])
    assert y.id


def test_editing_order_previews_without_its_own_draw(services):
    ws = services["work_order_service"]
    ledger = services["ledger_service"]
    a, b = _seed_chapter(services)
    x = ws.create_order("ORD-X", "", 1200.0, [a.id, b.id])

    preview = ws.preview_coverage([a.id, b.id], 900.0, editing_order_id=x.id)
    assert [(p.instrument_id, p.used, p.leftover_after) for p in preview.allocations] == [
        (a.id, 900.0, 100.0),
        (b.id, 0.0, 500.0),
    ]
    assert preview.uncovered == 0.0

    updated = ws.update_order(x.id, estimated_value=900.0)
    assert updated.estimated_value == 900.0
    assert ledger.get_residuals() == {a.id: 100.0, b.id: 500.0}


def test_edit_can_grow_into_the_full_chapter_but_not_beyond(services):
    ws = services["work_order_service"]
    a, b = _seed_chapter(services)
    x = ws.create_order("ORD-X", "", 1200.0, [a.id, b.id])

    assert ws.update_order(x.id, estimated_value=1500.0).estimated_value == 1500.0
    with pytest.raises(BusinessRuleError) as exc:
        ws.update_order(x.id, estimated_value=1500.01)
    assert exc.value.code == "FUNDS_INSUFFICIENT"
    assert ws.get_order(x.id).estimated_value == 1500.0


def test_descriptive_edit_skips_coverage_gate(services):
    ws = services["work_order_service"]
    a, _ = _seed_chapter(services)
    x = ws.create_order("ORD-X", "", 1000.0, [a.id])

    updated = ws.update_order(x.id, description="  Bridge joints  ", order_number="ORD-X1")

    assert updated.description == "Bridge joints"
    assert ws.get_order(x.id).order_number == "ORD-X1"


def test_lifecycle_moves_through_contract_and_payment(services):
    ws = services["work_order_service"]
    ledger = services["ledger_service"]
    a, b = _seed_chapter(services)
    x = ws.create_order("ORD-X", "", 1200.0, [a.id, b.id])

    contracted = ws.record_contract(x.id, 1000.0, contractor="Strade S.p.A.", contract_date=date(2024, 4, 2))
    assert contracted.status == WorkOrderStatus.CONTRACTED
    assert contracted.savings == 200.0
    assert ledger.get_residuals() == {a.id: 0.0, b.id: 500.0}

    paid = ws.record_payment(x.id, 950.0, paid_on=date(2024, 6, 30))
    assert paid.status == WorkOrderStatus.PAID

    stored = ws.get_order(x.id)
    assert stored.contractor == "Strade S.p.A."
    assert stored.contract_date == date(2024, 4, 2)
    assert stored.paid_on == date(2024, 6, 30)

    chapter = ledger.get_chapter_summaries()[0]
    assert chapter.spent == 950.0
    assert chapter.available == 550.0


def test_status_transitions_only_move_forward(services):
    ws = services["work_order_service"]
    a, _ = _seed_chapter(services)
    x = ws.create_order("ORD-X", "", 100.0, [a.id])

    with pytest.raises(BusinessRuleError) as exc_pay:
        ws.record_payment(x.id, 100.0)
    assert exc_pay.value.code == "INVALID_STATUS_TRANSITION"

    ws.record_contract(x.id, 90.0)
    with pytest.raises(BusinessRuleError) as exc_again:
        ws.record_contract(x.id, 80.0)
    assert exc_again.value.code == "INVALID_STATUS_TRANSITION"


def test_phase_fields_are_locked_until_the_phase_is_reached(services):
    ws = services["work_order_service"]
    a, _ = _seed_chapter(services)
    x = ws.create_order("ORD-X", "", 100.0, [a.id])

    with pytest.raises(ValidationError) as exc:
        ws.update_order(x.id, contract_value=50.0)
    assert exc.value.code == "PHASE_FIELD_LOCKED"

    ws.record_contract(x.id, 90.0)
    assert ws.update_order(x.id, contract_value=95.0).contract_value == 95.0
    with pytest.raises(ValidationError):
        ws.update_order(x.id, paid_value=95.0)


def test_contract_above_available_funds_is_refused(services):
    ws = services["work_order_service"]
    a, _ = _seed_chapter(services)
    x = ws.create_order("ORD-X", "", 900.0, [a.id])
    ws.create_order("ORD-Z", "", 100.0, [a.id])

    with pytest.raises(BusinessRuleError) as exc:
        ws.record_contract(x.id, 950.0)
    assert exc.value.code == "FUNDS_INSUFFICIENT"
    assert ws.get_order(x.id).status == WorkOrderStatus.PLANNING


def test_payment_above_available_funds_is_refused(services):
    ws = services["work_order_service"]
    a, _ = _seed_chapter(services)
    x = ws.create_order("ORD-X", "", 900.0, [a.id])
    ws.create_order("ORD-Z", "", 100.0, [a.id])
    ws.record_contract(x.id, 850.0)

    with pytest.raises(BusinessRuleError) as exc:
        ws.record_payment(x.id, 950.0)
    assert exc.value.code == "FUNDS_INSUFFICIENT"
    assert exc.value.uncovered == 50.0
    assert ws.get_order(x.id).status == WorkOrderStatus.CONTRACTED

    assert ws.record_payment(x.id, 900.0).status == WorkOrderStatus.PAID


def test_funding_selection_rules(services):
    ws = services["work_order_service"]
    fs = services["funding_service"]
    a, b = _seed_chapter(services)
    other = fs.create_instrument("Maintenance", 700.0)

    with pytest.raises(ValidationError) as exc_empty:
        ws.create_order("ORD-1", "", 10.0, [])
    assert exc_empty.value.code == "NO_FUNDING_SELECTED"

    with pytest.raises(ValidationError) as exc_dup:
        ws.create_order("ORD-1", "", 10.0, [a.id, a.id])
    assert exc_dup.value.code == "DUPLICATE_FUNDING_LINK"

    with pytest.raises(ValidationError) as exc_mixed:
        ws.create_order("ORD-1", "", 10.0, [a.id, other.id])
    assert exc_mixed.value.code == "MIXED_CHAPTER_FUNDING"

    with pytest.raises(NotFoundError) as exc_missing:
        ws.create_order("ORD-1", "", 10.0, ["missing"])
    assert exc_missing.value.code == "INSTRUMENT_NOT_FOUND"


def test_order_field_validation(services):
    ws = services["work_order_service"]
    a, _ = _seed_chapter(services)

    with pytest.raises(ValidationError) as exc_number:
        ws.create_order("   ", "", 10.0, [a.id])
    assert exc_number.value.code == "ORDER_NUMBER_EMPTY"

    with pytest.raises(ValidationError) as exc_value:
        ws.create_order("ORD-1", "", -1.0, [a.id])
    assert exc_value.value.code == "ORDER_VALUE_NEGATIVE"

    with pytest.raises(NotFoundError):
        ws.get_order("nope")


def test_relinking_an_order_reorders_its_draw(services):
    ws = services["work_order_service"]
    ledger = services["ledger_service"]
    a, b = _seed_chapter(services)
    x = ws.create_order("ORD-X", "", 300.0, [a.id, b.id])
    assert ledger.get_residuals() == {a.id: 700.0, b.id: 500.0}

    ws.update_order(x.id, linked_instrument_ids=[b.id, a.id])

    assert ws.get_order(x.id).linked_instrument_ids == [b.id, a.id]
    assert ledger.get_residuals() == {a.id: 1000.0, b.id: 200.0}


def test_delete_order_releases_its_draw(services):
    ws = services["work_order_service"]
    ledger = services["ledger_service"]
    a, b = _seed_chapter(services)
    x = ws.create_order("ORD-X", "", 1200.0, [a.id, b.id])

    ws.delete_order(x.id)

    assert ws.list_orders() == []
    assert ledger.get_residuals() == {a.id: 1000.0, b.id: 500.0}
    with pytest.raises(NotFoundError):
        ws.delete_order(x.id)


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_figures_are_rejected(services, bad):
    ws = services["work_order_service"]
    ledger = services["ledger_service"]
    fs = services["funding_service"]
    small = fs.create_instrument("Roads", 100.0)

    with pytest.raises(ValidationError) as exc_create:
        ws.create_order("ORD-NAN", "x", bad, [small.id])
    assert exc_create.value.code == "ORDER_VALUE_INVALID"
    assert ws.list_orders() == []

    x = ws.create_order("ORD-X", "", 50.0, [small.id])
    with pytest.raises(ValidationError) as exc_update:
        ws.update_order(x.id, estimated_value=bad)
    assert exc_update.value.code == "ORDER_VALUE_INVALID"
    with pytest.raises(ValidationError):
        ws.record_contract(x.id, bad)

    assert ws.get_order(x.id).estimated_value == 50.0
    assert ledger.get_chapter_summaries()[0].available == 50.0
