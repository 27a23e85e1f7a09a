from datetime import date

import pytest

from academy.core.errors import NotFoundError
from academy.services.payments import PaymentService
from academy.services.payments.dataclasses import PLAN_DETAILS, generate_installments


@pytest.mark.parametrize("plan,count,months", [("monthly", 12, 1), ("quarterly", 4, 3), ("yearly", 1, 12)])
def test_generate_counts_spacing_and_amount(plan, count, months):
    installments = generate_installments("STU001", plan, date(2024, 1, 15))

    assert len(installments) == count
    assert len({i.amount for i in installments}) == 1
    assert installments[0].amount == PLAN_DETAILS[plan].amount
    for earlier, later in zip(installments, installments[1:]):
        assert earlier.due_date < later.due_date
        gap = (later.due_date.year - earlier.due_date.year) * 12 + later.due_date.month - earlier.due_date.month
        assert gap == months


def test_monthly_plan_from_mid_january():
    installments = generate_installments("STU001", "monthly", date(2024, 1, 15))

    assert [i.due_date.isoformat() for i in installments] == [f"2024-{m:02d}-15" for m in range(1, 13)]
    assert all(i.amount == 500 for i in installments)
    assert all(i.status == "unpaid" for i in installments)


def test_month_end_start_is_clamped_not_skipped():
    installments = generate_installments("STU001", "monthly", date(2024, 1, 31))
    assert installments[1].due_date == date(2024, 2, 29)
    assert installments[2].due_date == date(2024, 3, 31)


def test_unknown_plan_is_rejected():
    with pytest.raises(ValueError):
        generate_installments("STU001", "weekly", date(2024, 1, 1))


def _installment_rows(db, student_id):
    return PaymentService(db).repo.get_installments(student_id)


def test_assign_plan_replaces_previous_set(seeded):
    service = PaymentService(seeded)
    service.assign_plan("STU001", "monthly", date(2024, 1, 15))
    first = [(r["id"], r["due_date"]) for r in _installment_rows(seeded, "STU001")]

    service.assign_plan("STU001", "monthly", date(2024, 1, 15))
    second = [(r["id"], r["due_date"]) for r in _installment_rows(seeded, "STU001")]

    assert len(second) == 12
    assert first == second


def test_assign_plan_switch_drops_old_installments(seeded):
    service = PaymentService(seeded)
    service.assign_plan("STU001", "monthly", date(2024, 1, 15))
    service.assign_plan("STU001", "yearly", date(2024, 3, 1))

    rows = _installment_rows(seeded, "STU001")
    assert len(rows) == 1
    assert str(rows[0]["due_date"]) == "2024-03-01"
    student = service.repo.lock_student("STU001")
    assert student["payment_plan"] == "yearly"


def test_assign_plan_unknown_student(seeded):
    with pytest.raises(NotFoundError):
        PaymentService(seeded).assign_plan("NOPE", "monthly", date(2024, 1, 1))
    assert _installment_rows(seeded, "NOPE") == []
