from datetime import date

import pytest
from sqlalchemy import text

from academy.core.errors import ConflictError, InvalidRequestError, NotFoundError
from academy.services.payments import PaymentService
from academy.services.payments.dataclasses import Installment


@pytest.fixture
def planned(seeded):
    PaymentService(seeded).assign_plan("STU001", "monthly", date(2024, 1, 15))
    return seeded


def _by_id(db, student_id):
    return {r["id"]: r for r in PaymentService(db).repo.get_installments(student_id)}


def test_due_date_migration_only_touches_future_unpaid(planned):
    service = PaymentService(planned)
    service.mark_paid("STU001-inst-5", "cash", today=date(2024, 5, 1))

    moved = service.change_due_dates("STU001", 5, today=date(2024, 4, 20))

    rows = _by_id(planned, "STU001")
    # before today: untouched
    assert str(rows["STU001-inst-0"]["due_date"]) == "2024-01-15"
    assert str(rows["STU001-inst-3"]["due_date"]) == "2024-04-15"
    # paid: untouched even though it is in the future
    assert str(rows["STU001-inst-5"]["due_date"]) == "2024-06-15"
    # future unpaid: moved within the same month
    assert str(rows["STU001-inst-4"]["due_date"]) == "2024-05-05"
    assert str(rows["STU001-inst-11"]["due_date"]) == "2024-12-05"
    assert len(moved) == 7


def test_due_date_migration_records_audit_and_preferred_day(planned):
    service = PaymentService(planned)
    service.change_due_dates("STU001", 10, current_preferred_day=15, today=date(2024, 1, 1))

    student = service.repo.lock_student("STU001")
    assert student["preferred_pay_day"] == 10
    changes = planned.execute(
        text("SELECT old_day, new_day FROM due_date_changes WHERE student_id = :sid"), {"sid": "STU001"}
    ).all()
    assert [(c[0], c[1]) for c in changes] == [(15, 10)]


@pytest.mark.parametrize("day", [0, 29, 31])
def test_preferred_day_out_of_range(planned, day):
    with pytest.raises(InvalidRequestError):
        PaymentService(planned).change_due_dates("STU001", day, today=date(2024, 1, 1))


def test_mark_paid_issues_invoice(planned):
    receipt = PaymentService(planned).mark_paid("STU001-inst-0", "cash", today=date(2024, 1, 20))

    assert receipt["paymentDate"] == "2024-01-20"
    assert receipt["invoiceNumber"].startswith("INV-20240120-")
    row = _by_id(planned, "STU001")["STU001-inst-0"]
    assert row["status"] == "paid"
    assert row["payment_method"] == "cash"
    assert row["invoice_number"] == receipt["invoiceNumber"]


def test_mark_paid_twice_conflicts(planned):
    service = PaymentService(planned)
    service.mark_paid("STU001-inst-0", "visa", today=date(2024, 1, 20))
    with pytest.raises(ConflictError):
        service.mark_paid("STU001-inst-0", "cash", today=date(2024, 1, 21))


def test_mark_paid_unknown_installment(planned):
    with pytest.raises(NotFoundError):
        PaymentService(planned).mark_paid("missing", "cash")


def test_grace_period_must_not_precede_due_date(planned):
    service = PaymentService(planned)
    with pytest.raises(InvalidRequestError):
        service.set_grace_period("STU001-inst-1", date(2024, 2, 14))

    installment = service.set_grace_period("STU001-inst-1", date(2024, 2, 25))
    assert installment.grace_period_until == date(2024, 2, 25)


def test_overdue_is_derived_from_grace_date():
    installment = Installment(id="x", due_date=date(2024, 2, 15), amount=500)
    assert installment.derived_status(date(2024, 2, 20)) == "overdue"

    installment.grace_period_until = date(2024, 2, 25)
    assert installment.derived_status(date(2024, 2, 20)) == "unpaid"
    assert installment.derived_status(date(2024, 2, 26)) == "overdue"

    installment.status = "paid"
    assert installment.derived_status(date(2024, 3, 1)) == "paid"


def test_payment_categories(planned):
    service = PaymentService(planned)
    students = {s["id"]: s for s in service.list_students(today=date(2024, 3, 1))}

    assert students["STU001"]["category"] == "overdue"
    assert students["STU002"]["category"] == "planNotSet"

    for i in range(12):
        service.mark_paid(f"STU001-inst-{i}", "cash", today=date(2024, 1, 1))
    students = {s["id"]: s for s in service.list_students(today=date(2024, 3, 1))}
    assert students["STU001"]["category"] == "upToDate"
    assert students["STU001"]["summary"]["due"] == 0


def test_due_date_migration_keeps_grace_date_on_or_after_due_date(planned):
    service = PaymentService(planned)
    service.set_grace_period("STU001-inst-1", date(2024, 2, 20))
    service.set_grace_period("STU001-inst-2", date(2024, 3, 28))

    service.change_due_dates("STU001", 25, today=date(2024, 2, 1))

    rows = _by_id(planned, "STU001")
    # grace date overtaken by the new due date is pulled forward
    assert str(rows["STU001-inst-1"]["due_date"]) == "2024-02-25"
    assert str(rows["STU001-inst-1"]["grace_period_until"]) == "2024-02-25"
    # grace date still later than the new due date is kept
    assert str(rows["STU001-inst-2"]["due_date"]) == "2024-03-25"
    assert str(rows["STU001-inst-2"]["grace_period_until"]) == "2024-03-28"

    students = {s["id"]: s for s in service.list_students(today=date(2024, 2, 22))}
    statuses = {i["id"]: i["status"] for i in students["STU001"]["installments"]}
    assert statuses["STU001-inst-1"] == "unpaid"
    assert statuses["STU001-inst-2"] == "unpaid"


def test_effective_due_date_never_precedes_due_date():
    installment = Installment(
        id="x", due_date=date(2024, 2, 25), amount=500, grace_period_until=date(2024, 2, 20)
    )
    assert installment.effective_due_date == date(2024, 2, 25)
    assert installment.derived_status(date(2024, 2, 22)) == "unpaid"
