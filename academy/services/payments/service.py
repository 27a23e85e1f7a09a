# services/payments/service.py
import logging
import uuid
from collections import defaultdict
from datetime import date
from typing import Optional, Dict, List

from academy.core.db import as_date
from academy.core.errors import NotFoundError, InvalidRequestError, ConflictError
from .repo import PaymentRepo
from .dataclasses import (
    PLAN_DETAILS, PAYMENT_METHODS, Installment, StudentPayments,
    generate_installments, move_to_day, generate_invoice_number, row_to_installment,
)

logger = logging.getLogger(__name__)


class PaymentService:
    """Business logic for payment plans, due dates and installment payments.

    Every public write runs as one transaction: the student row is locked
    first, and any failure rolls back everything done for that student.
    """

    def __init__(self, db):
        self.db = db
        self.repo = PaymentRepo(db)

    def assign_plan(self, student_id: str, plan: str, start_date: date) -> List[Installment]:
        """Replace the student's installment set with a freshly generated one"""
        if plan not in PLAN_DETAILS:
            raise InvalidRequestError(f"Unknown payment plan: {plan}")

        installments = generate_installments(student_id, plan, start_date)
        try:
            if not self.repo.lock_student(student_id):
                raise NotFoundError(f"Student {student_id} not found")

            self.repo.update_student_plan(student_id, plan, start_date)
            self.repo.delete_installments(student_id)
            for installment in installments:
                self.repo.insert_installment(student_id, installment)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Assigned %s plan to %s: %d installments from %s",
                    plan, student_id, len(installments), start_date.isoformat())
        return installments

    def change_due_dates(
        self,
        student_id: str,
        preferred_day: int,
        current_preferred_day: Optional[int] = None,
        today: Optional[date] = None,
    ) -> List[Installment]:
        """Move every future unpaid installment to preferred_day of its month"""
        if not 1 <= preferred_day <= 28:
            raise InvalidRequestError("Preferred day must be between 1 and 28")
        today = today or date.today()

        try:
            student = self.repo.lock_student(student_id)
            if not student:
                raise NotFoundError(f"Student {student_id} not found")

            moved = []
            for row in self.repo.get_future_unpaid_installments(student_id, today):
                installment = row_to_installment(row)
                installment.due_date = move_to_day(installment.due_date, preferred_day)
                self.repo.update_due_date(installment.id, installment.due_date)
                # a grace date never precedes the due date
                if installment.grace_period_until and installment.grace_period_until < installment.due_date:
                    installment.grace_period_until = installment.due_date
                    self.repo.set_grace_period(installment.id, installment.due_date)
                moved.append(installment)

            old_day = current_preferred_day or student["preferred_pay_day"] or 1
            self.repo.update_preferred_day(student_id, preferred_day)
            self.repo.insert_due_date_change(
                f"DDC-{uuid.uuid4().hex[:12].upper()}", student_id, today, old_day, preferred_day
            )

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Moved %d installments of %s to day %d (was %d)",
                    len(moved), student_id, preferred_day, old_day)
        return moved

    def mark_paid(self, installment_id: str, payment_method: str, today: Optional[date] = None) -> Dict:
        """Record a payment and issue an invoice number"""
        if payment_method not in PAYMENT_METHODS:
            raise InvalidRequestError(f"Unknown payment method: {payment_method}")
        today = today or date.today()

        try:
            row = self.repo.get_installment(installment_id)
            if not row:
                raise NotFoundError(f"Installment {installment_id} not found")
            self.repo.lock_student(row["student_id"])
            row = self.repo.get_installment(installment_id)

            if row["status"] == "paid":
                raise ConflictError(f"Installment {installment_id} is already paid")

            invoice_number = generate_invoice_number(today)
            self.repo.mark_paid(installment_id, today, payment_method, invoice_number)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Installment %s paid by %s, invoice %s", installment_id, payment_method, invoice_number)
        return {
            "installmentId": installment_id,
            "paymentDate": today.isoformat(),
            "paymentMethod": payment_method,
            "invoiceNumber": invoice_number,
        }

    def set_grace_period(self, installment_id: str, grace_period_date: date) -> Installment:
        """Grant extra time; the grace date may never precede the due date"""
        try:
            row = self.repo.get_installment(installment_id)
            if not row:
                raise NotFoundError(f"Installment {installment_id} not found")

            installment = row_to_installment(row)
            if grace_period_date < installment.due_date:
                raise InvalidRequestError("Grace period date cannot be before the due date")

            self.repo.set_grace_period(installment_id, grace_period_date)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        installment.grace_period_until = grace_period_date
        return installment

    def list_students(self, today: Optional[date] = None) -> List[Dict]:
        """All students with installments and a derived billing category"""
        today = today or date.today()

        by_student = defaultdict(list)
        for row in self.repo.get_all_installments():
            by_student[row["student_id"]].append(row_to_installment(row))

        students = []
        for row in self.repo.get_students_with_enrollment_counts():
            student = StudentPayments(
                id=row["id"],
                name=row["name"],
                level=row["level"],
                payment_plan=row["payment_plan"],
                subscription_start_date=as_date(row["subscription_start_date"]),
                preferred_pay_day=row["preferred_pay_day"],
                active_enrollments=int(row["active_enrollments"] or 0),
                installments=by_student.get(row["id"], []),
            )
            students.append(student.to_dict(today))
        return students
