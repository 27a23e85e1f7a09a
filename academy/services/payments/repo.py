# services/payments/repo.py
from academy.core.db import db_execute_safe, db_execute_non_select, for_update

INSTALLMENT_COLUMNS = """
    id, student_id, due_date, amount, status, payment_date,
    grace_period_until, invoice_number, payment_method
"""

class PaymentRepo:
    """Pure data access layer for payment plans and installments"""

    def __init__(self, db):
        self.db = db

    def lock_student(self, student_id):
        """Fetch the student row, locking it for the rest of the transaction"""
        rows = db_execute_safe(self.db, """
            SELECT id, payment_plan, preferred_pay_day
            FROM students
            WHERE id = :student_id
        """ + for_update(self.db), {"student_id": student_id})
        return rows[0] if rows else None

    def update_student_plan(self, student_id, plan, start_date):
        return db_execute_non_select(self.db, """
            UPDATE students
            SET payment_plan = :plan, subscription_start_date = :start_date, updated_at = CURRENT_TIMESTAMP
            WHERE id = :student_id
        """, {"plan": plan, "start_date": start_date, "student_id": student_id})

    def delete_installments(self, student_id):
        return db_execute_non_select(self.db,
            "DELETE FROM installments WHERE student_id = :student_id",
            {"student_id": student_id})

    def insert_installment(self, student_id, installment):
        return db_execute_non_select(self.db, """
            INSERT INTO installments (id, student_id, due_date, amount, status, created_at, updated_at)
            VALUES (:id, :student_id, :due_date, :amount, :status, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """, {
            "id": installment.id,
            "student_id": student_id,
            "due_date": installment.due_date,
            "amount": installment.amount,
            "status": installment.status,
        })

    def get_installments(self, student_id):
        return db_execute_safe(self.db, f"""
            SELECT {INSTALLMENT_COLUMNS}
            FROM installments
            WHERE student_id = :student_id
            ORDER BY due_date ASC
        """, {"student_id": student_id})

    def get_future_unpaid_installments(self, student_id, today):
        return db_execute_safe(self.db, f"""
            SELECT {INSTALLMENT_COLUMNS}
            FROM installments
            WHERE student_id = :student_id AND status = 'unpaid' AND due_date >= :today
            ORDER BY due_date ASC
        """, {"student_id": student_id, "today": today})

    def update_due_date(self, installment_id, due_date):
        return db_execute_non_select(self.db, """
            UPDATE installments
            SET due_date = :due_date, updated_at = CURRENT_TIMESTAMP
            WHERE id = :installment_id
        """, {"due_date": due_date, "installment_id": installment_id})

    def update_preferred_day(self, student_id, day):
        return db_execute_non_select(self.db, """
            UPDATE students
            SET preferred_pay_day = :day, updated_at = CURRENT_TIMESTAMP
            WHERE id = :student_id
        """, {"day": day, "student_id": student_id})

    def insert_due_date_change(self, change_id, student_id, change_date, old_day, new_day):
        return db_execute_non_select(self.db, """
            INSERT INTO due_date_changes (id, student_id, change_date, old_day, new_day, created_at)
            VALUES (:id, :student_id, :change_date, :old_day, :new_day, CURRENT_TIMESTAMP)
        """, {
            "id": change_id,
            "student_id": student_id,
            "change_date": change_date,
            "old_day": old_day,
            "new_day": new_day,
        })

    def get_installment(self, installment_id):
        rows = db_execute_safe(self.db, f"""
            SELECT {INSTALLMENT_COLUMNS}
            FROM installments
            WHERE id = :installment_id
        """, {"installment_id": installment_id})
        return rows[0] if rows else None

    def mark_paid(self, installment_id, payment_date, method, invoice_number):
        return db_execute_non_select(self.db, """
            UPDATE installments
            SET status = 'paid', payment_date = :payment_date, payment_method = :method,
                invoice_number = :invoice_number, updated_at = CURRENT_TIMESTAMP
            WHERE id = :installment_id
        """, {
            "payment_date": payment_date,
            "method": method,
            "invoice_number": invoice_number,
            "installment_id": installment_id,
        })

    def set_grace_period(self, installment_id, grace_date):
        return db_execute_non_select(self.db, """
            UPDATE installments
            SET grace_period_until = :grace_date, updated_at = CURRENT_TIMESTAMP
            WHERE id = :installment_id
        """, {"grace_date": grace_date, "installment_id": installment_id})

    def get_students_with_enrollment_counts(self):
        return db_execute_safe(self.db, """
            SELECT s.id, s.name, s.level, s.payment_plan, s.subscription_start_date, s.preferred_pay_day,
                   COUNT(ss.id) AS active_enrollments
            FROM students s
            LEFT JOIN session_students ss ON s.id = ss.student_id AND ss.pending_removal = :pending
            GROUP BY s.id, s.name, s.level, s.payment_plan, s.subscription_start_date, s.preferred_pay_day
            ORDER BY s.name
        """, {"pending": False})

    def get_all_installments(self):
        return db_execute_safe(self.db, f"""
            SELECT {INSTALLMENT_COLUMNS}
            FROM installments
            ORDER BY student_id, due_date ASC
        """)
