# services/students/repo.py
import json

from academy.core.db import db_execute_safe, db_execute_non_select

STUDENT_COLUMNS = """
    s.id, s.id_prefix, s.name, s.gender, s.username, s.dob, s.nationality, s.instrument_interest,
    s.enrollment_date, s.level, s.payment_plan, s.subscription_start_date, s.preferred_pay_day, s.avatar
"""

class StudentRepo:
    """Pure data access layer for students and their academic records"""

    def __init__(self, db):
        self.db = db

    def get_student(self, student_id):
        rows = db_execute_safe(self.db, f"""
            SELECT {STUDENT_COLUMNS} FROM students s WHERE s.id = :student_id
        """, {"student_id": student_id})
        return rows[0] if rows else None

    def get_students_with_enrollments(self):
        """Every student joined with active enrollments, one row per (student, session)"""
        return db_execute_safe(self.db, f"""
            SELECT {STUDENT_COLUMNS},
                   ss.session_id, se.semester_id, se.teacher_name
            FROM students s
            LEFT JOIN session_students ss ON s.id = ss.student_id AND ss.pending_removal = :pending
            LEFT JOIN sessions se ON ss.session_id = se.id
            ORDER BY s.created_at DESC, s.id, ss.session_id
        """, {"pending": False})

    def get_level_history(self, student_id):
        return db_execute_safe(self.db, """
            SELECT change_date, new_level, review_comments
            FROM level_history WHERE student_id = :student_id
            ORDER BY change_date DESC, created_at DESC
        """, {"student_id": student_id})

    def get_evaluations(self, student_id):
        return db_execute_safe(self.db, """
            SELECT id, evaluation_date, evaluator, criteria_json, notes
            FROM evaluations WHERE student_id = :student_id
            ORDER BY evaluation_date DESC
        """, {"student_id": student_id})

    def get_grades(self, student_id):
        return db_execute_safe(self.db, """
            SELECT id, subject, type, title, score, max_score, grade_date, attachment_json, notes
            FROM grades WHERE student_id = :student_id
            ORDER BY grade_date DESC
        """, {"student_id": student_id})

    def get_installments(self, student_id):
        return db_execute_safe(self.db, """
            SELECT id, due_date, amount, status, payment_date, grace_period_until, invoice_number, payment_method
            FROM installments WHERE student_id = :student_id
            ORDER BY due_date DESC
        """, {"student_id": student_id})

    def get_due_date_changes(self, student_id):
        return db_execute_safe(self.db, """
            SELECT change_date, old_day, new_day
            FROM due_date_changes WHERE student_id = :student_id
            ORDER BY change_date DESC
        """, {"student_id": student_id})

    def get_active_enrollments(self, student_id):
        return db_execute_safe(self.db, """
            SELECT ss.session_id, s.semester_id, s.teacher_name
            FROM session_students ss
            JOIN sessions s ON ss.session_id = s.id
            WHERE ss.student_id = :student_id AND ss.pending_removal = :pending
        """, {"student_id": student_id, "pending": False})

    def insert_student(self, student):
        return db_execute_non_select(self.db, """
            INSERT INTO students (id, name, level, enrollment_date, payment_plan, created_at, updated_at)
            VALUES (:id, :name, :level, :enrollment_date, 'none', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """, {
            "id": student.id,
            "name": student.name,
            "level": student.level,
            "enrollment_date": student.enrollment_date,
        })

    def update_level(self, student_id, level):
        return db_execute_non_select(self.db, """
            UPDATE students SET level = :level, updated_at = CURRENT_TIMESTAMP
            WHERE id = :student_id
        """, {"level": level, "student_id": student_id})

    def insert_level_change(self, change_id, student_id, previous_level, new_level, change_date, review):
        return db_execute_non_select(self.db, """
            INSERT INTO level_history (id, student_id, previous_level, new_level, change_date,
                                       review_comments, created_at)
            VALUES (:id, :student_id, :previous_level, :new_level, :change_date, :review, CURRENT_TIMESTAMP)
        """, {
            "id": change_id,
            "student_id": student_id,
            "previous_level": previous_level,
            "new_level": new_level,
            "change_date": change_date,
            "review": review,
        })

    def insert_grade(self, student_id, grade):
        return db_execute_non_select(self.db, """
            INSERT INTO grades (id, student_id, subject, type, title, score, max_score,
                                grade_date, attachment_json, notes, created_at, updated_at)
            VALUES (:id, :student_id, :subject, :type, :title, :score, :max_score,
                    :grade_date, :attachment_json, :notes, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """, {
            "id": grade.id,
            "student_id": student_id,
            "subject": grade.subject,
            "type": grade.type,
            "title": grade.title,
            "score": grade.score,
            "max_score": grade.max_score,
            "grade_date": grade.date,
            "attachment_json": json.dumps(grade.attachment) if grade.attachment else None,
            "notes": grade.notes,
        })

    def insert_evaluation(self, student_id, evaluation):
        return db_execute_non_select(self.db, """
            INSERT INTO evaluations (id, student_id, evaluation_date, evaluator, criteria_json,
                                     notes, created_at, updated_at)
            VALUES (:id, :student_id, :evaluation_date, :evaluator, :criteria_json,
                    :notes, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """, {
            "id": evaluation.id,
            "student_id": student_id,
            "evaluation_date": evaluation.date,
            "evaluator": evaluation.evaluator,
            "criteria_json": json.dumps(evaluation.criteria),
            "notes": evaluation.notes,
        })
