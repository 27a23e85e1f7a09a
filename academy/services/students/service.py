# services/students/service.py
import logging
import uuid
from datetime import date
from typing import Optional, Dict, List, Any

from academy.core.errors import NotFoundError, InvalidRequestError
from academy.services.payments.dataclasses import row_to_installment, row_to_due_date_change
from .repo import StudentRepo
from .dataclasses import (
    GRADE_TYPES, StudentProfile, Grade, Evaluation,
    row_to_profile, row_to_level_change, row_to_evaluation, row_to_grade, row_to_enrolled_session,
)

logger = logging.getLogger(__name__)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:10].upper()}"


class StudentService:
    def __init__(self, db):
        self.db = db
        self.repo = StudentRepo(db)

    def get_profile(self, student_id: str) -> StudentProfile:
        """Compose the full student aggregate; a missing base row is NotFoundError"""
        row = self.repo.get_student(student_id)
        if not row:
            raise NotFoundError(f"Student {student_id} not found")

        profile = row_to_profile(row)
        profile.level_history = [row_to_level_change(r) for r in self.repo.get_level_history(student_id)]
        profile.evaluations = [row_to_evaluation(r) for r in self.repo.get_evaluations(student_id)]
        profile.grades = [row_to_grade(r) for r in self.repo.get_grades(student_id)]
        profile.installments = [row_to_installment(r) for r in self.repo.get_installments(student_id)]
        profile.due_date_changes = [row_to_due_date_change(r) for r in self.repo.get_due_date_changes(student_id)]
        profile.enrolled_in = [row_to_enrolled_session(r) for r in self.repo.get_active_enrollments(student_id)]
        return profile

    def list_students(self) -> List[StudentProfile]:
        """All students with their active enrollments, from one joined query"""
        students: Dict[str, StudentProfile] = {}
        for row in self.repo.get_students_with_enrollments():
            profile = students.get(row["id"])
            if profile is None:
                profile = students[row["id"]] = row_to_profile(row)
            if row["session_id"]:
                profile.enrolled_in.append(row_to_enrolled_session(row))
        return list(students.values())

    def create_student(self, name: str, level: str, today: Optional[date] = None) -> StudentProfile:
        name = (name or "").strip()
        level = (level or "").strip()
        if not name or not level:
            raise InvalidRequestError("Name and level are required")

        student = StudentProfile(
            id=_new_id("STD"),
            name=name,
            level=level,
            enrollment_date=today or date.today(),
            payment_plan="none",
        )
        try:
            self.repo.insert_student(student)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Created student %s (%s)", student.id, student.name)
        return student

    def update_level(
        self,
        student_id: str,
        new_level: str,
        review: Optional[str] = None,
        current_level: Optional[str] = None,
        today: Optional[date] = None,
    ) -> str:
        """Change the level and append a history entry in one transaction"""
        if not new_level or not new_level.strip():
            raise InvalidRequestError("New level is required")
        new_level = new_level.strip()

        try:
            row = self.repo.get_student(student_id)
            if not row:
                raise NotFoundError(f"Student {student_id} not found")

            self.repo.update_level(student_id, new_level)
            self.repo.insert_level_change(
                _new_id("LH"), student_id, current_level or row["level"], new_level,
                today or date.today(), review,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Level of %s changed from %s to %s", student_id, row["level"], new_level)
        return new_level

    def add_grade(
        self,
        student_id: str,
        subject: str,
        type: str,
        title: str,
        score: float,
        max_score: float,
        grade_date: date,
        attachment: Optional[Dict[str, Any]] = None,
        notes: Optional[str] = None,
    ) -> Grade:
        if type not in GRADE_TYPES:
            raise InvalidRequestError(f"Unknown grade type: {type}")
        if max_score <= 0 or score < 0 or score > max_score:
            raise InvalidRequestError("Score must be between 0 and maxScore")

        grade = Grade(
            id=_new_id("GRD"),
            subject=subject,
            type=type,
            title=title,
            score=score,
            max_score=max_score,
            date=grade_date,
            attachment=attachment,
            notes=notes,
        )
        try:
            if not self.repo.get_student(student_id):
                raise NotFoundError(f"Student {student_id} not found")
            self.repo.insert_grade(student_id, grade)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return grade

    def add_evaluation(
        self,
        student_id: str,
        evaluator: str,
        criteria: List[Dict[str, Any]],
        evaluation_date: date,
        notes: Optional[str] = None,
    ) -> Evaluation:
        evaluation = Evaluation(
            id=_new_id("EVAL"),
            date=evaluation_date,
            evaluator=evaluator,
            criteria=criteria,
            notes=notes,
        )
        try:
            if not self.repo.get_student(student_id):
                raise NotFoundError(f"Student {student_id} not found")
            self.repo.insert_evaluation(student_id, evaluation)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return evaluation
