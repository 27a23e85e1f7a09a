# services/schedule/service.py
import csv
import io
import json
import logging
import uuid
from datetime import date
from typing import Optional, Dict, List

from academy.core.db import as_iso
from academy.core.errors import NotFoundError, InvalidRequestError, ConflictError
from .repo import ScheduleRepo
from .parsing import WEEK_DAYS, week_start_for
from .dataclasses import SessionView, assemble_sessions, build_master_schedule, row_to_session_view

logger = logging.getLogger(__name__)

ATTENDANCE_STATUSES = ("present", "absent", "late", "excused")
SESSION_TYPES = ("practical", "theory")
CSV_HEADER = ["Day", "Time", "Specialization", "Type", "Student Name", "Attendance"]


class ScheduleService:
    """Weekly schedule assembly, enrollment changes and attendance marks"""

    def __init__(self, db):
        self.db = db
        self.repo = ScheduleRepo(db)

    # === WEEKLY GRID ===

    def get_week(self, semester_id: str, teacher_name: str, week_start: date) -> List[SessionView]:
        rows = self.repo.get_week_rows(semester_id, teacher_name, week_start_for(week_start))
        return assemble_sessions(rows)

    def export_week_csv(self, semester_id: str, teacher_name: str, week_start: date) -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
        writer.writerow(CSV_HEADER)
        for session in self.get_week(semester_id, teacher_name, week_start):
            for student in session.students:
                writer.writerow([
                    session.day, session.time, session.specialization or "",
                    session.type, student.name, student.attendance or "N/A",
                ])
        return buffer.getvalue()

    def get_session(self, session_id: str) -> SessionView:
        row = self.repo.get_session(session_id)
        if not row:
            raise NotFoundError(f"Session {session_id} not found")
        return row_to_session_view(row)

    def create_session(
        self,
        semester_id: str,
        teacher_name: str,
        day: str,
        time_slot: str,
        duration: float,
        session_type: str,
        specialization: Optional[str] = None,
        note: Optional[str] = None,
    ) -> SessionView:
        if day not in WEEK_DAYS:
            raise InvalidRequestError(f"Day must be one of {', '.join(WEEK_DAYS)}")
        if session_type not in SESSION_TYPES:
            raise InvalidRequestError("Session type must be practical or theory")
        if duration <= 0:
            raise InvalidRequestError("Duration must be positive")

        semester = self.repo.get_semester(semester_id)
        if not semester:
            raise NotFoundError(f"Semester {semester_id} not found")
        if teacher_name not in _teachers(semester):
            raise InvalidRequestError(f"{teacher_name} does not teach in semester {semester_id}")

        session_id = f"SES-{uuid.uuid4().hex[:12].upper()}"
        self.repo.insert_session(session_id, semester_id, teacher_name, day, time_slot,
                                 duration, specialization, session_type, note)
        self.db.commit()
        logger.info("Created session %s for %s on %s %s", session_id, teacher_name, day, time_slot)
        return self.get_session(session_id)

    # === SEMESTERS ===

    def list_semesters(self) -> List[Dict]:
        return [_semester_to_dict(row) for row in self.repo.list_semesters()]

    def get_master_schedule(self, semester_id: str) -> Dict:
        semester = self.repo.get_semester(semester_id)
        if not semester:
            raise NotFoundError(f"Semester {semester_id} not found")
        sessions = assemble_sessions(self.repo.get_semester_rows(semester_id))
        return {
            "semester": _semester_to_dict(semester),
            "masterSchedule": build_master_schedule(sessions),
        }

    # === ENROLLMENT ===

    def enroll(self, session_id: str, student_id: str) -> str:
        self.get_session(session_id)
        if not self.repo.student_exists(student_id):
            raise NotFoundError(f"Student {student_id} not found")
        if self.repo.get_enrollment(session_id, student_id):
            raise ConflictError("Student is already enrolled in this session")

        enrollment_id = f"SS-{uuid.uuid4().hex[:12].upper()}"
        try:
            self.repo.insert_enrollment(enrollment_id, session_id, student_id)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Enrolled %s in session %s", student_id, session_id)
        return enrollment_id

    def unenroll(self, session_id: str, student_id: str) -> None:
        """Hard delete, used for direct admin removal"""
        if not self.repo.delete_enrollment(session_id, student_id):
            raise NotFoundError("Enrollment not found")
        self.db.commit()
        logger.info("Removed %s from session %s", student_id, session_id)

    def set_pending_removal(self, session_id: str, student_id: str, pending: bool) -> None:
        if not self.repo.set_pending_removal(session_id, student_id, pending):
            raise NotFoundError("Enrollment not found")
        self.db.commit()

    # === ATTENDANCE ===

    def record_attendance(
        self,
        session_id: str,
        student_id: str,
        week_start: date,
        status: str,
        note: Optional[str] = None,
    ) -> Dict:
        """Insert or overwrite the single mark for (session, student, week)"""
        if status not in ATTENDANCE_STATUSES:
            raise InvalidRequestError(f"Unknown attendance status: {status}")
        if not self.repo.get_enrollment(session_id, student_id):
            raise NotFoundError("Student is not enrolled in this session")

        week = week_start_for(week_start)
        try:
            self.repo.upsert_attendance(f"ATT-{uuid.uuid4().hex[:12].upper()}",
                                        session_id, student_id, week, status, note)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return {"sessionId": session_id, "studentId": student_id,
                "weekStartDate": week.isoformat(), "status": status}


def _teachers(semester_row) -> List[str]:
    return json.loads(semester_row["teachers_json"] or "[]")

def _semester_to_dict(row) -> Dict:
    return {
        "id": row["id"],
        "name": row["name"],
        "startDate": as_iso(row["start_date"]),
        "endDate": as_iso(row["end_date"]),
        "teachers": _teachers(row),
        "isActive": bool(row["is_active"]),
    }
