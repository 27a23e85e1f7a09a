# services/requests/dataclasses.py
from dataclasses import dataclass
from datetime import date
from typing import Optional, Dict

from academy.core.db import as_date

REQUEST_TYPES = ("remove-student", "change-time", "add-student")
DECISIONS = ("approved", "denied")

@dataclass
class TeacherRequest:
    id: str
    type: str
    status: str
    date: date
    teacher_id: str
    teacher_name: str
    student_id: Optional[str]
    student_name: Optional[str]
    session_id: Optional[str]
    session_time: Optional[str]
    day: Optional[str]
    reason: Optional[str]
    semester_id: str

    @property
    def is_decided(self) -> bool:
        return self.status in DECISIONS

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "type": self.type,
            "status": self.status,
            "date": self.date.isoformat() if self.date else None,
            "teacherId": self.teacher_id,
            "teacherName": self.teacher_name,
            "details": {
                "studentId": self.student_id,
                "studentName": self.student_name,
                "sessionId": self.session_id,
                "sessionTime": self.session_time,
                "day": self.day,
                "reason": self.reason,
                "semesterId": self.semester_id,
            },
        }

def row_to_request(row) -> TeacherRequest:
    """Convert database row to TeacherRequest"""
    return TeacherRequest(
        id=row["id"],
        type=row["type"],
        status=row["status"],
        date=as_date(row["request_date"]),
        teacher_id=row["teacher_id"],
        teacher_name=row["teacher_name"],
        student_id=row["student_id"],
        student_name=row["student_name"],
        session_id=row["session_id"],
        session_time=row["session_time"],
        day=row["day"],
        reason=row["reason"],
        semester_id=row["semester_id"],
    )
