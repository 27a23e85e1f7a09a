# services/students/dataclasses.py
import json
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, List, Dict, Any

from academy.core.db import as_date, as_iso
from academy.services.payments.dataclasses import Installment, DueDateChange

GRADE_TYPES = ("test", "assignment", "quiz")

@dataclass
class LevelChange:
    date: date
    level: str
    review: Optional[str]

    def to_dict(self) -> Dict:
        return {"date": as_iso(self.date), "level": self.level, "review": self.review}

@dataclass
class Evaluation:
    id: str
    date: date
    evaluator: str
    criteria: List[Dict[str, Any]]
    notes: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "date": as_iso(self.date),
            "evaluator": self.evaluator,
            "criteria": self.criteria,
            "notes": self.notes,
        }

@dataclass
class Grade:
    id: str
    subject: str
    type: str
    title: str
    score: float
    max_score: float
    date: date
    attachment: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "subject": self.subject,
            "type": self.type,
            "title": self.title,
            "score": self.score,
            "maxScore": self.max_score,
            "date": as_iso(self.date),
            "attachment": self.attachment,
            "notes": self.notes,
        }

@dataclass
class EnrolledSession:
    semester_id: str
    teacher: str
    session_id: str

    def to_dict(self) -> Dict:
        return {"semesterId": self.semester_id, "teacher": self.teacher, "sessionId": self.session_id}

@dataclass
class StudentProfile:
    """Base student row plus every related record shown on the profile page"""
    id: str
    name: str
    level: str
    id_prefix: Optional[str] = None
    gender: Optional[str] = None
    username: Optional[str] = None
    dob: Optional[date] = None
    nationality: Optional[str] = None
    instrument_interest: Optional[str] = None
    enrollment_date: Optional[date] = None
    payment_plan: Optional[str] = None
    subscription_start_date: Optional[date] = None
    preferred_pay_day: Optional[int] = None
    avatar: Optional[str] = None
    level_history: List[LevelChange] = field(default_factory=list)
    evaluations: List[Evaluation] = field(default_factory=list)
    grades: List[Grade] = field(default_factory=list)
    installments: List[Installment] = field(default_factory=list)
    due_date_changes: List[DueDateChange] = field(default_factory=list)
    enrolled_in: List[EnrolledSession] = field(default_factory=list)

    def to_dict(self, today: Optional[date] = None) -> Dict:
        return {
            "id": self.id,
            "idPrefix": self.id_prefix,
            "name": self.name,
            "gender": self.gender,
            "username": self.username,
            "dob": as_iso(self.dob),
            "nationality": self.nationality,
            "instrumentInterest": self.instrument_interest,
            "enrollmentDate": as_iso(self.enrollment_date),
            "level": self.level,
            "paymentPlan": self.payment_plan,
            "subscriptionStartDate": as_iso(self.subscription_start_date),
            "preferredPayDay": self.preferred_pay_day,
            "avatar": self.avatar,
            "levelHistory": [c.to_dict() for c in self.level_history],
            "evaluations": [e.to_dict() for e in self.evaluations],
            "grades": [g.to_dict() for g in self.grades],
            "installments": [i.to_dict(today) for i in self.installments],
            "dueDateChangeHistory": [c.to_dict() for c in self.due_date_changes],
            "enrolledIn": [e.to_dict() for e in self.enrolled_in],
        }

# Helper functions
def _load_json(value, default):
    if value is None or value == "":
        return default
    if isinstance(value, (dict, list)):
        return value
    return json.loads(value)

def row_to_profile(row) -> StudentProfile:
    """Convert a students row to a StudentProfile without related records"""
    return StudentProfile(
        id=row["id"],
        name=row["name"],
        level=row["level"],
        id_prefix=row["id_prefix"],
        gender=row["gender"],
        username=row["username"],
        dob=as_date(row["dob"]),
        nationality=row["nationality"],
        instrument_interest=row["instrument_interest"],
        enrollment_date=as_date(row["enrollment_date"]),
        payment_plan=row["payment_plan"],
        subscription_start_date=as_date(row["subscription_start_date"]),
        preferred_pay_day=row["preferred_pay_day"],
        avatar=row["avatar"],
    )

def row_to_level_change(row) -> LevelChange:
    return LevelChange(date=as_date(row["change_date"]), level=row["new_level"], review=row["review_comments"])

def row_to_evaluation(row) -> Evaluation:
    return Evaluation(
        id=row["id"],
        date=as_date(row["evaluation_date"]),
        evaluator=row["evaluator"],
        criteria=_load_json(row["criteria_json"], []),
        notes=row["notes"],
    )

def row_to_grade(row) -> Grade:
    return Grade(
        id=row["id"],
        subject=row["subject"],
        type=row["type"],
        title=row["title"],
        score=float(row["score"]),
        max_score=float(row["max_score"]),
        date=as_date(row["grade_date"]),
        attachment=_load_json(row["attachment_json"], None),
        notes=row["notes"],
    )

def row_to_enrolled_session(row) -> EnrolledSession:
    return EnrolledSession(
        semester_id=row["semester_id"],
        teacher=row["teacher_name"],
        session_id=row["session_id"],
    )
