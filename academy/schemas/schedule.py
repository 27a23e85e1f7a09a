from datetime import date
from typing import Literal
from pydantic import Field
from academy.schemas.common import StrictModel

class SessionCreate(StrictModel):
    semesterId: str
    teacherName: str
    day: Literal["Saturday", "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday"]
    time: str = Field(min_length=1)
    duration: float = Field(gt=0)
    type: Literal["practical", "theory"]
    specialization: str | None = None
    note: str | None = None

class AttendanceIn(StrictModel):
    sessionId: str
    studentId: str
    weekStartDate: date
    status: Literal["present", "absent", "late", "excused"]
    note: str | None = None

class EnrollmentIn(StrictModel):
    sessionId: str
    studentId: str

class PendingRemovalIn(StrictModel):
    sessionId: str
    studentId: str
    pendingRemoval: bool
