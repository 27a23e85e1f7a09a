from typing import Literal
from academy.schemas.common import StrictModel

class TeacherRequestCreate(StrictModel):
    type: Literal["remove-student", "change-time", "add-student"]
    sessionId: str
    studentId: str | None = None
    reason: str | None = None
    semesterId: str | None = None

class RequestDecision(StrictModel):
    requestId: str
    action: Literal["approved", "denied"]
