from datetime import date
from typing import Literal
from pydantic import Field
from academy.schemas.common import StrictModel

class AssignPlanIn(StrictModel):
    studentId: str
    plan: Literal["monthly", "quarterly", "yearly"]
    startDate: date

class ChangeDueDatesIn(StrictModel):
    studentId: str
    preferredDay: int = Field(ge=1, le=28)
    currentPreferredDay: int | None = Field(default=None, ge=1, le=31)

class MarkPaidIn(StrictModel):
    installmentId: str
    paymentMethod: Literal["visa", "mada", "cash", "transfer"]

class GracePeriodIn(StrictModel):
    installmentId: str
    gracePeriodDate: date
