import datetime as dt
from typing import Literal
from pydantic import Field
from academy.schemas.common import StrictModel

class StudentCreate(StrictModel):
    name: str = Field(min_length=1)
    level: str = Field(min_length=1)

class LevelUpdate(StrictModel):
    newLevel: str = Field(min_length=1)
    review: str | None = None
    currentLevel: str | None = None

class Attachment(StrictModel):
    name: str
    type: str
    dataUrl: str

class GradeCreate(StrictModel):
    subject: str
    type: Literal["test", "assignment", "quiz"]
    title: str
    score: float
    maxScore: float = Field(gt=0)
    date: dt.date
    attachment: Attachment | None = None
    notes: str | None = None

class Criterion(StrictModel):
    name: str
    score: float

class EvaluationCreate(StrictModel):
    date: dt.date
    evaluator: str
    criteria: list[Criterion] = Field(min_length=1)
    notes: str | None = None
