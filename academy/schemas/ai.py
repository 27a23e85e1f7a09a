from pydantic import BaseModel
from academy.schemas.common import StrictModel

class SuggestGradesIn(StrictModel):
    attendanceRecords: str
    evaluations: str
    subject: str

class SuggestGradesOut(BaseModel):
    suggestedGrade: str
    reasoning: str

class StudentAvailability(StrictModel):
    studentId: str
    availability: list[str]

class ClassroomCapacity(StrictModel):
    classroomId: str
    capacity: int
    subject: str

class SuggestScheduleIn(StrictModel):
    studentAvailabilities: list[StudentAvailability]
    teacherExpertise: dict[str, str]
    classroomCapacity: list[ClassroomCapacity]

class ScheduledClass(BaseModel):
    timeSlot: str
    classroomId: str
    teacherId: str
    studentId: str
    subject: str

class SuggestScheduleOut(BaseModel):
    optimizedSchedule: list[ScheduledClass]
    conflictResolution: str
