# academy/models/__init__.py
from academy.models.base import Base
from academy.models.user import User
from academy.models.student import Student, LevelChange, Grade, Evaluation
from academy.models.schedule import Semester, ClassSession, Enrollment, Attendance
from academy.models.payment import Installment, DueDateChange
from academy.models.request import TeacherRequest

__all__ = [
    "Base", "User", "Student", "LevelChange", "Grade", "Evaluation",
    "Semester", "ClassSession", "Enrollment", "Attendance",
    "Installment", "DueDateChange", "TeacherRequest",
]
