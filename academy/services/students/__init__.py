from academy.services.students.service import StudentService

__all__ = ["StudentService"]
