# academy/api/routers/students.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.core.db import get_db
from academy.core.errors import AcademyError
from academy.api.deps.auth import get_current_user, require_roles
from academy.api.errors import to_http
from academy.schemas.student import StudentCreate, LevelUpdate, GradeCreate, EvaluationCreate
from academy.services.students import StudentService

router = APIRouter(prefix="/students", tags=["Students"])


@router.get("")
def list_students(db: Session = Depends(get_db), ctx=Depends(get_current_user)):
    students = StudentService(db).list_students()
    return {"students": [s.to_dict() for s in students]}


@router.post("")
def create_student(payload: StudentCreate, db: Session = Depends(get_db), ctx=Depends(require_roles("admin"))):
    try:
        student = StudentService(db).create_student(payload.name, payload.level)
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "student": student.to_dict(), "message": "Student created successfully"}


@router.get("/{student_id}")
def get_student(student_id: str, db: Session = Depends(get_db), ctx=Depends(get_current_user)):
    """Full profile: level history, evaluations, grades, installments, due date changes, enrollments"""
    try:
        profile = StudentService(db).get_profile(student_id)
    except AcademyError as e:
        raise to_http(e)
    return profile.to_dict()


@router.put("/{student_id}/level")
def update_level(student_id: str, payload: LevelUpdate, db: Session = Depends(get_db),
                 ctx=Depends(require_roles("admin"))):
    try:
        new_level = StudentService(db).update_level(
            student_id, payload.newLevel, review=payload.review, current_level=payload.currentLevel
        )
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "newLevel": new_level}


@router.post("/{student_id}/grades")
def add_grade(student_id: str, payload: GradeCreate, db: Session = Depends(get_db),
              ctx=Depends(require_roles("admin", "teacher"))):
    try:
        grade = StudentService(db).add_grade(
            student_id,
            subject=payload.subject,
            type=payload.type,
            title=payload.title,
            score=payload.score,
            max_score=payload.maxScore,
            grade_date=payload.date,
            attachment=payload.attachment.model_dump() if payload.attachment else None,
            notes=payload.notes,
        )
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "grade": grade.to_dict()}


@router.post("/{student_id}/evaluations")
def add_evaluation(student_id: str, payload: EvaluationCreate, db: Session = Depends(get_db),
                   ctx=Depends(require_roles("admin", "teacher"))):
    try:
        evaluation = StudentService(db).add_evaluation(
            student_id,
            evaluator=payload.evaluator,
            criteria=[c.model_dump() for c in payload.criteria],
            evaluation_date=payload.date,
            notes=payload.notes,
        )
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "evaluation": evaluation.to_dict()}
