# academy/api/routers/session_students.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.core.db import get_db
from academy.core.errors import AcademyError
from academy.api.deps.auth import require_roles, ensure_teacher_scope
from academy.api.errors import to_http
from academy.schemas.schedule import EnrollmentIn, PendingRemovalIn
from academy.services.schedule import ScheduleService

router = APIRouter(prefix="/session-students", tags=["Enrollment"])


@router.post("")
def enroll(payload: EnrollmentIn, db: Session = Depends(get_db), ctx=Depends(require_roles("admin"))):
    try:
        enrollment_id = ScheduleService(db).enroll(payload.sessionId, payload.studentId)
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "id": enrollment_id}


@router.delete("")
def unenroll(payload: EnrollmentIn, db: Session = Depends(get_db), ctx=Depends(require_roles("admin"))):
    try:
        ScheduleService(db).unenroll(payload.sessionId, payload.studentId)
    except AcademyError as e:
        raise to_http(e)
    return {"success": True}


@router.put("/pending")
def set_pending_removal(payload: PendingRemovalIn, db: Session = Depends(get_db),
                        ctx=Depends(require_roles("admin", "teacher"))):
    service = ScheduleService(db)
    try:
        session = service.get_session(payload.sessionId)
        ensure_teacher_scope(ctx, session.teacher_name)
        service.set_pending_removal(payload.sessionId, payload.studentId, payload.pendingRemoval)
    except AcademyError as e:
        raise to_http(e)
    return {"success": True}
