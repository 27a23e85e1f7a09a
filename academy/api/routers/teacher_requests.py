# academy/api/routers/teacher_requests.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from academy.core.db import get_db
from academy.core.errors import AcademyError
from academy.api.deps.auth import get_current_user, require_roles, OVERSIGHT_ROLES
from academy.api.errors import to_http
from academy.schemas.request import TeacherRequestCreate, RequestDecision
from academy.services.requests import RequestService

router = APIRouter(prefix="/teacher-requests", tags=["Teacher Requests"])


@router.get("")
def list_requests(
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    ctx=Depends(get_current_user),
):
    # Teachers only see what they filed
    teacher_id = None if set(ctx["roles"]) & OVERSIGHT_ROLES else ctx["user"].id
    return {"requests": RequestService(db).list_requests(teacher_id=teacher_id, status=status)}


@router.post("")
def create_request(payload: TeacherRequestCreate, db: Session = Depends(get_db),
                   ctx=Depends(require_roles("admin", "teacher"))):
    user = ctx["user"]
    teacher_name = None if "admin" in ctx["roles"] else user.name
    try:
        request = RequestService(db).create_request(
            type=payload.type,
            teacher_id=user.id,
            teacher_name=teacher_name,
            session_id=payload.sessionId,
            semester_id=payload.semesterId,
            student_id=payload.studentId,
            reason=payload.reason,
        )
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "request": request}


@router.put("")
def decide_request(payload: RequestDecision, db: Session = Depends(get_db), ctx=Depends(require_roles("admin"))):
    try:
        request = RequestService(db).decide(payload.requestId, payload.action)
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "request": request}
