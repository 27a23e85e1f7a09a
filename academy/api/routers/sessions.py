# academy/api/routers/sessions.py
from datetime import date
from urllib.parse import quote

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from academy.core.db import get_db
from academy.core.errors import AcademyError
from academy.api.deps.auth import get_current_user, require_roles, ensure_teacher_scope
from academy.api.errors import to_http
from academy.schemas.schedule import SessionCreate
from academy.services.schedule import ScheduleService

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("")
def week_sessions(
    semesterId: str = Query(...),
    teacherName: str = Query(...),
    weekStart: date = Query(...),
    db: Session = Depends(get_db),
    ctx=Depends(get_current_user),
):
    """Assembled grid sessions of one teacher for the academic week containing weekStart"""
    ensure_teacher_scope(ctx, teacherName)
    sessions = ScheduleService(db).get_week(semesterId, teacherName, weekStart)
    return [s.to_dict() for s in sessions]


@router.get("/export")
def export_week(
    semesterId: str = Query(...),
    teacherName: str = Query(...),
    weekStart: date = Query(...),
    db: Session = Depends(get_db),
    ctx=Depends(get_current_user),
):
    ensure_teacher_scope(ctx, teacherName)
    content = ScheduleService(db).export_week_csv(semesterId, teacherName, weekStart)
    filename = f"schedule_{teacherName}_{weekStart.isoformat()}.csv"
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )


@router.post("")
def create_session(payload: SessionCreate, db: Session = Depends(get_db), ctx=Depends(require_roles("admin"))):
    try:
        session = ScheduleService(db).create_session(
            semester_id=payload.semesterId,
            teacher_name=payload.teacherName,
            day=payload.day,
            time_slot=payload.time,
            duration=payload.duration,
            session_type=payload.type,
            specialization=payload.specialization,
            note=payload.note,
        )
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "session": session.to_dict()}
