# academy/api/routers/attendance.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.core.db import get_db
from academy.core.errors import AcademyError
from academy.api.deps.auth import require_roles, ensure_teacher_scope
from academy.api.errors import to_http
from academy.schemas.schedule import AttendanceIn
from academy.services.schedule import ScheduleService

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.post("")
def record_attendance(payload: AttendanceIn, db: Session = Depends(get_db),
                      ctx=Depends(require_roles("admin", "teacher"))):
    service = ScheduleService(db)
    try:
        session = service.get_session(payload.sessionId)
        ensure_teacher_scope(ctx, session.teacher_name)
        record = service.record_attendance(
            payload.sessionId, payload.studentId, payload.weekStartDate, payload.status, note=payload.note
        )
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "attendance": record}
