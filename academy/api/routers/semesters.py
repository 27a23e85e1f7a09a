# academy/api/routers/semesters.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.core.db import get_db
from academy.core.errors import AcademyError
from academy.api.deps.auth import get_current_user
from academy.api.errors import to_http
from academy.services.schedule import ScheduleService

router = APIRouter(prefix="/semesters", tags=["Semesters"])


@router.get("")
def list_semesters(db: Session = Depends(get_db), ctx=Depends(get_current_user)):
    return {"semesters": ScheduleService(db).list_semesters()}


@router.get("/{semester_id}/master-schedule")
def master_schedule(semester_id: str, db: Session = Depends(get_db), ctx=Depends(get_current_user)):
    """Teacher → day → sessions, computed from the session and enrollment tables"""
    try:
        return ScheduleService(db).get_master_schedule(semester_id)
    except AcademyError as e:
        raise to_http(e)
