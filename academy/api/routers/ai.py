# academy/api/routers/ai.py
from fastapi import APIRouter, Depends

from academy.core.errors import AcademyError
from academy.api.deps.auth import require_roles
from academy.api.errors import to_http
from academy.schemas.ai import SuggestGradesIn, SuggestGradesOut, SuggestScheduleIn, SuggestScheduleOut
from academy.services.ai import get_llm, suggest_grades, suggest_schedule

router = APIRouter(prefix="/ai", tags=["AI"])


@router.post("/suggest-grades", response_model=SuggestGradesOut)
async def grades(payload: SuggestGradesIn, llm=Depends(get_llm), ctx=Depends(require_roles("admin", "teacher"))):
    try:
        return await suggest_grades(llm, payload)
    except AcademyError as e:
        raise to_http(e)


@router.post("/suggest-schedule", response_model=SuggestScheduleOut)
async def schedule(payload: SuggestScheduleIn, llm=Depends(get_llm), ctx=Depends(require_roles("admin"))):
    try:
        return await suggest_schedule(llm, payload)
    except AcademyError as e:
        raise to_http(e)
