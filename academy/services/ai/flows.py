# academy/services/ai/flows.py - single-prompt helpers for grade and schedule suggestions
import json
import logging
import re

from pydantic import ValidationError

from academy.core.errors import UpstreamError
from academy.schemas.ai import (
    SuggestGradesIn, SuggestGradesOut, SuggestScheduleIn, SuggestScheduleOut,
)

logger = logging.getLogger(__name__)

GRADES_SYSTEM_PROMPT = """You are an AI assistant that suggests grades for students of a music academy
based on their attendance records and evaluations.
Answer with a single JSON object and nothing else:
{"suggestedGrade": "<grade>", "reasoning": "<why>"}"""

SCHEDULE_SYSTEM_PROMPT = """You are an AI assistant that creates an optimized weekly class schedule.

Rules:
1. Assign each student to a teacher and a classroom within the student's availability.
2. The teacher's subject expertise must match the subject of the class.
3. Students in a classroom at any time must not exceed its capacity.
4. Minimize scheduling conflicts and maximize resource utilization.
5. Summarize how you resolved any potential conflicts.

Answer with a single JSON object and nothing else:
{"optimizedSchedule": [{"timeSlot": "", "classroomId": "", "teacherId": "", "studentId": "", "subject": ""}],
 "conflictResolution": ""}"""

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def extract_json(content: str) -> dict:
    """Pull the JSON object out of a model reply, tolerating code fences and chatter"""
    text = _FENCE.sub("", (content or "").strip())
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end < start:
        raise UpstreamError("Language model returned no JSON object")
    try:
        return json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise UpstreamError(f"Language model returned malformed JSON: {e}") from e


async def suggest_grades(llm, data: SuggestGradesIn) -> SuggestGradesOut:
    user_prompt = (
        f"Subject: {data.subject}\n"
        f"Attendance Records: {data.attendanceRecords}\n"
        f"Evaluations: {data.evaluations}"
    )
    content = await llm.generate(GRADES_SYSTEM_PROMPT, [{"role": "user", "content": user_prompt}], json_mode=True)
    try:
        return SuggestGradesOut.model_validate(extract_json(content))
    except ValidationError as e:
        logger.warning("Unusable grade suggestion: %s", content)
        raise UpstreamError("Language model answer did not match the expected shape") from e


async def suggest_schedule(llm, data: SuggestScheduleIn) -> SuggestScheduleOut:
    inputs = data.model_dump()
    user_prompt = (
        f"Student Availabilities: {json.dumps(inputs['studentAvailabilities'], ensure_ascii=False)}\n"
        f"Teacher Expertise: {json.dumps(inputs['teacherExpertise'], ensure_ascii=False)}\n"
        f"Classroom Capacity: {json.dumps(inputs['classroomCapacity'], ensure_ascii=False)}"
    )
    content = await llm.generate(SCHEDULE_SYSTEM_PROMPT, [{"role": "user", "content": user_prompt}], json_mode=True)
    try:
        return SuggestScheduleOut.model_validate(extract_json(content))
    except ValidationError as e:
        logger.warning("Unusable schedule suggestion: %s", content)
        raise UpstreamError("Language model answer did not match the expected shape") from e
