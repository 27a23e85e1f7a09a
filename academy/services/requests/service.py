# services/requests/service.py
import logging
import uuid
from datetime import date
from typing import Optional, Dict, List

from academy.core.errors import NotFoundError, InvalidRequestError, ConflictError, PermissionDeniedError
from .repo import RequestRepo
from .dataclasses import REQUEST_TYPES, DECISIONS, TeacherRequest, row_to_request

logger = logging.getLogger(__name__)


class RequestService:
    """Teacher requests and their approval state machine.

    A request starts pending and moves once to approved or denied. Approving a
    remove-student request flags the enrollment for removal in the same
    transaction as the status change.
    """

    def __init__(self, db):
        self.db = db
        self.repo = RequestRepo(db)

    def list_requests(self, teacher_id: Optional[str] = None, status: Optional[str] = None) -> List[Dict]:
        return [row_to_request(row).to_dict() for row in self.repo.list_requests(teacher_id, status)]

    def create_request(
        self,
        type: str,
        teacher_id: str,
        teacher_name: Optional[str],
        session_id: str,
        semester_id: Optional[str] = None,
        student_id: Optional[str] = None,
        reason: Optional[str] = None,
        today: Optional[date] = None,
    ) -> Dict:
        if type not in REQUEST_TYPES:
            raise InvalidRequestError(f"Unknown request type: {type}")
        if type in ("remove-student", "add-student") and not student_id:
            raise InvalidRequestError("studentId is required for this request type")

        try:
            session = self.repo.get_session(session_id)
            if not session:
                raise NotFoundError(f"Session {session_id} not found")
            if teacher_name is None:
                teacher_name = session["teacher_name"]
            elif session["teacher_name"] != teacher_name:
                raise PermissionDeniedError(f"Session {session_id} does not belong to {teacher_name}")

            student_name = None
            if student_id:
                student_name = self.repo.get_student_name(student_id)
                if student_name is None:
                    raise NotFoundError(f"Student {student_id} not found")

            enrolled = bool(student_id) and self.repo.enrollment_exists(session_id, student_id)
            if type == "remove-student" and not enrolled:
                raise NotFoundError(f"Student {student_id} is not enrolled in {session_id}")
            if type == "add-student" and enrolled:
                raise ConflictError(f"Student {student_id} is already enrolled in {session_id}")

            req = TeacherRequest(
                id=f"REQ-{uuid.uuid4().hex[:8].upper()}",
                type=type,
                status="pending",
                date=today or date.today(),
                teacher_id=teacher_id,
                teacher_name=teacher_name,
                student_id=student_id,
                student_name=student_name,
                session_id=session_id,
                session_time=session["time_slot"],
                day=session["day_of_week"],
                reason=reason,
                semester_id=semester_id or session["semester_id"],
            )
            self.repo.insert_request(req)
            if type == "remove-student":
                self.repo.flag_pending_removal(session_id, student_id)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Request %s (%s) created by %s", req.id, type, teacher_name)
        return req.to_dict()

    def decide(self, request_id: str, action: str) -> Dict:
        """Approve or deny a request.

        Repeating the decision a request already carries is a no-op; trying to
        flip a decided request raises ConflictError.
        """
        if action not in DECISIONS:
            raise InvalidRequestError("Action must be 'approved' or 'denied'")

        try:
            row = self.repo.get_request(request_id)
            if not row:
                raise NotFoundError(f"Request {request_id} not found")
            req = row_to_request(row)

            if req.status == action:
                self.db.rollback()
                return req.to_dict()
            if req.is_decided:
                raise ConflictError(f"Request {request_id} is already {req.status}")

            self.repo.update_status(request_id, action)
            if action == "approved" and req.type == "remove-student" and req.session_id and req.student_id:
                if not self.repo.flag_pending_removal(req.session_id, req.student_id):
                    logger.warning("Approved %s but %s is no longer enrolled in %s",
                                   request_id, req.student_id, req.session_id)

            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        req.status = action
        logger.info("Request %s %s", request_id, action)
        return req.to_dict()
