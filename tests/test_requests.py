from datetime import date

import pytest

from academy.core.errors import ConflictError, InvalidRequestError, NotFoundError, PermissionDeniedError
from academy.services.requests import RequestService
from academy.services.schedule import ScheduleService


def _pending_flag(db, session_id, student_id):
    row = ScheduleService(db).repo.get_enrollment(session_id, student_id)
    return bool(row["pending_removal"]) if row else None


def test_approving_remove_student_flags_enrollment(seeded):
    result = RequestService(seeded).decide("REQ001", "approved")

    assert result["status"] == "approved"
    assert _pending_flag(seeded, "Saturday-13", "STU002") is True


def test_denying_leaves_enrollment_untouched(seeded):
    RequestService(seeded).decide("REQ002", "denied")

    assert RequestService(seeded).repo.get_request("REQ002")["status"] == "denied"
    assert _pending_flag(seeded, "Sunday-14", "STU003") is False


def test_change_time_approval_has_no_enrollment_effect(seeded):
    RequestService(seeded).decide("REQ003", "approved")
    assert _pending_flag(seeded, "Monday-17", "STU004") is False


def test_same_decision_twice_is_idempotent(seeded):
    service = RequestService(seeded)
    service.decide("REQ001", "approved")
    again = service.decide("REQ001", "approved")
    assert again["status"] == "approved"


def test_decided_request_cannot_flip(seeded):
    service = RequestService(seeded)
    service.decide("REQ001", "denied")
    with pytest.raises(ConflictError):
        service.decide("REQ001", "approved")
    assert _pending_flag(seeded, "Saturday-13", "STU002") is False


def test_unknown_request_and_action(seeded):
    service = RequestService(seeded)
    with pytest.raises(NotFoundError):
        service.decide("REQ999", "approved")
    with pytest.raises(InvalidRequestError):
        service.decide("REQ001", "pending")


def test_create_remove_request_flags_enrollment(seeded):
    created = RequestService(seeded).create_request(
        type="remove-student", teacher_id="6", teacher_name="نهاد",
        session_id="Saturday-15", student_id="STU008", reason="Moved away", today=date(2024, 9, 9),
    )

    assert created["status"] == "pending"
    assert created["date"] == "2024-09-09"
    assert created["details"]["studentName"] == "سارة الدوسري"
    assert created["details"]["sessionTime"] == "3:00 PM - 5:00 PM"
    assert created["details"]["semesterId"] == "fall-2024"
    assert _pending_flag(seeded, "Saturday-15", "STU008") is True


def test_create_request_validation(seeded):
    service = RequestService(seeded)
    with pytest.raises(PermissionDeniedError):
        service.create_request(type="change-time", teacher_id="7", teacher_name="حازم", session_id="Saturday-13")
    with pytest.raises(NotFoundError):
        service.create_request(type="remove-student", teacher_id="6", teacher_name="نهاد",
                               session_id="Saturday-13", student_id="STU003")
    with pytest.raises(ConflictError):
        service.create_request(type="add-student", teacher_id="6", teacher_name="نهاد",
                               session_id="Saturday-13", student_id="STU001")
    with pytest.raises(InvalidRequestError):
        service.create_request(type="add-student", teacher_id="6", teacher_name="نهاد", session_id="Saturday-13")


def test_list_is_newest_first(seeded):
    requests = RequestService(seeded).list_requests()
    assert [r["id"] for r in requests] == ["REQ003", "REQ002", "REQ001"]
    assert [r["id"] for r in RequestService(seeded).list_requests(teacher_id="6")] == ["REQ001"]
