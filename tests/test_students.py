from datetime import date

import pytest

from academy.core.errors import InvalidRequestError, NotFoundError
from academy.services.payments import PaymentService
from academy.services.schedule import ScheduleService
from academy.services.students import StudentService


def test_profile_of_unknown_student(seeded):
    with pytest.raises(NotFoundError):
        StudentService(seeded).get_profile("STU999")


def test_profile_aggregates_related_records(seeded):
    service = StudentService(seeded)
    service.update_level("STU001", "Intermediate", review="Solid progress", today=date(2024, 10, 1))
    service.update_level("STU001", "Advanced", review="Ready", today=date(2024, 12, 1))
    service.add_grade("STU001", subject="Oud", type="test", title="Midterm", score=18, max_score=20,
                      grade_date=date(2024, 10, 15))
    service.add_grade("STU001", subject="Oud", type="quiz", title="Scales", score=9, max_score=10,
                      grade_date=date(2024, 11, 2), attachment={"name": "a.pdf", "type": "application/pdf",
                                                                "dataUrl": "data:,"})
    service.add_evaluation("STU001", evaluator="نهاد", evaluation_date=date(2024, 11, 20),
                           criteria=[{"name": "Technique", "score": 4}], notes="Good")
    payments = PaymentService(seeded)
    payments.assign_plan("STU001", "quarterly", date(2024, 9, 1))
    payments.change_due_dates("STU001", 10, today=date(2024, 9, 15))

    profile = service.get_profile("STU001").to_dict()

    assert profile["level"] == "Advanced"
    assert [c["level"] for c in profile["levelHistory"]] == ["Advanced", "Intermediate"]
    assert [g["title"] for g in profile["grades"]] == ["Scales", "Midterm"]
    assert profile["grades"][0]["attachment"]["name"] == "a.pdf"
    assert profile["grades"][0]["maxScore"] == 10
    assert profile["evaluations"][0]["criteria"] == [{"name": "Technique", "score": 4}]
    assert [i["dueDate"] for i in profile["installments"]] == [
        "2025-06-10", "2025-03-10", "2024-12-10", "2024-09-01",
    ]
    assert profile["dueDateChangeHistory"] == [{"date": "2024-09-15", "oldDay": 1, "newDay": 10}]
    assert profile["enrolledIn"] == [{"semesterId": "fall-2024", "teacher": "نهاد", "sessionId": "Saturday-13"}]


def test_pending_removal_hides_enrollment(seeded):
    ScheduleService(seeded).set_pending_removal("Saturday-13", "STU002", True)

    assert StudentService(seeded).get_profile("STU002").enrolled_in == []


def test_list_students_groups_enrollments(seeded):
    ScheduleService(seeded).enroll("Sunday-16", "STU001")

    students = {s.id: s for s in StudentService(seeded).list_students()}

    assert len(students) == 9
    assert sorted(e.session_id for e in students["STU001"].enrolled_in) == ["Saturday-13", "Sunday-16"]
    assert students["STU001"].grades == []


def test_create_student(seeded):
    student = StudentService(seeded).create_student("  Lina  ", "Beginner", today=date(2024, 9, 2))

    assert student.id.startswith("STD-")
    assert student.name == "Lina"
    profile = StudentService(seeded).get_profile(student.id)
    assert profile.enrollment_date == date(2024, 9, 2)
    assert profile.enrolled_in == []


def test_invalid_writes(seeded):
    service = StudentService(seeded)
    with pytest.raises(InvalidRequestError):
        service.create_student("", "Beginner")
    with pytest.raises(InvalidRequestError):
        service.add_grade("STU001", subject="Oud", type="exam", title="x", score=1, max_score=10,
                          grade_date=date(2024, 1, 1))
    with pytest.raises(NotFoundError):
        service.update_level("STU999", "Advanced")
