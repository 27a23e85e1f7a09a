import pytest

from academy.main import app
from academy.services.ai import get_llm

WEEK = {"semesterId": "fall-2024", "teacherName": "نهاد", "weekStart": "2024-09-07"}


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": True}


def test_student_lifecycle(client, admin, teacher):
    created = client.post("/api/students", json={"name": "Lina", "level": "Beginner"}, headers=admin)
    assert created.status_code == 200
    body = created.json()
    assert body["success"] is True
    student_id = body["student"]["id"]

    r = client.put(f"/api/students/{student_id}/level",
                   json={"newLevel": "Intermediate", "review": "Good", "currentLevel": "Beginner"}, headers=admin)
    assert r.json() == {"success": True, "newLevel": "Intermediate"}

    r = client.post(f"/api/students/{student_id}/grades", headers=teacher, json={
        "subject": "Oud", "type": "test", "title": "Final", "score": 45, "maxScore": 50, "date": "2024-12-01",
    })
    assert r.status_code == 200
    assert r.json()["grade"]["id"].startswith("GRD-")

    r = client.post(f"/api/students/{student_id}/evaluations", headers=teacher, json={
        "date": "2024-12-02", "evaluator": "نهاد", "criteria": [{"name": "Rhythm", "score": 5}],
    })
    assert r.json()["evaluation"]["id"].startswith("EVAL-")

    profile = client.get(f"/api/students/{student_id}", headers=admin).json()
    assert profile["level"] == "Intermediate"
    assert profile["levelHistory"][0]["review"] == "Good"
    assert len(profile["grades"]) == 1
    assert len(profile["evaluations"]) == 1

    listed = client.get("/api/students", headers=admin).json()["students"]
    assert student_id in {s["id"] for s in listed}


def test_unknown_student_is_404(client, admin):
    r = client.get("/api/students/STU999", headers=admin)
    assert r.status_code == 404
    assert "error" in r.json()


@pytest.mark.parametrize("body", [
    {"name": "Lina"},
    {"name": "Lina", "level": "Beginner", "extra": 1},
    {"name": "", "level": "Beginner"},
])
def test_invalid_bodies_are_400(client, admin, body):
    r = client.post("/api/students", json=body, headers=admin)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing or invalid fields"}


def test_week_attendance_and_pending_flow(client, teacher, other_teacher):
    r = client.post("/api/attendance", headers=teacher, json={
        "sessionId": "Saturday-13", "studentId": "STU001", "weekStartDate": "2024-09-07", "status": "present",
    })
    assert r.status_code == 200
    client.post("/api/attendance", headers=teacher, json={
        "sessionId": "Saturday-13", "studentId": "STU001", "weekStartDate": "2024-09-07", "status": "excused",
    })
    r = client.post("/api/attendance", headers=other_teacher, json={
        "sessionId": "Saturday-13", "studentId": "STU001", "weekStartDate": "2024-09-07", "status": "absent",
    })
    assert r.status_code == 403

    r = client.put("/api/session-students/pending", headers=teacher,
                   json={"sessionId": "Saturday-13", "studentId": "STU002", "pendingRemoval": True})
    assert r.json() == {"success": True}

    sessions = client.get("/api/sessions", params=WEEK, headers=teacher).json()
    first = sessions[0]
    assert first["id"] == "Saturday-13"
    assert first["startRow"] == 4
    students = {s["id"]: s for s in first["students"]}
    assert students["STU001"]["attendance"] == "excused"
    assert students["STU002"]["pendingRemoval"] is True

    export = client.get("/api/sessions/export", params=WEEK, headers=teacher)
    assert export.status_code == 200
    assert export.headers["content-type"].startswith("text/csv")
    assert '"excused"' in export.text


def test_direct_enrollment(client, admin):
    body = {"sessionId": "Monday-17", "studentId": "STU001"}
    assert client.post("/api/session-students", json=body, headers=admin).status_code == 200
    assert client.post("/api/session-students", json=body, headers=admin).status_code == 409
    assert client.request("DELETE", "/api/session-students", json=body, headers=admin).status_code == 200
    assert client.request("DELETE", "/api/session-students", json=body, headers=admin).status_code == 404


def test_request_workflow(client, admin, teacher):
    r = client.post("/api/teacher-requests", headers=teacher, json={
        "type": "remove-student", "sessionId": "Saturday-15", "studentId": "STU008", "reason": "Left",
    })
    assert r.status_code == 200
    request_id = r.json()["request"]["id"]

    own = client.get("/api/teacher-requests", headers=teacher).json()["requests"]
    assert {req["id"] for req in own} == {"REQ001", request_id}

    assert client.put("/api/teacher-requests", json={"requestId": request_id, "action": "approved"},
                      headers=teacher).status_code == 403
    r = client.put("/api/teacher-requests", json={"requestId": request_id, "action": "approved"}, headers=admin)
    assert r.json()["request"]["status"] == "approved"
    r = client.put("/api/teacher-requests", json={"requestId": request_id, "action": "denied"}, headers=admin)
    assert r.status_code == 409

    r = client.put("/api/teacher-requests", json={"requestId": "REQ001", "action": "maybe"}, headers=admin)
    assert r.status_code == 400


def test_payment_endpoints(client, admin):
    r = client.post("/api/payments/assign-plan", headers=admin,
                    json={"studentId": "STU001", "plan": "monthly", "startDate": "2024-01-15"})
    assert r.status_code == 200
    installments = r.json()["installments"]
    assert len(installments) == 12
    assert installments[0] == {
        "id": "STU001-inst-0", "dueDate": "2024-01-15", "amount": 500, "status": "unpaid",
        "paymentDate": None, "gracePeriodUntil": None, "invoiceNumber": None, "paymentMethod": None,
    }

    r = client.post("/api/payments/change-due-dates", headers=admin,
                    json={"studentId": "STU001", "preferredDay": 29, "currentPreferredDay": 15})
    assert r.status_code == 400

    r = client.post("/api/payments/set-grace-period", headers=admin,
                    json={"installmentId": "STU001-inst-0", "gracePeriodDate": "2024-01-01"})
    assert r.status_code == 400

    r = client.post("/api/payments/mark-paid", headers=admin,
                    json={"installmentId": "STU001-inst-0", "paymentMethod": "mada"})
    assert r.status_code == 200
    assert r.json()["invoiceNumber"]
    r = client.post("/api/payments/mark-paid", headers=admin,
                    json={"installmentId": "STU001-inst-0", "paymentMethod": "mada"})
    assert r.status_code == 409

    students = {s["id"]: s for s in client.get("/api/payments/students", headers=admin).json()["students"]}
    assert students["STU001"]["installments"][0]["status"] == "paid"
    assert students["STU002"]["category"] == "planNotSet"


def test_semesters_and_master_schedule(client, admin):
    semesters = client.get("/api/semesters", headers=admin).json()["semesters"]
    assert semesters[0]["id"] == "fall-2024"
    assert "نهاد" in semesters[0]["teachers"]

    tree = client.get("/api/semesters/fall-2024/master-schedule", headers=admin).json()["masterSchedule"]
    assert [s["id"] for s in tree["نهاد"]["Saturday"]] == ["Saturday-13", "Saturday-15"]
    assert client.get("/api/semesters/nope/master-schedule", headers=admin).status_code == 404


def test_create_session_endpoint(client, admin):
    r = client.post("/api/sessions", headers=admin, json={
        "semesterId": "fall-2024", "teacherName": "ناجي", "day": "Sunday", "time": "10:00 AM - 11:00 AM",
        "duration": 1, "type": "theory",
    })
    assert r.status_code == 200
    assert r.json()["session"]["startRow"] == 1

    r = client.post("/api/sessions", headers=admin, json={
        "semesterId": "fall-2024", "teacherName": "ناجي", "day": "Friday", "time": "10:00 AM",
        "duration": 1, "type": "theory",
    })
    assert r.status_code == 400


def test_uninitialized_database_is_424(bare_client):
    r = bare_client.post("/api/auth/login", json={"username": "admin1", "password": "12345"})
    assert r.status_code == 424
    assert r.json() == {"error": "Database not initialized", "needsInitialization": True}


def test_initialize_is_idempotent(bare_client):
    first = bare_client.post("/api/database/initialize")
    assert first.status_code == 200
    assert "users" in first.json()["seeded"]
    assert first.json()["enrollments"] == 9

    second = bare_client.post("/api/database/initialize").json()
    assert second["seeded"] == []
    assert second["enrollments"] == 0

    login = bare_client.post("/api/auth/login", json={"username": "admin1", "password": "12345"})
    assert login.status_code == 200


class StubLLM:
    def __init__(self, reply):
        self.reply = reply
        self.calls = []

    async def generate(self, system_prompt, messages, json_mode=False):
        self.calls.append(messages)
        return self.reply


@pytest.fixture
def llm_reply():
    def install(reply):
        stub = StubLLM(reply)
        app.dependency_overrides[get_llm] = lambda: stub
        return stub
    return install


def test_suggest_grades(client, teacher, llm_reply):
    stub = llm_reply('```json\n{"suggestedGrade": "A-", "reasoning": "Consistent attendance"}\n```')
    r = client.post("/api/ai/suggest-grades", headers=teacher, json={
        "attendanceRecords": "present 10/12", "evaluations": "Technique 4/5", "subject": "Oud",
    })
    assert r.status_code == 200
    assert r.json() == {"suggestedGrade": "A-", "reasoning": "Consistent attendance"}
    assert "Oud" in stub.calls[0][0]["content"]


def test_suggest_schedule(client, admin, llm_reply):
    llm_reply('{"optimizedSchedule": [{"timeSlot": "Monday 9-11", "classroomId": "R1", "teacherId": "T1", '
              '"studentId": "S1", "subject": "Oud"}], "conflictResolution": "None needed"}')
    r = client.post("/api/ai/suggest-schedule", headers=admin, json={
        "studentAvailabilities": [{"studentId": "S1", "availability": ["Monday 9-11"]}],
        "teacherExpertise": {"T1": "Oud"},
        "classroomCapacity": [{"classroomId": "R1", "capacity": 4, "subject": "Oud"}],
    })
    assert r.status_code == 200
    assert r.json()["optimizedSchedule"][0]["classroomId"] == "R1"


def test_malformed_llm_output_is_502(client, teacher, llm_reply):
    llm_reply("I think the student deserves a B")
    r = client.post("/api/ai/suggest-grades", headers=teacher, json={
        "attendanceRecords": "", "evaluations": "", "subject": "Oud",
    })
    assert r.status_code == 502
    assert "error" in r.json()
