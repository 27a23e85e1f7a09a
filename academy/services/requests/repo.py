# services/requests/repo.py
from academy.core.db import db_execute_safe, db_execute_non_select

REQUEST_COLUMNS = """
    id, type, status, request_date, teacher_id, teacher_name, student_id, student_name,
    session_id, session_time, day, reason, semester_id
"""

class RequestRepo:
    """Pure data access layer for teacher requests"""

    def __init__(self, db):
        self.db = db

    def list_requests(self, teacher_id=None, status=None):
        query = f"SELECT {REQUEST_COLUMNS} FROM teacher_requests WHERE 1 = 1"
        params = {}
        if teacher_id:
            query += " AND teacher_id = :teacher_id"
            params["teacher_id"] = teacher_id
        if status:
            query += " AND status = :status"
            params["status"] = status
        query += " ORDER BY request_date DESC, created_at DESC"
        return db_execute_safe(self.db, query, params)

    def get_request(self, request_id):
        rows = db_execute_safe(self.db, f"""
            SELECT {REQUEST_COLUMNS} FROM teacher_requests WHERE id = :request_id
        """, {"request_id": request_id})
        return rows[0] if rows else None

    def insert_request(self, req):
        return db_execute_non_select(self.db, """
            INSERT INTO teacher_requests (
                id, type, status, request_date, teacher_id, teacher_name, student_id, student_name,
                session_id, session_time, day, reason, semester_id, created_at, updated_at
            ) VALUES (
                :id, :type, :status, :request_date, :teacher_id, :teacher_name, :student_id, :student_name,
                :session_id, :session_time, :day, :reason, :semester_id, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP
            )
        """, {
            "id": req.id,
            "type": req.type,
            "status": req.status,
            "request_date": req.date,
            "teacher_id": req.teacher_id,
            "teacher_name": req.teacher_name,
            "student_id": req.student_id,
            "student_name": req.student_name,
            "session_id": req.session_id,
            "session_time": req.session_time,
            "day": req.day,
            "reason": req.reason,
            "semester_id": req.semester_id,
        })

    def update_status(self, request_id, status):
        return db_execute_non_select(self.db, """
            UPDATE teacher_requests
            SET status = :status, updated_at = CURRENT_TIMESTAMP
            WHERE id = :request_id
        """, {"status": status, "request_id": request_id})

    def get_session(self, session_id):
        rows = db_execute_safe(self.db, """
            SELECT id, semester_id, teacher_name, day_of_week, time_slot
            FROM sessions WHERE id = :session_id
        """, {"session_id": session_id})
        return rows[0] if rows else None

    def get_student_name(self, student_id):
        rows = db_execute_safe(self.db, "SELECT name FROM students WHERE id = :student_id",
                               {"student_id": student_id})
        return rows[0]["name"] if rows else None

    def enrollment_exists(self, session_id, student_id):
        rows = db_execute_safe(self.db, """
            SELECT id FROM session_students WHERE session_id = :session_id AND student_id = :student_id
        """, {"session_id": session_id, "student_id": student_id})
        return bool(rows)

    def flag_pending_removal(self, session_id, student_id):
        return db_execute_non_select(self.db, """
            UPDATE session_students
            SET pending_removal = :pending, updated_at = CURRENT_TIMESTAMP
            WHERE session_id = :session_id AND student_id = :student_id
        """, {"pending": True, "session_id": session_id, "student_id": student_id})
