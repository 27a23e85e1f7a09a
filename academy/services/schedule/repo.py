# services/schedule/repo.py
from academy.core.db import db_execute_safe, db_execute_non_select

SESSION_COLUMNS = """
    s.id, s.semester_id, s.teacher_name, s.day_of_week, s.time_slot,
    s.duration, s.specialization, s.type, s.note
"""

class ScheduleRepo:
    """Pure data access layer for sessions, enrollments and attendance"""

    def __init__(self, db):
        self.db = db

    def get_week_rows(self, semester_id, teacher_name, week_start):
        """Sessions of one teacher joined with roster and that week's attendance"""
        query = f"""
            SELECT {SESSION_COLUMNS},
                   ss.student_id, st.name AS student_name, ss.pending_removal,
                   a.status AS attendance_status
            FROM sessions s
            LEFT JOIN session_students ss ON s.id = ss.session_id
            LEFT JOIN students st ON ss.student_id = st.id
            LEFT JOIN attendance a ON (s.id = a.session_id AND ss.student_id = a.student_id
                                       AND a.week_start_date = :week_start)
            WHERE s.semester_id = :semester_id AND s.teacher_name = :teacher_name
            ORDER BY s.id, st.name
        """
        return db_execute_safe(self.db, query, {
            "week_start": week_start,
            "semester_id": semester_id,
            "teacher_name": teacher_name,
        })

    def get_semester_rows(self, semester_id):
        """All sessions of a semester with their active roster"""
        query = f"""
            SELECT {SESSION_COLUMNS},
                   ss.student_id, st.name AS student_name, ss.pending_removal
            FROM sessions s
            LEFT JOIN session_students ss ON s.id = ss.session_id AND ss.pending_removal = :pending
            LEFT JOIN students st ON ss.student_id = st.id
            WHERE s.semester_id = :semester_id
            ORDER BY s.teacher_name, s.id, st.name
        """
        return db_execute_safe(self.db, query, {"semester_id": semester_id, "pending": False})

    def get_session(self, session_id):
        rows = db_execute_safe(self.db, f"""
            SELECT {SESSION_COLUMNS}
            FROM sessions s
            WHERE s.id = :session_id
        """, {"session_id": session_id})
        return rows[0] if rows else None

    def insert_session(self, session_id, semester_id, teacher_name, day, time_slot,
                       duration, specialization, session_type, note):
        return db_execute_non_select(self.db, """
            INSERT INTO sessions (id, semester_id, teacher_name, day_of_week, time_slot, duration,
                                  specialization, type, note, created_at, updated_at)
            VALUES (:id, :semester_id, :teacher_name, :day, :time_slot, :duration,
                    :specialization, :type, :note, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """, {
            "id": session_id,
            "semester_id": semester_id,
            "teacher_name": teacher_name,
            "day": day,
            "time_slot": time_slot,
            "duration": duration,
            "specialization": specialization,
            "type": session_type,
            "note": note,
        })

    def get_semester(self, semester_id):
        rows = db_execute_safe(self.db, """
            SELECT id, name, start_date, end_date, teachers_json, is_active
            FROM semesters
            WHERE id = :semester_id
        """, {"semester_id": semester_id})
        return rows[0] if rows else None

    def list_semesters(self):
        return db_execute_safe(self.db, """
            SELECT id, name, start_date, end_date, teachers_json, is_active
            FROM semesters
            ORDER BY is_active DESC, start_date DESC
        """)

    def student_exists(self, student_id):
        rows = db_execute_safe(self.db, "SELECT id FROM students WHERE id = :student_id",
                               {"student_id": student_id})
        return bool(rows)

    def get_enrollment(self, session_id, student_id):
        rows = db_execute_safe(self.db, """
            SELECT id, session_id, student_id, pending_removal
            FROM session_students
            WHERE session_id = :session_id AND student_id = :student_id
        """, {"session_id": session_id, "student_id": student_id})
        return rows[0] if rows else None

    def insert_enrollment(self, enrollment_id, session_id, student_id):
        return db_execute_non_select(self.db, """
            INSERT INTO session_students (id, session_id, student_id, pending_removal, created_at, updated_at)
            VALUES (:id, :session_id, :student_id, :pending, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """, {"id": enrollment_id, "session_id": session_id, "student_id": student_id, "pending": False})

    def delete_enrollment(self, session_id, student_id):
        return db_execute_non_select(self.db, """
            DELETE FROM session_students
            WHERE session_id = :session_id AND student_id = :student_id
        """, {"session_id": session_id, "student_id": student_id})

    def set_pending_removal(self, session_id, student_id, pending):
        return db_execute_non_select(self.db, """
            UPDATE session_students
            SET pending_removal = :pending, updated_at = CURRENT_TIMESTAMP
            WHERE session_id = :session_id AND student_id = :student_id
        """, {"pending": pending, "session_id": session_id, "student_id": student_id})

    def upsert_attendance(self, attendance_id, session_id, student_id, week_start, status, note):
        return db_execute_non_select(self.db, """
            INSERT INTO attendance (id, session_id, student_id, week_start_date, status, note, created_at, updated_at)
            VALUES (:id, :session_id, :student_id, :week_start, :status, :note, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
            ON CONFLICT (session_id, student_id, week_start_date)
            DO UPDATE SET status = excluded.status, note = excluded.note, updated_at = CURRENT_TIMESTAMP
        """, {
            "id": attendance_id,
            "session_id": session_id,
            "student_id": student_id,
            "week_start": week_start,
            "status": status,
            "note": note,
        })
