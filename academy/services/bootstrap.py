# academy/services/bootstrap.py - schema creation and demo data for a fresh database
import json
import logging

from sqlalchemy import text
from sqlalchemy.orm import Session

from academy.core.db import create_tables, db_execute_safe, db_execute_non_select
from academy.core.security import hash_password

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "12345"
SEMESTER_ID = "fall-2024"

# (id, username, name, roles)
USERS = [
    ("1", "admin1", "Admin One", ["admin"]),
    ("2", "رغد", "Raghad", ["admin"]),
    ("3", "عبدالرحمن", "Abdulrahman", ["admin"]),
    ("4", "manar", "Manar", ["admin", "high-level-dashboard"]),
    ("5", "MC", "MC", ["upper-management"]),
    ("6", "نهاد", "نهاد", ["teacher"]),
    ("7", "حازم", "حازم", ["teacher"]),
    ("8", "هاني", "هاني", ["teacher"]),
    ("9", "نبيل", "نبيل", ["teacher"]),
    ("10", "باسم", "باسم", ["teacher"]),
    ("11", "بسام", "بسام", ["teacher"]),
    ("12", "ناجي", "ناجي", ["teacher"]),
    ("13", "يعرب", "يعرب", ["teacher"]),
    ("14", "إسلام", "إسلام", ["teacher"]),
]

TEACHERS = ["نهاد", "حازم", "هاني", "نبيل", "باسم", "بسام", "ناجي", "يعرب", "إسلام"]

# (id, teacher, day, time, duration, specialization)
SESSIONS = [
    ("Saturday-13", "نهاد", "Saturday", "1:00 PM - 3:00 PM", 2, "عود"),
    ("Saturday-15", "نهاد", "Saturday", "3:00 PM - 5:00 PM", 2, "عود"),
    ("Sunday-14", "حازم", "Sunday", "2:00 PM - 3:00 PM", 1, "عود"),
    ("Sunday-16", "حازم", "Sunday", "4:00 PM - 5:00 PM", 1, "عود"),
    ("Monday-17", "هاني", "Monday", "5:00 PM - 6:00 PM", 1, "ناي"),
    ("Tuesday-18", "بسام", "Tuesday", "6:00 PM - 7:00 PM", 1, "قانون"),
    ("Wednesday-16", "يعرب", "Wednesday", "4:00 PM - 5:00 PM", 1, "صناعة العود"),
]

# (id, name, level, session id)
STUDENTS = [
    ("STU001", "أحمد الفلاني", "Beginner", "Saturday-13"),
    ("STU002", "فاطمة الزهراني", "Intermediate", "Saturday-13"),
    ("STU003", "خالد المصري", "Advanced", "Sunday-14"),
    ("STU004", "مريم العتيبي", "Beginner", "Monday-17"),
    ("STU005", "علياء الشمري", "Intermediate", "Tuesday-18"),
    ("STU006", "يوسف القحطاني", "Beginner", "Tuesday-18"),
    ("STU007", "نورة الغامدي", "Advanced", "Wednesday-16"),
    ("STU008", "سارة الدوسري", "Beginner", "Saturday-15"),
    ("STU009", "محمد الحربي", "Intermediate", "Sunday-16"),
]

# (id, type, date, teacher id, teacher, student id, session id, reason)
REQUESTS = [
    ("REQ001", "remove-student", "2024-05-20", "6", "نهاد", "STU002", "Saturday-13",
     "Student has not attended for the last 4 weeks and has not responded to communication."),
    ("REQ002", "remove-student", "2024-05-21", "7", "حازم", "STU003", "Sunday-14",
     "Student is moving to another city and can no longer attend."),
    ("REQ003", "change-time", "2024-05-22", "8", "هاني", "STU004", "Monday-17",
     "Student has a new work schedule and requests to move to the 7:00 PM slot."),
]


def initialize_database(*, db: Session) -> dict:
    """Create missing tables and seed every table that is still empty.

    Safe to call repeatedly: non-empty tables are left alone and existing
    enrollments are skipped.
    """
    create_tables(bind=db.get_bind())
    logger.info("Tables created")

    seeded = []
    try:
        if _is_empty(db, "users"):
            _seed_users(db)
            seeded.append("users")
        if _is_empty(db, "semesters"):
            _seed_semester(db)
            seeded.append("semesters")
        if _is_empty(db, "sessions"):
            _seed_sessions(db)
            seeded.append("sessions")
        if _is_empty(db, "students"):
            _seed_students(db)
            seeded.append("students")
        enrolled = _seed_enrollments(db)
        if _is_empty(db, "teacher_requests"):
            _seed_requests(db)
            seeded.append("teacher_requests")
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Seeded tables: %s; %d new enrollments", ", ".join(seeded) or "none", enrolled)
    return {"seeded": seeded, "enrollments": enrolled}


def _is_empty(db: Session, table: str) -> bool:
    rows = db_execute_safe(db, f"SELECT COUNT(*) AS count FROM {table}")
    return rows[0]["count"] == 0


def _seed_users(db: Session):
    password_hash = hash_password(DEFAULT_PASSWORD)
    for user_id, username, name, roles in USERS:
        db.execute(text("""
            INSERT INTO users (id, username, name, password_hash, roles, created_at, updated_at)
            VALUES (:id, :username, :name, :password_hash, :roles, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """), {
            "id": user_id,
            "username": username,
            "name": name,
            "password_hash": password_hash,
            "roles": ",".join(roles),
        })


def _seed_semester(db: Session):
    db.execute(text("""
        INSERT INTO semesters (id, name, start_date, end_date, teachers_json, is_active, created_at, updated_at)
        VALUES (:id, :name, :start_date, :end_date, :teachers_json, :is_active, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
    """), {
        "id": SEMESTER_ID,
        "name": "Fall 2024",
        "start_date": "2024-09-01",
        "end_date": "2024-12-20",
        "teachers_json": json.dumps(TEACHERS, ensure_ascii=False),
        "is_active": True,
    })


def _seed_sessions(db: Session):
    for session_id, teacher, day, time_slot, duration, specialization in SESSIONS:
        db.execute(text("""
            INSERT INTO sessions (id, semester_id, teacher_name, day_of_week, time_slot, duration,
                                  specialization, type, created_at, updated_at)
            VALUES (:id, :semester_id, :teacher_name, :day, :time_slot, :duration,
                    :specialization, 'practical', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """), {
            "id": session_id,
            "semester_id": SEMESTER_ID,
            "teacher_name": teacher,
            "day": day,
            "time_slot": time_slot,
            "duration": duration,
            "specialization": specialization,
        })


def _seed_students(db: Session):
    for student_id, name, level, _ in STUDENTS:
        db.execute(text("""
            INSERT INTO students (id, name, level, payment_plan, created_at, updated_at)
            VALUES (:id, :name, :level, 'none', CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """), {"id": student_id, "name": name, "level": level})


def _seed_enrollments(db: Session) -> int:
    """Enroll seed students whose student and session rows both exist"""
    created = 0
    for student_id, _, _, session_id in STUDENTS:
        rows = db_execute_safe(db, """
            SELECT
                (SELECT COUNT(*) FROM students WHERE id = :student_id) AS students,
                (SELECT COUNT(*) FROM sessions WHERE id = :session_id) AS sessions,
                (SELECT COUNT(*) FROM session_students
                 WHERE session_id = :session_id AND student_id = :student_id) AS enrolled
        """, {"student_id": student_id, "session_id": session_id})
        counts = rows[0]
        if not counts["students"] or not counts["sessions"] or counts["enrolled"]:
            continue
        created += db_execute_non_select(db, """
            INSERT INTO session_students (id, session_id, student_id, pending_removal, created_at, updated_at)
            VALUES (:id, :session_id, :student_id, :pending, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """, {
            "id": f"{session_id}-{student_id}",
            "session_id": session_id,
            "student_id": student_id,
            "pending": False,
        })
    return created


def _seed_requests(db: Session):
    student_names = {s[0]: s[1] for s in STUDENTS}
    sessions = {s[0]: s for s in SESSIONS}
    for req_id, req_type, req_date, teacher_id, teacher, student_id, session_id, reason in REQUESTS:
        session = sessions[session_id]
        db.execute(text("""
            INSERT INTO teacher_requests (id, type, status, request_date, teacher_id, teacher_name,
                                          student_id, student_name, session_id, session_time, day,
                                          reason, semester_id, created_at, updated_at)
            VALUES (:id, :type, 'pending', :request_date, :teacher_id, :teacher_name,
                    :student_id, :student_name, :session_id, :session_time, :day,
                    :reason, :semester_id, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
        """), {
            "id": req_id,
            "type": req_type,
            "request_date": req_date,
            "teacher_id": teacher_id,
            "teacher_name": teacher,
            "student_id": student_id,
            "student_name": student_names[student_id],
            "session_id": session_id,
            "session_time": session[3],
            "day": session[2],
            "reason": reason,
            "semester_id": SEMESTER_ID,
        })
