# academy/models/schedule.py
from __future__ import annotations
from datetime import date, datetime
from sqlalchemy import String, Date, DateTime, Numeric, Text, Boolean, ForeignKey, CheckConstraint, UniqueConstraint, func, false, true
from sqlalchemy.orm import Mapped, mapped_column
from academy.models.base import Base


class Semester(Base):
    __tablename__ = "semesters"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    teachers_json: Mapped[str | None] = mapped_column(Text)  # JSON array of teacher names
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=true())

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())


class ClassSession(Base):
    """A recurring weekly slot owned by one teacher"""
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    semester_id: Mapped[str] = mapped_column(String(255), ForeignKey("semesters.id"), nullable=False, index=True)
    teacher_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    day_of_week: Mapped[str] = mapped_column(String(20), nullable=False)
    time_slot: Mapped[str] = mapped_column(String(50), nullable=False)  # free text, e.g. "1:00 PM - 3:00 PM"
    duration: Mapped[float] = mapped_column(Numeric(3, 1), nullable=False)
    specialization: Mapped[str | None] = mapped_column(String(255))
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    note: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("type IN ('practical','theory')", name="ck_session_type"),
    )


class Enrollment(Base):
    __tablename__ = "session_students"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    session_id: Mapped[str] = mapped_column(String(255), ForeignKey("sessions.id"), nullable=False, index=True)
    student_id: Mapped[str] = mapped_column(String(255), ForeignKey("students.id"), nullable=False, index=True)
    pending_removal: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=false())

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("session_id", "student_id", name="uq_session_student"),
    )


class Attendance(Base):
    """At most one mark per student, session and academic week"""
    __tablename__ = "attendance"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    session_id: Mapped[str] = mapped_column(String(255), ForeignKey("sessions.id"), nullable=False, index=True)
    student_id: Mapped[str] = mapped_column(String(255), ForeignKey("students.id"), nullable=False, index=True)
    week_start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    note: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("session_id", "student_id", "week_start_date", name="uq_attendance_week"),
        CheckConstraint("status IN ('present','absent','late','excused')", name="ck_attendance_status"),
    )
