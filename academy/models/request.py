# academy/models/request.py
from __future__ import annotations
from datetime import date, datetime
from sqlalchemy import String, Date, DateTime, Text, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column
from academy.models.base import Base


class TeacherRequest(Base):
    __tablename__ = "teacher_requests"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="pending", index=True)
    request_date: Mapped[date] = mapped_column(Date, nullable=False)
    teacher_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    teacher_name: Mapped[str] = mapped_column(String(255), nullable=False)
    student_id: Mapped[str | None] = mapped_column(String(255))
    student_name: Mapped[str | None] = mapped_column(String(255))
    session_id: Mapped[str | None] = mapped_column(String(255))
    session_time: Mapped[str | None] = mapped_column(String(50))
    day: Mapped[str | None] = mapped_column(String(20))
    reason: Mapped[str | None] = mapped_column(Text)
    semester_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("type IN ('remove-student','change-time','add-student')", name="ck_request_type"),
        CheckConstraint("status IN ('pending','approved','denied')", name="ck_request_status"),
    )
