# academy/models/student.py
from __future__ import annotations
from datetime import date, datetime
from sqlalchemy import String, Integer, Date, DateTime, Numeric, Text, ForeignKey, CheckConstraint, Index, func
from sqlalchemy.orm import Mapped, mapped_column
from academy.models.base import Base


class Student(Base):
    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    id_prefix: Mapped[str | None] = mapped_column(String(50))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[str | None] = mapped_column(String(10))
    username: Mapped[str | None] = mapped_column(String(255))
    dob: Mapped[date | None] = mapped_column(Date)
    nationality: Mapped[str | None] = mapped_column(String(100))
    instrument_interest: Mapped[str | None] = mapped_column(String(255))
    enrollment_date: Mapped[date | None] = mapped_column(Date)
    level: Mapped[str] = mapped_column(String(100), nullable=False)
    payment_plan: Mapped[str | None] = mapped_column(String(16), server_default="none")
    subscription_start_date: Mapped[date | None] = mapped_column(Date)
    preferred_pay_day: Mapped[int | None] = mapped_column(Integer)
    avatar: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("gender IN ('male','female')", name="ck_student_gender"),
        CheckConstraint("payment_plan IN ('monthly','quarterly','yearly','none')", name="ck_student_payment_plan"),
    )


class LevelChange(Base):
    """Append-only level history"""
    __tablename__ = "level_history"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    student_id: Mapped[str] = mapped_column(String(255), ForeignKey("students.id"), nullable=False, index=True)
    previous_level: Mapped[str | None] = mapped_column(String(100))
    new_level: Mapped[str] = mapped_column(String(100), nullable=False)
    change_date: Mapped[date] = mapped_column(Date, nullable=False)
    review_comments: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())


class Grade(Base):
    __tablename__ = "grades"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    student_id: Mapped[str] = mapped_column(String(255), ForeignKey("students.id"), nullable=False, index=True)
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    score: Mapped[float] = mapped_column(Numeric(5, 2), nullable=False)
    max_score: Mapped[float] = mapped_column(Numeric(5, 2), nullable=False)
    grade_date: Mapped[date] = mapped_column(Date, nullable=False)
    attachment_json: Mapped[str | None] = mapped_column(Text)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("type IN ('test','assignment','quiz')", name="ck_grade_type"),
    )


class Evaluation(Base):
    __tablename__ = "evaluations"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    student_id: Mapped[str] = mapped_column(String(255), ForeignKey("students.id"), nullable=False, index=True)
    evaluation_date: Mapped[date] = mapped_column(Date, nullable=False)
    evaluator: Mapped[str] = mapped_column(String(255), nullable=False)
    criteria_json: Mapped[str] = mapped_column(Text, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        Index("ix_evaluations_student_date", "student_id", "evaluation_date"),
    )
