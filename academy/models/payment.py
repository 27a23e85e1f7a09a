# academy/models/payment.py
from __future__ import annotations
from datetime import date, datetime
from sqlalchemy import String, Integer, Date, DateTime, Numeric, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import Mapped, mapped_column
from academy.models.base import Base


class Installment(Base):
    __tablename__ = "installments"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    student_id: Mapped[str] = mapped_column(String(255), ForeignKey("students.id"), nullable=False, index=True)
    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Numeric(10, 2), nullable=False)
    # overdue is derived from the dates at read time and never stored
    status: Mapped[str] = mapped_column(String(16), nullable=False, server_default="unpaid")
    payment_date: Mapped[date | None] = mapped_column(Date)
    grace_period_until: Mapped[date | None] = mapped_column(Date)
    invoice_number: Mapped[str | None] = mapped_column(String(100))
    payment_method: Mapped[str | None] = mapped_column(String(16))

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())

    __table_args__ = (
        CheckConstraint("status IN ('unpaid','paid')", name="ck_installment_status"),
        CheckConstraint("payment_method IN ('visa','mada','cash','transfer')", name="ck_installment_method"),
    )


class DueDateChange(Base):
    """Append-only audit of preferred pay day changes"""
    __tablename__ = "due_date_changes"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    student_id: Mapped[str] = mapped_column(String(255), ForeignKey("students.id"), nullable=False, index=True)
    change_date: Mapped[date] = mapped_column(Date, nullable=False)
    old_day: Mapped[int] = mapped_column(Integer, nullable=False)
    new_day: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
