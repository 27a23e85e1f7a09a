# academy/api/routers/payments.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.core.db import get_db
from academy.core.errors import AcademyError
from academy.api.deps.auth import get_current_user, require_roles
from academy.api.errors import to_http
from academy.schemas.payment import AssignPlanIn, ChangeDueDatesIn, MarkPaidIn, GracePeriodIn
from academy.services.payments import PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])


@router.post("/assign-plan")
def assign_plan(payload: AssignPlanIn, db: Session = Depends(get_db), ctx=Depends(require_roles("admin"))):
    try:
        installments = PaymentService(db).assign_plan(payload.studentId, payload.plan, payload.startDate)
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "installments": [i.to_dict() for i in installments]}


@router.post("/change-due-dates")
def change_due_dates(payload: ChangeDueDatesIn, db: Session = Depends(get_db), ctx=Depends(require_roles("admin"))):
    try:
        moved = PaymentService(db).change_due_dates(
            payload.studentId, payload.preferredDay, current_preferred_day=payload.currentPreferredDay
        )
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "updated": len(moved)}


@router.post("/mark-paid")
def mark_paid(payload: MarkPaidIn, db: Session = Depends(get_db), ctx=Depends(require_roles("admin"))):
    try:
        receipt = PaymentService(db).mark_paid(payload.installmentId, payload.paymentMethod)
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, **receipt}


@router.post("/set-grace-period")
def set_grace_period(payload: GracePeriodIn, db: Session = Depends(get_db), ctx=Depends(require_roles("admin"))):
    try:
        installment = PaymentService(db).set_grace_period(payload.installmentId, payload.gracePeriodDate)
    except AcademyError as e:
        raise to_http(e)
    return {"success": True, "installment": installment.to_dict()}


@router.get("/students")
def payment_students(db: Session = Depends(get_db), ctx=Depends(get_current_user)):
    """Every student with installments and a billing category"""
    return {"students": PaymentService(db).list_students()}
