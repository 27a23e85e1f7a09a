# services/payments/dataclasses.py
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, List, Dict

from dateutil.relativedelta import relativedelta

from academy.core.db import as_date, as_iso

@dataclass(frozen=True)
class PlanDetails:
    """Fixed billing terms of a payment plan"""
    count: int
    period_months: int
    amount: float

PLAN_DETAILS: Dict[str, PlanDetails] = {
    "monthly": PlanDetails(count=12, period_months=1, amount=500),
    "quarterly": PlanDetails(count=4, period_months=3, amount=1500),
    "yearly": PlanDetails(count=1, period_months=12, amount=5500),
}

PAYMENT_METHODS = ("visa", "mada", "cash", "transfer")

@dataclass
class Installment:
    """One scheduled payment obligation"""
    id: str
    due_date: date
    amount: float
    status: str = "unpaid"
    payment_date: Optional[date] = None
    grace_period_until: Optional[date] = None
    invoice_number: Optional[str] = None
    payment_method: Optional[str] = None

    @property
    def effective_due_date(self) -> date:
        if self.grace_period_until is None:
            return self.due_date
        return max(self.due_date, self.grace_period_until)

    def is_overdue(self, today: date) -> bool:
        return self.status != "paid" and self.effective_due_date < today

    def derived_status(self, today: date) -> str:
        if self.status == "paid":
            return "paid"
        return "overdue" if self.is_overdue(today) else "unpaid"

    def to_dict(self, today: Optional[date] = None) -> Dict:
        return {
            "id": self.id,
            "dueDate": self.due_date.isoformat(),
            "amount": self.amount,
            "status": self.derived_status(today) if today else self.status,
            "paymentDate": as_iso(self.payment_date),
            "gracePeriodUntil": as_iso(self.grace_period_until),
            "invoiceNumber": self.invoice_number,
            "paymentMethod": self.payment_method,
        }

@dataclass
class DueDateChange:
    date: date
    old_day: int
    new_day: int

    def to_dict(self) -> Dict:
        return {"date": self.date.isoformat(), "oldDay": self.old_day, "newDay": self.new_day}

@dataclass
class StudentPayments:
    """A student's billing state as shown on the payments board"""
    id: str
    name: str
    level: str
    payment_plan: Optional[str]
    subscription_start_date: Optional[date]
    preferred_pay_day: Optional[int]
    active_enrollments: int
    installments: List[Installment] = field(default_factory=list)

    def category(self, today: date) -> str:
        is_active = self.active_enrollments > 0
        if not is_active and self.installments:
            return "cancelled"
        if not self.payment_plan or self.payment_plan == "none" or not self.installments:
            return "planNotSet" if is_active else "inactive"
        if any(inst.is_overdue(today) for inst in self.installments):
            return "overdue"
        return "upToDate"

    def to_dict(self, today: date) -> Dict:
        paid = sum(i.amount for i in self.installments if i.status == "paid")
        due = sum(i.amount for i in self.installments if i.status != "paid")
        upcoming = [i.effective_due_date for i in self.installments if i.status != "paid"]
        return {
            "id": self.id,
            "name": self.name,
            "level": self.level,
            "paymentPlan": self.payment_plan,
            "subscriptionStartDate": as_iso(self.subscription_start_date),
            "preferredPayDay": self.preferred_pay_day,
            "category": self.category(today),
            "summary": {
                "paid": paid,
                "due": due,
                "nextDueDate": min(upcoming).isoformat() if upcoming else None,
            },
            "installments": [i.to_dict(today) for i in self.installments],
        }

# Helper functions
def generate_installments(student_id: str, plan: str, start_date: date) -> List[Installment]:
    """Build the full installment schedule for a plan, starting on start_date"""
    details = PLAN_DETAILS.get(plan)
    if details is None:
        raise ValueError(f"Unknown payment plan: {plan}")
    return [
        Installment(
            id=f"{student_id}-inst-{i}",
            due_date=start_date + relativedelta(months=details.period_months * i),
            amount=details.amount,
        )
        for i in range(details.count)
    ]

def move_to_day(due_date: date, day: int) -> date:
    """Same month, new day of month (days are limited to 1..28)"""
    return due_date.replace(day=day)

def generate_invoice_number(paid_on: date) -> str:
    return f"INV-{paid_on:%Y%m%d}-{uuid.uuid4().hex[:8].upper()}"

def row_to_installment(row) -> Installment:
    """Convert database row to Installment"""
    return Installment(
        id=row["id"],
        due_date=as_date(row["due_date"]),
        amount=float(row["amount"]),
        status=row["status"],
        payment_date=as_date(row["payment_date"]),
        grace_period_until=as_date(row["grace_period_until"]),
        invoice_number=row["invoice_number"],
        payment_method=row["payment_method"],
    )

def row_to_due_date_change(row) -> DueDateChange:
    return DueDateChange(
        date=as_date(row["change_date"]),
        old_day=int(row["old_day"]),
        new_day=int(row["new_day"]),
    )
