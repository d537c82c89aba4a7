from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..classes.model import ClassRef
from ..core.enums import FeeStatus, PaymentMode, SalaryStatus


@dataclass(frozen=True)
class FeeRecord:
    fee_id: str
    student_id: str
    fee_type: str
    amount: float
    due_date: date
    status: FeeStatus
    payment_date: Optional[date] = None
    payment_mode: Optional[PaymentMode] = None
    description: Optional[str] = None
    student_name: Optional[str] = None
    student_class: Optional[ClassRef] = None
    created_at: Optional[str] = None


@dataclass(frozen=True)
class SalaryRecord:
    salary_id: str
    teacher_id: str
    amount: float
    month_year: str
    status: SalaryStatus
    payment_date: Optional[date] = None
    payment_mode: Optional[PaymentMode] = None
    teacher_name: Optional[str] = None
    created_at: Optional[str] = None
