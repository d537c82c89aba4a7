from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..classes.model import ClassRef
from ..common.datetime_utils import as_date, iso
from ..core.enums import FeeStatus, PaymentMode, SalaryStatus
from ..database.supabase_base import SupabaseRepository, fetchall
from .model import FeeRecord, SalaryRecord
from .repository import FeeRepository, SalaryRepository

FEE_COLUMNS = "*, student:students(full_name, contact_phone, contact_email, class:classes(name, section))"
SALARY_COLUMNS = "*, teacher:teachers(full_name)"


def to_fee(r: dict) -> FeeRecord:
    student = r.get("student") or {}
    return FeeRecord(
        fee_id=str(r["id"]),
        student_id=str(r["student_id"]),
        fee_type=r.get("fee_type") or "",
        amount=float(r.get("amount") or 0),
        due_date=as_date(r.get("due_date")),
        status=FeeStatus(r["status"]),
        payment_date=as_date(r.get("payment_date")),
        payment_mode=PaymentMode(r["payment_mode"]) if r.get("payment_mode") else None,
        description=r.get("description"),
        student_name=student.get("full_name"),
        student_class=ClassRef.from_row(student.get("class")),
        created_at=r.get("created_at"),
    )


def to_salary(r: dict) -> SalaryRecord:
    teacher = r.get("teacher") or {}
    return SalaryRecord(
        salary_id=str(r["id"]),
        teacher_id=str(r["teacher_id"]),
        amount=float(r.get("amount") or 0),
        month_year=r.get("month_year") or "",
        status=SalaryStatus(r["status"]),
        payment_date=as_date(r.get("payment_date")),
        payment_mode=PaymentMode(r["payment_mode"]) if r.get("payment_mode") else None,
        teacher_name=teacher.get("full_name"),
        created_at=r.get("created_at"),
    )


class SupabaseFeeRepository(SupabaseRepository, FeeRepository):
    table = "student_fees"

    def list_all(
        self,
        owner: str,
        *,
        student_ids: Optional[Sequence[str]] = None,
        due_from: Optional[date] = None,
        due_to: Optional[date] = None,
        status: Optional[FeeStatus] = None,
    ) -> Sequence[FeeRecord]:
        query = self._select(owner, FEE_COLUMNS)
        if student_ids is not None:
            query = query.in_("student_id", list(student_ids))
        if due_from:
            query = query.gte("due_date", iso(due_from))
        if due_to:
            query = query.lte("due_date", iso(due_to))
        if status:
            query = query.eq("status", FeeStatus(status).value)

        response = self._execute(query.order("created_at", desc=True), "list fees")
        return [to_fee(r) for r in fetchall(response)]

    def create(self, owner: str, data: Mapping[str, Any]) -> FeeRecord:
        return to_fee(self._insert(owner, [data])[0])

    def update(self, owner: str, fee_id: str, data: Mapping[str, Any]) -> Optional[FeeRecord]:
        r = self._update(owner, fee_id, data)
        return to_fee(r) if r else None

    def delete(self, owner: str, fee_id: str) -> bool:
        return self._delete(owner, fee_id)


class SupabaseSalaryRepository(SupabaseRepository, SalaryRepository):
    table = "teacher_salaries"

    def list_all(
        self,
        owner: str,
        *,
        teacher_id: Optional[str] = None,
        month_from: Optional[str] = None,
        month_to: Optional[str] = None,
        status: Optional[SalaryStatus] = None,
    ) -> Sequence[SalaryRecord]:
        query = self._select(owner, SALARY_COLUMNS)
        if teacher_id:
            query = query.eq("teacher_id", teacher_id)
        if month_from:
            query = query.gte("month_year", month_from)
        if month_to:
            query = query.lte("month_year", month_to)
        if status:
            query = query.eq("status", SalaryStatus(status).value)

        response = self._execute(query.order("created_at", desc=True), "list salaries")
        return [to_salary(r) for r in fetchall(response)]

    def create(self, owner: str, data: Mapping[str, Any]) -> SalaryRecord:
        return to_salary(self._insert(owner, [data])[0])

    def update(self, owner: str, salary_id: str, data: Mapping[str, Any]) -> Optional[SalaryRecord]:
        r = self._update(owner, salary_id, data)
        return to_salary(r) if r else None

    def delete(self, owner: str, salary_id: str) -> bool:
        return self._delete(owner, salary_id)
