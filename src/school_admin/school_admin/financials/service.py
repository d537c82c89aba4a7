from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Callable, Mapping, Optional, Sequence

from ..access.gate import AccessGate
from ..common.datetime_utils import iso, parse_month, parse_optional_date, require_date, today_local
from ..common.validators import optional_choice, optional_text, parse_amount, require_choice, require_non_empty
from ..core.constants import DEFAULT_FEE_DUE_DAYS, FEE_TYPES
from ..core.enums import FeeStatus, PaymentMode, SalaryStatus
from ..core.exceptions import NotFoundError
from ..reports.aggregator import sum_by_status
from .model import FeeRecord, SalaryRecord
from .repository import FeeRepository, SalaryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AmountTotals:
    total: float
    paid: float
    unpaid: float
    partial: float = 0.0


def fee_totals(fees: Sequence[FeeRecord]) -> AmountTotals:
    by_status = sum_by_status(fees, [s.value for s in FeeStatus], lambda f: f.status.value, lambda f: f.amount)
    return AmountTotals(
        total=sum(f.amount for f in fees),
        paid=by_status[FeeStatus.PAID.value],
        unpaid=by_status[FeeStatus.UNPAID.value],
        partial=by_status[FeeStatus.PARTIAL.value],
    )


def salary_totals(salaries: Sequence[SalaryRecord]) -> AmountTotals:
    by_status = sum_by_status(salaries, [s.value for s in SalaryStatus], lambda s: s.status.value, lambda s: s.amount)
    return AmountTotals(
        total=sum(s.amount for s in salaries),
        paid=by_status[SalaryStatus.PAID.value],
        unpaid=by_status[SalaryStatus.UNPAID.value],
    )


class FeeService:
    """Use case: student fee records."""

    def __init__(self, fees: FeeRepository, *, gate: Optional[AccessGate] = None, today: Callable[[], date] = today_local):
        self._fees = fees
        self._gate = gate or AccessGate()
        self._today = today

    def form_defaults(self) -> dict:
        """Choices and prefilled values for a new fee record."""
        return {
            "fee_types": list(FEE_TYPES),
            "statuses": [s.value for s in FeeStatus],
            "payment_modes": [m.value for m in PaymentMode],
            "due_date": iso(self._today() + timedelta(days=DEFAULT_FEE_DUE_DAYS)),
            "default_status": FeeStatus.UNPAID.value,
        }

    def _payload(self, form: Mapping[str, Any]) -> dict:
        status = require_choice(form.get("status") or FeeStatus.UNPAID.value, FeeStatus, "Status")
        paid_on = parse_optional_date(form.get("payment_date"), "payment_date")
        if status == FeeStatus.PAID and paid_on is None:
            paid_on = self._today()
        return {
            "student_id": require_non_empty(form.get("student_id"), "student_id"),
            "fee_type": require_non_empty(form.get("fee_type"), "fee_type"),
            "amount": parse_amount(form.get("amount"), "Amount"),
            "due_date": iso(require_date(form.get("due_date"), "due_date")),
            "payment_date": iso(paid_on),
            "status": status.value,
            "payment_mode": _mode(form.get("payment_mode")),
            "description": optional_text(form.get("description")),
        }

    def create_fee(self, owner: str, form: Mapping[str, Any]) -> FeeRecord:
        owner = self._gate.require_owner(owner)
        return self._fees.create(owner, self._payload(form))

    def update_fee(self, owner: str, fee_id: str, form: Mapping[str, Any]) -> FeeRecord:
        owner = self._gate.require_owner(owner)
        updated = self._fees.update(owner, fee_id, self._payload(form))
        if not updated:
            raise NotFoundError("Fee record not found")
        return updated

    def delete_fee(self, owner: str, fee_id: str) -> None:
        owner = self._gate.require_owner(owner)
        if not self._fees.delete(owner, fee_id):
            raise NotFoundError("Fee record not found")

    def mark_paid(self, owner: str, fee_id: str) -> FeeRecord:
        owner = self._gate.require_owner(owner)
        updated = self._fees.update(owner, fee_id, {"status": FeeStatus.PAID.value, "payment_date": iso(self._today())})
        if not updated:
            raise NotFoundError("Fee record not found")
        logger.info("fee marked paid id=%s", fee_id)
        return updated

    def list_fees(self, owner: str, *, search: str = "", status: Optional[str] = None, class_name: str = "") -> list[FeeRecord]:
        owner = self._gate.require_owner(owner)
        wanted = optional_choice(status if status != "all" else None, FeeStatus, "Status")
        fees = self._fees.list_all(owner, status=wanted)

        q = (search or "").strip().lower()
        out = []
        for f in fees:
            if q and q not in (f.student_name or "").lower() and q not in f.fee_type.lower():
                continue
            if class_name and (not f.student_class or f.student_class.name != class_name):
                continue
            out.append(f)
        return out


class SalaryService:
    """Use case: teacher salary records."""

    def __init__(self, salaries: SalaryRepository, *, gate: Optional[AccessGate] = None, today: Callable[[], date] = today_local):
        self._salaries = salaries
        self._gate = gate or AccessGate()
        self._today = today

    def _payload(self, form: Mapping[str, Any]) -> dict:
        status = require_choice(form.get("status") or SalaryStatus.UNPAID.value, SalaryStatus, "Status")
        paid_on = parse_optional_date(form.get("payment_date"), "payment_date")
        if status == SalaryStatus.PAID and paid_on is None:
            paid_on = self._today()
        return {
            "teacher_id": require_non_empty(form.get("teacher_id"), "teacher_id"),
            "amount": parse_amount(form.get("amount"), "Amount"),
            "month_year": parse_month(form.get("month_year")),
            "status": status.value,
            "payment_mode": _mode(form.get("payment_mode")),
            "payment_date": iso(paid_on),
        }

    def create_salary(self, owner: str, form: Mapping[str, Any]) -> SalaryRecord:
        owner = self._gate.require_owner(owner)
        return self._salaries.create(owner, self._payload(form))

    def update_salary(self, owner: str, salary_id: str, form: Mapping[str, Any]) -> SalaryRecord:
        owner = self._gate.require_owner(owner)
        updated = self._salaries.update(owner, salary_id, self._payload(form))
        if not updated:
            raise NotFoundError("Salary record not found")
        return updated

    def delete_salary(self, owner: str, salary_id: str) -> None:
        owner = self._gate.require_owner(owner)
        if not self._salaries.delete(owner, salary_id):
            raise NotFoundError("Salary record not found")

    def set_status(self, owner: str, salary_id: str, status: str, *, payment_date: Optional[str] = None) -> SalaryRecord:
        """Paid stamps the given payment date (or today); unpaid clears it."""
        owner = self._gate.require_owner(owner)
        new_status = require_choice(status, SalaryStatus, "Status")
        if new_status == SalaryStatus.PAID:
            paid_on = parse_optional_date(payment_date, "payment_date") or self._today()
            patch = {"status": new_status.value, "payment_date": iso(paid_on)}
        else:
            patch = {"status": new_status.value, "payment_date": None}

        updated = self._salaries.update(owner, salary_id, patch)
        if not updated:
            raise NotFoundError("Salary record not found")
        return updated

    def list_salaries(self, owner: str, *, search: str = "", status: Optional[str] = None) -> list[SalaryRecord]:
        owner = self._gate.require_owner(owner)
        wanted = optional_choice(status if status != "all" else None, SalaryStatus, "Status")
        salaries = self._salaries.list_all(owner, status=wanted)
        q = (search or "").strip().lower()
        if not q:
            return list(salaries)
        return [s for s in salaries if q in (s.teacher_name or "").lower()]


def _mode(value) -> Optional[str]:
    mode = optional_choice(value, PaymentMode, "Payment mode")
    return mode.value if mode else None
