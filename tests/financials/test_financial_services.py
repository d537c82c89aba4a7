from __future__ import annotations

from datetime import date

import pytest

from src.school_admin.school_admin.core.enums import FeeStatus, PaymentMode, SalaryStatus
from src.school_admin.school_admin.core.exceptions import NotFoundError, ValidationError
from src.school_admin.school_admin.financials.service import FeeService, SalaryService, fee_totals
from src.school_admin.school_admin.financials.supabase_financial_repository import SupabaseFeeRepository, SupabaseSalaryRepository

OWNER = "admin@school.test"
TODAY = date(2026, 3, 15)

FEE_FORM = {
    "student_id": "s1",
    "fee_type": "Tuition Fee",
    "amount": "1200",
    "due_date": "2026-03-22",
    "status": "unpaid",
}


@pytest.fixture
def fees(fake_db):
    return FeeService(SupabaseFeeRepository(fake_db), today=lambda: TODAY)


@pytest.fixture
def salaries(fake_db):
    return SalaryService(SupabaseSalaryRepository(fake_db), today=lambda: TODAY)


def test_create_fee_validates_amount(fees, fake_db):
    with pytest.raises(ValidationError):
        fees.create_fee(OWNER, {**FEE_FORM, "amount": "0"})
    with pytest.raises(ValidationError):
        fees.create_fee(OWNER, {**FEE_FORM, "payment_mode": "cheque"})

    fee = fees.create_fee(OWNER, {**FEE_FORM, "payment_mode": "cash"})

    assert fee.amount == 1200.0
    assert fee.payment_mode == PaymentMode.CASH
    assert fake_db.rows("student_fees")[0]["user_email"] == OWNER


def test_mark_paid_stamps_today(fees):
    fee = fees.create_fee(OWNER, FEE_FORM)

    paid = fees.mark_paid(OWNER, fee.fee_id)

    assert paid.status == FeeStatus.PAID
    assert paid.payment_date == TODAY


def test_mark_paid_for_unknown_fee(fees):
    with pytest.raises(NotFoundError):
        fees.mark_paid(OWNER, "missing")


def test_list_fees_filters_by_status_and_search(fees, fake_db):
    fees.create_fee(OWNER, FEE_FORM)
    fees.create_fee(OWNER, {**FEE_FORM, "fee_type": "Library Fee", "status": "paid"})

    assert [f.fee_type for f in fees.list_fees(OWNER, status="paid")] == ["Library Fee"]
    assert [f.fee_type for f in fees.list_fees(OWNER, search="tuition")] == ["Tuition Fee"]
    assert len(fees.list_fees(OWNER, status="all")) == 2


def test_fee_totals_by_status(fees):
    fees.create_fee(OWNER, {**FEE_FORM, "amount": "100", "status": "paid"})
    fees.create_fee(OWNER, {**FEE_FORM, "amount": "40", "status": "unpaid"})
    fees.create_fee(OWNER, {**FEE_FORM, "amount": "10", "status": "partial"})

    totals = fee_totals(fees.list_fees(OWNER))

    assert (totals.total, totals.paid, totals.unpaid, totals.partial) == (150.0, 100.0, 40.0, 10.0)


def test_salary_month_must_be_year_month(salaries):
    with pytest.raises(ValidationError, match="YYYY-MM"):
        salaries.create_salary(OWNER, {"teacher_id": "t1", "amount": "3000", "month_year": "03/2026"})


def test_salary_status_toggle(salaries):
    salary = salaries.create_salary(OWNER, {"teacher_id": "t1", "amount": "3000", "month_year": "2026-03"})
    assert salary.status == SalaryStatus.UNPAID

    paid = salaries.set_status(OWNER, salary.salary_id, "paid")
    assert (paid.status, paid.payment_date) == (SalaryStatus.PAID, TODAY)

    paid_on = salaries.set_status(OWNER, salary.salary_id, "paid", payment_date="2026-03-01")
    assert paid_on.payment_date == date(2026, 3, 1)

    unpaid = salaries.set_status(OWNER, salary.salary_id, "unpaid")
    assert (unpaid.status, unpaid.payment_date) == (SalaryStatus.UNPAID, None)


def test_fee_saved_as_paid_without_date_is_stamped_today(fees, fake_db):
    fee = fees.create_fee(OWNER, {**FEE_FORM, "status": "paid"})
    assert fee.payment_date == TODAY

    kept = fees.create_fee(OWNER, {**FEE_FORM, "status": "paid", "payment_date": "2026-03-02"})
    assert kept.payment_date == date(2026, 3, 2)

    unpaid = fees.update_fee(OWNER, kept.fee_id, {**FEE_FORM, "status": "unpaid"})
    assert unpaid.payment_date is None

    repaid = fees.update_fee(OWNER, kept.fee_id, {**FEE_FORM, "status": "paid", "payment_date": ""})
    assert repaid.payment_date == TODAY


def test_salary_saved_as_paid_without_date_is_stamped_today(salaries):
    salary = salaries.create_salary(OWNER, {"teacher_id": "t1", "amount": "3000", "month_year": "2026-03", "status": "paid"})

    assert (salary.status, salary.payment_date) == (SalaryStatus.PAID, TODAY)


@pytest.mark.parametrize("amount", ["nan", "inf", "-inf"])
def test_non_finite_amounts_are_not_stored(fees, salaries, fake_db, amount):
    with pytest.raises(ValidationError):
        fees.create_fee(OWNER, {**FEE_FORM, "amount": amount})
    with pytest.raises(ValidationError):
        salaries.create_salary(OWNER, {"teacher_id": "t1", "amount": amount, "month_year": "2026-03"})

    assert fake_db.rows("student_fees") == []
    assert fake_db.rows("teacher_salaries") == []


def test_new_fee_form_defaults_due_in_a_week(fees):
    defaults = fees.form_defaults()

    assert defaults["due_date"] == "2026-03-22"
    assert defaults["default_status"] == "unpaid"
    assert "Tuition Fee" in defaults["fee_types"]
    assert defaults["payment_modes"] == ["cash", "bank", "online"]
