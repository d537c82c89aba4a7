from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_optional_date(value: Optional[str], field_name: str) -> Optional[date]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return parse_iso_date(v)
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")


def require_date(value: Optional[str], field_name: str) -> date:
    parsed = parse_optional_date(value, field_name)
    if parsed is None:
        raise ValidationError(f"Required field '{field_name}' is missing.")
    return parsed


def parse_month(value: str) -> str:
    """Validate a YYYY-MM month key and return it normalized."""
    v = (value or "").strip()
    try:
        return datetime.strptime(v, "%Y-%m").strftime("%Y-%m")
    except ValueError:
        raise ValidationError("Month must be in YYYY-MM format")


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return date.today()


def days_ago(days: int, *, today: Optional[date] = None) -> date:
    return (today or today_local()) - timedelta(days=days)


def as_date(value) -> Optional[date]:
    """Coerce a backend DATE value (ISO string or date) into date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value)[:10])


def iso(value: Optional[date]) -> Optional[str]:
    return value.strftime("%Y-%m-%d") if value else None
