from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import FeeStatus, SalaryStatus
from .model import FeeRecord, SalaryRecord


class FeeRepository(Protocol):
    def list_all(
        self,
        owner: str,
        *,
        student_ids: Optional[Sequence[str]] = None,
        due_from: Optional[date] = None,
        due_to: Optional[date] = None,
        status: Optional[FeeStatus] = None,
    ) -> Sequence[FeeRecord]:
        raise NotImplementedError

    def create(self, owner: str, data: Mapping[str, Any]) -> FeeRecord:
        raise NotImplementedError

    def update(self, owner: str, fee_id: str, data: Mapping[str, Any]) -> Optional[FeeRecord]:
        raise NotImplementedError

    def delete(self, owner: str, fee_id: str) -> bool:
        raise NotImplementedError


class SalaryRepository(Protocol):
    def list_all(
        self,
        owner: str,
        *,
        teacher_id: Optional[str] = None,
        month_from: Optional[str] = None,
        month_to: Optional[str] = None,
        status: Optional[SalaryStatus] = None,
    ) -> Sequence[SalaryRecord]:
        raise NotImplementedError

    def create(self, owner: str, data: Mapping[str, Any]) -> SalaryRecord:
        raise NotImplementedError

    def update(self, owner: str, salary_id: str, data: Mapping[str, Any]) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def delete(self, owner: str, salary_id: str) -> bool:
        raise NotImplementedError
