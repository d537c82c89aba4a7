from __future__ import annotations

from datetime import date
from typing import Iterable, Mapping, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceKey, AttendanceRecord


class AttendanceRepository(Protocol):
    """Storage of attendance marks for one kind of attendee."""

    def list_for_key(self, owner: str, key: AttendanceKey) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert_marks(self, owner: str, key: AttendanceKey, marks: Mapping[str, AttendanceStatus]) -> int:
        """Insert-or-update one row per subject under ``key``."""

        raise NotImplementedError

    def delete_ids(self, owner: str, record_ids: Iterable[str]) -> int:
        raise NotImplementedError

    def delete_subjects(self, owner: str, key: AttendanceKey, subject_ids: Iterable[str]) -> int:
        raise NotImplementedError

    def update_status(self, owner: str, record_id: str, status: AttendanceStatus) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def delete(self, owner: str, record_id: str) -> bool:
        raise NotImplementedError

    def list_history(
        self,
        owner: str,
        *,
        limit: int,
        class_id: Optional[str] = None,
        day: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_range(
        self,
        owner: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        subject_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
