from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..classes.model import ClassRef
from ..common.datetime_utils import as_date, iso
from ..core.enums import Attendee, AttendanceStatus
from ..database.supabase_base import SupabaseRepository, fetchall
from .model import AttendanceKey, AttendanceRecord
from .repository import AttendanceRepository


@dataclass(frozen=True)
class AttendanceTable:
    attendee: Attendee
    name: str
    subject_column: str
    group_column: Optional[str]
    columns: str
    on_conflict: str


STUDENT_ATTENDANCE = AttendanceTable(
    attendee=Attendee.STUDENT,
    name="student_attendance",
    subject_column="student_id",
    group_column="class_id",
    columns="*, student:students(full_name, contact_phone, contact_email), class:classes(name, section)",
    on_conflict="student_id,class_id,date",
)

TEACHER_ATTENDANCE = AttendanceTable(
    attendee=Attendee.TEACHER,
    name="teacher_attendance",
    subject_column="teacher_id",
    group_column=None,
    columns="*, teacher:teachers(full_name)",
    on_conflict="teacher_id,date",
)


class SupabaseAttendanceRepository(SupabaseRepository, AttendanceRepository):
    def __init__(self, conn_factory, layout: AttendanceTable, **kwargs):
        super().__init__(conn_factory, **kwargs)
        self._layout = layout
        self.table = layout.name

    def _to_record(self, r: dict) -> AttendanceRecord:
        subject = r.get(self._layout.attendee.value) or {}
        return AttendanceRecord(
            record_id=str(r["id"]),
            attendee=self._layout.attendee,
            subject_id=str(r[self._layout.subject_column]),
            class_id=r.get(self._layout.group_column) if self._layout.group_column else None,
            day=as_date(r["date"]),
            status=AttendanceStatus(r["status"]),
            subject_name=subject.get("full_name"),
            class_ref=ClassRef.from_row(r.get("class")),
        )

    def _key_filter(self, query, key: AttendanceKey):
        query = query.eq("date", iso(key.day))
        if self._layout.group_column:
            query = query.eq(self._layout.group_column, key.class_id)
        return query

    def list_for_key(self, owner: str, key: AttendanceKey) -> Sequence[AttendanceRecord]:
        query = self._key_filter(self._select(owner, self._layout.columns), key)
        return [self._to_record(r) for r in fetchall(self._execute(query, f"list {self.table}"))]

    def upsert_marks(self, owner: str, key: AttendanceKey, marks: Mapping[str, AttendanceStatus]) -> int:
        rows = []
        for subject_id, status in marks.items():
            row = {self._layout.subject_column: subject_id, "date": iso(key.day), "status": AttendanceStatus(status).value}
            if self._layout.group_column:
                row[self._layout.group_column] = key.class_id
            rows.append(row)
        return len(self._upsert(owner, rows, on_conflict=self._layout.on_conflict))

    def delete_ids(self, owner: str, record_ids: Iterable[str]) -> int:
        return self._delete_ids(owner, record_ids)

    def delete_subjects(self, owner: str, key: AttendanceKey, subject_ids: Iterable[str]) -> int:
        subject_ids = list(subject_ids)
        if not subject_ids:
            return 0
        owner = self._gate.require_owner(owner)
        query = self._key_filter(self._gate.scope(self._table().delete(), owner), key)
        query = query.in_(self._layout.subject_column, subject_ids)
        return len(fetchall(self._execute(query, f"delete {self.table}")))

    def update_status(self, owner: str, record_id: str, status: AttendanceStatus) -> Optional[AttendanceRecord]:
        r = self._update(owner, record_id, {"status": AttendanceStatus(status).value})
        return self._to_record(r) if r else None

    def delete(self, owner: str, record_id: str) -> bool:
        return self._delete(owner, record_id)

    def list_history(
        self,
        owner: str,
        *,
        limit: int,
        class_id: Optional[str] = None,
        day: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        query = self._select(owner, self._layout.columns)
        if class_id and self._layout.group_column:
            query = query.eq(self._layout.group_column, class_id)
        if day:
            query = query.eq("date", iso(day))
        if status:
            query = query.eq("status", AttendanceStatus(status).value)

        query = query.order("date", desc=True).limit(int(limit))
        return [self._to_record(r) for r in fetchall(self._execute(query, f"history {self.table}"))]

    def list_range(
        self,
        owner: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        subject_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        query = self._select(owner, self._layout.columns)
        if start:
            query = query.gte("date", iso(start))
        if end:
            query = query.lte("date", iso(end))
        if subject_id:
            query = query.eq(self._layout.subject_column, subject_id)

        query = query.order("date", desc=True)
        return [self._to_record(r) for r in fetchall(self._execute(query, f"range {self.table}"))]
