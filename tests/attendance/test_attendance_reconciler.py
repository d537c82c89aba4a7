from __future__ import annotations

import random
from datetime import date

import pytest

from src.school_admin.school_admin.attendance.model import AttendanceKey
from src.school_admin.school_admin.attendance.reconciler import AttendanceReconciler
from src.school_admin.school_admin.attendance.supabase_attendance_repository import (
    STUDENT_ATTENDANCE,
    TEACHER_ATTENDANCE,
    SupabaseAttendanceRepository,
)
from src.school_admin.school_admin.core.enums import Attendee
from src.school_admin.school_admin.core.exceptions import AuthorizationError, BackendError, ValidationError

OWNER = "admin@school.test"
DAY = date(2026, 3, 2)


def _student_reconciler(fake_db):
    repo = SupabaseAttendanceRepository(fake_db, STUDENT_ATTENDANCE)
    return repo, AttendanceReconciler(repo)


def _stored(fake_db, *, class_id="5A", day=DAY, owner=OWNER):
    return {
        r["student_id"]: r["status"]
        for r in fake_db.rows("student_attendance")
        if r["class_id"] == class_id and r["date"] == day.isoformat() and r["user_email"] == owner
    }


def _seed(fake_db, marks, *, class_id="5A", day=DAY, owner=OWNER):
    for student_id, status in marks.items():
        fake_db.add(
            "student_attendance",
            {"student_id": student_id, "class_id": class_id, "date": day.isoformat(), "status": status, "user_email": owner},
        )


def test_dropping_a_student_leaves_exactly_the_desired_rows(fake_db):
    _seed(fake_db, {"s1": "present", "s2": "present", "s3": "absent"})
    _, reconciler = _student_reconciler(fake_db)

    result = reconciler.reconcile(OWNER, AttendanceKey(Attendee.STUDENT, DAY, "5A"), {"s1": "present", "s2": "absent"})

    assert _stored(fake_db) == {"s1": "present", "s2": "absent"}
    assert result.written == 2
    assert result.removed == 1


def test_reconcile_matches_desired_set_for_random_sheets(fake_db):
    rng = random.Random(20260302)
    roster = [f"s{i}" for i in range(12)]
    statuses = ["present", "absent", "late"]
    key = AttendanceKey(Attendee.STUDENT, DAY, "5A")

    # Rows under other keys must never be touched.
    _seed(fake_db, {"s1": "late", "s2": "absent"}, class_id="6B")
    _seed(fake_db, {"s1": "present"}, day=date(2026, 3, 1))
    _seed(fake_db, {"x1": "absent"}, owner="other@school.test")
    untouched = [dict(r) for r in fake_db.rows("student_attendance")]

    _, reconciler = _student_reconciler(fake_db)
    for _ in range(40):
        chosen = rng.sample(roster, rng.randint(1, len(roster)))
        desired = {sid: rng.choice(statuses) for sid in chosen}

        reconciler.reconcile(OWNER, key, desired)

        assert _stored(fake_db) == desired
        rows_for_key = [
            r for r in fake_db.rows("student_attendance")
            if r["class_id"] == "5A" and r["date"] == DAY.isoformat() and r["user_email"] == OWNER
        ]
        assert len(rows_for_key) == len(desired)
        for row in untouched:
            assert row in fake_db.rows("student_attendance")


def test_empty_desired_set_is_rejected_before_any_call(fake_db):
    _seed(fake_db, {"s1": "present"})
    _, reconciler = _student_reconciler(fake_db)
    fake_db.calls.clear()

    with pytest.raises(ValidationError):
        reconciler.reconcile(OWNER, AttendanceKey(Attendee.STUDENT, DAY, "5A"), {})

    with pytest.raises(ValidationError):
        reconciler.reconcile(OWNER, AttendanceKey(Attendee.STUDENT, DAY, "5A"), {"s1": ""})

    assert fake_db.calls == []
    assert _stored(fake_db) == {"s1": "present"}


def test_invalid_status_is_rejected_before_any_call(fake_db):
    _, reconciler = _student_reconciler(fake_db)

    with pytest.raises(ValidationError):
        reconciler.reconcile(OWNER, AttendanceKey(Attendee.STUDENT, DAY, "5A"), {"s1": "holiday"})

    assert fake_db.calls == []


def test_missing_owner_never_reaches_the_backend(fake_db):
    _, reconciler = _student_reconciler(fake_db)

    with pytest.raises(AuthorizationError):
        reconciler.reconcile("  ", AttendanceKey(Attendee.STUDENT, DAY, "5A"), {"s1": "present"})

    assert fake_db.connects == 0
    assert fake_db.calls == []


def test_failed_upsert_leaves_previous_sheet_intact(fake_db):
    _seed(fake_db, {"s1": "present", "s2": "late"})
    _, reconciler = _student_reconciler(fake_db)
    fake_db.fail_next("student_attendance", "upsert", "duplicate key value")

    with pytest.raises(BackendError) as exc:
        reconciler.reconcile(OWNER, AttendanceKey(Attendee.STUDENT, DAY, "5A"), {"s1": "absent"})

    assert str(exc.value) == "duplicate key value"
    assert _stored(fake_db) == {"s1": "present", "s2": "late"}


def test_failed_delete_rolls_back_to_previous_sheet(fake_db):
    _seed(fake_db, {"s1": "present", "s2": "present"})
    _, reconciler = _student_reconciler(fake_db)
    fake_db.fail_next("student_attendance", "delete")

    with pytest.raises(BackendError):
        reconciler.reconcile(OWNER, AttendanceKey(Attendee.STUDENT, DAY, "5A"), {"s1": "absent", "s3": "late"})

    assert _stored(fake_db) == {"s1": "present", "s2": "present"}


def test_teacher_sheet_is_keyed_by_day_only(fake_db):
    repo = SupabaseAttendanceRepository(fake_db, TEACHER_ATTENDANCE)
    reconciler = AttendanceReconciler(repo)
    key = AttendanceKey(Attendee.TEACHER, DAY)

    reconciler.reconcile(OWNER, key, {"t1": "present", "t2": "late"})
    reconciler.reconcile(OWNER, key, {"t2": "absent"})

    stored = {r["teacher_id"]: r["status"] for r in fake_db.rows("teacher_attendance")}
    assert stored == {"t2": "absent"}
    assert all("class_id" not in r for r in fake_db.rows("teacher_attendance"))


def test_attendance_key_requires_class_for_students_only():
    with pytest.raises(ValidationError):
        AttendanceKey(Attendee.STUDENT, DAY)
    with pytest.raises(ValidationError):
        AttendanceKey(Attendee.TEACHER, DAY, "5A")
