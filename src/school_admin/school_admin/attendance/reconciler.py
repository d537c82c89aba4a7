from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from ..access.gate import AccessGate
from ..common.validators import require_choice
from ..core.enums import AttendanceStatus
from ..core.exceptions import BackendError, ValidationError
from .model import AttendanceKey, AttendanceRecord, ReconcileResult
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceReconciler:
    """Replace the full set of attendance marks stored under one key.

    The desired marks are written first with a single upsert keyed on the
    table's uniqueness constraint; only then are rows for subjects missing
    from the desired set removed. A failed upsert therefore leaves the old
    sheet untouched. If the removal fails, the pre-call snapshot is restored
    on a best-effort basis and the original error is raised.
    """

    def __init__(self, repo: AttendanceRepository, *, gate: Optional[AccessGate] = None):
        self._repo = repo
        self._gate = gate or AccessGate()

    @staticmethod
    def normalize(desired: Mapping[str, object]) -> dict[str, AttendanceStatus]:
        marks: dict[str, AttendanceStatus] = {}
        for subject_id, status in desired.items():
            sid = str(subject_id or "").strip()
            if not sid:
                raise ValidationError("Attendance entry without a person")
            if status is None or status == "":
                continue
            marks[sid] = require_choice(status, AttendanceStatus, "Status")
        return marks

    def reconcile(self, owner: str, key: AttendanceKey, desired: Mapping[str, object]) -> ReconcileResult:
        owner = self._gate.require_owner(owner)
        marks = self.normalize(desired)
        if not marks:
            raise ValidationError("Please mark attendance for at least one person")

        before = list(self._repo.list_for_key(owner, key))
        self._repo.upsert_marks(owner, key, marks)

        stale = [r.record_id for r in before if r.subject_id not in marks]
        removed = 0
        if stale:
            try:
                removed = self._repo.delete_ids(owner, stale)
            except BackendError:
                self._rollback(owner, key, before, marks)
                raise

        logger.info(
            "attendance reconciled attendee=%s day=%s class=%s written=%d removed=%d",
            key.attendee.value, key.day, key.class_id, len(marks), removed,
        )
        return ReconcileResult(key=key, written=len(marks), removed=removed)

    def _rollback(
        self,
        owner: str,
        key: AttendanceKey,
        before: Sequence[AttendanceRecord],
        marks: Mapping[str, AttendanceStatus],
    ) -> None:
        previous = {r.subject_id: r.status for r in before}
        added = [sid for sid in marks if sid not in previous]
        try:
            if previous:
                self._repo.upsert_marks(owner, key, previous)
            if added:
                self._repo.delete_subjects(owner, key, added)
        except BackendError:
            logger.error(
                "compensating rollback failed attendee=%s day=%s class=%s; sheet may be partially written",
                key.attendee.value, key.day, key.class_id,
            )
            return
        logger.warning("attendance write rolled back attendee=%s day=%s class=%s", key.attendee.value, key.day, key.class_id)
