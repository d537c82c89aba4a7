from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from ..core.exceptions import ConflictError

logger = logging.getLogger(__name__)


class SubmitGuard:
    """Busy flag per (owner, form): at most one mutating call in flight.

    A second submit for the same form while the first is still running is
    rejected instead of racing it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._busy: set[tuple[str, str]] = set()

    def is_busy(self, owner: str, form: str) -> bool:
        with self._lock:
            return (owner.lower(), form) in self._busy

    @contextmanager
    def hold(self, owner: str, form: str) -> Iterator[None]:
        key = (owner.lower(), form)
        with self._lock:
            if key in self._busy:
                logger.info("rejected concurrent submit form=%s owner=%s", form, owner)
                raise ConflictError("A save for this form is already in progress")
            self._busy.add(key)
        try:
            yield
        finally:
            with self._lock:
                self._busy.discard(key)
