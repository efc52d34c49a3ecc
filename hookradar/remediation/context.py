# hookradar/remediation/context.py
import threading
import time
from typing import Optional

from hookradar.core.exceptions import (
    HookRadarError,
    RemediationCancelledError,
    RemediationTimeoutError,
)


class RemediationContext:
    """
    Deadline and cancellation token shared by every strategy of one protocol run.

    Cancellation is cooperative: strategies poll `cancelled` before expensive
    work. The flag is a threading.Event so strategies that hand work to a
    thread can check it from there too.
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout and timeout > 0 else None
        self.deadline: Optional[float] = (
            time.monotonic() + self.timeout if self.timeout is not None else None
        )
        self._cancelled = threading.Event()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set() or self.expired

    def remaining(self) -> Optional[float]:
        """Seconds until the deadline, never negative; None when unbounded"""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def cancel(self) -> None:
        self._cancelled.set()

    def error(self) -> Optional[HookRadarError]:
        if self.expired:
            return RemediationTimeoutError(
                f"remediation deadline of {self.timeout:g}s exceeded"
            )
        if self._cancelled.is_set():
            return RemediationCancelledError("remediation cancelled")
        return None
