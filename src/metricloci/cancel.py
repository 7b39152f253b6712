from __future__ import annotations

import time

from .errors import LocusCancelled


class CancelToken:
    """
    Cooperative cancellation for long locus searches.

    The locus engine polls the token once per candidate point and the
    line-distance estimator once per radius step, so a parabola render can be
    abandoned from a UI callback or after a deadline.
    """

    def __init__(self, deadline: float | None = None) -> None:
        self._cancelled = False
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> CancelToken:
        if seconds < 0:
            raise ValueError("timeout must be >= 0")
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        if self._cancelled:
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._cancelled = True
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise LocusCancelled("locus search cancelled")
