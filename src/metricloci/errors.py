from __future__ import annotations


class DomainError(ValueError):
    """Invalid sampling domain, tolerance or locus parameters."""


class MetricConfigError(ValueError):
    """Unknown metric name or invalid metric parameter."""


class LocusCancelled(RuntimeError):
    """Raised when a caller aborts a locus search through a CancelToken."""
