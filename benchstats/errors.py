"""Exceptions raised by benchstats."""


class BenchstatsError(Exception):
    """Base class for benchstats errors."""


class ReportWriteError(BenchstatsError):
    """Raised when the output stream rejects a write while rendering a report.

    The original ``OSError`` is chained as ``__cause__``.  Rendering stops at
    the first failed write; nothing after it is attempted.
    """


class EmptyStatGroupError(BenchstatsError, ValueError):
    """Raised when a summary is requested from a StatGroup with no pushes."""
