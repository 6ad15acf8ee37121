"""
reporting/errors.py

Error conditions raised by the report pipeline.

``EmptyResult`` is deliberately absent: an empty window is an expected
outcome and is returned as a value (see reporting.aggregator).
"""

from __future__ import annotations


class InvalidFilterError(ValueError):
    """
    Raised when a report window is malformed (e.g. monthly mode without a
    month). Always raised before any record is scanned.
    """


class RenderPreconditionError(RuntimeError):
    """
    Raised when the renderer is invoked with nothing to render.

    Indicates a caller defect: empty windows must short-circuit before
    rendering.
    """


class ReportDataUnavailableError(RuntimeError):
    """
    Raised when the record snapshot cannot be read from the store.

    The pipeline is never entered in that case.
    """
