"""Exception types shared across layers."""

from __future__ import annotations


class MetricsEditorError(Exception):
    """Base class for editor failures reported to the operator."""


class ImportFailedError(MetricsEditorError):
    """Spreadsheet import aborted; no record set was produced."""


class PersistenceError(MetricsEditorError):
    """The record store could not be read or written."""


class ReadOnlyFieldError(MetricsEditorError, ValueError):
    """Attempt to edit the total channel or a derived field."""
