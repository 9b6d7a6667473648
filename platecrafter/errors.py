"""Plate layout errors.

All errors derive from ``ValueError`` so callers that already guard user
input with ``except ValueError`` keep working. None of them are raised after
a history commit: grids are built and validated first, then committed whole.
"""
from typing import List, Optional


class PlateError(ValueError):
    """Base class for recoverable plate layout errors."""


class InvalidCoordinateError(PlateError):
    """A well id does not decompose into one row label and one column label."""

    def __init__(self, well_id: str):
        self.well_id = well_id
        super().__init__(f"invalid well id: {well_id!r}")


class InvalidRangeError(PlateError):
    """Start and end wells are not on a single row or column."""

    def __init__(self, start_id: str, end_id: str):
        self.start_id = start_id
        self.end_id = end_id
        super().__init__("selection must be a single row or column")


class MissingMolecularWeightError(PlateError):
    """A mass-unit concentration was entered without a usable molecular weight."""

    def __init__(self, subject: Optional[str] = None):
        self.subject = subject
        message = "molecular weight required"
        if subject:
            message = f"{message} for {subject}"
        super().__init__(message)


class LayoutFormatError(PlateError):
    """A candidate layout does not match the plate format."""

    def __init__(self, message: str, problems: Optional[List[str]] = None):
        self.problems = problems or []
        super().__init__(message)


class SelectionError(PlateError):
    """The selection does not provide what an operation needs."""
