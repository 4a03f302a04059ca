"""
Row projection errors.

Every failure aborts the whole projection. The driver exception that caused
it is chained as ``__cause__`` so callers can tell which phase failed and why.
"""


class ProjectionError(Exception):
    """Base class for all row projection failures."""


class ColumnMetadataError(ProjectionError):
    """Column names could not be read from the cursor."""


class CursorReadError(ProjectionError):
    """Advancing the cursor to the next row failed."""


class RowScanError(ProjectionError):
    """A row's raw values could not be scanned into column slots."""

    def __init__(self, message: str, row_index: int) -> None:
        super().__init__(message)
        self.row_index = row_index


class CursorIterationError(ProjectionError):
    """The cursor reported a fault after signalling exhaustion."""
