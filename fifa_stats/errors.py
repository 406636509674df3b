from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .data.table import RawTable


class FifaStatsError(Exception):
    pass


class LoadFailure(FifaStatsError):
    """Source file could not be opened for reading.

    ``table`` is the zero-shaped table the load degrades to, for callers that
    prefer to keep going with an empty dataset.
    """

    def __init__(self, path: Path | str, table: Optional["RawTable"] = None, reason: str = ""):
        self.path = Path(path)
        self.table = table
        self.reason = reason
        msg = f"cannot open {self.path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class FieldConversionFailure(FifaStatsError, ValueError):
    """A cell expected to hold an integer did not."""

    def __init__(self, row: int, column: int, field: str, text: str):
        self.row = row
        self.column = column
        self.field = field
        self.text = text
        super().__init__(f"row {row}, column {column} ({field}): {text!r} is not an integer")
