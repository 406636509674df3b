from __future__ import annotations
"""Delimited-text table loading.

A source file is read twice: a measuring pass works out how many lines there
are and how wide the widest line is, then a populating pass fills a grid of
exactly that shape. Cells are addressed with 1-based ``(column, row)``
coordinates and anything outside the grid reads back as an empty string.

The measuring pass can be skipped when a :class:`DimensionCache` already holds
the shape of an unchanged file.
"""
import csv
import logging
import os
import threading
import time
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Protocol, Tuple

from ..errors import LoadFailure

logger = logging.getLogger(__name__)

DELIMITER = ","
EMPTY = ""


class Splitter(Protocol):
    def split(self, line: str) -> List[str]:
        ...


class CommaSplitter:
    """Split on every bare delimiter; no quoting, escaping or trimming."""

    def __init__(self, delimiter: str = DELIMITER):
        self.delimiter = delimiter

    def split(self, line: str) -> List[str]:
        return line.split(self.delimiter)


class QuotedSplitter:
    """RFC-4180 style field splitting for a single physical line.

    Quoted fields may contain the delimiter; embedded line breaks are not
    supported since the loader is line oriented.
    """

    def __init__(self, delimiter: str = DELIMITER):
        self.delimiter = delimiter

    def split(self, line: str) -> List[str]:
        row = next(csv.reader([line], delimiter=self.delimiter), [])
        return row or [EMPTY]


class DimensionCache:
    """Remembers ``(columns, lines)`` per source file.

    Entries are keyed by resolved path and stay valid only while the file's
    modification time and size are unchanged.
    """

    def __init__(self):
        self._entries: Dict[str, Tuple[int, int, int, int]] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def _key(path: Path | str) -> str:
        return str(Path(path).resolve())

    @staticmethod
    def _stamp(path: Path | str) -> Optional[Tuple[int, int]]:
        try:
            st = os.stat(path)
        except OSError:
            return None
        return st.st_mtime_ns, st.st_size

    def get(self, path: Path | str) -> Optional[Tuple[int, int]]:
        key = self._key(path)
        stamp = self._stamp(path)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or stamp is None or entry[:2] != stamp:
                self.misses += 1
                return None
            self.hits += 1
            return entry[2], entry[3]

    def put(self, path: Path | str, columns: int, lines: int) -> None:
        stamp = self._stamp(path)
        if stamp is None:
            return
        with self._lock:
            self._entries[self._key(path)] = (stamp[0], stamp[1], columns, lines)

    def discard(self, path: Path | str) -> None:
        with self._lock:
            self._entries.pop(self._key(path), None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, path) -> bool:
        key = self._key(path)
        with self._lock:
            return key in self._entries


class RawTable:
    """Fixed-shape grid of text cells loaded from one source file."""

    def __init__(
        self,
        path: Path | str,
        num_columns: int = 0,
        num_lines: int = 0,
        cache: Optional[DimensionCache] = None,
    ):
        self.path = Path(path)
        self.num_columns = num_columns
        self.num_lines = num_lines
        self.cells: List[List[str]] = [[EMPTY] * num_columns for _ in range(num_lines)]
        self._cache = cache

    @classmethod
    def empty(cls, path: Path | str) -> "RawTable":
        return cls(path)

    def read_cell(self, column: int, row: int) -> str:
        if column < 1 or column > self.num_columns or row < 1 or row > self.num_lines:
            return EMPTY
        # The grid is gone after release() even though the dimensions remain.
        if row > len(self.cells):
            return EMPTY
        return self.cells[row - 1][column - 1]

    def release(self) -> None:
        for row in self.cells:
            row.clear()
        self.cells.clear()
        if self._cache is not None:
            self._cache.discard(self.path)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.num_columns, self.num_lines

    def __repr__(self) -> str:
        return f"RawTable(path={str(self.path)!r}, columns={self.num_columns}, lines={self.num_lines})"


class TableLoader:
    def __init__(
        self,
        cache: Optional[DimensionCache] = None,
        splitter: Optional[Splitter] = None,
        encoding: str = "utf-8",
        errors: str = "replace",
    ):
        self.cache = cache if cache is not None else DimensionCache()
        self.splitter = splitter or CommaSplitter()
        self.encoding = encoding
        self.errors = errors

    def _lines(self, path: Path) -> Iterator[str]:
        # Lines end at "\n" only; a lone "\r" stays inside the field text.
        with open(path, "r", encoding=self.encoding, errors=self.errors, newline="\n") as f:
            for line in f:
                if line.endswith("\r\n"):
                    yield line[:-2]
                elif line.endswith("\n"):
                    yield line[:-1]
                else:
                    yield line

    def measure(self, path: Path | str) -> Tuple[int, int]:
        """Return ``(columns, lines)`` by scanning the whole file."""
        columns = 0
        lines = 0
        for line in self._lines(Path(path)):
            lines += 1
            width = len(self.splitter.split(line))
            if width > columns:
                columns = width
        return columns, lines

    def load(self, path: Path | str) -> RawTable:
        path = Path(path)
        t0 = time.perf_counter()
        try:
            shape = self.cache.get(path)
            if shape is None:
                shape = self.measure(path)
                self.cache.put(path, *shape)
                logger.debug("measured %s: %d columns x %d lines", path, *shape)
            else:
                logger.debug("dimension cache hit for %s: %d columns x %d lines", path, *shape)

            table = RawTable(path, shape[0], shape[1], cache=self.cache)
            row = 0
            for line in self._lines(path):
                row += 1
                if row > table.num_lines:
                    break
                cells = table.cells[row - 1]
                for col, value in enumerate(self.splitter.split(line)[: table.num_columns]):
                    cells[col] = value
        except OSError as e:
            raise LoadFailure(path, table=RawTable.empty(path), reason=str(e)) from e
        logger.debug("loaded %r in %.1f ms", table, (time.perf_counter() - t0) * 1000.0)
        return table

    def load_or_empty(self, path: Path | str) -> RawTable:
        try:
            return self.load(path)
        except LoadFailure as e:
            logger.warning("%s; continuing with an empty table", e)
            return e.table if e.table is not None else RawTable.empty(path)
