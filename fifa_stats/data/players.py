from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import List

import pandas as pd

from ..errors import FieldConversionFailure
from .table import RawTable


@dataclass(frozen=True)
class Player:
    name: str
    position: str
    age: int
    overall: int
    nationality: str


@dataclass
class ColumnOffsets:
    """1-based column positions in the official FIFA player exports."""

    name: int = 2
    age: int = 3
    nationality: int = 5
    overall: int = 7
    position: int = 62


@dataclass
class ExtractionConfig:
    offsets: ColumnOffsets = field(default_factory=ColumnOffsets)
    header_rows: int = 2  # header + metadata line
    drop_last_row: bool = True


def _to_int(table: RawTable, row: int, column: int, name: str) -> int:
    text = table.read_cell(column, row)
    try:
        return int(text)
    except ValueError as e:
        raise FieldConversionFailure(row, column, name, text) from e


def data_rows(table: RawTable, config: ExtractionConfig | None = None) -> range:
    """1-based rows holding player records."""
    cfg = config or ExtractionConfig()
    last = table.num_lines - 1 if cfg.drop_last_row else table.num_lines
    return range(cfg.header_rows + 1, last + 1)


def extract_players(table: RawTable, config: ExtractionConfig | None = None) -> List[Player]:
    cfg = config or ExtractionConfig()
    off = cfg.offsets
    players: List[Player] = []
    for row in data_rows(table, cfg):
        players.append(
            Player(
                name=table.read_cell(off.name, row),
                position=table.read_cell(off.position, row),
                age=_to_int(table, row, off.age, "age"),
                overall=_to_int(table, row, off.overall, "overall"),
                nationality=table.read_cell(off.nationality, row),
            )
        )
    return players


def players_frame(players: List[Player]) -> pd.DataFrame:
    cols = [f.name for f in fields(Player)]
    return pd.DataFrame([[getattr(p, c) for c in cols] for p in players], columns=cols)
