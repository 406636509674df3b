from .table import CommaSplitter, DimensionCache, QuotedSplitter, RawTable, Splitter, TableLoader
from .players import ColumnOffsets, ExtractionConfig, Player, extract_players

__all__ = [
    "CommaSplitter",
    "DimensionCache",
    "QuotedSplitter",
    "RawTable",
    "Splitter",
    "TableLoader",
    "ColumnOffsets",
    "ExtractionConfig",
    "Player",
    "extract_players",
]
