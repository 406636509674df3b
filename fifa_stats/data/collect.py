from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .players import ExtractionConfig, Player, extract_players
from .table import RawTable, TableLoader

logger = logging.getLogger(__name__)


def load_datasets(paths: Sequence[Path], loader: TableLoader, jobs: int = 1) -> List[RawTable]:
    """Load every path, degrading unreadable files to empty tables.

    Output order always matches ``paths``.
    """
    if jobs <= 1 or len(paths) <= 1:
        return [loader.load_or_empty(p) for p in paths]
    with ThreadPoolExecutor(max_workers=min(jobs, len(paths))) as pool:
        return list(pool.map(loader.load_or_empty, paths))


def collect_players(
    datasets: Dict[str, Path],
    loader: TableLoader,
    extraction: Optional[ExtractionConfig] = None,
    jobs: int = 1,
) -> Tuple[Dict[str, List[Player]], float]:
    """Load each dataset, extract its players and release the table.

    Returns the players per dataset label and the elapsed time in milliseconds.
    """
    t0 = time.perf_counter()
    labels = list(datasets)
    tables = load_datasets([datasets[k] for k in labels], loader, jobs=jobs)
    out: Dict[str, List[Player]] = {}
    try:
        for label, table in zip(labels, tables):
            out[label] = extract_players(table, extraction)
            logger.debug("%s: %d players from %s", label, len(out[label]), table.path)
    finally:
        for table in tables:
            table.release()
    return out, (time.perf_counter() - t0) * 1000.0
