from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pandas as pd

EXPORT_CSV_KWARGS = dict(index=False, float_format="%.4f")


def save_df(df: pd.DataFrame, path: Path) -> None:
    """Write ``df`` as CSV, replacing ``path`` only once the write succeeded."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(
        mode="w", encoding="utf-8", newline="", delete=False, dir=str(path.parent), suffix=".tmp"
    ) as tmp:
        tmp_path = tmp.name
        df.to_csv(tmp, **EXPORT_CSV_KWARGS)
    try:
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
