from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Optional

from .data.players import ColumnOffsets, ExtractionConfig

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "FIFA_STATS_DATA_DIR"

DEFAULT_DATASETS: Dict[str, str] = {
    "FIFA 20": "FIFA20_official_data.csv",
    "FIFA 21": "FIFA21_official_data.csv",
    "FIFA 22": "FIFA22_official_data.csv",
}


def _default_data_dir() -> Path:
    return Path(os.environ.get(DATA_DIR_ENV) or ".")


@dataclass
class ReportConfig:
    datasets: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_DATASETS))
    data_dir: Path = field(default_factory=_default_data_dir)
    encoding: str = "utf-8"
    encoding_errors: str = "replace"
    header_rows: int = 2
    drop_last_row: bool = True
    offsets: ColumnOffsets = field(default_factory=ColumnOffsets)
    jobs: int = 1
    quoted: bool = False

    def dataset_paths(self) -> Dict[str, Path]:
        return {label: self.data_dir / name for label, name in self.datasets.items()}

    def extraction(self) -> ExtractionConfig:
        return ExtractionConfig(offsets=self.offsets, header_rows=self.header_rows, drop_last_row=self.drop_last_row)


def _flag(obj: dict, key: str, default: bool) -> bool:
    val = obj.get(key, default)
    if not isinstance(val, bool):
        raise ValueError(f"{key} must be true or false, got {val!r}")
    return val


def load_config(path: Optional[Path] = None) -> ReportConfig:
    """Load ReportConfig from a JSON file if present, else defaults.

    Keys:
      - datasets (object, label -> filename)
      - data_dir (str)
      - encoding (str)
      - encoding_errors (str, codec error handler for undecodable bytes)
      - header_rows (int)
      - drop_last_row (bool)
      - offsets (object with name/age/nationality/overall/position)
      - jobs (int)
      - quoted (bool)
    """
    cfg = ReportConfig()
    if path is None or not Path(path).exists():
        return cfg
    try:
        with Path(path).open("r", encoding="utf-8") as f:
            obj = json.load(f)
        if not isinstance(obj, dict):
            raise ValueError("top-level JSON value must be an object")
        if "datasets" in obj:
            cfg.datasets = {str(k): str(v) for k, v in dict(obj["datasets"]).items()}
        if obj.get("data_dir"):
            cfg.data_dir = Path(obj["data_dir"])
        cfg.encoding = str(obj.get("encoding", cfg.encoding))
        cfg.encoding_errors = str(obj.get("encoding_errors", cfg.encoding_errors))
        cfg.header_rows = int(obj.get("header_rows", cfg.header_rows))
        cfg.drop_last_row = _flag(obj, "drop_last_row", cfg.drop_last_row)
        cfg.jobs = int(obj.get("jobs", cfg.jobs))
        cfg.quoted = _flag(obj, "quoted", cfg.quoted)
        known = {f.name for f in fields(ColumnOffsets)}
        offs = {k: int(v) for k, v in dict(obj.get("offsets") or {}).items() if k in known}
        cfg.offsets = ColumnOffsets(**offs)
    except (OSError, ValueError, TypeError) as e:
        logger.warning("ignoring config %s: %s", path, e)
        return ReportConfig()
    return cfg
