import json
from pathlib import Path

from fifa_stats.config import DATA_DIR_ENV, DEFAULT_DATASETS, ReportConfig, load_config


def test_defaults(monkeypatch):
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    cfg = load_config(None)
    assert cfg.datasets == DEFAULT_DATASETS
    assert list(cfg.datasets) == ["FIFA 20", "FIFA 21", "FIFA 22"]
    assert cfg.data_dir == Path(".")
    assert cfg.offsets.position == 62
    ex = cfg.extraction()
    assert (ex.header_rows, ex.drop_last_row) == (2, True)


def test_env_data_dir(monkeypatch, tmp_path):
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
    cfg = ReportConfig()
    assert cfg.dataset_paths()["FIFA 21"] == tmp_path / "FIFA21_official_data.csv"


def test_json_overrides(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({
        "datasets": {"Mini": "mini.csv"},
        "data_dir": str(tmp_path),
        "header_rows": 1,
        "drop_last_row": False,
        "offsets": {"position": 10, "bogus": 3},
        "jobs": 3,
    }), encoding="utf-8")
    cfg = load_config(p)
    assert cfg.dataset_paths() == {"Mini": tmp_path / "mini.csv"}
    assert cfg.header_rows == 1
    assert cfg.drop_last_row is False
    assert cfg.offsets.position == 10
    assert cfg.offsets.name == 2
    assert cfg.jobs == 3
    assert cfg.encoding_errors == "replace"


def test_invalid_json_falls_back_to_defaults(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text("{not json", encoding="utf-8")
    cfg = load_config(p)
    assert cfg.header_rows == 2
    assert cfg.datasets == DEFAULT_DATASETS


def test_string_booleans_are_rejected(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"drop_last_row": "false", "header_rows": 1}), encoding="utf-8")
    cfg = load_config(p)
    assert cfg.drop_last_row is True
    assert cfg.header_rows == 2


def test_real_booleans_are_accepted(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"drop_last_row": False, "quoted": True}), encoding="utf-8")
    cfg = load_config(p)
    assert cfg.drop_last_row is False
    assert cfg.quoted is True
