# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

from manifest_resolver.logging.init import reset_logging

from .helpers import HEADER, make_excel


@pytest.fixture(autouse=True)
def _clean_logging():
    # handlers bind sys.stdout at setup time; rebuild per test so capsys sees output
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("MANIFEST_SOURCE_PATH", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_path: ./data/ManifestDataSource.xlsx
base_group: MCC Base
columns:
  mcc_release: MCC Release
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "resolver.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def manifest_sheets() -> dict[str, list[list[object]]]:
    """A small but realistic manifest workbook layout.

    19-digit ManifestIDs are stored as text, as real depot sheets hold them;
    an xlsx numeric cell is a double and cannot carry them exactly.
    """
    return {
        "MCC Base": [
            HEADER,
            ["MCCBase_38", "MCC Base", 976730, 976731, "1111111111111111111", 60000000000, "February 1 2024", None],
            ["MCCBase_40", "MCC Base", 976730, 976731, "3333333333333333333", 62000000000, "April 1 2024", None],
            ["MCCBase_39", "MCC Base", 976730, 976731, "2222222222222222222", 61000000000, "March 1 2024", None],
            # same sheet, but not a base release row
            ["Reach_39", "Reach", 976730, 1064220, 5555, None, None, None],
        ],
        "Reach": [
            HEADER,
            ["Reach_38", "Reach", 976730, 1064220, 4444, 9000000000, None, "February 1 2024"],
            ["Reach_39", "Reach", 976730, 1064220, 5555, 9100000000, None, "March 1 2024"],
            ["Reach_40", "Reach", 976730, 1064220, 6666, None, None, None],
        ],
        "Halo 4": [
            HEADER,
            ["Halo4_39", "Halo 4", 976730, 1064273, 7777, 12000000000, None, None],
            [None, "Halo 4", 976730, 1064273, 8888, 1, None, None],
        ],
    }


@pytest.fixture()
def write_workbook(temp_workdir: Path, manifest_sheets) -> Path:
    return make_excel(temp_workdir / "data" / "ManifestDataSource.xlsx", manifest_sheets)
