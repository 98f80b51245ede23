"""Shared fixtures: a small bank export and an analysis config with own-name aliases."""

from __future__ import annotations

from pathlib import Path

import pytest

from ledgerview.data.schemas import AnalysisConfig

SAMPLE_CSV = """\
Booking Date,Value Date,Partner Name,Partner Iban,Type,Payment Reference,Account Name,Amount (EUR),Original Amount,Original Currency,Exchange Rate
2024-01-01,2024-01-01,ACME Corp,DE001,Credit Transfer,Salary January,Main,2500.00,,,
2024-01-03,2024-01-03,Coffee Bar,,Presentment,,Main,-4.50,-4.50,EUR,
2024-01-03,2024-01-03,Jane Doe,DE002,Debit Transfer,Savings,Main,-500.00,,,
2024-01-08,2024-01-08,Book Shop,,Presentment,,Main,-20.00,-22.00,USD,1.1
2024-01-10,2024-01-10,Book Shop,,Presentment Refund,,Main,20.00,22.00,USD,1.1
2024-02-01,2024-02-01,ACME Corp,DE001,Credit Transfer,"Salary February, bonus",Main,2600.00,,,
2024-02-02,2024-02-02,JANE DOE,DE002,Credit Transfer,Back,Main,100.00,,,
"""


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def sample_csv_path(tmp_path: Path) -> Path:
    path = tmp_path / "statement.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def alias_cfg() -> AnalysisConfig:
    return AnalysisConfig.from_settings(self_aliases=["Jane Doe", "JANE DOE"])


@pytest.fixture(autouse=True)
def _isolate_export_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CLI runs from writing under the user's home directory."""
    monkeypatch.setattr("ledgerview.cli.EXPORT_FOLDER", tmp_path / "exports")
    monkeypatch.setattr("ledgerview.cli.REPORTS_FOLDER", tmp_path / "reports")
