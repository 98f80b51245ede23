"""
Statement report — the whole analysis as JSON or as a multi-sheet workbook.
"""
from __future__ import annotations

import dataclasses
from pathlib import Path

import pandas as pd
from openpyxl.utils.exceptions import IllegalCharacterError

from ledgerview.analytics.common import sanitize_for_json
from ledgerview.analytics.insights import insights
from ledgerview.data.schemas import AnalysisConfig, AnalysisResult, NoDataResult
from ledgerview.errors import ExportError
from ledgerview.excel.writer import ExcelWriter
from ledgerview.reports.views import TABLE_TITLES, build_tables, insight_sections
from ledgerview.table.export import write_excel_sheet


def generate_json(result: AnalysisResult | NoDataResult) -> dict:
    payload = result.to_dict()
    if result:
        payload["insights"] = dataclasses.asdict(insights(result))
    return sanitize_for_json(payload)


def generate_excel(
    result: AnalysisResult | NoDataResult,
    output_path: str | Path,
    cfg: AnalysisConfig | None = None,
) -> Path:
    if not result:
        raise ExportError(getattr(result, "reason", "No data to export"))

    s = result.basic_stats
    y = result.yearly_balance
    key_figures = insights(result)
    ew = ExcelWriter()

    # Summary
    ws = ew.add_sheet("Summary")
    ew.write_title(ws, "TRANSACTION ANALYSIS",
                   f"{s.start_date} to {s.end_date}  |  Generated {pd.Timestamp.now():%B %d, %Y}")

    row = ew.write_section(ws, 5, "OVERVIEW")
    row = ew.write_kpi_row(ws, row, [
        (s.total_transactions, "TOTAL TRANSACTIONS", "number"),
        (s.total_volume, "TRANSACTION VOLUME", "currency"),
        (s.inflows, "INFLOWS", "currency"),
        (abs(s.outflows), "OUTFLOWS", "currency"),
    ])

    row = ew.write_section(ws, row, "BALANCE")
    ew.write_signed_kpi(ws, row, 1, s.net_flow, "NET CASH FLOW")
    ew.write_signed_kpi(ws, row, 3, y.yearly_avg_balance, f"AVG DAILY BALANCE ({y.total_days} DAYS)")
    ew.write_signed_kpi(ws, row, 5, key_figures.ending_balance, "ENDING BALANCE")

    row = ew.write_section(ws, row + 3, "KEY INSIGHTS")
    try:
        ew.write_insights(ws, row, insight_sections(key_figures))
    except (IllegalCharacterError, ValueError) as exc:
        raise ExportError(f"Failed to export data: {exc}") from exc

    # One sheet per table, in its default order
    for key, table in build_tables(result, cfg).items():
        if not table.rows:
            continue
        write_excel_sheet(ew, TABLE_TITLES[key], table.sorted_rows(), table.columns, table.row_style)

    return ew.save(output_path)
