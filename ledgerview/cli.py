#!/usr/bin/env python3
"""
Ledgerview CLI — summaries, workbook reports and table exports for a bank CSV export.

USAGE:
  python -m ledgerview.cli summary statement.csv                 # Print key figures
  python -m ledgerview.cli summary statement.csv --alias "Jane Doe" --alias "JANE DOE"

  python -m ledgerview.cli report statement.csv                  # Full Excel workbook
  python -m ledgerview.cli report statement.csv --output ./out

  python -m ledgerview.cli export statement.csv                  # Every table as CSV
  python -m ledgerview.cli export statement.csv --table top_partners --format json
"""
from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path

from ledgerview.analytics.engine import analyze
from ledgerview.analytics.insights import insights
from ledgerview.config import EXPORT_FOLDER, REPORTS_FOLDER
from ledgerview.data.loader import load_csv
from ledgerview.data.schemas import AnalysisConfig, TimeRange
from ledgerview.errors import LedgerviewError
from ledgerview.logging_setup import configure_logging
from ledgerview.reports.views import TABLE_TITLES, build_tables, format_currency, insight_sections


def _build_config(args) -> AnalysisConfig:
    """Build an AnalysisConfig from CLI args."""
    aliases = getattr(args, "alias", None)
    if aliases:
        return AnalysisConfig.from_settings(self_aliases=aliases)
    return AnalysisConfig.from_settings()


def _load_and_analyze(args):
    cfg = _build_config(args)
    df = load_csv(args.file, cfg)
    return cfg, analyze(df, cfg)


def cmd_summary(args):
    """Print the headline figures."""
    cfg, result = _load_and_analyze(args)
    if not result:
        print(f"  {result.reason}")
        return

    s = result.basic_stats
    y = result.yearly_balance
    print("\n" + "=" * 70)
    print("  LEDGERVIEW — TRANSACTION SUMMARY")
    print("=" * 70)
    print(f"  Period:             {s.start_date} to {s.end_date}")
    print(f"  Transactions:       {s.total_transactions:,}")
    print(f"  Volume:             {format_currency(s.total_volume)}")
    print(f"  Net cash flow:      {format_currency(s.net_flow)}")
    print(f"    In:  {format_currency(s.inflows)}   Out: {format_currency(abs(s.outflows))}")
    print(f"  Avg daily balance:  {format_currency(y.yearly_avg_balance)} (based on {y.total_days} days)")

    if result.partner_volumes:
        print(f"\n  TOP PARTNERS ({len(result.partner_volumes)}):\n")
        for i, p in enumerate(result.partner_volumes, 1):
            name = str(p.name) if p.name is not None else "(unnamed)"
            print(f"  {i:<4}{name[:40]:<42}{format_currency(p.total_volume):>14}")
    for title, lines in insight_sections(insights(result)):
        if lines:
            print(f"\n  {title.upper()}:")
            for line in lines:
                print(f"    - {line}")
    print("=" * 70 + "\n")


def cmd_report(args):
    """Write the full workbook report."""
    from ledgerview.reports.statement_report import generate_excel

    cfg, result = _load_and_analyze(args)
    if not result:
        print(f"  (Skipped report — {result.reason})")
        return

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_folder = Path(args.output) if args.output else REPORTS_FOLDER
    out = generate_excel(result, output_folder / f"Transaction_Report_{timestamp}.xlsx", cfg)
    print(f"\n  Report saved to: {out}\n")


def cmd_export(args):
    """Export one or all tables."""
    cfg, result = _load_and_analyze(args)
    tables = build_tables(result, cfg, args.range)
    if not tables:
        print("  No data to export")
        return

    names = [args.table] if args.table else list(tables)
    directory = Path(args.output) if args.output else EXPORT_FOLDER
    for name in names:
        table = tables[name]
        if args.sort:
            table.request_sort(args.sort)
        exporter = {"csv": table.export_csv, "json": table.export_json, "xlsx": table.export_excel}[args.format]
        path = exporter(directory)
        if path:
            print(f"   {path.name}")
        else:
            print(f"   (Skipped {TABLE_TITLES[name]} — no data)")
    print(f"\n  Exports saved to: {directory}\n")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Ledgerview — bank transaction analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: LEDGERVIEW_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    def _common(p):
        p.add_argument("file", help="CSV export to analyze")
        p.add_argument("--alias", action="append", help="Own-name spelling to fold into 'My Transfers' (repeatable)")

    summary_parser = subparsers.add_parser("summary", help="Print headline figures")
    _common(summary_parser)
    summary_parser.set_defaults(func=cmd_summary)

    report_parser = subparsers.add_parser("report", help="Generate Excel report")
    _common(report_parser)
    report_parser.add_argument("--output", help="Output directory")
    report_parser.set_defaults(func=cmd_report)

    export_parser = subparsers.add_parser("export", help="Export tables")
    _common(export_parser)
    export_parser.add_argument("--table", choices=sorted(TABLE_TITLES), help="Single table to export")
    export_parser.add_argument("--format", choices=["csv", "json", "xlsx"], default="csv", help="Export format")
    export_parser.add_argument("--sort", help="Column key to sort by before exporting")
    export_parser.add_argument("--range", choices=[t.value for t in TimeRange], default="all",
                               help="Quarter filter for the daily balance table")
    export_parser.add_argument("--output", help="Output directory")
    export_parser.set_defaults(func=cmd_export)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    configure_logging(args.log_level)
    try:
        args.func(args)
    except LedgerviewError as exc:
        print(f"  Error: {exc}", file=sys.stderr)
        return 1
    except KeyError as exc:
        print(f"  Error: unknown column {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
