#!/usr/bin/env python3
"""
Enrollment Analytics CLI — sheet sync report, exports, and API server.

USAGE:
  python -m app.cli sync                                    # Fetch the sheet, print KPIs
  python -m app.cli sync --url <csv-export-url>             # Use a different sheet

  python -m app.cli export                                  # enrollments.csv in cwd
  python -m app.cli export --format xlsx --output ./out/enrollments.xlsx

  python -m app.cli serve                                   # Start API server
  python -m app.cli serve --port 8001
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from app.config import ENROLLMENT_CSV_URL, EXPORT_FILENAME
from app.data.store import DataStore
from app.errors import SYNC_ERRORS
from app.log import setup_logging


def _load_store(args, strict: bool = True) -> DataStore:
    store = DataStore(source_url=args.url)
    if strict:
        store.sync()
    else:
        store.load()
    return store


def cmd_sync(args):
    """Fetch the sheet and print a summary."""
    from app.analytics.overview import overview_metrics
    from app.analytics.ltv import ltv_ranking
    from app.analytics.churn import churn_analysis

    print("\n" + "=" * 70)
    print("  ENROLLMENT ANALYTICS — SHEET SYNC")
    print("=" * 70)

    try:
        store = _load_store(args)
    except SYNC_ERRORS as exc:
        print(f"\nSync failed: {exc}")
        sys.exit(1)

    snap = store.snapshot
    overview = overview_metrics(snap)
    ltv = ltv_ranking(snap)["summary"]
    churn = churn_analysis(snap)

    print(f"\n  Records loaded:      {overview['totalEnrollments']:,}")
    print(f"  Active students:     {overview['activeStudents']:,}")
    print(f"  Completed courses:   {overview['completedCourses']:,}")
    print(f"  Average progress:    {overview['avgProgress']:.1f}%")
    print(f"  Customers:           {ltv['totalCustomers']:,}")
    print(f"  Total LTV:           ${ltv['totalLTV']:,.2f}")
    print(f"  Average LTV:         ${ltv['avgLTV']:,.2f}")
    print(f"  Churn / retention:   {churn['churnRate']:.2f}% / {churn['retentionRate']:.2f}%")
    print(f"  Fields:              {', '.join(snap.fields()[:12])}")
    print()


def cmd_export(args):
    """Write the snapshot as CSV, JSON, or XLSX."""
    from app.reports.export import export_csv, export_json, export_workbook

    try:
        store = _load_store(args, strict=not args.allow_sample)
    except SYNC_ERRORS as exc:
        print(f"Sync failed: {exc} (use --allow-sample to export sample data)")
        sys.exit(1)
    snap = store.snapshot
    output = Path(args.output or f"{EXPORT_FILENAME}.{args.format}")
    output.parent.mkdir(parents=True, exist_ok=True)

    if args.format == "csv":
        output.write_text(export_csv(snap))
    elif args.format == "json":
        output.write_text(json.dumps(export_json(snap), indent=2))
    else:
        output.write_bytes(export_workbook(snap))

    print(f"Exported {len(snap):,} enrollments ({snap.origin}) → {output}")


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Enrollment Analytics API on port {args.port}...")
    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Enrollment Analytics — Google Sheets enrollment dashboard backend",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # sync subcommand
    sync_parser = subparsers.add_parser("sync", help="Fetch the sheet and print KPIs")
    sync_parser.add_argument("--url", default=ENROLLMENT_CSV_URL, help="CSV export URL")
    sync_parser.set_defaults(func=cmd_sync)

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Export enrollments to a file")
    export_parser.add_argument("--url", default=ENROLLMENT_CSV_URL, help="CSV export URL")
    export_parser.add_argument("--format", choices=["csv", "json", "xlsx"], default="csv")
    export_parser.add_argument("--output", help="Output file (default: enrollments.<format>)")
    export_parser.add_argument("--allow-sample", action="store_true",
                               help="Export the built-in sample data if the sheet is unreachable")
    export_parser.set_defaults(func=cmd_export)

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8001")), help="Port (default 8001)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return

    setup_logging()
    args.func(args)


if __name__ == "__main__":
    main()
