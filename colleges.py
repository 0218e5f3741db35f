#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
College statistics (SQLite)

Commands:
  init                Create tables and the college_summary view (--reset drops them first)
  list-reports        Show the report catalog
  report NAME         Print one report; --csv DIR also exports it as CSV

Notes:
- The database path comes from COLLEGE_DB_PATH, then config.yaml (db_path), then
  college_statistics.db at the project root. --config points at another config.yaml.
- `serve` the HTTP API with: uvicorn college_stats.api:app
"""

import argparse
import logging
import sys

import pandas as pd

from college_stats.config import get_export_dir
from college_stats.db import get_conn, get_db_path
from college_stats.errors import UnknownReportError
from college_stats.logs import ensure_log_schema
from college_stats.schema import drop_schema, ensure_schema
from college_stats.services.report_svc import export_report, get_report, list_reports, report_frame


def cmd_init(args):
    db_path = get_db_path(args.config)
    with get_conn(db_path) as conn:
        if args.reset:
            drop_schema(conn)
        ensure_schema(conn)
    ensure_log_schema(db_path)
    print("DB initialized:", db_path)


def cmd_list_reports(args):
    df = pd.DataFrame(list_reports())
    with pd.option_context("display.max_colwidth", 80, "display.width", 160):
        print(df[["name", "title"]].to_string(index=False))


def cmd_report(args):
    try:
        report = get_report(args.name)
    except UnknownReportError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    db_path = get_db_path(args.config)
    df = report_frame(args.name, db_path)
    print(f"\n=== {report.title} ===")
    if report.scalar:
        value = df.iloc[0, 0]
        print("(no data)" if value is None or pd.isna(value) else value)
    elif df.empty:
        print("(empty)")
    else:
        with pd.option_context("display.max_rows", None, "display.width", 160):
            print(df.to_string(index=False))

    if args.csv is not None:
        out_dir = args.csv or get_export_dir(args.config)
        path = export_report(args.name, out_dir, db_path)
        print(f"\nCSV exported to {path}")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="College statistics (SQLite)")
    parser.add_argument("--config", default=None, help="path to config.yaml")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create tables and view")
    p_init.add_argument("--reset", action="store_true", help="drop existing tables first")
    p_init.set_defaults(func=cmd_init)

    p_list = sub.add_parser("list-reports", help="list available reports")
    p_list.set_defaults(func=cmd_list_reports)

    p_rep = sub.add_parser("report", help="print a report")
    p_rep.add_argument("name")
    p_rep.add_argument("--csv", nargs="?", const="", default=None,
                       help="export CSV to DIR (default: export_dir from config.yaml)")
    p_rep.set_defaults(func=cmd_report)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if hasattr(args, "func"):
        return args.func(args) or 0
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
