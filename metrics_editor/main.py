"""Metrics editor entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from metrics_editor.application.editor_service import EditorSession
from metrics_editor.application.reporting.rendering import month_summary_line, render_panel
from metrics_editor.config import Settings, load_settings
from metrics_editor.domain.models import CHANNELS, RAW_FIELDS, TOTAL_CHANNEL, RecordSet
from metrics_editor.errors import MetricsEditorError
from metrics_editor.infrastructure.json_repository import JsonRecordStore
from metrics_editor.infrastructure.report_exporter import (
    save_month_html,
    save_record_set_excel,
    save_record_set_json,
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="metrics-editor", description="Monthly ad channel metrics editor.")
    parser.add_argument("--db", type=Path, default=None, help="Record store path (default: ./database.json)")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_import = sub.add_parser("import", help="Import a monthly performance export (.csv or .xlsx)")
    p_import.add_argument("file", type=Path)
    p_import.add_argument("--save", action="store_true", help="Persist the imported months")

    p_show = sub.add_parser("show", help="Show one month/channel panel")
    p_show.add_argument("--month", default="Jan")
    p_show.add_argument("--channel", default=TOTAL_CHANNEL, choices=CHANNELS)

    p_edit = sub.add_parser("edit", help="Edit one raw counter and save")
    p_edit.add_argument("month")
    p_edit.add_argument("channel", choices=CHANNELS)
    p_edit.add_argument("field", choices=RAW_FIELDS)
    p_edit.add_argument("value")

    p_report = sub.add_parser("report", help="Write the HTML month report")
    p_report.add_argument("--month", default="Jan")
    p_report.add_argument("--output", type=Path, default=None)

    p_export = sub.add_parser("export", help="Write Excel and JSON exports of the record set")
    p_export.add_argument("--output", type=Path, default=None, help="Output directory")

    sub.add_parser("reset", help="Replace the store with twelve empty months")
    return parser


def _print_summary(record_set: RecordSet) -> None:
    for month in record_set:
        print(month_summary_line(month))


def _run(args: argparse.Namespace, settings: Settings) -> int:
    store = JsonRecordStore(args.db or settings.db_path)
    session = EditorSession(store)

    if args.command == "import":
        session.load()
        record_set = session.import_file(args.file)
        _print_summary(record_set)
        print(f"Imported months: {len(record_set)}")
        if args.save:
            if not session.save():
                print(f"Save failed: {store.path}", file=sys.stderr)
                return 1
            print(f"Saved: {store.path}")
        return 0

    loaded = session.load()
    if loaded.error:
        print(f"Store unreadable, showing empty months: {loaded.error}", file=sys.stderr)

    if args.command == "show":
        month_index = session.record_set.index_of(args.month)
        print(render_panel(session.record_set[month_index], args.channel))
        return 0

    if args.command == "edit":
        month_index = session.record_set.index_of(args.month)
        session.edit(month_index, args.channel, args.field, args.value)
        print(render_panel(session.record_set[month_index], args.channel))
        if not session.save():
            print(f"Save failed: {store.path}", file=sys.stderr)
            return 1
        print(f"Saved: {store.path}")
        return 0

    if args.command == "report":
        month_index = session.record_set.index_of(args.month)
        month_name = session.record_set[month_index].name
        output_path = args.output or settings.output_dir / f"metrics_{month_name}.html"
        save_month_html(output_path, session.record_set, month_index)
        print(f"Saved HTML: {output_path}")
        return 0

    if args.command == "export":
        output_dir = args.output or settings.output_dir
        json_path = output_dir / "metrics.json"
        excel_path = output_dir / "metrics.xlsx"
        save_record_set_json(json_path, session.record_set)
        print(f"Saved JSON: {json_path}")
        excel_saved, excel_error_message = save_record_set_excel(excel_path, session.record_set)
        if excel_saved:
            print(f"Saved Excel: {excel_path}")
        else:
            print(f"Excel save skipped (file may be open/locked): {excel_error_message}")
        return 0

    if args.command == "reset":
        session.reset()
        if not session.save():
            print(f"Save failed: {store.path}", file=sys.stderr)
            return 1
        print(f"Reset: {store.path}")
        return 0

    return 2


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        settings = load_settings()
        logging.basicConfig(
            level=(args.log_level or settings.log_level).upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        return _run(args, settings)
    except (MetricsEditorError, IndexError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
