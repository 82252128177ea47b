"""Report domain - cue sheet ordering, CSV export and terminal rendering."""

from .exporters import CSV_HEADERS, entry_to_row, export_csv, sort_entries, write_csv
from .rendering import build_cue_sheet_table, build_summary_table, render_report

__all__ = [
    "CSV_HEADERS",
    "entry_to_row",
    "export_csv",
    "sort_entries",
    "write_csv",
    "build_cue_sheet_table",
    "build_summary_table",
    "render_report",
]
