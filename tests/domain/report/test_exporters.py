"""Tests for cue sheet ordering and CSV export."""

import csv
import io

from cuerator.domain.enrichment.models import PRODUCTION_LIBRARY, CueSheetEntry
from cuerator.domain.report.exporters import (
    CSV_HEADERS,
    entry_to_row,
    export_csv,
    sort_entries,
    write_csv,
)

HEADER_LINE = (
    "Music Title,Music Source,Composer(s),Performer(s),Publisher(s),"
    "Catalogue Code,Track No.,Duration,Music Usage,Vocal/Instrumental,Source Filename"
)


def entry(title, **kwargs):
    kwargs.setdefault("original_name", title)
    return CueSheetEntry(
        identity=kwargs.pop("identity", title),
        total_duration_frames=kwargs.pop("total_duration_frames", 250),
        title=title,
        **kwargs,
    )


class TestSortEntries:
    """Tests for report ordering."""

    def test_sorted_by_title_ignoring_case(self):
        entries = [entry("beta"), entry("Alpha"), entry("Gamma")]
        assert [e.title for e in sort_entries(entries)] == ["Alpha", "beta", "Gamma"]

    def test_does_not_modify_input(self):
        entries = [entry("b"), entry("a")]
        sort_entries(entries)
        assert [e.title for e in entries] == ["b", "a"]


class TestEntryToRow:
    """Tests for flattening entries."""

    def test_column_order(self):
        row = entry_to_row(
            entry(
                "Sunrise",
                original_name="CRB1234_Sunrise",
                music_source=PRODUCTION_LIBRARY,
                composers=("Jane Doe", "John Roe"),
                publisher="Beatbox Music",
                catalogue_code="CRB1234",
                track_no="7",
                vocal_or_instrumental="Instrumental",
                total_duration_frames=1512,
            )
        )
        assert row == [
            "Sunrise",
            PRODUCTION_LIBRARY,
            "Jane Doe, John Roe",
            "",
            "Beatbox Music",
            "CRB1234",
            "7",
            "00:01:00",
            "Background",
            "Instrumental",
            "CRB1234_Sunrise",
        ]
        assert len(row) == len(CSV_HEADERS)

    def test_custom_music_usage(self):
        assert entry_to_row(entry("A"), music_usage="Feature")[8] == "Feature"


class TestExportCsv:
    """Tests for CSV serialization."""

    def test_header_only(self):
        assert export_csv([]) == HEADER_LINE

    def test_every_cell_is_quoted(self):
        text = export_csv([entry("Theme", original_name="Theme_v2")])
        assert text.split("\n") == [
            HEADER_LINE,
            '"Theme","","","","","","","00:00:10","Background","","Theme_v2"',
        ]

    def test_embedded_quotes_are_doubled(self):
        text = export_csv([entry('Say "Hi"')])
        row = text.split("\n")[1]
        assert row.startswith('"Say ""Hi""",')

    def test_commas_stay_in_one_cell(self):
        text = export_csv([entry("A", composers=("X", "Y"))])
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[1][2] == "X, Y"
        assert len(rows[1]) == len(CSV_HEADERS)

    def test_rows_keep_given_order(self):
        text = export_csv([entry("b"), entry("a")])
        assert [line.split(",")[0] for line in text.split("\n")[1:]] == ['"b"', '"a"']

    def test_no_trailing_newline(self):
        assert not export_csv([entry("A")]).endswith("\n")


class TestWriteCsv:
    """Tests for writing the CSV file."""

    def test_writes_file(self, tmp_path):
        path = tmp_path / "out" / "cue_sheet.csv"

        count = write_csv([entry("A"), entry("B")], path)

        assert count == 2
        assert path.read_text(encoding="utf-8") == export_csv([entry("A"), entry("B")])
