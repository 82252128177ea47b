"""Tests for loading the commissioned music database."""

import pytest

from cuerator.domain.enrichment.exceptions import EnrichmentError, ReferenceDataError
from cuerator.domain.enrichment.reference import load_reference_data


class TestLoadReferenceData:
    """Tests for load_reference_data."""

    def test_loads_text(self, tmp_path):
        path = tmp_path / "db.txt"
        path.write_text("FILENAME\tTRACK TITLE FOR REPORTING\nMKR1_A\tA\n", encoding="utf-8")

        reference = load_reference_data(path)

        assert reference.text.startswith("FILENAME")
        assert reference.source == path

    def test_missing_file(self, tmp_path):
        path = tmp_path / "missing.txt"
        with pytest.raises(ReferenceDataError, match="Please check the file path") as exc_info:
            load_reference_data(path)
        assert exc_info.value.path == path

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("  \n", encoding="utf-8")
        with pytest.raises(ReferenceDataError, match="empty"):
            load_reference_data(path)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(ReferenceDataError):
            load_reference_data(path)

    def test_is_an_enrichment_error(self, tmp_path):
        with pytest.raises(EnrichmentError):
            load_reference_data(tmp_path / "missing.txt")
