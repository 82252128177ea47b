"""Tests for commissioned cue post-processing."""

from cuerator.domain.enrichment.commissioned import (
    commissioned_patch,
    format_composer_name,
    parse_commissioned_title,
)
from cuerator.domain.enrichment.models import (
    COMMISSIONED,
    PRODUCTION_LIBRARY,
    CueSheetEntry,
)


def entry(name, source=None, composers=()):
    return CueSheetEntry(
        identity=name,
        original_name=name,
        total_duration_frames=250,
        title=name,
        music_source=source,
        composers=composers,
    )


class TestParseCommissionedTitle:
    """Tests for deriving titles from commissioned filenames."""

    def test_full_mix_with_initials(self):
        assert parse_commissioned_title("MKR11_COOK_A_BREEZE_811_MS_FULL") == (
            "Cook A Breeze 811"
        )

    def test_uppercase_words_are_kept(self):
        assert parse_commissioned_title("MKR3_POS_REVEAL_CT") == "POS Reveal"

    def test_without_suffix(self):
        assert parse_commissioned_title("MKR2_MORNING_MARKET") == "Morning Market"

    def test_suffix_is_case_insensitive(self):
        assert parse_commissioned_title("mkr7_night_drive_aa_full") == "Night Drive"

    def test_custom_prefix(self):
        assert parse_commissioned_title("ABC4_SLOW_BURN_MS", prefix="ABC") == "Slow Burn"


class TestFormatComposerName:
    """Tests for 'Last First' reordering."""

    def test_two_names_are_flipped(self):
        assert format_composer_name("Smith John") == "John Smith"

    def test_surrounding_whitespace(self):
        assert format_composer_name("  Smith   John ") == "John Smith"

    def test_other_lengths_unchanged(self):
        assert format_composer_name("Prince") == "Prince"
        assert format_composer_name("Jones Mary Ann") == "Jones Mary Ann"


class TestCommissionedPatch:
    """Tests for the commissioned fix-up pass."""

    def test_only_commissioned_entries(self):
        entries = [
            entry("MKR3_POS_REVEAL_CT", COMMISSIONED, ("Turner Claire",)),
            entry("CRB1234_Sunrise", PRODUCTION_LIBRARY, ("Smith John",)),
        ]

        patch = commissioned_patch(entries)

        assert patch == {
            "MKR3_POS_REVEAL_CT": {"title": "POS Reveal", "composers": ("Claire Turner",)}
        }

    def test_no_composers_sets_title_only(self):
        patch = commissioned_patch([entry("MKR2_MORNING_MARKET", COMMISSIONED)])
        assert patch == {"MKR2_MORNING_MARKET": {"title": "Morning Market"}}

    def test_unenriched_entries_are_skipped(self):
        assert commissioned_patch([entry("MKR2_MORNING_MARKET")]) == {}
