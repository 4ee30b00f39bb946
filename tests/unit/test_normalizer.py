"""Tests for normalizer functions."""

from datetime import date

import pytest

from proposal_scraper.core.models import IsoDate, MissingDate, RawDate, RollingDeadline
from proposal_scraper.core.normalizer import clean_text, normalize_date


class TestNormalizeDate:
    """Tests for normalize_date function."""

    def test_day_month_year_slash(self):
        """Test dd/MM/yyyy format."""
        assert normalize_date("15/08/2024") == IsoDate(date(2024, 8, 15))

    def test_day_month_year_dash(self):
        """Test dd-MM-yyyy format."""
        assert normalize_date("15-08-2024") == IsoDate(date(2024, 8, 15))

    def test_ambiguous_date_is_day_first(self):
        """Test that ambiguous dates take the first matching format."""
        assert normalize_date("01/02/2025") == IsoDate(date(2025, 2, 1))

    def test_month_first_fallback(self):
        """Test MM/dd/yyyy when day-first is not a valid date."""
        assert normalize_date("12/31/2025") == IsoDate(date(2025, 12, 31))

    def test_iso_format(self):
        """Test yyyy-MM-dd format."""
        assert normalize_date("2024-08-15") == IsoDate(date(2024, 8, 15))

    @pytest.mark.parametrize("text", [
        "15 Aug 2024",
        "15 August 2024",
        "Aug 15, 2024",
        "August 15, 2024",
    ])
    def test_month_name_formats(self, text):
        """Test month-name formats."""
        assert normalize_date(text) == IsoDate(date(2024, 8, 15))

    def test_two_digit_year(self):
        """Test dd/MM/yy format."""
        assert normalize_date("15/08/24") == IsoDate(date(2024, 8, 15))
        assert normalize_date("15-08-24") == IsoDate(date(2024, 8, 15))

    def test_two_digit_year_pivot(self):
        """Test two-digit years 69-99 map to the 1900s."""
        assert normalize_date("01/01/70") == IsoDate(date(1970, 1, 1))
        assert normalize_date("01/01/68") == IsoDate(date(2068, 1, 1))

    def test_single_digit_day_and_month(self):
        """Test day and month need not be zero-padded."""
        assert normalize_date("1/8/2024") == IsoDate(date(2024, 8, 1))

    def test_whitespace_collapsed(self):
        """Test extra whitespace is cleaned before parsing."""
        assert normalize_date("  31   March\n2025 ") == IsoDate(date(2025, 3, 31))

    @pytest.mark.parametrize("text", [
        "ongoing",
        "Rolling",
        "CONTINUOUS",
        "Open until filled",
        "Throughout the year",
    ])
    def test_rolling_markers(self, text):
        """Test open-ended deadline markers."""
        assert normalize_date(text) == RollingDeadline()

    def test_empty_string(self):
        """Test empty string is missing."""
        assert normalize_date("") == MissingDate()

    def test_whitespace_only(self):
        """Test whitespace-only string is missing."""
        assert normalize_date("   ") == MissingDate()

    def test_none_input(self):
        """Test None input is missing."""
        assert normalize_date(None) == MissingDate()

    def test_non_string_input(self):
        """Test non-text input is missing."""
        assert normalize_date(20250101) == MissingDate()

    def test_unparseable_text(self):
        """Test unparseable text is passed through."""
        assert normalize_date("next Tuesday") == RawDate("next Tuesday")

    def test_invalid_calendar_date(self):
        """Test impossible dates fall back to raw text."""
        assert normalize_date("30/02/2025") == RawDate("30/02/2025")

    def test_raw_text_is_cleaned(self):
        """Test raw fallback keeps the cleaned text."""
        assert normalize_date(" end  of\tQ3 ") == RawDate("end of Q3")


class TestCleanText:
    """Tests for clean_text function."""

    def test_collapses_whitespace(self):
        """Test runs of whitespace become single spaces."""
        assert clean_text("  a \n\t b  ") == "a b"

    def test_empty(self):
        """Test empty input."""
        assert clean_text("") == ""
        assert clean_text(None) == ""
