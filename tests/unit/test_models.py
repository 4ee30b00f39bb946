"""Tests for core models."""

import dataclasses
from datetime import date, datetime, timezone

import pytest

from proposal_scraper.core.models import (
    ProposalRecord,
    IsoDate,
    RollingDeadline,
    RawDate,
    MissingDate,
)


class TestDateValue:
    """Tests for DateValue variants."""

    def test_iso_render(self):
        """Test ISO dates render as YYYY-MM-DD."""
        assert IsoDate(date(2025, 3, 1)).render() == "2025-03-01"

    def test_rolling_render(self):
        """Test rolling sentinel text."""
        assert RollingDeadline().render() == "Rolling Deadline"

    def test_raw_render(self):
        """Test raw text is returned unchanged."""
        assert RawDate("end of Q3").render() == "end of Q3"

    def test_missing_render(self):
        """Test missing sentinel text."""
        assert MissingDate().render() == "Not specified"

    def test_variants_compare_by_value(self):
        """Test equal variants compare equal."""
        assert MissingDate() == MissingDate()
        assert RawDate("x") == RawDate("x")
        assert IsoDate(date(2025, 1, 1)) != IsoDate(date(2025, 1, 2))


class TestProposalRecord:
    """Tests for ProposalRecord dataclass."""

    def create_record(self, **kwargs) -> ProposalRecord:
        """Helper to create test records."""
        data = {
            "title": "AI Grant",
            "agency": "DST - Department of Science & Technology",
            "link": "https://dst.gov.in/grants/ai",
            "source_url": "https://dst.gov.in/call-for-proposals",
        }
        data.update(kwargs)
        return ProposalRecord(**data)

    def test_default_dates_missing(self):
        """Test dates default to MissingDate."""
        record = self.create_record()

        assert record.start_date == MissingDate()
        assert record.end_date == MissingDate()

    def test_extracted_at_is_utc(self):
        """Test extraction timestamp is timezone-aware."""
        record = self.create_record()

        assert record.extracted_at.tzinfo is not None

    def test_blank_title_rejected(self):
        """Test that blank titles raise ValueError."""
        with pytest.raises(ValueError):
            self.create_record(title="   ")

        with pytest.raises(ValueError):
            self.create_record(title="")

    def test_immutable(self):
        """Test that records cannot be modified."""
        record = self.create_record()

        with pytest.raises(dataclasses.FrozenInstanceError):
            record.title = "Other"

    def test_identity(self):
        """Test identity triple."""
        record = self.create_record()

        assert record.identity == (
            "AI Grant",
            "DST - Department of Science & Technology",
            "https://dst.gov.in/grants/ai",
        )

    def test_to_dict(self):
        """Test JSON-ready conversion."""
        record = self.create_record(
            start_date=IsoDate(date(2025, 1, 1)),
            end_date=RollingDeadline(),
            extracted_at=datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        )

        result = record.to_dict()

        assert result == {
            "title": "AI Grant",
            "agency": "DST - Department of Science & Technology",
            "startDate": "2025-01-01",
            "endDate": "Rolling Deadline",
            "link": "https://dst.gov.in/grants/ai",
            "sourceUrl": "https://dst.gov.in/call-for-proposals",
            "extractedAt": "2025-01-02T03:04:05+00:00",
        }

    def test_to_dict_omits_strategy(self):
        """Test that the strategy name stays internal."""
        record = self.create_record(strategy="table")

        assert "strategy" not in record.to_dict()
