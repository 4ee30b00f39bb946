"""Tests for deduplicator functionality."""

from datetime import date, datetime, timezone

from proposal_scraper.core.deduplicator import Deduplicator, dedupe
from proposal_scraper.core.models import IsoDate, ProposalRecord


def create_record(
    title: str = "AI Grant",
    agency: str = "DST - Department of Science & Technology",
    link: str = "https://dst.gov.in/grants/ai",
    **kwargs,
) -> ProposalRecord:
    """Helper to create test records."""
    return ProposalRecord(
        title=title,
        agency=agency,
        link=link,
        source_url="https://dst.gov.in/call-for-proposals",
        **kwargs,
    )


class TestDedupe:
    """Tests for dedupe function."""

    def test_keeps_first_occurrence(self):
        """Test that the first of equal records is retained."""
        first = create_record(
            start_date=IsoDate(date(2025, 1, 1)),
            extracted_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )
        second = create_record(
            start_date=IsoDate(date(2025, 2, 1)),
            extracted_at=datetime(2025, 2, 1, tzinfo=timezone.utc),
        )

        result = dedupe([first, second])

        assert len(result) == 1
        assert result[0] is first

    def test_preserves_order(self):
        """Test output follows input order."""
        a = create_record(title="A Grant")
        b = create_record(title="B Grant")
        c = create_record(title="C Grant")

        result = dedupe([c, a, c, b, a])

        assert [r.title for r in result] == ["C Grant", "A Grant", "B Grant"]

    def test_different_link_kept(self):
        """Test records with different links are distinct."""
        records = [
            create_record(link="https://dst.gov.in/grants/ai"),
            create_record(link="https://dst.gov.in/grants/ai-2"),
        ]

        assert len(dedupe(records)) == 2

    def test_different_agency_kept(self):
        """Test records with different agencies are distinct."""
        records = [
            create_record(agency="Unknown Agency"),
            create_record(),
        ]

        assert len(dedupe(records)) == 2

    def test_exact_string_comparison(self):
        """Test titles differing only in case are distinct."""
        records = [create_record(title="AI Grant"), create_record(title="ai grant")]

        assert len(dedupe(records)) == 2

    def test_idempotent(self):
        """Test deduplicating twice changes nothing."""
        records = [
            create_record(title="A Grant"),
            create_record(title="B Grant"),
            create_record(title="A Grant"),
        ]

        once = dedupe(records)

        assert dedupe(once) == once

    def test_empty(self):
        """Test empty input."""
        assert dedupe([]) == []


class TestDeduplicator:
    """Tests for Deduplicator class."""

    def test_process_new_record(self):
        """Test a new record is returned."""
        dedup = Deduplicator()
        record = create_record()

        assert dedup.process(record) is record
        assert len(dedup) == 1

    def test_process_duplicate(self):
        """Test a duplicate returns None and is counted."""
        dedup = Deduplicator()
        dedup.process(create_record())

        assert dedup.process(create_record()) is None
        assert dedup.duplicates == 1
        assert len(dedup) == 1

    def test_is_duplicate(self):
        """Test checking without adding."""
        dedup = Deduplicator()
        record = create_record()

        assert dedup.is_duplicate(record) is False
        dedup.process(record)
        assert dedup.is_duplicate(create_record()) is True

    def test_clear(self):
        """Test clearing the index."""
        dedup = Deduplicator()
        dedup.process(create_record())
        dedup.process(create_record())

        dedup.clear()

        assert len(dedup) == 0
        assert dedup.duplicates == 0
        assert dedup.get_all() == []
