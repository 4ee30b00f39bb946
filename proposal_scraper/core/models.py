"""
Data models for the proposal scraper.

DateValue variants keep the "rolling", "raw" and "missing" cases of a
deadline explicit instead of overloading a single string field.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Union

ROLLING_DEADLINE = "Rolling Deadline"
NOT_SPECIFIED = "Not specified"
UNKNOWN_AGENCY = "Unknown Agency"


@dataclass(frozen=True)
class IsoDate:
    """A date that parsed to a real calendar day."""
    value: date

    def render(self) -> str:
        return self.value.isoformat()


@dataclass(frozen=True)
class RollingDeadline:
    """Applications accepted continuously, no fixed end date."""

    def render(self) -> str:
        return ROLLING_DEADLINE


@dataclass(frozen=True)
class RawDate:
    """Date text that no known format could parse, kept as-is."""
    text: str

    def render(self) -> str:
        return self.text


@dataclass(frozen=True)
class MissingDate:
    """No date information available."""

    def render(self) -> str:
        return NOT_SPECIFIED


DateValue = Union[IsoDate, RollingDeadline, RawDate, MissingDate]


@dataclass(frozen=True)
class ProposalRecord:
    """
    A single funding proposal extracted from a source document.

    Records are immutable. Identity for deduplication is the
    (title, agency, link) triple; everything else is informational.
    """

    title: str
    agency: str
    link: str
    source_url: str

    start_date: DateValue = field(default_factory=MissingDate)
    end_date: DateValue = field(default_factory=MissingDate)

    # Metadata
    extracted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    strategy: str = ""

    def __post_init__(self):
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError("Proposal title must not be blank")

    @property
    def identity(self) -> tuple[str, str, str]:
        """Deduplication key."""
        return (self.title, self.agency, self.link)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "title": self.title,
            "agency": self.agency,
            "startDate": self.start_date.render(),
            "endDate": self.end_date.render(),
            "link": self.link,
            "sourceUrl": self.source_url,
            "extractedAt": self.extracted_at.isoformat(),
        }
