"""
Core layer - stable foundation for the scraping system.

Components:
- models: ProposalRecord and DateValue variants
- agency: URL -> agency name resolution
- normalizer: free-text date normalization
- deduplicator: identity-triple deduplication
- sorter: deadline ordering
- http_client: markdown document sources
"""

from .models import (
    ProposalRecord,
    DateValue,
    IsoDate,
    RollingDeadline,
    RawDate,
    MissingDate,
)
from .agency import AgencyResolver, DEFAULT_AGENCIES
from .normalizer import normalize_date, clean_text
from .deduplicator import Deduplicator, dedupe
from .sorter import sort_by_deadline, parse_deadline

__all__ = [
    "ProposalRecord",
    "DateValue",
    "IsoDate",
    "RollingDeadline",
    "RawDate",
    "MissingDate",
    "AgencyResolver",
    "DEFAULT_AGENCIES",
    "normalize_date",
    "clean_text",
    "Deduplicator",
    "dedupe",
    "sort_by_deadline",
    "parse_deadline",
]
