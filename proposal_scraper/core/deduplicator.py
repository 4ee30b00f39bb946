"""
Proposal deduplication by identity triple.

Two records with equal (title, agency, link) are interchangeable;
only the first one encountered is kept.
"""

from typing import Iterable, Optional

import structlog

from .models import ProposalRecord

logger = structlog.get_logger(__name__)


class Deduplicator:
    """
    Order-preserving deduplicator.

    Tracks seen identity triples so records can be fed in one at a
    time, e.g. while documents are still being processed.
    """

    def __init__(self):
        """Initialize deduplicator with empty index."""
        self._seen: set[tuple[str, str, str]] = set()
        self._records: list[ProposalRecord] = []
        self.duplicates = 0

    def is_duplicate(self, record: ProposalRecord) -> bool:
        """Check whether an equal record was already kept."""
        return record.identity in self._seen

    def process(self, record: ProposalRecord) -> Optional[ProposalRecord]:
        """
        Process record through deduplication.

        Args:
            record: Record to process

        Returns:
            The record if it is new, None if it duplicates a kept one
        """
        if self.is_duplicate(record):
            self.duplicates += 1
            logger.debug(
                "proposal_skipped_duplicate",
                title=record.title[:50],
                link=record.link,
            )
            return None

        self._seen.add(record.identity)
        self._records.append(record)
        return record

    def get_all(self) -> list[ProposalRecord]:
        """Get all unique records in first-seen order."""
        return list(self._records)

    def clear(self) -> None:
        """Clear deduplication index."""
        self._seen.clear()
        self._records.clear()
        self.duplicates = 0

    def __len__(self) -> int:
        """Return number of unique records."""
        return len(self._records)


def dedupe(records: Iterable[ProposalRecord]) -> list[ProposalRecord]:
    """
    Drop records whose identity triple was already seen.

    Args:
        records: Candidate records in extraction order

    Returns:
        First occurrence of each (title, agency, link), input order kept
    """
    deduplicator = Deduplicator()
    for record in records:
        deduplicator.process(record)

    if deduplicator.duplicates:
        logger.info(
            "duplicates_removed",
            removed=deduplicator.duplicates,
            remaining=len(deduplicator),
        )

    return deduplicator.get_all()
