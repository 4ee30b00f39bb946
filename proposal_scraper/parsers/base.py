"""
Base class for extraction strategies.

Strategies implement one heuristic pass over a markdown document,
converting matching fragments into ProposalRecord candidates.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional
from urllib.parse import urljoin, urlparse

import structlog

from proposal_scraper.core.agency import AgencyResolver
from proposal_scraper.core.models import DateValue, MissingDate, ProposalRecord

logger = structlog.get_logger(__name__)


# [visible text](url)
MARKDOWN_LINK = re.compile(r"\[(.+?)\]\((.+?)\)")


class LinkResolutionError(ValueError):
    """Raised when a link cannot be made absolute."""


@dataclass(frozen=True)
class ExtractionRules:
    """
    Keyword lists and limits shared by the strategies.

    Immutable so one instance can be handed to every strategy.
    """

    table_header_words: tuple[str, ...] = ("Title", "Call", "Scheme")
    navigation_words: tuple[str, ...] = (
        "home", "menu", "login", "about", "contact", "privacy", "terms",
    )
    link_keywords: tuple[str, ...] = (
        "call", "proposal", "funding", "fellowship", "grant", "award",
        "scheme", "program", "research", "phd", "postdoc", "scientist",
        "innovation", "startup",
    )
    text_patterns: tuple[str, ...] = (
        r"call.*proposal",
        r"funding.*available",
        r"fellowship.*application",
        r"grant.*deadline",
        r"research.*opportunity",
        r"phd.*position",
        r"postdoc.*opening",
    )
    min_link_text_length: int = 10
    min_line_length: int = 20
    max_title_length: int = 200

    def __post_init__(self):
        for pattern in self.text_patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid text pattern {pattern!r}: {e}") from e

    def is_table_header(self, line: str) -> bool:
        """Header words are matched case-sensitively."""
        return "|" in line and any(word in line for word in self.table_header_words)

    def is_navigation(self, text: str) -> bool:
        return _matches_any(self.navigation_words, text, escape=True)

    def has_link_keyword(self, text: str) -> bool:
        return _matches_any(self.link_keywords, text, escape=True)

    def has_announcement(self, text: str) -> bool:
        return _matches_any(self.text_patterns, text, escape=False)


def _matches_any(patterns: tuple[str, ...], text: str, escape: bool) -> bool:
    if not patterns:
        return False
    parts = [re.escape(p) if escape else p for p in patterns]
    return re.search("|".join(parts), text, re.IGNORECASE) is not None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ExtractionContext:
    """Collaborators passed to every strategy."""
    resolver: AgencyResolver = field(default_factory=AgencyResolver)
    rules: ExtractionRules = field(default_factory=ExtractionRules)
    clock: Callable[[], datetime] = _utc_now


def resolve_link(link: str, source_url: str) -> str:
    """
    Make a link absolute against the source document's origin.

    Args:
        link: Absolute or relative URL from the document
        source_url: URL of the document

    Returns:
        Absolute URL

    Raises:
        LinkResolutionError: If the source URL has no origin or the
            result is still not absolute
    """
    link = link.strip()
    parsed = urlparse(link)
    if parsed.scheme and parsed.netloc:
        return link

    base = urlparse(source_url)
    if not base.scheme or not base.netloc:
        raise LinkResolutionError(f"Cannot resolve {link!r}: no origin in {source_url!r}")

    resolved = urljoin(f"{base.scheme}://{base.netloc}/", link)
    result = urlparse(resolved)
    if not result.scheme or not result.netloc:
        raise LinkResolutionError(f"Cannot resolve {link!r} against {source_url!r}")

    return resolved


class ExtractionStrategy(ABC):
    """
    Abstract base class for extraction strategies.

    Each strategy is total: malformed fragments are dropped one
    candidate at a time, never failing the whole document.
    """

    name = "base"

    def __init__(self):
        self.logger = logger.bind(strategy=self.name)

    @abstractmethod
    def extract(
        self,
        markdown: str,
        source_url: str,
        context: ExtractionContext,
    ) -> list[ProposalRecord]:
        """
        Extract candidate records from a document.

        Args:
            markdown: Document text
            source_url: Document URL
            context: Resolver, rules and clock

        Returns:
            Candidate records, possibly empty
        """
        pass

    def build_record(
        self,
        context: ExtractionContext,
        source_url: str,
        title: str,
        link: Optional[str] = None,
        start_date: Optional[DateValue] = None,
        end_date: Optional[DateValue] = None,
    ) -> Optional[ProposalRecord]:
        """
        Create a record, or None when the candidate is malformed.

        Args:
            context: Extraction context
            source_url: Document URL
            title: Proposal title
            link: Link from the document (defaults to source_url)
            start_date: Normalized start date
            end_date: Normalized end date

        Returns:
            ProposalRecord or None
        """
        try:
            return ProposalRecord(
                title=title,
                agency=context.resolver.resolve(source_url),
                link=resolve_link(link, source_url) if link else source_url,
                source_url=source_url,
                start_date=start_date or MissingDate(),
                end_date=end_date or MissingDate(),
                extracted_at=context.clock(),
                strategy=self.name,
            )
        except ValueError as e:
            self.logger.warning(
                "candidate_dropped",
                source=source_url,
                title=(title or "")[:50],
                error=str(e),
            )
            return None
