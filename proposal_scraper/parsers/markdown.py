"""
Markdown document extractor.

Runs every extraction strategy over a document and concatenates the
results. Strategies overlap freely; duplicates are removed later,
once all documents have been processed.
"""

from typing import Optional, Sequence

import structlog

from proposal_scraper.core.agency import AgencyResolver
from proposal_scraper.core.models import ProposalRecord

from .base import ExtractionContext, ExtractionRules, ExtractionStrategy
from .links import LinkStrategy
from .table import TableStrategy
from .text import TextStrategy

logger = structlog.get_logger(__name__)


def default_strategies() -> list[ExtractionStrategy]:
    """Table, link and free-text strategies, in that order."""
    return [TableStrategy(), LinkStrategy(), TextStrategy()]


class MarkdownExtractor:
    """
    Extract proposal candidates from markdown documents.

    Usage:
        extractor = MarkdownExtractor()
        records = extractor.extract(markdown, "https://dst.gov.in/call-for-proposals")
    """

    def __init__(
        self,
        strategies: Optional[Sequence[ExtractionStrategy]] = None,
        resolver: Optional[AgencyResolver] = None,
        rules: Optional[ExtractionRules] = None,
    ):
        """
        Initialize extractor.

        Args:
            strategies: Strategies to run (defaults to table, link, text)
            resolver: Agency resolver (defaults to built-in agencies)
            rules: Keyword lists and limits (defaults to ExtractionRules())
        """
        self.strategies = list(strategies) if strategies is not None else default_strategies()
        self.context = ExtractionContext(
            resolver=resolver if resolver is not None else AgencyResolver(),
            rules=rules if rules is not None else ExtractionRules(),
        )

    def extract(self, markdown: str, source_url: str) -> list[ProposalRecord]:
        """
        Extract candidates from one document.

        Args:
            markdown: Document text
            source_url: Document URL

        Returns:
            Concatenated candidates of all strategies
        """
        if not markdown or not markdown.strip():
            logger.warning("empty_document", source=source_url)
            return []

        records: list[ProposalRecord] = []
        for strategy in self.strategies:
            found = strategy.extract(markdown, source_url, self.context)
            logger.debug(
                "strategy_complete",
                source=source_url,
                strategy=strategy.name,
                count=len(found),
            )
            records.extend(found)

        logger.info("document_extracted", source=source_url, count=len(records))
        return records
