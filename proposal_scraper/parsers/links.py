"""
Inline link extraction.

Every markdown link whose text looks like a funding opportunity
becomes a candidate. No dates are available from a bare link.
"""

from proposal_scraper.core.models import ProposalRecord

from .base import MARKDOWN_LINK, ExtractionContext, ExtractionStrategy


class LinkStrategy(ExtractionStrategy):
    """Extract records from [text](url) links."""

    name = "link"

    def extract(
        self,
        markdown: str,
        source_url: str,
        context: ExtractionContext,
    ) -> list[ProposalRecord]:
        rules = context.rules
        records = []

        for match in MARKDOWN_LINK.finditer(markdown):
            text, link = match.group(1), match.group(2)

            if rules.is_navigation(text):
                continue
            if len(text) < rules.min_link_text_length:
                continue
            if not rules.has_link_keyword(text):
                continue

            record = self.build_record(context, source_url, title=text, link=link)
            if record:
                records.append(record)

        return records
