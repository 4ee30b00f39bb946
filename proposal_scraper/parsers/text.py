"""
Free-text sentence extraction.

Plain paragraphs announcing an opportunity ("Call for proposals
is now open...") become candidates titled by the sentence itself.
"""

import re

from proposal_scraper.core.models import ProposalRecord

from .base import ExtractionContext, ExtractionStrategy

BULLET = re.compile(r"^[*\-+]\s")


class TextStrategy(ExtractionStrategy):
    """Extract records from announcement-like lines."""

    name = "text"

    def extract(
        self,
        markdown: str,
        source_url: str,
        context: ExtractionContext,
    ) -> list[ProposalRecord]:
        rules = context.rules
        records = []

        for raw_line in markdown.split("\n"):
            line = raw_line.strip()
            if not line:
                continue

            # Skip short lines, headings and list items
            if len(line) < rules.min_line_length or line.startswith("#") or BULLET.match(line):
                continue

            if not rules.has_announcement(line):
                continue

            record = self.build_record(
                context,
                source_url,
                title=line[: rules.max_title_length],
            )
            if record:
                records.append(record)

        return records
