"""
Table row extraction.

Picks proposals out of markdown tables whose header mentions a
title, call or scheme column.
"""

import re
from typing import Optional

from proposal_scraper.core.models import ProposalRecord
from proposal_scraper.core.normalizer import normalize_date

from .base import MARKDOWN_LINK, ExtractionContext, ExtractionStrategy

SEPARATOR_LINE = re.compile(r"^\|[\s\-|]+\|$")


def split_cells(line: str) -> list[str]:
    """Split a pipe row into trimmed, non-empty cells."""
    return [cell.strip() for cell in line.split("|") if cell.strip()]


class TableStrategy(ExtractionStrategy):
    """
    Extract one record per table row.

    Row layout: title, (anything), start date, end date. The title
    cell may hold a markdown link, which becomes the record link.
    """

    name = "table"

    def extract(
        self,
        markdown: str,
        source_url: str,
        context: ExtractionContext,
    ) -> list[ProposalRecord]:
        records = []
        in_table = False
        headers: list[str] = []

        for raw_line in markdown.split("\n"):
            line = raw_line.strip()

            if context.rules.is_table_header(line):
                headers = split_cells(line)
                in_table = True
                self.logger.debug("table_header", source=source_url, headers=headers)
                continue

            if SEPARATOR_LINE.match(line):
                continue

            if in_table and "|" in line:
                record = self._parse_row(split_cells(line), source_url, context)
                if record:
                    records.append(record)

            if in_table and line and "|" not in line:
                in_table = False

        return records

    def _parse_row(
        self,
        cells: list[str],
        source_url: str,
        context: ExtractionContext,
    ) -> Optional[ProposalRecord]:
        if len(cells) < 3:
            return None

        title = cells[0]
        link = None
        match = MARKDOWN_LINK.search(title)
        if match:
            title, link = match.group(1), match.group(2)

        return self.build_record(
            context,
            source_url,
            title=title,
            link=link,
            start_date=normalize_date(cells[2]),
            end_date=normalize_date(cells[3] if len(cells) > 3 else None),
        )
