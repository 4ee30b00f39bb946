"""
Orchestrator for the proposal scraping pipeline.

Coordinates:
- Document fetching (one source at a time)
- Markdown extraction
- Deduplication and deadline ordering
- Output generation
"""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

import structlog

from .core.deduplicator import dedupe
from .core.http_client import DocumentSource
from .core.models import ProposalRecord
from .core.sorter import sort_by_deadline
from .parsers.markdown import MarkdownExtractor

logger = structlog.get_logger(__name__)


class ProposalScraper:
    """
    Orchestrator for the scraping pipeline.

    A failing or empty document is logged and skipped; the rest of
    the batch is still processed.
    """

    def __init__(
        self,
        source: Optional[DocumentSource] = None,
        extractor: Optional[MarkdownExtractor] = None,
        request_delay: float = 1.0,
        output_dir: str = "output",
    ):
        """
        Initialize scraper.

        Args:
            source: Where markdown comes from (required for run())
            extractor: Markdown extractor (defaults to all strategies)
            request_delay: Seconds to wait between documents
            output_dir: Directory for output files
        """
        self.source = source
        self.extractor = extractor or MarkdownExtractor()
        self.request_delay = request_delay
        self.output_dir = Path(output_dir)

        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> dict:
        return {
            "sources_processed": 0,
            "sources_failed": 0,
            "sources_empty": 0,
            "candidates_extracted": 0,
            "duplicates_removed": 0,
            "proposals": 0,
        }

    async def run(self, urls: Iterable[str]) -> list[ProposalRecord]:
        """
        Fetch, extract, deduplicate and sort.

        Args:
            urls: Source page URLs, processed in order

        Returns:
            Unique proposals ordered by deadline
        """
        if self.source is None:
            raise RuntimeError("No document source configured")

        urls = list(urls)
        self.stats = self._empty_stats()

        logger.info("starting_scrape", sources=len(urls))

        candidates: list[ProposalRecord] = []

        async with self.source:
            for i, url in enumerate(urls):
                if i and self.request_delay > 0:
                    await asyncio.sleep(self.request_delay)

                candidates.extend(await self._process_source(url))

        return self._finalize(candidates)

    async def _process_source(self, url: str) -> list[ProposalRecord]:
        """
        Fetch and extract a single source.

        Args:
            url: Source page URL

        Returns:
            Candidate records (empty on failure)
        """
        logger.info("processing_source", source=url)

        try:
            markdown = await self.source.fetch(url)
        except Exception as e:
            logger.warning("fetch_failed", source=url, error=str(e))
            self.stats["sources_failed"] += 1
            return []

        if not markdown:
            logger.warning("no_content", source=url)
            self.stats["sources_empty"] += 1
            return []

        return self._extract(markdown, url)

    def _extract(self, markdown: str, url: str) -> list[ProposalRecord]:
        try:
            records = self.extractor.extract(markdown, url)
        except Exception as e:
            logger.error("extraction_failed", source=url, error=str(e))
            self.stats["sources_failed"] += 1
            return []

        self.stats["sources_processed"] += 1
        self.stats["candidates_extracted"] += len(records)

        if not records:
            logger.info("no_proposals_found", source=url)

        return records

    def process_documents(
        self,
        documents: Iterable[tuple[str, str]],
    ) -> list[ProposalRecord]:
        """
        Run the pipeline over already-fetched documents.

        Args:
            documents: (markdown, source_url) pairs

        Returns:
            Unique proposals ordered by deadline
        """
        self.stats = self._empty_stats()

        candidates: list[ProposalRecord] = []
        for markdown, url in documents:
            if not markdown:
                logger.warning("no_content", source=url)
                self.stats["sources_empty"] += 1
                continue
            candidates.extend(self._extract(markdown, url))

        return self._finalize(candidates)

    def _finalize(self, candidates: list[ProposalRecord]) -> list[ProposalRecord]:
        unique = dedupe(candidates)
        proposals = sort_by_deadline(unique)

        self.stats["duplicates_removed"] = len(candidates) - len(unique)
        self.stats["proposals"] = len(proposals)

        logger.info("scrape_complete", **self.stats)

        return proposals

    def _output_path(self, filename: Optional[str], suffix: str) -> Path:
        if not filename:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"proposals_{timestamp}.{suffix}"

        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / filename

    def save_json(self, records: list[ProposalRecord], filename: Optional[str] = None) -> str:
        """
        Save proposals to a JSON array file.

        Args:
            records: Proposals to save
            filename: Optional filename (auto-generated if not provided)

        Returns:
            Path to saved file
        """
        filepath = self._output_path(filename, "json")

        data = [r.to_dict() for r in records]

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.info("saved_json", path=str(filepath), proposals=len(records))
        return str(filepath)

    def save_jsonl(self, records: list[ProposalRecord], filename: Optional[str] = None) -> str:
        """
        Save proposals to JSONL file (one JSON per line).

        Args:
            records: Proposals to save
            filename: Optional filename

        Returns:
            Path to saved file
        """
        filepath = self._output_path(filename, "jsonl")

        with open(filepath, "w", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")

        logger.info("saved_jsonl", path=str(filepath), proposals=len(records))
        return str(filepath)
