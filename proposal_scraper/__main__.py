"""
CLI entry point for proposal-scraper.

Usage:
    python -m proposal_scraper
    python -m proposal_scraper --sources dst.gov.in,birac
    python -m proposal_scraper --document https://dst.gov.in/call-for-proposals=dst.md
"""

import argparse
import asyncio
import logging
import sys

import structlog

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(level: str = "INFO", json_output: bool = False):
    """Configure structured logging."""
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    if json_output:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def parse_document_arg(value: str) -> tuple[str, str]:
    """Split a URL=PATH pair; the last '=' separates them."""
    url, sep, path = value.rpartition("=")
    if not sep or not url or not path:
        raise argparse.ArgumentTypeError(f"Expected URL=PATH, got {value!r}")
    return url, path


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Research funding proposal scraper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scrape all configured sources (needs FIRECRAWL_API_KEY)
  python -m proposal_scraper

  # Scrape sources whose URL contains one of the given substrings
  python -m proposal_scraper --sources dst.gov.in,birac

  # Offline: extract from markdown files already on disk
  python -m proposal_scraper --document https://dst.gov.in/call-for-proposals=dst.md

  # Use custom config file
  python -m proposal_scraper --config /path/to/sources.yml
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to sources.yml config file",
    )

    parser.add_argument(
        "--sources",
        type=str,
        help="Comma-separated URL substrings selecting configured sources (default: all)",
    )

    parser.add_argument(
        "--document",
        action="append",
        type=parse_document_arg,
        default=[],
        metavar="URL=PATH",
        help="Extract from a local markdown file instead of fetching (repeatable)",
    )

    parser.add_argument(
        "--output",
        type=str,
        default="output",
        help="Output directory (default: output)",
    )

    parser.add_argument(
        "--output-format",
        choices=["json", "jsonl", "both"],
        default="json",
        help="Output format (default: json)",
    )

    parser.add_argument(
        "--delay",
        type=float,
        help="Seconds between documents (default: from config)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs as JSON (for production)",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    return parser.parse_args(argv)


def select_sources(urls, selectors):
    """Keep URLs containing any of the selector substrings."""
    if not selectors:
        return list(urls)
    return [url for url in urls if any(s in url for s in selectors)]


async def main_async(args):
    """Async main function."""
    from .config.loader import load_config
    from .core.agency import AgencyResolver
    from .core.http_client import LocalDocumentSource, ScrapeServiceClient
    from .orchestrator import ProposalScraper
    from .parsers.markdown import MarkdownExtractor

    logger = structlog.get_logger(__name__)

    config = load_config(args.config)

    if args.document:
        source = LocalDocumentSource(dict(args.document))
        urls = source.urls
    else:
        service = config.scrape_service
        if not service.api_key:
            logger.warning("scrape_api_key_missing")
        source = ScrapeServiceClient(
            api_key=service.api_key,
            api_url=service.api_url,
            timeout_ms=service.timeout_ms,
            only_main_content=service.only_main_content,
        )
        selectors = [s.strip() for s in args.sources.split(",")] if args.sources else None
        urls = select_sources(config.sources, selectors)

    delay = args.delay if args.delay is not None else config.request_delay
    if args.document:
        delay = 0.0

    extractor = MarkdownExtractor(
        resolver=AgencyResolver(config.agencies),
        rules=config.rules,
    )
    scraper = ProposalScraper(
        source=source,
        extractor=extractor,
        request_delay=delay,
        output_dir=args.output,
    )

    proposals = await scraper.run(urls)

    if proposals:
        if args.output_format in ["json", "both"]:
            scraper.save_json(proposals)

        if args.output_format in ["jsonl", "both"]:
            scraper.save_jsonl(proposals)

        logger.info(
            "scraping_complete",
            total_proposals=len(proposals),
            output_dir=args.output,
        )
    else:
        logger.warning("no_proposals_extracted")

    return proposals


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    # Version check
    if args.version:
        from . import __version__
        print(f"proposal-scraper {__version__}")
        sys.exit(0)

    setup_logging(args.log_level, args.json_logs)

    try:
        proposals = asyncio.run(main_async(args))
        sys.exit(0 if proposals else 1)
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        logger = structlog.get_logger(__name__)
        logger.exception("fatal_error", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
