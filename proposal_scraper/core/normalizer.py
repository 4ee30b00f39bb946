"""
Normalization utilities for proposal data.

Handles:
- Free-text deadlines (15/08/2024, 15 Aug 2024, August 15, 2024)
- Rolling / open-ended deadline markers
- Whitespace cleanup for titles and cells
"""

import re
from datetime import datetime
from typing import Any

import structlog

from .models import DateValue, IsoDate, MissingDate, RawDate, RollingDeadline

logger = structlog.get_logger(__name__)


ROLLING_PATTERN = re.compile(r"rolling|ongoing|continuous|open|throughout", re.IGNORECASE)

# Tried in order, first valid date wins. Day-first formats come before
# month-first ones, so 01/02/2025 is 1 February.
DATE_FORMATS = (
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%m/%d/%Y",
    "%Y-%m-%d",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d/%m/%y",
    "%d-%m-%y",
)


def clean_text(text: str) -> str:
    """
    Collapse whitespace runs to single spaces and strip.

    Args:
        text: Raw text

    Returns:
        Cleaned text ("" for empty input)
    """
    if not text:
        return ""

    return re.sub(r"\s+", " ", text).strip()


def normalize_date(raw: Any) -> DateValue:
    """
    Normalize a free-text date expression.

    Args:
        raw: Text from a table cell or similar (non-strings are treated as missing)

    Returns:
        IsoDate on the first format that parses, RollingDeadline for
        open-ended markers, RawDate with the cleaned text when nothing
        parses, MissingDate for empty input
    """
    if not raw or not isinstance(raw, str):
        return MissingDate()

    cleaned = clean_text(raw)
    if not cleaned:
        return MissingDate()

    if ROLLING_PATTERN.search(cleaned):
        return RollingDeadline()

    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(cleaned, fmt)
        except ValueError:
            continue
        return IsoDate(parsed.date())

    logger.debug("date_unparsed", text=cleaned)
    return RawDate(cleaned)
