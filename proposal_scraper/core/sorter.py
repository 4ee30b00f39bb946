"""
Deadline ordering for proposals.

End dates are parsed generically with dateutil rather than with the
normalizer's format list, so raw text like "March 31 2025" still sorts.
"""

from datetime import date, datetime
from typing import Iterable, Optional

from dateutil import parser as date_parser

from .models import DateValue, IsoDate, MissingDate, ProposalRecord, RollingDeadline


def parse_deadline(value: DateValue) -> Optional[date]:
    """
    Parse an end date for ordering.

    Args:
        value: Normalized end date

    Returns:
        date, or None when the value has no usable date. Raw text
        must name a year; "March 31" or "10 am" are unparseable.
    """
    if isinstance(value, IsoDate):
        return value.value
    if isinstance(value, (RollingDeadline, MissingDate)):
        return None

    text = value.render()
    if not text:
        return None

    # Text without a year resolves differently against two default years
    try:
        parsed = date_parser.parse(text, default=datetime(2000, 1, 1))
        check = date_parser.parse(text, default=datetime(2001, 1, 1))
    except (ValueError, OverflowError):
        return None

    if parsed.year != check.year:
        return None
    return parsed.date()


def sort_by_deadline(records: Iterable[ProposalRecord]) -> list[ProposalRecord]:
    """
    Sort records by end date, earliest first.

    Records without a parseable end date go last, keeping their
    relative order. The sort is stable.

    Args:
        records: Records to order

    Returns:
        New sorted list
    """
    def sort_key(record: ProposalRecord) -> tuple[int, date]:
        deadline = parse_deadline(record.end_date)
        if deadline is None:
            return (1, date.min)
        return (0, deadline)

    return sorted(records, key=sort_key)
