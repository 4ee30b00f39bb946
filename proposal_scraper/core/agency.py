"""
Agency resolution by source URL.

Maps a source URL to the human-readable name of the funding agency
that publishes it. Pairs are checked in priority order; the first
substring found in the URL wins.
"""

from typing import Iterable, Optional

import structlog

from .models import UNKNOWN_AGENCY

logger = structlog.get_logger(__name__)


DEFAULT_AGENCIES: tuple[tuple[str, str], ...] = (
    ("dst.gov.in", "DST - Department of Science & Technology"),
    ("dbtindia.gov.in", "DBT - Department of Biotechnology"),
    ("birac.nic.in", "BIRAC - Biotechnology Industry Research Assistance Council"),
    ("icmr.gov.in", "ICMR - Indian Council of Medical Research"),
    ("serb.gov.in", "SERB - Science and Engineering Research Board"),
    ("icssr.org", "ICSSR - Indian Council of Social Science Research"),
    ("cefipra.org", "CEFIPRA - Indo-French Centre for Scientific Research"),
    ("igstc.org", "IGSTC - Indo-German Science & Technology Centre"),
    ("tdb.gov.in", "TDB - Technology Development Board"),
    ("ugc.ac.in", "UGC - University Grants Commission"),
    ("sparc.iitkgp.ac.in", "SPARC - Scheme for Promotion of Academic and Research Collaboration"),
    ("nasi.org.in", "NASI - National Academy of Sciences India"),
    ("insaindia.res.in", "INSA - Indian National Science Academy"),
)


class AgencyResolver:
    """
    Resolve agency names from source URLs.

    Usage:
        resolver = AgencyResolver()
        resolver.resolve("https://dst.gov.in/call-for-proposals")
        # -> "DST - Department of Science & Technology"
    """

    def __init__(
        self,
        mappings: Optional[Iterable[tuple[str, str]]] = None,
        unknown: str = UNKNOWN_AGENCY,
    ):
        """
        Initialize resolver.

        Args:
            mappings: Ordered (substring, agency name) pairs
                      (defaults to DEFAULT_AGENCIES)
            unknown: Name returned when nothing matches
        """
        if mappings is None:
            mappings = DEFAULT_AGENCIES
        self.mappings = tuple((str(sub), str(name)) for sub, name in mappings)
        self.unknown = unknown

    def resolve(self, source_url: str) -> str:
        """
        Return the agency name for a source URL.

        Args:
            source_url: Any URL string

        Returns:
            Agency name, or the unknown sentinel
        """
        url = source_url or ""
        for substring, name in self.mappings:
            if substring and substring in url:
                return name

        logger.debug("agency_unknown", url=url)
        return self.unknown
