"""Tests for agency resolution."""

from proposal_scraper.core.agency import AgencyResolver, DEFAULT_AGENCIES


class TestAgencyResolver:
    """Tests for AgencyResolver class."""

    def test_default_agency(self):
        """Test built-in mapping."""
        resolver = AgencyResolver()

        assert resolver.resolve("https://dst.gov.in/call-for-proposals") == (
            "DST - Department of Science & Technology"
        )
        assert resolver.resolve("https://birac.nic.in/cfp.php") == (
            "BIRAC - Biotechnology Industry Research Assistance Council"
        )

    def test_subdomain_matches(self):
        """Test that substrings match anywhere in the URL."""
        resolver = AgencyResolver()

        assert resolver.resolve("https://www.icmr.gov.in/whatnew.html") == (
            "ICMR - Indian Council of Medical Research"
        )

    def test_unknown_agency(self):
        """Test fallback for unmatched URLs."""
        resolver = AgencyResolver()

        assert resolver.resolve("https://vit.ac.in/research/call-for-proposals") == "Unknown Agency"

    def test_empty_url(self):
        """Test empty input is total."""
        assert AgencyResolver().resolve("") == "Unknown Agency"

    def test_first_match_wins(self):
        """Test priority order beats specificity."""
        resolver = AgencyResolver([
            ("gov.in", "Generic Government"),
            ("dst.gov.in", "DST"),
        ])

        assert resolver.resolve("https://dst.gov.in/") == "Generic Government"

    def test_custom_unknown(self):
        """Test custom unknown sentinel."""
        resolver = AgencyResolver([], unknown="N/A")

        assert resolver.resolve("https://dst.gov.in/") == "N/A"

    def test_mappings_are_immutable(self):
        """Test mappings are copied into a tuple."""
        pairs = [("example.org", "Example")]
        resolver = AgencyResolver(pairs)
        pairs.append(("other.org", "Other"))

        assert resolver.mappings == (("example.org", "Example"),)

    def test_default_table_size(self):
        """Test all built-in agencies are present."""
        assert len(DEFAULT_AGENCIES) == 13
