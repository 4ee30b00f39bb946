"""
Proposal Scraper - research funding calls from agency web pages.

Architecture:
- core/: Stable foundation (models, normalizer, dedupe, sorting, sources)
- parsers/: Extraction strategies over markdown documents
- config/: YAML-driven sources, agencies and keyword lists
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
