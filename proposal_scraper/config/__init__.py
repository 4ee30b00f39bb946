"""
Configuration module for the proposal scraper.

Provides:
- YAML config loading with validation
- Source URLs, agency mappings, extraction keyword lists
- Environment variable substitution
"""

from .loader import ConfigLoader, ScraperConfig, ScrapeServiceConfig, load_config

__all__ = ["ConfigLoader", "ScraperConfig", "ScrapeServiceConfig", "load_config"]
