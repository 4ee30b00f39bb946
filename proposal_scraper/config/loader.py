"""
YAML configuration loader with validation.

Loads source URLs, agency mappings and extraction keyword lists with:
- Environment variable substitution
- Schema validation
- Default values
"""

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml
import structlog

from proposal_scraper.core.agency import DEFAULT_AGENCIES
from proposal_scraper.core.http_client import DEFAULT_API_URL
from proposal_scraper.parsers.base import ExtractionRules

logger = structlog.get_logger(__name__)


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variables in text.

    Supports formats:
    - ${VAR_NAME} - required, warning and empty string if missing
    - ${VAR_NAME:-default} - optional with default

    Args:
        text: Text with env var placeholders

    Returns:
        Text with substituted values
    """
    def replace(match):
        var_expr = match.group(1)
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)
        else:
            value = os.getenv(var_expr)
            if value is None:
                logger.warning("env_var_not_set", var=var_expr)
                return ""
            return value

    return re.sub(r"\$\{([^}]+)\}", replace, text)


@dataclass(frozen=True)
class ScrapeServiceConfig:
    """Settings for the remote markdown scrape service."""
    api_url: str = DEFAULT_API_URL
    api_key: str = ""
    timeout_ms: int = 15000
    only_main_content: bool = True


@dataclass(frozen=True)
class ScraperConfig:
    """Complete scraper configuration."""
    sources: tuple[str, ...] = ()
    agencies: tuple[tuple[str, str], ...] = DEFAULT_AGENCIES
    rules: ExtractionRules = field(default_factory=ExtractionRules)
    scrape_service: ScrapeServiceConfig = field(default_factory=ScrapeServiceConfig)
    request_delay: float = 1.0


class ConfigLoader:
    """
    Configuration loader for the proposal scraper.

    Loads YAML config files and validates against expected schema.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
                       (defaults to package config directory)
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = Path(__file__).parent

    def load_file(self, filename: str) -> dict:
        """
        Load YAML config file.

        Args:
            filename: Config file name (relative to config_dir)

        Returns:
            Parsed config dict
        """
        filepath = self.config_dir / filename

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        logger.info("loading_config", file=str(filepath))

        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()

        content = substitute_env_vars(content)
        config = yaml.safe_load(content)

        if config is not None and not isinstance(config, dict):
            raise ValueError(f"Config root must be a mapping: {filepath}")

        return config or {}

    def load(self, filename: str = "sources.yml") -> ScraperConfig:
        """
        Load full scraper configuration.

        Args:
            filename: Config file name

        Returns:
            ScraperConfig object
        """
        data = self.load_file(filename)

        sources = tuple(str(url).strip() for url in data.get("sources", []) if url)
        agencies = self._parse_agencies(data.get("agencies"))
        rules = self._parse_rules(data.get("extraction") or {})
        service = self._parse_service(data.get("scrape_service") or {})

        config = ScraperConfig(
            sources=sources,
            agencies=agencies,
            rules=rules,
            scrape_service=service,
            request_delay=float(data.get("request_delay", 1.0)),
        )

        logger.info(
            "config_loaded",
            sources=len(config.sources),
            agencies=len(config.agencies),
        )
        return config

    def _parse_agencies(self, entries: Optional[list]) -> tuple[tuple[str, str], ...]:
        """
        Parse ordered agency mappings.

        Invalid entries are skipped; a missing section falls back to
        the built-in table.
        """
        if entries is None:
            return DEFAULT_AGENCIES

        agencies = []
        for entry in entries:
            try:
                agencies.append(self._parse_agency(entry))
            except (ValueError, TypeError, AttributeError) as e:
                logger.error("agency_load_failed", entry=str(entry), error=str(e))

        return tuple(agencies)

    def _parse_agency(self, data: dict) -> tuple[str, str]:
        """
        Parse a single {match, name} entry.

        Raises:
            ValueError: If required fields missing
        """
        required = ["match", "name"]
        for key in required:
            if not data.get(key):
                raise ValueError(f"Missing required field: {key}")

        return (str(data["match"]), str(data["name"]))

    def _parse_rules(self, data: dict) -> ExtractionRules:
        """Build ExtractionRules, overriding only the keys present."""
        overrides = {}
        for rule_field in fields(ExtractionRules):
            if rule_field.name not in data:
                continue
            value = data[rule_field.name]
            if isinstance(value, list):
                overrides[rule_field.name] = tuple(str(v) for v in value)
            else:
                overrides[rule_field.name] = int(value)

        return ExtractionRules(**overrides)

    def _parse_service(self, data: dict) -> ScrapeServiceConfig:
        """Build scrape service settings."""
        return ScrapeServiceConfig(
            api_url=data.get("api_url") or DEFAULT_API_URL,
            api_key=data.get("api_key") or "",
            timeout_ms=int(data.get("timeout_ms", 15000)),
            only_main_content=bool(data.get("only_main_content", True)),
        )


def load_config(config_path: Optional[str] = None) -> ScraperConfig:
    """
    Convenience function to load the scraper config.

    Args:
        config_path: Optional path to sources.yml

    Returns:
        ScraperConfig object
    """
    if config_path:
        config_dir = str(Path(config_path).parent)
        filename = Path(config_path).name
        loader = ConfigLoader(config_dir)
        return loader.load(filename)
    else:
        loader = ConfigLoader()
        return loader.load()
