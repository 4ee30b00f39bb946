"""
Extraction strategies for markdown documents.

Strategies:
- TableStrategy: rows of markdown tables
- LinkStrategy: inline [text](url) links
- TextStrategy: announcement-like free-text lines
"""

from .base import (
    ExtractionContext,
    ExtractionRules,
    ExtractionStrategy,
    LinkResolutionError,
    resolve_link,
)
from .links import LinkStrategy
from .markdown import MarkdownExtractor, default_strategies
from .table import TableStrategy
from .text import TextStrategy

__all__ = [
    "ExtractionContext",
    "ExtractionRules",
    "ExtractionStrategy",
    "LinkResolutionError",
    "resolve_link",
    "LinkStrategy",
    "TableStrategy",
    "TextStrategy",
    "MarkdownExtractor",
    "default_strategies",
]
