"""
SERP Extraction Module

Rule-based extraction of structured results from Google SERP HTML.

Components:
- serp_nodes.py: Immutable markup tree with source offsets
- serp_select.py: Selector fallback and text helpers
- serp_extract.py: Declarative extraction configs
- serp_pipeline.py: Result pipeline composition
- serp_segment.py: Container discovery and overlap filtering
- serp_result.py: Per-result assembly
- serp_features.py: Feature collaborators
- serp_parser.py: Page assembly (main entry point)
- serp_config.py / serp_selectors.py: Configuration management
- serp_logger.py: Structured logging

Author: scrape-serp
Date: 2026-10-19
"""

__version__ = '0.1.0'
__author__ = 'scrape-serp'

from .serp_config import SerpConfig, get_config
from .serp_errors import ConfigurationError, PlatformMismatchError, SerpParseError
from .serp_extract import ExtractionConfig, parse_by_config
from .serp_features import FeatureCollaborators, default_collaborators
from .serp_logger import SerpParseLogger
from .serp_nodes import Node, parse_html
from .serp_parser import PageResult, SerpParser, get_serp_parser, parse
from .serp_pipeline import RequestDescriptor
from .serp_select import get_attribute, get_text, select

__all__ = [
    'SerpConfig',
    'get_config',
    'SerpParseError',
    'ConfigurationError',
    'PlatformMismatchError',
    'ExtractionConfig',
    'parse_by_config',
    'FeatureCollaborators',
    'default_collaborators',
    'SerpParseLogger',
    'Node',
    'parse_html',
    'PageResult',
    'SerpParser',
    'get_serp_parser',
    'parse',
    'RequestDescriptor',
    'get_attribute',
    'get_text',
    'select',
]
