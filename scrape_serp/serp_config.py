"""
SERP Parser - Configuration Management

Centralized configuration for SERP extraction.

Features:
- Ordered selector-fallback chains (replaceable per chain)
- Result assembly constants (feature-page URL, knowledge card labels)
- Platform detection marker
- Logging settings

Author: scrape-serp
Date: 2026-10-19
"""

import copy
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .serp_errors import ConfigurationError
from .serp_selectors import SELECTORS


# Load environment
load_dotenv()


@dataclass
class SelectorConfig:
    """Ordered selector-fallback chains, keyed by name."""

    chains: Dict[str, List[str]] = field(default_factory=lambda: copy.deepcopy(SELECTORS))

    def get(self, name: str) -> List[str]:
        """
        Get a selector chain.

        Raises:
            ConfigurationError: If no chain is registered under `name`
        """
        try:
            return self.chains[name]
        except KeyError:
            raise ConfigurationError(f"No selector chain named '{name}'") from None

    def override(self, name: str, selectors: List[str]) -> None:
        """Replace a selector chain (newest / most specific selector first)."""
        self.chains[name] = list(selectors)


@dataclass
class ResultConfig:
    """Constants used while assembling a single result."""

    # URL reported for results that are Google features rather than pages
    feature_url: str = "https://www.google.com/search"

    # Mobile knowledge card titles
    knowledge_card_suffix: str = " (Knowledge Card)"
    knowledge_card_label: str = "Knowledge Card"

    # Publish date found in the description prefix ("3 days ago", "Mar 4, 2020")
    result_date_pattern: str = (
        r"\d{1,2} (?:minutes?|days?|hours?|mins?) ago|[A-Z][a-z]{2} \d{1,2}, \d{4}"
    )

    @property
    def result_date_regex(self) -> "re.Pattern":
        return re.compile(self.result_date_pattern)


@dataclass
class SerpConfig:
    """
    Master configuration for the SERP parser.

    Combines all sub-configurations with defaults matching current
    desktop and mobile Google markup.
    """

    selectors: SelectorConfig = field(default_factory=SelectorConfig)
    result: ResultConfig = field(default_factory=ResultConfig)

    # Present only on desktop SERPs
    platform_marker: str = "body#gsr"

    # Logging (file logging only when log_dir is set)
    log_dir: Optional[str] = None
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL

    @classmethod
    def from_env(cls) -> "SerpConfig":
        """
        Create configuration from environment variables.

        Returns:
            SerpConfig instance
        """
        config = cls()

        # Override with environment variables if present
        if os.getenv("SERP_FEATURE_URL"):
            config.result.feature_url = os.getenv("SERP_FEATURE_URL")

        if os.getenv("SERP_PLATFORM_MARKER"):
            config.platform_marker = os.getenv("SERP_PLATFORM_MARKER")

        if os.getenv("SERP_LOG_LEVEL"):
            config.log_level = os.getenv("SERP_LOG_LEVEL")

        if os.getenv("SERP_LOG_DIR"):
            config.log_dir = os.getenv("SERP_LOG_DIR")

        return config

    def validate(self) -> bool:
        """
        Validate configuration.

        Returns:
            True if valid, False otherwise
        """
        # Every chain needs at least one selector
        if any(not chain for chain in self.selectors.chains.values()):
            return False

        if not self.platform_marker or not self.result.feature_url:
            return False

        try:
            re.compile(self.result.result_date_pattern)
        except re.error:
            return False

        return True

    def summary(self) -> Dict[str, Any]:
        """
        Get configuration summary for logging.

        Returns:
            Dictionary with key configuration values
        """
        return {
            "selectors": {
                "chains": len(self.selectors.chains),
                "containers": len(self.selectors.chains.get("containers", [])),
            },
            "result": {
                "feature_url": self.result.feature_url,
            },
            "platform_marker": self.platform_marker,
            "log_level": self.log_level,
            "log_dir": self.log_dir,
        }


# Convenience function for getting default config
def get_config() -> SerpConfig:
    """
    Get SerpConfig instance with environment overrides.

    Returns:
        SerpConfig instance
    """
    return SerpConfig.from_env()
