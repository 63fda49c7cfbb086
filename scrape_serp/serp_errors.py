"""
SERP Parser - Error Types

Only structural failures are raised. Anything that is simply not present
on the page (a missing selector match, attribute or text) is returned as
None by the extraction helpers instead.

Author: scrape-serp
Date: 2026-10-19
"""


class SerpParseError(Exception):
    """Base class for errors raised by the SERP parser."""
    pass


class ConfigurationError(SerpParseError):
    """Raised when parser configuration is missing or invalid."""
    pass


class PlatformMismatchError(SerpParseError):
    """
    Raised when the HTML does not match the requested user agent platform.

    A desktop SERP carries the desktop body marker; a mobile SERP does not.
    No extraction is attempted for a mismatched document.
    """

    def __init__(self, expected_mobile: bool, document_mobile: bool):
        self.expected_mobile = expected_mobile
        self.document_mobile = document_mobile
        super().__init__(
            "HTML did not match requested user agent platform "
            f"(requested {'mobile' if expected_mobile else 'desktop'}, "
            f"document looks {'mobile' if document_mobile else 'desktop'})."
        )
