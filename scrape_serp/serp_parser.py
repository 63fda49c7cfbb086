"""
SERP Parser Module

Parses Google Search Engine Results Pages (SERPs) into an ordered list of
feature records:
- Page chrome (total results count)
- Search notices (no matching results, auto-correct, did you mean)
- Ads, local service ads, shopping box, knowledge panel
- Organic results and embedded features (packs, boxes, cards)
- Related searches

Every record carries `_meta = {type, start_index, column}`. Column -1 is page
chrome, 1 the main result column and 2 the right-hand side column.

Usage:
    parser = get_serp_parser()
    page = parser.parse(html, {"mobile": False})
    for feature in page.parsed_features:
        print(feature["_meta"]["type"])

Author: scrape-serp
Date: 2026-10-19
"""

import re
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import partial
from typing import Any, Dict, List, Mapping, Optional, Union

from .serp_config import SerpConfig, get_config
from .serp_errors import ConfigurationError, PlatformMismatchError
from .serp_features import FeatureCollaborators, default_collaborators, feature_meta
from .serp_logger import SerpParseLogger
from .serp_nodes import NodeSet, parse_document
from .serp_pipeline import RequestDescriptor, collect_features
from .serp_result import ResultItemParser
from .serp_segment import filter_unique_elements, get_containers, get_result_elements
from .serp_select import get_text, select, select_one

INVALID_SEARCH_TEXT = "did not match any documents"

RequestInput = Union[RequestDescriptor, Mapping[str, Any], None]


@dataclass
class PageResult:
    """Represents a parsed SERP."""
    parsed_features: List[Dict[str, Any]] = field(default_factory=list)
    parse_date: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "parsed_features": self.parsed_features,
            "parse_date": self.parse_date.isoformat() if self.parse_date else None,
        }


def set_column_number(record: Dict[str, Any], column: int) -> Dict[str, Any]:
    """Return a copy of `record` with `_meta.column` set."""
    meta = {**record.get("_meta", {}), "column": column}
    return {**record, "_meta": meta}


def coerce_request(request: RequestInput) -> RequestDescriptor:
    if isinstance(request, RequestDescriptor):
        return request
    return RequestDescriptor.from_dict(request)


class SerpParser:
    """
    Parser for Google Search Engine Results Pages.

    Splits the page into the app bar, the main column and the side column,
    runs the page-level feature steps of each in order, and segments the
    main column's result area into individual results.

    Page features the parser does not extract itself are delegated to the
    FeatureCollaborators it was built with.
    """

    def __init__(
        self,
        config: Optional[SerpConfig] = None,
        collaborators: Optional[FeatureCollaborators] = None,
        logger: Optional[SerpParseLogger] = None,
    ):
        """
        Initialize SERP parser.

        Args:
            config: Parser configuration (environment defaults if None)
            collaborators: Feature collaborators (built-in parsers if None)
            logger: Structured event logger

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        self.config = config or get_config()
        if not self.config.validate():
            raise ConfigurationError("Invalid SERP parser configuration")

        self.selectors = self.config.selectors
        self.collaborators = collaborators or default_collaborators(self.selectors)
        self.event_logger = logger or SerpParseLogger(
            log_dir=self.config.log_dir,
            log_level=self.config.log_level,
        )
        self.result_parser = ResultItemParser(self.selectors, self.config.result, self.collaborators)

        self.event_logger.debug("SerpParser initialized", self.config.summary())

    # Platform

    def is_mobile_document(self, document: NodeSet) -> bool:
        """A document without the desktop body marker is a mobile SERP."""
        return select_one(self.config.platform_marker, document) is None

    # App bar features (column -1)

    def parse_total_results_count(self, element_set: NodeSet) -> Optional[Dict[str, Any]]:
        result_count_element = select_one(self.selectors.get("total_results"), element_set)
        results_text = get_text(result_count_element) or ""

        match = re.search(r"[0-9]+", results_text.replace(",", "").replace(".", ""))
        if not match:
            return None

        return {
            "_meta": feature_meta("total_search_results", result_count_element),
            "value": int(match.group(0)) or None,
        }

    # Column 1 features

    def parse_invalid_search(self, element_set: NodeSet) -> Optional[Dict[str, Any]]:
        """Find the "did not match any documents" notice."""
        for heading in select(self.selectors.get("invalid_search"), element_set):
            text = get_text(heading) or ""
            if INVALID_SEARCH_TEXT in text:
                return {"_meta": feature_meta("no_matching_search_results", heading), "value": text}

        return None

    def parse_auto_correct_text(self, element_set: NodeSet) -> Optional[Dict[str, Any]]:
        auto_correct_element = select_one(self.selectors.get("auto_correct"), element_set)
        value = get_text(auto_correct_element, separator=" ")
        if not value:
            return None

        return {"_meta": feature_meta("auto_correct_text", auto_correct_element), "value": value}

    def parse_did_you_mean_text(self, element_set: NodeSet) -> Optional[Dict[str, Any]]:
        feature_element = select_one(self.selectors.get("did_you_mean"), element_set)
        value = get_text(feature_element, separator=" ")
        if not value:
            return None

        return {"_meta": feature_meta("did_you_mean_text", feature_element), "value": value}

    def parse_related_searches(self, element_set: NodeSet) -> Optional[Dict[str, Any]]:
        related_item_elements = select(self.selectors.get("related_searches"), element_set)
        if not related_item_elements:
            return None

        items = [get_text(element, separator=" ") for element in related_item_elements]
        return {"_meta": feature_meta("related_searches", related_item_elements[0]), "items": items}

    def parse_bottom_extra_features(self, element_set: NodeSet) -> List[Optional[Dict[str, Any]]]:
        bottom_extras = select(self.selectors.get("bottom_extras"), element_set)
        return [self.parse_related_searches(bottom_extras)]

    def parse_search_result_features(
        self,
        element_set: NodeSet,
        request: RequestDescriptor,
    ) -> List[Dict[str, Any]]:
        """
        Segment the result area and parse every surviving element.

        Args:
            element_set: Main column
            request: Request descriptor

        Returns:
            Feature records in page order (empty elements dropped)
        """
        containers = get_containers(
            element_set,
            self.collaborators.is_knowledge_panel_entry,
            self.selectors,
        )

        candidates: NodeSet = []
        for container in containers:
            candidates.extend(get_result_elements(container, request.mobile, self.selectors))

        survivors = filter_unique_elements(candidates)
        self.event_logger.segmentation_completed(len(containers), len(candidates), len(survivors))

        results = []
        for element in survivors:
            result = self.result_parser.parse(element, request)
            if result is None:
                self.event_logger.result_dropped(element.start_index, "empty result")
                continue
            results.append(result)

        return results

    # Columns

    def parse_app_bar_features(self, document: NodeSet) -> List[Dict[str, Any]]:
        app_bar = select(self.selectors.get("app_bar"), document)
        features = collect_features([self.parse_total_results_count], app_bar)

        return [set_column_number(feature, -1) for feature in features]

    def parse_column_1(self, document: NodeSet, request: RequestDescriptor) -> List[Dict[str, Any]]:
        column_1 = select(self.selectors.get("column_1"), document)
        features = self.collaborators

        steps = [
            self.parse_invalid_search,
            self.parse_auto_correct_text,
            self.parse_did_you_mean_text,
            features.ads,
            features.local_service_ads,
            features.shopping_box,
            features.knowledge_panel,
            partial(self.parse_search_result_features, request=request),
            self.parse_bottom_extra_features,
        ]

        return [set_column_number(feature, 1) for feature in collect_features(steps, column_1)]

    def parse_column_2(self, document: NodeSet) -> List[Dict[str, Any]]:
        column_2 = select(self.selectors.get("column_2"), document)
        steps = [
            self.collaborators.shopping_box,
            self.collaborators.knowledge_panel,
        ]

        return [set_column_number(feature, 2) for feature in collect_features(steps, column_2)]

    # Entry point

    def parse(self, html: str, request: RequestInput = None) -> PageResult:
        """
        Parse a Google SERP page.

        Args:
            html: Raw HTML of the SERP
            request: RequestDescriptor or mapping with `mobile` / `locale`

        Returns:
            PageResult: Ordered feature records and the parse timestamp

        Raises:
            PlatformMismatchError: If the HTML is not for the requested platform
        """
        request = coerce_request(request)
        started = time.time()

        self.event_logger.set_context(mobile=request.mobile, locale=request.locale)
        try:
            self.event_logger.parse_started(len(html or ""))

            document = parse_document(html, with_indices=True).nodes

            document_mobile = self.is_mobile_document(document)
            if document_mobile != request.mobile:
                self.event_logger.platform_mismatch(request.mobile, document_mobile)
                raise PlatformMismatchError(request.mobile, document_mobile)

            parsed_features = [
                *self.parse_app_bar_features(document),
                *self.parse_column_1(document, request),
                *self.parse_column_2(document),
            ]
            parse_date = datetime.now(timezone.utc)

            feature_types: Dict[str, int] = {}
            for feature in parsed_features:
                feature_type = feature["_meta"].get("type")
                feature_types[feature_type] = feature_types.get(feature_type, 0) + 1

            self.event_logger.parse_completed(len(parsed_features), time.time() - started, feature_types)
        finally:
            self.event_logger.clear_context()

        return PageResult(parsed_features=parsed_features, parse_date=parse_date)


# Module-level singleton
_serp_parser_instance = None


def get_serp_parser() -> SerpParser:
    """Get or create the singleton SerpParser instance."""
    global _serp_parser_instance

    if _serp_parser_instance is None:
        _serp_parser_instance = SerpParser()

    return _serp_parser_instance


def parse(html: str, request: RequestInput = None) -> PageResult:
    """Parse a SERP with the shared parser instance."""
    return get_serp_parser().parse(html, request)
