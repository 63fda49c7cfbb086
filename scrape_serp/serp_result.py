"""
SERP Parser - Result Assembly

Builds one feature record from one segmented element by running it through
the result pipeline: common fields first (url, title, description, date,
AMP and knowledge card flags), then every feature collaborator in a fixed
order, then the knowledge card title rewrite and the `_meta` block. The
terminal step drops elements that produced no title, description or text.

Author: scrape-serp
Date: 2026-10-19
"""

from typing import Any, Dict, List, Optional, Tuple

from .serp_config import ResultConfig, SelectorConfig
from .serp_extract import ExtractionConfig, parse_by_config
from .serp_features import FeatureCollaborators
from .serp_nodes import Node, NodeSet
from .serp_pipeline import RequestDescriptor, ResultContext, Step, feature_step, run_pipeline
from .serp_select import get_text, select, select_one


def parse_title(element_set: NodeSet, is_mobile: bool, selectors: SelectorConfig) -> Optional[str]:
    query = selectors.get("mobile_title" if is_mobile else "desktop_title")
    return get_text(select_one(query, element_set))


def parse_description(element_set: NodeSet, selectors: SelectorConfig) -> Tuple[Optional[str], Optional[str]]:
    """
    Extract the description and its prefix (date / byline).

    Returns:
        Tuple of (description without prefix, prefix)
    """
    description_element = select_one(selectors.get("description"), element_set)
    description = get_text(description_element, separator="", trim=False)

    if description is None:
        return None, None

    prefix = get_text(select_one(selectors.get("description_prefix"), description_element))
    if prefix is not None:
        description = description.replace(f"{prefix} ", "", 1)

    return description, prefix


def parse_url(element_set: NodeSet, selectors: SelectorConfig, feature_url: str) -> str:
    config = ExtractionConfig.attr("href", selectors.get("url"))
    return parse_by_config(config, element_set) or feature_url


def parse_result_date(text: Optional[str], result_config: ResultConfig) -> Optional[str]:
    """Find a publish date ("3 days ago", "Mar 4, 2020") in text."""
    if not isinstance(text, str):
        return None

    match = result_config.result_date_regex.search(text)
    return match.group(0) if match else None


def get_is_amp(element_set: NodeSet, selectors: SelectorConfig) -> bool:
    config = ExtractionConfig.attr("data-amp", selectors.get("amp_link"))
    return bool(parse_by_config(config, element_set))


class ResultItemParser:
    """
    Per-result pipeline.

    Holds the configuration and collaborators; `parse` runs one element
    through the ordered steps built in `steps`.
    """

    def __init__(
        self,
        selectors: SelectorConfig,
        result_config: ResultConfig,
        collaborators: FeatureCollaborators,
    ):
        self.selectors = selectors
        self.result_config = result_config
        self.collaborators = collaborators
        self.steps: List[Step] = self._build_steps()

    def _build_steps(self) -> List[Step]:
        features = self.collaborators

        return [
            self.parse_common_properties,
            self.add_answer_box,
            feature_step("news_pack", features.news_pack),
            feature_step("image_pack", features.image_pack),
            feature_step("video_pack", features.video_pack),
            feature_step("event_pack", features.event_pack),
            feature_step("flight_box", features.flight_box),
            feature_step("job_pack", features.job_pack),
            feature_step("salary_pack", features.salary_pack),
            feature_step("local_pack", features.local_pack, with_locale=True),
            feature_step("hotel_pack", features.hotel_pack),
            feature_step("people_also_ask", features.people_also_ask),
            self.add_has_thumbnails,
            feature_step("rich_content", features.rich_content),
            self.update_knowledge_panel_title,
            self.set_meta_data,
        ]

    # Pipeline steps

    def parse_common_properties(self, context: ResultContext) -> ResultContext:
        element_set = context.element_set
        description, description_prefix = parse_description(element_set, self.selectors)
        is_knowledge_card = self.collaborators.is_knowledge_panel_entry(element_set)

        if is_knowledge_card:
            url = self.result_config.feature_url
        else:
            url = parse_url(element_set, self.selectors, self.result_config.feature_url)

        return context.merge(
            url=url,
            title=parse_title(element_set, context.request.mobile, self.selectors),
            description=description,
            result_date=parse_result_date(description_prefix, self.result_config),
            is_amp=get_is_amp(element_set, self.selectors),
            is_knowledge_card=is_knowledge_card,
        )

    def add_answer_box(self, context: ResultContext) -> ResultContext:
        answer_box = self.collaborators.answer_box(context.element_set)
        url = (answer_box or {}).get("url") or context.parsed["url"]

        return context.merge(url=url, answer_box=answer_box)

    def add_has_thumbnails(self, context: ResultContext) -> ResultContext:
        element_set = context.element_set
        has_thumbnail = bool(select(self.selectors.get("thumbnail"), element_set))
        has_video_thumbnail = bool(select(self.selectors.get("video_thumbnail"), element_set))

        return context.merge(has_thumbnail=has_thumbnail, has_video_thumbnail=has_video_thumbnail)

    def update_knowledge_panel_title(self, context: ResultContext) -> ResultContext:
        parsed = context.parsed
        if not (context.request.mobile and parsed["is_knowledge_card"]):
            return context

        if parsed["title"]:
            title = f"{parsed['title']}{self.result_config.knowledge_card_suffix}"
        else:
            title = self.result_config.knowledge_card_label

        return context.merge(title=title)

    def set_meta_data(self, context: ResultContext) -> ResultContext:
        element = context.element_set[0] if context.element_set else None
        start_index = element.start_index if element is not None else None

        return context.merge(_meta={"type": "organic", "start_index": start_index})

    @staticmethod
    def check_if_empty_result(context: ResultContext) -> Optional[Dict[str, Any]]:
        """Terminal step: an element with no title, description or text is not a result."""
        parsed = context.parsed
        if not parsed.get("title") and not parsed.get("description") and not get_text(context.element_set):
            return None

        return dict(parsed)

    def parse(self, element: Node, request: RequestDescriptor) -> Optional[Dict[str, Any]]:
        """
        Parse one segmented element into a feature record.

        The element is wrapped in a single-element NodeSet so selectors can
        match the element itself as well as its descendants.

        Args:
            element: Result or feature element
            request: Request descriptor

        Returns:
            Parsed feature record, or None for an empty element
        """
        context = ResultContext(element_set=[element], request=request)
        return run_pipeline(context, self.steps, terminal=self.check_if_empty_result)
