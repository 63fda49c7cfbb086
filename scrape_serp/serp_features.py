"""
SERP Parser - Feature Collaborators

Every embedded SERP feature (knowledge panel, ads, packs, boxes) is parsed
by a collaborator: a plain function taking a NodeSet (and for the local
pack an options dict) that returns the feature data, or None when the
feature is not on the page. Returning None is never an error.

FeatureCollaborators bundles one slot per feature. Slots default to
not_present; default_collaborators() fills in the config-driven parsers
below. Swap any slot with dataclasses.replace.

Author: scrape-serp
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .serp_config import SelectorConfig
from .serp_extract import ExtractionConfig, parse_by_config
from .serp_nodes import Node
from .serp_pipeline import Collaborator
from .serp_select import ElementInput, as_node_set, get_attribute, select, select_one


def not_present(element_set: ElementInput, options: Optional[Dict[str, Any]] = None) -> None:
    """Collaborator for features this parser does not extract."""
    return None


def never(element_set: ElementInput) -> bool:
    return False


def feature_meta(feature_type: str, element: Optional[Node]) -> Dict[str, Any]:
    """Build the `_meta` block of a feature record."""
    start_index = element.start_index if element is not None else None
    return {"type": feature_type, "start_index": start_index}


@dataclass(frozen=True)
class FeatureCollaborators:
    """One collaborator per SERP feature, in the order results use them."""

    # Result-level features
    answer_box: Collaborator = not_present
    news_pack: Collaborator = not_present
    image_pack: Collaborator = not_present
    video_pack: Collaborator = not_present
    event_pack: Collaborator = not_present
    flight_box: Collaborator = not_present
    job_pack: Collaborator = not_present
    salary_pack: Collaborator = not_present
    local_pack: Collaborator = not_present  # called with {"locale": ...}
    hotel_pack: Collaborator = not_present
    people_also_ask: Collaborator = not_present
    rich_content: Collaborator = not_present

    # Page-level features
    ads: Collaborator = not_present
    local_service_ads: Collaborator = not_present
    shopping_box: Collaborator = not_present
    knowledge_panel: Collaborator = not_present

    # Predicate
    is_knowledge_panel_entry: Callable[[ElementInput], bool] = never


def make_knowledge_panel_entry_check(selectors: SelectorConfig) -> Callable[[ElementInput], bool]:
    """Predicate: does the element set contain (or is it) a knowledge panel?"""
    chain = selectors.get("knowledge_panel_entry")

    def is_knowledge_panel_entry(element_set: ElementInput) -> bool:
        return bool(select(chain, as_node_set(element_set)))

    return is_knowledge_panel_entry


def make_knowledge_panel_parser(selectors: SelectorConfig) -> Collaborator:
    chain = selectors.get("knowledge_panel")
    config = ExtractionConfig.record(
        chain,
        title=ExtractionConfig.text(selectors.get("knowledge_panel_title"), shallow_search=True),
        subtitle=ExtractionConfig.text(selectors.get("knowledge_panel_subtitle"), shallow_search=True),
        description=ExtractionConfig.text(selectors.get("knowledge_panel_description"), separator=" "),
    )

    def parse_knowledge_panel(element_set: ElementInput) -> Optional[Dict[str, Any]]:
        records = parse_by_config(config, element_set)
        if not records or not any(records[0].values()):
            return None

        panel = select_one(chain, element_set)
        return {"_meta": feature_meta("knowledge_panel", panel), **records[0]}

    return parse_knowledge_panel


def make_ads_parser(selectors: SelectorConfig) -> Collaborator:
    chain = selectors.get("ads")
    fields = ExtractionConfig.record(
        title=ExtractionConfig.text(selectors.get("ad_title"), shallow_search=True),
        url=ExtractionConfig.attr("href", selectors.get("ad_url")),
        description=ExtractionConfig.text(selectors.get("ad_description"), separator=" "),
    )

    def parse_ads(element_set: ElementInput) -> Optional[List[Dict[str, Any]]]:
        ads = []
        for position, element in enumerate(select(chain, element_set), start=1):
            [record] = parse_by_config(fields, element)
            if not record["title"] and not record["url"]:
                continue
            ads.append({"_meta": feature_meta("ad", element), "position": position, **record})

        return ads or None

    return parse_ads


def make_answer_box_parser(selectors: SelectorConfig) -> Collaborator:
    chain = selectors.get("answer_box")
    text_config = ExtractionConfig.text(selectors.get("answer_box_text"), separator=" ")
    url_config = ExtractionConfig.attr("href", selectors.get("answer_box_url"))

    def parse_answer_box(element_set: ElementInput) -> Optional[Dict[str, Any]]:
        box = select_one(chain, element_set)
        if box is None:
            return None

        text = parse_by_config(text_config, box)
        url = parse_by_config(url_config, box)
        if not text and not url:
            return None

        return {"text": text, "url": url}

    return parse_answer_box


def make_people_also_ask_parser(selectors: SelectorConfig) -> Collaborator:
    question_config = ExtractionConfig.text(selectors.get("people_also_ask_question"), shallow_search=True)

    def question_text(element, config: ExtractionConfig) -> Optional[str]:
        # data-q carries the question verbatim when present
        return get_attribute("data-q", element) or parse_by_config(question_config, element)

    config = ExtractionConfig.record(
        selectors.get("people_also_ask"),
        question=ExtractionConfig(process=question_text),
    )

    def parse_people_also_ask(element_set: ElementInput) -> Optional[Dict[str, Any]]:
        records = parse_by_config(config, element_set) or []
        questions = [record["question"] for record in records if record["question"]]
        if not questions:
            return None

        return {"questions": questions}

    return parse_people_also_ask


def default_collaborators(selectors: Optional[SelectorConfig] = None) -> FeatureCollaborators:
    """
    Collaborators with the built-in parsers filled in.

    Args:
        selectors: Selector chains to build the parsers from

    Returns:
        FeatureCollaborators instance
    """
    selectors = selectors or SelectorConfig()

    return FeatureCollaborators(
        answer_box=make_answer_box_parser(selectors),
        people_also_ask=make_people_also_ask_parser(selectors),
        ads=make_ads_parser(selectors),
        knowledge_panel=make_knowledge_panel_parser(selectors),
        is_knowledge_panel_entry=make_knowledge_panel_entry_check(selectors),
    )
