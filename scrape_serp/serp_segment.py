"""
SERP Parser - Container Discovery and Segmentation

Turns the result column of a SERP into a flat, ordered list of candidate
elements, each either one organic result or one self-contained feature:

1. Discover top-level containers (selector fallback). When every container
   is a knowledge panel, the page wrapped everything in one tabbed widget,
   so each container is split into its direct sub-containers.
2. Find organic result elements in each container (mobile and desktop use
   different selector chains; desktop puts "result + site links table"
   composites ahead of the plain matches).
3. A container with more than one result element yields those elements;
   one with zero or one is treated as a single feature unit.
4. Drop candidates that are nested inside another candidate's span or that
   repeat an earlier candidate.

Author: scrape-serp
Date: 2026-10-19
"""

from typing import Callable, Dict, Optional, Sequence

from .serp_config import SelectorConfig
from .serp_nodes import Node, NodeSet
from .serp_select import ElementInput, select


KnowledgePanelCheck = Callable[[ElementInput], bool]


def get_containers(
    document: ElementInput,
    is_knowledge_panel_entry: KnowledgePanelCheck,
    selectors: SelectorConfig,
) -> NodeSet:
    """
    Find the top-level result / feature containers of a page.

    Args:
        document: Page (or column) to search
        is_knowledge_panel_entry: Knowledge panel predicate collaborator
        selectors: Selector chains

    Returns:
        NodeSet of containers in document order
    """
    containers = select(selectors.get("containers"), document)

    # Some mobile knowledge panel results wrap the whole page's results in a
    # tabbed knowledge element; break those into smaller pieces
    if containers and all(is_knowledge_panel_entry([container]) for container in containers):
        expanded: NodeSet = []
        for container in containers:
            sub_containers = select(selectors.get("whole_page_sub_containers"), container)
            expanded.extend(sub_containers or [container])
        return expanded

    return containers


def get_desktop_result_with_site_links_elements(container: Node, selectors: SelectorConfig) -> NodeSet:
    """
    Find organic results that carry a site links table.

    These need the parent of the base result so the table is included.
    """
    def has_site_links(element: Node) -> bool:
        organic_result = select(selectors.get("site_links_result"), element)
        site_links_table = select(selectors.get("site_links_table"), element)
        return bool(organic_result and site_links_table)

    candidates = select(selectors.get("site_links_candidates"), container)
    return [element for element in candidates if has_site_links(element)]


def get_desktop_result_elements(container: Node, selectors: SelectorConfig) -> NodeSet:
    result_elements = select(selectors.get("desktop_results"), container)
    results_with_site_links = get_desktop_result_with_site_links_elements(container, selectors)

    return results_with_site_links + result_elements


def get_mobile_result_elements(container: Node, selectors: SelectorConfig) -> NodeSet:
    return select(selectors.get("mobile_results"), container)


def get_result_elements(container: Node, mobile: bool, selectors: SelectorConfig) -> NodeSet:
    """
    Expand one container into its candidate result elements.

    If the container has several organic results, those are returned.
    Otherwise the container itself is a feature; a lone organic match could
    just be a result embedded in that feature.
    """
    if mobile:
        result_elements = get_mobile_result_elements(container, selectors)
    else:
        result_elements = get_desktop_result_elements(container, selectors)

    return result_elements if len(result_elements) > 1 else [container]


def is_nested_in(outer: Node, inner: Node) -> bool:
    """Check if `inner` starts strictly inside `outer`'s span."""
    if outer.span is None or inner.span is None:
        return False
    return outer.span.contains_start_of(inner.span)


def filter_unique_elements(candidates: Sequence[Optional[Node]]) -> NodeSet:
    """
    Remove nested, duplicate and unpositioned candidates.

    Every candidate is checked against the full, unfiltered list:
    - no span: dropped (no positional identity)
    - starts strictly inside another candidate's span: dropped
    - same node_id as an earlier candidate: dropped

    Args:
        candidates: Candidate elements in page order

    Returns:
        Surviving elements, order preserved
    """
    first_index: Dict[int, int] = {}
    for index, element in enumerate(candidates):
        if element is not None:
            first_index.setdefault(element.node_id, index)

    survivors: NodeSet = []
    for index, element in enumerate(candidates):
        if element is None or element.span is None:
            continue

        is_nested = any(
            other is not None and is_nested_in(other, element)
            for other in candidates
        )
        is_duplicate = first_index[element.node_id] != index

        if not (is_nested or is_duplicate):
            survivors.append(element)

    return survivors
