"""
SERP Parser - Selection and Text Helpers

Query primitives shared by every extractor:
- select: ordered selector fallback (first alternative with a match wins)
- get_text: document-order text collection and joining
- get_attribute: attribute of the first matched node

CSS selectors run through soupsieve against the BeautifulSoup tree the
nodes were built from; predicate selectors run against the Node tree.

Author: scrape-serp
Date: 2026-10-19
"""

from itertools import chain
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Union

import soupsieve as sv

from .serp_nodes import NON_TEXT_TAGS, Node, NodeSet


Predicate = Callable[[Node], bool]
Selector = Union[str, Predicate]
Query = Union[Selector, Sequence[Selector]]
ElementInput = Union[Node, Sequence[Node], None]


def as_node_set(element: ElementInput) -> NodeSet:
    """Coerce None, a single Node or a sequence of nodes to a NodeSet."""
    if element is None:
        return []
    if isinstance(element, Node):
        return [element]
    return [node for node in element if node is not None]


def _alternatives(query: Query) -> List[Selector]:
    if isinstance(query, str) or callable(query):
        return [query]
    return list(query)


def _css_matches(selector: str, scope: Node, include_root: bool) -> NodeSet:
    """Run a CSS selector against one scope node."""
    document = scope.document
    if document is None or scope.source is None:
        # Detached nodes have no soup element to run CSS against
        return []

    compiled = sv.compile(selector)
    matches: NodeSet = []

    if include_root and compiled.match(scope.source):
        matches.append(scope)

    for element in compiled.select(scope.source):
        node = document.node_for(element)
        if node is not None:
            matches.append(node)

    return matches


def _predicate_matches(predicate: Predicate, scope: Node, include_root: bool) -> NodeSet:
    """Run a predicate against one scope node's tags."""
    candidates = chain([scope] if include_root else [], scope.iter_descendants())
    return [node for node in candidates if node.is_tag and predicate(node)]


def _select_alternative(selector: Selector, element: ElementInput) -> NodeSet:
    """
    Evaluate a single selector.

    A lone Node only has its descendants searched. A NodeSet has its members
    searched too, which is how callers get the root included.
    """
    if isinstance(element, Node):
        scopes, include_root = [element], False
    else:
        scopes, include_root = as_node_set(element), True

    matches: NodeSet = []
    seen = set()

    for scope in scopes:
        if not scope.is_tag:
            continue

        if isinstance(selector, str):
            found = _css_matches(selector, scope, include_root)
        else:
            found = _predicate_matches(selector, scope, include_root)

        for node in found:
            if id(node) not in seen:
                seen.add(id(node))
                matches.append(node)

    return matches


def select(query: Optional[Query], element: ElementInput) -> NodeSet:
    """
    Query an element with a selector string, predicate, or list of them.

    With a list, only the results of the first alternative that matches
    one or more nodes are returned; later alternatives are never merged in.

    Args:
        query: Selector string, predicate, or ordered list of alternatives
        element: Node (descendants searched) or NodeSet (members included)

    Returns:
        NodeSet of matches (empty if nothing matched)
    """
    if query is None or not element:
        return []

    for alternative in _alternatives(query):
        matches = _select_alternative(alternative, element)
        if matches:
            return matches

    return []


def select_one(query: Optional[Query], element: ElementInput) -> Optional[Node]:
    """Return the first node `select` finds, or None."""
    matches = select(query, element)
    return matches[0] if matches else None


def _text_payloads(nodes: Iterable[Node], trim: bool) -> Iterator[str]:
    """Yield non-empty text payloads below `nodes` in document order."""
    stack = list(reversed(list(nodes)))
    while stack:
        node = stack.pop()
        if node.is_text:
            text = node.data.strip() if trim else node.data
            if text:
                yield text
        elif node.is_tag and node.name not in NON_TEXT_TAGS:
            stack.extend(reversed(node.children))


def get_text(
    element: ElementInput,
    separator: str = ", ",
    trim: bool = True,
    shallow_search: bool = False,
) -> Optional[str]:
    """
    Return the text value(s) of a node or NodeSet and all its descendants.

    Args:
        element: Node or NodeSet
        separator: Joins the collected text values
        trim: Strip whitespace from each text value
        shallow_search: Only return the first text value found

    Returns:
        Joined text, or None if no text was found
    """
    if element is None:
        return None

    if isinstance(element, Node):
        if element.is_text:
            text = element.data.strip() if trim else element.data
            return text or None
        if not element.is_tag or element.name in NON_TEXT_TAGS:
            return None
        nodes = element.children
    else:
        nodes = as_node_set(element)

    payloads = _text_payloads(nodes, trim)

    if shallow_search:
        return next(payloads, None)

    text = separator.join(payloads)
    return text or None


def get_attribute(attribute: Optional[str], element: ElementInput) -> Optional[str]:
    """
    Return an attribute value from the first node of a NodeSet.

    Only the first node is inspected. Missing or empty values give None.
    """
    nodes = as_node_set(element)
    if not attribute or not nodes:
        return None

    first = nodes[0]
    if not first.is_tag:
        return None

    return first.attrs.get(attribute) or None
