"""
SERP Parser - Markup Tree

Converts raw SERP HTML into an immutable tree of Node objects.

BeautifulSoup (html.parser builder) does the actual parsing. The soup is
walked once, every element and text node gets a document-order node_id,
and (optionally) tags get a Span of source offsets. Nothing in the tree is
modified after this module returns it.

Author: scrape-serp
Date: 2026-10-19
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString


NODE_TAG = "tag"
NODE_TEXT = "text"

# Elements whose text content is never part of the visible result text
NON_TEXT_TAGS = frozenset({"script", "style"})


@dataclass(frozen=True)
class Span:
    """Source offsets [start, end) of an element within the parsed markup."""
    start: int
    end: int

    def contains_start_of(self, other: "Span") -> bool:
        """Check if `other` starts strictly inside this span."""
        return self.start < other.start < self.end


@dataclass(frozen=True, eq=False)
class Node:
    """
    A single markup tree node (tag or text).

    Nodes compare by identity. node_id is unique within one parse and
    follows document order, so it doubles as a stable handle.
    """
    node_id: int
    kind: str = NODE_TAG
    name: Optional[str] = None
    attrs: Mapping[str, str] = field(default_factory=dict)
    children: Tuple["Node", ...] = ()
    data: Optional[str] = None
    span: Optional[Span] = None
    source: Any = field(default=None, repr=False)
    document: Optional["SerpDocument"] = field(default=None, repr=False)

    def __post_init__(self):
        """Freeze the mutable containers handed in by the caller."""
        object.__setattr__(self, "attrs", MappingProxyType(dict(self.attrs)))
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def is_tag(self) -> bool:
        return self.kind == NODE_TAG

    @property
    def is_text(self) -> bool:
        return self.kind == NODE_TEXT

    @property
    def start_index(self) -> Optional[int]:
        return self.span.start if self.span else None

    @property
    def end_index(self) -> Optional[int]:
        return self.span.end if self.span else None

    def iter_descendants(self) -> Iterator["Node"]:
        """Yield every descendant in document order (root excluded)."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


# Ordered sequence of nodes, used wherever a single node could appear
NodeSet = List[Node]


class SerpDocument:
    """
    Owner of one parsed page.

    Keeps the BeautifulSoup tree alive so CSS selection (soupsieve) can run
    against it, and maps soup elements back to their Node.
    """

    def __init__(self, markup: str, soup: BeautifulSoup):
        self.markup = markup
        self.soup = soup
        self.roots: Tuple[Node, ...] = ()
        self._by_source: Dict[int, Node] = {}

    def node_for(self, element) -> Optional[Node]:
        """Return the Node built from a soup element, if any."""
        return self._by_source.get(id(element))

    @property
    def nodes(self) -> NodeSet:
        return list(self.roots)

    def __len__(self) -> int:
        return len(self._by_source)


def _is_tree_element(element) -> bool:
    """Tags and plain text are kept; comments, doctypes, CDATA etc. are not."""
    if isinstance(element, Tag):
        return True
    return isinstance(element, NavigableString) and not isinstance(element, PreformattedString)


def _line_offsets(markup: str) -> List[int]:
    """Character offset at which each source line starts."""
    offsets = [0]
    offsets.extend(match.end() for match in re.finditer("\n", markup))
    return offsets


def _compute_spans(markup: str, elements: List[Any], position: Dict[int, int]) -> List[Optional[Span]]:
    """
    Compute a Span for every tag in `elements` (pre-order).

    The start comes from the (line, column) html.parser reports for the tag.
    The end is the start of the next positioned element that is not a
    descendant, or the end of the markup.
    """
    line_offsets = _line_offsets(markup)
    count = len(elements)

    starts: List[Optional[int]] = [None] * count
    for index, element in enumerate(elements):
        if not isinstance(element, Tag):
            continue
        if element.sourceline is None or element.sourcepos is None:
            continue
        starts[index] = line_offsets[element.sourceline - 1] + element.sourcepos

    # Last pre-order index inside each element's subtree
    subtree_last = list(range(count))
    for index in range(count - 1, -1, -1):
        element = elements[index]
        if not isinstance(element, Tag):
            continue
        for child in reversed(element.contents):
            child_index = position.get(id(child))
            if child_index is not None:
                subtree_last[index] = subtree_last[child_index]
                break

    # Start offset of the first positioned element at or after each index
    next_start = [len(markup)] * (count + 1)
    for index in range(count - 1, -1, -1):
        start = starts[index]
        next_start[index] = start if start is not None else next_start[index + 1]

    spans: List[Optional[Span]] = []
    for index in range(count):
        start = starts[index]
        if start is None:
            spans.append(None)
        else:
            spans.append(Span(start, next_start[subtree_last[index] + 1]))

    return spans


def _attribute_map(element: Tag) -> Dict[str, str]:
    attrs = {}
    for key, value in element.attrs.items():
        attrs[key] = " ".join(value) if isinstance(value, list) else value
    return attrs


def parse_document(markup: str, with_indices: bool = False, builder: str = "html.parser") -> SerpDocument:
    """
    Parse HTML into a SerpDocument holding an immutable Node tree.

    Args:
        markup: Raw HTML
        with_indices: Compute source offsets (Span) for every tag
        builder: BeautifulSoup tree builder (offsets need html.parser)

    Returns:
        SerpDocument whose roots are the top-level nodes of the markup
    """
    markup = markup or ""
    soup = BeautifulSoup(markup, builder, multi_valued_attributes=None)
    document = SerpDocument(markup, soup)

    elements = [element for element in soup.descendants if _is_tree_element(element)]
    position = {id(element): index for index, element in enumerate(elements)}

    if with_indices:
        spans = _compute_spans(markup, elements, position)
    else:
        spans = [None] * len(elements)

    # Children sit later in pre-order, so building back to front always
    # finds them ready
    built: Dict[int, Node] = {}
    for index in range(len(elements) - 1, -1, -1):
        element = elements[index]
        if isinstance(element, Tag):
            children = tuple(built[id(child)] for child in element.contents if id(child) in built)
            node = Node(
                node_id=index,
                kind=NODE_TAG,
                name=element.name,
                attrs=_attribute_map(element),
                children=children,
                span=spans[index],
                source=element,
                document=document,
            )
        else:
            node = Node(
                node_id=index,
                kind=NODE_TEXT,
                data=str(element),
                source=element,
                document=document,
            )
        built[id(element)] = node

    document._by_source = built
    document.roots = tuple(built[id(child)] for child in soup.contents if id(child) in built)

    return document


def parse_html(markup: str, with_indices: bool = False, builder: str = "html.parser") -> NodeSet:
    """
    Parse HTML and return its top-level nodes.

    Args:
        markup: Raw HTML
        with_indices: Compute source offsets for every tag
        builder: BeautifulSoup tree builder

    Returns:
        NodeSet of top-level nodes
    """
    return parse_document(markup, with_indices=with_indices, builder=builder).nodes
