"""
Unit tests for container discovery, segmentation and overlap filtering.
"""

import pytest

from scrape_serp.serp_config import SelectorConfig
from scrape_serp.serp_features import make_knowledge_panel_entry_check, never
from scrape_serp.serp_nodes import Node, Span, parse_html
from scrape_serp.serp_segment import (
    filter_unique_elements,
    get_containers,
    get_result_elements,
    is_nested_in,
)
from scrape_serp.serp_select import get_text, select


SITE_LINKS_HTML = """<div id="center_col"><div id="rso">
<div class="hlcw0c">
<div class="g"><div class="tF2Cxc"><h3>One</h3></div></div>
<div class="g"><div class="wrap"><div class="tF2Cxc"><h3>Two</h3></div><table class="jmjoTe"><tr><td>Docs</td></tr></table></div></div>
</div>
<div class="feature"><g-section-with-header><h3>Top stories</h3></g-section-with-header></div>
<div tabindex="-1"><a href="/nav">Skip</a></div>
</div></div>"""


def spanned(node_id, start, end):
    return Node(node_id=node_id, name="div", span=Span(start, end))


@pytest.fixture
def selectors():
    return SelectorConfig()


class TestGetContainers:
    """Top-level container discovery."""

    @pytest.mark.unit
    def test_navigation_containers_ignored(self, selectors):
        """Test that containers marked tabindex=-1 are skipped."""
        document = parse_html(SITE_LINKS_HTML, with_indices=True)

        containers = get_containers(document, never, selectors)

        assert [node.attrs.get("class") for node in containers] == ["hlcw0c", "feature"]

    @pytest.mark.unit
    def test_whole_page_knowledge_panel_is_split(self, selectors, knowledge_panel_html):
        """Test that a page wrapped in one knowledge panel is split into sub-containers."""
        document = parse_html(knowledge_panel_html, with_indices=True)
        is_knowledge_panel_entry = make_knowledge_panel_entry_check(selectors)

        containers = get_containers(document, is_knowledge_panel_entry, selectors)

        assert len(containers) == 3
        assert all(node.attrs.get("class") == "kp-section" for node in containers)

    @pytest.mark.unit
    def test_mixed_containers_not_split(self, selectors):
        """Test that splitting only happens when every container is a knowledge panel."""
        document = parse_html(
            '<div id="rso"><div class="kp-wholepage"><div id="kp-wp-tab-overview"><div>a</div></div></div>'
            '<div class="g">b</div></div>'
        )
        is_knowledge_panel_entry = make_knowledge_panel_entry_check(selectors)

        containers = get_containers(document, is_knowledge_panel_entry, selectors)

        assert [node.attrs.get("class") for node in containers] == ["kp-wholepage", "g"]


class TestGetResultElements:
    """Splitting a container into results."""

    @pytest.mark.unit
    def test_site_links_composites_first(self, selectors):
        """Test that results with site links come first, as their wrapper element."""
        document = parse_html(SITE_LINKS_HTML, with_indices=True)
        [container] = select("div.hlcw0c", document)

        elements = get_result_elements(container, False, selectors)

        assert [node.attrs.get("class") for node in elements] == ["wrap", "tF2Cxc"]
        assert get_text(elements[0], separator=" ") == "Two Docs"

    @pytest.mark.unit
    def test_single_result_container_is_feature(self, selectors):
        """Test that a container with at most one result is returned whole."""
        document = parse_html(SITE_LINKS_HTML, with_indices=True)
        [container] = select("div.feature", document)

        assert get_result_elements(container, False, selectors) == [container]

    @pytest.mark.unit
    def test_mobile_results(self, selectors, mobile_html):
        """Test mobile result selection."""
        document = parse_html(mobile_html, with_indices=True)
        [container] = select("div.mobile-results", document)

        elements = get_result_elements(container, True, selectors)

        assert len(elements) == 2
        assert all(node.attrs.get("class") == "mnr-c xpd" for node in elements)


class TestFilterUniqueElements:
    """Nesting and duplicate removal."""

    @pytest.mark.unit
    def test_nested_element_removed(self):
        """Test A=[0,100], B=[10,20], C=[200,210] keeps A and C."""
        a, b, c = spanned(1, 0, 100), spanned(2, 10, 20), spanned(3, 200, 210)

        assert filter_unique_elements([a, b, c]) == [a, c]

    @pytest.mark.unit
    def test_duplicate_keeps_first_occurrence(self):
        """Test that a repeated element only survives once."""
        a, c = spanned(1, 0, 100), spanned(3, 200, 210)

        survivors = filter_unique_elements([a, c, a])

        assert survivors == [a, c]

    @pytest.mark.unit
    def test_equal_spans_are_not_nested(self):
        """Test that distinct elements with identical spans both survive."""
        a, b = spanned(1, 0, 100), spanned(2, 0, 100)

        assert filter_unique_elements([a, b]) == [a, b]

    @pytest.mark.unit
    def test_unpositioned_and_missing_dropped(self):
        """Test that elements without a span and None entries are dropped."""
        a = spanned(1, 0, 100)
        unpositioned = Node(node_id=5, name="div")

        assert filter_unique_elements([None, unpositioned, a]) == [a]

    @pytest.mark.unit
    def test_offset_zero_is_kept(self):
        """Test that an element starting at offset 0 is a valid candidate."""
        a = spanned(1, 0, 10)

        assert filter_unique_elements([a]) == [a]

    @pytest.mark.unit
    def test_real_tree_nesting(self):
        """Test nesting detection on a parsed tree."""
        [outer] = parse_html("<div><p>inner</p></div><span>after</span>", with_indices=True)[:1]
        [inner] = select("p", outer)

        assert is_nested_in(outer, inner)
        assert not is_nested_in(inner, outer)
        assert filter_unique_elements([inner, outer]) == [outer]
