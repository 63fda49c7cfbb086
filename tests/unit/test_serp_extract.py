"""
Unit tests for declarative extraction configs (parse_by_config).
"""

import pytest

from scrape_serp.serp_extract import ConfigKind, ExtractionConfig, parse_by_config
from scrape_serp.serp_nodes import parse_html


LISTING_HTML = """
<div id="listing">
  <div class="item"><a href="https://a.example/">Alpha</a><span class="tag">new</span></div>
  <div class="item"><a href="https://b.example/">Beta</a></div>
</div>
"""


@pytest.fixture
def listing():
    return parse_html(LISTING_HTML)


class TestConfigKind:
    """Precedence of process over properties over attribute."""

    @pytest.mark.unit
    def test_precedence(self):
        """Test that the derived kind follows precedence order."""
        properties = {"title": ExtractionConfig.text("a")}

        assert ExtractionConfig(process=len, properties=properties, attribute="href").kind is ConfigKind.PROCESS
        assert ExtractionConfig(properties=properties, attribute="href").kind is ConfigKind.PROPERTIES
        assert ExtractionConfig(attribute="text").kind is ConfigKind.TEXT
        assert ExtractionConfig(attribute="href").kind is ConfigKind.ATTRIBUTE
        assert ExtractionConfig(query="a").kind is ConfigKind.NODES

    @pytest.mark.unit
    def test_from_dict_nested(self):
        """Test building configs from plain nested mappings."""
        config = ExtractionConfig.from_dict({
            "query": "div.item",
            "properties": {
                "title": {"query": "a", "attribute": "text", "shallowSearch": True},
            },
        })

        assert config.kind is ConfigKind.PROPERTIES
        assert config.properties["title"].shallow_search is True

    @pytest.mark.unit
    def test_from_dict_rejects_unknown_keys(self):
        """Test that unknown keys fail at build time."""
        with pytest.raises(ValueError):
            ExtractionConfig.from_dict({"query": "a", "atribute": "href"})


class TestParseByConfig:
    """Interpreter behaviour."""

    @pytest.mark.unit
    def test_missing_query_gives_none(self, listing):
        """Test that a query with no match gives None."""
        assert parse_by_config({"query": "div#missing"}, listing) is None

    @pytest.mark.unit
    def test_missing_config_or_element(self, listing):
        """Test that a missing config or element gives None."""
        assert parse_by_config(None, listing) is None
        assert parse_by_config(ExtractionConfig.text("a"), None) is None
        assert parse_by_config(ExtractionConfig.text("a"), []) is None

    @pytest.mark.unit
    def test_process_shadows_properties(self, listing):
        """Test that process is used even when properties are present."""
        seen = []

        def process(element, config):
            seen.append(element)
            return "processed"

        config = ExtractionConfig(
            query="div.item",
            properties={"title": ExtractionConfig.text("a")},
            process=process,
        )

        assert parse_by_config(config, listing) == "processed"
        assert seen == [listing]

    @pytest.mark.unit
    def test_properties_always_return_list(self, listing):
        """Test that a single match still produces a list of records."""
        config = ExtractionConfig.record(
            "div#listing",
            first=ExtractionConfig.text("a", shallow_search=True),
        )

        assert parse_by_config(config, listing) == [{"first": "Alpha"}]

    @pytest.mark.unit
    def test_record_per_match(self, listing):
        """Test one record per matched element, fields may be None."""
        config = ExtractionConfig.record(
            "div.item",
            title=ExtractionConfig.text("a"),
            url=ExtractionConfig.attr("href", "a"),
            tag=ExtractionConfig.text("span.tag"),
        )

        assert parse_by_config(config, listing) == [
            {"title": "Alpha", "url": "https://a.example/", "tag": "new"},
            {"title": "Beta", "url": "https://b.example/", "tag": None},
        ]

    @pytest.mark.unit
    def test_text_with_separator(self, listing):
        """Test text extraction with a custom separator."""
        config = ExtractionConfig.text("div.item a", separator=" | ")

        assert parse_by_config(config, listing) == "Alpha | Beta"

    @pytest.mark.unit
    def test_attribute_reads_first_match(self, listing):
        """Test attribute extraction from the first match."""
        assert parse_by_config(ExtractionConfig.attr("href", "a"), listing) == "https://a.example/"

    @pytest.mark.unit
    def test_without_query_applies_to_element(self, listing):
        """Test that a config without a query uses the element itself."""
        [item] = parse_by_config({"query": "div.item > a"}, listing)[:1]

        assert parse_by_config(ExtractionConfig.attr("href"), item) == "https://a.example/"

    @pytest.mark.unit
    def test_nodes_kind_returns_matches(self, listing):
        """Test that a bare query returns the matched nodes."""
        nodes = parse_by_config({"query": "div.item"}, listing)

        assert [node.name for node in nodes] == ["div", "div"]

    @pytest.mark.unit
    def test_query_fallback_list(self, listing):
        """Test selector fallback inside a config."""
        config = ExtractionConfig.text(["h3", "span.tag", "a"])

        assert parse_by_config(config, listing) == "new"

    @pytest.mark.unit
    def test_process_errors_propagate(self, listing):
        """Test that an exception raised in process is not swallowed."""
        def process(element, config):
            raise RuntimeError("broken extractor")

        with pytest.raises(RuntimeError):
            parse_by_config(ExtractionConfig(process=process), listing)
