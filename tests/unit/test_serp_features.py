"""
Unit tests for the built-in feature collaborators.
"""

import pytest

from scrape_serp.serp_config import ResultConfig, SelectorConfig
from scrape_serp.serp_features import (
    default_collaborators,
    make_ads_parser,
    make_answer_box_parser,
    make_knowledge_panel_entry_check,
    make_people_also_ask_parser,
    not_present,
)
from scrape_serp.serp_nodes import parse_html
from scrape_serp.serp_pipeline import RequestDescriptor
from scrape_serp.serp_result import ResultItemParser
from scrape_serp.serp_select import select


ADS_HTML = """<div id="center_col"><div id="tads">
<div class="uEierd"><a data-pcu="https://shop.example/" href="https://shop.example/landing"><div role="heading">Shop Example</div></a><div class="MUxGbd">Great deals every day.</div></div>
<div class="uEierd"><span>Sponsored</span></div>
</div></div>"""

ANSWER_BOX_HTML = """<div class="g"><div class="ifM9O">
<span class="hgKElc">Paris is the capital of France.</span>
<div class="yuRUbf"><a href="https://fr.example/paris">Paris - Wikipedia</a></div>
</div></div>"""

PEOPLE_ALSO_ASK_HTML = """<div class="g"><div class="xpdopen"><div class="kp-blk cUnQKe">
<div class="related-question-pair" data-q="What is Python used for?"><a href="https://paa.example/one">x</a></div>
<div class="related-question-pair"><div role="button">Is Python free?</div><a href="https://paa.example/two">y</a></div>
</div></div></div>"""


@pytest.fixture
def selectors():
    return SelectorConfig()


class TestDefaultCollaborators:
    """Config-driven collaborators shipped with the parser."""

    @pytest.mark.unit
    def test_ads(self, selectors):
        """Test that ads get a position, title, url and description."""
        parse_ads = make_ads_parser(selectors)

        [ad] = parse_ads(parse_html(ADS_HTML, with_indices=True))

        assert ad["_meta"]["type"] == "ad"
        assert ad["_meta"]["start_index"] is not None
        assert ad["position"] == 1
        assert ad["title"] == "Shop Example"
        assert ad["url"] == "https://shop.example/landing"
        assert ad["description"] == "Great deals every day."

    @pytest.mark.unit
    def test_no_ads(self, selectors):
        """Test that a page without ads gives None."""
        assert make_ads_parser(selectors)(parse_html("<div>organic</div>")) is None

    @pytest.mark.unit
    def test_answer_box(self, selectors):
        """Test answer box text and source url."""
        parse_answer_box = make_answer_box_parser(selectors)

        answer_box = parse_answer_box(parse_html(ANSWER_BOX_HTML))

        assert answer_box == {
            "text": "Paris is the capital of France.",
            "url": "https://fr.example/paris",
        }

    @pytest.mark.unit
    def test_people_also_ask_is_not_an_answer_box(self, selectors):
        """Test that a People Also Ask block is not read as an answer box."""
        parse_answer_box = make_answer_box_parser(selectors)

        assert parse_answer_box(parse_html(PEOPLE_ALSO_ASK_HTML)) is None

    @pytest.mark.unit
    def test_people_also_ask_keeps_result_url(self, selectors):
        """Test that question links never replace the result url."""
        parser = ResultItemParser(selectors, ResultConfig(), default_collaborators(selectors))
        [element] = select("div.g", parse_html(PEOPLE_ALSO_ASK_HTML, with_indices=True))

        result = parser.parse(element, RequestDescriptor())

        assert result["answer_box"] is None
        assert result["url"] == ResultConfig().feature_url
        assert result["people_also_ask"] == {
            "questions": ["What is Python used for?", "Is Python free?"],
        }

    @pytest.mark.unit
    def test_people_also_ask_questions(self, selectors):
        """Test questions from data-q, falling back to the question text."""
        parse_people_also_ask = make_people_also_ask_parser(selectors)

        assert parse_people_also_ask(parse_html(PEOPLE_ALSO_ASK_HTML)) == {
            "questions": ["What is Python used for?", "Is Python free?"],
        }
        assert parse_people_also_ask(parse_html("<div>no questions</div>")) is None

    @pytest.mark.unit
    def test_knowledge_panel_entry(self, selectors):
        """Test the knowledge panel predicate on the element and its descendants."""
        is_knowledge_panel_entry = make_knowledge_panel_entry_check(selectors)
        [panel] = parse_html('<div class="kp-wholepage"><span>Ada</span></div>')
        [wrapper] = parse_html('<div><div id="wp-tabs-container">x</div></div>')
        [plain] = parse_html('<div class="g"><h3>Result</h3></div>')

        assert is_knowledge_panel_entry([panel]) is True
        assert is_knowledge_panel_entry(wrapper) is True
        assert is_knowledge_panel_entry([plain]) is False

    @pytest.mark.unit
    def test_unimplemented_slots_not_present(self, selectors):
        """Test that slots without a built-in parser report nothing."""
        collaborators = default_collaborators(selectors)
        document = parse_html(ADS_HTML)

        assert collaborators.shopping_box is not_present
        assert collaborators.local_pack(document, {"locale": "en-US"}) is None
