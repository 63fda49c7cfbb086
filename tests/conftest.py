"""
Pytest configuration and shared fixtures for SERP parser tests.

Provides small hand-written SERP pages (desktop, mobile and a mobile page
wrapped in a whole-page knowledge panel) and ready-made parser objects.
"""

import pytest

from scrape_serp.serp_config import SerpConfig
from scrape_serp.serp_features import default_collaborators
from scrape_serp.serp_parser import SerpParser


# Test markers
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "parser: marks tests that run the full page parser"
    )


DESKTOP_SERP_HTML = """<html>
<head><title>python - Google Search</title></head>
<body id="gsr">
<div id="appbar"><div id="result-stats">About 1,234,567 results (0.52 seconds)</div></div>
<div id="center_col">
<div id="taw"><a id="fprsl" href="/search?q=python+programming">python programming</a></div>
<div id="rso">
<div class="g"><div class="tF2Cxc"><div class="yuRUbf"><a href="https://www.python.org/"><h3>Welcome to Python.org</h3></a></div><div class="IsZvec"><span class="aCOpRe"><span class="f">Mar 4, 2020 -</span> The official home of the Python Programming Language.</span></div></div></div>
<div class="g"><div class="tF2Cxc"><div class="yuRUbf"><a href="https://docs.python.org/3/"><h3>Python 3 Documentation</h3></a></div><div class="IsZvec"><span class="aCOpRe">Documentation for Python 3.</span></div></div></div>
</div>
<div id="botstuff"><div id="brs"><p class="nVcaUb"><a href="/search?q=python+tutorial">python tutorial</a></p><p class="nVcaUb"><a href="/search?q=python+download">python download</a></p></div></div>
</div>
</body>
</html>
"""


MOBILE_SERP_HTML = """<html>
<body class="srp">
<div id="center_col">
<div id="rso">
<div class="mobile-results">
<div class="mnr-c xpd"><a class="C8nzq" href="https://m.example.com/story" data-amp="https://amp.example.com/story"><div role="heading">Example mobile story</div></a><div class="BmP5tf"><div class="MUxGbd"><span class="MUxGbd">3 days ago</span> A story about the mobile web.</div></div></div>
<div class="mnr-c xpd"><a class="C8nzq" href="https://m.example.org/"><div role="heading">Example Org</div></a><div class="BmP5tf"><div class="MUxGbd">Home of the example organisation.</div></div></div>
</div>
</div>
</div>
</body>
</html>
"""


KNOWLEDGE_PANEL_SERP_HTML = """<html>
<body class="srp">
<div id="center_col">
<div id="rso">
<div class="kp-wholepage"><div id="kp-wp-tab-overview">
<div class="kp-section"><div id="wp-tabs-container"><div data-attrid="title"><span>Ada Lovelace</span></div></div></div>
<div class="kp-section"><div role="heading">Born</div><span>December 10, 1815, London</span></div>
<div class="kp-section"><script>var tracking = 1;</script></div>
</div></div>
</div>
</div>
</body>
</html>
"""


@pytest.fixture
def desktop_html():
    """Desktop SERP with two organic results, auto-correct and related searches."""
    return DESKTOP_SERP_HTML


@pytest.fixture
def mobile_html():
    """Mobile SERP with one container holding two results."""
    return MOBILE_SERP_HTML


@pytest.fixture
def knowledge_panel_html():
    """Mobile SERP whose results are wrapped in a whole-page knowledge panel."""
    return KNOWLEDGE_PANEL_SERP_HTML


@pytest.fixture
def serp_config():
    """Default configuration, independent of the environment."""
    return SerpConfig()


@pytest.fixture
def collaborators(serp_config):
    """Built-in feature collaborators."""
    return default_collaborators(serp_config.selectors)


@pytest.fixture
def serp_parser(serp_config, collaborators):
    """Page parser with default configuration."""
    return SerpParser(config=serp_config, collaborators=collaborators)
