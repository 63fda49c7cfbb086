"""
SERP Parser - Selector Chains

Every ordered selector-fallback list used by the parser, keyed by name.
Order is priority: the first selector that matches anything wins, so newer
or more specific markup goes first. Update these lists when Google changes
its markup; the parsing code does not need to change.

Author: scrape-serp
Date: 2026-10-19
"""

from typing import Dict, List


SELECTORS: Dict[str, List[str]] = {
    # Top-level result / feature containers
    "containers": [
        'div#rso > div:not([tabindex="-1"])',  # ignore navigation links
        'div#rso > g-card',                    # Mar 2020
        'div#rso > g-inner-card',              # flights, Apr 2020
        'div#rso > g-section-with-header',     # May 2020
        'div#appbar div.rl_feature',           # events feature, Mar 2020
    ],
    # Sub-containers of a whole-page tabbed knowledge element
    "whole_page_sub_containers": [
        'div#kp-wp-tab-overview > div',
    ],
    "desktop_results": [
        'div.srg div.g',        # Mar 2020
        'div.g > div.rc',       # Mar 2020
        'div.g > div.tF2Cxc',   # Jan 2021
        'div.kp-blk.cUnQKe',    # people also ask, may contain organic selectors
    ],
    "mobile_results": [
        'div.mnr-c.xpd',        # Mar 2020
        'g-card.XqIXXe',        # results with embedded video packs, Mar 2020
        'div.mnr-c.srg',        # Google Play results, Mar 2020
    ],
    # Organic result with an attached site links table
    "site_links_candidates": ['div.g > div'],
    "site_links_result": ['div.tF2Cxc'],
    "site_links_table": ['table.jmjoTe'],
    "desktop_title": [
        'h3',                           # answer box and desktop, Mar 2020
        'g-section-with-header g-link', # desktop twitter, Mar 2020
        '[role="heading"]',             # google features, Mar 2020
        'h2',
        'h1',
    ],
    "mobile_title": [
        'div#wp-tabs-container [data-attrid=title]',  # mobile knowledge-panel section, Apr 2020
        'div#wp-tabs-container h2',                   # mobile knowledge-panel page-wrap, Apr 2020
        'g-card-section .zTpPx.ellip',                # twitter, Jan 2021
        'div.ifM9O h3',                               # mobile answerbox, Jan 2021
        '[role="heading"]',                           # google features and mobile, Mar 2020
        'g-card .aDrpNd',                             # google features, Jan 2021
        'h3',
        'h2',
        'h1',
    ],
    "description": [
        'div.LGOjhe span.e24Kjd',   # answerbox [paragraph], Mar 2020
        'div.BmP5tf div.MUxGbd',    # mobile, Mar 2020
        'div.IsZvec span.aCOpRe',   # desktop, Oct 2020
        'div.s > div > span.st',    # desktop, Mar 2020
    ],
    "description_prefix": [
        'span.MUxGbd',  # mobile, Mar 2020
        'span.f',       # desktop, Mar 2020
    ],
    "url": [
        'a.C8nzq[href]',     # mobile, Mar 2020
        'div.r a[href]',     # desktop, Jun 2020
        'g-link > a[href]',  # twitter, Mar 2020
        'div.yuRUbf a[href]',  # desktop, Sep 2020
        'h3 > a',            # youtube, Mar 2020
    ],
    "amp_link": ['a.C8nzq'],  # mobile, Jun 2020
    "thumbnail": ['g-img.BA0A6c > img.rISBZc'],
    "video_thumbnail": [
        'div.Woharf.LQFTgb',
        'div.WfVh8d.Lw2oL',
        'span.vdur',
        'div.OIL2le',
    ],
    # Page regions
    "app_bar": ['div#appbar'],
    "column_1": ['div#center_col'],
    "column_2": ['div#rhs'],
    "bottom_extras": ['div#botstuff'],
    # Page-level features
    "total_results": ['div#result-stats'],
    "auto_correct": ['div#taw a#fprsl'],
    "did_you_mean": ['div#taw p.gqLncc.card-section a.gL9Hy'],
    "invalid_search": ['div#topstuff [role=heading]'],
    "related_searches": [
        'div#brs p.nVcaUb a',                      # desktop, Apr 2020
        'div#bres div.DExtrc a.F3dFTe div.s75CSd', # mobile, Apr 2020
        'div#bres a.k8XOCe div.s75CSd',            # some desktop, Sep 2020
    ],
    # Default feature collaborators
    "knowledge_panel_entry": [
        'div.kp-wholepage',
        'div#kp-wp-tab-overview',
        'div#wp-tabs-container',
    ],
    "knowledge_panel": [
        'div.kp-wholepage',
        'div.knowledge-panel',
        'div.kno-kp',
    ],
    "knowledge_panel_title": [
        "div[data-attrid='title'] span",
        "h2[data-attrid='title']",
        'div.kno-ecr-pt',
        'div.qrShPb span',
    ],
    "knowledge_panel_subtitle": [
        "div[data-attrid='subtitle'] span",
        'div.wwUB2c span',
    ],
    "knowledge_panel_description": [
        'div.kno-rdesc span',
        "div[data-attrid='description'] span",
    ],
    "ads": [
        'div#tads div.uEierd',
        'div#bottomads div.uEierd',
        'div[data-text-ad]',
    ],
    "ad_title": ['div[role="heading"]', 'h3'],
    "ad_url": ['a[data-pcu]', 'a[href]'],
    "ad_description": ['div.MUxGbd', 'div.yDYNvb'],
    "answer_box": [
        'div.ifM9O',
        'div.LGOjhe',
        'div.xpdopen div.kp-blk:not(.cUnQKe)',  # people also ask shares kp-blk
    ],
    "answer_box_url": ['div.yuRUbf a[href]'],
    "answer_box_text": ['span.hgKElc', 'div.LGOjhe span.e24Kjd', 'div.kno-rdesc span'],
    "people_also_ask": [
        'div.related-question-pair',
        'div[jsname="yEVEE"]',
        'div[data-q]',
    ],
    "people_also_ask_question": [
        'div[role="button"]',
        'span[jsname]',
        'div.JlqpRe',
    ],
}
