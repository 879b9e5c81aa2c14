"""
Pytest configuration for unit tests.

Provides in-memory Game8-style monster pages and blocks live HTTP.
"""

import pytest
from unittest.mock import patch
from lxml import html


INFO_SECTION = """
<h2>Rathalos Weakness and Notes</h2>
<table class="a-table">
  <tr><th colspan="2"><img data-src="https://img.game8.co/rathalos.png" alt="Rathalos Image"></th></tr>
  <tr><th>Class</th><td>Flying Wyvern</td></tr>
  <tr><th>Threat Level</th><td>★★★★★</td></tr>
  <tr><th>Major Weakness</th><td><img alt="Dragon Icon"></td></tr>
  <tr><th>Other Weakness</th><td>Thunder, Ice</td></tr>
  <tr><th>Element</th><td><img alt="Fire Icon"></td></tr>
  <tr><th>Abnormal Status</th><td>Poison<br>Fireblight</td></tr>
  <tr><th>Description</th><td>The king of the skies.</td></tr>
</table>
"""

WEAPON_SECTION = """
<h2>Rathalos Weapon Damage Breakdown</h2>
<table class="a-table">
  <tr><th>Part</th><th>Sever</th><th>Blunt</th><th>Ammo</th></tr>
  <tr><td>Overall</td><td>45</td><td>45</td><td>40</td></tr>
  <tr><td>Head</td><td>70</td><td>65</td><td>60</td></tr>
  <tr><td>Tail Tip</td><td>35 / 30</td><td>30</td><td>-</td></tr>
</table>
"""

ELEMENT_SECTION = """
<h2>Rathalos Elemental Damage Breakdown</h2>
<table class="a-table">
  <tr>
    <th>Part</th>
    <th><img alt="Fire Icon"></th>
    <th><img alt="Water Icon"></th>
    <th><img alt="Thunder Icon"></th>
    <th><img alt="Ice Icon"></th>
    <th><img alt="Dragon Icon"></th>
  </tr>
  <tr><td>Overall</td><td>0</td><td>10</td><td>15</td><td>10</td><td>25</td></tr>
  <tr><td>Head</td><td>0</td><td>15</td><td>20</td><td>15</td><td>30</td></tr>
  <tr><td>Tail Tip</td><td>0</td><td>5</td><td>10</td><td>5</td><td>20</td></tr>
</table>
"""

STATUS_SECTION = """
<h2>Status Effect Effectiveness</h2>
<table class="a-table">
  <tr><th>Status</th><th>Effectiveness</th></tr>
  <tr><td>Poison</td><td>★★</td></tr>
  <tr><td>Stun</td><td>★★</td></tr>
  <tr><td>Paralysis</td><td>★★</td></tr>
  <tr><td>Sleep</td><td>★★★</td></tr>
  <tr><td>Blast</td><td>★★</td></tr>
  <tr><td>Exhaust</td><td>★</td></tr>
  <tr><td>Fireblight</td><td>✕</td></tr>
  <tr><td>Waterblight</td><td>★★</td></tr>
  <tr><td>Thunderblight</td><td>★</td></tr>
  <tr><td>Iceblight</td><td>★★</td></tr>
</table>
"""

KINSECT_SECTION = """
<h2>Kinsect Extracts</h2>
<table class="a-table">
  <tr><th>Extract</th><th>Parts</th></tr>
  <tr><td><img alt="White Extract"></td><td>Wings<br>Legs</td></tr>
  <tr><td>Orange</td><td>Tail</td></tr>
  <tr><td>Red</td><td>Head</td></tr>
</table>
"""

MATERIALS_SECTION = """
<h2>Rathalos Materials</h2>
<div class="a-tabContainer">
  <ul class="a-tabLabels">
    <li data-tab-index="1">High Rank</li>
    <li data-tab-index="0">Low Rank</li>
  </ul>
  <div class="a-tabPanel" data-tab-index="0">
    <table class="a-table">
      <tr><th>Material</th><th>Target</th><th>Carve</th><th>Capture</th><th>Part Break</th><th>Drop</th><th>Palico</th></tr>
      <tr>
        <td><img data-src="https://img.game8.co/scale.png" alt="Rathalos Scale Icon">Rathalos Scale<br>火竜の鱗</td>
        <td>28%</td>
        <td>35%(Body)<br>30%(Tail)</td>
        <td>25% x2</td>
        <td>-</td>
        <td>10%(Normal)<br>5%(Riding)</td>
        <td>12%</td>
      </tr>
    </table>
  </div>
  <div class="a-tabPanel" data-tab-index="1">
    <table class="a-table">
      <tr><th>Material</th><th>Target</th><th>Carve</th><th>Capture</th><th>Part Break</th><th>Drop</th><th>Palico</th></tr>
      <tr>
        <td>Rathalos Carapace</td>
        <td>20%</td>
        <td>-</td>
        <td>-</td>
        <td>30%(Head)</td>
        <td>-</td>
        <td>-</td>
      </tr>
    </table>
  </div>
</div>
"""

SECTIONS = {
    'info': INFO_SECTION,
    'weapon_weakness': WEAPON_SECTION,
    'element_weakness': ELEMENT_SECTION,
    'status_effects': STATUS_SECTION,
    'kinsect_extracts': KINSECT_SECTION,
    'materials': MATERIALS_SECTION,
}


def build_page_html(omit=(), replace=None, title="Rathalos"):
    """Assemble a monster page, optionally dropping or replacing sections."""
    replace = replace or {}
    body = []
    for section, snippet in SECTIONS.items():
        if section in omit:
            continue
        body.append(replace.get(section, snippet))

    heading = f"<h1>{title}</h1>" if title else ""
    return f"<html><body>{heading}{''.join(body)}</body></html>"


@pytest.fixture
def page_sections():
    """Section snippets keyed by logical section name."""
    return dict(SECTIONS)


@pytest.fixture
def make_page_html():
    """Factory for monster page HTML."""
    return build_page_html


@pytest.fixture
def make_document():
    """Factory for parsed monster pages."""
    def _make(**kwargs):
        return html.fromstring(build_page_html(**kwargs))
    return _make


@pytest.fixture
def page_document(make_document):
    """Complete parsed monster page."""
    return make_document()


@pytest.fixture
def fragment():
    """Parse an HTML fragment into a single element."""
    return html.fragment_fromstring


@pytest.fixture(autouse=True, scope="function")
def block_live_http():
    """
    Globally block live HTTP for ALL unit tests.

    Tests that need a client inject a mocked session instead.
    """
    with patch('requests.sessions.Session.request') as mock_request:
        mock_request.side_effect = RuntimeError("Live HTTP is disabled in unit tests")
        yield mock_request
