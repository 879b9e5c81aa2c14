"""
Logical section discovery for Game8 monster pages.

Key page conventions:
1. Every data section is introduced by a real heading element (h1-h6)
2. The section's data is the heading's immediately following sibling
3. That sibling is either a <table> or a tab-group container
"""

import logging
from typing import Dict, List, Optional, Tuple
from lxml import etree, html

from mhrise_wiki.config import MarkupConfig, get_config, get_section_lookup
from mhrise_wiki.exceptions import SectionNotFoundError
from mhrise_wiki.parsers.section_matcher import SectionMatcher, SubstringMatcher
from mhrise_wiki.parsers.text import normalize

logger = logging.getLogger(__name__)


def load_document(page_html: str) -> html.HtmlElement:
    """
    Parse raw page markup into an lxml document.

    Args:
        page_html: Raw HTML of the page

    Returns:
        Root HtmlElement

    Raises:
        ValueError: If the markup is empty or holds no elements
            (e.g. only a comment)
    """
    if not page_html or not page_html.strip():
        raise ValueError("Cannot parse an empty page")
    try:
        return html.fromstring(page_html)
    except etree.ParserError as e:
        raise ValueError(f"Page has no document: {e}") from e


def is_tab_group(element: html.HtmlElement, markup: Optional[MarkupConfig] = None) -> bool:
    """Check whether element is a tab-group container (by marker class)."""
    markup = markup or get_config().markup
    if not isinstance(element.tag, str) or element.tag != 'div':
        return False
    return markup.tab_container_class in (element.get('class') or '').split()


def is_section_element(element: html.HtmlElement, markup: Optional[MarkupConfig] = None) -> bool:
    """Check whether element can hold section data (table or tab group)."""
    if element is None or not isinstance(element.tag, str):
        return False
    return element.tag == 'table' or is_tab_group(element, markup)


def build_heading_index(
    document: html.HtmlElement,
    markup: Optional[MarkupConfig] = None
) -> List[Tuple[str, html.HtmlElement]]:
    """
    Collect (heading text, following section element) pairs in document order.

    Headings whose next sibling is neither a table nor a tab group are
    skipped.

    Args:
        document: Parsed page
        markup: Markup conventions (defaults to configured ones)

    Returns:
        List of (cleaned heading text, sibling element) tuples
    """
    markup = markup or get_config().markup
    heading_tags = set(markup.heading_tags)

    index = []
    for element in document.iter(*heading_tags):
        sibling = element.getnext()
        # Skip comments and processing instructions between heading and data
        while sibling is not None and not isinstance(sibling.tag, str):
            sibling = sibling.getnext()

        if not is_section_element(sibling, markup):
            continue

        index.append((normalize(element), sibling))

    return index


def find_sections(
    document: html.HtmlElement,
    lookup: Optional[Dict[str, str]] = None,
    matcher: Optional[SectionMatcher] = None,
    markup: Optional[MarkupConfig] = None
) -> Dict[str, html.HtmlElement]:
    """
    Map logical section names to the element following their heading.

    A heading matching no lookup entry is ignored. When two headings match
    the same logical section, the later one wins and a warning is logged.

    Args:
        document: Parsed page
        lookup: Heading substring → logical section (defaults to config)
        matcher: Matching strategy (defaults to SubstringMatcher)
        markup: Markup conventions (defaults to config)

    Returns:
        Dictionary mapping logical section name → table or tab-group element

    Example:
        >>> sections = find_sections(document)
        >>> sections['weapon_weakness'].tag
        'table'
    """
    lookup = lookup if lookup is not None else get_section_lookup()
    matcher = matcher or SubstringMatcher()

    sections: Dict[str, html.HtmlElement] = {}
    for heading_text, element in build_heading_index(document, markup):
        section = matcher.match(heading_text, lookup)
        if section is None:
            continue

        if section in sections:
            logger.warning(
                f"Section '{section}' matched again by heading '{heading_text}', "
                f"replacing earlier match"
            )
        sections[section] = element

    return sections


def require_section(
    sections: Dict[str, html.HtmlElement],
    section: str
) -> html.HtmlElement:
    """
    Get a located section or fail with SectionNotFoundError.

    Raises:
        SectionNotFoundError: If the section was not located
    """
    element = sections.get(section)
    if element is None:
        raise SectionNotFoundError(section)
    return element


def page_title(document: html.HtmlElement) -> Optional[str]:
    """Text of the first <h1>, used as the monster name fallback."""
    for h1 in document.iter('h1'):
        text = normalize(h1)
        if text:
            return text
    return None
