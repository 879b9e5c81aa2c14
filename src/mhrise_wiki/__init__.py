"""
mhrise-wiki: Monster Hunter Rise monster data extraction from Game8 pages.

Main package exports for user-facing API.
"""

from mhrise_wiki.api import MonsterPipeline, extract_monster, try_extract
from mhrise_wiki.models import MonsterRecord, ExtractionResult
from mhrise_wiki.parsers import load_document

__all__ = [
    'MonsterPipeline',
    'extract_monster',
    'try_extract',
    'MonsterRecord',
    'ExtractionResult',
    'load_document',
    'extract_monster_from_html'
]


def extract_monster_from_html(page_html: str, name: str = None) -> MonsterRecord:
    """
    Parse raw page HTML and extract its monster record.

    Args:
        page_html: Raw HTML of a monster page
        name: Optional monster name (defaults to the page's <h1>)

    Returns:
        Validated MonsterRecord

    Raises:
        ExtractionError: If a required section is missing or malformed

    Example:
        >>> from mhrise_wiki import extract_monster_from_html
        >>> record = extract_monster_from_html(page_html, name="Rathalos")
        >>> record.status_effects['poison']
        2
    """
    return extract_monster(load_document(page_html), name=name)
