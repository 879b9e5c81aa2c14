"""
Service layer for mhrise-wiki.

- WikiClient: page fetching with retries and page discovery
"""

from mhrise_wiki.services.wiki_client import WikiClient, parse_monster_links

__all__ = [
    'WikiClient',
    'parse_monster_links'
]
