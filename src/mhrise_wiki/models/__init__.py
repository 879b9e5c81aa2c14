"""
Pydantic models for extracted records and per-page results.
"""

from mhrise_wiki.models.monster import MaterialChance, Material, MonsterRecord
from mhrise_wiki.models.result import ExtractionResult

__all__ = [
    'MaterialChance',
    'Material',
    'MonsterRecord',
    'ExtractionResult',
]
