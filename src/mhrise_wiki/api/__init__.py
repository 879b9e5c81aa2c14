"""
User-facing API interfaces for mhrise-wiki.

This module provides the record assembler and the batch pipeline.
"""

from mhrise_wiki.api.assembler import extract_monster, try_extract
from mhrise_wiki.api.pipeline import MonsterPipeline, BatchResult

__all__ = [
    'extract_monster',
    'try_extract',
    'MonsterPipeline',
    'BatchResult'
]
