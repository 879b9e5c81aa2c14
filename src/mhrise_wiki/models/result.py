"""
Per-page extraction outcome.

Extraction failures are values, not exceptions, once they reach the batch
layer: one page's failure never aborts the other pages of a batch.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from mhrise_wiki.models.monster import MonsterRecord


@dataclass(frozen=True)
class ExtractionResult:
    """Result of extracting a single page."""
    page_id: str
    record: Optional[MonsterRecord] = None
    error_kind: Optional[str] = None  # 'SectionNotFoundError', 'FetchError', ...
    error: Optional[str] = None
    name: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.record is not None

    def failure(self) -> Dict[str, Any]:
        """Row for the failures report."""
        return {
            'page_id': self.page_id,
            'name': self.name or '',
            'error_type': self.error_kind,
            'error': self.error,
        }
