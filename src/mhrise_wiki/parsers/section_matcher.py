"""
Heading Matching Strategies

Provides pluggable strategies for matching heading text to logical sections.
The same strategies match info box row labels to info fields.

Design:
- Strategy Pattern: Matchers are interchangeable
- Each matcher implements the same interface
- Locator is agnostic to matching strategy
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class SectionMatcher(ABC):
    """
    Abstract base class for heading matching strategies.

    Matches heading text to logical section names from the lookup table.
    """

    @abstractmethod
    def match(
        self,
        heading_text: str,
        lookup: Dict[str, str]
    ) -> Optional[str]:
        """
        Match heading text to a logical section name.

        Args:
            heading_text: Cleaned text of the heading element
            lookup: Dict mapping search text → logical section name

        Returns:
            Logical section name if matched, None otherwise
        """
        pass


class ExactMatcher(SectionMatcher):
    """
    Exact (case-insensitive, whitespace-normalized) comparison.

    Useful for lookups keyed by complete labels.
    """

    def match(
        self,
        heading_text: str,
        lookup: Dict[str, str]
    ) -> Optional[str]:
        """Match via exact string comparison."""
        heading_clean = ' '.join(heading_text.split()).lower()

        for search_text, section in lookup.items():
            if ' '.join(search_text.split()).lower() == heading_clean:
                return section

        return None


class SubstringMatcher(SectionMatcher):
    """
    Case-insensitive substring containment.

    Lookup entries are tried in order and the first one whose search text
    is contained in the heading wins, e.g. "Rathalos Weakness and Notes"
    matches "weakness and notes".
    """

    def match(
        self,
        heading_text: str,
        lookup: Dict[str, str]
    ) -> Optional[str]:
        """Match via substring containment."""
        heading_clean = ' '.join(heading_text.split()).lower()
        if not heading_clean:
            return None

        for search_text, section in lookup.items():
            if search_text.lower() in heading_clean:
                return section

        return None


class CascadeMatcher(SectionMatcher):
    """
    First non-None answer from an ordered chain of matchers.

    Example:
        >>> matcher = CascadeMatcher([ExactMatcher(), SubstringMatcher()])
        >>> matcher.match('Element', {'elem': 'other', 'element': 'element'})
        'element'
    """

    def __init__(self, matchers: List[SectionMatcher]):
        if not matchers:
            raise ValueError("CascadeMatcher needs at least one matcher")
        self.matchers = tuple(matchers)

    def match(
        self,
        heading_text: str,
        lookup: Dict[str, str]
    ) -> Optional[str]:
        """Ask each matcher in turn."""
        return next(
            (
                section
                for section in (m.match(heading_text, lookup) for m in self.matchers)
                if section is not None
            ),
            None
        )


def create_default_matcher() -> SectionMatcher:
    """
    Matcher for info box labels: exact label first, then substring.

    An exact label hit takes precedence over an earlier lookup entry that
    merely happens to be contained in the label ("Element" vs "elem").
    """
    return CascadeMatcher([ExactMatcher(), SubstringMatcher()])
