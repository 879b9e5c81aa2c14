"""
Discovery helper classes for exploring the reference vocabularies.

Provides user-facing APIs to list the canonical tokens configured in
config/vocabulary.yaml and to resolve raw labels against them.
"""

from typing import List, Optional
from mhrise_wiki.config import get_config
from mhrise_wiki.parsers.vocabulary import match_one


class _Vocabulary:
    """
    Base helper over one configured vocabulary.

    All methods return copies to prevent accidental mutation of the
    shared configuration.
    """

    @classmethod
    def _tokens(cls) -> List[str]:
        raise NotImplementedError

    @classmethod
    def list_available(cls) -> List[str]:
        """
        List canonical tokens in matching order.

        Example:
            >>> Elements.list_available()
            ['fire', 'water', 'thunder', 'ice', 'dragon']
        """
        return list(cls._tokens())

    @classmethod
    def is_valid(cls, token: str) -> bool:
        """
        Check if a token is canonical.

        Example:
            >>> Elements.is_valid('fire')
            True
            >>> Elements.is_valid('Fire')
            False
        """
        return token in cls._tokens()

    @classmethod
    def resolve(cls, label: str) -> Optional[str]:
        """
        Resolve a raw label to its canonical token.

        Example:
            >>> StatusEffects.resolve('Ice')
            'iceblight'
        """
        return match_one(cls._tokens(), label)


class Elements(_Vocabulary):
    """Element tokens (fire, water, thunder, ice, dragon)."""

    @classmethod
    def _tokens(cls) -> List[str]:
        return get_config().elements


class AttackTypes(_Vocabulary):
    """
    Attack types of a weakness breakdown: weapon damage then elements.

    Example:
        >>> AttackTypes.list_available()[:3]
        ['sever', 'blunt', 'ammo']
    """

    @classmethod
    def _tokens(cls) -> List[str]:
        return get_config().attack_types


class StatusEffects(_Vocabulary):
    """Status effects a monster can be afflicted with (abnormal statuses and blights)."""

    @classmethod
    def _tokens(cls) -> List[str]:
        return get_config().monster_status_effects


class KinsectExtracts(_Vocabulary):
    """Kinsect extract colors (white, orange, red)."""

    @classmethod
    def _tokens(cls) -> List[str]:
        return get_config().kinsect_extracts
