"""
Ordered prefix matching of raw labels against reference vocabularies.

Vocabulary order is significant: the first token the canonical label is a
prefix of wins, so a shortened label like "Ice" resolves to "iceblight"
when only blights are in the vocabulary.
"""

import re
from typing import Iterable, List, Optional, Sequence

# Words split on delimiters and on camelCase boundaries ("tailTip" → tail, Tip)
_WORD = re.compile(r'[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+')


def to_token(label: Optional[str]) -> str:
    """
    Canonicalize a label into a lower camelCase vocabulary token.

    Case-folds and strips delimiters (spaces, punctuation, parentheses).

    Example:
        >>> to_token('Tail Tip')
        'tailTip'
        >>> to_token('(Head)')
        'head'
        >>> to_token('tailTip')
        'tailTip'
        >>> to_token('  ')
        ''
    """
    if not label:
        return ''

    words = _WORD.findall(label)
    if not words:
        return ''

    first, rest = words[0].lower(), words[1:]
    return first + ''.join(w[:1].upper() + w[1:].lower() for w in rest)


def match_one(vocabulary: Sequence[str], label: Optional[str]) -> Optional[str]:
    """
    Find the first vocabulary token that the canonical label is a prefix of.

    Args:
        vocabulary: Ordered canonical tokens
        label: Raw label (e.g. 'Fire', 'Tail Tip', 'Ice Icon' first word)

    Returns:
        Matching token, or None for empty/unmatched labels

    Example:
        >>> match_one(['fireblight', 'iceblight'], 'Ice')
        'iceblight'
        >>> match_one(['fire', 'water'], 'Dragon') is None
        True
    """
    canonical = to_token(label).lower()
    if not canonical:
        return None

    for token in vocabulary:
        if token.lower().startswith(canonical):
            return token

    return None


def match_many(vocabulary: Sequence[str], labels: Iterable[str]) -> List[str]:
    """
    Match every label, dropping the ones that match nothing.

    Example:
        >>> match_many(['fire', 'water', 'ice'], ['Fire', '???', 'Ice'])
        ['fire', 'ice']
    """
    matched = []
    for label in labels:
        token = match_one(vocabulary, label)
        if token is not None:
            matched.append(token)
    return matched
