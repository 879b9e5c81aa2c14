"""
Field Parser Registry

Maps logical field names to pure functions converting a cleaned cell
string into a typed value. Parsers never raise: unparseable cells degrade
to a documented default or to None ("absent").

Material chances are returned as plain dicts ({'percentage': 45} or
{'percentage': 20, 'amount': 2}) and validated later by the models.
"""

import re
from functools import partial
from typing import Callable, Dict, List, Optional, Sequence

from mhrise_wiki.config import VocabularyConfig, get_config
from mhrise_wiki.parsers.vocabulary import match_many, to_token

_PERCENTAGE = re.compile(r'(?<![\d.])(\d+)\s*%')
_AMOUNT = re.compile(r'(?<![A-Za-z])[x×]\s*(\d)', re.IGNORECASE)
_LEADING_INT = re.compile(r'\s*(\d+)')
_SCOPE = re.compile(r'\(([^)]*)\)')
_STARS = ('★', '⭐')
_NONE_MARKS = ('✕', '×', '✖', 'x', 'X')

INT_SEPARATOR = ' / '


def is_placeholder(text: Optional[str], placeholders: Optional[Sequence[str]] = None) -> bool:
    """
    Check for a "no applicable value" glyph.

    Uses the configured glyphs unless a placeholder list is given.
    """
    if placeholders is None:
        return get_config().is_placeholder(text)
    return text is not None and text.strip() in placeholders


def split_lines(text: Optional[str]) -> List[str]:
    """
    Split on newlines and trim each line, dropping empty ones.

    Example:
        >>> split_lines(' Head \\n\\nTail')
        ['Head', 'Tail']
    """
    if not text:
        return []
    return [line.strip() for line in text.split('\n') if line.strip()]


def split_list(text: Optional[str], placeholders: Optional[Sequence[str]] = None) -> List[str]:
    """Split on newlines and commas, dropping placeholders."""
    if not text:
        return []
    items = []
    for line in split_lines(text):
        for item in line.split(','):
            item = item.strip()
            if item and not is_placeholder(item, placeholders):
                items.append(item)
    return items


def parse_int(
    text: Optional[str],
    default: Optional[int] = 0,
    placeholders: Optional[Sequence[str]] = None
) -> Optional[int]:
    """
    Parse the leading digits before the ' / ' separator.

    Example:
        >>> parse_int('45 / 30')
        45
        >>> parse_int('-', default=0)
        0
    """
    if not text or is_placeholder(text, placeholders):
        return default

    first = text.split(INT_SEPARATOR, 1)[0]
    match = _LEADING_INT.match(first)
    if not match:
        return default
    return int(match.group(1))


def int_with_default(
    default: Optional[int],
    placeholders: Optional[Sequence[str]] = None
) -> Callable[[str], Optional[int]]:
    """Build an integer parser with a field-specific default."""
    return partial(parse_int, default=default, placeholders=placeholders)


def _count_stars(text: str) -> int:
    return sum(text.count(star) for star in _STARS)


def parse_threat_level(text: Optional[str], placeholders: Optional[Sequence[str]] = None) -> int:
    """
    Threat level from a star rating or a number (0 when unreadable).

    Example:
        >>> parse_threat_level('★★★★')
        4
    """
    if text and _count_stars(text):
        return _count_stars(text)
    return parse_int(text, default=0, placeholders=placeholders)


def parse_effectiveness(text: Optional[str], placeholders: Optional[Sequence[str]] = None) -> Optional[int]:
    """
    Status effectiveness rank from stars, a "no effect" mark or a number.

    Example:
        >>> parse_effectiveness('★★★')
        3
        >>> parse_effectiveness('✕')
        0
        >>> parse_effectiveness('-') is None
        True
    """
    if not text or is_placeholder(text, placeholders):
        return None

    text = text.strip()
    stars = _count_stars(text)
    if stars:
        return stars
    if text in _NONE_MARKS:
        return 0
    return parse_int(text, default=None, placeholders=placeholders)


def parse_chance(text: Optional[str], placeholders: Optional[Sequence[str]] = None) -> Optional[Dict[str, int]]:
    """
    Decode a percentage with an optional repetition count.

    Example:
        >>> parse_chance('20% x2')
        {'percentage': 20, 'amount': 2}
        >>> parse_chance('45%')
        {'percentage': 45}
        >>> parse_chance('-') is None
        True
    """
    if not text or is_placeholder(text, placeholders):
        return None

    match = _PERCENTAGE.search(text)
    if not match:
        return None

    percentage = int(match.group(1))
    if percentage > 100:
        return None

    chance = {'percentage': percentage}
    amount = _AMOUNT.search(text)
    if amount:
        chance['amount'] = int(amount.group(1))
    return chance


def parse_scoped_chance(
    text: Optional[str],
    placeholders: Optional[Sequence[str]] = None
) -> Optional[Dict[str, Dict[str, int]]]:
    """
    Decode "chance% (scope)" lines into scope token → chance.

    Example:
        >>> parse_scoped_chance('45%(Head)\\n30%(Tail)')
        {'head': {'percentage': 45}, 'tail': {'percentage': 30}}
        >>> parse_scoped_chance('') is None
        True
    """
    scoped = {}
    for line in split_lines(text):
        if is_placeholder(line, placeholders) or '%' not in line:
            continue

        # Repetition markers count only outside the scope parentheses
        chance = parse_chance(_SCOPE.sub('', line), placeholders)
        if chance is None:
            continue

        remainder = line.split('%', 1)[1]
        scope_match = _SCOPE.search(remainder)
        label = scope_match.group(1) if scope_match else _AMOUNT.sub('', remainder)
        scope = to_token(label)
        if not scope:
            continue

        scoped[scope] = chance

    return scoped or None


def parse_vocabulary_list(
    vocabulary: Sequence[str],
    text: Optional[str],
    placeholders: Optional[Sequence[str]] = None
) -> Optional[List[str]]:
    """
    Match every listed label against a vocabulary.

    A placeholder or empty cell is "absent" (None), not an empty list.

    Example:
        >>> parse_vocabulary_list(['fire', 'water', 'ice'], 'Fire\\nIce')
        ['fire', 'ice']
    """
    if not text or is_placeholder(text, placeholders):
        return None
    return match_many(vocabulary, split_list(text, placeholders))


def parse_text(text: Optional[str], placeholders: Optional[Sequence[str]] = None) -> str:
    """Plain text field ('' for placeholders)."""
    if not text or is_placeholder(text, placeholders):
        return ''
    return text.strip()


def parse_material_name(text: Optional[str]) -> Dict[str, object]:
    """
    Split a material name cell into English name and localized names.

    Example:
        >>> parse_material_name('Rathalos Scale\\n火竜の鱗')
        {'material_name': 'Rathalos Scale', 'name_ja_zh': ['火竜の鱗']}
    """
    lines = split_lines(text)
    if not lines:
        return {'material_name': '', 'name_ja_zh': []}
    return {'material_name': lines[0], 'name_ja_zh': lines[1:]}


class FieldParserRegistry:
    """
    Fixed mapping from logical field name to a pure parse function.

    Vocabulary-dependent parsers are bound to the configured vocabularies
    when the registry is built.

    Example:
        >>> registry = FieldParserRegistry()
        >>> registry.parse('hitzone', '45 / 30')
        45
        >>> registry.parse('capture', '20% x2')
        {'percentage': 20, 'amount': 2}
    """

    def __init__(self, config: Optional[VocabularyConfig] = None):
        config = config or get_config()
        glyphs = list(config.markup.placeholders)

        def bind(parser, *args):
            return partial(parser, *args, placeholders=glyphs)

        self._parsers: Dict[str, Callable[[str], object]] = {
            # Info box
            'description': bind(parse_text),
            'monster_class': bind(parse_text),
            'threat_level': bind(parse_threat_level),
            'major_weakness': bind(parse_vocabulary_list, config.elements),
            'other_weakness': bind(parse_vocabulary_list, config.elements),
            'element': bind(parse_vocabulary_list, config.elements),
            'abnormal_status': bind(parse_vocabulary_list, config.monster_status_effects),
            # Weakness breakdown
            'hitzone': int_with_default(0, glyphs),
            # Status effects
            'effectiveness': bind(parse_effectiveness),
            # Kinsect extracts
            'kinsect_parts': bind(split_list),
            # Materials
            'material_name': parse_material_name,
            'target': bind(parse_chance),
            'carve': bind(parse_scoped_chance),
            'capture': bind(parse_chance),
            'part_break': bind(parse_scoped_chance),
            'drop': bind(parse_scoped_chance),
            'palico': bind(parse_chance),
        }

    @property
    def fields(self) -> List[str]:
        return list(self._parsers)

    def get(self, field: str) -> Callable[[str], object]:
        """
        Get the parser for a field.

        Raises:
            KeyError: If no parser is registered for the field
        """
        if field not in self._parsers:
            raise KeyError(f"No parser registered for field '{field}'")
        return self._parsers[field]

    def parse(self, field: str, text: Optional[str]) -> object:
        """Parse text with the field's parser."""
        return self.get(field)(text)
