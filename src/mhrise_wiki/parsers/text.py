"""
Text normalization for Game8 markup.

Multi-line cell values are encoded with <br> tags, never with literal
newlines, so <br> is the only line separator that survives normalization.
"""

import copy
import re
from typing import List, Optional
from lxml import html

_INLINE_SPACE = re.compile(r'[ \t\r\f\v\xa0]+')


def normalize_text(text: Optional[str]) -> str:
    """
    Trim every line of text and drop blank lines.

    Idempotent: normalize_text(normalize_text(t)) == normalize_text(t).

    Example:
        >>> normalize_text('  45%(Head) \\n\\n 30%(Tail)  ')
        '45%(Head)\\n30%(Tail)'
    """
    if not text:
        return ''

    lines = []
    for line in text.split('\n'):
        line = _INLINE_SPACE.sub(' ', line).strip()
        if line:
            lines.append(line)
    return '\n'.join(lines)


def normalize(element: html.HtmlElement) -> str:
    """
    Get an element's text content with <br> tags turned into newlines.

    Works on a copy, so the source document is never modified.

    Args:
        element: lxml HTML element

    Returns:
        Cleaned text content ('' for empty elements)
    """
    if element is None:
        return ''

    clone = copy.deepcopy(element)
    for br in list(clone.iter('br')):
        if br is clone:
            return ''
        br.tail = '\n' + (br.tail or '')
        br.drop_tree()

    return normalize_text(clone.text_content())


def _images(element: html.HtmlElement) -> List[html.HtmlElement]:
    if element.tag == 'img':
        return [element]
    return list(element.iter('img'))


def icon_label(element: html.HtmlElement) -> str:
    """
    Get the first word of the first icon's alt text.

    Example:
        <th><img alt="Fire Icon"></th> → 'Fire'
    """
    for img in _images(element):
        words = (img.get('alt') or '').split()
        if words:
            return words[0]
    return ''


def icon_labels(element: html.HtmlElement) -> List[str]:
    """First word of the alt text of every icon in the element."""
    labels = []
    for img in _images(element):
        words = (img.get('alt') or '').split()
        if words:
            labels.append(words[0])
    return labels


def icon_source(element: html.HtmlElement) -> Optional[str]:
    """Source URL of the first icon (lazy-loaded data-src preferred)."""
    for img in _images(element):
        src = img.get('data-src') or img.get('src')
        if src:
            return src
    return None


def cell_text(element: html.HtmlElement) -> str:
    """
    Text of a table cell, falling back to icon labels for icon-only cells.

    Example:
        <td><img alt="Fire Icon"><img alt="Ice Icon"></td> → 'Fire\\nIce'
    """
    text = normalize(element)
    if text:
        return text
    return '\n'.join(icon_labels(element))
