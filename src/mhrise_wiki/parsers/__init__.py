"""
Parsing modules for Game8 monster pages.

Page conventions:
- Sections are located by heading text, not by position
- A section's data is the heading's next sibling: a table or a tab group
- Multi-line cells use <br>; icon-only cells carry their label in alt text
- Field parsers never raise; shape problems raise ExtractionError subclasses
"""

from .text import normalize, normalize_text, cell_text, icon_label
from .vocabulary import to_token, match_one, match_many
from .section_locator import load_document, build_heading_index, find_sections, require_section
from .table_parser import (
    NormalizedRow,
    NormalizedTable,
    Tab,
    parse_table,
    extract_tabs,
    section_tables,
    merge_tables,
    parse_key_value_table,
)
from .fields import FieldParserRegistry
from .section_matcher import (
    SectionMatcher,
    ExactMatcher,
    SubstringMatcher,
    CascadeMatcher,
    create_default_matcher
)

__all__ = [
    # Text
    'normalize',
    'normalize_text',
    'cell_text',
    'icon_label',
    # Vocabulary
    'to_token',
    'match_one',
    'match_many',
    # Sections
    'load_document',
    'build_heading_index',
    'find_sections',
    'require_section',
    # Tables
    'NormalizedRow',
    'NormalizedTable',
    'Tab',
    'parse_table',
    'extract_tabs',
    'section_tables',
    'merge_tables',
    'parse_key_value_table',
    # Fields
    'FieldParserRegistry',
    # Matching Strategies
    'SectionMatcher',
    'ExactMatcher',
    'SubstringMatcher',
    'CascadeMatcher',
    'create_default_matcher',
]
