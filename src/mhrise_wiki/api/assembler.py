"""
Record assembler for Game8 monster pages.

extract_monster() coordinates the complete extraction of one page:
- Locate logical sections once (Section Locator)
- Normalize each section's table(s) (Table Normalizer)
- Convert cells with the Field Parser Registry
- Merge the weapon and elemental weakness tables
- Validate composite fields while building the frozen MonsterRecord

Design Philosophy:
- Stateless: depends only on the document and the static configuration
- All-or-nothing: any section error aborts the page, never a partial record
- try_extract() turns errors into an ExtractionResult for batch callers
"""

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Union
import logging

from lxml import html
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_snake

from mhrise_wiki.config import VocabularyConfig, get_config
from mhrise_wiki.exceptions import (
    ExtractionError,
    SectionNotFoundError,
    UnrecognizedTableShapeError,
    ValidationError,
)
from mhrise_wiki.models.monster import MonsterRecord
from mhrise_wiki.models.result import ExtractionResult
from mhrise_wiki.parsers.fields import FieldParserRegistry
from mhrise_wiki.parsers.section_locator import (
    find_sections,
    is_tab_group,
    load_document,
    page_title,
    require_section,
)
from mhrise_wiki.parsers.section_matcher import create_default_matcher
from mhrise_wiki.parsers.table_parser import (
    NormalizedTable,
    extract_tabs,
    merge_tables,
    parse_key_value_table,
    parse_table,
    section_tables,
)
from mhrise_wiki.parsers.text import icon_source
from mhrise_wiki.parsers.vocabulary import match_one, to_token

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ['info', 'weapon_weakness', 'element_weakness', 'status_effects']
OPTIONAL_SECTIONS = ['kinsect_extracts', 'materials']

_FIELD_BY_ALIAS = {
    (info.alias or field): field
    for field, info in MonsterRecord.model_fields.items()
}


@contextmanager
def _section_context(section: str):
    """Attribute extraction errors raised inside the block to a section."""
    try:
        yield
    except ExtractionError as e:
        if e.section is None:
            e.section = section
        raise


def _is_horizontal(table: NormalizedTable, vocabulary: List[str]) -> bool:
    """
    Check whether a table lists vocabulary items across its header.

    Horizontal tables carry one value row under a header of tokens, e.g.
    [Status | Poison | Sleep | ...] / [Effectiveness | ★★ | ★ | ...].
    """
    if not table.columns:
        return False
    matched = [c for c in table.columns if match_one(vocabulary, c) is not None]
    return len(matched) * 2 > len(table.columns)


def _vocabulary_values(
    tables: List[NormalizedTable],
    vocabulary: List[str]
) -> Dict[str, str]:
    """
    Collect vocabulary token → raw cell text from vertical or horizontal tables.

    Vertical tables are keyed by their first cell and read the first value
    column; horizontal tables read their first data row. Labels outside the
    vocabulary are skipped.
    """
    values: Dict[str, str] = {}

    for table in tables:
        if not table.columns:
            raise UnrecognizedTableShapeError(
                f"Table '{table.name or ''}' has no value columns"
            )

        if _is_horizontal(table, vocabulary):
            if not table.rows:
                continue
            row = table.rows[0]
            for column, text in row.values.items():
                token = match_one(vocabulary, column)
                if token is not None:
                    values.setdefault(token, text)
            continue

        value_column = table.column_names[0]
        for row in table.rows:
            token = match_one(vocabulary, row.key)
            if token is None:
                logger.debug(f"Skipping row '{row.key}' (not in {vocabulary})")
                continue
            values.setdefault(token, row.get(value_column))

    return values


def extract_info(
    element: html.HtmlElement,
    registry: FieldParserRegistry,
    config: VocabularyConfig
) -> Dict[str, Any]:
    """
    Read info box fields (class, threat level, weaknesses, ...).

    Args:
        element: Element following the info heading (must be a table)
        registry: Field parsers
        config: Vocabulary configuration

    Returns:
        Dictionary keyed by MonsterRecord field names

    Raises:
        UnrecognizedTableShapeError: If element is not a table
    """
    pairs = parse_key_value_table(element)
    matcher = create_default_matcher()

    info: Dict[str, Any] = {}
    for label, text in pairs.items():
        field = matcher.match(label, config.info_lookup)
        if field is None or field in info:
            continue
        info[field] = registry.parse(field, text)

    info['image'] = icon_source(element)
    return info


def extract_weakness_breakdown(
    weapon_element: html.HtmlElement,
    elemental_element: html.HtmlElement,
    registry: FieldParserRegistry,
    config: VocabularyConfig
) -> Dict[str, Dict[str, int]]:
    """
    Merge weapon and elemental damage tables into part → attack type → value.

    Part names are canonicalized ("Tail Tip" → "tailTip", "Overall" →
    "overall"); columns outside the attack type vocabulary are ignored.

    Raises:
        UnrecognizedTableShapeError: On malformed or conflicting tables
    """
    with _section_context('weapon_weakness'):
        tables = section_tables(weapon_element, config.markup)
    with _section_context('element_weakness'):
        tables += section_tables(elemental_element, config.markup)

    breakdown: Dict[str, Dict[str, int]] = {}
    # Rows are matched on canonical part names so "Tail tip" meets "Tail Tip"
    for part, columns in merge_tables(tables, key=to_token).items():
        if not part:
            logger.warning("Skipping weakness row without a part name")
            continue

        weakness = breakdown.setdefault(part, {})
        for column, text in columns.items():
            attack_type = match_one(config.attack_types, column)
            if attack_type is None:
                logger.debug(f"Ignoring weakness column '{column}'")
                continue
            weakness[attack_type] = registry.parse('hitzone', text)

    return breakdown


def extract_status_effects(
    element: html.HtmlElement,
    registry: FieldParserRegistry,
    config: VocabularyConfig
) -> Dict[str, Optional[int]]:
    """
    Read status effect → effectiveness rank.

    Unreadable ranks are kept as None so validation rejects them.
    """
    statuses = config.monster_status_effects
    raw = _vocabulary_values(section_tables(element, config.markup), statuses)
    return {
        status: registry.parse('effectiveness', text)
        for status, text in raw.items()
    }


def extract_kinsect_extracts(
    element: html.HtmlElement,
    registry: FieldParserRegistry,
    config: VocabularyConfig
) -> Dict[str, List[str]]:
    """
    Read extract color → part names.

    Every configured color is present; colors missing from the page get an
    empty list. A part listed under several colors is kept under each.
    """
    colors = config.kinsect_extracts
    raw = _vocabulary_values(section_tables(element, config.markup), colors)

    extracts: Dict[str, List[str]] = {color: [] for color in colors}
    for color, text in raw.items():
        extracts[color] = registry.parse('kinsect_parts', text)
    return extracts


def _material_row(row, registry: FieldParserRegistry, config: VocabularyConfig) -> Dict[str, Any]:
    material: Dict[str, Any] = dict(registry.parse('material_name', row.key))
    material['emblem'] = row.icon

    for column, text in row.values.items():
        token = match_one(config.material_columns, column)
        if token is None:
            continue
        field = to_snake(token)
        material.setdefault(field, registry.parse(field, text))

    return material


def extract_materials(
    element: html.HtmlElement,
    registry: FieldParserRegistry,
    config: VocabularyConfig
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Read materials by rank from a tab group (one tab per rank).

    Raises:
        UnrecognizedTableShapeError: If the section is not a tab group
    """
    if not is_tab_group(element, config.markup):
        raise UnrecognizedTableShapeError(
            f"Materials section must be a tab group, got <{element.tag}>"
        )

    materials: Dict[str, List[Dict[str, Any]]] = {}
    for tab in extract_tabs(element, config.markup):
        rank = match_one(config.ranks, tab.name)
        if rank is None:
            logger.warning(f"Skipping materials tab '{tab.name}' (unknown rank)")
            continue

        table = parse_table(tab.table, name=tab.name)
        rows = [_material_row(row, registry, config) for row in table.rows]
        materials[rank] = [m for m in rows if m['material_name']]

    return materials


def extract_monster(
    document: html.HtmlElement,
    name: Optional[str] = None,
    config: Optional[VocabularyConfig] = None,
    registry: Optional[FieldParserRegistry] = None
) -> MonsterRecord:
    """
    Build a validated MonsterRecord from a parsed page.

    Args:
        document: Parsed page (see load_document)
        name: Monster name (defaults to the page's <h1> text)
        config: Vocabulary configuration (defaults to config/vocabulary.yaml)
        registry: Field parsers (defaults to FieldParserRegistry(config))

    Returns:
        Frozen MonsterRecord

    Raises:
        SectionNotFoundError: If a required section or the name is missing
        UnrecognizedTableShapeError: If a section has an unexpected shape
        ValidationError: If a composite field fails its invariants

    Example:
        >>> record = extract_monster(load_document(page_html), name="Rathalos")
        >>> record.weakness_breakdown['overall']['fire']
        0
    """
    config = config or get_config()
    registry = registry or FieldParserRegistry(config)

    sections = find_sections(document, config.section_lookup, markup=config.markup)
    logger.debug(f"Located sections: {sorted(sections)}")

    for section in REQUIRED_SECTIONS:
        require_section(sections, section)

    with _section_context('info'):
        info = extract_info(sections['info'], registry, config)

    weakness_breakdown = extract_weakness_breakdown(
        sections['weapon_weakness'], sections['element_weakness'], registry, config
    )

    with _section_context('status_effects'):
        status_effects = extract_status_effects(sections['status_effects'], registry, config)

    kinsect_extracts = None
    if 'kinsect_extracts' in sections:
        with _section_context('kinsect_extracts'):
            kinsect_extracts = extract_kinsect_extracts(
                sections['kinsect_extracts'], registry, config
            )

    materials = None
    if 'materials' in sections:
        with _section_context('materials'):
            materials = extract_materials(sections['materials'], registry, config)

    name = name or page_title(document)
    if not name:
        raise SectionNotFoundError('name', "Page has no title and no name was given")

    try:
        return MonsterRecord.model_validate(
            {
                'name': name,
                **info,
                'weakness_breakdown': weakness_breakdown,
                'status_effects': status_effects,
                'kinsect_extracts': kinsect_extracts,
                'materials': materials,
            },
            context={'config': config}
        )
    except PydanticValidationError as e:
        errors = e.errors()
        section = str(errors[0]['loc'][0]) if errors and errors[0]['loc'] else None
        # Error locations use aliases (weaknessBreakdown); report field names
        section = _FIELD_BY_ALIAS.get(section, section)
        raise ValidationError(
            f"Invalid record for '{name}': {e}",
            section=section
        ) from e


def try_extract(
    page_id: Union[str, int],
    page: Union[str, html.HtmlElement, None],
    name: Optional[str] = None,
    config: Optional[VocabularyConfig] = None
) -> ExtractionResult:
    """
    Extract one page, reporting failure as a value instead of raising.

    Args:
        page_id: Page identity used in reports
        page: Raw HTML, parsed document, or None when nothing was fetched
        name: Optional monster name
        config: Vocabulary configuration

    Returns:
        ExtractionResult with either a record or an error kind and message.
        A missing page, or one without any element, is reported with
        kind 'FetchError'.
    """
    page_id = str(page_id)

    if page is None or (isinstance(page, str) and not page.strip()):
        return ExtractionResult(
            page_id=page_id,
            error_kind='FetchError',
            error='No document was fetched',
            name=name
        )

    try:
        document = load_document(page) if isinstance(page, str) else page
    except ValueError as e:
        logger.warning(f"Page {page_id} ({name or 'unknown'}) holds no document: {e}")
        return ExtractionResult(
            page_id=page_id,
            error_kind='FetchError',
            error=str(e),
            name=name
        )

    try:
        record = extract_monster(document, name=name, config=config)
    except ExtractionError as e:
        logger.warning(
            f"Extraction failed for page {page_id} ({name or 'unknown'}): "
            f"{e.kind} in section '{e.section}': {e}"
        )
        return ExtractionResult(
            page_id=page_id,
            error_kind=e.kind,
            error=str(e),
            name=name
        )

    return ExtractionResult(page_id=page_id, record=record, name=record.name)
