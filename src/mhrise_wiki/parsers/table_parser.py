"""
Table normalization for Game8 section elements.

Turns a plain <table> or a tab-group container into NormalizedTable objects:
- Column names come from header text, or from the icon alt text when the
  header cell only holds an icon
- Row cells are aligned to columns by position, never by name
- Tab groups yield one table per tab, ordered by tab position
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
from lxml import html

from mhrise_wiki.config import MarkupConfig, get_config
from mhrise_wiki.exceptions import UnrecognizedTableShapeError
from mhrise_wiki.parsers.section_locator import is_tab_group
from mhrise_wiki.parsers.text import cell_text, icon_label, icon_source, normalize
from mhrise_wiki.parsers.vocabulary import to_token


@dataclass(frozen=True)
class NormalizedRow:
    """One data row: first-cell key plus column token → cleaned text."""
    key: str
    values: Dict[str, str]
    icon: Optional[str] = None

    def get(self, column: str, default: str = '') -> str:
        return self.values.get(column, default)


@dataclass(frozen=True)
class NormalizedTable:
    """Uniform view of a table: ordered columns and rows."""
    columns: Dict[str, int]
    rows: List[NormalizedRow] = field(default_factory=list)
    name: Optional[str] = None

    @property
    def column_names(self) -> List[str]:
        return list(self.columns)

    def row(self, key: str) -> Optional[NormalizedRow]:
        """First row whose key equals key (case-insensitive)."""
        for row in self.rows:
            if row.key.lower() == key.lower():
                return row
        return None


@dataclass(frozen=True)
class Tab:
    """One tab of a tab group."""
    name: str
    position: int
    table: html.HtmlElement


def _table_rows(table: html.HtmlElement) -> List[html.HtmlElement]:
    # lxml's HTML parser does not insert <tbody>, so both layouts occur
    return table.xpath('./tr | ./thead/tr | ./tbody/tr | ./tfoot/tr')


def _row_cells(row: html.HtmlElement) -> List[html.HtmlElement]:
    return row.xpath('./th | ./td')


def _header_columns(header_cells: List[html.HtmlElement], table_name: Optional[str]) -> Dict[str, int]:
    columns: Dict[str, int] = {}

    for position, cell in enumerate(header_cells[1:], start=1):
        label = normalize(cell) or icon_label(cell)
        column = to_token(label)

        if not column:
            raise UnrecognizedTableShapeError(
                f"Header cell {position} of table '{table_name or ''}' has no text or icon label"
            )
        if column in columns:
            raise UnrecognizedTableShapeError(
                f"Duplicate column '{column}' in table '{table_name or ''}'"
            )

        columns[column] = position

    return columns


def parse_table(table_elem: html.HtmlElement, name: Optional[str] = None) -> NormalizedTable:
    """
    Normalize a plain table whose first row is the header.

    Args:
        table_elem: lxml <table> element
        name: Optional table name (tab label)

    Returns:
        NormalizedTable where each row is keyed by its first cell:
        header ['Part', 'Fire', 'Water'] + row ['Head', '30', '15'] →
        NormalizedRow(key='Head', values={'fire': '30', 'water': '15'})

    Raises:
        UnrecognizedTableShapeError: If the element is not a table, has no
            header, or a row's cell count differs from the header's
    """
    if not isinstance(table_elem.tag, str) or table_elem.tag != 'table':
        raise UnrecognizedTableShapeError(
            f"Expected <table>, got <{table_elem.tag}>"
        )

    rows = _table_rows(table_elem)
    if not rows:
        raise UnrecognizedTableShapeError(f"Table '{name or ''}' has no rows")

    header_cells = _row_cells(rows[0])
    if not header_cells:
        raise UnrecognizedTableShapeError(f"Table '{name or ''}' has an empty header row")

    columns = _header_columns(header_cells, name)

    parsed_rows = []
    for index, tr in enumerate(rows[1:], start=1):
        cells = _row_cells(tr)
        if not cells:
            continue

        if len(cells) != len(header_cells):
            raise UnrecognizedTableShapeError(
                f"Row {index} of table '{name or ''}' has {len(cells)} cells, "
                f"header has {len(header_cells)}"
            )

        parsed_rows.append(NormalizedRow(
            key=cell_text(cells[0]),
            values={column: cell_text(cells[position]) for column, position in columns.items()},
            icon=icon_source(cells[0])
        ))

    return NormalizedTable(columns=columns, rows=parsed_rows, name=name)


def extract_tabs(
    container: html.HtmlElement,
    markup: Optional[MarkupConfig] = None
) -> List[Tab]:
    """
    Pair every tab label with the table of the panel sharing its index.

    Args:
        container: Tab-group container element
        markup: Markup conventions (defaults to config)

    Returns:
        Tabs ordered by position

    Raises:
        UnrecognizedTableShapeError: If labels are missing, an index is not
            an integer, an index repeats, or a panel has no table
    """
    markup = markup or get_config().markup
    attribute = markup.tab_index_attribute

    labels = container.xpath(f'.//{markup.tab_label_tag}[@{attribute}]')
    if not labels:
        raise UnrecognizedTableShapeError("Tab group has no tab labels")

    panels = {}
    for panel in container.xpath(f'.//*[@{attribute}]'):
        if markup.tab_panel_class in (panel.get('class') or '').split():
            panels.setdefault(panel.get(attribute).strip(), panel)

    tabs = []
    seen = set()
    for label in labels:
        raw_index = label.get(attribute).strip()
        try:
            position = int(raw_index)
        except ValueError:
            raise UnrecognizedTableShapeError(
                f"Tab index '{raw_index}' is not an integer"
            )

        if position in seen:
            raise UnrecognizedTableShapeError(f"Duplicate tab index {position}")
        seen.add(position)

        panel = panels.get(raw_index)
        table = None
        if panel is not None:
            table = next(panel.iter('table'), None)
        if table is None:
            raise UnrecognizedTableShapeError(
                f"Tab {position} ('{normalize(label)}') has no table"
            )

        tabs.append(Tab(
            name=normalize(label) or icon_label(label),
            position=position,
            table=table
        ))

    return sorted(tabs, key=lambda tab: tab.position)


def section_tables(
    element: html.HtmlElement,
    markup: Optional[MarkupConfig] = None
) -> List[NormalizedTable]:
    """
    Normalize a section element into one table (plain) or one per tab.

    Raises:
        UnrecognizedTableShapeError: If element is neither a table nor a tab group
    """
    if isinstance(element.tag, str) and element.tag == 'table':
        return [parse_table(element)]

    if is_tab_group(element, markup):
        return [
            parse_table(tab.table, name=tab.name)
            for tab in extract_tabs(element, markup)
        ]

    raise UnrecognizedTableShapeError(
        f"Expected a table or tab group, got <{element.tag}>"
    )


def merge_tables(
    tables: List[NormalizedTable],
    key: Optional[Callable[[str], str]] = None
) -> Dict[str, Dict[str, str]]:
    """
    Deep-merge structurally parallel tables into one row-keyed mapping.

    Rows are matched by key, canonicalized with key() when given; columns
    from every table are kept. The same (row, column) pair may only appear
    twice with identical text.

    Args:
        tables: Normalized tables (e.g. weapon and elemental weakness)
        key: Row key canonicalizer, e.g. to_token

    Returns:
        Dictionary mapping row key → {column: text}, in first-seen order

    Raises:
        UnrecognizedTableShapeError: On conflicting values for a (row, column)
    """
    merged: Dict[str, Dict[str, str]] = {}

    for table in tables:
        for row in table.rows:
            row_key = key(row.key) if key else row.key
            target = merged.setdefault(row_key, {})
            for column, text in row.values.items():
                if column in target and target[column] != text:
                    raise UnrecognizedTableShapeError(
                        f"Conflicting values for '{row_key}'/'{column}': "
                        f"'{target[column]}' vs '{text}'"
                    )
                target[column] = text

    return merged


def parse_key_value_table(table_elem: html.HtmlElement) -> Dict[str, str]:
    """
    Read a label/value table (cells taken in pairs per row).

    Rows with fewer than two cells (e.g. an image banner) are skipped and
    the first occurrence of a label wins.

    Example:
        <tr><th>Class</th><td>Flying Wyvern</td></tr> → {'Class': 'Flying Wyvern'}

    Raises:
        UnrecognizedTableShapeError: If the element is not a table
    """
    if not isinstance(table_elem.tag, str) or table_elem.tag != 'table':
        raise UnrecognizedTableShapeError(
            f"Expected <table>, got <{table_elem.tag}>"
        )

    pairs: Dict[str, str] = {}
    for tr in _table_rows(table_elem):
        cells = _row_cells(tr)
        for i in range(0, len(cells) - 1, 2):
            label = cell_text(cells[i])
            if label and label not in pairs:
                pairs[label] = cell_text(cells[i + 1])

    return pairs
