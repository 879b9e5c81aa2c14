"""
Extraction error kinds.

Field parsers never raise; these errors are fatal to a single page's
extraction and are reported with their kind by the batch pipeline.
"""

from typing import Optional


class ExtractionError(Exception):
    """
    Base class for errors that abort extraction of one page.

    Attributes:
        section: Logical section the error relates to (if any)
    """

    kind = 'ExtractionError'

    def __init__(self, message: str, section: Optional[str] = None):
        super().__init__(message)
        self.section = section


class SectionNotFoundError(ExtractionError):
    """A required logical section's heading was not located."""

    kind = 'SectionNotFoundError'

    def __init__(self, section: str, message: Optional[str] = None):
        super().__init__(
            message or f"Required section '{section}' not found",
            section=section
        )


class UnrecognizedTableShapeError(ExtractionError):
    """
    The element following a matched heading is neither a plain table nor a
    tab group, or its header and row cell counts disagree.
    """

    kind = 'UnrecognizedTableShapeError'


class ValidationError(ExtractionError):
    """
    A composite field failed its structural invariant.

    Not to be confused with pydantic.ValidationError, which the assembler
    converts into this error.
    """

    kind = 'ValidationError'


class FetchError(Exception):
    """Network or transport failure while obtaining a page."""

    kind = 'FetchError'

    def __init__(self, page_id, message: str):
        super().__init__(message)
        self.page_id = page_id
