"""
Reusable structural validators for Pydantic models.

These validators check composite monster fields against the vocabularies
in config/vocabulary.yaml and are used with Pydantic @field_validator.
"""

from typing import Dict, List, Optional
from mhrise_wiki.config import VocabularyConfig, get_config

OVERALL = 'overall'


def _describe_keys(actual, expected: List[str]) -> str:
    missing = [k for k in expected if k not in actual]
    extra = sorted(k for k in actual if k not in expected)
    return f"missing: {missing}, unexpected: {extra}"


def validate_weakness_breakdown(
    breakdown: Dict[str, Dict[str, int]],
    config: Optional[VocabularyConfig] = None
) -> Dict[str, Dict[str, int]]:
    """
    Validate a part → attack type → multiplier breakdown.

    Rules:
    - The 'overall' part must be present
    - Every part covers exactly the attack type vocabulary
    - Every multiplier is a non-negative integer

    Args:
        breakdown: Weakness breakdown to validate
        config: Vocabularies to check against (global config if None)

    Returns:
        The validated breakdown (unchanged if valid)

    Raises:
        ValueError: With the offending part and keys

    Example:
        >>> validate_weakness_breakdown({'head': {...}})  # Raises ValueError (no overall)
    """
    if OVERALL not in breakdown:
        raise ValueError(
            f"Weakness breakdown has no '{OVERALL}' part. "
            f"Parts found: {list(breakdown)}"
        )

    attack_types = (config or get_config()).attack_types

    for part, weakness in breakdown.items():
        if set(weakness) != set(attack_types):
            raise ValueError(
                f"Weakness for part '{part}' does not cover the attack types "
                f"({_describe_keys(weakness, attack_types)})"
            )

        for attack_type, value in weakness.items():
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(
                    f"Weakness '{part}'/'{attack_type}' is not an integer: {value!r}"
                )
            if value < 0:
                raise ValueError(
                    f"Weakness '{part}'/'{attack_type}' is negative: {value}"
                )

    return breakdown


def validate_status_effects(
    effects: Dict[str, int],
    config: Optional[VocabularyConfig] = None
) -> Dict[str, int]:
    """
    Validate a status effect → effectiveness rank table.

    Rules:
    - Keys are exactly the monster status effect vocabulary
    - Every rank is an integer between 0 and 3

    Raises:
        ValueError: With the offending keys or value

    Example:
        >>> validate_status_effects({'poison': 4, ...})  # Raises ValueError (out of range)
    """
    statuses = (config or get_config()).monster_status_effects

    if set(effects) != set(statuses):
        raise ValueError(
            f"Status effects do not cover the status vocabulary "
            f"({_describe_keys(effects, statuses)})"
        )

    for status, rank in effects.items():
        if isinstance(rank, bool) or not isinstance(rank, int):
            raise ValueError(f"Effectiveness of '{status}' is not an integer: {rank!r}")
        if not 0 <= rank <= 3:
            raise ValueError(
                f"Effectiveness of '{status}' must be between 0 and 3, got {rank}"
            )

    return effects


def validate_kinsect_extracts(
    extracts: Optional[Dict[str, List[str]]],
    config: Optional[VocabularyConfig] = None
) -> Optional[Dict[str, List[str]]]:
    """
    Validate that a kinsect extract map has exactly the extract colors.

    A part listed under several colors is passed through unchanged.
    """
    if extracts is None:
        return extracts

    colors = (config or get_config()).kinsect_extracts
    if set(extracts) != set(colors):
        raise ValueError(
            f"Kinsect extracts must have exactly {colors} "
            f"({_describe_keys(extracts, colors)})"
        )

    return extracts


def validate_ranks(
    materials: Optional[Dict[str, list]],
    config: Optional[VocabularyConfig] = None
) -> Optional[Dict[str, list]]:
    """Validate that materials are keyed by known rank tokens."""
    if materials is None:
        return materials

    ranks = (config or get_config()).ranks
    unknown = [rank for rank in materials if rank not in ranks]
    if unknown:
        raise ValueError(
            f"Unknown material ranks: {unknown}. Valid ranks: {ranks}"
        )

    return materials
