"""
Pydantic models for extracted monster records.

Schema Design:
- One frozen MonsterRecord per successfully extracted page
- Composite fields validated against the configured vocabularies
- Serialized with camelCase aliases (weaknessBreakdown, partBreak, ...)
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from mhrise_wiki.validators import (
    validate_kinsect_extracts,
    validate_ranks,
    validate_status_effects,
    validate_weakness_breakdown,
)

_RECORD_CONFIG = ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


def _context_config(info: ValidationInfo):
    """Config passed as model_validate(..., context={'config': ...}), if any."""
    return (info.context or {}).get('config')


class MaterialChance(BaseModel):
    """
    Odds of obtaining a material, with an optional repetition count.

    Example:
        >>> MaterialChance(percentage=20, amount=2)
    """

    percentage: int = Field(..., ge=0, le=100, description="Chance in percent")
    amount: Optional[int] = Field(
        default=None,
        ge=1,
        description="Times the reward is rolled (the 'x2' marker)"
    )

    model_config = _RECORD_CONFIG


class Material(BaseModel):
    """
    One material row of a rank's materials table.

    Scoped fields (carve, part_break, drop) map a sub-location token such
    as 'head' or 'riding' to its chance.
    """

    material_name: str = Field(..., min_length=1, examples=["Rathalos Scale"])
    name_ja_zh: List[str] = Field(
        default_factory=list,
        description="Japanese / Chinese names listed under the English name"
    )
    emblem: Optional[str] = Field(default=None, description="Material icon URL")
    target: Optional[MaterialChance] = None
    carve: Optional[Dict[str, MaterialChance]] = None
    capture: Optional[MaterialChance] = None
    part_break: Optional[Dict[str, MaterialChance]] = None
    drop: Optional[Dict[str, MaterialChance]] = None
    palico: Optional[MaterialChance] = None

    model_config = _RECORD_CONFIG


class MonsterRecord(BaseModel):
    """
    Complete record extracted from one monster page.

    Created once per successful extraction and immutable thereafter.

    Example:
        >>> record = MonsterRecord(
        ...     name="Rathalos",
        ...     monster_class="Flying Wyvern",
        ...     threat_level=5,
        ...     weakness_breakdown={'overall': {...}},
        ...     status_effects={'poison': 2, ...},
        ... )
        >>> record.model_dump(mode='json', by_alias=True)['weaknessBreakdown']
    """

    # === Info ===
    name: str = Field(..., min_length=1, examples=["Rathalos"])
    description: str = ''
    image: Optional[str] = None
    monster_class: str = Field(
        default='',
        alias='class',
        description="Monster class, e.g. Flying Wyvern"
    )
    threat_level: int = Field(default=0, ge=0)
    major_weakness: Optional[List[str]] = None
    other_weakness: Optional[List[str]] = None
    element: Optional[List[str]] = None
    abnormal_status: Optional[List[str]] = None

    # === Composite sections ===
    weakness_breakdown: Dict[str, Dict[str, StrictInt]]
    status_effects: Dict[str, StrictInt]
    kinsect_extracts: Optional[Dict[str, List[str]]] = None
    materials: Optional[Dict[str, List[Material]]] = None

    model_config = _RECORD_CONFIG

    @field_validator('weakness_breakdown')
    @classmethod
    def check_weakness_breakdown(
        cls, v: Dict[str, Dict[str, int]], info: ValidationInfo
    ) -> Dict[str, Dict[str, int]]:
        """Require the overall part and full attack type coverage."""
        return validate_weakness_breakdown(v, _context_config(info))

    @field_validator('status_effects')
    @classmethod
    def check_status_effects(cls, v: Dict[str, int], info: ValidationInfo) -> Dict[str, int]:
        """Require full status coverage with ranks 0-3."""
        return validate_status_effects(v, _context_config(info))

    @field_validator('kinsect_extracts')
    @classmethod
    def check_kinsect_extracts(cls, v, info: ValidationInfo):
        return validate_kinsect_extracts(v, _context_config(info))

    @field_validator('materials')
    @classmethod
    def check_materials(cls, v, info: ValidationInfo):
        return validate_ranks(v, _context_config(info))
