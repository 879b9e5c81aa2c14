"""
Unit tests for Pydantic record models.
"""

import pytest
from pydantic import ValidationError


ATTACK_TYPES = ['sever', 'blunt', 'ammo', 'fire', 'water', 'thunder', 'ice', 'dragon']
STATUSES = [
    'poison', 'stun', 'paralysis', 'sleep', 'blastblight', 'exhaust',
    'fireblight', 'waterblight', 'thunderblight', 'iceblight'
]


@pytest.fixture
def record_data():
    """Minimal valid MonsterRecord input."""
    return {
        'name': 'Rathalos',
        'monster_class': 'Flying Wyvern',
        'threat_level': 5,
        'weakness_breakdown': {
            'overall': {t: 10 for t in ATTACK_TYPES},
            'tailTip': {t: 20 for t in ATTACK_TYPES},
        },
        'status_effects': {s: 2 for s in STATUSES},
    }


class TestMaterialChance:
    """Test suite for MaterialChance."""

    def test_amount_optional(self):
        """Amount is only set for repeated rewards."""
        from mhrise_wiki.models import MaterialChance

        assert MaterialChance(percentage=45).amount is None
        assert MaterialChance(percentage=20, amount=2).amount == 2

    @pytest.mark.parametrize('percentage', [-1, 101])
    def test_percentage_bounds(self, percentage):
        """Percentages stay within 0..100."""
        from mhrise_wiki.models import MaterialChance

        with pytest.raises(ValidationError):
            MaterialChance(percentage=percentage)


class TestMaterial:
    """Test suite for Material."""

    def test_from_parser_output(self):
        """Accepts snake_case field names and nested chance dicts."""
        from mhrise_wiki.models import Material

        material = Material(
            material_name='Rathalos Scale',
            name_ja_zh=['火竜の鱗'],
            carve={'body': {'percentage': 35}},
            part_break=None,
            capture={'percentage': 25, 'amount': 2},
        )

        assert material.carve['body'].percentage == 35
        assert material.capture.amount == 2

    def test_serializes_camel_case(self):
        """JSON output uses camelCase keys."""
        from mhrise_wiki.models import Material

        material = Material(material_name='Rathalos Plate', part_break={'head': {'percentage': 3}})
        data = material.model_dump(mode='json', by_alias=True, exclude_none=True)

        assert data['materialName'] == 'Rathalos Plate'
        assert data['partBreak'] == {'head': {'percentage': 3}}
        assert data['nameJaZh'] == []

    def test_requires_name(self):
        """A material row without a name is invalid."""
        from mhrise_wiki.models import Material

        with pytest.raises(ValidationError):
            Material(material_name='')


class TestMonsterRecord:
    """Test suite for MonsterRecord."""

    def test_valid_record(self, record_data):
        """Should build a record with optional sections absent."""
        from mhrise_wiki.models import MonsterRecord

        record = MonsterRecord(**record_data)

        assert record.name == 'Rathalos'
        assert record.kinsect_extracts is None
        assert record.materials is None
        assert record.weakness_breakdown['tailTip']['fire'] == 20

    def test_record_is_frozen(self, record_data):
        """Records are immutable once created."""
        from mhrise_wiki.models import MonsterRecord

        record = MonsterRecord(**record_data)

        with pytest.raises(ValidationError):
            record.name = 'Rathian'

    def test_missing_overall_fails(self, record_data):
        """A breakdown without 'overall' is rejected."""
        from mhrise_wiki.models import MonsterRecord

        del record_data['weakness_breakdown']['overall']

        with pytest.raises(ValidationError, match="overall"):
            MonsterRecord(**record_data)

    @pytest.mark.parametrize('rank', [4, -1])
    def test_status_rank_out_of_range(self, record_data, rank):
        """Status effectiveness 4 or -1 fails validation."""
        from mhrise_wiki.models import MonsterRecord

        record_data['status_effects']['poison'] = rank

        with pytest.raises(ValidationError):
            MonsterRecord(**record_data)

    def test_status_rank_must_be_int(self, record_data):
        """Ranks are strict integers; strings are not coerced."""
        from mhrise_wiki.models import MonsterRecord

        record_data['status_effects']['poison'] = '2'

        with pytest.raises(ValidationError):
            MonsterRecord(**record_data)

    def test_kinsect_extracts_need_every_color(self, record_data):
        """Kinsect extracts must list white, orange and red."""
        from mhrise_wiki.models import MonsterRecord

        record_data['kinsect_extracts'] = {'white': ['Wings']}

        with pytest.raises(ValidationError):
            MonsterRecord(**record_data)

    def test_serialized_keys(self, record_data):
        """Serialized records use camelCase and 'class'."""
        from mhrise_wiki.models import MonsterRecord

        data = MonsterRecord(**record_data).model_dump(mode='json', by_alias=True)

        assert data['class'] == 'Flying Wyvern'
        assert data['threatLevel'] == 5
        assert 'weaknessBreakdown' in data
        assert 'statusEffects' in data

    def test_accepts_alias_input(self, record_data):
        """Records can be rebuilt from their own serialized form."""
        from mhrise_wiki.models import MonsterRecord

        original = MonsterRecord(**record_data)
        rebuilt = MonsterRecord.model_validate(original.model_dump(by_alias=True))

        assert rebuilt == original


class TestExtractionResult:
    """Test suite for ExtractionResult."""

    def test_success(self, record_data):
        """A result with a record is a success."""
        from mhrise_wiki.models import ExtractionResult, MonsterRecord

        result = ExtractionResult(page_id='344983', record=MonsterRecord(**record_data))

        assert result.success

    def test_failure_row(self):
        """Failures convert to report rows."""
        from mhrise_wiki.models import ExtractionResult

        result = ExtractionResult(
            page_id='1', error_kind='SectionNotFoundError', error='missing', name='Rathalos'
        )

        assert not result.success
        assert result.failure() == {
            'page_id': '1',
            'name': 'Rathalos',
            'error_type': 'SectionNotFoundError',
            'error': 'missing',
        }
