"""
Unit tests for vocabulary tokens and prefix matching.
"""

import pytest


class TestToToken:
    """Test suite for to_token()."""

    @pytest.mark.parametrize('label,expected', [
        ('Tail Tip', 'tailTip'),
        ('Overall', 'overall'),
        ('(Head)', 'head'),
        ('Part Break', 'partBreak'),
        ('tailTip', 'tailTip'),
        ('High Rank', 'highRank'),
        ('  ', ''),
        ('', ''),
        (None, ''),
    ])
    def test_to_token(self, label, expected):
        """Should produce lower camelCase tokens."""
        from mhrise_wiki.parsers.vocabulary import to_token

        assert to_token(label) == expected

    def test_idempotent(self):
        """A token should canonicalize to itself."""
        from mhrise_wiki.parsers.vocabulary import to_token

        token = to_token('Left Wing Arm')
        assert to_token(token) == token


class TestMatchOne:
    """Test suite for match_one()."""

    def test_every_token_matches_itself(self):
        """match_one(V, v) == v for every token of every configured vocabulary."""
        from mhrise_wiki.config import get_config
        from mhrise_wiki.parsers.vocabulary import match_one

        config = get_config()
        vocabularies = [
            config.elements,
            config.weapon_damage,
            config.attack_types,
            config.monster_status_effects,
            config.kinsect_extracts,
            config.ranks,
            config.material_columns,
        ]

        for vocabulary in vocabularies:
            for token in vocabulary:
                assert match_one(vocabulary, token) == token

    def test_prefix_resolves_to_first_token(self):
        """A shortened label should resolve to the first token it prefixes."""
        from mhrise_wiki.parsers.vocabulary import match_one

        assert match_one(['fireblight', 'waterblight', 'iceblight'], 'Ice') == 'iceblight'

    def test_order_breaks_ties(self):
        """The earlier token wins when the label prefixes several."""
        from mhrise_wiki.parsers.vocabulary import match_one

        assert match_one(['sleep', 'sleepy'], 'Sleep') == 'sleep'
        assert match_one(['sleepy', 'sleep'], 'Sleep') == 'sleepy'

    def test_case_insensitive(self):
        """Should ignore case of label and token."""
        from mhrise_wiki.parsers.vocabulary import match_one

        assert match_one(['lowRank', 'highRank'], 'HIGH RANK') == 'highRank'

    def test_absent_label(self):
        """Should return None when nothing matches."""
        from mhrise_wiki.parsers.vocabulary import match_one

        assert match_one(['fire', 'water'], 'Dragon') is None

    @pytest.mark.parametrize('label', ['', '   ', None, '???'])
    def test_empty_label(self, label):
        """Labels without word characters never match."""
        from mhrise_wiki.parsers.vocabulary import match_one

        assert match_one(['fire', 'water'], label) is None

    def test_label_longer_than_token_does_not_match(self):
        """Matching is label-prefix-of-token, not the reverse."""
        from mhrise_wiki.parsers.vocabulary import match_one

        assert match_one(['fire'], 'Fireblight') is None


class TestMatchMany:
    """Test suite for match_many()."""

    def test_drops_unmatched_labels(self):
        """Should keep matches in order and drop unmatched labels."""
        from mhrise_wiki.parsers.vocabulary import match_many

        assert match_many(['fire', 'water', 'ice'], ['Fire', '???', 'Ice']) == ['fire', 'ice']

    def test_empty(self):
        """Should return [] for no labels."""
        from mhrise_wiki.parsers.vocabulary import match_many

        assert match_many(['fire'], []) == []
