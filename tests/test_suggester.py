"""
Unit tests for reviewer suggestion
"""

import pytest
from pr_analyzer.models import ChangedFile, ChangeSet, ReviewerSuggestion
from pr_analyzer.suggester import ReviewerSuggester


@pytest.fixture
def suggester():
    return ReviewerSuggester([
        ReviewerSuggestion('src/', frozenset({'A'})),
        ReviewerSuggestion('src/payments/', frozenset({'B'})),
        ReviewerSuggestion('docs/', frozenset({'docs-team', 'C'})),
    ])


class TestReviewerSuggester:
    """Test cases for ReviewerSuggester."""

    def test_longest_prefix_wins(self, suggester):
        change_set = ChangeSet([ChangedFile('src/payments/x.py', 1)])
        assert suggester.suggest(change_set) == frozenset({'B'})

    def test_broad_prefix_used_when_nothing_more_specific(self, suggester):
        change_set = ChangeSet([ChangedFile('src/api/views.py', 1)])
        assert suggester.suggest(change_set) == frozenset({'A'})

    def test_union_across_files(self, suggester):
        change_set = ChangeSet([
            ChangedFile('src/payments/x.py', 1),
            ChangedFile('src/api/views.py', 1),
            ChangedFile('docs/index.md', 1),
        ])
        assert suggester.suggest(change_set) == frozenset({'A', 'B', 'C', 'docs-team'})

    def test_no_match_returns_empty(self, suggester):
        change_set = ChangeSet([ChangedFile('README.md', 1)])
        assert suggester.suggest(change_set) == frozenset()

    def test_empty_change_set(self, suggester):
        assert suggester.suggest(ChangeSet()) == frozenset()

    def test_empty_mapping(self):
        change_set = ChangeSet([ChangedFile('src/a.py', 1)])
        assert ReviewerSuggester([]).suggest(change_set) == frozenset()

    def test_owners_for_path(self, suggester):
        assert suggester.owners_for_path('src/payments/refund.py') == frozenset({'B'})
        assert suggester.owners_for_path('scripts/run.sh') == frozenset()

    def test_prefix_is_not_a_glob(self, suggester):
        assert suggester.match('srcx/file.py') is None

    def test_order_of_configuration_does_not_matter(self):
        forward = ReviewerSuggester([
            ReviewerSuggestion('src/', frozenset({'A'})),
            ReviewerSuggestion('src/payments/', frozenset({'B'})),
        ])
        backward = ReviewerSuggester([
            ReviewerSuggestion('src/payments/', frozenset({'B'})),
            ReviewerSuggestion('src/', frozenset({'A'})),
        ])
        assert forward.match('src/payments/x.py').path_prefix == 'src/payments/'
        assert backward.match('src/payments/x.py').path_prefix == 'src/payments/'

    def test_equal_length_prefixes_sorted_lexically(self):
        suggester = ReviewerSuggester([
            ReviewerSuggestion('web/', frozenset({'W'})),
            ReviewerSuggestion('api/', frozenset({'X'})),
        ])
        assert [s.path_prefix for s in suggester.suggestions] == ['api/', 'web/']
