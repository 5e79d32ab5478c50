"""
Unit tests for the data model dataclasses
"""

import dataclasses

import pytest
from pr_analyzer.models import ChangedFile, ChangeSet, ComplexityScore, Report, Tier


class TestChangedFile:
    """Test cases for ChangedFile."""

    def test_defaults(self):
        """Test that ChangedFile initializes with zero line counts."""
        changed_file = ChangedFile('src/a.py')
        assert changed_file.lines_added == 0
        assert changed_file.lines_removed == 0
        assert changed_file.is_binary is False
        assert changed_file.lines_changed == 0

    def test_lines_changed(self):
        changed_file = ChangedFile('src/a.py', lines_added=7, lines_removed=3)
        assert changed_file.lines_changed == 10

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError):
            ChangedFile('src/a.py', lines_added=-1)

    def test_binary_with_lines_rejected(self):
        with pytest.raises(ValueError):
            ChangedFile('logo.png', lines_added=3, is_binary=True)

    def test_empty_path_rejected(self):
        with pytest.raises(ValueError):
            ChangedFile('')

    def test_immutable(self):
        changed_file = ChangedFile('src/a.py', lines_added=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            changed_file.lines_added = 5


class TestChangeSet:
    """Test cases for ChangeSet."""

    def test_preserves_order(self):
        change_set = ChangeSet([ChangedFile('b.py'), ChangedFile('a.py'), ChangedFile('c.py')])
        assert change_set.paths == ['b.py', 'a.py', 'c.py']

    def test_duplicate_paths_rejected(self):
        with pytest.raises(ValueError, match='Duplicate path'):
            ChangeSet([ChangedFile('a.py', 1), ChangedFile('a.py', 2)])

    def test_totals(self):
        change_set = ChangeSet([
            ChangedFile('a.py', lines_added=10, lines_removed=2),
            ChangedFile('b.png', is_binary=True),
            ChangedFile('c.py', lines_removed=5),
        ])
        assert len(change_set) == 3
        assert change_set.total_lines_changed == 17

    def test_empty_is_falsy(self):
        assert not ChangeSet()
        assert len(ChangeSet()) == 0

    def test_files_stored_as_tuple(self):
        change_set = ChangeSet([ChangedFile('a.py')])
        assert isinstance(change_set.files, tuple)


class TestReport:
    """Test cases for Report and ComplexityScore defaults."""

    def test_score_defaults(self):
        score = ComplexityScore()
        assert score.numeric_value == 0.0
        assert score.tier == Tier.LOW
        assert score.reasons == ()

    def test_report_defaults(self):
        report = Report(score=ComplexityScore())
        assert report.suggested_owners == frozenset()
        assert report.flagged_files == ()
        assert len(report.change_set) == 0
        assert report.excluded_files == ()
