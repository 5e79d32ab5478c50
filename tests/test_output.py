"""
Unit tests for ReportFormatter
"""

import pytest
from pr_analyzer.errors import FormatError
from pr_analyzer.models import ChangedFile, ChangeSet, ComplexityScore, Report, Tier
from pr_analyzer.output import RED, RESET, ReportFormatter


@pytest.fixture
def sample_report():
    """Create a sample report for testing."""
    change_set = ChangeSet([
        ChangedFile('src/payments/charge.py', 450, 20),
        ChangedFile('src/ui.py', 5, 1),
        ChangedFile('assets/logo.png', is_binary=True),
    ])
    return Report(
        score=ComplexityScore(
            numeric_value=240.5,
            tier=Tier.HIGH,
            reasons=('Large number of lines changed (476)', 'Risky path src/payments/charge.py'),
        ),
        suggested_owners=frozenset({'zed', 'alice', 'payments-team'}),
        flagged_files=(change_set.files[0],),
        change_set=change_set,
        excluded_files=(ChangedFile('yarn.lock', 900, 300),),
    )


@pytest.fixture
def empty_report():
    return Report(score=ComplexityScore())


class TestTextFormat:
    """Test cases for console text output."""

    def test_sections_in_order(self, sample_report):
        text = ReportFormatter().render(sample_report)

        positions = [text.index(marker) for marker in (
            'Score: 240.50 (HIGH)',
            'Reasons:',
            'Suggested reviewers:',
            'Flagged files:',
        )]
        assert positions == sorted(positions)

    def test_reasons_keep_scorer_order(self, sample_report):
        text = ReportFormatter().render(sample_report)
        assert text.index('Large number of lines') < text.index('Risky path')

    def test_owners_sorted(self, sample_report):
        text = ReportFormatter().render(sample_report)
        assert '  - alice\n  - payments-team\n  - zed' in text

    def test_flagged_files(self, sample_report):
        text = ReportFormatter().render(sample_report)
        assert '  - src/payments/charge.py (+450/-20)' in text

    def test_summary_line(self, sample_report):
        text = ReportFormatter().render(sample_report)
        assert '3 file(s) changed, +455/-21 lines (1 generated file(s) excluded)' in text

    def test_empty_report(self, empty_report):
        text = ReportFormatter().render(empty_report)
        assert 'Score: 0.00 (LOW)' in text
        assert 'unassigned' in text
        assert text.count('(none)') == 2

    def test_no_color_by_default(self, sample_report):
        assert '\033[' not in ReportFormatter().render(sample_report)

    def test_color(self, sample_report):
        text = ReportFormatter(use_color=True).render(sample_report)
        assert f"{RED}HIGH{RESET}" in text

    def test_deterministic(self, sample_report):
        formatter = ReportFormatter()
        assert formatter.render(sample_report) == formatter.render(sample_report)

    def test_does_not_mutate_report(self, sample_report):
        before = repr(sample_report)
        ReportFormatter().render(sample_report)
        ReportFormatter('markdown').render(sample_report)
        assert repr(sample_report) == before

    def test_print_report(self, sample_report, capsys):
        ReportFormatter().print_report(sample_report)
        captured = capsys.readouterr()
        assert 'PR COMPLEXITY REPORT' in captured.out


class TestMarkdownFormat:
    """Test cases for Markdown PR comment output."""

    def test_markdown(self, sample_report):
        text = ReportFormatter('markdown').render(sample_report)

        assert text.startswith('## PR complexity: HIGH (240.50)')
        assert text.index('### Reasons') < text.index('### Suggested reviewers') < text.index('### Flagged files')
        assert '| `src/payments/charge.py` | +450/-20 |' in text
        assert '- alice\n- payments-team\n- zed' in text

    def test_markdown_empty(self, empty_report):
        text = ReportFormatter('markdown').render(empty_report)
        assert '_No complexity factors triggered._' in text
        assert '_unassigned_' in text
        assert '_None._' in text


class TestFormatErrors:
    """Test cases for rendering failures."""

    def test_unknown_format(self):
        with pytest.raises(FormatError):
            ReportFormatter('html')

    def test_render_wrong_type(self):
        with pytest.raises(FormatError):
            ReportFormatter().render({'score': 1})
