"""Tests for merging rendered cards into the page layout."""

from __future__ import annotations

from pathlib import Path

import pytest

from gotestreport.aggregate import aggregate
from gotestreport.compose import DEFAULT_TEMPLATE, compose, create_environment
from gotestreport.errors import LayoutUnavailableError, TemplateError
from gotestreport.model import ReportStats
from gotestreport.render import DocumentFragment, render


@pytest.fixture
def stats() -> ReportStats:
    return ReportStats(
        passed=7, failed=3, total_test_time="2m:5s", test_date="Monday, 04-Mar-24 09:15:00 UTC"
    )


def test_bundled_layout_includes_stats_and_cards(scenario_events) -> None:
    model = aggregate(scenario_events)
    document = compose(render(model), ReportStats.from_model(model))

    assert document.lstrip().startswith("<!DOCTYPE html>")
    assert "<div>pkg/a</div>" in document
    assert "<div>TestX/sub1</div>" in document
    assert model.total_test_time in document
    assert model.test_date in document
    # Cards are inserted as markup, not re-escaped
    assert "&lt;div" not in document


def test_bundled_layout_shows_counters(stats: ReportStats) -> None:
    document = compose(DocumentFragment(), stats)
    assert '<div class="value">7</div>' in document
    assert '<div class="value">3</div>' in document
    assert "2m:5s" in document


def test_stats_strings_are_escaped(tmp_path: Path) -> None:
    (tmp_path / "page.html").write_text("<p>{{ test_date }}</p>")
    stats = ReportStats(0, 0, "1 s", "<today>")
    document = compose(DocumentFragment(), stats, template_dir=tmp_path, template_name="page.html")
    assert document == "<p>&lt;today&gt;</p>"


def test_custom_template_dir(tmp_path: Path, stats: ReportStats) -> None:
    (tmp_path / DEFAULT_TEMPLATE).write_text(
        "{{ passed_tests }}/{{ failed_tests }}|{{ total_test_time }}|"
        "{% for e in html_elements %}[{{ e }}]{% endfor %}"
    )
    assert compose(DocumentFragment(), stats, template_dir=tmp_path) == "7/3|2m:5s|"


def test_missing_template_dir(tmp_path: Path, stats: ReportStats) -> None:
    with pytest.raises(LayoutUnavailableError, match="Template directory not found"):
        compose(DocumentFragment(), stats, template_dir=tmp_path / "nope")


def test_missing_template(tmp_path: Path, stats: ReportStats) -> None:
    with pytest.raises(LayoutUnavailableError, match="missing.html"):
        compose(DocumentFragment(), stats, template_dir=tmp_path, template_name="missing.html")


def test_malformed_template(tmp_path: Path, stats: ReportStats) -> None:
    (tmp_path / DEFAULT_TEMPLATE).write_text("{% for e in html_elements %}never closed")
    with pytest.raises(TemplateError, match="Invalid report layout"):
        compose(DocumentFragment(), stats, template_dir=tmp_path)


def test_undefined_placeholder(tmp_path: Path, stats: ReportStats) -> None:
    (tmp_path / DEFAULT_TEMPLATE).write_text("{{ skipped_tests }}")
    with pytest.raises(TemplateError, match="Failed to apply report layout"):
        compose(DocumentFragment(), stats, template_dir=tmp_path)


def test_environment_autoescapes_html() -> None:
    env = create_environment()
    assert env.autoescape("report-template.html") is True
