"""Tests for the card tree and its HTML serialization."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from markupsafe import Markup

from gotestreport.aggregate import aggregate
from gotestreport.model import (
    PackageSummary,
    ResultModel,
    Status,
    TestOverview,
    TestSummary,
)
from gotestreport.render import (
    FAIL_CLASS,
    SKIP_CLASS,
    SUCCESS_CLASS,
    DocumentFragment,
    SubtestCard,
    TestCard,
    render,
    status_class,
    subtest_status_class,
)


def _model(packages, tests) -> ResultModel:
    return ResultModel(
        packages=tuple(packages),
        tests=tuple(tests),
        passed=0,
        failed=0,
        total_duration=0.0,
        started_at=datetime(2024, 3, 4, tzinfo=timezone.utc),
    )


@pytest.mark.parametrize(
    "status, expected",
    [
        (Status.PASS, SUCCESS_CLASS),
        (Status.FAIL, FAIL_CLASS),
        (Status.SKIP, SKIP_CLASS),
        (Status.UNKNOWN, SKIP_CLASS),
    ],
)
def test_status_class_is_three_way(status: Status, expected: str) -> None:
    assert status_class(status) == expected


def test_subtest_status_class_only_pass_and_fail() -> None:
    assert subtest_status_class(Status.PASS) == SUCCESS_CLASS
    assert subtest_status_class(Status.FAIL) == FAIL_CLASS
    assert subtest_status_class(Status.SKIP) == ""


def test_render_builds_tree_from_scenario(scenario_events) -> None:
    fragment = render(aggregate(scenario_events))

    assert len(fragment.packages) == 1
    card = fragment.packages[0]
    assert (card.name, card.coverage, card.status) == ("pkg/a", "87.5%", Status.PASS)
    assert len(card.tests) == 1
    test_card = card.tests[0]
    assert test_card.name == "TestX"
    assert test_card.collapsible
    assert test_card.subtests == (SubtestCard("TestX/sub1", 0.1, Status.PASS),)


def test_tests_attached_to_their_package_only() -> None:
    model = _model(
        [PackageSummary("pkg/a", status=Status.PASS), PackageSummary("pkg/b")],
        [
            TestOverview(TestSummary("pkg/a", "TestA", 0.1, Status.PASS)),
            TestOverview(TestSummary("pkg/b", "TestB", 0.2, Status.FAIL)),
        ],
    )
    fragment = render(model)
    assert [t.name for t in fragment.packages[0].tests] == ["TestA"]
    assert [t.name for t in fragment.packages[1].tests] == ["TestB"]


def test_package_without_tests_renders_empty_body() -> None:
    fragment = render(_model([PackageSummary("pkg/docs", status=Status.SKIP)], []))
    html = fragment.to_html()[0]
    assert "packageCardLayout skipBackgroundColor" in html
    assert '<div class="collapsibleHeadingContent">\n\n</div>' in html


def test_leaf_test_card_markup() -> None:
    html = TestCard("TestLeaf", 0.5, Status.FAIL).to_html()
    assert isinstance(html, Markup)
    assert html == (
        '<div class="testCardLayout failBackgroundColor">\n'
        "<div>TestLeaf</div>\n"
        "<div>0.500000s</div>\n"
        "</div>"
    )
    assert "collapsible" not in html


def test_collapsible_test_card_markup() -> None:
    card = TestCard(
        "TestParent",
        1.0,
        Status.PASS,
        subtests=(
            SubtestCard("TestParent/a", 0.25, Status.PASS),
            SubtestCard("TestParent/b", 0.75, Status.SKIP),
        ),
    )
    html = card.to_html()
    assert html.startswith('<div type="button" class="collapsible">')
    assert "collapsibleHeading testCardLayout successBackgroundColor" in html
    assert '<div class="testCardLayout successBackgroundColor">\n<div>TestParent/a</div>' in html
    # skipped subtests get no colour class
    assert '<div class="testCardLayout">\n<div>TestParent/b</div>' in html


def test_package_card_header() -> None:
    model = _model(
        [PackageSummary("pkg/a", 1.25, Status.FAIL, "42.0%")],
        [TestOverview(TestSummary("pkg/a", "TestA", 0.1, Status.FAIL))],
    )
    html = render(model).to_html()[0]
    assert html.startswith('<div type="button" class="collapsible">\n')
    assert (
        '<div class="collapsibleHeading packageCardLayout failBackgroundColor">\n'
        "<div>pkg/a</div>\n"
        "<div>42.0%</div>\n"
        "<div>1.250000s</div>\n"
        "</div>"
    ) in html
    assert "<div>TestA</div>" in html


def test_user_text_is_escaped() -> None:
    model = _model(
        [PackageSummary("pkg/<b>", status=Status.PASS, coverage='<script>"x"</script>')],
        [
            TestOverview(
                TestSummary("pkg/<b>", "Test<Evil>", status=Status.PASS),
                (TestSummary("pkg/<b>", "Test<Evil>/a&b", status=Status.PASS),),
            )
        ],
    )
    html = render(model).to_html()[0]

    assert "<script>" not in html
    assert "<b>" not in html
    assert "pkg/&lt;b&gt;" in html
    assert "&lt;script&gt;&#34;x&#34;&lt;/script&gt;" in html
    assert "Test&lt;Evil&gt;/a&amp;b" in html


def test_fragment_to_html_one_element_per_package() -> None:
    model = _model([PackageSummary("a"), PackageSummary("b"), PackageSummary("c")], [])
    elements = render(model).to_html()
    assert len(elements) == 3
    assert all(isinstance(e, Markup) for e in elements)


def test_empty_fragment() -> None:
    assert DocumentFragment().to_html() == []
    assert DocumentFragment().__html__() == ""


def test_render_does_not_mutate_model(scenario_events) -> None:
    model = aggregate(scenario_events)
    before = model.to_dict()
    render(model)
    assert model.to_dict() == before
