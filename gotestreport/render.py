"""Rendering of a ResultModel into nested collapsible HTML cards.

:func:`render` builds a tree of typed cards (package -> test -> subtest)
without producing any markup. :meth:`DocumentFragment.to_html` is the single
writer that serializes the tree; it escapes every piece of user text
(package names, test names, coverage) through ``Markup.format``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from markupsafe import Markup

from gotestreport.model import ResultModel, Status, TestOverview

SUCCESS_CLASS = "successBackgroundColor"
FAIL_CLASS = "failBackgroundColor"
SKIP_CLASS = "skipBackgroundColor"


def status_class(status: Status) -> str:
    """Three-way style class used by package and test cards."""
    if status is Status.PASS:
        return SUCCESS_CLASS
    if status is Status.FAIL:
        return FAIL_CLASS
    return SKIP_CLASS


def subtest_status_class(status: Status) -> str:
    """Style class for subtest cards; only pass and fail are coloured."""
    if status is Status.PASS:
        return SUCCESS_CLASS
    if status is Status.FAIL:
        return FAIL_CLASS
    return ""


def _seconds(value: float) -> str:
    return f"{value:f}s"


@dataclass(frozen=True)
class SubtestCard:
    name: str
    elapsed: float
    status: Status

    def to_html(self) -> Markup:
        classes = " ".join(
            c for c in ("testCardLayout", subtest_status_class(self.status)) if c
        )
        return Markup(
            '<div class="{classes}">\n'
            "<div>{name}</div>\n"
            "<div>{elapsed}</div>\n"
            "</div>"
        ).format(classes=classes, name=self.name, elapsed=_seconds(self.elapsed))


@dataclass(frozen=True)
class TestCard:
    """A top-level test; collapsible when it has subtests."""

    __test__ = False

    name: str
    elapsed: float
    status: Status
    subtests: Tuple[SubtestCard, ...] = ()

    @property
    def collapsible(self) -> bool:
        return bool(self.subtests)

    def to_html(self) -> Markup:
        info = Markup("<div>{name}</div>\n<div>{elapsed}</div>").format(
            name=self.name, elapsed=_seconds(self.elapsed)
        )
        style = status_class(self.status)
        if not self.collapsible:
            return Markup('<div class="testCardLayout {style}">\n{info}\n</div>').format(
                style=style, info=info
            )

        body = Markup("\n").join(card.to_html() for card in self.subtests)
        return Markup(
            '<div type="button" class="collapsible">\n'
            '<div class="collapsibleHeading testCardLayout {style}">\n{info}\n</div>\n'
            '<div class="collapsibleHeadingContent">\n{body}\n</div>\n'
            "</div>"
        ).format(style=style, info=info, body=body)


@dataclass(frozen=True)
class PackageCard:
    name: str
    coverage: str
    elapsed: float
    status: Status
    tests: Tuple[TestCard, ...] = ()

    def to_html(self) -> Markup:
        body = Markup("\n").join(card.to_html() for card in self.tests)
        return Markup(
            '<div type="button" class="collapsible">\n'
            '<div class="collapsibleHeading packageCardLayout {style}">\n'
            "<div>{name}</div>\n"
            "<div>{coverage}</div>\n"
            "<div>{elapsed}</div>\n"
            "</div>\n"
            '<div class="collapsibleHeadingContent">\n{body}\n</div>\n'
            "</div>"
        ).format(
            style=status_class(self.status),
            name=self.name,
            coverage=self.coverage,
            elapsed=_seconds(self.elapsed),
            body=body,
        )


@dataclass(frozen=True)
class DocumentFragment:
    """Rendered report body: one card per package."""

    packages: Tuple[PackageCard, ...] = ()

    def to_html(self) -> List[Markup]:
        """Serialize the cards; one escaped markup string per package."""
        return [card.to_html() for card in self.packages]

    def __html__(self) -> str:
        return str(Markup("\n").join(self.to_html()))


def _test_card(overview: TestOverview) -> TestCard:
    return TestCard(
        name=overview.suite.name,
        elapsed=overview.suite.elapsed,
        status=overview.suite.status,
        subtests=tuple(
            SubtestCard(name=case.name, elapsed=case.elapsed, status=case.status)
            for case in overview.cases
        ),
    )


def render(model: ResultModel) -> DocumentFragment:
    """Build the card tree for ``model``.

    Package cards follow ``model.packages`` order and hold the tests whose
    top-level test belongs to that package, in ``model.tests`` order.
    """
    return DocumentFragment(
        packages=tuple(
            PackageCard(
                name=summary.package,
                coverage=summary.coverage,
                elapsed=summary.elapsed,
                status=summary.status,
                tests=tuple(_test_card(o) for o in model.tests_for(summary.package)),
            )
            for summary in model.packages
        )
    )
