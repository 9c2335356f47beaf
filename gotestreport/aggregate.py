"""Aggregation of a flat ``go test -json`` event stream into a ResultModel.

Two sequential passes over the full event list:

1. Package pass over events without a test id: terminal actions set status
   and elapsed time, output lines carrying a coverage figure set coverage.
2. Test pass over events with a test id: terminal actions upsert top-level
   tests and subtests (``/`` in the id) and fold the pass/fail counters.

Subtests are then grouped under every top-level test of the same package
whose id is a substring of theirs. Later events overwrite earlier ones for
the same package and test id.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Sequence, Tuple

from gotestreport.errors import EmptyInputError
from gotestreport.events import Action, Event
from gotestreport.logging import get_logger
from gotestreport.model import (
    COVERAGE_NONE,
    COVERAGE_UNKNOWN,
    PackageSummary,
    ResultModel,
    Status,
    TestOverview,
    TestSummary,
)

logger = get_logger(__name__)

# Tests are identified by package and test id
TestKey = Tuple[str, str]

_TERMINAL_STATUS = {
    Action.PASS: Status.PASS,
    Action.FAIL: Status.FAIL,
    Action.SKIP: Status.SKIP,
}


def extract_coverage(text: str) -> str:
    """Extract the coverage figure from a package output line.

    A line is a coverage line when it contains both ``coverage`` and ``%``.
    The value is the text after the first ``:`` up to and including the
    first ``%``, stripped of whitespace.

    Returns:
        The figure (e.g. ``"87.5%"``), ``COVERAGE_UNKNOWN`` for a coverage
        line with no ``:`` before the ``%``, or ``COVERAGE_NONE`` for any
        other line.
    """
    if "coverage" not in text or "%" not in text:
        return COVERAGE_NONE
    colon = text.find(":")
    percent = text.find("%")
    if colon == -1 or colon > percent:
        return COVERAGE_UNKNOWN
    value = text[colon + 1 : percent + 1].strip()
    return value if value != "%" else COVERAGE_UNKNOWN


def _aggregate_packages(events: Sequence[Event]) -> Dict[str, PackageSummary]:
    packages: Dict[str, PackageSummary] = {}
    for event in events:
        if event.test:
            continue
        current = packages.get(event.package) or PackageSummary(package=event.package)

        if event.action.is_terminal:
            packages[event.package] = replace(
                current,
                elapsed=event.elapsed,
                status=_TERMINAL_STATUS[event.action],
            )
        elif event.action is Action.OUTPUT:
            coverage = extract_coverage(event.output)
            if coverage != COVERAGE_NONE:
                packages[event.package] = replace(current, coverage=coverage)
            elif event.package not in packages:
                packages[event.package] = current
    return packages


def _fold_tests(
    events: Sequence[Event], record_skipped_tests: bool
) -> tuple[Dict[TestKey, TestSummary], Dict[TestKey, TestSummary], int, int]:
    suites: Dict[TestKey, TestSummary] = {}
    cases: Dict[TestKey, TestSummary] = {}
    passed = 0
    failed = 0

    for event in events:
        if not event.test or not event.action.is_terminal:
            continue

        if event.action is Action.PASS:
            passed += 1
        elif event.action is Action.FAIL:
            failed += 1
        elif not record_skipped_tests:
            continue

        summary = TestSummary(
            package=event.package,
            name=event.test,
            elapsed=event.elapsed,
            status=_TERMINAL_STATUS[event.action],
        )
        key = (event.package, event.test)
        if summary.is_subtest:
            cases[key] = summary
        else:
            suites[key] = summary

    return suites, cases, passed, failed


def group_subtests(
    suites: Sequence[TestSummary], cases: Sequence[TestSummary]
) -> List[TestOverview]:
    """Attach each subtest to every same-package top-level test it names.

    Subtests matched by no top-level test are left out of the result.
    """
    overviews = [
        TestOverview(
            suite=suite,
            cases=tuple(
                case
                for case in cases
                if case.package == suite.package and suite.name in case.name
            ),
        )
        for suite in suites
    ]

    grouped = {
        (case.package, case.name) for overview in overviews for case in overview.cases
    }
    for case in cases:
        if (case.package, case.name) not in grouped:
            logger.debug(
                f"Dropping subtest {case.name} ({case.package}): "
                "no top-level test reached a terminal state"
            )
    return overviews


def aggregate(
    events: Sequence[Event],
    record_skipped_tests: bool = True,
    sort: bool = True,
) -> ResultModel:
    """Build the hierarchical result model for a complete event sequence.

    Args:
        events: All events of the run in input order.
        record_skipped_tests: When True, ``skip`` events create or update
            test and subtest summaries. They never count as passed or failed.
        sort: Order packages, tests and subtests by identifier. When False,
            first-seen order is kept.

    Returns:
        The immutable ResultModel.

    Raises:
        EmptyInputError: If ``events`` is empty.
    """
    if not events:
        raise EmptyInputError("No test events to aggregate")

    packages = _aggregate_packages(events)
    suites, cases, passed, failed = _fold_tests(events, record_skipped_tests)

    package_list = list(packages.values())
    suite_list = list(suites.values())
    case_list = list(cases.values())
    if sort:
        package_list.sort(key=lambda p: p.package)
        suite_list.sort(key=lambda t: (t.package, t.name))
        case_list.sort(key=lambda t: (t.package, t.name))

    overviews = group_subtests(suite_list, case_list)

    duration = (events[-1].timestamp - events[0].timestamp).total_seconds()
    logger.debug(
        f"Aggregated {len(package_list)} packages, {len(suite_list)} tests, "
        f"{len(case_list)} subtests ({passed} passed, {failed} failed)"
    )
    return ResultModel(
        packages=tuple(package_list),
        tests=tuple(overviews),
        passed=passed,
        failed=failed,
        total_duration=duration,
        started_at=events[0].timestamp,
    )
