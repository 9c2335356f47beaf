"""Result model produced by aggregation and consumed by rendering.

All types are frozen dataclasses; once :func:`gotestreport.aggregate.aggregate`
returns a :class:`ResultModel` nothing mutates it. ``to_dict()`` methods give a
JSON-serializable view used for the ``--results`` export.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Tuple

from gotestreport.utils.timefmt import format_duration, format_run_date

#: Coverage value for a package that never reported coverage.
COVERAGE_NONE = "-"

#: Coverage value for a coverage line that could not be parsed.
COVERAGE_UNKNOWN = "unk"


class Status(str, Enum):
    """Outcome of a package, test or subtest."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PackageSummary:
    """Aggregated state of one Go package.

    Attributes:
        package: Import path of the package.
        elapsed: Seconds reported by the package's terminal event.
        status: Package outcome; UNKNOWN until a terminal event is seen.
        coverage: Extracted coverage text or one of the coverage sentinels.
    """

    package: str
    elapsed: float = 0.0
    status: Status = Status.UNKNOWN
    coverage: str = COVERAGE_NONE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "package": self.package,
            "elapsed": self.elapsed,
            "status": self.status.value,
            "coverage": self.coverage,
        }


@dataclass(frozen=True)
class TestSummary:
    """Outcome of a top-level test or a subtest."""

    __test__ = False  # not a pytest test class

    package: str
    name: str
    elapsed: float = 0.0
    status: Status = Status.UNKNOWN

    @property
    def is_subtest(self) -> bool:
        return len(self.name.split("/")) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "package": self.package,
            "name": self.name,
            "elapsed": self.elapsed,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class TestOverview:
    """A top-level test together with the subtests grouped under it."""

    __test__ = False

    suite: TestSummary
    cases: Tuple[TestSummary, ...] = ()

    @property
    def package(self) -> str:
        return self.suite.package

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suite": self.suite.to_dict(),
            "cases": [case.to_dict() for case in self.cases],
        }


@dataclass(frozen=True)
class ResultModel:
    """Complete aggregation result for one test run.

    Attributes:
        packages: One summary per package seen in the log.
        tests: One overview per top-level test that reached a terminal state.
        passed: Number of pass events for tests and subtests.
        failed: Number of fail events for tests and subtests.
        total_duration: Seconds between the first and last event, in input order.
        started_at: Timestamp of the first event.
    """

    packages: Tuple[PackageSummary, ...]
    tests: Tuple[TestOverview, ...]
    passed: int
    failed: int
    total_duration: float
    started_at: datetime
    _tests_by_package: Dict[str, Tuple[TestOverview, ...]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        grouped: Dict[str, list] = {}
        for overview in self.tests:
            grouped.setdefault(overview.package, []).append(overview)
        object.__setattr__(
            self,
            "_tests_by_package",
            {name: tuple(items) for name, items in grouped.items()},
        )

    @property
    def total_test_time(self) -> str:
        return format_duration(self.total_duration)

    @property
    def test_date(self) -> str:
        return format_run_date(self.started_at)

    def tests_for(self, package: str) -> Tuple[TestOverview, ...]:
        """Return the overviews whose top-level test belongs to ``package``."""
        return self._tests_by_package.get(package, ())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": {
                "passed": self.passed,
                "failed": self.failed,
                "total_duration": self.total_duration,
                "total_test_time": self.total_test_time,
                "test_date": self.test_date,
                "started_at": self.started_at.isoformat(),
            },
            "packages": [p.to_dict() for p in self.packages],
            "tests": [t.to_dict() for t in self.tests],
        }


@dataclass(frozen=True)
class ReportStats:
    """Run-level figures shown in the page header."""

    passed: int
    failed: int
    total_test_time: str
    test_date: str

    @classmethod
    def from_model(cls, model: ResultModel) -> "ReportStats":
        return cls(
            passed=model.passed,
            failed=model.failed,
            total_test_time=model.total_test_time,
            test_date=model.test_date,
        )
