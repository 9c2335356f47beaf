"""Shared fixtures for gotestreport tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, List

import pytest

from gotestreport.events import Action, Event

SAMPLE_DATA = Path(__file__).parent / "sample_data"

BASE_TIME = datetime(2024, 3, 4, 9, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_log() -> Path:
    """Path to a realistic three-package ``go test -json`` log."""
    return SAMPLE_DATA / "basic_run.jsonl"


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for events; ``at`` is seconds after BASE_TIME."""

    def _make(
        action: str,
        package: str = "pkg/a",
        test: str = "",
        output: str = "",
        elapsed: float = 0.0,
        at: float = 0.0,
    ) -> Event:
        return Event(
            timestamp=BASE_TIME + timedelta(seconds=at),
            action=Action.from_string(action),
            package=package,
            test=test,
            output=output,
            elapsed=elapsed,
            raw_action=action,
        )

    return _make


@pytest.fixture
def scenario_events(make_event) -> List[Event]:
    """Five events: package start/coverage/pass, TestX pass, TestX/sub1 pass."""
    return [
        make_event("start", at=0.0),
        make_event("output", output="coverage: 87.5% of statements\n", at=0.1),
        make_event("pass", elapsed=0.4, at=0.2),
        make_event("pass", test="TestX", elapsed=0.2, at=0.3),
        make_event("pass", test="TestX/sub1", elapsed=0.1, at=0.4),
    ]
