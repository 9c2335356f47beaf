"""gotestreport: HTML reports for ``go test -json`` logs.

Turns the line-delimited JSON events written by ``go test -json`` into a
package -> test -> subtest hierarchy and renders it as a static HTML page
with collapsible cards, pass/fail counts, coverage and timings.

Primary API:
    load_events() / read_events() - Decode a test log
    aggregate() - Build the ResultModel from decoded events
    render() - Build the card tree (DocumentFragment) for a ResultModel
    compose() - Merge rendered cards and run statistics into the page layout
    ReportGenerator - The whole pipeline, including writing the report

Example:
    from pathlib import Path
    from gotestreport import ReportGenerator

    generator = ReportGenerator(Path("tests.jsonl"))
    generator.load_events()
    generator.generate_html_report(Path("report.html"))
"""

from __future__ import annotations

from gotestreport import cli, logging
from gotestreport._version import __version__
from gotestreport.aggregate import aggregate, extract_coverage
from gotestreport.compose import compose
from gotestreport.config import ReportConfig, load_config
from gotestreport.errors import (
    ConfigError,
    DecodeError,
    EmptyInputError,
    GoTestReportError,
    LayoutUnavailableError,
    TemplateError,
)
from gotestreport.events import Action, Event, decode_event, load_events, read_events
from gotestreport.model import (
    PackageSummary,
    ReportStats,
    ResultModel,
    Status,
    TestOverview,
    TestSummary,
)
from gotestreport.render import DocumentFragment, render
from gotestreport.report import ReportGenerator, generate_document
from gotestreport.utils.timefmt import format_duration, format_run_date

__all__ = [
    # Version
    "__version__",
    # Events
    "Action",
    "Event",
    "decode_event",
    "read_events",
    "load_events",
    # Model
    "Status",
    "PackageSummary",
    "TestSummary",
    "TestOverview",
    "ResultModel",
    "ReportStats",
    # Pipeline
    "aggregate",
    "extract_coverage",
    "render",
    "DocumentFragment",
    "compose",
    "generate_document",
    "ReportGenerator",
    # Formatting
    "format_duration",
    "format_run_date",
    # Configuration
    "ReportConfig",
    "load_config",
    # Errors
    "GoTestReportError",
    "DecodeError",
    "EmptyInputError",
    "LayoutUnavailableError",
    "TemplateError",
    "ConfigError",
    # Utilities
    "cli",
    "logging",
]
