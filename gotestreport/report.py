"""HTML report generation from ``go test -json`` logs.

:class:`ReportGenerator` wires the pipeline together: load events, aggregate
them into a :class:`~gotestreport.model.ResultModel`, render the card tree,
compose the page and hand the finished document to the sink.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

from gotestreport.aggregate import aggregate
from gotestreport.compose import compose
from gotestreport.config import DEFAULT_CONFIG, ReportConfig
from gotestreport.events import Event, load_events, read_events
from gotestreport.logging import get_logger
from gotestreport.model import ReportStats, ResultModel
from gotestreport.render import render
from gotestreport.utils.output_paths import write_report, write_results_json

logger = get_logger(__name__)


def generate_document(model: ResultModel, config: ReportConfig = DEFAULT_CONFIG) -> str:
    """Render ``model`` and compose it into the configured page layout.

    Raises:
        LayoutUnavailableError: If the page layout cannot be loaded.
        TemplateError: If the page layout cannot be applied.
    """
    return compose(
        render(model),
        ReportStats.from_model(model),
        template_dir=config.template_dir,
        template_name=config.template_name,
    )


class ReportGenerator:
    """Generate an HTML report from a test event log.

    The generator keeps the decoded events and the aggregated model so that
    callers can inspect the model or export it after writing the report.
    """

    def __init__(
        self,
        log_path: Optional[Path] = None,
        config: ReportConfig = DEFAULT_CONFIG,
    ):
        self.log_path = log_path
        self.config = config
        self._events: List[Event] = []
        self._model: Optional[ResultModel] = None

    def load_events(self, lines: Optional[Iterable[str]] = None) -> List[Event]:
        """Decode the event log into memory.

        Args:
            lines: Lines to decode instead of reading ``log_path`` (or stdin
                when ``log_path`` is None).

        Raises:
            FileNotFoundError: If ``log_path`` does not exist.
            DecodeError: On the first malformed line.
        """
        if lines is not None:
            self._events = read_events(lines)
        else:
            self._events = load_events(self.log_path)
        self._model = None
        source = self.log_path if self.log_path is not None and lines is None else "input"
        logger.info(f"Loaded {len(self._events)} test events from {source}")
        return self._events

    def build_model(self) -> ResultModel:
        """Aggregate the loaded events.

        Raises:
            EmptyInputError: If no events were loaded.
        """
        if self._model is None:
            self._model = aggregate(
                self._events,
                record_skipped_tests=self.config.record_skipped_tests,
                sort=self.config.sort_output,
            )
        return self._model

    def generate_html(self) -> str:
        """Return the complete HTML document for the loaded events."""
        return generate_document(self.build_model(), self.config)

    def generate_html_report(self, html_path: Optional[Path] = None) -> Path:
        """Render the report and write it to ``html_path``.

        The file is only written after the whole document has been produced.

        Args:
            html_path: Output HTML file path; defaults to ``config.output_name``
                in the current working directory.

        Returns:
            The path to the written HTML file.
        """
        document = self.generate_html()
        target = html_path if html_path is not None else Path(self.config.output_name)
        return write_report(document, target)

    def export_results(self, json_path: Path) -> Path:
        """Write the aggregated model as JSON."""
        return write_results_json(self.build_model().to_dict(), json_path)
