"""Command-line interface for gotestreport."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, List, Optional

from gotestreport.config import DEFAULT_CONFIG, ReportConfig, load_config
from gotestreport.errors import GoTestReportError
from gotestreport.logging import configure_verbosity, get_logger
from gotestreport.model import ResultModel
from gotestreport.report import ReportGenerator
from gotestreport.utils.output_paths import report_path_for_run, results_path_for_run

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width
        max_col_width: Clip cells longer than this with an ASCII ellipsis

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = [
        max(max(len(row[i]) for row in all_data), min_width)
        for i in range(len(clipped_headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{item:<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(clipped_headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in clipped_rows)
    return "\n".join(lines)


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Return grammatically correct unit for count n."""
    if n == 1:
        return singular
    return plural or (singular + "s")


def _resolve_config(
    config_path: Optional[Path],
    template_dir: Optional[Path] = None,
    no_sort: bool = False,
) -> ReportConfig:
    config = load_config(config_path) if config_path is not None else DEFAULT_CONFIG
    return config.merged(
        template_dir=template_dir,
        sort_output=False if no_sort else None,
    )


def _print_summary(model: ResultModel) -> None:
    rows = [
        [p.package, p.status.value, p.coverage, f"{p.elapsed:.3f}s"]
        for p in model.packages
    ]
    print(
        f"{len(model.packages)} {_plural(len(model.packages), 'package')}, "
        f"{len(model.tests)} top-level {_plural(len(model.tests), 'test')}"
    )
    table = _format_table(
        ["Package", "Status", "Coverage", "Elapsed"], rows, max_col_width=60
    )
    if table:
        print(table)
    print(
        f"Passed: {model.passed}  Failed: {model.failed}  "
        f"Duration: {model.total_test_time}  Date: {model.test_date}"
    )


def _generate(
    log_file: Optional[Path],
    output_dir: Optional[Path],
    report_override: Optional[Path],
    results_override: Optional[Path],
    write_results: bool,
    config: ReportConfig,
) -> None:
    generator = ReportGenerator(log_file, config)
    generator.load_events()

    report_path = report_path_for_run(output_dir, report_override, config.output_name)
    generator.generate_html_report(report_path)

    if write_results or results_override is not None:
        generator.export_results(
            results_path_for_run(report_path, output_dir, results_override)
        )

    model = generator.build_model()
    print(
        f"Report generated successfully: {report_path} "
        f"({model.passed} passed, {model.failed} failed)"
    )


def _summary(log_file: Optional[Path], config: ReportConfig) -> None:
    generator = ReportGenerator(log_file, config)
    generator.load_events()
    _print_summary(generator.build_model())


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``gotestreport`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="gotestreport",
        description="Generate an HTML report from go test -json logs.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{generate,summary}",
        help="Available commands",
    )

    generate_parser = subparsers.add_parser(
        "generate", help="Write an HTML report for a test log"
    )
    generate_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output directory for generated artifacts",
    )
    generate_parser.add_argument(
        "--report",
        "-r",
        type=Path,
        default=None,
        help=(
            "Report file path (default: report.html; placed under --output when"
            " provided)"
        ),
    )
    generate_parser.add_argument(
        "--results",
        type=Path,
        default=None,
        help="Also export aggregated results as JSON to this path",
    )
    generate_parser.add_argument(
        "--json",
        action="store_true",
        help="Export aggregated results as <report>.results.json",
    )
    generate_parser.add_argument(
        "--no-sort",
        action="store_true",
        help="Keep packages and tests in first-seen order instead of sorting",
    )
    generate_parser.add_argument(
        "--template-dir",
        type=Path,
        default=None,
        help="Directory holding a custom report-template.html",
    )

    summary_parser = subparsers.add_parser(
        "summary", help="Print a package summary table for a test log"
    )

    for p in (generate_parser, summary_parser):
        p.add_argument(
            "--file",
            "-f",
            type=Path,
            default=None,
            help="go test -json log file (default: read standard input)",
        )
        p.add_argument(
            "--config",
            "-c",
            type=Path,
            default=None,
            help="YAML configuration file",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    configure_verbosity(verbose=args.verbose, quiet=args.quiet)
    logger.debug("Debug logging enabled")

    try:
        if args.command == "generate":
            config = _resolve_config(args.config, args.template_dir, args.no_sort)
            _generate(
                log_file=args.file,
                output_dir=args.output,
                report_override=args.report,
                results_override=args.results,
                write_results=args.json,
                config=config,
            )
        elif args.command == "summary":
            _summary(args.file, _resolve_config(args.config))
    except (GoTestReportError, OSError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
