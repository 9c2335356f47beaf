"""Output paths and the file sink for generated artifacts.

Paths are built from an optional output directory and either an explicit
override or a default file name. Documents are written in one call once they
are complete.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from gotestreport.logging import get_logger

logger = get_logger(__name__)


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory exists for a file path."""
    path.parent.mkdir(parents=True, exist_ok=True)


def resolve_override_path(
    override: Optional[Path], output_dir: Optional[Path]
) -> Optional[Path]:
    """Resolve an override path with respect to an optional output directory.

    - Absolute override paths are returned as-is.
    - Relative override paths are interpreted as relative to ``output_dir``
      when provided; otherwise relative to the current working directory.

    Returns:
        The resolved path or None if no override was provided.
    """
    if override is None:
        return None
    if override.is_absolute():
        return override
    if output_dir is not None:
        return (output_dir / override).resolve()
    return override


def report_path_for_run(
    output_dir: Optional[Path],
    report_override: Optional[Path],
    default_name: str = "report.html",
) -> Path:
    """Determine where the HTML report is written.

    - ``report_override`` wins, resolved against ``output_dir`` when relative.
    - Else ``output_dir/<default_name>`` when ``output_dir`` is given.
    - Else ``<default_name>`` in the current working directory.
    """
    resolved = resolve_override_path(report_override, output_dir)
    if resolved is not None:
        return resolved
    if output_dir is not None:
        return output_dir / default_name
    return Path(default_name)


def results_path_for_run(
    report_path: Path,
    output_dir: Optional[Path],
    results_override: Optional[Path],
) -> Path:
    """Determine where the JSON results export is written.

    Defaults to ``<report_stem>.results.json`` next to the report.
    """
    resolved = resolve_override_path(results_override, output_dir)
    if resolved is not None:
        return resolved
    return report_path.with_name(f"{report_path.stem}.results.json")


def write_report(document: str, path: Path) -> Path:
    """Write a finished document to ``path`` in a single call.

    Returns:
        The path that was written.
    """
    ensure_parent_dir(path)
    path.write_text(document, encoding="utf-8")
    logger.info(f"Report written to: {path}")
    return path


def write_results_json(data: Dict[str, Any], path: Path) -> Path:
    """Write a JSON-serializable mapping to ``path``."""
    ensure_parent_dir(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
    logger.info(f"Results written to: {path}")
    return path
