"""Configuration for report generation.

Values come from, in increasing priority: the defaults of
:class:`ReportConfig`, an optional YAML file loaded with :func:`load_config`,
and command-line flags (applied by the CLI through :meth:`ReportConfig.merged`).

Example YAML::

    output_name: go-tests.html
    template_dir: ./layouts
    sort_output: true
    record_skipped_tests: false
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from gotestreport.errors import ConfigError
from gotestreport.utils.yaml_utils import normalize_yaml_dict_keys


@dataclass(frozen=True)
class ReportConfig:
    """Settings for one report run."""

    # File name of the report when no explicit path is given
    output_name: str = "report.html"

    # Layout file looked up in the template directory
    template_name: str = "report-template.html"

    # Directory holding custom layouts; None uses the bundled templates
    template_dir: Optional[Path] = None

    # Sort packages, tests and subtests by identifier
    sort_output: bool = True

    # Let skip events create test and subtest entries
    record_skipped_tests: bool = True

    def merged(self, **overrides: Any) -> "ReportConfig":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


# Global default configuration instance
DEFAULT_CONFIG = ReportConfig()

_FIELD_TYPES: Dict[str, type] = {
    "output_name": str,
    "template_name": str,
    "template_dir": str,
    "sort_output": bool,
    "record_skipped_tests": bool,
}


def config_from_dict(data: Dict[str, Any], base_dir: Optional[Path] = None) -> ReportConfig:
    """Validate a mapping and build a :class:`ReportConfig` from it.

    Args:
        data: Parsed configuration mapping.
        base_dir: Directory that a relative ``template_dir`` is resolved against.

    Raises:
        ConfigError: On unknown keys or values of the wrong type.
    """
    known = {f.name for f in fields(ReportConfig)}
    values: Dict[str, Any] = {}
    for key, value in normalize_yaml_dict_keys(data).items():
        if key not in known:
            raise ConfigError(f"Unrecognized configuration key '{key}'")
        if value is None:
            continue
        expected = _FIELD_TYPES[key]
        if not isinstance(value, expected):
            raise ConfigError(
                f"Configuration key '{key}' must be of type {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        values[key] = value

    if "template_dir" in values:
        template_dir = Path(values["template_dir"]).expanduser()
        if not template_dir.is_absolute() and base_dir is not None:
            template_dir = base_dir / template_dir
        values["template_dir"] = template_dir

    return ReportConfig(**values)


def load_config(path: Path) -> ReportConfig:
    """Load a YAML configuration file.

    An empty file yields the defaults.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, does not map
            to a dictionary, or contains invalid values.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {path}: {e}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file {path}: {e}") from e

    if data is None:
        return ReportConfig()
    if not isinstance(data, dict):
        raise ConfigError("The configuration YAML must map to a dictionary at top-level.")
    return config_from_dict(data, base_dir=path.parent)
