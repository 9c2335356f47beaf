"""Composition of the rendered cards and run statistics into a full page.

The page layout is a Jinja2 template. By default it is loaded from the
``templates`` directory shipped with the package; a custom directory can be
given instead. The template receives:

- ``html_elements``: list of pre-escaped package cards;
- ``failed_tests`` / ``passed_tests``: counters;
- ``total_test_time``: formatted run duration;
- ``test_date``: formatted run date.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateNotFound,
    select_autoescape,
)
from jinja2 import TemplateError as JinjaTemplateError

from gotestreport.errors import LayoutUnavailableError, TemplateError
from gotestreport.logging import get_logger
from gotestreport.model import ReportStats
from gotestreport.render import DocumentFragment

logger = get_logger(__name__)

DEFAULT_TEMPLATE = "report-template.html"


def _loader(template_dir: Optional[Path]) -> BaseLoader:
    if template_dir is None:
        try:
            return PackageLoader("gotestreport", "templates")
        except ValueError as e:
            raise LayoutUnavailableError(
                f"Bundled report templates are not installed: {e}"
            ) from e
    if not template_dir.is_dir():
        raise LayoutUnavailableError(f"Template directory not found: {template_dir}")
    return FileSystemLoader(str(template_dir))


def create_environment(template_dir: Optional[Path] = None) -> Environment:
    """Return the Jinja2 environment acting as the layout provider.

    Raises:
        LayoutUnavailableError: If the template directory cannot be used.
    """
    return Environment(
        loader=_loader(template_dir),
        autoescape=select_autoescape(["html", "xml"]),
        undefined=StrictUndefined,
    )


def compose(
    fragment: DocumentFragment,
    stats: ReportStats,
    template_dir: Optional[Path] = None,
    template_name: str = DEFAULT_TEMPLATE,
) -> str:
    """Merge ``fragment`` and ``stats`` into the page layout.

    Args:
        fragment: Rendered package cards.
        stats: Run-level counters, duration and date.
        template_dir: Directory holding ``template_name``; the bundled
            templates are used when None.
        template_name: Layout file name.

    Returns:
        The complete HTML document.

    Raises:
        LayoutUnavailableError: If the layout cannot be found or loaded.
        TemplateError: If the layout cannot be parsed or rendered.
    """
    env = create_environment(template_dir)
    try:
        template = env.get_template(template_name)
    except TemplateNotFound as e:
        raise LayoutUnavailableError(f"Report layout not found: {template_name}") from e
    except JinjaTemplateError as e:
        raise TemplateError(f"Invalid report layout {template_name}: {e}") from e

    try:
        document = template.render(
            html_elements=fragment.to_html(),
            failed_tests=stats.failed,
            passed_tests=stats.passed,
            total_test_time=stats.total_test_time,
            test_date=stats.test_date,
        )
    except JinjaTemplateError as e:
        raise TemplateError(f"Failed to apply report layout {template_name}: {e}") from e

    logger.debug(
        f"Composed report from {template_name} with {len(fragment.packages)} packages"
    )
    return document
