from pathlib import Path

from gotestreport.utils.output_paths import (
    report_path_for_run,
    resolve_override_path,
    results_path_for_run,
    write_report,
    write_results_json,
)


def test_resolve_override_path() -> None:
    assert resolve_override_path(None, Path("out")) is None
    assert resolve_override_path(Path("/abs/r.html"), Path("out")) == Path("/abs/r.html")
    assert resolve_override_path(Path("r.html"), None) == Path("r.html")
    assert resolve_override_path(Path("r.html"), Path("/out")) == Path("/out/r.html")


def test_report_path_for_run() -> None:
    assert report_path_for_run(None, None) == Path("report.html")
    assert report_path_for_run(Path("/out"), None) == Path("/out/report.html")
    assert report_path_for_run(Path("/out"), None, "go.html") == Path("/out/go.html")
    assert report_path_for_run(Path("/out"), Path("x.html")) == Path("/out/x.html")


def test_results_path_for_run() -> None:
    assert results_path_for_run(Path("/out/report.html"), None, None) == Path(
        "/out/report.results.json"
    )
    assert results_path_for_run(Path("/out/report.html"), Path("/out"), Path("r.json")) == Path(
        "/out/r.json"
    )


def test_write_report_creates_parent_dirs(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "report.html"
    assert write_report("<html></html>", target) == target
    assert target.read_text(encoding="utf-8") == "<html></html>"


def test_write_results_json(tmp_path: Path) -> None:
    target = tmp_path / "r" / "results.json"
    write_results_json({"passed": 1}, target)
    assert target.read_text() == '{\n  "passed": 1\n}\n'
