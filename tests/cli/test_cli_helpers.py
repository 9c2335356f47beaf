from gotestreport import cli as cli_mod


def test_format_table_and_plural() -> None:
    table = cli_mod._format_table(
        ["H1", "H2"], [["abc", "1"], ["defghi", "2"]], max_col_width=5
    )
    assert "H1" in table and "H2" in table
    # Ensure clipping with ASCII ellipsis (max_col_width=5 -> keep 2 chars + '...')
    assert "de..." in table

    assert cli_mod._plural(1, "package") == "package"
    assert cli_mod._plural(2, "package") == "packages"
    assert cli_mod._plural(0, "test") == "tests"


def test_format_table_empty_rows() -> None:
    assert cli_mod._format_table(["A"], []) == ""


def test_format_table_column_alignment() -> None:
    table = cli_mod._format_table(["Name", "Status"], [["pkg/a", "pass"]], min_width=4)
    lines = table.splitlines()
    assert lines[0] == "   Name  | Status"
    assert lines[1] == "   ------+-------"
    assert lines[2] == "   pkg/a | pass  "
