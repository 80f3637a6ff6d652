# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
from datetime import datetime

from ttr.columns import row_from_columns, row_to_columns
from ttr.model import CommitInfo, GitInfo, TestRow
from ttr.parser import parse_content, title_from_filename
from ttr.serializer import collapse_whitespace, serialize_content, serialize_row


def _history() -> GitInfo:
    return GitInfo(
        created=CommitInfo("Ada", "ada@example.com", datetime(2023, 5, 1, 9, 30)),
        modified=CommitInfo("Bob", "bob@example.com", datetime(2024, 2, 3, 17, 45)),
    )


def test_ser_001_serialize_row_builds_path_and_content() -> None:
    row = TestRow(
        title="Login works",
        steps="Open  the\tapp\r\nClick   login",
        expected_result="Dashboard    shows",
        section="Auth",
        section_hierarchy="App > Auth",
        fields={
            "Priority": "High",
            "Updated By": "bob",
            "Estimate": "5m",
            "ID": "C7",
        },
    )

    serialized = serialize_row(row)

    assert serialized.relative_path == "App/Auth/Login_works.test.txt"
    assert serialized.content == (
        "Open the app\nClick login\n\n"
        "Expected Result:\nDashboard shows\n\n"
        "ID: C7\nPriority: High\n"
    )


def test_ser_002_serialize_row_falls_back_to_single_section() -> None:
    row = TestRow(title="T", steps="s", section="Auth", section_hierarchy="")

    assert serialize_row(row).relative_path == "Auth/T.test.txt"
    assert serialize_row(row, suffix=".txt").relative_path == "Auth/T.txt"


def test_ser_003_result_block_is_omitted_when_empty() -> None:
    row = TestRow(
        title="T", steps="step", expected_result="   ", fields={"Type": "Smoke"}
    )

    assert serialize_content(row) == "step\n\nType: Smoke\n"


def test_ser_004_field_values_stay_on_one_line() -> None:
    row = TestRow(title="T", steps="step", fields={"References": "REQ-1\nREQ-2"})

    assert serialize_content(row) == "step\n\nReferences: REQ-1 REQ-2\n"


def test_ser_005_collapse_whitespace_keeps_line_breaks() -> None:
    assert collapse_whitespace("  a \t b\r\n\r\nc  ") == "a b\n\nc"


def test_ser_006_round_trip_keeps_persisted_fields_only() -> None:
    row = TestRow(
        title="Checkout",
        steps="Add item\nPay",
        expected_result="Order placed\n\nMail sent",
        section_hierarchy="Shop",
        fields={
            "ID": "C42",
            "Created By": "Ada",
            "Priority": "Critical",
            "Suite ID": "S1",
            "Updated By": "Bob",
            "Milestone": "M1",
        },
    )

    serialized = serialize_row(row)
    parsed = parse_content(serialized.content)

    file_name = serialized.relative_path.split("/")[-1]
    assert title_from_filename(file_name, ".test.txt") == "Checkout"
    assert parsed.steps == row.steps
    assert parsed.expected_result == row.expected_result
    assert parsed.fields == {
        "ID": "C42",
        "Created By": "Ada",
        "Priority": "Critical",
        "Suite ID": "S1",
    }


def test_col_001_row_without_history_has_no_history_columns() -> None:
    row = TestRow(
        title="T", steps="s", section="b", section_hierarchy="a > b", section_depth=2
    )

    columns = row_to_columns(row)

    assert columns == {
        "Title": "T",
        "Section": "b",
        "Section Depth": "2",
        "Section Hierarchy": "a > b",
        "Steps": "s",
    }
    for name in ("Created By", "Created On", "Updated By", "Updated On"):
        assert name not in columns


def test_col_002_history_fills_columns_and_inline_values_win() -> None:
    row = TestRow(
        title="T",
        expected_result="r",
        fields={"Created By": "Original Author", "Priority": "Low"},
        git_info=_history(),
    )

    columns = row_to_columns(row)

    assert columns["Created By"] == "Original Author"
    assert columns["Created On"] == "05/01/2023 09:30 AM"
    assert columns["Updated By"] == "Bob <bob@example.com>"
    assert columns["Updated On"] == "02/03/2024 05:45 PM"
    assert columns["Priority"] == "Low"
    assert columns["Expected Result"] == "r"
    assert list(columns) == [
        "Title",
        "Created By",
        "Created On",
        "Expected Result",
        "Priority",
        "Section",
        "Section Depth",
        "Section Hierarchy",
        "Steps",
        "Updated By",
        "Updated On",
    ]


def test_col_003_row_from_columns_drops_empty_cells_and_keeps_extras() -> None:
    row = row_from_columns(
        {
            "ID": "C1",
            "Title": " Login ",
            "Priority": "",
            "Steps": "do it",
            "Expected Result": "",
            "Section": "Auth",
            "Section Hierarchy": "App > Auth",
            "Section Depth": "2",
            "Section Description": "Auth area",
            "Custom Owner": "qa-team",
        }
    )

    assert row.title == "Login"
    assert row.steps == "do it"
    assert row.expected_result is None
    assert row.section == "Auth"
    assert row.section_hierarchy == "App > Auth"
    assert row.section_depth == 2
    assert row.section_description == "Auth area"
    assert row.fields == {"ID": "C1"}
    assert row.extra == {"Custom Owner": "qa-team"}


def test_col_004_row_from_columns_tolerates_missing_columns() -> None:
    row = row_from_columns({"Title": "Only title", "Section Depth": "deep"})

    assert row.title == "Only title"
    assert row.steps == ""
    assert row.section_depth == 0
    assert row.fields == {}
