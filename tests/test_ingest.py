"""
Tests for roster ingestion and header normalization.
"""
import numpy as np
import pandas as pd
import pytest

from orgview.hierarchy import load_roster, validate
from orgview.hierarchy.ingest import (
    MissingColumnError,
    ingest_roster,
    normalize_roster,
    rows_from_records,
)
from orgview.hierarchy.models import RosterRow
from orgview.utils.io import read_table


def test_padded_headers_and_blank_cells():
    df = pd.DataFrame({
        " Employee ID CardX ": ["E1", np.nan],
        "Name (EN)  ": ["  Ann  ", "Bea"],
        "Position": ["Dev", None],
        "Service Date": [pd.Timestamp("2022-05-01"), np.nan],
        "Extra": ["x", "y"],
    })
    rows = normalize_roster(df)
    assert rows == [
        RosterRow(employee_id="E1", name="Ann", position="Dev", service_date="2022-05-01"),
        RosterRow(name="Bea"),
    ]


def test_numeric_ids_are_rendered_without_decimals():
    df = pd.DataFrame({"Employee ID CardX": [1001.0], "Supervisor ID": [7.0], "Name (EN)": ["Ann"]})
    row = normalize_roster(df)[0]
    assert (row.employee_id, row.supervisor_id) == ("1001", "7")


def test_missing_identifier_column_is_rejected():
    with pytest.raises(MissingColumnError):
        normalize_roster(pd.DataFrame({"Name (EN)": ["Ann"]}))


def test_fully_blank_rows_are_dropped():
    df = pd.DataFrame({"Employee ID CardX": ["", "E2"], "Name (EN)": ["  ", "Bea"]})
    assert [row.employee_id for row in normalize_roster(df)] == ["E2"]


def test_records_with_padded_keys():
    rows = rows_from_records([{" Name (EN)": "Ann", "Group ": "Tech", "Unknown": "x"}])
    assert rows == [RosterRow(name="Ann", group="Tech")]


def test_csv_roundtrip_through_loader(roster_csv):
    rows = ingest_roster(roster_csv)
    assert len(rows) == 8
    assert rows[3].email == "cara@cardx.co.th"

    nodes = load_roster(roster_csv)
    assert [node.id for node in nodes][-1] == "VACANT-8-E6"


def test_unsupported_suffix(tmp_path):
    path = tmp_path / "roster.txt"
    path.write_text("Employee ID CardX\nE1\n")
    with pytest.raises(ValueError):
        read_table(path)


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_table(tmp_path / "nope.csv")


def test_validate_reports_status(tmp_path, roster_csv):
    assert validate(roster_csv) == {"status": "ok", "rows_available": 8}

    bad = tmp_path / "bad.csv"
    bad.write_text("Name (EN)\nAnn\n")
    assert validate(bad)["status"] == "error"
