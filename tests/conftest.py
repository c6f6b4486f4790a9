import pandas as pd
import pytest

from orgview.hierarchy.classify import classify_records
from orgview.hierarchy.models import ROSTER_COLUMNS, RosterRow

HEADERS = {attr: header for header, attr in ROSTER_COLUMNS.items()}


def make_row(**fields) -> RosterRow:
    return RosterRow(**fields)


def rows_to_frame(rows: list[RosterRow]) -> pd.DataFrame:
    return pd.DataFrame([{HEADERS[k]: v for k, v in vars(row).items()} for row in rows])


@pytest.fixture
def roster_rows() -> list[RosterRow]:
    return [
        make_row(employee_id="E1", name="Somchai Jaidee", position="Chief Executive Officer",
                 corporate_title="Chief", group="CEO Office", company="CardX"),
        make_row(employee_id="E2", name="Anna Finance", position="Chief Financial Officer",
                 corporate_title="Chief", supervisor_id="E1", group="Finance"),
        make_row(employee_id="E3", name="Ben Lead", position="Accounting Lead",
                 corporate_title="Team Lead", supervisor_id="E2", group="Finance",
                 division="Accounting", department="AP"),
        make_row(employee_id="E4", name="Cara Pro", position="Accountant",
                 corporate_title="Professional", supervisor_id="E3", group="Finance",
                 division="Accounting", department="AP", unit="Payables",
                 email="cara@cardx.co.th", service_date="2021-03-01"),
        make_row(employee_id="E5", name="Dan Helper", position="Executive Assistant",
                 corporate_title="Support", supervisor_id="E1", group="CEO Office"),
        make_row(employee_id="E6", name="Eve Head", position="Head of Technology",
                 corporate_title="Head of", supervisor_id="E1", group="Tech", division="Tech"),
        make_row(employee_id="E7", name="Finn Dev", position="Developer",
                 corporate_title="Senior Professional", supervisor_id="E6", group="Tech",
                 division="Tech", department="Platform"),
        make_row(position="Developer", supervisor_id="E6", group="Tech", division="Tech",
                 department="Platform"),
    ]


@pytest.fixture
def roster_nodes(roster_rows):
    return classify_records(roster_rows)


@pytest.fixture
def roster_csv(tmp_path, roster_rows):
    path = tmp_path / "roster.csv"
    df = rows_to_frame(roster_rows)
    df.columns = [f" {col} " for col in df.columns]
    df.to_csv(path, index=False)
    return path
