"""
Tests for roster row classification (ids, defaults, org level ladder).
"""
import pytest

from conftest import make_row
from orgview.hierarchy.classify import classify_org, classify_records, classify_row
from orgview.hierarchy.models import RosterRow
from orgview.utils.types import OrgType


def test_vacant_row_without_supervisor_gets_root_id():
    node = classify_row(make_row(position="Analyst"), 3, set())
    assert node.id == "VACANT-4-ROOT"
    assert node.is_vacant
    assert node.employee_id == ""
    assert node.name == "Vacant"
    assert node.corporate_title == "Vacant"


def test_vacant_row_uses_supervisor_in_id():
    node = classify_row(make_row(position="Analyst", supervisor_id="E9"), 0, set())
    assert node.id == "VACANT-1-E9"
    assert node.manager_id == "E9"


def test_duplicate_employee_id_is_suffixed_and_both_kept():
    nodes = classify_records([
        make_row(employee_id="E1", name="First"),
        make_row(employee_id="E1", name="Second"),
    ])
    assert [n.id for n in nodes] == ["E1", "E1-DUP-2"]
    assert [n.employee_id for n in nodes] == ["E1", "E1"]


def test_repeated_collision_stays_unique():
    nodes = classify_records([
        make_row(employee_id="E1", name="A"),
        make_row(employee_id="E1-DUP-3", name="B"),
        make_row(employee_id="E1", name="C"),
    ])
    ids = [n.id for n in nodes]
    assert len(set(ids)) == 3
    assert ids == ["E1", "E1-DUP-3", "E1-DUP-3-DUP-3"]


def test_filler_rows_are_skipped_but_keep_row_numbers():
    nodes = classify_records([
        make_row(employee_id="X", group="Tech"),
        make_row(position="Developer"),
    ])
    assert [n.id for n in nodes] == ["VACANT-2-ROOT"]


def test_filled_row_defaults():
    node = classify_row(make_row(employee_id="E1", name="Ann", service_date="2020-01-01"), 0, set())
    assert node.corporate_title == "Not Specified"
    assert node.position == "Vacant Position"
    assert node.email == "-"
    assert node.hire_date == "2020-01-01"
    assert node.manager_id is None
    assert not node.is_vacant


def test_vacant_row_drops_service_date():
    node = classify_row(make_row(position="Dev", service_date="2020-01-01"), 0, set())
    assert node.hire_date == ""


@pytest.mark.parametrize(
    "row, expected",
    [
        (RosterRow(position="CEO", group="CEO Office", unit="X"), (OrgType.COMPANY, "CardX")),
        (RosterRow(position="Chief Executive Officer", company="Acme"), (OrgType.COMPANY, "Acme")),
        (RosterRow(position="Chief Risk Officer", group="Risk", unit="Audit"), (OrgType.UNIT, "Audit")),
        (RosterRow(position="Chief Risk Officer", group="Risk", division="Control"), (OrgType.DIVISION, "Control")),
        (RosterRow(position="Manager", corporate_title="Chief", company="Acme"), (OrgType.COMPANY, "Acme")),
        (RosterRow(position="Dev", unit="Web", department="Eng"), (OrgType.UNIT, "Web")),
        (RosterRow(position="Dev", department="Eng", division="Tech"), (OrgType.DEPARTMENT, "Eng")),
        (RosterRow(position="HRBP", division="CPO Office", group="People"), (OrgType.GROUP, "People")),
        (RosterRow(position="HRBP", division="cpo office"), (OrgType.DIVISION, "cpo office")),
        (RosterRow(position="Dev", division="Tech", group="Tech Group"), (OrgType.DIVISION, "Tech")),
        (RosterRow(position="Dev", group="Tech Group"), (OrgType.GROUP, "Tech Group")),
        (RosterRow(position="Dev"), (OrgType.COMPANY, "CardX")),
    ],
)
def test_org_classification_ladder(row, expected):
    assert classify_org(row) == expected


def test_company_name_override():
    assert classify_org(RosterRow(position="Dev"), company_name="Other") == (OrgType.COMPANY, "Other")


def test_classify_records_is_repeatable(roster_rows):
    assert classify_records(roster_rows) == classify_records(roster_rows)
