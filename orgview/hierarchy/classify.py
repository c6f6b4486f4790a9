"""Classify roster rows into employee nodes."""

import logging
from collections.abc import Sequence

from orgview.config import DEFAULT_COMPANY
from orgview.hierarchy.models import OrgNode, RosterRow
from orgview.hierarchy.ordering import is_ceo_title
from orgview.utils.types import OrgType

logger = logging.getLogger(__name__)

CPO_OFFICE = "cpo office"


def _resolve_id(row: RosterRow, row_index: int, used_ids: set[str]) -> str:
    row_number = row_index + 1
    node_id = row.employee_id or f"VACANT-{row_number}-{row.supervisor_id or 'ROOT'}"
    while node_id in used_ids:
        node_id = f"{node_id}-DUP-{row_number}"
    return node_id


def classify_org(row: RosterRow, company_name: str = DEFAULT_COMPANY) -> tuple[OrgType, str]:
    """Pick the org level a row belongs to, first matching rule wins."""
    company = row.company or company_name
    position = row.position.lower()
    corporate_title = row.corporate_title.lower()

    if is_ceo_title(position):
        return OrgType.COMPANY, company

    if "chief" in position or "chief" in corporate_title:
        levels = (
            (OrgType.UNIT, row.unit),
            (OrgType.DEPARTMENT, row.department),
            (OrgType.DIVISION, row.division),
            (OrgType.GROUP, row.group),
        )
        for org_type, value in levels:
            if value:
                return org_type, value
        return OrgType.COMPANY, company

    match row:
        case RosterRow(unit=unit) if unit:
            return OrgType.UNIT, unit
        case RosterRow(department=department) if department:
            return OrgType.DEPARTMENT, department
        case RosterRow(division=division, group=group) if division.lower() == CPO_OFFICE and group:
            return OrgType.GROUP, group
        case RosterRow(division=division) if division:
            return OrgType.DIVISION, division
        case RosterRow(group=group) if group:
            return OrgType.GROUP, group
        case _:
            return OrgType.COMPANY, company


def classify_row(
    row: RosterRow,
    row_index: int,
    used_ids: set[str],
    company_name: str = DEFAULT_COMPANY,
) -> OrgNode | None:
    """Turn one roster row into an employee node, or None for filler rows.

    ``used_ids`` is read to resolve collisions; the caller records the
    returned id.
    """
    if not row.name and not row.position:
        return None

    is_vacant = not row.employee_id
    org_type, org_name = classify_org(row, company_name)

    return OrgNode(
        id=_resolve_id(row, row_index, used_ids),
        employee_id=row.employee_id,
        is_vacant=is_vacant,
        name=row.name or "Vacant",
        position=row.position or "Vacant Position",
        corporate_title=row.corporate_title or ("Vacant" if is_vacant else "Not Specified"),
        org_type=org_type,
        org_name=org_name,
        group_name=row.group,
        division_name=row.division,
        department_name=row.department,
        unit_name=row.unit,
        email=row.email or "-",
        hire_date="" if is_vacant else row.service_date,
        location=row.location,
        manager_id=row.supervisor_id or None,
    )


def classify_records(
    rows: Sequence[RosterRow],
    company_name: str = DEFAULT_COMPANY,
) -> list[OrgNode]:
    """Classify a whole roster, keeping ids unique across it."""
    used_ids: set[str] = set()
    nodes: list[OrgNode] = []
    skipped = duplicates = 0

    for row_index, row in enumerate(rows):
        node = classify_row(row, row_index, used_ids, company_name)
        if node is None:
            skipped += 1
            continue
        if node.id.endswith(f"-DUP-{row_index + 1}"):
            duplicates += 1
        used_ids.add(node.id)
        nodes.append(node)

    vacant = sum(1 for node in nodes if node.is_vacant)
    logger.info(
        "Classified %d rows: %d nodes, %d vacant, %d duplicate ids, %d skipped",
        len(rows),
        len(nodes),
        vacant,
        duplicates,
        skipped,
    )
    return nodes
