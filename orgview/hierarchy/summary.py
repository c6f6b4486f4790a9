"""Headcount summaries and filter facet options for a loaded roster."""

import logging
from collections.abc import Sequence
from dataclasses import replace

import pandas as pd

from orgview.hierarchy.models import OrgNode
from orgview.hierarchy.ordering import corporate_title_key, title_rank
from orgview.hierarchy.search import StructureFilter

logger = logging.getLogger(__name__)

type FacetOptions = dict[str, list[str]]

NOT_SPECIFIED = "Not Specified"


def _unique_values(nodes: Sequence[OrgNode], attr: str, key=None) -> list[str]:
    values = {(getattr(node, attr) or "").strip() for node in nodes}
    values.discard("")
    return sorted(values, key=key or (lambda v: (v.casefold(), v)))


def facet_options(nodes: Sequence[OrgNode], filters: StructureFilter | None = None) -> FacetOptions:
    """Options for each filter, each level scoped by the levels above it."""
    filters = filters or StructureFilter()
    employees = [node for node in nodes if not node.is_org_node]

    in_group = [n for n in employees if filters.group is None or n.group_name == filters.group]
    in_division = [n for n in in_group if filters.division is None or n.division_name == filters.division]
    in_department = [
        n for n in in_division if filters.department is None or n.department_name == filters.department
    ]

    return {
        "groups": _unique_values(employees, "group_name"),
        "divisions": _unique_values(in_group, "division_name"),
        "departments": _unique_values(in_division, "department_name"),
        "units": _unique_values(in_department, "unit_name"),
        "corporate_titles": _unique_values(employees, "corporate_title", key=corporate_title_key),
    }


def reconcile_filters(filters: StructureFilter, options: FacetOptions) -> StructureFilter:
    """Reset constraints whose value is no longer offered."""
    checks = {
        "division": "divisions",
        "department": "departments",
        "unit": "units",
        "corporate_title": "corporate_titles",
    }
    stale = {
        attr: None
        for attr, facet in checks.items()
        if getattr(filters, attr) is not None and getattr(filters, attr) not in options[facet]
    }
    if stale:
        logger.info("Resetting stale filters: %s", ", ".join(sorted(stale)))
    return replace(filters, **stale)


def summary_totals(nodes: Sequence[OrgNode]) -> dict[str, int]:
    employees = [node for node in nodes if not node.is_org_node]
    vacant = sum(1 for node in employees if node.is_vacant)
    return {
        "manpower": len(employees),
        "headcount": len(employees) - vacant,
        "vacant": vacant,
    }


def corporate_title_summary(nodes: Sequence[OrgNode], vacant_only: bool = False) -> pd.DataFrame:
    """Count employees per corporate title, most senior titles first."""
    employees = [
        node for node in nodes
        if not node.is_org_node and (node.is_vacant or not vacant_only)
    ]
    if not employees:
        return pd.DataFrame(columns=["title", "total"])

    df = pd.DataFrame({
        "title": [(node.corporate_title or "").strip() or NOT_SPECIFIED for node in employees],
    })
    counts = df.groupby("title").size().reset_index(name="total")
    counts["rank"] = counts["title"].map(title_rank)
    counts["title_key"] = counts["title"].str.casefold()
    counts = counts.sort_values(
        ["rank", "total", "title_key", "title"],
        ascending=[True, False, True, True],
    )
    return counts[["title", "total"]].reset_index(drop=True)
