"""Organization view: Group -> Division -> Department -> Unit containment tree.

Containers are synthesized from the classification columns of each
employee, pruned bottom-up and, when a CEO is present, nested under that
CEO as the single root.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from urllib.parse import quote

from orgview.config import UNASSIGNED_GROUP
from orgview.hierarchy.models import OrgNode, container_node
from orgview.hierarchy.ordering import (
    is_ceo_node,
    report_order_key,
    sort_org_siblings,
    sort_report_order,
)
from orgview.utils.types import OrgType

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "|||"
NO_DIVISION = "__NO_DIVISION__"
NO_DEPARTMENT = "__NO_DEPARTMENT__"
# Characters encodeURIComponent leaves as-is
URI_SAFE = "-_.!~*'()"

_ID_PREFIXES = {
    OrgType.GROUP: "GROUP",
    OrgType.DIVISION: "DIV",
    OrgType.DEPARTMENT: "DEPT",
    OrgType.UNIT: "UNIT",
}


@dataclass
class _Draft:
    """Mutable container used only while synthesizing."""

    node_id: str
    label: str
    org_type: OrgType
    group_name: str = ""
    division_name: str = ""
    department_name: str = ""
    unit_name: str = ""
    children: list["_Draft | OrgNode"] = field(default_factory=list)

    def freeze(self) -> OrgNode:
        children = [c.freeze() if isinstance(c, _Draft) else c for c in self.children]
        return container_node(
            self.node_id,
            self.label,
            self.org_type,
            group_name=self.group_name,
            division_name=self.division_name,
            department_name=self.department_name,
            unit_name=self.unit_name,
            children=tuple(sort_org_siblings(children)),
        )


def org_node_id(org_type: OrgType, path_key: str) -> str:
    safe_path = path_key.strip() or "UNASSIGNED"
    return f"ORG-{_ID_PREFIXES[org_type]}-{quote(safe_path, safe=URI_SAFE)}"


def _join(*parts: str) -> str:
    return KEY_SEPARATOR.join(parts)


def _normalize_label(text: str) -> str:
    return " ".join(text.split()).casefold()


class _ContainerIndex:
    """Get-or-create registry of containers keyed by their full path."""

    def __init__(self, unassigned_group: str):
        self.unassigned_group = unassigned_group
        self.groups: dict[str, _Draft] = {}
        self._drafts: dict[tuple[OrgType, str], _Draft] = {}

    def _get_or_create(self, org_type: OrgType, key: str, parent: _Draft | None, **names: str) -> _Draft:
        draft = self._drafts.get((org_type, key))
        if draft is None:
            label = names[f"{org_type.lower()}_name"]
            draft = _Draft(org_node_id(org_type, key), label, org_type, **names)
            self._drafts[(org_type, key)] = draft
            if parent is None:
                self.groups[key] = draft
            else:
                parent.children.append(draft)
        return draft

    def __len__(self) -> int:
        return len(self._drafts)

    def place(self, employee: OrgNode) -> None:
        """Attach a childless copy of the employee under its deepest container."""
        group = employee.group_name.strip() or self.unassigned_group
        division = employee.division_name.strip()
        department = employee.department_name.strip()
        unit = employee.unit_name.strip()

        parent = self._get_or_create(OrgType.GROUP, group, None, group_name=group)

        division_key = _join(group, division) if division else ""
        if division:
            parent = self._get_or_create(
                OrgType.DIVISION, division_key, parent,
                group_name=group, division_name=division,
            )

        department_key = _join(group, division_key or NO_DIVISION, department) if department else ""
        if department:
            parent = self._get_or_create(
                OrgType.DEPARTMENT, department_key, parent,
                group_name=group, division_name=division, department_name=department,
            )

        if unit:
            unit_key = _join(group, department_key or _join(division_key or NO_DIVISION, NO_DEPARTMENT), unit)
            parent = self._get_or_create(
                OrgType.UNIT, unit_key, parent,
                group_name=group, division_name=division,
                department_name=department, unit_name=unit,
            )

        parent.children.append(replace(employee, children=()))


def synthesize_containers(employees: Sequence[OrgNode], unassigned_group: str = UNASSIGNED_GROUP) -> list[OrgNode]:
    """Phases 1 and 2: build the raw container forest, siblings sorted."""
    index = _ContainerIndex(unassigned_group)
    for employee in sort_report_order(employees):
        index.place(employee)
    logger.debug("Synthesized %d containers for %d employees", len(index), len(employees))
    return sort_org_siblings(draft.freeze() for draft in index.groups.values())


def has_real_employee(node: OrgNode) -> bool:
    if not node.is_org_node:
        return True
    return any(has_real_employee(child) for child in node.children)


def _is_company_level(node: OrgNode) -> bool:
    return node.org_type == OrgType.COMPANY or is_ceo_node(node)


def prune_containers(nodes: Sequence[OrgNode]) -> list[OrgNode]:
    """Phase 3: collapse, lift and drop redundant containers, bottom-up."""
    pruned: list[OrgNode] = []
    for node in nodes:
        current = replace(node, children=tuple(prune_containers(node.children)))
        if not current.is_org_node:
            pruned.append(current)
            continue

        # Same-name chain such as Group "Tech" -> Division "Tech".
        while (
            len(current.children) == 1
            and current.children[0].is_org_node
            and _normalize_label(current.label) == _normalize_label(current.children[0].label)
        ):
            current = replace(current, children=current.children[0].children)

        people = [child for child in current.children if not child.is_org_node]
        containers = [child for child in current.children if child.is_org_node]

        if current.org_type != OrgType.GROUP and not people and containers:
            pruned.extend(containers)
            continue

        if (
            current.org_type == OrgType.GROUP
            and not containers
            and people
            and all(_is_company_level(person) for person in people)
        ):
            pruned.extend(people)
            continue

        if not has_real_employee(current):
            continue

        pruned.append(current)
    return pruned


def sort_org_forest(nodes: Sequence[OrgNode]) -> list[OrgNode]:
    return sort_org_siblings(
        replace(node, children=tuple(sort_org_forest(node.children))) for node in nodes
    )


def strip_employees(nodes: Sequence[OrgNode], excluded_ids: set[str]) -> list[OrgNode]:
    """Remove the given employees, splicing their children into their place."""
    kept: list[OrgNode] = []
    for node in nodes:
        children = strip_employees(node.children, excluded_ids)
        if not node.is_org_node and node.id in excluded_ids:
            kept.extend(children)
        else:
            kept.append(replace(node, children=tuple(children)))
    return kept


def anchor_under_ceo(forest: Sequence[OrgNode], employees: Sequence[OrgNode]) -> list[OrgNode]:
    """Phase 4: nest the forest under the primary CEO, if any."""
    candidates = [employee for employee in employees if is_ceo_node(employee)]
    if not candidates:
        return list(forest)

    primary = min(candidates, key=report_order_key)
    cleaned = strip_employees(forest, {candidate.id for candidate in candidates})
    return [replace(primary, children=tuple(sort_org_forest(cleaned)))]


def build_organization_tree(
    employees: Sequence[OrgNode],
    unassigned_group: str = UNASSIGNED_GROUP,
) -> list[OrgNode]:
    """Build the organization view from an already-scoped employee list."""
    if not employees:
        return []

    raw = synthesize_containers(employees, unassigned_group)
    pruned = sort_org_forest(prune_containers(raw))
    forest = anchor_under_ceo(pruned, employees)

    logger.info(
        "Built organization tree: %d employees, %d root(s)",
        len(employees),
        len(forest),
    )
    return forest
