"""Token search and structural filtering over a built forest."""

import logging
import re
import unicodedata
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, fields, replace

from orgview.hierarchy.models import OrgNode
from orgview.hierarchy.ordering import is_ceo_node

logger = logging.getLogger(__name__)

NO_CONSTRAINT = "all"

_COMBINING_MARKS = re.compile("[\u0300-\u036f]")
# Latin alphanumerics plus the Thai block (ko kai .. Thai digit nine)
_OUTSIDE_SEARCH_RANGE = re.compile("[^a-z0-9\u0e01-\u0e59]+")


def normalize_search_text(value: object) -> str:
    text = "" if value is None else str(value)
    text = unicodedata.normalize("NFKD", text.lower())
    text = _COMBINING_MARKS.sub("", text)
    return _OUTSIDE_SEARCH_RANGE.sub(" ", text).strip()


def search_tokens(query: str | None) -> list[str]:
    return normalize_search_text(query).split()


def _search_blob(node: OrgNode) -> str:
    return normalize_search_text(" ".join([
        node.employee_id or node.id,
        node.name,
        node.position,
        node.corporate_title,
        node.org_name,
        node.group_name,
        node.division_name,
        node.department_name,
        node.unit_name,
    ]))


def node_matches_search(node: OrgNode, query: str | None) -> bool:
    """True when every query token occurs somewhere in the node's text."""
    tokens = search_tokens(query)
    if not tokens:
        return True
    blob = _search_blob(node)
    return all(token in blob for token in tokens)


@dataclass(frozen=True)
class StructureFilter:
    """Exact-value constraints; ``None`` means no constraint on that field."""

    group: str | None = None
    division: str | None = None
    department: str | None = None
    unit: str | None = None
    corporate_title: str | None = None

    @classmethod
    def from_options(cls, options: Mapping[str, str | None]) -> "StructureFilter":
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in options.items():
            key = key.replace("-", "_")
            if key not in known:
                raise ValueError(f"Unknown filter: {key}")
            if value is None or value.strip() in ("", NO_CONSTRAINT):
                continue
            values[key] = value
        return cls(**values)

    @property
    def has_structure_constraints(self) -> bool:
        return any(v is not None for v in (self.group, self.division, self.department, self.unit))

    @property
    def is_active(self) -> bool:
        return self.has_structure_constraints or self.corporate_title is not None

    def matches_structure(self, node: OrgNode) -> bool:
        checks = (
            (self.group, node.group_name),
            (self.division, node.division_name),
            (self.department, node.department_name),
            (self.unit, node.unit_name),
        )
        return all(expected is None or actual == expected for expected, actual in checks)

    def matches(self, node: OrgNode) -> bool:
        if not self.matches_structure(node):
            return False
        return self.corporate_title is None or node.corporate_title == self.corporate_title


def flatten_forest(forest: Iterable[OrgNode]) -> list[OrgNode]:
    """Pre-order list of every node in the forest."""
    flat: list[OrgNode] = []
    stack = list(reversed(list(forest)))
    while stack:
        node = stack.pop()
        flat.append(node)
        stack.extend(reversed(node.children))
    return flat


def management_chain(node_id: str, index: Mapping[str, OrgNode]) -> list[str]:
    """Manager ids above ``node_id``, nearest first.

    Stops at the first manager id that is unknown or already seen, so a
    cyclic manager reference ends the walk instead of looping.
    """
    chain: list[str] = []
    visited = {node_id}
    node = index.get(node_id)
    cursor = node.manager_id if node else None
    while cursor and cursor not in visited and cursor in index:
        chain.append(cursor)
        visited.add(cursor)
        cursor = index[cursor].manager_id
    return chain


def show_ceo_for_structure(nodes: Sequence[OrgNode], filters: StructureFilter) -> bool:
    """Whether a CEO anchor still has direct reports inside the structure filter."""
    ceo_ids = {node.id for node in nodes if is_ceo_node(node)}
    if not filters.has_structure_constraints or not ceo_ids:
        return True
    return any(
        node.manager_id in ceo_ids
        for node in nodes
        if node.manager_id and filters.matches_structure(node)
    )


def _filter_nodes(
    nodes: Sequence[OrgNode],
    query: str,
    filters: StructureFilter,
    suppressed_ids: set[str],
) -> list[OrgNode]:
    kept: list[OrgNode] = []
    for node in nodes:
        children = _filter_nodes(node.children, query, filters, suppressed_ids)
        self_match = node_matches_search(node, query) and filters.matches(node)
        if not self_match and not children:
            continue
        if node.id in suppressed_ids:
            kept.extend(children)
        else:
            kept.append(replace(node, children=tuple(children)))
    return kept


def filter_tree(
    forest: Sequence[OrgNode],
    query: str | None = "",
    filters: StructureFilter | None = None,
) -> list[OrgNode]:
    """Keep matching nodes together with the path leading to them.

    A node survives when it matches both the query and the filters, or when
    anything below it survives. When structure constraints are active and
    no matching employee reports directly to a CEO, each surviving CEO node
    is replaced by its surviving children.
    """
    filters = filters or StructureFilter()
    query = query or ""
    if not search_tokens(query) and not filters.is_active:
        return list(forest)

    flat = flatten_forest(forest)
    suppressed: set[str] = set()
    if not show_ceo_for_structure(flat, filters):
        suppressed = {node.id for node in flat if is_ceo_node(node)}

    result = _filter_nodes(forest, query, filters, suppressed)
    logger.info("Filtered forest: %d -> %d node(s)", len(flat), len(flatten_forest(result)))
    return result
