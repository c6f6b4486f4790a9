"""Reporting view: link employees to their managers."""

import logging
from collections import defaultdict
from collections.abc import Sequence
from dataclasses import replace

from orgview.hierarchy.models import OrgNode
from orgview.hierarchy.ordering import report_order_key, sort_report_order

logger = logging.getLogger(__name__)


def _build_adjacency(nodes: Sequence[OrgNode], index: dict[str, OrgNode]) -> dict[str, list[OrgNode]]:
    """Build a manager id -> direct reports map, sorted in report order."""
    tree: dict[str, list[OrgNode]] = defaultdict(list)
    for node in nodes:
        if node.manager_id and node.manager_id in index:
            tree[node.manager_id].append(node)
    return {manager_id: sort_report_order(reports) for manager_id, reports in tree.items()}


def _walk_tree(
    node: OrgNode,
    adjacency: dict[str, list[OrgNode]],
    visited: set[str],
) -> OrgNode:
    visited.add(node.id)
    children = []
    for child in adjacency.get(node.id, []):
        if child.id not in visited:
            children.append(_walk_tree(child, adjacency, visited))
    return replace(node, children=tuple(children))


def build_reporting_tree(nodes: Sequence[OrgNode]) -> list[OrgNode]:
    """Assemble the manager/direct-report forest.

    A node whose manager id is unknown becomes a root. Members of a manager
    cycle have no root above them; they are promoted to roots in report
    order so that every input node still appears exactly once.
    """
    index = {node.id: node for node in nodes}
    adjacency = _build_adjacency(nodes, index)

    roots = [node for node in nodes if not node.manager_id or node.manager_id not in index]
    visited: set[str] = set()
    forest = [_walk_tree(root, adjacency, visited) for root in sort_report_order(roots)]

    for node in sort_report_order(index.values()):
        if node.id in visited:
            continue
        logger.warning("Manager cycle at %s (reports to %s), promoting to root", node.id, node.manager_id)
        forest.append(_walk_tree(node, adjacency, visited))

    forest.sort(key=report_order_key)
    logger.info("Built reporting tree: %d nodes, %d root(s)", len(visited), len(forest))
    return forest
