"""Sibling ordering shared by the reporting and organization views.

Title ranking is an ordered rule table evaluated top to bottom, since a
title can contain more than one needle ("senior professional" also
contains "professional").
"""

from orgview.hierarchy.models import OrgNode

type SortKey = tuple[int | str, ...]

UNRANKED = 99

TITLE_RANK_RULES: tuple[tuple[int, str], ...] = (
    (1, "chief"),
    (2, "head of"),
    (3, "team lead"),
    (4, "expert"),
    (5, "senior professional"),
    (6, "professional"),
    (7, "support"),
    (8, "staff"),
)

ASSISTANT_MARKERS = ("assistant", "secretary")
CEO_MARKER = "chief executive officer"


def _normalize_title(value: str | None) -> str:
    return (value or "").strip().lower()


def title_rank(title: str | None) -> int:
    """Rank a corporate title; lower is more senior."""
    text = _normalize_title(title)
    if not text:
        return UNRANKED
    for rank, needle in TITLE_RANK_RULES:
        if needle in text:
            return rank
    return UNRANKED


def is_assistant_role(position: str | None) -> bool:
    text = _normalize_title(position)
    return any(marker in text for marker in ASSISTANT_MARKERS)


def is_ceo_title(value: str | None) -> bool:
    text = _normalize_title(value)
    return text == "ceo" or CEO_MARKER in text


def is_ceo_node(node: OrgNode | None) -> bool:
    if node is None or node.is_org_node:
        return False
    return is_ceo_title(node.position) or is_ceo_title(node.corporate_title)


def _name_key(name: str) -> tuple[str, str]:
    return (name.casefold(), name)


def report_order_key(node: OrgNode) -> SortKey:
    """Assistants and secretaries last, then by title rank, then by name."""
    return (
        int(is_assistant_role(node.position)),
        title_rank(node.corporate_title),
        *_name_key(node.name or ""),
    )


def org_sibling_key(node: OrgNode) -> SortKey:
    """Containers first (by label), employees after them in report order."""
    if node.is_org_node:
        return (0, *_name_key(node.label))
    return (1, *report_order_key(node))


def corporate_title_key(title: str) -> SortKey:
    return (title_rank(title), *_name_key(title))


def sort_report_order(nodes) -> list[OrgNode]:
    return sorted(nodes, key=report_order_key)


def sort_org_siblings(nodes) -> list[OrgNode]:
    return sorted(nodes, key=org_sibling_key)
