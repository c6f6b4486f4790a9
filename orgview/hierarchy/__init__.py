"""Org chart hierarchy: classify roster rows and build the two views.

Rows are classified once per upload, then either linked by manager id
(reporting view) or grouped into Group/Division/Department/Unit containers
(organization view). Search and structural filters are applied per request.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from orgview.config import ViewConfig
from orgview.hierarchy.classify import classify_records, classify_row
from orgview.hierarchy.ingest import MissingColumnError, ingest_roster, normalize_roster, rows_from_records
from orgview.hierarchy.models import OrgNode, RosterRow
from orgview.hierarchy.organization import build_organization_tree
from orgview.hierarchy.reporting import build_reporting_tree
from orgview.hierarchy.search import (
    StructureFilter,
    filter_tree,
    flatten_forest,
    management_chain,
    node_matches_search,
    search_tokens,
)
from orgview.hierarchy.summary import corporate_title_summary, facet_options, summary_totals
from orgview.utils.types import ViewMode

logger = logging.getLogger(__name__)


def load_roster(path: str | Path, config: ViewConfig | None = None) -> list[OrgNode]:
    """Read a roster file and classify every row."""
    config = config or ViewConfig()
    return classify_records(ingest_roster(path), company_name=config.company_name)


def build_view(
    nodes: Sequence[OrgNode],
    mode: ViewMode,
    query: str = "",
    filters: StructureFilter | None = None,
    config: ViewConfig | None = None,
) -> list[OrgNode]:
    """Build the requested view and apply search and filters to it."""
    config = config or ViewConfig()
    filters = filters or StructureFilter()

    match mode:
        case ViewMode.REPORTING:
            return filter_tree(build_reporting_tree(nodes), query, filters)
        case ViewMode.ORGANIZATION:
            scoped = [n for n in nodes if filters.matches(n) and node_matches_search(n, query)]
            logger.info("Scoped %d of %d employees for organization view", len(scoped), len(nodes))
            return build_organization_tree(scoped, unassigned_group=config.unassigned_group)
        case other:
            raise ValueError(f"Unknown view mode: {other}")


def validate(path: str | Path) -> dict[str, str | int]:
    """Check that a roster can be read and carries the identifier column."""
    try:
        rows = ingest_roster(path)
        return {"status": "ok", "rows_available": len(rows)}
    except (FileNotFoundError, ValueError) as exc:
        return {"status": "error", "message": str(exc)}
