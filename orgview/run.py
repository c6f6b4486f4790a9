"""Command-line runner: load a roster, build a view and print it."""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from orgview import hierarchy
from orgview.config import load_view_config
from orgview.hierarchy import StructureFilter, build_view, load_roster, management_chain
from orgview.hierarchy.models import OrgNode
from orgview.hierarchy.summary import corporate_title_summary, facet_options, reconcile_filters, summary_totals
from orgview.utils.io import write_output
from orgview.utils.types import parse_view_mode

console = Console()

FILTER_ARGS = ("group", "division", "department", "unit", "corporate_title")


def _node_label(node: OrgNode) -> str:
    match node:
        case OrgNode(is_org_node=True):
            return f"[bold magenta]{escape(node.label)}[/bold magenta] [dim]({node.org_type})[/dim]"
        case OrgNode(is_vacant=True):
            return f"[yellow]{escape(node.name)}[/yellow] · {escape(node.position)} [dim]{node.id}[/dim]"
        case _:
            return f"[bold]{escape(node.name)}[/bold] · {escape(node.position)} [dim]{escape(node.corporate_title)} · {node.id}[/dim]"


def render_forest(forest: list[OrgNode], title: str) -> Tree:
    tree = Tree(f"[bold cyan]{title}[/bold cyan]")

    def _add(parent: Tree, node: OrgNode) -> None:
        branch = parent.add(_node_label(node))
        for child in node.children:
            _add(branch, child)

    for root in forest:
        _add(tree, root)
    return tree


def render_summary(nodes: list[OrgNode]) -> Table:
    totals = summary_totals(nodes)
    table = Table(title="Corporate Title Summary")
    table.add_column("Corporate Title")
    table.add_column("Total", justify="right")

    for row in corporate_title_summary(nodes).itertuples(index=False):
        table.add_row(row.title, str(row.total))

    table.add_section()
    for key in ("manpower", "headcount", "vacant"):
        table.add_row(f"[bold]{key.title()}[/bold]", str(totals[key]))

    vacancies = corporate_title_summary(nodes, vacant_only=True)
    if not vacancies.empty:
        table.add_section()
        table.add_row("[bold]Vacant by title[/bold]", "")
        for row in vacancies.itertuples(index=False):
            table.add_row(f"  {row.title}", str(row.total))
    return table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build reporting or organization charts from a roster")
    parser.add_argument("roster", help="CSV or Excel roster export")
    parser.add_argument("--view", type=str, help="reporting or organization")
    parser.add_argument("--search", type=str, default="", help="Search query")
    for name in FILTER_ARGS:
        parser.add_argument(f"--{name.replace('_', '-')}", dest=name, type=str, help=f"Filter by {name}")
    parser.add_argument("--export", type=str, help="Write the view as JSON to this path")
    parser.add_argument("--summary", action="store_true", help="Print headcount summary")
    parser.add_argument("--chain", type=str, help="Print the management chain of a node id")
    parser.add_argument("--validate", action="store_true", help="Only validate the roster")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_view_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    if args.validate:
        match hierarchy.validate(args.roster):
            case {"status": "ok", "rows_available": count}:
                console.print(f"[green]✓[/green] {args.roster}: {count} rows")
                return 0
            case {"status": "error", "message": msg}:
                console.print(f"[red]✗ {msg}[/red]")
                return 1
            case result:
                console.print(f"[red]Unknown validation result: {result}[/red]")
                return 1

    try:
        mode = parse_view_mode(args.view) if args.view else config.default_view
        nodes = load_roster(args.roster, config)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{exc}[/red]")
        return 1

    if args.chain:
        index = {node.id: node for node in nodes}
        if args.chain not in index:
            console.print(f"[red]Unknown node id: {args.chain}[/red]")
            return 1
        chain = management_chain(args.chain, index)
        console.print(" → ".join([args.chain, *chain]) if chain else f"{args.chain} has no manager")
        return 0

    filters = StructureFilter.from_options({name: getattr(args, name) for name in FILTER_ARGS})
    filters = reconcile_filters(filters, facet_options(nodes, filters))
    forest = build_view(nodes, mode, args.search, filters, config)
    console.print(render_forest(forest, f"{mode.title()} view"))

    if args.summary:
        scoped = [n for n in nodes if filters.matches(n) and hierarchy.node_matches_search(n, args.search)]
        console.print(render_summary(scoped))

    if args.export:
        write_output([root.to_dict() for root in forest], args.export)

    return 0


if __name__ == "__main__":
    sys.exit(main())
