"""
Tests for the manager/direct-report forest.
"""
from conftest import make_row
from orgview.hierarchy.classify import classify_records
from orgview.hierarchy.models import OrgNode
from orgview.hierarchy.reporting import build_reporting_tree
from orgview.hierarchy.search import flatten_forest


def test_single_ceo_root_with_ordered_reports(roster_nodes):
    forest = build_reporting_tree(roster_nodes)
    assert [root.id for root in forest] == ["E1"]
    # chief, then head of, assistant last
    assert [child.id for child in forest[0].children] == ["E2", "E6", "E5"]


def test_every_node_appears_once(roster_nodes):
    flat = flatten_forest(build_reporting_tree(roster_nodes))
    ids = [node.id for node in flat]
    assert len(ids) == len(set(ids))
    assert set(ids) == {node.id for node in roster_nodes}


def test_vacant_slot_sits_under_its_manager(roster_nodes):
    forest = build_reporting_tree(roster_nodes)
    head = next(child for child in forest[0].children if child.id == "E6")
    assert [child.id for child in head.children] == ["E7", "VACANT-8-E6"]


def test_unknown_manager_becomes_root():
    nodes = classify_records([
        make_row(employee_id="A", name="Ann", supervisor_id="GHOST"),
        make_row(employee_id="B", name="Bea"),
    ])
    assert [root.id for root in build_reporting_tree(nodes)] == ["A", "B"]


def test_manager_cycle_keeps_every_node():
    nodes = [
        OrgNode(id="A", name="Ann", manager_id="B"),
        OrgNode(id="B", name="Bea", manager_id="A"),
        OrgNode(id="C", name="Cid", manager_id="A"),
    ]
    forest = build_reporting_tree(nodes)
    ids = [node.id for node in flatten_forest(forest)]
    assert sorted(ids) == ["A", "B", "C"]
    assert [root.id for root in forest] == ["A"]


def test_self_reference_becomes_root():
    forest = build_reporting_tree([OrgNode(id="A", name="Ann", manager_id="A")])
    assert [root.id for root in forest] == ["A"]
    assert forest[0].children == ()


def test_rebuild_is_identical(roster_nodes):
    assert build_reporting_tree(roster_nodes) == build_reporting_tree(roster_nodes)


def test_input_order_does_not_leak(roster_nodes):
    assert build_reporting_tree(roster_nodes) == build_reporting_tree(list(reversed(roster_nodes)))


def test_input_nodes_are_not_mutated(roster_nodes):
    build_reporting_tree(roster_nodes)
    assert all(node.children == () for node in roster_nodes)
