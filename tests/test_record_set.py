"""Tests for `spsearch.record_set.NodeRecordSet`."""

import math

import pytest

from spsearch.record_set import NodeRecordSet
from spsearch.types import NO_ID, NodeRecord


@pytest.fixture
def abc():
    s = NodeRecordSet()
    s.insert("A", NO_ID, 5.0)
    s.insert("B", "A", 2.0)
    s.insert("C", "B", 9.0)
    return s


class TestQueries:
    def test_new_set_is_empty(self):
        s = NodeRecordSet()
        assert s.is_empty()
        assert len(s) == 0
        assert s.nodes() == []

    def test_absent_node_lookups(self):
        s = NodeRecordSet()
        assert not s.contains("X")
        assert s.distance("X") == math.inf
        assert s.predecessor("X") is NO_ID
        assert s.get("X") is None

    def test_present_node_lookups(self, abc):
        assert not abc.is_empty()
        assert abc.contains("B")
        assert "B" in abc
        assert abc.distance("B") == 2.0
        assert abc.predecessor("B") == "A"
        assert abc.predecessor("A") is NO_ID

    def test_contains_edge(self, abc):
        assert abc.contains_edge("A", "B")
        assert abc.contains_edge("B", "C")
        assert not abc.contains_edge("C", "B")
        assert not abc.contains_edge("A", "C")
        # Absent destination
        assert not abc.contains_edge("A", "Z")

    def test_contains_edge_origin(self, abc):
        assert abc.contains_edge(NO_ID, "A")

    def test_min(self, abc):
        assert abc.min() == "B"
        for n in abc.nodes():
            assert abc.distance(abc.min()) <= abc.distance(n)

    def test_min_empty_is_no_id(self):
        assert NodeRecordSet().min() is NO_ID

    def test_min_tie_returns_first_inserted(self):
        s = NodeRecordSet()
        s.insert("X", NO_ID, 1.0)
        s.insert("Y", NO_ID, 1.0)
        assert s.min() == "X"

    def test_min_with_infinite_distances(self):
        s = NodeRecordSet()
        s.insert("X", NO_ID, math.inf)
        assert s.min() == "X"

    def test_iteration_in_insertion_order(self, abc):
        assert [r.node for r in abc] == ["A", "B", "C"]
        assert abc.records() == [
            NodeRecord("A", NO_ID, 5.0),
            NodeRecord("B", "A", 2.0),
            NodeRecord("C", "B", 9.0),
        ]

    def test_get_returns_copy(self, abc):
        record = abc.get("B")
        record.distance = 100.0
        assert abc.distance("B") == 2.0


class TestMutation:
    def test_insert_duplicate_raises(self, abc):
        with pytest.raises(ValueError, match="already exists"):
            abc.insert("A", NO_ID, 0.0)
        assert abc.distance("A") == 5.0

    def test_insert_no_id_raises(self):
        with pytest.raises(ValueError):
            NodeRecordSet().insert(NO_ID, NO_ID, 0.0)

    def test_update_or_insert_new_node(self):
        s = NodeRecordSet()
        s.update_or_insert("N", "P", 3.5)
        assert s.contains("N")
        assert s.distance("N") == 3.5
        assert s.predecessor("N") == "P"

    def test_update_or_insert_overwrites_in_place(self, abc):
        abc.update_or_insert("A", "C", 1.0)
        assert abc.distance("A") == 1.0
        assert abc.predecessor("A") == "C"
        assert len(abc) == 3
        # Position is kept
        assert abc.nodes() == ["A", "B", "C"]

    def test_remove(self, abc):
        abc.remove("B")
        assert not abc.contains("B")
        assert abc.distance("B") == math.inf
        assert abc.nodes() == ["A", "C"]

    def test_remove_absent_is_noop(self, abc):
        before = abc.records()
        abc.remove("Z")
        assert abc.records() == before

    def test_remove_last_leaves_empty(self):
        s = NodeRecordSet()
        s.insert("A", NO_ID, 0.0)
        s.remove("A")
        assert s.is_empty()
        assert s.min() is NO_ID

    def test_remove_then_reinsert_moves_to_end(self, abc):
        abc.remove("A")
        abc.insert("A", NO_ID, 0.0)
        assert abc.nodes() == ["B", "C", "A"]


class TestLifetime:
    def test_destroy_invalidates(self, abc):
        abc.destroy()
        assert abc.destroyed
        with pytest.raises(ValueError, match="destroyed"):
            abc.is_empty()
        with pytest.raises(ValueError):
            abc.insert("D", NO_ID, 0.0)
        with pytest.raises(ValueError):
            len(abc)

    def test_destroy_twice_is_noop(self, abc):
        abc.destroy()
        abc.destroy()
        assert abc.destroyed

    def test_context_manager_destroys(self):
        with NodeRecordSet() as s:
            s.insert("A", NO_ID, 0.0)
            assert s.contains("A")
        assert s.destroyed

    def test_repr(self, abc):
        assert repr(abc) == (
            "NodeRecordSet({'A': (NO_ID, 5.0), 'B': ('A', 2.0), 'C': ('B', 9.0)})"
        )
        abc.destroy()
        assert repr(abc) == "NodeRecordSet(<destroyed>)"
