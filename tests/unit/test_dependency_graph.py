"""Tests for request-chain propagation — chains, diamonds, cycles."""

from __future__ import annotations

from gobuildinfo.core.dependency_graph import (
    dependencies_map_to_list,
    populate_requested_by,
    resolve_request_chains,
)
from gobuildinfo.models.dependencies import Checksum, Dependency


def _deps(*ids: str) -> dict[str, Dependency]:
    checksum = Checksum(md5="m", sha1="s1", sha256="s256")
    return {dep_id: Dependency(id=dep_id, checksum=checksum) for dep_id in ids}


class TestResolveRequestChains:
    def test_linear_chain(self):
        graph = {"R": ["A"], "A": ["B"]}
        chains = resolve_request_chains("R", ["A", "B"], graph)
        assert chains["A"] == [["R"]]
        assert chains["B"] == [["A", "R"]]

    def test_diamond_yields_one_chain_per_parent(self):
        graph = {"R": ["A", "B"], "A": ["C"], "B": ["C"]}
        chains = resolve_request_chains("R", ["A", "B", "C"], graph)
        assert chains["C"] == [["A", "R"], ["B", "R"]]

    def test_diamond_re_expands_shared_subtree(self):
        # The second visit to C expands D from every chain C holds by then,
        # including the one already propagated through A.
        graph = {"R": ["A", "B"], "A": ["C"], "B": ["C"], "C": ["D"]}
        chains = resolve_request_chains("R", ["A", "B", "C", "D"], graph)
        assert chains["C"] == [["A", "R"], ["B", "R"]]
        assert chains["D"] == [
            ["C", "A", "R"],
            ["C", "A", "R"],
            ["C", "B", "R"],
        ]

    def test_cycle_terminates(self):
        graph = {"R": ["A"], "A": ["B"], "B": ["A"]}
        chains = resolve_request_chains("R", ["A", "B"], graph)
        assert ["R"] in chains["A"]
        assert chains["A"] == [["R"], ["B", "A", "R"]]
        assert chains["B"] == [["A", "R"]]

    def test_self_loop_terminates(self):
        graph = {"R": ["A"], "A": ["A"]}
        chains = resolve_request_chains("R", ["A"], graph)
        assert chains["A"] == [["R"], ["A", "R"]]

    def test_node_on_cycle_expands_again_from_other_parent(self):
        # A already holds the looping chain [B, A, R]; reaching it through X
        # must still carry the loop-free path down to B.
        graph = {"R": ["A", "X"], "A": ["B"], "B": ["A"], "X": ["A"]}
        chains = resolve_request_chains("R", ["A", "B", "X"], graph)
        assert ["A", "X", "R"] in chains["B"]
        assert chains["B"] == [["A", "R"], ["A", "R"], ["A", "X", "R"]]
        assert chains["X"] == [["R"]]

    def test_looping_chains_are_recorded_but_not_propagated(self):
        graph = {"R": ["A", "X"], "A": ["B"], "B": ["A"], "X": ["A"]}
        chains = resolve_request_chains("R", ["A", "B", "X"], graph)
        assert chains["A"] == [
            ["R"],
            ["B", "A", "R"],
            ["X", "R"],
            ["B", "A", "R"],
            ["B", "A", "R"],
            ["B", "A", "X", "R"],
        ]
        assert not any(chain.count("A") > 1 for chain in chains["B"])

    def test_longer_cycle_reached_from_two_parents(self):
        graph = {"R": ["A", "X"], "A": ["B"], "B": ["C"], "C": ["A"], "X": ["B"]}
        chains = resolve_request_chains("R", ["A", "B", "C", "X"], graph)
        assert ["B", "X", "R"] in chains["C"]
        assert ["C", "B", "X", "R"] in chains["A"]

    def test_child_missing_from_map_is_skipped_with_subtree(self):
        graph = {"R": ["A", "gone"], "gone": ["B"]}
        chains = resolve_request_chains("R", ["A", "B"], graph)
        assert chains["A"] == [["R"]]
        assert chains["B"] == []
        assert "gone" not in chains

    def test_unreached_node_has_no_chains(self):
        graph = {"R": ["A"]}
        chains = resolve_request_chains("R", ["A", "orphan"], graph)
        assert chains["orphan"] == []

    def test_root_without_edges(self):
        chains = resolve_request_chains("R", ["A"], {})
        assert chains == {"A": []}

    def test_children_follow_declared_order(self):
        graph = {"R": ["B", "A"], "B": ["C"], "A": ["C"]}
        chains = resolve_request_chains("R", ["A", "B", "C"], graph)
        assert chains["C"] == [["B", "R"], ["A", "R"]]


class TestPopulateRequestedBy:
    def test_returns_new_records(self):
        deps = _deps("A", "B")
        result = populate_requested_by("R", deps, {"R": ["A"], "A": ["B"]})
        assert result["B"].requested_by == [["A", "R"]]
        assert result["B"].checksum == deps["B"].checksum
        # Input records are untouched
        assert deps["A"].requested_by == []
        assert deps["B"].requested_by == []

    def test_orphans_kept_with_empty_chains(self):
        deps = _deps("A", "orphan")
        result = populate_requested_by("R", deps, {"R": ["A"]})
        assert set(result) == {"A", "orphan"}
        assert result["orphan"].requested_by == []

    def test_map_to_list_keeps_order(self):
        deps = _deps("C", "A", "B")
        assert [d.id for d in dependencies_map_to_list(deps)] == ["C", "A", "B"]
