"""Request-chain propagation over the module requirement graph.

Given the dependencies that have a cached archive and the ``go mod graph``
adjacency, every dependency receives one request chain per path from the
root module. A chain lists the immediate requester first and the root last.

The traversal is depth-first in the graph's declared order and keeps no
visited set: a module reachable through several parents is expanded once
per path, so diamonds yield one chain per parent. Cycles are cut by the loop
check instead. When an arrival brings a chain that passes through the
dependency itself, that chain is recorded but the dependency is not expanded
from this arrival. Looping chains are never handed on to children, so a later
arrival through a loop-free path still expands normally.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence

from gobuildinfo.models.dependencies import Dependency

RequestChains = list[list[str]]


def _has_loop(node_id: str, chains: RequestChains) -> bool:
    return any(node_id in chain for chain in chains)


def _loop_free(node_id: str, chains: RequestChains) -> RequestChains:
    return [chain for chain in chains if node_id not in chain]


def resolve_request_chains(
    root_id: str,
    dependency_ids: Sequence[str] | Mapping[str, object],
    graph: Mapping[str, Sequence[str]],
) -> dict[str, RequestChains]:
    """Compute request chains for every id in ``dependency_ids``.

    Ids that are never reached from ``root_id`` map to an empty list.
    Children absent from ``dependency_ids`` are skipped along with their
    subtrees, unless another path reaches those subtrees.
    """
    chains: dict[str, RequestChains] = {dep_id: [] for dep_id in dependency_ids}

    # Each frame: (parent id, parent's chains when the frame opened, children)
    stack: list[tuple[str, RequestChains, Iterator[str]]] = [
        (root_id, [[]], iter(graph.get(root_id, ())))
    ]
    while stack:
        parent_id, parent_chains, children = stack[-1]
        child_id = next(children, None)
        if child_id is None:
            stack.pop()
            continue
        child_chains = chains.get(child_id)
        if child_chains is None:
            continue
        arrived = [[parent_id, *requested_by] for requested_by in parent_chains]
        child_chains.extend(arrived)
        # Only this arrival decides; earlier loops through the child don't block it
        if _has_loop(child_id, arrived):
            continue
        stack.append(
            (
                child_id,
                _loop_free(child_id, child_chains),
                iter(graph.get(child_id, ())),
            )
        )
    return chains


def populate_requested_by(
    root_id: str,
    dependencies: Mapping[str, Dependency],
    graph: Mapping[str, Sequence[str]],
) -> dict[str, Dependency]:
    """Return a copy of ``dependencies`` with ``requested_by`` filled in.

    The input mapping and its records are left untouched. The resolver works
    on its own chain table and builds new records at the end.
    """
    chains = resolve_request_chains(root_id, dependencies, graph)
    return {
        dep_id: dep.model_copy(update={"requested_by": chains[dep_id]})
        for dep_id, dep in dependencies.items()
    }


def dependencies_map_to_list(dependencies: Mapping[str, Dependency]) -> list[Dependency]:
    """Flatten the dependency map in insertion order."""
    return list(dependencies.values())
