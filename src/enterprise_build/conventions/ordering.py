"""Finalization order via Kahn's topological sort."""

from __future__ import annotations

import heapq
import logging
from collections import defaultdict

from enterprise_build.conventions.types import Requirement
from enterprise_build.errors import CircularDependencyError, MissingPrerequisiteError

logger = logging.getLogger(__name__)

__all__ = ["resolve_order"]


def resolve_order(
    entries: list[tuple[str, list[Requirement]]],
    known_ids: set[str] | None = None,
) -> list[str]:
    """Resolve execution order using Kahn's topological sort.

    Ties between ready nodes are broken by their position in ``entries``,
    so the result is deterministic and follows registration order wherever
    the prerequisite graph allows it.

    Args:
        entries: List of (id, requirements) tuples in registration order.
        known_ids: Set of all ids in the batch. If None, derived from entries.

    Returns:
        List of ids with prerequisites first.

    Raises:
        CircularDependencyError: If the prerequisites form a cycle.
        MissingPrerequisiteError: If a required prerequisite is not in known_ids.
    """
    if not entries:
        return []

    if known_ids is None:
        known_ids = {entry_id for entry_id, _ in entries}

    position: dict[str, int] = {entry_id: i for i, (entry_id, _) in enumerate(entries)}
    graph: dict[str, set[str]] = defaultdict(set)
    in_degree: dict[str, int] = {entry_id: 0 for entry_id, _ in entries}

    for entry_id, requirements in entries:
        for req in requirements:
            if req.convention_id not in known_ids:
                if req.optional:
                    logger.debug(
                        "Optional prerequisite '%s' of '%s' not applied, skipping",
                        req.convention_id, entry_id,
                    )
                    continue
                raise MissingPrerequisiteError(convention_id=entry_id, missing_id=req.convention_id)
            if req.convention_id not in in_degree or entry_id in graph[req.convention_id]:
                continue
            graph[req.convention_id].add(entry_id)
            in_degree[entry_id] += 1

    ready: list[tuple[int, str]] = [(position[e], e) for e in in_degree if in_degree[e] == 0]
    heapq.heapify(ready)

    order: list[str] = []
    while ready:
        _, entry_id = heapq.heappop(ready)
        order.append(entry_id)
        for dependent in graph.get(entry_id, set()):
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                heapq.heappush(ready, (position[dependent], dependent))

    if len(order) < len(entries):
        done = set(order)
        remaining = [entry_id for entry_id, _ in entries if entry_id not in done]
        raise CircularDependencyError(cycle_path=_extract_cycle(entries, remaining))

    return order


def _extract_cycle(
    entries: list[tuple[str, list[Requirement]]],
    remaining: list[str],
) -> list[str]:
    """Walk first-prerequisite edges among the blocked entries until one repeats."""
    blocked = set(remaining)
    first_edge: dict[str, str] = {}
    for entry_id, requirements in entries:
        if entry_id in blocked:
            edge = next((r.convention_id for r in requirements if r.convention_id in blocked), None)
            if edge is not None:
                first_edge[entry_id] = edge

    path: list[str] = []
    seen_at: dict[str, int] = {}
    node: str | None = remaining[0]
    while node is not None and node not in seen_at:
        seen_at[node] = len(path)
        path.append(node)
        node = first_edge.get(node)
    if node is None:
        return remaining + [remaining[0]]
    return path[seen_at[node]:] + [node]
