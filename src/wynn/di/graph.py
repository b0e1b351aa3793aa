"""
Dependency graph algorithms over bindings.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable, Sequence

from .bindings import Binding
from .errors import CircularDependencyError

DirectBindings = Callable[[Binding], Sequence[Binding]]


def check_circular_dependencies(start: Binding, direct_bindings: DirectBindings) -> None:
    """
    Breadth-first walk from start; fail if start is reachable from itself.

    Only cycles through start are reported. Running this for every binding
    covers cycles that are not reachable from a particular node.
    """
    parents: dict[Binding, Binding | None] = {start: None}
    queue: deque[Binding] = deque([start])
    expanded: set[Binding] = set()

    while queue:
        current = queue.popleft()
        if current in expanded:
            continue
        expanded.add(current)

        for dependency in direct_bindings(current):
            if dependency is start:
                raise CircularDependencyError(
                    [b.service_type for b in _cycle_path(start, current, parents)]
                )
            if dependency not in parents:
                parents[dependency] = current
            queue.append(dependency)


def _cycle_path(
    start: Binding, last: Binding, parents: dict[Binding, Binding | None]
) -> list[Binding]:
    path = [last]
    node = parents[last]
    while node is not None:
        path.append(node)
        node = parents[node]
    path.reverse()
    path.append(start)
    return path


def topological_order(bindings: Iterable[Binding], direct_bindings: DirectBindings) -> list[Binding]:
    """
    Order bindings so that every binding comes after its dependencies.

    Kahn's algorithm; ties keep declaration order.
    """
    nodes = list(bindings)
    remaining: dict[Binding, int] = {}
    dependents: dict[Binding, list[Binding]] = {node: [] for node in nodes}

    for node in nodes:
        deps = direct_bindings(node)
        remaining[node] = len(deps)
        for dep in deps:
            dependents.setdefault(dep, []).append(node)

    queue: deque[Binding] = deque(node for node in nodes if remaining[node] == 0)
    result: list[Binding] = []

    while queue:
        node = queue.popleft()
        result.append(node)
        for dependent in dependents[node]:
            remaining[dependent] -= 1
            if remaining[dependent] == 0:
                queue.append(dependent)

    if len(result) != len(nodes):
        raise CircularDependencyError(
            [node.service_type for node in nodes if remaining[node] > 0]
        )

    return result
