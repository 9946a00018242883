"""
Which keys must already be held before each key can be reached.

Only the recorded shortest path from the start is inspected. A key might
still be reachable along a longer route that avoids one of these gates,
so the result is a pruning rule rather than a proof of unreachability.
"""

from typing import Dict, FrozenSet, Iterable, Mapping

from ..errors import CyclicDependencyError
from ..util.logger import logger
from .paths import Path, PathTable

DependencySet = Dict[str, FrozenSet[str]]


def direct_dependencies(
    paths_from_start: Mapping[str, Path], keys: Iterable[str]
) -> DependencySet:
    """Keys whose gates stand on the path from the start to each key."""
    direct = {}
    for key in keys:
        path = paths_from_start.get(key)
        if path is None:
            direct[key] = frozenset()
        else:
            direct[key] = frozenset(gate.lower() for gate in path.gates)
    return direct


def close_dependencies(direct: Mapping[str, FrozenSet[str]]) -> DependencySet:
    """Transitive closure of a dependency mapping.

    Each round unions in the dependencies of every known dependency. An
    acyclic mapping settles within ``len(direct) - 1`` rounds.

    Raises:
        CyclicDependencyError: if the closure does not settle in time or
            any key ends up depending on itself.
    """
    closed: DependencySet = {key: frozenset(deps) for key, deps in direct.items()}
    rounds = max(len(closed) - 1, 0)

    for _ in range(rounds + 1):
        changed = False
        for key, deps in closed.items():
            expanded = set(deps)
            for dep in deps:
                expanded |= closed.get(dep, frozenset())
            if len(expanded) != len(deps):
                closed[key] = frozenset(expanded)
                changed = True
        if not changed:
            break
    else:
        raise CyclicDependencyError(k for k, deps in closed.items() if k in deps)

    cyclic = [key for key, deps in closed.items() if key in deps]
    if cyclic:
        raise CyclicDependencyError(cyclic)
    return closed


def derive_dependencies(
    paths_from_start: Mapping[str, Path], path_table: PathTable
) -> DependencySet:
    """Closed dependency set for every key in the table's grid."""
    log = logger.bind(component="dependencies")
    direct = direct_dependencies(paths_from_start, path_table.grid.keys)
    closed = close_dependencies(direct)

    for key in sorted(closed):
        if closed[key]:
            log.debug(f"{key} needs {''.join(sorted(closed[key]))}")
    return closed
