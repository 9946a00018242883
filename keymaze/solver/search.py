"""
Branch-and-bound search over key collection orders.
"""

import math
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..errors import InvalidOrderError
from ..maze.grid import START_SYMBOL, is_gate_symbol, is_key_symbol
from ..util.logger import logger
from .dependencies import DependencySet
from .paths import PathTable


@dataclass(frozen=True)
class SearchState:
    """One node of the search tree.

    ``position`` is a key bit index, or -1 for the start. ``collected`` is
    a bitmask over key bit indices; ``order`` keeps the same keys in
    collection order.
    """

    position: int
    collected: int
    cost: int
    order: Tuple[str, ...] = ()

    @classmethod
    def initial(cls) -> "SearchState":
        return cls(position=-1, collected=0, cost=0)


class BestSolution:
    """Lowest-cost complete order found so far, shared by all branches."""

    def __init__(self, min_cost: float = math.inf):
        self.min_cost = min_cost
        self.order: Optional[Tuple[str, ...]] = None
        self._lock = threading.Lock()

    def offer(self, cost: int, order: Tuple[str, ...]) -> bool:
        """Record ``order`` if it is strictly cheaper than the current best."""
        with self._lock:
            if cost >= self.min_cost:
                return False
            self.min_cost = cost
            self.order = order
            return True

    @property
    def found(self) -> bool:
        return self.order is not None


@dataclass
class SearchStats:
    nodes_explored: int = 0
    branches_pruned: int = 0
    terminals_found: int = 0
    timed_out: bool = False
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def merge(self, other: "SearchStats") -> None:
        with self._lock:
            self.nodes_explored += other.nodes_explored
            self.branches_pruned += other.branches_pruned
            self.terminals_found += other.terminals_found
            self.timed_out = self.timed_out or other.timed_out


@dataclass(frozen=True)
class Leg:
    """Precomputed move from a position to a key."""

    cost: int
    required: int  # keys that must already be held for the gates on the way


class OrderSearch:
    """Depth-first branch-and-bound over the order keys are collected in.

    Keys are addressed by bit index in symbol order. A key is a candidate
    when all of its dependencies are held and every gate on the path to it
    is opened by a held key or by a key picked up earlier on that path.
    """

    def __init__(
        self,
        path_table: PathTable,
        dependencies: DependencySet,
        best: Optional[BestSolution] = None,
        timeout_ms: Optional[float] = None,
    ):
        self.logger = logger.bind(component="search")
        self.keys: List[str] = list(path_table.grid.keys)
        self.bits: Dict[str, int] = dict(path_table.grid.key_bits)
        self.all_keys = (1 << len(self.keys)) - 1
        self.best = best if best is not None else BestSolution()
        self.timeout_ms = timeout_ms
        self.stats = SearchStats()

        self.dependency_masks = [
            self._mask(dependencies.get(key, ())) for key in self.keys
        ]
        # legs[position + 1][key] so that the start (-1) lands on row 0
        self.legs: List[List[Optional[Leg]]] = [
            [self._leg(path_table, source, key) for key in self.keys]
            for source in [START_SYMBOL] + self.keys
        ]
        self._deadline: Optional[float] = None

    def _mask(self, keys) -> int:
        mask = 0
        for key in keys:
            mask |= 1 << self.bits[key]
        return mask

    def _leg(self, path_table: PathTable, source: str, key: str) -> Optional[Leg]:
        if source == key:
            return None
        path = path_table.get(source, key)
        if path is None:
            return None

        picked_up = 0
        required = 0
        for symbol in path.traversed:
            if is_key_symbol(symbol):
                picked_up |= 1 << self.bits[symbol]
            elif is_gate_symbol(symbol):
                gate_key = 1 << self.bits[symbol.lower()]
                if not picked_up & gate_key:
                    required |= gate_key
        return Leg(cost=path.cost, required=required)

    def candidates(self, state: SearchState) -> List[SearchState]:
        """Legal successor states of ``state`` in key symbol order."""
        successors = []
        row = self.legs[state.position + 1]
        for bit, key in enumerate(self.keys):
            key_mask = 1 << bit
            if state.collected & key_mask:
                continue
            if self.dependency_masks[bit] & ~state.collected:
                continue
            leg = row[bit]
            if leg is None or leg.required & ~state.collected:
                continue
            successors.append(
                SearchState(
                    position=bit,
                    collected=state.collected | key_mask,
                    cost=state.cost + leg.cost,
                    order=state.order + (key,),
                )
            )
        return successors

    def is_terminal(self, state: SearchState) -> bool:
        return state.collected == self.all_keys

    def search(self, workers: int = 1) -> Tuple[float, Optional[Tuple[str, ...]]]:
        """Run the search and return ``(min_cost, order)``.

        ``min_cost`` stays ``math.inf`` (or the seeded bound) with ``order``
        ``None`` when no complete order beats it.
        """
        if self.timeout_ms is not None:
            self._deadline = time.time() + self.timeout_ms / 1000
        else:
            self._deadline = None

        root = SearchState.initial()
        if workers <= 1:
            self._explore(root, self.stats)
        else:
            self._explore_parallel(root, workers)

        self.logger.debug(
            f"Explored {self.stats.nodes_explored} nodes, pruned "
            f"{self.stats.branches_pruned}, {self.stats.terminals_found} improving terminals"
        )
        return self.best.min_cost, self.best.order

    def _explore_parallel(self, root: SearchState, workers: int) -> None:
        if self.is_terminal(root):
            self._explore(root, self.stats)
            return

        self.stats.nodes_explored += 1
        branches = self.candidates(root)

        def run(branch: SearchState) -> SearchStats:
            stats = SearchStats()
            self._explore(branch, stats)
            return stats

        with ThreadPoolExecutor(max_workers=workers) as pool:
            for stats in pool.map(run, branches):
                self.stats.merge(stats)

    def _explore(self, root: SearchState, stats: SearchStats) -> None:
        stack = [root]

        while stack:
            if self._deadline is not None and time.time() > self._deadline:
                stats.timed_out = True
                self.logger.warning("Search budget exhausted, stopping early")
                return

            state = stack.pop()
            # The bound may have tightened since this state was pushed.
            if state.cost >= self.best.min_cost:
                stats.branches_pruned += 1
                continue

            stats.nodes_explored += 1
            if self.is_terminal(state):
                if self.best.offer(state.cost, state.order):
                    stats.terminals_found += 1
                    self.logger.debug(
                        f"New best: {state.cost}, {''.join(state.order)}"
                    )
                continue

            # Reversed so the lowest symbol is popped first.
            for successor in reversed(self.candidates(state)):
                if successor.cost >= self.best.min_cost:
                    stats.branches_pruned += 1
                    continue
                stack.append(successor)


def replay_order(path_table: PathTable, order: Sequence[str]) -> int:
    """Walk ``order`` from the start and return its total cost.

    Keys passed on the way count as held from the moment they are passed.

    Raises:
        InvalidOrderError: if a leg has no route or crosses a gate whose
            key is not held at that point.
    """
    held: Set[str] = set()
    position = START_SYMBOL
    cost = 0

    for key in order:
        path = path_table.get(position, key)
        if path is None:
            raise InvalidOrderError(f"No route from {position} to {key}")
        for symbol in path.traversed:
            if is_key_symbol(symbol):
                held.add(symbol)
            elif is_gate_symbol(symbol) and symbol.lower() not in held:
                raise InvalidOrderError(
                    f"Gate {symbol} crossed before key {symbol.lower()} on the way to {key}"
                )
        held.add(key)
        cost += path.cost
        position = key

    return cost
