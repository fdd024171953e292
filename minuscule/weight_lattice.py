"""
Weight Lattice of a Minuscule Representation

The weights of a minuscule representation form a single Weyl group orbit,
so they can be generated by breadth-first search from the highest weight
under the simple reflections.

Orientation:
    w --s_i--> s_i(w)   whenever <w, alpha_i^vee> = w_i > 0

For minuscule weights w_i is always in {-1, 0, 1}, so each such edge
subtracts exactly one simple root and points away from the highest
weight. The resulting graph is a DAG with the highest weight as its
unique source; it is the Hasse diagram of the weight poset.

Per weight we keep:
- depth from the top (longest path from the highest weight)
- downward closure (every weight reachable along down edges, itself included)

The lattice is only needed while building non-type-A posets; PosetBuilder
keeps the weight set as an oracle and discards the rest.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Sequence, Tuple

import numpy as np

from .cartan import reflect
from .errors import InvariantViolation

logger = logging.getLogger(__name__)

Weight = Tuple[int, ...]


@dataclass(frozen=True)
class LatticeEdge:
    """A labelled edge of the weight graph; `target` is the other endpoint."""
    target: int
    label: int


class WeightLattice:
    """
    Weight orbit of a highest weight, oriented as a DAG.

    Parameters
    ----------
    cartan : np.ndarray
        n x n Cartan matrix
    top_weight : sequence of int
        Highest weight in fundamental-weight coordinates
    """

    def __init__(self, cartan: np.ndarray, top_weight: Sequence[int]):
        self.cartan = cartan
        self.n = len(cartan)

        self.weights: List[Weight] = []
        self.weight_to_index: Dict[Weight, int] = {}
        self.top_index = self._generate_orbit(tuple(int(x) for x in top_weight))

        self.down_edges, self.up_edges = self._orient_edges()
        self.topological, self.depth_from_top = self._level()
        self.max_depth = max(self.depth_from_top) if self.depth_from_top else 0
        self.down_closure = self._downward_closures()

        logger.debug("Weight lattice: %d weights, depth %d",
                     len(self.weights), self.max_depth)

    def _add_weight(self, weight: Weight) -> int:
        index = self.weight_to_index.get(weight)
        if index is None:
            index = len(self.weights)
            self.weights.append(weight)
            self.weight_to_index[weight] = index
        return index

    def _generate_orbit(self, top: Weight) -> int:
        """BFS closure of the highest weight under s_1..s_n."""
        top_index = self._add_weight(top)
        queue = deque([top])
        while queue:
            weight = queue.popleft()
            for label in range(1, self.n + 1):
                reflected = reflect(weight, label, self.cartan)
                if reflected not in self.weight_to_index:
                    self._add_weight(reflected)
                    queue.append(reflected)
        return top_index

    def _orient_edges(self) -> Tuple[List[List[LatticeEdge]], List[List[LatticeEdge]]]:
        down: List[List[LatticeEdge]] = [[] for _ in self.weights]
        up: List[List[LatticeEdge]] = [[] for _ in self.weights]

        for source, weight in enumerate(self.weights):
            for label in range(1, self.n + 1):
                if weight[label - 1] <= 0:
                    continue
                target = self.weight_to_index.get(reflect(weight, label, self.cartan))
                if target is None:
                    raise InvariantViolation(
                        "Reflected weight missing while orienting weight lattice edges.")
                down[source].append(LatticeEdge(target, label))
                up[target].append(LatticeEdge(source, label))

        return down, up

    def _level(self) -> Tuple[List[int], List[int]]:
        """Kahn's algorithm; depth is the longest path from a source."""
        indegree = [len(incoming) for incoming in self.up_edges]
        queue = deque(i for i, d in enumerate(indegree) if d == 0)
        topological: List[int] = []
        depth = [0] * len(self.weights)

        while queue:
            current = queue.popleft()
            topological.append(current)
            for edge in self.down_edges[current]:
                nxt = edge.target
                depth[nxt] = max(depth[nxt], depth[current] + 1)
                indegree[nxt] -= 1
                if indegree[nxt] == 0:
                    queue.append(nxt)

        if len(topological) != len(self.weights):
            raise InvariantViolation("Weight graph orientation has a cycle; expected a DAG.")
        return topological, depth

    def _downward_closures(self) -> List[FrozenSet[int]]:
        closure: List[FrozenSet[int]] = [frozenset()] * len(self.weights)
        for node in reversed(self.topological):
            below = {node}
            for edge in self.down_edges[node]:
                below |= closure[edge.target]
            closure[node] = frozenset(below)
        return closure

    # === Public Methods ===

    def __len__(self) -> int:
        return len(self.weights)

    def is_below(self, upper: int, lower: int) -> bool:
        """True iff `lower` is reachable from `upper` along down edges (or equal)."""
        return lower in self.down_closure[upper]

    def join_irreducibles(self) -> List[int]:
        """Lattice indices of the weights with exactly one down edge."""
        return [i for i, edges in enumerate(self.down_edges) if len(edges) == 1]

    def weight_keys(self) -> FrozenSet[Weight]:
        return frozenset(self.weights)

    def summary(self) -> str:
        """Return a summary of the weight lattice."""
        n_edges = sum(len(edges) for edges in self.down_edges)
        lines = [
            "Weight Lattice Summary",
            "=" * 40,
            f"Highest weight: {self.weights[self.top_index]}",
            f"Weights: {len(self.weights)}",
            f"Cover edges: {n_edges}",
            f"Depth: {self.max_depth}",
            f"Join-irreducibles: {len(self.join_irreducibles())}",
        ]
        return "\n".join(lines)
