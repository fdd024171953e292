"""
Minuscule Posets

A minuscule poset P is built once per (type, rank, index) and is read-only
afterwards. Its order ideals J(P) are in bijection with the weights of the
minuscule representation V(omega_k) (see minuscule.phi).

Construction:
- Type A: the k x (n+1-k) rectangle. Cell (row r, col c) has
  label k - r + c, predecessors (r-1, c) and (r, c-1), rank r + c.
- Types D, E: join-irreducibles of the weight lattice of omega_k
  (weights with exactly one down edge), labelled by that edge's root.
  Order is the dual of the lattice order, so the highest weight is the
  unique minimal element and the empty ideal maps to omega_k.

Each node records only its cover relation (preds/succs); ranks come from a
topological leveling pass.
"""

import logging
from collections import deque
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

import numpy as np

from .cartan import (RepresentationInfo, cartan_matrix, coxeter_number,
                     highest_weight, representation_metadata,
                     validate_configuration)
from .errors import ConfigurationError, InvariantViolation
from .rational import binomial, inverse_cartan_column
from .weight_lattice import WeightLattice

logger = logging.getLogger(__name__)

# Ideals are int bitmasks over node indices. Python ints have no width
# limit; this guard keeps posets within the supported configurations.
MAX_POSET_NODES = 31


@dataclass(frozen=True)
class Node:
    """One element of a minuscule poset."""
    index: int
    label: int
    preds: Tuple[int, ...]
    succs: Tuple[int, ...]
    rank: int
    display: str
    row: Optional[int] = None            # type A only
    col: Optional[int] = None            # type A only
    lattice_index: Optional[int] = None  # types D/E only


@dataclass(frozen=True, eq=False)
class Poset:
    """Immutable minuscule poset together with its Lie-theoretic data."""
    lie_type: str
    n: int
    k: int
    nodes: Tuple[Node, ...]
    label_to_indices: Dict[int, Tuple[int, ...]]
    rank_to_indices: Dict[int, Tuple[int, ...]]
    rank_min: int
    rank_max: int
    cartan: np.ndarray
    highest_weight: Tuple[int, ...]
    expected_ideals: int
    coxeter_number: int
    inverse_cartan_column: Tuple[Fraction, ...]
    representation: RepresentationInfo
    known_weight_keys: Optional[FrozenSet[Tuple[int, ...]]] = None

    @property
    def size(self) -> int:
        return len(self.nodes)

    @property
    def labels(self) -> range:
        return range(1, self.n + 1)

    @property
    def name(self) -> str:
        return f"{self.lie_type}_{self.n}, ω_{self.k}"

    def __len__(self) -> int:
        return len(self.nodes)

    def less_equal(self, a: int, b: int) -> bool:
        """True iff node a <= node b in P (walk up the cover relation)."""
        if a == b:
            return True
        seen = {a}
        queue = deque([a])
        while queue:
            current = queue.popleft()
            for succ in self.nodes[current].succs:
                if succ == b:
                    return True
                if succ not in seen:
                    seen.add(succ)
                    queue.append(succ)
        return False

    def summary(self) -> str:
        """Return a summary of the poset."""
        eigenvalues = np.linalg.eigvalsh(self.cartan.astype(np.float64))
        n_covers = sum(len(node.succs) for node in self.nodes)
        lines = [
            f"Minuscule Poset {self.name}",
            "=" * 40,
            f"Representation: {self.representation.model}",
            f"Elements |P|: {self.size}",
            f"Cover relations: {n_covers}",
            f"Ranks: {self.rank_min}..{self.rank_max}",
            f"Expected ideals |J(P)|: {self.expected_ideals}",
            f"Coxeter number h: {self.coxeter_number}",
            f"Inverse Cartan column: "
            f"[{', '.join(str(x) for x in self.inverse_cartan_column)}]",
            f"Cartan matrix eigenvalues: {np.round(eigenvalues, 6)}",
        ]
        for label in self.labels:
            lines.append(f"  label {label}: nodes {list(self.label_to_indices[label])}")
        return "\n".join(lines)


def ensure_bitmask_capacity(node_count: int, capacity: int = MAX_POSET_NODES):
    if node_count > capacity:
        raise ConfigurationError(
            f"Poset has {node_count} nodes; ideal masks support at most {capacity}."
        )


def build_minuscule_poset(type_input, n, k) -> Poset:
    """
    Build the minuscule poset for (type, n, k).

    Raises
    ------
    ConfigurationError
        If the triple is not a supported minuscule configuration
    """
    lie_type, n, k = validate_configuration(type_input, n, k)
    if lie_type == "A":
        return build_type_a_poset(n, k)
    return build_non_type_a_poset(lie_type, n, k)


def build_type_a_poset(n: int, k: int) -> Poset:
    """The k x (n+1-k) rectangle for Gr(k, n+1)."""
    validate_configuration("A", n, k)
    cols = n + 1 - k
    ensure_bitmask_capacity(k * cols)

    preds: List[List[int]] = []
    cells: List[Tuple[int, int, int]] = []
    for row in range(1, k + 1):
        for col in range(1, cols + 1):
            label = k - row + col
            if not 1 <= label <= n:
                raise InvariantViolation(f"Label {label} is out of range for A_{n}.")
            cell_preds = []
            if row > 1:
                cell_preds.append((row - 2) * cols + (col - 1))
            if col > 1:
                cell_preds.append((row - 1) * cols + (col - 2))
            preds.append(cell_preds)
            cells.append((row, col, label))

    succs = _successors(preds)
    nodes = tuple(
        Node(index=i, label=label, preds=tuple(preds[i]), succs=tuple(succs[i]),
             rank=row + col, display=f"({row},{col})", row=row, col=col)
        for i, (row, col, label) in enumerate(cells)
    )

    cartan = cartan_matrix("A", n)
    return _assemble("A", n, k, nodes, cartan,
                     expected_ideals=binomial(n + 1, k), known_weight_keys=None)


def build_non_type_a_poset(lie_type: str, n: int, k: int) -> Poset:
    """Extract the poset from the weight lattice of omega_k (types D, E)."""
    cartan = cartan_matrix(lie_type, n)
    lattice = WeightLattice(cartan, highest_weight(n, k))
    nodes = build_join_irreducible_nodes(lattice)
    ensure_bitmask_capacity(len(nodes))

    logger.info("%s_%d, ω_%d: %d weights, %d join-irreducibles",
                lie_type, n, k, len(lattice), len(nodes))

    return _assemble(lie_type, n, k, nodes, cartan,
                     expected_ideals=len(lattice),
                     known_weight_keys=lattice.weight_keys())


def build_join_irreducible_nodes(lattice: WeightLattice) -> Tuple[Node, ...]:
    """
    Join-irreducibles of the weight lattice as poset nodes.

    Ordered by (depth descending, label ascending, lattice index ascending).
    Node a covers-below node b when a's downward closure contains b's
    lattice weight and no third join-irreducible sits strictly between.
    """
    join_indices = lattice.join_irreducibles()
    if not join_indices:
        raise InvariantViolation("No join-irreducibles found in the weight lattice.")

    join_indices.sort(key=lambda idx: (-lattice.depth_from_top[idx],
                                       lattice.down_edges[idx][0].label,
                                       idx))
    m = len(join_indices)
    less_eq = [[lattice.is_below(join_indices[a], join_indices[b]) for b in range(m)]
               for a in range(m)]

    preds: List[List[int]] = [[] for _ in range(m)]
    succs: List[List[int]] = [[] for _ in range(m)]
    for a in range(m):
        for b in range(m):
            if a == b or not less_eq[a][b] or less_eq[b][a]:
                continue
            between = any(less_eq[a][c] and less_eq[c][b]
                          for c in range(m) if c != a and c != b)
            if not between:
                succs[a].append(b)
                preds[b].append(a)

    ranks = compute_ranks(preds, succs)
    return tuple(
        Node(index=i, label=lattice.down_edges[lat][0].label,
             preds=tuple(preds[i]), succs=tuple(succs[i]), rank=ranks[i],
             display=f"j{i + 1}", lattice_index=lat)
        for i, lat in enumerate(join_indices)
    )


def compute_ranks(preds: Sequence[Sequence[int]], succs: Sequence[Sequence[int]]) -> List[int]:
    """Longest path from a minimal element, by Kahn's algorithm."""
    indegree = [len(p) for p in preds]
    queue = deque(i for i, d in enumerate(indegree) if d == 0)
    rank = [0] * len(preds)
    visited = 0

    while queue:
        current = queue.popleft()
        visited += 1
        for succ in succs[current]:
            rank[succ] = max(rank[succ], rank[current] + 1)
            indegree[succ] -= 1
            if indegree[succ] == 0:
                queue.append(succ)

    if visited != len(preds):
        raise InvariantViolation("Join-irreducible graph is not acyclic.")
    return rank


def _successors(preds: Sequence[Sequence[int]]) -> List[List[int]]:
    succs: List[List[int]] = [[] for _ in preds]
    for index, node_preds in enumerate(preds):
        for pred in node_preds:
            succs[pred].append(index)
    return succs


def _assemble(lie_type: str, n: int, k: int, nodes: Tuple[Node, ...],
              cartan: np.ndarray, expected_ideals: int,
              known_weight_keys: Optional[FrozenSet[Tuple[int, ...]]]) -> Poset:
    """Partition by label and rank, attach the inverse Cartan column."""
    by_label: Dict[int, List[int]] = {label: [] for label in range(1, n + 1)}
    by_rank: Dict[int, List[int]] = {}
    for node in nodes:
        by_label[node.label].append(node.index)
        by_rank.setdefault(node.rank, []).append(node.index)

    return Poset(
        lie_type=lie_type,
        n=n,
        k=k,
        nodes=nodes,
        label_to_indices={label: tuple(idx) for label, idx in by_label.items()},
        rank_to_indices={rank: tuple(idx) for rank, idx in sorted(by_rank.items())},
        rank_min=min(by_rank),
        rank_max=max(by_rank),
        cartan=cartan,
        highest_weight=highest_weight(n, k),
        expected_ideals=expected_ideals,
        coxeter_number=coxeter_number(lie_type, n),
        inverse_cartan_column=tuple(inverse_cartan_column(cartan, k)),
        representation=representation_metadata(lie_type, n, k),
        known_weight_keys=known_weight_keys,
    )
