"""
Cartan Matrices for the Simply-Laced Types A, D, E

Builds the n x n Cartan matrix of a Dynkin diagram and the data that
depends only on (type, rank): Coxeter number, minuscule weight indices,
and a human-readable model of each minuscule representation.

Supported configurations:
- A_n, n = 2..8: every fundamental weight is minuscule (k = 1..n)
- D_n, n = 4..8: k in {1, n-1, n}
- E_6: k in {1, 6}
- E_7: k = 7

Dynkin diagrams (Bourbaki numbering):

    A_n:  1 - 2 - ... - n

    D_n:  1 - 2 - ... - (n-2) - (n-1)
                          |
                          n

    E_6:  1 - 3 - 4 - 5 - 6        E_7:  1 - 3 - 4 - 5 - 6 - 7
                  |                              |
                  2                              2

Weights are written in fundamental-weight coordinates, so the simple
reflection s_i acts as  w -> w - w_i * C[i, :].
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError

SUPPORTED_TYPES: Tuple[str, ...] = ("A", "D", "E")

SUPPORTED_RANKS: Dict[str, Tuple[int, ...]] = {
    "A": (2, 3, 4, 5, 6, 7, 8),
    "D": (4, 5, 6, 7, 8),
    "E": (6, 7),
}

# Dynkin edges for the exceptional types, 1-based
E_EDGES: Dict[int, Tuple[Tuple[int, int], ...]] = {
    6: ((1, 3), (3, 4), (4, 5), (5, 6), (2, 4)),
    7: ((1, 3), (3, 4), (4, 5), (5, 6), (6, 7), (2, 4)),
}


@dataclass(frozen=True)
class RepresentationInfo:
    """Description of a minuscule representation, relayed to callers as-is."""
    model: str
    highest_weight: str
    notes: Tuple[str, ...] = field(default_factory=tuple)


def normalize_type(type_input) -> str:
    """Upper-case a Lie type symbol and check it is one of A, D, E."""
    lie_type = str(type_input if type_input is not None else "A").strip().upper()
    if lie_type not in SUPPORTED_TYPES:
        raise ConfigurationError(
            f"Unsupported Lie type: {type_input!r}. "
            f"Allowed: {', '.join(SUPPORTED_TYPES)}."
        )
    return lie_type


def supported_types() -> List[str]:
    return list(SUPPORTED_TYPES)


def supported_ranks(type_input) -> List[int]:
    return list(SUPPORTED_RANKS[normalize_type(type_input)])


def minuscule_weights(type_input, n: int) -> List[int]:
    """
    Indices k of the minuscule fundamental weights for the given type/rank.

    Returns an empty list when the rank has no minuscule weights in this
    family (for example E_8 or D_3).
    """
    lie_type = normalize_type(type_input)
    if not isinstance(n, (int, np.integer)) or isinstance(n, bool):
        return []
    n = int(n)

    if lie_type == "A":
        return list(range(1, n + 1)) if n >= 2 else []
    if lie_type == "D":
        return [1, n - 1, n] if n >= 4 else []
    if n == 6:
        return [1, 6]
    if n == 7:
        return [7]
    return []


def is_minuscule_triple(type_input, n, k) -> bool:
    """True iff (type, n, k) is a supported minuscule configuration."""
    try:
        lie_type = normalize_type(type_input)
    except ConfigurationError:
        return False
    if not isinstance(k, (int, np.integer)) or isinstance(k, bool):
        return False
    if n not in SUPPORTED_RANKS[lie_type]:
        return False
    return int(k) in minuscule_weights(lie_type, n)


def validate_configuration(type_input, n, k) -> Tuple[str, int, int]:
    """
    Check a (type, rank, index) triple, raising ConfigurationError with the
    valid alternatives when it is not supported.
    """
    lie_type = normalize_type(type_input)
    for name, value in (("rank n", n), ("index k", k)):
        if not isinstance(value, (int, np.integer)) or isinstance(value, bool):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}.")
    n, k = int(n), int(k)

    allowed_ranks = SUPPORTED_RANKS[lie_type]
    if n not in allowed_ranks:
        raise ConfigurationError(
            f"Unsupported rank n={n} for type {lie_type}. "
            f"Allowed ranks: {', '.join(str(r) for r in allowed_ranks)}."
        )

    allowed_weights = minuscule_weights(lie_type, n)
    if k not in allowed_weights:
        raise ConfigurationError(
            f"Weight index k={k} is not minuscule for {lie_type}_{n}. "
            f"Allowed: {', '.join(str(w) for w in allowed_weights)}."
        )
    return lie_type, n, k


# === Cartan matrices ===

def cartan_from_edges(rank: int, edges: Sequence[Tuple[int, int]]) -> np.ndarray:
    """Simply-laced Cartan matrix: 2 on the diagonal, -1 on each Dynkin edge."""
    matrix = 2 * np.eye(rank, dtype=np.int64)
    for a, b in edges:
        matrix[a - 1, b - 1] = -1
        matrix[b - 1, a - 1] = -1
    return matrix


def cartan_type_a(n: int) -> np.ndarray:
    return cartan_from_edges(n, [(i, i + 1) for i in range(1, n)])


def cartan_type_d(n: int) -> np.ndarray:
    """Path 1..n-1 with node n attached to the fork at n-2."""
    edges = [(i, i + 1) for i in range(1, n - 2)]
    edges.append((n - 2, n - 1))
    edges.append((n - 2, n))
    return cartan_from_edges(n, edges)


def cartan_type_e(n: int) -> np.ndarray:
    if n not in E_EDGES:
        raise ConfigurationError(
            f"Unsupported E-rank: {n}. Allowed ranks: "
            f"{', '.join(str(r) for r in SUPPORTED_RANKS['E'])}."
        )
    return cartan_from_edges(n, E_EDGES[n])


def cartan_matrix(type_input, n: int) -> np.ndarray:
    """
    Read-only Cartan matrix for a supported (type, rank).

    Returns
    -------
    np.ndarray
        Shape (n, n) int64 array with writes disabled
    """
    lie_type = normalize_type(type_input)
    if n not in SUPPORTED_RANKS[lie_type]:
        raise ConfigurationError(
            f"Unsupported rank n={n} for type {lie_type}. "
            f"Allowed ranks: {', '.join(str(r) for r in SUPPORTED_RANKS[lie_type])}."
        )

    if lie_type == "A":
        matrix = cartan_type_a(n)
    elif lie_type == "D":
        matrix = cartan_type_d(n)
    else:
        matrix = cartan_type_e(n)
    matrix.flags.writeable = False
    return matrix


def coxeter_number(type_input, n: int) -> int:
    lie_type = normalize_type(type_input)
    if lie_type == "A":
        return n + 1
    if lie_type == "D":
        return 2 * n - 2
    if n == 6:
        return 12
    if n == 7:
        return 18
    raise ConfigurationError(f"Unsupported Coxeter number request for {lie_type}_{n}.")


# === Reflections ===

def reflect(weight: Sequence[int], label: int, cartan: np.ndarray) -> Tuple[int, ...]:
    """
    Simple reflection s_label on a weight in fundamental-weight coordinates.

    s_i(w) = w - <w, alpha_i^vee> alpha_i, and in these coordinates the
    pairing is w_i while alpha_i is row i of the Cartan matrix.
    """
    w = np.asarray(weight, dtype=np.int64)
    i = label - 1
    out = w - w[i] * cartan[i]
    return tuple(int(x) for x in out)


def apply_reflection_word(weight: Sequence[int], word: Sequence[int],
                          cartan: np.ndarray) -> Tuple[int, ...]:
    """Apply c = s_{i1} ... s_{im} to a weight (rightmost reflection first)."""
    out = tuple(int(x) for x in weight)
    for label in reversed(list(word)):
        out = reflect(out, label, cartan)
    return out


def highest_weight(n: int, k: int) -> Tuple[int, ...]:
    """Fundamental weight omega_k as a unit vector of length n."""
    return tuple(1 if i == k - 1 else 0 for i in range(n))


# === Representation models ===

def representation_metadata(type_input, n: int, k: int) -> RepresentationInfo:
    lie_type = normalize_type(type_input)

    if lie_type == "A":
        return RepresentationInfo(
            model=f"V(ω_{k}) = ∧^{k}(ℂ^{n + 1})",
            highest_weight=f"ω_{k}",
            notes=(f"Type A_{n} minuscule model with subset realization "
                   f"in the standard basis of ℂ^{n + 1}.",),
        )

    if lie_type == "D":
        if k == 1:
            return RepresentationInfo(
                model=f"V(ω_1) for so({2 * n}) (vector representation)",
                highest_weight="ω_1",
                notes=("Weights are ±e_i in the standard orthogonal realization.",),
            )
        return RepresentationInfo(
            model=f"V(ω_{k}) for so({2 * n}) (half-spin representation)",
            highest_weight=f"ω_{k}",
            notes=("Spin weights correspond to parity-constrained sign choices "
                   "in the e_i model.",),
        )

    if n == 6:
        return RepresentationInfo(
            model=f"V(ω_{k}) for E_6 (minuscule 27-dimensional representation)",
            highest_weight=f"ω_{k}",
            notes=("The two minuscule nodes are dual (k = 1 or 6).",),
        )

    return RepresentationInfo(
        model="V(ω_7) for E_7 (56-dimensional minuscule representation)",
        highest_weight="ω_7",
        notes=("Unique minuscule representation in type E_7.",),
    )
