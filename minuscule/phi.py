"""
The Weight Map phi: J(P) -> weights of V(omega_k)

For an ideal I with linear extension x_1, ..., x_m (each element after all
of its predecessors in I), read the labels i_1, ..., i_m and set

    phi(I) = s_{i_m} ... s_{i_2} s_{i_1} (omega_k)

i.e. reflect the highest weight by each label in extension order. The
result does not depend on the extension chosen; minuscule.verification
checks this rather than assuming it.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .cartan import reflect
from .errors import ConfigurationError, InvariantViolation
from .ideals import mask_indices, require_ideal
from .poset import Poset

# Picks the next element from the currently unblocked ones
Chooser = Callable[[List[int]], int]


@dataclass(frozen=True)
class PhiResult:
    """phi(I) together with the extension and label word that produced it."""
    weight: Tuple[int, ...]
    labels: Tuple[int, ...]
    order: Tuple[int, ...]


def topological_order(mask: int, poset: Poset,
                      chooser: Optional[Chooser] = None) -> List[int]:
    """
    Linear extension of the sub-order induced on the ideal.

    At each step the ready elements are those whose predecessors inside
    the ideal have all been emitted. Without a chooser the least index is
    taken, which gives the canonical extension.
    """
    remaining = set(mask_indices(mask))
    order: List[int] = []

    while remaining:
        ready = sorted(index for index in remaining
                       if not any(pred in remaining for pred in poset.nodes[index].preds))
        if not ready:
            raise InvariantViolation("Failed to produce linear extension.")

        chosen = chooser(ready) if chooser is not None else ready[0]
        if chosen not in ready:
            raise InvariantViolation(f"Chooser returned {chosen}, not one of {ready}.")
        remaining.discard(chosen)
        order.append(chosen)
    return order


def is_linear_extension(order: Sequence[int], mask: int, poset: Poset) -> bool:
    """True iff `order` lists the ideal's elements once each, predecessors first."""
    expected = set(mask_indices(mask))
    if len(order) != len(expected):
        return False

    position = {}
    for i, index in enumerate(order):
        if index in position or index not in expected:
            return False
        position[index] = i

    for index in order:
        for pred in poset.nodes[index].preds:
            if pred in expected and position[pred] > position[index]:
                return False
    return True


def phi(mask: int, poset: Poset, order: Optional[Sequence[int]] = None) -> PhiResult:
    """
    Compute phi(I).

    Parameters
    ----------
    mask : int
        Ideal bitmask
    poset : Poset
        Poset the mask refers to
    order : sequence of int, optional
        Linear extension to read labels along; defaults to the canonical one

    Raises
    ------
    ConfigurationError
        If the mask is not an order ideal of the poset, or `order` does not
        list each element of the ideal exactly once
    InvariantViolation
        If `order` places an element before one of its predecessors
    """
    require_ideal(mask, poset)

    if order is None:
        extension = topological_order(mask, poset)
    else:
        extension = list(order)
        expected = mask_indices(mask)
        if len(extension) != len(expected) or set(extension) != set(expected):
            raise ConfigurationError(
                f"Order {extension} is not a permutation of the ideal elements {expected}.")
    if not is_linear_extension(extension, mask, poset):
        raise InvariantViolation("phi received an invalid linear extension.")

    weight = poset.highest_weight
    labels = []
    for index in extension:
        label = poset.nodes[index].label
        labels.append(label)
        weight = reflect(weight, label, poset.cartan)

    return PhiResult(weight=weight, labels=tuple(labels), order=tuple(extension))


def phi_weight(mask: int, poset: Poset) -> Tuple[int, ...]:
    """Shortcut for phi(mask, poset).weight."""
    return phi(mask, poset).weight

