"""
Order Ideals as Bitmasks

An ideal of P is an int whose bit i is set iff node i belongs to it.
Every mask handled here is downward closed: the toggles below are the only
mutators and each one preserves that property.

Toggle t_i:
- add i      if i is absent and every predecessor of i is present
- remove i   if i is present and no successor of i is present
- otherwise  leave the mask unchanged (not an error)

Nodes sharing a label are pairwise incomparable and never joined by a
cover, so toggling a whole label class in index order behaves like
toggling them simultaneously. The same holds for a rank class.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .errors import ConfigurationError
from .poset import Poset


@dataclass(frozen=True)
class ToggleResult:
    """Resulting mask plus the node indices whose membership changed."""
    mask: int
    changed_indices: Tuple[int, ...]


def has_bit(mask: int, index: int) -> bool:
    return (mask >> index) & 1 == 1


def set_bit(mask: int, index: int) -> int:
    return mask | (1 << index)


def clear_bit(mask: int, index: int) -> int:
    return mask & ~(1 << index)


def bit_count(mask: int) -> int:
    return bin(mask).count("1")


def mask_indices(mask: int) -> List[int]:
    """Set bits of a mask in increasing order."""
    out = []
    index = 0
    while mask:
        if mask & 1:
            out.append(index)
        mask >>= 1
        index += 1
    return out


def mask_from_indices(indices: Iterable[int]) -> int:
    mask = 0
    for index in indices:
        mask = set_bit(mask, index)
    return mask


def is_ideal(mask: int, poset: Poset) -> bool:
    """True iff the mask only uses node bits and is downward closed."""
    if mask < 0 or mask >> poset.size:
        return False
    return all(has_bit(mask, pred)
               for index in mask_indices(mask)
               for pred in poset.nodes[index].preds)


def can_add(mask: int, index: int, poset: Poset) -> bool:
    if has_bit(mask, index):
        return False
    return all(has_bit(mask, pred) for pred in poset.nodes[index].preds)


def can_remove(mask: int, index: int, poset: Poset) -> bool:
    if not has_bit(mask, index):
        return False
    return not any(has_bit(mask, succ) for succ in poset.nodes[index].succs)


def require_ideal(mask: int, poset: Poset) -> int:
    """Return `mask` if it is an order ideal of `poset`, else raise ConfigurationError."""
    if isinstance(mask, bool) or not isinstance(mask, int):
        raise ConfigurationError(f"Mask must be an int bitmask, got {mask!r}.")
    if not is_ideal(mask, poset):
        raise ConfigurationError(f"Mask {mask:#x} is not an order ideal of {poset.name}.")
    return mask


# === Unchecked toggles (callers guarantee an ideal) ===

def toggle_node_unchecked(mask: int, index: int, poset: Poset) -> int:
    if can_add(mask, index, poset):
        return set_bit(mask, index)
    if can_remove(mask, index, poset):
        return clear_bit(mask, index)
    return mask


def apply_toggles_unchecked(mask: int, indices: Iterable[int], poset: Poset) -> ToggleResult:
    current = mask
    changed = []
    for index in indices:
        toggled = toggle_node_unchecked(current, index, poset)
        if toggled != current:
            current = toggled
            changed.append(index)
    return ToggleResult(current, tuple(changed))


def toggle_label_unchecked(mask: int, label: int, poset: Poset) -> ToggleResult:
    return apply_toggles_unchecked(mask, poset.label_to_indices.get(label, ()), poset)


def toggle_rank_unchecked(mask: int, rank: int, poset: Poset) -> ToggleResult:
    return apply_toggles_unchecked(mask, poset.rank_to_indices.get(rank, ()), poset)


# === Public toggles ===

def _require_index(index: int, poset: Poset):
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < poset.size:
        raise ConfigurationError(
            f"Node index {index!r} is outside 0..{poset.size - 1} for {poset.name}.")


def toggle_node(mask: int, index: int, poset: Poset) -> int:
    """
    Toggle one element; returns the mask unchanged when neither move is legal.

    Raises
    ------
    ConfigurationError
        If `mask` is not an order ideal or `index` is not a node of the poset
    """
    require_ideal(mask, poset)
    _require_index(index, poset)
    return toggle_node_unchecked(mask, index, poset)


def apply_toggle_sequence(mask: int, indices: Iterable[int], poset: Poset) -> ToggleResult:
    """Toggle the given nodes one after another, recording the ones that moved."""
    require_ideal(mask, poset)
    indices = list(indices)
    for index in indices:
        _require_index(index, poset)
    return apply_toggles_unchecked(mask, indices, poset)


def toggle_by_label(mask: int, label: int, poset: Poset) -> ToggleResult:
    """Toggle every node labelled `label` (the toggle-group image of s_label)."""
    require_ideal(mask, poset)
    return toggle_label_unchecked(mask, label, poset)


def toggle_by_rank(mask: int, rank: int, poset: Poset) -> ToggleResult:
    require_ideal(mask, poset)
    return toggle_rank_unchecked(mask, rank, poset)
