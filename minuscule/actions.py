"""
Toggle-Group Actions on J(P)

Two actions are modelled as a closed sum type:

- FonDerFlaass(): toggle ranks from the top rank down to the bottom rank
  (rowmotion). On a minuscule poset its order divides the Coxeter number h.
- CoxeterWord(word): for c = s_{i1} ... s_{in}, toggle labels i_n, ..., i_1
  (right to left), so that phi(c . I) = c(phi(I)).

Every step returns the new mask together with a per-step trace of
before/after masks, which callers use for inspection or animation.
"""

import logging
import re
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import ConfigurationError, InvariantViolation
from .ideals import (bit_count, has_bit, require_ideal, toggle_label_unchecked,
                     toggle_rank_unchecked)
from .poset import Poset
from .verification import enumerate_ideals

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FonDerFlaass:
    """Rowmotion, realised as rank toggles from top to bottom."""

    def describe(self) -> str:
        return "Fon-Der-Flaass"


@dataclass(frozen=True)
class CoxeterWord:
    """Coxeter element c = s_{word[0]} ... s_{word[-1]}."""
    word: Tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "word", _as_labels(self.word))

    def describe(self) -> str:
        return "c = " + " ".join(f"s{label}" for label in self.word)


Action = Union[FonDerFlaass, CoxeterWord]


@dataclass(frozen=True)
class ActionStep:
    """One rank toggle (rank set) or one label toggle (label, word_position set)."""
    before_mask: int
    after_mask: int
    changed_indices: Tuple[int, ...]
    rank: Optional[int] = None
    label: Optional[int] = None
    word_position: Optional[int] = None


@dataclass(frozen=True)
class ActionResult:
    mask: int
    steps: Tuple[ActionStep, ...]
    changed_indices: Tuple[int, ...]


@dataclass(frozen=True)
class OrbitStep:
    from_mask: int
    to_mask: int
    changed_indices: Tuple[int, ...]


@dataclass(frozen=True)
class Orbit:
    """Orbit of `start_mask`; masks[0] is the start, steps[i] leaves masks[i]."""
    start_mask: int
    masks: Tuple[int, ...]
    steps: Tuple[OrbitStep, ...]

    @property
    def orbit_length(self) -> int:
        return len(self.masks)

    @property
    def fixed_points_in_orbit(self) -> int:
        return 1 if len(self.masks) == 1 else 0


@dataclass(frozen=True)
class FixedPointCount:
    fixed_points: int
    ideals_checked: int
    fixed_masks: Tuple[int, ...]
    power: int = 1


@dataclass(frozen=True)
class IdealStatistics:
    size: int
    label_counts: Tuple[int, ...]
    antichain_size: int


@dataclass(frozen=True)
class OrbitSummary:
    """Exact per-orbit averages of the homomesy statistics."""
    orbit_length: int
    avg_size: Fraction
    avg_antichain_size: Fraction
    avg_label_counts: Tuple[Fraction, ...] = field(default_factory=tuple)


def _unique(indices: Sequence[int]) -> Tuple[int, ...]:
    return tuple(dict.fromkeys(indices))


# === Actions ===

def _rowmotion(mask: int, poset: Poset) -> ActionResult:
    current = mask
    steps = []
    changed: List[int] = []
    for rank in range(poset.rank_max, poset.rank_min - 1, -1):
        step = toggle_rank_unchecked(current, rank, poset)
        steps.append(ActionStep(before_mask=current, after_mask=step.mask,
                                changed_indices=step.changed_indices, rank=rank))
        current = step.mask
        changed.extend(step.changed_indices)
    return ActionResult(current, tuple(steps), _unique(changed))


def _coxeter(mask: int, labels: Tuple[int, ...], poset: Poset) -> ActionResult:
    current = mask
    steps = []
    changed: List[int] = []
    for position in range(len(labels) - 1, -1, -1):
        label = labels[position]
        step = toggle_label_unchecked(current, label, poset)
        steps.append(ActionStep(before_mask=current, after_mask=step.mask,
                                changed_indices=step.changed_indices,
                                label=label, word_position=position))
        current = step.mask
        changed.extend(step.changed_indices)
    return ActionResult(current, tuple(steps), _unique(changed))


def _step(mask: int, action: Action, poset: Poset) -> ActionResult:
    """One application of the action to a mask already known to be an ideal."""
    if isinstance(action, FonDerFlaass):
        return _rowmotion(mask, poset)
    if isinstance(action, CoxeterWord):
        return _coxeter(mask, validate_coxeter_word(action.word, poset.n), poset)
    raise ConfigurationError(
        f"Unknown action {action!r}; expected FonDerFlaass or CoxeterWord.")


def fon_der_flaass_action(mask: int, poset: Poset) -> ActionResult:
    require_ideal(mask, poset)
    return _rowmotion(mask, poset)


def _as_labels(word) -> Tuple[int, ...]:
    """Word entries as ints; floats, bools and strings are rejected rather than truncated."""
    try:
        entries = list(word)
    except TypeError:
        raise ConfigurationError(f"Coxeter word must be a sequence of integers, got {word!r}.")
    for entry in entries:
        if isinstance(entry, bool) or not isinstance(entry, (int, np.integer)):
            raise ConfigurationError(
                f"Coxeter word entry {entry!r} is not an integer (word {word!r}).")
    return tuple(int(entry) for entry in entries)


def validate_coxeter_word(word: Sequence[int], n: int) -> Tuple[int, ...]:
    """Check that `word` is a permutation of 1..n."""
    labels = _as_labels(word)

    if len(labels) != n:
        raise ConfigurationError(
            f"Coxeter word {list(labels)} has {len(labels)} entries; "
            f"need exactly {n}, each of 1..{n} once.")
    if len(set(labels)) != n:
        raise ConfigurationError(
            f"Coxeter word {list(labels)} repeats an index; "
            f"each simple reflection must appear exactly once.")
    missing = [i for i in range(1, n + 1) if i not in labels]
    if missing:
        raise ConfigurationError(
            f"Coxeter word {list(labels)} is missing index {missing[0]}; "
            f"expected a permutation of 1..{n}.")
    return labels


def parse_coxeter_word(text: str, n: int) -> Tuple[int, ...]:
    """
    Parse a Coxeter ordering such as "2 1 3", "s2 s1 s3" or "2,1>3".
    """
    if not text or not text.strip():
        raise ConfigurationError(f"Enter a permutation of 1..{n} (for example: 2 1 3).")

    numbers = []
    for piece in re.split(r"[\s,>]+", text.strip()):
        if not piece:
            continue
        match = re.search(r"\d+", piece)
        if match is None:
            raise ConfigurationError(
                f"Coxeter ordering entry {piece!r} has no index "
                f"(for example: 2 1 3 or s2 s1 s3).")
        numbers.append(int(match.group(0)))
    return validate_coxeter_word(numbers, n)


def apply_coxeter_word(mask: int, word: Sequence[int], poset: Poset) -> ActionResult:
    """Toggle labels along the word from right to left."""
    labels = validate_coxeter_word(word, poset.n)
    require_ideal(mask, poset)
    return _coxeter(mask, labels, poset)


def apply_action(mask: int, action: Action, poset: Poset) -> ActionResult:
    """
    Apply one step of the action.

    Raises
    ------
    ConfigurationError
        If `mask` is not an order ideal, the action is unknown, or its
        Coxeter word is malformed
    """
    require_ideal(mask, poset)
    return _step(mask, action, poset)


def apply_action_power(mask: int, action: Action, poset: Poset, power: int) -> int:
    """Mask after `power` applications of the action."""
    if power < 0:
        raise ConfigurationError(f"Action power must be non-negative, got {power}.")
    require_ideal(mask, poset)
    current = mask
    for _ in range(power):
        current = _step(current, action, poset).mask
    return current


# === Orbits ===

def orbit_from_mask(start_mask: int, action: Action, poset: Poset) -> Orbit:
    """
    Follow the action from `start_mask` until it returns.

    Raises
    ------
    ConfigurationError
        If `start_mask` is not an order ideal of the poset
    InvariantViolation
        If a mask other than the start repeats, or the orbit outgrows
        |J(P)| + 1 steps
    """
    require_ideal(start_mask, poset)
    masks = [start_mask]
    seen = {start_mask}
    steps = []
    current = start_mask
    guard_cap = poset.expected_ideals + 1

    while True:
        step = apply_action(current, action, poset)
        steps.append(OrbitStep(current, step.mask, step.changed_indices))
        current = step.mask
        if current == start_mask:
            break
        if current in seen:
            raise InvariantViolation(
                "orbit_from_mask detected a cycle that does not return to start.")
        seen.add(current)
        masks.append(current)
        if len(steps) > guard_cap:
            raise InvariantViolation("orbit_from_mask exceeded expected ideal count guard.")

    return Orbit(start_mask, tuple(masks), tuple(steps))


def orbit_decomposition(poset: Poset, action: Action,
                        ideals: Optional[Sequence[int]] = None) -> List[Orbit]:
    """Partition J(P) into orbits, each started at its least mask."""
    remaining = sorted(ideals if ideals is not None else enumerate_ideals(poset))
    covered = set()
    orbits = []
    for mask in remaining:
        if mask in covered:
            continue
        orbit = orbit_from_mask(mask, action, poset)
        covered.update(orbit.masks)
        orbits.append(orbit)
    logger.debug("%s on %s: %d orbits", action.describe(), poset.name, len(orbits))
    return orbits


def count_action_fixed_points(poset: Poset, action: Action,
                              ideals: Optional[Sequence[int]] = None,
                              power: int = 1) -> FixedPointCount:
    """Count ideals fixed by the `power`-th iterate of the action."""
    all_ideals = ideals if ideals is not None else enumerate_ideals(poset)
    fixed = tuple(mask for mask in all_ideals
                  if apply_action_power(mask, action, poset, power) == mask)
    return FixedPointCount(fixed_points=len(fixed), ideals_checked=len(all_ideals),
                           fixed_masks=fixed, power=power)


# === Statistics ===

def ideal_statistics(mask: int, poset: Poset) -> IdealStatistics:
    """Size, per-label counts and number of maximal elements of an ideal."""
    require_ideal(mask, poset)
    label_counts = [0] * poset.n
    antichain = 0
    for node in poset.nodes:
        if not has_bit(mask, node.index):
            continue
        label_counts[node.label - 1] += 1
        if not any(has_bit(mask, succ) for succ in node.succs):
            antichain += 1
    return IdealStatistics(size=bit_count(mask), label_counts=tuple(label_counts),
                           antichain_size=antichain)


def summarize_orbit(masks: Sequence[int], poset: Poset) -> OrbitSummary:
    if not masks:
        raise ConfigurationError("summarize_orbit requires a non-empty orbit mask list.")

    totals: Dict[str, int] = {"size": 0, "antichain": 0}
    by_label = [0] * poset.n
    for mask in masks:
        stats = ideal_statistics(mask, poset)
        totals["size"] += stats.size
        totals["antichain"] += stats.antichain_size
        for i, count in enumerate(stats.label_counts):
            by_label[i] += count

    length = len(masks)
    return OrbitSummary(
        orbit_length=length,
        avg_size=Fraction(totals["size"], length),
        avg_antichain_size=Fraction(totals["antichain"], length),
        avg_label_counts=tuple(Fraction(total, length) for total in by_label),
    )
