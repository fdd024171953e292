"""
Exhaustive Verification of the Minuscule Bijection

Checks, over the full ideal lattice J(P):

1. |J(P)| equals the dimension of V(omega_k)
2. phi is injective (with (1), a bijection onto the weight orbit)
3. phi(t_i(I)) = s_i(phi(I)) for every ideal I and label i
4. for types D/E, every phi(I) lies in the weight set of the lattice
5. no cover joins two nodes of the same label
6. toggling a label class forward or in reverse gives the same mask
7. phi does not depend on the linear extension used

Failures are reported as data: each report carries the first
counterexample of its kind, and all checks run regardless.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from tqdm import tqdm

from .cartan import reflect
from .errors import InvariantViolation
from .ideals import apply_toggles_unchecked, toggle_label_unchecked, toggle_node_unchecked
from .phi import phi, topological_order
from .poset import Poset

logger = logging.getLogger(__name__)

Weight = Tuple[int, ...]


# === Configuration ===

@dataclass(frozen=True)
class VerificationOptions:
    """
    Knobs for verify_exhaustively.

    enable_phi_extension_check=None runs the extension check only when the
    rank is at most phi_check_max_rank.
    """
    enable_phi_extension_check: Optional[bool] = None
    phi_check_max_rank: int = 6
    max_samples_per_ideal: int = 8
    max_ideals: Optional[int] = None
    progress: bool = False


# === Counterexamples ===

@dataclass(frozen=True)
class CoverViolation:
    label: int
    pred_index: int
    succ_index: int


@dataclass(frozen=True)
class ToggleOrderViolation:
    label: int
    ideal_mask: int
    forward_mask: int
    reverse_mask: int
    forward_order: Tuple[int, ...]
    reverse_order: Tuple[int, ...]


@dataclass(frozen=True)
class ExtensionDisagreement:
    mask: int
    base_order: Tuple[int, ...]
    base_weight: Weight
    witness_order: Tuple[int, ...]
    witness_weight: Weight


@dataclass(frozen=True)
class DuplicateWeight:
    weight: Weight
    first_mask: int
    second_mask: int


@dataclass(frozen=True)
class EquivarianceFailure:
    mask: int
    label: int
    lhs: Weight
    rhs: Weight


@dataclass(frozen=True)
class OutOfOrbitWeight:
    mask: int
    weight: Weight


# === Reports ===

@dataclass(frozen=True)
class LabelReport:
    label: int
    node_count: int
    cover_counterexample: Optional[CoverViolation]
    toggle_counterexample: Optional[ToggleOrderViolation]

    @property
    def cover_property_pass(self) -> bool:
        return self.cover_counterexample is None

    @property
    def toggle_order_independent(self) -> bool:
        return self.toggle_counterexample is None


@dataclass(frozen=True)
class LabelStructureReport:
    labels: Tuple[LabelReport, ...]
    ideals_checked: int
    cover_counterexample: Optional[CoverViolation]
    toggle_counterexample: Optional[ToggleOrderViolation]

    @property
    def cover_property_pass(self) -> bool:
        return self.cover_counterexample is None

    @property
    def toggle_order_independence_pass(self) -> bool:
        return self.toggle_counterexample is None


@dataclass(frozen=True)
class PhiExtensionReport:
    ran: bool
    passed: Optional[bool]
    max_samples_per_ideal: int = 0
    ideals_checked: int = 0
    samples_checked: int = 0
    counterexample: Optional[ExtensionDisagreement] = None
    skipped_reason: Optional[str] = None


@dataclass(frozen=True)
class VerificationReport:
    ideals_count: int
    expected_count: int
    distinct_weights: int
    duplicate_weight: Optional[DuplicateWeight]
    equivariance_failure: Optional[EquivarianceFailure]
    out_of_orbit_weight: Optional[OutOfOrbitWeight]
    label_structure: LabelStructureReport
    phi_extension_independence: PhiExtensionReport

    @property
    def count_matches_dimension(self) -> bool:
        return self.ideals_count == self.expected_count

    @property
    def bijective(self) -> bool:
        return self.distinct_weights == self.ideals_count and self.duplicate_weight is None

    @property
    def equivariant(self) -> bool:
        return self.equivariance_failure is None

    @property
    def in_orbit(self) -> bool:
        return self.out_of_orbit_weight is None

    @property
    def all_checks_pass(self) -> bool:
        phi_pass = self.phi_extension_independence.passed if self.phi_extension_independence.ran else True
        return (self.count_matches_dimension
                and self.bijective
                and self.equivariant
                and self.in_orbit
                and self.label_structure.cover_property_pass
                and self.label_structure.toggle_order_independence_pass
                and bool(phi_pass))


# === Enumeration ===

def enumerate_ideals(poset: Poset) -> List[int]:
    """
    All order ideals, by breadth-first toggle closure of the empty ideal.

    Returns
    -------
    list of int
        Masks in discovery order, starting with 0
    """
    found = [0]
    seen = {0}
    queue = deque([0])
    while queue:
        mask = queue.popleft()
        for node in poset.nodes:
            nxt = toggle_node_unchecked(mask, node.index, poset)
            if nxt != mask and nxt not in seen:
                seen.add(nxt)
                found.append(nxt)
                queue.append(nxt)
    return found


def weight_to_ideal(poset: Poset, ideals: Optional[Sequence[int]] = None) -> Dict[Weight, int]:
    """Inverse of phi as a lookup table."""
    table: Dict[Weight, int] = {}
    for mask in (ideals if ideals is not None else enumerate_ideals(poset)):
        weight = phi(mask, poset).weight
        if weight in table:
            raise InvariantViolation(
                f"Ideals {table[weight]:#x} and {mask:#x} share weight {weight}.")
        table[weight] = mask
    return table


# === Label structure ===

def analyze_label_structure(poset: Poset,
                            ideals: Optional[Sequence[int]] = None) -> LabelStructureReport:
    """Cover property and toggle order-independence for each label."""
    all_ideals = ideals if ideals is not None else enumerate_ideals(poset)
    reports = []
    first_cover = None
    first_toggle = None

    for label in poset.labels:
        indices = poset.label_to_indices.get(label, ())
        cover = None
        for node_index in indices:
            same = [p for p in poset.nodes[node_index].preds
                    if poset.nodes[p].label == label]
            if same:
                cover = CoverViolation(label, same[0], node_index)
                break

        toggle = None
        if len(indices) > 1:
            forward = tuple(indices)
            backward = tuple(reversed(indices))
            for mask in all_ideals:
                forward_mask = apply_toggles_unchecked(mask, forward, poset).mask
                reverse_mask = apply_toggles_unchecked(mask, backward, poset).mask
                if forward_mask != reverse_mask:
                    toggle = ToggleOrderViolation(label, mask, forward_mask, reverse_mask,
                                                  forward, backward)
                    break

        first_cover = first_cover or cover
        first_toggle = first_toggle or toggle
        reports.append(LabelReport(label, len(indices), cover, toggle))

    return LabelStructureReport(tuple(reports), len(all_ideals), first_cover, first_toggle)


# === Linear extension sampling ===

def make_rng(seed: int):
    """32-bit xorshift generator returning floats in [0, 1)."""
    state = seed & 0xFFFFFFFF or 0x9E3779B9

    def next_random() -> float:
        nonlocal state
        state ^= (state << 13) & 0xFFFFFFFF
        state ^= state >> 17
        state ^= (state << 5) & 0xFFFFFFFF
        return state / 4294967296.0

    return next_random


def _extension_seed(mask: int, attempt: int, poset: Poset) -> int:
    return ((mask + 1) * 2654435761
            + (attempt + 1) * 1013904223
            + poset.n * 97
            + poset.k * 193
            + ord(poset.lie_type[0]) * 17) & 0xFFFFFFFF


def sample_linear_extensions(mask: int, poset: Poset, max_samples: int) -> List[Tuple[int, ...]]:
    """
    Distinct linear extensions of an ideal: the canonical one, three
    deterministic variants, then seeded random ones up to `max_samples`.
    """
    samples: List[Tuple[int, ...]] = []
    seen = set()

    def try_add(order):
        key = tuple(order)
        if key not in seen:
            seen.add(key)
            samples.append(key)

    nodes = poset.nodes
    try_add(topological_order(mask, poset))
    try_add(topological_order(mask, poset, max))
    try_add(topological_order(mask, poset, lambda ready: min(ready, key=lambda i: (nodes[i].label, i))))
    try_add(topological_order(mask, poset, lambda ready: max(ready, key=lambda i: (nodes[i].label, i))))

    attempt = 0
    attempt_cap = max_samples * 10
    while len(samples) < max_samples and attempt < attempt_cap:
        rng = make_rng(_extension_seed(mask, attempt, poset))
        try_add(topological_order(mask, poset, lambda ready: ready[int(rng() * len(ready))]))
        attempt += 1
    return samples


def check_phi_extension_independence(poset: Poset,
                                     ideals: Optional[Sequence[int]] = None,
                                     max_samples_per_ideal: int = 8,
                                     max_ideals: Optional[int] = None,
                                     progress: bool = False) -> PhiExtensionReport:
    """Confirm phi agrees across sampled linear extensions of each ideal."""
    max_samples = max(4, int(max_samples_per_ideal))
    all_ideals = list(ideals if ideals is not None else enumerate_ideals(poset))
    if max_ideals is not None:
        all_ideals = all_ideals[:max_ideals]

    counterexample = None
    ideals_checked = 0
    samples_checked = 0

    for mask in tqdm(all_ideals, desc="phi extensions", disable=not progress):
        base = phi(mask, poset)
        for order in sample_linear_extensions(mask, poset, max_samples):
            witness = phi(mask, poset, order)
            samples_checked += 1
            if witness.weight != base.weight:
                counterexample = ExtensionDisagreement(mask, base.order, base.weight,
                                                       witness.order, witness.weight)
                break
        ideals_checked += 1
        if counterexample is not None:
            break

    return PhiExtensionReport(ran=True, passed=counterexample is None,
                              max_samples_per_ideal=max_samples,
                              ideals_checked=ideals_checked,
                              samples_checked=samples_checked,
                              counterexample=counterexample)


# === Full check ===

def verify_exhaustively(poset: Poset,
                        options: Optional[VerificationOptions] = None) -> VerificationReport:
    """
    Run every structural check over J(P) and aggregate the results.

    Parameters
    ----------
    poset : Poset
        Poset to verify
    options : VerificationOptions, optional
        Controls the phi-extension check and progress output

    Returns
    -------
    VerificationReport
        Pass/fail per check, with the first counterexample of each kind
    """
    cfg = options or VerificationOptions()
    ideals = enumerate_ideals(poset)
    weights: Dict[Weight, int] = {}
    duplicate = None
    equivariance = None
    out_of_orbit = None

    for mask in tqdm(ideals, desc=f"Verifying {poset.name}", disable=not cfg.progress):
        weight = phi(mask, poset).weight

        if (poset.known_weight_keys is not None and out_of_orbit is None
                and weight not in poset.known_weight_keys):
            out_of_orbit = OutOfOrbitWeight(mask, weight)

        if weight in weights:
            if duplicate is None:
                duplicate = DuplicateWeight(weight, weights[weight], mask)
        else:
            weights[weight] = mask

        if equivariance is None:
            for label in poset.labels:
                lhs = phi(toggle_label_unchecked(mask, label, poset).mask, poset).weight
                rhs = reflect(weight, label, poset.cartan)
                if lhs != rhs:
                    equivariance = EquivarianceFailure(mask, label, lhs, rhs)
                    break

    label_structure = analyze_label_structure(poset, ideals)

    run_phi_check = (poset.n <= cfg.phi_check_max_rank
                     if cfg.enable_phi_extension_check is None
                     else bool(cfg.enable_phi_extension_check))
    if run_phi_check:
        extension_report = check_phi_extension_independence(
            poset, ideals, cfg.max_samples_per_ideal, cfg.max_ideals, cfg.progress)
    else:
        extension_report = PhiExtensionReport(
            ran=False, passed=None,
            skipped_reason=(f"Skipped for n={poset.n}; enabled by default only for "
                            f"n <= {cfg.phi_check_max_rank}."))

    report = VerificationReport(
        ideals_count=len(ideals),
        expected_count=poset.expected_ideals,
        distinct_weights=len(weights),
        duplicate_weight=duplicate,
        equivariance_failure=equivariance,
        out_of_orbit_weight=out_of_orbit,
        label_structure=label_structure,
        phi_extension_independence=extension_report,
    )
    logger.info("Verification of %s: %s (%d ideals)", poset.name,
                "pass" if report.all_checks_pass else "FAIL", len(ideals))
    return report
