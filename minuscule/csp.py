"""
Cyclic Sieving and Homomesy Predictions

Cyclic sieving (Rush-Shi): for a minuscule poset P with Coxeter number h,
the number of ideals fixed by the p-th power of rowmotion equals

    M_P(zeta^p),   M_P(q) = sum_{I in J(P)} q^{|I|},   zeta = exp(2 pi i / h)

For type A, M_P(q) is the Gaussian binomial [n+1 choose k]_q and the
evaluation has a closed form: with d = gcd(n+1, p) and r = (n+1)/d the
count is binomial(d, k/r) when r divides k, and 0 otherwise.

Homomesy (Rush-Wang): over any orbit
- the average number of label-i elements is (C^{-1})_{i,k}
- the average ideal size is sum_i (C^{-1})_{i,k}
- under rowmotion, the average number of maximal elements is |P| / h
"""

from dataclasses import dataclass, field
from fractions import Fraction
from math import gcd
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError
from .ideals import bit_count
from .poset import Poset
from .rational import add_polynomials, binomial, shift_polynomial, trim_polynomial
from .verification import enumerate_ideals

# Tolerance for the imaginary part and the rounding residual
NUMERIC_TOLERANCE = 1e-7


@dataclass(frozen=True)
class RootOfUnityEvaluation:
    real: float
    imag: float
    gcd_value: int
    root_order: int
    unit_power: int

    @property
    def rounded_real(self) -> int:
        return int(round(self.real))

    @property
    def imag_abs(self) -> float:
        return abs(self.imag)

    @property
    def real_residual(self) -> float:
        return abs(self.real - self.rounded_real)

    @property
    def numeric_stable(self) -> bool:
        return self.imag_abs <= NUMERIC_TOLERANCE and self.real_residual <= NUMERIC_TOLERANCE


@dataclass(frozen=True)
class CspEvaluation:
    """M_P(q) evaluated at exp(2 pi i power / order)."""
    fixed_points: int
    order: int
    power: int
    coefficients: Tuple[int, ...]
    ideals_count: int
    evaluation: RootOfUnityEvaluation


@dataclass(frozen=True)
class TypeACspEvaluation:
    fixed_points: int
    order: int
    power: int
    gaussian_n: int
    gaussian_k: int
    coefficients: Tuple[int, ...]
    gcd_value: int
    root_order: int
    divisible: bool
    quotient_k: Optional[int]


@dataclass(frozen=True)
class HomomesyPrediction:
    avg_label_counts: Tuple[Fraction, ...]
    avg_size: Fraction
    avg_antichain_size: Fraction
    source: Dict[str, str] = field(default_factory=dict)


def rank_generating_polynomial(poset: Poset, ideals: Optional[Sequence[int]] = None) -> List[int]:
    """Coefficient m counts the ideals of cardinality m."""
    coeffs = [0] * (poset.size + 1)
    for mask in (ideals if ideals is not None else enumerate_ideals(poset)):
        coeffs[bit_count(mask)] += 1
    return trim_polynomial(coeffs)


def evaluate_polynomial_at_root_of_unity(coefficients: Sequence[int], order: int,
                                         power: int) -> RootOfUnityEvaluation:
    """
    Evaluate sum_j c_j q^j at q = exp(2 pi i power / order).

    q has multiplicative order r = order / gcd(order, power), so the
    coefficients are first folded into r residue buckets (exact integers)
    and only r cosines and sines are summed.
    """
    if order <= 0:
        raise ConfigurationError(f"Root of unity order must be positive, got {order}.")
    normalized = power % order
    if normalized == 0:
        return RootOfUnityEvaluation(real=float(sum(coefficients)), imag=0.0,
                                     gcd_value=order, root_order=1, unit_power=0)

    gcd_value = gcd(order, normalized)
    root_order = order // gcd_value
    unit_power = normalized // gcd_value

    buckets = [0] * root_order
    for exponent, coeff in enumerate(coefficients):
        buckets[exponent % root_order] += coeff
    residues = np.array(buckets, dtype=np.float64)

    angles = 2.0 * np.pi * unit_power * np.arange(root_order) / root_order
    return RootOfUnityEvaluation(real=float(np.dot(residues, np.cos(angles))),
                                 imag=float(np.dot(residues, np.sin(angles))),
                                 gcd_value=gcd_value, root_order=root_order,
                                 unit_power=unit_power)


def csp_fixed_point_evaluation_from_rank_generating(poset: Poset, power: int = 1,
                                                    ideals: Optional[Sequence[int]] = None
                                                    ) -> CspEvaluation:
    """Predicted number of ideals fixed by rowmotion^power, from M_P(q)."""
    all_ideals = ideals if ideals is not None else enumerate_ideals(poset)
    coefficients = rank_generating_polynomial(poset, all_ideals)
    order = poset.coxeter_number
    normalized = power % order
    value = evaluate_polynomial_at_root_of_unity(coefficients, order, normalized)
    return CspEvaluation(fixed_points=value.rounded_real, order=order, power=normalized,
                         coefficients=tuple(coefficients), ideals_count=len(all_ideals),
                         evaluation=value)


def gaussian_binomial_coefficients(n: int, k: int) -> List[int]:
    """
    [n choose k]_q as an integer coefficient list.

    Pascal recurrence [m, j] = [m-1, j] + q^(m-j) [m-1, j-1].
    """
    if k < 0 or k > n:
        return [0]

    kk = min(k, n - k)
    row: List[Optional[List[int]]] = [[1]] + [None] * kk
    for m in range(1, n + 1):
        nxt: List[Optional[List[int]]] = [[1]] + [None] * kk
        for j in range(1, min(m, kk) + 1):
            if j == m:
                nxt[j] = [1]
                continue
            left = row[j] or [0]
            right = row[j - 1] or [0]
            nxt[j] = add_polynomials(left, shift_polynomial(right, m - j))
        row = nxt
    return trim_polynomial(row[kk] or [0])


def csp_fixed_points_closed_form_type_a(order: int, k: int, power: int) -> int:
    """binomial(d, k/r) with d = gcd(order, power), r = order/d; 0 unless r | k."""
    g = gcd(order, power % order)
    root_order = order // g
    if root_order == 1:
        return binomial(order, k)
    if k % root_order != 0:
        return 0
    return binomial(g, k // root_order)


def _require_type_a(poset: Poset, name: str):
    if poset.lie_type != "A":
        raise ConfigurationError(f"{name} is only defined for type A, got {poset.name}.")


def csp_fixed_point_evaluation_type_a(poset: Poset, power: int = 1) -> TypeACspEvaluation:
    _require_type_a(poset, "csp_fixed_point_evaluation_type_a")
    order = poset.n + 1
    k = poset.k
    normalized = power % order
    gcd_value = gcd(order, normalized)
    root_order = order // gcd_value
    divisible = k % root_order == 0

    return TypeACspEvaluation(
        fixed_points=csp_fixed_points_closed_form_type_a(order, k, normalized),
        order=order,
        power=normalized,
        gaussian_n=order,
        gaussian_k=k,
        coefficients=tuple(gaussian_binomial_coefficients(order, k)),
        gcd_value=gcd_value,
        root_order=root_order,
        divisible=divisible,
        quotient_k=k // root_order if divisible else None,
    )


def predicted_csp_fixed_points_type_a(poset: Poset, power: int = 1) -> int:
    return csp_fixed_point_evaluation_type_a(poset, power).fixed_points


def homomesy_predictions(poset: Poset) -> HomomesyPrediction:
    """Orbit averages predicted from the inverse Cartan column."""
    label_counts = tuple(poset.inverse_cartan_column)
    return HomomesyPrediction(
        avg_label_counts=label_counts,
        avg_size=sum(label_counts, Fraction(0)),
        avg_antichain_size=Fraction(poset.size, poset.coxeter_number),
        source={
            "avg_label_counts": "(C^{-1})_{i,k}",
            "avg_size": "sum_i (C^{-1})_{i,k}",
            "avg_antichain_size": "|P|/h",
        },
    )


def type_a_homomesy_predictions(poset: Poset) -> HomomesyPrediction:
    """Closed forms for the k x (n+1-k) rectangle."""
    _require_type_a(poset, "type_a_homomesy_predictions")
    n, k = poset.n, poset.k
    label_counts = tuple(
        Fraction(min(i, k) * (n + 1 - max(i, k)), n + 1) for i in range(1, n + 1))
    return HomomesyPrediction(
        avg_label_counts=label_counts,
        avg_size=Fraction(k * (n + 1 - k), 2),
        avg_antichain_size=Fraction(k * (n + 1 - k), n + 1),
        source={
            "avg_label_counts": "min(i,k)(n+1-max(i,k))/(n+1)",
            "avg_size": "k(n+1-k)/2",
            "avg_antichain_size": "k(n+1-k)/(n+1)",
        },
    )
