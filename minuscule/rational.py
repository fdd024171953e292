"""
Exact Rational Arithmetic

Fractions (via the standard library Fraction type, always gcd-reduced with
a positive denominator) and integer-coefficient polynomials stored as
coefficient lists, lowest degree first.

Used for:
- the inverse Cartan column (C^{-1})_{., k} by Gauss-Jordan elimination
- Gaussian binomial coefficients as explicit integer polynomials
"""

from fractions import Fraction
from math import comb
from typing import List, Sequence

import numpy as np

from .errors import InvariantViolation


def binomial(n: int, k: int) -> int:
    """Ordinary binomial coefficient, zero outside 0 <= k <= n."""
    if k < 0 or k > n:
        return 0
    return comb(n, k)


def inverse_cartan_column(cartan: np.ndarray, k: int) -> List[Fraction]:
    """
    Solve C x = e_k exactly over the rationals.

    Gauss-Jordan elimination on the augmented system [C | e_k], swapping in
    the first nonzero pivot found in each column.

    Parameters
    ----------
    cartan : np.ndarray
        Square integer Cartan matrix
    k : int
        1-based column index

    Returns
    -------
    list of Fraction
        Column k of C^{-1}
    """
    n = len(cartan)
    if not 1 <= k <= n:
        raise InvariantViolation(f"Column index k={k} outside 1..{n}")

    matrix = [[Fraction(int(value)) for value in row] for row in cartan]
    rhs = [Fraction(1 if i == k - 1 else 0) for i in range(n)]

    for col in range(n):
        pivot_row = next((row for row in range(col, n) if matrix[row][col] != 0), None)
        if pivot_row is None:
            raise InvariantViolation("Cartan matrix inversion failed: singular matrix.")

        if pivot_row != col:
            matrix[col], matrix[pivot_row] = matrix[pivot_row], matrix[col]
            rhs[col], rhs[pivot_row] = rhs[pivot_row], rhs[col]

        pivot = matrix[col][col]
        matrix[col] = [value / pivot for value in matrix[col]]
        rhs[col] = rhs[col] / pivot

        for row in range(n):
            if row == col:
                continue
            factor = matrix[row][col]
            if factor == 0:
                continue
            matrix[row] = [a - factor * b for a, b in zip(matrix[row], matrix[col])]
            rhs[row] = rhs[row] - factor * rhs[col]

    return rhs


# === Integer polynomials ===

def trim_polynomial(poly: Sequence[int]) -> List[int]:
    """Drop trailing zero coefficients, keeping at least the constant term."""
    end = len(poly)
    while end > 1 and poly[end - 1] == 0:
        end -= 1
    out = list(poly[:end])
    return out if out else [0]


def add_polynomials(a: Sequence[int], b: Sequence[int]) -> List[int]:
    size = max(len(a), len(b))
    out = [0] * size
    for i, coeff in enumerate(a):
        out[i] += coeff
    for i, coeff in enumerate(b):
        out[i] += coeff
    return trim_polynomial(out)


def shift_polynomial(poly: Sequence[int], amount: int) -> List[int]:
    """Multiply by q**amount."""
    if amount <= 0:
        return list(poly)
    return [0] * amount + list(poly)
