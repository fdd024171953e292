"""
Exception hierarchy for the minuscule poset engine.

Two kinds of failure are raised:

- ConfigurationError: the caller asked for something outside the
  supported set (type, rank, minuscule index, Coxeter word, mask width).
- InvariantViolation: an internal structure came out wrong (cyclic weight
  graph, singular Cartan matrix, orbit that never closes). These signal
  a defect, not bad input.

Verification counterexamples are never raised; they come back as report
dataclasses from minuscule.verification.
"""


class MinusculeError(Exception):
    """Base class for all errors raised by the package."""


class ConfigurationError(MinusculeError, ValueError):
    """Unsupported configuration or malformed caller input."""


class InvariantViolation(MinusculeError, RuntimeError):
    """An internal structural invariant does not hold."""
