"""
Tests for the weight map phi and linear extensions.
"""
import pytest

from minuscule.cartan import apply_reflection_word
from minuscule.errors import ConfigurationError, InvariantViolation
from minuscule.phi import is_linear_extension, phi, phi_weight, topological_order


class TestLinearExtensions:

    def test_canonical_extension(self, a42):
        assert topological_order(0b111111, a42) == [0, 1, 2, 3, 4, 5]
        assert topological_order(0b1011, a42) == [0, 1, 3]

    def test_chooser(self, a42):
        order = topological_order(0b1011, a42, chooser=lambda ready: ready[-1])
        assert order == [0, 3, 1]
        assert is_linear_extension(order, 0b1011, a42)

    def test_bad_chooser(self, a42):
        with pytest.raises(InvariantViolation):
            topological_order(0b1011, a42, chooser=lambda ready: 99)

    def test_rejects_invalid_orders(self, a42):
        assert not is_linear_extension([1, 0], 0b11, a42)
        assert not is_linear_extension([0], 0b11, a42)
        assert not is_linear_extension([0, 0], 0b11, a42)
        assert not is_linear_extension([0, 2], 0b11, a42)


class TestPhi:

    def test_empty_ideal_is_highest_weight(self, a42, e61):
        assert phi_weight(0, a42) == (0, 1, 0, 0)
        assert phi_weight(0, e61) == (1, 0, 0, 0, 0, 0)

    def test_single_node(self, a42):
        result = phi(1, a42)
        assert result.weight == (1, -1, 1, 0)
        assert result.labels == (2,)
        assert result.order == (0,)

    def test_full_ideal_is_lowest_weight(self, a42, d41, e61):
        assert phi_weight((1 << a42.size) - 1, a42) == (0, 0, -1, 0)
        assert phi_weight((1 << d41.size) - 1, d41) == (-1, 0, 0, 0)
        assert phi_weight((1 << e61.size) - 1, e61) == (0, 0, 0, 0, 0, -1)

    def test_explicit_extension_agrees(self, a42):
        assert phi(0b1011, a42, order=[0, 3, 1]).weight == phi_weight(0b1011, a42)

    def test_matches_reflection_word(self, e61):
        mask = (1 << e61.size) - 1
        result = phi(mask, e61)
        assert result.weight == apply_reflection_word(
            e61.highest_weight, tuple(reversed(result.labels)), e61.cartan)

    def test_invalid_extension(self, a42):
        with pytest.raises(InvariantViolation):
            phi(0b11, a42, order=[1, 0])

    @pytest.mark.parametrize("order", [[0], [0, 1, 1], [0, 2], [0, 1, 3]])
    def test_malformed_extension_shape(self, a42, order):
        with pytest.raises(ConfigurationError, match="not a permutation"):
            phi(0b11, a42, order=order)

    def test_not_an_ideal(self, a42):
        with pytest.raises(ConfigurationError, match="not an order ideal"):
            phi(1 << 5, a42)

    def test_weights_in_known_orbit(self, d41, d41_ideals):
        for mask in d41_ideals:
            assert phi_weight(mask, d41) in d41.known_weight_keys
