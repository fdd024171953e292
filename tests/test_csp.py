"""
Tests for cyclic sieving evaluations and homomesy predictions.
"""
from fractions import Fraction

import pytest

from minuscule.actions import FonDerFlaass, count_action_fixed_points
from minuscule.csp import (csp_fixed_point_evaluation_from_rank_generating,
                           csp_fixed_point_evaluation_type_a,
                           csp_fixed_points_closed_form_type_a,
                           evaluate_polynomial_at_root_of_unity,
                           gaussian_binomial_coefficients, homomesy_predictions,
                           predicted_csp_fixed_points_type_a, rank_generating_polynomial,
                           type_a_homomesy_predictions)
from minuscule.errors import ConfigurationError
from minuscule.verification import enumerate_ideals

from .conftest import SAMPLE_CONFIGURATIONS, all_configurations, get_poset

TYPE_A_CONFIGURATIONS = [c for c in all_configurations() if c[0] == "A"]


class TestPolynomials:

    def test_gaussian_binomials(self):
        assert gaussian_binomial_coefficients(4, 2) == [1, 1, 2, 1, 1]
        assert gaussian_binomial_coefficients(5, 2) == [1, 1, 2, 2, 2, 1, 1]
        assert gaussian_binomial_coefficients(5, 0) == [1]
        assert gaussian_binomial_coefficients(3, 5) == [0]

    def test_gaussian_binomial_symmetry(self):
        assert gaussian_binomial_coefficients(7, 3) == gaussian_binomial_coefficients(7, 4)
        assert sum(gaussian_binomial_coefficients(8, 4)) == 70

    def test_vector_representation(self, d41):
        assert rank_generating_polynomial(d41) == [1, 1, 1, 2, 1, 1, 1]

    @pytest.mark.parametrize("lie_type,n,k", TYPE_A_CONFIGURATIONS)
    def test_type_a_is_gaussian_binomial(self, lie_type, n, k):
        poset = get_poset(lie_type, n, k)
        assert rank_generating_polynomial(poset) == gaussian_binomial_coefficients(n + 1, k)


class TestRootOfUnity:

    def test_power_zero_sums_coefficients(self):
        value = evaluate_polynomial_at_root_of_unity([1, 1, 1, 2, 1, 1, 1], 6, 0)
        assert value.rounded_real == 8
        assert value.root_order == 1

    def test_vector_representation_values(self):
        coeffs = [1, 1, 1, 2, 1, 1, 1]
        assert evaluate_polynomial_at_root_of_unity(coeffs, 6, 1).rounded_real == 0
        third = evaluate_polynomial_at_root_of_unity(coeffs, 6, 2)
        assert third.rounded_real == 2
        assert (third.gcd_value, third.root_order, third.unit_power) == (2, 3, 1)
        assert third.numeric_stable
        assert evaluate_polynomial_at_root_of_unity(coeffs, 6, 3).rounded_real == 0

    def test_bad_order(self):
        with pytest.raises(ConfigurationError):
            evaluate_polynomial_at_root_of_unity([1], 0, 1)


class TestCyclicSieving:

    @pytest.mark.parametrize("lie_type,n,k", SAMPLE_CONFIGURATIONS)
    def test_fixed_points_match_prediction(self, lie_type, n, k):
        poset = get_poset(lie_type, n, k)
        ideals = enumerate_ideals(poset)
        for power in range(poset.coxeter_number):
            predicted = csp_fixed_point_evaluation_from_rank_generating(poset, power, ideals)
            observed = count_action_fixed_points(poset, FonDerFlaass(), ideals, power)
            assert predicted.evaluation.numeric_stable
            assert predicted.fixed_points == observed.fixed_points

    def test_power_is_reduced_mod_h(self, e61):
        evaluation = csp_fixed_point_evaluation_from_rank_generating(e61, 13)
        assert evaluation.power == 1
        assert evaluation.order == 12
        assert evaluation.ideals_count == 27

    @pytest.mark.parametrize("lie_type,n,k", TYPE_A_CONFIGURATIONS)
    def test_closed_form_matches_general(self, lie_type, n, k):
        poset = get_poset(lie_type, n, k)
        ideals = enumerate_ideals(poset)
        for power in range(n + 1):
            general = csp_fixed_point_evaluation_from_rank_generating(poset, power, ideals)
            assert predicted_csp_fixed_points_type_a(poset, power) == general.fixed_points

    def test_closed_form_values(self):
        assert csp_fixed_points_closed_form_type_a(6, 2, 0) == 15
        assert csp_fixed_points_closed_form_type_a(6, 2, 3) == 3
        assert csp_fixed_points_closed_form_type_a(6, 2, 1) == 0
        assert csp_fixed_points_closed_form_type_a(6, 2, 2) == 0
        assert csp_fixed_points_closed_form_type_a(6, 3, 2) == 2

    def test_type_a_evaluation_fields(self, a42):
        evaluation = csp_fixed_point_evaluation_type_a(a42, 5)
        assert evaluation.power == 0
        assert evaluation.fixed_points == 10
        assert evaluation.coefficients == (1, 1, 2, 2, 2, 1, 1)
        assert evaluation.divisible and evaluation.quotient_k == 2

    def test_type_a_only(self, d41):
        with pytest.raises(ConfigurationError, match="only defined for type A"):
            csp_fixed_point_evaluation_type_a(d41)
        with pytest.raises(ConfigurationError):
            type_a_homomesy_predictions(d41)


class TestHomomesyPredictions:

    def test_vector_representation(self, d41):
        predicted = homomesy_predictions(d41)
        assert predicted.avg_label_counts == (1, 1, Fraction(1, 2), Fraction(1, 2))
        assert predicted.avg_size == 3
        assert predicted.avg_antichain_size == 1

    def test_e6(self, e61):
        predicted = homomesy_predictions(e61)
        assert predicted.avg_size == 8
        assert predicted.avg_antichain_size == Fraction(4, 3)

    @pytest.mark.parametrize("lie_type,n,k", TYPE_A_CONFIGURATIONS)
    def test_type_a_closed_forms_agree(self, lie_type, n, k):
        poset = get_poset(lie_type, n, k)
        general = homomesy_predictions(poset)
        closed = type_a_homomesy_predictions(poset)
        assert closed.avg_label_counts == general.avg_label_counts
        assert closed.avg_size == general.avg_size
        assert closed.avg_antichain_size == general.avg_antichain_size
