"""
Minuscule Posets and the Weight Bijection

Builds the minuscule poset P of (type, n, k) for the simply-laced types
A, D, E and studies its order ideals J(P):

    J(P)  --phi-->  weights of V(omega_k)

with toggle-group actions (label toggles, Fon-Der-Flaass rowmotion,
Coxeter-word actions), exhaustive verification of the bijection and its
equivariance, cyclic sieving fixed-point predictions, and homomesy
averages.
"""

from .errors import ConfigurationError, InvariantViolation, MinusculeError
from .cartan import (supported_types, supported_ranks, minuscule_weights,
                     is_minuscule_triple, cartan_matrix, coxeter_number,
                     representation_metadata, reflect, apply_reflection_word)
from .poset import Node, Poset, build_minuscule_poset, build_type_a_poset
from .weight_lattice import WeightLattice
from .ideals import (has_bit, set_bit, clear_bit, can_add, can_remove,
                     toggle_node, toggle_by_label, toggle_by_rank, ToggleResult,
                     require_ideal)
from .phi import phi, topological_order, is_linear_extension
from .verification import (VerificationOptions, enumerate_ideals,
                           analyze_label_structure,
                           check_phi_extension_independence,
                           verify_exhaustively, weight_to_ideal)
from .actions import (FonDerFlaass, CoxeterWord, apply_action,
                      fon_der_flaass_action, apply_coxeter_word,
                      parse_coxeter_word, orbit_from_mask, orbit_decomposition,
                      count_action_fixed_points, ideal_statistics,
                      summarize_orbit)
from .csp import (rank_generating_polynomial,
                  evaluate_polynomial_at_root_of_unity,
                  csp_fixed_point_evaluation_from_rank_generating,
                  csp_fixed_point_evaluation_type_a,
                  csp_fixed_points_closed_form_type_a,
                  predicted_csp_fixed_points_type_a,
                  gaussian_binomial_coefficients, homomesy_predictions,
                  type_a_homomesy_predictions)

__all__ = [
    'ConfigurationError', 'InvariantViolation', 'MinusculeError',
    'supported_types', 'supported_ranks', 'minuscule_weights',
    'is_minuscule_triple', 'cartan_matrix', 'coxeter_number',
    'representation_metadata', 'reflect', 'apply_reflection_word',
    'Node', 'Poset', 'build_minuscule_poset', 'build_type_a_poset',
    'WeightLattice',
    'has_bit', 'set_bit', 'clear_bit', 'can_add', 'can_remove',
    'toggle_node', 'toggle_by_label', 'toggle_by_rank', 'ToggleResult',
    'require_ideal',
    'phi', 'topological_order', 'is_linear_extension',
    'VerificationOptions', 'enumerate_ideals', 'analyze_label_structure',
    'check_phi_extension_independence', 'verify_exhaustively',
    'weight_to_ideal',
    'FonDerFlaass', 'CoxeterWord', 'apply_action', 'fon_der_flaass_action',
    'apply_coxeter_word', 'parse_coxeter_word', 'orbit_from_mask',
    'orbit_decomposition', 'count_action_fixed_points', 'ideal_statistics',
    'summarize_orbit',
    'rank_generating_polynomial', 'evaluate_polynomial_at_root_of_unity',
    'csp_fixed_point_evaluation_from_rank_generating',
    'csp_fixed_point_evaluation_type_a', 'csp_fixed_points_closed_form_type_a',
    'predicted_csp_fixed_points_type_a', 'gaussian_binomial_coefficients',
    'homomesy_predictions', 'type_a_homomesy_predictions',
]
