"""
Tests for minuscule poset construction.
"""
from fractions import Fraction
from math import comb

import pytest

from minuscule.errors import ConfigurationError, InvariantViolation
from minuscule.poset import (build_minuscule_poset, build_type_a_poset, compute_ranks,
                             ensure_bitmask_capacity)

from .conftest import all_configurations, get_poset


def expected_size(lie_type, n, k):
    if lie_type == "A":
        return k * (n + 1 - k)
    if lie_type == "D":
        return 2 * n - 2 if k == 1 else n * (n - 1) // 2
    return 16 if n == 6 else 27


def expected_dimension(lie_type, n, k):
    if lie_type == "A":
        return comb(n + 1, k)
    if lie_type == "D":
        return 2 * n if k == 1 else 2 ** (n - 1)
    return 27 if n == 6 else 56


class TestTypeA:

    def test_rectangle(self, a42):
        assert a42.size == 6
        assert a42.expected_ideals == 10
        assert a42.coxeter_number == 5
        assert a42.highest_weight == (0, 1, 0, 0)

    def test_labels_and_covers(self, a42):
        assert [node.label for node in a42.nodes] == [2, 3, 4, 1, 2, 3]
        assert a42.nodes[4].preds == (1, 3)
        assert a42.nodes[0].succs == (1, 3)
        assert a42.nodes[5].succs == ()

    def test_ranks(self, a42):
        assert a42.rank_min == 2 and a42.rank_max == 5
        assert a42.rank_to_indices == {2: (0,), 3: (1, 3), 4: (2, 4), 5: (5,)}

    def test_label_partition(self, a42):
        assert a42.label_to_indices == {1: (3,), 2: (0, 4), 3: (1, 5), 4: (2,)}

    def test_inverse_cartan_column(self, a42):
        assert a42.inverse_cartan_column == (Fraction(3, 5), Fraction(6, 5),
                                             Fraction(4, 5), Fraction(2, 5))

    def test_direct_builder_validates(self):
        with pytest.raises(ConfigurationError):
            build_type_a_poset(4, 5)

    def test_no_weight_oracle(self, a42):
        assert a42.known_weight_keys is None


class TestNonTypeA:

    def test_vector_representation(self, d41):
        assert d41.expected_ideals == 8
        assert d41.size == 6

    def test_vector_representation_is_fork(self, d41):
        # 1 < 2 < {3, 4} < 2 < 1 read upward from the highest weight
        minimal = [node for node in d41.nodes if not node.preds]
        assert len(minimal) == 1 and minimal[0].label == 1
        ranks = {node.index: node.rank for node in d41.nodes}
        assert sorted(ranks.values()) == [0, 1, 2, 2, 3, 4]
        middle = [node.label for node in d41.nodes if node.rank == 2]
        assert sorted(middle) == [3, 4]

    def test_highest_weight_node_is_minimum(self, e61):
        minimal = [node for node in e61.nodes if not node.preds]
        assert len(minimal) == 1
        assert minimal[0].label == e61.k
        assert all(e61.less_equal(minimal[0].index, node.index) for node in e61.nodes)

    def test_e6_and_e7_sizes(self, e61, e77):
        assert (e61.size, e61.expected_ideals, e61.coxeter_number) == (16, 27, 12)
        assert (e77.size, e77.expected_ideals, e77.coxeter_number) == (27, 56, 18)

    def test_weight_oracle_present(self, e61):
        assert len(e61.known_weight_keys) == 27
        assert e61.highest_weight in e61.known_weight_keys

    def test_canonical_ordering(self, e77):
        # The highest weight has depth 0, so its node sorts last
        last = e77.nodes[-1]
        assert last.preds == () and last.label == 7 and last.rank == 0


class TestAllConfigurations:

    @pytest.mark.parametrize("lie_type,n,k", all_configurations())
    def test_structure(self, lie_type, n, k):
        poset = get_poset(lie_type, n, k)
        assert poset.size == expected_size(lie_type, n, k)
        assert poset.expected_ideals == expected_dimension(lie_type, n, k)
        assert [node.index for node in poset.nodes] == list(range(poset.size))

        for node in poset.nodes:
            assert 1 <= node.label <= n
            for succ in node.succs:
                assert node.index in poset.nodes[succ].preds
                assert poset.nodes[succ].rank == node.rank + 1
            for pred in node.preds:
                assert node.index in poset.nodes[pred].succs

        assert sum(len(v) for v in poset.label_to_indices.values()) == poset.size
        assert sum(len(v) for v in poset.rank_to_indices.values()) == poset.size

    @pytest.mark.parametrize("lie_type,n,k", all_configurations())
    def test_antisymmetric(self, lie_type, n, k):
        poset = get_poset(lie_type, n, k)
        for node in poset.nodes:
            for succ in node.succs:
                assert not poset.less_equal(succ, node.index)

    @pytest.mark.parametrize("lie_type,n,k", all_configurations())
    def test_inverse_cartan_solves_system(self, lie_type, n, k):
        poset = get_poset(lie_type, n, k)
        column = poset.inverse_cartan_column
        for i in range(n):
            row = sum(int(poset.cartan[i, j]) * column[j] for j in range(n))
            assert row == (1 if i == k - 1 else 0)


class TestErrors:

    def test_bad_type(self):
        with pytest.raises(ConfigurationError, match="Unsupported Lie type"):
            build_minuscule_poset("G", 2, 1)

    def test_bad_rank(self):
        with pytest.raises(ConfigurationError, match="Allowed ranks: 4, 5, 6, 7, 8"):
            build_minuscule_poset("D", 9, 1)

    def test_bad_index(self):
        with pytest.raises(ConfigurationError, match="Allowed: 1, 6"):
            build_minuscule_poset("E", 6, 2)

    def test_capacity(self):
        ensure_bitmask_capacity(31)
        with pytest.raises(ConfigurationError, match="at most 31"):
            ensure_bitmask_capacity(32)

    def test_cyclic_relation(self):
        with pytest.raises(InvariantViolation, match="not acyclic"):
            compute_ranks([[1], [0]], [[1], [0]])


class TestSummary:

    def test_summary_mentions_key_facts(self, e61):
        text = e61.summary()
        assert "E_6" in text
        assert "Elements |P|: 16" in text
        assert "Coxeter number h: 12" in text
