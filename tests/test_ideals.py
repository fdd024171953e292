"""
Tests for ideal bitmasks and toggles.
"""
import pytest

from minuscule.errors import ConfigurationError
from minuscule.ideals import (apply_toggle_sequence, bit_count, can_add, can_remove,
                              clear_bit, has_bit, is_ideal, mask_from_indices,
                              mask_indices, require_ideal, set_bit, toggle_by_label,
                              toggle_by_rank, toggle_node)

from .conftest import SAMPLE_CONFIGURATIONS, get_poset


class TestBitHelpers:

    def test_bits(self):
        mask = set_bit(0, 3)
        assert mask == 8
        assert has_bit(mask, 3) and not has_bit(mask, 2)
        assert clear_bit(mask, 3) == 0
        assert bit_count(0b101101) == 4

    def test_indices_round_trip(self):
        assert mask_indices(0b100101) == [0, 2, 5]
        assert mask_from_indices([5, 0, 2]) == 0b100101
        assert mask_indices(0) == []


class TestIdealMembership:

    def test_empty_and_full(self, a42):
        assert is_ideal(0, a42)
        assert is_ideal((1 << a42.size) - 1, a42)

    def test_not_downward_closed(self, a42):
        # node 4 without its predecessors 1 and 3
        assert not is_ideal(1 << 4, a42)

    def test_out_of_range_bits(self, a42):
        assert not is_ideal(1 << a42.size, a42)
        assert not is_ideal(-1, a42)


class TestToggles:

    def test_add_and_remove(self, a42):
        assert can_add(0, 0, a42)
        assert not can_add(0, 1, a42)
        assert can_remove(1, 0, a42)
        assert not can_remove(0b11, 0, a42)

    def test_toggle_is_involution(self, a42):
        for mask in (0, 1, 0b11, 0b1011):
            for index in range(a42.size):
                toggled = toggle_node(mask, index, a42)
                assert toggle_node(toggled, index, a42) == mask

    def test_blocked_toggle_is_noop(self, a42):
        assert toggle_node(0, 5, a42) == 0

    def test_label_two_adds_minimum(self, a42):
        result = toggle_by_label(0, 2, a42)
        assert result.mask == 1
        assert result.changed_indices == (0,)

    def test_label_one_on_empty_is_noop(self, a42):
        # the minimal cell carries label k = 2
        result = toggle_by_label(0, 1, a42)
        assert result.mask == 0
        assert result.changed_indices == ()

    def test_label_one_after_minimum(self, a42):
        result = toggle_by_label(1, 1, a42)
        assert result.mask == 9
        assert result.changed_indices == (3,)

    def test_rank_toggle(self, a42):
        assert toggle_by_rank(0, 2, a42).mask == 1
        assert toggle_by_rank(1, 3, a42).mask == 0b1011
        assert toggle_by_rank(0, 9, a42).mask == 0

    def test_sequence_records_changes(self, a42):
        result = apply_toggle_sequence(0, [5, 0, 1, 1], a42)
        assert result.mask == 1
        assert result.changed_indices == (0, 1, 1)

    @pytest.mark.parametrize("lie_type,n,k", SAMPLE_CONFIGURATIONS)
    def test_label_toggles_preserve_ideals(self, lie_type, n, k):
        poset = get_poset(lie_type, n, k)
        mask = 0
        for label in list(poset.labels) * 3:
            mask = toggle_by_label(mask, label, poset).mask
            assert is_ideal(mask, poset)


class TestIdealGuards:

    @pytest.mark.parametrize("mask", [1 << 4, 1 << 20, -1])
    def test_toggles_reject_non_ideals(self, a42, mask):
        with pytest.raises(ConfigurationError, match="not an order ideal"):
            toggle_by_label(mask, 2, a42)
        with pytest.raises(ConfigurationError, match="not an order ideal"):
            toggle_by_rank(mask, 2, a42)
        with pytest.raises(ConfigurationError, match="not an order ideal"):
            toggle_node(mask, 0, a42)
        with pytest.raises(ConfigurationError, match="not an order ideal"):
            apply_toggle_sequence(mask, [0], a42)

    def test_rejects_non_int_masks(self, a42):
        with pytest.raises(ConfigurationError, match="int bitmask"):
            toggle_by_label(1.0, 2, a42)
        with pytest.raises(ConfigurationError, match="int bitmask"):
            require_ideal(True, a42)

    def test_rejects_foreign_node_index(self, a42):
        with pytest.raises(ConfigurationError, match="outside 0..5"):
            toggle_node(0, 6, a42)
        with pytest.raises(ConfigurationError, match="outside 0..5"):
            apply_toggle_sequence(0, [0, -1], a42)

    def test_require_ideal_passes_ideals_through(self, a42):
        assert require_ideal(0b1011, a42) == 0b1011
