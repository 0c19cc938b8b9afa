"""
Tests for chain_sim: replaying presses, exhaustive search and expansion.

The exhaustive search knows nothing about groupings, so agreeing with it is
the main correctness check for the layered tables.
"""

import pytest

from chain_sim import (
    ChainFault,
    brute_force_min_presses,
    chain_layouts,
    expand_presses,
    simulate_presses,
)
from keypad_layout import DIRECTIONAL, NUMERIC, UnknownSymbolError
from press_cost import build_transition_table, count_min_presses

EXAMPLE_CODES = ["029A", "980A", "179A", "456A", "379A"]


class TestSimulatePresses:
    """Replaying human presses through the arms."""

    def test_chain_layouts(self):
        """Directional pads below, numeric pad on top."""
        assert chain_layouts(3) == [DIRECTIONAL, DIRECTIONAL, NUMERIC]
        assert chain_layouts(1) == [NUMERIC]
        assert chain_layouts(0) == []

    def test_depth_one(self):
        """The human steers the numeric arm directly."""
        assert simulate_presses("<A^A>^^AvvvA", 1) == "029A"

    def test_depth_two(self):
        """One directional robot in between."""
        assert simulate_presses("v<<A>>^A<A>AvA<^AA>A<vAAA>^A", 2) == "029A"

    def test_depth_three(self):
        """The worked example's 68-press sequence."""
        presses = "<vA<AA>>^AvAA<^A>A<v<A>>^AvA^A<vA>^A<v<A>^A>AAvA^A<v<A>A>^AAAvA<^A>A"
        assert len(presses) == 68
        assert simulate_presses(presses, 3) == "029A"

    def test_depth_zero(self):
        """Presses are the output."""
        assert simulate_presses("179A", 0) == "179A"
        with pytest.raises(UnknownSymbolError):
            simulate_presses("<A", 0)

    def test_gap_fault(self):
        """Two steps left from A lands on the numeric gap."""
        assert simulate_presses("<A", 1) == "0"
        with pytest.raises(ChainFault):
            simulate_presses("<<", 1)

    def test_off_pad_fault(self):
        """A is on the bottom row; moving down leaves the pad."""
        with pytest.raises(ChainFault):
            simulate_presses("v", 1)

    def test_fault_in_upper_arm(self):
        """A bad move is caught at whichever layer it happens."""
        # Arm 1 parks on '<'; each press walks the numeric arm one key left of A.
        assert simulate_presses("v<<A", 2) == ""
        with pytest.raises(ChainFault):
            simulate_presses("v<<AA", 2)

    def test_not_a_directional_key(self):
        """The human only has a directional pad."""
        with pytest.raises(ChainFault):
            simulate_presses("0", 1)

    def test_bad_depth(self):
        """Depth is never negative."""
        with pytest.raises(ValueError):
            simulate_presses("A", -1)


class TestBruteForce:
    """Breadth-first search over whole-chain states."""

    @pytest.mark.parametrize("depth", [0, 1, 2, 3])
    @pytest.mark.parametrize("code", EXAMPLE_CODES)
    def test_matches_recurrence(self, code, depth):
        """The two-grouping recurrence loses nothing against exhaustive search."""
        assert brute_force_min_presses(code, depth) == count_min_presses(code, depth)

    def test_all_numeric_pairs_depth_two(self):
        """Every single transition, from home, agrees at depth two."""
        for symbol in NUMERIC.symbols:
            assert brute_force_min_presses(symbol, 2) == count_min_presses(symbol, 2)

    def test_empty_target(self):
        """Nothing to type, nothing to press."""
        assert brute_force_min_presses("", 3) == 0

    def test_state_budget(self):
        """A tiny budget stops the search."""
        with pytest.raises(ChainFault):
            brute_force_min_presses("029A", 3, max_states=1)

    def test_state_budget_checked_mid_level(self):
        """The budget holds even when the answer sits later in the same level."""
        # "0" at depth 1 is found on the second press after four states are queued
        assert brute_force_min_presses("0", 1) == 2
        with pytest.raises(ChainFault):
            brute_force_min_presses("0", 1, max_states=3)

    def test_unknown_symbol(self):
        """Targets are numeric-pad symbols."""
        with pytest.raises(UnknownSymbolError):
            brute_force_min_presses("^A", 2)


class TestExpandPresses:
    """Spelling out one optimal press string."""

    @pytest.mark.parametrize("depth", [0, 1, 2, 3, 4])
    @pytest.mark.parametrize("code", EXAMPLE_CODES)
    def test_length_and_replay(self, code, depth):
        """The string is as long as the cost and types the code."""
        presses = expand_presses(code, depth)
        assert len(presses) == count_min_presses(code, depth)
        assert simulate_presses(presses, depth) == code

    def test_depth_one_string(self):
        """Ties keep horizontal-first."""
        assert expand_presses("029A", 1) == "<A^A>^^AvvvA"

    def test_reuses_given_table(self):
        """A prebuilt table of the right depth is accepted."""
        table = build_transition_table(2)
        assert len(expand_presses("179A", 2, table)) == 28

    def test_table_depth_mismatch(self):
        """The table must be built for the requested depth."""
        with pytest.raises(ValueError):
            expand_presses("029A", 3, build_transition_table(2))
