"""Unit tests for crossing counts and continuous render order."""

from __future__ import annotations

from ranged_text.converters.overlap import count_crossings, order_continuous_blocks, sorted_insert_position
from ranged_text.core.tag_registry import DEFAULT_REGISTRY


def test_sorted_insert_position_returns_exact_match_index():
    block = [0, 5, 12, 15]

    assert sorted_insert_position(block, 0) == 0
    assert sorted_insert_position(block, 3) == 1
    assert sorted_insert_position(block, 12) == 2
    assert sorted_insert_position(block, 20) == 4
    assert sorted_insert_position([], 3) == 0


def test_partial_overlap_crosses_both_ways():
    assert count_crossings([0, 10], [5, 15]) == 1
    assert count_crossings([5, 15], [0, 10]) == 1


def test_nested_range_does_not_cross_its_container():
    assert count_crossings([0, 20], [5, 10]) == 0
    assert count_crossings([5, 10], [0, 20]) == 1


def test_crossings_count_every_other_block():
    assert count_crossings([0, 10], [5, 15, 20, 30], [8, 9]) == 1
    assert count_crossings([0, 10, 20, 30], [5, 25]) == 1
    assert count_crossings([0, 10]) == 0


def test_two_kinds_keep_registry_order_on_a_tie():
    blocks = {"emphasis": [2, 6], "bold": [0, 4]}

    assert order_continuous_blocks(blocks, DEFAULT_REGISTRY) == ["bold", "emphasis"]


def test_two_kinds_swap_when_it_reduces_crossings():
    blocks = {"bold": [2, 4], "emphasis": [0, 6]}

    assert order_continuous_blocks(blocks, DEFAULT_REGISTRY) == ["emphasis", "bold"]


def test_three_kinds_fall_back_to_registry_order():
    blocks = {"del": [0, 6], "emphasis": [0, 2], "bold": [1, 3]}

    assert order_continuous_blocks(blocks, DEFAULT_REGISTRY) == ["bold", "emphasis", "del"]


def test_single_kind_order():
    assert order_continuous_blocks({"pre": [0, 1]}, DEFAULT_REGISTRY) == ["pre"]
    assert order_continuous_blocks({}, DEFAULT_REGISTRY) == []
