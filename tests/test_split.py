"""Unit tests for splitting range models."""

from __future__ import annotations

import pytest

from ranged_text.core.errors import InvalidArgumentError
from ranged_text.core.range_model import RangeModel
from ranged_text.editing.split import split


def test_split_cuts_an_open_continuous_span():
    before, after = split(RangeModel(text="abcdef", blocks={"bold": [0, 6]}), 3)

    assert before == RangeModel(text="abc", blocks={"bold": [0, 3]})
    assert after == RangeModel(text="def", blocks={"bold": [0, 3]})


def test_split_partitions_continuous_pairs_between_spans():
    model = RangeModel(text="abcdefghij", blocks={"bold": [0, 2, 5, 7, 8, 10]})

    before, after = split(model, 4)

    assert before.to_dict()["blocks"] == {"bold": [0, 2]}
    assert after.to_dict()["blocks"] == {"bold": [1, 3, 4, 6]}


def test_split_inside_a_later_span_keeps_earlier_pairs():
    model = RangeModel(text="abcdefghij", blocks={"bold": [0, 2, 5, 9]})

    before, after = split(model, 6)

    assert before.to_dict()["blocks"] == {"bold": [0, 2, 5, 6]}
    assert after.to_dict()["blocks"] == {"bold": [0, 3]}


def test_split_on_span_edges_leaves_no_empty_spans():
    model = RangeModel(text="abcdef", blocks={"bold": [0, 3], "emphasis": [3, 6]})

    before, after = split(model, 3)

    assert before.to_dict()["blocks"] == {"bold": [0, 3]}
    assert after.to_dict()["blocks"] == {"emphasis": [0, 3]}


def test_split_clones_a_straddling_propertied_range():
    model = RangeModel(text="abcdefghij", blocks={"link": [{"start": 2, "end": 8, "href": "x"}]})

    before, after = split(model, 5)

    assert before.to_dict()["blocks"] == {"link": [{"start": 2, "end": 5, "href": "x"}]}
    assert after.to_dict()["blocks"] == {"link": [{"start": 0, "end": 3, "href": "x"}]}


def test_split_assigns_touching_propertied_ranges_to_one_side():
    model = RangeModel(
        text="abcdef",
        blocks={"span": [{"start": 0, "end": 3, "id": "a"}, {"start": 3, "end": 6, "id": "b"}]},
    )

    before, after = split(model, 3)

    assert before.to_dict()["blocks"] == {"span": [{"start": 0, "end": 3, "id": "a"}]}
    assert after.to_dict()["blocks"] == {"span": [{"start": 0, "end": 3, "id": "b"}]}


def test_split_drops_a_singled_mark_exactly_on_the_offset():
    model = RangeModel(text="abcdef", blocks={"soft return": [1, 3, 5]})

    before, after = split(model, 3)

    assert before.to_dict()["blocks"] == {"soft return": [1]}
    assert after.to_dict()["blocks"] == {"soft return": [2]}


def test_split_omits_kinds_left_empty():
    model = RangeModel(text="abcdef", blocks={"soft return": [3], "bold": [4, 6]})

    before, after = split(model, 3)

    assert before.to_dict()["blocks"] == {}
    assert after.to_dict()["blocks"] == {"bold": [1, 3]}


def test_split_at_the_ends(formatted_model):
    before, after = split(formatted_model, 0)
    assert before == RangeModel(text="")
    assert after == formatted_model

    before, after = split(formatted_model, len(formatted_model.text))
    assert after == RangeModel(text="")
    # the trailing mark sits exactly on the offset
    assert before.block("soft return") == [11]


def test_split_does_not_mutate_the_input(formatted_model):
    snapshot = formatted_model.to_dict()

    before, after = split(formatted_model, 8)
    before.block("link")[0]["href"] = "changed"
    after.block("bold").append(99)

    assert formatted_model.to_dict() == snapshot


@pytest.mark.parametrize("offset", [-1, 7, 2.5, True, "3"])
def test_split_rejects_offsets_outside_the_text(offset):
    with pytest.raises(InvalidArgumentError):
        split(RangeModel(text="abcdef"), offset)


def test_split_rejects_unknown_kind_names():
    with pytest.raises(InvalidArgumentError):
        split(RangeModel(text="abc", blocks={"sparkle": [1]}), 1)


@pytest.mark.parametrize(
    "blocks",
    [
        {"bold": [0, 2, 4]},
        {"link": [1]},
        {"bold": [{"start": 0, "end": 2}]},
    ],
)
def test_split_rejects_blocks_that_do_not_fit_their_kind(blocks):
    with pytest.raises(InvalidArgumentError):
        split(RangeModel(text="abcdef", blocks=blocks), 1)
