"""Unit tests for the tag registry."""

from __future__ import annotations

import pytest

from ranged_text.core.tag_registry import DEFAULT_REGISTRY, BlockKind, TagRegistry, TagSpec


def test_aliases_collapse_synonyms_before_classification():
    assert DEFAULT_REGISTRY.canonicalize("STRONG") == "b"
    assert DEFAULT_REGISTRY.canonicalize("u") == "em"
    assert DEFAULT_REGISTRY.canonicalize("h5") == "h2"
    assert DEFAULT_REGISTRY.canonicalize("a") == "a"

    assert DEFAULT_REGISTRY.classify("strong").name == "bold"
    assert DEFAULT_REGISTRY.classify("i").name == "emphasis"
    assert DEFAULT_REGISTRY.classify("strike").name == "del"


def test_classify_reports_kind_and_unknown_tags():
    assert DEFAULT_REGISTRY.classify("b").kind is BlockKind.CONTINUOUS
    assert DEFAULT_REGISTRY.classify("a").kind is BlockKind.PROPERTIED
    assert DEFAULT_REGISTRY.classify("br").kind is BlockKind.SINGLED
    assert DEFAULT_REGISTRY.classify("p") is None
    assert DEFAULT_REGISTRY.classify("img") is None
    assert not DEFAULT_REGISTRY.is_known("div")


def test_kind_name_lookups():
    assert DEFAULT_REGISTRY.kind_name_to_tag("bold") == "b"
    assert DEFAULT_REGISTRY.kind_name_to_tag("link") == "a"
    assert DEFAULT_REGISTRY.kind_name_to_tag("block quote") == "blockquote"
    assert DEFAULT_REGISTRY.kind_name_to_tag("soft return") == "br"
    assert DEFAULT_REGISTRY.kind_of("emphasis") is BlockKind.CONTINUOUS

    with pytest.raises(KeyError):
        DEFAULT_REGISTRY.kind_name_to_tag("sparkle")


def test_kind_names_follow_registry_order():
    names = DEFAULT_REGISTRY.kind_names(BlockKind.CONTINUOUS)

    assert names[:4] == ["bold", "italic", "underline", "emphasis"]
    assert DEFAULT_REGISTRY.kind_names(BlockKind.SINGLED) == ["soft return"]
    assert DEFAULT_REGISTRY.order_of("bold") < DEFAULT_REGISTRY.order_of("del")


def test_opaque_tags():
    assert DEFAULT_REGISTRY.is_opaque("SCRIPT")
    assert DEFAULT_REGISTRY.is_opaque("style")
    assert not DEFAULT_REGISTRY.is_opaque("b")


def test_extended_copies_leave_default_untouched():
    registry = DEFAULT_REGISTRY.with_aliases({"MARK": "em"}).with_opaque_tags(["template"])

    assert registry.classify("mark").name == "emphasis"
    assert registry.is_opaque("template")
    assert DEFAULT_REGISTRY.classify("mark") is None
    assert not DEFAULT_REGISTRY.is_opaque("template")


def test_kind_name_cannot_belong_to_two_kinds():
    with pytest.raises(ValueError):
        TagRegistry(
            tags=(
                TagSpec("b", BlockKind.CONTINUOUS, "bold"),
                TagSpec("x-bold", BlockKind.PROPERTIED, "bold"),
            ),
            aliases={},
        )
