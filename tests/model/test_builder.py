# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the fluent tag builder."""

from datetime import date

import pytest

from sdlang.errors import IllegalIdentifierError
from sdlang.model.builder import TagBuilder, tag
from sdlang.model.tag import Tag
from sdlang.model.values import CharacterValue, DateValue, Int32Value, StringValue, char_value


class TestBuild:
    def test_defaults_to_content(self) -> None:
        built = tag().build()
        assert built.name == "content"
        assert built.namespace == ""

    def test_full_tag(self) -> None:
        child = Tag("child")
        built = (
            tag("server")
            .with_namespace("net")
            .with_comment("main server")
            .with_values("main", char_value("x"))
            .with_attribute("port", 8080)
            .with_attribute("since", date(2020, 1, 1), namespace="meta")
            .with_child(child)
            .build()
        )
        assert built.qualified_name == "net:server"
        assert built.comment == "main server"
        assert built.values == [StringValue(value="main"), CharacterValue(value="x")]
        assert built.get_attribute("port") == Int32Value(value=8080)
        assert built.get_attribute("since", namespace="meta") == DateValue(value=date(2020, 1, 1))
        assert built.children == [child]

    def test_with_attributes_mapping(self) -> None:
        built = tag("t").with_attributes({"a": 1, "ns:b": "x"}).build()
        assert built.get_attributes() == {"a": Int32Value(value=1), "ns:b": StringValue(value="x")}

    def test_with_children(self) -> None:
        built = tag("t").with_children([Tag("a"), Tag("b")]).build()
        assert [c.name for c in built.children] == ["a", "b"]

    def test_each_build_owns_its_children(self) -> None:
        builder = TagBuilder("t").with_child(Tag("a"))
        first = builder.build()
        second = builder.build()
        assert first == second
        assert first.children[0] is not second.children[0]

    def test_builder_is_reusable_after_build(self) -> None:
        builder = tag("t").with_value(1)
        first = builder.build()
        builder.with_value(2)
        assert len(first.values) == 1
        assert len(builder.build().values) == 2


class TestEagerValidation:
    def test_bad_name(self) -> None:
        with pytest.raises(IllegalIdentifierError):
            tag("1bad")

    def test_reserved_name(self) -> None:
        with pytest.raises(IllegalIdentifierError):
            tag("null")

    def test_bad_namespace(self) -> None:
        with pytest.raises(IllegalIdentifierError):
            tag("t").with_namespace("a b")

    def test_bad_attribute_name(self) -> None:
        builder = tag("t")
        with pytest.raises(IllegalIdentifierError):
            builder.with_attribute("a=b", 1)

    def test_keyword_attribute_name_is_fine(self) -> None:
        assert tag("t").with_attribute("on", True).build().get_attribute("on") is not None

    def test_uncoercible_value(self) -> None:
        with pytest.raises(TypeError):
            tag("t").with_value(object())
