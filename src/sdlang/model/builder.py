# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""Fluent construction of tags.

Every step validates immediately, so an illegal identifier fails at the call
that introduced it rather than at ``build()``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from sdlang.model.identifiers import validate_identifier, validate_tag_identifier
from sdlang.model.tag import ANONYMOUS_TAG_NAME, Tag
from sdlang.model.values import Value, value

# ###############
# Public Interface
# ###############


class TagBuilder:
    """Accumulates the parts of a tag and produces it with :meth:`build`.

    Example::

        tag("server").with_value("main").with_attribute("port", 8080).build()
    """

    def __init__(self, name: str = ANONYMOUS_TAG_NAME) -> None:
        validate_tag_identifier(name)
        self._name = name
        self._namespace = ""
        self._comment: str | None = None
        self._values: list[Value] = []
        self._attributes: dict[tuple[str, str], Value] = {}
        self._children: list[Tag] = []

    def with_namespace(self, namespace: str) -> TagBuilder:
        if namespace:
            validate_tag_identifier(namespace)
        self._namespace = namespace
        return self

    def with_comment(self, comment: str | None) -> TagBuilder:
        self._comment = comment
        return self

    def with_value(self, v: object) -> TagBuilder:
        self._values.append(value(v))
        return self

    def with_values(self, *values: object) -> TagBuilder:
        for v in values:
            self.with_value(v)
        return self

    def with_child(self, child: Tag) -> TagBuilder:
        self._children.append(child)
        return self

    def with_children(self, children: Iterable[Tag]) -> TagBuilder:
        for child in children:
            self.with_child(child)
        return self

    def with_attribute(self, name: str, v: object, namespace: str = "") -> TagBuilder:
        validate_identifier(name)
        if namespace:
            validate_identifier(namespace)
        self._attributes[(namespace, name)] = value(v)
        return self

    def with_attributes(self, attributes: Mapping[str, object]) -> TagBuilder:
        """Add several attributes keyed by ``name`` or ``namespace:name``."""
        for key, v in attributes.items():
            namespace, _, name = key.rpartition(":")
            self.with_attribute(name, v, namespace)
        return self

    def build(self) -> Tag:
        """Return a new tag. Children are deep-copied so each built tag owns its subtree."""
        return Tag(
            self._name,
            self._namespace,
            comment=self._comment,
            values=list(self._values),
            attributes=dict(self._attributes),
            children=[child.model_copy(deep=True) for child in self._children],
        )


def tag(name: str = ANONYMOUS_TAG_NAME) -> TagBuilder:
    """Start building a tag named *name*."""
    return TagBuilder(name)
