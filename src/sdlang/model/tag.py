# Copyright 2026 sdlang Contributors
# SPDX-License-Identifier: Apache-2.0

"""The tag: the single node type of an SDL document tree."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as _Field

from sdlang.model.identifiers import validate_identifier, validate_tag_identifier
from sdlang.model.values import Value, value

# ###############
# Public Interface
# ###############

# Name given to tags written without one (a line that starts with a value).
ANONYMOUS_TAG_NAME = "content"


class Tag(BaseModel):
    """A named node carrying ordered values, attributes, and child tags.

    Attributes are keyed by ``(namespace, name)``; the empty namespace is the
    default. Two tags are equal when namespace, name, values, attributes, and
    children are equal. The comment does not take part in equality, and
    attribute order never matters.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = ANONYMOUS_TAG_NAME
    namespace: str = ""
    comment: str | None = None
    values: list[Value] = _Field(default_factory=list)
    attributes: dict[tuple[str, str], Value] = _Field(default_factory=dict)
    children: list[Tag] = _Field(default_factory=list)

    def __init__(self, name: str = ANONYMOUS_TAG_NAME, namespace: str = "", **data: Any) -> None:
        super().__init__(name=name, namespace=namespace, **data)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        validate_tag_identifier(v)
        return v

    @field_validator("namespace")
    @classmethod
    def _check_namespace(cls, v: str) -> str:
        if v:
            validate_tag_identifier(v)
        return v

    @field_validator("attributes")
    @classmethod
    def _check_attribute_keys(cls, v: dict[tuple[str, str], Value]) -> dict[tuple[str, str], Value]:
        for namespace, name in v:
            validate_identifier(name)
            if namespace:
                validate_identifier(namespace)
        return v

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tag):
            return NotImplemented
        return (
            self.namespace == other.namespace
            and self.name == other.name
            and self.values == other.values
            and self.attributes == other.attributes
            and self.children == other.children
        )

    def __str__(self) -> str:
        from sdlang.formatter.formatter import format_tag

        return format_tag(self)

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}:{self.name}" if self.namespace else self.name

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def add_value(self, v: object) -> None:
        """Append a value, coercing native Python objects with :func:`value`."""
        self.values.append(value(v))

    def get_value(self) -> Any:
        """Return the payload of the first value, or None when there are no values."""
        if not self.values:
            return None
        return self.values[0].value

    def set_value(self, v: object) -> None:
        """Replace the first value, or append it when there are no values."""
        coerced = value(v)
        if self.values:
            self.values[0] = coerced
        else:
            self.values.append(coerced)

    def remove_value(self, v: object) -> bool:
        """Remove the first value equal to *v*. Returns True if one was removed."""
        coerced = value(v)
        for i, existing in enumerate(self.values):
            if existing == coerced:
                del self.values[i]
                return True
        return False

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def set_attribute(self, name: str, v: object, namespace: str = "") -> None:
        """Set an attribute, replacing any existing one with the same namespace and name.

        A replaced attribute keeps its original position.
        """
        validate_identifier(name)
        if namespace:
            validate_identifier(namespace)
        self.attributes[(namespace, name)] = value(v)

    def get_attribute(self, name: str, namespace: str = "") -> Value | None:
        return self.attributes.get((namespace, name))

    def remove_attribute(self, name: str, namespace: str = "") -> bool:
        return self.attributes.pop((namespace, name), None) is not None

    def get_attributes(self) -> dict[str, Value]:
        """Return all attributes keyed by ``name`` or ``namespace:name``, in insertion order."""
        return {(f"{ns}:{name}" if ns else name): v for (ns, name), v in self.attributes.items()}

    def get_attributes_for_namespace(self, namespace: str) -> dict[str, Value]:
        """Return the attributes in *namespace*, keyed by bare name."""
        return {name: v for (ns, name), v in self.attributes.items() if ns == namespace}

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    def add_child(self, child: Tag) -> None:
        """Append *child* as is, without copying it.

        A tag cannot be added beneath itself, and the same tag object cannot be
        added twice to one parent. Use :meth:`model_copy` with ``deep=True`` to
        place a copy of a subtree under another parent.
        """
        if child is self or any(t is self for t in child.walk()):
            raise ValueError(f"cannot add tag {child.qualified_name!r} beneath itself")
        if any(existing is child for existing in self.children):
            raise ValueError(f"tag {child.qualified_name!r} is already a child of {self.qualified_name!r}")
        self.children.append(child)

    def remove_child(self, child: Tag) -> bool:
        """Remove *child* (matched by identity). Returns True if it was a child."""
        for i, existing in enumerate(self.children):
            if existing is child:
                del self.children[i]
                return True
        return False

    def walk(self) -> Iterator[Tag]:
        """Yield every descendant depth-first in document order (not this tag)."""
        for child in self.children:
            yield child
            yield from child.walk()

    def get_child(self, name: str, recursive: bool = False) -> Tag | None:
        """Return the first child named *name*, searching descendants if *recursive*."""
        candidates = self.walk() if recursive else iter(self.children)
        return next((t for t in candidates if t.name == name), None)

    def get_children(
        self,
        name: str | None = None,
        *,
        namespace: str | None = None,
        recursive: bool = False,
    ) -> list[Tag]:
        """Return children filtered by name and/or namespace.

        With no filters this returns every child (every descendant if
        *recursive*).
        """
        candidates = self.walk() if recursive else iter(self.children)
        return [
            t
            for t in candidates
            if (name is None or t.name == name) and (namespace is None or t.namespace == namespace)
        ]

    def get_children_values(self, name: str) -> list[Any]:
        """Return one entry per child named *name*.

        The entry is the child's single value payload, or the list of its value
        payloads when it has zero or several.
        """
        result: list[Any] = []
        for child in self.get_children(name):
            payloads = [v.value for v in child.values]
            result.append(payloads[0] if len(payloads) == 1 else payloads)
        return result


Tag.model_rebuild()
