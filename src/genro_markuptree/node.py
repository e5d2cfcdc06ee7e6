# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MarkupNode - immutable tagged tree element."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping

from .exceptions import InvalidAttributeError


class MarkupNode:
    """An immutable element of a markup tree.

    Each node has:
    - tag: The element name. An empty tag marks a fragment, a transparent
      grouping wrapper that never renders its own envelope.
    - attributes: Read-only mapping of attributes, in insertion order
    - children: Tuple of child MarkupNode instances
    - text: Optional leaf text. When present it takes precedence over
      children at serialization time.

    Nodes have value semantics: two nodes are equal when tag, attributes
    (including their order), children and text are equal.

    Example:
        >>> node = MarkupNode('li', text='Item 1')
        >>> node.tag
        'li'
        >>> str(node)
        '<li>Item 1</li>'
    """

    __slots__ = ('tag', 'attributes', 'children', 'text')

    def __init__(
        self,
        tag: str = '',
        attributes: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        children: Iterable[MarkupNode] = (),
        text: str | None = None,
    ) -> None:
        """Initialize a MarkupNode.

        Args:
            tag: Element name, '' for a fragment.
            attributes: Mapping or iterable of (name, value) pairs. Values
                are converted to str, names must not be empty.
            children: Child nodes, in document order.
            text: Optional text content.

        Raises:
            InvalidAttributeError: If an attribute name is empty.
        """
        attrs: dict[str, str] = {}
        if attributes:
            items = attributes.items() if isinstance(attributes, Mapping) else attributes
            for name, value in items:
                if not name:
                    raise InvalidAttributeError(
                        f"Empty attribute name on <{tag}>"
                    )
                attrs[name] = value if isinstance(value, str) else str(value)

        object.__setattr__(self, 'tag', tag)
        object.__setattr__(self, 'attributes', MappingProxyType(attrs))
        object.__setattr__(self, 'children', tuple(children))
        object.__setattr__(self, 'text', text)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"'{type(self).__name__}' is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"'{type(self).__name__}' is immutable")

    def __reduce__(self) -> tuple:
        return (
            MarkupNode,
            (self.tag, dict(self.attributes), self.children, self.text),
        )

    def _key(self) -> tuple:
        return (self.tag, tuple(self.attributes.items()), self.children, self.text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MarkupNode):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        if self.is_fragment:
            return f"MarkupNode(fragment, children={len(self.children)})"
        if self.text is not None:
            return f"MarkupNode({self.tag!r}, text={self.text!r})"
        return f"MarkupNode({self.tag!r}, children={len(self.children)})"

    def __str__(self) -> str:
        from .serializer import serialize
        return serialize(self)

    @property
    def is_fragment(self) -> bool:
        """True if this node is a tag-less grouping wrapper."""
        return self.tag == ''

    @property
    def is_leaf(self) -> bool:
        """True if this node carries text content."""
        return self.text is not None

    @property
    def is_empty(self) -> bool:
        """True if this node has neither children nor text."""
        return not self.children and self.text is None

    def get_attr(self, attr: str | None = None, default: Any = None) -> Any:
        """Get attribute value or all attributes.

        Args:
            attr: Attribute name. If None, returns all attributes.
            default: Default value if attribute not found.

        Returns:
            Attribute value, default, or the read-only attribute mapping.
        """
        if attr is None:
            return self.attributes
        return self.attributes.get(attr, default)

    def with_attributes(
        self, _attr: Mapping[str, Any] | None = None, **kwargs: Any
    ) -> MarkupNode:
        """Return a copy with attributes added or replaced.

        Existing attributes keep their position, new ones are appended.
        """
        attrs = dict(self.attributes)
        if _attr:
            attrs.update(_attr)
        attrs.update(kwargs)
        return MarkupNode(self.tag, attrs, self.children, self.text)

    def with_children(self, *children: MarkupNode) -> MarkupNode:
        """Return a copy with children appended."""
        return MarkupNode(
            self.tag, self.attributes, self.children + children, self.text
        )

    def with_text(self, text: str | None) -> MarkupNode:
        """Return a copy with the given text."""
        return MarkupNode(self.tag, self.attributes, self.children, text)

    def walk(
        self,
        callback: Callable[[MarkupNode], Any] | None = None,
        _prefix: str = ''
    ) -> Iterator[tuple[str, MarkupNode]] | None:
        """Walk the descendants depth-first, in document order.

        Paths are dotted child positions ('0', '0.1', ...).

        Args:
            callback: Optional function to call on each node.
                      If provided, walk returns None.
            _prefix: Internal use for path building.

        Yields:
            Tuples of (path, node) if no callback provided.

        Example:
            >>> for path, node in page.walk():
            ...     print(path, node.tag)
        """
        if callback is not None:
            for child in self.children:
                callback(child)
                child.walk(callback)
            return None

        def _walk_gen(node: MarkupNode, prefix: str) -> Iterator[tuple[str, MarkupNode]]:
            for index, child in enumerate(node.children):
                path = f"{prefix}.{index}" if prefix else str(index)
                yield path, child
                yield from _walk_gen(child, path)

        return _walk_gen(self, _prefix)


def fragment(*children: MarkupNode) -> MarkupNode:
    """Create a fragment node grouping the given children."""
    return MarkupNode(children=children)


# Canonical empty fragment, produced for conditions that did not hold.
EMPTY = MarkupNode()
