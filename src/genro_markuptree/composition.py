# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Composition engine - folds blocks of components into markup nodes.

A block is an ordered sequence of components. Each component is normalized
into a list of nodes, then the active AggregationProfile reduces the block
into one node (or one node list for sequence profiles).

Accepted components:
    - **MarkupNode**: used as is
    - **None**: contributes nothing
    - **callable**: zero-argument thunk, called exactly once
    - **list / tuple / generator**: components flattened in order
    - **when(...)**: conditional, only the taken branch is evaluated
    - **each(...)**: loop, results flattened in source order

Aggregation rules:
    - block_join: wrap components under one node (or a fragment)
    - conditional_select: keep the node of the branch taken by an if/else
    - optional_collapse: turn a missing node into the empty fragment
    - array_flatten: concatenate node sequences produced by a loop

Example:
    >>> from genro_markuptree import MarkupNode, Composer, when, each
    >>> logged_in = False
    >>> block = Composer('html').compose(
    ...     MarkupNode('h1', text='Welcome!'),
    ...     when(logged_in, lambda: MarkupNode('p', text='Hello again')),
    ...     each(['a', 'b'], lambda x: MarkupNode('li', text=x)),
    ... )
    >>> str(block)
    '<h1>Welcome!</h1><li>a</li><li>b</li>'
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator, Mapping

from .exceptions import InvalidComponentError, UnsupportedOperationError
from .node import EMPTY, MarkupNode, fragment
from .profiles import (
    ARRAY,
    BLOCK,
    EITHER,
    EXPRESSION,
    HTML,
    OPTIONAL,
    AggregationProfile,
    get_profile,
)

logger = logging.getLogger(__name__)

_MISSING = object()


class Conditional:
    """An if (or if/else) component created by when()."""

    __slots__ = ('condition', 'then', 'otherwise')

    def __init__(self, condition: Any, then: Any, otherwise: Any = _MISSING) -> None:
        self.condition = condition
        self.then = then
        self.otherwise = otherwise

    @property
    def has_else(self) -> bool:
        """True if an else branch was given."""
        return self.otherwise is not _MISSING

    def holds(self) -> bool:
        """Evaluate the condition. A callable condition is called once."""
        condition = self.condition
        if callable(condition):
            condition = condition()
        return bool(condition)

    def __repr__(self) -> str:
        kind = 'if/else' if self.has_else else 'if'
        return f"Conditional({kind}, condition={self.condition!r})"


class Loop:
    """A for-each component created by each()."""

    __slots__ = ('iterable', 'func')

    def __init__(self, iterable: Iterable[Any], func: Callable[[Any], Any] | None = None) -> None:
        self.iterable = iterable
        self.func = func

    def __repr__(self) -> str:
        return f"Loop({self.iterable!r})"


def when(condition: Any, then: Any, otherwise: Any = _MISSING) -> Conditional:
    """Include `then` if condition holds, else `otherwise` when given.

    The condition can be a plain value or a zero-argument callable, called
    once at compose time. Branches can be nodes, node lists or zero-argument
    callables. Only the taken branch is evaluated.

    Example:
        >>> when(user, lambda: h.p(f'Hi {user.name}'), h.p('Please log in'))
    """
    return Conditional(condition, then, otherwise)


def each(iterable: Iterable[Any], func: Callable[[Any], Any] | None = None) -> Loop:
    """Map func over iterable, each call yielding zero or more nodes.

    Without func, the items themselves must be components.

    Example:
        >>> each(['Item 1', 'Item 2'], h.li)
    """
    return Loop(iterable, func)


def _splice(nodes: Iterable[MarkupNode]) -> Iterator[MarkupNode]:
    """Yield nodes, replacing text-less fragments by their children."""
    for node in nodes:
        if node.is_fragment and node.text is None:
            yield from _splice(node.children)
        else:
            yield node


# ==================== Aggregation rules ====================

def block_join(
    components: Iterable[MarkupNode],
    tag: str | None = None,
    attributes: Mapping[str, Any] | None = None,
) -> MarkupNode:
    """Wrap components as children of a single node.

    Fragment components are unwrapped, so their children become direct
    children of the result and empty fragments vanish.

    Args:
        components: Nodes in declaration order.
        tag: Wrapping tag. None or '' produces a fragment.
        attributes: Attributes of the wrapping node.

    Returns:
        The wrapping node.
    """
    return MarkupNode(tag or '', attributes, _splice(components))


def conditional_select(branch: MarkupNode) -> MarkupNode:
    """Return the node produced by the branch an if/else took."""
    return branch


def optional_collapse(value: MarkupNode | None) -> MarkupNode:
    """Return value, or the empty fragment if the condition did not hold."""
    return EMPTY if value is None else value


def array_flatten(sequences: Iterable[Iterable[MarkupNode]]) -> list[MarkupNode]:
    """Concatenate node sequences, preserving source order.

    Exceptions raised while iterating propagate unchanged.
    """
    return [node for sequence in sequences for node in sequence]


def build_expression(value: MarkupNode | Iterable[MarkupNode] | None) -> list[MarkupNode]:
    """Normalize a single expression into a node list.

    Raises:
        InvalidComponentError: If value is neither None, a node nor a
            sequence of nodes.
    """
    if value is None:
        return []
    if isinstance(value, MarkupNode):
        return [value]
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        raise InvalidComponentError(
            f"Expected a MarkupNode or a sequence of nodes, got {type(value).__name__}"
        )
    nodes = list(value)
    for node in nodes:
        if not isinstance(node, MarkupNode):
            raise InvalidComponentError(
                f"Expected a MarkupNode in sequence, got {type(node).__name__}"
            )
    return nodes


# ==================== Engine ====================

class Composer:
    """Reduce blocks of components according to an AggregationProfile.

    One Composer serves any number of builds: it keeps no state besides
    its profile.

    Usage:
        >>> Composer('form').compose(h.input('text', 'user'), attributes={'id': 'login'})
        >>> Composer('list').compose(each(names, h.li))  # -> list of nodes
    """

    __slots__ = ('profile',)

    def __init__(self, profile: AggregationProfile | str = HTML) -> None:
        """Initialize a Composer.

        Args:
            profile: An AggregationProfile or the name of a registered one.
        """
        if isinstance(profile, str):
            profile = get_profile(profile)
        self.profile = profile

    def __repr__(self) -> str:
        return f"Composer({self.profile.name!r})"

    def compose(
        self,
        *components: Any,
        attributes: Mapping[str, Any] | None = None,
    ) -> MarkupNode | list[MarkupNode]:
        """Reduce a block of components.

        Args:
            *components: Block components in declaration order.
            attributes: Attributes for the wrapping node. Not allowed for
                sequence profiles, which have no wrapping node.

        Returns:
            A MarkupNode, or a list of nodes for sequence profiles.

        Raises:
            InvalidComponentError: If a component cannot be normalized.
            UnsupportedOperationError: If the profile does not enable
                'block', or a component needs an aggregation rule the
                profile does not enable.
        """
        self._require(BLOCK, 'blocks')

        nodes: list[MarkupNode] = []
        for component in components:
            nodes.extend(self._normalize(component))

        logger.debug(
            "Composing %d node(s) with profile '%s'", len(nodes), self.profile.name
        )

        if self.profile.sequence:
            if attributes:
                raise UnsupportedOperationError(
                    f"Profile '{self.profile.name}' produces a node list "
                    "and cannot carry attributes"
                )
            return list(_splice(nodes))

        return block_join(nodes, tag=self.profile.tag, attributes=attributes)

    def _require(self, operation: str, what: str) -> None:
        if not self.profile.supports(operation):
            raise UnsupportedOperationError(
                f"Profile '{self.profile.name}' does not support {what}"
            )

    def _normalize(self, component: Any) -> list[MarkupNode]:
        """Turn one component into a flat list of nodes."""
        if component is None:
            return []

        if isinstance(component, MarkupNode):
            self._require(EXPRESSION, 'node expressions')
            return [component]

        if isinstance(component, Conditional):
            return [self._conditional(component)]

        if isinstance(component, Loop):
            self._require(ARRAY, 'loops')
            return array_flatten(
                self._loop_item(component, item)
                for item in component.iterable
            )

        if isinstance(component, (str, bytes)):
            raise InvalidComponentError(
                f"Text is not a component: wrap {component!r} in an element"
            )

        if callable(component):
            return self._normalize(component())

        if isinstance(component, Iterable):
            if not self.profile.sequence:
                self._require(ARRAY, 'node sequences')
            return array_flatten(self._normalize(item) for item in component)

        raise InvalidComponentError(
            f"Cannot use {type(component).__name__} as a markup component"
        )

    def _loop_item(self, loop: Loop, item: Any) -> list[MarkupNode]:
        value = loop.func(item) if loop.func is not None else item
        return self._normalize(value)

    def _conditional(self, directive: Conditional) -> MarkupNode:
        if directive.has_else:
            self._require(EITHER, 'if/else')
            taken = directive.then if directive.holds() else directive.otherwise
            return conditional_select(fragment(*self._normalize(taken)))

        self._require(OPTIONAL, 'if without else')
        value = fragment(*self._normalize(directive.then)) if directive.holds() else None
        return optional_collapse(value)


def compose(
    *components: Any,
    profile: AggregationProfile | str = HTML,
    attributes: Mapping[str, Any] | None = None,
) -> MarkupNode | list[MarkupNode]:
    """Reduce a block of components with the given profile.

    Shortcut for Composer(profile).compose(*components, attributes=...).
    """
    return Composer(profile).compose(*components, attributes=attributes)
