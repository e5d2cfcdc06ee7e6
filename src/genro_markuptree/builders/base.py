# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""BuilderBase - Abstract base class for markup builders."""

from __future__ import annotations

from abc import ABC
from functools import partial
from typing import Any, Mapping

from ..composition import Composer, block_join
from ..exceptions import UnsupportedOperationError
from ..node import MarkupNode
from ..profiles import HTML, AggregationProfile, get_profile


def attr_name(key: str) -> str:
    """Convert a Python keyword into a markup attribute name.

    A trailing underscore is dropped and inner underscores become dashes.

    Examples:
        >>> attr_name('class_')
        'class'
        >>> attr_name('data_id')
        'data-id'
    """
    return key.rstrip('_').replace('_', '-')


class BuilderBase(ABC):
    """Abstract base class for markup builders.

    A builder provides domain-specific factory methods returning
    MarkupNode values. Use the @element decorator to define tags:

    1. Single tag (method name used):
        @element()
        def section(self, *content, **attr):
            return self.child('section', *content, **attr)

    2. Multiple tags pointing to same method:
        @element(tags='h1, h2, h3')
        def heading(self, tag, text, **attr):
            return self.child(tag, text, **attr)

    3. A different aggregation profile for the content block:
        @element(profile='form')
        def form(self, *content, **attr):
            return self.child('form', *content, **attr)

    The class automatically builds a _element_tags dict mapping
    tag names to methods via __init_subclass__.

    Usage:
        >>> b = MyBuilder()
        >>> b.h2('Title')  # calls heading('h2', 'Title')
    """

    # Class-level dict mapping tag -> method name
    _element_tags: dict[str, str] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Build the _element_tags dict from @element decorated methods."""
        super().__init_subclass__(**kwargs)

        # Start with parent's tags if any
        cls._element_tags = {}
        for base in cls.__mro__[1:]:
            if hasattr(base, '_element_tags'):
                cls._element_tags.update(base._element_tags)
                break

        # Scan class methods for @element decorated ones
        for name, method in cls.__dict__.items():
            if name.startswith('_'):
                continue
            if not callable(method) or not getattr(method, '_is_element', False):
                continue

            element_tags = getattr(method, '_element_tags', None)
            if element_tags is None:
                # No explicit tags, use method name
                cls._element_tags[name] = name
            else:
                for tag in element_tags:
                    cls._element_tags[tag] = name

    def __init__(self, profile: AggregationProfile | str = HTML) -> None:
        """Initialize the builder.

        Args:
            profile: Default aggregation profile for element content,
                used when the element method does not declare one. It
                must produce fragments (no wrapping tag, not a sequence).

        Raises:
            ValueError: If the profile has a wrapping tag or is a
                sequence profile.
        """
        if isinstance(profile, str):
            profile = get_profile(profile)
        if profile.tag or profile.sequence:
            raise ValueError(
                f"Default profile '{profile.name}' must produce fragments"
            )
        self._profile = profile

    @property
    def profile(self) -> AggregationProfile:
        """Default aggregation profile."""
        return self._profile

    def __getattr__(self, name: str) -> Any:
        """Look up tag in _element_tags and return the bound method."""
        if name.startswith('_'):
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )

        element_tags = getattr(type(self), '_element_tags', {})
        if name in element_tags:
            method_name = element_tags[name]
            method = getattr(self, method_name)
            if method_name == name:
                return method
            return partial(method, name)

        raise AttributeError(
            f"'{type(self).__name__}' has no element '{name}'"
        )

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(type(self)._element_tags))

    @property
    def tags(self) -> frozenset[str]:
        """All tags this builder provides a method for."""
        return frozenset(type(self)._element_tags)

    def _profile_for(self, tag: str) -> AggregationProfile:
        """Return the aggregation profile used for a tag's content."""
        method_name = type(self)._element_tags.get(tag)
        if method_name is not None:
            method = getattr(type(self), method_name, None)
            profile = getattr(method, '_element_profile', None)
            if profile is not None:
                return profile
        return self._profile

    def merge_attributes(
        self,
        attributes: Mapping[str, Any] | None = None,
        **attr: Any
    ) -> dict[str, Any]:
        """Merge an attribute dict with keyword attributes.

        The dict comes first and its keys are kept verbatim; keyword names
        go through attr_name(). None values are left out.
        """
        final_attr: dict[str, Any] = {}
        if attributes:
            final_attr.update(
                (k, v) for k, v in attributes.items() if v is not None
            )
        for key, value in attr.items():
            if value is not None:
                final_attr[attr_name(key)] = value
        return final_attr

    def leaf(
        self,
        tag: str,
        text: str | None = None,
        attributes: Mapping[str, Any] | None = None,
        **attr: Any
    ) -> MarkupNode:
        """Create a childless element, with optional text."""
        return MarkupNode(tag, self.merge_attributes(attributes, **attr), text=text)

    def child(
        self,
        tag: str,
        *content: Any,
        text: str | None = None,
        attributes: Mapping[str, Any] | None = None,
        profile: AggregationProfile | str | None = None,
        **attr: Any
    ) -> MarkupNode | list[MarkupNode]:
        """Create an element whose content is a block of components.

        Args:
            tag: The element tag. Ignored when the profile has its own
                wrapping tag.
            *content: Block components, or a single string used as text.
            text: Explicit text. Takes precedence over content when
                rendering.
            attributes: Dict of attributes (merged with **attr).
            profile: Aggregation profile for the content block. If None,
                the profile declared by the tag's @element method, or the
                builder default.
            **attr: Node attributes as kwargs.

        Returns:
            The element node, or a node list for sequence profiles.

        Examples:
            >>> b.child('div', b.p('Hello'), id='main')
            >>> b.child('li', 'Item 1')
            >>> b.child('nav', *links, profile='list')  # -> list of nodes
        """
        if len(content) == 1 and isinstance(content[0], str) and text is None:
            text, content = content[0], ()

        if profile is None:
            profile = self._profile_for(tag)
        composer = Composer(profile)
        final_attr = self.merge_attributes(attributes, **attr)

        if composer.profile.sequence:
            if text is not None:
                raise UnsupportedOperationError(
                    f"Profile '{composer.profile.name}' produces a node list "
                    "and cannot carry text"
                )
            return composer.compose(*content, attributes=final_attr)

        if composer.profile.tag:
            node = composer.compose(*content, attributes=final_attr)
        else:
            node = block_join([composer.compose(*content)], tag=tag, attributes=final_attr)

        if text is not None:
            node = node.with_text(text)
        return node
