# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Decorators for builder element methods."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Iterable

from ..profiles import AggregationProfile, get_profile


def _parse_tags(tags: str | Iterable[str]) -> tuple[str, ...]:
    """Parse a tag list given as 'a, b, c' or as an iterable of names.

    Examples:
        >>> _parse_tags('h1, h2,h3')
        ('h1', 'h2', 'h3')
        >>> _parse_tags(['ul', 'ol'])
        ('ul', 'ol')
    """
    if isinstance(tags, str):
        tags = tags.split(',')
    parsed = tuple(t.strip() for t in tags if t.strip())
    if not parsed:
        raise ValueError("Empty tag specification")
    return parsed


def element(
    tags: str | Iterable[str] | None = None,
    profile: AggregationProfile | str | None = None,
) -> Callable:
    """Decorator marking a builder method as an element factory.

    Without tags, the method name is the element tag. With tags, the
    method serves every listed tag and receives it as first argument.

    Args:
        tags: Comma-separated string or iterable of tag names.
        profile: Aggregation profile (or its name) used for the element
            content block. None means the builder default.

    Example:
        >>> class MyBuilder(BuilderBase):
        ...     @element(tags='h1, h2, h3')
        ...     def heading(self, tag, text, **attr):
        ...         return self.child(tag, text, **attr)
        ...
        ...     @element(profile='form')
        ...     def form(self, *content, **attr):
        ...         return self.child('form', *content, **attr)
    """
    parsed_tags = _parse_tags(tags) if tags is not None else None
    if isinstance(profile, str):
        profile = get_profile(profile)

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            return func(*args, **kwargs)

        # _element_tags: tags served by the method (None: method name)
        # _element_profile: aggregation profile for the content block
        wrapper._element_tags = parsed_tags
        wrapper._element_profile = profile
        wrapper._is_element = True

        return wrapper

    return decorator
