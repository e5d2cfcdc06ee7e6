# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Aggregation profiles - configuration values for the composition engine.

A profile decides how a block of components is reduced:

- tag: wrapping element name, or None for a fragment
- operations: which aggregation rules the block accepts. 'block' is needed
  to reduce a block at all, 'expression' to accept bare nodes
- sequence: if True the block reduces to a list of nodes instead of a node

Built-in profiles:
    - **html**: generic tree, fragment result, if, if/else and loops
    - **blog_post**: wraps in <div>, if/else, plain expressions
    - **form**: wraps in <form>, plain expressions only
    - **list**: node list result, plain expressions and loops

Example:
    >>> from genro_markuptree.profiles import (
    ...     ARRAY, BLOCK, EXPRESSION, AggregationProfile, get_profile,
    ...     register_profile)
    >>> register_profile(AggregationProfile(
    ...     'nav', tag='nav', operations=frozenset({BLOCK, EXPRESSION, ARRAY})))
    >>> get_profile('nav').tag
    'nav'
"""

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import UnknownProfileError

BLOCK = 'block'
EXPRESSION = 'expression'
EITHER = 'either'
OPTIONAL = 'optional'
ARRAY = 'array'

OPERATIONS = frozenset({BLOCK, EXPRESSION, EITHER, OPTIONAL, ARRAY})


@dataclass(frozen=True)
class AggregationProfile:
    """How the composition engine reduces one block."""

    name: str
    tag: str | None = None
    operations: frozenset[str] = frozenset({BLOCK})
    sequence: bool = False

    def __post_init__(self) -> None:
        unknown = set(self.operations) - OPERATIONS
        if unknown:
            raise ValueError(
                f"Unknown operations for profile '{self.name}': "
                f"{', '.join(sorted(unknown))}"
            )

    def supports(self, operation: str) -> bool:
        """True if the profile enables the given operation."""
        return operation in self.operations


HTML = AggregationProfile(
    'html', operations=frozenset({BLOCK, EXPRESSION, EITHER, OPTIONAL, ARRAY})
)
BLOG_POST = AggregationProfile(
    'blog_post', tag='div', operations=frozenset({BLOCK, EXPRESSION, EITHER})
)
FORM = AggregationProfile(
    'form', tag='form', operations=frozenset({BLOCK, EXPRESSION})
)
LIST = AggregationProfile(
    'list', operations=frozenset({BLOCK, EXPRESSION, ARRAY}), sequence=True
)

_registry: dict[str, AggregationProfile] = {
    profile.name: profile for profile in (HTML, BLOG_POST, FORM, LIST)
}


def get_profile(name: str) -> AggregationProfile:
    """Return the registered profile with the given name.

    Raises:
        UnknownProfileError: If no profile has that name.
    """
    try:
        return _registry[name]
    except KeyError:
        raise UnknownProfileError(
            f"Unknown profile '{name}'. "
            f"Available: {', '.join(sorted(_registry))}"
        ) from None


def register_profile(profile: AggregationProfile) -> AggregationProfile:
    """Register a profile by name, replacing any previous one."""
    _registry[profile.name] = profile
    return profile
