# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-MarkupTree - Declarative builders for immutable markup trees.

A lightweight, zero-dependency library that folds nested blocks of
components (nodes, conditionals, loops) into immutable MarkupNode trees
and serializes them to HTML-like text.

Example:
    >>> from genro_markuptree import h, when, each, serialize
    >>> serialize(h.ul(each(['X', 'Y', 'Z'], h.li)))
    '<ul><li>X</li><li>Y</li><li>Z</li></ul>'
"""

__version__ = "0.1.0"

from .builders import BuilderBase, HtmlBuilder, HtmlPage, element, h
from .composition import (
    Composer,
    array_flatten,
    block_join,
    build_expression,
    compose,
    conditional_select,
    each,
    optional_collapse,
    when,
)
from .exceptions import (
    InvalidAttributeError,
    InvalidComponentError,
    MarkupTreeError,
    UnknownProfileError,
    UnsupportedOperationError,
)
from .node import EMPTY, MarkupNode, fragment
from .profiles import (
    BLOG_POST,
    FORM,
    HTML,
    LIST,
    AggregationProfile,
    get_profile,
    register_profile,
)
from .serializer import render, serialize

__all__ = [
    # Node model
    "MarkupNode",
    "fragment",
    "EMPTY",
    # Composition
    "Composer",
    "compose",
    "when",
    "each",
    "block_join",
    "conditional_select",
    "optional_collapse",
    "array_flatten",
    "build_expression",
    # Profiles
    "AggregationProfile",
    "HTML",
    "BLOG_POST",
    "FORM",
    "LIST",
    "get_profile",
    "register_profile",
    # Serialization
    "serialize",
    "render",
    # Builders
    "BuilderBase",
    "HtmlBuilder",
    "HtmlPage",
    "element",
    "h",
    # Exceptions
    "MarkupTreeError",
    "InvalidAttributeError",
    "InvalidComponentError",
    "UnsupportedOperationError",
    "UnknownProfileError",
]
