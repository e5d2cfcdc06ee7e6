# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Serializer - render MarkupNode trees as markup text.

Rendering rules:
    - fragments render their children only, with no envelope
    - a node with text renders ``<tag attrs>text</tag>`` and skips children
    - other nodes render ``<tag attrs>`` + children + ``</tag>``
    - attributes keep insertion order

Neither text nor attribute values are escaped: callers must pre-escape
values that may contain ``"`` or ``<``. No whitespace is added between tags.

Example:
    >>> serialize(MarkupNode('p', {'class': 'lead'}, text='Hello'))
    '<p class="lead">Hello</p>'
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from .node import MarkupNode

logger = logging.getLogger(__name__)


def render_attributes(attributes: Mapping[str, str]) -> str:
    """Render attributes as ' key="value" ...', or '' if there are none."""
    if not attributes:
        return ''
    attrs = ' '.join(f'{k}="{v}"' for k, v in attributes.items())
    return f' {attrs}'


def _node_to_markup(node: MarkupNode) -> str:
    """Recursively convert a node to markup."""
    if node.is_fragment:
        if node.text is not None:
            return node.text
        return ''.join(_node_to_markup(child) for child in node.children)

    tag = node.tag
    attrs_str = render_attributes(node.attributes)

    if node.text is not None:
        if node.children:
            logger.debug(
                "<%s> has text and %d child(ren): children are not rendered",
                tag, len(node.children),
            )
        return f"<{tag}{attrs_str}>{node.text}</{tag}>"

    children = ''.join(_node_to_markup(child) for child in node.children)
    return f"<{tag}{attrs_str}>{children}</{tag}>"


def serialize(node: MarkupNode | Iterable[MarkupNode]) -> str:
    """Serialize a node, or a sequence of nodes, to markup text.

    Args:
        node: A MarkupNode or an iterable of nodes rendered one after
            the other.

    Returns:
        The markup string. An empty fragment renders as ''.
    """
    if isinstance(node, MarkupNode):
        return _node_to_markup(node)
    return ''.join(_node_to_markup(n) for n in node)


render = serialize
