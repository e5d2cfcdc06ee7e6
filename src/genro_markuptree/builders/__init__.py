# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Builders for markup trees - base class and HTML implementation."""

from .base import BuilderBase, attr_name
from .decorators import element
from .html import HTML5_ELEMENTS, HtmlBuilder, HtmlPage, h

__all__ = [
    'BuilderBase',
    'attr_name',
    'element',
    'HTML5_ELEMENTS',
    'HtmlBuilder',
    'HtmlPage',
    'h',
]
