# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""HtmlBuilder - HTML element builder.

This module provides builders for generating HTML documents as immutable
MarkupNode trees. Content blocks are reduced by the composition engine, so
conditionals and loops can be written inline.

Example:
    Creating an HTML document::

        from genro_markuptree import h, when, each

        page = h.html(
            h.head(h.title('My Page')),
            h.body(
                h.h1('Welcome!'),
                when(logged_in,
                     h.p('You are logged in.'),
                     h.p('Please log in to access more content.')),
                h.ul(each(['Item 1', 'Item 2'], h.li)),
            ),
        )
        str(page)

References:
    - WHATWG HTML Standard: https://html.spec.whatwg.org/
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..node import MarkupNode
from ..profiles import BLOG_POST, FORM, LIST
from ..serializer import serialize
from .base import BuilderBase
from .decorators import element

HTML5_ELEMENTS = frozenset({
    'a', 'abbr', 'address', 'area', 'article', 'aside', 'audio', 'b', 'base',
    'bdi', 'bdo', 'blockquote', 'body', 'br', 'button', 'canvas', 'caption',
    'cite', 'code', 'col', 'colgroup', 'data', 'datalist', 'dd', 'del',
    'details', 'dfn', 'dialog', 'div', 'dl', 'dt', 'em', 'embed', 'fieldset',
    'figcaption', 'figure', 'footer', 'form', 'h1', 'h2', 'h3', 'h4', 'h5',
    'h6', 'head', 'header', 'hgroup', 'hr', 'html', 'i', 'iframe', 'img',
    'input', 'ins', 'kbd', 'label', 'legend', 'li', 'link', 'main', 'map',
    'mark', 'menu', 'meta', 'meter', 'nav', 'noscript', 'object', 'ol',
    'optgroup', 'option', 'output', 'p', 'picture', 'pre', 'progress', 'q',
    'rp', 'rt', 'ruby', 's', 'samp', 'script', 'search', 'section', 'select',
    'slot', 'small', 'source', 'span', 'strong', 'style', 'sub', 'summary',
    'sup', 'table', 'tbody', 'td', 'template', 'textarea', 'tfoot', 'th',
    'thead', 'time', 'title', 'tr', 'track', 'u', 'ul', 'var', 'video', 'wbr',
})


class HtmlBuilder(BuilderBase):
    """Builder for HTML elements.

    Every HTML5 tag is available as a method through __getattr__. Its
    arguments are the content block (or a single string used as text)
    followed by keyword attributes:

        >>> h = HtmlBuilder()
        >>> h.div(h.p('Hello'), id='main', class_='container')
        >>> h.li('Item 1')

    A few tags have dedicated signatures (img, input, button, label,
    textarea, a) and some use a specific aggregation profile for their
    content (form, blog_post, list_items).
    """

    @element(tags=HTML5_ELEMENTS)
    def html_element(self, tag: str, *content: Any, **attr: Any) -> MarkupNode:
        """Create any HTML element: content block or text, plus attributes."""
        return self.child(tag, *content, **attr)

    def __getattr__(self, name: str) -> Any:
        try:
            return super().__getattr__(name)
        except AttributeError:
            if name.startswith('_'):
                raise
            raise AttributeError(f"'{name}' is not a valid HTML tag") from None

    @element()
    def img(self, src: str, alt: str, **attr: Any) -> MarkupNode:
        return self.leaf('img', src=src, alt=alt, **attr)

    @element()
    def input(
        self, type: str, name: str, value: str | None = None, **attr: Any
    ) -> MarkupNode:
        """Create an <input>. The value attribute is omitted when None."""
        return self.leaf('input', type=type, name=name, value=value, **attr)

    @element()
    def button(self, text: str | None = None, **attr: Any) -> MarkupNode:
        return self.leaf('button', text, **attr)

    @element()
    def label(self, for_: str, text: str, **attr: Any) -> MarkupNode:
        return self.leaf('label', text, for_=for_, **attr)

    @element()
    def textarea(self, name: str, text: str | None = None, **attr: Any) -> MarkupNode:
        return self.leaf('textarea', text, name=name, **attr)

    @element()
    def a(
        self,
        href: str,
        text: str | None = None,
        *content: Any,
        attributes: Mapping[str, Any] | None = None,
        **attr: Any
    ) -> MarkupNode:
        """Create an <a> link.

        Extra attributes come first, href last. When both text and content
        are given the text is rendered and the content is not.
        """
        final_attr = self.merge_attributes(attributes, **attr)
        final_attr.pop('href', None)
        final_attr['href'] = href
        return self.child('a', *content, text=text, attributes=final_attr)

    @element(profile=FORM)
    def form(self, *content: Any, **attr: Any) -> MarkupNode:
        """Create a <form>. Its block accepts plain expressions only."""
        return self.child('form', *content, **attr)

    @element(profile=BLOG_POST)
    def blog_post(self, *content: Any, **attr: Any) -> MarkupNode:
        """Create a <div> post body. Its block accepts if/else but no loops."""
        return self.child('blog_post', *content, **attr)

    @element(profile=LIST)
    def list_items(self, *content: Any) -> list[MarkupNode]:
        """Reduce a block to a flat list of nodes, to pass to ul/ol."""
        return self.child('list_items', *content)

    def items(
        self, values: Iterable[str], tag: str = 'li', **attr: Any
    ) -> list[MarkupNode]:
        """Map strings into text elements (<li> by default)."""
        return [self.leaf(tag, value, **attr) for value in values]


class HtmlPage:
    """HTML page with separate head and body blocks.

    Components are collected unevaluated and composed on each to_node()
    call, so thunks run once per build.

    Usage:
        >>> page = HtmlPage(title='My Page')
        >>> page.head(page.builder.meta(charset='utf-8'))
        >>> page.body(page.builder.h1('Welcome!'))
        >>> html = page.to_html()
    """

    def __init__(self, title: str | None = None, builder: HtmlBuilder | None = None):
        """Initialize the page.

        Args:
            title: Optional <title> added first to the head.
            builder: HtmlBuilder to use (a new one by default).
        """
        self.builder = builder if builder is not None else HtmlBuilder()
        self._head: list[Any] = []
        self._body: list[Any] = []
        if title is not None:
            self._head.append(self.builder.title(title))

    def head(self, *components: Any) -> HtmlPage:
        """Append components to the head block."""
        self._head.extend(components)
        return self

    def body(self, *components: Any) -> HtmlPage:
        """Append components to the body block."""
        self._body.extend(components)
        return self

    def to_node(self) -> MarkupNode:
        """Build the <html> tree."""
        b = self.builder
        return b.html(b.head(*self._head), b.body(*self._body))

    def to_html(self, doctype: bool = False) -> str:
        """Serialize the page, optionally prefixed by <!DOCTYPE html>."""
        html_content = serialize(self.to_node())
        if doctype:
            return f"<!DOCTYPE html>{html_content}"
        return html_content


h = HtmlBuilder()
