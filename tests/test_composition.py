# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for the composition engine and aggregation profiles."""

import pytest

from genro_markuptree import (
    BLOG_POST,
    EMPTY,
    FORM,
    HTML,
    LIST,
    AggregationProfile,
    Composer,
    InvalidComponentError,
    MarkupNode,
    UnknownProfileError,
    UnsupportedOperationError,
    array_flatten,
    block_join,
    build_expression,
    compose,
    conditional_select,
    each,
    fragment,
    get_profile,
    optional_collapse,
    register_profile,
    serialize,
    when,
)
import genro_markuptree.profiles as profiles
from genro_markuptree.profiles import ARRAY, BLOCK, EITHER, EXPRESSION, OPTIONAL


def li(text):
    return MarkupNode('li', text=text)


def p(text):
    return MarkupNode('p', text=text)


class TestBlockJoin:
    """Tests for block_join."""

    def test_wraps_with_tag(self):
        """Test components become children of the tagged node."""
        node = block_join([li('a'), li('b')], tag='ul')
        assert node.tag == 'ul'
        assert node.children == (li('a'), li('b'))

    def test_fragment_without_tag(self):
        """Test no tag produces a fragment."""
        node = block_join([li('a')])
        assert node.is_fragment
        assert node.children == (li('a'),)

    def test_attributes(self):
        """Test attributes are set on the wrapping node."""
        node = block_join([], tag='form', attributes={'id': 'f'})
        assert dict(node.attributes) == {'id': 'f'}

    def test_splices_fragments(self):
        """Test fragment components are unwrapped."""
        node = block_join([fragment(li('a'), fragment(li('b'))), EMPTY, li('c')], tag='ul')
        assert node.children == (li('a'), li('b'), li('c'))

    def test_keeps_text_fragments(self):
        """Test a fragment carrying text is kept as a child."""
        text = MarkupNode(text='raw')
        node = block_join([text], tag='p')
        assert node.children == (text,)


class TestConditionalRules:
    """Tests for conditional_select and optional_collapse."""

    def test_conditional_select_returns_branch(self):
        """Test conditional_select returns the branch node."""
        node = p('x')
        assert conditional_select(node) is node

    def test_optional_collapse_present(self):
        """Test optional_collapse keeps a present node."""
        node = p('x')
        assert optional_collapse(node) is node

    def test_optional_collapse_absent(self):
        """Test optional_collapse turns None into the empty fragment."""
        assert optional_collapse(None) == EMPTY


class TestArrayFlatten:
    """Tests for array_flatten and build_expression."""

    def test_concatenates_in_order(self):
        """Test sequences are concatenated in source order."""
        result = array_flatten([[li('a')], [], [li('b'), li('c')]])
        assert result == [li('a'), li('b'), li('c')]

    def test_generator_error_propagates(self):
        """Test an error raised while producing elements propagates."""
        def produce():
            yield [li('a')]
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            array_flatten(produce())

    def test_build_expression(self):
        """Test normalization of a single expression."""
        assert build_expression(None) == []
        assert build_expression(li('a')) == [li('a')]
        assert build_expression((li('a'), li('b'))) == [li('a'), li('b')]

    def test_build_expression_rejects_text(self):
        """Test strings are not expressions."""
        with pytest.raises(InvalidComponentError):
            build_expression('text')

    def test_build_expression_rejects_foreign_items(self):
        """Test sequences must only contain nodes."""
        with pytest.raises(InvalidComponentError):
            build_expression([li('a'), 42])


class TestComposer:
    """Tests for Composer with the generic html profile."""

    def test_plain_block(self):
        """Test a plain block produces a fragment of its components."""
        node = Composer().compose(p('a'), p('b'))
        assert node.is_fragment
        assert node.children == (p('a'), p('b'))

    def test_profile_by_name(self):
        """Test profiles can be given by name."""
        assert Composer('form').profile is FORM

    def test_unknown_profile(self):
        """Test unknown profile names raise."""
        with pytest.raises(UnknownProfileError):
            Composer('nope')

    def test_none_contributes_nothing(self):
        """Test None components are skipped."""
        node = Composer().compose(None, p('a'), None)
        assert node.children == (p('a'),)

    def test_thunk_called_once(self):
        """Test thunks are evaluated exactly once."""
        calls = []

        def thunk():
            calls.append(1)
            return p('a')

        node = Composer().compose(thunk)
        assert node.children == (p('a'),)
        assert calls == [1]

    def test_nested_sequences(self):
        """Test lists and generators are flattened in order."""
        node = Composer().compose([p('a'), [p('b')]], (p(x) for x in 'cd'))
        assert [c.text for c in node.children] == ['a', 'b', 'c', 'd']

    def test_if_true(self):
        """Test when() without else includes the node if condition holds."""
        node = Composer().compose(when(True, p('yes')))
        assert node.children == (p('yes'),)

    def test_if_false_contributes_nothing(self):
        """Test when() without else and a false condition adds no child."""
        node = Composer().compose(p('a'), when(False, p('secret')), p('b'))
        assert node.children == (p('a'), p('b'))

    def test_if_else(self):
        """Test when() with else picks the taken branch."""
        assert Composer().compose(when(True, p('a'), p('b'))).children == (p('a'),)
        assert Composer().compose(when(False, p('a'), p('b'))).children == (p('b'),)

    def test_untaken_branch_not_evaluated(self):
        """Test only the taken branch thunk runs."""
        def fail():
            raise AssertionError("not taken branch evaluated")

        node = Composer().compose(
            when(False, fail, lambda: p('else')),
            when(True, lambda: p('then'), fail),
            when(False, fail),
        )
        assert node.children == (p('else'), p('then'))

    def test_callable_condition(self):
        """Test a callable condition is evaluated, not its truthiness."""
        node = Composer().compose(p('a'), when(lambda: False, p('secret')))
        assert node.children == (p('a'),)
        node = Composer().compose(when(lambda: False, p('a'), p('b')))
        assert node.children == (p('b'),)
        node = Composer().compose(when(lambda: True, p('a')))
        assert node.children == (p('a'),)

    def test_callable_condition_called_once(self):
        """Test a callable condition is called once per compose."""
        calls = []

        def logged_in():
            calls.append(1)
            return True

        Composer().compose(when(logged_in, p('a'), p('b')))
        assert calls == [1]

    def test_else_none(self):
        """Test an explicit None else branch contributes nothing."""
        node = Composer().compose(when(False, p('a'), None))
        assert node.children == ()

    def test_branch_with_several_nodes(self):
        """Test a branch can produce several nodes."""
        node = Composer().compose(when(True, [p('a'), p('b')]))
        assert node.children == (p('a'), p('b'))

    def test_each(self):
        """Test each() maps a function and flattens the results."""
        node = Composer().compose(each(['a', 'b'], li))
        assert node.children == (li('a'), li('b'))

    def test_each_multiple_nodes_per_item(self):
        """Test each() items may yield zero or more nodes."""
        node = Composer().compose(
            each([0, 1, 2], lambda n: [li(str(n))] * n)
        )
        assert [c.text for c in node.children] == ['1', '2', '2']

    def test_each_without_func(self):
        """Test each() over components."""
        node = Composer().compose(each([p('a'), None, p('b')]))
        assert node.children == (p('a'), p('b'))

    def test_each_error_propagates(self):
        """Test an error in the loop function aborts the build."""
        def explode(x):
            if x == 'b':
                raise ValueError("bad item")
            return li(x)

        with pytest.raises(ValueError, match="bad item"):
            Composer().compose(p('before'), each(['a', 'b', 'c'], explode))

    def test_thunk_error_propagates(self):
        """Test an error in a thunk is not wrapped."""
        def broken():
            raise KeyError('missing')

        with pytest.raises(KeyError):
            Composer().compose(broken)

    def test_text_component_rejected(self):
        """Test bare strings raise InvalidComponentError."""
        with pytest.raises(InvalidComponentError, match="Text is not a component"):
            Composer().compose('hello')

    def test_unknown_component_rejected(self):
        """Test non-node objects raise InvalidComponentError."""
        with pytest.raises(InvalidComponentError):
            Composer().compose(42)

    def test_compose_shortcut(self):
        """Test module-level compose()."""
        node = compose(p('a'), profile='form', attributes={'id': 'f'})
        assert node.tag == 'form'
        assert dict(node.attributes) == {'id': 'f'}


class TestProfiles:
    """Tests for the built-in profiles."""

    def test_builtin_registry(self):
        """Test built-in profiles are registered by name."""
        assert get_profile('html') is HTML
        assert get_profile('blog_post') is BLOG_POST
        assert get_profile('form') is FORM
        assert get_profile('list') is LIST

    def test_unknown_profile_is_key_error(self):
        """Test UnknownProfileError is also a KeyError."""
        with pytest.raises(KeyError):
            get_profile('missing')

    def test_invalid_operation(self):
        """Test profiles reject unknown operation names."""
        with pytest.raises(ValueError, match="Unknown operations"):
            AggregationProfile('bad', operations=frozenset({'loop'}))

    def test_register_profile(self, monkeypatch):
        """Test custom profiles can be registered."""
        monkeypatch.setattr(profiles, '_registry', dict(profiles._registry))
        nav = register_profile(AggregationProfile(
            'nav', tag='nav', operations=frozenset({BLOCK, EXPRESSION, ARRAY})
        ))
        assert get_profile('nav') is nav
        node = Composer('nav').compose(each(['a'], li))
        assert serialize(node) == '<nav><li>a</li></nav>'

    def test_form_wraps(self):
        """Test the form profile wraps in <form>."""
        node = Composer(FORM).compose(p('a'))
        assert node.tag == 'form'
        assert node.children == (p('a'),)

    def test_form_rejects_conditionals(self):
        """Test the form profile has no if or if/else."""
        with pytest.raises(UnsupportedOperationError, match="if without else"):
            Composer(FORM).compose(when(True, p('a')))
        with pytest.raises(UnsupportedOperationError, match="if/else"):
            Composer(FORM).compose(when(True, p('a'), p('b')))

    def test_form_rejects_loops(self):
        """Test the form profile has no loops."""
        with pytest.raises(UnsupportedOperationError, match="loops"):
            Composer(FORM).compose(each(['a'], li))

    def test_blog_post_either(self):
        """Test the blog_post profile wraps in <div> and supports if/else."""
        node = Composer(BLOG_POST).compose(p('title'), when(False, p('a'), p('b')))
        assert node.tag == 'div'
        assert node.children == (p('title'), p('b'))

    def test_blog_post_rejects_bare_if(self):
        """Test the blog_post profile has no if without else."""
        with pytest.raises(UnsupportedOperationError):
            Composer(BLOG_POST).compose(when(True, p('a')))

    def test_list_returns_nodes(self):
        """Test the list profile returns a flat node list."""
        result = Composer(LIST).compose(li('a'), [li('b')], each(['c'], li))
        assert result == [li('a'), li('b'), li('c')]

    def test_list_rejects_conditionals(self):
        """Test the list profile has no conditionals."""
        with pytest.raises(UnsupportedOperationError):
            Composer(LIST).compose(when(True, li('a')))

    def test_list_rejects_attributes(self):
        """Test a sequence profile cannot carry attributes."""
        with pytest.raises(UnsupportedOperationError, match="node list"):
            Composer(LIST).compose(li('a'), attributes={'id': 'x'})

    def test_registered_profile_does_not_leak(self):
        """Test profiles registered by other tests are not left behind."""
        with pytest.raises(UnknownProfileError):
            get_profile('nav')

    def test_profile_without_block(self):
        """Test a profile without the block operation cannot reduce blocks."""
        profile = AggregationProfile('arrays', operations=frozenset({ARRAY}))
        with pytest.raises(UnsupportedOperationError, match="blocks"):
            Composer(profile).compose()
        with pytest.raises(UnsupportedOperationError, match="blocks"):
            Composer(profile).compose(each(['a'], li))

    def test_profile_without_expression(self):
        """Test bare nodes need the expression operation."""
        profile = AggregationProfile('loops', operations=frozenset({BLOCK, ARRAY}))
        with pytest.raises(UnsupportedOperationError, match="node expressions"):
            Composer(profile).compose(li('a'))

    def test_sequence_profile_without_expression(self):
        """Test bare nodes need the expression operation in sequence profiles."""
        profile = AggregationProfile(
            'arrays_only', operations=frozenset({BLOCK, ARRAY}), sequence=True
        )
        with pytest.raises(UnsupportedOperationError, match="node expressions"):
            Composer(profile).compose(li('a'))

    def test_supports(self):
        """Test supports() reports enabled operations."""
        assert HTML.supports(OPTIONAL) and HTML.supports(EITHER)
        assert not FORM.supports(EITHER)
        assert LIST.supports(EXPRESSION)


class TestProperties:
    """Tests for the composition properties."""

    def test_uniform_normalization(self):
        """Test skipped conditionals never leave placeholders."""
        for flags in [(True, True), (True, False), (False, True), (False, False)]:
            node = block_join(
                [Composer().compose(when(flags[0], p('a')), when(flags[1], p('b')))],
                tag='div',
            )
            expected = [t for t, f in zip('ab', flags) if f]
            assert [c.text for c in node.children] == expected
            assert '<>' not in serialize(node)

    def test_order_preservation(self):
        """Test siblings serialize in declaration order."""
        children = [p(str(n)) for n in range(10)]
        out = serialize(block_join(children, tag='div'))
        positions = [out.index(f'<p>{n}</p>') for n in range(10)]
        assert positions == sorted(positions)

    def test_fragment_transparency(self):
        """Test wrapping in a fragment never changes output."""
        x = MarkupNode('ul', {'id': 'a'}, [li('1'), li('2')])
        assert serialize(fragment(x)) == serialize(x)
        assert serialize(fragment(fragment(x), EMPTY)) == serialize(x)
        assert serialize(fragment(li('1'), li('2'))) == serialize([li('1'), li('2')])

    def test_loop_equals_literals(self):
        """Test each() builds the same tree as literal siblings."""
        looped = block_join([Composer().compose(each(['a', 'b'], li))], tag='ul')
        literal = block_join([li('a'), li('b')], tag='ul')
        assert looped == literal
        assert serialize(looped) == serialize(literal)
