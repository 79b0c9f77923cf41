# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for MiniMLParser and rendering."""

import pytest

from genro_miniml import (
    DetachedNodeError,
    MalformedIdError,
    MiniMLConfig,
    MiniMLParseError,
    MiniMLParser,
    RepeatingIdError,
    SecondRootError,
    UnclosedNodeError,
    UnmatchedEndError,
    render,
    render_node,
)


def parse(text):
    return MiniMLParser().parse(text.splitlines())


def structure(node):
    """Return a comparable (name, id, values, children) tuple."""
    return (
        node.name,
        node.id,
        node.values,
        [structure(child) for child in node.children],
    )


EXAMPLE = """\
root
'r1'
=hello
child
=world
__end__
__end__
"""


class TestParseGrammar:
    """Tests for the line grammar."""

    def test_example_document(self):
        """Test the reference example parses to the expected tree."""
        root = parse(EXAMPLE)
        assert root.name == 'root'
        assert root.id == 'r1'
        assert root.values == ['hello']
        assert root.parent is None
        assert len(root.children) == 1
        child = root.children[0]
        assert child.name == 'child'
        assert child.id is None
        assert child.values == ['world']
        assert child.parent is root

    def test_empty_input(self):
        """Test an input without lines yields no root."""
        assert MiniMLParser().parse([]) is None
        assert parse('') is None

    def test_only_comments_and_blanks(self):
        """Test comments and blank lines alone yield no root."""
        assert parse('// nothing here\n\n   \n') is None

    def test_whitespace_is_ignored(self):
        """Test leading and trailing whitespace is stripped from every line."""
        root = parse("  // comment\n\n\t node name \n\t\t=value \n   __end__  \n")
        assert root.name == 'node name'
        assert root.values == ['value']

    def test_value_keeps_text_after_prefix(self):
        """Test only the first '=' is the prefix."""
        root = parse('a\n=x=y\n=\n__end__')
        assert root.values == ['x=y', '']

    def test_values_keep_order(self):
        """Test values are stored in source order."""
        root = parse('a\n=3\n=1\n=2\n=1\n__end__')
        assert root.values == ['3', '1', '2', '1']

    def test_children_keep_order(self):
        """Test children are stored in source order at every level."""
        root = parse(
            'a\nb\nd\n__end__\n__end__\nc\n__end__\nb\n__end__\n__end__'
        )
        assert [child.name for child in root.children] == ['b', 'c', 'b']
        assert [n.name for n in root.depth_first()] == ['a', 'b', 'd', 'c', 'b']

    def test_value_outside_node_is_dropped(self):
        """Test values before and after the root are silently ignored."""
        root = parse('=lost\na\n=kept\n__end__\n=also lost')
        assert root.values == ['kept']
        assert all('lost' not in node.values for node in root.depth_first())

    def test_node_names_with_spaces_and_symbols(self):
        """Test any other text is a node name."""
        root = parse('my node: 1\nx / y\n__end__\n__end__')
        assert root.name == 'my node: 1'
        assert root.children[0].name == 'x / y'

    def test_empty_id_means_no_id(self):
        """Test an empty quoted id leaves the node without id."""
        root = parse("a\n''\nb\n''\n__end__\n__end__")
        assert root.id is None
        assert root.children[0].id is None

    def test_id_is_text_between_outer_quotes(self):
        """Test the id runs up to the last quote of the line."""
        root = parse("a\n'it's'\n__end__")
        assert root.id == "it's"

    def test_parsed_nodes_are_detached(self):
        """Test a tree parsed without document cannot be mutated."""
        root = parse(EXAMPLE)
        assert root.document is None
        with pytest.raises(DetachedNodeError):
            root.add_value('x')


class TestParseErrors:
    """Tests for grammar and identifier errors."""

    def test_extra_end_marker(self):
        """Test an end marker without open node fails on its line."""
        with pytest.raises(UnmatchedEndError, match='line 3') as exc_info:
            parse('a\n__end__\n__end__')
        assert exc_info.value.line_number == 3

    def test_end_marker_first(self):
        """Test an end marker before any node fails."""
        with pytest.raises(UnmatchedEndError) as exc_info:
            parse('// c\n__end__')
        assert exc_info.value.line_number == 2

    def test_second_root(self):
        """Test two top-level nodes fail on the second one."""
        with pytest.raises(SecondRootError, match='second root') as exc_info:
            parse('a\n__end__\nb\n__end__')
        assert exc_info.value.line_number == 3

    def test_id_after_root_closed(self):
        """Test an id line after the root is closed is a second root."""
        with pytest.raises(SecondRootError):
            parse("a\n__end__\n'x'")

    def test_unclosed_node(self):
        """Test a node still open at end of input fails."""
        with pytest.raises(UnclosedNodeError, match='"a" is not closed') as exc_info:
            parse('a\nb\n__end__')
        assert exc_info.value.node_name == 'a'

    def test_unclosed_reports_innermost_node(self):
        """Test the innermost open node is the one reported."""
        with pytest.raises(UnclosedNodeError) as exc_info:
            parse('a\nb\nc')
        assert exc_info.value.node_name == 'c'

    def test_repeating_id(self):
        """Test a document-wide duplicate id fails on the second one."""
        with pytest.raises(RepeatingIdError, match='Repeating ID') as exc_info:
            parse("a\n'x'\nb\n'x'\n__end__\n__end__")
        assert exc_info.value.line_number == 4

    def test_repeating_id_in_sibling_subtrees(self):
        """Test uniqueness is not limited to siblings."""
        text = "a\nb\nc\n'x'\n__end__\n__end__\nd\n'x'\n__end__\n__end__"
        with pytest.raises(RepeatingIdError) as exc_info:
            parse(text)
        assert exc_info.value.line_number == 8

    def test_second_id_on_node(self):
        """Test a node cannot carry two ids."""
        with pytest.raises(RepeatingIdError, match='more than one ID') as exc_info:
            parse("a\n'x'\n'y'\n__end__")
        assert exc_info.value.line_number == 3

    def test_duplicate_checked_before_second_id(self):
        """Test a repeated id on the same node reports the duplicate."""
        with pytest.raises(RepeatingIdError, match='Repeating ID'):
            parse("a\n'x'\n'x'\n__end__")

    def test_unterminated_id(self):
        """Test an id line without closing quote fails."""
        with pytest.raises(MalformedIdError) as exc_info:
            parse("a\n'x\n__end__")
        assert exc_info.value.line_number == 2

    def test_id_before_any_node(self):
        """Test an id line with no open node fails."""
        with pytest.raises(MiniMLParseError, match='outside of any node'):
            parse("'x'\na\n__end__")

    def test_errors_share_base_class(self):
        """Test every grammar error is a MiniMLParseError."""
        for text in ('a\n__end__\n__end__', 'a', "a\n'x'\n'y'\n__end__"):
            with pytest.raises(MiniMLParseError):
                parse(text)


class TestRender:
    """Tests for the canonical text form."""

    def test_render_example(self):
        """Test the example renders with tab indentation."""
        assert render(parse(EXAMPLE)) == (
            "root\n"
            "\t'r1'\n"
            "\t=hello\n"
            "\tchild\n"
            "\t\t=world\n"
            "\t__end__\n"
            "__end__\n"
        )

    def test_render_empty(self):
        """Test no root renders as empty text."""
        assert render(None) == ''

    def test_render_empty_ids(self):
        """Test write_empty_ids emits '' for nodes without id."""
        config = MiniMLConfig(write_empty_ids=True)
        assert render(parse('a\nb\n__end__\n__end__'), config) == (
            "a\n\t''\n\tb\n\t\t''\n\t__end__\n__end__\n"
        )

    def test_render_custom_layout(self):
        """Test indent and newline come from the config."""
        config = MiniMLConfig(indent='  ', newline='\r\n')
        text = render(parse('a\n=v\nb\n__end__\n__end__'), config)
        assert text == 'a\r\n  =v\r\n  b\r\n  __end__\r\n__end__\r\n'

    def test_render_node_depth(self):
        """Test a subtree can be rendered at any depth."""
        child = parse(EXAMPLE).children[0]
        assert render_node(child, 2) == ['\t\tchild', '\t\t\t=world', '\t\t__end__']

    def test_round_trip(self):
        """Test render then parse preserves the whole structure."""
        text = (
            "top\n'1'\n=a\n=b\n"
            "x\n'2'\ny\n=c\n__end__\n__end__\n"
            "x\n=d\nz\n'3'\n__end__\n__end__\n"
            "__end__\n"
        )
        root = parse(text)
        again = parse(render(root))
        assert structure(again) == structure(root)

    def test_round_trip_with_empty_ids(self):
        """Test '' id lines re-parse as absent ids."""
        root = parse(EXAMPLE)
        text = render(root, MiniMLConfig(write_empty_ids=True))
        assert structure(parse(text)) == structure(root)
