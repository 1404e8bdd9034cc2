"""Tests for the generic document tree."""

from datetime import date
from decimal import Decimal

import pytest

from authnet_cim.core.document import (
    Node,
    element,
    encode,
    find,
    first,
    int_value,
    parse,
    to_bytes,
    value,
    values,
)
from authnet_cim.core.enums import EcheckType
from authnet_cim.core.errors import DecodeError


class TestEncode:
    """Tests for node-spec encoding."""

    def test_scalars(self) -> None:
        nodes = encode(
            [
                ("text", "hello"),
                ("count", 35934704),
                ("flag", True),
                ("off", False),
                ("amount", Decimal("10.50")),
                ("day", date(2026, 11, 1)),
                ("echeck", EcheckType.WEB),
            ]
        )
        assert [(n.name, n.text) for n in nodes] == [
            ("text", "hello"),
            ("count", "35934704"),
            ("flag", "true"),
            ("off", "false"),
            ("amount", "10.50"),
            ("day", "2026-11-01"),
            ("echeck", "WEB"),
        ]

    def test_large_decimal_is_not_scientific(self) -> None:
        (node,) = encode([("amount", Decimal("1E+3"))])
        assert node.text == "1000"

    def test_none_values_are_omitted(self) -> None:
        nodes = encode([("a", "1"), ("b", None), ("c", "3")])
        assert [n.name for n in nodes] == ["a", "c"]

    def test_repeated_siblings_keep_order(self) -> None:
        nodes = encode([("shipToList", [("city", "one")]), ("shipToList", [("city", "two")])])
        assert [n.name for n in nodes] == ["shipToList", "shipToList"]
        assert [value(n, "city") for n in nodes] == ["one", "two"]

    def test_nested_and_attributes(self) -> None:
        (node,) = encode([("outer", {"id": "7"}, [("inner", [("leaf", "x")])])])
        assert node.attributes == {"id": "7"}
        assert value(node, "inner/leaf") == "x"

    def test_embeds_ready_nodes(self) -> None:
        ready = Node("ready", children=["yes"])
        nodes = encode([ready, ("after", "1")])
        assert nodes[0] is ready
        assert nodes[1].name == "after"

    def test_unsupported_value_type(self) -> None:
        with pytest.raises(TypeError):
            encode([("bad", object())])

    def test_malformed_entry(self) -> None:
        with pytest.raises(TypeError):
            encode([("a", "b", "c", "d")])


class TestSerialization:
    """Tests for converting trees to and from bytes."""

    def test_to_bytes_has_declaration_and_order(self) -> None:
        node = element("root", [("b", "2"), ("a", "1")], attributes={"xmlns": "urn:test"})
        data = to_bytes(node)
        assert data.startswith(b"<?xml")
        assert b'<root xmlns="urn:test"><b>2</b><a>1</a></root>' in data

    def test_to_bytes_escapes_text(self) -> None:
        data = to_bytes(element("root", [("name", "Smith & <Sons>")]))
        assert b"Smith &amp; &lt;Sons&gt;" in data

    def test_parse_strips_namespaces(self) -> None:
        root = parse(b'<a xmlns="urn:x"><b>1</b></a>')
        assert root.name == "a"
        assert root.elements()[0].name == "b"

    def test_parse_drops_formatting_whitespace(self) -> None:
        root = parse(b"<a>\n  <b> padded </b>\n</a>")
        assert root.children == [Node("b", children=[" padded "])]

    def test_parse_utf8(self) -> None:
        root = parse("<a><name>José</name></a>".encode("utf-8"))
        assert value(root, "name") == "José"

    def test_parse_malformed(self) -> None:
        with pytest.raises(DecodeError):
            parse(b"<a><b></a>")

    def test_parse_reads_what_to_bytes_writes(self) -> None:
        node = element("root", [("list", [("item", "1"), ("item", "2")])])
        assert parse(to_bytes(node)) == node


class TestSelectors:
    """Tests for //tag lookups."""

    @pytest.fixture
    def tree(self) -> Node:
        return parse(
            b"<root><messages><resultCode>Error</resultCode>"
            b"<message><code>E1</code><text>one</text></message>"
            b"<message><code>E2</code><text>two</text></message></messages>"
            b"<deep><deeper><code>E3</code></deeper></deep></root>"
        )

    def test_descendants_in_document_order(self, tree: Node) -> None:
        assert values(tree, "//code") == ["E1", "E2", "E3"]

    def test_descendant_then_child_steps(self, tree: Node) -> None:
        assert values(tree, "//messages/resultCode") == ["Error"]
        assert values(tree, "//message/text") == ["one", "two"]

    def test_descendant_search_includes_the_node_itself(self, tree: Node) -> None:
        assert find(tree, "//root") == [tree]

    def test_child_path(self, tree: Node) -> None:
        assert values(tree, "messages/message/code") == ["E1", "E2"]
        assert find(tree, "code") == []

    def test_no_match_is_empty(self, tree: Node) -> None:
        assert find(tree, "//missing") == []
        assert first(tree, "//missing") is None
        assert value(tree, "//missing") is None
        assert int_value(tree, "//missing") is None

    def test_int_value(self) -> None:
        assert int_value(parse(b"<a><id>35934704</id></a>"), "//id") == 35934704

    def test_int_value_rejects_text(self, tree: Node) -> None:
        with pytest.raises(DecodeError):
            int_value(tree, "//code")
