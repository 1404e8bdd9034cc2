"""
Generic ordered document tree exchanged with the gateway.

Requests are described as *node-specs*: sequences whose entries are
``(name, value)``, ``(name, attributes, value)`` or ready-made :class:`Node`
objects. Values may be scalars, nested node-specs or ``None`` (the element is
left out). Names may repeat, which yields repeated sibling elements.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

from .errors import DecodeError

__all__ = [
    "Node",
    "element",
    "encode",
    "find",
    "first",
    "int_value",
    "parse",
    "to_bytes",
    "value",
    "values",
]


@dataclass
class Node:
    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List[Union["Node", str]] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(child for child in self.children if isinstance(child, str))

    def elements(self) -> List["Node"]:
        return [child for child in self.children if isinstance(child, Node)]

    def iter(self) -> Iterator["Node"]:
        """Yield this node and all of its descendants in document order."""
        yield self
        for child in self.elements():
            yield from child.iter()


def _render_scalar(raw: Any) -> str:
    if isinstance(raw, Enum):
        return str(raw.value)
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, int):
        return "%d" % raw
    if isinstance(raw, Decimal):
        return format(raw, "f")
    if isinstance(raw, date):
        return raw.isoformat()
    if isinstance(raw, str):
        return raw
    raise TypeError(f"Cannot encode value of type {type(raw).__name__}")


def _encode_children(raw: Any) -> List[Union[Node, str]]:
    if isinstance(raw, Node):
        return [raw]
    if isinstance(raw, (list, tuple)):
        return list(encode(raw))
    return [_render_scalar(raw)]


def encode(spec: Sequence[Any]) -> List[Node]:
    """Turn a node-spec into a list of sibling nodes."""
    nodes: List[Node] = []
    for entry in spec:
        if isinstance(entry, Node):
            nodes.append(entry)
            continue
        if len(entry) == 2:
            name, raw = entry
            attributes: Mapping[str, str] = {}
        elif len(entry) == 3:
            name, attributes, raw = entry
        else:
            raise TypeError(f"Malformed node-spec entry: {entry!r}")
        if raw is None:
            continue
        nodes.append(Node(name, dict(attributes), _encode_children(raw)))
    return nodes


def element(
    name: str,
    spec: Sequence[Any],
    attributes: Optional[Mapping[str, str]] = None,
) -> Node:
    return Node(name, dict(attributes or {}), list(encode(spec)))


def _to_etree(node: Node) -> ET.Element:
    elem = ET.Element(node.name, dict(node.attributes))
    last: Optional[ET.Element] = None
    for child in node.children:
        if isinstance(child, Node):
            last = _to_etree(child)
            elem.append(last)
        elif last is None:
            elem.text = (elem.text or "") + child
        else:
            last.tail = (last.tail or "") + child
    return elem


def to_bytes(node: Node) -> bytes:
    """Serialize ``node`` as a UTF-8 XML document."""
    return ET.tostring(_to_etree(node), encoding="utf-8", xml_declaration=True)


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _from_etree(elem: ET.Element) -> Node:
    node = Node(
        _local_name(elem.tag),
        {_local_name(key): val for key, val in elem.attrib.items()},
    )
    has_elements = len(elem) > 0
    if elem.text and (not has_elements or elem.text.strip()):
        node.children.append(elem.text)
    for child in elem:
        node.children.append(_from_etree(child))
        if child.tail and child.tail.strip():
            node.children.append(child.tail)
    return node


def parse(data: bytes) -> Node:
    """Parse XML bytes into a :class:`Node` tree with namespaces stripped."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise DecodeError(f"Malformed XML document: {exc}") from exc
    return _from_etree(root)


def find(node: Node, selector: str) -> List[Node]:
    """
    Locate nodes matching ``selector``.

    ``"//a/b"`` finds every ``a`` among ``node`` and its descendants, then
    steps into ``b`` children. Without the leading ``//`` every step is a
    child step from ``node``. Nothing matching yields an empty list.
    """
    if selector.startswith("//"):
        head, *steps = selector[2:].split("/")
        matches = [candidate for candidate in node.iter() if candidate.name == head]
    else:
        steps = selector.split("/")
        matches = [node]
    for step in steps:
        matches = [child for match in matches for child in match.elements() if child.name == step]
    return matches


def first(node: Node, selector: str) -> Optional[Node]:
    matches = find(node, selector)
    return matches[0] if matches else None


def values(node: Node, selector: str) -> List[str]:
    return [match.text for match in find(node, selector)]


def value(node: Node, selector: str) -> Optional[str]:
    match = first(node, selector)
    return None if match is None else match.text


def int_value(node: Node, selector: str) -> Optional[int]:
    raw = value(node, selector)
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise DecodeError(f"Expected a number at {selector}, got {raw!r}") from exc
