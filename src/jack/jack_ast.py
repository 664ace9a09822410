"""
Defines the parse-tree node structure for the Jack front end.

Classes:
    StructuredElement:
        One grammar nonterminal (class, statements, expression, ...) whose
        children are tokens and nested elements in source order.

    ElementDict:
        TypedDict shape of a serialized element, suitable for JSON output or
        test assertions.

Elements are built bottom-up by the parser and never modified afterwards:
`children` is stored as a tuple and every child belongs to exactly one parent.

Example:
    node = StructuredElement("term", [Token("identifier", "x", 3)])
"""

from typing import Any, TypedDict, Union

from jack.jack_constants import ELEMENT_KINDS
from jack.jack_lexer import Token


class ElementDict(TypedDict):
    """
    Serialized form of a StructuredElement.

    Fields:
        kind (str): The grammar nonterminal (e.g. "class", "let_statement").
        children (list): Serialized children; tokens appear as
            `{"kind", "value", "line"}` dicts, elements as nested ElementDicts.
    """

    kind: str
    children: list[Any]


Child = Union[Token, "StructuredElement"]


class StructuredElement:
    """
    A parse-tree node for one Jack grammar nonterminal.

    Args:
        kind (str): The nonterminal tag; must be one of `ELEMENT_KINDS`.
        children (Iterable[Token | StructuredElement], optional): Child nodes in
            source order.

    Raises:
        ValueError: If `kind` is not a known nonterminal.
    """

    __slots__ = ("_kind", "_children")

    def __init__(self, kind: str, children: Any = ()) -> None:
        if kind not in ELEMENT_KINDS:
            raise ValueError(f"Unknown element kind: {kind!r}")
        self._kind = kind
        self._children: tuple[Child, ...] = tuple(children)

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def children(self) -> tuple[Child, ...]:
        return self._children

    def __repr__(self) -> str:
        preview = ", ".join(repr(c) for c in self._children[:4])
        if len(self._children) > 4:
            preview += ", ..."
        return f"StructuredElement({self._kind}, [{preview}])"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, StructuredElement):
            return False
        return self._kind == other._kind and self._children == other._children

    def __hash__(self) -> int:
        return hash((self._kind, self._children))

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Any:
        return iter(self._children)

    def tokens(self) -> list[Token]:
        """Returns every leaf token below this element, in source order."""
        leaves: list[Token] = []
        for child in self._children:
            if isinstance(child, StructuredElement):
                leaves.extend(child.tokens())
            else:
                leaves.append(child)
        return leaves

    def find_all(self, kind: str) -> list["StructuredElement"]:
        """Returns all descendant elements of `kind` in pre-order."""
        found: list[StructuredElement] = []
        for child in self._children:
            if isinstance(child, StructuredElement):
                if child.kind == kind:
                    found.append(child)
                found.extend(child.find_all(kind))
        return found

    def to_dict(self) -> ElementDict:
        return {
            "kind": self._kind,
            "children": [c.to_dict() for c in self._children],
        }
