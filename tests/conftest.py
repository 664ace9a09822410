from collections.abc import Callable
from typing import Any

import pytest

from jack.jack_ast import StructuredElement
from jack.jack_lexer import Token, tokenize
from jack.jack_parser import parse
from jack.jack_source import classify_lines

SQUARE_SOURCE = """\
/** Implements a graphical square. */
class Square {
   field int x, y; // screen location
   field int size;

   constructor Square new(int Ax, int Ay, int Asize) {
      let x = Ax;
      let y = Ay;
      let size = Asize;
      do draw();
      return this;
   }

   method void moveUp() {
      var int step;
      let step = 2;
      if (y > 1) {
         do Screen.setColor(false);
         do Screen.drawRectangle(x, (y + size) - 1, x + size, y + size);
         let y = y - step;
      } else {
         let y = 0;
      }
      while (~(step = 0)) {
         let step = step - 1;
      }
      return;
   }

   method int area(Array memo) {
      let memo[size] = size * size;
      return memo[size];
   }
}
"""


@pytest.fixture  # type: ignore[misc]
def tokens_of() -> Callable[[str], list[Token]]:
    def _tokens_of(source: str) -> list[Token]:
        return tokenize(classify_lines(source))

    return _tokens_of


@pytest.fixture  # type: ignore[misc]
def tree_of() -> Callable[[str], StructuredElement]:
    def _tree_of(source: str) -> StructuredElement:
        return parse(tokenize(classify_lines(source)))

    return _tree_of


@pytest.fixture  # type: ignore[misc]
def shape() -> Callable[[Any], list[str]]:
    """Summarizes children as token text or element kind."""

    def _shape(node: Any) -> list[str]:
        return [
            c.kind if isinstance(c, StructuredElement) else str(c.value)
            for c in node.children
        ]

    return _shape


@pytest.fixture  # type: ignore[misc]
def square_source() -> str:
    return SQUARE_SOURCE
