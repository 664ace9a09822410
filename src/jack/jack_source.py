"""
Line classifier for Jack source files.

Splits raw file text into the tagged line records the tokenizer consumes:

    ("comment", text)                      a comment-only line
    ("nocomment", text)                    a code line (possibly blank)
    ("nocomment", (text, trailing_comment)) a code line with an inline comment

Exactly one record is produced per physical line, so the position of a record
(1-based) is the line number of every token derived from it.

Comment handling:
    - `//` line comments, at the start of a line or trailing code.
    - `/* ... */` and `/** ... */` block comments, possibly spanning lines.
      Every line of a block is its own comment record.
    - A `/* ... */` comment closed on its own line may sit between code;
      the code on both sides stays code and the comment text is collected
      into the trailing comment.
    - Comment markers inside double-quoted strings are ignored.
    - A line with no code outside its comments is a comment line as a whole.
"""

from jack.jack_constants import CODE_LINE, COMMENT_LINE
from jack.jack_lexer import LineRecord


def find_comment(line: str) -> int | None:
    """Returns the index where a comment starts outside of a string literal.

    Args:
        line (str): A single line of code.

    Returns:
        int | None: Index of the `//` or `/*` marker, or None if the line has
        no comment.
    """
    in_string = False
    for i, ch in enumerate(line):
        if ch == '"':
            in_string = not in_string
        elif not in_string and line.startswith(("//", "/*"), i):
            return i
    return None


def split_comments(line: str) -> tuple[str, str, bool]:
    """Separates the code of one line from its comments.

    Returns:
        tuple[str, str, bool]: The code parts joined by single spaces, the
        comment parts joined by single spaces, and whether the line ends
        inside an unclosed block comment.
    """
    code: list[str] = []
    comments: list[str] = []
    rest = line
    while (index := find_comment(rest)) is not None:
        code.append(rest[:index])
        marker = rest[index:]
        end = marker.find("*/", 2) if marker.startswith("/*") else -1
        if end == -1:
            comments.append(marker)
            return _join(code), _join(comments), marker.startswith("/*")
        comments.append(marker[: end + 2])
        rest = marker[end + 2 :]
    code.append(rest)
    return _join(code), _join(comments), False


def _join(parts: list[str]) -> str:
    return " ".join(part.strip() for part in parts if part.strip())


def classify_lines(text: str) -> list[LineRecord]:
    """Classifies every line of `text` as a comment or code record."""
    records: list[LineRecord] = []
    in_block = False
    for raw in text.splitlines():
        line = raw.strip()
        if in_block:
            records.append((COMMENT_LINE, line))
            in_block = "*/" not in line
            continue
        if line.startswith("//"):
            records.append((COMMENT_LINE, line))
            continue

        code, comment, in_block = split_comments(line)
        if not comment:
            records.append((CODE_LINE, line))
        elif not code:
            records.append((COMMENT_LINE, line))
        else:
            records.append((CODE_LINE, (code, comment)))
    return records


__all__ = ["classify_lines", "find_comment", "split_comments"]
