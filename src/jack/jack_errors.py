"""Exceptions raised by the Jack front end."""


class JackSyntaxError(SyntaxError):
    """Fatal structural error in a Jack compilation unit.

    Raised by the tokenizer for unterminated string literals and by the parser
    when the head of the token stream matches no grammar shape, an expected
    token is missing, or a bounded scan runs out of input.

    Attributes:
        line (int | None): 1-based source line of the offending token, if known.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)
