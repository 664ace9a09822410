"""Front end for the Jack teaching language: tokenizer and recursive-descent parser."""

__version__ = "0.1.0"
