"""
Token and line models

A token is the minimal unit of classified text handed over by the lexer:
its content plus an ordered list of type tags. A line is the list of tokens
between two newline tokens (the newline token stays at the end of its line).

The type vocabulary is the one rendered as CSS classes, e.g.:
    ['plain'], ['keyword'], ['punctuation'], ['token', 'class-name'],
    ['macro', 'property', 'directive', 'keyword']
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List


@dataclass
class Token:
    """
    Classified slice of source text

    Attributes:
        content: Raw text of the token (never modified by the highlighter)
        types: Ordered type tags; later stages replace or append to these

    Example:
        Token(content="vector", types=["plain"])
        → after highlighting: Token(content="vector", types=["token", "class-name"])
    """
    content: str
    types: List[str] = field(default_factory=list)

    def type_has(self, name: str) -> bool:
        """Check if the token carries a type tag"""
        return name in self.types

    def className_get(self) -> str:
        """Space-joined type list, used as the HTML class attribute"""
        return " ".join(self.types)

    def copy(self) -> "Token":
        return Token(content=self.content, types=list(self.types))

    def dict_get(self) -> Dict[str, Any]:
        return {"content": self.content, "types": list(self.types)}


Line = List[Token]


def line_flatten(line: Iterable[Token]) -> str:
    """
    Reconstitute the raw text of a line from its tokens

    Args:
        line: Tokens of a single line

    Returns:
        Concatenated token contents, used for regex probes
    """
    return "".join(token.content for token in line)


def lines_split(tokens: Iterable[Token]) -> List[Line]:
    """
    Split a flat token stream into lines

    A line ends with (and includes) the first token whose content is exactly
    a newline. Trailing tokens without a newline form a final line.

    Args:
        tokens: Flat token stream

    Returns:
        List of lines
    """
    lines: List[Line] = []
    line: Line = []
    for token in tokens:
        line.append(token)
        if token.content == "\n":
            lines.append(line)
            line = []
    if line:
        lines.append(line)
    return lines


def lines_toDicts(lines: Iterable[Line]) -> List[List[Dict[str, Any]]]:
    """JSON-serialisable form of a list of lines"""
    return [[token.dict_get() for token in line] for line in lines]
