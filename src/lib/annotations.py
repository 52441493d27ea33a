"""
Inline type annotations

A code block can force the classification of a name with an annotation
block written in place of the name:

    [[class-name,Widget]] w;          → 'Widget' typed class-name
    [[enum-name.class-name,Mode]] m;  → 'Mode' typed enum-name class-name

Only blocks whose types all come from ANNOTATION_TYPES are annotations;
anything else between '[[' and ']]' is a C++ attribute ([[nodiscard]],
[[maybe_unused]]) and is left untouched.
"""

from typing import List, Set

from ..models.token import Line, Token


ANNOTATION_TYPES: Set[str] = {
    "class-name",
    "namespace-name",
    "member-variable",
    "macro", "macro-name", "macro-argument",
    "enum-name",
    "enum-value",
    "function",
    "plain", "punctuation",
    "number", "string",
    "keyword",
    "operator", "unary-operator", "binary-operator", "function-operator",
    "concept",
}


def annotationEnd_find(tokens: List[Token], start: int) -> int:
    """
    Index of the token closing an annotation opened at start

    The block ends at the last ']' of the first ']]' run. Returns len(tokens)
    when the block is never closed.
    """
    j = start
    while j < len(tokens):
        following = tokens[j + 1].content if j + 1 < len(tokens) else None
        if tokens[j].content == "]" and following != "]" and j > start + 1:
            return j
        j += 1
    return len(tokens)


def annotation_parse(text: str) -> Token | None:
    """
    Parse the inside of an annotation block

    Args:
        text: Text between '[[' and ']]', e.g. "class-name,Widget"

    Returns:
        Token for the annotated value, or None if text is not an annotation
    """
    components = text.split(",", 1)
    if len(components) != 2:
        return None

    types = [kind.strip() for kind in components[0].split(".")]
    if not all(kind in ANNOTATION_TYPES for kind in types):
        return None

    value = components[1].strip()
    if not value:
        return None
    return Token(content=value, types=types)


def annotations_apply(line: Line) -> Line:
    """
    Collapse annotation blocks of a line into single typed tokens

    Args:
        line: Tokens of one line

    Returns:
        New list of tokens with annotation blocks replaced
    """
    parsed: List[Token] = []
    i = 0
    while i < len(line):
        token = line[i]
        following = line[i + 1] if i + 1 < len(line) else None
        if token.content != "[" or following is None or following.content != "[":
            parsed.append(token)
            i += 1
            continue

        end = annotationEnd_find(line, i)
        if end >= len(line):
            parsed.extend(line[i:])
            break

        text = "".join(t.content for t in line[i:end + 1])
        annotated = annotation_parse(text[2:-2])
        if annotated is None:
            parsed.extend(line[i:end + 1])
        else:
            parsed.append(annotated)
        i = end + 1

    return parsed


def operatorType_strip(line: Line) -> Line:
    """Remove the 'operator' type so operators render in the plain colour"""
    stripped: List[Token] = []
    for token in line:
        types = [kind for kind in token.types if kind != "operator"]
        stripped.append(Token(content=token.content, types=types or ["plain"]))
    return stripped
