"""
Namespace and class registry builders

Both builders probe the flattened text of a line with anchored regexes and
grow the registries of the current HighlightContext. Names are only ever
added, never removed; adding a known name is a no-op.

Recognized forms:
    namespace a::b::c {          → a, b, c are namespaces
    using namespace a::b::c;     → a, b, c are namespaces
    namespace alias = a::b::c;   → alias, a, b, c are namespaces
    using Alias = a::b::C<T>;    → lowercase names are namespaces,
                                   everything else is a class

The lowercase rule is a naming convention (namespaces and variables are
snake_case, types are PascalCase), not C++ semantics.
"""

import re
from typing import Callable, Iterable, List, Match, Pattern, Tuple

from ..models.context import BUILTIN_KEYWORDS, HighlightContext
from ..models.token import Line, line_flatten


LOWERCASE_RE: Pattern[str] = re.compile(r'^[a-z_]*$')
IDENTIFIER_RE: Pattern[str] = re.compile(r'^\w+$')


def lowercase_is(name: str) -> bool:
    """Lowercase identifiers name namespaces or variables, never classes"""
    return bool(LOWERCASE_RE.match(name))


def names_register(registry: set, names: Iterable[str]) -> None:
    for name in names:
        if name:
            registry.add(name)


def namespaceAlias_handle(context: HighlightContext, match: Match[str]) -> None:
    """namespace alias = a::b::c;"""
    text = re.sub(r'\bnamespace\b|[:=]', ' ', match.group(0))
    names_register(context.namespaces, text.split())


def namespaceBlock_handle(context: HighlightContext, match: Match[str]) -> None:
    """namespace a::b::c {"""
    text = re.sub(r'\bnamespace\b|:', ' ', match.group(0))
    names_register(context.namespaces, text.split())


def usingNamespace_handle(context: HighlightContext, match: Match[str]) -> None:
    """using namespace a::b::c;"""
    text = re.sub(r'\busing\b|\bnamespace\b|:', ' ', match.group(0))
    names_register(context.namespaces, text.split())


def usingAlias_handle(context: HighlightContext, match: Match[str]) -> None:
    """using alias = a::b::C; (lowercase segments are namespaces)"""
    text = re.sub(r'\busing\b|[:<>,*&=\s]', ' ', match.group(0))
    for name in text.split():
        if name in BUILTIN_KEYWORDS:
            continue
        if name in context.classes or name in context.namespaces:
            continue
        if lowercase_is(name):
            context.namespaces.add(name)


# Ordered (pattern, handler) table, first match wins. The alias form must be
# probed before the block form, which would otherwise match its prefix.
NAMESPACE_DETECTORS: List[Tuple[Pattern[str], Callable[[HighlightContext, Match[str]], None]]] = [
    (re.compile(r'^\s*namespace\s+\w+\s*=\s*[\w:\s]+'), namespaceAlias_handle),
    (re.compile(r'^\s*namespace\s+[\w:\s]+'), namespaceBlock_handle),
    (re.compile(r'^\s*using\s+namespace\s+[\w:\s]+'), usingNamespace_handle),
    (re.compile(r'^\s*using\s+\w+\s*=\s*[\w:<>,*&\s]+'), usingAlias_handle),
]

USING_ALIAS_RE: Pattern[str] = re.compile(r'^\s*using\s+\w+\s*=\s*[\s\S]+')


def namespaces_parse(context: HighlightContext, line: Line) -> None:
    """
    Register namespace names declared or referenced on a line

    Args:
        context: Registries of the current code block
        line: Tokens of the line
    """
    text = line_flatten(line)
    for pattern, handler in NAMESPACE_DETECTORS:
        match = pattern.match(text)
        if match:
            handler(context, match)
            return


def classes_parse(context: HighlightContext, line: Line) -> None:
    """
    Register class names from lexer classification and using-aliases

    Tokens the lexer already typed 'class-name' are trusted as-is. For a
    using-alias, every segment of the aliased type expression that is not a
    built-in keyword and not all-lowercase becomes a class, as does the
    alias itself when it is not lowercase.

    Args:
        context: Registries of the current code block
        line: Tokens of the line

    Example:
        using Vec = std::vector<Point*>;  → registers Vec, Point
    """
    for token in line:
        if token.type_has('class-name'):
            context.classes.add(token.content)

    match = USING_ALIAS_RE.match(line_flatten(line))
    if not match:
        return

    text = re.sub(r'^\s*using\s+', '', match.group(0))
    text = re.sub(r'\s*=\s*|[,\s<>]+', '::', text)
    for name in text.split('::'):
        name = re.sub(r'[*&;]+', '', name)
        if not name or not IDENTIFIER_RE.match(name):
            continue
        if name in BUILTIN_KEYWORDS:
            continue
        if not lowercase_is(name):
            context.classes.add(name)
