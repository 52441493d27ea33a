"""
Token re-tagger

Final per-line pass: rewrites token types using the registries accumulated
so far in the code block.

Rules, in priority order:
    1. '::', '.' and '->' classify the plain token that follows them
    2. #if / #elif / #ifdef / ... re-tag the rest of the directive line
       ('defined' keyword, macro names)
    3. plain tokens (and macro expression tokens) are looked up:
       namespace → class → macro → member variable
    4. anything else passes through

Tokens of an inactive preprocessor branch finally get the undefined type
appended. The pass never mutates its input and is idempotent: re-tagging an
already re-tagged line with unchanged registries yields the same line.
"""

import re
from typing import List, Pattern

from ..models.context import HighlightContext
from ..models.token import Line, Token
from .registry import lowercase_is


NAMESPACE_NAME: List[str] = ['token', 'namespace-name']
CLASS_NAME: List[str] = ['token', 'class-name']
MEMBER_VARIABLE: List[str] = ['token', 'member-variable']
MACRO_NAME: List[str] = ['token', 'macro', 'property', 'macro-name']
DEFINED_KEYWORD: List[str] = ['token', 'macro', 'property', 'directive', 'keyword']

CONDITIONAL_DIRECTIVES = {'if', 'elif'}
NAME_DIRECTIVES = {'ifdef', 'ifndef', 'elifdef', 'elifndef'}

MACRO_IDENTIFIER_RE: Pattern[str] = re.compile(r'^[A-Za-z_]\w*$')


def token_retype(token: Token, types: List[str]) -> Token:
    return Token(content=token.content, types=list(types))


def scopedName_classify(token: Token, context: HighlightContext) -> Token:
    """
    Classify the plain token following '::'

    Unknown lowercase names are members (Foo::count), unknown names in any
    other case are classes (ns::Widget). A trailing ::type always names a
    type even though it is lowercase, without turning every variable called
    'type' into a class.
    """
    content = token.content
    if content in context.namespaces:
        return token_retype(token, NAMESPACE_NAME)
    if content in context.classes:
        return token_retype(token, CLASS_NAME)
    if lowercase_is(content):
        if content == 'type':
            return token_retype(token, CLASS_NAME)
        return token_retype(token, MEMBER_VARIABLE)
    return token_retype(token, CLASS_NAME)


def plainName_classify(token: Token, context: HighlightContext) -> Token:
    content = token.content
    if content in context.namespaces:
        return token_retype(token, NAMESPACE_NAME)
    if content in context.classes:
        return token_retype(token, CLASS_NAME)
    if content in context.macros:
        return token_retype(token, MACRO_NAME)
    if context.memberVariable_has(content):
        return token_retype(token, MEMBER_VARIABLE)
    return token.copy()


def directiveTail_retag(tokens: List[Token], directive: str) -> List[Token]:
    """
    Re-tag the tokens following a conditional directive keyword

    '#if defined(A) && defined(B)' → 'defined' gets the directive keyword
    role, A and B get the macro-name role. '#ifdef A' → A is a macro name.
    Whitespace, parentheses and operators are left alone.
    """
    updated: List[Token] = []
    expectName = directive in NAME_DIRECTIVES
    for token in tokens:
        content = token.content
        if content == 'defined' and directive in CONDITIONAL_DIRECTIVES:
            updated.append(token_retype(token, DEFINED_KEYWORD))
        elif MACRO_IDENTIFIER_RE.match(content) and (directive in CONDITIONAL_DIRECTIVES or expectName):
            updated.append(token_retype(token, MACRO_NAME))
            expectName = False
        else:
            updated.append(token.copy())
    return updated


def line_retag(
    line: Line,
    context: HighlightContext,
    is_defined: bool = True,
    undefined_type: str = 'undefined',
) -> Line:
    """
    Rewrite the types of one line's tokens

    Args:
        line: Tokens of the line (not modified)
        context: Registries of the current code block
        is_defined: Whether the line is active code
        undefined_type: Type appended to every token of an inactive line

    Returns:
        New list of tokens; empty tokens are dropped
    """
    tokens = [token for token in line if token.content]
    updated: List[Token] = []

    i = 0
    while i < len(tokens):
        token = tokens[i]

        if token.type_has('punctuation') or token.type_has('operator'):
            updated.append(token.copy())
            if token.content in ('::', '.', '->') and i + 1 < len(tokens):
                i += 1
                following = tokens[i]
                if not following.type_has('plain'):
                    updated.append(following.copy())
                elif token.content == '::':
                    updated.append(scopedName_classify(following, context))
                else:
                    updated.append(token_retype(following, MEMBER_VARIABLE))

        elif token.type_has('directive'):
            updated.append(token.copy())
            if token.content in CONDITIONAL_DIRECTIVES or token.content in NAME_DIRECTIVES:
                # the directive owns the remainder of the line
                updated.extend(directiveTail_retag(tokens[i + 1:], token.content))
                i = len(tokens)

        elif token.type_has('plain') or (token.type_has('macro') and token.type_has('expression')):
            updated.append(plainName_classify(token, context))

        else:
            updated.append(token.copy())

        i += 1

    if not is_defined:
        for token in updated:
            if undefined_type not in token.types:
                token.types.append(undefined_type)

    return updated
