"""
Pygments lexer bridge

Lexes source text with a Pygments lexer and converts the stream into lines
of Tokens using the type vocabulary the highlighting passes and the theme
work with.

Token type mapping:
- Name, Name.Namespace, Name.Label, whitespace → plain
- Name.Class → class-name
- Name.Function → function ("Foo::bar" splits into plain, '::', function)
- Name.Builtin, Keyword.Constant → boolean
- Keyword.* → keyword
- Operator → operator (':' ':' merges to '::' as punctuation, '-' '>' to '->')
- Punctuation → punctuation ('[[' and ']]' split into single brackets)
- Number.* → number, String.Char → char, String.* → string
- Comment.Preproc → re-split into '#', directive keyword, words, parentheses
- Comment.PreprocFile → macro property string
- Comment.* → comment

Example:
    "#if defined(FOO)" →
        '#'        macro property directive-hash
        'if'       macro property directive keyword
        ' '        macro property
        'defined'  macro property expression
        '('        macro property expression punctuation
        'FOO'      macro property expression
        ')'        macro property expression punctuation
"""

import re
from typing import Iterable, List, Optional, Pattern

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    _TokenType,
)
from pygments.util import ClassNotFound

from ..models.token import Line, Token, lines_split


PREPROCESSOR_PIECE_RE: Pattern[str] = re.compile(r'\n|[^\S\n]+|#|\w+|[()]|[^\w\s()#]+')
BRACKET_RUN_RE: Pattern[str] = re.compile(r'^(?:\[\[|\]\])$')

MACRO = ['macro', 'property']
DIRECTIVE_HASH = ['macro', 'property', 'directive-hash']
DIRECTIVE_KEYWORD = ['macro', 'property', 'directive', 'keyword']
MACRO_EXPRESSION = ['macro', 'property', 'expression']
MACRO_PUNCTUATION = ['macro', 'property', 'expression', 'punctuation']
MACRO_NAME = ['macro', 'property', 'macro-name']


def lexer_get(language: str) -> Lexer:
    """
    Get a Pygments lexer for a language name

    Leading newlines are kept so line numbers stay aligned with the source.

    Args:
        language: Pygments alias (e.g. 'cpp', 'c++', 'python')

    Returns:
        Lexer instance, TextLexer for unknown languages
    """
    try:
        return get_lexer_by_name(language, stripnl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False)


def types_map(ttype: _TokenType) -> List[str]:
    """Map a Pygments token type to highlighting types"""
    if ttype in Comment.PreprocFile:
        return ['macro', 'property', 'string']
    if ttype in Comment:
        return ['comment']
    if ttype in Name.Class:
        return ['class-name']
    if ttype in Name.Function:
        return ['function']
    if ttype in Name.Builtin or ttype in Keyword.Constant:
        return ['boolean']
    if ttype in Name:
        return ['plain']
    if ttype in Keyword or ttype in Operator.Word:
        return ['keyword']
    if ttype in Operator:
        return ['operator']
    if ttype in Punctuation:
        return ['punctuation']
    if ttype in Number:
        return ['number']
    if ttype in String.Char:
        return ['char']
    if ttype in String:
        return ['string']
    return ['plain']


def value_split(value: str, types: List[str]) -> List[Token]:
    """Split a token value at newlines so no token spans two lines"""
    tokens: List[Token] = []
    for index, piece in enumerate(value.split('\n')):
        if index > 0:
            tokens.append(Token(content='\n', types=['plain']))
        if piece:
            tokens.append(Token(content=piece, types=list(types)))
    return tokens


def preprocessor_split(value: str) -> List[Token]:
    """Split preprocessor text into hash, words, parentheses and whitespace"""
    tokens: List[Token] = []
    for piece in PREPROCESSOR_PIECE_RE.findall(value):
        if piece == '\n':
            tokens.append(Token(content=piece, types=['plain']))
        elif not piece.strip():
            tokens.append(Token(content=piece, types=list(MACRO)))
        elif piece == '#':
            tokens.append(Token(content=piece, types=list(DIRECTIVE_HASH)))
        elif piece in ('(', ')'):
            tokens.append(Token(content=piece, types=list(MACRO_PUNCTUATION)))
        else:
            tokens.append(Token(content=piece, types=list(MACRO_EXPRESSION)))
    return tokens


def functionName_split(value: str) -> List[Token]:
    """Split a qualified function name (Foo::bar) into scope and name"""
    parts = value.split('::')
    tokens: List[Token] = []
    for index, part in enumerate(parts):
        if index > 0:
            tokens.append(Token(content='::', types=['punctuation']))
        if not part:
            continue
        kind = 'function' if index == len(parts) - 1 else 'plain'
        tokens.append(Token(content=part, types=[kind]))
    return tokens


def operators_merge(tokens: List[Token]) -> List[Token]:
    """Merge single-character operators into '::' and '->'"""
    merged: List[Token] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        following = tokens[i + 1] if i + 1 < len(tokens) else None
        if following is not None and token.type_has('operator') and following.type_has('operator'):
            pair = token.content + following.content
            if pair == '::':
                merged.append(Token(content='::', types=['punctuation']))
                i += 2
                continue
            if pair == '->':
                merged.append(Token(content='->', types=['operator']))
                i += 2
                continue
        merged.append(token)
        i += 1
    return merged


def directives_classify(line: Line) -> None:
    """
    Give the words of a directive line their roles

    The first word after a leading '#' is the directive keyword; the word
    after 'define' is the macro being defined.
    """
    significant = [token for token in line if token.content.strip()]
    if not significant or not significant[0].type_has('directive-hash'):
        return

    directive: Optional[str] = None
    for token in significant[1:]:
        if not token.type_has('macro') or not re.match(r'^\w+$', token.content):
            continue
        if directive is None:
            directive = token.content
            token.types = list(DIRECTIVE_KEYWORD)
            continue
        if directive == 'define':
            token.types = list(MACRO_NAME)
        break


def brackets_split(value: str) -> List[Token]:
    """Split an attribute bracket run ('[[', ']]') into single brackets"""
    return [Token(content=bracket, types=['punctuation']) for bracket in value]


def tokens_convert(stream: Iterable) -> List[Token]:
    """Convert a Pygments (type, value) stream into Tokens"""
    tokens: List[Token] = []
    for ttype, value in stream:
        if ttype is Comment.Preproc:
            tokens.extend(preprocessor_split(value))
        elif ttype in Name.Function and '::' in value:
            tokens.extend(functionName_split(value))
        elif ttype in Punctuation and BRACKET_RUN_RE.match(value):
            tokens.extend(brackets_split(value))
        else:
            tokens.extend(value_split(value, types_map(ttype)))
    return operators_merge(tokens)


def source_tokenize(source: str, language: str = 'cpp', lexer: Optional[Lexer] = None) -> List[Line]:
    """
    Lex source text into lines of Tokens

    Args:
        source: Source text of one code block
        language: Pygments language alias
        lexer: Optional lexer instance overriding the language lookup

    Returns:
        Lines of tokens, each ending with its newline token
    """
    lexer = lexer or lexer_get(language)
    lines = lines_split(tokens_convert(lexer.get_tokens(source)))
    for line in lines:
        directives_classify(line)
    return lines
