"""
codetint - C++ aware syntax highlighting for code blocks

Lexes source with Pygments and sharpens the result for C++: namespaces,
user classes, member variables, macros and inactive preprocessor branches.
"""

__version__ = "1.0.0"

from .lib import (
    CppHighlighter,
    language_processCpp,
    source_highlight,
    source_tokenize,
    CodeBlockRenderer,
    metadata_parse,
    Theme,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "CppHighlighter",
    "language_processCpp",
    "source_highlight",
    "source_tokenize",
    "CodeBlockRenderer",
    "metadata_parse",
    "Theme",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
