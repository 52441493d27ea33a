"""
codetint - C++ aware syntax highlighting for code blocks

Re-classifies Pygments tokens using lightweight C++ heuristics and renders
the result as themed HTML.
"""

__version__ = "1.0.0"

from .lexer import source_tokenize
from .cpp import CppHighlighter, language_processCpp
from .highlighter import source_highlight, language_process
from .metadata import metadata_parse
from .renderer import CodeBlockRenderer, htmlDocument_build
from .theme import Theme, ThemeError, themes_listAvailable
from .log import LOG, LOG_error, state_connectToLogger

__all__ = [
    "source_tokenize",
    "CppHighlighter",
    "language_processCpp",
    "source_highlight",
    "language_process",
    "metadata_parse",
    "CodeBlockRenderer",
    "htmlDocument_build",
    "Theme",
    "ThemeError",
    "themes_listAvailable",
    "LOG",
    "LOG_error",
    "state_connectToLogger",
    "__version__",
]
