"""
Code block highlighting entry points

Glues the lexer bridge, inline annotations and the language-specific
passes together:

    source → Pygments lexer → lines → annotations → language pass → operator strip

Languages without a dedicated pass keep the lexer's classification.
"""

from typing import Callable, Dict, List, Optional

from ..config import AppSettings, appsettings
from ..models.token import Line
from .annotations import annotations_apply, operatorType_strip
from .cpp import language_processCpp
from .lexer import source_tokenize
from .log import LOG


LanguageProcessor = Callable[[List[Line], Optional[AppSettings]], List[Line]]

LANGUAGE_PROCESSORS: Dict[str, LanguageProcessor] = {
    'cpp': language_processCpp,
    'c++': language_processCpp,
    'cxx': language_processCpp,
    'cc': language_processCpp,
    'hpp': language_processCpp,
    'h': language_processCpp,
}


def language_process(
    language: str,
    lines: List[Line],
    settings: Optional[AppSettings] = None,
) -> List[Line]:
    """
    Run the language-specific pass over one code block

    Args:
        language: Language name from the code fence
        lines: Lexed lines
        settings: Optional settings override

    Returns:
        Processed lines, or the input lines for languages without a pass
    """
    processor = LANGUAGE_PROCESSORS.get(language.lower())
    if processor is None:
        LOG(f"No language pass for '{language}', keeping lexer classification", level=2)
        return lines
    return processor(lines, settings)


def source_highlight(
    source: str,
    language: str = 'cpp',
    settings: Optional[AppSettings] = None,
) -> List[Line]:
    """
    Highlight the source of one code block

    Args:
        source: Raw code block text
        language: Language name from the code fence
        settings: Optional settings override

    Returns:
        Highlighted lines ready for rendering
    """
    settings = settings or appsettings

    # header and source extensions all lex as C++
    lexer_language = 'cpp' if language.lower() in LANGUAGE_PROCESSORS else language
    lines = source_tokenize(source, lexer_language)
    LOG(f"Lexed {len(lines)} lines as '{language}'", level=2)

    lines = [annotations_apply(line) for line in lines]
    lines = language_process(language, lines, settings)

    if settings.strip_operator_type:
        lines = [operatorType_strip(line) for line in lines]
    return lines
