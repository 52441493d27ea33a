"""
C++ highlighting pipeline

Drives the registry builders, the member-variable tracker, the preprocessor
state machine and the re-tagger over the lines of one code block, strictly
top to bottom. A line's classification depends on everything above it, so
each CppHighlighter is used for exactly one code block; two blocks never
share registries.

Per line:
    namespaces → classes → member variables → preprocessor → re-tag

A name registered by a line is guaranteed to be visible from the next line
on; the declaring line itself may keep the lexer's classification.

Example:
    >>> lines = source_tokenize("using Vec = std::vector<int>;\\nVec v;\\n")
    >>> highlighted = language_processCpp(lines)
    >>> [t.types for t in highlighted[1] if t.content == "Vec"]
    [['token', 'class-name']]
"""

from typing import Iterable, List, Optional

from ..config import AppSettings, appsettings
from ..models.context import HighlightContext
from ..models.token import Line
from .log import LOG
from .members import MemberVariableTracker
from .preprocessor import PreprocessorTracker
from .registry import classes_parse, namespaces_parse
from .retagger import line_retag


class CppHighlighter:
    """
    Single-use highlighter for one C++ code block

    Attributes:
        settings: Application settings (seed names, undefined type)
        context: Registries and scope stacks of this code block
        preprocessor: Conditional-compilation state machine
        members: Member-variable scope tracker
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self.settings = settings or appsettings
        self.context = HighlightContext.context_create(
            extra_namespaces=self.settings.extra_namespaces,
            extra_classes=self.settings.extra_classes,
        )
        self.preprocessor = PreprocessorTracker(self.context)
        self.members = MemberVariableTracker(self.context)

    def line_process(self, line: Line) -> Line:
        """
        Register names from a line, then re-tag it

        Args:
            line: Tokens of the next line in document order

        Returns:
            Re-tagged tokens of the line
        """
        namespaces_parse(self.context, line)
        classes_parse(self.context, line)
        self.members.line_track(line)

        outcome = self.preprocessor.step(line)
        if outcome.forceDefine:
            self.context.isDefined = True

        updated = line_retag(
            line,
            self.context,
            is_defined=self.context.isDefined,
            undefined_type=self.settings.undefined_type,
        )

        self.context.isDefined = outcome.isNextDefined
        return updated

    def lines_process(self, lines: Iterable[Line]) -> List[Line]:
        processed = [self.line_process(line) for line in lines]
        LOG(
            f"C++ pass: {len(processed)} lines, {len(self.context.classes)} classes, "
            f"{len(self.context.namespaces)} namespaces, {len(self.context.macros)} macros",
            level=3,
        )
        return processed


def language_processCpp(lines: Iterable[Line], settings: Optional[AppSettings] = None) -> List[Line]:
    """
    Highlight one C++ code block with a fresh context

    Args:
        lines: Lexed lines of the code block
        settings: Optional settings override

    Returns:
        Re-tagged lines
    """
    return CppHighlighter(settings).lines_process(lines)
