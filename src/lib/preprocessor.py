"""
Preprocessor conditional-compilation state machine

Tracks nested #if defined(...) / #elif defined(...) / #else / #endif chains
and decides, line by line, whether code is active ("defined") or sits in a
branch the preprocessor would discard. #define names are registered only
while the current code is active.

Each line is matched against an ordered table of directive patterns, first
match wins; a line matching none passes through unchanged.

Directive lines themselves render as active (forceDefine) unless they are
nested inside code that is already inactive, so the structure of an
inactive chain stays readable.

Anchoring every pattern at line start keeps commented-out directives
(// #endif) from matching.
"""

import re
from typing import Callable, List, Match, Pattern, Tuple

from ..models.context import DirectiveOutcome, HighlightContext, PreprocessorFrame
from ..models.token import Line, line_flatten
from .log import LOG_error


class PreprocessorTracker:
    """
    Per-code-block preprocessor state

    The tracker reads and writes the preprocessor stack, the macro registry
    and the isDefined flag of the HighlightContext it is bound to.

    Example:
        For a fresh context, the line "#if defined(FOO)" yields
        DirectiveOutcome(forceDefine=True, isNextDefined=False)
    """

    def __init__(self, context: HighlightContext) -> None:
        self.context = context
        self.handlers: List[Tuple[Pattern[str], Callable[[Match[str]], DirectiveOutcome]]] = [
            (re.compile(r'^\s*#\s*define\s+([A-Z0-9_]+)'), self.define_handle),
            (re.compile(r'^\s*#\s*if\s+defined\s*\(\s*([A-Z0-9_]+)\s*\)'), self.if_handle),
            (re.compile(r'^\s*#\s*elif\s+defined\s*\(\s*([A-Z0-9_]+)\s*\)'), self.elif_handle),
            (re.compile(r'^\s*#\s*else\b'), self.else_handle),
            (re.compile(r'^\s*#\s*endif\b'), self.endif_handle),
        ]

    @property
    def scopes(self) -> List[PreprocessorFrame]:
        return self.context.preprocessorScopes

    def step(self, line: Line) -> DirectiveOutcome:
        """
        Advance the state machine by one line

        Args:
            line: Tokens of the line

        Returns:
            DirectiveOutcome for the line; the caller renders the line as
            defined when forceDefine is set and adopts isNextDefined for the
            lines that follow
        """
        text = line_flatten(line)
        for pattern, handler in self.handlers:
            match = pattern.match(text)
            if match:
                return handler(match)

        return DirectiveOutcome(forceDefine=False, isNextDefined=self.context.isDefined)

    def define_handle(self, match: Match[str]) -> DirectiveOutcome:
        """#define NAME (a define never toggles state)"""
        isDefined = self.context.isDefined
        if isDefined:
            self.context.macros.add(match.group(1))
        return DirectiveOutcome(forceDefine=isDefined, isNextDefined=isDefined)

    def if_handle(self, match: Match[str]) -> DirectiveOutcome:
        """#if defined(NAME) opens a new chain"""
        isDefined = self.context.isDefined
        isBranchActive = match.group(1) in self.context.macros
        isTopLevel = len(self.scopes) == 0

        self.scopes.append(PreprocessorFrame(
            hasActiveBranch=isBranchActive and isDefined,
            originalState=isDefined,
        ))

        return DirectiveOutcome(
            forceDefine=isTopLevel or isDefined,
            isNextDefined=isBranchActive and isDefined,
        )

    def elif_handle(self, match: Match[str]) -> DirectiveOutcome:
        """#elif defined(NAME) is active if no sibling branch was taken"""
        isBranchActive = match.group(1) in self.context.macros

        if not self.scopes:
            LOG_error(
                "Encountered #elif defined(...) preprocessor directive without prior "
                "#if defined(...) directive (invalid syntax)."
            )
            isDefined = self.context.isDefined
            return DirectiveOutcome(forceDefine=isDefined, isNextDefined=isBranchActive and isDefined)

        frame = self.scopes[-1]
        isTopLevel = len(self.scopes) == 1
        isNextDefined = not frame.hasActiveBranch and isBranchActive and frame.originalState
        if isNextDefined:
            frame.hasActiveBranch = True

        return DirectiveOutcome(
            forceDefine=isTopLevel or frame.originalState,
            isNextDefined=isNextDefined,
        )

    def else_handle(self, match: Match[str]) -> DirectiveOutcome:
        """#else is active if no sibling branch was taken"""
        if not self.scopes:
            LOG_error(
                "Encountered #else preprocessor directive without prior "
                "#if defined(...) directive (invalid syntax)."
            )
            isDefined = self.context.isDefined
            return DirectiveOutcome(forceDefine=isDefined, isNextDefined=isDefined)

        frame = self.scopes[-1]
        isTopLevel = len(self.scopes) == 1
        isNextDefined = not frame.hasActiveBranch and frame.originalState
        if isNextDefined:
            frame.hasActiveBranch = True

        return DirectiveOutcome(
            forceDefine=isTopLevel or frame.originalState,
            isNextDefined=isNextDefined,
        )

    def endif_handle(self, match: Match[str]) -> DirectiveOutcome:
        """#endif closes the innermost chain and restores the outer state"""
        if not self.scopes:
            LOG_error(
                "Encountered #endif preprocessor directive without prior "
                "#if defined(...) directive (invalid syntax)."
            )
            isDefined = self.context.isDefined
            return DirectiveOutcome(forceDefine=isDefined, isNextDefined=isDefined)

        isTopLevel = len(self.scopes) == 1
        frame = self.scopes.pop()

        return DirectiveOutcome(
            forceDefine=isTopLevel or frame.originalState,
            isNextDefined=frame.originalState,
        )
