"""
Member-variable scope tracker

Member variables can only be told apart from locals by where they are
declared: directly inside a class/struct/enum body, not inside a member
function or lambda nested in it. The tracker keeps one flag per open brace
(True for class-like bodies) and harvests unclassified plain identifiers
from lines whose innermost scope is a class-like body.

Harvesting is eager: names already known as classes,
namespaces or macros are skipped here and everything else is filtered by
the re-tagger's lookup order.

Only a definition header with its opening brace on the same line opens a
class-like scope (class Foo {). A header without a brace is treated as a
forward declaration.
"""

import re
from typing import List, Pattern

from ..models.context import HighlightContext
from ..models.token import Line, line_flatten


CLASS_HEADER_RE: Pattern[str] = re.compile(
    r'^\s*(?:(?:enum\s+)?(?:class|struct)\s+\w+|enum\s+\w+)'
)


class MemberVariableTracker:
    """
    Brace-depth driven member-variable harvesting for one code block

    Every '{' and '}' punctuation token is counted, so several braces on a
    line (int x{0};) keep the stack balanced. Braces inside string, char or
    comment tokens are not punctuation and never count.
    """

    def __init__(self, context: HighlightContext) -> None:
        self.context = context

    @property
    def scopes(self) -> List[bool]:
        return self.context.memberScopes

    def scope_pop(self) -> None:
        if self.scopes:
            self.scopes.pop()

    def line_track(self, line: Line) -> None:
        """
        Update the scope stack for a line and harvest member variables

        Args:
            line: Tokens of the line
        """
        braces = [
            token.content for token in line
            if token.type_has('punctuation') and token.content in ('{', '}')
        ]

        if CLASS_HEADER_RE.match(line_flatten(line)):
            if '{' not in braces:
                # forward declaration
                return

            # the first opening brace belongs to the class body
            opened = False
            for brace in braces:
                if brace == '{':
                    self.scopes.append(not opened)
                    opened = True
                else:
                    self.scope_pop()
            return

        if braces:
            for brace in braces:
                if brace == '{':
                    self.scopes.append(False)
                else:
                    self.scope_pop()
            return

        if self.scopes and self.scopes[-1]:
            self.members_harvest(line)

    def members_harvest(self, line: Line) -> None:
        """Harvest unknown plain identifiers, skipping [[attribute]] blocks"""
        depth = 0
        for index, token in enumerate(line):
            following = line[index + 1].content if index + 1 < len(line) else None
            if token.type_has('punctuation') and token.content == '[' and (following == '[' or depth):
                depth += 1
                continue
            if depth and token.type_has('punctuation') and token.content == ']':
                depth -= 1
                continue
            if depth or not token.type_has('plain'):
                continue
            content = token.content
            if not content.strip():
                continue
            if self.context.name_isKnown(content):
                continue
            self.context.memberVariables.append(content)
