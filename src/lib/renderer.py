"""
HTML renderer for highlighted code blocks

Turns highlighted lines plus their BlockMetadata into the code block markup:

    <div class="language-cpp">
        <div class="code-header">...title...</div>
        <div class="code-block">
            <div class="metadata">...line numbers / diff symbols...</div>
            <div class="code diff">
                <div class="added"><span class="token class-name">Vec</span>...</div>
            </div>
        </div>
    </div>

Each token becomes a span whose class list is its space-joined types, so
the theme CSS can style 'class-name', 'member-variable', 'undefined', etc.

Hidden lines are dropped only at this stage: they went through highlighting
and still fed the registries. Diff overrides and line numbers use the
numbering of the lines actually shown.
"""

import html
from typing import List, Optional, Tuple

from ..models.metadata import BlockMetadata
from ..models.token import Line
from .log import LOG


class CodeBlockRenderer:
    """
    Render one highlighted code block to HTML

    Attributes:
        lines: Highlighted lines of the block (original numbering)
        metadata: Display directives from the code fence
        language: Language name, used for the container class
    """

    def __init__(
        self,
        lines: List[Line],
        metadata: Optional[BlockMetadata] = None,
        language: str = "cpp",
    ) -> None:
        self.lines = lines
        self.metadata = metadata or BlockMetadata()
        self.language = language

    def lines_visible(self) -> List[Line]:
        """Lines left after removing hidden ones (hidden uses 1-based source numbering)"""
        hidden = set(self.metadata.hidden)
        return [line for index, line in enumerate(self.lines) if index + 1 not in hidden]

    def lineNumber_format(self, number: int, total: int) -> str:
        """Right-align a line number to the width of the largest one"""
        return str(number).rjust(len(str(total)), " ")

    def metadataBlock_generate(self, number: int, total: int) -> Tuple[str, Optional[str]]:
        """
        Build the metadata column entry for a displayed line

        Args:
            number: 1-based displayed line number
            total: Number of displayed lines

        Returns:
            Tuple of (metadata HTML, override class or None)
        """
        parts: List[str] = []

        if self.metadata.useLineNumbers:
            parts.append('<div class="padding"></div>')
            parts.append(f'<div class="line-number">{self.lineNumber_format(number, total)}</div>')
            parts.append('<div class="padding"></div>')
            parts.append('<div class="separator"></div>')

        override = self.metadata.override_get(number)

        if self.metadata.diff_has():
            symbol = {"added": "+", "removed": "-"}.get(override or "", " ")
            if override:
                parts.append(f'<div class="padding {override}"></div>')
                parts.append(f'<span class="{override}">{symbol}</span>')
                parts.append(f'<div class="padding {override}"></div>')
            else:
                parts.append('<div class="padding"></div>')
                parts.append(f'<span>{symbol}</span>')
                parts.append('<div class="padding"></div>')
        elif override:
            parts.append(f'<div class="padding {override}"></div>')

        return "".join(parts), override

    def line_render(self, line: Line, override: Optional[str]) -> str:
        spans = "".join(
            f'<span class="{html.escape(token.className_get())}">{html.escape(token.content)}</span>'
            for token in line
        )
        if override:
            return f'<div class="{override}">{spans}</div>'
        return f"<div>{spans}</div>"

    def header_render(self) -> str:
        if self.metadata.title:
            return f'<div class="code-header"><span class="title">{html.escape(self.metadata.title)}</span></div>'
        return '<div class="code-header no-banner"></div>'

    def html_render(self) -> str:
        """
        Render the code block

        Returns:
            HTML markup of the whole block
        """
        lines = self.lines_visible()
        total = len(lines)
        count = total if self.metadata.lineCount == -1 else min(self.metadata.lineCount, total)

        metadata_parts: List[str] = []
        code_parts: List[str] = []
        has_override = False

        for index in range(count):
            block, override = self.metadataBlock_generate(index + 1, total)
            if block:
                metadata_parts.append(f"<div>{block}</div>")
            code_parts.append(self.line_render(lines[index], override))
            has_override = has_override or override is not None

        LOG(f"Rendered {count} of {len(self.lines)} lines", level=3)

        metadata_html = f'<div class="metadata">{"".join(metadata_parts)}</div>' if metadata_parts else ""
        code_class = "code diff" if has_override else "code"

        return (
            f'<div class="language-{html.escape(self.language)}">'
            f"{self.header_render()}"
            f'<div class="code-block">'
            f"{metadata_html}"
            f'<div class="{code_class}">{"".join(code_parts)}</div>'
            f"</div>"
            f"</div>"
        )


def htmlDocument_build(content: str, css: str, title: str = "codetint") -> str:
    """
    Wrap rendered code blocks into a standalone HTML document

    Args:
        content: Rendered code block markup
        css: Theme stylesheet
        title: Document title

    Returns:
        Complete HTML document
    """
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{html.escape(title)}</title>
<style>
{css}
</style>
</head>
<body>
{content}
</body>
</html>
"""
