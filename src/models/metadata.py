"""
Code block metadata model

Holds the display directives parsed from the trailing text of a code fence,
e.g. ```cpp added:{1-3} hidden:{5} line-numbers:{enabled} title:{main.cpp}
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class BlockMetadata:
    """
    Display directives for one code block

    All line numbers are 1-based. Hidden lines refer to the source
    numbering of the block; every other list refers to the lines left
    after hidden ones are removed.

    Attributes:
        added: Lines shown as additions (green, '+' symbol)
        removed: Lines shown as removals (red, '-' symbol)
        modified: Lines shown as modified
        hidden: Lines removed from the rendered output
        highlighted: Lines shown highlighted
        useLineNumbers: Render a line number column
        title: Optional title shown above the block
        lineCount: Number of lines shown when collapsed (-1 = all)
    """
    added: List[int] = field(default_factory=list)
    removed: List[int] = field(default_factory=list)
    modified: List[int] = field(default_factory=list)
    hidden: List[int] = field(default_factory=list)
    highlighted: List[int] = field(default_factory=list)
    useLineNumbers: bool = False
    title: Optional[str] = None
    lineCount: int = -1

    def override_get(self, line_number: int) -> Optional[str]:
        """
        Display override for a line, first match wins

        Args:
            line_number: 1-based line number

        Returns:
            'added', 'removed', 'modified', 'highlighted' or None
        """
        if line_number in self.added:
            return "added"
        if line_number in self.removed:
            return "removed"
        if line_number in self.modified:
            return "modified"
        if line_number in self.highlighted:
            return "highlighted"
        return None

    def diff_has(self) -> bool:
        """True when any line carries a diff symbol"""
        return bool(self.added or self.removed)
