"""
Code block metadata parser

Parses the directives written after the language on a code fence line:

    ```cpp added:{1,3-5} removed:{7} hidden:{1-2} line-numbers:{enabled} title:{main.cpp}

Supported tags:
    added:{ranges}        lines shown as additions
    removed:{ranges}      lines shown as removals
    modified:{ranges}     lines shown as modified
    hidden:{ranges}       lines highlighted but not rendered
    highlighted:{ranges}  lines shown highlighted
    line-numbers:{enable|enabled|disable|disabled}
    title:{text}          title shown above the block
    show-lines:{N}        number of lines shown while collapsed

Ranges are comma-separated integers and inclusive hyphen ranges (1,3-5,9).
The first occurrence of a tag wins; unknown text is ignored.
"""

import re
from typing import List, Pattern

from ..models.metadata import BlockMetadata
from .log import LOG


RANGE_TAGS: List[str] = ["added", "removed", "modified", "hidden", "highlighted"]

LINE_NUMBERS_RE: Pattern[str] = re.compile(r'\bline-numbers\b:\{(\w+)\}')
TITLE_RE: Pattern[str] = re.compile(r'\btitle\b:\{([^}]*)\}')
SHOW_LINES_RE: Pattern[str] = re.compile(r'\bshow-lines\b:\{(\d+)\}')
RANGE_PART_RE: Pattern[str] = re.compile(r'^(\d+)\s*-\s*(\d+)$')


def ranges_parse(text: str) -> List[int]:
    """
    Expand a numeric range list

    Args:
        text: e.g. "1,3-5,9"; a reversed range (5-3) counts down

    Returns:
        Line numbers in the order written, e.g. [1, 3, 4, 5, 9]
    """
    numbers: List[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        if part.isdigit():
            numbers.append(int(part))
            continue
        match = RANGE_PART_RE.match(part)
        if not match:
            LOG(f"Ignoring malformed line range '{part}'", level=2)
            continue
        start, end = int(match.group(1)), int(match.group(2))
        step = 1 if end >= start else -1
        numbers.extend(range(start, end + step, step))
    return numbers


def metadata_parse(meta: str) -> BlockMetadata:
    """
    Parse code fence metadata

    Args:
        meta: Text following the language on the fence line

    Returns:
        BlockMetadata with all recognized directives applied

    Example:
        >>> metadata_parse("added:{1-2} line-numbers:{enabled}").added
        [1, 2]
    """
    metadata = BlockMetadata()
    meta = meta or ""

    for tag in RANGE_TAGS:
        match = re.search(r'\b' + tag + r'\b:\{([-,\d\s]+)\}', meta)
        if match:
            setattr(metadata, tag, ranges_parse(match.group(1)))

    match = LINE_NUMBERS_RE.search(meta)
    if match:
        flag = match.group(1).lower()
        metadata.useLineNumbers = flag in ("enable", "enabled")

    match = TITLE_RE.search(meta)
    if match:
        metadata.title = match.group(1)

    match = SHOW_LINES_RE.search(meta)
    if match:
        metadata.lineCount = int(match.group(1))

    return metadata
