"""
Models package for codetint

Contains data structures and type definitions for the highlighting pipeline.
"""

from .state import ProgramState, pipeline
from .token import Token, Line, line_flatten, lines_split, lines_toDicts
from .context import HighlightContext, PreprocessorFrame, DirectiveOutcome
from .metadata import BlockMetadata

__all__ = [
    "ProgramState",
    "pipeline",
    "Token",
    "Line",
    "line_flatten",
    "lines_split",
    "lines_toDicts",
    "HighlightContext",
    "PreprocessorFrame",
    "DirectiveOutcome",
    "BlockMetadata",
]
