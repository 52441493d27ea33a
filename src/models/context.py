"""
Highlighting context models

All state the C++ highlighter accumulates while scanning one code block
lives on a HighlightContext. A fresh context is created for every code
block, so registries and scope stacks never leak from one snippet into the
next.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set


# Standard library class names known before scanning starts
SEED_CLASSES: List[str] = [
    # standard class types
    "cout",
    "endl",
    "unique_ptr",
    "weak_ptr",
    "shared_ptr",
    "type",  # std:: ... ::type

    # standard containers
    "vector",
    "unordered_map",
    "unordered_set",
    "stack",
    "queue",
    "deque",
]

SEED_NAMESPACES: List[str] = ["std"]

# Built-in type keywords (and the author's fixed-width aliases) that never
# name a class or namespace inside a using-alias type expression
BUILTIN_KEYWORDS: Set[str] = {
    "bool", "b8",
    "char", "u8", "i8",
    "short", "u16", "i16",
    "int", "u32", "i32",
    "float", "f32",
    "double", "f64",
    "void",
    "unsigned", "signed",
    "const",
}


@dataclass
class PreprocessorFrame:
    """
    One open #if chain

    Attributes:
        hasActiveBranch: Whether a branch of this chain has been taken
        originalState: Defined state before the #if opened the chain
    """
    hasActiveBranch: bool
    originalState: bool


@dataclass
class DirectiveOutcome:
    """
    Result of feeding one line to the preprocessor state machine

    Attributes:
        forceDefine: Render the current line as defined regardless of state
        isNextDefined: Defined state for the lines that follow
    """
    forceDefine: bool
    isNextDefined: bool


@dataclass
class HighlightContext:
    """
    Per-code-block registries and scope stacks

    Attributes:
        namespaces: Known namespace names (append-only)
        classes: Known class / type names (append-only)
        macros: Names #define'd inside active code (append-only)
        memberVariables: Identifiers harvested from class bodies
        preprocessorScopes: Open #if chains, innermost last
        memberScopes: One flag per open brace; True for class/struct/enum bodies
        isDefined: Whether the code currently being scanned is active
    """
    namespaces: Set[str] = field(default_factory=lambda: set(SEED_NAMESPACES))
    classes: Set[str] = field(default_factory=lambda: set(SEED_CLASSES))
    macros: Set[str] = field(default_factory=set)
    memberVariables: List[str] = field(default_factory=list)
    preprocessorScopes: List[PreprocessorFrame] = field(default_factory=list)
    memberScopes: List[bool] = field(default_factory=list)
    isDefined: bool = True

    @classmethod
    def context_create(
        cls,
        extra_namespaces: Optional[Iterable[str]] = None,
        extra_classes: Optional[Iterable[str]] = None,
    ) -> "HighlightContext":
        """
        Create a fresh context with optional additional seed names

        Args:
            extra_namespaces: Namespace names known up front (e.g. "chrono")
            extra_classes: Class names known up front

        Returns:
            New HighlightContext
        """
        context = cls()
        context.namespaces.update(extra_namespaces or [])
        context.classes.update(extra_classes or [])
        return context

    def name_isKnown(self, name: str) -> bool:
        """Check whether a name is a registered class, namespace or macro"""
        return name in self.classes or name in self.namespaces or name in self.macros

    def memberVariable_has(self, name: str) -> bool:
        return name in self.memberVariables
