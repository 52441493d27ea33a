#!/usr/bin/env python3
"""
codetint - C++ aware syntax highlighting for code blocks

Lexes a source file with Pygments, re-classifies its tokens with the C++
heuristics (namespaces, classes, member variables, macros and inactive
preprocessor branches) and writes the result as a standalone HTML page or
as a JSON token stream.

Usage:
    codetint inputdir/ outputdir/ --inputFile widget.cpp

    The highlighted block is written to outputdir/ as widget.html (or
    widget.json with --format json).

Examples:
    # Basic highlighting
    codetint . output/ --inputFile widget.cpp

    # Diff markers, hidden prelude and line numbers
    codetint . output/ --inputFile widget.cpp --meta "hidden:{1-3} added:{5} line-numbers:{enabled}"

    # Token stream for another renderer
    codetint . output/ --inputFile widget.cpp --format json -vv
"""

import json
import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from .config import appsettings
from .lib import (
    CodeBlockRenderer,
    Theme,
    ThemeError,
    htmlDocument_build,
    metadata_parse,
    source_highlight,
    themes_listAvailable,
    __version__,
    LOG,
    state_connectToLogger,
)
from .models import ProgramState, pipeline, lines_toDicts


# File suffixes mapped to language names
SUFFIX_LANGUAGES = {
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".hh": "cpp",
    ".h": "cpp",
}

# Define CLI arguments
parser = ArgumentParser(
    description="codetint - C++ aware syntax highlighting for code blocks",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument("inputdir", type=str, help="Directory containing the source file")

parser.add_argument("outputdir", type=str, help="Directory for the rendered output")

parser.add_argument(
    "--inputFile", required=True, type=str, help="Source file to highlight (relative to inputdir)"
)

parser.add_argument(
    "--language",
    default=None,
    type=str,
    help="Language of the source. Defaults to one derived from the file suffix",
)

parser.add_argument(
    "--meta",
    default="",
    type=str,
    help="Code fence metadata, e.g. 'added:{1-3} hidden:{5} line-numbers:{enabled}'",
)

parser.add_argument(
    "--format",
    default="html",
    choices=["html", "json"],
    help="Output format",
)

parser.add_argument(
    "--theme",
    default=None,
    type=str,
    help="Theme for HTML output. Defaults to CODETINT_DEFAULT_THEME",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the source file
            - language: Language name (from --language or the suffix)
            - envOK: True if environment is valid

    Exits:
        1 if the input file is missing
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    if not state.language:
        state.language = SUFFIX_LANGUAGES.get(input_file.suffix.lower(), "text")
    LOG(f"Language: {state.language}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the source file and parse the code fence metadata.

    Args:
        inputstate: Program state with inputSourceFile set

    Returns:
        ProgramState with added fields:
            - source: Source text
            - blockMetadata: Parsed metadata

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.source = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(state.source)} characters from {state.inputSourceFile.name}", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    state.blockMetadata = metadata_parse(state.meta)
    return state


def source_highlightStage(inputstate: ProgramState) -> ProgramState:
    """
    Lex and highlight the source.

    Args:
        inputstate: Program state with source and language

    Returns:
        ProgramState with added field:
            - highlightedLines: Highlighted token lines
    """
    state = inputstate.copy()

    LOG("Highlighting source...", level=1)
    state.highlightedLines = source_highlight(state.source, state.language or "text")
    LOG(f"Highlighted {len(state.highlightedLines)} lines", level=2)
    return state


def output_render(inputstate: ProgramState) -> ProgramState:
    """
    Write the highlighted block as HTML or JSON.

    Args:
        inputstate: Program state with highlightedLines

    Returns:
        ProgramState with added field:
            - renderResult: Dict containing status, output_file, line_count

    Exits:
        1 if there is nothing to render or the theme cannot be loaded
    """
    state = inputstate.copy()

    if state.highlightedLines is None:
        print("Error: No highlighted source available", file=sys.stderr)
        sys.exit(1)

    stem = Path(state.inputFile).stem
    if state.format == "json":
        output_file = state.outputdir / f"{stem}.json"
        output_file.write_text(json.dumps(lines_toDicts(state.highlightedLines), indent=2), encoding="utf-8")
    else:
        theme_name = state.theme or appsettings.default_theme
        try:
            theme = Theme(theme_name)
        except ThemeError as e:
            print(f"Theme error: {e}", file=sys.stderr)
            print(f"Available themes: {', '.join(themes_listAvailable()) or 'none'}", file=sys.stderr)
            sys.exit(1)
        LOG(f"Loaded theme: {theme.name}", level=2)

        renderer = CodeBlockRenderer(state.highlightedLines, state.blockMetadata, state.language or "text")
        document = htmlDocument_build(renderer.html_render(), theme.css_generate(), title=state.inputFile)
        output_file = state.outputdir / f"{stem}.html"
        output_file.write_text(document, encoding="utf-8")

    LOG(f"Wrote {output_file}", level=2)
    state.renderResult = {
        "status": True,
        "output_file": str(output_file),
        "line_count": len(state.highlightedLines),
    }
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display results to the user.

    Args:
        inputstate: Program state with renderResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    LOG("✓ Highlighting successful!", level=1)
    LOG(f"  Output: {state.renderResult['output_file']}", level=1)
    LOG(f"  Lines: {state.renderResult['line_count']}", level=1)
    return state


def main(argv: Optional[List[str]] = None) -> ProgramState:
    """
    Main entry point - highlight a source file and write the result.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. source_read: Read the source and parse metadata
        3. source_highlightStage: Lex and highlight
        4. output_render: Write HTML or JSON
        5. results_report: Display results to user

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Final ProgramState
    """
    options: Namespace = parser.parse_args(argv)

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=Path(options.inputdir), outputdir=Path(options.outputdir)
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    return pipeline(state, env_check, source_read, source_highlightStage, output_render, results_report)


if __name__ == "__main__":
    main()
