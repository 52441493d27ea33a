"""
Preprocessor state machine tests

Tests #define registration, #if/#elif/#else/#endif chains, nesting and
the diagnostics for unbalanced directives.
"""

import pytest
from loguru import logger

from codetint.models.context import HighlightContext
from codetint.models.token import Token
from codetint.lib.preprocessor import PreprocessorTracker
from codetint.lib.cpp import CppHighlighter
from codetint.lib.lexer import source_tokenize


def line_of(text):
    return [Token(content=text, types=["plain"])]


def states_run(*texts):
    """Feed lines through a tracker, returning (rendered defined, next defined) per line"""
    context = HighlightContext()
    tracker = PreprocessorTracker(context)
    results = []
    for text in texts:
        outcome = tracker.step(line_of(text))
        rendered = outcome.forceDefine or context.isDefined
        context.isDefined = outcome.isNextDefined
        results.append((rendered, outcome.isNextDefined))
    return context, results


def undefined_lines(source):
    """1-based numbers of lines whose tokens all carry 'undefined'"""
    highlighter = CppHighlighter()
    lines = highlighter.lines_process(source_tokenize(source))
    numbers = [
        index + 1 for index, line in enumerate(lines)
        if line and all("undefined" in token.types for token in line)
    ]
    return highlighter, numbers


@pytest.fixture
def errors():
    """Capture loguru error records"""
    messages = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="ERROR")
    yield messages
    logger.remove(handler_id)


class TestDefine:
    """Test macro registration"""

    def test_define_registers_macro(self):
        """#define in active code registers the name"""
        context, results = states_run("#define FEATURE_X 1\n")

        assert "FEATURE_X" in context.macros
        assert results == [(True, True)]

    def test_define_in_inactive_branch(self):
        """#define in an inactive branch registers nothing"""
        context, _ = states_run(
            "#if defined(NEVER)\n",
            "#define HIDDEN\n",
            "#endif\n",
        )

        assert "HIDDEN" not in context.macros

    def test_lowercase_define_ignored(self):
        """Only uppercase macro names are tracked"""
        context, _ = states_run("#define helper(x) x\n")

        assert context.macros == set()


class TestConditionalChains:
    """Test branch selection"""

    def test_if_else_scenario(self):
        """#if defined(FOO) with FOO undefined: only the #if branch is inactive"""
        context, results = states_run(
            "#if defined(FOO)\n",
            "  int x;\n",
            "#else\n",
            "  int y;\n",
            "#endif\n",
        )

        assert [rendered for rendered, _ in results] == [True, False, True, True, True]
        assert context.isDefined is True

    def test_defined_macro_selects_if_branch(self):
        """A #define'd macro activates its #if branch"""
        _, results = states_run(
            "#define FOO\n",
            "#if defined(FOO)\n",
            "  int x;\n",
            "#else\n",
            "  int y;\n",
            "#endif\n",
        )

        assert [rendered for rendered, _ in results] == [True, True, True, True, False, True]

    def test_branch_exclusivity(self):
        """At most one branch of a chain is active"""
        _, results = states_run(
            "#define A\n",
            "#define B\n",
            "#if defined(A)\n",
            "  int a;\n",
            "#elif defined(B)\n",
            "  int b;\n",
            "#else\n",
            "  int c;\n",
            "#endif\n",
        )
        body = [results[3][0], results[5][0], results[7][0]]

        assert body == [True, False, False]

    def test_elif_taken_when_if_fails(self):
        """#elif activates when no earlier branch did"""
        _, results = states_run(
            "#define B\n",
            "#if defined(A)\n",
            "  int a;\n",
            "#elif defined(B)\n",
            "  int b;\n",
            "#else\n",
            "  int c;\n",
            "#endif\n",
        )
        body = [results[2][0], results[4][0], results[6][0]]

        assert body == [False, True, False]

    def test_nested_chain_in_inactive_branch(self):
        """Directives nested in inactive code render inactive"""
        context, results = states_run(
            "#if defined(OUTER)\n",
            "#if defined(INNER)\n",
            "  int a;\n",
            "#else\n",
            "  int b;\n",
            "#endif\n",
            "#endif\n",
            "int c;\n",
        )

        assert [rendered for rendered, _ in results] == [True, False, False, False, False, False, True, True]
        assert context.isDefined is True

    def test_stack_balance(self):
        """Balanced directives leave an empty stack and the initial state"""
        context, _ = states_run(
            "#define A\n",
            "#if defined(A)\n",
            "#if defined(B)\n",
            "#elif defined(A)\n",
            "#else\n",
            "#endif\n",
            "#endif\n",
        )

        assert context.preprocessorScopes == []
        assert context.isDefined is True

    def test_commented_directive_ignored(self):
        """A directive inside a line comment does not match"""
        context, results = states_run("// #if defined(FOO)\n", "int x;\n")

        assert context.preprocessorScopes == []
        assert results[1] == (True, True)


class TestUnbalancedDirectives:
    """Test diagnostics for directives without an opening #if"""

    def test_stray_endif(self, errors):
        """#endif on an empty stack logs and keeps the state"""
        context, results = states_run("#endif\n", "int x;\n")

        assert len(errors) == 1
        assert "#endif" in errors[0]
        assert results == [(True, True), (True, True)]
        assert context.preprocessorScopes == []

    def test_stray_else(self, errors):
        """#else on an empty stack logs"""
        states_run("#else\n")

        assert len(errors) == 1
        assert "#else" in errors[0]

    def test_stray_elif(self, errors):
        """#elif on an empty stack logs"""
        states_run("#elif defined(FOO)\n")

        assert len(errors) == 1
        assert "#elif" in errors[0]


class TestUndefinedTagging:
    """Test the undefined type on lexed source"""

    def test_if_else_scenario_tokens(self):
        """Only the line inside the failed #if carries undefined"""
        source = "#if defined(FOO)\n  int x;\n#else\n  int y;\n#endif\n"
        highlighter, numbers = undefined_lines(source)

        assert numbers == [2]
        assert highlighter.context.isDefined is True
        assert highlighter.context.preprocessorScopes == []

    def test_undefined_not_duplicated(self):
        """Every token of an inactive line carries undefined exactly once"""
        source = "#if defined(FOO)\n  int x;\n#endif\n"
        highlighter = CppHighlighter()
        lines = highlighter.lines_process(source_tokenize(source))

        for token in lines[1]:
            assert token.types.count("undefined") == 1
