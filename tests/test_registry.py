"""
Namespace and class registry tests

Tests the namespace forms, using-alias class registration and idempotence
of both builders.
"""

import pytest

from codetint.models.context import HighlightContext
from codetint.models.token import Token
from codetint.lib.registry import namespaces_parse, classes_parse, lowercase_is


def line_of(text):
    """Single plain token line, enough for the regex probes"""
    return [Token(content=text, types=["plain"])]


class TestNamespaceForms:
    """Test every recognized namespace declaration form"""

    def test_namespace_block(self):
        """Nested namespace block registers every segment"""
        context = HighlightContext()
        namespaces_parse(context, line_of("namespace engine::render {\n"))

        assert "engine" in context.namespaces
        assert "render" in context.namespaces

    def test_using_namespace(self):
        """using namespace registers every segment"""
        context = HighlightContext()
        namespaces_parse(context, line_of("using namespace std::chrono;\n"))

        assert "chrono" in context.namespaces
        assert "std" in context.namespaces

    def test_namespace_alias(self):
        """Namespace alias registers alias and target"""
        context = HighlightContext()
        namespaces_parse(context, line_of("namespace fs = std::filesystem;\n"))

        assert "fs" in context.namespaces
        assert "filesystem" in context.namespaces
        assert "namespace" not in context.namespaces

    def test_using_alias_lowercase_segment(self):
        """Unknown lowercase segments of a using-alias are namespaces"""
        context = HighlightContext()
        namespaces_parse(context, line_of("using Handle = detail::Handle;\n"))

        assert "detail" in context.namespaces
        assert "Handle" not in context.namespaces

    def test_indented_declaration(self):
        """Leading whitespace does not hide a declaration"""
        context = HighlightContext()
        namespaces_parse(context, line_of("    namespace inner {\n"))

        assert "inner" in context.namespaces

    def test_unrelated_line(self):
        """Ordinary code registers nothing"""
        context = HighlightContext()
        before = set(context.namespaces)
        namespaces_parse(context, line_of("int value = 3;\n"))

        assert context.namespaces == before

    def test_commented_namespace_ignored(self):
        """Detectors are anchored at line start"""
        context = HighlightContext()
        namespaces_parse(context, line_of("// namespace hidden {\n"))

        assert "hidden" not in context.namespaces


class TestClassRegistration:
    """Test class registration from tokens and using-aliases"""

    def test_lexer_class_names(self):
        """Tokens typed class-name are registered as-is"""
        context = HighlightContext()
        line = [
            Token("class", ["keyword"]),
            Token(" ", ["plain"]),
            Token("Widget", ["class-name"]),
            Token("\n", ["plain"]),
        ]
        classes_parse(context, line)

        assert "Widget" in context.classes

    def test_using_alias_scenario(self):
        """using Vec = std::vector<int>; registers Vec"""
        context = HighlightContext()
        classes_parse(context, line_of("using Vec = std::vector<int>;\n"))

        assert "Vec" in context.classes
        assert "int" not in context.classes
        assert "std" not in context.classes

    def test_using_alias_template_arguments(self):
        """Non-lowercase template arguments become classes"""
        context = HighlightContext()
        classes_parse(context, line_of("using Map = std::unordered_map<Key, Value*>;\n"))

        assert {"Map", "Key", "Value"} <= context.classes
        assert "Value*" not in context.classes

    def test_lowercase_alias_is_not_a_class(self):
        """Lowercase aliases follow the variable naming convention"""
        context = HighlightContext()
        classes_parse(context, line_of("using size_type = unsigned int;\n"))

        assert "size_type" not in context.classes
        assert "unsigned" not in context.classes


class TestIdempotence:
    """Registering the same line twice changes nothing"""

    @pytest.mark.parametrize("text", [
        "namespace engine::render {\n",
        "using namespace std::chrono;\n",
        "namespace fs = std::filesystem;\n",
        "using Vec = std::vector<Point*>;\n",
    ])
    def test_reregistration(self, text):
        """Second pass leaves both registries unchanged"""
        context = HighlightContext()
        namespaces_parse(context, line_of(text))
        classes_parse(context, line_of(text))
        namespaces, classes = set(context.namespaces), set(context.classes)

        namespaces_parse(context, line_of(text))
        classes_parse(context, line_of(text))

        assert context.namespaces == namespaces
        assert context.classes == classes


class TestLowercaseRule:
    """Test the naming convention helper"""

    def test_lowercase(self):
        assert lowercase_is("detail")
        assert lowercase_is("snake_case")

    def test_not_lowercase(self):
        assert not lowercase_is("Widget")
        assert not lowercase_is("vec3")
