"""
Inline annotation tests

Tests collapsing of [[types,value]] blocks and the operator strip pass.
"""

from codetint.models.token import Token
from codetint.lib.annotations import annotation_parse, annotations_apply, operatorType_strip


def bracketed(*inner):
    """Tokens for '[[' inner ']]' the way the lexer emits them"""
    tokens = [Token("[", ["punctuation"]), Token("[", ["punctuation"])]
    tokens += [Token(content, ["plain"]) for content in inner]
    tokens += [Token("]", ["punctuation"]), Token("]", ["punctuation"])]
    return tokens


class TestAnnotationParse:
    """Test parsing of the text between the brackets"""

    def test_single_type(self):
        token = annotation_parse("class-name,Widget")

        assert token == Token("Widget", ["class-name"])

    def test_dotted_types(self):
        token = annotation_parse("enum-name.class-name,Mode")

        assert token.types == ["enum-name", "class-name"]
        assert token.content == "Mode"

    def test_value_with_comma(self):
        """Only the first comma separates types from value"""
        token = annotation_parse("plain,a, b")

        assert token.content == "a, b"

    def test_attribute_rejected(self):
        assert annotation_parse("nodiscard") is None

    def test_unknown_type_rejected(self):
        assert annotation_parse("deprecated,reason") is None

    def test_empty_value_rejected(self):
        assert annotation_parse("class-name, ") is None


class TestAnnotationsApply:
    """Test collapsing inside a line"""

    def test_collapse(self):
        line = bracketed("class", "-", "name", ",", "Widget") + [Token(" ", ["plain"]), Token("w", ["plain"])]
        updated = annotations_apply(line)

        assert [token.content for token in updated] == ["Widget", " ", "w"]
        assert updated[0].types == ["class-name"]

    def test_attribute_kept(self):
        line = bracketed("nodiscard") + [Token(" ", ["plain"])]
        updated = annotations_apply(line)

        assert [token.content for token in updated] == ["[", "[", "nodiscard", "]", "]", " "]

    def test_unclosed_block(self):
        """An unterminated block is left as-is"""
        line = [Token("[", ["punctuation"]), Token("[", ["punctuation"]), Token("plain", ["plain"])]

        assert annotations_apply(line) == line

    def test_two_blocks(self):
        line = bracketed("class-name,A") + [Token(" ", ["plain"])] + bracketed("member-variable,b")
        updated = annotations_apply(line)

        assert [(token.content, token.types) for token in updated] == [
            ("A", ["class-name"]), (" ", ["plain"]), ("b", ["member-variable"]),
        ]

    def test_array_index_untouched(self):
        line = [Token("a", ["plain"]), Token("[", ["punctuation"]), Token("0", ["number"]),
                Token("]", ["punctuation"])]

        assert annotations_apply(line) == line


class TestOperatorStrip:
    """Test removal of the operator type"""

    def test_operator_becomes_plain(self):
        updated = operatorType_strip([Token("=", ["operator"])])

        assert updated[0].types == ["plain"]

    def test_other_types_kept(self):
        updated = operatorType_strip([Token("+", ["operator", "undefined"]), Token("x", ["plain"])])

        assert updated[0].types == ["undefined"]
        assert updated[1].types == ["plain"]
