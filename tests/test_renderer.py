"""
HTML renderer tests

Tests hidden lines, diff overrides, line numbers, collapsing and escaping.
"""

from codetint.models.metadata import BlockMetadata
from codetint.models.token import Token
from codetint.lib.renderer import CodeBlockRenderer, htmlDocument_build


def block(*contents):
    """One plain-token line per content"""
    return [[Token(content, ["plain"]), Token("\n", ["plain"])] for content in contents]


class TestLines:
    """Test line selection"""

    def test_all_lines_rendered(self):
        html = CodeBlockRenderer(block("alpha", "beta")).html_render()

        assert '<span class="plain">alpha</span>' in html
        assert '<span class="plain">beta</span>' in html
        assert html.startswith('<div class="language-cpp">')

    def test_hidden_lines_removed(self):
        """Hidden lines use the source numbering"""
        renderer = CodeBlockRenderer(block("alpha", "beta", "gamma"), BlockMetadata(hidden=[1, 3]))

        assert renderer.lines_visible() == block("beta")
        html = renderer.html_render()
        assert "alpha" not in html
        assert "gamma" not in html

    def test_show_lines(self):
        html = CodeBlockRenderer(block("alpha", "beta", "gamma"), BlockMetadata(lineCount=2)).html_render()

        assert "beta" in html
        assert "gamma" not in html

    def test_escaping(self):
        lines = [[Token("a<b && c", ["plain"])]]
        html = CodeBlockRenderer(lines).html_render()

        assert "a&lt;b &amp;&amp; c" in html

    def test_token_classes(self):
        lines = [[Token("Vec", ["token", "class-name", "undefined"])]]
        html = CodeBlockRenderer(lines).html_render()

        assert '<span class="token class-name undefined">Vec</span>' in html


class TestOverrides:
    """Test diff and highlight overrides"""

    def test_added_after_hidden(self):
        """Overrides use the numbering of the displayed lines"""
        metadata = BlockMetadata(hidden=[1], added=[1])
        html = CodeBlockRenderer(block("alpha", "beta", "gamma"), metadata).html_render()

        assert '<div class="added"><span class="plain">beta</span>' in html
        assert '<div class="code diff">' in html
        assert '<span class="added">+</span>' in html

    def test_removed_symbol(self):
        metadata = BlockMetadata(removed=[2])
        html = CodeBlockRenderer(block("alpha", "beta"), metadata).html_render()

        assert '<span class="removed">-</span>' in html
        assert '<div class="removed"><span class="plain">beta</span>' in html

    def test_highlight_without_diff(self):
        """Highlighted lines get no diff symbol column"""
        metadata = BlockMetadata(highlighted=[1])
        html = CodeBlockRenderer(block("alpha"), metadata).html_render()

        assert '<div class="highlighted">' in html
        assert "+" not in html

    def test_no_overrides(self):
        html = CodeBlockRenderer(block("alpha")).html_render()

        assert '<div class="code">' in html
        assert 'class="metadata"' not in html


class TestLineNumbers:
    """Test the line number column"""

    def test_numbers_padded(self):
        metadata = BlockMetadata(useLineNumbers=True)
        html = CodeBlockRenderer(block(*[f"l{i}" for i in range(10)]), metadata).html_render()

        assert '<div class="line-number"> 1</div>' in html
        assert '<div class="line-number">10</div>' in html

    def test_numbers_after_hidden(self):
        metadata = BlockMetadata(useLineNumbers=True, hidden=[1])
        html = CodeBlockRenderer(block("alpha", "beta"), metadata).html_render()

        assert html.count('class="line-number"') == 1
        assert '<div class="line-number">1</div>' in html


class TestHeader:
    """Test the title banner"""

    def test_title(self):
        html = CodeBlockRenderer(block("alpha"), BlockMetadata(title="main.cpp")).html_render()

        assert '<span class="title">main.cpp</span>' in html

    def test_no_title(self):
        html = CodeBlockRenderer(block("alpha")).html_render()

        assert '<div class="code-header no-banner"></div>' in html


class TestDocument:
    """Test the standalone page wrapper"""

    def test_document(self):
        page = htmlDocument_build("<div>x</div>", ".code-block { color: red; }", title="a<b>.cpp")

        assert page.startswith("<!DOCTYPE html>")
        assert "<title>a&lt;b&gt;.cpp</title>" in page
        assert ".code-block { color: red; }" in page
        assert "<div>x</div>" in page
