"""Unit tests for core/render.py"""

import re

import pytest

from postpress.core.errors import UnclosedCodeFence
from postpress.core.render import PRESETS, render_body


JS_SOURCE = "var app = angular.module('app', []);"


def _normalize(text: str) -> str:
    return " ".join(text.split())


def test_tagged_fence_is_verbatim_and_annotated():
    """Fence content appears unaltered and carries its language tag."""
    body = f"Intro.\n\n```javascript\n{JS_SOURCE}\n```\n"
    rendered = render_body(body)
    assert JS_SOURCE in rendered.html
    assert 'class="language-javascript"' in rendered.html
    assert 'data-lang="javascript"' in rendered.html
    assert len(rendered.code_blocks) == 1
    block = rendered.code_blocks[0]
    assert block.language == "javascript"
    assert block.source == JS_SOURCE + "\n"
    assert block.closed
    assert block.line == 3


def test_fence_content_is_not_reinterpreted():
    """Markdown syntax inside a fence is left as literal text."""
    rendered = render_body("```md\n# not a heading\n*not emphasis*\n```\n")
    assert "<h1>" not in rendered.html
    assert "<em>" not in rendered.html
    assert "# not a heading\n*not emphasis*\n" in rendered.html


def test_fence_content_is_html_escaped():
    rendered = render_body("```html\n<div>x</div>\n```\n")
    assert "&lt;div&gt;x&lt;/div&gt;" in rendered.html
    assert rendered.code_blocks[0].source == "<div>x</div>\n"


def test_untagged_fence_has_no_language():
    rendered = render_body("```\nplain\n```\n")
    assert "<pre><code>plain\n</code></pre>" in rendered.html
    assert rendered.code_blocks[0].language == ""


def test_only_first_word_of_info_is_language():
    rendered = render_body("```python title=example.py\nx = 1\n```\n")
    assert rendered.code_blocks[0].language == "python"
    assert 'data-lang="python"' in rendered.html


def test_tilde_fence_inside_blockquote_is_closed():
    rendered = render_body("> ~~~js\n> f()\n> ~~~\n")
    assert rendered.code_blocks[0].closed
    assert rendered.warnings == []


@pytest.mark.parametrize("md,fragment", [
    ("# Title\n", "<h1>Title</h1>"),
    ("Some *emphasis* here.\n", "<em>emphasis</em>"),
    ("A [link](https://example.com).\n", '<a href="https://example.com">link</a>'),
    ("- one\n- two\n", "<li>one</li>"),
    ("1. first\n", "<ol>"),
])
def test_standard_markdown_constructs(md, fragment):
    assert fragment in render_body(md).html


def test_plain_text_is_identity_up_to_whitespace():
    """Text without Markdown syntax comes back unchanged apart from paragraph wrapping."""
    body = "Modules keep an application tidy\nand easy to reason about.\n\nA second paragraph follows.\n"
    html = render_body(body).html
    assert _normalize(re.sub(r"</?p>", " ", html)) == _normalize(body)


def test_unclosed_fence_swallows_remainder_and_warns():
    """An unclosed fence becomes code to the end of the body and yields a warning."""
    body = "Intro\n\n```python\nx = 1\n*still code*\n"
    rendered = render_body(body, "posts/a.md")
    assert "<em>" not in rendered.html
    assert "x = 1\n*still code*\n" in rendered.code_blocks[0].source
    assert not rendered.code_blocks[0].closed
    assert len(rendered.warnings) == 1
    warning = rendered.warnings[0]
    assert isinstance(warning, UnclosedCodeFence)
    assert warning.source == "posts/a.md"
    assert warning.line == 3


def test_unclosed_fence_line_honours_offset():
    rendered = render_body("```js\nf()\n", "a.md", line_offset=6)
    assert rendered.warnings[0].line == 7


def test_unclosed_fence_raises_in_strict_mode():
    with pytest.raises(UnclosedCodeFence):
        render_body("```js\nf()\n", "a.md", strict=True)


def test_unclosed_fence_is_logged(caplog):
    with caplog.at_level("WARNING", logger="postpress.core.render"):
        render_body("```js\nf()\n", "a.md")
    assert "never closed" in caplog.text


def test_commonmark_preset():
    rendered = render_body("| a |\n|---|\n| b |\n", preset="commonmark")
    assert "<table>" not in rendered.html
    assert "<table>" in render_body("| a |\n|---|\n| b |\n", preset="gfm-like").html


@pytest.mark.parametrize("preset", PRESETS)
def test_every_allowed_preset_tags_fenced_code(preset):
    """Whatever preset is configured, fenced code stays a tagged code block."""
    rendered = render_body(f"```javascript\n{JS_SOURCE}\n```\n", "a.md", preset)
    assert [b.language for b in rendered.code_blocks] == ["javascript"]
    assert 'data-lang="javascript"' in rendered.html
    assert JS_SOURCE in rendered.html


@pytest.mark.parametrize("separator", ["\u2028", "\f", "\x1c", "\x85"])
def test_unicode_line_separators_do_not_shift_fence_lines(separator):
    """Only newlines count as line breaks; a closed fence after U+2028 or \\f stays closed."""
    body = f"Intro{separator}continued\n\n```js\nf()\n```\n"
    rendered = render_body(body, "a.md", strict=True)
    assert rendered.warnings == []
    assert rendered.code_blocks[0].closed
    assert rendered.code_blocks[0].line == 3


def test_crlf_fence_is_closed():
    rendered = render_body("Intro\r\n\r\n```js\r\nf()\r\n```\r\n", "a.md", strict=True)
    assert rendered.code_blocks[0].closed
    assert rendered.code_blocks[0].line == 3
