"""Markdown body rendering with verbatim, language-tagged fenced code blocks"""

import logging
import re

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml, unescapeAll

from postpress.core.errors import UnclosedCodeFence
from postpress.core.models import CodeBlock, RenderedBody


logger = logging.getLogger(__name__)

# "zero" is excluded: it disables fenced code blocks.
PRESETS = ("commonmark", "default", "gfm-like", "js-default")

# Line breaks as markdown-it counts them when mapping tokens to source lines.
NEWLINES_RE = re.compile(r"\r\n?|\n")


def _language(token) -> str:
    """First word of a fence info string, e.g. 'javascript' for '```javascript title=x'."""
    info = unescapeAll(token.info).strip() if token.info else ""
    return info.split(maxsplit=1)[0] if info else ""


def _render_fence(self, tokens, idx, options, env) -> str:
    """Emit fence content escaped but otherwise untouched, tagged with its language."""
    token = tokens[idx]
    lang = _language(token)
    attrs = f' class="{options.langPrefix}{escapeHtml(lang)}" data-lang="{escapeHtml(lang)}"' if lang else ""
    return f"<pre><code{attrs}>{escapeHtml(token.content)}</code></pre>\n"


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    md = MarkdownIt(preset, options_update={"linkify": False})
    md.add_render_rule("fence", _render_fence)
    return md


def _is_closed(token, source_lines: list[str]) -> bool:
    """True when the last line spanned by a fence token is its closing fence."""
    start, end = token.map
    if end - 1 <= start or end > len(source_lines):
        return False
    closing = source_lines[end - 1].lstrip(" \t>").rstrip()
    marker = token.markup[0]
    return len(closing) >= len(token.markup) and closing == marker * len(closing)


def _code_blocks(tokens: list, source_lines: list[str], line_offset: int) -> list[CodeBlock]:
    return [
        CodeBlock(
            language=_language(tok),
            source=tok.content,
            line=tok.map[0] + 1 + line_offset,
            closed=_is_closed(tok, source_lines),
        )
        for tok in tokens
        if tok.type == "fence" and tok.map
    ]


def render_body(
    body: str,
    source: str = None,
    preset: str = "gfm-like",
    strict: bool = False,
    line_offset: int = 0,
    ) -> RenderedBody:
    """Render a Markdown body to HTML and collect its fenced code blocks.

    An unclosed fence swallows the rest of the body as code and yields an
    UnclosedCodeFence warning; with strict=True the warning is raised instead.
    `line_offset` shifts reported line numbers past a stripped front-matter block.
    """
    md = _make_parser(preset)
    env: dict = {}
    tokens = md.parse(body, env)
    blocks = _code_blocks(tokens, NEWLINES_RE.split(body), line_offset)

    warnings = []
    for block in blocks:
        if block.closed:
            continue
        warning = UnclosedCodeFence(source, block.line)
        if strict:
            raise warning
        logger.warning("%s", warning)
        warnings.append(warning)

    html = md.renderer.render(tokens, md.options, env)
    return RenderedBody(html=html, code_blocks=blocks, warnings=warnings)
