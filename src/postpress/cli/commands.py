"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from postpress.config import Settings, load_config
from postpress.core.errors import PublishError
from postpress.core.layouts import LAYOUT_SUFFIX, LayoutStore
from postpress.core.pipeline import (
    check_document,
    discover_files,
    read_document,
    render_document,
    run_build,
)


STARTER_LAYOUTS = {
    "default": """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <link rel="canonical" href="{{ permalink }}">
</head>
<body>
{{ content }}
</body>
</html>
""",
    "post": """\
---
layout: default
---
<article class="post" data-path="{{ path }}">
  <h1>{{ title }}</h1>
{{ content }}
</article>
""",
}


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail("Invalid configuration", e)


def _layouts(settings: Settings) -> LayoutStore:
    """Load the layout store, failing cleanly on a malformed layout file."""
    try:
        return LayoutStore.from_directory(Path(settings.layouts_dir))
    except (PublishError, OSError, UnicodeDecodeError) as e:
        _fail("Cannot load layouts", e)


def _echo_warnings(warnings: list[PublishError]) -> None:
    for w in warnings:
        typer.echo(f"Warning: {w}", err=True)


def build_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory of posts (default: content_dir)")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    layouts_dir: Annotated[Optional[str], typer.Option("--layouts-dir", help="Layout templates directory")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    strict: Annotated[Optional[bool], typer.Option("--strict/--no-strict", help="Fail on unclosed code fences")] = None,
    ):
    """Render every post under PATH into its layout and write HTML pages."""
    settings = _settings(overrides={
        "content_dir": path, "output_dir": out, "layouts_dir": layouts_dir,
        "parser_config": parser, "strict": strict,
    })
    source = Path(settings.content_dir)
    if not source.exists():
        _fail(f"No such file or directory: {source}")
    output_dir = Path(settings.output_dir)

    layouts = _layouts(settings)
    report = run_build(source, layouts, output_dir, settings.parser_config, settings.strict)

    for src, dest, status in report.written:
        typer.echo(f"  {status}: {src} -> {dest}")
    _echo_warnings(report.warnings)
    for src, err in report.failures:
        typer.echo(f"Error: {err}", err=True)

    counts = report.counts
    typer.echo(
        f"Build complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged, "
        f"{counts['failed']} failed"
    )
    if not report.ok:
        raise typer.Exit(1)


def render_cmd(
    path: Annotated[str, typer.Argument(help="Markdown post to render")],
    layouts_dir: Annotated[Optional[str], typer.Option("--layouts-dir", help="Layout templates directory")] = None,
    parser: Annotated[Optional[str], typer.Option("--parser-config", help="MarkdownIt preset name")] = None,
    strict: Annotated[Optional[bool], typer.Option("--strict/--no-strict", help="Fail on unclosed code fences")] = None,
    ):
    """Render a single post and print the page HTML to stdout."""
    settings = _settings(overrides={"layouts_dir": layouts_dir, "parser_config": parser, "strict": strict})
    layouts = _layouts(settings)
    try:
        page = render_document(read_document(Path(path)), layouts, settings.parser_config, settings.strict)
    except PublishError as e:
        _fail(str(e))
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)
    _echo_warnings(page.warnings)
    typer.echo(page.html, nl=False)


def check_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory of posts (default: content_dir)")] = None,
    layouts_dir: Annotated[Optional[str], typer.Option("--layouts-dir", help="Layout templates directory")] = None,
    ):
    """Validate front matter and layout references without writing anything."""
    settings = _settings(overrides={"content_dir": path, "layouts_dir": layouts_dir})
    layouts = _layouts(settings)
    files = discover_files(Path(settings.content_dir))
    if not files:
        typer.echo(f"No Markdown files found under {settings.content_dir}.")
        raise typer.Exit(1)

    failed = 0
    for p in files:
        try:
            meta = check_document(read_document(p), layouts)
        except (PublishError, OSError, UnicodeDecodeError) as e:
            failed += 1
            typer.echo(f"Error: {e}", err=True)
            continue
        typer.echo(f"  ok: {p} (layout={meta.layout}, permalink={meta.permalink})")
    typer.echo(f"Checked {len(files)} document(s), {failed} failed")
    if failed:
        raise typer.Exit(1)


def init_cmd(
    layouts_dir: Annotated[Optional[str], typer.Option("--layouts-dir", help="Layout templates directory")] = None,
    force: Annotated[bool, typer.Option("--force", help="Overwrite existing starter layouts")] = False,
    ):
    """Write starter 'default' and 'post' layouts into the layouts directory."""
    settings = _settings(overrides={"layouts_dir": layouts_dir})
    target = Path(settings.layouts_dir)
    target.mkdir(parents=True, exist_ok=True)
    for name, text in STARTER_LAYOUTS.items():
        dest = target / f"{name}{LAYOUT_SUFFIX}"
        if dest.exists() and not force:
            typer.echo(f"  skipped (exists): {dest}")
            continue
        dest.write_text(text, encoding="utf-8")
        typer.echo(f"  wrote: {dest}")
    typer.echo(f"Layouts initialized at: {target}")
