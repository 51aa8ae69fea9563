"""Pipeline step functions: discover, render, write, and batch build orchestration"""

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from postpress.core.assemble import assemble_page, layout_chain
from postpress.core.errors import PublishError
from postpress.core.frontmatter import split_frontmatter
from postpress.core.layouts import LayoutStore
from postpress.core.models import Document, PostMetadata, RenderedPage
from postpress.core.render import render_body
from postpress.core.utils.hashing import file_sha256, sha256


logger = logging.getLogger(__name__)

MD_EXTENSIONS = {".md", ".markdown"}


@dataclass
class BuildReport:
    """Outcome of a batch build; one entry per discovered document."""
    written: list[tuple[str, Path, str]] = field(default_factory=list)    # (source, dest, status)
    failures: list[tuple[str, PublishError]] = field(default_factory=list)
    warnings: list[PublishError] = field(default_factory=list)

    @property
    def counts(self) -> dict[str, int]:
        counts = {"created": 0, "updated": 0, "unchanged": 0, "failed": len(self.failures)}
        for _, _, status in self.written:
            counts[status] += 1
        return counts

    @property
    def ok(self) -> bool:
        return not self.failures


def discover_files(path: Path) -> list[Path]:
    """Return sorted Markdown files under path, or [path] if a single Markdown file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob("*") if p.is_file() and p.suffix in MD_EXTENSIONS)


def read_document(path: Path) -> Document:
    """Read a UTF-8 document; a leading byte-order mark is dropped."""
    return Document(source=str(path), text=path.read_text(encoding="utf-8-sig"))


def render_document(
    document: Document,
    layouts: LayoutStore,
    preset: str = "gfm-like",
    strict: bool = False,
    ) -> RenderedPage:
    """Extract -> validate metadata -> render body -> assemble into layout. No I/O."""
    frontmatter, body = split_frontmatter(document.text, document.source)
    metadata = PostMetadata.from_frontmatter(frontmatter, document.source)
    rendered = render_body(
        body, document.source, preset, strict,
        line_offset=frontmatter.raw.count("\n"),
    )
    return assemble_page(metadata, rendered, layouts, document.source)


def check_document(document: Document, layouts: LayoutStore) -> PostMetadata:
    """Validate front matter and layout references without rendering the body."""
    frontmatter, _ = split_frontmatter(document.text, document.source)
    metadata = PostMetadata.from_frontmatter(frontmatter, document.source)
    layout_chain(layouts, metadata.layout, document.source)
    return metadata


def output_path(page: RenderedPage, output_dir: Path) -> Path:
    """Map a page's permalink to a file under output_dir.

    '/a/b/' -> a/b/index.html, '/a/b.html' -> a/b.html, '/a/b' -> a/b.html.
    """
    permalink = page.metadata.permalink.strip()
    rel = PurePosixPath(permalink.lstrip("/"))
    if ".." in rel.parts:
        raise PublishError(f"permalink escapes output directory: {permalink!r}", page.source)
    if permalink.endswith("/") or not rel.parts:
        rel = rel / "index.html"
    elif not rel.suffix:
        rel = rel.with_suffix(".html")
    return output_dir.joinpath(*rel.parts)


def write_page(page: RenderedPage, output_dir: Path) -> tuple[Path, str]:
    """Write page HTML unless the existing file is identical.

    Returns (destination, status) with status one of created/updated/unchanged.
    """
    dest = output_path(page, output_dir)
    existing = file_sha256(dest)
    if existing == sha256(page.html):
        return dest, "unchanged"
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_bytes(page.html.encode("utf-8"))
    return dest, "created" if existing is None else "updated"


def run_build(
    path: Path,
    layouts: LayoutStore,
    output_dir: Path,
    preset: str = "gfm-like",
    strict: bool = False,
    ) -> BuildReport:
    """Render and write every document under path; failures are collected, not raised."""
    report = BuildReport()
    claimed: dict[Path, str] = {}      # destination -> source that wrote it
    for p in discover_files(Path(path)):
        try:
            page = render_document(read_document(p), layouts, preset, strict)
            dest = output_path(page, output_dir)
            if dest in claimed:
                raise PublishError(f"permalink {page.metadata.permalink!r} already used by {claimed[dest]}", str(p))
            claimed[dest] = str(p)
            dest, status = write_page(page, output_dir)
        except PublishError as e:
            logger.error("%s", e)
            report.failures.append((str(p), e))
            continue
        except (OSError, UnicodeDecodeError) as e:
            logger.error("%s: %s", p, e)
            report.failures.append((str(p), PublishError(str(e), str(p))))
            continue
        logger.info("%s -> %s (%s)", p, dest, status)
        report.written.append((str(p), dest, status))
        report.warnings.extend(page.warnings)
    return report
