"""Front-matter extraction and line-oriented `key: value` metadata parsing"""

import logging
import re

from postpress.core.errors import MalformedFrontMatter
from postpress.core.models import FrontMatter


logger = logging.getLogger(__name__)

MARKER = "---"

# Lines end at "\n" only; \f, \x1c and U+2028 are ordinary characters.
LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")


def _is_marker(line: str) -> bool:
    """True for a `---` line, ignoring trailing whitespace and line terminators."""
    return line.rstrip() == MARKER


def _unquote(value: str) -> str:
    """Drop one pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def parse_metadata(lines: list[str], source: str = None, first_line: int = 1) -> dict[str, str]:
    """Parse `key: value` lines into an ordered dict of plain strings.

    Blank lines and `#` comments are skipped. Values are never coerced.
    Duplicate keys: the last occurrence wins and the key keeps its first position.
    `first_line` is the 1-based document line number of lines[0], used in errors.
    """
    entries: dict[str, str] = {}
    for offset, line in enumerate(lines):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition(":")
        key = key.strip()
        if not sep or not key:
            raise MalformedFrontMatter(source, first_line + offset, f"expected 'key: value', got {stripped!r}")
        if key in entries:
            logger.debug("%s: duplicate front-matter key %r, last value wins", source, key)
        entries[key] = _unquote(value.strip())
    return entries


def split_frontmatter(text: str, source: str = None) -> tuple[FrontMatter, str]:
    """Return (frontmatter, body); `frontmatter.raw + body == text` always holds.

    Text that does not open with a marker line has empty front matter and is all body.
    An opening marker with no closing marker raises MalformedFrontMatter.
    """
    lines = LINE_RE.findall(text)
    if not lines or not _is_marker(lines[0]):
        return FrontMatter(), text

    for i in range(1, len(lines)):
        if _is_marker(lines[i]):
            entries = parse_metadata(lines[1:i], source, first_line=2)
            raw = "".join(lines[: i + 1])
            return FrontMatter(entries=entries, raw=raw), text[len(raw):]

    raise MalformedFrontMatter(source, len(lines))


def join_frontmatter(frontmatter: FrontMatter, body: str) -> str:
    """Reassemble a document from its extracted parts."""
    return frontmatter.raw + body
