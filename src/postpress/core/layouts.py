"""Named layout templates backed by a jinja2 environment"""

import logging
from pathlib import Path
from typing import Any

from jinja2 import DictLoader, Environment, TemplateError
from markupsafe import Markup

from postpress.core.errors import LayoutNotFound, PublishError
from postpress.core.frontmatter import split_frontmatter
from postpress.core.models import Layout


logger = logging.getLogger(__name__)

LAYOUT_SUFFIX = ".html"


def parse_layout(name: str, text: str, source: str = None) -> Layout:
    """Split a layout file into its template and optional parent layout name."""
    frontmatter, template = split_frontmatter(text, source or name)
    return Layout(name=name, template=template, parent=frontmatter.get("layout") or None)


class LayoutStore:
    """Read-only collection of layouts keyed by name.

    Templates are rendered with HTML autoescaping; the `content` variable is
    treated as already-rendered markup and inserted verbatim.
    """

    def __init__(self, layouts: dict[str, Layout]):
        self._layouts = dict(layouts)
        self.env = Environment(
            loader=DictLoader({name: layout.template for name, layout in self._layouts.items()}),
            autoescape=True,
            keep_trailing_newline=True,
        )

    @classmethod
    def from_mapping(cls, templates: dict[str, str]) -> "LayoutStore":
        """Build a store from {name: layout text}; layout text may carry front matter."""
        return cls({name: parse_layout(name, text) for name, text in templates.items()})

    @classmethod
    def from_directory(cls, path: Path) -> "LayoutStore":
        """Load every *.html file under path, named by file stem."""
        path = Path(path)
        layouts = {}
        if path.is_dir():
            for p in sorted(path.glob(f"*{LAYOUT_SUFFIX}")):
                layouts[p.stem] = parse_layout(p.stem, p.read_text(encoding="utf-8-sig"), str(p))
        else:
            logger.warning("Layouts directory %s does not exist", path)
        logger.debug("Loaded %d layout(s) from %s: %s", len(layouts), path, ", ".join(layouts))
        return cls(layouts)

    def __contains__(self, name: str) -> bool:
        return name in self._layouts

    def names(self) -> list[str]:
        return sorted(self._layouts)

    def get(self, name: str, source: str = None) -> Layout:
        """Return the named layout or raise LayoutNotFound; there is no default."""
        try:
            return self._layouts[name]
        except KeyError:
            raise LayoutNotFound(name, source) from None

    def render(self, name: str, content: str, variables: dict[str, Any], source: str = None) -> str:
        """Substitute content and variables into a single layout (no parent chaining)."""
        self.get(name, source)
        try:
            template = self.env.get_template(name)
            return template.render({**variables, "content": Markup(content)})
        except TemplateError as e:
            raise PublishError(f"layout '{name}': {e}", source) from e
