"""Page assembly: wrap a rendered body in its layout chain"""

from postpress.core.errors import LayoutCycle
from postpress.core.layouts import LayoutStore
from postpress.core.models import Layout, PostMetadata, RenderedBody, RenderedPage


def layout_chain(layouts: LayoutStore, name: str, source: str = None) -> list[Layout]:
    """Resolve name and its parents, innermost first.

    Raises LayoutNotFound for any missing link and LayoutCycle on a repeat.
    """
    chain: list[Layout] = []
    seen: list[str] = []
    current = name
    while current:
        if current in seen:
            raise LayoutCycle(seen + [current], source)
        seen.append(current)
        layout = layouts.get(current, source)
        chain.append(layout)
        current = layout.parent
    return chain


def assemble_page(
    metadata: PostMetadata,
    body: RenderedBody,
    layouts: LayoutStore,
    source: str = None,
    ) -> RenderedPage:
    """Render body into metadata.layout, then into each parent layout in turn."""
    variables = metadata.variables()
    html = body.html
    for layout in layout_chain(layouts, metadata.layout, source):
        html = layouts.render(layout.name, html, variables, source)
    return RenderedPage(
        source=source,
        metadata=metadata,
        layout=metadata.layout,
        html=html,
        warnings=list(body.warnings),
    )
