"""Publishing error taxonomy; every error names the document it came from"""


class PublishError(Exception):
    """Base class for all pipeline failures tied to a source document."""

    def __init__(self, message: str, source: str = None):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class MalformedFrontMatter(PublishError):
    """Front-matter block is unterminated or contains an unparseable line."""

    def __init__(self, source: str, line: int, reason: str = "unterminated front-matter block"):
        self.line = line
        self.reason = reason
        super().__init__(f"line {line}: {reason}", source)


class MissingMetadata(PublishError):
    """Required front-matter keys are absent."""

    def __init__(self, source: str, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"missing front-matter key(s): {', '.join(self.missing)}", source)


class LayoutNotFound(PublishError):
    """Document (or a layout) references a layout that does not exist."""

    def __init__(self, layout: str, source: str = None):
        self.layout = layout
        super().__init__(f"layout '{layout}' not found", source)


class LayoutCycle(PublishError):
    """Layout chain refers back to a layout already applied."""

    def __init__(self, chain: list[str], source: str = None):
        self.chain = list(chain)
        super().__init__(f"layout cycle: {' -> '.join(self.chain)}", source)


class UnclosedCodeFence(PublishError):
    """Fenced code block opened but never closed.

    Collected as a warning on the rendered body; raised only in strict mode.
    """

    def __init__(self, source: str, line: int):
        self.line = line
        super().__init__(f"line {line}: code fence opened but never closed", source)
