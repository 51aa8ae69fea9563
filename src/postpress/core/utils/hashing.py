"""SHA-256 hashing used to skip rewriting unchanged output pages"""

import hashlib
from pathlib import Path


def sha256(content: str) -> str:
    """Return hex-encoded SHA-256 of content encoded as UTF-8."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def file_sha256(path: Path) -> str | None:
    """Hash of an existing file's bytes, or None when the file is absent."""
    if not path.is_file():
        return None
    return hashlib.sha256(path.read_bytes()).hexdigest()
