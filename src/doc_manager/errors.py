"""Exceptions raised by doc_manager."""


class DocManagerError(Exception):
    """Base class for doc_manager errors."""


class IndexBuildError(DocManagerError):
    """Raised when an index build cannot complete."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to index {path}: {reason}")
        self.path = path
        self.reason = reason
