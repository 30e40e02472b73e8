"""Typed failures reported by the gallery core."""


class GalleryError(Exception):
    """Base class for failures surfaced to callers."""


class ValidationFailure(GalleryError):
    """Input was rejected before any storage call was made."""


class NotFound(GalleryError):
    """A referenced album, photo or entry does not exist."""

    def __init__(self, kind: str, ident: object) -> None:
        super().__init__(f"{kind} {ident} not found")
        self.kind = kind
        self.ident = ident


class StorageFailure(GalleryError):
    """The storage backend rejected or could not complete an operation."""

    def __init__(self, action: str, detail: str | None = None) -> None:
        message = f"Storage failure during {action}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.action = action


class ConcurrentReorder(StorageFailure):
    """An ordering scope changed between read and write."""

    def __init__(self, scope: str) -> None:
        super().__init__("reorder", f"scope {scope} was modified concurrently")
        self.scope = scope
