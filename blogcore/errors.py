"""Errors raised while loading posts from a document source."""

from typing import Optional, Sequence


class PostStoreError(Exception):
    """Base exception for all post loading errors."""


class PostLoadError(PostStoreError):
    """A single document could not be turned into a Post."""

    def __init__(self, slug: str, field: Optional[str], message: str):
        self.slug = slug
        self.field = field
        self.message = message
        where = f"{slug}.{field}" if field else slug
        super().__init__(f"{where}: {message}")


class SchemaValidationError(PostLoadError):
    """A required frontmatter field is missing or has the wrong shape."""


class InvalidDateError(PostLoadError):
    """A date field does not parse, or updatedDate precedes publishDate."""


class DocumentReadError(PostLoadError):
    """The raw content of a document could not be read."""


class DuplicateSlugError(PostStoreError):
    def __init__(self, slug: str, paths: Sequence[str]):
        self.slug = slug
        self.paths = list(paths)
        super().__init__(
            f"Duplicate slug '{slug}' from documents: {', '.join(self.paths)}"
        )


class StoreUnavailableError(PostStoreError):
    """The document source could not be read at all."""
