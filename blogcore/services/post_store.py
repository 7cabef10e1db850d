"""
Post Store: turns the documents of a source into validated Post records.

Every call to ``load_all`` re-reads the source. A load either returns the
complete set of posts or raises; in tolerant mode documents that fail
validation are left out and recorded in ``errors`` instead.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

import frontmatter
import yaml
from frontmatter.default_handlers import YAMLHandler
from pydantic import ValidationError

from blogcore.errors import (
    DocumentReadError,
    DuplicateSlugError,
    InvalidDateError,
    PostLoadError,
    SchemaValidationError,
)
from blogcore.repos.source import DocumentSource, SourceDocument
from blogcore.schemas.post import DATE_FIELDS, Post, PostFrontmatter
from blogcore.utils import slug_from_path

logger = logging.getLogger(__name__)


class _TextTimestampLoader(yaml.SafeLoader):
    """SafeLoader that keeps YAML timestamps as plain strings."""


_TextTimestampLoader.add_constructor(
    "tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_yaml_str
)


class FrontmatterHandler(YAMLHandler):
    """
    YAML frontmatter handler that leaves dates unparsed, so impossible dates
    like 2024-02-30 reach schema validation with their field name.
    """

    def load(self, fm, **kwargs):
        kwargs.setdefault("Loader", _TextTimestampLoader)
        return super().load(fm, **kwargs)


class PostStore:
    def __init__(self, source: DocumentSource, strict: bool = True):
        self.source = source
        self.strict = strict
        self.errors: List[PostLoadError] = []
        self.snapshot: Optional[List[Post]] = None

    def load_all(self) -> List[Post]:
        self.errors = []
        documents = self.source.list_documents()
        slugged, errors = self._assign_slugs(documents)

        posts: List[Post] = []
        for slug, document in slugged:
            try:
                posts.append(build_post(slug, document))
            except PostLoadError as e:
                if self.strict:
                    logger.error(f"Failed to load post {document.path}: {e}")
                    raise
                logger.warning(f"Skipping post {document.path}: {e}")
                errors.append(e)

        self.errors = errors
        self.snapshot = posts
        logger.info(
            f"Loaded {len(posts)} posts ({len(errors)} skipped) "
            f"from {len(documents)} documents"
        )
        return list(posts)

    def _assign_slugs(
        self, documents: List[SourceDocument]
    ) -> Tuple[List[Tuple[str, SourceDocument]], List[PostLoadError]]:
        by_slug: Dict[str, List[str]] = defaultdict(list)
        slugged = []
        errors: List[PostLoadError] = []
        for document in documents:
            slug = slug_from_path(document.path)
            if not slug:
                err = SchemaValidationError(document.path, None, "path yields an empty slug")
                if self.strict:
                    logger.error(f"Failed to load post {document.path}: {err}")
                    raise err
                logger.warning(f"Skipping post {document.path}: {err}")
                errors.append(err)
                continue
            by_slug[slug].append(document.path)
            slugged.append((slug, document))

        for slug, paths in by_slug.items():
            if len(paths) > 1:
                raise DuplicateSlugError(slug, paths)
        return slugged, errors


def build_post(slug: str, document: SourceDocument) -> Post:
    """Read, split and validate a single document."""
    text = _read(slug, document)

    try:
        parsed = frontmatter.loads(text, handler=FrontmatterHandler())
    except yaml.YAMLError as e:
        raise SchemaValidationError(slug, None, f"malformed frontmatter: {e}") from e

    metadata = parsed.metadata or {}
    matter = validate_frontmatter(slug, metadata)
    return Post(
        slug=slug,
        frontmatter=matter,
        body=parsed.content,
        source_path=document.path,
    )


def validate_frontmatter(slug: str, metadata: dict) -> PostFrontmatter:
    try:
        matter = PostFrontmatter.model_validate(metadata)
    except ValidationError as e:
        raise _translate(slug, e) from e

    if matter.updatedDate and matter.updatedDate < matter.publishDate:
        raise InvalidDateError(
            slug,
            "updatedDate",
            f"{matter.updatedDate.isoformat()} is before publishDate "
            f"{matter.publishDate.isoformat()}",
        )
    return matter


def _translate(slug: str, exc: ValidationError) -> PostLoadError:
    error = exc.errors()[0]
    loc = error.get("loc") or ()
    field = str(loc[0]) if loc else None
    message = error.get("msg", str(exc))

    # an explicit null for a top-level field counts as absent
    missing = error.get("type") == "missing" or (
        len(loc) == 1 and error.get("input") is None
    )
    if field in DATE_FIELDS and not missing:
        return InvalidDateError(slug, field, message)
    if missing:
        message = "required field is missing"
    return SchemaValidationError(slug, field, message)


def _read(slug: str, document: SourceDocument) -> str:
    try:
        return document.read()
    except DocumentReadError as e:
        raise DocumentReadError(slug, e.field, e.message) from e
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(slug, None, str(e)) from e
