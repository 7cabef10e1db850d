import logging

import pycouchdb
import requests

from blogcore.errors import DocumentReadError

logger = logging.getLogger(__name__)


class ContentParser:
    """Reassemble Markdown text stored as LiveSync-style CouchDB chunks."""

    def __init__(self, db):
        self.db = db

    def get_markdown_content(self, doc: dict, slug: str = "") -> str:
        """Get the full markdown content from a document (decoded as text)."""
        slug = slug or doc.get("path") or doc.get("_id", "")
        raw = self._get_raw_content(doc, slug)
        if isinstance(raw, bytes):
            return _decode(raw, slug)
        return raw

    def _get_raw_content(self, doc: dict, slug: str) -> str | bytes:
        # Small notes carry their body inline
        for key in ("data", "content"):
            if key in doc:
                return doc[key]

        children = doc.get("children")
        if not children:
            raise DocumentReadError(slug, None, "document has no content or chunks")

        parts = []
        for c in children:
            try:
                child_doc = self.db.get(c)
            except pycouchdb.exceptions.NotFound:
                raise DocumentReadError(slug, None, f"missing chunk {c}") from None
            except (pycouchdb.exceptions.Error, requests.RequestException) as e:
                logger.error(f"Error fetching chunk {c} of {slug}: {e}")
                raise DocumentReadError(slug, None, f"could not fetch chunk {c}: {e}") from e

            if child_doc.get("type") != "leaf" or "data" not in child_doc:
                raise DocumentReadError(slug, None, f"chunk {c} is not a data leaf")
            data = child_doc["data"]
            if isinstance(data, bytes):
                data = _decode(data, slug, c)
            parts.append(data)

        return "".join(parts)


def _decode(data: bytes, slug: str, chunk: str | None = None) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        where = f"chunk {chunk}" if chunk else "inline content"
        raise DocumentReadError(slug, None, f"{where} is not valid UTF-8: {e}") from e
