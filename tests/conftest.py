import datetime

import pycouchdb
import yaml

from blogcore.repos.source import SourceDocument
from blogcore.schemas.post import Post, PostFrontmatter


class FakeCouchDB:
    """
    Minimal in-memory CouchDB stand-in.
    Set track_calls=True to record the order of get() calls.
    """

    def __init__(self, docs: dict, track_calls: bool = False, error=None):
        self.docs = docs
        self.track_calls = track_calls
        self.error = error
        self.calls = []

    def get(self, doc_id: str) -> dict:
        if self.track_calls:
            self.calls.append(doc_id)
        if doc_id not in self.docs:
            raise pycouchdb.exceptions.NotFound(doc_id)
        return self.docs[doc_id]

    def all(self, include_docs: bool = True):
        if self.track_calls:
            self.calls.append(f"all(include_docs={include_docs})")
        if self.error is not None:
            raise self.error
        if include_docs:
            return [{"doc": doc} for doc in self.docs.values()]
        return list(self.docs.values())


class FakeParser:
    """
    Minimal markdown/content parser stand-in keyed by document id.
    """

    def __init__(self, content_by_id: dict[str, str]):
        self.content_by_id = content_by_id
        self.calls = []

    def get_markdown_content(self, doc: dict, slug: str = "") -> str:
        self.calls.append(doc.get("_id"))
        return self.content_by_id[doc.get("_id")]


class FakeSource:
    """
    Document source stand-in serving path -> text pairs in the given order.
    Values that are exceptions are raised when the document is read.
    """

    def __init__(self, documents: dict, error=None):
        self.documents = documents
        self.error = error
        self.list_calls = 0

    def list_documents(self):
        self.list_calls += 1
        if self.error is not None:
            raise self.error
        return [
            SourceDocument(path, self._reader(value))
            for path, value in self.documents.items()
        ]

    @staticmethod
    def _reader(value):
        def read():
            if isinstance(value, Exception):
                raise value
            return value

        return read


def render_post(body: str = "Post body.", **metadata) -> str:
    """Build a document with a YAML frontmatter block."""
    fields = {
        "title": "A post",
        "description": "What the post is about",
        "publishDate": datetime.date(2024, 1, 1),
    }
    fields.update(metadata)
    fields = {k: v for k, v in fields.items() if v is not None}
    return f"---\n{yaml.safe_dump(fields, sort_keys=False)}---\n{body}\n"


def make_post(
    slug: str,
    publish_date: str = "2024-01-01",
    draft: bool = False,
    tags=(),
    body: str = "",
) -> Post:
    return Post(
        slug=slug,
        frontmatter=PostFrontmatter(
            title=slug.replace("-", " ").title(),
            description=f"About {slug}",
            publishDate=publish_date,
            tags=tags,
            draft=draft,
        ),
        body=body,
    )
