import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import List, Optional

import pycouchdb
import requests

from blogcore.errors import StoreUnavailableError
from blogcore.repos.source import SourceDocument
from blogcore.settings import settings

logger = logging.getLogger(__name__)


class CouchPostsRepo:
    """Posts synced into CouchDB by Obsidian LiveSync, one plain doc per note."""

    def __init__(
        self,
        couch_db,
        parser,
        prefix: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.db = couch_db
        self.parser = parser
        self.prefix = settings.BLOG_PREFIX if prefix is None else prefix
        self.timeout = settings.STORE_TIMEOUT_SECONDS if timeout is None else timeout
        self._abandoned = None

    def list_documents(self) -> List[SourceDocument]:
        # A started listing cannot be cancelled; its thread runs until CouchDB
        # answers. Refuse to stack another one on top of it meanwhile.
        if self._abandoned is not None and not self._abandoned.done():
            raise StoreUnavailableError(
                "A previous CouchDB listing timed out and is still running"
            )
        self._abandoned = None

        pool = ThreadPoolExecutor(max_workers=1)
        future = pool.submit(self.list_blog_docs)
        try:
            docs = future.result(timeout=self.timeout)
        except FuturesTimeoutError:
            self._abandoned = future
            raise StoreUnavailableError(
                f"CouchDB did not answer within {self.timeout}s"
            ) from None
        except (pycouchdb.exceptions.Error, requests.RequestException) as e:
            raise StoreUnavailableError(f"Could not list CouchDB documents: {e}") from e
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        documents = []
        for doc in sorted(docs, key=self._path):
            path = self._path(doc).removeprefix(self.prefix)
            documents.append(SourceDocument(path, self._reader(doc, path)))
        logger.debug(f"Listed {len(documents)} blog documents from CouchDB")
        return documents

    def list_blog_docs(self) -> List[dict]:
        all_docs = [row.get("doc", row) for row in self.db.all(include_docs=True)]
        return [doc for doc in all_docs if self._is_valid(doc)]

    def _reader(self, doc: dict, path: str):
        return lambda: self.parser.get_markdown_content(doc, path)

    @staticmethod
    def _path(doc: dict) -> str:
        return doc.get("path", doc.get("_id", ""))

    def _is_valid(self, doc: dict | None) -> bool:
        if not doc:
            return False
        return (
            doc.get("type") == "plain"
            and self._path(doc).startswith(self.prefix)
            and not doc.get("deleted", False)
        )
