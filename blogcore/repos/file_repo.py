import logging
from pathlib import Path
from typing import Iterable, List, Mapping

from blogcore.errors import StoreUnavailableError
from blogcore.repos.source import SourceDocument

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".md", ".mdx")


class FilesystemPostsRepo:
    """Posts stored as Markdown files below a content directory."""

    def __init__(self, root, extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        self.root = Path(root)
        self.extensions = tuple(ext.lower() for ext in extensions)

    def list_documents(self) -> List[SourceDocument]:
        if not self.root.is_dir():
            raise StoreUnavailableError(f"Content directory not found: {self.root}")

        try:
            paths = sorted(
                p
                for p in self.root.rglob("*")
                if p.is_file() and p.suffix.lower() in self.extensions
            )
        except OSError as e:
            raise StoreUnavailableError(
                f"Could not scan content directory {self.root}: {e}"
            ) from e

        logger.debug(f"Discovered {len(paths)} documents under {self.root}")
        return [
            SourceDocument(p.relative_to(self.root).as_posix(), self._reader(p))
            for p in paths
        ]

    @staticmethod
    def _reader(path: Path):
        return lambda: path.read_text(encoding="utf-8")


class BundledPostsRepo:
    """Posts embedded in the application as a path -> text mapping."""

    def __init__(self, documents: Mapping[str, str]):
        self.documents = dict(documents)

    def list_documents(self) -> List[SourceDocument]:
        return [
            SourceDocument(path, self._reader(text))
            for path, text in sorted(self.documents.items())
        ]

    @staticmethod
    def _reader(text: str):
        return lambda: text
