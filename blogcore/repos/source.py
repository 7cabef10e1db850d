from typing import Callable, List, Protocol


class SourceDocument:
    """A raw post document: its path relative to the content root and a reader."""

    def __init__(self, path: str, reader: Callable[[], str]):
        self.path = path
        self._reader = reader

    def read(self) -> str:
        return self._reader()

    def __repr__(self) -> str:
        return f"SourceDocument({self.path!r})"


class DocumentSource(Protocol):
    def list_documents(self) -> List[SourceDocument]: ...
