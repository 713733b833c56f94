"""Open-document registry backing the history manager's liveness checks."""

from __future__ import annotations

import itertools
from typing import Dict, Iterator, Optional

from location_history.history import DocumentId

from .document import Document


class DocumentNotFoundError(KeyError):
    """Raised when a closed or unknown document id is looked up."""

    def __init__(self, document: DocumentId) -> None:
        super().__init__(f"Document {document} is not open")
        self.document = document


class Workspace:
    """Holds every open document; ids are never reused after ``close``."""

    def __init__(self) -> None:
        self._documents: Dict[DocumentId, Document] = {}
        self._ids = itertools.count(1)

    def open(self, name: str, text: str = "") -> DocumentId:
        document_id = DocumentId(next(self._ids))
        self._documents[document_id] = Document(id=document_id, name=name, text=text)
        return document_id

    def close(self, document: DocumentId) -> Document:
        try:
            return self._documents.pop(document)
        except KeyError as exc:
            raise DocumentNotFoundError(document) from exc

    def get(self, document: DocumentId) -> Document:
        try:
            return self._documents[document]
        except KeyError as exc:
            raise DocumentNotFoundError(document) from exc

    def replace(self, document: Document) -> Document:
        if document.id not in self._documents:
            raise DocumentNotFoundError(document.id)
        self._documents[document.id] = document
        return document

    def find(self, name: str) -> Optional[DocumentId]:
        for document in self._documents.values():
            if document.name == name:
                return document.id
        return None

    def name_of(self, document: DocumentId) -> str:
        return self.get(document).name

    def documents(self) -> Iterator[Document]:
        yield from self._documents.values()

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, document: object) -> bool:
        return document in self._documents

    # BufferRegistry

    def is_live(self, document: DocumentId) -> bool:
        return document in self._documents

    def content_length(self, document: DocumentId) -> int:
        return self.get(document).length


__all__ = ["Workspace", "DocumentNotFoundError"]
