"""In-memory reference host: documents, workspace registry, editing session."""

from .document import Document
from .session import EditorSession, EventBus
from .workspace import DocumentNotFoundError, Workspace

__all__ = [
    "Document",
    "DocumentNotFoundError",
    "EditorSession",
    "EventBus",
    "Workspace",
]
