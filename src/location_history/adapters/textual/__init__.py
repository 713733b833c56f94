"""Textual adapter: controller plus a runnable demo application."""

from .controller import DocumentView, TextualHistoryAdapter, TextualUIHooks

__all__ = ["DocumentView", "TextualHistoryAdapter", "TextualUIHooks"]
