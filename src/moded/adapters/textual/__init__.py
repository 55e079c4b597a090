"""Textual host for the editor.

Only the controller is imported here; the app module needs a running
terminal and is loaded by the console entry point.
"""

from .controller import BUS_EVENTS, TextualEditorAdapter, TextualUIHooks

__all__ = ["BUS_EVENTS", "TextualEditorAdapter", "TextualUIHooks"]
