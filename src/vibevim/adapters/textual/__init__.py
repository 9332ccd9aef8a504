"""Textual host for the editing core.

Only the controller is exported here so it can be used without importing
``textual`` itself; the runnable app lives in :mod:`.app`.
"""

from .controller import (
    EditorView,
    TextualUIHooks,
    TextualVimAdapter,
    translate_textual_key,
)

__all__ = [
    "EditorView",
    "TextualUIHooks",
    "TextualVimAdapter",
    "translate_textual_key",
]
