"""Interactive Editing Package"""

from cmit.editor.session import EditorSession, SessionSlot, SessionState, strip_comments
from cmit.editor.surface import EditorSurface, ExternalEditorSurface, INSTRUCTIONS, default_editor

__all__ = [
    "EditorSession",
    "SessionSlot",
    "SessionState",
    "strip_comments",
    "EditorSurface",
    "ExternalEditorSurface",
    "INSTRUCTIONS",
    "default_editor",
]
