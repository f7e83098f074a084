"""Editor Surfaces - Where the user actually types."""

import os
import shlex
import subprocess
import sys
import tempfile
from abc import ABC, abstractmethod

from cmit.output import print_warning

INSTRUCTIONS = (
    "# Lines starting with '#' are ignored. Save and quit to commit;\n"
    "# exit with an error (e.g. :cq in vim) to cancel."
)


class EditorSurface(ABC):
    """Abstract interactive surface for an EditorSession."""

    @abstractmethod
    def show(self, text: str) -> None:
        pass

    @abstractmethod
    def receive(self) -> tuple[str, str | None]:
        """Block until the user acts: ("save", text) or ("cancel", None)."""
        pass

    def warn(self, message: str) -> None:
        print_warning(message)

    def close(self) -> None:
        pass


def default_editor() -> str:
    editor = os.environ.get('VISUAL') or os.environ.get('EDITOR')
    if not editor:
        editor = 'notepad' if sys.platform == 'win32' else 'vi'
    return editor


class ExternalEditorSurface(EditorSurface):
    """Edits the message in $VISUAL/$EDITOR through a temp .gitcommit file.

    A zero exit status saves. A non-zero exit, a missing editor or Ctrl-C
    count as closing the surface, which cancels.
    """

    def __init__(self, editor: str | None = None, title: str = "cmit: edit commit message"):
        self.editor = editor or default_editor()
        self.title = title
        self._text = ""
        self._process: subprocess.Popen | None = None
        self._closed = False

    def show(self, text: str) -> None:
        self._text = text

    def _render(self) -> str:
        text = self._text.rstrip('\n')
        if INSTRUCTIONS in text:
            return text + '\n'
        return f"{text}\n\n# {self.title}\n{INSTRUCTIONS}\n"

    def receive(self) -> tuple[str, str | None]:
        if self._closed:
            return "cancel", None

        tmp = tempfile.NamedTemporaryFile(mode='w', suffix='.gitcommit', delete=False, encoding='utf-8')
        try:
            tmp.write(self._render())
            tmp.close()
            try:
                self._process = subprocess.Popen([*shlex.split(self.editor), tmp.name])
                code = self._process.wait()
            except KeyboardInterrupt:
                self._terminate()
                return "cancel", None
            except OSError as e:
                self.warn(f"Could not start editor '{self.editor}': {e}")
                return "cancel", None
            finally:
                self._process = None

            if code != 0 or self._closed:
                return "cancel", None
            with open(tmp.name, 'r', encoding='utf-8') as f:
                return "save", f.read()
        finally:
            try:
                os.unlink(tmp.name)
            except OSError as e:
                # Log to stderr so temp files don't silently accumulate
                print(f"Warning: Could not delete temp file {tmp.name}: {e}", file=sys.stderr)

    def close(self) -> None:
        self._closed = True
        self._terminate()

    def _terminate(self) -> None:
        process = self._process
        if process is not None and process.poll() is None:
            process.terminate()
