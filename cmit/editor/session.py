"""Editor Session - Let the user revise a candidate message before commit.

A session talks to its surface through two messages: an outbound
``show(text)`` and an inbound ``("save", text)`` or ``("cancel", None)``
from ``receive()``. The outcome is a Future settled exactly once with the
final text, or None when the session was cancelled, superseded or closed.
"""

import threading
from concurrent.futures import Future
from enum import Enum

from cmit.editor.surface import EditorSurface


class SessionState(Enum):
    LOADING = "loading"
    READY = "ready"
    CLOSED = "closed"


def strip_comments(text: str) -> str:
    """Drop lines whose first non-whitespace character is '#'."""
    return '\n'.join(line for line in text.split('\n') if not line.lstrip().startswith('#'))


class EditorSession:
    """One interactive edit of a commit message."""

    def __init__(self, surface: EditorSurface, max_length: int | None = None):
        self.surface = surface
        self.max_length = max_length
        self.state = SessionState.LOADING
        self.future: Future = Future()
        self.text = ""

    @property
    def is_open(self) -> bool:
        return self.state is not SessionState.CLOSED

    def deliver(self, text: str) -> None:
        """Send text to the surface. The session accepts saves from here on."""
        if self.state is SessionState.CLOSED:
            return
        self.text = text
        self.surface.show(text)
        self.state = SessionState.READY

    def handle_save(self, raw: str) -> bool:
        """Validate a save. Returns True once the session has resolved."""
        if self.state is not SessionState.READY:
            return False

        message = strip_comments(raw).strip()
        if not message:
            if self.max_length is not None:
                self._resolve(None)
                return True
            self.surface.warn("Commit message cannot be empty.")
            return False

        if self.max_length is not None and len(message) > self.max_length:
            self.surface.warn(
                f"Commit message is {len(message)} characters, "
                f"the limit is {self.max_length}."
            )
            return False

        self._resolve(message)
        return True

    def cancel(self) -> None:
        self._resolve(None)

    def dispose(self) -> None:
        """Close the session; an unfinished one resolves as cancelled."""
        self._resolve(None)

    def run(self, text: str) -> str | None:
        """Show text and wait for the user. None means cancelled."""
        self.deliver(text)
        while not self.future.done():
            action, payload = self.surface.receive()
            if self.future.done():
                break
            if action == "save":
                if not self.handle_save(payload or ""):
                    # Re-present exactly what the user saved
                    self.deliver(payload or "")
            else:
                self.cancel()
        return self.future.result()

    def _resolve(self, value: str | None) -> None:
        if self.future.done():
            return
        self.state = SessionState.CLOSED
        self.future.set_result(value)
        self.surface.close()


class SessionSlot:
    """Holds at most one live EditorSession.

    Installing a new session disposes the previous occupant first, so two
    sessions are never current at the same time.
    """

    def __init__(self):
        self._session: EditorSession | None = None
        self._lock = threading.Lock()

    @property
    def current(self) -> EditorSession | None:
        return self._session

    def replace(self, session: EditorSession) -> EditorSession:
        with self._lock:
            previous, self._session = self._session, None
            if previous is not None:
                previous.dispose()
            self._session = session
        return session

    def release(self, session: EditorSession) -> None:
        with self._lock:
            if self._session is session:
                self._session = None

    def open(self, surface: EditorSurface, max_length: int | None = None) -> EditorSession:
        return self.replace(EditorSession(surface, max_length=max_length))

    def edit(self, text: str, surface: EditorSurface, max_length: int | None = None) -> str | None:
        """Run a full session in this slot and return the user's text."""
        session = self.open(surface, max_length=max_length)
        try:
            return session.run(text)
        finally:
            self.release(session)
