"""
Document context - the most recently uploaded document's text.

By default there is exactly one slot for the whole process: an upload from
any requester replaces the text every other requester sees. With
shared=False each session id gets its own slot instead. Session ids come
from the client, so at most max_sessions slots are kept and the least
recently used one is evicted first.

Neither mode takes a lock. Concurrent uploads race and the last write wins.
"""

from collections import OrderedDict

from acadgpt.config import DEFAULT_SESSION_ID, MAX_DOCUMENT_SESSIONS, SHARE_DOCUMENT_CONTEXT


class DocumentContextStore:
    """
    Holds uploaded-document text keyed by session id.

    Example:
        store = DocumentContextStore()
        store.set("alice", "marksheet text...")
        store.get("bob")   # same text, the slot is shared by default
    """

    def __init__(self, shared: bool | None = None, max_sessions: int | None = None):
        self.shared = SHARE_DOCUMENT_CONTEXT if shared is None else shared
        self.max_sessions = max_sessions or MAX_DOCUMENT_SESSIONS
        self._texts: OrderedDict[str, str] = OrderedDict()

    def _key(self, session_id: str | None) -> str:
        if self.shared or not session_id:
            return DEFAULT_SESSION_ID
        return session_id

    def __len__(self) -> int:
        return len(self._texts)

    def get(self, session_id: str | None = None) -> str:
        """Current document text for the session ("" if nothing was uploaded)."""
        key = self._key(session_id)
        if key not in self._texts:
            return ""
        self._texts.move_to_end(key)
        return self._texts[key]

    def set(self, session_id: str | None, text: str) -> None:
        """Replace the session's document text."""
        key = self._key(session_id)
        self._texts[key] = text
        self._texts.move_to_end(key)
        while len(self._texts) > self.max_sessions:
            self._texts.popitem(last=False)

    def clear(self, session_id: str | None = None) -> None:
        self._texts.pop(self._key(session_id), None)
