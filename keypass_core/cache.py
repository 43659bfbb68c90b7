# keypass_core/cache.py
from __future__ import annotations
import threading
from typing import Dict, Optional

from keypass_core.roles import is_canonical


class PassphraseCache:
    """
    In-memory role -> passphrase mapping for one signing session.

    Only canonical roles are ever stored; set() silently ignores delegation
    (and any other non-canonical) roles. Nothing is written to disk and
    entries live until clear() or until the object is discarded.
    """

    def __init__(self):
        self._entries: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, role: str) -> Optional[str]:
        with self._lock:
            return self._entries.get(role)

    def set(self, role: str, passphrase: str) -> None:
        if not is_canonical(role):
            return
        with self._lock:
            self._entries[role] = passphrase

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, role: str) -> bool:
        with self._lock:
            return role in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
