from __future__ import annotations
from typing import Dict, Optional


class InMemoryBlobStore:
    """
    Dict-backed blob store.
    Used by tests and for throwaway runs; nothing survives the process.
    """
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._blobs: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self._blobs[key] = value
