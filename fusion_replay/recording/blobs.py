"""
Transient image handles. A handle stays readable until it is revoked; the
session revokes a frame's handles as soon as that frame is superseded.
"""
from __future__ import annotations

import mimetypes
import threading
import uuid
from dataclasses import dataclass
from typing import Dict, Iterable, Optional


@dataclass(frozen=True)
class Blob:
    data: bytes
    media_type: str


def guess_media_type(path: str) -> str:
    mt, _ = mimetypes.guess_type(path)
    return mt or "application/octet-stream"


class BlobRegistry:
    def __init__(self):
        self._blobs: Dict[str, Blob] = {}
        # created from assembly worker threads, revoked from the event loop
        self._lock = threading.Lock()

    def create(self, data: bytes, media_type: str = "application/octet-stream") -> str:
        handle = uuid.uuid4().hex
        with self._lock:
            self._blobs[handle] = Blob(data=data, media_type=media_type)
        return handle

    def get(self, handle: str) -> Optional[Blob]:
        with self._lock:
            return self._blobs.get(handle)

    def revoke(self, handle: Optional[str]) -> bool:
        if handle is None:
            return False
        with self._lock:
            return self._blobs.pop(handle, None) is not None

    def revoke_all(self, handles: Iterable[str]) -> int:
        return sum(1 for h in list(handles) if self.revoke(h))

    def clear(self):
        with self._lock:
            self._blobs.clear()

    def __len__(self) -> int:
        return len(self._blobs)

    def __contains__(self, handle: object) -> bool:
        return handle in self._blobs
