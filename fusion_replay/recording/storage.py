"""
Storage providers: byte/text access to files inside a recording directory.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Union

from ..core import config as C


@dataclass(frozen=True)
class DirEntry:
    name: str
    kind: str  # "file" | "directory"

    @property
    def is_file(self) -> bool:
        return self.kind == "file"


def norm_path(path: str) -> str:
    """Normalize a relative path to forward slashes without leading/trailing '/'."""
    if not path:
        return ""
    parts = [p for p in path.replace("\\", "/").split("/") if p and p != "."]
    return "/".join(parts)


def join_path(base: str, name: str) -> str:
    base = norm_path(base)
    return f"{base}/{name}" if base else name


class StorageProvider(Protocol):
    """Minimal capability interface the catalog and assembler read through."""

    name: str

    def open_root(self) -> None:
        """Raise PermissionError if the root cannot be accessed."""

    def read_text(self, path: str) -> Optional[str]:
        ...

    def read_bytes(self, path: str) -> Optional[bytes]:
        """File contents, or None if it does not exist. Raises OSError if it cannot be read."""

    def list_dir(self, path: str = "") -> Optional[List[DirEntry]]:
        """Entries of a directory, or None if it does not exist. Raises OSError if it cannot be listed."""


class LocalDirectoryStorage:
    """A recording directory on the local filesystem."""

    def __init__(self, root: str):
        self.root = os.path.abspath(root)
        self.name = os.path.basename(self.root.rstrip(os.sep)) or self.root

    def _resolve(self, path: str) -> Optional[str]:
        full = os.path.abspath(os.path.join(self.root, *norm_path(path).split("/")))
        if full != self.root and not full.startswith(self.root + os.sep):
            return None
        return full

    def open_root(self) -> None:
        if not os.path.isdir(self.root):
            raise PermissionError(f"not an accessible directory: {self.root}")
        if not os.access(self.root, os.R_OK | os.X_OK):
            raise PermissionError(f"read access denied: {self.root}")

    def read_bytes(self, path: str) -> Optional[bytes]:
        full = self._resolve(path)
        if full is None or not os.path.isfile(full):
            return None
        with open(full, "rb") as f:
            return f.read()

    def read_text(self, path: str) -> Optional[str]:
        data = self.read_bytes(path)
        if data is None:
            return None
        return data.decode("utf-8-sig", errors="replace")

    def list_dir(self, path: str = "") -> Optional[List[DirEntry]]:
        full = self._resolve(path)
        if full is None or not os.path.isdir(full):
            return None
        out = []
        for name in sorted(os.listdir(full)):
            kind = "directory" if os.path.isdir(os.path.join(full, name)) else "file"
            out.append(DirEntry(name=name, kind=kind))
        return out


class MemoryStorage:
    """In-memory recording, keyed by relative path. Used by tests and embedders."""

    def __init__(self, files: Optional[Dict[str, Union[str, bytes]]] = None,
                 name: str = "memory", denied: bool = False, unreadable: Iterable[str] = ()):
        self.name = name
        self.denied = denied
        # paths (files or directories) that raise PermissionError when read
        self.unreadable = {norm_path(p) for p in unreadable}
        self._files: Dict[str, bytes] = {}
        for path, data in (files or {}).items():
            self.put(path, data)

    def put(self, path: str, data: Union[str, bytes]) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._files[norm_path(path)] = data

    def open_root(self) -> None:
        if self.denied:
            raise PermissionError(f"access denied: {self.name}")

    def _check(self, path: str) -> None:
        if norm_path(path) in self.unreadable:
            raise PermissionError(f"access denied: {path}")

    def read_bytes(self, path: str) -> Optional[bytes]:
        self._check(path)
        return self._files.get(norm_path(path))

    def read_text(self, path: str) -> Optional[str]:
        data = self.read_bytes(path)
        if data is None:
            return None
        return data.decode("utf-8-sig", errors="replace")

    def list_dir(self, path: str = "") -> Optional[List[DirEntry]]:
        base = norm_path(path)
        self._check(base)
        prefix = base + "/" if base else ""
        found: Dict[str, str] = {}
        for key in self._files:
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            head, sep, _tail = rest.partition("/")
            found.setdefault(head, "directory" if sep else "file")
        if base and not found:
            return None
        return [DirEntry(name=n, kind=found[n]) for n in sorted(found)]


def list_recordings(base_dir: str = C.DATA_DIR) -> List[Dict]:
    """List recording directories (those holding an index.json) under base_dir."""
    os.makedirs(base_dir, exist_ok=True)
    out = []
    for name in sorted(os.listdir(base_dir)):
        p = os.path.join(base_dir, name)
        if not os.path.isdir(p) or not os.path.isfile(os.path.join(p, C.INDEX_FILENAME)):
            continue
        size = 0
        files = 0
        try:
            for dirpath, _dirs, fnames in os.walk(p):
                for f in fnames:
                    size += os.path.getsize(os.path.join(dirpath, f))
                    files += 1
        except OSError:
            pass
        out.append({"name": name, "size": size, "files": files})
    return out
