"""Opaque blob storage keyed by a fixed identifier."""

import os
import tempfile


class FileStorage:
    """One file per key inside *directory* (``<directory>/<key>.json``)."""

    def __init__(self, directory: str) -> None:
        self.directory = directory

    def path_for(self, key: str) -> str:
        return os.path.join(self.directory, f"{key}.json")

    def read(self, key: str) -> bytes | None:
        """Return the stored blob, or None if nothing was written yet."""
        try:
            with open(self.path_for(key), "rb") as f:
                return f.read()
        except FileNotFoundError:
            return None

    def write(self, key: str, blob: bytes) -> None:
        """Replace the blob atomically; the old file survives a failed write."""
        os.makedirs(self.directory, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}-", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(blob)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path_for(key))
        finally:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)


class MemoryStorage:
    """In-process storage; nothing survives the session."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self.blobs: dict[str, bytes] = dict(initial or {})

    def read(self, key: str) -> bytes | None:
        return self.blobs.get(key)

    def write(self, key: str, blob: bytes) -> None:
        self.blobs[key] = bytes(blob)
