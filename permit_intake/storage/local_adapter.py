from pathlib import Path

from permit_intake.storage.base import BaseObjectStore
from permit_intake.storage.exceptions import StorageError


class LocalObjectStore(BaseObjectStore):
    """Keeps objects as files under a root directory."""

    def __init__(self, root: Path, public_base_url: str = "") -> None:
        self._root = root
        self._public_base_url = public_base_url.rstrip("/")

    def put(self, path: str, payload: bytes, content_type: str) -> str:
        target = self._resolve(path)
        if target.exists():
            raise StorageError(f"Object already exists: {path}")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(payload)
        except OSError as exc:
            raise StorageError(f"Could not store {path}: {exc}") from exc
        return path

    def public_url(self, locator: str) -> str:
        if self._public_base_url:
            return f"{self._public_base_url}/{locator}"
        return self._resolve(locator).as_uri()

    def delete(self, paths: list[str]) -> None:
        for path in paths:
            try:
                self._resolve(path).unlink(missing_ok=True)
            except OSError as exc:
                raise StorageError(f"Could not delete {path}: {exc}") from exc

    def _resolve(self, path: str) -> Path:
        root = self._root.resolve()
        target = (root / path).resolve()
        if not target.is_relative_to(root):
            raise StorageError(f"Path escapes storage root: {path}")
        return target
