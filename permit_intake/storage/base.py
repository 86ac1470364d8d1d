from abc import ABC, abstractmethod


class BaseObjectStore(ABC):
    """Contract for the binary object store holding uploaded documents."""

    @abstractmethod
    def put(self, path: str, payload: bytes, content_type: str) -> str:
        """Store ``payload`` under ``path`` and return its locator.

        Raises:
            StorageError: if the object could not be stored.
        """

    @abstractmethod
    def public_url(self, locator: str) -> str:
        """Return the publicly reachable URL for a stored object."""

    @abstractmethod
    def delete(self, paths: list[str]) -> None:
        """Remove stored objects. Missing objects are ignored.

        Raises:
            StorageError: if the store refuses the deletion.
        """
