import psycopg

from permit_intake.database.connection import get_connection
from permit_intake.database.exceptions import DataStoreError
from permit_intake.database.repositories.business_permit_repository import (
    BusinessPermitRepository,
)
from permit_intake.database.repositories.documents_repository import DocumentsRepository
from permit_intake.intake.recorder import ConnectionFactory
from permit_intake.logging.logger import Log
from permit_intake.storage.base import BaseObjectStore
from permit_intake.storage.paths import object_path_from_url


class PermitRemover:
    """Deletes a business permit together with its documents and their files."""

    def __init__(
        self,
        *,
        object_store: BaseObjectStore,
        permit_repo: BusinessPermitRepository,
        documents_repo: DocumentsRepository,
        connection_factory: ConnectionFactory = get_connection,
    ) -> None:
        self._object_store = object_store
        self._permit_repo = permit_repo
        self._documents_repo = documents_repo
        self._connection_factory = connection_factory

    def remove(self, business_id: str, permit_status_id: str) -> int:
        """Returns the number of documents removed along with the permit.

        Raises:
            StorageError: stored files could not be deleted; no rows are touched.
            DataStoreError: the rows could not be deleted.
        """
        try:
            with self._connection_factory() as conn:
                documents = self._documents_repo.list_for_permit_status(conn, permit_status_id)
                paths = [
                    path
                    for path in (object_path_from_url(business_id, doc.url) for doc in documents)
                    if path is not None
                ]
                self._object_store.delete(paths)
                removed = self._documents_repo.delete_for_permit_status(conn, permit_status_id)
                self._permit_repo.delete(conn, permit_status_id)
                conn.commit()
        except psycopg.Error as exc:
            raise DataStoreError(f"Could not remove permit {permit_status_id}: {exc}") from exc

        Log.info(
            f"Removed permit {permit_status_id}",
            business=business_id,
            documents=removed,
            files=len(paths),
        )
        return removed
