"""Persists a confirmed permit: business-permit status row plus document row."""

from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Any

import psycopg

from permit_intake.database.connection import get_connection
from permit_intake.database.exceptions import DataStoreError
from permit_intake.database.models import (
    ESTADO_APPROVED,
    STATUS_APPROVED,
    BusinessPermitStatusRecord,
    DocumentRecord,
)
from permit_intake.database.repositories.business_permit_repository import (
    BusinessPermitRepository,
)
from permit_intake.database.repositories.documents_repository import DocumentsRepository
from permit_intake.database.repositories.permit_catalog_repository import (
    PermitCatalogRepository,
)
from permit_intake.intake.models import PermitData
from permit_intake.logging.logger import Log

ConnectionFactory = Callable[[], AbstractContextManager[psycopg.Connection[Any]]]

APPROVED_NEXT_STEP = "Documento subido y aprobado"


@dataclass(frozen=True)
class ConfirmationRequest:
    business_id: str
    user_id: str
    permit: PermitData
    file_name: str
    media_type: str
    size_bytes: int
    url: str


@dataclass(frozen=True)
class ConfirmationReceipt:
    permit_status: BusinessPermitStatusRecord
    document: DocumentRecord


class PermitRecorder:
    """Writes a confirmation in one transaction.

    The status row is upserted on (business, permit type), so confirming the
    same type twice for a business overwrites its dates instead of adding a
    second row. Every confirmation adds its own document row.
    """

    def __init__(
        self,
        *,
        catalog_repo: PermitCatalogRepository,
        permit_repo: BusinessPermitRepository,
        documents_repo: DocumentsRepository,
        connection_factory: ConnectionFactory = get_connection,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._permit_repo = permit_repo
        self._documents_repo = documents_repo
        self._connection_factory = connection_factory

    def record(self, request: ConfirmationRequest) -> ConfirmationReceipt:
        """Raises DataStoreError (or a subclass) when anything fails to persist."""
        try:
            with self._connection_factory() as conn:
                entry = self._catalog_repo.find_by_code(conn, request.permit.code)
                permit_status = self._permit_repo.upsert(
                    conn,
                    business_id=request.business_id,
                    permit_id=entry.id,
                    estado=ESTADO_APPROVED,
                    status=STATUS_APPROVED,
                    issue_date=request.permit.issue_date,
                    expiry_date=request.permit.expiry_date,
                    next_step=APPROVED_NEXT_STEP,
                )
                document = self._documents_repo.insert(
                    conn,
                    user_id=request.user_id,
                    business_id=request.business_id,
                    permit_status_id=permit_status.id,
                    name=request.file_name,
                    media_type=request.media_type,
                    url=request.url,
                    size_bytes=request.size_bytes,
                    label=request.permit.name,
                )
                conn.commit()
        except psycopg.Error as exc:
            raise DataStoreError(f"Could not record {request.permit.code}: {exc}") from exc

        Log.info(
            f"Recorded {request.permit.code} for business {request.business_id}",
            permit_status=permit_status.id,
            document=document.id,
        )
        return ConfirmationReceipt(permit_status=permit_status, document=document)
