from datetime import date

import psycopg

from permit_intake.classification.permit_types import find_permit_type
from permit_intake.database.connection import get_connection
from permit_intake.database.exceptions import DataStoreError
from permit_intake.database.models import (
    ESTADO_PENDING,
    STATUS_REQUIRED,
    BusinessPermitStatusRecord,
)
from permit_intake.database.repositories.business_permit_repository import (
    BusinessPermitRepository,
)
from permit_intake.database.repositories.permit_catalog_repository import (
    PermitCatalogRepository,
)
from permit_intake.intake.recorder import ConnectionFactory
from permit_intake.logging.logger import Log

MANUAL_NEXT_STEP = "Agregar documento de respaldo"


class ManualPermitRegistrar:
    """Adds a permit to a business by hand, before any document backs it."""

    def __init__(
        self,
        *,
        catalog_repo: PermitCatalogRepository,
        permit_repo: BusinessPermitRepository,
        connection_factory: ConnectionFactory = get_connection,
    ) -> None:
        self._catalog_repo = catalog_repo
        self._permit_repo = permit_repo
        self._connection_factory = connection_factory

    def register(
        self,
        business_id: str,
        code: str,
        issue_date: date | None = None,
        expiry_date: date | None = None,
    ) -> BusinessPermitStatusRecord:
        if find_permit_type(code) is None:
            raise ValueError(f"Unknown permit type {code}")
        if issue_date and expiry_date and expiry_date < issue_date:
            raise ValueError("Expiry date cannot be before the issue date")

        try:
            with self._connection_factory() as conn:
                entry = self._catalog_repo.find_by_code(conn, code)
                record = self._permit_repo.upsert(
                    conn,
                    business_id=business_id,
                    permit_id=entry.id,
                    estado=ESTADO_PENDING,
                    status=STATUS_REQUIRED,
                    issue_date=issue_date,
                    expiry_date=expiry_date,
                    next_step=MANUAL_NEXT_STEP,
                )
                conn.commit()
        except psycopg.Error as exc:
            raise DataStoreError(f"Could not register {code} for {business_id}: {exc}") from exc

        Log.info(f"Registered {code} manually", business=business_id, permit_status=record.id)
        return record
