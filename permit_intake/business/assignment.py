from typing import Any

import psycopg

from permit_intake.database.connection import get_connection
from permit_intake.database.exceptions import DataStoreError
from permit_intake.database.models import ESTADO_PENDING
from permit_intake.database.repositories.business_permit_repository import (
    BusinessPermitRepository,
)
from permit_intake.database.repositories.business_repository import BusinessRepository
from permit_intake.database.repositories.permit_rules_repository import PermitRulesRepository
from permit_intake.intake.recorder import ConnectionFactory
from permit_intake.logging.logger import Log

ASSIGNED_NEXT_STEP = "Iniciar trámite en la municipalidad correspondiente"


class RequiredPermitAssigner:
    """Gives a newly registered business the permits its category requires."""

    def __init__(
        self,
        *,
        business_repo: BusinessRepository,
        rules_repo: PermitRulesRepository,
        permit_repo: BusinessPermitRepository,
        connection_factory: ConnectionFactory = get_connection,
    ) -> None:
        self._business_repo = business_repo
        self._rules_repo = rules_repo
        self._permit_repo = permit_repo
        self._connection_factory = connection_factory

    def assign(self, business_id: str, category_id: str | None = None) -> int:
        """Create pending permit rows from the category rules.

        ``category_id`` defaults to the business's own category. Permits the
        business already holds are left as they are. Returns the number of
        rows created.
        """
        try:
            with self._connection_factory() as conn:
                if category_id is None:
                    category_id = self._business_category(conn, business_id)
                rules = self._rules_repo.list_for_category(conn, category_id)
                created = self._permit_repo.insert_missing(
                    conn,
                    business_id=business_id,
                    permit_ids=[rule.permit_id for rule in rules],
                    estado=ESTADO_PENDING,
                    next_step=ASSIGNED_NEXT_STEP,
                )
                conn.commit()
        except psycopg.Error as exc:
            raise DataStoreError(f"Could not assign permits to {business_id}: {exc}") from exc

        Log.info(
            f"Assigned {created} required permits",
            business=business_id,
            category=category_id,
            rules=len(rules),
        )
        return created

    def _business_category(self, conn: psycopg.Connection[Any], business_id: str) -> str:
        business = self._business_repo.find_by_id(conn, business_id)
        if business.category_id is None:
            raise DataStoreError(f"Business {business_id} has no category")
        return business.category_id
