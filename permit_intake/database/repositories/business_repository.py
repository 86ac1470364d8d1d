from typing import Any

import psycopg
from psycopg.rows import dict_row

from permit_intake.database.exceptions import BusinessNotFoundError
from permit_intake.database.models import BusinessRecord


class BusinessRepository:
    """Lookups on the negocios table."""

    def find_by_id(self, conn: psycopg.Connection[Any], business_id: str) -> BusinessRecord:
        """Raises BusinessNotFoundError if no business has this id."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                "SELECT id, user_id, nombre, rubro_id FROM negocios WHERE id = %s",
                (business_id,),
            )
            row = cur.fetchone()

        if row is None:
            raise BusinessNotFoundError(f"Business {business_id} not found")
        return BusinessRecord(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            name=row["nombre"],
            category_id=str(row["rubro_id"]) if row["rubro_id"] is not None else None,
        )
