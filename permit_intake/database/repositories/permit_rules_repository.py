from typing import Any

import psycopg
from psycopg.rows import dict_row

from permit_intake.database.models import PermitRuleRecord


class PermitRulesRepository:
    """Reads the category-to-permit rules in reglas_permisos."""

    def list_for_category(
        self, conn: psycopg.Connection[Any], category_id: str
    ) -> list[PermitRuleRecord]:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                """
                SELECT rubro_id, permiso_id, es_obligatorio
                FROM reglas_permisos
                WHERE rubro_id = %s
                """,
                (category_id,),
            )
            rows = cur.fetchall()

        return [
            PermitRuleRecord(
                category_id=str(row["rubro_id"]),
                permit_id=str(row["permiso_id"]),
                mandatory=bool(row["es_obligatorio"]) if row["es_obligatorio"] is not None else True,
            )
            for row in rows
        ]
