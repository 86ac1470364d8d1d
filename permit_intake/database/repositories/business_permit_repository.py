from datetime import date
from typing import Any

import psycopg
from psycopg.rows import dict_row

from permit_intake.database.exceptions import DataStoreError
from permit_intake.database.models import BusinessPermitStatusRecord

_COLUMNS = """
    id, negocio_id, permiso_id, estado, status,
    fecha_emision, fecha_vencimiento, proximo_paso
"""


def _to_record(row: dict[str, Any]) -> BusinessPermitStatusRecord:
    return BusinessPermitStatusRecord(
        id=str(row["id"]),
        business_id=str(row["negocio_id"]),
        permit_id=str(row["permiso_id"]),
        estado=row["estado"],
        status=row["status"],
        issue_date=row["fecha_emision"],
        expiry_date=row["fecha_vencimiento"],
        next_step=row["proximo_paso"],
    )


class BusinessPermitRepository:
    """Database operations for the permisos_negocio table.

    A business holds at most one row per permit type; writes that may hit an
    existing row are upserts on (negocio_id, permiso_id).
    """

    def upsert(
        self,
        conn: psycopg.Connection[Any],
        *,
        business_id: str,
        permit_id: str,
        estado: str,
        status: str,
        issue_date: date | None,
        expiry_date: date | None,
        next_step: str,
    ) -> BusinessPermitStatusRecord:
        """Insert the row for (business, permit) or overwrite the existing one."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                f"""
                INSERT INTO permisos_negocio
                    (negocio_id, permiso_id, estado, status,
                     fecha_emision, fecha_vencimiento, proximo_paso)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (negocio_id, permiso_id) DO UPDATE
                SET estado = EXCLUDED.estado,
                    status = EXCLUDED.status,
                    fecha_emision = EXCLUDED.fecha_emision,
                    fecha_vencimiento = EXCLUDED.fecha_vencimiento,
                    proximo_paso = EXCLUDED.proximo_paso,
                    updated_at = NOW()
                RETURNING {_COLUMNS}
                """,
                (business_id, permit_id, estado, status, issue_date, expiry_date, next_step),
            )
            row = cur.fetchone()

        if row is None:
            raise DataStoreError(
                f"Upsert returned no row for business {business_id}, permit {permit_id}"
            )
        return _to_record(row)

    def insert_missing(
        self,
        conn: psycopg.Connection[Any],
        *,
        business_id: str,
        permit_ids: list[str],
        estado: str,
        next_step: str,
    ) -> int:
        """Insert rows for permits the business does not hold yet.

        Returns the number of rows actually inserted.
        """
        inserted = 0
        with conn.cursor() as cur:
            for permit_id in permit_ids:
                cur.execute(
                    """
                    INSERT INTO permisos_negocio
                        (negocio_id, permiso_id, estado, fecha_vencimiento, proximo_paso)
                    VALUES (%s, %s, %s, NULL, %s)
                    ON CONFLICT (negocio_id, permiso_id) DO NOTHING
                    """,
                    (business_id, permit_id, estado, next_step),
                )
                inserted += cur.rowcount
        return inserted

    def list_for_business(
        self, conn: psycopg.Connection[Any], business_id: str
    ) -> list[BusinessPermitStatusRecord]:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM permisos_negocio WHERE negocio_id = %s ORDER BY created_at",
                (business_id,),
            )
            rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def delete(self, conn: psycopg.Connection[Any], permit_status_id: str) -> None:
        """Raises DataStoreError if the row does not exist."""
        with conn.cursor() as cur:
            cur.execute("DELETE FROM permisos_negocio WHERE id = %s", (permit_status_id,))
            if cur.rowcount == 0:
                raise DataStoreError(f"Business permit {permit_status_id} not found")
