from typing import Any

import psycopg
from psycopg.rows import dict_row

from permit_intake.database.exceptions import DataStoreError
from permit_intake.database.models import DocumentRecord

_COLUMNS = """
    id, user_id, negocio_id, permiso_negocio_id, nombre,
    tipo_archivo, url_archivo, "tamaño_archivo", label
"""


def _to_record(row: dict[str, Any]) -> DocumentRecord:
    return DocumentRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        business_id=str(row["negocio_id"]) if row["negocio_id"] is not None else None,
        permit_status_id=(
            str(row["permiso_negocio_id"]) if row["permiso_negocio_id"] is not None else None
        ),
        name=row["nombre"],
        media_type=row["tipo_archivo"],
        url=row["url_archivo"],
        size_bytes=row["tamaño_archivo"],
        label=row["label"],
    )


class DocumentsRepository:
    """Database operations for the documentos table."""

    def insert(
        self,
        conn: psycopg.Connection[Any],
        *,
        user_id: str,
        business_id: str,
        permit_status_id: str,
        name: str,
        media_type: str,
        url: str,
        size_bytes: int,
        label: str,
    ) -> DocumentRecord:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                f"""
                INSERT INTO documentos
                    (user_id, negocio_id, permiso_negocio_id, nombre,
                     tipo_archivo, url_archivo, "tamaño_archivo", label)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING {_COLUMNS}
                """,
                (user_id, business_id, permit_status_id, name, media_type, url, size_bytes, label),
            )
            row = cur.fetchone()

        if row is None:
            raise DataStoreError(f"Insert returned no row for document {name}")
        return _to_record(row)

    def list_for_permit_status(
        self, conn: psycopg.Connection[Any], permit_status_id: str
    ) -> list[DocumentRecord]:
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                f"SELECT {_COLUMNS} FROM documentos WHERE permiso_negocio_id = %s",
                (permit_status_id,),
            )
            rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def delete_for_permit_status(
        self, conn: psycopg.Connection[Any], permit_status_id: str
    ) -> int:
        """Delete every document attached to a business permit; returns the count."""
        with conn.cursor() as cur:
            cur.execute(
                "DELETE FROM documentos WHERE permiso_negocio_id = %s",
                (permit_status_id,),
            )
            return cur.rowcount
