from typing import Any

import psycopg
from psycopg.rows import dict_row

from permit_intake.database.exceptions import PermitNotFoundError
from permit_intake.database.models import PermitCatalogEntry


class PermitCatalogRepository:
    """Lookups on the permisos table."""

    def find_by_code(self, conn: psycopg.Connection[Any], code: str) -> PermitCatalogEntry:
        """Resolve a permit-type code to its catalog row.

        Raises:
            PermitNotFoundError: if the catalog has no row for this code.
        """
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                "SELECT id, nombre FROM permisos WHERE nombre = %s LIMIT 1",
                (code,),
            )
            row = cur.fetchone()

        if row is None:
            raise PermitNotFoundError(f"Permit type {code} is not in the catalog")
        return PermitCatalogEntry(id=str(row["id"]), code=row["nombre"])
