from dataclasses import dataclass
from datetime import date

ESTADO_APPROVED = "aprobado"
ESTADO_PENDING = "pendiente"
STATUS_APPROVED = "approved"
STATUS_REQUIRED = "required"


@dataclass(frozen=True)
class BusinessRecord:
    """Represents a row from the negocios table."""

    id: str
    user_id: str
    name: str
    category_id: str | None = None


@dataclass(frozen=True)
class PermitCatalogEntry:
    """Represents a row from the permisos table; ``code`` is its nombre column."""

    id: str
    code: str


@dataclass(frozen=True)
class PermitRuleRecord:
    """Represents a row from the reglas_permisos table."""

    category_id: str
    permit_id: str
    mandatory: bool = True


@dataclass(frozen=True)
class BusinessPermitStatusRecord:
    """Represents a row from the permisos_negocio table."""

    id: str
    business_id: str
    permit_id: str
    estado: str | None = None
    status: str | None = None
    issue_date: date | None = None
    expiry_date: date | None = None
    next_step: str | None = None


@dataclass(frozen=True)
class DocumentRecord:
    """Represents a row from the documentos table."""

    id: str
    user_id: str
    business_id: str | None
    permit_status_id: str | None
    name: str
    media_type: str
    url: str
    size_bytes: int | None = None
    label: str | None = None
