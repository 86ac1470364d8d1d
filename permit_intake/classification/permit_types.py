"""Permit types recognised by the detector.

The table is ordered: the detector stops at the first entry with any keyword
hit, so an earlier entry wins when a document mentions keywords of several
types. Reordering entries changes classification outcomes.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermitTypeRule:
    """A permit-type code with its display name and matching keywords."""

    code: str
    name: str
    keywords: tuple[str, ...]


PERMIT_TYPES: tuple[PermitTypeRule, ...] = (
    PermitTypeRule(
        code="PAT_MUN",
        name="Patente Municipal",
        keywords=("patente municipal", "patente comercial", "municipal"),
    ),
    PermitTypeRule(
        code="RES_SAN",
        name="Resolución Sanitaria",
        keywords=(
            "resolución sanitaria",
            "sanitaria",
            "seremi salud",
            "autorización sanitaria",
        ),
    ),
    PermitTypeRule(
        code="CERT_BOM",
        name="Certificado de Bomberos",
        keywords=(
            "certificado bomberos",
            "bomberos",
            "prevención riesgos",
            "seguridad bomberos",
        ),
    ),
    PermitTypeRule(
        code="SII_INIT",
        name="Inicio de Actividades SII",
        keywords=(
            "inicio actividades",
            "iniciación actividades",
            "sii",
            "servicio impuestos",
        ),
    ),
    PermitTypeRule(
        code="PER_ANU",
        name="Permiso de Anuncio",
        keywords=(
            "permiso anuncio",
            "publicidad",
            "permiso publicidad",
            "anuncio",
            "propaganda",
        ),
    ),
)


def find_permit_type(code: str) -> PermitTypeRule | None:
    """Return the table entry for a permit-type code, if any."""
    for rule in PERMIT_TYPES:
        if rule.code == code:
            return rule
    return None
