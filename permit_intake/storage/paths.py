import time
from uuid import uuid4

DOCUMENTS_PREFIX = "docs"


def build_object_path(
    business_id: str,
    file_name: str,
    *,
    timestamp_ms: int | None = None,
    token: str | None = None,
) -> str:
    """Build ``docs/{business_id}/{timestamp}_{token}.{ext}`` for an upload."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    if token is None:
        token = uuid4().hex[:12]
    extension = file_name.rsplit(".", 1)[-1].lower()
    return f"{DOCUMENTS_PREFIX}/{business_id}/{timestamp_ms}_{token}.{extension}"


def object_path_from_url(business_id: str, url: str) -> str | None:
    """Recover the object path of a business document from its public URL."""
    stored_name = url.rstrip("/").rsplit("/", 1)[-1]
    if not stored_name:
        return None
    return f"{DOCUMENTS_PREFIX}/{business_id}/{stored_name}"
