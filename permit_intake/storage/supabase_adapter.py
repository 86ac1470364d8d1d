from urllib.parse import quote

import httpx

from permit_intake.storage.base import BaseObjectStore
from permit_intake.storage.exceptions import StorageError


class SupabaseObjectStore(BaseObjectStore):
    """Object store backed by the Supabase Storage REST API."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        bucket: str,
        timeout_seconds: int = 30,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._bucket = bucket
        self._client = client or httpx.Client(
            base_url=self._base_url,
            timeout=timeout_seconds,
            headers={"apikey": api_key, "Authorization": f"Bearer {api_key}"},
        )

    def put(self, path: str, payload: bytes, content_type: str) -> str:
        self._request(
            "POST",
            f"/storage/v1/object/{self._quoted_bucket()}/{quote(path, safe='/')}",
            content=payload,
            headers={"Content-Type": content_type, "x-upsert": "false"},
        )
        return path

    def public_url(self, locator: str) -> str:
        return (
            f"{self._base_url}/storage/v1/object/public/"
            f"{self._quoted_bucket()}/{quote(locator, safe='/')}"
        )

    def delete(self, paths: list[str]) -> None:
        if not paths:
            return
        self._request(
            "DELETE",
            f"/storage/v1/object/{self._quoted_bucket()}",
            json={"prefixes": paths},
        )

    def close(self) -> None:
        self._client.close()

    def _quoted_bucket(self) -> str:
        return quote(self._bucket, safe="")

    def _request(self, method: str, url: str, **kwargs: object) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)  # type: ignore[arg-type]
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise StorageError(
                f"Supabase storage {method} {url} failed: "
                f"{exc.response.status_code} {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise StorageError(f"Supabase storage {method} {url} failed: {exc}") from exc
        return response
