import re

from permit_intake.storage.paths import build_object_path, object_path_from_url


class TestBuildObjectPath:
    def test_follows_documents_convention(self) -> None:
        path = build_object_path("biz-1", "Patente.PDF", timestamp_ms=1717200000000, token="abc123")
        assert path == "docs/biz-1/1717200000000_abc123.pdf"

    def test_generates_timestamp_and_token(self) -> None:
        path = build_object_path("biz-1", "foto.jpeg")
        assert re.fullmatch(r"docs/biz-1/\d{13}_[0-9a-f]{12}\.jpeg", path)

    def test_paths_are_unique(self) -> None:
        first = build_object_path("biz-1", "a.png", timestamp_ms=1)
        second = build_object_path("biz-1", "a.png", timestamp_ms=1)
        assert first != second


class TestObjectPathFromUrl:
    def test_uses_last_url_segment(self) -> None:
        url = "https://abc.supabase.co/storage/v1/object/public/documentos/docs/biz-1/17_ab.pdf"
        assert object_path_from_url("biz-1", url) == "docs/biz-1/17_ab.pdf"

    def test_empty_url(self) -> None:
        assert object_path_from_url("biz-1", "") is None
