"""Tests for the file and HTTP schema stores."""

from pathlib import Path

import httpx
import pytest

from prisma_sdl.errors import SchemaStoreError
from prisma_sdl.stores import FileSchemaStore, HttpSchemaStore, SaveResult
from prisma_sdl.stores.http import _get_ssl_verify, _get_timeout

SCHEMA_TEXT = "enum Role {\n  USER\n}\n"


class TestFileSchemaStore:
    """Test cases for FileSchemaStore."""

    def test_save_and_load(self, tmp_path: Path) -> None:
        store = FileSchemaStore(tmp_path / "prisma" / "schema.prisma")

        result = store.save(SCHEMA_TEXT)

        assert isinstance(result, SaveResult)
        assert result.bytes_written == len(SCHEMA_TEXT.encode("utf-8"))
        assert result.status_code is None
        assert store.load() == SCHEMA_TEXT

    def test_load_missing_file(self, tmp_path: Path) -> None:
        store = FileSchemaStore(tmp_path / "missing.prisma")

        with pytest.raises(SchemaStoreError, match="not found"):
            store.load()

    def test_describe(self, tmp_path: Path) -> None:
        path = tmp_path / "schema.prisma"

        assert FileSchemaStore(str(path)).describe() == str(path)


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestHttpSchemaStore:
    """Test cases for HttpSchemaStore with a mock transport."""

    def test_url(self) -> None:
        store = HttpSchemaStore("http://localhost:3000/", endpoint="api/schema")

        assert store.url == "http://localhost:3000/api/schema"
        assert store.describe() == store.url

    def test_load(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, text=SCHEMA_TEXT)

        store = HttpSchemaStore("http://localhost:3000", client=_client(handler))

        assert store.load() == SCHEMA_TEXT
        assert requests[0].method == "GET"
        assert str(requests[0].url) == "http://localhost:3000/schema"

    def test_save_posts_plain_text(self) -> None:
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201)

        store = HttpSchemaStore("http://localhost:3000", client=_client(handler))

        result = store.save(SCHEMA_TEXT)

        assert requests[0].method == "POST"
        assert requests[0].content == SCHEMA_TEXT.encode("utf-8")
        assert requests[0].headers["content-type"].startswith("text/plain")
        assert result.status_code == 201
        assert result.location == "http://localhost:3000/schema"
        assert result.bytes_written == len(SCHEMA_TEXT)

    def test_error_status(self) -> None:
        store = HttpSchemaStore(
            "http://localhost:3000",
            client=_client(lambda request: httpx.Response(500)),
        )

        with pytest.raises(SchemaStoreError, match="failed with status 500") as exc:
            store.save(SCHEMA_TEXT)

        assert exc.value.status_code == 500

    def test_not_found_on_load(self) -> None:
        store = HttpSchemaStore(
            "http://localhost:3000",
            client=_client(lambda request: httpx.Response(404)),
        )

        with pytest.raises(SchemaStoreError) as exc:
            store.load()

        assert exc.value.status_code == 404

    def test_connection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        store = HttpSchemaStore("http://localhost:3000", client=_client(handler))

        with pytest.raises(SchemaStoreError, match="Cannot connect"):
            store.load()

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        store = HttpSchemaStore("http://localhost:3000", client=_client(handler))

        with pytest.raises(SchemaStoreError, match="timed out"):
            store.load()


class TestEnvironmentSettings:
    """Test cases for the environment-driven client settings."""

    def test_ssl_verify_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("PRISMA_SDL_HTTPS_VERIFY", raising=False)

        assert _get_ssl_verify() is True

    @pytest.mark.parametrize("value", ["false", "0", "NO", "off"])
    def test_ssl_verify_disabled(
        self, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv("PRISMA_SDL_HTTPS_VERIFY", value)

        assert _get_ssl_verify() is False

    def test_timeout_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRISMA_SDL_TIMEOUT", "5")

        assert _get_timeout() == 5.0

    def test_invalid_timeout_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRISMA_SDL_TIMEOUT", "soon")

        assert _get_timeout() == 30.0
