"""Tests for the loader module."""

import httpx
import pytest

from apigen.errors import FetchError, InputError, MalformedDocument
from apigen.loader import get_paths, is_url, load_document, ref_name

_URL = "https://api.example.com/v3/api-docs"


def _fake_get(response_factory):
    def fake_get(url, **kwargs):
        return response_factory(httpx.Request("GET", url))
    return fake_get


class TestLoadDocument:
    """Test acquiring documents from disk and over HTTP."""

    def test_local_file(self, write_document, ping_document):
        path = write_document(ping_document)
        assert load_document(str(path)) == ping_document

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputError, match="File not found"):
            load_document(str(tmp_path / "missing.json"))

    def test_directory_is_not_a_document(self, tmp_path):
        with pytest.raises(InputError):
            load_document(str(tmp_path))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(MalformedDocument, match="Invalid JSON"):
            load_document(str(path))

    def test_root_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(MalformedDocument):
            load_document(str(path))

    def test_url(self, monkeypatch, ping_document):
        monkeypatch.setattr(
            httpx, "get", _fake_get(lambda request: httpx.Response(200, json=ping_document, request=request)),
        )
        assert load_document(_URL) == ping_document

    def test_url_http_error(self, monkeypatch):
        monkeypatch.setattr(
            httpx, "get", _fake_get(lambda request: httpx.Response(404, request=request)),
        )
        with pytest.raises(FetchError, match="404"):
            load_document(_URL)

    def test_url_transport_error(self, monkeypatch):
        def fake_get(url, **kwargs):
            raise httpx.ConnectError("connection refused")

        monkeypatch.setattr(httpx, "get", fake_get)
        with pytest.raises(FetchError, match="connection refused"):
            load_document(_URL)

    def test_url_invalid_json(self, monkeypatch):
        monkeypatch.setattr(
            httpx, "get", _fake_get(lambda request: httpx.Response(200, text="<html>", request=request)),
        )
        with pytest.raises(MalformedDocument):
            load_document(_URL)


class TestHelpers:
    """Test document section helpers."""

    def test_is_url(self):
        assert is_url("http://localhost/openapi.json")
        assert is_url(_URL)
        assert not is_url("./openapi.json")

    def test_ref_name(self):
        assert ref_name("#/components/schemas/User") == "User"

    def test_get_paths_default(self):
        assert get_paths({}) == {}

    def test_get_paths_not_a_mapping(self):
        with pytest.raises(MalformedDocument):
            get_paths({"paths": "nope"})
