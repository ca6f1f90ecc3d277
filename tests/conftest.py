"""Shared fixtures for apigen tests.

Documents are built fresh per test so tests can mutate them freely.
Configuration search is confined to tmp_path so files elsewhere on the
machine never leak into a run.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest


def make_ping_document() -> dict[str, Any]:
    """One GET /ping operation returning {ok: boolean}."""
    return {
        "openapi": "3.0.1",
        "info": {"title": "Ping", "version": "1.0.0"},
        "paths": {
            "/ping": {
                "get": {
                    "operationId": "ping",
                    "responses": {
                        "200": {
                            "description": "OK",
                            "content": {
                                "application/json": {
                                    "schema": {
                                        "type": "object",
                                        "properties": {"ok": {"type": "boolean"}},
                                        "required": ["ok"],
                                    },
                                },
                            },
                        },
                    },
                },
            },
        },
        "components": {"schemas": {}},
    }


@pytest.fixture
def ping_document() -> dict[str, Any]:
    return make_ping_document()


@pytest.fixture
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run inside tmp_path with the config search stopping there."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    return tmp_path


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[[dict[str, Any], str], Path]:
    """Return a callable that writes a document as JSON under tmp_path."""
    def _write(document: dict[str, Any], name: str = "openapi.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path
    return _write
