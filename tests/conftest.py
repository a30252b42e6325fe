"""Shared fixtures for docgen tests."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from docgen.model import ApiDocument


# Paths and responses deliberately out of order
_PETSTORE: dict[str, Any] = {
    "swagger": "2.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "host": "petstore.example.com",
    "basePath": "/v1",
    "paths": {
        "/pets/{petId}": {
            "get": {
                "summary": "Find pet by ID",
                "operationId": "getPet",
                "tags": ["Pets"],
                "responses": {
                    "500": {"description": "Server error"},
                    "200": {"description": "A pet", "schema": {"$ref": "#/definitions/Pet"}},
                    "404": {"description": "Not found"},
                },
            },
            "delete": {
                "summary": "Delete a pet",
                "responses": {
                    "204": {"description": "Deleted"},
                    "1000": {"description": "Odd vendor code"},
                },
            },
        },
        "/orders": {
            "post": {
                "summary": "Place an order",
                "tags": ["Store", "Orders"],
                "responses": {"201": {"description": "Created"}, "400": {"description": "Bad"}},
            },
        },
        "/Pets": {
            "get": {"responses": {"200": {"description": "Legacy listing"}}},
        },
        "/pets": {
            "parameters": [{"name": "limit", "in": "query", "type": "integer"}],
            "get": {"summary": "List pets", "responses": {"200": {"description": "Pets"}}},
            "head": {"responses": {"500": {}, "200": {}}},
        },
    },
    "definitions": {"Pet": {"type": "object", "properties": {"name": {"type": "string"}}}},
}


class RecordingLog:
    """Log sink capturing messages per level."""

    def __init__(self):
        self.messages: dict[str, list[str]] = {
            "info": [], "warning": [], "error": [], "debug": [],
        }

    def info(self, message: str) -> None:
        self.messages["info"].append(message)

    def warning(self, message: str) -> None:
        self.messages["warning"].append(message)

    def error(self, message: str) -> None:
        self.messages["error"].append(message)

    def debug(self, message: str) -> None:
        self.messages["debug"].append(message)


@pytest.fixture
def petstore_dict() -> dict[str, Any]:
    return copy.deepcopy(_PETSTORE)


@pytest.fixture
def document(petstore_dict) -> ApiDocument:
    return ApiDocument.from_dict(petstore_dict)


@pytest.fixture
def log() -> RecordingLog:
    return RecordingLog()


@pytest.fixture
def template_dir(tmp_path) -> Path:
    """A directory holding a small template that includes a partial."""
    directory = tmp_path / "tpl"
    directory.mkdir()
    (directory / "main.txt.j2").write_text(
        "{{ info.title }}\n"
        "{% for op in operations %}\n"
        "{% include 'partials/op.txt.j2' %}\n"
        "{% endfor %}\n"
    )
    (directory / "partials").mkdir()
    (directory / "partials" / "op.txt.j2").write_text(
        "{{ op.method }} {{ op.path }} [{{ op.responses|map(attribute='code')|join(',') }}]\n"
    )
    return directory


class InfoOnlyLog:
    """Sink offering only the info level."""

    def __init__(self):
        self.lines: list[str] = []

    def info(self, message: str) -> None:
        self.lines.append(message)


@pytest.fixture
def info_only_log() -> InfoOnlyLog:
    return InfoOnlyLog()
