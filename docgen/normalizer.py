"""Canonical ordering of an ApiDocument.

Paths are ordered by ordinal string comparison of the path, and each
operation's responses by ordinal string comparison of the status code
("1000" sorts before "200"). Numeric or semantic ordering is never applied.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Mapping

from .errors import GenerateError
from .model import ApiDocument, HttpMethod, Operation, PathItem


def _sort_responses(path: str, operation: Operation) -> Operation:
    if not isinstance(operation.responses, Mapping):
        raise GenerateError(f"Responses under [{path}] must be a mapping")
    responses = {code: operation.responses[code] for code in sorted(operation.responses)}
    return replace(operation, responses=responses)


def _normalize_path_item(path: str, item: PathItem) -> PathItem:
    """Return a copy of item with every present operation's responses sorted."""
    if not isinstance(item, PathItem):
        raise GenerateError(
            f"Path [{path}] holds {type(item).__name__}, expected PathItem"
        )
    changes: dict[str, Operation] = {}
    for method in HttpMethod:
        try:
            operation = method.accessor(item)
        except AttributeError as e:
            raise GenerateError(
                f"Path [{path}] has no {method.name} slot; model shape is incompatible", e
            ) from e
        if operation is not None and not isinstance(operation, Operation):
            raise GenerateError(
                f"Path [{path}] {method.name} slot holds {type(operation).__name__}, "
                "expected Operation"
            )
        if operation is not None:
            changes[method.value] = _sort_responses(path, operation)
    return replace(item, **changes)


def normalize(doc: ApiDocument) -> ApiDocument:
    """Return a new document with paths and responses in canonical order.

    The input document is not modified. Applying normalize to its own
    output yields an equal document.
    """
    if not isinstance(doc, ApiDocument):
        raise GenerateError(f"Expected ApiDocument, got {type(doc).__name__}")
    if not isinstance(doc.paths, Mapping):
        raise GenerateError(
            f"Document paths must be a mapping, got {type(doc.paths).__name__}"
        )
    paths = {path: _normalize_path_item(path, doc.paths[path]) for path in sorted(doc.paths)}
    return replace(doc, paths=paths)
