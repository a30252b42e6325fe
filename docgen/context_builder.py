"""Build the Jinja2 template context from a normalized ApiDocument.

Exposes the document under its swagger.json keys plus a flat list of
operations, so templates can either walk ``paths`` or loop ``operations``.
"""

from __future__ import annotations

from typing import Any

from .model import ApiDocument


def build_operations(doc: ApiDocument) -> list[dict[str, Any]]:
    """Flatten the document into one entry per (path, method), in document order."""
    operations: list[dict[str, Any]] = []
    for path, item in doc.paths.items():
        for method, operation in item.operations():
            serialized = operation.to_dict()
            operations.append({
                "path": path,
                "method": method.name,
                "operation": serialized,
                "summary": operation.summary or "",
                "responses": [
                    {"code": code, "response": response}
                    for code, response in serialized["responses"].items()
                ],
            })
    return operations


def build_context(doc: ApiDocument) -> dict[str, Any]:
    """Build the full template context for a document."""
    context = doc.to_dict()
    operations = build_operations(doc)
    context["operations"] = operations
    context["operation_count"] = len(operations)
    return context
