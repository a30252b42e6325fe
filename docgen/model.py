"""In-memory API description model.

ApiDocument -> PathItem -> Operation -> ResponseSpec, mirroring the
Swagger 2.0 object layout. Serialization uses the Swagger key spelling
(basePath, operationId, ...) and drops fields that are None. Keys the
model does not name are kept in ``extra`` and written back unchanged.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from .errors import GenerateError


@dataclass
class ResponseSpec:
    """A single response description. Opaque to the pipeline."""

    description: str | None = None
    schema: dict[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResponseSpec:
        data = _require_mapping(data, "response")
        rest = {k: v for k, v in data.items() if k not in ("description", "schema")}
        return cls(
            description=data.get("description"),
            schema=data.get("schema"),
            extra=rest,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.description is not None:
            out["description"] = self.description
        if self.schema is not None:
            out["schema"] = self.schema
        out.update(self.extra)
        return out


# Operation fields: (attribute, swagger key)
_OPERATION_FIELDS: tuple[tuple[str, str], ...] = (
    ("tags", "tags"),
    ("summary", "summary"),
    ("description", "description"),
    ("operation_id", "operationId"),
    ("parameters", "parameters"),
)


@dataclass
class Operation:
    """One HTTP method handler on a path."""

    responses: dict[str, ResponseSpec] = field(default_factory=dict)
    summary: str | None = None
    description: str | None = None
    operation_id: str | None = None
    tags: list[str] | None = None
    parameters: list[dict[str, Any]] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Operation:
        data = _require_mapping(data, "operation")
        known = {key for _, key in _OPERATION_FIELDS} | {"responses"}
        responses = _require_mapping(data.get("responses") or {}, "responses")
        return cls(
            responses={
                str(code): ResponseSpec.from_dict(resp)
                for code, resp in responses.items()
            },
            summary=data.get("summary"),
            description=data.get("description"),
            operation_id=data.get("operationId"),
            tags=data.get("tags"),
            parameters=data.get("parameters"),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for attr, key in _OPERATION_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        out["responses"] = {code: resp.to_dict() for code, resp in self.responses.items()}
        out.update(self.extra)
        return out


class HttpMethod(enum.Enum):
    """The closed set of methods a PathItem holds, in reorder order."""

    GET = "get"
    DELETE = "delete"
    POST = "post"
    PUT = "put"
    OPTIONS = "options"
    PATCH = "patch"

    @property
    def accessor(self) -> Callable[[PathItem], Operation | None]:
        """Return the function reading this method's slot from a PathItem."""
        return _ACCESSORS[self]


# Swagger writes path item keys in this order
_SERIALIZED_METHOD_ORDER = (
    HttpMethod.GET,
    HttpMethod.PUT,
    HttpMethod.POST,
    HttpMethod.DELETE,
    HttpMethod.OPTIONS,
    HttpMethod.PATCH,
)


@dataclass
class PathItem:
    """Operations available on one path, at most one per HttpMethod."""

    get: Operation | None = None
    delete: Operation | None = None
    post: Operation | None = None
    put: Operation | None = None
    options: Operation | None = None
    patch: Operation | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PathItem:
        data = _require_mapping(data, "path item")
        slots = {
            method.value: Operation.from_dict(data[method.value])
            for method in HttpMethod
            if data.get(method.value) is not None
        }
        methods = {method.value for method in HttpMethod}
        extra = {k: v for k, v in data.items() if k not in methods}
        return cls(extra=extra, **slots)

    def operations(self) -> list[tuple[HttpMethod, Operation]]:
        """Present operations in HttpMethod order."""
        result = []
        for method in HttpMethod:
            op = method.accessor(self)
            if op is not None:
                result.append((method, op))
        return result

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for method in _SERIALIZED_METHOD_ORDER:
            op = method.accessor(self)
            if op is not None:
                out[method.value] = op.to_dict()
        out.update(self.extra)
        return out


_ACCESSORS: dict[HttpMethod, Callable[[PathItem], Operation | None]] = {
    HttpMethod.GET: lambda item: item.get,
    HttpMethod.DELETE: lambda item: item.delete,
    HttpMethod.POST: lambda item: item.post,
    HttpMethod.PUT: lambda item: item.put,
    HttpMethod.OPTIONS: lambda item: item.options,
    HttpMethod.PATCH: lambda item: item.patch,
}


@dataclass
class ApiDocument:
    """Root of an API description."""

    paths: dict[str, PathItem] = field(default_factory=dict)
    swagger: str = "2.0"
    info: dict[str, Any] | None = None
    host: str | None = None
    base_path: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ApiDocument:
        data = _require_mapping(data, "document")
        paths = _require_mapping(data.get("paths") or {}, "paths")
        known = {"swagger", "info", "host", "basePath", "paths"}
        return cls(
            paths={str(p): PathItem.from_dict(item) for p, item in paths.items()},
            swagger=str(data.get("swagger", "2.0")),
            info=data.get("info"),
            host=data.get("host"),
            base_path=data.get("basePath"),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"swagger": self.swagger}
        if self.info is not None:
            out["info"] = self.info
        if self.host is not None:
            out["host"] = self.host
        if self.base_path is not None:
            out["basePath"] = self.base_path
        out["paths"] = {path: item.to_dict() for path, item in self.paths.items()}
        out.update(self.extra)
        return out


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise GenerateError(f"Expected {what} to be an object, got {type(value).__name__}")
    return value
