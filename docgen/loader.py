"""Load API documents and model overrides from disk.

load_document reads a finished swagger.json into an ApiDocument.
load_overrides reads the overriding-models file; see its docstring.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import GenerateError
from .log import LogSink, as_sink
from .model import ApiDocument


@dataclass(frozen=True)
class ModelOverride:
    """One entry of an overriding-models file."""

    class_name: str
    json_string: str


def load_document(path: str | Path) -> ApiDocument:
    """Load a Swagger JSON document from disk."""
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise GenerateError(f"Swagger document [{path}] must be a valid JSON file!", e) from e
    except OSError as e:
        raise GenerateError(f"Swagger document [{path}] not found!", e) from e
    return ApiDocument.from_dict(data)


def _parse_override(source: str | Path, index: int, node: Any) -> ModelOverride:
    if not isinstance(node, dict):
        raise GenerateError(f"Swagger-overridingModels[{source}] entry {index} must be an object")
    class_name = node.get("className")
    json_string = node.get("jsonString")
    if not isinstance(class_name, str) or not isinstance(json_string, str):
        raise GenerateError(
            f"Swagger-overridingModels[{source}] entry {index} needs string "
            "'className' and 'jsonString' fields"
        )
    return ModelOverride(class_name=class_name, json_string=json_string)


def load_overrides(source: str | Path | None, log: LogSink | None = None) -> None:
    """Read and check the overriding-models file, then discard it.

    Overrides are not applied to the model. This stage only validates the
    file so a broken configuration fails the build, and is the place to
    hook override merging in later. A source of None is a no-op.
    """
    if source is None:
        return
    log = as_sink(log)
    try:
        with open(source, encoding="utf-8") as f:
            tree = json.load(f)
    except json.JSONDecodeError as e:
        raise GenerateError(f"Swagger-overridingModels[{source}] must be a valid JSON file!", e) from e
    except OSError as e:
        raise GenerateError(f"Swagger-overridingModels[{source}] not found!", e) from e

    if not isinstance(tree, list):
        raise GenerateError(f"Swagger-overridingModels[{source}] must be a JSON array")
    for index, node in enumerate(tree):
        override = _parse_override(source, index, node)
        log.debug(f"Ignoring model override for {override.class_name}")
