"""Run the document pipeline: overrides, reorder, render, snapshot."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from .codegen import render
from .errors import GenerateError
from .loader import load_overrides
from .log import LogSink, as_sink
from .model import ApiDocument
from .normalizer import normalize
from .output import create_file, export_snapshot
from .templates import DEFAULT_TIMEOUT, resolve_template

# Mapping keys accepted by GeneratorConfig.from_mapping -> field names
_CONFIG_KEYS: dict[str, str] = {
    "outputPath": "output_path",
    "outputTemplate": "template_path",
    "swaggerDirectory": "swagger_directory",
    "overridingModels": "overriding_models",
    "fetchTimeout": "fetch_timeout",
}
_REQUIRED_KEYS = ("outputPath", "outputTemplate")


@dataclass(frozen=True)
class GeneratorConfig:
    """Already-validated settings for one pipeline run."""

    output_path: str
    template_path: str
    swagger_directory: str | None = None
    overriding_models: str | None = None
    fetch_timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GeneratorConfig:
        """Build a config from build-tool style keys (outputPath, outputTemplate, ...)."""
        unknown = sorted(set(data) - set(_CONFIG_KEYS))
        if unknown:
            raise GenerateError(f"Unknown configuration keys: {', '.join(unknown)}")
        missing = [key for key in _REQUIRED_KEYS if not data.get(key)]
        if missing:
            raise GenerateError(f"Missing required configuration: {', '.join(missing)}")
        kwargs = {_CONFIG_KEYS[key]: value for key, value in data.items() if value is not None}
        if "fetch_timeout" in kwargs:
            kwargs["fetch_timeout"] = float(kwargs["fetch_timeout"])
        return cls(**kwargs)

    def to_mapping(self) -> dict[str, Any]:
        names = {v: k for k, v in _CONFIG_KEYS.items()}
        return {names[f.name]: getattr(self, f.name) for f in fields(self)}


class DocumentSource:
    """Owns one ApiDocument for the duration of a pipeline run."""

    def __init__(
        self,
        config: GeneratorConfig,
        document: ApiDocument,
        log: LogSink | None = None,
    ):
        self.config = config
        self.document = document
        self.log = as_sink(log)

    def load_overriding_models(self) -> None:
        load_overrides(self.config.overriding_models, log=self.log)

    def reorder_apis(self) -> None:
        self.document = normalize(self.document)

    def to_documents(self) -> Path:
        """Render the document to config.output_path and return that path."""
        self.log.info(f"Writing doc to {self.config.output_path}...")
        # Resolve before touching the filesystem so a bad location leaves no output
        descriptor = resolve_template(
            self.config.template_path, timeout=self.config.fetch_timeout
        )
        output = Path(self.config.output_path)
        target = create_file(output.parent, output.name, log=self.log)
        try:
            writer = open(target, "w", encoding="utf-8")
        except OSError as e:
            raise GenerateError(f"Cannot open [{target}] for writing", e) from e
        render(self.document, descriptor, writer)
        self.log.info("Done!")
        return target

    def to_swagger_documents(self) -> Path | None:
        return export_snapshot(self.document, self.config.swagger_directory, log=self.log)

    def run(self) -> ApiDocument:
        """Run every stage in order and return the normalized document."""
        self.load_overriding_models()
        self.reorder_apis()
        self.to_documents()
        self.to_swagger_documents()
        return self.document


def generate(
    document: ApiDocument, config: GeneratorConfig, log: LogSink | None = None
) -> ApiDocument:
    """Run the full pipeline for document with config."""
    return DocumentSource(config, document, log=log).run()
