"""Resolve a template location into a Jinja2 loader.

A location is either a filesystem path (or file: URL) or an http(s) URL.
Local templates load through jinja2.FileSystemLoader rooted at the
template's directory. Remote templates load through HttpTemplateLoader,
which fetches siblings and includes relative to the URL's parent.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable
from urllib.parse import unquote, urlsplit

import httpx
import jinja2

from .errors import GenerateError

DEFAULT_TIMEOUT = 30.0

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_SCHEME = re.compile(r"^([A-Za-z][A-Za-z0-9+.\-]*):")
_REMOTE_SCHEMES = {"http", "https"}


class HttpTemplateLoader(jinja2.BaseLoader):
    """Load templates over HTTP relative to a base URL.

    ``get_source(env, "a/b.j2")`` fetches ``<base_url>/a/b.j2``.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    def url_for(self, template: str) -> str:
        return f"{self.base_url}/{template.lstrip('/')}"

    def get_source(
        self, environment: jinja2.Environment, template: str
    ) -> tuple[str, str | None, Callable[[], bool] | None]:
        url = self.url_for(template)
        if self._client is not None:
            resp = self._client.get(url, timeout=self._timeout, follow_redirects=True)
        else:
            resp = httpx.get(url, timeout=self._timeout, follow_redirects=True)
        if resp.status_code == 404:
            raise jinja2.TemplateNotFound(template)
        resp.raise_for_status()
        # Remote sources are fetched once per environment and never reloaded
        return resp.text, url, lambda: True


@dataclass(frozen=True)
class TemplateDescriptor:
    """A resolved template: where it lives, its name, and how to load it."""

    prefix: str
    name: str
    loader: jinja2.BaseLoader

    @property
    def is_remote(self) -> bool:
        return isinstance(self.loader, HttpTemplateLoader)


def url_parent(url: str) -> str:
    """Return the URL text before the last '/', or the URL if it has none."""
    idx = url.rfind("/")
    if idx == -1:
        return url
    return url[:idx]


def _resolve_remote(
    descriptor: str, client: httpx.Client | None, timeout: float
) -> TemplateDescriptor:
    try:
        url = httpx.URL(descriptor)
    except httpx.InvalidURL as e:
        raise GenerateError(f"Malformed template URL [{descriptor!r}]", e) from e
    if not url.host:
        raise GenerateError(f"Malformed template URL [{descriptor!r}]: missing host")

    text = str(url)
    prefix = url_parent(text)
    name = text[len(prefix) + 1:]
    if not name or prefix.endswith("/"):
        raise GenerateError(f"Malformed template URL [{descriptor!r}]: missing template name")
    return TemplateDescriptor(
        prefix=prefix,
        name=name,
        loader=HttpTemplateLoader(prefix, client=client, timeout=timeout),
    )


def _resolve_local(descriptor: str) -> TemplateDescriptor:
    if descriptor.lower().startswith("file:"):
        descriptor = unquote(urlsplit(descriptor).path)
    path = Path(descriptor).expanduser()
    if not path.name:
        raise GenerateError(f"Template path [{descriptor}] does not name a file")
    directory = path.parent.resolve()
    return TemplateDescriptor(
        prefix=str(directory),
        name=path.name,
        loader=jinja2.FileSystemLoader(str(directory)),
    )


def resolve_template(
    descriptor: str,
    *,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> TemplateDescriptor:
    """Parse a template location string into a TemplateDescriptor.

    Raises GenerateError if the string is neither a usable path nor a
    well-formed http(s) URL. Nothing is fetched or opened here.
    """
    if not descriptor or not descriptor.strip():
        raise GenerateError("Template location is empty")
    if _CONTROL_CHARS.search(descriptor):
        raise GenerateError(f"Malformed template location [{descriptor!r}]: control character")

    match = _SCHEME.match(descriptor)
    # Single-letter schemes are Windows drive letters
    if match and len(match.group(1)) > 1:
        scheme = match.group(1).lower()
        if scheme in _REMOTE_SCHEMES:
            return _resolve_remote(descriptor, client, timeout)
        if scheme != "file":
            raise GenerateError(
                f"Malformed template location [{descriptor}]: unsupported scheme '{scheme}'"
            )
    return _resolve_local(descriptor)
