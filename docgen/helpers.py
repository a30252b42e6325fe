"""Text helpers available to templates.

Each helper is registered as a Jinja2 global and filter; ifeq is also a
test. Helpers never raise: bad input degrades to an empty or unchanged
value.
"""

from __future__ import annotations

from typing import Any, Iterable

import jinja2


def ifeq(value: Any, other: Any = None) -> bool:
    """True when both are non-null and equal as strings.

    Used as a branch condition: ``{% if ifeq(method, "GET") %}...{% else %}``.
    """
    if value is None or other is None:
        return False
    return str(value) == str(other)


def basename(value: Any) -> str:
    """Return the text after the last '/'; '' for None."""
    if value is None:
        return ""
    text = str(value)
    return text[text.rfind("/") + 1:]


JOIN_SEPARATOR = ", "


def _lookup(value: Any, attribute: Any) -> Any:
    """Resolve a dotted attribute the way Jinja does: item first, then attribute."""
    for part in str(attribute).split("."):
        key: Any = int(part) if part.isdigit() else part
        try:
            value = value[key]
        except (TypeError, LookupError):
            value = getattr(value, part, None)
        if value is None:
            return None
    return value


def join(
    values: Iterable[Any] | None,
    separator: str = JOIN_SEPARATOR,
    attribute: Any = None,
) -> str:
    """Join values with separator, skipping None entries.

    With attribute, each value is first replaced by that (dotted) attribute,
    as in Jinja's join filter. Values that cannot be iterated render as text.
    """
    if values is None:
        return ""
    if isinstance(values, str):
        return values
    try:
        items = list(values)
    except TypeError:
        return str(values)
    if attribute is not None:
        items = [_lookup(v, attribute) for v in items]
    return str(separator).join(str(v) for v in items if v is not None)


def lower(value: Any) -> str:
    if value is None:
        return ""
    return str(value).lower()


HELPERS = {
    "ifeq": ifeq,
    "basename": basename,
    "join": join,
    "lower": lower,
}


def register_helpers(env: jinja2.Environment) -> None:
    """Install every helper on env, replacing Jinja's own join/lower filters."""
    for name, fn in HELPERS.items():
        env.globals[name] = fn
        env.filters[name] = fn
    env.tests["ifeq"] = ifeq
