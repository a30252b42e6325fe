"""Render an ApiDocument through a resolved template.

Output is streamed chunk by chunk into the writer, which is always closed.
"""

from __future__ import annotations

from typing import TextIO

import httpx
import jinja2

from .context_builder import build_context
from .errors import GenerateError
from .helpers import register_helpers
from .model import ApiDocument
from .templates import TemplateDescriptor


def create_environment(descriptor: TemplateDescriptor) -> jinja2.Environment:
    """Jinja2 environment over the descriptor's loader with helpers installed."""
    env = jinja2.Environment(
        loader=descriptor.loader,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    register_helpers(env)
    return env


def render(doc: ApiDocument, descriptor: TemplateDescriptor, out: TextIO) -> None:
    """Apply the descriptor's template to doc, writing into out.

    doc is expected to be normalized already. Raises GenerateError on
    template syntax errors, missing templates or includes, I/O or network
    failures, and any error raised while applying the template.
    """
    try:
        env = create_environment(descriptor)
        template = env.get_template(descriptor.name)
        for chunk in template.generate(**build_context(doc)):
            out.write(chunk)
    except jinja2.TemplateSyntaxError as e:
        raise GenerateError(
            f"Template [{e.name or descriptor.name}] line {e.lineno}: {e.message}", e
        ) from e
    except jinja2.TemplateNotFound as e:
        raise GenerateError(f"Template [{e.name}] not found under {descriptor.prefix}", e) from e
    except jinja2.TemplateError as e:
        raise GenerateError(f"Failed to render template [{descriptor.name}]", e) from e
    except httpx.HTTPError as e:
        raise GenerateError(f"Failed to fetch template from {descriptor.prefix}", e) from e
    except OSError as e:
        raise GenerateError(f"I/O error while rendering [{descriptor.name}]", e) from e
    except Exception as e:
        raise GenerateError(f"Failed to apply template [{descriptor.name}]", e) from e
    finally:
        out.close()
