"""Entry point: python -m docgen SWAGGER_JSON --template T --output O

Loads a swagger.json document, renders it through the template and
optionally writes a normalized swagger.json snapshot.
"""

from __future__ import annotations

import click

from .errors import GenerateError
from .loader import load_document
from .pipeline import GeneratorConfig, generate


@click.command()
@click.argument("document", type=click.Path(dir_okay=False))
@click.option("--template", "-t", "template_path", required=True,
              help="Template file path or http(s) URL.")
@click.option("--output", "-o", "output_path", required=True,
              help="Where to write the rendered document.")
@click.option("--swagger-dir", "swagger_directory", default=None,
              help="Directory for the swagger.json snapshot. Omit to skip.")
@click.option("--overrides", "overriding_models", default=None,
              help="JSON file of model overrides (validated, not applied).")
@click.option("--timeout", "fetch_timeout", type=float, default=30.0, show_default=True,
              help="Seconds to wait when fetching a remote template.")
def main(
    document: str,
    template_path: str,
    output_path: str,
    swagger_directory: str | None,
    overriding_models: str | None,
    fetch_timeout: float,
) -> None:
    """Render DOCUMENT (a swagger.json file) through a template."""
    config = GeneratorConfig(
        output_path=output_path,
        template_path=template_path,
        swagger_directory=swagger_directory,
        overriding_models=overriding_models,
        fetch_timeout=fetch_timeout,
    )
    try:
        doc = load_document(document)
        generate(doc, config)
    except GenerateError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Generated {output_path} ({len(doc.paths)} paths)")


if __name__ == "__main__":
    main()
