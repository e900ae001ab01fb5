"""CLI entry point for api-client-gen."""

import json
import logging
import shutil
from pathlib import Path

import click

from api_client_gen.config import DEFAULT_CONFIG_NAME, load_config
from api_client_gen.errors import ConfigError, GenerationError
from api_client_gen.generator.endpoints import EndpointExpander
from api_client_gen.generator.models import ModelExpander
from api_client_gen.generator.render import build_render_plan, render_all
from api_client_gen.generator.templates import fetch_templates
from api_client_gen.parser.swagger import parse_openapi


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _is_empty(directory: Path) -> bool:
    if not directory.exists():
        return True
    if not directory.is_dir():
        raise ConfigError(f"Output path {directory} exists and is not a directory")
    return not any(directory.iterdir())


@click.group()
def main():
    """Generate typed client sources from an OpenAPI description."""
    pass


@main.command()
@click.option("-c", "--config", "config_path", default=DEFAULT_CONFIG_NAME, type=click.Path(path_type=Path), help="Project config file.")
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help="Override the output directory.")
@click.option("-t", "--templates", default=None, help="Override the template bundle (directory or git URL).")
@click.option("-y", "--yes", is_flag=True, help="Don't ask before clearing a non-empty output directory.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def generate(config_path: Path, output: Path | None, templates: str | None, yes: bool, verbose: bool):
    """Generate client sources as described by the project config."""
    _setup_logging(verbose)
    try:
        config = load_config(config_path)
        if output is not None:
            config = config.model_copy(update={"output": output})
        if templates is not None:
            config = config.model_copy(update={"templates": templates})

        click.echo(f"Parsing {config.yml}...")
        document = parse_openapi(config.yml)
        plan = build_render_plan(document, config)
        click.echo(f"Planned {len(plan)} files.")

        click.echo(f"Fetching templates from {config.templates}...")
        with fetch_templates(config.templates, config.templates_path) as bundle:
            if not _is_empty(config.output):
                if not yes:
                    click.confirm(
                        f"Directory {config.output} not empty. Continue?", abort=True
                    )
                shutil.rmtree(config.output)

            written = render_all(plan, bundle, config.output)
    except GenerationError as e:
        raise click.ClickException(str(e)) from e

    for path in written:
        click.echo(f"  Created {path}")
    click.echo(f"Generated {len(written)} files in {config.output}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("--model-package", default="API", help="Namespace for model types in endpoints.")
@click.option("--allow-dangling-refs", is_flag=True, help="Treat references to unknown schemas as empty objects.")
@click.option("--strict-properties", is_flag=True, help="Fail on properties whose type can't be resolved.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def inspect(doc_path: Path, model_package: str, allow_dangling_refs: bool, strict_properties: bool, verbose: bool):
    """Print the models and endpoint groups built from DOC_PATH as JSON."""
    _setup_logging(verbose)
    try:
        document = parse_openapi(doc_path)
        models = ModelExpander(
            allow_dangling_refs=allow_dangling_refs, strict_properties=strict_properties
        ).expand(document)
        groups = EndpointExpander(model_package=model_package).expand(document)
    except GenerationError as e:
        raise click.ClickException(str(e)) from e

    result = {
        "models": [model.model_dump() for model in models],
        "groups": [group.model_dump() for group in groups],
    }
    click.echo(json.dumps(result, indent=2, ensure_ascii=False))
