"""CLI entry point for swagger-validate."""

import json
import logging
from pathlib import Path

import click

from swagger_validate.engine import validate_request
from swagger_validate.registry import SchemaRegistry, SchemaRegistryError
from swagger_validate.route import build_route
from swagger_validate.schema.base import InputBundle
from swagger_validate.schema.loader import iter_routes, load_document


def _load_registry(doc_path: Path) -> tuple[SchemaRegistry, str]:
    """Load a document into a fresh registry, returning it and the schema name."""
    try:
        doc = load_document(doc_path)
        registry = SchemaRegistry()
        schema_name = registry.add_schema(doc)
    except (ValueError, SchemaRegistryError) as e:
        raise click.ClickException(str(e)) from e
    registry.freeze()
    return registry, schema_name


def _pairs(values: tuple[str, ...], option: str) -> dict[str, str]:
    result = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected key=value, got {item!r}", param_hint=option)
        result[key] = value
    return result


@click.group()
@click.option("--log-level", default="warning", type=click.Choice(["debug", "info", "warning", "error"]), help="Logging level.")
def main(log_level: str):
    """Swagger Validate: check requests and responses against Swagger documents."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
def routes(doc_path: Path):
    """List the routes declared in a Swagger document."""
    registry, schema_name = _load_registry(doc_path)
    doc = registry.get(schema_name)
    click.echo(f"{schema_name}: {len(iter_routes(doc))} routes")
    for path, verb in iter_routes(doc):
        route = build_route(registry, schema_name, path, verb)
        click.echo(
            f"  {route.verb.upper():7} {route.colon_path}  ->  {route.flask_path}"
            f"  ({len(route.parameters)} parameters)"
        )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("--path", "route_path", required=True, help="Route path template, e.g. /pets/{petId}.")
@click.option("--verb", default="get", help="HTTP verb.")
@click.option("-q", "--query", multiple=True, help="Query parameter as key=value.")
@click.option("-p", "--param", multiple=True, help="Path parameter as key=value.")
@click.option("-H", "--header", multiple=True, help="Header as key=value.")
@click.option("--body", default=None, help="Request body as JSON.")
def check(doc_path: Path, route_path: str, verb: str, query: tuple, param: tuple, header: tuple, body: str | None):
    """Validate a request against a route without running a server."""
    registry, schema_name = _load_registry(doc_path)
    try:
        route = build_route(registry, schema_name, route_path, verb)
    except SchemaRegistryError as e:
        raise click.ClickException(str(e)) from e

    params = _pairs(query, "--query")
    params.update(_pairs(param, "--param"))
    headers = {k.lower(): v for k, v in _pairs(header, "--header").items()}
    try:
        parsed_body = json.loads(body) if body is not None else None
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"invalid JSON: {e}", param_hint="--body") from e

    input = validate_request(route, InputBundle(params=params, headers=headers, body=parsed_body))
    click.echo(json.dumps(input.model_dump(mode="json"), indent=2))
    if input.errors:
        raise SystemExit(2)
