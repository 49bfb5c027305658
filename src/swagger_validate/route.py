"""Per-route configuration, computed once when a route is registered."""

import logging

from pydantic import BaseModel, ConfigDict

from swagger_validate.registry import RouteNotFoundError, SchemaRegistry
from swagger_validate.schema.base import ParameterDeclaration
from swagger_validate.schema.loader import parse_parameters
from swagger_validate.schema.pointer import colon_path, flask_path, route_pointer

logger = logging.getLogger(__name__)


class RouteConfig(BaseModel):
    """Everything the validation engine needs to know about one path + verb."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    registry: SchemaRegistry
    schema_name: str
    path: str  # /pets/{petId}
    verb: str  # get / post / ...
    pointer: str  # <schemaName>#/paths/~1pets~1{petId}/get
    parameters: tuple[ParameterDeclaration, ...]
    responses: dict

    @property
    def colon_path(self) -> str:
        return colon_path(self.path)

    @property
    def flask_path(self) -> str:
        return flask_path(self.path)


def build_route(registry: SchemaRegistry, schema_name: str, route_path: str, route_verb: str) -> RouteConfig:
    """Look up a route definition in a registered schema and precompute its config."""
    schema = registry.get(schema_name)
    methods = (schema.get("paths") or {}).get(route_path)
    if methods is None:
        raise RouteNotFoundError(f"Path {route_path!r} is not declared in schema {schema_name!r}")
    verb = route_verb.lower()
    route_def = methods.get(verb)
    if route_def is None:
        raise RouteNotFoundError(f"Verb {verb!r} is not declared for {route_path!r} in schema {schema_name!r}")

    route = RouteConfig(
        registry=registry,
        schema_name=schema_name,
        path=route_path,
        verb=verb,
        pointer=route_pointer(schema_name, route_path, verb),
        parameters=tuple(parse_parameters(route_def.get("parameters") or [])),
        responses=route_def.get("responses") or {},
    )
    logger.info("Built route %s %s (%d parameters)", verb.upper(), route.colon_path, len(route.parameters))
    return route
