"""Flask request and response adapters.

Usage::

    app = Flask(__name__)
    registry = SchemaRegistry()
    registry.add_schema(load_document(Path("petstore.yaml")))

    @swagger_route(app, registry, "Swagger Petstore", "/pets/{petId}", "get")
    def show_pet(input: InputBundle) -> OutputBundle:
        return OutputBundle(status=200, body={"id": input.params["petId"]})
"""

import functools
import logging
from typing import Callable

from flask import Flask, Request, Response, g, jsonify, request

from swagger_validate.config import Settings, load_settings
from swagger_validate.engine import validate_request, validate_response
from swagger_validate.registry import SchemaRegistry
from swagger_validate.route import build_route
from swagger_validate.schema.base import InputBundle, OutputBundle

logger = logging.getLogger(__name__)

View = Callable[[InputBundle], OutputBundle]


def extract_input(req: Request) -> InputBundle:
    """Collect query, path, header and body values from a Flask request."""
    params = {key: req.args.get(key) for key in req.args}
    # Path params overwrite query params of the same name
    params.update(req.view_args or {})
    headers = {key.lower(): value for key, value in req.headers.items()}
    body = req.get_json(silent=True)
    return InputBundle(params=params, headers=headers, body=body)


def apply_output(output: OutputBundle) -> Response:
    response = jsonify(output.body)
    response.status_code = output.status
    response.headers.update(output.headers)
    return response


def rejection(input: InputBundle, status: int) -> OutputBundle:
    return OutputBundle(
        status=status,
        body={
            "code": status,
            "message": "Request validation failed",
            "errors": [e.model_dump(mode="json") for e in input.errors],
        },
    )


def swagger_route(
    app: Flask,
    registry: SchemaRegistry,
    schema_name: str,
    route_path: str,
    route_verb: str,
    settings: Settings | None = None,
) -> Callable[[View], View]:
    """Register a view for one Swagger route with request and response validation.

    The view receives the validated InputBundle and returns an OutputBundle.
    """
    route = build_route(registry, schema_name, route_path, route_verb)
    settings = settings or load_settings()

    def decorator(view: View) -> View:
        @functools.wraps(view)
        def handler(**view_args):
            registry.freeze()
            input = validate_request(route, extract_input(request))
            g.swagger_input = input

            if input.errors and settings.reject_status is not None:
                return apply_output(rejection(input, settings.reject_status))

            output = view(input)
            validate_response(route, input, output, production=settings.production)
            return apply_output(output)

        app.add_url_rule(
            route.flask_path,
            endpoint=f"{schema_name}:{route.verb}:{route.path}",
            view_func=handler,
            methods=[route.verb.upper()],
        )
        logger.debug("Mounted %s %s at %s", route.verb.upper(), route.path, route.flask_path)
        return view

    return decorator
