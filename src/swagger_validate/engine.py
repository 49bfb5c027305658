"""Request and response validation for a single route.

Query, path and header values arrive as strings. Before validation they
are coerced to the primitive type their declaration names; values that
cannot be coerced are passed through unchanged so that schema validation
rejects them.
"""

import logging
import math
from typing import Any

from swagger_validate.route import RouteConfig
from swagger_validate.schema.base import LOCATIONS, ErrorRecord, InputBundle, OutputBundle, ParameterDeclaration
from swagger_validate.schema.pointer import parameter_ref, response_ref

logger = logging.getLogger(__name__)

RESPONSE_VALIDATION_CODE = 500999

_PRIMITIVE_TYPES = {
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "string": lambda v: isinstance(v, str),
}


def _to_number(value: Any) -> Any:
    if isinstance(value, str) and (not value.strip() or "_" in value):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    try:
        number = float(value)
    except (TypeError, ValueError):
        return value
    return value if math.isnan(number) else number


def _to_boolean(value: Any) -> Any:
    if value == "true":
        return True
    if value == "false":
        return False
    return value


def coerce_value(value: Any, primitive_type: str | None) -> Any:
    """Best-effort conversion of a transport value to ``primitive_type``.

    Unconvertible values are returned unchanged.
    """
    if primitive_type == "number":
        return _to_number(value)
    if primitive_type == "boolean":
        return _to_boolean(value)
    if primitive_type == "string":
        # Adapters may already have turned numeric-looking strings into numbers
        return str(value) if value is not None else value
    # array and object parameters are not handled
    return value


def _read_value(param: ParameterDeclaration, input: InputBundle) -> Any:
    if param.location in ("query", "path"):
        return input.params.get(param.name)
    if param.location == "header":
        return input.headers.get(param.name.lower())
    return input.body


def _write_value(param: ParameterDeclaration, input: InputBundle, value: Any) -> None:
    if param.location in ("query", "path"):
        input.params[param.name] = value
    elif param.location == "header":
        input.headers[param.name.lower()] = value
    # body is validated as-is, never written back


def validate_request(route: RouteConfig, input: InputBundle) -> InputBundle:
    """Coerce and validate ``input`` against the route's parameters.

    Errors are appended to ``input.errors``; every parameter is checked
    even after one fails. Coerced values are written back into
    ``input.params`` and ``input.headers``.
    """
    validator = route.registry.validator
    for param in route.parameters:
        if param.location not in LOCATIONS:
            input.errors.append(ErrorRecord(
                message=f"Unrecognised location for parameter: {param.location}",
                parameter=param.name,
            ))
            continue

        value = _read_value(param, input)
        actual = value
        defaulted = value is None and param.has_default
        if defaulted:
            # Defaults come from the schema author and are trusted
            actual = param.default
        elif value is None and param.required is False:
            # Optional and not supplied
            pass
        else:
            ref = parameter_ref(route.pointer, param.index)
            type_matches = _PRIMITIVE_TYPES.get(param.primitive_type)
            if type_matches is not None and type_matches(value):
                pass
            elif param.has_schema:
                ref = parameter_ref(route.pointer, param.index, inline_schema=True)
            elif param.location != "body":
                # Only transport strings are coerced, the body is validated as-is
                actual = coerce_value(value, param.primitive_type)
            logger.debug("Parameter %s (%s): %r -> %r", param.name, param.location, value, actual)

            valid, details = validator.validate(ref, actual)
            if not valid:
                input.errors.append(ErrorRecord(
                    message=f"Invalid {param.location} parameter: {param.name}",
                    ref=ref,
                    parameter=param.name,
                    details=details,
                ))

        if defaulted or actual is not value:
            _write_value(param, input, actual)

    if input.errors:
        logger.warning(
            "Request to %s %s failed validation (%d errors)",
            route.verb.upper(), route.colon_path, len(input.errors),
        )
    return input


def _response_ref(route: RouteConfig, status: int) -> str | None:
    for key in (str(status), "default"):
        response = route.responses.get(key)
        if response is not None:
            has_schema = isinstance(response, dict) and "schema" in response
            return response_ref(route.pointer, key, has_schema=has_schema)
    return None


def validate_response(route: RouteConfig, input: InputBundle, output: OutputBundle, production: bool) -> OutputBundle:
    """Validate ``output.body`` against the response declared for ``output.status``.

    Skipped entirely in production. On failure the output status and body
    are replaced by a 500 diagnostic envelope; headers are left alone.
    """
    if production:
        return output

    ref = _response_ref(route, output.status)
    if ref is None:
        input.errors.append(ErrorRecord(
            message=f"No response schema declared for status {output.status}",
        ))
    else:
        valid, details = route.registry.validator.validate(ref, output.body)
        if valid:
            return output
        input.errors.append(ErrorRecord(
            message=f"Invalid response body for status {output.status}",
            ref=ref,
            details=details,
        ))

    logger.warning(
        "Response from %s %s failed validation (status %d)",
        route.verb.upper(), route.colon_path, output.status,
    )
    output.body = {
        "code": RESPONSE_VALIDATION_CODE,
        "message": "Response validation failed",
        "errors": [e.model_dump(mode="json") for e in input.errors],
        "original": output.body,
    }
    output.status = 500
    return output
