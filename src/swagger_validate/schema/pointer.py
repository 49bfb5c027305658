"""Path template and JSON pointer helpers."""

import re

_PATH_PARAM = re.compile(r"/\{([^}]+)\}")


def json_pointer_escape(segment: str) -> str:
    """Escape a single JSON pointer reference token.

    See: https://tools.ietf.org/html/rfc6901#section-3
    """
    return segment.replace("~", "~0").replace("/", "~1")


def colon_path(path: str) -> str:
    """Rewrite ``/{param}`` path parameters as ``/:param``."""
    return _PATH_PARAM.sub(r"/:\1", path)


def flask_path(path: str) -> str:
    """Rewrite ``/{param}`` path parameters as Flask's ``/<param>``."""
    return _PATH_PARAM.sub(r"/<\1>", path)


def route_pointer(schema_name: str, path: str, verb: str) -> str:
    return f"{schema_name}#/paths/{json_pointer_escape(path)}/{verb.lower()}"


def parameter_ref(pointer: str, index: int, inline_schema: bool = False) -> str:
    ref = f"{pointer}/parameters/{index}"
    if inline_schema:
        ref = f"{ref}/schema"
    return ref


def response_ref(pointer: str, status: int | str, has_schema: bool = False) -> str:
    ref = f"{pointer}/responses/{json_pointer_escape(str(status))}"
    if has_schema:
        ref = f"{ref}/schema"
    return ref
