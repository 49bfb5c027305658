"""Swagger document loader.

Reads Swagger 2.0 documents (YAML or JSON) and turns route parameter
lists into ParameterDeclaration models.
"""

import logging
from pathlib import Path

import yaml

from .base import ParameterDeclaration

logger = logging.getLogger(__name__)

HTTP_VERBS = ("get", "put", "post", "delete", "options", "head", "patch")


def load_document(file_path: Path) -> dict:
    """Load a Swagger document from a YAML or JSON file."""
    text = file_path.read_text(encoding="utf-8")
    doc = yaml.safe_load(text)
    if not isinstance(doc, dict):
        raise ValueError(f"{file_path} does not contain a Swagger document")
    logger.debug("Loaded %s (%d paths)", file_path, len(doc.get("paths") or {}))
    return doc


def iter_routes(doc: dict) -> list[tuple[str, str]]:
    """List every (path, verb) pair declared in a document, in document order."""
    routes = []
    for path, methods in (doc.get("paths") or {}).items():
        for verb in methods:
            if verb.lower() in HTTP_VERBS:
                routes.append((path, verb))
    return routes


def parse_parameters(params: list[dict]) -> list[ParameterDeclaration]:
    result = []
    for index, p in enumerate(params):
        fields = dict(
            name=p.get("name", ""),
            location=p.get("in", ""),
            index=index,
            required=p.get("required"),
            primitive_type=p.get("type"),
            inline_schema=p.get("schema"),
        )
        # A declared null default still counts as a default
        if "default" in p:
            fields["default"] = p["default"]
        result.append(ParameterDeclaration(**fields))
    return result


def normalize_document(doc: dict) -> dict:
    """Turn response status keys into strings, in place.

    YAML reads ``200:`` as an integer key, which JSON pointers cannot address.
    """
    for path, methods in (doc.get("paths") or {}).items():
        for verb, operation in methods.items():
            if verb.lower() not in HTTP_VERBS or not isinstance(operation, dict):
                continue
            responses = operation.get("responses")
            if isinstance(responses, dict):
                operation["responses"] = {str(k): v for k, v in responses.items()}
    return doc
