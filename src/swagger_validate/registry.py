"""Named Swagger documents available to route validation.

A SchemaRegistry is populated once at startup and frozen before it serves
requests; routes hold a reference to it rather than reaching for global
state.
"""

import copy
import logging

from referencing import Registry, Resource
from referencing.jsonschema import DRAFT4

from swagger_validate.schema.loader import normalize_document
from swagger_validate.validator import SchemaValidator

logger = logging.getLogger(__name__)


class SchemaRegistryError(Exception):
    """Raised for schema registration problems."""


class DuplicateSchemaError(SchemaRegistryError):
    """Raised when a schema name has already been registered."""


class RegistryFrozenError(SchemaRegistryError):
    """Raised when registering into a frozen registry."""


class RouteNotFoundError(SchemaRegistryError):
    """Raised when a schema, path or verb cannot be found."""


class SchemaRegistry:
    """Process-wide store of Swagger documents keyed by ``info.title``."""

    def __init__(self):
        self._schemas: dict[str, dict] = {}
        self._frozen = False
        self.validator = SchemaValidator()

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_schema(self, schema: dict) -> str:
        """Register a Swagger document and return the name it is stored under."""
        if self._frozen:
            raise RegistryFrozenError("Schema registry is frozen, no more schemas can be added")
        schema_name = (schema.get("info") or {}).get("title")
        if not schema_name:
            raise SchemaRegistryError("Schema has no info.title to register it under")
        if schema_name in self._schemas:
            raise DuplicateSchemaError(
                f"Schema with same name has previously been added: {schema_name}"
            )

        # Keep a private copy so later edits by the caller cannot change validation
        schema = normalize_document(copy.deepcopy(schema))
        resource = Resource.from_contents(schema, default_specification=DRAFT4)
        registry = self.validator.registry.with_resource(uri=schema_name, resource=resource)
        self.validator = SchemaValidator(registry)
        self._schemas[schema_name] = schema
        logger.info("Registered schema %r (%d paths)", schema_name, len(schema.get("paths") or {}))
        return schema_name

    def freeze(self) -> None:
        self._frozen = True

    def get(self, schema_name: str) -> dict:
        try:
            return self._schemas[schema_name]
        except KeyError:
            raise RouteNotFoundError(f"No schema registered under {schema_name!r}") from None

    def names(self) -> list[str]:
        return list(self._schemas)

    def __contains__(self, schema_name: str) -> bool:
        return schema_name in self._schemas
