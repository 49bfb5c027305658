"""JSON Schema validation by reference.

Wraps jsonschema's Draft 4 validator (the dialect Swagger 2.0 builds on)
with the formats and types Swagger documents use, resolving ``$ref``
strings such as ``"Pet Store#/paths/~1pets/get/parameters/0"`` against
a referencing registry of named documents.
"""

import math
from typing import Any, Protocol, runtime_checkable

from jsonschema import Draft4Validator, FormatChecker
from jsonschema.validators import extend
from referencing import Registry

from swagger_validate.schema.base import ErrorDetail


@runtime_checkable
class ReadableStream(Protocol):
    def read(self, *args): ...

    def readable(self) -> bool: ...


@runtime_checkable
class WritableStream(Protocol):
    def write(self, *args): ...

    def writable(self) -> bool: ...


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


FORMAT_CHECKER = FormatChecker()


@FORMAT_CHECKER.checks("integer")
@FORMAT_CHECKER.checks("int32")
@FORMAT_CHECKER.checks("int64")
def _check_integer(value: Any) -> bool:
    # Formats only constrain numbers, ``type`` rejects everything else
    if not _is_number(value) or isinstance(value, int):
        return True
    return not math.isnan(value) and value.is_integer()


@FORMAT_CHECKER.checks("double")
@FORMAT_CHECKER.checks("float")
def _check_double(value: Any) -> bool:
    if not _is_number(value):
        return True
    return not math.isnan(value)


def _is_buffer(checker, value: Any) -> bool:
    return isinstance(value, (bytes, bytearray, memoryview))


def _is_readable_stream(checker, value: Any) -> bool:
    return isinstance(value, ReadableStream) and value.readable()


def _is_writable_stream(checker, value: Any) -> bool:
    return isinstance(value, WritableStream) and value.writable()


SwaggerValidator = extend(
    Draft4Validator,
    type_checker=Draft4Validator.TYPE_CHECKER.redefine_many(
        {
            "buffer": _is_buffer,
            "readableStream": _is_readable_stream,
            "writeableStream": _is_writable_stream,
        }
    ),
)


def _to_detail(error) -> ErrorDetail:
    instance_path = "".join(f"/{p}" for p in error.absolute_path)
    return ErrorDetail(
        message=error.message,
        keyword=str(error.validator),
        instance_path=instance_path,
        schema_path="/".join(str(p) for p in error.schema_path),
    )


class SchemaValidator:
    """Validates values against schemas addressed by ``$ref`` strings."""

    def __init__(self, registry: Registry | None = None):
        self.registry = registry if registry is not None else Registry()
        self._validators: dict[str, Any] = {}

    def validate(self, ref: str, value: Any) -> tuple[bool, list[ErrorDetail]]:
        """Validate ``value`` against the schema at ``ref``.

        Returns (valid, details); details is empty when valid.
        """
        validator = self._validators.get(ref)
        if validator is None:
            validator = SwaggerValidator(
                {"$ref": ref},
                registry=self.registry,
                format_checker=FORMAT_CHECKER,
            )
            self._validators[ref] = validator
        details = [_to_detail(e) for e in validator.iter_errors(value)]
        return not details, details
