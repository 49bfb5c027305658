"""Data models shared by the loader, the validation engine and the adapters.

Absent values are represented by ``None`` throughout: a parameter whose raw
value is ``None`` was not supplied by the client.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

LOCATIONS = ("query", "path", "header", "body")


class ParameterDeclaration(BaseModel):
    """One declared parameter of a route (query, path, header or body)."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: str  # query / path / header / body
    index: int = 0  # position in the route's parameter list
    required: bool | None = None  # None when the document omits it
    default: Any = None
    primitive_type: str | None = None  # number / boolean / string / integer / ...
    inline_schema: dict | None = None  # body parameters

    @property
    def has_default(self) -> bool:
        # Explicit None defaults count, only an omitted key does not
        return "default" in self.model_fields_set

    @property
    def has_schema(self) -> bool:
        return isinstance(self.inline_schema, dict)


class ErrorDetail(BaseModel):
    """A single failure reported by the schema validator."""

    message: str
    keyword: str = ""
    instance_path: str = ""
    schema_path: str = ""


class ErrorRecord(BaseModel):
    """One entry of ``InputBundle.errors``: one failing parameter or body."""

    message: str
    ref: str | None = None
    parameter: str | None = None
    details: list[ErrorDetail] = []


class InputBundle(BaseModel):
    """Per-request input, populated by a request adapter."""

    params: dict[str, Any] = {}
    headers: dict[str, Any] = {}
    body: Any = None
    errors: list[ErrorRecord] = []

    @property
    def is_valid(self) -> bool:
        return not self.errors


class OutputBundle(BaseModel):
    """Per-request output produced by a handler."""

    status: int = 200
    headers: dict[str, str] = {}
    body: Any = None
