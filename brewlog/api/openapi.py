"""OpenAPI Post-processing — documents symbolic fields and query parameters.

Invariants:
    - Every schema property or parameter tagged with SYMBOLIC_SCHEMA_MARKER ends up
      string-typed with the ordered value list, an example, and a description that
      appends "Possible values: ..." to any existing text
    - The marker never appears in the published document
    - Body properties and query parameters are described by the same describe() call

Design Decisions:
    - Post-processing the generated document over per-field json_schema_extra: the
      field's own description is only known after FastAPI assembles the schema
"""

from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from brewlog.core.symbolic import describe, registered_types
from brewlog.schemas.symbolic_fields import SYMBOLIC_SCHEMA_MARKER


def _lookup(type_name: str):
    for st in registered_types():
        if st.name == type_name:
            return st
    raise KeyError(f"Unknown symbolic type in OpenAPI document: {type_name}")


def describe_schema(schema: dict[str, Any]) -> None:
    """Rewrite one marked property schema in place."""
    type_name = schema.pop(SYMBOLIC_SCHEMA_MARKER, None)
    if type_name is None:
        return
    schema.update(describe(_lookup(type_name), schema.get("description")).to_schema())


def describe_parameter(parameter: dict[str, Any]) -> None:
    """Rewrite one marked parameter in place; description and example sit on the parameter."""
    schema = parameter.get("schema", {})
    type_name = schema.pop(SYMBOLIC_SCHEMA_MARKER, None)
    if type_name is None:
        return
    schema_description = schema.pop("description", None)
    original = parameter.get("description") or schema_description
    descriptor = describe(_lookup(type_name), original)
    schema["type"] = descriptor.type
    schema["enum"] = list(descriptor.enum)
    schema.pop("example", None)
    parameter["description"] = descriptor.description
    parameter["example"] = descriptor.example


def apply_symbolic_descriptions(document: dict[str, Any]) -> dict[str, Any]:
    """Walk component schemas and operation parameters, rewriting marked entries."""
    for schema in document.get("components", {}).get("schemas", {}).values():
        for prop in schema.get("properties", {}).values():
            describe_schema(prop)
    for path_item in document.get("paths", {}).values():
        for operation in path_item.values():
            if not isinstance(operation, dict):
                continue
            for parameter in operation.get("parameters", []):
                describe_parameter(parameter)
    return document


def install_openapi(app: FastAPI) -> None:
    """Replace app.openapi with a cached, post-processed generator."""

    def openapi() -> dict[str, Any]:
        if app.openapi_schema is None:
            app.openapi_schema = apply_symbolic_descriptions(get_openapi(
                title=app.title,
                version=app.version,
                description=app.description,
                routes=app.routes,
            ))
        return app.openapi_schema

    app.openapi = openapi
