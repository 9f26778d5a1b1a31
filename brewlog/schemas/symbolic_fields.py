"""Symbolic Fields — Pydantic bindings of the symbolic codec for request/response models.

Invariants:
    - Validation delegates to core.symbolic.decode (case-insensitive name or legacy ordinal)
    - JSON serialization delegates to core.symbolic.encode (canonical name only)
    - JSON schema is string-typed with the ordered value list and an example, tagged with
      SYMBOLIC_SCHEMA_MARKER so the OpenAPI post-processor can attach the description
    - Works identically for body fields and query parameters, except that query
      aliases also read all-digit strings as ordinals (query strings carry no JSON types)

Design Decisions:
    - Annotated metadata over a custom type: the field keeps the enum as its Python type,
      so FastAPI treats query parameters as scalars
    - Description left to the OpenAPI post-processor: Pydantic overwrites schema
      descriptions with Field(description=...), and the value list must be appended to it
"""

from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from brewlog.core.domain_types import BrewMethod, EquipmentType, RoastLevel
from brewlog.core.symbolic import decode, describe, encode, symbolic_type

SYMBOLIC_SCHEMA_MARKER = "x-symbolic-type"


@dataclass(frozen=True)
class SymbolicCodec:
    """Annotated metadata binding a SymbolicEnum to the codec."""
    target: type
    numeric_strings: bool = False

    def __get_pydantic_core_schema__(
        self, source_type: Any, handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            self._decode,
            serialization=core_schema.plain_serializer_function_ser_schema(
                encode, when_used="json-unless-none",
            ),
        )

    def __get_pydantic_json_schema__(
        self, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler,
    ) -> JsonSchemaValue:
        descriptor = describe(self.target)
        return {
            "type": descriptor.type,
            "enum": list(descriptor.enum),
            "example": descriptor.example,
            SYMBOLIC_SCHEMA_MARKER: symbolic_type(self.target).name,
        }

    def _decode(self, raw: Any):
        if self.numeric_strings and isinstance(raw, str) and raw.isascii() and raw.isdigit():
            raw = int(raw)
        return decode(raw, self.target)


RoastLevelValue = Annotated[RoastLevel, SymbolicCodec(RoastLevel)]
BrewMethodValue = Annotated[BrewMethod, SymbolicCodec(BrewMethod)]
EquipmentTypeValue = Annotated[EquipmentType, SymbolicCodec(EquipmentType)]

# Query parameters arrive as text, so "2" is read as ordinal 2 there.
RoastLevelQuery = Annotated[RoastLevel | None, SymbolicCodec(RoastLevel, numeric_strings=True)]
BrewMethodQuery = Annotated[BrewMethod | None, SymbolicCodec(BrewMethod, numeric_strings=True)]
EquipmentTypeQuery = Annotated[
    EquipmentType | None, SymbolicCodec(EquipmentType, numeric_strings=True),
]
