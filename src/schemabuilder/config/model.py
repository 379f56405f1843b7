from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from schemabuilder.model.property import PROPERTY_TYPES
from schemabuilder.schema.generator import DEFAULT_MAX_DEPTH


class Config(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: str = "v1"
    include_metadata: bool = True
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    indent: int = Field(default=2, ge=0)
    id_prefix: str = "prop"
    type_labels: dict[str, str] = Field(default_factory=dict)

    @field_validator("id_prefix")
    @classmethod
    def _validate_id_prefix(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("id_prefix must be a non-empty string.")
        return value.strip()

    @model_validator(mode="after")
    def _validate_config(self) -> "Config":
        if self.version != "v1":
            raise ValueError("Only version v1 is supported.")
        unknown = sorted(set(self.type_labels) - set(PROPERTY_TYPES))
        if unknown:
            raise ValueError(f"Unknown types in type_labels: {', '.join(unknown)}")
        return self
