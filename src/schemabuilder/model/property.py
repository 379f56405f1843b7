from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

PROPERTY_TYPES = ("string", "number", "integer", "boolean", "object", "array", "null", "file")

# Builder-only type, encoded as {"type": "string", "format": "filename"}.
FILE_TYPE = "file"
FILE_FORMAT = "filename"


class Property(BaseModel):
    """One field of the builder tree.

    Constraint fields are flat and only meaningful for the matching ``type``;
    ``children`` matter for objects and ``items`` for arrays. Stale values are
    kept when the type changes, the generator simply ignores them.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    id: str
    key: str = ""
    title: str | None = None
    type: str = "string"
    description: str | None = None
    required: bool = False

    min_length: int | None = Field(default=None, alias="minLength")
    max_length: int | None = Field(default=None, alias="maxLength")
    pattern: str | None = None
    enum: list[str] | None = None

    minimum: int | float | None = None
    maximum: int | float | None = None

    min_items: int | None = Field(default=None, alias="minItems")
    max_items: int | None = Field(default=None, alias="maxItems")
    unique_items: bool | None = Field(default=None, alias="uniqueItems")

    children: list[Property] = Field(default_factory=list)
    items: Property | None = None


class SchemaMetadata(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = ""
    description: str = ""
    version: str = ""

    def is_empty(self) -> bool:
        return not (self.title or self.description or self.version)


Property.model_rebuild()
