"""Shared pydantic configuration for persisted models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StoredModel(BaseModel):
    """Model persisted as camelCase JSON and accepting either key spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_storage(self) -> dict:
        """Return the JSON-ready camelCase representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
