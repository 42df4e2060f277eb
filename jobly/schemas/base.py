from typing import Iterable
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CamelRequest(CamelModel):
    """Inbound payload; unknown fields are rejected."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    def changes(self) -> dict:
        """Only the fields the caller actually sent, keyed by their public (camelCase) name."""
        return self.model_dump(exclude_unset=True, by_alias=True)


def reject_nulls(model: BaseModel, fields: Iterable[str]) -> None:
    """Partial updates may omit these fields but may not set them to null."""
    for field in fields:
        if field in model.model_fields_set and getattr(model, field) is None:
            raise ValueError(f"{to_camel(field)} cannot be null")
